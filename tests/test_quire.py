"""Tests for the Quire build driver."""

import os
import pytest
from datetime import datetime
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from quire import Quire
from quire.errors import ConfigError, DateFormatError, TemplateInitError


class TestQuire:
    """Test cases for the Quire class."""

    def test_init_defaults(self, site_project):
        """Paths are resolved against the input folder."""
        generator = Quire(input_dir=site_project)

        assert generator.site.name == 'Quire Site'
        assert generator.content_dir == os.path.join(site_project, 'content')
        assert generator.templates_dir == os.path.join(site_project, 'templates')
        assert generator.output_dir == os.path.join(site_project, 'site')

    def test_init_with_config(self, site_project, sample_config):
        generator = Quire(input_dir=site_project)
        assert generator.site.name == 'Test Site'

    def test_output_root(self, site_project, mock_output_dir):
        generator = Quire(input_dir=site_project, output_root=mock_output_dir)
        assert generator.output_dir == os.path.join(mock_output_dir, 'site')

    def test_missing_templates(self, temp_dir, mock_content_dir):
        with pytest.raises(TemplateInitError):
            Quire(input_dir=temp_dir)

    def test_bad_config(self, site_project):
        Path(site_project, 'quire.yaml').write_text('pagination: many\n')
        with pytest.raises(ConfigError):
            Quire(input_dir=site_project)

    def test_get_markdown_files_recursive(self, site_project):
        """Markdown files are found recursively in sorted order."""
        nested = Path(site_project, 'content', 'blog', '2024')
        nested.mkdir(parents=True)
        (nested / 'deep.md').write_text('deep')
        Path(site_project, 'content', 'notes.txt').write_text('ignored')

        generator = Quire(input_dir=site_project)
        files = generator.get_markdown_files(generator.content_dir)
        names = [os.path.relpath(f, generator.content_dir) for f in files]

        assert names == ['page1.md', 'post1.md', os.path.join('blog', '2024', 'deep.md')]

    def test_get_markdown_files_missing_dir(self, site_project):
        generator = Quire(input_dir=site_project)
        assert generator.get_markdown_files(os.path.join(site_project, 'absent')) == []

    def test_load_content(self, site_project):
        site_data = Quire(input_dir=site_project).load_content()

        assert [p.slug for p in site_data.posts] == ['post1']
        assert [p.slug for p in site_data.pages] == ['page1']
        assert site_data.posts[0].date == datetime(2024, 1, 1)

    def test_build_end_to_end(self, site_project):
        """A post and a page produce index, post and page files."""
        generator = Quire(input_dir=site_project)
        generator.build()

        output_dir = Path(site_project, 'site')
        assert sorted(os.listdir(output_dir)) == ['index.html', 'page1.html', 'post1.html']

        index = (output_dir / 'index.html').read_text(encoding='utf-8')
        posts_section = index.split('<ul id="posts">')[1].split('</ul>')[0]
        pages_section = index.split('<ul id="pages">')[1].split('</ul>')[0]
        assert 'href="post1.html"' in posts_section
        assert 'href="page1.html"' in pages_section
        assert 'page1.html' not in posts_section

        post = (output_dir / 'post1.html').read_text(encoding='utf-8')
        assert '<title>First - Quire Site</title>' in post
        assert generator.posts_generated == 1
        assert generator.pages_generated == 1

    def test_build_resolved_slug(self, site_project):
        """A slug in the metadata names the output file."""
        Path(site_project, 'content', 'post1.md').write_text(
            '---\ndate: 2024-01-01\nslug: first\n---\n# First\n', encoding='utf-8'
        )
        Quire(input_dir=site_project).build()

        output_dir = Path(site_project, 'site')
        assert (output_dir / 'first.html').exists()
        assert not (output_dir / 'post1.html').exists()
        assert 'href="first.html"' in (output_dir / 'index.html').read_text(encoding='utf-8')

    def test_build_bad_date_writes_nothing(self, site_project):
        """An unparsable date aborts before any output is written."""
        Path(site_project, 'content', 'bad.md').write_text(
            '---\ndate: Jan 5 2024\n---\nbody\n', encoding='utf-8'
        )

        with pytest.raises(DateFormatError):
            Quire(input_dir=site_project).build()
        assert not Path(site_project, 'site').exists()

    def test_build_overwrites_previous_output(self, site_project):
        output_dir = Path(site_project, 'site')
        output_dir.mkdir()
        (output_dir / 'index.html').write_text('stale')

        Quire(input_dir=site_project).build()
        assert (output_dir / 'index.html').read_text(encoding='utf-8') != 'stale'

    def test_build_empty_content(self, temp_dir, mock_templates_dir):
        """With no content only the index is produced."""
        Quire(input_dir=temp_dir).build()
        assert os.listdir(os.path.join(temp_dir, 'site')) == ['index.html']
