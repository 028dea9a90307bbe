"""Test configuration and fixtures for Quire tests."""

import pytest
import tempfile
import shutil
import logging
from pathlib import Path
import yaml


@pytest.fixture(autouse=True)
def reset_quire_logger():
    """Drop handlers bound to captured streams between tests."""
    yield
    logger = logging.getLogger('Quire')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a content directory with one post and one page."""
    content_dir = Path(temp_dir) / 'content'
    content_dir.mkdir(parents=True)

    (content_dir / 'post1.md').write_text("""---
date: 2024-01-01
tags: [intro, news]
---

# First

This is the first post.
""", encoding='utf-8')

    (content_dir / 'page1.md').write_text("""# About

This page has no metadata.
""", encoding='utf-8')

    return str(content_dir)


@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a templates directory with list and content templates."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()

    (templates_dir / 'base.html').write_text("""<!DOCTYPE html>
<html>
<head>
    <title>{{ title }} - {{ site.name }}</title>
</head>
<body>
    {% block main %}{% endblock %}
</body>
</html>""", encoding='utf-8')

    (templates_dir / 'list.html').write_text("""{% extends "base.html" %}
{% block main %}
<ul id="posts">
{% for post in posts %}<li class="post"><a href="{{ post.slug }}.html">{{ post.title }}</a></li>
{% endfor %}</ul>
<ul id="pages">
{% for page in pages %}<li class="page"><a href="{{ page.slug }}.html">{{ page.title }}</a></li>
{% endfor %}</ul>
{% endblock %}""", encoding='utf-8')

    (templates_dir / 'content.html').write_text("""{% extends "base.html" %}
{% block main %}
<article>
    <h1>{{ title }}</h1>
    <div>{{ content.html|safe }}</div>
    <p class="tags">{{ content.tags|join(', ') }}</p>
</article>
{% endblock %}""", encoding='utf-8')

    return str(templates_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    """Create a mock output directory."""
    output_dir = Path(temp_dir) / 'output'
    output_dir.mkdir()
    return str(output_dir)


@pytest.fixture
def sample_config(temp_dir):
    """Write a quire.yaml overriding a few defaults."""
    config_path = Path(temp_dir) / 'quire.yaml'
    config_path.write_text(yaml.dump({
        'name': 'Test Site',
        'tagline': 'Testing Quire',
        'pagination': 5,
    }), encoding='utf-8')
    return str(config_path)


@pytest.fixture
def site_project(temp_dir, mock_content_dir, mock_templates_dir):
    """A complete project folder: content plus templates, default config."""
    return temp_dir
