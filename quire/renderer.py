"""
Rendering of site data through Jinja2 templates and writing of the results.
"""

import os
import logging

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from .errors import RenderError, TemplateInitError

LIST_TITLE = 'Blog Posts'
TEMPLATE_EXTENSIONS = ['html', 'htm', 'xml', 'txt']


class TemplateRenderer:
    """Render logical template names (``list``, ``content``) with a context."""

    def __init__(self, templates_dir):
        self.templates_dir = templates_dir
        self.logger = logging.getLogger('Quire.TemplateRenderer')

        if not os.path.isdir(templates_dir):
            raise TemplateInitError(f"Templates directory not found: {templates_dir}")

        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            undefined=StrictUndefined,
        )
        self.load_templates()

    def load_templates(self):
        """Compile every template up front so syntax errors surface before any rendering."""
        names = self.env.list_templates(extensions=TEMPLATE_EXTENSIONS)
        for name in names:
            try:
                self.env.get_template(name)
            except TemplateSyntaxError as e:
                raise TemplateInitError(
                    f"Parsing error in template {name} (line {e.lineno}): {e.message}"
                )
            except (TemplateError, UnicodeDecodeError) as e:
                raise TemplateInitError(f"Failed to load template {name}: {e}")
        self.logger.debug(f"Loaded {len(names)} templates from {self.templates_dir}")
        return names

    @staticmethod
    def template_file(name):
        return name if '.' in os.path.basename(name) else f'{name}.html'

    def render(self, template_name, context):
        """
        Render a template by logical name.

        Raises:
            RenderError: If the template is missing or the context does not
                satisfy it
        """
        filename = self.template_file(template_name)
        try:
            template = self.env.get_template(filename)
            return template.render(**context)
        except TemplateNotFound as e:
            raise RenderError(f"Template not found: {e.name} in {self.templates_dir}")
        except TemplateError as e:
            raise RenderError(f"Failed to render template {filename}: {e}")

    def render_list(self, site_data):
        return self.render('list', {
            'site': site_data.site,
            'pages': site_data.pages,
            'posts': site_data.posts,
            'title': LIST_TITLE,
        })

    def render_content(self, site_data, content):
        return self.render('content', {
            'site': site_data.site,
            'pages': site_data.pages,
            'title': content.title,
            'content': content,
        })

    def render_site(self, site_data):
        """Render the list page and every post and page.

        Returns:
            List of (filename, html) pairs, index first, then posts, then pages
        """
        rendered = [('index.html', self.render_list(site_data))]
        for item in site_data.posts + site_data.pages:
            rendered.append((f'{item.slug}.html', self.render_content(site_data, item)))
        return rendered


class OutputWriter:
    """Persist rendered pages under the output directory."""

    def __init__(self, output_dir):
        self.output_dir = output_dir
        self.logger = logging.getLogger('Quire.OutputWriter')
        os.makedirs(output_dir, exist_ok=True)

    def write(self, filename, html):
        output_path = os.path.join(self.output_dir, filename)
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(html)
        except (IOError, OSError) as e:
            self.logger.error(f"Failed to write {output_path}: {e}")
            raise
        self.logger.debug(f"Generated HTML: {output_path}")
        return output_path

    def write_all(self, pages):
        written = []
        seen = set()
        for filename, html in pages:
            if filename in seen:
                # Duplicate slugs are not rejected; the later file wins.
                self.logger.debug(f"Overwriting {filename} generated earlier in this build")
            seen.add(filename)
            written.append(self.write(filename, html))
        return written
