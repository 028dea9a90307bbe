import os
import time
import logging

from .content import FileProcessor, SiteData
from .renderer import OutputWriter, TemplateRenderer
from .settings import SiteSettings


class Quire:
    """Build a static site from a folder of markdown content."""

    def __init__(self, input_dir='.', output_root=None, config_path=None, debug=False):
        self.input_dir = input_dir
        self.output_root = output_root or input_dir
        self.debug = debug
        self.posts_generated = 0
        self.pages_generated = 0

        self.setup_logging()

        self.settings_loader = SiteSettings(config_dir=input_dir, config_file=config_path)
        self.site = self.settings_loader.load_settings()

        self.content_dir = os.path.join(input_dir, self.site.content_path)
        self.templates_dir = os.path.join(input_dir, self.site.templates_path)
        self.output_dir = os.path.join(self.output_root, self.site.site_path)

        self.renderer = TemplateRenderer(self.templates_dir)
        self.processor = FileProcessor()

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('Quire')
        level = logging.DEBUG if self.debug else logging.INFO
        self.logger.setLevel(level)

        if not self.logger.handlers:
            console_handler = logging.StreamHandler()
            if self.debug:
                console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            else:
                console_formatter = logging.Formatter('%(message)s')
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

    def get_markdown_files(self, directory):
        """Get all markdown files below a directory, in sorted walk order."""
        markdown_files = []
        if not os.path.isdir(directory):
            self.logger.warning(f"Content directory not found: {directory}")
            return markdown_files
        for root, dirs, files in os.walk(directory):
            dirs.sort()
            for file in sorted(files):
                if os.path.splitext(file)[1] == '.md':
                    markdown_files.append(os.path.join(root, file))
        return markdown_files

    def load_content(self):
        """Process every markdown file and aggregate the results."""
        contents = [self.processor.process(path) for path in self.get_markdown_files(self.content_dir)]
        site_data = SiteData.from_contents(self.site, contents)
        self.posts_generated = len(site_data.posts)
        self.pages_generated = len(site_data.pages)
        return site_data

    def build(self):
        """Main build process."""
        start_time = time.time()
        self.logger.debug(f"Building site from {self.content_dir}")

        site_data = self.load_content()
        if not site_data.posts and not site_data.pages:
            self.logger.warning("No markdown files found to process.")

        rendered = self.renderer.render_site(site_data)
        writer = OutputWriter(self.output_dir)
        writer.write_all(rendered)

        self.logger.info(f"Total posts generated: {self.posts_generated}")
        self.logger.info(f"Total pages generated: {self.pages_generated}")
        self.logger.info(f"Site build completed in {time.time() - start_time:.6f} seconds.")
        self.logger.info(f"Site generated at: {self.output_dir}/")
        return site_data
