"""
Quire - A small static site generator.

Quire reads markdown files with optional YAML front matter and uses Jinja2
templates to generate static HTML pages. Dated files become blog posts,
undated files become pages.
"""

__version__ = "0.1.0"

from .core import Quire
from .content import Content, FileProcessor, SiteData
from .settings import SiteConfig, SiteSettings

__all__ = ['Quire', 'Content', 'FileProcessor', 'SiteData', 'SiteConfig', 'SiteSettings']
