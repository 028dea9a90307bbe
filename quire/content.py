"""
Content ingestion: metadata extraction, field resolution and aggregation.

A source file becomes exactly one :class:`Content`. Files with a resolved
date are posts, files without one are pages. :class:`SiteData` collects
both and orders them for rendering.
"""

import os
import re
import logging
from dataclasses import dataclass, field
from datetime import datetime, date, timezone
from operator import attrgetter
from typing import Any, Dict, Iterable, Optional, Tuple

import mistune
import yaml

from .errors import ContentParseError, DateFormatError, MetadataTypeError
from .settings import SiteConfig

# Tried in this order; the date-only form means midnight.
DATE_FORMATS = ('%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d')

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?', re.MULTILINE | re.DOTALL)


class MetadataLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings for parse_date."""


MetadataLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != 'tag:yaml.org,2002:timestamp']
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class Content:
    """A single rendered post or page."""

    title: str
    slug: str
    html: str
    tags: Tuple[str, ...] = ()
    date: Optional[datetime] = None
    show_in_menu: bool = False
    source: Optional[str] = field(default=None, compare=False)

    @property
    def is_post(self) -> bool:
        return self.date is not None


@dataclass(frozen=True)
class SiteData:
    """Site config plus the ordered posts and pages of one build."""

    site: SiteConfig
    posts: Tuple[Content, ...] = ()
    pages: Tuple[Content, ...] = ()

    @classmethod
    def from_contents(cls, site: SiteConfig, contents: Iterable[Content]) -> 'SiteData':
        """
        Partition records into posts and pages and sort each collection.

        Posts are ordered newest first, pages by title descending. Both
        sorts are stable, so ties keep discovery order.
        """
        posts = []
        pages = []
        for item in contents:
            if item.is_post:
                posts.append(item)
            else:
                pages.append(item)
        return cls(
            site=site,
            posts=tuple(sorted(posts, key=attrgetter('date'), reverse=True)),
            pages=tuple(sorted(pages, key=attrgetter('title'), reverse=True)),
        )


def extract_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """
    Split raw file text into its metadata mapping and markdown body.

    Text that does not start with ``---`` has no metadata and is returned
    whole as the body.

    Raises:
        ContentParseError: If the metadata block is unterminated, is not
            valid YAML, or is not a mapping
    """
    if not text.startswith('---'):
        return {}, text

    match = FRONTMATTER_RE.match(text)
    if match is None:
        raise ContentParseError("Metadata block is not terminated by a '---' line")

    try:
        metadata = yaml.load(match.group(1), Loader=MetadataLoader)
    except (yaml.YAMLError, ValueError) as e:
        raise ContentParseError(f"Invalid YAML in metadata block: {e}")

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        raise ContentParseError(
            f"Metadata block must be a mapping, got {type(metadata).__name__}"
        )
    return metadata, text[match.end():]


def trim_blank_lines(text: str) -> str:
    """Drop empty leading and trailing lines, keeping inner layout intact."""
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return '\n'.join(lines)


def get_title(metadata, markdown_content):
    title = metadata.get('title')
    if isinstance(title, str):
        return title
    lines = markdown_content.splitlines()
    if not lines:
        return ''
    return lines[0].lstrip('#').strip()


def get_slug(metadata, file_path):
    slug = metadata.get('slug')
    if isinstance(slug, str) and slug:
        return slug
    return os.path.splitext(os.path.basename(file_path))[0]


def parse_date(metadata, file_path):
    """
    Resolve the ``date`` metadata value.

    Returns None when the key is absent. Strings are tried against
    DATE_FORMATS in order; ``date`` and ``datetime`` values are taken as is.

    Raises:
        DateFormatError: If the value is present but cannot be parsed
    """
    if 'date' not in metadata:
        return None
    value = metadata['date']

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue

    raise DateFormatError(value, file_path)


def get_tags(metadata):
    tags = metadata.get('tags')
    if isinstance(tags, list):
        return tuple(str(tag).lower() if isinstance(tag, bool) else str(tag)
                     for tag in tags if tag is not None)
    if isinstance(tags, str):
        return tuple(tag.strip() for tag in tags.split(','))
    return ()


def get_show_in_menu(metadata, file_path=None):
    if 'show_in_menu' not in metadata:
        return False
    value = metadata['show_in_menu']
    if not isinstance(value, bool):
        raise MetadataTypeError(
            f"show_in_menu must be a boolean, got {value!r} in {file_path}", file_path
        )
    return value


class FileProcessor:
    """Turns one markdown source file into a :class:`Content` record."""

    def __init__(self):
        self.logger = logging.getLogger('Quire.FileProcessor')
        self.markdown_parser = self.create_markdown_parser()

    def create_markdown_parser(self):
        """Create a Mistune markdown parser that passes raw HTML through."""
        return mistune.create_markdown(renderer=mistune.HTMLRenderer(escape=False))

    def markdown_filter(self, text):
        """Convert markdown text to HTML."""
        return self.markdown_parser(text)

    def parse_markdown_with_metadata(self, filepath):
        """Read a markdown file and split off its YAML front matter."""
        with open(filepath, 'r', encoding='utf-8') as f:
            try:
                text = f.read()
            except UnicodeDecodeError as e:
                raise ContentParseError(f"{filepath} is not valid UTF-8: {e}", filepath)

        try:
            metadata, markdown_content = extract_frontmatter(text)
        except ContentParseError as e:
            raise ContentParseError(f"{e} in {filepath}", filepath) from e

        return metadata, trim_blank_lines(markdown_content)

    def process(self, file_path):
        """Process a single markdown file into a Content record."""
        metadata, markdown_content = self.parse_markdown_with_metadata(file_path)
        html_content = self.markdown_filter(markdown_content)

        content = Content(
            title=get_title(metadata, markdown_content),
            slug=get_slug(metadata, file_path),
            html=html_content,
            tags=get_tags(metadata),
            date=parse_date(metadata, file_path),
            show_in_menu=get_show_in_menu(metadata, file_path),
            source=str(file_path),
        )
        kind = 'post' if content.is_post else 'page'
        self.logger.debug(f"Processed {kind} {file_path} -> {content.slug}.html")
        return content
