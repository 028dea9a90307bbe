"""
Exceptions raised by Quire while building a site.

Every component raises one of these and leaves the decision to abort to
the command-line entry point.
"""


class QuireError(Exception):
    """Base class for all expected build failures."""


class ConfigError(QuireError):
    """The configuration file is unreadable or malformed."""


class TemplateInitError(QuireError):
    """The templates directory is missing or a template fails to parse."""


class ContentParseError(QuireError):
    """A content file has a malformed metadata block."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class DateFormatError(ContentParseError):
    """The ``date`` metadata value matches none of the accepted formats."""

    def __init__(self, value, path):
        super().__init__(f"Invalid date format {value!r} when parsing {path}", path)
        self.value = value


class MetadataTypeError(ContentParseError):
    """A metadata value has the wrong type (e.g. a non-boolean ``show_in_menu``)."""


class RenderError(QuireError):
    """A template is missing or cannot be rendered with the given context."""
