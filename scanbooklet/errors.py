"""
Exception hierarchy for booklet generation.

Every error raised by this package is fatal for the run; the command line
catches BookletError, reports it and exits with status 1.
"""


class BookletError(Exception):
    """Base class for all booklet generation failures."""


class UsageError(BookletError):
    """Invalid or missing command-line input."""


class PageRangeError(UsageError, ValueError):
    """Malformed page-range specification."""


class ParseError(BookletError, ValueError):
    """Metadata text does not describe the document consistently."""


class ToolError(BookletError, RuntimeError):
    """An external PDF tool is missing or returned a non-zero exit status."""


class PaddingError(BookletError, ValueError):
    """The padding source page does not exist in the book."""
