"""
Custom exception hierarchy for tabstore.

Callers can catch the specific failure they care about (e.g.,
UnsupportedFormatError vs ParsingError) or ``TabStoreError`` for all of
them. The index and argument errors also subclass the matching builtin
so code written against ``IndexError`` / ``ValueError`` keeps working.
"""


class TabStoreError(Exception):
    """Base exception for all tabstore errors."""


class UnsupportedFormatError(TabStoreError):
    """Raised when no parser is registered for a file's extension."""


class ParsingError(TabStoreError):
    """Raised when a parser encounters malformed input.

    For example, truncated JSON, a JSON document whose top level is not
    an array of objects, or a header row with duplicate column names.
    """


class IndexOutOfRangeError(TabStoreError, IndexError):
    """Raised when a record index is negative or past the end of the table."""


class NullArgumentError(TabStoreError, ValueError):
    """Raised when a required record argument is ``None``."""


class InvalidArgumentError(TabStoreError, ValueError):
    """Raised for out-of-domain arguments, e.g. a page number below 1."""


class ExportError(TabStoreError):
    """Raised when the exporter fails to write an output file.

    For example, permission errors, disk full, or unsupported format.
    """


class ConfigValidationError(TabStoreError):
    """Raised when a store config file cannot be loaded."""
