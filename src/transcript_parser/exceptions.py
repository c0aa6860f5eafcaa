"""Custom exceptions for the transcript parser.

Two failure categories exist: the caller handed in something that is not
text-shaped (:class:`InputError`), or the caller configured the parser
with values that cannot be used (:class:`ConfigurationError`).  Odd but
textual transcript content is never an error.
"""

from __future__ import annotations


class TranscriptParserError(Exception):
    """Base class for all transcript parser errors."""


class InputError(TranscriptParserError, TypeError):
    """Raised when input is missing or not of the expected shape.

    Covers ``None`` or non-string transcripts, non-iterable line sources,
    and records without ``speaker``/``order`` containers.
    """


class ConfigurationError(TranscriptParserError, ValueError):
    """Raised when parser configuration cannot be used.

    Covers invalid settings values, pattern strings that fail to compile,
    and malformed alias maps.

    Attributes:
        field: Name of the offending setting or alias, if known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
