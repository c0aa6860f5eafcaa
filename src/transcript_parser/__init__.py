"""transcript-parser: speaker-indexed records from broadcast transcripts.

Strips stage directions, annotations and timestamps from speaker-labelled
transcript text, attributes each line to its speaker, and optionally
merges speaker aliases into canonical names.
"""

from __future__ import annotations

from transcript_parser.aliases import resolve_aliases
from transcript_parser.config import ParserSettings, load_aliases, load_settings
from transcript_parser.exceptions import (
    ConfigurationError,
    InputError,
    TranscriptParserError,
)
from transcript_parser.models.record import UNKNOWN_SPEAKER, TranscriptRecord, Turn
from transcript_parser.parser import TranscriptParser
from transcript_parser.patterns import DEFAULT_PATTERNS, PatternSet

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DEFAULT_PATTERNS",
    "InputError",
    "ParserSettings",
    "PatternSet",
    "TranscriptParser",
    "TranscriptParserError",
    "TranscriptRecord",
    "Turn",
    "UNKNOWN_SPEAKER",
    "load_aliases",
    "load_settings",
    "resolve_aliases",
]
