"""Data models for transcript-parser."""

from __future__ import annotations

from transcript_parser.models.record import UNKNOWN_SPEAKER, TranscriptRecord, Turn

__all__ = [
    "UNKNOWN_SPEAKER",
    "TranscriptRecord",
    "Turn",
]
