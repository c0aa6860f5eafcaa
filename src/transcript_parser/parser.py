"""Transcript normalizer for speaker-labelled broadcast transcripts.

Turns text such as::

    [20:20:34] BERMAN: Good evening. (APPLAUSE)
    COOPER: Thanks, John.

into a :class:`~transcript_parser.models.record.TranscriptRecord` mapping
each speaker to their lines, plus the order of turns.

A single per-line step (:meth:`TranscriptParser._process_line`) is shared
by every driver: :meth:`~TranscriptParser.parse_one` for a complete
string, :meth:`~TranscriptParser.iter_turns` and
:meth:`~TranscriptParser.parse_lines` for a synchronous line source, and
:meth:`~TranscriptParser.parse_stream` for an asynchronous one.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from transcript_parser.aliases import resolve_aliases
from transcript_parser.config import ParserSettings
from transcript_parser.exceptions import InputError
from transcript_parser.models.record import UNKNOWN_SPEAKER, TranscriptRecord, Turn
from transcript_parser.patterns import remove_all

logger = logging.getLogger(__name__)


@dataclass
class _LineState:
    """Speaker state carried from one line to the next.

    Attributes:
        speaker: The active speaker; changes only on a label match.
        ignore: Whether the active speaker is blacklisted.
        lines_seen: Physical lines received, including blank ones.
    """

    speaker: str = UNKNOWN_SPEAKER
    ignore: bool = False
    lines_seen: int = 0


def _coerce_line(line: Any) -> str:
    if isinstance(line, str):
        return line
    if isinstance(line, (bytes, bytearray)):
        return bytes(line).decode("utf-8", errors="replace")
    return str(line)


class TranscriptParser:
    """Normalize transcripts according to a fixed configuration.

    The configuration is read-only for the lifetime of the parser, so one
    instance may be shared between threads.  Each parse call builds its
    own record.

    Args:
        settings: A :class:`~transcript_parser.config.ParserSettings`.
            Defaults are used when ``None``.
        **overrides: Individual settings fields, applied on top of
            *settings* (e.g. ``blacklist=["B"]``).

    Raises:
        ConfigurationError: If any setting value is invalid.
    """

    def __init__(self, settings: ParserSettings | None = None, **overrides: Any) -> None:
        if settings is None:
            settings = ParserSettings(**overrides)
        elif overrides:
            settings = ParserSettings(**{**dict(settings), **overrides})
        self.settings = settings
        self.patterns = settings.patterns

    # ------------------------------------------------------------------
    # Per-line step
    # ------------------------------------------------------------------

    def filter_line(self, line: str) -> str | None:
        """Strip stage directions, then annotations or timestamps.

        Returns:
            The stripped line, or ``None`` if nothing but whitespace is
            left.
        """
        if self.settings.remove_actions:
            line = remove_all(line, self.patterns.action)
        if self.settings.remove_annotations:
            line = remove_all(line, self.patterns.annotation)
        elif self.settings.remove_timestamps:
            line = remove_all(line, self.patterns.timestamp)
        if not line.strip():
            return None
        return line

    def _process_line(self, raw_line: str, state: _LineState) -> Turn | None:
        """Attribute one physical line, updating *state*.

        Returns:
            The :class:`Turn` to record, or ``None`` if the line is blank,
            blacklisted, or unattributed while unknown speakers are removed.
        """
        state.lines_seen += 1
        line = self.filter_line(raw_line)
        if line is None:
            return None

        match = self.patterns.speaker.match(line)
        if match:
            name = (match.group(1) or "").strip()
            # "  : text" captures only whitespace; treat as a continuation.
            if name:
                state.speaker = name
                state.ignore = name in self.settings.blacklist
                line = line[match.end():]

        if state.ignore:
            return None
        if state.speaker == UNKNOWN_SPEAKER and self.settings.remove_unknown_speakers:
            return None
        return Turn(speaker=state.speaker, text=line)

    def _split(self, chunk: Any) -> list[str]:
        return self.patterns.new_line.split(_coerce_line(chunk))

    def _turns(self, chunks: Iterator[Any], state: _LineState) -> Iterator[Turn]:
        for chunk in chunks:
            for raw_line in self._split(chunk):
                turn = self._process_line(raw_line, state)
                if turn is not None:
                    yield turn

    def _log_summary(self, record: TranscriptRecord, state: _LineState) -> None:
        logger.debug(
            "Parsed %d line(s): kept %d from %d speaker(s)",
            state.lines_seen,
            len(record),
            len(record.speaker),
        )

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def parse_one(self, transcript: str) -> TranscriptRecord:
        """Parse a complete transcript string.

        Args:
            transcript: The raw transcript.  An empty string yields an
                empty record.

        Returns:
            A new :class:`TranscriptRecord`.

        Raises:
            InputError: If *transcript* is not a string.
        """
        if not isinstance(transcript, str):
            raise InputError(
                f"Transcript must be a string, got {type(transcript).__name__}"
            )

        record = TranscriptRecord()
        state = _LineState()
        for raw_line in self.patterns.new_line.split(transcript):
            turn = self._process_line(raw_line, state)
            if turn is not None:
                record.append(turn, concise=self.settings.concise)

        self._log_summary(record, state)
        return record

    def iter_turns(self, lines: Iterable[Any]) -> Iterator[Turn]:
        """Yield each attributed :class:`Turn` as its line arrives.

        Items of *lines* may hold several physical lines or carry their
        own terminators (as lines read from a file do); they are split on
        the line-boundary pattern first.  Non-string items are coerced to
        text.

        Raises:
            InputError: If *lines* is not iterable.
        """
        return self._turns(self._iterate(lines), _LineState())

    def parse_lines(self, lines: Iterable[Any]) -> TranscriptRecord:
        """Parse a synchronous line source into a record.

        Raises:
            InputError: If *lines* is not iterable.
        """
        record = TranscriptRecord()
        state = _LineState()
        for turn in self._turns(self._iterate(lines), state):
            record.append(turn, concise=self.settings.concise)

        self._log_summary(record, state)
        return record

    async def parse_stream(self, lines: AsyncIterable[Any]) -> TranscriptRecord:
        """Parse an asynchronous line source into a record.

        Processing suspends only while waiting for the next line.  The
        record is returned once *lines* is exhausted; abandoning the
        coroutine discards it.

        Raises:
            InputError: If *lines* is not an async iterable.
        """
        if not hasattr(lines, "__aiter__"):
            raise InputError(
                f"Line stream must be an async iterable, got {type(lines).__name__}"
            )

        record = TranscriptRecord()
        state = _LineState()
        async for chunk in lines:
            for raw_line in self._split(chunk):
                turn = self._process_line(raw_line, state)
                if turn is not None:
                    record.append(turn, concise=self.settings.concise)

        self._log_summary(record, state)
        return record

    def parse_file(self, file_path: str | Path) -> TranscriptRecord:
        """Parse a UTF-8 transcript file line by line.

        Raises:
            FileNotFoundError: If *file_path* does not exist.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Transcript file not found: {path}")

        logger.debug("Parsing transcript file %s", path)
        with path.open(encoding="utf-8", newline="") as handle:
            return self.parse_lines(handle)

    def resolve_aliases(self, record: TranscriptRecord) -> TranscriptRecord:
        """Merge speakers using the configured aliases.

        See :func:`transcript_parser.aliases.resolve_aliases`.
        """
        return resolve_aliases(record, self.settings.aliases)

    @staticmethod
    def _iterate(lines: Any) -> Iterator[Any]:
        if lines is None or isinstance(lines, (str, bytes)):
            raise InputError(
                "Line source must be an iterable of lines, "
                f"got {type(lines).__name__}"
            )
        try:
            return iter(lines)
        except TypeError as exc:
            raise InputError(
                f"Line source must be iterable, got {type(lines).__name__}"
            ) from exc
