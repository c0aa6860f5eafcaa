"""Regular expressions that drive transcript normalization.

The five patterns follow the conventions of US news-broadcast transcripts:
all-caps speaker labels (``COOPER:``), parenthesised stage directions
(``(APPLAUSE)``), bracketed annotations (``[inaudible]``) and bracketed
``H:MM:SS`` timestamps (``[20:20:34]``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Union

from transcript_parser.exceptions import ConfigurationError

PatternLike = Union[str, re.Pattern]

# One or more line terminators; consecutive blank lines collapse.
NEW_LINE_RE = re.compile(r"(?:\r?\n)+")

# Parenthesised all-caps phrase, e.g. "(APPLAUSE) ".
ACTION_RE = re.compile(r"\([A-Z ]+\) ?")

# Optional leading timestamp, then the name (group 1), then an optional
# bracketed aside such as "[to Trump]", then the colon.
SPEAKER_RE = re.compile(
    r"^((?:\[\d{1,2}:\d{1,2}:\d{1,2}\] ?)?[A-Z\d /,.\-()]+?)"
    r"(?: ?\[[A-Za-z ]+\])? ?: ?"
)

TIMESTAMP_RE = re.compile(r" ?\[\d{1,2}:\d{1,2}:\d{1,2}\] ?")

# Any bracketed span, non-greedy.
ANNOTATION_RE = re.compile(r"\[.+?\] ?")


def _compile(name: str, value: PatternLike) -> re.Pattern[str]:
    if isinstance(value, re.Pattern):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"Pattern {name!r} must be a string or compiled pattern, "
            f"got {type(value).__name__}",
            field=name,
        )
    try:
        return re.compile(value)
    except re.error as exc:
        raise ConfigurationError(
            f"Pattern {name!r} does not compile: {exc}", field=name
        ) from exc


@dataclass(frozen=True)
class PatternSet:
    """The compiled patterns used by a :class:`~transcript_parser.parser.TranscriptParser`.

    Attributes:
        new_line: Splits text into physical lines.
        action: Stage directions, removed when ``remove_actions`` is set.
        speaker: Speaker label anchored at line start; group 1 is the name.
        timestamp: Bracketed ``H:MM:SS`` spans.
        annotation: Any bracketed span.
    """

    new_line: re.Pattern[str] = NEW_LINE_RE
    action: re.Pattern[str] = ACTION_RE
    speaker: re.Pattern[str] = SPEAKER_RE
    timestamp: re.Pattern[str] = TIMESTAMP_RE
    annotation: re.Pattern[str] = ANNOTATION_RE

    @classmethod
    def compile(cls, **overrides: PatternLike) -> PatternSet:
        """Build a pattern set, replacing defaults with *overrides*.

        Args:
            **overrides: Pattern strings or compiled patterns keyed by
                field name (``new_line``, ``action``, ``speaker``,
                ``timestamp``, ``annotation``).

        Returns:
            A new :class:`PatternSet`.

        Raises:
            ConfigurationError: If a key is unknown, a string does not
                compile, or the speaker pattern has no capture group.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown pattern name(s): {', '.join(unknown)}",
                field=unknown[0],
            )

        compiled = {name: _compile(name, value) for name, value in overrides.items()}
        speaker = compiled.get("speaker")
        if speaker is not None and speaker.groups < 1:
            raise ConfigurationError(
                "Speaker pattern must capture the speaker name in group 1",
                field="speaker",
            )
        return cls(**compiled)


DEFAULT_PATTERNS = PatternSet()


def remove_all(text: str, pattern: re.Pattern[str]) -> str:
    """Delete every match of *pattern* from *text*."""
    return pattern.sub("", text)
