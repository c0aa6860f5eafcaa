"""Data models for normalized transcripts.

These are stdlib dataclasses.  :class:`TranscriptRecord` is deliberately
mutable: the parser fills it line by line and alias resolution rewrites
it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

# Sentinel speaker for lines that precede the first speaker label.
UNKNOWN_SPEAKER = "none"

# Plain mode stores one name per line; concise mode stores [name, count] runs.
OrderEntry = Union[str, list]


@dataclass(frozen=True)
class Turn:
    """A single attributed line of dialogue.

    Attributes:
        speaker: Speaker name, or ``"none"`` for unattributed text.
        text: The line with stage directions, annotations and the
            speaker label removed.
    """

    speaker: str
    text: str


@dataclass
class TranscriptRecord:
    """Speaker-indexed transcript produced by the parser.

    Attributes:
        speaker: Speaker name to that speaker's lines, in first-appearance
            order.
        order: Turn sequence.  Either one speaker name per retained line,
            or (concise mode) ``[speaker, count]`` runs of consecutive
            lines.
    """

    speaker: dict[str, list[str]] = field(default_factory=dict)
    order: list[OrderEntry] = field(default_factory=list)

    def append(self, turn: Turn, *, concise: bool = False) -> None:
        """Record *turn*, creating the speaker's entry on first use."""
        self.speaker.setdefault(turn.speaker, []).append(turn.text)
        if not concise:
            self.order.append(turn.speaker)
        elif self.order and self.order[-1][0] == turn.speaker:
            self.order[-1][1] += 1
        else:
            self.order.append([turn.speaker, 1])

    @property
    def speakers(self) -> list[str]:
        """Speaker names in first-appearance order."""
        return list(self.speaker)

    def __len__(self) -> int:
        return sum(len(lines) for lines in self.speaker.values())

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable copy of the record."""
        return {
            "speaker": {name: list(lines) for name, lines in self.speaker.items()},
            "order": [list(entry) if isinstance(entry, list) else entry for entry in self.order],
        }
