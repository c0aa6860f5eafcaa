"""Alias resolution for parsed transcripts.

Broadcast transcripts often label one person several ways (``TRUMP``,
``DONALD TRUMP``, ``DONALD J. TRUMP, PRESIDENT``).  :func:`resolve_aliases`
folds those surface names into one canonical speaker, rewriting the
record in place.

Merge order: the canonical speaker's existing lines come first, followed
by the lines of each merged surface name in the record's key order.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from transcript_parser.exceptions import ConfigurationError, InputError
from transcript_parser.models.record import TranscriptRecord

logger = logging.getLogger(__name__)

CompiledAliases = list[tuple[str, list[re.Pattern]]]


def compile_aliases(aliases: Mapping[str, Sequence[Any]]) -> CompiledAliases:
    """Compile an alias map, preserving canonical-name and pattern order.

    Args:
        aliases: Canonical name to a list of pattern strings or compiled
            patterns.

    Returns:
        ``(canonical_name, [pattern, ...])`` pairs in the supplied order.

    Raises:
        ConfigurationError: If the map has the wrong shape or a pattern
            does not compile.
    """
    if not isinstance(aliases, Mapping):
        raise ConfigurationError(
            f"Aliases must be a mapping, got {type(aliases).__name__}"
        )

    compiled: CompiledAliases = []
    for true_name, patterns in aliases.items():
        if isinstance(patterns, (str, re.Pattern)) or not isinstance(patterns, Sequence):
            raise ConfigurationError(
                f"Aliases for {true_name!r} must be a list of patterns",
                field=str(true_name),
            )
        regexes = []
        for pattern in patterns:
            if isinstance(pattern, re.Pattern):
                regexes.append(pattern)
                continue
            try:
                regexes.append(re.compile(pattern))
            except (re.error, TypeError) as exc:
                raise ConfigurationError(
                    f"Alias pattern {pattern!r} for {true_name!r} is invalid: {exc}",
                    field=str(true_name),
                ) from exc
        compiled.append((true_name, regexes))
    return compiled


def canonical_name(name: str, compiled: CompiledAliases) -> str | None:
    """Return the canonical name *name* should be folded into in one step.

    The first canonical name, other than *name* itself, with a pattern
    that matches *name* wins.  ``None`` means *name* stays as it is.
    """
    for true_name, regexes in compiled:
        if true_name == name:
            continue
        if any(regex.search(name) for regex in regexes):
            return true_name
    return None


def final_name(name: str, compiled: CompiledAliases) -> str:
    """Follow :func:`canonical_name` until the name stops changing.

    With ``{"X": ["A"], "A": ["B"]}`` the speaker ``B`` ends up as ``X``.
    When the chain loops back on itself (``{"A": ["B"], "B": ["A"]}``) the
    member of the loop listed first in *compiled* is used, so every name
    on the loop resolves to the same speaker.
    """
    path = [name]
    while True:
        nxt = canonical_name(path[-1], compiled)
        if nxt is None:
            return path[-1]
        if nxt in path:
            loop = set(path[path.index(nxt):])
            return next(true_name for true_name, _ in compiled if true_name in loop)
        path.append(nxt)


def _check_record(record: Any) -> None:
    if record is None:
        raise InputError("Record must not be None")
    if not isinstance(getattr(record, "speaker", None), dict) or not isinstance(
        getattr(record, "order", None), list
    ):
        raise InputError(
            f"Record must have a dict 'speaker' and a list 'order', "
            f"got {type(record).__name__}"
        )


def _rewrite_order(order: list[Any], targets: dict[str, str]) -> list[Any]:
    rewritten: list[Any] = []
    for entry in order:
        if isinstance(entry, list):
            name, count = entry
            name = targets.get(name, name)
            # Runs that now share a canonical name collapse into one.
            if rewritten and rewritten[-1][0] == name:
                rewritten[-1][1] += count
            else:
                rewritten.append([name, count])
        else:
            rewritten.append(targets.get(entry, entry))
    return rewritten


def resolve_aliases(
    record: TranscriptRecord,
    aliases: Mapping[str, Sequence[Any]],
) -> TranscriptRecord:
    """Merge speakers whose names match alias patterns into canonical names.

    For each speaker key, the canonical names and their patterns are tried
    in the supplied order; the first pattern that matches (via
    :meth:`re.Pattern.search`) and whose canonical name differs from the
    key wins.  Chains are followed to the end (see :func:`final_name`), so
    a canonical name that is itself an alias of another ends up under the
    last one.  The key's lines are appended to that speaker's lines
    (creating it if needed) and the key is deleted.  Every entry of
    ``order`` is rewritten to the same name, so a second pass is a no-op.

    When *aliases* is empty the record is returned untouched.  Otherwise
    the record is mutated in place; it is never copied.  Callers that
    still need the original must copy it first.

    Args:
        record: The record produced by a parse call.
        aliases: Canonical name to an ordered list of patterns.

    Returns:
        *record* itself.

    Raises:
        InputError: If *record* is ``None`` or lacks ``speaker``/``order``.
        ConfigurationError: If *aliases* is malformed.
    """
    _check_record(record)
    if not aliases:
        return record

    compiled = compile_aliases(aliases)
    speakers = record.speaker

    names = set(speakers)
    names.update(entry[0] if isinstance(entry, list) else entry for entry in record.order)
    targets = {}
    for name in names:
        target = final_name(name, compiled)
        if target != name:
            targets[name] = target

    for speaker_name in list(speakers):
        true_name = targets.get(speaker_name)
        if true_name is None:
            continue
        lines = speakers.pop(speaker_name)
        speakers.setdefault(true_name, []).extend(lines)
        logger.debug("Merged speaker %r into %r", speaker_name, true_name)

    record.order[:] = _rewrite_order(record.order, targets)
    return record
