"""Configuration for the transcript parser.

:class:`ParserSettings` is the immutable per-parser configuration.
:func:`load_settings` builds one from environment variables (with ``.env``
support via python-dotenv), and :func:`load_aliases` reads an alias map
from a JSON file.
"""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, InstanceOf, ValidationError, field_validator

from transcript_parser.exceptions import ConfigurationError
from transcript_parser.patterns import DEFAULT_PATTERNS, PatternSet

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_BOOL_ENV_VARS = {
    "TRANSCRIPT_REMOVE_ACTIONS": "remove_actions",
    "TRANSCRIPT_REMOVE_ANNOTATIONS": "remove_annotations",
    "TRANSCRIPT_REMOVE_TIMESTAMPS": "remove_timestamps",
    "TRANSCRIPT_REMOVE_UNKNOWN_SPEAKERS": "remove_unknown_speakers",
    "TRANSCRIPT_CONCISE": "concise",
}


class ParserSettings(BaseModel):
    """Per-parser configuration, immutable after construction.

    Invalid values raise :class:`~transcript_parser.exceptions.ConfigurationError`
    rather than pydantic's ``ValidationError``.  When a validator rejected
    the value with a ``ConfigurationError`` of its own (a pattern override
    that does not compile, say), that error is raised unchanged so its
    ``field`` still names the offending pattern.

    Attributes:
        remove_actions: Strip stage directions such as ``(APPLAUSE)``.
        remove_annotations: Strip every bracketed span.  Takes precedence
            over *remove_timestamps*.
        remove_timestamps: Strip only ``[H:MM:SS]`` spans; applied only
            when *remove_annotations* is ``False``.
        remove_unknown_speakers: Drop lines that precede the first
            speaker label.
        blacklist: Speaker names whose lines are dropped.
        aliases: Read-only mapping of canonical name to an ordered tuple
            of patterns (strings or compiled).  Patterns are compiled on
            first use by
            :func:`~transcript_parser.aliases.resolve_aliases`.
        concise: Record ``order`` as ``[speaker, count]`` runs.
        patterns: The :class:`~transcript_parser.patterns.PatternSet`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    remove_actions: bool = True
    remove_annotations: bool = True
    remove_timestamps: bool = True
    remove_unknown_speakers: bool = False
    blacklist: frozenset[str] = Field(default_factory=frozenset)
    aliases: Mapping[str, tuple[Any, ...]] = Field(default_factory=dict, validate_default=True)
    concise: bool = False
    patterns: InstanceOf[PatternSet] = DEFAULT_PATTERNS

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise _configuration_error(exc) from exc

    @field_validator("blacklist", mode="before")
    @classmethod
    def _blacklist_from_string(cls, value: Any) -> Any:
        """Accept a single name as a one-element blacklist."""
        if isinstance(value, str):
            return frozenset({value})
        return value

    @field_validator("aliases", mode="before")
    @classmethod
    def _normalise_aliases(cls, value: Any) -> Any:
        """Wrap bare patterns in a tuple and keep caller ordering."""
        if not isinstance(value, Mapping):
            return value
        normalised: dict[Any, Any] = {}
        for name, patterns in value.items():
            if isinstance(patterns, (str, re.Pattern)):
                patterns = (patterns,)
            normalised[name] = patterns
        return normalised

    @field_validator("aliases")
    @classmethod
    def _freeze_aliases(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        """Expose aliases through a read-only view."""
        return MappingProxyType(dict(value))

    @field_validator("patterns", mode="before")
    @classmethod
    def _patterns_from_mapping(cls, value: Any) -> Any:
        """Allow ``patterns={"speaker": r"..."}`` as shorthand for overrides."""
        if isinstance(value, Mapping):
            return PatternSet.compile(**value)
        return value


def _configuration_error(exc: ValidationError) -> ConfigurationError:
    errors = exc.errors()
    for error in errors:
        cause = error.get("ctx", {}).get("error")
        if isinstance(cause, ConfigurationError):
            return cause
    loc = errors[0]["loc"] if errors else ()
    field = ".".join(str(part) for part in loc) or None
    return ConfigurationError(f"Invalid parser settings: {exc}", field=field)


def _parse_bool(env_var: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{env_var} must be a boolean (true/false, 1/0, yes/no, on/off), got {raw!r}",
        field=env_var,
    )


def load_settings() -> ParserSettings:
    """Load parser settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.  Every variable is optional;
    unset or blank values keep the :class:`ParserSettings` defaults.

    Returns:
        A :class:`ParserSettings` instance.

    Raises:
        ConfigurationError: If a boolean variable holds an unrecognised
            value.  The message names the variable.
    """
    load_dotenv()

    values: dict[str, Any] = {}
    for env_var, field_name in _BOOL_ENV_VARS.items():
        raw = os.environ.get(env_var, "")
        if raw.strip():
            values[field_name] = _parse_bool(env_var, raw)

    blacklist = os.environ.get("TRANSCRIPT_BLACKLIST", "")
    names = [name.strip() for name in blacklist.split(",") if name.strip()]
    if names:
        values["blacklist"] = frozenset(names)

    return ParserSettings(**values)


def load_log_level() -> str:
    """Return the ``LOG_LEVEL`` environment variable, defaulting to ``"INFO"``."""
    load_dotenv()
    return os.environ.get("LOG_LEVEL", "").strip() or "INFO"


def load_aliases(file_path: str | Path) -> dict[str, list[str]]:
    """Read an alias map from a JSON file.

    The file must hold an object mapping each canonical name to a list
    of regular-expression strings, for example
    ``{"DONALD TRUMP": ["^TRUMP$", "DONALD J. TRUMP"]}``.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The alias map, in file order.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        ConfigurationError: If the file is not valid JSON or has the
            wrong shape.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Alias file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Alias file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Alias file {path} must contain a JSON object")

    for name, patterns in data.items():
        if isinstance(patterns, str):
            data[name] = [patterns]
        elif not (
            isinstance(patterns, list) and all(isinstance(p, str) for p in patterns)
        ):
            raise ConfigurationError(
                f"Aliases for {name!r} must be a list of pattern strings",
                field=name,
            )
    return data
