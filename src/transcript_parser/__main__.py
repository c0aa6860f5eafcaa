"""Entry point for ``python -m transcript_parser``.

Uses stdlib :mod:`argparse` for argument parsing.

Subcommands:
    parse     -- Default. Parse a transcript file and print it as JSON.
    benchmark -- Time the parsing modes against a transcript file.

Exit codes:
    0 -- Success.
    1 -- An error occurred (file not found, unreadable, bad configuration).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from transcript_parser.benchmark import format_benchmark, run_benchmark
from transcript_parser.config import load_aliases, load_log_level, load_settings
from transcript_parser.exceptions import ConfigurationError
from transcript_parser.log import setup_logging
from transcript_parser.parser import TranscriptParser


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="transcript-parser",
        description="Convert a speaker-labelled transcript into a speaker-indexed record.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- "parse" subcommand (default) ---------------------------------
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a transcript file and print the record as JSON.",
    )
    parse_parser.add_argument("transcript_file", type=str, help="Path to the transcript file.")
    parse_parser.add_argument(
        "--keep-actions",
        action="store_true",
        default=False,
        help="Keep stage directions such as (APPLAUSE).",
    )
    parse_parser.add_argument(
        "--keep-annotations",
        action="store_true",
        default=False,
        help="Keep bracketed annotations (timestamps are still removed).",
    )
    parse_parser.add_argument(
        "--keep-timestamps",
        action="store_true",
        default=False,
        help="Keep [H:MM:SS] timestamps when annotations are kept.",
    )
    parse_parser.add_argument(
        "--remove-unknown",
        action="store_true",
        default=False,
        help="Drop lines that precede the first speaker label.",
    )
    parse_parser.add_argument(
        "--blacklist",
        action="append",
        default=[],
        metavar="NAME",
        help="Drop every line by NAME (repeatable).",
    )
    parse_parser.add_argument(
        "--aliases",
        type=str,
        default=None,
        metavar="FILE",
        help="JSON file mapping canonical names to lists of patterns.",
    )
    parse_parser.add_argument(
        "--concise",
        action="store_true",
        default=False,
        help="Encode the turn order as [speaker, count] runs.",
    )
    parse_parser.add_argument(
        "--stream",
        action="store_true",
        default=False,
        help="Read the file line by line instead of all at once.",
    )
    parse_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    # --- "benchmark" subcommand ---------------------------------------
    bench_parser = subparsers.add_parser(
        "benchmark",
        help="Time one-shot, incremental and async parsing of a file.",
    )
    bench_parser.add_argument("transcript_file", type=str, help="Path to the transcript file.")
    bench_parser.add_argument(
        "--repeat",
        type=int,
        default=5,
        help="Parses per mode (default: 5).",
    )
    bench_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing to ``parse`` when no subcommand is given."""
    known_subcommands = {"parse", "benchmark"}
    if not argv:
        argv = ["parse"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in known_subcommands:
        argv = ["parse", *argv]

    return parser.parse_args(argv)


def _check_file(path: Path) -> str | None:
    """Return an error message if *path* is not a readable file."""
    if not path.exists():
        return f"File not found: {path}"
    if not path.is_file():
        return f"Not a file: {path}"
    try:
        with open(path, encoding="utf-8") as f:
            f.read(1)
    except PermissionError:
        return f"Permission denied: {path}"
    return None


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.keep_actions:
        overrides["remove_actions"] = False
    if args.keep_annotations:
        overrides["remove_annotations"] = False
    if args.keep_timestamps:
        overrides["remove_timestamps"] = False
    if args.remove_unknown:
        overrides["remove_unknown_speakers"] = True
    if args.concise:
        overrides["concise"] = True
    if args.aliases:
        overrides["aliases"] = load_aliases(args.aliases)
    return overrides


def _handle_parse(args: argparse.Namespace) -> int:
    """Execute the ``parse`` subcommand."""
    transcript_path = Path(args.transcript_file)
    error = _check_file(transcript_path)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    try:
        settings = load_settings()
        overrides = _settings_overrides(args)
        if args.blacklist:
            overrides["blacklist"] = settings.blacklist | set(args.blacklist)
        parser = TranscriptParser(settings, **overrides)
    except (ConfigurationError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.stream:
        record = parser.parse_file(transcript_path)
    else:
        record = parser.parse_one(transcript_path.read_text(encoding="utf-8"))

    try:
        record = parser.resolve_aliases(record)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _handle_benchmark(args: argparse.Namespace) -> int:
    """Execute the ``benchmark`` subcommand."""
    transcript_path = Path(args.transcript_file)
    error = _check_file(transcript_path)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    if args.repeat < 1:
        print("Error: --repeat must be at least 1", file=sys.stderr)
        return 1

    try:
        parser = TranscriptParser(load_settings())
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    text = transcript_path.read_text(encoding="utf-8")
    result = run_benchmark(text, repeat=args.repeat, parser=parser)
    print(format_benchmark(result))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the transcript-parser CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    log_level = "DEBUG" if getattr(args, "verbose", False) else load_log_level()
    try:
        setup_logging(log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "benchmark":
        return _handle_benchmark(args)

    return _handle_parse(args)


if __name__ == "__main__":
    raise SystemExit(main())
