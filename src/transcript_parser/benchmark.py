"""Timing harness for the three parsing paths.

Runs the same transcript through :meth:`TranscriptParser.parse_one`,
:meth:`TranscriptParser.parse_lines` and
:meth:`TranscriptParser.parse_stream` and reports wall-clock timings.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field

from transcript_parser.parser import TranscriptParser

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Timings for one benchmark run.

    Attributes:
        repeat: Number of parses per mode.
        line_count: Physical lines in the transcript.
        timings: Mode name (``"one-shot"``, ``"incremental"``,
            ``"stream"``) to total seconds across all repeats.
    """

    repeat: int
    line_count: int
    timings: dict[str, float] = field(default_factory=dict)


async def _aiter_lines(lines: list[str]) -> AsyncIterator[str]:
    for line in lines:
        yield line


def _time(func: Callable[[], object], repeat: int) -> float:
    start = time.perf_counter()
    for _ in range(repeat):
        func()
    return time.perf_counter() - start


def run_benchmark(
    text: str,
    repeat: int = 5,
    parser: TranscriptParser | None = None,
) -> BenchmarkResult:
    """Time each parsing mode over *text*.

    Args:
        text: The transcript to parse.
        repeat: Parses per mode; must be at least 1.
        parser: Parser to benchmark.  A default parser is used when
            ``None``.

    Returns:
        A :class:`BenchmarkResult`.

    Raises:
        ValueError: If *repeat* is less than 1.
    """
    if repeat < 1:
        raise ValueError(f"repeat must be at least 1, got {repeat}")

    parser = parser or TranscriptParser()
    lines = text.splitlines(keepends=True)
    result = BenchmarkResult(repeat=repeat, line_count=len(lines))

    result.timings["one-shot"] = _time(lambda: parser.parse_one(text), repeat)
    result.timings["incremental"] = _time(lambda: parser.parse_lines(lines), repeat)
    result.timings["stream"] = _time(
        lambda: asyncio.run(parser.parse_stream(_aiter_lines(lines))), repeat
    )

    logger.debug("Benchmark timings: %s", result.timings)
    return result


def format_benchmark(result: BenchmarkResult) -> str:
    """Render *result* as a small plain-text table."""
    header = f"{result.line_count} line(s), {result.repeat} run(s) per mode"
    rows = [header, "-" * len(header)]
    for mode, seconds in result.timings.items():
        per_run_ms = seconds / result.repeat * 1000
        rows.append(f"{mode:<12} {seconds:9.4f}s total  {per_run_ms:9.3f}ms/run")
    return "\n".join(rows)
