"""Unit tests for the transcript regular expressions and PatternSet."""

from __future__ import annotations

import re

import pytest

from transcript_parser.exceptions import ConfigurationError
from transcript_parser.patterns import DEFAULT_PATTERNS, PatternSet, remove_all


class TestNewLine:
    """The line-boundary pattern."""

    def test_splits_lf_and_crlf(self) -> None:
        """LF and CRLF terminators both split."""
        assert DEFAULT_PATTERNS.new_line.split("a\nb\r\nc") == ["a", "b", "c"]

    def test_collapses_blank_lines(self) -> None:
        """Consecutive terminators produce no empty pieces."""
        assert DEFAULT_PATTERNS.new_line.split("a\n\n\r\n\nb") == ["a", "b"]


class TestAction:
    """The stage-direction pattern."""

    def test_splits_actions(self) -> None:
        """Parenthesised all-caps phrases and one trailing space are removed."""
        text = "The (LOUD APPLAUSE) chicken (SILENCE) crossed (LAUGHTER)"

        assert DEFAULT_PATTERNS.action.split(text) == ["The ", "chicken ", "crossed ", ""]

    def test_ignores_lowercase_parentheses(self) -> None:
        """Mixed-case parentheticals are spoken content, not stage directions."""
        assert remove_all("the (lazy) dog", DEFAULT_PATTERNS.action) == "the (lazy) dog"


class TestSpeaker:
    """The speaker-label pattern."""

    def test_finds_speaker(self) -> None:
        """A simple all-caps label is captured."""
        match = DEFAULT_PATTERNS.speaker.match("COOPER:  How though?")

        assert match is not None
        assert match.group(1) == "COOPER"

    def test_name_with_parenthetical_title(self) -> None:
        """Hyphens and parenthesised titles are part of the name."""
        match = DEFAULT_PATTERNS.speaker.match(
            "JO-ANN ARMAO (ASSOCIATE EDITORIAL PAGE EDITOR): The ..."
        )

        assert match is not None
        assert match.group(1) == "JO-ANN ARMAO (ASSOCIATE EDITORIAL PAGE EDITOR)"

    def test_bracketed_aside_is_not_captured(self) -> None:
        """An aside like '[to Trump]' sits between the name and the colon."""
        match = DEFAULT_PATTERNS.speaker.match(
            "COREY LEWANDOWSKI, TRUMP 2016 CAMPAIGN MANAGER [to Trump]: North..."
        )

        assert match is not None
        assert match.group(1) == "COREY LEWANDOWSKI, TRUMP 2016 CAMPAIGN MANAGER"

    def test_leading_timestamp_is_part_of_name(self) -> None:
        """A timestamp before the name is captured with it."""
        match = DEFAULT_PATTERNS.speaker.match("[20:20:34] BERMAN: Good evening")

        assert match is not None
        assert match.group(1) == "[20:20:34] BERMAN"

    def test_match_end_consumes_one_space(self) -> None:
        """Only a single space after the colon belongs to the label."""
        line = "COOPER:  How though?"
        match = DEFAULT_PATTERNS.speaker.match(line)

        assert match is not None
        assert line[match.end():] == " How though?"

    @pytest.mark.parametrize(
        "line",
        [
            "The quick brown fox",
            "Hello: world",
            "well, COOPER: said",
        ],
    )
    def test_non_labels_do_not_match(self, line: str) -> None:
        """Lowercase text or labels not at line start are not speakers."""
        assert DEFAULT_PATTERNS.speaker.match(line) is None


class TestAnnotation:
    """The bracketed-annotation pattern."""

    def test_removes_annotations(self) -> None:
        """Bracketed spans and one trailing space are removed."""
        text = "Information [annotation] is [actually really] not..."

        assert remove_all(text, DEFAULT_PATTERNS.annotation) == "Information is not..."

    def test_removes_annotations_of_all_cases(self) -> None:
        """Case and punctuation inside the brackets do not matter."""
        text = "Information [ANNOTATION #1] is [AcTually really] not..."

        assert remove_all(text, DEFAULT_PATTERNS.annotation) == "Information is not..."

    def test_removes_timestamps_too(self) -> None:
        """Timestamps are a special case of annotations."""
        assert remove_all("[1:02:03] Hi", DEFAULT_PATTERNS.annotation) == "Hi"


class TestTimestamp:
    """The timestamp pattern."""

    def test_removes_timestamps(self) -> None:
        """Surrounding single spaces go with the timestamp."""
        text = "[20:20:34] BERMAN: [2:1:41] The..."

        assert remove_all(text, DEFAULT_PATTERNS.timestamp) == "BERMAN:The..."

    def test_keeps_other_brackets(self) -> None:
        """Non-timestamp brackets survive."""
        text = "The [first] name [10:00:00]"

        assert remove_all(text, DEFAULT_PATTERNS.timestamp) == "The [first] name"


class TestPatternSetCompile:
    """PatternSet.compile overrides."""

    def test_no_overrides_matches_defaults(self) -> None:
        """Compiling with no overrides reproduces the default set."""
        assert PatternSet.compile() == DEFAULT_PATTERNS

    def test_string_override_is_compiled(self) -> None:
        """String overrides become compiled patterns; others keep defaults."""
        patterns = PatternSet.compile(action=r"\{[A-Z ]+\} ?")

        assert patterns.action.pattern == r"\{[A-Z ]+\} ?"
        assert patterns.speaker is DEFAULT_PATTERNS.speaker

    def test_compiled_override_is_kept(self) -> None:
        """Compiled overrides are used as-is."""
        regex = re.compile(r"^(\w+)> ")

        assert PatternSet.compile(speaker=regex).speaker is regex

    def test_invalid_regex_raises(self) -> None:
        """A pattern string that does not compile raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="does not compile") as exc_info:
            PatternSet.compile(annotation="[unclosed")

        assert exc_info.value.field == "annotation"

    def test_unknown_name_raises(self) -> None:
        """Unknown pattern names are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown pattern"):
            PatternSet.compile(footnote=r"\*")

    def test_speaker_without_group_raises(self) -> None:
        """The speaker pattern must capture the name."""
        with pytest.raises(ConfigurationError, match="group 1"):
            PatternSet.compile(speaker=r"^[A-Z]+: ")

    def test_non_string_raises(self) -> None:
        """Values that are neither strings nor patterns are rejected."""
        with pytest.raises(ConfigurationError, match="must be a string"):
            PatternSet.compile(timestamp=42)  # type: ignore[arg-type]
