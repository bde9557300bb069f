"""Tests for Parser.reset().

reset() lets one Parser instance, with its name-resolution callbacks, parse
several documents in turn.
"""

from podhtml.modes import BlockMode
from podhtml.parser import Parser
from podhtml.tokens import HeadingStart, InlineText


def _parser(source: str, source_file: str | None = None) -> Parser:
    return Parser(source, str, lambda is_class, name: name, source_file)


class TestParserReset:
    """Test Parser.reset() for instance reuse."""

    def test_reset_replaces_source(self) -> None:
        parser = _parser("=head1 First")
        first = parser.parse()

        parser.reset("=head1 Second")
        second = parser.parse()

        assert first[0] == HeadingStart(1, "First")
        assert second[0] == HeadingStart(1, "Second")
        assert len(second) == 3

    def test_reset_clears_index(self) -> None:
        parser = _parser("X<keyword>")
        parser.parse()
        assert parser.index == {"keyword": "keyword"}

        parser.reset("no index here")
        parser.parse()

        assert parser.index == {}

    def test_reset_clears_diagnostics(self) -> None:
        parser = _parser("=bogus")
        parser.parse()
        assert parser.diagnostics

        parser.reset("fine")
        parser.parse()

        assert parser.diagnostics == []

    def test_reset_leaves_cut_mode(self) -> None:
        parser = _parser("=cut\n\nhidden")
        assert parser.parse() == []

        parser.reset("shown")

        assert parser._mode is BlockMode.NONE
        assert InlineText("shown") in parser.parse()

    def test_reset_drops_open_data_block(self) -> None:
        parser = _parser("=begin html\n\n<b>")
        parser.reset("plain")
        tokens = parser.parse()

        assert tokens[1] == InlineText("plain")

    def test_reset_updates_source_file(self) -> None:
        parser = _parser("=x", "old.pod")

        parser.reset("=y", "new.pod")
        parser.parse()

        assert parser.source_file == "new.pod"
        assert parser.diagnostics[0].source_file == "new.pod"

    def test_reset_resets_line_numbers(self) -> None:
        parser = _parser("a\n\nb\n\nc\n")
        parser.parse()

        parser.reset("=bad")
        parser.parse()

        assert parser.diagnostics[0].lineno == 1

    def test_tokens_property(self) -> None:
        parser = _parser("text")
        tokens = parser.parse()

        assert parser.tokens is tokens
