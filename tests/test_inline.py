"""Tests for the inline formatting code tokenizer."""

from __future__ import annotations

import pytest

from podhtml import render
from podhtml.parser import Parser
from podhtml.tokens import (
    InlineMarkupEnd,
    InlineMarkupStart,
    InlineText,
    MarkupKind,
    ParagraphEnd,
    ParagraphStart,
)


def _parser(source: str) -> Parser:
    parser = Parser(source, lambda name: name + ".html", lambda is_class, name: name)
    parser.parse()
    return parser


def _html(source: str) -> str:
    return render(_parser(source).tokens)


class TestSimpleCodes:
    """Codes that wrap their content in an element."""

    @pytest.mark.parametrize(
        ("sigil", "kind"),
        [
            ("I", MarkupKind.ITALIC),
            ("B", MarkupKind.BOLD),
            ("C", MarkupKind.CODE),
            ("F", MarkupKind.FILENAME),
        ],
    )
    def test_token_pair(self, sigil: str, kind: MarkupKind) -> None:
        tokens = _parser(f"{sigil}<x>").tokens

        assert tokens == [
            ParagraphStart(),
            InlineMarkupStart(kind, lineno=1),
            InlineText("x"),
            InlineMarkupEnd(kind),
            ParagraphEnd(),
        ]

    def test_nested_codes(self) -> None:
        assert _html("B<bold I<and italic>>") == (
            "<p><strong>bold <em>and italic</em></strong></p>\n"
        )

    def test_trailing_whitespace_inside_code_is_dropped(self) -> None:
        assert _html("C<foo   > bar") == "<p><code>foo</code> bar</p>\n"

    def test_text_is_html_escaped(self) -> None:
        assert _html('a & b "c"') == "<p>a &amp; b &quot;c&quot;</p>\n"

    def test_lowercase_letter_is_not_a_code(self) -> None:
        assert _html("if b<c then") == "<p>if b&lt;c then</p>\n"

    def test_stray_closer_is_literal(self) -> None:
        assert _html("a > b") == "<p>a &gt; b</p>\n"


class TestExtendedDelimiters:
    """C<< ... >> style codes with more than one angle bracket."""

    def test_double_angles(self) -> None:
        assert _html("C<< $a->b >>") == "<p><code>$a-&gt;b</code></p>\n"

    def test_single_closer_inside_double_code(self) -> None:
        assert _html("C<< a > b >>") == "<p><code>a &gt; b</code></p>\n"

    def test_leading_spaces_kept_with_single_angle(self) -> None:
        tokens = _parser("C< x>").tokens

        assert tokens[2] == InlineText(" x")

    def test_triple_angles(self) -> None:
        assert _html("B<<< x >>>") == "<p><strong>x</strong></p>\n"


class TestNbsp:
    """S<> turns spaces into non-breaking spaces."""

    def test_spaces_become_nbsp(self) -> None:
        assert _html("S<a b c>") == "<p>a&nbsp;b&nbsp;c</p>\n"

    def test_nested_inside_nbsp(self) -> None:
        assert _html("S<B<a b>>") == "<p><strong>a&nbsp;b</strong></p>\n"


class TestEscapes:
    """E<> character escapes."""

    @pytest.mark.parametrize(
        ("code", "html"),
        [
            ("lt", "&lt;"),
            ("gt", "&gt;"),
            ("eacute", "&eacute;"),
            ("verbar", "|"),
            ("sol", "/"),
            ("lchevron", "«"),
            ("rchevron", "»"),
            ("65", "&#65;"),
            ("0x263A", "&#x263A;"),
            ("0101", "&#65;"),
        ],
    )
    def test_escape(self, code: str, html: str) -> None:
        assert _html(f"E<{code}>") == f"<p>{html}</p>\n"

    def test_escape_code_is_an_end_argument(self) -> None:
        tokens = _parser("E<gt>").tokens

        assert tokens[2] == InlineMarkupEnd(MarkupKind.ESCAPE, ("gt",))

    def test_escape_inside_bold(self) -> None:
        assert _html("B<1 E<lt> 2>") == "<p><strong>1 &lt; 2</strong></p>\n"


class TestIndex:
    """X<> registers index keywords."""

    def test_keyword_registered(self) -> None:
        parser = _parser("X<System Error>")

        assert parser.index == {"System Error": "System_Error"}
        assert parser.tokens[2] == InlineMarkupEnd(MarkupKind.INDEX, ("System_Error",))

    def test_invisible_anchor(self) -> None:
        assert _html("Text X<System Error> more") == (
            '<p>Text <a id="System_Error"></a> more</p>\n'
        )

    def test_duplicate_keyword_overwrites(self) -> None:
        parser = _parser("X<foo> X<foo>")

        assert parser.index == {"foo": "foo"}

    def test_empty_keyword_is_not_registered(self) -> None:
        parser = _parser("X<>")

        assert parser.index == {}
        assert _html("X<>") == "<p></p>\n"


class TestUnknownCodes:
    """Unknown sigils render their content as plain text."""

    def test_unknown_sigil(self) -> None:
        parser = _parser("Q<content>")

        assert render(parser.tokens) == "<p>content</p>\n"
        assert parser.tokens[1] == InlineMarkupStart(MarkupKind.NONE, lineno=1)
        assert parser.diagnostics[0].message == "Ignoring unknown formatting code 'Q'"

    def test_unterminated_code_is_closed(self) -> None:
        parser = _parser("B<never closed")

        assert render(parser.tokens) == "<p><strong>never closed</strong></p>\n"
        assert parser.diagnostics[0].message == "unterminated formatting code B<"


class TestRejectedNesting:
    """Codes that may not contain other codes keep them as literal text."""

    @pytest.mark.parametrize("outer", ["E", "X"])
    def test_nested_code_is_literal(self, outer: str) -> None:
        parser = _parser(f"{outer}<a B<b> c>")

        assert parser.diagnostics[0].message == (
            f"formatting code B<> not allowed inside {outer}<>, ignoring"
        )
        assert not any(
            isinstance(t, InlineMarkupStart) and t.kind is MarkupKind.BOLD
            for t in parser.tokens
        )

    def test_index_keeps_nested_code_as_text(self) -> None:
        parser = _parser("X<a B<b> c>")

        assert parser.index == {"a B<b> c": "a_B<b>_c"}

    def test_link_inside_link(self) -> None:
        parser = _parser("L<a L<b>|c>")

        assert parser.diagnostics[0].message == "L<> not allowed inside L<>, ignoring"
        starts = [t for t in parser.tokens if isinstance(t, InlineMarkupStart)]
        assert len(starts) == 1
        assert starts[0].args == ("a L<b>|c",)

    def test_code_in_link_text_is_allowed(self) -> None:
        assert _html("L<the C<new> method|Foo/new>") == (
            '<p><a href="Foo.html#new">the <code>new</code> method</a></p>\n'
        )

    def test_code_in_link_target_is_rejected(self) -> None:
        parser = _parser("L<text|Foo/C<x>>")

        assert parser.diagnostics[0].message == (
            "unsupported formatting code C<> inside link target, ignoring"
        )
        assert render(parser.tokens) == '<p><a href="Foo.html#C-x-">text</a></p>\n'

    def test_code_in_bare_link_is_rejected(self) -> None:
        parser = _parser("L<C<x>>")

        assert len(parser.diagnostics) == 1
        assert "inside link target" in parser.diagnostics[0].message

    def test_bar_after_the_link_does_not_count(self) -> None:
        parser = _parser("See L<Foo C<bar>> and a|b here")

        assert [d.message for d in parser.diagnostics] == [
            "unsupported formatting code C<> inside link target, ignoring"
        ]
        html = render(parser.tokens)
        assert "<code>" not in html
        assert html.endswith("</a> and a|b here</p>\n")
