"""Tests for HtmlRenderer."""

from __future__ import annotations

import pytest

from podhtml.errors import InvariantError, RenderError
from podhtml.renderers.html import HeadingInfo, HtmlRenderer, list_tag, render_escape
from podhtml.tokens import (
    HeadingEnd,
    HeadingStart,
    InlineMarkupEnd,
    InlineMarkupStart,
    InlineText,
    ItemEnd,
    ItemStart,
    ListEnd,
    ListKind,
    ListStart,
    MarkupKind,
    ParagraphEnd,
    ParagraphStart,
    RawData,
    Verbatim,
)


class TestHtmlRenderer:
    """Fragments produced for each token."""

    def test_render_heading(self) -> None:
        html = HtmlRenderer().render(
            [HeadingStart(2, "SEE ALSO"), InlineText("SEE ALSO"), HeadingEnd(2)]
        )

        assert html == '<h2 id="SEE-ALSO">SEE ALSO</h2>\n'

    def test_heading_anchor_uses_raw_title(self) -> None:
        html = HtmlRenderer().render(
            [
                HeadingStart(1, "B<new>"),
                InlineMarkupStart(MarkupKind.BOLD),
                InlineText("new"),
                InlineMarkupEnd(MarkupKind.BOLD),
                HeadingEnd(1),
            ]
        )

        assert html == '<h1 id="B-new-"><strong>new</strong></h1>\n'

    def test_render_paragraph(self) -> None:
        html = HtmlRenderer().render([ParagraphStart(), InlineText("Hello"), ParagraphEnd()])

        assert html == "<p>Hello</p>\n"

    @pytest.mark.parametrize(
        ("kind", "tag"),
        [
            (ListKind.UNORDERED, "ul"),
            (ListKind.ORDERED, "ol"),
            (ListKind.DESCRIPTION, "dl"),
        ],
    )
    def test_list_wrapper(self, kind: ListKind, tag: str) -> None:
        html = HtmlRenderer().render([ListStart(4.0, kind), ListEnd(kind)])

        assert html == f"<{tag}>\n</{tag}>\n"

    def test_bullet_item(self) -> None:
        html = HtmlRenderer().render([ItemStart("*"), ItemEnd(ListKind.UNORDERED)])

        assert html == "<li></li>\n"

    def test_description_item(self) -> None:
        html = HtmlRenderer().render(
            [
                ItemStart("[a <b>]"),
                ParagraphStart(),
                InlineText("text"),
                ParagraphEnd(),
                ItemEnd(ListKind.DESCRIPTION),
            ]
        )

        assert html == "<dt>a &lt;b&gt;</dt>\n<dd><p>text</p>\n</dd>\n"

    @pytest.mark.parametrize(
        ("kind", "open_tag", "close_tag"),
        [
            (MarkupKind.ITALIC, "<em>", "</em>"),
            (MarkupKind.BOLD, "<strong>", "</strong>"),
            (MarkupKind.CODE, "<code>", "</code>"),
            (MarkupKind.FILENAME, '<span class="filename">', "</span>"),
            (MarkupKind.NBSP, "", ""),
            (MarkupKind.ZAP, "", ""),
            (MarkupKind.NONE, "", ""),
        ],
    )
    def test_markup(self, kind: MarkupKind, open_tag: str, close_tag: str) -> None:
        html = HtmlRenderer().render(
            [InlineMarkupStart(kind), InlineText("x"), InlineMarkupEnd(kind)]
        )

        assert html == f"{open_tag}x{close_tag}"

    def test_raw_html_passes_through(self) -> None:
        html = HtmlRenderer().render([RawData("<hr>\n", ("html",))])

        assert html == "<hr>\n"

    @pytest.mark.parametrize("args", [("text",), ("latex",), ()])
    def test_other_raw_formats_are_dropped(self, args: tuple[str, ...]) -> None:
        assert HtmlRenderer().render([RawData("<hr>", args)]) == ""

    def test_verbatim_is_escaped(self) -> None:
        html = HtmlRenderer().render([Verbatim("if ($a < $b) {\n    print \"&\";\n}\n")])

        assert html == (
            "<pre>if ($a &lt; $b) {\n    print &quot;&amp;&quot;;\n}\n</pre>\n"
        )

    def test_rendering_does_not_change_tokens(self) -> None:
        tokens = [Verbatim("a\n"), ParagraphStart(), InlineText("b"), ParagraphEnd()]
        before = [repr(t) for t in tokens]

        renderer = HtmlRenderer()
        first = renderer.render(tokens)
        second = renderer.render(tokens)

        assert first == second
        assert [repr(t) for t in tokens] == before


class TestHeadings:
    """Heading metadata for table-of-contents builders."""

    def test_get_headings(self) -> None:
        renderer = HtmlRenderer()
        renderer.render(
            [
                HeadingStart(1, "NAME"),
                HeadingEnd(1),
                HeadingStart(2, "Class Methods"),
                HeadingEnd(2),
            ]
        )

        assert renderer.get_headings() == [
            HeadingInfo(level=1, text="NAME", anchor="NAME"),
            HeadingInfo(level=2, text="Class Methods", anchor="Class-Methods"),
        ]

    def test_no_render_yet(self) -> None:
        assert HtmlRenderer().get_headings() == []

    def test_each_render_starts_fresh(self) -> None:
        renderer = HtmlRenderer()
        renderer.render([HeadingStart(1, "A"), HeadingEnd(1)])
        renderer.render([HeadingStart(1, "B"), HeadingEnd(1)])

        assert [h.text for h in renderer.get_headings()] == ["B"]


class TestRenderEscape:
    """E<> content resolution."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("verbar", "|"),
            ("sol", "/"),
            ("gt", "&gt;"),
            ("nbsp", "&nbsp;"),
            ("75", "&#75;"),
            ("0x201E", "&#x201E;"),
            ("0X2f", "&#x2F;"),
            ("0101", "&#65;"),
            ("0", "&#0;"),
        ],
    )
    def test_known_forms(self, code: str, expected: str) -> None:
        assert render_escape(code) == expected

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("0xZZ", "0xZZ"),
            ("089", "089"),
            ("a b", "a b"),
            ("<x>", "&lt;x&gt;"),
            ("", ""),
        ],
    )
    def test_unusable_codes_are_literal(self, code: str, expected: str) -> None:
        assert render_escape(code) == expected


class TestRendererErrors:
    """Malformed token sequences are internal errors."""

    def test_not_a_token(self) -> None:
        with pytest.raises(RenderError):
            HtmlRenderer().render(["<p>"])  # type: ignore[list-item]

    def test_unknown_list_kind(self) -> None:
        with pytest.raises(InvariantError):
            list_tag("table")  # type: ignore[arg-type]

    def test_unclosed_link_start(self) -> None:
        with pytest.raises(InvariantError):
            HtmlRenderer().render([InlineMarkupStart(MarkupKind.LINK)])
