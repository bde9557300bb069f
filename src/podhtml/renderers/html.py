"""HTML renderer using StringBuilder pattern.

Walks the token sequence once and concatenates one HTML fragment per token.
Rendering has no side effects on the tokens, so the same sequence can be
rendered any number of times with identical output.

Link targets are resolved here rather than while parsing: a link start token
carries the raw link content and the parser's LinkResolver.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from podhtml.errors import InvariantError, RenderError
from podhtml.parsing.charsets import POD_ESCAPES
from podhtml.stringbuilder import StringBuilder
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
    Token,
    Verbatim,
)
from podhtml.utils.logger import get_logger
from podhtml.utils.text import heading_anchor, html_escape

logger = get_logger(__name__)

# Markup kinds that wrap their content in an element
_MARKUP_TAGS: dict[MarkupKind, tuple[str, str]] = {
    MarkupKind.ITALIC: ("<em>", "</em>"),
    MarkupKind.BOLD: ("<strong>", "</strong>"),
    MarkupKind.CODE: ("<code>", "</code>"),
    MarkupKind.FILENAME: ('<span class="filename">', "</span>"),
}


@dataclass(frozen=True, slots=True)
class HeadingInfo:
    """Heading metadata collected during rendering.

    Lets an external table-of-contents builder link to headings without
    scanning the HTML.
    """

    level: int
    text: str
    anchor: str


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state."""

    headings: list[HeadingInfo] = field(default_factory=list)


def list_tag(kind: ListKind) -> str:
    """HTML element name for a list kind."""
    match kind:
        case ListKind.UNORDERED:
            return "ul"
        case ListKind.ORDERED:
            return "ol"
        case ListKind.DESCRIPTION:
            return "dl"
        case _:
            raise InvariantError(f"unhandled list kind {kind!r}")


def render_escape(code: str) -> str:
    """Render the content of an ``E<>`` code.

    Examples:
        >>> render_escape("verbar")
        '|'
        >>> render_escape("gt")
        '&gt;'
        >>> render_escape("0x201E")
        '&#x201E;'
    """
    if code in POD_ESCAPES:
        return html_escape(POD_ESCAPES[code])

    try:
        if code[:2].lower() == "0x":
            return f"&#x{int(code[2:], 16):X};"
        if code.isdigit():
            # A leading zero means octal, as in Perl
            value = int(code, 8) if len(code) > 1 and code[0] == "0" else int(code)
            return f"&#{value};"
    except ValueError:
        return html_escape(code)

    if code.isascii() and code.isalnum():
        return f"&{code};"
    return html_escape(code)


def _description_term(label: str) -> str:
    """Strip the brackets of a ``[term]`` label."""
    if label.startswith("[") and label.endswith("]"):
        return label[1:-1].strip()
    return label


class HtmlRenderer:
    """Render a token sequence to HTML.

    Usage:
        >>> renderer = HtmlRenderer()
        >>> renderer.render([ParagraphStart(), InlineText("Hi"), ParagraphEnd()])
        '<p>Hi</p>\\n'

    Thread Safety:
        Each render() call creates an independent RenderContext. Link
        resolution calls into the parser's callbacks.
    """

    __slots__ = ("_highlight", "_language", "_last_context")

    def __init__(self, *, highlight: bool = False, language: str = "perl") -> None:
        """Initialize renderer.

        Args:
            highlight: Enable syntax highlighting for verbatim blocks
            language: Language used to highlight verbatim blocks
        """
        self._highlight = highlight
        self._language = language
        self._last_context: RenderContext | None = None

    def render(self, tokens: Iterable[Token]) -> str:
        """Render tokens to an HTML string.

        Args:
            tokens: Token sequence, or a Document

        Returns:
            HTML string
        """
        ctx = RenderContext()
        sb = StringBuilder()
        for token in tokens:
            self._render_token(token, sb, ctx)

        self._last_context = ctx
        return sb.build()

    def get_headings(self) -> list[HeadingInfo]:
        """Get heading info collected during the last render."""
        if self._last_context is None:
            return []
        return self._last_context.headings.copy()

    def _render_token(self, token: Token, sb: StringBuilder, ctx: RenderContext) -> None:
        match token:
            case HeadingStart(level=level, title=title):
                anchor = heading_anchor(title)
                ctx.headings.append(HeadingInfo(level=level, text=title, anchor=anchor))
                sb.append(f'<h{level} id="{html_escape(anchor)}">')
            case HeadingEnd(level=level):
                sb.append_line(f"</h{level}>")
            case ListStart(kind=kind):
                sb.append_line(f"<{list_tag(kind)}>")
            case ListEnd(kind=kind):
                sb.append_line(f"</{list_tag(kind)}>")
            case ItemStart():
                self._render_item_start(token, sb)
            case ItemEnd(kind=kind):
                sb.append_line("</dd>" if kind is ListKind.DESCRIPTION else "</li>")
            case ParagraphStart():
                sb.append("<p>")
            case ParagraphEnd():
                sb.append_line("</p>")
            case InlineMarkupStart():
                self._render_markup_start(token, sb)
            case InlineMarkupEnd():
                self._render_markup_end(token, sb)
            case InlineText(text=text):
                sb.append(text)
            case RawData():
                if token.format_name == "html":
                    sb.append(token.content)
            case Verbatim(text=text):
                self._render_verbatim(text, sb)
            case _:
                raise RenderError(f"not a renderable token: {token!r}")

    def _render_item_start(self, item: ItemStart, sb: StringBuilder) -> None:
        match item.list_kind:
            case ListKind.UNORDERED | ListKind.ORDERED:
                sb.append("<li>")
            case ListKind.DESCRIPTION:
                term = html_escape(_description_term(item.label))
                sb.append_line(f"<dt>{term}</dt>").append("<dd>")
            case kind:
                raise InvariantError(f"unhandled list kind {kind!r}")

    def _render_markup_start(self, token: InlineMarkupStart, sb: StringBuilder) -> None:
        if token.kind in _MARKUP_TAGS:
            sb.append(_MARKUP_TAGS[token.kind][0])
        elif token.kind is MarkupKind.LINK:
            if token.resolver is None or not token.args:
                raise InvariantError("link start was never closed")
            href = token.resolver.href(token.args[0], token.lineno)
            sb.append(f'<a href="{html_escape(href)}">')

    def _render_markup_end(self, token: InlineMarkupEnd, sb: StringBuilder) -> None:
        match token.kind:
            case kind if kind in _MARKUP_TAGS:
                sb.append(_MARKUP_TAGS[kind][1])
            case MarkupKind.LINK:
                sb.append("</a>")
            case MarkupKind.ESCAPE:
                sb.append(render_escape(token.args[0]) if token.args else "")
            case MarkupKind.INDEX:
                if token.args and token.args[0]:
                    sb.append(f'<a id="{html_escape(token.args[0])}"></a>')

    def _render_verbatim(self, text: str, sb: StringBuilder) -> None:
        if self._highlight:
            try:
                from podhtml.highlighting import highlight

                sb.append_line(highlight(text, self._language))
                return
            except Exception:
                # Fall back to plain rendering
                logger.debug("Syntax highlighting failed for language %r", self._language, exc_info=True)

        sb.append_line(f"<pre>{html_escape(text)}</pre>")
