"""
podhtml: Perl POD to HTML

Parses Plain Old Documentation into a flat, typed token sequence and
serializes it to HTML. Zero runtime dependencies.

Quick Start:
    >>> from podhtml import parse, render
    >>> doc = parse(
    ...     "=head1 NAME\\n\\nFoo - B<does> things\\n",
    ...     resolve_filename=lambda name: name.replace("::", "/") + ".html",
    ...     resolve_method_anchor=lambda is_class, name: name,
    ... )
    >>> print(render(doc))
    <h1 id="NAME">NAME</h1>
    <p>Foo - <strong>does</strong> things</p>

    >>> # Or use the high-level Pod class
    >>> from podhtml import Pod
    >>> pod = Pod(resolve_filename, resolve_method_anchor)
    >>> html = pod("=head1 NAME")

Installation:
    pip install podhtml              # Core parser (zero deps)
    pip install podhtml[syntax]      # + Syntax highlighting via Rosettes
"""

from collections.abc import Iterable

from podhtml.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from podhtml.diagnostics import Diagnostic
from podhtml.document import Document
from podhtml.errors import InvariantError, PodError, PodSyntaxError, RenderError
from podhtml.links import FilenameResolver, LinkResolver, MethodAnchorResolver
from podhtml.parser import Parser
from podhtml.renderers.html import HeadingInfo, HtmlRenderer
from podhtml.renderers.protocol import TokenRenderer
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
    TokenType,
    Verbatim,
)

__version__ = "0.1.0"


def _parse_with(
    source: str,
    resolve_filename: FilenameResolver,
    resolve_method_anchor: MethodAnchorResolver,
    source_file: str | None,
) -> Document:
    parser = Parser(source, resolve_filename, resolve_method_anchor, source_file=source_file)
    tokens = parser.parse()
    return Document(
        tokens=tuple(tokens),
        index=dict(parser.index),
        diagnostics=tuple(parser.diagnostics),
        source_file=source_file,
    )


def parse(
    source: str,
    *,
    resolve_filename: FilenameResolver,
    resolve_method_anchor: MethodAnchorResolver,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse POD source into a token Document.

    Args:
        source: POD source text (already decoded)
        resolve_filename: Maps a class or module name to the file it is
            documented in
        resolve_method_anchor: Maps (is_class_method, method name) to an
            anchor fragment
        source_file: Optional source file path for diagnostics
        config: Parse configuration (uses the current context's if None)

    Returns:
        Document with tokens, index registry and diagnostics

    Raises:
        PodSyntaxError: On the first diagnostic when ``config.strict`` is set

    Example:
        >>> doc = parse("=head1 NAME", resolve_filename=str,
        ...             resolve_method_anchor=lambda c, m: m)
        >>> doc.tokens[0]
        HeadingStart(level=1, title='NAME')
    """
    if config is None:
        return _parse_with(source, resolve_filename, resolve_method_anchor, source_file)

    with parse_config_context(config):
        return _parse_with(source, resolve_filename, resolve_method_anchor, source_file)


def render(doc: Document | Iterable[Token], *, highlight: bool = False) -> str:
    """Render a Document (or any token sequence) to HTML.

    Args:
        doc: Document or token sequence to render
        highlight: Enable syntax highlighting for verbatim blocks

    Returns:
        HTML string

    Example:
        >>> doc = parse("Hello", resolve_filename=str,
        ...             resolve_method_anchor=lambda c, m: m)
        >>> render(doc)
        '<p>Hello</p>\\n'
    """
    renderer = HtmlRenderer(highlight=highlight)
    return renderer.render(doc)


class Pod:
    """High-level POD processor combining parser and renderer.

    Usage:
        >>> pod = Pod(resolve_filename, resolve_method_anchor)
        >>> pod("=head1 NAME\\n\\nB<podhtml>")
        '<h1 id="NAME">NAME</h1>\\n<p><strong>podhtml</strong></p>\\n'

        >>> # Access the tokens
        >>> doc = pod.parse("=head2 Methods")
        >>> doc.tokens[0].level
        2

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Pod instances concurrently from different threads.

    """

    __slots__ = ("_config", "_highlight", "_resolve_filename", "_resolve_method_anchor")

    def __init__(
        self,
        resolve_filename: FilenameResolver,
        resolve_method_anchor: MethodAnchorResolver,
        *,
        highlight: bool = False,
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize POD processor.

        Args:
            resolve_filename: Maps a class or module name to a file name
            resolve_method_anchor: Maps (is_class_method, method name) to an
                anchor fragment
            highlight: Enable syntax highlighting for verbatim blocks
            config: Parse configuration (defaults if None)
        """
        self._resolve_filename = resolve_filename
        self._resolve_method_anchor = resolve_method_anchor
        self._highlight = highlight
        self._config = config or ParseConfig()

    def __call__(self, source: str) -> str:
        """Parse and render POD in one call.

        Args:
            source: POD source text

        Returns:
            HTML string

        """
        doc = self.parse(source)
        return self.render(doc)

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse POD source into a Document.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return _parse_with(
                source, self._resolve_filename, self._resolve_method_anchor, source_file
            )

    def parse_many(
        self, sources: Iterable[str], *, source_file: str | None = None
    ) -> list[Document]:
        """Parse multiple POD sources, setting the config once.

        Example:
            >>> docs = pod.parse_many(["=head1 A", "=head1 B"])
        """
        with parse_config_context(self._config):
            return [
                _parse_with(
                    source, self._resolve_filename, self._resolve_method_anchor, source_file
                )
                for source in sources
            ]

    def render(self, doc: Document | Iterable[Token]) -> str:
        """Render a Document or token sequence to HTML."""
        renderer = HtmlRenderer(highlight=self._highlight)
        return renderer.render(doc)


__all__ = [
    # Main API
    "parse",
    "render",
    "Pod",
    "Parser",
    "Document",
    "__version__",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Links
    "LinkResolver",
    "FilenameResolver",
    "MethodAnchorResolver",
    # Renderers
    "HtmlRenderer",
    "HeadingInfo",
    "TokenRenderer",
    # Diagnostics and errors
    "Diagnostic",
    "PodError",
    "PodSyntaxError",
    "InvariantError",
    "RenderError",
    # Tokens
    "Token",
    "TokenType",
    "MarkupKind",
    "ListKind",
    "HeadingStart",
    "HeadingEnd",
    "ListStart",
    "ListEnd",
    "ItemStart",
    "ItemEnd",
    "ParagraphStart",
    "ParagraphEnd",
    "InlineMarkupStart",
    "InlineMarkupEnd",
    "InlineText",
    "RawData",
    "Verbatim",
]
