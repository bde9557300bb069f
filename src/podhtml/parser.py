"""POD parser producing a flat token sequence.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Backward scans over emitted tokens
- `InlineParsingMixin`: Formatting codes inside paragraph text
- `CommandParsingMixin`: ``=command`` paragraphs and list nesting
- `BlockParsingMixin`: The line-oriented block state machine

Order matters: mixins that implement a method come before mixins that only
declare it for documentation.

Thread Safety:
- Parser instances are single-use and not thread-safe
- Configuration is read from ContextVar (thread-local)

"""

from __future__ import annotations

from podhtml.config import ParseConfig, get_parse_config
from podhtml.diagnostics import Diagnostic
from podhtml.errors import PodSyntaxError
from podhtml.links import FilenameResolver, LinkResolver, MethodAnchorResolver
from podhtml.modes import BlockMode
from podhtml.parsing import (
    BlockParsingMixin,
    CommandParsingMixin,
    InlineParsingMixin,
    TokenNavigationMixin,
)
from podhtml.tokens import Token
from podhtml.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    CommandParsingMixin,
    BlockParsingMixin,
):
    """Parser for POD documents.

    Owns every piece of per-parse state: the block mode, the line buffer,
    the pending ``=end`` tag, the index registry, the diagnostics and the
    token sequence itself.

    Usage:
            >>> parser = Parser("=head1 NAME\\n\\nFoo", str, lambda c, m: m)
            >>> tokens = parser.parse()
            >>> tokens[0]
            HeadingStart(level=1, title='NAME')

    Thread Safety:
        Parser instances are not reentrant. ``parse()`` must finish before
        ``tokens`` or ``index`` are read; ``reset()`` prepares the instance
        for another document.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_tokens",
        "_index",
        "_diagnostics",
        "_link_resolver",
        # Block state machine
        "_mode",
        "_buffer",
        "_lineno",
        "_block_lineno",
        "_verbatim_lead",
        "_data_end_tag",
        "_data_args",
    )

    def __init__(
        self,
        source: str,
        resolve_filename: FilenameResolver,
        resolve_method_anchor: MethodAnchorResolver,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: POD source text (already decoded)
            resolve_filename: Maps a class or module name to a file name
            resolve_method_anchor: Maps (is_class_method, method name) to an
                anchor fragment
            source_file: Optional source file path for diagnostics

        """
        self._link_resolver = LinkResolver(
            resolve_filename,
            resolve_method_anchor,
            man_page_url=self._config.man_page_url,
            report=self._log_link_problem,
        )
        self.reset(source, source_file)

    def reset(self, source: str, source_file: str | None = None) -> None:
        """Reinitialize the parser for another document.

        Clears the token sequence, the index registry, the diagnostics and
        all buffered block state. The name-resolution callbacks are kept.

        Args:
            source: New POD source text
            source_file: Optional source file path for diagnostics

        """
        self._source = source
        self._source_file = source_file
        self._tokens: list[Token] = []
        self._index: dict[str, str] = {}
        self._diagnostics: list[Diagnostic] = []
        self._mode = BlockMode.NONE
        self._buffer = ""
        self._lineno = 0
        self._block_lineno = 0
        self._verbatim_lead = 0
        self._data_end_tag = ""
        self._data_args: tuple[str, ...] = ()

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def tokens(self) -> list[Token]:
        """The token sequence produced by the last ``parse()``."""
        return self._tokens

    @property
    def index(self) -> dict[str, str]:
        """Index registry: ``X<>`` keyword -> anchor slug."""
        return self._index

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Diagnostics in the order they were produced."""
        return self._diagnostics

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def parse(self) -> list[Token]:
        """Parse the source into tokens.

        Returns:
            The token sequence (also available as ``tokens``)

        Raises:
            PodSyntaxError: On the first diagnostic when ``ParseConfig.strict``
                is enabled

        """
        if not self._source:
            return self._tokens

        lines = self._source.split("\n")
        if lines[-1] == "":
            # A final newline ends the last line, it does not start a new one
            lines.pop()

        for line in lines:
            self._lineno += 1
            self._parse_line(line.removesuffix("\r"))

        # Terminate whatever is the last block; every mode ends on ""
        self._parse_line("")
        self._finish()
        return self._tokens

    def _finish(self) -> None:
        """Close constructs the document left open."""
        if self._mode is BlockMode.DATA:
            self._warn(f"unterminated =begin {self._data_args[0]} block")
            self._parse_data(self._take_buffer())
            self._data_end_tag = ""
            self._data_args = ()

        while self._find_preceding_list_start() is not None:
            self._warn("missing =back at end of document", self._lineno)
            self._parse_back()

    def _log_link_problem(self, message: str, lineno: int) -> None:
        """Log a problem found while a link is resolved at render time.

        Rendering happens after parse() returned, possibly after reset(), so
        the problem is neither recorded nor raised in strict mode.
        """
        logger.warning("%s", Diagnostic(lineno, message, self._source_file))

    def _warn(self, message: str, lineno: int | None = None) -> None:
        """Record a diagnostic for the current block."""
        if lineno is None:
            lineno = self._block_lineno
        if self._config.strict:
            raise PodSyntaxError(message, lineno=lineno, source_file=self._source_file)

        diagnostic = Diagnostic(lineno, message, self._source_file)
        self._diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic)
