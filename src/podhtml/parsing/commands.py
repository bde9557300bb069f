"""Command paragraph interpreter mixin.

Handles ``=name args...`` paragraphs:

    =head1 .. =head6    headings
    =over / =item / =back
                        lists; the list kind is derived from the last item
    =begin / =end, =for raw data for a named format
    =pod / =cut         toggle ignored regions
    =encoding           accepted and ignored, UTF-8 is assumed

List nesting is not tracked with a stack. ``=item`` and ``=back`` find the
item and list they belong to by scanning the emitted tokens backward.
"""

from __future__ import annotations

import re

from podhtml.config import ParseConfig
from podhtml.modes import BlockMode
from podhtml.tokens import (
    HeadingEnd,
    HeadingStart,
    ItemEnd,
    ItemStart,
    ListEnd,
    ListKind,
    ListStart,
    ParagraphEnd,
    ParagraphStart,
    RawData,
    Token,
)
from podhtml.utils.text import join_words

_COMMAND_RE = re.compile(r"=(\S*)\s*(.*)", re.DOTALL)

HEADING_LEVELS: dict[str, int] = {f"head{level}": level for level in range(1, 7)}


class CommandParsingMixin:
    """Mixin interpreting command paragraphs.

    Required Host Attributes:
        - _tokens: list[Token]
        - _mode: BlockMode
        - _data_end_tag: str
        - _data_args: tuple[str, ...]
        - _config: ParseConfig

    Required Host Methods (from other mixins):
        - _parse_inline(text) -> None
        - _find_preceding_item() -> ItemStart | None
        - _find_preceding_list_start() -> ListStart | None
        - _warn(message, lineno=None) -> None

    """

    _tokens: list[Token]
    _mode: BlockMode
    _data_end_tag: str
    _data_args: tuple[str, ...]

    @property
    def _config(self) -> ParseConfig:
        raise NotImplementedError

    def _parse_inline(self, text: str) -> None:
        raise NotImplementedError

    def _find_preceding_item(self) -> ItemStart | None:
        raise NotImplementedError

    def _find_preceding_list_start(self) -> ListStart | None:
        raise NotImplementedError

    def _warn(self, message: str, lineno: int | None = None) -> None:
        raise NotImplementedError

    def _parse_command(self, command: str) -> None:
        """Interpret one reflowed command paragraph."""
        parsed = _COMMAND_RE.match(command)
        name, text = (parsed.group(1), parsed.group(2).strip()) if parsed else ("", "")
        args = text.split()

        match name:
            case _ if name in HEADING_LEVELS:
                self._parse_heading(HEADING_LEVELS[name], text)
            case "over":
                self._parse_over(args)
            case "item":
                self._parse_item(args)
            case "back":
                self._parse_back()
            case "begin":
                self._parse_begin(args)
            case "end":
                self._warn(f"=end {text} without matching =begin, ignoring")
            case "for":
                self._parse_for(args, text)
            case "pod":
                # Only meaningful as the end of a =cut region
                pass
            case "cut":
                self._mode = BlockMode.CUT
            case "encoding":
                self._warn("the =encoding command is ignored, UTF-8 is assumed")
            case _:
                self._warn(f"Ignoring unknown command '{name}'")

    def _parse_heading(self, level: int, text: str) -> None:
        self._tokens.append(HeadingStart(level, text))
        self._parse_inline(text)
        self._tokens.append(HeadingEnd(level))

    def _parse_over(self, args: list[str]) -> None:
        indent = self._config.default_indent
        if args:
            try:
                indent = float(args[0])
            except ValueError:
                self._warn(f"=over indent '{args[0]}' is not a number, using {indent}")
        self._tokens.append(ListStart(indent))

    def _parse_item(self, args: list[str]) -> None:
        label, body = self._split_item_label(args)

        if self._find_preceding_list_start() is None:
            self._warn("=item outside of =over")

        previous = self._find_preceding_item()
        if previous is not None:
            self._tokens.append(ItemEnd(previous.list_kind))
        self._tokens.append(ItemStart(label))

        if body:
            self._tokens.append(ParagraphStart())
            self._parse_inline(join_words(body))
            self._tokens.append(ParagraphEnd())

    def _split_item_label(self, args: list[str]) -> tuple[str, list[str]]:
        """Separate an item's label from its body text.

        ``=item`` alone, or followed by text that is not a label, is short
        for ``=item *``. A ``[term]`` label may contain spaces and runs up to
        the first argument containing ``]``.
        """
        if not args:
            return "*", []

        first = args[0]
        if first.startswith("["):
            for i, arg in enumerate(args):
                if "]" in arg:
                    return join_words(args[: i + 1]), args[i + 1 :]
            self._warn(f"unterminated item label '{join_words(args)}', using the whole line")
            return join_words(args), []

        if first.startswith("*") or first[0].isdigit():
            return first, args[1:]
        return "*", args

    def _parse_back(self) -> None:
        list_start = self._find_preceding_list_start()
        if list_start is None:
            self._warn("=back without matching =over, ignoring")
            return

        item = self._find_preceding_item()
        if item is None:
            self._warn("empty over block")
            kind = ListKind.UNORDERED
        else:
            kind = item.list_kind
            self._tokens.append(ItemEnd(kind))

        list_start.kind = kind
        self._tokens.append(ListEnd(kind))

    def _parse_begin(self, args: list[str]) -> None:
        if not args:
            self._warn("=begin command lacks a format name, ignoring")
            return
        # Note: "=end" itself is matched line by line in DATA mode
        self._data_end_tag = f"=end {args[0]}"
        self._data_args = tuple(args)
        self._mode = BlockMode.DATA

    def _parse_for(self, args: list[str], text: str) -> None:
        if not args:
            self._warn("=for command lacks argument, ignoring")
            return

        format_name = args[0]
        content = text[len(format_name) :].strip()

        if format_name.startswith(":"):
            # Colon means the content is ordinary POD
            self._tokens.append(ParagraphStart())
            self._parse_inline(content)
            self._tokens.append(ParagraphEnd())
        else:
            # Shorthand for =begin ... =end
            self._tokens.append(RawData(content, (format_name,)))
