"""Lookback helpers over the growing token sequence.

The parser keeps no explicit list or markup stack across calls. Nesting is
rediscovered by scanning the already emitted tokens backward and counting
Start/End pairs, which keeps the token sequence the single source of truth.
"""

from __future__ import annotations

from podhtml.tokens import (
    InlineMarkupEnd,
    InlineMarkupStart,
    InlineText,
    ItemStart,
    ListEnd,
    ListStart,
    MarkupKind,
    Token,
)


class TokenNavigationMixin:
    """Mixin providing backward scans over the emitted tokens.

    Required Host Attributes:
        - _tokens: list[Token]

    """

    _tokens: list[Token]

    def _find_preceding_item(self) -> ItemStart | None:
        """Return the latest ``ItemStart`` of the innermost open list.

        Items of nested lists are skipped: every ``ListEnd`` seen while
        walking backward hides one ``ListStart``. Reaching an unmatched
        ``ListStart`` means the enclosing list has no item yet.
        """
        level = 0
        for token in reversed(self._tokens):
            match token:
                case ListEnd():
                    level += 1
                case ListStart():
                    if level == 0:
                        return None
                    level -= 1
                case ItemStart() if level == 0:
                    return token
        return None

    def _find_preceding_list_start(self) -> ListStart | None:
        """Return the innermost ``ListStart`` that has no ``ListEnd`` yet."""
        level = 0
        for token in reversed(self._tokens):
            match token:
                case ListEnd():
                    level += 1
                case ListStart():
                    if level == 0:
                        return token
                    level -= 1
        return None

    def _find_open_markup(self, kind: MarkupKind) -> InlineMarkupStart | None:
        """Return the innermost unmatched ``InlineMarkupStart`` of ``kind``."""
        level = 0
        for token in reversed(self._tokens):
            match token:
                case InlineMarkupEnd(kind=end_kind) if end_kind == kind:
                    level += 1
                case InlineMarkupStart(kind=start_kind) if start_kind == kind:
                    if level == 0:
                        return token
                    level -= 1
        return None

    def _trailing_text(self) -> InlineText | None:
        """Return the last token if it is a text run."""
        if self._tokens and isinstance(self._tokens[-1], InlineText):
            return self._tokens[-1]
        return None
