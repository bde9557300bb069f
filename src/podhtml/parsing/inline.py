"""Inline formatting code tokenizer mixin.

Turns the text of one paragraph, heading or item into tokens appended to the
shared token sequence:

    B<bold>, I<italic>, C<code>, F<file>   markup pairs around text
    C<< $a->b >>                             extended form, inner spaces trimmed
    S<no break>                              spaces become &nbsp;
    E<gt>, E<verbar>, E<0x263A>              character escapes
    X<index entry>                           index registry + invisible anchor
    L<text|target>                           hyperlink, resolved at render time
    Z<suppressed>                            removed by the zap pass

The text is scanned character by character. Open codes live on a stack
local to one call; codes never span paragraphs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from podhtml.errors import InvariantError
from podhtml.parsing.charsets import NBSP_ENTITY, NO_NESTING, SIGIL_CHARS, SIGILS
from podhtml.parsing.zap import apply_zap
from podhtml.tokens import (
    InlineMarkupEnd,
    InlineMarkupStart,
    InlineText,
    MarkupKind,
    Token,
)
from podhtml.utils.text import html_escape

if TYPE_CHECKING:
    from podhtml.links import LinkResolver

# Kinds whose characters are collected instead of rendered as text
_COLLECTING = frozenset({MarkupKind.ESCAPE, MarkupKind.INDEX, MarkupKind.LINK})


@dataclass(slots=True)
class OpenCode:
    """A formatting code that has been opened but not closed yet.

    Attributes:
        sigil: The code letter, for diagnostics
        kind: Markup kind
        angles: Number of ``<`` in the opener; the closer needs as many ``>``
        start: The emitted start token, None for a rejected opener
        buffer: Escape code, index keyword or link content
        in_target: For links, whether the ``|`` has been seen
    """

    sigil: str
    kind: MarkupKind
    angles: int
    start: InlineMarkupStart | None
    buffer: str = ""
    in_target: bool = False

    @property
    def rejected(self) -> bool:
        return self.start is None


class InlineParsingMixin:
    """Mixin tokenizing inline formatting codes.

    Required Host Attributes:
        - _tokens: list[Token]
        - _index: dict[str, str]
        - _link_resolver: LinkResolver
        - _block_lineno: int

    Required Host Methods (from other mixins):
        - _find_open_markup(kind) -> InlineMarkupStart | None
        - _trailing_text() -> InlineText | None
        - _warn(message, lineno=None) -> None

    """

    _tokens: list[Token]
    _index: dict[str, str]
    _link_resolver: LinkResolver
    _block_lineno: int

    def _find_open_markup(self, kind: MarkupKind) -> InlineMarkupStart | None:
        raise NotImplementedError

    def _trailing_text(self) -> InlineText | None:
        raise NotImplementedError

    def _warn(self, message: str, lineno: int | None = None) -> None:
        raise NotImplementedError

    def _parse_inline(self, text: str) -> None:
        """Tokenize ``text`` and append the result to the token sequence."""
        stack: list[OpenCode] = []
        opened_zap = False
        pos = 0
        text_len = len(text)

        while pos < text_len:
            char = text[pos]

            # Opener: one uppercase letter followed by a run of "<"
            if char in SIGIL_CHARS and pos + 1 < text_len and text[pos + 1] == "<":
                angles = _count_run(text, pos + 1, "<")
                end = pos + 1 + angles
                code = self._open_code(char, angles, stack, text, pos)
                if code.rejected:
                    # Kept as written, inside whatever encloses it
                    for literal in text[pos:end]:
                        self._add_char(literal, stack)
                stack.append(code)
                opened_zap = opened_zap or (code.kind is MarkupKind.ZAP and not code.rejected)
                pos = end
                if angles > 1 and not code.rejected:
                    while pos < text_len and text[pos] == " ":
                        pos += 1
                continue

            # Closer: as many ">" as the innermost opener had "<"
            if char == ">" and stack:
                code = stack[-1]
                if text.startswith(">" * code.angles, pos):
                    stack.pop()
                    if code.rejected:
                        for literal in text[pos : pos + code.angles]:
                            self._add_char(literal, stack)
                    else:
                        self._close_code(code)
                    pos += code.angles
                    continue

            self._add_char(char, stack)
            pos += 1

        while stack:
            code = stack.pop()
            if not code.rejected:
                self._warn(f"unterminated formatting code {code.sigil}<")
                self._close_code(code)

        if opened_zap:
            apply_zap(self._tokens)

    def _open_code(
        self, sigil: str, angles: int, stack: list[OpenCode], text: str, pos: int
    ) -> OpenCode:
        """Emit a start token, or reject the opener with a diagnostic.

        A rejected opener still occupies a stack slot so that its closer is
        recognized; both are passed on as plain characters, and so is the
        content between them.
        """
        reason = _rejection(sigil, stack, text, pos)
        if reason is not None:
            self._warn(reason)
            return OpenCode(sigil, MarkupKind.NONE, angles, None)

        kind = SIGILS.get(sigil)
        if kind is None:
            self._warn(f"Ignoring unknown formatting code '{sigil}'")
            kind = MarkupKind.NONE

        start = InlineMarkupStart(kind, lineno=self._block_lineno)
        self._tokens.append(start)
        return OpenCode(sigil, kind, angles, start)

    def _close_code(self, code: OpenCode) -> None:
        """Emit the end token for ``code`` with its kind-specific arguments."""
        trailing = self._trailing_text()
        if trailing is not None:
            trailing.text = trailing.text.rstrip()

        args: tuple[str, ...] = ()
        match code.kind:
            case MarkupKind.ESCAPE:
                args = (code.buffer.strip(),)
            case MarkupKind.INDEX:
                keyword = code.buffer.strip()
                slug = keyword.replace(" ", "_")
                if keyword:
                    self._index[keyword] = slug
                args = (slug,)
            case MarkupKind.LINK:
                start = self._find_open_markup(MarkupKind.LINK)
                if start is None or start is not code.start:
                    raise InvariantError("link end without its link start")
                start.args = (code.buffer.strip(),)
                start.resolver = self._link_resolver

        self._tokens.append(InlineMarkupEnd(code.kind, args))

    def _add_char(self, char: str, stack: list[OpenCode]) -> None:
        """Route a plain character to a collector or to the text run."""
        collector = _innermost_collector(stack)
        if collector is not None:
            collector.buffer += char
            if collector.kind is not MarkupKind.LINK:
                return
            # Link: text before "|" is shown, the target after it is not
            if collector.in_target:
                return
            if char == "|":
                collector.in_target = True
                return

        if char == " " and any(c.kind is MarkupKind.NBSP for c in stack):
            escaped = NBSP_ENTITY
        else:
            escaped = html_escape(char)

        trailing = self._trailing_text()
        if trailing is not None:
            trailing.append(escaped)
        else:
            self._tokens.append(InlineText(escaped))


def _count_run(text: str, pos: int, char: str) -> int:
    """Count consecutive ``char`` starting at ``pos``."""
    end = pos
    while end < len(text) and text[end] == char:
        end += 1
    return end - pos


def _innermost_collector(stack: list[OpenCode]) -> OpenCode | None:
    """Innermost open escape, index or link code."""
    for code in reversed(stack):
        if code.kind in _COLLECTING:
            return code
    return None


def _rejection(sigil: str, stack: list[OpenCode], text: str, pos: int) -> str | None:
    """Explain why an opener may not appear here, or return None."""
    for code in stack:
        if code.kind in NO_NESTING:
            return f"formatting code {sigil}<> not allowed inside {code.sigil}<>, ignoring"

    link = next((c for c in reversed(stack) if c.kind is MarkupKind.LINK), None)
    if link is None:
        return None
    if sigil == "L":
        return "L<> not allowed inside L<>, ignoring"
    # Without a "|" ahead the whole content is the target
    if link.in_target or "|" not in text[pos : _span_end(text, pos, link.angles)]:
        return f"unsupported formatting code {sigil}<> inside link target, ignoring"
    return None


def _span_end(text: str, pos: int, angles: int) -> int:
    """End of the code that is open at ``pos`` and closes with ``angles`` ">".

    Codes opened from ``pos`` on are matched against their own closers first.
    Returns the end of ``text`` when the code is never closed.
    """
    pending = [angles]
    end = pos
    while end < len(text) and pending:
        char = text[end]
        if char in SIGIL_CHARS and end + 1 < len(text) and text[end + 1] == "<":
            run = _count_run(text, end + 1, "<")
            pending.append(run)
            end += 1 + run
        elif char == ">" and text.startswith(">" * pending[-1], end):
            end += pending.pop()
        else:
            end += 1
    return end
