"""Token model for podhtml.

The parser produces one flat, ordered sequence of tokens. Structure is
expressed by Start/End pairs rather than by nesting, so a list is a
``ListStart`` ... ``ListEnd`` run and bold text is an
``InlineMarkupStart(BOLD)`` ... ``InlineMarkupEnd(BOLD)`` run.

Every token class carries its ``TokenType`` discriminant as a class
attribute and is dispatched with ``match`` by the renderer and the parser.

Mutability:
Most tokens are frozen. The exceptions are the buffers the parser extends
while it works (``InlineText``, ``Verbatim``), the list kind set on
``ListStart`` when its ``=back`` is seen, and the link target attached to a
link's ``InlineMarkupStart`` when the link closes.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from podhtml.links import LinkResolver


class TokenType(Enum):
    """Discriminant of every token variant."""

    # Block structure
    HEADING_START = auto()
    HEADING_END = auto()
    LIST_START = auto()  # =over
    LIST_END = auto()  # =back
    ITEM_START = auto()  # =item
    ITEM_END = auto()
    PARAGRAPH_START = auto()
    PARAGRAPH_END = auto()

    # Inline content
    INLINE_MARKUP_START = auto()  # X< opener
    INLINE_MARKUP_END = auto()  # matching >
    INLINE_TEXT = auto()

    # Pass-through blocks
    RAW_DATA = auto()  # =begin/=end, =for
    VERBATIM = auto()  # indented block


class MarkupKind(Enum):
    """Inline formatting code kinds, one per sigil."""

    NONE = auto()  # Unknown sigil, renders nothing
    ITALIC = auto()  # I<>
    BOLD = auto()  # B<>
    CODE = auto()  # C<>
    FILENAME = auto()  # F<>
    NBSP = auto()  # S<>
    ZAP = auto()  # Z<>
    ESCAPE = auto()  # E<>
    INDEX = auto()  # X<>
    LINK = auto()  # L<>


class ListKind(Enum):
    """Rendered kind of an ``=over`` list."""

    UNORDERED = auto()
    ORDERED = auto()
    DESCRIPTION = auto()


def list_kind_for_label(label: str) -> ListKind:
    """Classify an item label.

    ``*`` makes a bullet item, a leading digit an ordered item, and anything
    else (normally a ``[term]``) a description item.
    """
    if label.startswith("*"):
        return ListKind.UNORDERED
    if label[:1].isdigit():
        return ListKind.ORDERED
    return ListKind.DESCRIPTION


class Token:
    """Base class of all token variants."""

    __slots__ = ()

    type: ClassVar[TokenType]


# =============================================================================
# Block structure
# =============================================================================


@dataclass(frozen=True, slots=True)
class HeadingStart(Token):
    """``=headN``; keeps the raw title for anchor generation."""

    type: ClassVar[TokenType] = TokenType.HEADING_START

    level: int
    title: str


@dataclass(frozen=True, slots=True)
class HeadingEnd(Token):
    type: ClassVar[TokenType] = TokenType.HEADING_END

    level: int


@dataclass(slots=True)
class ListStart(Token):
    """``=over``.

    ``kind`` starts out unordered and is overwritten when the list closes,
    from the label of its last item.
    """

    type: ClassVar[TokenType] = TokenType.LIST_START

    indent: float = 4.0
    kind: ListKind = ListKind.UNORDERED


@dataclass(frozen=True, slots=True)
class ListEnd(Token):
    type: ClassVar[TokenType] = TokenType.LIST_END

    kind: ListKind


@dataclass(frozen=True, slots=True)
class ItemStart(Token):
    """``=item``; the label is normalized (``*``, ``1.``, ``[term]``)."""

    type: ClassVar[TokenType] = TokenType.ITEM_START

    label: str

    @property
    def list_kind(self) -> ListKind:
        return list_kind_for_label(self.label)


@dataclass(frozen=True, slots=True)
class ItemEnd(Token):
    type: ClassVar[TokenType] = TokenType.ITEM_END

    kind: ListKind


@dataclass(frozen=True, slots=True)
class ParagraphStart(Token):
    type: ClassVar[TokenType] = TokenType.PARAGRAPH_START


@dataclass(frozen=True, slots=True)
class ParagraphEnd(Token):
    type: ClassVar[TokenType] = TokenType.PARAGRAPH_END


# =============================================================================
# Inline content
# =============================================================================


@dataclass(slots=True)
class InlineMarkupStart(Token):
    """Opening of a formatting code.

    For links, ``args`` holds the raw link content and ``resolver`` the
    parser's LinkResolver once the link has been closed; the target is
    resolved when the token is rendered.
    """

    type: ClassVar[TokenType] = TokenType.INLINE_MARKUP_START

    kind: MarkupKind
    args: tuple[str, ...] = ()
    resolver: LinkResolver | None = None
    lineno: int = 0


@dataclass(frozen=True, slots=True)
class InlineMarkupEnd(Token):
    """Closing of a formatting code.

    ``args`` holds the escape code for ``E<>`` and the anchor slug for
    ``X<>``; it is empty for every other kind.
    """

    type: ClassVar[TokenType] = TokenType.INLINE_MARKUP_END

    kind: MarkupKind
    args: tuple[str, ...] = ()


@dataclass(slots=True)
class InlineText(Token):
    """A run of already HTML-escaped text, extended character by character."""

    type: ClassVar[TokenType] = TokenType.INLINE_TEXT

    text: str = ""

    def append(self, text: str) -> None:
        self.text += text


# =============================================================================
# Pass-through blocks
# =============================================================================


@dataclass(frozen=True, slots=True)
class RawData(Token):
    """Raw block for a named format; ``args[0]`` is the format name."""

    type: ClassVar[TokenType] = TokenType.RAW_DATA

    content: str
    args: tuple[str, ...]

    @property
    def format_name(self) -> str:
        return self.args[0] if self.args else ""


@dataclass(slots=True)
class Verbatim(Token):
    """Indented block with leading indentation already removed.

    Adjacent verbatim paragraphs are merged into one token.
    """

    type: ClassVar[TokenType] = TokenType.VERBATIM

    text: str

    def append(self, text: str) -> None:
        self.text += text


# Start type -> matching end type, for pairing checks
PAIRED_TYPES: dict[TokenType, TokenType] = {
    TokenType.HEADING_START: TokenType.HEADING_END,
    TokenType.LIST_START: TokenType.LIST_END,
    TokenType.ITEM_START: TokenType.ITEM_END,
    TokenType.PARAGRAPH_START: TokenType.PARAGRAPH_END,
    TokenType.INLINE_MARKUP_START: TokenType.INLINE_MARKUP_END,
}
