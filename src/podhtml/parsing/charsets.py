"""Character tables for the inline tokenizer."""

from podhtml.tokens import MarkupKind

# Formatting code letter -> kind
SIGILS: dict[str, MarkupKind] = {
    "I": MarkupKind.ITALIC,
    "B": MarkupKind.BOLD,
    "C": MarkupKind.CODE,
    "F": MarkupKind.FILENAME,
    "S": MarkupKind.NBSP,
    "Z": MarkupKind.ZAP,
    "E": MarkupKind.ESCAPE,
    "X": MarkupKind.INDEX,
    "L": MarkupKind.LINK,
}

# Codes whose content is collected, not rendered; nothing may nest in them
NO_NESTING: frozenset[MarkupKind] = frozenset(
    {MarkupKind.ZAP, MarkupKind.ESCAPE, MarkupKind.INDEX}
)

# Any uppercase ASCII letter followed by "<" opens a formatting code
SIGIL_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")

# E<> names that are not HTML entities
POD_ESCAPES: dict[str, str] = {
    "verbar": "|",
    "sol": "/",
    "lchevron": "«",
    "rchevron": "»",
}

NBSP_ENTITY = "&nbsp;"
