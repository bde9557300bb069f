"""Zap post-processor.

``Z<>`` content is tokenized like any other text and removed afterwards.
The pass runs over the whole token sequence, marking what to keep and then
compacting, so no token is deleted while the list is being iterated.
"""

from __future__ import annotations

from podhtml.tokens import (
    HeadingEnd,
    InlineMarkupEnd,
    InlineMarkupStart,
    ItemEnd,
    MarkupKind,
    ParagraphEnd,
    Token,
)


def apply_zap(tokens: list[Token]) -> int:
    """Delete every zap region from ``tokens`` in place.

    Tokens between a zap start and its end are dropped wholesale, including
    other markup pairs inside the region and the zap pair itself. A block
    end (paragraph, heading or item) resets the zap level, so a missing
    closer never swallows the following blocks.

    Args:
        tokens: Token sequence, modified in place

    Returns:
        Number of tokens removed
    """
    level = 0
    kept: list[Token] = []
    for token in tokens:
        match token:
            case InlineMarkupStart(kind=MarkupKind.ZAP):
                level += 1
                continue
            case InlineMarkupEnd(kind=MarkupKind.ZAP):
                if level > 0:
                    level -= 1
                continue
            case ParagraphEnd() | HeadingEnd() | ItemEnd():
                level = 0
        if level == 0:
            kept.append(token)

    removed = len(tokens) - len(kept)
    if removed:
        tokens[:] = kept
    return removed
