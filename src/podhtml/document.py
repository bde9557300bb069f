"""Parse result container."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from podhtml.diagnostics import Diagnostic
from podhtml.tokens import Token, TokenType


@dataclass(frozen=True, slots=True)
class Document:
    """Everything a parse produced.

    Attributes:
        tokens: The final token sequence, zap regions already removed
        index: ``X<>`` keyword -> anchor slug, for an external index builder
        diagnostics: Non-fatal warnings in source order
        source_file: Source file path, if one was given

    """

    tokens: tuple[Token, ...]
    index: Mapping[str, str] = field(default_factory=dict)
    diagnostics: tuple[Diagnostic, ...] = ()
    source_file: str | None = None

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def of_type(self, token_type: TokenType) -> list[Token]:
        """Return the tokens with the given discriminant, in order."""
        return [token for token in self.tokens if token.type is token_type]
