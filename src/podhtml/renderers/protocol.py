"""TokenRenderer protocol, the interface shared by token renderers.

Any renderer that implements ``render(tokens) -> str`` conforms to this
protocol. The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from podhtml.renderers.protocol import TokenRenderer

    def render_page(renderer: TokenRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from collections.abc import Iterable
from typing import Protocol

from podhtml.tokens import Token


class TokenRenderer(Protocol):
    """Protocol for token renderers.

    Implementations accept a token sequence (or a Document, which iterates
    over its tokens) and return a rendered string. Rendering must not modify
    the tokens.

    """

    def render(self, tokens: Iterable[Token]) -> str:
        """Render a token sequence to a string.

        Args:
            tokens: The tokens to render.

        Returns:
            Rendered string output.

        """
        ...
