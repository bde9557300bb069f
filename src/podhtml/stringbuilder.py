"""Fragment accumulator for the HTML serializer.

The serializer produces one small fragment per token. Fragments are kept in
a list and joined once at the end instead of growing a string token by
token.
"""

from __future__ import annotations


class StringBuilder:
    """Collects HTML fragments and joins them on demand.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append("<pre>").append("my $x;").append_line("</pre>")
        >>> sb.build()
        '<pre>my $x;</pre>\\n'

    Instances are created per render() call and never shared.
    """

    __slots__ = ("_fragments",)

    def __init__(self) -> None:
        self._fragments: list[str] = []

    def append(self, fragment: str) -> StringBuilder:
        """Add ``fragment``; empty fragments are dropped. Chainable."""
        if fragment:
            self._fragments.append(fragment)
        return self

    def append_line(self, fragment: str) -> StringBuilder:
        """Add ``fragment`` followed by a newline. Chainable."""
        return self.append(fragment).append("\n")

    def build(self) -> str:
        """Join all fragments into the final string."""
        return "".join(self._fragments)

    def __len__(self) -> int:
        # Fragment count, not character count
        return len(self._fragments)

    def __bool__(self) -> bool:
        return bool(self._fragments)
