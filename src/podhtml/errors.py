"""Exceptions raised by podhtml.

Defects in a document never raise by default; the parser recovers and
records a Diagnostic. Exceptions come from strict mode, from misuse of the
renderer, and from internal states no document can reach.
"""

from __future__ import annotations


def format_location(lineno: int | None, source_file: str | None) -> str:
    """``file:line``, ``line`` or ``file``; empty when both are missing."""
    parts = [str(part) for part in (source_file, lineno) if part is not None and part != ""]
    return ":".join(parts)


class PodError(Exception):
    """Root of the podhtml exception hierarchy."""


class PodSyntaxError(PodError):
    """A diagnostic raised instead of recorded, under ``ParseConfig.strict``.

    Attributes:
        message: What is wrong with the document
        lineno: First line of the offending block (1-indexed)
        source_file: File the source came from, if known
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.message = message
        self.lineno = lineno
        self.source_file = source_file
        location = format_location(lineno, source_file)
        super().__init__(f"{location} {message}" if location else message)


class InvariantError(PodError):
    """An internal state that no input document can produce.

    Seeing one means a bug in podhtml or hand-built tokens, e.g. a link start
    that was never closed or a list kind the renderer does not know.
    """


class RenderError(PodError):
    """The renderer was handed something that is not a token."""
