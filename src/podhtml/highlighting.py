"""Optional syntax highlighting for verbatim blocks.

POD verbatim blocks carry no language tag, so the renderer passes the one it
was configured with (``perl`` unless told otherwise). With podhtml[syntax]
installed, Rosettes is picked up on first use.

Usage:
    # Automatic with podhtml[syntax]
    renderer = HtmlRenderer(highlight=True)

    # Any callable taking (code, language) works too
    from podhtml.highlighting import set_highlighter

    set_highlighter(lambda code, language: f"<pre class='{language}'>{code}</pre>")
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from podhtml.utils.text import html_escape


class Highlighter(Protocol):
    """Object-style highlighter.

    ``highlight`` must return HTML with the code escaped. Languages for which
    ``supports_language`` is false get the plain fallback instead.
    """

    def highlight(self, code: str, language: str) -> str: ...

    def supports_language(self, language: str) -> bool: ...


SimpleHighlighter = Callable[[str, str], str]

_highlighter: Highlighter | SimpleHighlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Install a highlighter for every renderer; None removes it."""
    global _highlighter
    _highlighter = highlighter


def _load_rosettes() -> Highlighter | None:
    """Wrap Rosettes in the Highlighter protocol, if it is installed."""
    try:
        import rosettes  # type: ignore[import-not-found]
    except ImportError:
        return None

    class RosettesHighlighter:
        def highlight(self, code: str, language: str) -> str:
            result: str = rosettes.highlight(code, language=language)
            return result

        def supports_language(self, language: str) -> bool:
            try:
                return bool(rosettes.supports_language(language))
            except Exception:
                return False

    return RosettesHighlighter()


def _current() -> Highlighter | SimpleHighlighter | None:
    """The installed highlighter, trying Rosettes once if there is none."""
    global _highlighter, _tried_rosettes
    if _highlighter is None and not _tried_rosettes:
        _tried_rosettes = True
        _highlighter = _load_rosettes()
    return _highlighter


def plain(code: str, language: str) -> str:
    """Unhighlighted markup used when no highlighter applies."""
    lang_class = f' class="language-{html_escape(language)}"' if language else ""
    return f"<pre><code{lang_class}>{html_escape(code)}</code></pre>"


def highlight(code: str, language: str) -> str:
    """Highlight a verbatim block.

    Args:
        code: Verbatim block text, indentation already removed
        language: Language identifier

    Returns:
        Highlighted HTML, or the plain ``<pre><code>`` markup when no
        highlighter is installed or it does not know the language
    """
    highlighter = _current()
    if highlighter is None:
        return plain(code, language)

    method = getattr(highlighter, "highlight", None)
    if callable(method):
        if not highlighter.supports_language(language):  # type: ignore[union-attr]
            return plain(code, language)
        return method(code, language)
    return highlighter(code, language)  # type: ignore[operator]


def has_highlighter() -> bool:
    """Whether a highlighter is installed or Rosettes is available."""
    return _current() is not None
