"""Text processing utilities for podhtml.

Provides the small string helpers shared by the parser and the renderer.

Example:
    >>> from podhtml.utils.text import heading_anchor
    >>> heading_anchor("SEE ALSO")
    'SEE-ALSO'
"""

from __future__ import annotations

import html as html_module
import re
from collections.abc import Iterable

# name(N): no whitespace anywhere, a single section digit right before ")"
_MAN_PAGE_RE = re.compile(r"^([^\s()]+)\((\d)\)$")


def count_leading_whitespace(line: str) -> int:
    """Count the leading spaces and tabs of ``line``.

    Examples:
        >>> count_leading_whitespace("    foo")
        4
        >>> count_leading_whitespace("\\t bar")
        2
        >>> count_leading_whitespace("baz")
        0
    """
    count = 0
    for char in line:
        if char not in " \t":
            break
        count += 1
    return count


def join_words(words: Iterable[str], separator: str = " ") -> str:
    """Join ``words`` into one string separated by ``separator``."""
    return separator.join(words)


def html_escape(text: str) -> str:
    """Escape HTML special characters.

    Escapes ``&``, ``<``, ``>`` and ``"`` but not single quotes.

    Examples:
        >>> html_escape('a < b && "c"')
        'a &lt; b &amp;&amp; &quot;c&quot;'
    """
    if not text:
        return ""
    return html_module.escape(text, quote=False).replace('"', "&quot;")


def heading_anchor(text: str) -> str:
    """Derive an anchor name from a heading's raw text.

    Every alphanumeric character is kept as is, everything else becomes
    ``-``. The mapping is character for character, so the anchor has the
    same length as the text and formatting codes are not interpreted.

    Examples:
        >>> heading_anchor("NAME")
        'NAME'
        >>> heading_anchor("Class Methods")
        'Class-Methods'
        >>> heading_anchor("B<new>")
        'B-new-'
    """
    return "".join(char if char.isalnum() else "-" for char in text)


def is_man_page_reference(target: str) -> tuple[str, str] | None:
    """Detect a man page reference such as ``ls(1)``.

    Args:
        target: Link target text

    Returns:
        ``(name, section)`` when the target looks like a man page reference,
        otherwise None.

    Examples:
        >>> is_man_page_reference("crontab(5)")
        ('crontab', '5')
        >>> is_man_page_reference("foo bar(1)") is None
        True
        >>> is_man_page_reference("perlpod") is None
        True
    """
    match = _MAN_PAGE_RE.match(target)
    if match is None:
        return None
    return match.group(1), match.group(2)
