"""Logger lookup for podhtml.

Every module logs through a logger below ``podhtml`` so an application can
silence, filter or redirect all parser diagnostics with one logger. podhtml
never attaches handlers itself.

Example:
    >>> from podhtml.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("line 3: Ignoring unknown command 'foo'")
"""

from __future__ import annotations

import logging

_ROOT = "podhtml"


def get_logger(name: str) -> logging.Logger:
    """Return the standard library logger for ``name`` below ``podhtml``.

    Names already inside the package (``__name__`` of a podhtml module) are
    used unchanged; anything else is nested under the package logger.

    Example:
        >>> get_logger("mymodule").name
        'podhtml.mymodule'
        >>> get_logger("podhtml.parser").name
        'podhtml.parser'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
