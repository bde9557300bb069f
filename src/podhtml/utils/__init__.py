"""Utility modules for podhtml.

Provides:
- text: whitespace counting, HTML escaping, anchors, man page detection
- logger: get_logger for logging
"""

from podhtml.utils.logger import get_logger
from podhtml.utils.text import (
    count_leading_whitespace,
    heading_anchor,
    html_escape,
    is_man_page_reference,
    join_words,
)

__all__ = [
    "count_leading_whitespace",
    "get_logger",
    "heading_anchor",
    "html_escape",
    "is_man_page_reference",
    "join_words",
]
