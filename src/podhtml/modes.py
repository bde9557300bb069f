"""Block state machine modes."""

from __future__ import annotations

from enum import Enum, auto


class BlockMode(Enum):
    """Block parser operating modes.

    The parser switches between modes based on the line just read:
    - NONE: Between blocks, scanning for the next block start
    - COMMAND: Inside a ``=command`` paragraph
    - ORDINARY: Inside a plain text paragraph
    - VERBATIM: Inside an indented block
    - DATA: Inside a ``=begin``/``=end`` region
    - CUT: After ``=cut``, skipping everything up to ``=pod``

    """

    NONE = auto()
    COMMAND = auto()
    ORDINARY = auto()
    VERBATIM = auto()
    DATA = auto()
    CUT = auto()
