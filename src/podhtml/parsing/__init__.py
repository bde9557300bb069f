"""Parsing package for podhtml.

Contains the mixins that make up the Parser:
- blocks: line-oriented block state machine
- commands: =command interpretation and list nesting
- inline: formatting code tokenizer
- token_nav: backward scans over emitted tokens

and the zap post-processor that removes Z<> content.
"""

from podhtml.parsing.blocks import BlockParsingMixin
from podhtml.parsing.commands import CommandParsingMixin
from podhtml.parsing.inline import InlineParsingMixin
from podhtml.parsing.token_nav import TokenNavigationMixin
from podhtml.parsing.zap import apply_zap

__all__ = [
    "BlockParsingMixin",
    "CommandParsingMixin",
    "InlineParsingMixin",
    "TokenNavigationMixin",
    "apply_zap",
]
