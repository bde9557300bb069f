"""Block mode state machine mixin.

Consumes the document one line at a time and groups lines into blocks:

    =head1 NAME            command paragraph (reflowed)
    Some text that         ordinary paragraph (reflowed)
    spans two lines.
        my $x = 1;         verbatim paragraph (line structure kept)
    =begin html            data region, up to "=end html"

A block ends at an empty line (or at its ``=end`` line for data regions)
and is then dispatched to the matching handler.
"""

from __future__ import annotations

from podhtml.modes import BlockMode
from podhtml.tokens import ParagraphEnd, ParagraphStart, RawData, Token, Verbatim
from podhtml.utils.text import count_leading_whitespace


class BlockParsingMixin:
    """Mixin providing the line-oriented block state machine.

    Required Host Attributes:
        - _tokens: list[Token]
        - _mode: BlockMode
        - _buffer: str
        - _lineno: int
        - _block_lineno: int
        - _verbatim_lead: int
        - _data_end_tag: str
        - _data_args: tuple[str, ...]

    Required Host Methods (from other mixins):
        - _parse_command(command) -> None
        - _parse_inline(text) -> None

    """

    _tokens: list[Token]
    _mode: BlockMode
    _buffer: str
    _lineno: int
    _block_lineno: int
    _verbatim_lead: int
    _data_end_tag: str
    _data_args: tuple[str, ...]

    def _parse_command(self, command: str) -> None:
        raise NotImplementedError

    def _parse_inline(self, text: str) -> None:
        raise NotImplementedError

    def _parse_line(self, line: str) -> None:
        """Feed one line (without its newline) to the state machine."""
        match self._mode:
            case BlockMode.COMMAND:
                if line:
                    self._buffer += line + " "
                else:
                    # Commands may switch the mode themselves (=begin, =cut)
                    self._parse_command(self._take_buffer())
            case BlockMode.ORDINARY:
                if line:
                    self._buffer += line + " "
                else:
                    self._parse_ordinary(self._take_buffer())
            case BlockMode.VERBATIM:
                if line:
                    self._buffer += line + "\n"
                else:
                    self._parse_verbatim(self._take_buffer())
            case BlockMode.DATA:
                if line == self._data_end_tag:
                    self._parse_data(self._take_buffer())
                    self._data_end_tag = ""
                    self._data_args = ()
                else:
                    self._buffer += line + "\n"
            case BlockMode.CUT:
                if line == "=pod":
                    self._mode = BlockMode.NONE
            case BlockMode.NONE:
                self._start_block(line)

    def _start_block(self, line: str) -> None:
        """Pick the block kind from the first line of a block."""
        if not line:
            return

        self._block_lineno = self._lineno
        first = line[0]
        if first == "=":
            self._mode = BlockMode.COMMAND
            self._buffer = line + " "
        elif first in " \t":
            # Only the first line decides how much indentation is removed
            self._verbatim_lead = count_leading_whitespace(line)
            self._mode = BlockMode.VERBATIM
            self._buffer = line + "\n"
        else:
            self._mode = BlockMode.ORDINARY
            self._buffer = line + " "

    def _take_buffer(self) -> str:
        """Return the buffered block and go back to NONE mode."""
        buffer = self._buffer
        self._buffer = ""
        self._mode = BlockMode.NONE
        return buffer

    def _parse_ordinary(self, text: str) -> None:
        """Emit a paragraph; ``text`` is already reflowed to one line."""
        self._tokens.append(ParagraphStart())
        self._parse_inline(text.rstrip())
        self._tokens.append(ParagraphEnd())

    def _parse_verbatim(self, text: str) -> None:
        """Emit a verbatim block, extending the previous one if adjacent."""
        lead = self._verbatim_lead
        if lead > 0:
            lines = text.split("\n")[:-1]
            text = "".join(
                line[min(lead, count_leading_whitespace(line)) :] + "\n" for line in lines
            )

        previous = self._tokens[-1] if self._tokens else None
        if isinstance(previous, Verbatim):
            previous.append("\n" + text)
        else:
            self._tokens.append(Verbatim(text))

    def _parse_data(self, text: str) -> None:
        """Emit the content of a ``=begin``/``=end`` region."""
        self._tokens.append(RawData(text, self._data_args))
