"""
Shell-like tokenizer for shline.

Turns one raw command line into a Line: an ordered tuple of Arguments, each an
ordered tuple of Segments. Quoting follows the common shell conventions
without running a shell:

- Unquoted whitespace (space, tab, CR, LF) separates arguments.
- Single quotes group text and disable variable expansion for it.
- Double quotes group text but keep expansion; `\\"` inside them is a literal
  double quote. No other escapes are recognised anywhere.
- Quoted and unquoted fragments touching each other form one argument,
  so `ab'c def 'ghi` is a single argument of three segments.
- An unterminated quote runs to the end of the input. It is never an error.

Example:
    >>> line_parse("go '${hello}'")
    ((Segment(text='go', expandable=True),),
     (Segment(text='${hello}', expandable=False),))
"""

from enum import Enum
from typing import Final, Self
from shline.models.dataModel import Argument, Line, Segment

WHITESPACE: Final[frozenset[str]] = frozenset(" \t\r\n")


class Quote(Enum):
    """Quoting state of the scanner."""

    NONE = ""
    SINGLE = "'"
    DOUBLE = '"'


class LineTokenizer:
    """Single-use scanner that accumulates segments and arguments.

    Attributes:
        raw: The input being scanned
        quote: Current quoting state
    """

    def __init__(self: Self, raw: str) -> None:
        self.raw: str = raw
        self.quote: Quote = Quote.NONE
        self._line: list[Argument] = []
        self._arg: list[Segment] = []
        self._text: list[str] = []

    def tokenize(self: Self) -> Line:
        """Scan the whole input and return the resulting Line."""
        pos: int = 0
        while pos < len(self.raw):
            pos = self._step(pos)

        if self.quote is not Quote.NONE:
            # Unterminated quote: whatever followed it is the segment content
            self._segment_flush(self.quote is Quote.DOUBLE, keep_empty=True)
        else:
            self._segment_flush(True)
        self._argument_flush()
        return tuple(self._line)

    def _step(self: Self, pos: int) -> int:
        """Consume the character at `pos` and return the next position."""
        char: str = self.raw[pos]

        if self.quote is Quote.NONE:
            if char in WHITESPACE:
                self._segment_flush(True)
                self._argument_flush()
            elif char == Quote.SINGLE.value or char == Quote.DOUBLE.value:
                self._segment_flush(True)
                self.quote = Quote(char)
            else:
                self._text.append(char)
            return pos + 1

        if self.quote is Quote.DOUBLE and char == "\\":
            if self.raw.startswith('"', pos + 1):
                self._text.append('"')
                return pos + 2

        if char == self.quote.value:
            self._segment_flush(self.quote is Quote.DOUBLE, keep_empty=True)
            self.quote = Quote.NONE
        else:
            self._text.append(char)
        return pos + 1

    def _segment_flush(self: Self, expandable: bool, keep_empty: bool = False) -> None:
        """Move accumulated text into the current argument as a Segment.

        Quoted segments are kept even when empty so that `''` still yields an
        (empty) argument.
        """
        if self._text or keep_empty:
            self._arg.append(Segment(text="".join(self._text), expandable=expandable))
        self._text = []

    def _argument_flush(self: Self) -> None:
        if self._arg:
            self._line.append(tuple(self._arg))
        self._arg = []


def line_parse(raw: str) -> Line:
    """Tokenize a raw command line.

    Args:
        raw: Shell-style command line

    Returns:
        Line with one Argument per whitespace-delimited token. Empty or
        all-whitespace input gives an empty Line.
    """
    return LineTokenizer(raw).tokenize()


def line_fromArgs(*args: str) -> Line:
    """Build a Line from pre-split arguments, bypassing the tokenizer.

    Each argument becomes a single expandable Segment spanning the whole
    string.
    """
    return tuple((Segment(text=arg, expandable=True),) for arg in args)


def argument_text(arg: Argument) -> str:
    """Concatenate an argument's raw segment texts without expansion."""
    return "".join(segment.text for segment in arg)
