"""Character sources and sinks consumed by the parser and printer."""

from typing import IO
from typing import Final
from typing import Protocol
from typing import TypeAlias
from typing import runtime_checkable

# Returned by peek()/get() once the source is exhausted; never a character
EOF: Final = ""

Position: TypeAlias = int


@runtime_checkable
class CharSource(Protocol):
    """
    Sequential character source with one character of lookahead.

    ``pos`` is the 0-based offset of the next character; ``lineno`` and
    ``colno`` are its 1-based line and column.
    """

    pos: Position
    lineno: int
    colno: int

    def peek(self) -> str:
        """Returns the next character without consuming it, or EOF."""
        ...

    def get(self) -> str:
        """Consumes and returns the next character, or EOF."""
        ...


class Sink(Protocol):
    """Write-only text sink, e.g. ``io.StringIO`` or an open text file."""

    def write(self, s: str, /) -> object: ...


class _PositionTracker:
    """Tracks offset, line and column as characters are consumed."""

    def __init__(self) -> None:
        self.pos: Position = 0
        self.lineno = 1
        self.colno = 1

    def _advance_position(self, char: str) -> None:
        self.pos += 1
        if char == "\n":
            self.lineno += 1
            self.colno = 1
        else:
            self.colno += 1


class StringSource(_PositionTracker):
    """Reads characters from an in-memory string."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text
        self.length = len(text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < self.length else EOF

    def get(self) -> str:
        char = self.peek()
        if char:
            self._advance_position(char)
        return char


class StreamSource(_PositionTracker):
    """
    Reads characters one at a time from a text stream.

    Only a single character is buffered, so after parsing the stream is
    left positioned just past the last character the parser inspected.
    """

    def __init__(self, fp: IO[str]) -> None:
        super().__init__()
        self.fp = fp
        self._lookahead: str | None = None

    def peek(self) -> str:
        if self._lookahead is None:
            char = self.fp.read(1)
            if not isinstance(char, str):
                msg = (
                    "the JSON object must be str, not "
                    f"{type(char).__name__}"
                )
                raise TypeError(msg)
            self._lookahead = char
        return self._lookahead

    def get(self) -> str:
        char = self.peek()
        if char:
            self._lookahead = None
            self._advance_position(char)
        return char
