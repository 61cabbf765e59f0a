"""
JSON value trees with a recursive-descent parser and a canonical printer.

Loads JSON text into an immutable tagged value tree wrapped in a Document,
and prints that tree back as deterministic, indented text that keeps the
integer-versus-double form of every number.
"""

import logging
import math
import os
import string
import time
from dataclasses import dataclass
from io import StringIO
from typing import IO
from typing import Any
from typing import Final

from ._stream import EOF
from ._stream import CharSource
from ._stream import Position
from ._stream import Sink
from ._stream import StreamSource
from ._stream import StringSource
from ._value import INT_MAX
from ._value import INT_MIN
from ._value import Array
from ._value import Bool
from ._value import Document
from ._value import Double
from ._value import Int
from ._value import Null
from ._value import Object
from ._value import String
from ._value import TypeMismatchError
from ._value import Value
from ._value import ValueKind
from ._value import from_python

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

_WHITESPACE: Final = frozenset(" \t\n\r")
_DIGITS: Final = frozenset(string.digits)
_LETTERS: Final = frozenset(string.ascii_letters)

# Escape character after a backslash -> decoded character
_UNESCAPES: Final = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}
# Decoded character -> escape sequence written by the printer
_ESCAPES: Final = {char: f"\\{esc}" for esc, char in _UNESCAPES.items()}

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JTREE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0

    def record_call(self, duration_ns: int) -> None:
        """Records a function call with its duration."""
        self.call_count += 1
        self.total_time_ns += duration_ns


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str) -> None:
            self.func_name = func_name
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class ParsingError(ValueError):
    """
    Raised for any grammar violation while loading JSON text.

    Carries the offending position as a 0-based character offset plus
    1-based line and column numbers. A document that raised this error is
    unusable; no partial result is ever returned.
    """

    def __init__(
        self, msg: str, pos: Position = 0, lineno: int = 1, colno: int = 1
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.pos = pos
        self.lineno = lineno
        self.colno = colno

        super().__init__(f"{msg} at line {lineno}, column {colno}")


@dataclass(frozen=True)
class Location:
    """Snapshot of a source position, used to report errors."""

    pos: Position
    lineno: int
    colno: int


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    allow_trailing_data: when False, anything other than whitespace after
        the root value raises ParsingError.
    max_depth: maximum nesting of arrays and objects, or None for no limit
        beyond the interpreter's recursion limit.
    """

    allow_trailing_data: bool = True
    max_depth: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.allow_trailing_data, bool):
            raise TypeError("allow_trailing_data must be a boolean")
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(
                self.max_depth, int
            ):
                raise TypeError("max_depth must be an integer or None")
            if self.max_depth < 1:
                raise ValueError("max_depth must be positive")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures printing behavior with immutable settings.

    indent: number of spaces added per nesting level.
    """

    indent: int = 2

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise TypeError("indent must be an integer")
        if self.indent < 0:
            raise ValueError("indent must be non-negative")


def _describe(char: str) -> str:
    return "end of input" if char == EOF else repr(char)


class JsonParser:
    """
    Recursive-descent parser producing a Value tree.

    One method per grammar production, dispatched on a single character of
    lookahead. Never backtracks; every malformed input raises ParsingError
    at the point of detection.
    """

    def __init__(self, source: CharSource, config: ParseConfig) -> None:
        self.source = source
        self.config = config
        self.depth = 0

    def location(self) -> Location:
        """Returns the position of the next unread character."""
        return Location(self.source.pos, self.source.lineno, self.source.colno)

    def error(self, msg: str, at: Location | None = None) -> ParsingError:
        where = at or self.location()
        return ParsingError(msg, where.pos, where.lineno, where.colno)

    def skip_whitespace(self) -> None:
        """Skips space, tab, newline and carriage return characters."""
        with ProfileContext("skip_whitespace"):
            while self.source.peek() in _WHITESPACE:
                self.source.get()

    def parse_document(self) -> Document:
        root = self.parse_value()
        if not self.config.allow_trailing_data:
            self.skip_whitespace()
            if self.source.peek() != EOF:
                raise self.error("Extra data")
        return Document(root)

    def parse_value(self) -> Value:  # noqa: PLR0911
        """Parses any JSON value based on the next non-whitespace character."""
        self.skip_whitespace()
        char = self.source.peek()

        if char == "[":
            return self.parse_array()
        elif char == "{":
            return self.parse_object()
        elif char == '"':
            return self.parse_string()
        elif char in _DIGITS or char == "-":
            return self.parse_number()
        elif char in _LETTERS:
            return self.parse_literal()
        elif char == EOF:
            raise self.error("Unexpected end of input")
        else:
            raise self.error(f"Unexpected character: {char!r}")

    def _descend(self) -> None:
        self.depth += 1
        max_depth = self.config.max_depth
        if max_depth is not None and self.depth > max_depth:
            raise self.error("Maximum nesting depth exceeded")

    def _continue_sequence(self, closing: str, context: str) -> bool:
        """
        Consumes the separator after a container element.

        Returns True after a comma, False after the closing bracket.
        """
        self.skip_whitespace()
        char = self.source.peek()
        if char == ",":
            self.source.get()
            return True
        elif char == closing:
            self.source.get()
            return False
        else:
            raise self.error(
                f"Expected ',' or '{closing}' in {context}, "
                f"found {_describe(char)}"
            )

    def parse_array(self) -> Array:
        """Parses a JSON array."""
        with ProfileContext("parse_array"):
            self._descend()
            self.source.get()  # [

            self.skip_whitespace()
            if self.source.peek() == "]":
                self.source.get()
                self.depth -= 1
                return Array()

            items: list[Value] = []
            while True:
                items.append(self.parse_value())
                if not self._continue_sequence("]", "array"):
                    break

            self.depth -= 1
            return Array(items)

    def _parse_object_key(self) -> str:
        """Parses a quoted object key."""
        self.skip_whitespace()
        char = self.source.peek()
        if char != '"':
            raise self.error(
                f"Object key should start with '\"', found {_describe(char)}"
            )
        return self._scan_string()

    def parse_object(self) -> Object:
        """
        Parses a JSON object.

        A key that appears more than once keeps its last value.
        """
        with ProfileContext("parse_object"):
            self._descend()
            self.source.get()  # {

            self.skip_whitespace()
            if self.source.peek() == "}":
                self.source.get()
                self.depth -= 1
                return Object()

            members: dict[str, Value] = {}
            while True:
                key = self._parse_object_key()

                self.skip_whitespace()
                char = self.source.peek()
                if char != ":":
                    raise self.error(
                        "Expected ':' after object key, "
                        f"found {_describe(char)}"
                    )
                self.source.get()

                members[key] = self.parse_value()
                if not self._continue_sequence("}", "object"):
                    break

            self.depth -= 1
            return Object(members)

    def _scan_string(self) -> str:
        """Consumes a quoted string and returns its unescaped content."""
        start = self.location()
        self.source.get()  # opening quote

        chars: list[str] = []
        while True:
            char = self.source.get()
            if char == EOF:
                raise self.error("Unterminated string", start)
            elif char == '"':
                return "".join(chars)
            elif char == "\\":
                escape_at = self.location()
                escaped = self.source.get()
                if escaped == EOF:
                    raise self.error("Unterminated string", start)
                if escaped not in _UNESCAPES:
                    raise self.error(
                        f"Invalid escape sequence: \\{escaped}", escape_at
                    )
                chars.append(_UNESCAPES[escaped])
            else:
                chars.append(char)

    def parse_string(self) -> String:
        """Parses a JSON string."""
        with ProfileContext("parse_string"):
            return String(self._scan_string())

    def _scan_digits(self, lexeme: list[str]) -> None:
        while self.source.peek() in _DIGITS:
            lexeme.append(self.source.get())

    def _scan_decimal_part(self, lexeme: list[str]) -> bool:
        """Scans a fractional part if present; returns whether one was seen."""
        if self.source.peek() != ".":
            return False
        lexeme.append(self.source.get())
        self._scan_digits(lexeme)
        return True

    def _scan_exponent_part(self, lexeme: list[str]) -> bool:
        """Scans an exponent if present; returns whether one was seen."""
        if self.source.peek() not in ("e", "E"):
            return False
        lexeme.append(self.source.get())
        if self.source.peek() in ("+", "-"):
            lexeme.append(self.source.get())
        self._scan_digits(lexeme)
        return True

    def parse_number(self) -> Int | Double:
        """
        Parses a JSON number.

        The lexeme is gathered greedily and converted once: a fraction or an
        exponent makes it a Double, otherwise it is an Int.
        """
        with ProfileContext("parse_number"):
            start = self.location()
            lexeme: list[str] = []

            if self.source.peek() == "-":
                lexeme.append(self.source.get())
            self._scan_digits(lexeme)
            is_double = self._scan_decimal_part(lexeme)
            is_double = self._scan_exponent_part(lexeme) or is_double

            return self._convert_number("".join(lexeme), is_double, start)

    def _convert_number(
        self, text: str, is_double: bool, start: Location
    ) -> Int | Double:
        try:
            number = float(text) if is_double else int(text)
        except ValueError as e:
            raise self.error(f"Invalid number: {text}", start) from e

        if is_double:
            if not math.isfinite(number):
                raise self.error(f"Number out of range: {text}", start)
            return Double(number)

        if not INT_MIN <= number <= INT_MAX:
            raise self.error(f"Integer out of range: {text}", start)
        return Int(int(number))

    def parse_literal(self) -> Value:
        """Parses the literals true, false and null."""
        with ProfileContext("parse_literal"):
            start = self.location()
            letters: list[str] = []
            while self.source.peek() in _LETTERS:
                letters.append(self.source.get())

            token = "".join(letters)
            if token == "true":
                return Bool(True)
            elif token == "false":
                return Bool(False)
            elif token == "null":
                return Null()
            else:
                raise self.error(f"Unknown token: {token}", start)


def _format_double(number: float) -> str:
    """
    Formats a double so it never reads back as an integer.

    ``repr`` gives the shortest round-trip form; whole values keep a
    trailing ``.0`` up to 1e16 and switch to exponent form beyond it.
    """
    return repr(number)


class JsonPrinter:
    """
    Writes a Value tree to a sink as deterministic, indented text.

    Containers print one element per line, indented by ``config.indent``
    spaces per level; empty containers print as ``[]`` and ``{}``.
    """

    def __init__(self, sink: Sink, config: EncodeConfig) -> None:
        self.sink = sink
        self.config = config

    def print_value(self, value: Value, indent: int = 0) -> None:
        match value:
            case Null():
                self.sink.write("null")
            case Bool(flag):
                self.sink.write("true" if flag else "false")
            case Int(number):
                self.sink.write(str(number))
            case Double(number):
                self.sink.write(_format_double(number))
            case String(text):
                self.print_string(text)
            case Array(items):
                self._print_array(items, indent)
            case Object(entries):
                self._print_object(entries, indent)

    def print_string(self, text: str) -> None:
        """Writes a quoted string, escaping only the recognized escapes."""
        result = ['"']
        for char in text:
            result.append(_ESCAPES.get(char, char))
        result.append('"')
        self.sink.write("".join(result))

    def _print_array(self, items: tuple[Value, ...], indent: int) -> None:
        if not items:
            self.sink.write("[]")
            return

        inner = indent + self.config.indent
        self.sink.write("[")
        for i, item in enumerate(items):
            if i:
                self.sink.write(",")
            self.sink.write("\n" + " " * inner)
            self.print_value(item, inner)
        self.sink.write("\n" + " " * indent + "]")

    def _print_object(
        self, entries: tuple[tuple[str, Value], ...], indent: int
    ) -> None:
        if not entries:
            self.sink.write("{}")
            return

        inner = indent + self.config.indent
        self.sink.write("{")
        for i, (key, value) in enumerate(entries):
            if i:
                self.sink.write(",")
            self.sink.write("\n" + " " * inner)
            self.print_string(key)
            self.sink.write(": ")
            self.print_value(value, inner)
        self.sink.write("\n" + " " * indent + "}")


def _load_from(source: CharSource, config: ParseConfig) -> Document:
    parser = JsonParser(source, config)
    try:
        document = parser.parse_document()
    except RecursionError as e:
        err = parser.error("Maximum nesting depth exceeded")
        logger.debug("Failed to load document: %s", err)
        raise err from e
    except ParsingError as e:
        logger.debug("Failed to load document: %s", e)
        raise

    logger.debug("Loaded document with %s root", document.root.kind.value)
    return document


def loads(s: str, **kwargs: Any) -> Document:
    """
    Parses JSON text into a Document.

    Keyword arguments are ParseConfig fields. Raises ParsingError on any
    grammar violation.
    """
    if not isinstance(s, str):
        msg = f"the JSON object must be str, not {type(s).__name__}"
        raise TypeError(msg)

    config = ParseConfig(**kwargs)
    return _load_from(StringSource(s), config)


def load(fp: IO[str] | CharSource, **kwargs: Any) -> Document:
    """
    Parses JSON from a character source or text stream into a Document.

    Reading stops just past the root value; the stream is not closed.
    """
    config = ParseConfig(**kwargs)

    if isinstance(fp, CharSource):
        source: CharSource = fp
    elif hasattr(fp, "read"):
        source = StreamSource(fp)
    else:
        raise TypeError("fp must have a read() method")

    return _load_from(source, config)


def _as_document(document: Document | Value) -> Document:
    if isinstance(document, Document):
        return document
    if isinstance(document, Value):
        return Document(document)
    msg = f"Object of type {type(document).__name__} is not a Document"
    raise TypeError(msg)


def dump(document: Document | Value, fp: Sink, **kwargs: Any) -> None:
    """
    Prints a Document's canonical text form to a writable sink.

    Keyword arguments are EncodeConfig fields.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    config = EncodeConfig(**kwargs)
    root = _as_document(document).root
    JsonPrinter(fp, config).print_value(root)
    logger.debug("Dumped document with %s root", root.kind.value)


def dumps(document: Document | Value, **kwargs: Any) -> str:
    """Returns a Document's canonical text form as a string."""
    sio = StringIO()
    dump(document, sio, **kwargs)
    return sio.getvalue()


__all__ = [
    "EOF",
    "Array",
    "Bool",
    "CharSource",
    "Document",
    "Double",
    "EncodeConfig",
    "HotPathStats",
    "Int",
    "JsonParser",
    "JsonPrinter",
    "Location",
    "Null",
    "Object",
    "ParseConfig",
    "ParsingError",
    "Sink",
    "StreamSource",
    "String",
    "StringSource",
    "TypeMismatchError",
    "Value",
    "ValueKind",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "from_python",
    "get_hot_path_stats",
    "load",
    "loads",
]
