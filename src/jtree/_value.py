"""
Immutable tagged value tree for JSON documents.

Each JSON kind is its own frozen dataclass deriving from ``Value``. The set of
variants is closed: null, boolean, 32-bit integer, double, string, array and
object. Integers and doubles are distinct variants so the textual
integer-versus-float form of a number survives a load/dump cycle.
"""

import math
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any
from typing import ClassVar
from typing import Final
from typing import TypeAlias

INT_MIN: Final = -(2**31)
INT_MAX: Final = 2**31 - 1

# Native Python projection of a value tree
PythonValue: TypeAlias = (
    None
    | bool
    | int
    | float
    | str
    | list["PythonValue"]
    | dict[str, "PythonValue"]
)


class ValueKind(Enum):
    """Tag identifying the active variant of a Value."""

    NULL = "null"
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class TypeMismatchError(TypeError):
    """
    Raised when a kind-checked accessor is called on the wrong variant.

    Always signals a programming error in the caller, never bad input data.
    """


class Value:
    """
    Base of the closed JSON value union.

    Provides O(1) kind predicates and kind-checked accessors shared by all
    variants. Instances are immutable once constructed.
    """

    __slots__ = ()

    kind: ClassVar[ValueKind]

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def is_bool(self) -> bool:
        return self.kind is ValueKind.BOOL

    def is_int(self) -> bool:
        return self.kind is ValueKind.INT

    def is_double(self) -> bool:
        """True for both doubles and integers, which widen losslessly."""
        return self.kind is ValueKind.DOUBLE or self.kind is ValueKind.INT

    def is_pure_double(self) -> bool:
        return self.kind is ValueKind.DOUBLE

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def as_bool(self) -> bool:
        match self:
            case Bool(flag):
                return flag
        raise TypeMismatchError("Not a bool")

    def as_int(self) -> int:
        match self:
            case Int(number):
                return number
        raise TypeMismatchError("Not an int")

    def as_double(self) -> float:
        """Returns the payload as a float, widening integers."""
        match self:
            case Double(number):
                return number
            case Int(number):
                return float(number)
        raise TypeMismatchError("Not a double")

    def as_string(self) -> str:
        match self:
            case String(text):
                return text
        raise TypeMismatchError("Not a string")

    def as_array(self) -> tuple["Value", ...]:
        match self:
            case Array(items):
                return items
        raise TypeMismatchError("Not an array")

    def as_object(self) -> Mapping[str, "Value"]:
        """Returns a read-only, key-ordered view of the object's members."""
        match self:
            case Object():
                return MappingProxyType(self._index)
        raise TypeMismatchError("Not an object")

    def to_python(self) -> PythonValue:
        """
        Projects the value tree onto native Python data.

        The integer/double distinction collapses into ``int``/``float``;
        objects become dicts in key order.
        """
        match self:
            case Null():
                return None
            case Bool(flag):
                return flag
            case Int(number) | Double(number):
                return number
            case String(text):
                return text
            case Array(items):
                return [item.to_python() for item in items]
            case Object(entries):
                return {key: value.to_python() for key, value in entries}
        raise AssertionError(f"unhandled value kind: {self.kind}")


@dataclass(frozen=True, slots=True)
class Null(Value):
    kind: ClassVar[ValueKind] = ValueKind.NULL


@dataclass(frozen=True, slots=True)
class Bool(Value):
    value: bool

    kind: ClassVar[ValueKind] = ValueKind.BOOL

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            msg = f"Bool requires a bool, not {type(self.value).__name__}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Int(Value):
    """A signed 32-bit integer."""

    value: int

    kind: ClassVar[ValueKind] = ValueKind.INT

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"Int requires an int, not {type(self.value).__name__}"
            raise TypeError(msg)
        if not INT_MIN <= self.value <= INT_MAX:
            msg = f"Int value {self.value} is outside the 32-bit range"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Double(Value):
    """A finite 64-bit float. Integers passed in are widened."""

    value: float

    kind: ClassVar[ValueKind] = ValueKind.DOUBLE

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(
            self.value, int | float
        ):
            msg = f"Double requires a float, not {type(self.value).__name__}"
            raise TypeError(msg)
        if isinstance(self.value, int):
            try:
                widened = float(self.value)
            except OverflowError as e:
                msg = "Out of range float values are not JSON compliant"
                raise ValueError(msg) from e
            object.__setattr__(self, "value", widened)
        if not math.isfinite(self.value):
            msg = "Out of range float values are not JSON compliant"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class String(Value):
    value: str

    kind: ClassVar[ValueKind] = ValueKind.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            msg = f"String requires a str, not {type(self.value).__name__}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True, eq=False)
class Array(Value):
    """Ordered sequence of values. Accepts any iterable of Values."""

    items: tuple[Value, ...] = ()

    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Value):
                msg = f"Array items must be Values, not {type(item).__name__}"
                raise TypeError(msg)
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _trees_equal(self, other)

    def __hash__(self) -> int:
        return hash((self.kind, self.items))


@dataclass(frozen=True, slots=True, eq=False)
class Object(Value):
    """
    Mapping from string keys to values, iterated in key order.

    Accepts a mapping or an iterable of ``(key, value)`` pairs. When a key
    repeats among the pairs, the last occurrence wins. Entries are stored
    sorted by key, so two objects with the same members compare equal no
    matter the order they were built in.
    """

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(
        init=False, repr=False, compare=False, hash=False
    )

    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    def __post_init__(self) -> None:
        pairs: Iterable[tuple[str, Value]]
        if isinstance(self.entries, Mapping):
            pairs = self.entries.items()
        else:
            pairs = self.entries

        members: dict[str, Value] = {}
        for key, value in pairs:
            if not isinstance(key, str):
                msg = f"keys must be strings, not {type(key).__name__}"
                raise TypeError(msg)
            if not isinstance(value, Value):
                kind = type(value).__name__
                msg = f"Object values must be Values, not {kind}"
                raise TypeError(msg)
            members[key] = value

        ordered = dict(sorted(members.items()))
        object.__setattr__(self, "entries", tuple(ordered.items()))
        object.__setattr__(self, "_index", ordered)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __getitem__(self, key: str) -> Value:
        return self._index[key]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _trees_equal(self, other)

    def __hash__(self) -> int:
        return hash((self.kind, self.entries))


def _trees_equal(left: Value, right: Value) -> bool:
    """
    Compares two value trees node by node with an explicit stack.

    Trees nest as deep as the parser accepts, deeper than the generated
    dataclass equality can recurse.
    """
    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if type(a) is not type(b):
            return False
        match a, b:
            case Array(a_items), Array(b_items):
                if len(a_items) != len(b_items):
                    return False
                pending.extend(zip(a_items, b_items, strict=True))
            case Object(a_entries), Object(b_entries):
                if len(a_entries) != len(b_entries):
                    return False
                for (a_key, a_value), (b_key, b_value) in zip(
                    a_entries, b_entries, strict=True
                ):
                    if a_key != b_key:
                        return False
                    pending.append((a_value, b_value))
            case _:
                if a != b:
                    return False
    return True


@dataclass(frozen=True, slots=True)
class Document:
    """
    A JSON text: exactly one root value.

    The unit passed between ``load`` and ``dump``.
    """

    root: Value

    def __post_init__(self) -> None:
        if not isinstance(self.root, Value):
            kind = type(self.root).__name__
            msg = f"Document root must be a Value, not {kind}"
            raise TypeError(msg)

    @classmethod
    def from_python(cls, obj: Any) -> "Document":
        return cls(from_python(obj))


def from_python(obj: Any) -> Value:  # noqa: PLR0911
    """
    Builds a value tree from native Python data.

    Lists and tuples become arrays, mappings become objects. Values already
    in the tree form are returned unchanged.
    """
    match obj:
        case Value():
            return obj
        case None:
            return Null()
        case bool():
            return Bool(obj)
        case int():
            return Int(obj)
        case float():
            return Double(obj)
        case str():
            return String(obj)
        case list() | tuple():
            return Array(from_python(item) for item in obj)
        case Mapping():
            return Object(
                (key, from_python(value)) for key, value in obj.items()
            )
    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)
