"""
Test data generators for jtree benchmarks.

Every generator returns JSON text that jtree accepts: integers fit in 32
bits and strings only need the escapes jtree recognizes.
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

_ESCAPABLE = ['"', "\\", "\n", "\r", "\t"]
_ESCAPE_PROBABILITY = 0.3


def _word(length: int) -> str:
    return "".join(random.choices(string.ascii_letters, k=length))


def _scalar() -> Any:
    """Picks a random scalar of any kind, or a small record."""
    return random.choice(
        [
            lambda: None,
            lambda: random.choice([True, False]),
            lambda: random.randint(-1000, 1000),
            lambda: round(random.uniform(-100.0, 100.0), 3),
            lambda: _word(random.randint(5, 30)),
            lambda: {"label": _word(10), "weight": random.random()},
        ]
    )()


def _escaped_text(length: int = 50) -> str:
    return "".join(
        random.choice(_ESCAPABLE)
        if random.random() < _ESCAPE_PROBABILITY
        else random.choice(string.ascii_letters + " ")
        for _ in range(length)
    )


def _records() -> Any:
    """A catalog object with many flat records (> 10KB)."""
    return {
        "catalog": _word(12),
        "items": [
            {
                "sku": f"{_word(3).upper()}-{n:05d}",
                "title": _word(random.randint(8, 24)),
                "price": round(random.uniform(0.5, 500.0), 2),
                "stock": random.randint(0, 10_000),
                "tags": [_word(5) for _ in range(random.randint(0, 4))],
                "discontinued": random.random() < 0.1,
                "supplier": None,
            }
            for n in range(120)
        ],
    }


def _mixed_array() -> Any:
    return [_scalar() for _ in range(200)]


def _tree(depth: int = 7) -> Any:
    """A branching tree of objects and arrays."""
    if depth == 0:
        return _word(8)
    return {
        "depth": depth,
        "children": [_tree(depth - 1) for _ in range(3)],
    }


def _string_heavy() -> Any:
    return {
        "lines": [_escaped_text() for _ in range(100)],
        "paths": {
            f"file_{n}": f"C:\\data\\{_word(6)}\\{n}.txt" for n in range(20)
        },
    }


def _number_heavy() -> Any:
    """Integers across the 32-bit range and doubles, some of them whole."""
    return {
        "ints": [random.randint(-(2**31), 2**31 - 1) for _ in range(300)],
        "doubles": [random.uniform(-1e6, 1e6) for _ in range(300)],
        "whole": [float(random.randint(-1000, 1000)) for _ in range(100)],
        "scaled": [random.uniform(1, 10) * 10.0**e for e in range(-20, 21)],
    }


_GENERATORS: dict[str, Callable[[], Any]] = {
    "records": _records,
    "mixed_array": _mixed_array,
    "nested_structure": _tree,
    "string_heavy": _string_heavy,
    "number_heavy": _number_heavy,
}

DATA_TYPES = list(_GENERATORS)


def generate_test_data(data_type: str) -> str:
    """Generates JSON text of the given data type."""
    if data_type not in _GENERATORS:
        raise ValueError(f"Unknown data type: {data_type}")
    return json.dumps(_GENERATORS[data_type]())
