"""
Pytest configuration and shared fixtures for jtree tests.

Provides immutable test data fixtures shared by the parsing and printing
test modules.
"""

from dataclasses import dataclass
from typing import Any

import pytest

import jtree


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON texts that must fail to load.

    Adapted from the json.org JSON_checker suite, keeping the documents
    whose violation lies inside the root value.
    """
    fail_docs = [
        # https://json.org/JSON_checker/test/fail2.json
        '["Unclosed array"',
        # https://json.org/JSON_checker/test/fail3.json
        '{unquoted_key: "keys must be quoted"}',
        # https://json.org/JSON_checker/test/fail4.json
        '["extra comma",]',
        # https://json.org/JSON_checker/test/fail5.json
        '["double extra comma",,]',
        # https://json.org/JSON_checker/test/fail6.json
        '[   , "<-- missing value"]',
        # https://json.org/JSON_checker/test/fail9.json
        '{"Extra comma": true,}',
        # https://json.org/JSON_checker/test/fail11.json
        '{"Illegal expression": 1 + 2}',
        # https://json.org/JSON_checker/test/fail12.json
        '{"Illegal invocation": alert()}',
        # https://json.org/JSON_checker/test/fail14.json
        '{"Numbers cannot be hex": 0x14}',
        # https://json.org/JSON_checker/test/fail15.json
        '["Illegal backslash escape: \\x15"]',
        # https://json.org/JSON_checker/test/fail16.json
        "[\\naked]",
        # https://json.org/JSON_checker/test/fail17.json
        '["Illegal backslash escape: \\017"]',
        # https://json.org/JSON_checker/test/fail19.json
        '{"Missing colon" null}',
        # https://json.org/JSON_checker/test/fail20.json
        '{"Double colon":: null}',
        # https://json.org/JSON_checker/test/fail21.json
        '{"Comma instead of colon", null}',
        # https://json.org/JSON_checker/test/fail22.json
        '["Colon instead of comma": false]',
        # https://json.org/JSON_checker/test/fail23.json
        '["Bad value", truth]',
        # https://json.org/JSON_checker/test/fail24.json
        "['single quote']",
        # https://json.org/JSON_checker/test/fail26.json
        '["tab\\   character\\   in\\  string\\  "]',
        # https://json.org/JSON_checker/test/fail28.json
        '["line\\\nbreak"]',
        # https://json.org/JSON_checker/test/fail29.json
        "[0e]",
        # https://json.org/JSON_checker/test/fail30.json
        "[0e+]",
        # https://json.org/JSON_checker/test/fail31.json
        "[0e+-1]",
        # https://json.org/JSON_checker/test/fail32.json
        '{"Comma instead if closing brace": true,',
        # https://json.org/JSON_checker/test/fail33.json
        '["mismatch"}',
    ]

    return [
        JsonTestCase(description=f"fail case {idx}", input_data=doc, should_fail=True)
        for idx, doc in enumerate(fail_docs)
    ]


@pytest.fixture
def trailing_data_cases() -> list[JsonTestCase]:
    """
    Provides texts whose root value is valid but is followed by extra data.

    These load by default and fail when trailing data is disallowed.
    """
    return [
        # https://json.org/JSON_checker/test/fail7.json
        JsonTestCase("fail7.json", '["Comma after the close"],'),
        # https://json.org/JSON_checker/test/fail8.json
        JsonTestCase("fail8.json", '["Extra close"]]'),
        # https://json.org/JSON_checker/test/fail10.json
        JsonTestCase(
            "fail10.json",
            '{"Extra value after close": true} "misplaced quoted value"',
        ),
        JsonTestCase("number then comma", '42,"spam"'),
    ]


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON texts that must load successfully.

    The escapes are limited to the ones this grammar recognizes.
    """
    return [
        JsonTestCase(
            description="pass1.json - complex nested structure",
            input_data="""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\n\\r\\t",
        "slash": "/ & /",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "https://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}"
    }
]""",
        ),
        JsonTestCase(
            description="pass2.json - deep nesting",
            input_data='[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        ),
        JsonTestCase(
            description="pass3.json - simple object",
            input_data='{"JSON Test Pattern pass3": {"The outermost value": "must be an object or array.", "In this test": "It is an object."}}',
        ),
        JsonTestCase(
            description="string payload",
            input_data='"A JSON payload should be an object or array, not a string."',
        ),
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic value test cases for fundamental parsing.

    Covers every value kind and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", False, jtree.Null()),
        JsonTestCase("true boolean", "true", False, jtree.Bool(True)),
        JsonTestCase("false boolean", "false", False, jtree.Bool(False)),
        JsonTestCase("integer", "42", False, jtree.Int(42)),
        JsonTestCase("negative integer", "-17", False, jtree.Int(-17)),
        JsonTestCase("double", "3.14", False, jtree.Double(3.14)),
        JsonTestCase("whole double", "3.0", False, jtree.Double(3.0)),
        JsonTestCase("exponent double", "1e3", False, jtree.Double(1000.0)),
        JsonTestCase("empty string", '""', False, jtree.String("")),
        JsonTestCase("simple string", '"hello"', False, jtree.String("hello")),
        JsonTestCase("empty array", "[]", False, jtree.Array()),
        JsonTestCase("empty object", "{}", False, jtree.Object()),
        JsonTestCase(
            "simple array",
            "[1, 2, 3]",
            False,
            jtree.Array([jtree.Int(1), jtree.Int(2), jtree.Int(3)]),
        ),
        JsonTestCase(
            "simple object",
            '{"key": "value"}',
            False,
            jtree.Object({"key": jtree.String("value")}),
        ),
        JsonTestCase("unknown literal", "truee", True),
        JsonTestCase("lone minus", "-", True),
    ]
