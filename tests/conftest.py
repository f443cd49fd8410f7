"""
Pytest configuration and shared fixtures for pjzon tests.

Provides immutable test data fixtures for complete, truncated and invalid
documents so each test module can iterate over the same cases.
"""

from dataclasses import dataclass
from typing import Any

import pytest


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
    skip_reason: str = ""


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides complete documents the standard decoder accepts.

    These take the fast path and must come back exactly as json.loads
    returns them.
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
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "array":[  ],
        "object":{  },
        "comment": "// /* <!-- --",
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
            description="float keeps its type",
            input_data='{"value": 1.0}',
        ),
        JsonTestCase(
            description="trailing whitespace",
            input_data='{"with": "space"} ',
        ),
    ]


@pytest.fixture
def truncated_documents() -> list[JsonTestCase]:
    """
    Provides documents cut off mid-structure with their expected values.

    Expected values assume the default strict mode.
    """
    return [
        JsonTestCase(
            "missing closing brace",
            '{"name": "John", "age": 30',
            expected_output={"name": "John", "age": 30},
        ),
        JsonTestCase(
            "missing value after colon",
            '{"name": "John", "age":',
            expected_output={"name": "John", "age": None},
        ),
        JsonTestCase(
            "key without colon",
            '{"name": "John", "age"',
            expected_output={"name": "John", "age": None},
        ),
        JsonTestCase(
            "incomplete key",
            '{"incomplete_key',
            expected_output={"incomplete_key": None},
        ),
        JsonTestCase("opening brace only", "{", expected_output={}),
        JsonTestCase("opening bracket only", "[", expected_output=[]),
        JsonTestCase("array without closer", "[1, 2, 3", expected_output=[1, 2, 3]),
        JsonTestCase(
            "array with trailing comma", "[1, 2, 3,", expected_output=[1, 2, 3]
        ),
        JsonTestCase(
            "object with trailing comma",
            '{"key": "value",',
            expected_output={"key": "value"},
        ),
        JsonTestCase(
            "trailing decimal point", '{"value": 42.', expected_output={"value": 42}
        ),
        JsonTestCase(
            "incomplete true", '{"active": t', expected_output={"active": True}
        ),
        JsonTestCase(
            "incomplete false", '{"active": fa', expected_output={"active": False}
        ),
        JsonTestCase("incomplete null", '{"data": nu', expected_output={"data": None}),
        JsonTestCase(
            "incomplete string",
            '{"response": "Hello, how can I',
            expected_output={"response": "Hello, how can I"},
        ),
        JsonTestCase(
            "deeply nested",
            '{"a": {"b": {"c": [1, 2, {"d": "test"',
            expected_output={"a": {"b": {"c": [1, 2, {"d": "test"}]}}},
        ),
        JsonTestCase(
            "array of objects with missing value",
            '[{"a": 1}, {"b":',
            expected_output=[{"a": 1}, {"b": None}],
        ),
        JsonTestCase(
            "alternating nesting",
            '{"a": [{"b": [{"c": {"d": [1, 2',
            expected_output={"a": [{"b": [{"c": {"d": [1, 2]}}]}]},
        ),
        JsonTestCase(
            "whitespace between tokens",
            '{\n\t"key": "value",\n\t"num": 42\n',
            expected_output={"key": "value", "num": 42},
        ),
    ]


@pytest.fixture
def hard_failures() -> list[JsonTestCase]:
    """
    Provides inputs that are invalid for reasons other than truncation.

    These must raise JSONDecodeError in every mode.
    """
    fail_docs = [
        ("unknown leading token", 'invalid{"key": "value"}'),
        ("missing colon", '{"key" "value"}'),
        ("unquoted key", '{"valid": "data", invalid_key: "value"'),
        ("bare word in array", '{"data": [1, 2, invalid, 3], "status": "ok"'),
        ("single quotes", "['single quote'"),
        ("comment", "// comment\n{}"),
        ("double comma", "[1,, 2"),
        ("colon in array", '["a": 1'),
        ("leading comma", "[,"),
        ("capital null", "[Null"),
        ("whitespace only", "   "),
    ]
    return [
        JsonTestCase(description, doc, should_fail=True)
        for description, doc in fail_docs
    ]
