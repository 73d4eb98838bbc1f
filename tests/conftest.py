"""
Pytest configuration and shared fixtures for jnorm tests.

Provides immutable normalization cases shared by the scanner, error and
property tests.
"""

from dataclasses import dataclass

import pytest

import jnorm


@dataclass(frozen=True)
class NormalizeTestCase:
    """
    Immutable container for one normalization case.

    Holds the input document and either the expected canonical output or
    the exception type the normalization must raise.
    """

    description: str
    input_data: bytes
    expected_output: bytes | None = None
    expected_error: type[Exception] | None = None


@pytest.fixture
def canonical_documents() -> list[bytes]:
    """
    Provides documents that are already in canonical form.
    """
    return [
        b"null",
        b"true",
        b"false",
        b"0",
        b"345.7",
        b'"abc"',
        b'"a\\"bc"',
        b"[1,3,2]",
        b'{"a":1}',
        b'{"a":[{"a":1,"b":"c"}],"x":1}',
        b'{"a":3,"b":2,"c":1}',
        b'[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
        '{"caf\u00e9":"\u65e5\u672c","emoji":"\U0001f600"}'.encode("utf-8"),
    ]


@pytest.fixture
def normalize_cases() -> list[NormalizeTestCase]:
    """
    Provides documents paired with their expected canonical form.

    Covers key sorting, whitespace elimination, nesting and verbatim
    scalar text.
    """
    return [
        NormalizeTestCase(
            "key ordering",
            b'{"c":1,"a":3,"b":2}',
            b'{"a":3,"b":2,"c":1}',
        ),
        NormalizeTestCase(
            "whitespace elimination",
            b'{"a": 1, "b": "c" }',
            b'{"a":1,"b":"c"}',
        ),
        NormalizeTestCase(
            "nested objects sorted independently",
            b'{"x": 1, "a": [{"b": "c", "a": 1}] }',
            b'{"a":[{"a":1,"b":"c"}],"x":1}',
        ),
        NormalizeTestCase(
            "array order preserved",
            b"[1, 2, 3]",
            b"[1,2,3]",
        ),
        NormalizeTestCase(
            "array elements are not sorted",
            b'[ "b", "a", 3, 1 ]',
            b'["b","a",3,1]',
        ),
        NormalizeTestCase(
            "nested arrays with line breaks",
            b"[1, [2, \n 3]]",
            b"[1,[2,3]]",
        ),
        NormalizeTestCase(
            "object inside object",
            b'{"a": 1, "x": {"b": ["c"]} }',
            b'{"a":1,"x":{"b":["c"]}}',
        ),
        NormalizeTestCase(
            "whitespace around colon and separators",
            b'{ "b"\t:\r\n"c" ,\n "a" : 1 }',
            b'{"a":1,"b":"c"}',
        ),
        NormalizeTestCase(
            "escaped quote inside string",
            b'"a\\"bc"',
            b'"a\\"bc"',
        ),
        NormalizeTestCase(
            "escapes copied without interpretation",
            b'["\\u0041", "\\n", "\\\\"]',
            b'["\\u0041","\\n","\\\\"]',
        ),
        NormalizeTestCase(
            "whitespace inside strings kept",
            b'{"k": " spaced  out "}',
            b'{"k":" spaced  out "}',
        ),
        NormalizeTestCase(
            "names compare as raw bytes",
            b'{"b": 1, "a": 2, "A": 3}',
            b'{"A":3,"a":2,"b":1}',
        ),
        NormalizeTestCase(
            "closing quote takes part in name ordering",
            b'{"a": 1, "a b": 2}',
            b'{"a b":2,"a":1}',
        ),
        NormalizeTestCase(
            "numbers kept verbatim",
            b"[123, 123.456, 007, 1.50]",
            b"[123,123.456,007,1.50]",
        ),
        NormalizeTestCase(
            "literals",
            b'{"t": true, "f": false, "n": null}',
            b'{"f":false,"n":null,"t":true}',
        ),
        NormalizeTestCase(
            "multibyte text kept verbatim",
            '{"\u00fc": "\u65e5\u672c", "a": "\u20ac"}'.encode("utf-8"),
            '{"a":"\u20ac","\u00fc":"\u65e5\u672c"}'.encode("utf-8"),
        ),
        NormalizeTestCase(
            "trailing content ignored",
            b'{"a": 1} {"b": 2}',
            b'{"a":1}',
        ),
    ]


@pytest.fixture
def malformed_documents() -> list[NormalizeTestCase]:
    """
    Provides documents that must fail with a syntax error.
    """
    docs = [
        ("double comma", b"[1,,]"),
        ("mismatched close", b"[1}"),
        ("missing value", b"[   , 1]"),
        ("trailing comma in array", b"[1,]"),
        ("trailing comma in object", b'{"a": true,}'),
        ("missing colon", b'{"Missing colon" null}'),
        ("double colon", b'{"Double colon":: null}'),
        ("comma instead of colon", b'{"Comma instead of colon", null}'),
        ("name closed by brace", b'{"xyz"}'),
        ("name closed by bracket", b'{"xyz"]'),
        ("colon instead of comma", b'["Colon instead of comma": false]'),
        ("unquoted key", b'{unquoted_key: "keys must be quoted"}'),
        ("single quotes", b"['single quote']"),
        ("bad literal", b'["Bad value", truth]'),
        ("bad null", b"nul1"),
        ("second decimal point", b"1.2.3"),
        ("leading decimal point", b".5"),
        ("negative number", b"-42"),
        ("exponent", b"[1e5]"),
        ("hex number", b'{"Numbers cannot be hex": 0x14}'),
        ("expression", b'{"Illegal expression": 1 + 2}'),
        ("newline after number", b"[1\n]"),
        ("leading whitespace", b" [1]"),
        ("empty array", b"[]"),
        ("empty object", b"{}"),
        ("missing comma", b'["a" "b"]'),
        ("naked word", b"[\\naked]"),
    ]
    return [
        NormalizeTestCase(
            description, doc, expected_error=jnorm.JSONSyntaxError
        )
        for description, doc in docs
    ]


@pytest.fixture
def truncated_documents() -> list[NormalizeTestCase]:
    """
    Provides documents that stop before their last token is complete.
    """
    docs = [
        ("empty input", b""),
        ("open array", b"["),
        ("array without close", b"[1"),
        ("array after comma", b"[1,"),
        ("array after filler", b"[1 "),
        ("open object", b"{"),
        ("name without colon", b'{"a"'),
        ("name without value", b'{"a":'),
        ("object without close", b'{"a":1'),
        ("object after comma", b'{"a":1,'),
        ("unterminated string", b'"abc'),
        ("unterminated escape", b'"abc\\"'),
        ("partial true", b"t"),
        ("partial false", b"fal"),
        ("partial null", b"nu"),
        ("unclosed nested array", b'["Unclosed array"'),
    ]
    return [
        NormalizeTestCase(
            description, doc, expected_error=jnorm.UnexpectedEndOfInput
        )
        for description, doc in docs
    ]
