# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

from typing import List, Optional

import pytest

from yamltags import (
    Directive,
    InvalidTagError,
    UnsupportedDefaultTypeError,
    parse_default,
    parse_tags,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", []),
        (None, []),
        ("required", [Directive("required")]),
        ("default=foo", [Directive("default", "foo")]),
        ("default=", [Directive("default", "")]),
        ("oneOf=set1", [Directive("oneOf", "set1")]),
        ("required,oneOf=set1", [Directive("required"), Directive("oneOf", "set1")]),
        (" required , oneOf = set1 ,", [Directive("required"), Directive("oneOf", "set1")]),
    ],
)
def test_parse_tags(text, expected):
    assert parse_tags(text) == expected


@pytest.mark.parametrize(
    "text,fragment",
    [
        ("mandatory", "unknown directive"),
        ("required=true", "does not take a value"),
        ("default", "needs a value"),
        ("oneOf", "needs a group name"),
        ("oneOf=", "needs a group name"),
        ("required,Default=3", "unknown directive"),
    ],
)
def test_parse_tags_rejects_malformed_directives(text, fragment):
    with pytest.raises(InvalidTagError) as exc_info:
        parse_tags(text)

    assert fragment in str(exc_info.value)
    assert exc_info.value.tag == text


def test_directive_str_round_trips_written_form():
    assert [str(d) for d in parse_tags("required,default=3,oneOf=g")] == [
        "required",
        "default=3",
        "oneOf=g",
    ]


@pytest.mark.parametrize(
    "literal,field_type,expected",
    [
        ("foo", str, "foo"),
        ("", str, ""),
        ("3", int, 3),
        ("-7", int, -7),
        ("0x10", int, 16),
        ("0o17", int, 15),
        ("010", int, 10),
        ("1.5", float, 1.5),
        ("3", float, 3.0),
        ("true", bool, True),
        ("T", bool, True),
        ("1", bool, True),
        ("False", bool, False),
        ("0", bool, False),
        ("42", Optional[int], 42),
    ],
)
def test_parse_default(literal, field_type, expected):
    value = parse_default(literal, field_type)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize(
    "literal,field_type",
    [
        ("yes", bool),
        ("three", int),
        ("1.5", int),
        ("fast", float),
    ],
)
def test_parse_default_rejects_bad_literals(literal, field_type):
    with pytest.raises(InvalidTagError):
        parse_default(literal, field_type, "Config.value")


@pytest.mark.parametrize("field_type", [List[str], dict, bytes, object])
def test_parse_default_rejects_unsupported_types(field_type):
    with pytest.raises(UnsupportedDefaultTypeError) as exc_info:
        parse_default("x", field_type, "Config.value")

    assert exc_info.value.field_name == "Config.value"
