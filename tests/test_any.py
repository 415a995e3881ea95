from dataclasses import dataclass
from typing import Optional

import pytest

from lspkit.any import Any, JsonType


@dataclass
class Options:
    visitor: str = ""
    verbose: bool = False


@dataclass
class Limits:
    depth: int = 0
    label: Optional[str] = None


def test_json_type_values_fixed_by_format():
    assert JsonType(-1) is JsonType.UNKNOWN
    assert JsonType(0) is JsonType.NULL
    assert JsonType(6) is JsonType.NUMBER


@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"a": 1}', JsonType.OBJECT),
        ("[1, 2]", JsonType.ARRAY),
        ('"text"', JsonType.STRING),
        ("true", JsonType.TRUE),
        ("false", JsonType.FALSE),
        ("null", JsonType.NULL),
        ("-12.5", JsonType.NUMBER),
        ("  42", JsonType.NUMBER),
        ("", JsonType.UNKNOWN),
    ],
)
def test_guess_type(text, expected):
    value = Any()
    value.set_json_string(text)
    assert value.guess_type() is expected
    assert value.get_type() is expected


def test_explicit_type_is_kept():
    value = Any()
    value.set_json_string("1", JsonType.STRING)
    assert value.get_type() is JsonType.STRING


def test_set_and_get_round_trip():
    payload = {"name": "x", "items": [1, 2, 3], "flag": True}
    value = Any()
    value.set(payload)
    assert value.get() == payload
    assert value.get_type() is JsonType.OBJECT


def test_from_json_and_to_json():
    value = Any.from_json([1, "two"])
    assert value.to_json() == [1, "two"]
    assert value.get_type() is JsonType.ARRAY
    assert value == Any.from_json([1, "two"])


def test_set_encodes_dataclass():
    value = Any()
    value.set(Options("v", True))
    assert value.get() == {"visitor": "v", "verbose": True}


def test_get_invalid_json_raises():
    value = Any()
    value.set_json_string("{not json")
    with pytest.raises(ValueError):
        value.get()


def test_get_from_map_decodes_string_members():
    value = Any()
    value.set_json_string('{"visitor":"default","verbose":"true"}', JsonType.UNKNOWN)
    assert value.get_from_map(Options) == Options(visitor="default", verbose=True)


def test_get_from_map_accepts_plain_members_and_ignores_missing():
    value = Any.from_json({"depth": "7", "other": 1})
    assert value.get_from_map(Limits) == Limits(depth=7, label=None)
    value = Any.from_json({"depth": 3, "label": "name"})
    assert value.get_from_map(Limits) == Limits(depth=3, label="name")


def test_get_from_map_needs_object():
    with pytest.raises(ValueError):
        Any.from_json([1, 2]).get_from_map(Options)


def test_get_from_map_rejects_undecodable_member():
    value = Any.from_json({"depth": "abc"})
    with pytest.raises(ValueError):
        value.get_from_map(Limits)