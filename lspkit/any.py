"""A JSON value kept as text, with its JSON type, decoded on demand."""

from __future__ import annotations

import dataclasses
import json
import types
import typing as t
from enum import IntEnum


class JsonType(IntEnum):
    """Kind of JSON value."""

    UNKNOWN = -1
    NULL = 0
    FALSE = 1
    TRUE = 2
    OBJECT = 3
    ARRAY = 4
    STRING = 5
    NUMBER = 6


def _encode(value: t.Any) -> t.Any:
    if hasattr(value, "to_json"):
        return value.to_json()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, IntEnum):
        return int(value)
    return value


_STR_HINT_TEXTS = {
    "str",
    "Optional[str]",
    "typing.Optional[str]",
    "t.Optional[str]",
    "str|None",
    "None|str",
    "Union[str,None]",
    "typing.Union[str,None]",
    "t.Union[str,None]",
}


def _is_str_hint(hint: t.Any) -> bool:
    if isinstance(hint, str):
        return hint.replace(" ", "") in _STR_HINT_TEXTS
    if hint is str:
        return True
    origin = t.get_origin(hint)
    if origin is not t.Union and origin is not types.UnionType:
        return False
    args = [arg for arg in t.get_args(hint) if arg is not type(None)]
    return args == [str]


class Any:
    """Holds raw JSON text and the type of the value it encodes."""

    def __init__(self, data: str = "", json_type: JsonType = JsonType.UNKNOWN) -> None:
        self._data = data
        self._json_type = JsonType(json_type)

    @classmethod
    def from_json(cls, value: t.Any) -> "Any":
        """Build an Any holding ``value`` (a decoded JSON value or serialisable object)."""
        result = cls()
        result.set(value)
        return result

    @property
    def data(self) -> str:
        return self._data

    def set_json_string(self, data: str, json_type: JsonType = JsonType.UNKNOWN) -> None:
        """Store raw JSON text with a known type, or UNKNOWN to guess it later."""
        self._data = data
        self._json_type = JsonType(json_type)

    def guess_type(self) -> JsonType:
        """Work out the JSON type from the first character of the text."""
        text = self._data.lstrip()
        if not text:
            return JsonType.UNKNOWN
        first = text[0]
        if first == "{":
            return JsonType.OBJECT
        if first == "[":
            return JsonType.ARRAY
        if first == '"':
            return JsonType.STRING
        if text.startswith("true"):
            return JsonType.TRUE
        if text.startswith("false"):
            return JsonType.FALSE
        if text.startswith("null"):
            return JsonType.NULL
        if first == "-" or first.isdigit():
            return JsonType.NUMBER
        return JsonType.UNKNOWN

    def get_type(self) -> JsonType:
        """Return the stored type, guessing it from the text when unknown."""
        if self._json_type == JsonType.UNKNOWN:
            self._json_type = self.guess_type()
        return self._json_type

    def get(self) -> t.Any:
        """Decode the stored text; raise ValueError if it is not valid JSON."""
        try:
            return json.loads(self._data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON in Any: {exc}") from exc

    def set(self, value: t.Any) -> None:
        """Store ``value`` encoded as JSON text."""
        self._data = json.dumps(_encode(value), separators=(",", ":"))
        self._json_type = self.guess_type()

    def to_json(self) -> t.Any:
        return self.get()

    def get_from_map(self, cls: type) -> t.Any:
        """Build dataclass ``cls`` from a JSON object whose members may be strings.

        Members present in the object fill the fields of the same name. A
        member given as a string is itself decoded as JSON unless the field
        holds a string, so ``{"verbose": "true"}`` fills a bool field.
        """
        mapping = self.get()
        if not isinstance(mapping, dict):
            raise ValueError("get_from_map needs a JSON object")
        kwargs = {}
        for field in dataclasses.fields(cls):
            if field.name in mapping:
                kwargs[field.name] = self._map_member(mapping[field.name], field.type)
        return cls(**kwargs)

    @staticmethod
    def _map_member(raw: t.Any, hint: t.Any) -> t.Any:
        if _is_str_hint(hint):
            return raw if isinstance(raw, str) else json.dumps(raw)
        if isinstance(raw, str):
            try:
                return json.loads(raw.strip('"'))
            except json.JSONDecodeError as exc:
                raise ValueError(f"cannot decode member value {raw!r}") from exc
        return raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Any):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Any({self._data!r}, {self.get_type().name})"