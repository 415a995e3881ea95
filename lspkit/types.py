"""Basic protocol structures: positions, ranges, locations, edits and documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


def _object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be a JSON object")
    return data


def _required(data: Dict[str, Any], name: str, what: str) -> Any:
    try:
        return data[name]
    except KeyError:
        raise ValueError(f"{what} is missing {name!r}") from None


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, not {value!r}")
    return value


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, not {value!r}")
    return value


def _opt_bool(value: Any, name: str) -> Optional[bool]:
    if value is not None and not isinstance(value, bool):
        raise ValueError(f"{name} must be a boolean, not {value!r}")
    return value


def _opt_str(value: Any, name: str) -> Optional[str]:
    return None if value is None else _str(value, name)


def _put(data: Dict[str, Any], name: str, value: Any) -> None:
    if value is not None:
        data[name] = value


@dataclass(order=True)
class Position:
    """A zero-based line and character offset in a text document."""

    line: int = 0
    character: int = 0

    def to_json(self) -> dict:
        return {"line": self.line, "character": self.character}

    @classmethod
    def from_json(cls, data: Any) -> "Position":
        data = _object(data, "Position")
        return cls(
            _int(_required(data, "line", "Position"), "line"),
            _int(_required(data, "character", "Position"), "character"),
        )


@dataclass(order=True)
class Range:
    """A span between two positions; the end is exclusive."""

    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)

    def to_json(self) -> dict:
        return {"start": self.start.to_json(), "end": self.end.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> "Range":
        data = _object(data, "Range")
        return cls(
            Position.from_json(_required(data, "start", "Range")),
            Position.from_json(_required(data, "end", "Range")),
        )


@dataclass(order=True)
class Location:
    """A range inside the resource named by a URI."""

    uri: str = ""
    range: Range = field(default_factory=Range)

    def to_json(self) -> dict:
        return {"uri": self.uri, "range": self.range.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> "Location":
        data = _object(data, "Location")
        return cls(
            _str(_required(data, "uri", "Location"), "uri"),
            Range.from_json(_required(data, "range", "Location")),
        )


@dataclass(order=True)
class LinkLocation(Location):
    """A location with a display name and a kind."""

    display_name: str = ""
    kind: str = ""

    def to_json(self) -> dict:
        data = super().to_json()
        data["displayName"] = self.display_name
        data["kind"] = self.kind
        return data

    @classmethod
    def from_json(cls, data: Any) -> "LinkLocation":
        data = _object(data, "LinkLocation")
        base = Location.from_json(data)
        return cls(
            base.uri,
            base.range,
            _str(_required(data, "displayName", "LinkLocation"), "displayName"),
            _str(_required(data, "kind", "LinkLocation"), "kind"),
        )


@dataclass
class LocationLink:
    """A link from an origin span to a target location."""

    target_uri: str = ""
    target_range: Range = field(default_factory=Range)
    target_selection_range: Range = field(default_factory=Range)
    origin_selection_range: Optional[Range] = None

    def to_json(self) -> dict:
        data: Dict[str, Any] = {}
        if self.origin_selection_range is not None:
            data["originSelectionRange"] = self.origin_selection_range.to_json()
        data["targetUri"] = self.target_uri
        data["targetRange"] = self.target_range.to_json()
        data["targetSelectionRange"] = self.target_selection_range.to_json()
        return data

    @classmethod
    def from_json(cls, data: Any) -> "LocationLink":
        data = _object(data, "LocationLink")
        origin = data.get("originSelectionRange")
        return cls(
            _str(_required(data, "targetUri", "LocationLink"), "targetUri"),
            Range.from_json(_required(data, "targetRange", "LocationLink")),
            Range.from_json(_required(data, "targetSelectionRange", "LocationLink")),
            None if origin is None else Range.from_json(origin),
        )


@dataclass
class TextDocumentIdentifier:
    """Names a text document by its URI."""

    uri: str = ""

    def to_json(self) -> dict:
        return {"uri": self.uri}

    @classmethod
    def from_json(cls, data: Any) -> "TextDocumentIdentifier":
        data = _object(data, "TextDocumentIdentifier")
        return cls(_str(_required(data, "uri", "TextDocumentIdentifier"), "uri"))


@dataclass
class TextDocumentItem:
    """A text document transferred from client to server."""

    uri: str = ""
    language_id: str = ""
    version: int = 0
    text: str = ""

    def to_json(self) -> dict:
        return {
            "uri": self.uri,
            "languageId": self.language_id,
            "version": self.version,
            "text": self.text,
        }

    @classmethod
    def from_json(cls, data: Any) -> "TextDocumentItem":
        data = _object(data, "TextDocumentItem")
        what = "TextDocumentItem"
        return cls(
            _str(_required(data, "uri", what), "uri"),
            _str(_required(data, "languageId", what), "languageId"),
            _int(_required(data, "version", what), "version"),
            _str(_required(data, "text", what), "text"),
        )


@dataclass
class ChangeAnnotation:
    """Describes a document change, possibly asking for user confirmation."""

    label: str = ""
    needs_confirmation: Optional[bool] = None
    description: Optional[str] = None

    def to_json(self) -> dict:
        data: Dict[str, Any] = {"label": self.label}
        _put(data, "needsConfirmation", self.needs_confirmation)
        _put(data, "description", self.description)
        return data

    @classmethod
    def from_json(cls, data: Any) -> "ChangeAnnotation":
        data = _object(data, "ChangeAnnotation")
        return cls(
            _str(_required(data, "label", "ChangeAnnotation"), "label"),
            _opt_bool(data.get("needsConfirmation"), "needsConfirmation"),
            _opt_str(data.get("description"), "description"),
        )


@dataclass
class TextEdit:
    """Replaces a range of a document with new text; may refer to a change annotation."""

    range: Range = field(default_factory=Range)
    new_text: str = ""
    annotation_id: Optional[str] = None

    def to_json(self) -> dict:
        data: Dict[str, Any] = {"range": self.range.to_json(), "newText": self.new_text}
        _put(data, "annotationId", self.annotation_id)
        return data

    @classmethod
    def from_json(cls, data: Any) -> "TextEdit":
        data = _object(data, "TextEdit")
        return cls(
            Range.from_json(_required(data, "range", "TextEdit")),
            _str(_required(data, "newText", "TextEdit"), "newText"),
            _opt_str(data.get("annotationId"), "annotationId"),
        )


KeyData = Union[bool, int, str]


@dataclass
class FormattingOptions:
    """Options for formatting a document."""

    tab_size: int = 4
    insert_spaces: bool = True
    trim_trailing_whitespace: Optional[bool] = None
    insert_final_newline: Optional[bool] = None
    trim_final_newlines: Optional[bool] = None
    key: Optional[KeyData] = None

    def to_json(self) -> dict:
        data: Dict[str, Any] = {"tabSize": self.tab_size, "insertSpaces": self.insert_spaces}
        _put(data, "trimTrailingWhitespace", self.trim_trailing_whitespace)
        _put(data, "insertFinalNewline", self.insert_final_newline)
        _put(data, "trimFinalNewlines", self.trim_final_newlines)
        _put(data, "key", self.key)
        return data

    @classmethod
    def from_json(cls, data: Any) -> "FormattingOptions":
        data = _object(data, "FormattingOptions")
        key = data.get("key")
        if key is not None and not isinstance(key, (bool, int, str)):
            raise ValueError(f"key must be a boolean, integer or string, not {key!r}")
        insert_spaces = data.get("insertSpaces", True)
        if not isinstance(insert_spaces, bool):
            raise ValueError(f"insertSpaces must be a boolean, not {insert_spaces!r}")
        return cls(
            _int(data.get("tabSize", 4), "tabSize"),
            insert_spaces,
            _opt_bool(data.get("trimTrailingWhitespace"), "trimTrailingWhitespace"),
            _opt_bool(data.get("insertFinalNewline"), "insertFinalNewline"),
            _opt_bool(data.get("trimFinalNewlines"), "trimFinalNewlines"),
            key,
        )