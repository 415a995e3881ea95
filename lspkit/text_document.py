"""Parameters and results of text document requests and notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any as _AnyType
from typing import Dict, List, Optional

from lspkit.any import Any
from lspkit.completion import _enum, _opt_dict, _opt_enum, _opt_list
from lspkit.types import (
    Position,
    Range,
    TextDocumentIdentifier,
    _int,
    _object,
    _opt_bool,
    _opt_str,
    _put,
    _required,
    _str,
)

CODE_ACTION_METHOD = "textDocument/codeAction"
CODE_LENS_METHOD = "textDocument/codeLens"
DID_CHANGE_METHOD = "textDocument/didChange"
DOCUMENT_LINK_METHOD = "textDocument/documentLink"
DOCUMENT_LINK_RESOLVE_METHOD = "documentLink/resolve"
FOLDING_RANGE_METHOD = "textDocument/foldingRange"
LINKED_EDITING_RANGE_METHOD = "textDocument/linkedEditingRange"
PUBLISH_DIAGNOSTICS_METHOD = "textDocument/publishDiagnostics"
REFERENCES_METHOD = "textDocument/references"
SELECTION_RANGE_METHOD = "textDocument/selectionRange"
TYPE_HIERARCHY_METHOD = "textDocument/typeHierarchy"


def _opt_int(value: _AnyType, name: str) -> Optional[int]:
    return None if value is None else _int(value, name)


def _opt_any(value: _AnyType) -> Optional[Any]:
    return None if value is None else Any.from_json(value)


def _list(data: Dict[str, _AnyType], name: str, what: str, convert) -> list:
    return _opt_list(_required(data, name, what), name, convert)


@dataclass
class CodeLens:
    """A command shown inline with source text, valid within a single-line range."""

    range: Range = field(default_factory=Range)
    command: Optional[dict] = None
    data: Optional[Any] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"range": self.range.to_json()}
        _put(data, "command", self.command)
        if self.data is not None:
            data["data"] = self.data.to_json()
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "CodeLens":
        data = _object(data, "CodeLens")
        return cls(
            Range.from_json(_required(data, "range", "CodeLens")),
            _opt_dict(data.get("command"), "command"),
            _opt_any(data.get("data")),
        )


@dataclass
class ContentChangeEvent:
    """A change to a document: a replaced range, or the whole text when no range is given."""

    text: str = ""
    range: Optional[Range] = None
    range_length: Optional[int] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {}
        if self.range is not None:
            data["range"] = self.range.to_json()
        _put(data, "rangeLength", self.range_length)
        data["text"] = self.text
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "ContentChangeEvent":
        data = _object(data, "ContentChangeEvent")
        raw_range = data.get("range")
        return cls(
            _str(_required(data, "text", "ContentChangeEvent"), "text"),
            None if raw_range is None else Range.from_json(raw_range),
            _opt_int(data.get("rangeLength"), "rangeLength"),
        )


@dataclass
class DidChangeParams:
    """Parameters of the document change notification.

    ``text_document`` is the versioned document identifier object; ``uri`` is
    the legacy top-level URI of protocol version 1.0.
    """

    text_document: dict = field(default_factory=dict)
    content_changes: List[ContentChangeEvent] = field(default_factory=list)
    uri: Optional[str] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {
            "textDocument": dict(self.text_document),
            "contentChanges": [change.to_json() for change in self.content_changes],
        }
        _put(data, "uri", self.uri)
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "DidChangeParams":
        data = _object(data, "DidChangeParams")
        what = "DidChangeParams"
        return cls(
            dict(_object(_required(data, "textDocument", what), "textDocument")),
            _list(data, "contentChanges", what, ContentChangeEvent.from_json),
            _opt_str(data.get("uri"), "uri"),
        )


@dataclass
class DocumentLink:
    """A range in a document that links to a resource; the target may be resolved later."""

    range: Range = field(default_factory=Range)
    target: Optional[str] = None
    data: Optional[Any] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"range": self.range.to_json()}
        _put(data, "target", self.target)
        if self.data is not None:
            data["data"] = self.data.to_json()
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "DocumentLink":
        data = _object(data, "DocumentLink")
        return cls(
            Range.from_json(_required(data, "range", "DocumentLink")),
            _opt_str(data.get("target"), "target"),
            _opt_any(data.get("data")),
        )


@dataclass
class FoldingRange:
    """A range of lines that can be folded, with an optional kind such as comment or region."""

    start_line: int = 0
    end_line: int = 0
    start_character: int = 0
    end_character: int = 0
    kind: str = ""

    def to_json(self) -> dict:
        return {
            "startLine": self.start_line,
            "endLine": self.end_line,
            "startCharacter": self.start_character,
            "endCharacter": self.end_character,
            "kind": self.kind,
        }

    @classmethod
    def from_json(cls, data: _AnyType) -> "FoldingRange":
        data = _object(data, "FoldingRange")
        what = "FoldingRange"
        return cls(
            _int(_required(data, "startLine", what), "startLine"),
            _int(_required(data, "endLine", what), "endLine"),
            _int(data.get("startCharacter", 0), "startCharacter"),
            _int(data.get("endCharacter", 0), "endCharacter"),
            _str(data.get("kind", ""), "kind"),
        )


@dataclass
class LinkedEditingRanges:
    """Ranges that are renamed together, with an optional word pattern."""

    ranges: List[Range] = field(default_factory=list)
    word_pattern: Optional[str] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"ranges": [r.to_json() for r in self.ranges]}
        _put(data, "wordPattern", self.word_pattern)
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "LinkedEditingRanges":
        data = _object(data, "LinkedEditingRanges")
        return cls(
            _list(data, "ranges", "LinkedEditingRanges", Range.from_json),
            _opt_str(data.get("wordPattern"), "wordPattern"),
        )


@dataclass
class PublishDiagnosticsParams:
    """Diagnostics reported by the server for one document."""

    uri: str = ""
    diagnostics: List[dict] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"uri": self.uri, "diagnostics": [dict(d) for d in self.diagnostics]}

    @classmethod
    def from_json(cls, data: _AnyType) -> "PublishDiagnosticsParams":
        data = _object(data, "PublishDiagnosticsParams")
        what = "PublishDiagnosticsParams"
        return cls(
            _str(_required(data, "uri", what), "uri"),
            _list(data, "diagnostics", what, lambda item: dict(_object(item, "diagnostic"))),
        )


@dataclass
class ReferenceParams:
    """Parameters of a references request."""

    text_document: TextDocumentIdentifier = field(default_factory=TextDocumentIdentifier)
    position: Position = field(default_factory=Position)
    include_declaration: Optional[bool] = None

    def to_json(self) -> dict:
        context: Dict[str, _AnyType] = {}
        _put(context, "includeDeclaration", self.include_declaration)
        return {
            "textDocument": self.text_document.to_json(),
            "position": self.position.to_json(),
            "context": context,
        }

    @classmethod
    def from_json(cls, data: _AnyType) -> "ReferenceParams":
        data = _object(data, "ReferenceParams")
        what = "ReferenceParams"
        context = _object(_required(data, "context", what), "context")
        return cls(
            TextDocumentIdentifier.from_json(_required(data, "textDocument", what)),
            Position.from_json(_required(data, "position", what)),
            _opt_bool(context.get("includeDeclaration"), "includeDeclaration"),
        )


@dataclass
class SelectionRange:
    """A selection range, nested in the parent range that contains it."""

    range: Range = field(default_factory=Range)
    parent: Optional["SelectionRange"] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"range": self.range.to_json()}
        if self.parent is not None:
            data["parent"] = self.parent.to_json()
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "SelectionRange":
        data = _object(data, "SelectionRange")
        parent = data.get("parent")
        return cls(
            Range.from_json(_required(data, "range", "SelectionRange")),
            None if parent is None else cls.from_json(parent),
        )


class TypeHierarchyDirection(IntEnum):
    """Which side of a type hierarchy to resolve."""

    Children = 0
    Parents = 1
    Both = 2


@dataclass
class TypeHierarchyParams:
    """Parameters of a type hierarchy request at a document position."""

    text_document: TextDocumentIdentifier = field(default_factory=TextDocumentIdentifier)
    position: Position = field(default_factory=Position)
    resolve: Optional[int] = None
    direction: Optional[TypeHierarchyDirection] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {
            "textDocument": self.text_document.to_json(),
            "position": self.position.to_json(),
        }
        _put(data, "resolve", self.resolve)
        _put(data, "direction", None if self.direction is None else int(self.direction))
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "TypeHierarchyParams":
        data = _object(data, "TypeHierarchyParams")
        what = "TypeHierarchyParams"
        return cls(
            TextDocumentIdentifier.from_json(_required(data, "textDocument", what)),
            Position.from_json(_required(data, "position", what)),
            _opt_int(data.get("resolve"), "resolve"),
            _opt_enum(TypeHierarchyDirection, data.get("direction"), "direction"),
        )


@dataclass
class TypeHierarchyItem:
    """A type (class, interface, enumeration, ...) with its resolved parents and children.

    ``parents`` or ``children`` is None while that side has not been resolved.
    """

    name: str = ""
    kind: int = 0
    uri: str = ""
    range: Range = field(default_factory=Range)
    selection_range: Range = field(default_factory=Range)
    detail: Optional[str] = None
    deprecated: Optional[bool] = None
    parents: Optional[List["TypeHierarchyItem"]] = None
    children: Optional[List["TypeHierarchyItem"]] = None
    data: Optional[Any] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"name": self.name}
        _put(data, "detail", self.detail)
        data["kind"] = int(self.kind)
        _put(data, "deprecated", self.deprecated)
        data["uri"] = self.uri
        data["range"] = self.range.to_json()
        data["selectionRange"] = self.selection_range.to_json()
        if self.parents is not None:
            data["parents"] = [item.to_json() for item in self.parents]
        if self.children is not None:
            data["children"] = [item.to_json() for item in self.children]
        if self.data is not None:
            data["data"] = self.data.to_json()
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "TypeHierarchyItem":
        data = _object(data, "TypeHierarchyItem")
        what = "TypeHierarchyItem"
        return cls(
            name=_str(_required(data, "name", what), "name"),
            kind=_int(_required(data, "kind", what), "kind"),
            uri=_str(_required(data, "uri", what), "uri"),
            range=Range.from_json(_required(data, "range", what)),
            selection_range=Range.from_json(_required(data, "selectionRange", what)),
            detail=_opt_str(data.get("detail"), "detail"),
            deprecated=_opt_bool(data.get("deprecated"), "deprecated"),
            parents=_opt_list(data.get("parents"), "parents", cls.from_json),
            children=_opt_list(data.get("children"), "children", cls.from_json),
            data=_opt_any(data.get("data")),
        )


def direction_from_json(value: _AnyType) -> TypeHierarchyDirection:
    """Decode a type hierarchy direction number."""
    return _enum(TypeHierarchyDirection, value, "direction")