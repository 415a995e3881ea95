"""Completion items, completion requests and code actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any as _AnyType
from typing import Callable, Dict, List, Optional, TypeVar, Union

from lspkit.any import Any
from lspkit.types import (
    Position,
    TextDocumentIdentifier,
    TextEdit,
    _int,
    _object,
    _opt_bool,
    _opt_str,
    _put,
    _required,
    _str,
)

COMPLETION_METHOD = "textDocument/completion"
CODE_ACTION_METHOD = "textDocument/codeAction"

E = TypeVar("E", bound=IntEnum)
T = TypeVar("T")


class CompletionItemKind(IntEnum):
    """The kind of a completion entry."""

    Text = 1
    Method = 2
    Function = 3
    Constructor = 4
    Field = 5
    Variable = 6
    Class = 7
    Interface = 8
    Module = 9
    Property = 10
    Unit = 11
    Value = 12
    Enum = 13
    Keyword = 14
    Snippet = 15
    Color = 16
    File = 17
    Reference = 18
    Folder = 19
    EnumMember = 20
    Constant = 21
    Struct = 22
    Event = 23
    Operator = 24
    TypeParameter = 25


class InsertTextFormat(IntEnum):
    """Whether inserted text is plain text or a snippet."""

    PlainText = 1
    Snippet = 2


class CompletionTriggerKind(IntEnum):
    """How a completion was triggered."""

    Invoked = 1
    TriggerCharacter = 2


def _enum(enum_cls: type, value: _AnyType, name: str):
    number = _int(value, name)
    try:
        return enum_cls(number)
    except ValueError:
        raise ValueError(f"{name} has no member {number!r}") from None


def _opt_enum(enum_cls: type, value: _AnyType, name: str):
    return None if value is None else _enum(enum_cls, value, name)


def _opt_list(value: _AnyType, name: str, convert: Callable[[_AnyType], T]) -> Optional[List[T]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError(f"{name} must be an array")
    return [convert(item) for item in value]


def _opt_dict(value: _AnyType, name: str) -> Optional[dict]:
    if value is not None and not isinstance(value, dict):
        raise ValueError(f"{name} must be a JSON object")
    return value


Documentation = Union[str, dict]


def _documentation(value: _AnyType) -> Optional[Documentation]:
    if value is not None and not isinstance(value, (str, dict)):
        raise ValueError("documentation must be a string or a markup object")
    return value


@dataclass
class CompletionContext:
    """Why and how a completion request was triggered."""

    trigger_kind: CompletionTriggerKind = CompletionTriggerKind.Invoked
    trigger_character: Optional[str] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"triggerKind": int(self.trigger_kind)}
        _put(data, "triggerCharacter", self.trigger_character)
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "CompletionContext":
        data = _object(data, "CompletionContext")
        kind = data.get("triggerKind", CompletionTriggerKind.Invoked)
        return cls(
            _enum(CompletionTriggerKind, kind, "triggerKind"),
            _opt_str(data.get("triggerCharacter"), "triggerCharacter"),
        )


@dataclass
class CompletionItem:
    """One completion proposal.

    ``relevance`` orders candidates internally and is not sent over the wire.
    """

    label: str = ""
    kind: Optional[CompletionItemKind] = None
    detail: Optional[str] = None
    documentation: Optional[Documentation] = None
    deprecated: Optional[bool] = None
    preselect: Optional[bool] = None
    relevance: int = 0
    sort_text: Optional[str] = None
    filter_text: Optional[str] = None
    insert_text: Optional[str] = None
    insert_text_format: Optional[InsertTextFormat] = None
    text_edit: Optional[TextEdit] = None
    additional_text_edits: Optional[List[TextEdit]] = None
    commit_characters: Optional[List[str]] = None
    command: Optional[dict] = None
    data: Optional[Any] = None

    def inserted_content(self) -> str:
        """Return the text this item inserts: the edit's text, the insert text, or the label."""
        if self.text_edit is not None:
            return self.text_edit.new_text
        if self.insert_text:
            return self.insert_text
        return self.label

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"label": self.label}
        _put(data, "kind", None if self.kind is None else int(self.kind))
        _put(data, "detail", self.detail)
        _put(data, "documentation", self.documentation)
        _put(data, "sortText", self.sort_text)
        _put(data, "insertText", self.insert_text)
        _put(data, "filterText", self.filter_text)
        _put(
            data,
            "insertTextFormat",
            None if self.insert_text_format is None else int(self.insert_text_format),
        )
        _put(data, "textEdit", None if self.text_edit is None else self.text_edit.to_json())
        _put(data, "deprecated", self.deprecated)
        _put(data, "preselect", self.preselect)
        if self.additional_text_edits is not None:
            data["additionalTextEdits"] = [edit.to_json() for edit in self.additional_text_edits]
        if self.commit_characters is not None:
            data["commitCharacters"] = list(self.commit_characters)
        _put(data, "command", self.command)
        if self.data is not None:
            data["data"] = self.data.to_json()
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "CompletionItem":
        data = _object(data, "CompletionItem")
        text_edit = data.get("textEdit")
        raw_data = data.get("data")
        return cls(
            label=_str(_required(data, "label", "CompletionItem"), "label"),
            kind=_opt_enum(CompletionItemKind, data.get("kind"), "kind"),
            detail=_opt_str(data.get("detail"), "detail"),
            documentation=_documentation(data.get("documentation")),
            deprecated=_opt_bool(data.get("deprecated"), "deprecated"),
            preselect=_opt_bool(data.get("preselect"), "preselect"),
            sort_text=_opt_str(data.get("sortText"), "sortText"),
            filter_text=_opt_str(data.get("filterText"), "filterText"),
            insert_text=_opt_str(data.get("insertText"), "insertText"),
            insert_text_format=_opt_enum(
                InsertTextFormat, data.get("insertTextFormat"), "insertTextFormat"
            ),
            text_edit=None if text_edit is None else TextEdit.from_json(text_edit),
            additional_text_edits=_opt_list(
                data.get("additionalTextEdits"), "additionalTextEdits", TextEdit.from_json
            ),
            commit_characters=_opt_list(
                data.get("commitCharacters"),
                "commitCharacters",
                lambda item: _str(item, "commitCharacters"),
            ),
            command=_opt_dict(data.get("command"), "command"),
            data=None if raw_data is None else Any.from_json(raw_data),
        )


@dataclass
class CompletionList:
    """A set of completion items; ``is_incomplete`` asks for recomputation on typing."""

    is_incomplete: bool = False
    items: List[CompletionItem] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "isIncomplete": self.is_incomplete,
            "items": [item.to_json() for item in self.items],
        }

    @classmethod
    def from_json(cls, data: _AnyType) -> "CompletionList":
        """Accept either a completion list object or a bare array of items."""
        if isinstance(data, list):
            return cls(False, [CompletionItem.from_json(item) for item in data])
        data = _object(data, "CompletionList")
        incomplete = data.get("isIncomplete", False)
        if not isinstance(incomplete, bool):
            raise ValueError(f"isIncomplete must be a boolean, not {incomplete!r}")
        items = _opt_list(data.get("items"), "items", CompletionItem.from_json)
        return cls(incomplete, items or [])


@dataclass
class CompletionParams:
    """Parameters of a completion request."""

    text_document: TextDocumentIdentifier = field(default_factory=TextDocumentIdentifier)
    position: Position = field(default_factory=Position)
    context: Optional[CompletionContext] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {
            "textDocument": self.text_document.to_json(),
            "position": self.position.to_json(),
        }
        if self.context is not None:
            data["context"] = self.context.to_json()
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "CompletionParams":
        data = _object(data, "CompletionParams")
        context = data.get("context")
        return cls(
            TextDocumentIdentifier.from_json(_required(data, "textDocument", "CompletionParams")),
            Position.from_json(_required(data, "position", "CompletionParams")),
            None if context is None else CompletionContext.from_json(context),
        )


@dataclass
class CodeAction:
    """A change that can be performed in code: an edit, a command or both."""

    title: str = ""
    kind: Optional[str] = None
    diagnostics: Optional[List[dict]] = None
    edit: Optional[dict] = None
    command: Optional[dict] = None

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"title": self.title}
        _put(data, "kind", self.kind)
        if self.diagnostics is not None:
            data["diagnostics"] = list(self.diagnostics)
        _put(data, "edit", self.edit)
        _put(data, "command", self.command)
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "CodeAction":
        data = _object(data, "CodeAction")
        return cls(
            _str(_required(data, "title", "CodeAction"), "title"),
            _opt_str(data.get("kind"), "kind"),
            _opt_list(
                data.get("diagnostics"),
                "diagnostics",
                lambda item: _object(item, "diagnostic"),
            ),
            _opt_dict(data.get("edit"), "edit"),
            _opt_dict(data.get("command"), "command"),
        )