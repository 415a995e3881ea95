"""Language-server status, progress and event notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any as _AnyType
from typing import Dict, List, Optional

from lspkit.any import Any, JsonType
from lspkit.types import _int, _object, _required, _str

STATUS_METHOD = "language/status"
ACTIONABLE_NOTIFICATION_METHOD = "language/actionableNotification"
PROGRESS_REPORT_METHOD = "language/progressReport"
EVENT_NOTIFICATION_METHOD = "language/eventNotification"


@dataclass
class StatusReport:
    """A status message the server asks the client to show."""

    type: str = ""
    message: str = ""

    def __str__(self) -> str:
        return f"type:{self.type}\nmessage:{self.message}\n"

    def to_json(self) -> dict:
        return {"type": self.type, "message": self.message}

    @classmethod
    def from_json(cls, data: _AnyType) -> "StatusReport":
        data = _object(data, "StatusReport")
        return cls(
            _str(_required(data, "type", "StatusReport"), "type"),
            _str(_required(data, "message", "StatusReport"), "message"),
        )


class MessageType(IntEnum):
    """Severity of a message shown to the user."""

    Error = 1
    Warning = 2
    Info = 3
    Log = 4


@dataclass
class ActionableNotification:
    """A message shown to the user together with commands they can run."""

    severity: MessageType = MessageType.Info
    message: str = ""
    data: Optional[Any] = None
    commands: List[dict] = field(default_factory=list)

    def to_json(self) -> dict:
        data: Dict[str, _AnyType] = {"severity": int(self.severity), "message": self.message}
        if self.data is not None:
            data["data"] = self.data.to_json()
        data["commands"] = list(self.commands)
        return data

    @classmethod
    def from_json(cls, data: _AnyType) -> "ActionableNotification":
        data = _object(data, "ActionableNotification")
        what = "ActionableNotification"
        severity = _int(_required(data, "severity", what), "severity")
        try:
            level = MessageType(severity)
        except ValueError:
            raise ValueError(f"severity has no member {severity!r}") from None
        commands = data.get("commands", [])
        if not isinstance(commands, list) or not all(isinstance(c, dict) for c in commands):
            raise ValueError("commands must be an array of objects")
        raw = data.get("data")
        return cls(
            level,
            _str(_required(data, "message", what), "message"),
            None if raw is None else Any.from_json(raw),
            list(commands),
        )


@dataclass
class ProgressReport:
    """Progress of a server task.

    ``total_work`` is kept locally but not part of the wire form.
    """

    id: str = ""
    task: str = ""
    sub_task: str = ""
    status: str = ""
    total_work: int = 0
    work_done: int = 0
    complete: bool = False

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "task": self.task,
            "subTask": self.sub_task,
            "status": self.status,
            "workDone": self.work_done,
            "complete": self.complete,
        }

    @classmethod
    def from_json(cls, data: _AnyType) -> "ProgressReport":
        data = _object(data, "ProgressReport")
        what = "ProgressReport"
        complete = _required(data, "complete", what)
        if not isinstance(complete, bool):
            raise ValueError(f"complete must be a boolean, not {complete!r}")
        return cls(
            id=_str(_required(data, "id", what), "id"),
            task=_str(_required(data, "task", what), "task"),
            sub_task=_str(_required(data, "subTask", what), "subTask"),
            status=_str(_required(data, "status", what), "status"),
            work_done=_int(_required(data, "workDone", what), "workDone"),
            complete=complete,
        )


class EventType(IntEnum):
    """Kinds of language events."""

    ClasspathUpdated = 100
    ProjectsImported = 200


def _null_any() -> Any:
    return Any("null", JsonType.NULL)


@dataclass
class EventNotification:
    """An event raised by the server, with free-form data."""

    event_type: int = 0
    data: Any = field(default_factory=_null_any)

    def to_json(self) -> dict:
        return {"eventType": int(self.event_type), "data": self.data.to_json()}

    @classmethod
    def from_json(cls, data: _AnyType) -> "EventNotification":
        data = _object(data, "EventNotification")
        return cls(
            _int(_required(data, "eventType", "EventNotification"), "eventType"),
            Any.from_json(_required(data, "data", "EventNotification")),
        )