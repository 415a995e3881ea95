"""JSON-RPC request, notification and response messages."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

JSONRPC_VERSION = "2.0"
CANCEL_METHOD = "$/cancelRequest"

RequestId = Union[int, str]


class MessageKind(Enum):
    REQUEST_MESSAGE = "request"
    RESPONSE_MESSAGE = "response"
    NOTIFICATION_MESSAGE = "notification"


def _encode(value: Any) -> Any:
    if hasattr(value, "to_json"):
        return value.to_json()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, Enum):
        return value.value
    return value


def _request_id(value: Any) -> RequestId:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"request id must be a number or a string, not {value!r}")
    return value


@dataclass
class RequestMessage:
    """A request: has a method and an id, and expects a response."""

    method: str
    id: RequestId
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    @property
    def kind(self) -> MessageKind:
        return MessageKind.REQUEST_MESSAGE

    def to_json(self) -> dict:
        data = {"jsonrpc": self.jsonrpc, "id": self.id, "method": self.method}
        if self.params is not None:
            data["params"] = _encode(self.params)
        return data


@dataclass
class NotificationMessage:
    """A notification: has a method but no id."""

    method: str
    params: Any = None
    jsonrpc: str = JSONRPC_VERSION

    @property
    def kind(self) -> MessageKind:
        return MessageKind.NOTIFICATION_MESSAGE

    def to_json(self) -> dict:
        data = {"jsonrpc": self.jsonrpc, "method": self.method}
        if self.params is not None:
            data["params"] = _encode(self.params)
        return data


@dataclass
class ResponseMessage:
    """A response carrying either a result or an error."""

    id: Optional[RequestId]
    result: Any = None
    error: Optional[dict] = None
    jsonrpc: str = JSONRPC_VERSION

    @property
    def kind(self) -> MessageKind:
        return MessageKind.RESPONSE_MESSAGE

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_json(self) -> dict:
        data = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = _encode(self.error)
        else:
            data["result"] = _encode(self.result)
        return data


@dataclass
class CancelParams:
    """Parameters of a cancel notification: the id of the request to cancel."""

    id: RequestId


def cancel_notification(request_id: RequestId) -> NotificationMessage:
    """Build the notification that cancels request ``request_id``."""
    return NotificationMessage(CANCEL_METHOD, CancelParams(_request_id(request_id)))


Message = Union[RequestMessage, NotificationMessage, ResponseMessage]


def parse_message(data: Union[str, bytes, bytearray, dict]) -> Message:
    """Turn JSON text or a decoded object into a message; raise ValueError if invalid."""
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("a message must be a JSON object")

    jsonrpc = data.get("jsonrpc", JSONRPC_VERSION)
    method = data.get("method")
    if method is not None:
        if not isinstance(method, str):
            raise ValueError("method must be a string")
        if "id" in data:
            return RequestMessage(method, _request_id(data["id"]), data.get("params"), jsonrpc)
        return NotificationMessage(method, data.get("params"), jsonrpc)

    if "id" in data and ("result" in data or "error" in data):
        response_id = data["id"]
        if response_id is not None:
            response_id = _request_id(response_id)
        return ResponseMessage(response_id, data.get("result"), data.get("error"), jsonrpc)

    raise ValueError("object is not a request, notification or response")