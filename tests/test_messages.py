import json

import pytest

from lspkit.messages import (
    CANCEL_METHOD,
    JSONRPC_VERSION,
    CancelParams,
    MessageKind,
    NotificationMessage,
    RequestMessage,
    ResponseMessage,
    cancel_notification,
    parse_message,
)


def test_request_to_json():
    req = RequestMessage("initialize", 1, {"rootUri": None})
    assert req.to_json() == {
        "jsonrpc": JSONRPC_VERSION,
        "id": 1,
        "method": "initialize",
        "params": {"rootUri": None},
    }
    assert req.kind is MessageKind.REQUEST_MESSAGE


def test_notification_without_params_omits_them():
    note = NotificationMessage("exit")
    assert note.to_json() == {"jsonrpc": JSONRPC_VERSION, "method": "exit"}


def test_cancel_notification_wire_form():
    note = cancel_notification(5)
    assert note.method == "$/cancelRequest"
    assert note.to_json()["params"] == {"id": 5}
    assert note.params == CancelParams(5)


def test_cancel_notification_rejects_bad_id():
    with pytest.raises(ValueError):
        cancel_notification(1.5)


def test_request_round_trip_through_text():
    req = RequestMessage("textDocument/definition", "abc", {"x": [1, 2]})
    parsed = parse_message(json.dumps(req.to_json()))
    assert parsed == req


def test_notification_round_trip_from_bytes():
    note = cancel_notification("r1")
    parsed = parse_message(json.dumps(note.to_json()).encode("utf-8"))
    assert isinstance(parsed, NotificationMessage)
    assert parsed.method == CANCEL_METHOD
    assert parsed.params == {"id": "r1"}


def test_response_result_round_trip():
    rsp = ResponseMessage(7, {"capabilities": {}})
    parsed = parse_message(rsp.to_json())
    assert parsed == rsp
    assert parsed.is_error is False


def test_error_response():
    rsp = parse_message({"jsonrpc": JSONRPC_VERSION, "id": None, "error": {"code": -1}})
    assert rsp.is_error is True
    assert "result" not in rsp.to_json()


@pytest.mark.parametrize(
    "bad",
    ["not json", "[1, 2]", {"jsonrpc": JSONRPC_VERSION}, {"method": "m", "id": True}, {"method": 3}],
)
def test_invalid_messages_raise(bad):
    with pytest.raises(ValueError):
        parse_message(bad)