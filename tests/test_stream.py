import io
import json

import pytest

from lspkit.log import Level, MessageIssueHandler
from lspkit.stream import Headers, StreamMessageProducer, write_message


class _Issues(MessageIssueHandler):
    def __init__(self):
        self.issues = []

    def handle(self, issues):
        self.issues.extend(issues)


def _framed(*bodies):
    out = io.BytesIO()
    for body in bodies:
        write_message(out, body)
    return io.BytesIO(out.getvalue())


def _collect(stream):
    issues = _Issues()
    producer = StreamMessageProducer(issues, stream)
    received = []
    producer.listen(received.append)
    return received, issues.issues


def test_write_message_wire_format():
    out = io.BytesIO()
    write_message(out, {"a": 1})
    assert out.getvalue() == b'Content-Length: 7\r\n\r\n{"a":1}'


def test_round_trip_of_several_messages():
    received, issues = _collect(_framed({"id": 1}, {"method": "exit"}))
    assert [json.loads(text) for text in received] == [{"id": 1}, {"method": "exit"}]
    assert issues == []


def test_non_ascii_body_length_counts_bytes():
    received, _ = _collect(_framed({"text": "héllo ✓"}))
    assert json.loads(received[0]) == {"text": "héllo ✓"}


def test_headers_clear_resets_values():
    headers = Headers(12, "utf-16")
    headers.clear()
    assert headers == Headers()


def test_parse_header_reads_length_and_charset():
    producer = StreamMessageProducer(_Issues())
    headers = Headers()
    producer.parse_header("Content-Length: 42", headers)
    producer.parse_header("Content-Type: application/vscode-jsonrpc; charset=utf-16", headers)
    assert headers.content_length == 42
    assert headers.charset == "utf-16"


def test_invalid_content_length_is_reported():
    issues = _Issues()
    producer = StreamMessageProducer(issues)
    headers = Headers()
    producer.parse_header("Content-Length: abc", headers)
    assert headers.content_length == -1
    assert len(issues.issues) == 1
    assert issues.issues[0].code == Level.SEVERE
    assert "abc" in issues.issues[0].text


def test_missing_content_length_reported_and_next_message_read():
    data = b"X-Other: 1\r\n\r\n" + _framed({"ok": True}).getvalue()
    received, issues = _collect(io.BytesIO(data))
    assert [json.loads(text) for text in received] == [{"ok": True}]
    assert len(issues) == 1
    assert "Content-Length" in issues[0].text


def test_charset_is_honoured():
    body = json.dumps({"x": "ü"}).encode("utf-16")
    data = (
        f"Content-Length: {len(body)}\r\nContent-Type: application/json; charset=utf-16\r\n\r\n"
    ).encode("ascii") + body
    received, issues = _collect(io.BytesIO(data))
    assert json.loads(received[0]) == {"x": "ü"}
    assert issues == []


def test_truncated_body_stops_without_consuming():
    data = b"Content-Length: 50\r\n\r\n{}"
    received, issues = _collect(io.BytesIO(data))
    assert received == []
    assert len(issues) == 1


def test_consumer_can_stop_listening():
    issues = _Issues()
    producer = StreamMessageProducer(issues)
    producer.bind(_framed({"n": 1}, {"n": 2}))
    received = []

    def consume(text):
        received.append(text)
        producer.keep_running = False

    producer.listen(consume)
    assert [json.loads(text) for text in received] == [{"n": 1}]
    assert producer.keep_running is False


def test_listen_without_stream_raises():
    producer = StreamMessageProducer(_Issues())
    with pytest.raises(RuntimeError):
        producer.listen(lambda text: None)


def test_write_message_accepts_objects_with_to_json():
    class Payload:
        def to_json(self):
            return {"method": "exit"}

    received, _ = _collect(_framed(Payload()))
    assert json.loads(received[0]) == {"method": "exit"}