"""Reading and writing messages framed with Content-Length headers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Optional

from lspkit.log import Level, MessageIssue, MessageIssueHandler

CONTENT_LENGTH_HEADER = "Content-Length"
CONTENT_TYPE_HEADER = "Content-Type"
DEFAULT_CHARSET = "utf-8"

MessageConsumer = Callable[[str], object]


@dataclass
class Headers:
    """Header values collected for the message being read."""

    content_length: int = -1
    charset: str = ""

    def clear(self) -> None:
        """Forget the values of the previous message."""
        self.content_length = -1
        self.charset = ""


class StreamMessageProducer:
    """Reads framed messages from a binary stream and hands each body to a consumer.

    Problems with the framing are reported to the issue handler; reading
    stops at the end of the stream or once ``keep_running`` is set to False.
    """

    def __init__(
        self, issue_handler: MessageIssueHandler, stream: Optional[BinaryIO] = None
    ) -> None:
        self.issue_handler = issue_handler
        self._input = stream
        self.keep_running = False

    def bind(self, stream: BinaryIO) -> None:
        """Read from ``stream`` from now on."""
        self._input = stream

    def _issue(self, text: str) -> None:
        self.issue_handler.handle([MessageIssue(text, Level.SEVERE)])

    def parse_header(self, line: str, headers: Headers) -> None:
        """Record the value of one header line in ``headers``."""
        name, sep, value = line.partition(":")
        if not sep:
            return
        name = name.strip().lower()
        value = value.strip()
        if name == CONTENT_LENGTH_HEADER.lower():
            try:
                headers.content_length = int(value)
            except ValueError:
                self._issue(f"Invalid Content-Length header: {value}")
        elif name == CONTENT_TYPE_HEADER.lower():
            for part in value.split(";"):
                key, eq, setting = part.strip().partition("=")
                if eq and key.strip().lower() == "charset":
                    headers.charset = setting.strip().strip('"')

    def listen(self, consumer: MessageConsumer) -> None:
        """Read messages and pass each decoded body to ``consumer``."""
        if self._input is None:
            raise RuntimeError("no input stream is bound")
        self.keep_running = True
        headers = Headers()
        try:
            while self.keep_running:
                raw = self._input.readline()
                if not raw:
                    break
                line = raw.decode("ascii", errors="replace").rstrip("\r\n")
                if line:
                    self.parse_header(line, headers)
                    continue
                if not self._handle_message(headers, consumer):
                    break
                headers.clear()
        finally:
            self.keep_running = False

    def _handle_message(self, headers: Headers, consumer: MessageConsumer) -> bool:
        """Read one body; return False when the stream has ended."""
        if headers.content_length < 0:
            self._issue(f"Missing header {CONTENT_LENGTH_HEADER} in input")
            return True
        body = self._read_exactly(headers.content_length)
        if body is None:
            self._issue("Unexpected end of input while reading message content")
            return False
        charset = headers.charset or DEFAULT_CHARSET
        try:
            text = body.decode(charset)
        except (LookupError, UnicodeDecodeError) as exc:
            self._issue(f"Cannot decode message content as {charset}: {exc}")
            return True
        consumer(text)
        return True

    def _read_exactly(self, size: int) -> Optional[bytes]:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._input.read(remaining)
            if not chunk:
                return None
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)


def write_message(stream: BinaryIO, payload: Any) -> None:
    """Write ``payload`` with its Content-Length header.

    ``payload`` may be bytes, text, an object with ``to_json`` or any
    JSON-serialisable value.
    """
    if isinstance(payload, (bytes, bytearray)):
        body = bytes(payload)
    elif isinstance(payload, str):
        body = payload.encode(DEFAULT_CHARSET)
    else:
        if hasattr(payload, "to_json"):
            payload = payload.to_json()
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode(
            DEFAULT_CHARSET
        )
    header = f"{CONTENT_LENGTH_HEADER}: {len(body)}\r\n\r\n".encode("ascii")
    stream.write(header + body)
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()