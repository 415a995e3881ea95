"""A language server answering over standard streams or a TCP connection."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Optional, Sequence, Set, Tuple, Union

from lspkit.condition import Condition
from lspkit.endpoint import GenericEndpoint
from lspkit.log import Log, MessageIssue, MessageIssueHandler, StreamLog
from lspkit.messages import (
    CANCEL_METHOD,
    Message,
    NotificationMessage,
    RequestMessage,
    ResponseMessage,
    parse_message,
)
from lspkit.stream import StreamMessageProducer, write_message

INITIALIZE_METHOD = "initialize"
DEFINITION_METHOD = "textDocument/definition"
EXIT_METHOD = "exit"

METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603

DEFAULT_ADDRESS = "127.0.0.1"
DEFAULT_PORT = 9333

_ACCEPT_POLL_SECONDS = 0.2

CancelMonitor = Callable[[], bool]
RequestFunc = Callable[[RequestMessage, CancelMonitor], Any]


@dataclass
class _Call:
    message: RequestMessage
    response: Optional[ResponseMessage] = None

    @property
    def method(self) -> str:
        return self.message.method


class _LogIssueHandler(MessageIssueHandler):
    def __init__(self, log: Log) -> None:
        self._log = log

    def handle(self, issues: Sequence[MessageIssue]) -> None:
        for issue in issues:
            self._log.log(issue.code, issue.text)


class LanguageServer:
    """Answers initialize and definition requests and stops on exit.

    Requests are run on a small pool of workers while serving a stream; a
    cancel notification marks a request so its handler can notice it.
    """

    def __init__(self, log: Optional[Log] = None, max_workers: int = 2) -> None:
        self.log = log if log is not None else StreamLog()
        self.endpoint = GenericEndpoint(self.log)
        self.exit_event: Condition[bool] = Condition()
        self._max_workers = max_workers
        self._cancelled: Set[Any] = set()
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._producer: Optional[StreamMessageProducer] = None

        self.endpoint.register_request_handler(
            INITIALIZE_METHOD, self._request_handler(self._initialize)
        )
        self.endpoint.register_request_handler(
            DEFINITION_METHOD, self._request_handler(self._definition)
        )
        self.endpoint.register_notify_handler(EXIT_METHOD, self._on_exit)
        self.endpoint.register_notify_handler(CANCEL_METHOD, self._on_cancel)

    def _request_handler(self, func: RequestFunc) -> Callable[[_Call], bool]:
        def handler(call: _Call) -> bool:
            request_id = call.message.id
            result = func(call.message, lambda: self._is_cancelled(request_id))
            call.response = ResponseMessage(request_id, result)
            return True

        return handler

    def _is_cancelled(self, request_id: Any) -> bool:
        with self._lock:
            return request_id in self._cancelled

    def _initialize(self, message: RequestMessage, monitor: CancelMonitor) -> dict:
        return {"capabilities": {"codeLensProvider": {"resolveProvider": True}}}

    def _definition(self, message: RequestMessage, monitor: CancelMonitor) -> list:
        result: list = []
        if monitor():
            self.log.info("textDocument/definition request had been cancel.")
        return result

    def _on_exit(self, message: NotificationMessage) -> bool:
        self.stop()
        return True

    def _on_cancel(self, message: NotificationMessage) -> bool:
        params = message.params
        if hasattr(params, "id"):
            request_id = params.id
        elif isinstance(params, dict) and "id" in params:
            request_id = params["id"]
        else:
            self.log.warning("Cancel notification without a request id")
            return False
        with self._lock:
            self._cancelled.add(request_id)
        return True

    def handle(self, message: Union[Message, str, bytes, dict]) -> Optional[ResponseMessage]:
        """Process one message; return the response to a request, else None."""
        if not isinstance(message, (RequestMessage, NotificationMessage, ResponseMessage)):
            message = parse_message(message)
        if isinstance(message, RequestMessage):
            return self._handle_request(message)
        if isinstance(message, NotificationMessage):
            self.endpoint.notify(message)
            return None
        self.log.warning(f"Ignoring response to request {message.id!r}")
        return None

    def _handle_request(self, message: RequestMessage) -> ResponseMessage:
        call = _Call(message)
        try:
            handled = self.endpoint.on_request(call)
        except Exception as exc:
            self.log.error(f"Request {message.method} failed: {exc}")
            return ResponseMessage(
                message.id, error={"code": INTERNAL_ERROR, "message": str(exc)}
            )
        finally:
            with self._lock:
                self._cancelled.discard(message.id)
        if not handled or call.response is None:
            return ResponseMessage(
                message.id,
                error={"code": METHOD_NOT_FOUND, "message": f"Method not found: {message.method}"},
            )
        return call.response

    def _reply(self, message: RequestMessage, writer: BinaryIO) -> None:
        response = self.handle(message)
        if response is None:
            return
        try:
            with self._write_lock:
                write_message(writer, response)
        except (OSError, ValueError) as exc:
            self.log.error(f"Cannot send response to request {message.id!r}: {exc}")

    def serve(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Read messages from ``reader`` and write responses to ``writer``.

        Returns when the input ends or the server is stopped.
        """
        producer = StreamMessageProducer(_LogIssueHandler(self.log), reader)
        with self._lock:
            self._producer = producer
        try:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:

                def consume(text: str) -> None:
                    try:
                        message = parse_message(text)
                    except ValueError as exc:
                        self.log.error(f"Invalid message: {exc}")
                        return
                    if isinstance(message, RequestMessage):
                        pool.submit(self._reply, message, writer)
                    else:
                        self.handle(message)

                producer.listen(consume)
        finally:
            with self._lock:
                if self._producer is producer:
                    self._producer = None

    def stop(self) -> None:
        """Stop reading messages and signal the exit event."""
        with self._lock:
            producer = self._producer
        if producer is not None:
            producer.keep_running = False
        self.exit_event.notify(True)


class TcpLanguageServer:
    """Accepts TCP connections one at a time and serves each with a LanguageServer."""

    def __init__(
        self,
        address: str = DEFAULT_ADDRESS,
        port: int = DEFAULT_PORT,
        log: Optional[Log] = None,
        max_workers: int = 2,
    ) -> None:
        self.address = address
        self.port = int(port)
        self.point = LanguageServer(log, max_workers)
        self.ready = threading.Event()
        self.server_address: Optional[Tuple[str, int]] = None
        self._stopping = threading.Event()
        self._lock = threading.Lock()
        self._connection: Optional[socket.socket] = None

    def run(self) -> None:
        """Listen and serve connections until stopped."""
        with socket.create_server((self.address, self.port)) as listener:
            listener.settimeout(_ACCEPT_POLL_SECONDS)
            host, port = listener.getsockname()[:2]
            self.server_address = (host, port)
            self.ready.set()
            while not self._stopping.is_set():
                try:
                    connection, _ = listener.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    self.point.log.error(f"Accept failed: {exc}")
                    break
                self._serve_connection(connection)

    def _serve_connection(self, connection: socket.socket) -> None:
        connection.settimeout(None)
        with self._lock:
            if self._stopping.is_set():
                connection.close()
                return
            self._connection = connection
        try:
            with connection, connection.makefile("rb") as reader, connection.makefile(
                "wb"
            ) as writer:
                self.point.serve(reader, writer)
        except OSError as exc:
            self.point.log.warning(f"Connection ended: {exc}")
        finally:
            with self._lock:
                self._connection = None

    def stop(self) -> None:
        """Stop accepting connections and end the current one."""
        self._stopping.set()
        self.point.stop()
        with self._lock:
            connection = self._connection
        if connection is not None:
            try:
                connection.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the language server on standard streams, or over TCP with --port."""
    parser = argparse.ArgumentParser(
        prog="lspkit-server",
        description="Allowed options",
        add_help=False,
        exit_on_error=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="produce help message")
    parser.add_argument(
        "--port", type=int, help="serve over TCP on this port instead of standard streams"
    )
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="address to listen on")
    try:
        args, extra = parser.parse_known_args(argv)
    except argparse.ArgumentError as exc:
        print(f"Undefined input.Reason:{exc}")
        return 0
    if extra:
        print(f"Undefined input.Reason:unrecognised option '{extra[0]}'")
        return 0
    if args.help:
        print(parser.format_help())
        return 1

    if args.port is not None:
        tcp_server = TcpLanguageServer(args.address, args.port)
        try:
            tcp_server.run()
        except KeyboardInterrupt:
            tcp_server.stop()
        return 0

    server = LanguageServer()
    server.serve(sys.stdin.buffer, sys.stdout.buffer)
    return 0