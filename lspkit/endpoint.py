"""Dispatch of incoming messages to handlers registered by method name."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from lspkit.log import Log, StreamLog

Handler = Callable[[Any], bool]


class GenericEndpoint:
    """Keeps handlers per method and calls the matching one for each message."""

    def __init__(self, log: Optional[Log] = None) -> None:
        self.log = log if log is not None else StreamLog()
        self.request_handlers: Dict[str, Handler] = {}
        self.response_handlers: Dict[str, Handler] = {}
        self.notification_handlers: Dict[str, Handler] = {}

    def register_request_handler(self, method: str, handler: Handler) -> None:
        self.request_handlers[method] = handler

    def register_notify_handler(self, method: str, handler: Handler) -> None:
        self.notification_handlers[method] = handler

    def on_request(self, message: Any) -> bool:
        """Pass a request to its handler; False if none is registered."""
        return self._dispatch(self.request_handlers, message.method, message, "request")

    def notify(self, message: Any) -> bool:
        """Pass a notification to its handler; False if none is registered."""
        return self._dispatch(self.notification_handlers, message.method, message, "notification")

    def on_response(self, method: str, message: Any) -> bool:
        """Pass a response for ``method`` to its handler; False if none is registered."""
        return self._dispatch(self.response_handlers, method, message, "response")

    def _dispatch(self, handlers: Dict[str, Handler], method: str, message: Any, what: str) -> bool:
        handler = handlers.get(method)
        if handler is None:
            self.log.warning(f"No {what} handler registered for method {method!r}")
            return False
        return bool(handler(message))