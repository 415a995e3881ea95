# lspkit

Building blocks for Language Server Protocol servers in plain Python, with
no third-party dependencies, and a small example server built from them.

## Modules

- `lspkit.messages`: `RequestMessage`, `NotificationMessage` and
  `ResponseMessage` (each with `to_json()`), `parse_message()` to turn JSON
  text, bytes or a dict into one of them (raising `ValueError` on anything
  else), and `cancel_notification(request_id)` to build a `$/cancelRequest`
  notification.
- `lspkit.endpoint`: `GenericEndpoint` keeps handlers per method
  (`register_request_handler`, `register_notify_handler`) and dispatches with
  `on_request`, `notify` and `on_response`; it returns `False` and logs a
  warning when no handler is registered.
- `lspkit.stream`: `StreamMessageProducer` reads `Content-Length` framed
  messages from a binary stream and passes each decoded body to a consumer;
  framing problems go to a `MessageIssueHandler`. `write_message()` writes
  one framed message from bytes, text, an object with `to_json()` or any
  JSON-serialisable value.
- `lspkit.server`: `LanguageServer` and `TcpLanguageServer`, plus the
  `main()` behind the `lspkit-server` command.
- Protocol types, each a dataclass with `to_json()` and `from_json()`:
  - `lspkit.types`: `Position`, `Range`, `Location`, `LinkLocation`,
    `LocationLink`, `TextDocumentIdentifier`, `TextDocumentItem`,
    `ChangeAnnotation`, `TextEdit`, `FormattingOptions`.
  - `lspkit.completion`: `CompletionItem` (with `inserted_content()`),
    `CompletionList`, `CompletionParams`, `CompletionContext`, `CodeAction`
    and the enums `CompletionItemKind`, `InsertTextFormat`,
    `CompletionTriggerKind`.
  - `lspkit.text_document`: `CodeLens`, `ContentChangeEvent`,
    `DidChangeParams`, `DocumentLink`, `FoldingRange`, `LinkedEditingRanges`,
    `PublishDiagnosticsParams`, `ReferenceParams`, `SelectionRange`,
    `TypeHierarchyParams`, `TypeHierarchyItem` and `TypeHierarchyDirection`.
  - `lspkit.language`: `StatusReport`, `ActionableNotification`,
    `ProgressReport`, `EventNotification`, `MessageType`, `EventType`.
  `from_json()` raises `ValueError` for missing or wrongly typed members.
- Utilities:
  - `lspkit.condition.Condition`: hand one value to a waiting thread
    (`notify`, `wait` with an optional timeout in milliseconds).
  - `lspkit.context`: `Key`, the immutable `Context`, and the context
    managers `with_context` and `with_context_value`.
  - `lspkit.scope_exit`: `make_scope_exit()` returns a `ScopeExit` context
    manager that calls a function when the block ends unless `release()` was
    called.
  - `lspkit.lru_cache.LruCache`: a small least-recently-used cache.
  - `lspkit.any.Any`: a JSON value kept as text with its `JsonType`.
  - `lspkit.log`: `Level`, the abstract `Log`, `StreamLog` (writes to stderr
    or a given stream), `MessageIssue` and `MessageIssueHandler`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The example server

```
lspkit-server
```

serves over standard input and output. To serve over TCP instead:

```
lspkit-server --port 9333 --address 127.0.0.1
```

The TCP server accepts one connection at a time. `-h`/`--help` prints the
options. The server:

- answers `initialize` with
  `{"capabilities": {"codeLensProvider": {"resolveProvider": true}}}`;
- answers `textDocument/definition` with an empty list, logging when the
  request was cancelled;
- records `$/cancelRequest` so a running request can see it was cancelled;
- stops reading on the `exit` notification;
- answers any other request with error `-32601` (method not found), and a
  request whose handler raised with error `-32603`.

The same behaviour is available in code:

```python
from lspkit.server import LanguageServer

server = LanguageServer()
response = server.handle({"jsonrpc": "2.0", "id": 1, "method": "initialize"})
assert response.to_json() == {
    "jsonrpc": "2.0",
    "id": 1,
    "result": {"capabilities": {"codeLensProvider": {"resolveProvider": True}}},
}
```

`LanguageServer.serve(reader, writer)` runs it over any pair of binary
streams; `stop()` ends serving.

## Examples

Framing a message and reading it back:

```python
import io

from lspkit.log import MessageIssueHandler
from lspkit.stream import StreamMessageProducer, write_message


class Issues(MessageIssueHandler):
    def handle(self, issues):
        print([str(issue) for issue in issues])


buffer = io.BytesIO()
write_message(buffer, {"jsonrpc": "2.0", "method": "exit"})
buffer.seek(0)

bodies = []
StreamMessageProducer(Issues(), buffer).listen(bodies.append)
assert bodies == ['{"jsonrpc":"2.0","method":"exit"}']
```

Protocol types round-trip through JSON-compatible dictionaries:

```python
from lspkit.types import Range

data = {"start": {"line": 1, "character": 0}, "end": {"line": 1, "character": 5}}
assert Range.from_json(data).to_json() == data
```

Per-request values without passing them through every call:

```python
from lspkit.context import Context, Key, with_context_value

request_id = Key()
with with_context_value(request_id, 10):
    assert Context.current().get(request_id) == 10
assert Context.current().get(request_id) is None
```

## What it does not do

- There is no client side: nothing starts a server process, sends requests
  and waits for their responses.
- There is no WebSocket transport; only byte streams and plain TCP.
- The example server handles only the methods listed above.
- Several nested protocol structures are kept as plain dictionaries rather
  than typed classes: commands, diagnostics, workspace edits, markup
  documentation and the versioned document identifier in `DidChangeParams`.