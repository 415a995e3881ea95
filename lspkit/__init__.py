"""Language Server Protocol building blocks: messages, dispatch, framing, types and an example server."""

__version__ = "0.1.0"