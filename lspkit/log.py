"""Logging levels, the logger interface and message issues."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence, TextIO


class Level(IntEnum):
    """Message severity. INFO shares its value with WARNING."""

    OFF = 1
    SEVERE = 2
    WARNING = 3
    INFO = 3
    CONFIG = 4
    FINE = 5
    FINER = 6
    FINEST = 7
    ALL = 8


class Log(ABC):
    """Receives log messages at a given level."""

    @abstractmethod
    def log(self, level: Level, msg: str) -> None:
        """Record ``msg`` at ``level``."""

    def info(self, msg: str) -> None:
        self.log(Level.INFO, msg)

    def error(self, msg: str) -> None:
        self.log(Level.SEVERE, msg)

    def warning(self, msg: str) -> None:
        self.log(Level.WARNING, msg)


class StreamLog(Log):
    """Writes every message on its own line to a text stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def log(self, level: Level, msg: str) -> None:
        print(msg, file=self.stream if self.stream is not None else sys.stderr)


@dataclass(frozen=True)
class MessageIssue:
    """A problem found while parsing or validating a message."""

    text: str
    code: Level

    def __str__(self) -> str:
        return self.text


class MessageIssueHandler(ABC):
    """Handles issues found while parsing or validating a message."""

    @abstractmethod
    def handle(self, issues: Sequence[MessageIssue]) -> None:
        """Handle a non-empty sequence of issues."""