"""Audit sink — append-only record of login attempts."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from pathlib import Path

from appointment_manager.errors import SinkWriteError

logger = logging.getLogger(__name__)


class AuthResult(str, Enum):
    """Outcome of one authentication attempt."""

    SUCCESS = "success"
    FAILURE = "failure"

    def __bool__(self) -> bool:
        return self is AuthResult.SUCCESS


def _escape(name: str) -> str:
    # one attempt, one line: control characters and lone surrogates are escaped
    return "".join(
        ch if ch.isprintable() else ch.encode("unicode_escape").decode("ascii")
        for ch in name
    )


def format_audit_record(timestamp: datetime, result: AuthResult, name: str) -> str:
    """Render one audit line, e.g. ``2024-05-01T09:30:00 - Login Failed for user: bob``."""
    outcome = "Successful" if result is AuthResult.SUCCESS else "Failed"
    return f"{timestamp.isoformat()} - Login {outcome} for user: {_escape(name)}"


class AuditSink(ABC):
    """Destination for authentication outcome records."""

    @abstractmethod
    def record(self, timestamp: datetime, result: AuthResult, name: str) -> None:
        """Append one record.  Raise :class:`SinkWriteError` on failure."""


class FileAuditSink(AuditSink):
    """Appends one line per attempt to a text file, flushing every write."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def record(self, timestamp: datetime, result: AuthResult, name: str) -> None:
        line = format_audit_record(timestamp, result, name)
        try:
            with self._path.open("a", encoding="utf-8", errors="backslashreplace") as fh:
                fh.write(line + "\n")
                fh.flush()
        except (OSError, ValueError) as exc:
            raise SinkWriteError(f"Cannot append to {self._path}: {exc}") from exc
        logger.debug("Audit record written to %s", self._path)
