"""Per-entry error taxonomy.

Every error is attributable to exactly one logical path and is recovered
locally: the run continues and the failure is reported as a result record.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    ACCESS = "AccessError"
    DECODE = "DecodeError"
    READ = "ReadError"


@dataclass(frozen=True)
class RecordError:
    """Immutable error payload attached to a failed ``ResultRecord``."""

    kind: ErrorKind
    message: str

    def describe(self, logical_path: str) -> str:
        return f"{self.kind.value}: {logical_path}: {self.message}"


class HashallError(Exception):
    """Base class for recoverable failures scoped to one logical path."""

    kind: ErrorKind = ErrorKind.READ

    def __init__(self, logical_path: str, message: str) -> None:
        super().__init__(f"{logical_path}: {message}")
        self.logical_path = logical_path
        self.message = message

    def to_record_error(self) -> RecordError:
        return RecordError(kind=self.kind, message=self.message)


class AccessError(HashallError):
    """Path unreadable or unlistable (permissions, vanished, dangling link)."""

    kind = ErrorKind.ACCESS


class DecodeError(HashallError):
    """Archive or archive member could not be parsed."""

    kind = ErrorKind.DECODE


class ReadError(HashallError):
    """I/O failure while streaming bytes for hashing."""

    kind = ErrorKind.READ


def describe_os_error(exc: OSError) -> str:
    """Render ``OSError`` without the redundant filename suffix."""
    if exc.strerror:
        return exc.strerror
    return str(exc) or exc.__class__.__name__


__all__ = [
    "ErrorKind",
    "RecordError",
    "HashallError",
    "AccessError",
    "DecodeError",
    "ReadError",
    "describe_os_error",
]
