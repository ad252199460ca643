"""Unified outcome type for fallible filesystem operations."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorKind(str, enum.Enum):
    RESOURCE_ACCESS = "resource_access"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class Outcome:
    """Result of an operation that may fail without raising.

    ``kind`` and ``message`` are only set on failure.
    """

    ok: bool
    kind: ErrorKind | None = None
    message: str = ""

    @classmethod
    def success(cls) -> Outcome:
        return cls(ok=True)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> Outcome:
        return cls(ok=False, kind=kind, message=message)
