"""Exception hierarchy for obj-mox."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import RepeatRange


class ObjMoxError(Exception):
    """Base class for errors raised by obj-mox itself."""


class ProxyError(ObjMoxError, TypeError):
    """Raised when an object is not a proxy of the required kind."""


class UnmatchedCallError(ObjMoxError, TypeError):
    """Raised when a mocked method is called with no eligible expectation."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(message)
        self.method = method


class VerificationError(ObjMoxError, AssertionError):
    """Base class for verification failures."""


class VerificationFailure(VerificationError):
    """Raised when a hit count falls outside its repeat range."""

    def __init__(
        self, method: str, hit: int, repeat: RepeatRange, message: str
    ) -> None:
        super().__init__(message)
        self.method = method
        self.hit = hit
        self.repeat = repeat


__all__ = [
    "ObjMoxError",
    "ProxyError",
    "UnmatchedCallError",
    "VerificationError",
    "VerificationFailure",
]
