"""Mocks and spies for Python objects with call-count verification.

Wrap an object with :func:`mock` or :func:`spy`, script or declare calls with
:func:`when`, :func:`whenever` and :func:`expect`, then check them with
:func:`verify`.
"""

from __future__ import annotations

from .builders import (
    ExpectationBuilder,
    VerificationBuilder,
    expect,
    expectations,
    invocations,
    verify,
    when,
    whenever,
)
from .cardinality import at_least, at_most, never, once, times, twice
from .comparators import ANY, Any, Comparator, IsA, Literal, Predicate
from .doubles import MockProxy, SpyProxy, mock, spy
from .errors import (
    ObjMoxError,
    ProxyError,
    UnmatchedCallError,
    VerificationError,
    VerificationFailure,
)
from .expectations import Expectation, ExpectationOptions, Mode, RepeatRange
from .journal import Invocation

any = ANY  # noqa: A001 - exported wildcard name

__all__ = [
    "ANY",
    "Any",
    "Comparator",
    "Expectation",
    "ExpectationBuilder",
    "ExpectationOptions",
    "Invocation",
    "IsA",
    "Literal",
    "MockProxy",
    "Mode",
    "ObjMoxError",
    "Predicate",
    "ProxyError",
    "RepeatRange",
    "SpyProxy",
    "UnmatchedCallError",
    "VerificationBuilder",
    "VerificationError",
    "VerificationFailure",
    "any",
    "at_least",
    "at_most",
    "expect",
    "expectations",
    "invocations",
    "mock",
    "never",
    "once",
    "spy",
    "times",
    "twice",
    "verify",
    "when",
    "whenever",
]
