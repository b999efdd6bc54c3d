"""Verification of hit counts against repeat ranges."""

from __future__ import annotations

import logging
import typing as t
from textwrap import indent

from .errors import VerificationFailure
from .expectations import DEFAULT_REPEAT, RepeatRange

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .comparators import Comparator
    from .expectations import ExpectationRegistry
    from .journal import Invocation, InvocationJournal

logger = logging.getLogger(__name__)


def _format_constraints(
    args: t.Sequence[Comparator], kwargs: t.Mapping[str, Comparator]
) -> str:
    parts = [constraint.describe() for constraint in args]
    parts.extend(f"{key}={constraint.describe()}" for key, constraint in kwargs.items())
    if not parts:
        return "no argument"
    return f"arguments ({', '.join(parts)})"


def _describe_invocations(invocations: t.Sequence[Invocation]) -> str:
    if not invocations:
        return "(none)"
    return "\n".join(repr(inv) for inv in invocations)


def _format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def describe_failure(
    method: str,
    args: t.Sequence[Comparator],
    kwargs: t.Mapping[str, Comparator],
    hit: int,
    repeat: RepeatRange,
) -> str:
    """Return the headline of a failed count check."""
    message = (
        f"Expecting method {method!r} to be called with "
        f"{_format_constraints(args, kwargs)} for {repeat.describe()} time(s)"
    )
    if hit:
        message += f" instead of {hit} time(s)"
    return message


def validate_repetition(
    method: str,
    args: t.Sequence[Comparator],
    kwargs: t.Mapping[str, Comparator],
    hit: int,
    repeat: RepeatRange | None = None,
    *,
    recorded: t.Sequence[Invocation] | None = None,
) -> None:
    """Raise :class:`VerificationFailure` unless ``hit`` lies within ``repeat``."""
    repeat = repeat or DEFAULT_REPEAT
    if hit in repeat:
        return
    headline = describe_failure(method, args, kwargs, hit, repeat)
    message = headline
    if recorded is not None:
        message = _format_sections(
            headline,
            [("Recorded invocations", _describe_invocations(recorded))],
        )
    logger.debug("Verification failed: %s", headline)
    raise VerificationFailure(method, hit, repeat, message)


class ExpectationReplayVerifier:
    """Check the final hit count of every registered expectation."""

    def verify(self, registry: ExpectationRegistry) -> None:
        """Raise on the first expectation whose count is out of range."""
        for exp in registry:
            validate_repetition(
                exp.method, exp.args, exp.kwargs, exp.hit_count, exp.repeat
            )
        logger.debug("Replayed %d expectation(s) successfully", len(registry))


class InvocationCountVerifier:
    """Count recorded calls that satisfy ad-hoc constraints."""

    def __init__(self, journal: InvocationJournal) -> None:
        self._journal = journal

    def verify(
        self,
        method: str,
        args: t.Sequence[Comparator],
        kwargs: t.Mapping[str, Comparator],
        repeat: RepeatRange | None = None,
    ) -> int:
        """Validate the matching call count for *method* and return it."""
        hit = self._journal.count_matching(method, args, kwargs)
        validate_repetition(
            method,
            args,
            kwargs,
            hit,
            repeat,
            recorded=self._journal.for_method(method),
        )
        return hit


__all__ = [
    "ExpectationReplayVerifier",
    "InvocationCountVerifier",
    "describe_failure",
    "validate_repetition",
]
