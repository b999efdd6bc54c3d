"""Per-target controller owning expectations, the journal and dispatch."""

from __future__ import annotations

import logging
import typing as t

from .comparators import as_constraint
from .errors import UnmatchedCallError
from .expectations import (
    Expectation,
    ExpectationOptions,
    ExpectationRegistry,
    Mode,
)
from .journal import InvocationJournal
from .verifiers import ExpectationReplayVerifier, InvocationCountVerifier

logger = logging.getLogger(__name__)


def _format_call(
    method: str, args: t.Sequence[object], kwargs: t.Mapping[str, object]
) -> str:
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return f"{method}({', '.join(parts)})"


class TargetController:
    """State and dispatch for one proxied target.

    Each proxy owns exactly one controller. Expectations are matched in
    registration order and the first eligible one wins, which lets stacked
    expectations script successive answers for identical arguments.
    """

    def __init__(self, target: object, mode: Mode, *, mock_any: bool = False) -> None:
        self.target = target
        self.mode = mode
        self.mock_any = mock_any
        self.expectations = ExpectationRegistry()
        self.journal = InvocationJournal()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(
        self,
        method: str,
        mode: Mode,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
        options: ExpectationOptions | None = None,
    ) -> Expectation:
        """Append a new expectation for *method* and return it."""
        expectation = Expectation.build(method, mode, args, kwargs, options)
        return self.expectations.register(expectation)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch_mock(
        self,
        receiver: object,
        method: str,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
    ) -> t.Any:
        """Serve a call of a mocked method from its expectations."""
        expectation = self.expectations.find_candidate(method, args, kwargs)
        if expectation is None:
            msg = (
                f"No expectation of method {method!r} matches the call "
                f"{_format_call(method, args, kwargs)}"
            )
            logger.debug("Unmatched mock call %s", _format_call(method, args, kwargs))
            raise UnmatchedCallError(method, msg)
        self._hit(expectation, method, args, kwargs)
        return expectation.answer(receiver, args, kwargs)

    def dispatch_spy(
        self,
        real: t.Callable[..., t.Any],
        method: str,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
    ) -> t.Any:
        """Record a call and forward it to the real implementation."""
        expectation = self.expectations.find_candidate(method, args, kwargs)
        if expectation is None:
            self.journal.record(method, args, kwargs)
        else:
            self._hit(expectation, method, args, kwargs)
        return real(*args, **kwargs)

    def _hit(
        self,
        expectation: Expectation,
        method: str,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
    ) -> None:
        expectation.hit_count += 1
        invocation = self.journal.record(method, args, kwargs)
        logger.debug(
            "Call %r matched %s expectation (hit %d, repeat %s)",
            invocation,
            expectation.mode,
            expectation.hit_count,
            expectation.repeat.describe(),
        )

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify_expectations(self) -> None:
        """Replay every registered expectation against its final hit count."""
        ExpectationReplayVerifier().verify(self.expectations)

    def verify_calls(
        self,
        method: str,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
        options: ExpectationOptions | None = None,
    ) -> int:
        """Check how many recorded calls of *method* satisfy the constraints."""
        repeat = options.repeat if options is not None else None
        return InvocationCountVerifier(self.journal).verify(
            method,
            tuple(as_constraint(arg) for arg in args),
            {key: as_constraint(value) for key, value in kwargs.items()},
            repeat,
        )


__all__ = ["TargetController"]
