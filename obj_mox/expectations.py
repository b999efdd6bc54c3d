"""Expectation records and the per-target expectation registry."""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import math
import typing as t

from ._validators import validate_repeat_range
from .comparators import Comparator, as_constraint
from .errors import ObjMoxError

logger = logging.getLogger(__name__)


class Mode(enum.StrEnum):
    """How an expectation takes part in dispatch."""

    MOCK = "mock"
    SPY = "spy"


@dc.dataclass(frozen=True, slots=True)
class RepeatRange:
    """Inclusive bounds on how many times an expectation may be hit."""

    start: float = 1
    stop: float = 1

    def __post_init__(self) -> None:
        validate_repeat_range(self.start, self.stop)

    def __contains__(self, hit: object) -> bool:
        return isinstance(hit, int) and self.start <= hit <= self.stop

    def intersect(self, other: RepeatRange) -> RepeatRange:
        """Return the narrower range covered by both ``self`` and *other*."""
        return RepeatRange(max(self.start, other.start), min(self.stop, other.stop))

    def describe(self) -> str:
        """Render the range as ``N``, ``at least N`` or ``A to B``."""
        if self.start == self.stop:
            return _format_bound(self.start)
        if math.isinf(self.stop):
            return f"at least {_format_bound(self.start)}"
        return f"{_format_bound(self.start)} to {_format_bound(self.stop)}"


def _format_bound(value: float) -> str:
    if math.isinf(value):
        return "infinite"
    return str(int(value))


DEFAULT_REPEAT = RepeatRange(1, 1)
UNLIMITED_REPEAT = RepeatRange(0, math.inf)


@dc.dataclass(slots=True)
class ExpectationOptions:
    """Registration and verification options built by the cardinality helpers."""

    repeat: RepeatRange | None = None

    def narrow(self, repeat: RepeatRange) -> ExpectationOptions:
        """Intersect the carried range with *repeat* in place."""
        self.repeat = repeat if self.repeat is None else self.repeat.intersect(repeat)
        return self


@dc.dataclass(slots=True, eq=False)
class Expectation:
    """Expected call of one method together with its scripted behaviour."""

    method: str
    mode: Mode
    args: tuple[Comparator, ...] = ()
    kwargs: dict[str, Comparator] = dc.field(default_factory=dict)
    repeat: RepeatRange = DEFAULT_REPEAT
    hit_count: int = 0
    return_value: t.Any = None
    error: BaseException | None = None
    delegate: t.Callable[..., t.Any] | None = None
    bound: bool = False

    @classmethod
    def build(
        cls,
        method: str,
        mode: Mode,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
        options: ExpectationOptions | None = None,
    ) -> Expectation:
        """Create an expectation, normalising raw constraints."""
        repeat = DEFAULT_REPEAT
        if options is not None and options.repeat is not None:
            repeat = options.repeat
        return cls(
            method=method,
            mode=mode,
            args=tuple(as_constraint(arg) for arg in args),
            kwargs={key: as_constraint(value) for key, value in kwargs.items()},
            repeat=repeat,
        )

    # ------------------------------------------------------------------
    # Behaviour setters
    # ------------------------------------------------------------------
    def returns(self, value: object) -> Expectation:
        """Return ``value`` when this expectation is matched."""
        self._require_mock("returns")
        self._clear_behaviour()
        self.return_value = value
        return self

    def raises(self, error: BaseException) -> Expectation:
        """Raise ``error`` unchanged when this expectation is matched."""
        self._require_mock("raises")
        self._clear_behaviour()
        self.error = error
        return self

    def then(
        self, delegate: t.Callable[..., t.Any], *, bound: bool = False
    ) -> Expectation:
        """Answer matched calls with ``delegate(*args, **kwargs)``.

        With ``bound=True`` the proxy that received the call is passed as the
        first positional argument.
        """
        self._require_mock("then")
        self._clear_behaviour()
        self.delegate = delegate
        self.bound = bound
        return self

    def _require_mock(self, action: str) -> None:
        if self.mode is not Mode.MOCK:
            msg = f"{action}() is only valid for mock expectations"
            raise ObjMoxError(msg)

    def _clear_behaviour(self) -> None:
        self.return_value = None
        self.error = None
        self.delegate = None
        self.bound = False

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------
    @property
    def is_exhausted(self) -> bool:
        """Return ``True`` once the hit count reached the range's upper bound."""
        return self.hit_count >= self.repeat.stop

    @property
    def is_satisfied(self) -> bool:
        """Return ``True`` when the hit count lies inside the repeat range."""
        return self.hit_count in self.repeat

    def is_eligible(self) -> bool:
        """Return ``True`` while the expectation may still serve calls."""
        return self.mode is Mode.SPY or not self.is_exhausted

    def matches(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> bool:
        """Return ``True`` if the call arguments satisfy every constraint."""
        return match_arguments(self.args, self.kwargs, args, kwargs)

    def answer(
        self,
        receiver: object,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
    ) -> t.Any:
        """Run the scripted behaviour for a matched call."""
        if self.delegate is not None:
            if self.bound:
                return self.delegate(receiver, *args, **kwargs)
            return self.delegate(*args, **kwargs)
        if self.error is not None:
            raise self.error
        return self.return_value


def match_arguments(
    arg_constraints: t.Sequence[Comparator],
    kwarg_constraints: t.Mapping[str, Comparator],
    args: t.Sequence[object],
    kwargs: t.Mapping[str, object],
) -> bool:
    """Match a call's arguments against positional and keyword constraints."""
    if len(arg_constraints) != len(args):
        return False
    if kwarg_constraints.keys() != kwargs.keys():
        return False
    for constraint, value in zip(arg_constraints, args, strict=True):
        if not constraint(value):
            return False
    return all(
        constraint(kwargs[key]) for key, constraint in kwarg_constraints.items()
    )


class ExpectationRegistry:
    """Ordered expectations for one target, grouped by method name."""

    def __init__(self) -> None:
        self._by_method: dict[str, list[Expectation]] = {}

    def __contains__(self, method: object) -> bool:
        return method in self._by_method

    def __iter__(self) -> t.Iterator[Expectation]:
        for group in self._by_method.values():
            yield from group

    def __len__(self) -> int:
        return sum(len(group) for group in self._by_method.values())

    def register(self, expectation: Expectation) -> Expectation:
        """Append *expectation* after those already registered for its method."""
        self._by_method.setdefault(expectation.method, []).append(expectation)
        logger.debug(
            "Registered %s expectation for %r (repeat %s)",
            expectation.mode,
            expectation.method,
            expectation.repeat.describe(),
        )
        return expectation

    def for_method(self, method: str) -> list[Expectation]:
        """Return the expectations of *method* in registration order."""
        return list(self._by_method.get(method, ()))

    def find_candidate(
        self,
        method: str,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
    ) -> Expectation | None:
        """Return the first eligible expectation matching the call, if any."""
        for expectation in self._by_method.get(method, ()):
            if expectation.is_eligible() and expectation.matches(args, kwargs):
                return expectation
        return None


__all__ = [
    "DEFAULT_REPEAT",
    "UNLIMITED_REPEAT",
    "Expectation",
    "ExpectationOptions",
    "ExpectationRegistry",
    "Mode",
    "RepeatRange",
    "match_arguments",
]
