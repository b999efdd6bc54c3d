"""Append-only record of the calls made through a proxy."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .expectations import match_arguments

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .comparators import Comparator


@dc.dataclass(frozen=True, slots=True, eq=False)
class Invocation:
    """Arguments of one recorded call.

    Invocations compare and hash by identity so each recorded call stays
    distinct even when its arguments are unhashable.
    """

    method: str
    args: tuple[t.Any, ...] = ()
    kwargs: dict[str, t.Any] = dc.field(default_factory=dict)
    sequence: int = 0

    def __repr__(self) -> str:
        """Return the call as it would be written in code."""
        parts = [repr(arg) for arg in self.args]
        parts.extend(f"{key}={value!r}" for key, value in self.kwargs.items())
        return f"{self.method}({', '.join(parts)})"


class InvocationJournal:
    """Calls recorded for one target, kept in call order per method."""

    def __init__(self) -> None:
        self._by_method: dict[str, list[Invocation]] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> t.Iterator[Invocation]:
        entries = [inv for group in self._by_method.values() for inv in group]
        return iter(sorted(entries, key=lambda inv: inv.sequence))

    def record(
        self,
        method: str,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
    ) -> Invocation:
        """Append a call of *method* and return its record."""
        invocation = Invocation(
            method=method,
            args=tuple(args),
            kwargs=dict(kwargs),
            sequence=self._count,
        )
        self._by_method.setdefault(method, []).append(invocation)
        self._count += 1
        return invocation

    def for_method(self, method: str) -> list[Invocation]:
        """Return the calls of *method* in the order they were made."""
        return list(self._by_method.get(method, ()))

    def count_matching(
        self,
        method: str,
        arg_constraints: t.Sequence[Comparator],
        kwarg_constraints: t.Mapping[str, Comparator],
    ) -> int:
        """Count recorded calls of *method* satisfying the constraints."""
        return sum(
            1
            for inv in self._by_method.get(method, ())
            if match_arguments(arg_constraints, kwarg_constraints, inv.args, inv.kwargs)
        )


__all__ = ["Invocation", "InvocationJournal"]
