"""Helpers building the repeat ranges of expectations and verifications."""

from __future__ import annotations

import math

from .expectations import ExpectationOptions, RepeatRange


def times(
    start: float,
    stop: float | ExpectationOptions | None = None,
    options: ExpectationOptions | None = None,
) -> ExpectationOptions:
    """Expect between ``start`` and ``stop`` calls, or exactly ``start``.

    ``stop`` may be omitted and the prior options passed in its place, so
    ``times(2, at_least(1))`` reads naturally. When *options* already carries
    a range the two are intersected; an empty intersection raises
    ``ValueError``.
    """
    if isinstance(stop, ExpectationOptions):
        options, stop = stop, None
    if stop is None:
        stop = start
    if options is None:
        options = ExpectationOptions()
    return options.narrow(RepeatRange(start, stop))


def never(options: ExpectationOptions | None = None) -> ExpectationOptions:
    """Expect no calls at all."""
    return times(0, options=options)


def once(options: ExpectationOptions | None = None) -> ExpectationOptions:
    """Expect exactly one call."""
    return times(1, options=options)


def twice(options: ExpectationOptions | None = None) -> ExpectationOptions:
    """Expect exactly two calls."""
    return times(2, options=options)


def at_least(
    count: float, options: ExpectationOptions | None = None
) -> ExpectationOptions:
    """Expect ``count`` calls or more."""
    return times(count, math.inf, options)


def at_most(
    count: float, options: ExpectationOptions | None = None
) -> ExpectationOptions:
    """Expect no more than ``count`` calls."""
    return times(0, count, options)


__all__ = ["at_least", "at_most", "never", "once", "times", "twice"]
