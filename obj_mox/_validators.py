"""Shared validation helpers."""

from __future__ import annotations

import math


def validate_repeat_bound(value: float, *, name: str) -> None:
    """Ensure *value* is usable as one end of a repeat range."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"{name} must be a real number"
        raise TypeError(msg)

    if math.isnan(value) or value < 0:
        msg = f"{name} must be >= 0"
        raise ValueError(msg)

    if isinstance(value, float) and not math.isinf(value) and not value.is_integer():
        msg = f"{name} must be a whole number or infinity"
        raise ValueError(msg)


def validate_repeat_range(start: float, stop: float) -> None:
    """Ensure ``start``/``stop`` describe a non-empty inclusive range."""
    validate_repeat_bound(start, name="from")
    validate_repeat_bound(stop, name="to")
    if start > stop:
        msg = f"repeat range is empty: from={start} exceeds to={stop}"
        raise ValueError(msg)
