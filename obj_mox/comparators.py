"""Argument constraints used to match calls against expectations."""

from __future__ import annotations

import abc
import typing as t

# Values of these types match a type constraint only when their concrete type
# is the constraint itself, so ``True`` is not accepted where ``int`` is asked.
_PRIMITIVE_TYPES: frozenset[type] = frozenset(
    {bool, int, float, complex, str, bytes, type(None)}
)


class Comparator(abc.ABC):
    """Callable returning ``True`` when a value matches."""

    @abc.abstractmethod
    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""

    def describe(self) -> str:
        """Return the label used in verification messages."""
        return repr(self)


class Any(Comparator):
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True

    def describe(self) -> str:
        """Render the wildcard by name."""
        return "Any"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Any)

    def __hash__(self) -> int:
        return hash(Any)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "Any()"


ANY = Any()


class Literal(Comparator):
    """Match values strictly equal to ``expected``."""

    __slots__ = ("expected",)

    def __init__(self, expected: object) -> None:
        self.expected = expected

    def __call__(self, value: object) -> bool:
        """Return ``True`` for the same object or an equal one of the same type."""
        if value is self.expected:
            return True
        if type(value) is not type(self.expected):
            return False
        return bool(value == self.expected)

    def describe(self) -> str:
        """Render the expected value in its literal form."""
        return repr(self.expected)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Literal({self.expected!r})"


class IsA(Comparator):
    """Match instances of ``typ``, or ``typ`` itself passed as a value."""

    __slots__ = ("typ",)

    def __init__(self, typ: type) -> None:
        self.typ = typ

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` belongs to ``typ`` or is ``typ``."""
        if value is self.typ:
            return True
        if self.typ in _PRIMITIVE_TYPES:
            return type(value) is self.typ
        return isinstance(value, self.typ)

    def describe(self) -> str:
        """Render the type by name."""
        return self.typ.__name__

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"IsA({self.typ.__name__})"


class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    __slots__ = ("func",)

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def describe(self) -> str:
        """Render the predicate by its function name."""
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"Predicate({name})"

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Predicate({self.func!r})"


def as_constraint(raw: object) -> Comparator:
    """Normalise a registration argument into a :class:`Comparator`."""
    if isinstance(raw, Comparator):
        return raw
    if raw is Any:
        return ANY
    if isinstance(raw, type):
        return IsA(raw)
    return Literal(raw)


def matches(constraint: object, value: object) -> bool:
    """Return ``True`` if *value* satisfies *constraint*."""
    return as_constraint(constraint)(value)


def describe(constraint: object) -> str:
    """Return the verification-message label for *constraint*."""
    return as_constraint(constraint).describe()


__all__ = [
    "ANY",
    "Any",
    "Comparator",
    "IsA",
    "Literal",
    "Predicate",
    "as_constraint",
    "describe",
    "matches",
]
