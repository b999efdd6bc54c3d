"""Entry points registering expectations on, and verifying, proxies."""

from __future__ import annotations

import typing as t

from .doubles import controller_of
from .errors import ProxyError
from .expectations import UNLIMITED_REPEAT, ExpectationOptions, Mode

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .controller import TargetController
    from .expectations import Expectation
    from .journal import Invocation


def _reject_dunder(name: str) -> None:
    if name.startswith("__") and name.endswith("__"):
        msg = f"Cannot use special attribute {name!r} as a method name"
        raise AttributeError(msg)


class ExpectationBuilder:
    """Turn ``builder.method(*constraints)`` into a registered expectation."""

    __slots__ = ("_controller", "_mode", "_options")

    def __init__(
        self,
        controller: TargetController,
        mode: Mode,
        options: ExpectationOptions | None = None,
    ) -> None:
        self._controller = controller
        self._mode = mode
        self._options = options

    def __getattr__(self, name: str) -> t.Callable[..., Expectation]:
        _reject_dunder(name)

        def _register(*args: t.Any, **kwargs: t.Any) -> Expectation:
            return self._controller.register(
                name, self._mode, args, kwargs, self._options
            )

        return _register


class VerificationBuilder:
    """Turn ``builder.method(*constraints)`` into an ad-hoc call count check."""

    __slots__ = ("_controller", "_options")

    def __init__(
        self,
        controller: TargetController,
        options: ExpectationOptions | None = None,
    ) -> None:
        self._controller = controller
        self._options = options

    def __getattr__(self, name: str) -> t.Callable[..., int]:
        _reject_dunder(name)

        def _verify(*args: t.Any, **kwargs: t.Any) -> int:
            return self._controller.verify_calls(name, args, kwargs, self._options)

        return _verify


def _require_mode(proxy: object, mode: Mode, action: str) -> TargetController:
    controller = controller_of(proxy)
    if controller.mode is not mode:
        msg = f"{action}() requires a {mode} proxy, got a {controller.mode} proxy"
        raise ProxyError(msg)
    return controller


def when(
    proxy: object, options: ExpectationOptions | None = None
) -> ExpectationBuilder:
    """Script the answer of a mocked method.

    ``when(foo).bar("x").returns(1)`` makes the next matching ``foo.bar("x")``
    return ``1``. Each expectation serves one call unless *options* say
    otherwise; later registrations take over once earlier ones are used up.
    """
    controller = _require_mode(proxy, Mode.MOCK, "when")
    return ExpectationBuilder(controller, Mode.MOCK, options)


def whenever(proxy: object) -> ExpectationBuilder:
    """Like :func:`when`, but the expectation serves any number of calls."""
    return when(proxy, ExpectationOptions(repeat=UNLIMITED_REPEAT))


def expect(
    proxy: object, options: ExpectationOptions | None = None
) -> ExpectationBuilder:
    """Declare how often a spied method should be called with given arguments."""
    controller = _require_mode(proxy, Mode.SPY, "expect")
    return ExpectationBuilder(controller, Mode.SPY, options)


def verify(
    proxy: object, options: ExpectationOptions | bool | None = None
) -> VerificationBuilder:
    """Verify calls made through *proxy*.

    Passing ``True`` immediately checks every registered expectation against
    its repeat range. The returned builder checks recorded calls ad hoc:
    ``verify(foo, twice()).bar(str)`` requires exactly two calls of ``bar``
    with a single ``str`` argument.
    """
    controller = controller_of(proxy)
    if isinstance(options, bool):
        if options:
            controller.verify_expectations()
        options = None
    return VerificationBuilder(controller, options)


def invocations(proxy: object, method: str | None = None) -> list[Invocation]:
    """Return the calls recorded by *proxy* in call order."""
    journal = controller_of(proxy).journal
    if method is None:
        return list(journal)
    return journal.for_method(method)


def expectations(proxy: object, method: str | None = None) -> list[Expectation]:
    """Return the expectations registered on *proxy* in registration order."""
    registry = controller_of(proxy).expectations
    if method is None:
        return list(registry)
    return registry.for_method(method)


__all__ = [
    "ExpectationBuilder",
    "VerificationBuilder",
    "expect",
    "expectations",
    "invocations",
    "verify",
    "when",
    "whenever",
]
