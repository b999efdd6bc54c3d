"""Proxy objects standing in for mocked and spied targets."""

from __future__ import annotations

import types
import typing as t

from typing_extensions import TypeVar

from .controller import TargetController
from .errors import ProxyError
from .expectations import Mode

T = TypeVar("T", default=types.SimpleNamespace)

_CONTROLLER_SLOT = "_obj_mox_controller"


def _noop(*args: object, **kwargs: object) -> None:
    del args, kwargs


def _class_function(target: object, name: str) -> types.FunctionType | None:
    """Return the plain function *name* resolves to on the class of *target*.

    Instance attributes shadow the class, and descriptors other than plain
    functions (static and class methods, properties) are left alone.
    """
    if name in getattr(target, "__dict__", {}):
        return None
    for klass in type(target).__mro__:
        if name in vars(klass):
            value = vars(klass)[name]
            return value if isinstance(value, types.FunctionType) else None
    return None


def _attribute(proxy: _Proxy, target: object, name: str) -> t.Any:
    # Methods are bound to the proxy so calls a target makes on itself are
    # routed through the double as well.
    func = _class_function(target, name)
    if func is not None:
        return func.__get__(proxy)
    return getattr(target, name)


class _Proxy:
    """Attribute-forwarding wrapper around a target object."""

    __slots__ = (_CONTROLLER_SLOT,)

    def __init__(self, controller: TargetController) -> None:
        object.__setattr__(self, _CONTROLLER_SLOT, controller)

    def __setattr__(self, name: str, value: object) -> None:
        setattr(controller_of(self).target, name, value)

    def __delattr__(self, name: str) -> None:
        delattr(controller_of(self).target, name)

    def __dir__(self) -> t.Iterable[str]:
        return dir(controller_of(self).target)

    @property  # type: ignore[misc]
    def __class__(self) -> type:
        """Report the class of the target, as seen by ``isinstance`` and ``super``."""
        return type(controller_of(self).target)

    def __repr__(self) -> str:
        controller = controller_of(self)
        return f"<{type(self).__name__} of {controller.target!r}>"


class MockProxy(_Proxy):
    """Serve methods with registered expectations; forward everything else."""

    __slots__ = ()

    def __getattr__(self, name: str) -> t.Any:
        controller = controller_of(self)
        if name in controller.expectations:
            return _mocked(self, controller, name)
        if hasattr(controller.target, name):
            return _attribute(self, controller.target, name)
        if name.startswith("__") and name.endswith("__"):
            msg = f"{controller.target!r} has no attribute {name!r}"
            raise AttributeError(msg)
        if controller.mock_any:
            return _spied(controller, name, _noop)
        # Unknown methods dispatch with no expectations and so always raise
        # UnmatchedCallError when called.
        return _mocked(self, controller, name)


class SpyProxy(_Proxy):
    """Record every method call and forward it to the real target."""

    __slots__ = ()

    def __getattr__(self, name: str) -> t.Any:
        controller = controller_of(self)
        value = _attribute(self, controller.target, name)
        if callable(value):
            return _spied(controller, name, value)
        return value


def _mocked(
    proxy: MockProxy, controller: TargetController, name: str
) -> t.Callable[..., t.Any]:
    def _mock_method(*args: t.Any, **kwargs: t.Any) -> t.Any:
        return controller.dispatch_mock(proxy, name, args, kwargs)

    _mock_method.__name__ = name
    return _mock_method


def _spied(
    controller: TargetController, name: str, real: t.Callable[..., t.Any]
) -> t.Callable[..., t.Any]:
    def _spied_method(*args: t.Any, **kwargs: t.Any) -> t.Any:
        return controller.dispatch_spy(real, name, args, kwargs)

    _spied_method.__name__ = name
    return _spied_method


def controller_of(proxy: object) -> TargetController:
    """Return the controller behind *proxy* or raise :class:`ProxyError`."""
    if not isinstance(proxy, _Proxy):
        msg = f"{proxy!r} is not an obj-mox proxy; wrap it with mock() or spy()"
        raise ProxyError(msg)
    return object.__getattribute__(proxy, _CONTROLLER_SLOT)


def mock(target: T | None = None, *, mock_any: bool = False) -> T:
    """Wrap *target* so expected methods can be scripted with ``when``.

    Without a target a fresh :class:`types.SimpleNamespace` is wrapped. With
    ``mock_any=True`` any method the target does not define is accepted and
    recorded as a call to a no-op.
    """
    if target is None:
        target = t.cast(T, types.SimpleNamespace())
    controller = TargetController(target, Mode.MOCK, mock_any=mock_any)
    return t.cast(T, MockProxy(controller))


def spy(target: T) -> T:
    """Wrap *target* so every method call is recorded and then forwarded."""
    controller = TargetController(target, Mode.SPY)
    return t.cast(T, SpyProxy(controller))


__all__ = ["MockProxy", "SpyProxy", "controller_of", "mock", "spy"]
