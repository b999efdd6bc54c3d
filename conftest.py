"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest


class Greeter:
    """Collaborator used as a mock and spy target throughout the tests."""

    def __init__(self, greeting: str = "hello") -> None:
        self.greeting = greeting
        self.say = lambda something: f"say:{something}"

    def greet(self, name: str) -> str:
        """Return the greeting followed by *name*."""
        return f"{self.greeting} {name}"

    def shout(self, name: str, *, times: int = 1) -> str:
        """Return an upper-case greeting repeated *times*."""
        return " ".join([self.greet(name).upper()] * times)


@pytest.fixture
def greeter() -> Greeter:
    """Return a fresh :class:`Greeter`."""
    return Greeter()


@pytest.fixture
def debug_logs(
    caplog: pytest.LogCaptureFixture,
) -> t.Iterator[pytest.LogCaptureFixture]:
    """Capture obj-mox debug records."""
    with caplog.at_level(logging.DEBUG, logger="obj_mox"):
        yield caplog
