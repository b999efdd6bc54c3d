"""Aggregate pytest-bdd step definitions for obj-mox features."""

from .assertions import *  # noqa: F403
from .call_execution import *  # noqa: F403
from .proxy_setup import *  # noqa: F403

# Re-export all imported step definitions so ``from tests.steps import *``
# makes them available to scenario modules during collection.
__all__ = [
    name
    for name in globals()
    if not name.startswith("_") and name != "annotations"
]
