"""Action results - what an action hands to the next one."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Generator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

V = TypeVar("V")


async def _settled(value: V) -> V:
    return value


@dataclass(frozen=True)
class Immediate(Generic[V]):
    """A value that is already available.

    Awaiting an Immediate yields its value without suspending, any number of
    times and without needing a running event loop to build it.
    """

    value: V

    @property
    def kind(self) -> str:
        return "immediate"

    def __await__(self) -> Generator[Any, None, V]:
        return _settled(self.value).__await__()


@dataclass(frozen=True)
class Deferred(Generic[V]):
    """A value that becomes available once the wrapped awaitable settles."""

    awaitable: Awaitable[V]

    @property
    def kind(self) -> str:
        return "deferred"

    def __await__(self) -> Generator[Any, None, V]:
        return self.awaitable.__await__()


ActionResult = Immediate | Deferred


def classify(value: Any) -> ActionResult | None:
    """Sort whatever an action returned into an ActionResult.

    Args:
        value: Raw return value of an action

    Returns:
        None when the action produced no result, the value itself when it is
        already an ActionResult, Deferred for awaitables and Immediate otherwise
    """
    if value is None:
        return None
    if isinstance(value, (Immediate, Deferred)):
        return value
    if inspect.isawaitable(value):
        return Deferred(value)
    return Immediate(value)


def is_pending(value: Any) -> bool:
    """True when the value must be awaited before it can be threaded on."""
    return inspect.isawaitable(value)
