"""Action builders - small helpers that each return a single action."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from conveyor.kernel.action import Action, ensure_action, invoke
from conveyor.kernel.result import Deferred, Immediate

V = TypeVar("V")

action_logger = logging.getLogger("conveyor.actions")


def as_action(fn: Callable[..., V], *args: Any, **kwargs: Any) -> Callable[..., V]:
    """Bind fn to the given arguments; the action ignores its input.

    Example:
        as_action(greet, "Peter")() == greet("Peter")
    """
    ensure_action(fn)

    def _bound(_: Any = None) -> V:
        return fn(*args, **kwargs)

    return _bound


def tap(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Call fn for its side effect and pass the input through."""
    ensure_action(fn)

    def _tap(value: Any = None) -> Any:
        invoke(fn, value)
        return value

    return _tap


def always(value: V) -> Callable[..., V]:
    """An action that returns value whatever it receives."""

    def _always(_: Any = None) -> V:
        return value

    return _always


def ident() -> Callable[..., Any]:
    """An action that returns its input unchanged."""

    def _ident(value: Any = None) -> Any:
        return value

    return _ident


def log(value: Any = None) -> Any:
    """Log the input and pass it through."""
    action_logger.info("%r", value)
    return value


def say(message: str, *args: Any) -> Callable[..., Any]:
    """An action that logs a fixed message and passes its input through."""

    def _say(value: Any = None) -> Any:
        action_logger.info(message, *args)
        return value

    return _say


async def _sleep(seconds: float, value: V) -> V:
    await asyncio.sleep(seconds)
    return value


def sleep(ms: float) -> Callable[..., Deferred[Any]]:
    """An action that settles ms milliseconds later with the value it received."""

    def _sleeping(value: Any = None) -> Deferred[Any]:
        return Deferred(_sleep(ms / 1000, value))

    return _sleeping


def throw(error: BaseException | type[BaseException] | str) -> Action:
    """An action that always fails.

    Args:
        error: Exception instance or class to raise; a string is raised as
            RuntimeError(error).
    """
    if isinstance(error, str):
        error = RuntimeError(error)

    def _throw(_: Any = None) -> Any:
        raise error

    return _throw


def resolved(value: V) -> Immediate[V]:
    """Wrap a plain value so it threads like an awaitable result."""
    return Immediate(value)


return_ = resolved


def do_nothing(_: Any = None) -> None:
    """A no-op action."""


none = do_nothing
