"""Compositors: sequence, when, unless, do_simultaneously.

Each compositor returns a plain action. The engine cannot tell a composite
from a primitive action; it only sees the value or awaitable it returns.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from conveyor.kernel.action import Action, ensure_action, ensure_actions, invoke
from conveyor.kernel.errors import ConveyorError
from conveyor.kernel.result import ActionResult, Deferred, Immediate, is_pending

logger = logging.getLogger(__name__)

# Fire-and-forget tasks started by do_simultaneously; held so they are not
# garbage collected before they finish.
_background_tasks: set[asyncio.Task[Any]] = set()


async def _resume(pending: Awaitable[Any], rest: Sequence[Action]) -> Any:
    """Await the pending stage, then thread its value through the rest."""
    value = await pending
    for action in rest:
        value = invoke(action, value)
        if is_pending(value):
            value = await value
    return value


def do_sequentially(*actions: Action) -> Callable[..., ActionResult]:
    """Build one action that runs the given actions in order.

    Semantics:
        - The first action gets whatever the composite was called with
        - Plain results are threaded synchronously into the next action;
          a stage returning None hands the composite's input on instead
        - From the first awaitable on, every remaining action runs after the
          previous stage settles, receiving its value

    Args:
        *actions: Actions to chain, left to right.

    Returns:
        An action returning Immediate(final value) when every stage was
        synchronous, Deferred(chain) otherwise. When the engine installs
        that chain, actions queued after the composite wait for all of it.

    Raises:
        InvalidActionError: If any element is not callable.
    """
    chain = ensure_actions(actions)

    def _sequence(value: Any = None) -> ActionResult:
        result = None
        for index, action in enumerate(chain):
            if index > 0 and is_pending(result):
                return Deferred(_resume(result, chain[index:]))
            result = invoke(action, value if result is None else result)
        if is_pending(result):
            return Deferred(result)
        return Immediate(result)

    return _sequence


sequence = do_sequentially


def _passes(test: Any) -> bool:
    # Identity checks: 0 and "" pass, only None and False fail.
    return test is not None and test is not False


def when(predicate: Callable[..., Any], *actions: Action) -> Callable[..., ActionResult]:
    """Run the actions only when predicate(x) is neither None nor False.

    Args:
        predicate: Test applied to the incoming value.
        *actions: Actions run sequentially on the incoming value.

    Returns:
        An action returning the sequence's result, or Immediate(x) when the
        test fails.
    """
    test = ensure_action(predicate)
    run = do_sequentially(*actions)

    def _when(value: Any = None) -> ActionResult:
        if _passes(invoke(test, value)):
            return run(value)
        return Immediate(value)

    return _when


def unless(predicate: Callable[..., Any], *actions: Action) -> Callable[..., ActionResult]:
    """Run the actions only when predicate(x) is None or False."""
    test = ensure_action(predicate)
    run = do_sequentially(*actions)

    def _unless(value: Any = None) -> ActionResult:
        if _passes(invoke(test, value)):
            return Immediate(value)
        return run(value)

    return _unless


def _log_failure(task: asyncio.Task[Any]) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Simultaneous action failed: %r", error, exc_info=error)


def _running_loop(pending: Any) -> asyncio.AbstractEventLoop:
    try:
        return asyncio.get_running_loop()
    except RuntimeError as exc:
        coro = getattr(pending, "awaitable", pending)
        if inspect.iscoroutine(coro):
            coro.close()
        raise ConveyorError(
            "do_simultaneously needs a running event loop to start awaitable actions"
        ) from exc


def do_simultaneously(*actions: Action) -> Callable[..., None]:
    """Build one action that starts every given action at once.

    Semantics:
        - Every action gets the same incoming value
        - Awaitables are scheduled on the running loop and not waited for
        - Results are dropped; actions must do their own side effects
        - Failures of scheduled awaitables are logged, not raised
        - Awaitables need a running event loop to be scheduled on

    Raises:
        InvalidActionError: If any element is not callable.
        ConveyorError: When the composite is called outside a running
            event loop and a sub-action returns an awaitable.
    """
    branches = ensure_actions(actions)

    def _simultaneously(value: Any = None) -> None:
        for action in branches:
            result = invoke(action, value)
            if is_pending(result):
                task = asyncio.ensure_future(result, loop=_running_loop(result))
                _background_tasks.add(task)
                task.add_done_callback(_log_failure)

    return _simultaneously
