"""Conveyor engine - buffers actions and runs them strictly one after another.

Example:
    io = conveyor()
    io.do(
        lambda: print("Hello"),
        lambda: asyncio.sleep(0.1),
        lambda: print("Round trip is complete"),
    )
    await io

prints "Hello", waits for the sleep to finish, then prints the last line.
Calling the same functions directly could print both lines before the
sleep is even awaited.

Two periodic steps drive each engine. The drain step moves one action from
the overflow buffer into the active queue when the queue is empty. The
execution step empties the active queue, chaining every action onto the
in-flight result of the one before it.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from conveyor.config import ConveyorConfig
from conveyor.kernel.action import Action, ensure_actions, invoke
from conveyor.kernel.errors import ActionExecutionError
from conveyor.kernel.result import Immediate, classify, is_pending
from conveyor.kernel.trace import Trace

logger = logging.getLogger(__name__)


class Conveyor:
    """Sequential action runner.

    Attributes:
        config: Validated engine configuration.
        trace: Engine events, recorded when config.trace is set.
    """

    def __init__(self, config: ConveyorConfig | None = None) -> None:
        self.config = config or ConveyorConfig()
        self.trace = Trace(enabled=self.config.trace)
        self._actions: deque[Action] = deque()
        self._buffer: deque[Action] = deque()
        self._chain: asyncio.Future[Any] | None = None
        self._scheduler: asyncio.Task[None] | None = None
        self._failure: Exception | None = None
        self._performed = 0

    def __repr__(self) -> str:
        return (
            f"Conveyor(name={self.config.name!r}, queued={len(self._actions)}, "
            f"buffered={len(self._buffer)}, in_flight={self._chain is not None})"
        )

    # -- enqueue -----------------------------------------------------------

    def do(self, *actions: Action) -> Conveyor:
        """Queue the given actions, in order."""
        return self.do_all(actions)

    def do_all(self, actions: Iterable[Action]) -> Conveyor:
        """Queue every action of the iterable, in order.

        Actions beyond the queue capacity go to the overflow buffer.
        Nothing runs until the next execution step.

        Raises:
            InvalidActionError: If any element is not callable. Nothing is
                queued in that case.
        """
        batch = ensure_actions(actions)
        for action in batch:
            if len(self._actions) >= self.config.capacity:
                self._buffer.append(action)
            else:
                self._actions.append(action)

        logger.debug(
            "%s: queued %d action(s) (queue=%d, buffer=%d)",
            self.config.name,
            len(batch),
            len(self._actions),
            len(self._buffer),
        )
        self.trace.record(
            "enqueue",
            info={"count": len(batch), "queued": len(self._actions), "buffered": len(self._buffer)},
        )

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Started by the first await / start() inside a loop.
            return self
        self.start()
        return self

    def is_complete(self) -> bool:
        """True when both the queue and the buffer are empty.

        An action may still be in flight when this returns True; use
        wait() to know when the work has settled.
        """
        return not self._actions and not self._buffer

    # -- scheduler ---------------------------------------------------------

    def start(self) -> Conveyor:
        """Start the scheduler on the running loop, if it is not running yet."""
        if self._scheduler is None:
            self._scheduler = asyncio.get_running_loop().create_task(
                self._run(), name=f"{self.config.name}-scheduler"
            )
        return self

    def close(self) -> None:
        """Stop the scheduler. Queued actions stay queued."""
        if self._scheduler is not None:
            self._scheduler.cancel()
            self._scheduler = None

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        drain_period = self.config.buffer_interval / 1000
        action_period = self.config.action_interval / 1000
        next_drain = loop.time() + drain_period
        next_action = loop.time() + action_period

        logger.debug("%s: scheduler started", self.config.name)
        try:
            while True:
                await asyncio.sleep(max(0.0, min(next_drain, next_action) - loop.time()))
                now = loop.time()
                # Drain before execute when both are due.
                if now >= next_drain:
                    self._drain()
                    next_drain = max(next_drain + drain_period, now)
                if now >= next_action:
                    try:
                        self._execute()
                    except Exception as exc:
                        # Actions left in the queue run on the next tick.
                        self._failure = exc
                        logger.error(
                            "%s: action failure: %r", self.config.name, exc, exc_info=exc
                        )
                    next_action = max(next_action + action_period, now)
        finally:
            logger.debug("%s: scheduler stopped", self.config.name)

    def _drain(self) -> None:
        if not self._actions and self._buffer:
            self._actions.append(self._buffer.popleft())
            self.trace.record("drain", info={"buffered": len(self._buffer)})

    def _execute(self) -> None:
        while self._actions:
            self._chain = self._perform(self._actions.popleft())

    # -- execute-one -------------------------------------------------------

    def _perform(self, action: Action) -> asyncio.Future[Any] | None:
        """Run one action, returning the new in-flight chain.

        With no chain in flight the action is called right away and errors
        propagate to the execution step, which keeps them for the next wait(). Otherwise it is chained onto the
        in-flight result and runs once that settles.
        """
        index = self._performed
        self._performed += 1
        logger.debug("%s: performing action #%d %r", self.config.name, index, action)

        if self._chain is not None:
            return asyncio.ensure_future(self._continue(self._chain, action, index))

        begin, started = self._begin(index)
        try:
            result = classify(invoke(action))
        except Exception as exc:
            self._finish(index, begin, started, exc)
            raise

        if result is None:
            self._finish(index, begin, started)
            return None
        if isinstance(result, Immediate):
            self._finish(index, begin, started)
            future = asyncio.get_running_loop().create_future()
            future.set_result(result.value)
            return future
        return asyncio.ensure_future(self._settle(result, action, index, begin, started))

    async def _settle(
        self,
        pending: Awaitable[Any],
        action: Action,
        index: int,
        begin: int | None,
        started: float,
    ) -> Any:
        try:
            value = await pending
        except Exception as exc:
            return await self._fail(exc, action, index, begin, started)
        self._finish(index, begin, started)
        return value

    async def _continue(self, previous: asyncio.Future[Any], action: Action, index: int) -> Any:
        # An unhandled failure upstream propagates from here and skips the action.
        value = await previous
        begin, started = self._begin(index)
        try:
            result = invoke(action, value)
            if is_pending(result):
                result = await result
        except Exception as exc:
            return await self._fail(exc, action, index, begin, started)
        self._finish(index, begin, started)
        return result

    async def _fail(
        self,
        error: Exception,
        action: Action,
        index: int,
        begin: int | None,
        started: float,
    ) -> None:
        """Hand a failure to the error handler, or raise ActionExecutionError."""
        self._finish(index, begin, started, error)
        handler = self.config.error
        if handler is not None:
            logger.debug("%s: action #%d failed, handled: %r", self.config.name, index, error)
            outcome = invoke(handler, error)
            if is_pending(outcome):
                await outcome
            return None
        logger.error("%s: action failure: %r", self.config.name, error, exc_info=error)
        raise ActionExecutionError(action, error) from error

    def _begin(self, index: int) -> tuple[int | None, float]:
        return self.trace.record("action_begin", info={"index": index}), time.perf_counter()

    def _finish(
        self,
        index: int,
        begin: int | None,
        started: float,
        error: Exception | None = None,
    ) -> None:
        if not self.trace.enabled:
            return
        duration_ms = (time.perf_counter() - started) * 1000
        if error is None:
            self.trace.record(
                "action_end", info={"index": index}, parent_id=begin, duration_ms=duration_ms
            )
        else:
            self.trace.record(
                "action_error",
                info={"index": index, "error": repr(error)},
                parent_id=begin,
                duration_ms=duration_ms,
            )

    # -- awaiting ----------------------------------------------------------

    async def wait(self) -> Any:
        """Wait until all currently known work has settled.

        Returns:
            The value of the last in-flight result, or None when no action
            produced one

        Raises:
            ActionExecutionError: If an action failed and no error handler
                is configured
            Exception: Whatever a first, unchained action raised since the
                last wait(); it is raised once and then forgotten
        """
        self.start()
        period = self.config.action_interval / 1000
        while True:
            if self._failure is not None:
                failure, self._failure = self._failure, None
                raise failure
            if not self.is_complete():
                await asyncio.sleep(period)
                continue
            chain = self._chain
            if chain is None:
                return None
            value = await chain
            if chain is self._chain and self.is_complete():
                return value

    def as_awaitable(self) -> Awaitable[Any]:
        """An awaitable resolving once all currently known work has settled."""
        return self.wait()

    def __await__(self):
        return self.wait().__await__()

    def then(
        self,
        on_settle: Callable[..., Any] | None = None,
        on_fail: Callable[..., Any] | None = None,
    ) -> asyncio.Task[Any]:
        """Schedule callbacks for when the current work settles.

        Args:
            on_settle: Called with the settled value
            on_fail: Called with the exception if the work failed

        Returns:
            Task resolving to the callback's result (awaited if it is
            awaitable), or to the settled value when no callback applies
        """

        async def _then() -> Any:
            try:
                value = await self.wait()
            except Exception as exc:
                if on_fail is None:
                    raise
                result = invoke(on_fail, exc)
            else:
                if on_settle is None:
                    return value
                result = invoke(on_settle, value)
            if is_pending(result):
                result = await result
            return result

        return asyncio.ensure_future(_then())

    async def __aenter__(self) -> Conveyor:
        return self.start()

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        try:
            if exc_type is None:
                await self.wait()
        finally:
            self.close()


def conveyor(config: ConveyorConfig | Mapping[str, Any] | None = None, **options: Any) -> Conveyor:
    """Return a new Conveyor.

    Args:
        config: A ConveyorConfig, or a mapping of its fields
        **options: ConveyorConfig fields, overriding config

    Raises:
        ConfigurationError: If the options do not validate
    """
    if isinstance(config, ConveyorConfig):
        if options:
            config = ConveyorConfig.from_options({**config.model_dump(), **options})
        return Conveyor(config)
    return Conveyor(ConveyorConfig.from_options({**(config or {}), **options}))


def is_conveyor(value: object) -> bool:
    """True if value is a Conveyor instance."""
    return isinstance(value, Conveyor)
