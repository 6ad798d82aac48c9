from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Recorder:
    """Shared log that actions append to, in the order they actually run."""

    entries: list[Any] = field(default_factory=list)

    def push(self, item: Any) -> Callable[[], None]:
        def _push() -> None:
            self.entries.append(item)

        return _push

    def push_later(self, item: Any, delay: float = 0.005) -> Callable[[], Any]:
        async def _push_later() -> None:
            await asyncio.sleep(delay)
            self.entries.append(item)

        return _push_later

    def seen(self, value: Any = None) -> Any:
        self.entries.append(value)
        return value


@dataclass
class Handler:
    """Error handler that remembers what it was called with."""

    errors: list[BaseException] = field(default_factory=list)

    def __call__(self, error: BaseException) -> None:
        self.errors.append(error)


def fast(**options: Any) -> dict[str, Any]:
    return {"action_interval": 1, "buffer_interval": 1, **options}
