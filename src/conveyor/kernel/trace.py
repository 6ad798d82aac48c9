"""Runtime trace infrastructure - separate from the values actions thread.

Records what the engine did (enqueue, drain, action begin/end/error) for
debugging and profiling. Tree relationships are reconstructed only on demand
via as_tree().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """One engine event captured at runtime."""

    action: str = ""
    id: int = field(default=0)
    parent_id: int | None = field(default=None)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = field(default=None)

    def matches(self, **kwargs: Any) -> bool:
        """True when every criterion equals either a field or an info entry."""
        return all(
            self.info.get(k) == v or getattr(self, k, None) == v for k, v in kwargs.items()
        )


class Trace:
    """Runtime trace context for capturing engine events.

    Parents are always explicit: an action's end or error event points at
    its begin event. Safe for single-threaded (asyncio) use.

    Performance guarantees:
    - Trace disabled → single bool check overhead
    - Evidence append is O(1)
    - No tree construction during execution
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Record an evidence event.

        Args:
            action: What happened (e.g., "action_begin", "drain")
            info: Additional context
            parent_id: ID of the event this one belongs to, if any
            duration_ms: Execution duration

        Returns:
            Event ID for linking child events, or None if tracing is disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1

        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                timestamp=datetime.now(UTC),
                info=info or {},
                duration_ms=duration_ms,
            )
        )

        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events, oldest first."""
        return list(self._events)

    def find_all(self, **kwargs: Any) -> list[Evidence]:
        """Find all events matching the given criteria.

        Args:
            **kwargs: Criteria to match (e.g., action="action_end", index=3)

        Returns:
            Matching events in recording order
        """
        return [e for e in self._events if e.matches(**kwargs)]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Reconstruct parent-child relationships.

        Returns:
            Dict mapping parent_id to list of child_ids
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
