"""Actions and the single-optional-argument calling convention."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from typing import Any

from conveyor.kernel.errors import InvalidActionError

Action = Callable[..., Any]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def ensure_action(value: object) -> Action:
    """Return value unchanged if it is callable, raise InvalidActionError otherwise."""
    if not callable(value):
        raise InvalidActionError(value)
    return value  # type: ignore[return-value]


def ensure_actions(values: Iterable[object]) -> tuple[Action, ...]:
    """Validate every element before any of them is used.

    Args:
        values: Candidate actions

    Returns:
        The actions as a tuple, in their original order

    Raises:
        InvalidActionError: If any element is not callable
    """
    return tuple(ensure_action(value) for value in values)


def accepts_argument(action: Action) -> bool:
    """True when the action declares a positional parameter (or *args)."""
    try:
        signature = inspect.signature(action)
    except (TypeError, ValueError):
        # Builtins without an introspectable signature; assume they take one.
        return True
    return any(p.kind in _POSITIONAL for p in signature.parameters.values())


def requires_argument(action: Action) -> bool:
    """True when the action's first positional parameter has no default."""
    try:
        signature = inspect.signature(action)
    except (TypeError, ValueError):
        return False
    for p in signature.parameters.values():
        if p.kind in _POSITIONAL:
            return p.kind is not inspect.Parameter.VAR_POSITIONAL and p.default is p.empty
    return False


def invoke(action: Action, value: Any = None) -> Any:
    """Call an action with the value threaded from the previous one.

    Zero-parameter actions are called without arguments. A None value is
    passed only to actions that require a parameter, so optional
    parameters keep their defaults.
    """
    if value is None:
        return action(None) if requires_argument(action) else action()
    if accepts_argument(action):
        return action(value)
    return action()
