"""Error types raised by the conveyor engine and its combinators."""

from __future__ import annotations

from typing import Any


class ConveyorError(Exception):
    """Base class for every error raised by conveyor."""


class InvalidActionError(ConveyorError, TypeError):
    """Error raised when a non-callable value is supplied as an action.

    The offending value is preserved for debugging purposes.
    """

    def __init__(self, value: object, message: str = "An action must be callable") -> None:
        self.value = value
        super().__init__(f"{message}, got {type(value).__name__}: {value!r}")


class ActionExecutionError(ConveyorError):
    """An action (or the awaitable it returned) failed and no handler took it.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, action: Any, error: BaseException) -> None:
        self.action = action
        self.error = error
        super().__init__(f"Conveyor action failure: {error!r}")

    def __repr__(self) -> str:
        return f"ActionExecutionError(action={self.action!r}, error={self.error!r})"


class ConfigurationError(ConveyorError, ValueError):
    """Error raised when engine options fail validation."""

    def __init__(self, message: str, options: object) -> None:
        self.options = options
        super().__init__(message)
