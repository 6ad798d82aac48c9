"""Engine configuration."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from conveyor.kernel.errors import ConfigurationError


class ConveyorConfig(BaseModel):
    """Configuration for a Conveyor engine.

    Intervals are in milliseconds.

    Attributes:
        action_interval: Period of the execution step.
        buffer_interval: Period of the drain step.
        capacity: Actions the active queue holds before new ones overflow
            into the buffer.
        error: Handler for failed actions. Called with the exception when it
            accepts a positional argument, with no arguments otherwise.
        trace: Record engine events on the engine's Trace.
        name: Engine name used in log records.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    action_interval: float = Field(default=2, gt=0)
    buffer_interval: float = Field(default=1, gt=0)
    capacity: int = Field(default=6, ge=1)
    error: Callable[..., Any] | None = None
    trace: bool = False
    name: str = "conveyor"

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> ConveyorConfig:
        """Validate keyword options, raising ConfigurationError on failure."""
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid conveyor options: {exc}", options) from exc
