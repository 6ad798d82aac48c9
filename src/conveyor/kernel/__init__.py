"""Kernel layer - action results, invocation and errors."""

from conveyor.kernel.action import (
    Action,
    accepts_argument,
    ensure_action,
    ensure_actions,
    invoke,
    requires_argument,
)
from conveyor.kernel.errors import (
    ActionExecutionError,
    ConfigurationError,
    ConveyorError,
    InvalidActionError,
)
from conveyor.kernel.result import ActionResult, Deferred, Immediate, classify, is_pending
from conveyor.kernel.trace import Evidence, Trace

__all__ = [
    # Actions
    "Action",
    "accepts_argument",
    "ensure_action",
    "ensure_actions",
    "invoke",
    "requires_argument",
    # Results
    "ActionResult",
    "Immediate",
    "Deferred",
    "classify",
    "is_pending",
    # Errors
    "ConveyorError",
    "InvalidActionError",
    "ActionExecutionError",
    "ConfigurationError",
    # Tracing
    "Evidence",
    "Trace",
]
