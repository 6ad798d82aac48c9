from .combinators import (
    always,
    as_action,
    do_nothing,
    do_sequentially,
    do_simultaneously,
    ident,
    log,
    none,
    resolved,
    return_,
    say,
    sequence,
    sleep,
    tap,
    throw,
    unless,
    when,
)
from .config import ConveyorConfig
from .engine import Conveyor, conveyor, is_conveyor
from .kernel import (
    Action,
    ActionExecutionError,
    ActionResult,
    ConfigurationError,
    ConveyorError,
    Deferred,
    Evidence,
    Immediate,
    InvalidActionError,
    Trace,
)

__all__ = [
    # Engine
    "conveyor",
    "Conveyor",
    "ConveyorConfig",
    "is_conveyor",
    # Builders
    "as_action",
    "tap",
    "always",
    "ident",
    "log",
    "say",
    "sleep",
    "throw",
    "resolved",
    "return_",
    "do_nothing",
    "none",
    # Compositors
    "do_sequentially",
    "sequence",
    "when",
    "unless",
    "do_simultaneously",
    # Results
    "Action",
    "ActionResult",
    "Immediate",
    "Deferred",
    # Errors
    "ConveyorError",
    "InvalidActionError",
    "ActionExecutionError",
    "ConfigurationError",
    # Tracing
    "Evidence",
    "Trace",
]
