"""Combinators - action builders and compositors."""

from conveyor.combinators.builders import (
    always,
    as_action,
    do_nothing,
    ident,
    log,
    none,
    resolved,
    return_,
    say,
    sleep,
    tap,
    throw,
)
from conveyor.combinators.ops import (
    do_sequentially,
    do_simultaneously,
    sequence,
    unless,
    when,
)

__all__ = [
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
]
