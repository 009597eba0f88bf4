from . import (
    canon,
    exceptions,
    types,
    slotclock,
    intervals,
    colors,
    drag,
    config,
    schema,
    validate,
    grid,
    timeline,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "slotclock",
    "intervals",
    "colors",
    "drag",
    "config",
    "schema",
    "validate",
    "grid",
    "timeline",
]
