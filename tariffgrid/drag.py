"""
Drag selection as an explicit state machine.

The owning UI layer keeps the current state and feeds every pointer event
(including a pointer release anywhere in the document) through `transition`.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .types import DragSelection, Group

logger = logging.getLogger(__name__)


## States
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    group: Group
    anchor: int
    current: int

    @property
    def start(self) -> int:
        return min(self.anchor, self.current)

    @property
    def end(self) -> int:
        return max(self.anchor, self.current)


DragState = Union[Idle, Dragging]

IDLE = Idle()


## Events
@dataclass(frozen=True)
class PointerDown:
    slot: int
    group: Group


@dataclass(frozen=True)
class PointerEnter:
    slot: int
    group: Optional[Group] = None  # None: caller already scoped to the active row


@dataclass(frozen=True)
class PointerUp:
    slot: int


@dataclass(frozen=True)
class GlobalPointerUp:
    pass


DragEvent = Union[PointerDown, PointerEnter, PointerUp, GlobalPointerUp]


def transition(
    state: DragState, event: DragEvent
) -> Tuple[DragState, Optional[DragSelection]]:
    """
    Advance the machine by one event.

    Returns the next state and, only on a pointer-up inside the grid while
    dragging, the committed selection (slots ordered, end inclusive).
    """
    if isinstance(event, PointerDown):
        # a stray down while dragging restarts from the new anchor
        return Dragging(Group(event.group), event.slot, event.slot), None

    if not isinstance(state, Dragging):
        return state, None

    if isinstance(event, PointerEnter):
        if event.group is not None and Group(event.group) != state.group:
            return state, None
        return Dragging(state.group, state.anchor, event.slot), None

    if isinstance(event, PointerUp):
        result = DragSelection(
            group=state.group,
            start_slot=state.start,
            end_slot=state.end,
        )
        logger.debug("drag committed: %s", result)
        return IDLE, result

    if isinstance(event, GlobalPointerUp):
        logger.debug("drag cancelled outside grid")
        return IDLE, None

    raise TypeError(f"Unknown drag event: {event!r}")


def drag_range(state: DragState) -> Optional[Tuple[int, int]]:
    """(start, end) inclusive slots of an in-flight drag, or None."""
    if isinstance(state, Dragging):
        return state.start, state.end
    return None


def is_dragging(state: DragState) -> bool:
    return isinstance(state, Dragging)
