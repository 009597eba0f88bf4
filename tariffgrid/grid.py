"""
Schedule grid composition.

Holds the drag state and the colored interval set for one schedule, turns raw
pointer events into create / edit intents, and exposes per-slot render state
so a renderer never has to re-derive business logic.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from . import canon, slotclock
from .colors import assign_colors
from .config import GridConfig
from .drag import (
    IDLE,
    DragState,
    Dragging,
    GlobalPointerUp,
    PointerDown,
    PointerEnter,
    PointerUp,
    drag_range,
    transition,
)
from .intervals import IntervalSet
from .types import TRACK_GROUPS, Group, Interval, SlotState, Track

logger = logging.getLogger(__name__)


## Intents
@dataclass(frozen=True)
class CreateIntent:
    group: Group
    start_slot: int
    end_slot: int  # inclusive
    start_time: str
    end_time: str


@dataclass(frozen=True)
class EditIntent:
    interval_id: int
    interval_name: str


@dataclass(frozen=True)
class EmptyClick:
    group: Group
    slot: int


Intent = Union[CreateIntent, EditIntent, EmptyClick]


def _covers(iv: Interval, slot: int) -> bool:
    start, end = iv.start_slot, iv.end_slot
    if end <= start:
        return slot >= start or slot < end
    return start <= slot < end


def interval_at(intervals: Sequence[Interval], slot: int) -> Optional[Interval]:
    """First interval whose [start_slot, end_slot) contains slot."""
    for iv in intervals:
        if _covers(iv, slot):
            return iv
    return None


class ScheduleGrid:
    def __init__(
        self,
        intervals: Iterable[Interval] = (),
        *,
        split: bool = False,
        config: Optional[GridConfig] = None,
        on_create: Optional[Callable[[CreateIntent], None]] = None,
        on_edit: Optional[Callable[[EditIntent], None]] = None,
        on_empty_click: Optional[Callable[[EmptyClick], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or GridConfig()
        self.split = split
        self.saving = False
        self.on_create = on_create
        self.on_edit = on_edit
        self.on_empty_click = on_empty_click
        self._clock = clock or (lambda: time.monotonic() * 1000.0)
        self.state: DragState = IDLE
        self._down_at: float = 0.0
        self._moved = False
        self.intervals = IntervalSet()
        self.set_intervals(intervals)

    # ---- data ----

    def set_intervals(self, intervals: Iterable[Interval]) -> None:
        """Swap in a fresh interval set (e.g. after the backend confirms a change)."""
        self.intervals = IntervalSet.of(
            assign_colors(list(intervals), self.config.palette)
        )

    @property
    def tracks(self) -> Tuple[Track, ...]:
        return ("weekday", "weekend") if self.split else ("general",)

    def track_intervals(self, track: Track) -> List[Interval]:
        return self.intervals.for_group(TRACK_GROUPS[track])

    # ---- rendering contract ----

    def slot_states(self, track: Track) -> List[SlotState]:
        group = TRACK_GROUPS[track]
        row = self.track_intervals(track)
        selected = None
        if isinstance(self.state, Dragging) and self.state.group == group:
            selected = drag_range(self.state)

        out: List[SlotState] = []
        for slot in range(canon.TOTAL_SLOTS):
            iv = interval_at(row, slot)
            out.append(
                SlotState(
                    index=slot,
                    is_selected=bool(selected and selected[0] <= slot <= selected[1]),
                    color=iv.color if iv else self.config.empty_color,
                    interval_id=iv.id if iv else None,
                    interval_name=iv.name if iv else None,
                )
            )
        return out

    def drag_hint(self) -> str:
        if self.saving:
            return "Saving..."
        rng = drag_range(self.state)
        if rng is not None:
            start, end = rng
            return (
                f"Currently selected {slotclock.slot_index_to_time(start)}-"
                f"{slotclock.slot_index_to_time(end + 1)}"
            )
        if not len(self.intervals):
            return "Drag to select a time range to create your first pricing period"
        return "Drag to select a time range, click a period to edit it"

    # ---- pointer events ----

    @property
    def interactive(self) -> bool:
        return not (self.config.read_only or self.saving)

    def pointer_down(self, slot: int, track: Track, at: Optional[float] = None) -> None:
        if not self.interactive:
            return
        self._down_at = self._clock() if at is None else at
        self._moved = False
        self.state, _ = transition(self.state, PointerDown(slot, TRACK_GROUPS[track]))

    def pointer_enter(self, slot: int, track: Track) -> None:
        if not self.interactive or not isinstance(self.state, Dragging):
            return
        self._moved = True
        self.state, _ = transition(self.state, PointerEnter(slot, TRACK_GROUPS[track]))

    def pointer_up(
        self, slot: int, track: Track, at: Optional[float] = None
    ) -> Optional[Intent]:
        """
        Release over a slot: a quick, motionless press is a click, anything else
        ends the drag and proposes the range last entered on the dragged row.
        """
        if not self.interactive:
            return None
        now = self._clock() if at is None else at
        dragging = self.state if isinstance(self.state, Dragging) else None
        is_click = (
            dragging is not None
            and not self._moved
            and slot == dragging.anchor
            and TRACK_GROUPS[track] == dragging.group
            and (now - self._down_at) < self.config.click_threshold_ms
        )
        if is_click:
            self.state, _ = transition(self.state, GlobalPointerUp())
            return self._click(slot, track)

        self.state, selection = transition(self.state, PointerUp(slot))
        if selection is None:
            return None
        rng = selection.time_range()
        intent = CreateIntent(
            group=selection.group,
            start_slot=selection.start_slot,
            end_slot=selection.end_slot,
            start_time=rng["start_time"],
            end_time=rng["end_time"],
        )
        logger.debug("create intent: %s", intent)
        if self.on_create:
            self.on_create(intent)
        return intent

    def global_pointer_up(self) -> None:
        """Pointer released anywhere in the document; cancels an unfinished drag."""
        self.state, _ = transition(self.state, GlobalPointerUp())

    def _click(self, slot: int, track: Track) -> Intent:
        iv = interval_at(self.track_intervals(track), slot)
        if iv is not None:
            edit = EditIntent(interval_id=iv.id, interval_name=iv.name)
            logger.debug("edit intent: %s", edit)
            if self.on_edit:
                self.on_edit(edit)
            return edit
        empty = EmptyClick(group=TRACK_GROUPS[track], slot=slot)
        if self.on_empty_click:
            self.on_empty_click(empty)
        return empty
