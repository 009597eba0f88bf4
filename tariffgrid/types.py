from __future__ import annotations
from typing import TypedDict, Literal, List, Dict, Optional, Any
from dataclasses import dataclass, field
from enum import IntEnum

from . import canon, slotclock


class Group(IntEnum):
    GENERAL = 0
    WEEKDAY = 1
    WEEKEND = 2

    @property
    def label(self) -> str:
        return canon.GROUP_NAMES[int(self)]


Track = Literal["general", "weekday", "weekend"]

TRACK_GROUPS: Dict[str, Group] = {
    "general": Group.GENERAL,
    "weekday": Group.WEEKDAY,
    "weekend": Group.WEEKEND,
}

WeekdayPricing = Literal["all_days", "weekday", "weekend"]
SamplingMethod = Literal["maximum_interval", "daily_window_average"]


## Intervals
@dataclass(frozen=True)
class Interval:
    """
    One period or demand window on the daily grid.

    start_time / end_time are normalized "HH:MM" strings; end of day is "23:59".
    Everything the schedule engine doesn't interpret (price, demand parameters,
    description...) rides along in payload.
    """

    id: int
    name: str
    start_time: str
    end_time: str
    group: Group = Group.GENERAL
    payload: Dict[str, Any] = field(default_factory=dict, compare=False)
    color: Optional[str] = None

    @property
    def start_min(self) -> int:
        return slotclock.time_to_minutes(self.start_time)

    @property
    def end_min(self) -> int:
        return slotclock.time_to_minutes(self.end_time, is_end=True)

    def span(self) -> tuple[int, int]:
        """(start, end) in minutes with a wrapped end pushed past 1440."""
        return slotclock.normalize_span(self.start_min, self.end_min)

    @property
    def start_slot(self) -> int:
        return slotclock.time_to_slot_index(self.start_time)

    @property
    def end_slot(self) -> int:
        """Exclusive end slot."""
        return slotclock.time_to_slot_index(self.end_time)


## Coverage
@dataclass(frozen=True)
class Gap:
    start: int  # minutes, inclusive
    end: int  # minutes, exclusive

    def label(self) -> str:
        return f"{slotclock.minutes_to_time(self.start)} - {slotclock.minutes_to_time(self.end)}"


@dataclass(frozen=True)
class Coverage:
    group: Group
    is_complete: bool
    gaps: List[Gap]


@dataclass(frozen=True)
class ScheduleCoverage:
    is_complete: bool
    groups: List[Coverage]
    split: bool = False

    @property
    def gap_labels(self) -> List[str]:
        """Human-readable gaps; prefixed with the group name in split mode."""
        out: List[str] = []
        for cov in self.groups:
            for gap in cov.gaps:
                if self.split:
                    out.append(f"{cov.group.label}: {gap.label()}")
                else:
                    out.append(gap.label())
        return out


## Drag / rendering
class TimeRange(TypedDict):
    start_time: str
    end_time: str


@dataclass(frozen=True)
class DragSelection:
    group: Group
    start_slot: int
    end_slot: int  # inclusive

    def time_range(self) -> TimeRange:
        return slotclock.drag_range_to_time(self.start_slot, self.end_slot)


@dataclass(frozen=True)
class SlotState:
    index: int
    is_selected: bool = False
    color: Optional[str] = None
    interval_id: Optional[int] = None
    interval_name: Optional[str] = None
