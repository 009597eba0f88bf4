from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from . import canon, slotclock
from .exceptions import ModeConflictError, OverlapError
from .types import Coverage, Gap, Group, Interval, ScheduleCoverage

logger = logging.getLogger(__name__)

TimeLike = Union[str, int]
Candidate = Union[Interval, Tuple[TimeLike, TimeLike]]

SPLIT_GROUPS: Tuple[Group, Group] = (Group.WEEKDAY, Group.WEEKEND)


def _minutes(value: TimeLike, is_end: bool = False) -> int:
    if isinstance(value, int):
        return value
    return slotclock.time_to_minutes(value, is_end=is_end)


def _span(start: TimeLike, end: TimeLike) -> tuple[int, int]:
    return slotclock.normalize_span(_minutes(start), _minutes(end, is_end=True))


def overlaps(a_start: TimeLike, a_end: TimeLike, b_start: TimeLike, b_end: TimeLike) -> bool:
    """
    True when [a_start, a_end) and [b_start, b_end) share any minute.

    Front inclusive, back exclusive: touching ranges do not overlap. An end at or
    before its start wraps into the next day, so the wrapped tail is also
    compared against the other range shifted by one day. This is stricter than
    the bare max(starts) < min(ends) test: 21:00-07:00 against 01:00-02:00
    overlaps here, where the single comparison would miss it.
    """
    a0, a1 = _span(a_start, a_end)
    b0, b1 = _span(b_start, b_end)
    day = canon.MINUTES_PER_DAY
    for shift_a, shift_b in ((0, 0), (0, day), (day, 0)):
        if max(a0 + shift_a, b0 + shift_b) < min(a1 + shift_a, b1 + shift_b):
            return True
    return False


def _candidate_times(candidate: Candidate) -> tuple[TimeLike, TimeLike]:
    if isinstance(candidate, Interval):
        return candidate.start_time, candidate.end_time
    start, end = candidate
    return start, end


def find_overlaps(
    candidate: Candidate,
    group: Group | int,
    intervals: Iterable[Interval],
    exclude_id: Optional[int] = None,
) -> List[Interval]:
    """
    Every interval in `group` whose range collides with the candidate.

    Only the candidate is compared against the group, one pass, in input order.
    `exclude_id` skips the interval being edited.
    """
    start, end = _candidate_times(candidate)
    grp = Group(group)
    return [
        iv
        for iv in intervals
        if iv.group == grp
        and (exclude_id is None or iv.id != exclude_id)
        and overlaps(start, end, iv.start_time, iv.end_time)
    ]


def overlap_message(
    conflicts: Sequence[Interval], group: Group | int, noun: str = "period"
) -> str:
    names = ", ".join(f'"{iv.name}"' for iv in conflicts)
    return (
        f"This time range overlaps with existing {noun}(s) {names} in the "
        f"{Group(group).label} group. Please delete the overlapping {noun}(s) first."
    )


def check_overlaps(
    candidate: Candidate,
    group: Group | int,
    intervals: Iterable[Interval],
    exclude_id: Optional[int] = None,
    noun: str = "period",
) -> None:
    """Raise OverlapError naming every conflicting interval."""
    conflicts = find_overlaps(candidate, group, intervals, exclude_id)
    if conflicts:
        msg = overlap_message(conflicts, group, noun)
        logger.debug("overlap rejected: %s", msg)
        raise OverlapError(msg, conflicts=conflicts, group=Group(group))


def _project(iv: Interval) -> Iterator[tuple[int, int]]:
    """Clip an interval onto [0, 1440), splitting a midnight wrap in two."""
    day = canon.MINUTES_PER_DAY
    start, end = iv.span()
    if end <= day:
        yield start, end
    else:
        yield start, day
        yield 0, end - day


def analyze_coverage(group: Group | int, intervals: Iterable[Interval]) -> Coverage:
    """
    Gaps left in [0, 1440) by the intervals of one group.

    Sorted sweep: anything starting past the furthest end seen so far opens a
    gap, and whatever is left before midnight is a trailing gap.
    """
    grp = Group(group)
    spans = sorted(
        (s for iv in intervals if iv.group == grp for s in _project(iv)),
        key=lambda s: s[0],
    )
    gaps: List[Gap] = []
    current_end = 0
    for start, end in spans:
        if start > current_end:
            gaps.append(Gap(current_end, start))
        current_end = max(current_end, end)
    if current_end < canon.MINUTES_PER_DAY:
        gaps.append(Gap(current_end, canon.MINUTES_PER_DAY))
    return Coverage(group=grp, is_complete=not gaps, gaps=gaps)


def analyze_schedule(intervals: Iterable[Interval], split: bool) -> ScheduleCoverage:
    """Coverage for the groups that apply to the schedule's mode."""
    items = list(intervals)
    groups = SPLIT_GROUPS if split else (Group.GENERAL,)
    covs = [analyze_coverage(g, items) for g in groups]
    return ScheduleCoverage(
        is_complete=all(c.is_complete for c in covs), groups=covs, split=split
    )


def group_intervals(intervals: Iterable[Interval]) -> dict[Group, List[Interval]]:
    out: dict[Group, List[Interval]] = {g: [] for g in Group}
    for iv in intervals:
        out[iv.group].append(iv)
    return out


def check_mode_switch(intervals: Iterable[Interval], split: bool) -> None:
    """
    Refuse to toggle weekday pricing while the group it would orphan has intervals.

    Raises before anything changes; the caller reverts its toggle.
    """
    grouped = group_intervals(intervals)
    if split and grouped[Group.GENERAL]:
        raise ModeConflictError(
            "Cannot enable weekday pricing because general periods exist. "
            "Please delete all general periods first."
        )
    if not split and (grouped[Group.WEEKDAY] or grouped[Group.WEEKEND]):
        raise ModeConflictError(
            "Cannot disable weekday pricing because weekday/weekend periods exist. "
            "Please delete all weekday and weekend periods first."
        )


@dataclass(frozen=True)
class IntervalSet:
    """
    Immutable working set of a schedule's intervals.

    Never patched in place: `replace` hands back a fresh set when the backend
    confirms a change.
    """

    intervals: Tuple[Interval, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, intervals: Iterable[Interval]) -> "IntervalSet":
        return cls(tuple(intervals))

    def replace(self, intervals: Iterable[Interval]) -> "IntervalSet":
        return IntervalSet.of(intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.intervals)

    def __len__(self) -> int:
        return len(self.intervals)

    def get(self, interval_id: int) -> Optional[Interval]:
        for iv in self.intervals:
            if iv.id == interval_id:
                return iv
        return None

    def for_group(self, group: Group | int) -> List[Interval]:
        grp = Group(group)
        return [iv for iv in self.intervals if iv.group == grp]

    @property
    def is_split(self) -> Optional[bool]:
        """True/False once any interval pins the mode, None for an empty set."""
        if not self.intervals:
            return None
        return any(iv.group != Group.GENERAL for iv in self.intervals)

    def find_overlaps(
        self, candidate: Candidate, group: Group | int, exclude_id: Optional[int] = None
    ) -> List[Interval]:
        return find_overlaps(candidate, group, self.intervals, exclude_id)

    def coverage(self, split: bool) -> ScheduleCoverage:
        return analyze_schedule(self.intervals, split)

    def check_mode_switch(self, split: bool) -> None:
        check_mode_switch(self.intervals, split)
