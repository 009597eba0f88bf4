from __future__ import annotations
import numpy as np
import pandas as pd
from typing import Iterable, List, Optional, Sequence

from . import canon, slotclock
from .types import Group, Interval

FRAME_COLS: list[str] = [
    "id",
    "name",
    "group",
    "start_time",
    "end_time",
    "start_min",
    "end_min",
    "start_slot",
    "end_slot",
    "color",
]


def slot_mask(iv: Interval) -> np.ndarray:
    """
    Boolean mask over the 48 slots an interval occupies.

    Start is clamped into the grid and at least one slot is always lit; a
    midnight wrap lights both the evening and the morning run.
    """
    n = canon.TOTAL_SLOTS
    mask = np.zeros(n, dtype=bool)
    start = max(0, min(iv.start_slot, n - 1))
    end = min(iv.end_slot, n)
    if end <= start and iv.end_min <= iv.start_min:
        mask[start:] = True
        mask[: max(0, end)] = True
    else:
        mask[start : max(start + 1, end)] = True
    return mask


def group_slot_map(
    intervals: Iterable[Interval], group: Group | int
) -> List[Optional[Interval]]:
    """Interval shown in each slot of a group's row; a later interval wins a shared slot."""
    grp = Group(group)
    out: List[Optional[Interval]] = [None] * canon.TOTAL_SLOTS
    for iv in intervals:
        if iv.group != grp:
            continue
        for slot in np.flatnonzero(slot_mask(iv)):
            out[int(slot)] = iv
    return out


def intervals_to_frame(intervals: Sequence[Interval]) -> pd.DataFrame:
    """One row per interval with minute and slot bounds, for tables and exports."""
    rows = [
        {
            "id": iv.id,
            "name": iv.name,
            "group": iv.group.label,
            "start_time": iv.start_time,
            "end_time": iv.end_time,
            "start_min": iv.start_min,
            "end_min": iv.end_min,
            "start_slot": iv.start_slot,
            "end_slot": iv.end_slot,
            "color": iv.color,
        }
        for iv in intervals
    ]
    return pd.DataFrame(rows, columns=FRAME_COLS)


def occupancy_frame(
    intervals: Sequence[Interval], groups: Optional[Iterable[Group]] = None
) -> pd.DataFrame:
    """
    Slot-by-group table of interval names.

    Index: 'HH:MM' slot start labels (48 rows). Columns: group labels.
    Empty slots hold <NA>.
    """
    grps = list(groups) if groups is not None else list(Group)
    labels = [slotclock.slot_index_to_time(i) for i in range(canon.TOTAL_SLOTS)]
    data = {}
    for g in grps:
        row = group_slot_map(intervals, g)
        data[g.label] = pd.Series(
            [iv.name if iv else pd.NA for iv in row], index=labels, dtype="string"
        )
    out = pd.DataFrame(data, index=labels)
    out.index.name = "slot"
    return out


def period_tooltip(iv: Interval) -> str:
    price = float(iv.payload.get("price") or 0.0)
    lines = [
        iv.name or "Period",
        f"{iv.start_time} - {iv.end_time}",
        f"Price: {price:.4f} AUD/kWh",
    ]
    if iv.payload.get("description"):
        lines.append(str(iv.payload["description"]))
    return "\n".join(lines)


def demand_tooltip(iv: Interval) -> str:
    p = iv.payload
    weekday = p.get("weekday_pricing") or "all_days"
    lines = [
        iv.name or "Demand",
        f"{iv.start_time} - {iv.end_time}",
        f"Price base: ${float(p.get('price_base') or 0.0):.4f} / kVA / day",
        f"Months: {p.get('start_month', 1)} - {p.get('end_month', 12)}",
        f"Lookback: {p.get('lookback_days', 365)} days",
        f"Applicable Days: {canon.WEEKDAY_PRICING_TEXT.get(weekday, weekday)}",
    ]
    return "\n".join(lines)
