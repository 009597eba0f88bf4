from __future__ import annotations
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from . import canon
from .types import Interval


def color_map(
    names: Iterable[str], palette: Optional[Sequence[str]] = None
) -> Dict[str, str]:
    """
    Name -> color, cycling the palette in first-occurrence order of names.
    """
    pal = list(palette or canon.PERIOD_COLORS)
    out: Dict[str, str] = {}
    for name in names:
        if name not in out:
            out[name] = pal[len(out) % len(pal)]
    return out


def assign_colors(
    intervals: Sequence[Interval], palette: Optional[Sequence[str]] = None
) -> List[Interval]:
    """
    Copy of `intervals` with `color` filled in; intervals sharing a name share a color.

    The mapping only holds within one call. Run the input through
    `canonical_order` first if colors must survive a re-fetch in a new order.
    """
    mapping = color_map((iv.name for iv in intervals), palette)
    fallback = (palette or canon.PERIOD_COLORS)[0]
    return [replace(iv, color=mapping.get(iv.name, fallback)) for iv in intervals]


def next_color(
    existing: Sequence[Interval], palette: Optional[Sequence[str]] = None
) -> str:
    """Color a freshly drafted interval would get if appended to `existing`."""
    pal = palette or canon.PERIOD_COLORS
    return pal[len(existing) % len(pal)]


def canonical_order(intervals: Iterable[Interval]) -> List[Interval]:
    """Sort by group, then start time, then id."""
    return sorted(intervals, key=lambda iv: (int(iv.group), iv.start_min, iv.id))
