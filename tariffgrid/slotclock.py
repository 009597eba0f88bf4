# tariffgrid/slotclock.py
from __future__ import annotations
import re

from . import canon
from .exceptions import TimeFormatError

_TIME_RE = re.compile(canon.TIME_PATTERN)
_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{1,2})(?::\d{1,2}(?:\.\d+)?)?$")
_DURATION_HOURS_RE = re.compile(r"(\d+)H")
_DURATION_MINUTES_RE = re.compile(r"(\d+)M")


def is_valid_time(value: str) -> bool:
    """Strict 'HH:MM' check used before any interval logic runs."""
    return bool(_TIME_RE.match(value or ""))


def parse_duration(value: str) -> int:
    """
    Minutes encoded by an ISO-8601 style 'PT<h>H<m>M' string.

    Hours and minutes are both optional: 'PT8H' -> 480, 'PT30M' -> 30, 'PT' -> 0.
    """
    s = value.strip()
    if not s.startswith("PT"):
        raise TimeFormatError(f"Not a duration-encoded time: {value!r}")
    body = s[2:]
    h = _DURATION_HOURS_RE.search(body)
    m = _DURATION_MINUTES_RE.search(body)
    hours = int(h.group(1)) if h else 0
    minutes = int(m.group(1)) if m else 0
    return hours * 60 + minutes


def _split_hhmm(value: str) -> tuple[int, int]:
    match = _HHMM_RE.match(value.strip())
    if match is None:
        raise TimeFormatError(f"Time must be in HH:MM format, got {value!r}")
    return int(match.group(1)), int(match.group(2))


def time_to_minutes(value: str, is_end: bool = False) -> int:
    """
    Minutes since midnight for 'HH:MM' or 'PT<h>H<m>M'.

    '24:00' is always end of day (1440). '23:59' is end of day only when the
    value is used as an interval end; as a start it stays 1439.
    """
    s = value.strip()
    if s.startswith("PT"):
        return parse_duration(s)
    hours, minutes = _split_hhmm(s)
    if hours == 24 and minutes == 0:
        return canon.MINUTES_PER_DAY
    if is_end and f"{hours:02d}:{minutes:02d}" in canon.END_OF_DAY_ALIASES:
        return canon.MINUTES_PER_DAY
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight; anything from end of day on shows as '23:59'."""
    if minutes >= canon.MINUTES_PER_DAY:
        return canon.END_OF_DAY_DISPLAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_span(start: int, end: int) -> tuple[int, int]:
    """Apply the single-wrap rule: an end at or before start belongs to the next day."""
    if end <= start:
        return start, end + canon.MINUTES_PER_DAY
    return start, end


def slot_index_to_time(slot: int) -> str:
    total = slot * canon.SLOT_DURATION_MIN
    hours, minutes = divmod(total, 60)
    if hours == 24 and minutes == 0:
        return canon.END_OF_DAY_DISPLAY
    return f"{hours:02d}:{minutes:02d}"


def time_to_slot_index(value: str) -> int:
    """
    Slot index for 'HH:MM' or 'PT<h>H<m>M'.

    '23:59' is read as 24:00 so that the end-of-day sentinel maps back to slot 48.
    """
    s = value.strip()
    if s.startswith("PT"):
        total = parse_duration(s)
    else:
        hours, minutes = _split_hhmm(s)
        if hours == 23 and minutes == 59:
            hours, minutes = 24, 0
        total = hours * 60 + minutes
    return total // canon.SLOT_DURATION_MIN


def drag_range_to_time(start_slot: int, end_slot: int) -> dict[str, str]:
    """
    Time range for an inclusive slot selection.

    Intervals are front inclusive, back exclusive, so the end is the boundary
    after end_slot.
    """
    return {
        "start_time": slot_index_to_time(start_slot),
        "end_time": slot_index_to_time(end_slot + 1),
    }


def normalize_time(value: str, is_end: bool = False) -> str:
    """
    Canonical 'HH:MM' for any inbound time representation.

    Accepts 'H:MM', 'HH:MM:SS', ISO datetimes ('2024-01-01T07:30:00') and
    'PT<h>H<m>M'. End-of-day inputs ('24:00', 'PT24H') become '23:59' when
    is_end is set, and wrap to '00:00' otherwise.
    """
    if value is None:
        raise TimeFormatError("Time is required")
    s = str(value).strip()
    if not s:
        raise TimeFormatError("Time is required")

    if s.startswith("PT"):
        total = parse_duration(s)
    else:
        if "T" in s:
            _, _, s = s.partition("T")
            # drop any UTC offset suffix
            s = re.split(r"[Z+-]", s, maxsplit=1)[0]
        hours, minutes = _split_hhmm(s)
        total = hours * 60 + minutes

    if total >= canon.MINUTES_PER_DAY:
        if is_end:
            return canon.END_OF_DAY_DISPLAY
        total = total % canon.MINUTES_PER_DAY
    return minutes_to_time(total)
