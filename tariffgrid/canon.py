from __future__ import annotations
from typing import Final, Dict

TOTAL_SLOTS: Final[int] = 48
SLOT_DURATION_MIN: Final[int] = 30
MINUTES_PER_DAY: Final[int] = 1440

# HTML time inputs can't show 24:00, so end-of-day is displayed as 23:59
END_OF_DAY_DISPLAY: Final[str] = "23:59"
END_OF_DAY_ALIASES: Final[tuple[str, ...]] = ("23:59", "24:00")

TIME_PATTERN: Final[str] = r"^([01]?\d|2[0-3]):[0-5]\d$"

# pointer down -> up faster than this, with no movement, is a click
CLICK_THRESHOLD_MS: Final[int] = 200

GROUP_NAMES: Dict[int, str] = {
    0: "General",
    1: "Weekday",
    2: "Weekend",
}

PERIOD_COLORS: Final[list[str]] = [
    "#ff6b6b",  # red
    "#4ecdc4",  # teal
    "#45b7d1",  # blue
    "#f9ca24",  # yellow
    "#f0932b",  # orange
    "#eb4d4b",  # dark red
    "#6c5ce7",  # purple
    "#a29bfe",  # light purple
    "#fd79a8",  # pink
    "#636e72",  # dark grey
]

EMPTY_SLOT_COLOR: Final[str] = "#f0f0f0"

WEEKDAY_PRICING_TEXT: Dict[str, str] = {
    "all_days": "All days",
    "weekday": "Weekday (Monday-Friday, excluding public holidays)",
    "weekend": "Weekend (Weekends + Public Holidays)",
}
