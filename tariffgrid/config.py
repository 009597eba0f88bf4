from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from . import canon


@dataclass
class GridConfig:
    # Click vs drag
    click_threshold_ms: int = canon.CLICK_THRESHOLD_MS

    # Colors, cycled by first occurrence of a name
    palette: List[str] = field(default_factory=lambda: list(canon.PERIOD_COLORS))
    empty_color: str = canon.EMPTY_SLOT_COLOR

    # Interaction
    read_only: bool = False


@dataclass
class DemandDefaults:
    start_time: str = "00:00"
    end_time: str = canon.END_OF_DAY_DISPLAY
    start_month: int = 1
    end_month: int = 12
    lookback_days: int = 365
    weekday_pricing: str = "all_days"  # "all_days" | "weekday" | "weekend"
    sampling_method: str = "maximum_interval"  # | "daily_window_average"


@dataclass
class TariffGridConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    demand: DemandDefaults = field(default_factory=DemandDefaults)


def default_config() -> TariffGridConfig:
    return TariffGridConfig()
