"""Read-only summary timeline: slot masks, occupancy table, tooltips."""

import numpy as np
import pandas as pd

from tariffgrid import canon, timeline
from tariffgrid.colors import assign_colors
from tariffgrid.types import Group


def test_slot_mask_basic(make_interval):
    mask = timeline.slot_mask(make_interval(1, "Peak", "07:00", "09:00"))
    assert mask.dtype == bool and mask.shape == (canon.TOTAL_SLOTS,)
    assert list(np.flatnonzero(mask)) == [14, 15, 16, 17]


def test_slot_mask_end_of_day_and_wrap(make_interval):
    tail = timeline.slot_mask(make_interval(1, "Late", "22:00", "23:59"))
    assert list(np.flatnonzero(tail)) == [44, 45, 46, 47]
    wrap = timeline.slot_mask(make_interval(2, "Night", "22:00", "02:00"))
    assert list(np.flatnonzero(wrap)) == [0, 1, 2, 3, 44, 45, 46, 47]


def test_slot_mask_lights_at_least_one_slot(make_interval):
    short = timeline.slot_mask(make_interval(1, "Blip", "10:00", "10:10"))
    assert short.sum() == 1 and short[20]


def test_group_slot_map_later_interval_wins(make_interval):
    ivs = [
        make_interval(1, "A", "00:00", "12:00"),
        make_interval(2, "B", "11:00", "13:00"),
        make_interval(3, "C", "00:00", "23:59", Group.WEEKEND),
    ]
    row = timeline.group_slot_map(ivs, Group.GENERAL)
    assert row[21].name == "A"
    assert row[22].name == "B"
    assert row[30] is None


def test_intervals_to_frame(general_full_day):
    df = timeline.intervals_to_frame(assign_colors(general_full_day))
    assert list(df.columns) == timeline.FRAME_COLS
    assert df["end_min"].tolist() == [420, 1260, 1440]
    assert df["end_slot"].tolist() == [14, 42, 48]
    assert df["group"].unique().tolist() == ["General"]
    assert timeline.intervals_to_frame([]).empty


def test_occupancy_frame(split_periods):
    occ = timeline.occupancy_frame(split_periods, groups=[Group.WEEKDAY, Group.WEEKEND])
    assert occ.shape == (canon.TOTAL_SLOTS, 2)
    assert occ.index.name == "slot"
    assert occ.loc["07:00", "Weekday"] == "Peak"
    assert pd.isna(occ.loc["12:00", "Weekend"])
    assert occ["Weekday"].notna().all()


def test_tooltips(make_interval):
    period = make_interval(1, "Peak", "07:00", "21:00", price=0.35, description="Busy")
    assert timeline.period_tooltip(period) == (
        "Peak\n07:00 - 21:00\nPrice: 0.3500 AUD/kWh\nBusy"
    )
    demand = make_interval(
        2,
        "Demand",
        "16:00",
        "21:00",
        price_base=0.5,
        start_month=1,
        end_month=12,
        lookback_days=30,
        weekday_pricing="weekday",
    )
    text = timeline.demand_tooltip(demand)
    assert "Price base: $0.5000 / kVA / day" in text
    assert "Lookback: 30 days" in text
    assert text.endswith("Weekday (Monday-Friday, excluding public holidays)")
