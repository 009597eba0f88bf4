"""ScheduleGrid: pointer events to intents, and per-slot render state."""

from tariffgrid import canon
from tariffgrid.config import GridConfig
from tariffgrid.drag import IDLE
from tariffgrid.grid import CreateIntent, EditIntent, EmptyClick, ScheduleGrid
from tariffgrid.types import Group


def test_drag_dispatches_create_intent():
    created = []
    grid = ScheduleGrid(split=True, on_create=created.append)
    grid.pointer_down(14, "weekday", at=0)
    grid.pointer_enter(16, "weekday")
    grid.pointer_enter(17, "weekday")
    intent = grid.pointer_up(17, "weekday", at=500)
    assert intent == CreateIntent(Group.WEEKDAY, 14, 17, "07:00", "09:00")
    assert created == [intent]
    assert grid.state == IDLE


def test_quick_click_on_interval_is_edit(general_full_day):
    edits = []
    grid = ScheduleGrid(general_full_day, on_edit=edits.append)
    grid.pointer_down(20, "general", at=1000)
    intent = grid.pointer_up(20, "general", at=1100)
    assert intent == EditIntent(interval_id=2, interval_name="Peak")
    assert edits == [intent]


def test_quick_click_on_empty_slot(general_with_gaps):
    grid = ScheduleGrid(general_with_gaps)
    grid.pointer_down(15, "general", at=0)
    assert grid.pointer_up(15, "general", at=50) == EmptyClick(Group.GENERAL, 15)


def test_slow_press_is_single_slot_drag():
    grid = ScheduleGrid()
    grid.pointer_down(47, "general", at=0)
    intent = grid.pointer_up(47, "general", at=canon.CLICK_THRESHOLD_MS + 1)
    assert isinstance(intent, CreateIntent)
    assert (intent.start_time, intent.end_time) == ("23:30", "23:59")


def test_global_pointer_up_cancels_drag():
    grid = ScheduleGrid()
    grid.pointer_down(2, "general", at=0)
    grid.pointer_enter(6, "general")
    grid.global_pointer_up()
    assert grid.pointer_up(6, "general", at=999) is None
    assert not any(s.is_selected for s in grid.slot_states("general"))


def test_read_only_and_saving_ignore_pointer():
    grid = ScheduleGrid(config=GridConfig(read_only=True))
    grid.pointer_down(2, "general", at=0)
    assert grid.pointer_up(4, "general", at=999) is None

    grid = ScheduleGrid()
    grid.saving = True
    grid.pointer_down(2, "general", at=0)
    assert grid.pointer_up(4, "general", at=999) is None
    assert grid.drag_hint() == "Saving..."


def test_slot_states_resolve_color_and_selection(general_full_day):
    grid = ScheduleGrid(general_full_day)
    grid.pointer_down(10, "general", at=0)
    grid.pointer_enter(12, "general")
    states = grid.slot_states("general")
    assert len(states) == canon.TOTAL_SLOTS
    assert [s.index for s in states if s.is_selected] == [10, 11, 12]
    assert states[0].interval_name == "Off Peak"
    assert states[13].interval_id == 1
    assert states[14].interval_id == 2
    assert states[47].interval_name == "Shoulder"
    assert states[0].color == canon.PERIOD_COLORS[0]
    assert states[47].color == canon.PERIOD_COLORS[2]
    assert grid.drag_hint() == "Currently selected 05:00-06:30"


def test_selection_only_highlights_dragged_row(split_periods):
    grid = ScheduleGrid(split_periods, split=True)
    assert grid.tracks == ("weekday", "weekend")
    grid.pointer_down(30, "weekend", at=0)
    assert not any(s.is_selected for s in grid.slot_states("weekday"))
    assert [s.index for s in grid.slot_states("weekend") if s.is_selected] == [30]


def test_colors_shared_across_rows(split_periods):
    grid = ScheduleGrid(split_periods, split=True)
    weekday = grid.slot_states("weekday")
    weekend = grid.slot_states("weekend")
    assert weekday[0].color == weekend[0].color
    assert weekend[40].color == canon.EMPTY_SLOT_COLOR
    assert weekend[40].interval_id is None


def test_release_on_other_row_commits_dragged_row():
    grid = ScheduleGrid(split=True)
    grid.pointer_down(14, "weekday", at=0)
    grid.pointer_enter(17, "weekday")
    grid.pointer_enter(40, "weekend")
    intent = grid.pointer_up(40, "weekend", at=500)
    assert intent == CreateIntent(Group.WEEKDAY, 14, 17, "07:00", "09:00")
    assert grid.state == IDLE


def test_quick_release_on_other_row_is_not_a_click(split_periods):
    edits = []
    grid = ScheduleGrid(split_periods, split=True, on_edit=edits.append)
    grid.pointer_down(5, "weekday", at=0)
    intent = grid.pointer_up(5, "weekend", at=50)
    assert intent == CreateIntent(Group.WEEKDAY, 5, 5, "02:30", "03:00")
    assert edits == []


def test_empty_color_follows_config():
    grid = ScheduleGrid(config=GridConfig(empty_color="#ffffff"))
    assert {s.color for s in grid.slot_states("general")} == {"#ffffff"}


def test_empty_grid_hint():
    grid = ScheduleGrid()
    assert grid.tracks == ("general",)
    assert "first pricing period" in grid.drag_hint()
