"""Name-based color assignment."""

from tariffgrid import canon, colors
from tariffgrid.types import Group


def test_same_name_same_color(split_periods):
    out = colors.assign_colors(split_periods)
    by_id = {iv.id: iv.color for iv in out}
    assert by_id[10] == by_id[12] == canon.PERIOD_COLORS[0]
    assert by_id[11] == canon.PERIOD_COLORS[1]


def test_input_is_not_mutated(split_periods):
    colors.assign_colors(split_periods)
    assert all(iv.color is None for iv in split_periods)


def test_repeat_calls_are_stable(general_full_day):
    a = colors.assign_colors(general_full_day)
    b = colors.assign_colors(general_full_day)
    assert [iv.color for iv in a] == [iv.color for iv in b]


def test_reorder_keeping_first_occurrence_order(make_interval):
    """Moving a repeated name later keeps the name->color mapping."""
    a = make_interval(1, "Peak", "07:00", "09:00")
    b = make_interval(2, "Off Peak", "09:00", "17:00")
    c = make_interval(3, "Peak", "17:00", "21:00")
    m1 = {iv.name: iv.color for iv in colors.assign_colors([a, b, c])}
    m2 = {iv.name: iv.color for iv in colors.assign_colors([a, c, b])}
    assert m1 == m2


def test_palette_cycles(make_interval):
    ivs = [make_interval(i, f"P{i}", "00:00", "00:30") for i in range(12)]
    out = colors.assign_colors(ivs, palette=["#000", "#fff"])
    assert [iv.color for iv in out[:4]] == ["#000", "#fff", "#000", "#fff"]


def test_next_color(general_full_day):
    assert colors.next_color(general_full_day) == canon.PERIOD_COLORS[3]
    assert colors.next_color([]) == canon.PERIOD_COLORS[0]


def test_canonical_order(split_periods, make_interval):
    general = make_interval(99, "G", "12:00", "13:00")
    ordered = colors.canonical_order(list(reversed(split_periods)) + [general])
    assert [iv.id for iv in ordered] == [99, 10, 11, 12]
    assert ordered[0].group == Group.GENERAL
