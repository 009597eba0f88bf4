import pytest

from tariffgrid.types import Group, Interval


def _iv(id, name, start, end, group=Group.GENERAL, **payload):
    return Interval(
        id=id, name=name, start_time=start, end_time=end, group=group, payload=payload
    )


@pytest.fixture
def make_interval():
    return _iv


@pytest.fixture
def general_full_day():
    # off-peak / peak / shoulder covering the whole day
    return [
        _iv(1, "Off Peak", "00:00", "07:00", price=0.12),
        _iv(2, "Peak", "07:00", "21:00", price=0.35),
        _iv(3, "Shoulder", "21:00", "23:59", price=0.20),
    ]


@pytest.fixture
def general_with_gaps():
    return [
        _iv(1, "Off Peak", "00:00", "07:00"),
        _iv(2, "Peak", "09:00", "21:00"),
    ]


@pytest.fixture
def split_periods():
    return [
        _iv(10, "Off Peak", "00:00", "07:00", Group.WEEKDAY),
        _iv(11, "Peak", "07:00", "23:59", Group.WEEKDAY),
        _iv(12, "Off Peak", "00:00", "12:00", Group.WEEKEND),
    ]
