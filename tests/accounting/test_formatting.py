import pytest

from src.work_tracker.work_tracker.accounting.formatting import format_hours_minutes, format_live_hours


@pytest.mark.parametrize("minutes, expected", [(0, "0h 0min"), (480, "8h 0min"), (545, "9h 5min"), (59.9, "0h 59min"), (-5, "0h 0min")])
def test_format_hours_minutes(minutes, expected):
    assert format_hours_minutes(minutes) == expected


@pytest.mark.parametrize("hours, expected", [(0.75, "45min"), (7.75, "7h 45min"), (1.9999, "2h 0min"), (0, "0min")])
def test_format_live_hours(hours, expected):
    assert format_live_hours(hours) == expected
