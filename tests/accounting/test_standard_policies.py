from src.work_tracker.work_tracker.accounting.factory import StandardPolicyFactory
from src.work_tracker.work_tracker.accounting.standard.daily_policy import DailyTargetPolicy
from src.work_tracker.work_tracker.accounting.standard.weekly_policy import WeeklyTargetPolicy
from src.work_tracker.work_tracker.accounting.statistics import StatisticsCalculator
from src.work_tracker.work_tracker.core.enums import Period, PunchKind
from src.work_tracker.work_tracker.settings.model import Settings


def test_daily_policy_overtime_above_target():
    policy = DailyTargetPolicy()
    assert policy.overtime_minutes(540, ["2024-03-04"], Settings()) == 60


def test_daily_policy_holiday_is_all_overtime():
    settings = Settings(holidays=frozenset({"2024-03-04"}))
    policy = DailyTargetPolicy()

    assert policy.standard_minutes(["2024-03-04"], settings) == 0
    assert policy.overtime_minutes(540, ["2024-03-04"], settings) == 540


def test_daily_policy_never_negative():
    assert DailyTargetPolicy().overtime_minutes(100, ["2024-03-04"], Settings()) == 0


def test_weekly_policy_subtracts_holidays():
    settings = Settings(holidays=frozenset({"2024-03-08"}))
    dates = ["2024-03-04", "2024-03-05", "2024-03-06", "2024-03-07", "2024-03-08"]

    assert WeeklyTargetPolicy().standard_minutes(dates, settings) == 2400 - 480


def test_weekly_policy_floors_at_zero():
    settings = Settings(weekly_target_minutes=60, holidays=frozenset({"2024-03-04"}))
    assert WeeklyTargetPolicy().standard_minutes(["2024-03-04"], settings) == 0


def test_factory_picks_policy_by_period():
    factory = StandardPolicyFactory()

    assert isinstance(factory.for_period(Period.WEEK), WeeklyTargetPolicy)
    assert isinstance(factory.for_period(Period.TODAY), DailyTargetPolicy)
    assert isinstance(factory.for_period(Period.MONTH), DailyTargetPolicy)
    assert isinstance(factory.for_period(Period.ALL), DailyTargetPolicy)


def test_statistics_over_two_days(make_punch):
    records = [
        make_punch(1, PunchKind.START, "09:00", "2024-03-04"),
        make_punch(2, PunchKind.END, "18:00", "2024-03-04"),
        make_punch(3, PunchKind.START, "09:00", "2024-03-05"),
        make_punch(4, PunchKind.END, "17:00", "2024-03-05"),
    ]

    stats = StatisticsCalculator().calculate(records, Period.ALL, Settings())

    assert (stats.total_minutes, stats.standard_minutes, stats.overtime_minutes, stats.work_days) == (1020, 960, 60, 2)
    assert stats.to_dict()["total_hours"] == "17h 0min"
    assert stats.to_dict()["overtime"] == "1h 0min"


def test_statistics_empty_period():
    stats = StatisticsCalculator().calculate([], Period.WEEK, Settings())
    assert (stats.total_minutes, stats.overtime_minutes, stats.work_days) == (0, 0, 0)
    assert stats.standard_minutes == 2400
