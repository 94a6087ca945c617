from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from src.analytics.referrals import aggregate_referrals, current_month_key
from src.models.affiliates import ReferralRecord

RATE = Decimal("5")


def _records(*pairs):
    return [ReferralRecord(month=month, referrals_count=count) for month, count in pairs]


def test_empty_input_yields_zeroes() -> None:
    result = aggregate_referrals([], RATE, datetime(2024, 6, 15))
    assert result.series == []
    assert result.total_referrals == 0
    assert result.total_earnings == 0
    assert result.monthly_referrals == 0
    assert result.monthly_earnings == 0


def test_totals_count_null_as_zero_and_keep_duplicates() -> None:
    records = _records(("2024-01-01", 3), ("2024-02-01", None), ("2024-02-01", 4), ("2024-03-01", 7))
    result = aggregate_referrals(records, RATE, datetime(2023, 1, 1))
    assert result.total_referrals == 14
    assert result.total_earnings == Decimal("70")
    assert result.total_earnings == result.total_referrals * RATE
    assert len(result.series) == 4


def test_current_month_isolated_from_other_months() -> None:
    records = _records(
        ("2024-01-01", 11),
        ("2024-02-01", 22),
        ("2024-03-01", 3),
        ("2024-04-01", 44),
        ("2024-05-01", 55),
        ("2024-06-01", 66),
    )
    result = aggregate_referrals(records, RATE, datetime(2024, 3, 20, 23, 59))
    assert result.current_month_key == "2024-03-01"
    assert result.monthly_referrals == 3
    assert result.monthly_earnings == Decimal("15")


def test_missing_current_month_gives_zero() -> None:
    records = _records(("2024-01-01", 5), ("2024-02-01", 6))
    result = aggregate_referrals(records, RATE, datetime(2024, 7, 1))
    assert result.monthly_referrals == 0
    assert result.monthly_earnings == 0
    assert result.total_referrals == 11


def test_series_sorted_ascending_by_month() -> None:
    records = _records(("2024-03-01", 2), ("2024-01-01", 5), ("2024-02-01", 1))
    result = aggregate_referrals(records, RATE, datetime(2024, 6, 1))
    assert [point.month_key for point in result.series] == ["2024-01-01", "2024-02-01", "2024-03-01"]
    assert [point.referrals_count for point in result.series] == [5, 1, 2]
    # input order is left alone
    assert [record.month for record in records] == ["2024-03-01", "2024-01-01", "2024-02-01"]


def test_single_month_scenario() -> None:
    result = aggregate_referrals(_records(("2024-06-01", 10)), 5, datetime(2024, 6, 15))
    assert result.total_referrals == 10
    assert result.total_earnings == 50
    assert result.monthly_referrals == 10
    assert result.monthly_earnings == 50
    assert len(result.series) == 1
    point = result.series[0]
    assert point.month_key == "2024-06-01"
    assert point.referrals_count == 10
    assert point.earnings == 50
    assert point.label == "jun 24"


def test_aggregation_is_idempotent() -> None:
    records = _records(("2024-05-01", 1), ("2024-06-01", 2))
    now = datetime(2024, 6, 2)
    assert aggregate_referrals(records, RATE, now) == aggregate_referrals(records, RATE, now)


def test_label_formatter_is_swappable() -> None:
    result = aggregate_referrals(
        _records(("2024-06-01", 1)),
        RATE,
        date(2024, 6, 1),
        label_formatter=lambda key: f"label-{key}",
    )
    assert result.series[0].label == "label-2024-06-01"


def test_current_month_key_uses_calendar_fields() -> None:
    assert current_month_key(datetime(2024, 12, 31, 23, 30)) == "2024-12-01"
    assert current_month_key(date(987, 2, 14)) == "0987-02-01"
