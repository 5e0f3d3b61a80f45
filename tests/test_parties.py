"""Tests for party economics."""

import pandas as pd
import pytest

from tests.test_utils import make_records, sales_day
from venue_core.marts.parties import (
    DAY_WISE_PARTY_COLUMNS,
    get_daily_party_trend,
    get_day_wise_parties,
    get_monthly_party_breakdown,
    get_party_metrics,
    get_weekend_weekday_parties,
)


@pytest.fixture
def sales() -> pd.DataFrame:
    return make_records(
        "sales",
        [
            sales_day(45200, "October", "Sunday", game_revenue=4000, food_revenue=1000,
                      party_count=2, party_game_revenue=1500, party_food_revenue=500),
            sales_day(45170, "September", "Friday", game_revenue=2000, food_revenue=500,
                      party_count=1, party_game_revenue=600, party_food_revenue=400),
            sales_day(45177, "September", "Friday", game_revenue=1500, food_revenue=500,
                      party_count=2, party_game_revenue=700, party_food_revenue=300),
            sales_day(45171, "September", "Saturday", game_revenue=3000, food_revenue=500),
        ],
    )


def test_party_metrics(sales: pd.DataFrame) -> None:
    metrics = get_party_metrics(sales)

    assert metrics.total_parties == 5.0
    assert metrics.total_party_game_revenue == 2800.0
    assert metrics.total_party_food_revenue == 1200.0
    assert metrics.total_party_revenue == 4000.0
    assert metrics.avg_party_revenue == pytest.approx(800.0)
    assert metrics.avg_party_food_revenue == pytest.approx(240.0)
    assert metrics.total_revenue == 13000.0
    assert metrics.party_revenue_percent == pytest.approx(4000 / 13000 * 100)
    assert metrics.food_percent_in_party == pytest.approx(30.0)


def test_party_metrics_without_parties() -> None:
    metrics = get_party_metrics(make_records("sales", [sales_day(45170, "September", "Friday")]))

    assert metrics.avg_party_revenue == 0.0
    assert metrics.party_revenue_percent == 0.0
    assert metrics.food_percent_in_party == 0.0


def test_daily_party_trend_skips_days_without_parties(sales: pd.DataFrame) -> None:
    trend = get_daily_party_trend(sales)

    assert list(trend["date"]) == ["2023-09-01", "2023-09-08", "2023-10-01"]
    assert list(trend["total_revenue"]) == [1000.0, 1000.0, 2000.0]


def test_weekend_weekday_parties(sales: pd.DataFrame) -> None:
    split = get_weekend_weekday_parties(sales).set_index("name")

    assert split.loc["Weekend", "parties"] == 2.0
    assert split.loc["Weekend", "revenue"] == 2000.0
    assert split.loc["Weekend", "avg_revenue"] == pytest.approx(1000.0)
    assert split.loc["Weekday", "parties"] == 3.0
    assert split.loc["Weekday", "avg_revenue"] == pytest.approx(2000 / 3)


def test_day_wise_parties(sales: pd.DataFrame) -> None:
    days = get_day_wise_parties(sales)

    assert list(days.columns) == DAY_WISE_PARTY_COLUMNS
    assert list(days["day"]) == ["Friday", "Saturday", "Sunday"]

    friday = days.iloc[0]
    assert friday["total_parties"] == 3.0
    assert friday["avg_parties"] == 2.0, "1.5 parties per day rounds half up"
    assert friday["avg_revenue"] == pytest.approx(1000.0)
    assert days.iloc[1]["avg_parties"] == 0.0


def test_monthly_party_breakdown_keeps_first_seen_order(sales: pd.DataFrame) -> None:
    monthly = get_monthly_party_breakdown(sales)

    assert list(monthly["month"]) == ["October", "September"]
    september = monthly.iloc[1]
    assert september["parties"] == 3.0
    assert september["total_revenue"] == 2000.0
    assert september["avg_per_party"] == pytest.approx(2000 / 3)


def test_empty_sales() -> None:
    empty = make_records("sales", [])

    assert get_daily_party_trend(empty).empty
    assert get_day_wise_parties(empty).empty
    assert get_monthly_party_breakdown(empty).empty
    assert list(get_weekend_weekday_parties(empty)["parties"]) == [0.0, 0.0]
