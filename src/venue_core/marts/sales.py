"""Daily sales marts: weekend split, weekday profile, trend and overview KPIs.

Sales records hold one row per calendar day with game and food revenue,
footfall, party counts and card counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd

from venue_core.marts.combos import COMBO, label_combo_single
from venue_core.marts.recharge import CardIssuanceMetrics, get_card_issuance_metrics
from venue_core.schemas import DAY_ORDER, WEEKEND_DAYS
from venue_core.utils import date_labels, numeric_column, safe_divide, text_column

logger = logging.getLogger(__name__)

DAY_OF_WEEK_COLUMNS = ["day", "day_short", "days", "avg_revenue", "avg_footfall", "avg_parties"]
DAILY_TREND_COLUMNS = ["date", "game_revenue", "food_revenue", "total_revenue", "footfall"]


def weekday_names(sales: pd.DataFrame) -> pd.Series:
    """Trimmed weekday name per row."""
    return text_column(sales, "day").str.strip()


@dataclass
class PeriodTotals:
    """Game revenue and footfall for one side of the weekend split."""

    revenue: float = 0.0
    footfall: float = 0.0
    percentage: float = 0.0


@dataclass
class WeekendWeekdaySplit:
    weekend: PeriodTotals = field(default_factory=PeriodTotals)
    weekday: PeriodTotals = field(default_factory=PeriodTotals)


def get_weekend_weekday_split(sales: pd.DataFrame) -> WeekendWeekdaySplit:
    """Split game revenue and footfall into weekend (Sat/Sun) and weekdays.

    Each side's percentage is its share of total game revenue, 0 when there
    is no revenue at all.
    """
    is_weekend = weekday_names(sales).isin(WEEKEND_DAYS)
    revenue = numeric_column(sales, "game_revenue")
    footfall = numeric_column(sales, "footfall")

    weekend_revenue = float(revenue[is_weekend].sum())
    weekday_revenue = float(revenue[~is_weekend].sum())
    total = weekend_revenue + weekday_revenue

    return WeekendWeekdaySplit(
        weekend=PeriodTotals(
            revenue=weekend_revenue,
            footfall=float(footfall[is_weekend].sum()),
            percentage=safe_divide(weekend_revenue, total) * 100,
        ),
        weekday=PeriodTotals(
            revenue=weekday_revenue,
            footfall=float(footfall[~is_weekend].sum()),
            percentage=safe_divide(weekday_revenue, total) * 100,
        ),
    )


def get_day_of_week_performance(sales: pd.DataFrame) -> pd.DataFrame:
    """Average daily revenue, footfall and parties per weekday.

    Revenue is game plus food. Only weekdays present in the records are
    returned, always in Monday..Sunday order.
    """
    frame = pd.DataFrame(
        {
            "day": weekday_names(sales),
            "revenue": numeric_column(sales, "game_revenue") + numeric_column(sales, "food_revenue"),
            "footfall": numeric_column(sales, "footfall"),
            "parties": numeric_column(sales, "party_count"),
        }
    )
    frame = frame[frame["day"].isin(DAY_ORDER)]
    if frame.empty:
        return pd.DataFrame(columns=DAY_OF_WEEK_COLUMNS)

    grouped = frame.groupby("day", sort=False).agg(
        days=("revenue", "size"),
        revenue=("revenue", "sum"),
        footfall=("footfall", "sum"),
        parties=("parties", "sum"),
    )
    grouped = grouped.reindex([d for d in DAY_ORDER if d in grouped.index])

    out = pd.DataFrame(
        {
            "day": grouped.index,
            "day_short": [d[:3] for d in grouped.index],
            "days": grouped["days"].to_numpy(),
            "avg_revenue": (grouped["revenue"] / grouped["days"]).to_numpy(),
            "avg_footfall": (grouped["footfall"] / grouped["days"]).to_numpy(),
            "avg_parties": (grouped["parties"] / grouped["days"]).to_numpy(),
        }
    )
    return out[DAY_OF_WEEK_COLUMNS]


def get_daily_trend(sales: pd.DataFrame) -> pd.DataFrame:
    """One row per dated sales record, sorted by date label."""
    game = numeric_column(sales, "game_revenue")
    food = numeric_column(sales, "food_revenue")
    trend = pd.DataFrame(
        {
            "date": date_labels(sales),
            "game_revenue": game,
            "food_revenue": food,
            "total_revenue": game + food,
            "footfall": numeric_column(sales, "footfall"),
        }
    )
    trend = trend[trend["date"] != ""]
    return trend.sort_values("date", kind="stable").reset_index(drop=True)[DAILY_TREND_COLUMNS]


@dataclass
class ExecutiveKPIs:
    """Overview-page KPIs across all four datasets.

    Attributes:
        total_revenue: Game plus food revenue.
        total_game_revenue: Game revenue.
        total_food_revenue: Food revenue.
        total_footfall: Visitors.
        weekend_revenue_percent: Weekend share of game revenue.
        bonus_credit_percent: Arcade bonus / credit * 100.
        total_recharge: Amount collected on recharge transactions.
        revenue_per_footfall: total_revenue / total_footfall.
        food_percentage: Food share of total_revenue.
        avg_daily_revenue: total_revenue / number of sales records.
        total_parties: Parties hosted.
        total_party_revenue: Party game plus party food revenue.
        avg_party_revenue: total_party_revenue / total_parties.
        combo_revenue: Revenue of combo packages in the sales mix.
        combo_quantity: Units of combo packages sold.
        cards: Card issuance metrics.
    """

    total_revenue: float = 0.0
    total_game_revenue: float = 0.0
    total_food_revenue: float = 0.0
    total_footfall: float = 0.0
    weekend_revenue_percent: float = 0.0
    bonus_credit_percent: float = 0.0
    total_recharge: float = 0.0
    revenue_per_footfall: float = 0.0
    food_percentage: float = 0.0
    avg_daily_revenue: float = 0.0
    total_parties: float = 0.0
    total_party_revenue: float = 0.0
    avg_party_revenue: float = 0.0
    combo_revenue: float = 0.0
    combo_quantity: float = 0.0
    cards: CardIssuanceMetrics = field(default_factory=CardIssuanceMetrics)


def get_executive_kpis(
    sales: pd.DataFrame,
    recharge: pd.DataFrame,
    arcade: pd.DataFrame,
    sales_mix: pd.DataFrame,
) -> ExecutiveKPIs:
    """Compute the overview KPIs from already-filtered datasets."""
    game = float(numeric_column(sales, "game_revenue").sum())
    food = float(numeric_column(sales, "food_revenue").sum())
    footfall = float(numeric_column(sales, "footfall").sum())
    total_revenue = game + food

    credit = float(numeric_column(arcade, "credit").sum())
    bonus = float(numeric_column(arcade, "bonus").sum())

    parties = float(numeric_column(sales, "party_count").sum())
    party_revenue = float(
        (numeric_column(sales, "party_game_revenue") + numeric_column(sales, "party_food_revenue")).sum()
    )

    labelled = label_combo_single(sales_mix)
    is_combo = labelled["bucket"] == COMBO

    kpis = ExecutiveKPIs(
        total_revenue=total_revenue,
        total_game_revenue=game,
        total_food_revenue=food,
        total_footfall=footfall,
        weekend_revenue_percent=get_weekend_weekday_split(sales).weekend.percentage,
        bonus_credit_percent=safe_divide(bonus, credit) * 100,
        total_recharge=float(numeric_column(recharge, "amount").sum()),
        revenue_per_footfall=safe_divide(total_revenue, footfall),
        food_percentage=safe_divide(food, total_revenue) * 100,
        avg_daily_revenue=safe_divide(total_revenue, len(sales)),
        total_parties=parties,
        total_party_revenue=party_revenue,
        avg_party_revenue=safe_divide(party_revenue, parties),
        combo_revenue=float(numeric_column(labelled, "revenue")[is_combo].sum()),
        combo_quantity=float(numeric_column(labelled, "quantity")[is_combo].sum()),
        cards=get_card_issuance_metrics(sales, recharge),
    )
    logger.debug("Executive KPIs over %d sales days", len(sales))
    return kpis
