"""Birthday-party economics from the daily Sales records."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from venue_core.marts.sales import weekday_names
from venue_core.schemas import DAY_ORDER, WEEKEND_DAYS
from venue_core.utils import date_labels, group_sum, numeric_column, safe_divide, safe_ratio, text_column

logger = logging.getLogger(__name__)

DAILY_PARTY_COLUMNS = ["date", "parties", "game_revenue", "food_revenue", "total_revenue"]
DAY_WISE_PARTY_COLUMNS = ["day", "day_short", "avg_parties", "avg_revenue", "total_revenue", "total_parties"]
MONTHLY_PARTY_COLUMNS = [
    "month",
    "parties",
    "game_revenue",
    "food_revenue",
    "total_revenue",
    "avg_per_party",
]


def _party_frame(sales: pd.DataFrame) -> pd.DataFrame:
    game = numeric_column(sales, "party_game_revenue")
    food = numeric_column(sales, "party_food_revenue")
    return pd.DataFrame(
        {
            "parties": numeric_column(sales, "party_count"),
            "game_revenue": game,
            "food_revenue": food,
            "total_revenue": game + food,
        },
        index=sales.index,
    )


@dataclass
class PartyMetrics:
    """Party totals and ratios.

    Attributes:
        total_parties: Parties hosted.
        total_party_game_revenue: Game revenue booked to parties.
        total_party_food_revenue: Food revenue booked to parties.
        total_party_revenue: Game plus food party revenue.
        avg_party_game_revenue: Game revenue per party.
        avg_party_food_revenue: Food revenue per party.
        avg_party_revenue: Revenue per party.
        party_revenue_percent: Party share of all game and food revenue.
        food_percent_in_party: Food share of party revenue.
        total_revenue: All game and food revenue.
    """

    total_parties: float = 0.0
    total_party_game_revenue: float = 0.0
    total_party_food_revenue: float = 0.0
    total_party_revenue: float = 0.0
    avg_party_game_revenue: float = 0.0
    avg_party_food_revenue: float = 0.0
    avg_party_revenue: float = 0.0
    party_revenue_percent: float = 0.0
    food_percent_in_party: float = 0.0
    total_revenue: float = 0.0


def get_party_metrics(sales: pd.DataFrame) -> PartyMetrics:
    """Party totals, per-party averages and revenue shares."""
    parties = _party_frame(sales)
    total_parties = float(parties["parties"].sum())
    game = float(parties["game_revenue"].sum())
    food = float(parties["food_revenue"].sum())
    party_revenue = game + food
    total_revenue = float(
        (numeric_column(sales, "game_revenue") + numeric_column(sales, "food_revenue")).sum()
    )

    return PartyMetrics(
        total_parties=total_parties,
        total_party_game_revenue=game,
        total_party_food_revenue=food,
        total_party_revenue=party_revenue,
        avg_party_game_revenue=safe_divide(game, total_parties),
        avg_party_food_revenue=safe_divide(food, total_parties),
        avg_party_revenue=safe_divide(party_revenue, total_parties),
        party_revenue_percent=safe_divide(party_revenue, total_revenue) * 100,
        food_percent_in_party=safe_divide(food, party_revenue) * 100,
        total_revenue=total_revenue,
    )


def get_daily_party_trend(sales: pd.DataFrame) -> pd.DataFrame:
    """Party counts and revenue for each dated day that hosted a party."""
    trend = _party_frame(sales)
    trend.insert(0, "date", date_labels(sales))
    trend = trend[(trend["parties"] > 0) & (trend["date"] != "")]
    return trend.sort_values("date", kind="stable").reset_index(drop=True)[DAILY_PARTY_COLUMNS]


def get_weekend_weekday_parties(sales: pd.DataFrame) -> pd.DataFrame:
    """Parties, revenue and revenue per party for weekend and weekday.

    Returns:
        Two rows named "Weekend" and "Weekday".
    """
    parties = _party_frame(sales)
    is_weekend = weekday_names(sales).isin(WEEKEND_DAYS)

    rows = []
    for name, mask in (("Weekend", is_weekend), ("Weekday", ~is_weekend)):
        count = float(parties.loc[mask, "parties"].sum())
        revenue = float(parties.loc[mask, "total_revenue"].sum())
        rows.append(
            {
                "name": name,
                "parties": count,
                "revenue": revenue,
                "avg_revenue": safe_divide(revenue, count),
            }
        )
    return pd.DataFrame(rows)


def get_day_wise_parties(sales: pd.DataFrame) -> pd.DataFrame:
    """Per-weekday party averages in Monday..Sunday order.

    ``avg_parties`` is parties per day rounded half-up to a whole number.
    """
    frame = _party_frame(sales)
    frame["day"] = weekday_names(sales)
    frame["days"] = 1
    frame = frame[frame["day"].isin(DAY_ORDER)]

    grouped = group_sum(frame, "day", ["parties", "total_revenue", "days"]).set_index("day")
    grouped = grouped.reindex([d for d in DAY_ORDER if d in grouped.index])

    out = pd.DataFrame(
        {
            "day": grouped.index,
            "day_short": [d[:3] for d in grouped.index],
            "avg_parties": np.floor(safe_ratio(grouped["parties"], grouped["days"]) + 0.5).to_numpy(),
            "avg_revenue": safe_ratio(grouped["total_revenue"], grouped["days"]).to_numpy(),
            "total_revenue": grouped["total_revenue"].to_numpy(),
            "total_parties": grouped["parties"].to_numpy(),
        },
        columns=DAY_WISE_PARTY_COLUMNS,
    )
    return out


def get_monthly_party_breakdown(sales: pd.DataFrame) -> pd.DataFrame:
    """Party totals per month, months in the order they first appear."""
    frame = _party_frame(sales)
    frame["month"] = text_column(sales, "month").str.strip()
    frame = frame[frame["month"] != ""]

    grouped = group_sum(frame, "month", ["parties", "game_revenue", "food_revenue", "total_revenue"])
    grouped["avg_per_party"] = safe_ratio(grouped["total_revenue"], grouped["parties"])
    logger.debug("Monthly party breakdown: %d months", len(grouped))
    return grouped[MONTHLY_PARTY_COLUMNS]
