"""Arcade machine marts.

Machine readings arrive one row per machine per day. Machines are identified
by ``game_name_final`` (the cleaned name), falling back to the raw
``game_name`` when the cleaned one is blank.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from venue_core.config import MachineThresholds
from venue_core.utils import numeric_column, safe_divide, safe_ratio, text_column

logger = logging.getLogger(__name__)

MACHINE_COLUMNS = [
    "game_name",
    "game_type",
    "credit",
    "bonus",
    "total",
    "quantity",
    "avg_per_play",
    "bonus_ratio",
    "low_performer",
    "high_bonus",
    "flag",
]

DEFAULT_GAME_TYPE = "Arcade"
LOW_PERFORMER_FLAG = "low performer"
HIGH_BONUS_FLAG = "high bonus"


def resolve_game_name(arcade: pd.DataFrame) -> pd.Series:
    """Machine identity per row: trimmed ``game_name_final``, else ``game_name``."""
    final = text_column(arcade, "game_name_final").str.strip()
    raw = text_column(arcade, "game_name").str.strip()
    return final.where(final != "", raw)


def get_machine_performance(
    arcade: pd.DataFrame,
    thresholds: MachineThresholds = MachineThresholds(),
) -> pd.DataFrame:
    """Per-machine totals with low-performer and bonus-heavy flags.

    Args:
        arcade: Arcade machine readings.
        thresholds: Flagging thresholds.

    Returns:
        One row per machine with the MACHINE_COLUMNS, sorted by total
        descending. ``game_type`` is taken from the machine's first reading.
    """
    game_type = text_column(arcade, "game_type").str.strip()
    frame = pd.DataFrame(
        {
            "game_name": resolve_game_name(arcade),
            "game_type": game_type.where(game_type != "", DEFAULT_GAME_TYPE),
            "credit": numeric_column(arcade, "credit"),
            "bonus": numeric_column(arcade, "bonus"),
            "total": numeric_column(arcade, "total"),
            "quantity": numeric_column(arcade, "quantity"),
        }
    )
    frame = frame[frame["game_name"] != ""]
    if frame.empty:
        return pd.DataFrame(columns=MACHINE_COLUMNS)

    machines = (
        frame.groupby("game_name", sort=False)
        .agg(
            game_type=("game_type", "first"),
            credit=("credit", "sum"),
            bonus=("bonus", "sum"),
            total=("total", "sum"),
            quantity=("quantity", "sum"),
        )
        .reset_index()
    )
    machines["avg_per_play"] = safe_ratio(machines["total"], machines["quantity"])
    machines["bonus_ratio"] = safe_ratio(machines["bonus"], machines["credit"])
    machines["low_performer"] = machines["total"] < thresholds.low_revenue
    machines["high_bonus"] = machines["bonus_ratio"] > thresholds.high_bonus_ratio
    machines["flag"] = ""
    machines.loc[machines["high_bonus"], "flag"] = HIGH_BONUS_FLAG
    machines.loc[machines["low_performer"], "flag"] = LOW_PERFORMER_FLAG

    logger.debug(
        "Machine performance: %d machines, %d low, %d high bonus",
        len(machines),
        int(machines["low_performer"].sum()),
        int(machines["high_bonus"].sum()),
    )
    return (
        machines[MACHINE_COLUMNS]
        .sort_values("total", ascending=False, kind="stable")
        .reset_index(drop=True)
    )


def get_arcade_vr_split(arcade: pd.DataFrame) -> pd.DataFrame:
    """Credit, bonus, quantity and revenue for the Arcade and VR machine types.

    Returns:
        Two rows (Arcade, VR) with columns game_type, credit, bonus,
        quantity, revenue (credit + bonus).
    """
    kind = text_column(arcade, "game_type").str.strip().str.lower()
    credit = numeric_column(arcade, "credit")
    bonus = numeric_column(arcade, "bonus")
    quantity = numeric_column(arcade, "quantity")

    rows = []
    for label in ("Arcade", "VR"):
        mask = kind == label.lower()
        rows.append(
            {
                "game_type": label,
                "credit": float(credit[mask].sum()),
                "bonus": float(bonus[mask].sum()),
                "quantity": float(quantity[mask].sum()),
            }
        )
    split = pd.DataFrame(rows)
    split["revenue"] = split["credit"] + split["bonus"]
    return split


@dataclass
class ArcadeSummary:
    """Headline arcade KPIs.

    Attributes:
        total_credit: Credit consumed across all machines.
        total_bonus: Bonus consumed across all machines.
        total_revenue: Sum of machine totals.
        bonus_ratio_percent: total_bonus / total_credit * 100.
        machine_count: Number of machines.
        top_machine: Highest-total machine, or None.
        low_performers: Machines flagged as low performers.
        high_bonus_machines: Machines flagged as bonus heavy.
    """

    total_credit: float = 0.0
    total_bonus: float = 0.0
    total_revenue: float = 0.0
    bonus_ratio_percent: float = 0.0
    machine_count: int = 0
    top_machine: str | None = None
    low_performers: int = 0
    high_bonus_machines: int = 0


def get_arcade_summary(machines: pd.DataFrame) -> ArcadeSummary:
    """Summarize the output of ``get_machine_performance``."""
    if machines.empty:
        return ArcadeSummary()

    total_credit = float(machines["credit"].sum())
    total_bonus = float(machines["bonus"].sum())
    return ArcadeSummary(
        total_credit=total_credit,
        total_bonus=total_bonus,
        total_revenue=float(machines["total"].sum()),
        bonus_ratio_percent=safe_divide(total_bonus, total_credit) * 100,
        machine_count=len(machines),
        top_machine=str(machines.loc[machines["total"].idxmax(), "game_name"]),
        low_performers=int(machines["low_performer"].sum()),
        high_bonus_machines=int(machines["high_bonus"].sum()),
    )
