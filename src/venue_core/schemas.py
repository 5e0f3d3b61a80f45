"""Record schemas and static lookup tables.

Every collection handled by the marts is a pandas DataFrame with the
canonical snake_case columns declared here. The source spreadsheet (and the
JSON snapshots produced from it) use inconsistent headers such as
``"REVENUE "`` or ``"GAME NAME FINAL"``; ``DatasetSchema.aliases`` maps those
onto the canonical names after whitespace/case normalization.

The lookup tables are read-only. Functions that use them accept the table
as a parameter so tests can substitute alternates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

GRAND_TOTAL = "GRAND TOTAL"

DAY_ORDER: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

WEEKEND_DAYS = frozenset({"Saturday", "Sunday"})

# Floor area in square feet per activity. Lookups pick the first key that
# matches case-insensitively, so order is significant.
ACTIVITY_SQFT: Mapping[str, float] = MappingProxyType(
    {
        "Trampoline": 9000,
        "BOWLING": 5000,
        "Laser Tag": 2200,
        "Shooting": 400,
        "Hyper Grid": 400,
        "Rope Course": 1200,
        "Sky Rider": 500,
        "Cricket": 500,
        "SOFT PLAY": 2500,
        "Gravity Glide": 700,
        "Panda Climb": 500,
        "Pool Report": 200,
        "Arcade": 2000,
        "VR Zone": 500,
        "VR": 500,
    }
)

ARCADE_AREA_KEY = "Arcade"
VR_AREA_KEY = "VR Zone"

RECHARGE_SLABS: tuple[int, ...] = (1000, 3000, 6000, 12000, 25000)
VARIABLE_SLAB = "Variable"

# (segment, lower bound, lower inclusive, upper bound) evaluated in order;
# upper bounds are inclusive, None means unbounded.
SPENDER_SEGMENTS: tuple[tuple[str, float, bool, float | None], ...] = (
    ("low", 1000, True, 3000),
    ("mid", 3000, False, 12000),
    ("high", 12000, False, None),
)


def normalize_header(name: object) -> str:
    """Normalize a column header for alias lookup.

    Underscores become spaces, repeated whitespace collapses, text is
    uppercased and trimmed, so ``"REVENUE "``, ``"revenue"`` and
    ``"Recharge_Type"`` resolve consistently.
    """
    s = str(name).replace("\xa0", " ").replace("_", " ")
    s = re.sub(r"\s+", " ", s).strip()
    return s.upper()


@dataclass(frozen=True)
class DatasetSchema:
    """Column layout of one record collection.

    Attributes:
        name: Dataset name ("sales", "sales_mix", "recharge", "arcade").
        text_columns: Canonical text columns, in output order.
        numeric_columns: Canonical numeric columns, in output order.
        key_column: Text column checked for spreadsheet subtotal rows,
            or None when the dataset has none.
        raw_aliases: Raw header -> canonical column.
    """

    name: str
    text_columns: tuple[str, ...]
    numeric_columns: tuple[str, ...]
    key_column: str | None = None
    raw_aliases: Mapping[str, str] = field(default_factory=dict)

    @property
    def columns(self) -> list[str]:
        """All canonical columns: date first, then text, then numbers, then date_iso."""
        return ["date", *self.text_columns, *self.numeric_columns, "date_iso"]

    @property
    def aliases(self) -> dict[str, str]:
        """Normalized header -> canonical column, canonical names included."""
        out = {normalize_header(c): c for c in self.columns}
        out.update({normalize_header(k): v for k, v in self.raw_aliases.items()})
        out[normalize_header("DateFormatted")] = "date_iso"
        return out


SALES = DatasetSchema(
    name="sales",
    text_columns=("month", "day"),
    numeric_columns=(
        "game_revenue",
        "food_revenue",
        "footfall",
        "party_game_revenue",
        "party_food_revenue",
        "party_count",
        "new_cards",
        "recharge_cards",
        "arcade_credit",
        "arcade_bonus",
    ),
    raw_aliases={
        "GameRevenue": "game_revenue",
        "FoodSale": "food_revenue",
        "PartyGameSale": "party_game_revenue",
        "PartyFoodSale": "party_food_revenue",
        "NoOfParties": "party_count",
        "NewCards": "new_cards",
        "RechargeCards": "recharge_cards",
        "Consumption_ArcadeCredit": "arcade_credit",
        "Consumption_ArcadeBonus": "arcade_bonus",
    },
)

SALES_MIX = DatasetSchema(
    name="sales_mix",
    text_columns=("month", "day", "activity", "variant"),
    numeric_columns=("revenue", "quantity"),
    key_column="activity",
)

RECHARGE = DatasetSchema(
    name="recharge",
    text_columns=("month", "cashier", "recharge_type"),
    numeric_columns=("recharge_level", "quantity", "amount"),
    key_column="recharge_type",
)

ARCADE = DatasetSchema(
    name="arcade",
    text_columns=("month", "day", "game_name_final", "game_name", "game_type"),
    numeric_columns=("quantity", "credit", "bonus", "total"),
    key_column="game_name_final",
    raw_aliases={
        "QTY": "quantity",
        "Type of Game": "game_type",
    },
)

SCHEMAS: Mapping[str, DatasetSchema] = MappingProxyType(
    {s.name: s for s in (SALES, SALES_MIX, RECHARGE, ARCADE)}
)
