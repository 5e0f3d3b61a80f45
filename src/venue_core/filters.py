"""Generic row filters shared by every report page.

Callers narrow a collection with these first, then hand the subset to one
or more marts. The filters work on any DataFrame that carries the relevant
column, never mutate their input, and treat an empty selection as "no filter".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from venue_core.utils import text_column

logger = logging.getLogger(__name__)

ALL_GAME_TYPES = "All"


def filter_by_month(records: pd.DataFrame, months: Iterable[str] | None) -> pd.DataFrame:
    """Keep rows whose ``month`` is one of the selected month names.

    Args:
        records: Any collection with a ``month`` column.
        months: Selected month names. Empty or None means "show all".

    Returns:
        A new DataFrame; the full collection (same order and content) when
        no months are selected.

    Examples:
        >>> filter_by_month(sales, ["September"])  # doctest: +SKIP
    """
    selected = list(months or [])
    if not selected:
        return records.copy()

    mask = text_column(records, "month").isin(selected)
    logger.debug("Month filter %s kept %d of %d rows", selected, int(mask.sum()), len(records))
    return records.loc[mask].copy()


def filter_by_date_range(
    records: pd.DataFrame,
    start: str | None = None,
    end: str | None = None,
) -> pd.DataFrame:
    """Keep rows whose ``date_iso`` falls within [start, end].

    ISO date strings sort the same way as the dates they represent, so plain
    string comparison is used. Rows without a ``date_iso`` value are dropped
    whenever either bound is supplied.

    Args:
        records: Any collection with a ``date_iso`` column.
        start: Inclusive lower bound (YYYY-MM-DD), or None.
        end: Inclusive upper bound (YYYY-MM-DD), or None.

    Returns:
        A new DataFrame with the matching rows.
    """
    if not start and not end:
        return records.copy()

    iso = text_column(records, "date_iso")
    mask = iso != ""
    if start:
        mask &= iso >= start
    if end:
        mask &= iso <= end
    return records.loc[mask].copy()


def filter_by_game_type(arcade: pd.DataFrame, game_type: str | None) -> pd.DataFrame:
    """Keep arcade readings of one game type ("Arcade" or "VR"), case-insensitively.

    ``"All"`` or None returns the collection unchanged.
    """
    if not game_type or game_type == ALL_GAME_TYPES:
        return arcade.copy()
    mask = text_column(arcade, "game_type").str.lower() == game_type.lower()
    return arcade.loc[mask].copy()
