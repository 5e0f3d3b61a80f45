"""Load and normalize the four record collections.

The JSON snapshots are written once by the ingestion script and read here
into DataFrames with canonical columns (see ``venue_core.schemas``). After
loading, collections are treated as read-only; the marts always work on
copies.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from venue_core.config import DataPaths
from venue_core.exceptions import ConfigError, DataQualityError
from venue_core.filters import filter_by_date_range, filter_by_month
from venue_core.schemas import GRAND_TOTAL, SCHEMAS, DatasetSchema, normalize_header
from venue_core.utils import excel_serial_to_iso, numeric_column, text_column

logger = logging.getLogger(__name__)


def get_schema(dataset: str) -> DatasetSchema:
    """Look up a dataset schema by name.

    Raises:
        ConfigError: If the dataset name is unknown.
    """
    try:
        return SCHEMAS[dataset]
    except KeyError:
        raise ConfigError(
            f"Unknown dataset '{dataset}'. Must be one of: {', '.join(SCHEMAS)}"
        ) from None


def _rename_to_canonical(frame: pd.DataFrame, schema: DatasetSchema) -> pd.DataFrame:
    """Rename raw headers to canonical columns, dropping unknown ones.

    When two raw headers resolve to the same column the first one wins.
    """
    aliases = schema.aliases
    keep: dict[str, str] = {}
    for col in frame.columns:
        canonical = aliases.get(normalize_header(col))
        if canonical and canonical not in keep.values():
            keep[col] = canonical
    return frame[list(keep)].rename(columns=keep)


def normalize_records(frame: pd.DataFrame, dataset: str) -> pd.DataFrame:
    """Bring raw records into the canonical schema of a dataset.

    - Raw headers are matched to canonical columns case/whitespace-insensitively.
    - Missing columns are added; numeric nulls become 0, text nulls become "".
    - Text values are trimmed.
    - Spreadsheet subtotal rows ("GRAND TOTAL") are dropped.
    - ``date_iso`` is derived from the serial ``date`` where absent.

    Args:
        frame: Raw records (one row per record).
        dataset: "sales", "sales_mix", "recharge" or "arcade".

    Returns:
        New DataFrame with exactly ``schema.columns`` in order.
    """
    schema = get_schema(dataset)
    renamed = _rename_to_canonical(frame, schema)

    out = pd.DataFrame(index=renamed.index)
    out["date"] = numeric_column(renamed, "date")
    for col in schema.text_columns:
        out[col] = text_column(renamed, col).str.strip()
    for col in schema.numeric_columns:
        out[col] = numeric_column(renamed, col)

    iso = text_column(renamed, "date_iso").str.strip()
    derived = out["date"].map(lambda v: excel_serial_to_iso(v) or "")
    out["date_iso"] = iso.where(iso != "", derived)

    if schema.key_column:
        subtotal = out[schema.key_column].str.strip() == GRAND_TOTAL
        if subtotal.any():
            logger.debug("Dropping %d subtotal rows from %s", int(subtotal.sum()), dataset)
        out = out.loc[~subtotal]

    return out[schema.columns].reset_index(drop=True)


def load_records(path: Path, dataset: str) -> pd.DataFrame:
    """Load one JSON snapshot (a list of flat objects) into a canonical DataFrame.

    Raises:
        FileNotFoundError: If the snapshot does not exist.
        DataQualityError: If the file is not a JSON list of objects.
    """
    if not path.exists():
        raise FileNotFoundError(f"{dataset} snapshot not found at {path}")

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataQualityError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise DataQualityError(f"{path} must contain a JSON list of objects")

    df = normalize_records(pd.DataFrame.from_records(records), dataset)
    logger.info("Loaded %d %s records from %s", len(df), dataset, path)
    return df


@dataclass(frozen=True)
class VenueDataset:
    """The four collections, materialized once and shared read-only.

    Attributes:
        sales: One row per calendar day.
        sales_mix: One row per day x activity x package variant.
        recharge: One row per recharge / card issue transaction.
        arcade: One row per day x machine reading.
    """

    sales: pd.DataFrame
    sales_mix: pd.DataFrame
    recharge: pd.DataFrame
    arcade: pd.DataFrame

    def filter_by_month(self, months: Iterable[str] | None) -> VenueDataset:
        """Apply the same month selection to all four collections."""
        selected = list(months or [])
        return VenueDataset(
            sales=filter_by_month(self.sales, selected),
            sales_mix=filter_by_month(self.sales_mix, selected),
            recharge=filter_by_month(self.recharge, selected),
            arcade=filter_by_month(self.arcade, selected),
        )

    def filter_by_date_range(self, start: str | None = None, end: str | None = None) -> VenueDataset:
        """Apply the same inclusive ISO date range to all four collections."""
        return VenueDataset(
            sales=filter_by_date_range(self.sales, start, end),
            sales_mix=filter_by_date_range(self.sales_mix, start, end),
            recharge=filter_by_date_range(self.recharge, start, end),
            arcade=filter_by_date_range(self.arcade, start, end),
        )

    @property
    def months(self) -> list[str]:
        """Month names present in the sales collection, in first-seen order."""
        months = text_column(self.sales, "month")
        return [m for m in months.drop_duplicates() if m]


def load_dataset(paths: DataPaths) -> VenueDataset:
    """Load all four JSON snapshots under ``paths.data_root``."""
    logger.info("Loading venue snapshots from %s", paths.data_root)
    return VenueDataset(
        sales=load_records(paths.sales_json, "sales"),
        sales_mix=load_records(paths.sales_mix_json, "sales_mix"),
        recharge=load_records(paths.recharge_json, "recharge"),
        arcade=load_records(paths.arcade_json, "arcade"),
    )
