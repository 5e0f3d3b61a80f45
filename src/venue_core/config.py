"""Unified configuration for venue_core.

This module provides the filesystem layout of the JSON snapshots consumed
by the marts and the tunable thresholds used when flagging arcade machines.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class DataPaths:
    """All filesystem paths used by the loaders and the ingestion script.

    Attributes:
        data_root: Directory holding the four JSON snapshots.
        workbook: Optional path to the source spreadsheet the snapshots are
            built from.

    Directory Structure:
        data_root/
        ├── sales.json       # one row per calendar day
        ├── salesmix.json    # day x activity x package variant
        ├── recharge.json    # cashier recharge / card issue transactions
        └── arcade.json      # day x machine readings
    """

    data_root: Path
    workbook: Path | None = None

    @classmethod
    def from_root(
        cls,
        data_root: str | Path,
        workbook: str | Path | None = None,
    ) -> DataPaths:
        """Create DataPaths from a data directory and optional workbook.

        Args:
            data_root: Directory for the JSON snapshots.
            workbook: Path to the source .xlsx file, if ingestion is needed.

        Returns:
            DataPaths instance.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.sales_json
            PosixPath('data/sales.json')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        if isinstance(workbook, str):
            workbook = Path(workbook)

        return cls(data_root=data_root, workbook=workbook)

    @property
    def sales_json(self) -> Path:
        """Daily sales snapshot."""
        return self.data_root / "sales.json"

    @property
    def sales_mix_json(self) -> Path:
        """Per-activity, per-variant sales snapshot."""
        return self.data_root / "salesmix.json"

    @property
    def recharge_json(self) -> Path:
        """Recharge transactions snapshot."""
        return self.data_root / "recharge.json"

    @property
    def arcade_json(self) -> Path:
        """Arcade machine readings snapshot."""
        return self.data_root / "arcade.json"

    def snapshot_path(self, dataset: str) -> Path:
        """Return the snapshot path for a dataset name ("sales", "sales_mix", ...)."""
        return {
            "sales": self.sales_json,
            "sales_mix": self.sales_mix_json,
            "recharge": self.recharge_json,
            "arcade": self.arcade_json,
        }[dataset]

    def ensure_dirs(self) -> None:
        """Create the snapshot directory."""
        self.data_root.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class MachineThresholds:
    """Thresholds for flagging arcade machines.

    Attributes:
        low_revenue: Machines whose total revenue is below this value are
            flagged as low performers.
        high_bonus_ratio: Machines whose bonus/credit ratio exceeds this value
            (0.5 == 50%) are flagged as bonus heavy.
    """

    low_revenue: float = 1000.0
    high_bonus_ratio: float = 0.5
