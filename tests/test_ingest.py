"""Tests for workbook ingestion.

A small workbook with the same sheet layouts as the operator's master file
is written to a temporary directory with xlsxwriter and read back through
openpyxl.
"""

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from venue_core import DataPaths, load_dataset
from venue_core.exceptions import IngestionError
from venue_core.ingest.workbook import (
    detect_first_data_row,
    ingest_workbook,
    main,
    read_workbook,
    to_excel_serial,
)


def _sales_row(serial, month, day, **positions) -> list:
    row = [None] * 24
    row[0], row[1], row[2] = serial, month, day
    for pos, value in positions.items():
        row[int(pos.lstrip("c"))] = value
    return row


def _write_workbook(path: Path, include_arcade: bool = True) -> Path:
    sales_rows = [
        ["VENUE DAILY SALES"] + [None] * 23,
        ["Date", "Month", "Day", "Game Revenue"] + [None] * 20,
        _sales_row(45170, "September", "Friday", c3=1000, c6=200, c7=50, c9=300, c10=40,
                   c12=5, c13=10, c21=100, c22=50, c23=1),
        _sales_row(45171, "September", "Saturday", c3=2000, c9=600, c10=90),
        ["Total", None, None, 3000] + [None] * 20,
    ]
    sales_mix_rows = [
        ["SALES MIX", None, None, None, None, None, None],
        ["Date", "Month", "Day", "Activity", "Variant", "REVENUE ", "QUANTITY "],
        [45170, "September", "Friday", "Bowling ", "1 Game", 1000, 2],
        [45171, "September", "Saturday", "Trampoline", "Big Thrill Combo", 1500, 3],
        [45171, "September", "Saturday", "GRAND TOTAL ", None, 2500, 5],
    ]
    recharge_rows = [
        ["Date", "Month", "Cashier", "Recharge_Type", "Recharge_Level", "Quantity", "Amount"],
        [45170, "September", "Asha", "CARD ISSUE", 1000, 1, 1000],
        [None, None, None, "GRAND TOTAL ", None, 1, 1000],
    ]
    arcade_rows = [
        ["ARCADE", None, None, None, None, None, None, None, None, None],
        ["DATE ", "Month", "Day", "GAME NAME FINAL", "GAME NAME", "Type of Game", "QTY", "CREDIT", "BONUS ", "TOTAL"],
        [45170, "September", "Friday", "Dance Hero", "DANCE HERO 1", "Arcade", 10, 800, 200, 1000],
        [45170, "September", "Friday", None, "UNNAMED", "Arcade", 1, 1, 1, 2],
    ]

    sheets = {"Sales data": sales_rows, "Sales mix": sales_mix_rows, "Recharge data": recharge_rows}
    if include_arcade:
        sheets["ARCADE"] = arcade_rows

    with pd.ExcelWriter(path, engine="xlsxwriter") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=name, header=False, index=False)
    return path


@pytest.fixture
def workbook(tmp_path: Path) -> Path:
    return _write_workbook(tmp_path / "venue.xlsx")


def test_to_excel_serial() -> None:
    assert to_excel_serial(45170) == 45170.0
    assert to_excel_serial(datetime(2023, 9, 1)) == 45170.0
    assert to_excel_serial(None) is None
    assert to_excel_serial("Date") is None
    assert to_excel_serial(True) is None


def test_detect_first_data_row() -> None:
    raw = pd.DataFrame([["Title", None], ["Date", "Month"], [45170, "September"], [45171, "September"]])
    assert detect_first_data_row(raw) == 2
    assert detect_first_data_row(pd.DataFrame([["Date", "Month"]])) is None


class TestReadWorkbook:
    """Tests for read_workbook."""

    def test_sales_fixed_positions(self, workbook: Path) -> None:
        sales = read_workbook(workbook)["sales"]

        assert len(sales) == 2, "Title, header and total rows are skipped"
        first = sales.iloc[0]
        assert first["date_iso"] == "2023-09-01"
        assert first["month"] == "September"
        assert first["game_revenue"] == 1000.0
        assert first["arcade_credit"] == 200.0
        assert first["arcade_bonus"] == 50.0
        assert first["food_revenue"] == 300.0
        assert first["footfall"] == 40.0
        assert first["new_cards"] == 5.0
        assert first["recharge_cards"] == 10.0
        assert first["party_game_revenue"] == 100.0
        assert first["party_food_revenue"] == 50.0
        assert first["party_count"] == 1.0
        assert sales.iloc[1]["party_count"] == 0.0

    def test_header_sheets(self, workbook: Path) -> None:
        data = read_workbook(workbook)

        assert list(data["sales_mix"]["activity"]) == ["Bowling", "Trampoline"]
        assert list(data["sales_mix"]["revenue"]) == [1000.0, 1500.0]
        assert list(data["recharge"]["recharge_type"]) == ["CARD ISSUE"]
        assert list(data["arcade"]["game_name_final"]) == ["Dance Hero"]
        assert data["arcade"]["quantity"].iloc[0] == 10.0
        assert data["arcade"]["game_type"].iloc[0] == "Arcade"

    def test_missing_sheet(self, tmp_path: Path) -> None:
        path = _write_workbook(tmp_path / "partial.xlsx", include_arcade=False)
        with pytest.raises(IngestionError):
            read_workbook(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_workbook(tmp_path / "nope.xlsx")


def test_ingest_round_trip(workbook: Path, tmp_path: Path) -> None:
    outdir = tmp_path / "data"

    written = ingest_workbook(workbook, outdir)

    assert set(written) == {"sales", "sales_mix", "recharge", "arcade"}
    assert all(p.exists() for p in written.values())

    dataset = load_dataset(DataPaths.from_root(outdir))
    assert len(dataset.sales) == 2
    assert len(dataset.sales_mix) == 2
    assert dataset.recharge["amount"].sum() == 1000.0
    assert dataset.arcade["total"].sum() == 1000.0
    assert dataset.months == ["September"]


def test_cli(workbook: Path, tmp_path: Path) -> None:
    outdir = tmp_path / "cli"
    main([str(workbook), "--outdir", str(outdir), "--quiet"])
    assert (outdir / "salesmix.json").exists()


def test_cli_missing_workbook(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main([str(tmp_path / "nope.xlsx"), "--outdir", str(tmp_path)])
