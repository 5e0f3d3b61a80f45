"""Tests for the recharge marts."""

import pandas as pd
import pytest

from venue_core.marts.recharge import (
    SEGMENT_COLUMNS,
    get_card_issuance_metrics,
    get_cashier_performance,
    get_recharge_by_slab,
    get_recharge_summary,
    get_recharge_type_breakdown,
    get_spender_segmentation,
    recharge_type_label,
    slab_label,
)


@pytest.fixture
def recharge() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "cashier": ["Asha", "Ravi", "Asha", "Ravi", "Asha", ""],
            "recharge_type": [
                "CARD ISSUE",
                "RECHARGE CARD",
                "RECHARGE CARD ",
                "RECHARGE CARD",
                "GRAND TOTAL",
                "",
            ],
            "recharge_level": [1000.0, 3000.0, 2500.0, 25000.0, 1000.0, 500.0],
            "quantity": [1.0, 2.0, 1.0, 1.0, 1.0, 1.0],
            "amount": [1000.0, 6000.0, 2500.0, 25000.0, 1000.0, 500.0],
        }
    )


def test_slab_label() -> None:
    assert slab_label(1000) == "1000"
    assert slab_label(12000.0) == "12000"
    assert slab_label(2500) == "Variable"
    assert slab_label(0) == "Variable"


def test_recharge_by_slab_order_and_presence(recharge: pd.DataFrame) -> None:
    slabs = get_recharge_by_slab(recharge)

    assert list(slabs["slab"]) == ["1000", "3000", "25000", "Variable"]
    by_slab = slabs.set_index("slab")
    assert by_slab.loc["1000", "revenue"] == 2000.0
    assert by_slab.loc["1000", "count"] == 2
    assert by_slab.loc["Variable", "revenue"] == 3000.0
    assert slabs["revenue"].sum() == pytest.approx(recharge["amount"].sum())


class TestSpenderSegmentation:
    """Tests for get_spender_segmentation."""

    def test_boundaries(self) -> None:
        recharge = pd.DataFrame(
            {
                "recharge_level": [999.0, 1000.0, 3000.0, 3001.0, 12000.0, 12001.0],
                "quantity": [1.0] * 6,
                "amount": [10.0, 20.0, 30.0, 40.0, 50.0, 60.0],
            }
        )

        seg = get_spender_segmentation(recharge).set_index("segment")

        assert seg.loc["low", "revenue"] == 50.0, "1000 and 3000 are low"
        assert seg.loc["low", "count"] == 2
        assert seg.loc["mid", "revenue"] == 90.0, "3001 and 12000 are mid"
        assert seg.loc["high", "revenue"] == 60.0
        assert seg["revenue"].sum() == 200.0, "Levels below 1000 are not counted"

    def test_always_three_rows(self) -> None:
        seg = get_spender_segmentation(pd.DataFrame())

        assert list(seg.columns) == SEGMENT_COLUMNS
        assert list(seg["segment"]) == ["low", "mid", "high"]
        assert seg["revenue"].sum() == 0.0


def test_card_issuance_metrics(recharge: pd.DataFrame) -> None:
    sales = pd.DataFrame({"new_cards": [4.0, 6.0], "recharge_cards": [10.0, 20.0]})

    cards = get_card_issuance_metrics(sales, recharge)

    assert cards.new_cards == 10.0
    assert cards.recharge_cards == 30.0
    assert cards.total_cards == 40.0
    assert cards.recharge_percentage == pytest.approx(75.0)
    assert cards.new_card_revenue == 1000.0
    assert cards.recharge_card_revenue == 33500.0


def test_card_issuance_metrics_without_cards() -> None:
    cards = get_card_issuance_metrics(pd.DataFrame(), pd.DataFrame())
    assert cards.total_cards == 0.0
    assert cards.recharge_percentage == 0.0


def test_card_issuance_markers_are_case_sensitive() -> None:
    recharge = pd.DataFrame(
        {
            "recharge_type": ["Recharge Card", "card issue", "RECHARGE CARD"],
            "amount": [500.0, 700.0, 300.0],
        }
    )

    cards = get_card_issuance_metrics(pd.DataFrame(), recharge)

    assert cards.recharge_card_revenue == 300.0
    assert cards.new_card_revenue == 0.0


def test_recharge_type_label() -> None:
    assert recharge_type_label("CARD ISSUE") == "Issue"
    assert recharge_type_label("RECHARGE CARD") == "Recharge"
    assert recharge_type_label("VARIABLE RECHARGE") == "VARIABLE Recharge"


def test_recharge_type_breakdown(recharge: pd.DataFrame) -> None:
    breakdown = get_recharge_type_breakdown(recharge)

    assert list(breakdown["recharge_type"]) == ["CARD ISSUE", "RECHARGE CARD"]
    assert list(breakdown["label"]) == ["Issue", "Recharge"]
    assert list(breakdown["revenue"]) == [1000.0, 33500.0]
    assert list(breakdown["count"]) == [1, 3]


def test_cashier_performance(recharge: pd.DataFrame) -> None:
    cashiers = get_cashier_performance(recharge)

    assert list(cashiers["cashier"]) == ["Ravi", "Asha"]
    ravi = cashiers.iloc[0]
    assert ravi["revenue"] == 31000.0
    assert ravi["count"] == 2
    assert ravi["avg_transaction"] == pytest.approx(15500.0)


def test_recharge_summary(recharge: pd.DataFrame) -> None:
    summary = get_recharge_summary(recharge)

    assert summary.entries == 6
    assert summary.total_revenue == 36000.0
    assert summary.total_cards == 7.0
    assert summary.avg_per_entry == pytest.approx(6000.0)
    assert summary.avg_per_card == pytest.approx(36000.0 / 7)
    assert summary.top_slab == "25000"


def test_recharge_summary_empty() -> None:
    summary = get_recharge_summary(pd.DataFrame())
    assert summary.entries == 0
    assert summary.avg_per_entry == 0.0
    assert summary.top_slab is None
