"""Tests for arcade machine marts."""

import pandas as pd
import pytest

from venue_core.config import MachineThresholds
from venue_core.marts.arcade import (
    HIGH_BONUS_FLAG,
    LOW_PERFORMER_FLAG,
    MACHINE_COLUMNS,
    get_arcade_summary,
    get_arcade_vr_split,
    get_machine_performance,
    resolve_game_name,
)


@pytest.fixture
def arcade() -> pd.DataFrame:
    """Three machines over two days plus a row with no name."""
    return pd.DataFrame(
        {
            "game_name_final": ["Dance Hero", "Dance Hero", "Air Hockey", "", "Claw", ""],
            "game_name": ["DANCE HERO 1", "DANCE HERO 1", "AIR HOCKEY", "VR Coaster", "CLAW", ""],
            "game_type": ["Arcade", "Arcade", "Arcade", "VR", "", "Arcade"],
            "quantity": [100.0, 50.0, 10.0, 20.0, 0.0, 5.0],
            "credit": [3000.0, 1000.0, 400.0, 1800.0, 600.0, 10.0],
            "bonus": [200.0, 100.0, 300.0, 900.0, 0.0, 10.0],
            "total": [3200.0, 1100.0, 700.0, 2700.0, 600.0, 20.0],
        }
    )


def test_resolve_game_name_falls_back_to_raw_name(arcade: pd.DataFrame) -> None:
    names = resolve_game_name(arcade)
    assert list(names) == ["Dance Hero", "Dance Hero", "Air Hockey", "VR Coaster", "Claw", ""]


class TestMachinePerformance:
    """Tests for get_machine_performance."""

    def test_one_row_per_named_machine(self, arcade: pd.DataFrame) -> None:
        machines = get_machine_performance(arcade)

        assert list(machines.columns) == MACHINE_COLUMNS
        assert list(machines["game_name"]) == ["Dance Hero", "VR Coaster", "Air Hockey", "Claw"]

    def test_totals_and_ratios(self, arcade: pd.DataFrame) -> None:
        machines = get_machine_performance(arcade).set_index("game_name")

        assert machines.loc["Dance Hero", "total"] == 4300.0
        assert machines.loc["Dance Hero", "quantity"] == 150.0
        assert machines.loc["Dance Hero", "avg_per_play"] == pytest.approx(4300.0 / 150)
        assert machines.loc["VR Coaster", "bonus_ratio"] == pytest.approx(0.5)

    def test_zero_quantity_gives_zero_average(self, arcade: pd.DataFrame) -> None:
        machines = get_machine_performance(arcade).set_index("game_name")
        assert machines.loc["Claw", "avg_per_play"] == 0.0

    def test_game_type_defaults_to_arcade(self, arcade: pd.DataFrame) -> None:
        machines = get_machine_performance(arcade).set_index("game_name")
        assert machines.loc["Claw", "game_type"] == "Arcade"
        assert machines.loc["VR Coaster", "game_type"] == "VR"

    def test_flags(self, arcade: pd.DataFrame) -> None:
        machines = get_machine_performance(arcade).set_index("game_name")

        # total 700 < 1000 and bonus/credit 0.75 > 0.5; low performer wins
        assert bool(machines.loc["Air Hockey", "low_performer"]) is True
        assert bool(machines.loc["Air Hockey", "high_bonus"]) is True
        assert machines.loc["Air Hockey", "flag"] == LOW_PERFORMER_FLAG

        # exactly 0.5 is not above the threshold
        assert bool(machines.loc["VR Coaster", "high_bonus"]) is False
        assert machines.loc["VR Coaster", "flag"] == ""

        assert machines.loc["Claw", "flag"] == LOW_PERFORMER_FLAG

    def test_high_bonus_flag(self) -> None:
        arcade = pd.DataFrame(
            {"game_name_final": ["Bonus Magnet"], "credit": [1000.0], "bonus": [600.0], "total": [1600.0]}
        )
        machines = get_machine_performance(arcade)
        assert machines["flag"].iloc[0] == HIGH_BONUS_FLAG

    def test_custom_thresholds(self, arcade: pd.DataFrame) -> None:
        thresholds = MachineThresholds(low_revenue=5000.0, high_bonus_ratio=0.4)
        machines = get_machine_performance(arcade, thresholds).set_index("game_name")

        assert bool(machines.loc["Dance Hero", "low_performer"]) is True
        assert bool(machines.loc["VR Coaster", "high_bonus"]) is True

    def test_zero_credit_gives_zero_ratio(self) -> None:
        arcade = pd.DataFrame(
            {"game_name_final": ["Ticket Eater"], "credit": [0.0], "bonus": [50.0], "total": [50.0]}
        )
        machines = get_machine_performance(arcade)
        assert machines["bonus_ratio"].iloc[0] == 0.0
        assert bool(machines["high_bonus"].iloc[0]) is False

    def test_empty_input(self) -> None:
        machines = get_machine_performance(pd.DataFrame())
        assert machines.empty
        assert list(machines.columns) == MACHINE_COLUMNS


def test_arcade_vr_split(arcade: pd.DataFrame) -> None:
    split = get_arcade_vr_split(arcade).set_index("game_type")

    assert list(split.index) == ["Arcade", "VR"]
    assert split.loc["Arcade", "credit"] == 4410.0
    assert split.loc["Arcade", "bonus"] == 610.0
    assert split.loc["Arcade", "revenue"] == 5020.0
    assert split.loc["VR", "quantity"] == 20.0
    assert split.loc["VR", "revenue"] == 2700.0


def test_arcade_summary(arcade: pd.DataFrame) -> None:
    summary = get_arcade_summary(get_machine_performance(arcade))

    assert summary.machine_count == 4
    assert summary.top_machine == "Dance Hero"
    assert summary.total_credit == 6800.0
    assert summary.total_bonus == 1500.0
    assert summary.bonus_ratio_percent == pytest.approx(1500.0 / 6800.0 * 100)
    assert summary.low_performers == 2
    assert summary.high_bonus_machines == 1


def test_arcade_summary_empty() -> None:
    summary = get_arcade_summary(get_machine_performance(pd.DataFrame()))
    assert summary.machine_count == 0
    assert summary.top_machine is None
