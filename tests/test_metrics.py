"""
Unit tests for the shooting efficiency formulas and metric back-filling.
"""

import pytest

from courtvision.metrics import effective_fg_pct, fill_advanced, true_shooting_pct
from courtvision.models import AdvancedMetrics, EntityStat


class TestTrueShooting:
    def test_reference_value(self) -> None:
        assert true_shooting_pct(30, 20, 10) == pytest.approx(30 / (2 * 24.4))
        assert true_shooting_pct(30, 20, 10) == pytest.approx(0.6148, abs=1e-4)

    def test_no_attempts_returns_none(self) -> None:
        assert true_shooting_pct(0, 0, 0) is None

    def test_free_throws_only(self) -> None:
        # 10 points on 10 free throws: 10 / (2 * 4.4)
        assert true_shooting_pct(10, 0, 10) == pytest.approx(1.1364, abs=1e-4)


class TestEffectiveFieldGoal:
    def test_reference_value(self) -> None:
        assert effective_fg_pct(10, 2, 20) == pytest.approx(0.55)

    def test_zero_attempts_returns_none(self) -> None:
        assert effective_fg_pct(0, 0, 0) is None


class TestFillAdvanced:
    def test_derives_missing_metrics_from_box_score(self) -> None:
        entry = EntityStat(name="A", pts=30, reb=5, ast=5, fga=20, fgm=10, fta=10, tpm=2)
        filled = fill_advanced(entry)
        assert filled.advanced.ts_pct == pytest.approx(0.6148, abs=1e-4)
        assert filled.advanced.efg_pct == pytest.approx(0.55)
        assert filled.advanced.per is None
        assert entry.advanced is None  # input untouched

    def test_keeps_model_supplied_values(self) -> None:
        entry = EntityStat(
            name="A",
            pts=30,
            reb=5,
            ast=5,
            fga=20,
            fgm=10,
            fta=10,
            advanced=AdvancedMetrics(ts_pct=0.7, per=22.5),
        )
        filled = fill_advanced(entry)
        assert filled.advanced.ts_pct == 0.7
        assert filled.advanced.per == 22.5
        assert filled.advanced.efg_pct is None  # no 3PM count to weight

    def test_efg_needs_three_point_makes(self) -> None:
        entry = EntityStat(name="A", pts=30, reb=5, ast=5, fga=20, fgm=10)
        assert fill_advanced(entry).advanced is None

        with_threes = entry.model_copy(update={"tpm": 0})
        assert fill_advanced(with_threes).advanced.efg_pct == pytest.approx(0.5)

    def test_without_box_score_nothing_is_added(self) -> None:
        entry = EntityStat(name="A", pts=30, reb=5, ast=5)
        assert fill_advanced(entry).advanced is None
