"""Tests for engine/portfolio.py — totals, ARR and the full portfolio run."""

import pytest

from gpu_fleet_sim.config import Batch, Portfolio, ProfitabilitySettings
from gpu_fleet_sim.engine.portfolio import arr, arr_breakdown, run_portfolio, totals
from gpu_fleet_sim.engine.projection import project
from gpu_fleet_sim.models import MonthData


def _series(batches: list[Batch], settings: ProfitabilitySettings, months: int = 24) -> list[list[MonthData]]:
    return [project(b, 0, 2026, months, settings) for b in batches]


class TestTotals:
    def test_sum_of_batches(self, ramp_batch, gb300_batch, settings):
        series = _series([ramp_batch, gb300_batch], settings)
        result = totals(series)
        assert len(result) == 24
        for m, md in enumerate(result):
            assert md.value == pytest.approx(series[0][m].value + series[1][m].value)
            assert md.percent_deployed == 0

    def test_calendar_from_first_batch(self, ramp_batch, settings):
        batch = ramp_batch.model_copy(update={"installation_month": 11, "installation_year": 2025})
        series = [project(batch, 11, 2025, 3, settings)]
        assert [(md.month, md.year) for md in totals(series)] == [(11, 2025), (0, 2026), (1, 2026)]

    def test_empty(self):
        assert totals([]) == []

    def test_unequal_lengths_rejected(self, ramp_batch, settings):
        series = [project(ramp_batch, 0, 2026, 12, settings), project(ramp_batch, 0, 2026, 6, settings)]
        with pytest.raises(ValueError, match="differ in length"):
            totals(series)


class TestArr:
    def test_half_deployed_batch(self, settings):
        batch = Batch(id="half", quantity=1000, installation_month=0, installation_year=2026,
                      deployment_schedule={0: 50})
        points = arr([batch], _series([batch], settings, 3), settings)
        expected = 500 * 730 * 0.9 * 3.65 * 12
        assert [p.value for p in points] == pytest.approx([expected] * 3)

    def test_zero_before_installation(self, gb300_batch, settings):
        points = arr([gb300_batch], _series([gb300_batch], settings, 6), settings)
        assert [p.value for p in points[:3]] == [0, 0, 0]
        assert points[3].value == pytest.approx(1000 * 730 * 0.9 * 5.50 * 12)

    def test_additive_over_batches(self, ramp_batch, gb300_batch, settings):
        both = arr([ramp_batch, gb300_batch], _series([ramp_batch, gb300_batch], settings), settings)
        a = arr([ramp_batch], _series([ramp_batch], settings), settings)
        b = arr([gb300_batch], _series([gb300_batch], settings), settings)
        for m in range(24):
            assert both[m].value == pytest.approx(a[m].value + b[m].value)

    def test_projection_count_must_match(self, ramp_batch, gb300_batch, settings):
        with pytest.raises(ValueError):
            arr([ramp_batch, gb300_batch], _series([ramp_batch], settings), settings)


class TestArrBreakdown:
    def test_lines_oldest_first(self, ramp_batch, gb300_batch, settings):
        batches = [gb300_batch, ramp_batch]
        breakdown = arr_breakdown(batches, _series(batches, settings), settings, 6)
        assert [line.batch_id for line in breakdown.lines] == ["ramp", "gb300"]
        assert breakdown.total_units_live == pytest.approx(4200 + 2000)
        assert breakdown.total_arr == pytest.approx(sum(line.annual_revenue for line in breakdown.lines))

    def test_matches_arr_series(self, ramp_batch, gb300_batch, settings):
        batches = [ramp_batch, gb300_batch]
        series = _series(batches, settings)
        points = arr(batches, series, settings)
        for m in (0, 3, 10):
            assert arr_breakdown(batches, series, settings, m).total_arr == pytest.approx(points[m].value)

    def test_skips_batches_not_live(self, ramp_batch, gb300_batch, settings):
        batches = [ramp_batch, gb300_batch]
        breakdown = arr_breakdown(batches, _series(batches, settings), settings, 1)
        assert [line.batch_id for line in breakdown.lines] == ["ramp"]
        assert (breakdown.month, breakdown.year) == (1, 2026)

    def test_month_out_of_range(self, ramp_batch, settings):
        with pytest.raises(ValueError, match="outside"):
            arr_breakdown([ramp_batch], _series([ramp_batch], settings), settings, 24)


class TestRunPortfolio:
    def test_full_run(self, portfolio: Portfolio):
        result = run_portfolio(portfolio)
        assert [p.batch_id for p in result.batches] == ["ramp", "gb300"]
        assert len(result.totals) == 48
        assert len(result.arr) == 48
        assert [s.site_id for s in result.sites] == ["site-a", "site-b", "site-empty"]
        assert result.grand_total == pytest.approx(
            sum(p.months[-1].value for p in result.batches)
        )

    def test_no_batches(self, settings, timeline):
        result = run_portfolio(Portfolio(settings=settings, timeline=timeline))
        assert result.totals == []
        assert result.arr == []
        assert result.grand_total == 0.0

    def test_serialises(self, portfolio: Portfolio):
        payload = run_portfolio(portfolio).model_dump(mode="json")
        assert payload["batches"][0]["summary"]["batch_id"] == "ramp"
