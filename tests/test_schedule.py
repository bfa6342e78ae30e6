"""Tests for engine/schedule.py — cumulative deployment and schedule edits."""

from __future__ import annotations

import random
from datetime import date

import pytest

from gpu_fleet_sim.config import Batch, Timeline
from gpu_fleet_sim.engine.schedule import (
    apply_edit,
    cumulative_at,
    cumulative_series,
    delivery_month_index,
    derive_delivery_date,
    edit_batch_schedule,
    even_ramp,
)


RAMP = {0: 20, 1: 10, 2: 25, 3: 15, 4: 15, 5: 15}


def _raw_prefixes(schedule: dict[int, float]) -> list[float]:
    raw, out = 0.0, []
    for m in sorted(schedule):
        raw += schedule[m]
        out.append(raw)
    return out


class TestCumulativeAt:
    def test_running_sum(self):
        assert [cumulative_at(RAMP, m) for m in range(7)] == [20, 30, 55, 70, 85, 100, 100]

    def test_before_first_entry(self):
        assert cumulative_at(RAMP, -1) == 0

    def test_empty_schedule(self):
        assert cumulative_at({}, 10) == 0

    def test_clamped_high(self):
        assert cumulative_at({0: 80, 1: 40}, 1) == 100

    def test_clamped_low(self):
        assert cumulative_at({0: 10, 1: -30}, 1) == 0

    def test_sparse_gaps(self):
        assert cumulative_at({2: 40, 7: 60}, 5) == 40

    def test_series_matches_pointwise(self):
        series = cumulative_series(RAMP, 10)
        assert series == [cumulative_at(RAMP, m) for m in range(10)]


class TestApplyEdit:
    def test_reaching_full_drops_later_entries(self):
        assert apply_edit(RAMP, 2, 80) == {0: 20, 1: 10, 2: 70}

    def test_future_compressed_proportionally(self):
        result = apply_edit({0: 20, 1: 30, 2: 30}, 0, 60)
        assert result[0] == 60
        assert result[1] == pytest.approx(20)
        assert result[2] == pytest.approx(20)
        assert cumulative_at(result, 2) == pytest.approx(100)

    def test_future_left_alone_when_it_fits(self):
        assert apply_edit({0: 20, 1: 30}, 0, 50) == {0: 50, 1: 30}

    def test_negative_delta_clamped_to_previous(self):
        assert apply_edit({0: 20}, 1, -50) == {0: 20, 1: -20}

    def test_positive_delta_clamped_to_remaining(self):
        assert apply_edit({0: 70}, 1, 50) == {0: 70, 1: 30}

    def test_months_after_full_are_locked(self):
        result = apply_edit({0: 100}, 3, -40)
        assert cumulative_at(result, 3) == 100

    def test_input_not_mutated(self):
        original = dict(RAMP)
        apply_edit(RAMP, 2, 80)
        assert RAMP == original

    def test_idempotent(self):
        assert apply_edit(RAMP, 3, 5) == apply_edit(RAMP, 3, 5)

    def test_zero_delta_on_empty_month_keeps_totals(self):
        schedule = {0: 20, 2: 30, 5: 10}
        result = apply_edit(schedule, 3, 0)
        for m in range(10):
            assert cumulative_at(result, m) == cumulative_at(schedule, m)

    def test_zero_delta_on_fresh_month_of_full_ramp(self):
        result = apply_edit(RAMP, 8, 0)
        for m in range(12):
            assert cumulative_at(result, m) == cumulative_at(RAMP, m)


class TestEditInvariants:
    """Random edit sequences never break the [0, 100] cap or the lock-in."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_edit_sequence(self, seed: int):
        rng = random.Random(seed)
        schedule: dict[int, float] = {}
        for _ in range(40):
            month = rng.randrange(0, 24)
            delta = rng.choice([-60, -25, -5, 0, 5, 10, 25, 40, 75, 100])
            schedule = apply_edit(schedule, month, delta)

            series = [cumulative_at(schedule, m) for m in range(30)]
            assert all(0 <= c <= 100 for c in series)
            for raw in _raw_prefixes(schedule):
                assert -1e-9 <= raw <= 100 + 1e-9

            full_at = next((m for m, c in enumerate(series) if c == 100), None)
            if full_at is not None:
                assert all(c == 100 for c in series[full_at:])


class TestHelpers:
    def test_delivery_month_index(self):
        assert delivery_month_index({3: 0.5, 4: 0.5, 6: 20}) == 4
        assert delivery_month_index({}) is None
        assert delivery_month_index({2: 0.2}) is None

    def test_even_ramp(self):
        ramp = even_ramp(5)
        assert ramp == {5: 25.0, 6: 25.0, 7: 25.0, 8: 25.0}
        assert cumulative_at(ramp, 8) == 100

    def test_even_ramp_rejects_zero_months(self):
        with pytest.raises(ValueError):
            even_ramp(0, months=0)


class TestBatchEdit:
    def test_edit_rederives_delivery_date(self, ramp_batch: Batch, timeline: Timeline):
        edited = edit_batch_schedule(ramp_batch, timeline, 0, 0)
        # month 0 now 0% → first >= 1% is month 1 (Feb 2026)
        assert edited.deployment_schedule[0] == 0
        assert edited.delivery_date == date(2026, 2, 1)
        assert ramp_batch.deployment_schedule[0] == 20

    def test_edit_before_installation_rejected(self, gb300_batch: Batch, timeline: Timeline):
        with pytest.raises(ValueError, match="precedes installation"):
            edit_batch_schedule(gb300_batch, timeline, 1, 10)

    def test_derive_delivery_date_crosses_year(self):
        tl = Timeline(start_month=10, start_year=2025, total_months=12)
        batch = Batch(id="x", quantity=10, installation_month=10, installation_year=2025,
                      deployment_schedule={2: 50, 3: 50})
        assert derive_delivery_date(batch, tl) == date(2026, 1, 1)
