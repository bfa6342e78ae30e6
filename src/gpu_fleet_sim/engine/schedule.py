"""Deployment schedule accumulator.

A schedule is a sparse ``{timeline_month_index: signed_percent_delta}`` map.
Cumulative deployment at month m = clamp(Σ deltas at indices ≤ m, 0, 100).

``apply_edit`` is the single place schedules are changed: it replaces one
month's delta and rebalances later entries so the running total stays in
[0, 100].  Inputs are never mutated; a new dict is returned.
"""

from __future__ import annotations

from datetime import date

from gpu_fleet_sim.config.batch import Batch
from gpu_fleet_sim.config.timeline import Timeline


FULL = 100.0


def _clamp(value: float, low: float = 0.0, high: float = FULL) -> float:
    return min(max(value, low), high)


def cumulative_at(schedule: dict[int, float], month_index: int) -> float:
    """Percent of the batch live by ``month_index`` (0–100)."""
    # Plain left-to-right accumulation, matching the projection loop.
    raw = 0.0
    for m in sorted(schedule):
        if m > month_index:
            break
        raw += schedule[m]
    return _clamp(raw)


def cumulative_series(schedule: dict[int, float], total_months: int) -> list[float]:
    """``cumulative_at`` for every month in ``[0, total_months)``."""
    series: list[float] = []
    raw = 0.0
    for m in sorted(k for k in schedule if k < 0):
        raw += schedule[m]
    for m in range(total_months):
        raw += schedule.get(m, 0.0)
        series.append(_clamp(raw))
    return series


def apply_edit(
    schedule: dict[int, float],
    edit_month: int,
    requested_delta: float,
) -> dict[int, float]:
    """Set one month's delta, then rebalance later months.

    1. ``previous`` = cumulative strictly before ``edit_month``.
    2. The delta is clamped to [−previous, 100 − previous] (0 once the batch
       is already fully deployed).
    3. Reaching 100% drops every later entry (the batch is fully deployed).
    4. Otherwise later deltas are scaled by remaining / future_total when they
       would overshoot the remaining capacity.
    """
    previous = cumulative_at(schedule, edit_month - 1)
    delta = _clamp(requested_delta, -previous, FULL - previous)
    if previous >= FULL:
        # Fully deployed before this month: later months are locked at 100%.
        delta = 0.0

    updated = {m: d for m, d in schedule.items() if m <= edit_month}
    updated[edit_month] = delta
    new_cumulative = previous + delta

    future = {m: d for m, d in sorted(schedule.items()) if m > edit_month}
    if new_cumulative >= FULL or not future:
        return dict(sorted(updated.items()))

    remaining = FULL - new_cumulative
    future_total = sum(future.values())
    if future_total > remaining:
        scale = remaining / future_total
        future = {m: d * scale for m, d in future.items()}

    # Keep every later prefix inside [0, 100] and stop once 100 is reached;
    # no-op for non-negative ramps.
    running = new_cumulative
    for m, d in future.items():
        d = _clamp(d, -running, FULL - running)
        updated[m] = d
        running += d
        if running >= FULL:
            break

    return dict(sorted(updated.items()))


def delivery_month_index(schedule: dict[int, float], threshold: float = 1.0) -> int | None:
    """First month whose cumulative deployment reaches ``threshold`` percent."""
    raw = 0.0
    for m in sorted(schedule):
        raw += schedule[m]
        if _clamp(raw) >= threshold:
            return m
    return None


def even_ramp(start_index: int, months: int = 4) -> dict[int, float]:
    """Equal monthly deltas from ``start_index`` summing to 100."""
    if months < 1:
        raise ValueError(f"months must be >= 1, got {months}")
    share = FULL / months
    return {start_index + k: share for k in range(months)}


def derive_delivery_date(batch: Batch, timeline: Timeline) -> date | None:
    """First day of the calendar month the batch reaches 1% deployed."""
    index = delivery_month_index(batch.deployment_schedule)
    if index is None:
        return None
    month, year = timeline.calendar_at(index)
    return date(year, month + 1, 1)


def edit_batch_schedule(
    batch: Batch,
    timeline: Timeline,
    month_index: int,
    requested_delta: float,
) -> Batch:
    """Return a copy of ``batch`` with one month's deployment edited."""
    start = batch.installation_index(timeline)
    if month_index < start:
        raise ValueError(
            f"month {month_index} precedes installation index {start} of batch {batch.id}"
        )
    schedule = apply_edit(batch.deployment_schedule, month_index, requested_delta)
    edited = batch.model_copy(update={"deployment_schedule": schedule})
    return edited.model_copy(update={"delivery_date": derive_delivery_date(edited, timeline)})
