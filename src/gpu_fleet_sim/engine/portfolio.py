"""Portfolio aggregation — totals across batches and ARR.

  totals[m] = Σ_batches value[m]
  ARR[m]    = Σ_{batches live in m} units_live × 730 × utilization × rate × 12

ARR is a forward-looking run-rate: "if this month's live fleet ran a full
year at this rate", not a trailing sum.

Entry point: ``run_portfolio(portfolio)``.
"""

from __future__ import annotations

import numpy as np

from gpu_fleet_sim.config.batch import Batch
from gpu_fleet_sim.config.portfolio import Portfolio
from gpu_fleet_sim.config.settings import ProfitabilitySettings
from gpu_fleet_sim.engine.economics import resolve
from gpu_fleet_sim.engine.projection import project_batch
from gpu_fleet_sim.engine.sites import compute_site_utilization
from gpu_fleet_sim.models.results import (
    ArrBatchLine,
    ArrBreakdown,
    ArrPoint,
    MonthData,
    PortfolioResult,
)


def _check_lengths(all_batch_projections: list[list[MonthData]]) -> int:
    lengths = {len(p) for p in all_batch_projections}
    if len(lengths) > 1:
        raise ValueError(f"batch projections differ in length: {sorted(lengths)}")
    return lengths.pop() if lengths else 0


def totals(all_batch_projections: list[list[MonthData]]) -> list[MonthData]:
    """Portfolio cumulative profit per month.

    ``percent_deployed`` has no portfolio meaning and is emitted as 0.
    """
    if not all_batch_projections:
        return []
    total_months = _check_lengths(all_batch_projections)
    if total_months == 0:
        return []

    values = np.array([[md.value for md in p] for p in all_batch_projections], dtype=float)
    column_sums = values.sum(axis=0)
    first = all_batch_projections[0]

    return [
        MonthData(month=first[i].month, year=first[i].year, percent_deployed=0.0, value=float(column_sums[i]))
        for i in range(total_months)
    ]


def _live_revenue(batch: Batch, percent_deployed: float, settings: ProfitabilitySettings) -> tuple[float, float]:
    """(units live, monthly revenue) of one batch at a deployment level."""
    econ = resolve(batch.chip_type, settings)
    units_live = percent_deployed / 100 * batch.quantity
    return units_live, units_live * econ.monthly_revenue_per_unit(settings.utilization_rate)


def arr(
    batches: list[Batch],
    all_batch_projections: list[list[MonthData]],
    settings: ProfitabilitySettings,
) -> list[ArrPoint]:
    """Annualised run-rate revenue for each month."""
    if len(batches) != len(all_batch_projections):
        raise ValueError("one projection per batch is required")
    total_months = _check_lengths(all_batch_projections)

    run_rates = np.zeros(total_months)
    for batch, projection in zip(batches, all_batch_projections):
        rate = resolve(batch.chip_type, settings).monthly_revenue_per_unit(settings.utilization_rate)
        percents = np.array([md.percent_deployed for md in projection], dtype=float)
        live = np.where(percents > 0, percents / 100 * batch.quantity, 0.0)
        run_rates += live * rate * 12

    return [ArrPoint(value=float(v)) for v in run_rates]


def arr_breakdown(
    batches: list[Batch],
    all_batch_projections: list[list[MonthData]],
    settings: ProfitabilitySettings,
    month_index: int,
) -> ArrBreakdown:
    """One month's ARR itemised by live batch, oldest installation first."""
    if len(batches) != len(all_batch_projections):
        raise ValueError("one projection per batch is required")
    total_months = _check_lengths(all_batch_projections)
    if not 0 <= month_index < total_months:
        raise ValueError(f"month_index {month_index} outside [0, {total_months})")

    lines: list[ArrBatchLine] = []
    for batch, projection in zip(batches, all_batch_projections):
        percent = projection[month_index].percent_deployed
        if percent <= 0:
            continue
        units_live, monthly_revenue = _live_revenue(batch, percent, settings)
        lines.append(ArrBatchLine(
            batch_id=batch.id,
            chip_type=batch.chip_type,
            installation_year=batch.installation_year,
            installation_month=batch.installation_month,
            units_live=units_live,
            monthly_revenue=monthly_revenue,
            annual_revenue=monthly_revenue * 12,
        ))

    lines.sort(key=lambda line: (line.installation_year, line.installation_month))
    reference = all_batch_projections[0][month_index]

    return ArrBreakdown(
        month_index=month_index,
        month=reference.month,
        year=reference.year,
        total_units_live=sum(line.units_live for line in lines),
        total_arr=sum(line.annual_revenue for line in lines),
        lines=lines,
    )


def run_portfolio(portfolio: Portfolio) -> PortfolioResult:
    """Project every batch, then aggregate totals, ARR and site utilization."""
    settings = portfolio.settings
    projections = [project_batch(b, portfolio.timeline, settings) for b in portfolio.batches]
    series = [p.months for p in projections]

    return PortfolioResult(
        batches=projections,
        totals=totals(series),
        arr=arr(portfolio.batches, series, settings) if series else [],
        sites=[compute_site_utilization(s, portfolio.batches, settings) for s in portfolio.sites],
    )
