"""Monthly cash-flow projection — one batch over the shared timeline.

Per month, for the fraction of the batch live:
  revenue       = units_live × 730 × utilization × $/GPU-hour
  installation  = new_units × installation_cost          (once, when units go live)
  capital       = Cash:  new_units × upfront_cost         (once, when units go live)
                  Lease: Σ cohort_units × payment_per_unit over cohorts in term
  overhead      = units_live × datacenter_overhead
  electrical    = 730 × utilization × units_live × kW × $/kWh × PUE
  net           = revenue − (installation + capital + overhead + electrical)

Lease cohorts pay from their deployment month: a cohort deployed in month d
pays in months d … d+lease_term−1.
"""

from __future__ import annotations

from gpu_fleet_sim.config.batch import Batch
from gpu_fleet_sim.config.settings import ProfitabilitySettings
from gpu_fleet_sim.config.timeline import Timeline
from gpu_fleet_sim.engine.economics import HOURS_PER_MONTH, resolve
from gpu_fleet_sim.engine.schedule import FULL
from gpu_fleet_sim.finance.amortization import monthly_payment
from gpu_fleet_sim.models.results import (
    BatchProjection,
    BatchSummary,
    MonthData,
    MonthlyCashFlow,
)


def project_cash_flows(
    batch: Batch,
    start_month: int,
    start_year: int,
    total_months: int,
    settings: ProfitabilitySettings,
) -> list[MonthlyCashFlow]:
    """Run the monthly loop for one batch and return every cash-flow record.

    Raises ``ConfigurationError`` for an unconfigured chip and ``ValueError``
    when the schedule deploys before the installation month.
    """
    econ = resolve(batch.chip_type, settings)
    timeline = Timeline(start_month=start_month, start_year=start_year, total_months=total_months)
    install_index = batch.installation_index(timeline)

    early = [m for m in batch.deployment_schedule if m < install_index]
    if early:
        raise ValueError(
            f"batch {batch.id}: schedule months {early} precede installation index {install_index}"
        )

    utilization = settings.utilization_rate / 100
    hours_run = HOURS_PER_MONTH * utilization
    quantity = batch.quantity

    is_lease = batch.funding_type == "Lease"
    lease_term = batch.lease_term or 0
    payment_per_unit = (
        monthly_payment(econ.upfront_cost, batch.apr or 0.0, lease_term) if is_lease else 0.0
    )

    schedule = batch.deployment_schedule
    cohorts: dict[int, float] = {}  # deployment month -> units that went live
    raw_percent = 0.0
    cumulative_percent = 0.0
    cumulative_profit = 0.0
    records: list[MonthlyCashFlow] = []

    for i in range(total_months):
        month, year = timeline.calendar_at(i)

        if i - install_index < 0:
            records.append(MonthlyCashFlow(
                month_index=i, month=month, year=year,
                percent_deployed=0.0, new_units=0.0, units_live=0.0,
                revenue=0.0, installation_cost=0.0, capital_cost=0.0,
                datacenter_overhead_cost=0.0, electrical_cost=0.0,
                net=0.0, cumulative=cumulative_profit,
            ))
            continue

        # ── Deployment ──────────────────────────────────────────────────
        # Running raw sum, clamped on read: same result as cumulative_at().
        raw_percent += schedule.get(i, 0.0)
        previous_percent = cumulative_percent
        cumulative_percent = min(max(raw_percent, 0.0), FULL)
        effective_delta = cumulative_percent - previous_percent

        new_units = effective_delta / 100 * quantity
        units_live = cumulative_percent / 100 * quantity
        if new_units > 0:
            cohorts[i] = new_units
        units_added = max(new_units, 0.0)

        # ── Costs ───────────────────────────────────────────────────────
        installation = units_added * econ.installation_cost

        if is_lease:
            capital = sum(
                units * payment_per_unit
                for d, units in cohorts.items()
                if 0 <= i - d < lease_term
            )
        else:
            capital = units_added * econ.upfront_cost

        overhead = units_live * settings.datacenter_overhead
        electrical = (
            hours_run * units_live * econ.power_per_unit_kw
            * settings.electricity_cost * settings.electrical_overhead
        )

        # ── Revenue ─────────────────────────────────────────────────────
        revenue = units_live * hours_run * econ.gpu_hour_rate

        net = revenue - (installation + capital + overhead + electrical)
        cumulative_profit += net

        records.append(MonthlyCashFlow(
            month_index=i, month=month, year=year,
            percent_deployed=cumulative_percent if quantity > 0 else 0.0,
            new_units=new_units, units_live=units_live,
            revenue=revenue, installation_cost=installation, capital_cost=capital,
            datacenter_overhead_cost=overhead, electrical_cost=electrical,
            net=net, cumulative=cumulative_profit,
        ))

    return records


def to_month_data(cash_flows: list[MonthlyCashFlow]) -> list[MonthData]:
    """Collapse cash-flow records to the (percent deployed, cumulative profit) series."""
    return [
        MonthData(month=cf.month, year=cf.year, percent_deployed=cf.percent_deployed, value=cf.cumulative)
        for cf in cash_flows
    ]


def project(
    batch: Batch,
    start_month: int,
    start_year: int,
    total_months: int,
    settings: ProfitabilitySettings,
) -> list[MonthData]:
    """Cumulative-profit series of one batch, ``total_months`` long."""
    return to_month_data(project_cash_flows(batch, start_month, start_year, total_months, settings))


def summarize_batch(batch_id: str, cash_flows: list[MonthlyCashFlow]) -> BatchSummary:
    """Horizon totals and break-even month of one batch."""
    break_even: int | None = None
    was_negative = False
    for cf in cash_flows:
        if cf.cumulative < 0:
            was_negative = True
        elif was_negative and break_even is None:
            break_even = cf.month_index

    return BatchSummary(
        batch_id=batch_id,
        total_revenue=sum(cf.revenue for cf in cash_flows),
        total_installation_cost=sum(cf.installation_cost for cf in cash_flows),
        total_capital_cost=sum(cf.capital_cost for cf in cash_flows),
        total_datacenter_overhead_cost=sum(cf.datacenter_overhead_cost for cf in cash_flows),
        total_electrical_cost=sum(cf.electrical_cost for cf in cash_flows),
        final_value=cash_flows[-1].cumulative if cash_flows else 0.0,
        break_even_month_index=break_even,
    )


def project_batch(batch: Batch, timeline: Timeline, settings: ProfitabilitySettings) -> BatchProjection:
    """Full projection of one batch: series, cash flows and summary."""
    cash_flows = project_cash_flows(
        batch, timeline.start_month, timeline.start_year, timeline.total_months, settings,
    )
    return BatchProjection(
        batch_id=batch.id,
        months=to_month_data(cash_flows),
        cash_flows=cash_flows,
        summary=summarize_batch(batch.id, cash_flows),
    )
