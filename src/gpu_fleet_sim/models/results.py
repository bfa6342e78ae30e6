"""Result types — the contract between engine, aggregation, storage and API.

Every model serialises with ``model_dump_json`` so that outer layers can hand
results to display code without further conversion.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from gpu_fleet_sim.config.chips import ChipType


# ═══════════════════════════════════════════════════════════════════════════
# Per-month projection records
# ═══════════════════════════════════════════════════════════════════════════

class MonthData(BaseModel):
    """One month of one batch (or of the portfolio total)."""

    month: int
    """Calendar month, 0 = January."""
    year: int
    percent_deployed: float
    """Cumulative percent of the batch live by this month (0–100).
    Always 0 on portfolio totals."""
    value: float
    """Cumulative profit up to and including this month ($)."""


class MonthlyCashFlow(BaseModel):
    """Full breakdown behind one MonthData record."""

    month_index: int
    """Timeline index (0 = timeline start)."""
    month: int
    year: int
    percent_deployed: float
    new_units: float
    """Units that first went live this month."""
    units_live: float

    revenue: float
    installation_cost: float
    capital_cost: float
    """Cash: upfront cost of new units.  Lease: payments of every cohort in term."""
    datacenter_overhead_cost: float
    electrical_cost: float

    net: float
    cumulative: float

    @property
    def total_cost(self) -> float:
        return (
            self.installation_cost + self.capital_cost
            + self.datacenter_overhead_cost + self.electrical_cost
        )


# ═══════════════════════════════════════════════════════════════════════════
# Batch summary
# ═══════════════════════════════════════════════════════════════════════════

class BatchSummary(BaseModel):
    """Horizon totals for one batch."""

    batch_id: str
    total_revenue: float
    total_installation_cost: float
    total_capital_cost: float
    total_datacenter_overhead_cost: float
    total_electrical_cost: float
    final_value: float
    break_even_month_index: int | None  # None if never recovers from a loss


class BatchProjection(BaseModel):
    """Projection of one batch over the shared timeline."""

    batch_id: str
    months: list[MonthData]
    cash_flows: list[MonthlyCashFlow]
    summary: BatchSummary


# ═══════════════════════════════════════════════════════════════════════════
# ARR
# ═══════════════════════════════════════════════════════════════════════════

class ArrPoint(BaseModel):
    """Annualised run-rate revenue of the fleet live in one month."""

    value: float


class ArrBatchLine(BaseModel):
    """One live batch's contribution to a month's ARR."""

    batch_id: str
    chip_type: ChipType
    installation_year: int
    installation_month: int
    units_live: float
    monthly_revenue: float
    annual_revenue: float


class ArrBreakdown(BaseModel):
    """ARR for one month, itemised by batch (oldest installation first)."""

    month_index: int
    month: int
    year: int
    total_units_live: float
    total_arr: float
    lines: list[ArrBatchLine] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# Sites
# ═══════════════════════════════════════════════════════════════════════════

class SiteUtilization(BaseModel):
    """MW allocated to a site versus its capacity."""

    site_id: str
    capacity_mw: float
    allocated_mw: float
    utilization_pct: float
    over_capacity_mw: float
    """max(allocated − capacity, 0)."""
    batch_ids: list[str]


# ═══════════════════════════════════════════════════════════════════════════
# Amortization
# ═══════════════════════════════════════════════════════════════════════════

class AmortizationRow(BaseModel):
    """One month of a fully-amortizing loan."""

    month: int
    opening_balance: float
    interest: float
    principal: float
    payment: float
    closing_balance: float


class AmortizationSchedule(BaseModel):
    """Month-by-month amortization of one principal."""

    principal: float
    annual_rate_percent: float
    term_months: int
    monthly_payment: float
    rows: list[AmortizationRow]
    total_interest_paid: float
    total_principal_paid: float


# ═══════════════════════════════════════════════════════════════════════════
# Portfolio
# ═══════════════════════════════════════════════════════════════════════════

class PortfolioResult(BaseModel):
    """Everything computed for one portfolio."""

    batches: list[BatchProjection]
    totals: list[MonthData]
    arr: list[ArrPoint]
    sites: list[SiteUtilization] = Field(default_factory=list)

    @property
    def grand_total(self) -> float:
        """Portfolio cumulative profit at the horizon end."""
        return self.totals[-1].value if self.totals else 0.0
