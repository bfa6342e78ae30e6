"""Engine — chip lookup, deployment schedules, projection and aggregation."""

from gpu_fleet_sim.engine.economics import ChipEconomics, ConfigurationError, resolve
from gpu_fleet_sim.engine.schedule import (
    apply_edit,
    cumulative_at,
    cumulative_series,
    edit_batch_schedule,
)
from gpu_fleet_sim.engine.projection import project, project_batch, project_cash_flows
from gpu_fleet_sim.engine.portfolio import arr, arr_breakdown, run_portfolio, totals
from gpu_fleet_sim.engine.sites import compute_site_utilization, mw_equivalent

__all__ = [
    "ChipEconomics",
    "ConfigurationError",
    "resolve",
    "apply_edit",
    "cumulative_at",
    "cumulative_series",
    "edit_batch_schedule",
    "project",
    "project_batch",
    "project_cash_flows",
    "totals",
    "arr",
    "arr_breakdown",
    "run_portfolio",
    "compute_site_utilization",
    "mw_equivalent",
]
