"""Result models — projection output contracts."""

from gpu_fleet_sim.models.results import (
    AmortizationRow,
    AmortizationSchedule,
    ArrBatchLine,
    ArrBreakdown,
    ArrPoint,
    BatchProjection,
    BatchSummary,
    MonthData,
    MonthlyCashFlow,
    PortfolioResult,
    SiteUtilization,
)

__all__ = [
    "AmortizationRow",
    "AmortizationSchedule",
    "ArrBatchLine",
    "ArrBreakdown",
    "ArrPoint",
    "BatchProjection",
    "BatchSummary",
    "MonthData",
    "MonthlyCashFlow",
    "PortfolioResult",
    "SiteUtilization",
]
