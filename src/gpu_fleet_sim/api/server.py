"""FastAPI server — HTTP access to the projection engine.

Run with:
    uvicorn gpu_fleet_sim.api.server:app --reload --port 8000

Or:
    python -m gpu_fleet_sim.api.server

Endpoints:
    GET  /health               — liveness probe
    GET  /settings/defaults    — default ProfitabilitySettings
    GET  /portfolio/defaults   — default sites + batches
    POST /project              — one batch → monthly cash flows
    POST /portfolio            — full portfolio → totals, ARR, sites
    POST /portfolio/arr        — one month's ARR itemised by batch
    POST /schedule/edit        — edit one month of a deployment schedule
    POST /amortization         — loan payment + schedule
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from gpu_fleet_sim.config import Batch, Portfolio, ProfitabilitySettings, Timeline
from gpu_fleet_sim.engine.economics import ConfigurationError
from gpu_fleet_sim.engine.portfolio import arr_breakdown, run_portfolio
from gpu_fleet_sim.engine.projection import project_batch
from gpu_fleet_sim.engine.schedule import cumulative_series, edit_batch_schedule
from gpu_fleet_sim.finance.amortization import build_amortization_schedule
from gpu_fleet_sim.models.results import (
    AmortizationSchedule,
    ArrBreakdown,
    BatchProjection,
    PortfolioResult,
)
from gpu_fleet_sim.storage.defaults import default_portfolio
from gpu_fleet_sim.storage.files import portfolio_from_dict, portfolio_to_dict


logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="GPU Fleet Profitability API",
    version="1.0",
    description=(
        "Month-by-month cumulative profit of GPU batches deployed incrementally, "
        "with cash or lease funding, plus portfolio totals and ARR."
    ),
)


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class ProjectRequest(BaseModel):
    """Request body for /project."""
    batch: Batch
    timeline: Timeline = Field(default_factory=Timeline)
    settings: ProfitabilitySettings = Field(default_factory=ProfitabilitySettings)


class PortfolioRequest(BaseModel):
    """Request body for /portfolio.  Stored (camelCase, possibly legacy) shape."""
    portfolio: dict[str, Any] = Field(
        default_factory=dict,
        description="Portfolio record. Legacy batches without deploymentSchedule are upgraded.",
    )


class ArrRequest(PortfolioRequest):
    """Request body for /portfolio/arr."""
    month_index: int = Field(ge=0, description="Timeline month to itemise")


class ScheduleEditRequest(BaseModel):
    """Request body for /schedule/edit."""
    batch: Batch
    timeline: Timeline = Field(default_factory=Timeline)
    month_index: int = Field(ge=0)
    delta_percent: float = Field(ge=-100, le=100, description="Requested deployment this month (%)")


class ScheduleEditResponse(BaseModel):
    """Edited batch plus its cumulative series for display."""
    batch: Batch
    cumulative: list[float]


class AmortizationRequest(BaseModel):
    """Request body for /amortization."""
    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0, le=100)
    term_months: int = Field(ge=1, le=360)


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _load(record: dict[str, Any]) -> Portfolio:
    """Stored record → Portfolio, falling back to defaults when empty."""
    if not record:
        return default_portfolio()
    try:
        return portfolio_from_dict(record)
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _config_error(exc: ConfigurationError) -> HTTPException:
    logger.warning("Configuration error: %s", exc)
    return HTTPException(status_code=422, detail=str(exc))


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "GPU Fleet Profitability API",
        "version": "1.0",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/settings/defaults")
def get_default_settings():
    return ProfitabilitySettings().model_dump(mode="json", by_alias=True)


@app.get("/portfolio/defaults")
def get_default_portfolio():
    return portfolio_to_dict(default_portfolio())


@app.post("/project", response_model=BatchProjection)
def project(req: ProjectRequest):
    """Project one batch over the timeline."""
    try:
        return project_batch(req.batch, req.timeline, req.settings)
    except ConfigurationError as exc:
        raise _config_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/portfolio", response_model=PortfolioResult)
def portfolio(req: PortfolioRequest):
    """Project every batch and aggregate totals, ARR and site utilization."""
    loaded = _load(req.portfolio)
    try:
        return run_portfolio(loaded)
    except ConfigurationError as exc:
        raise _config_error(exc) from exc


@app.post("/portfolio/arr", response_model=ArrBreakdown)
def portfolio_arr(req: ArrRequest):
    """Itemise one month's ARR by live batch."""
    loaded = _load(req.portfolio)
    try:
        result = run_portfolio(loaded)
        return arr_breakdown(
            loaded.batches, [p.months for p in result.batches], loaded.settings, req.month_index,
        )
    except ConfigurationError as exc:
        raise _config_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/schedule/edit", response_model=ScheduleEditResponse)
def schedule_edit(req: ScheduleEditRequest):
    """Apply one deployment edit; later months are rebalanced to stay within 100%."""
    try:
        edited = edit_batch_schedule(req.batch, req.timeline, req.month_index, req.delta_percent)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ScheduleEditResponse(
        batch=edited,
        cumulative=cumulative_series(edited.deployment_schedule, req.timeline.total_months),
    )


@app.post("/amortization", response_model=AmortizationSchedule)
def amortization(req: AmortizationRequest):
    return build_amortization_schedule(req.principal, req.annual_rate_percent, req.term_months)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    uvicorn.run(
        "gpu_fleet_sim.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
