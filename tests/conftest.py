"""Shared test fixtures — settings, timeline and sample batches."""

from __future__ import annotations

import pytest

from gpu_fleet_sim.config import (
    Batch,
    ChipType,
    Portfolio,
    ProfitabilitySettings,
    Site,
    Timeline,
)


@pytest.fixture
def settings() -> ProfitabilitySettings:
    return ProfitabilitySettings(
        gpus_per_mw={"B200": 532, "GB300": 432},
        gpu_power_kw={"B200": 1.7, "GB300": 2.1},
        upfront_gpu_cost={"B200": 46_000, "GB300": 80_000},
        installation_cost={"B200": 20, "GB300": 20},
        gpu_hour_rate={"B200": 3.65, "GB300": 5.50},
        electricity_cost=0.0325,
        datacenter_overhead=150,
        electrical_overhead=1.5,
        utilization_rate=90,
    )


@pytest.fixture
def ramp_settings(settings: ProfitabilitySettings) -> ProfitabilitySettings:
    """Heavy installation cost: every ramp month loses money."""
    return settings.model_copy(update={"installation_cost": {ChipType.B200: 20_000.0, ChipType.GB300: 20_000.0}})


@pytest.fixture
def timeline() -> Timeline:
    return Timeline(start_month=0, start_year=2026, total_months=48)


@pytest.fixture
def ramp_batch() -> Batch:
    return Batch(
        id="ramp",
        chip_type=ChipType.B200,
        quantity=4200,
        installation_month=0,
        installation_year=2026,
        funding_type="Lease",
        lease_type="FMV",
        lease_term=36,
        apr=9,
        deployment_schedule={0: 20, 1: 10, 2: 25, 3: 15, 4: 15, 5: 15},
    )


@pytest.fixture
def cash_batch() -> Batch:
    return Batch(
        id="cash",
        chip_type=ChipType.B200,
        quantity=1000,
        installation_month=0,
        installation_year=2026,
        funding_type="Cash",
        deployment_schedule={0: 100},
    )


@pytest.fixture
def lease_batch(cash_batch: Batch) -> Batch:
    return cash_batch.model_copy(update={
        "id": "lease", "funding_type": "Lease", "lease_type": "FMV", "lease_term": 36, "apr": 9.0,
    })


@pytest.fixture
def gb300_batch() -> Batch:
    return Batch(
        id="gb300",
        chip_type=ChipType.GB300,
        quantity=2000,
        installation_month=3,
        installation_year=2026,
        site_id="site-b",
        funding_type="Cash",
        deployment_schedule={3: 50, 4: 50},
    )


@pytest.fixture
def sites() -> list[Site]:
    return [
        Site(id="site-a", name="Alpha", location="BC", capacity_mw=10, status="operating"),
        Site(id="site-b", name="Beta", location="TX", capacity_mw=4, status="secured"),
        Site(id="site-empty", name="Empty", location="TX", capacity_mw=0, status="secured"),
    ]


@pytest.fixture
def portfolio(
    settings: ProfitabilitySettings,
    timeline: Timeline,
    sites: list[Site],
    ramp_batch: Batch,
    gb300_batch: Batch,
) -> Portfolio:
    return Portfolio(
        settings=settings,
        timeline=timeline,
        sites=sites,
        batches=[ramp_batch.model_copy(update={"site_id": "site-a"}), gb300_batch],
    )
