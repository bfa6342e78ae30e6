"""Default portfolio — starting sites and batches for a fresh workspace."""

from __future__ import annotations

from gpu_fleet_sim.config import Batch, ChipType, Portfolio, ProfitabilitySettings, Site, Timeline
from gpu_fleet_sim.engine.schedule import derive_delivery_date, even_ramp
from gpu_fleet_sim.engine.sites import mw_equivalent


DEFAULT_SITES = [
    Site(id="site-canal-flats", name="Canal Flats", location="British Columbia", capacity_mw=30, status="operating"),
    Site(id="site-prince-george", name="Prince George", location="British Columbia", capacity_mw=50, status="operating"),
    Site(id="site-mackenzie", name="Mackenzie", location="British Columbia", capacity_mw=80, status="operating"),
    Site(id="site-childress", name="Childress", location="Texas", capacity_mw=750, status="under-construction"),
    Site(id="site-sweetwater-1", name="Sweetwater 1", location="West Texas (Nolan County)",
         capacity_mw=1400, status="secured"),
    Site(id="site-sweetwater-2", name="Sweetwater 2", location="West Texas", capacity_mw=600, status="secured"),
]

# (installation month, year, quantity, chip, site)
_DEFAULT_BATCHES = [
    (8, 2025, 4000, ChipType.B200, "site-prince-george"),
    (9, 2025, 4500, ChipType.B200, "site-prince-george"),
    (10, 2025, 5000, ChipType.B200, "site-prince-george"),
    (11, 2025, 5000, ChipType.B200, "site-prince-george"),
    (0, 2026, 5500, ChipType.B200, "site-prince-george"),
    (1, 2026, 5500, ChipType.B200, "site-childress"),
    (2, 2026, 5500, ChipType.B200, "site-childress"),
    (3, 2026, 5500, ChipType.B200, "site-childress"),
]


def batch_label(batch: Batch, settings: ProfitabilitySettings, sites: list[Site]) -> str:
    """e.g. ``"4,000 B200s (7.52MW • Prince George)"``."""
    site = next((s for s in sites if s.id == batch.site_id), None)
    where = f" • {site.name}" if site else ""
    return f"{batch.quantity:,} {batch.chip_type.value}s ({mw_equivalent(batch, settings):.2f}MW{where})"


def default_portfolio() -> Portfolio:
    settings = ProfitabilitySettings()
    timeline = Timeline()
    batches: list[Batch] = []

    for index, (month, year, quantity, chip, site_id) in enumerate(_DEFAULT_BATCHES):
        batch = Batch(
            id=f"batch-{index}",
            chip_type=chip,
            quantity=quantity,
            installation_month=month,
            installation_year=year,
            site_id=site_id,
            funding_type="Lease",
            lease_type="FMV",
            lease_term=36,
            apr=9.0,
            deployment_schedule=even_ramp(timeline.index_of(year, month)),
        )
        batches.append(batch.model_copy(update={
            "name": batch_label(batch, settings, DEFAULT_SITES),
            "delivery_date": derive_delivery_date(batch, timeline),
        }))

    return Portfolio(settings=settings, timeline=timeline, sites=list(DEFAULT_SITES), batches=batches)
