"""Site capacity — MW allocated to each site versus its nameplate capacity.

  batch_mw       = quantity / gpus_per_mw[chip]
  utilization %  = allocated_mw / capacity_mw × 100   (0 when capacity is 0)
"""

from __future__ import annotations

from gpu_fleet_sim.config.batch import Batch
from gpu_fleet_sim.config.settings import ProfitabilitySettings
from gpu_fleet_sim.config.site import Site
from gpu_fleet_sim.engine.economics import resolve
from gpu_fleet_sim.models.results import SiteUtilization


def mw_equivalent(batch: Batch, settings: ProfitabilitySettings) -> float:
    """Megawatts of capacity one batch occupies."""
    return batch.quantity / resolve(batch.chip_type, settings).gpus_per_mw


def compute_site_utilization(
    site: Site,
    batches: list[Batch],
    settings: ProfitabilitySettings,
) -> SiteUtilization:
    hosted = [b for b in batches if b.site_id == site.id]
    allocated = sum(mw_equivalent(b, settings) for b in hosted)
    utilization = allocated / site.capacity_mw * 100 if site.capacity_mw > 0 else 0.0

    return SiteUtilization(
        site_id=site.id,
        capacity_mw=site.capacity_mw,
        allocated_mw=round(allocated, 4),
        utilization_pct=round(utilization, 2),
        over_capacity_mw=round(max(allocated - site.capacity_mw, 0.0), 4),
        batch_ids=[b.id for b in hosted],
    )
