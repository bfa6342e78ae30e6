"""Configuration models — every calculation input."""

from gpu_fleet_sim.config.chips import ChipType
from gpu_fleet_sim.config.settings import ProfitabilitySettings
from gpu_fleet_sim.config.timeline import Timeline
from gpu_fleet_sim.config.site import Site
from gpu_fleet_sim.config.batch import Batch, FundingType
from gpu_fleet_sim.config.portfolio import Portfolio

__all__ = [
    "ChipType",
    "ProfitabilitySettings",
    "Timeline",
    "Site",
    "Batch",
    "FundingType",
    "Portfolio",
]
