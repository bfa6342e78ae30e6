"""Chip economics — typed lookup of per-chip constants from settings."""

from __future__ import annotations

from dataclasses import dataclass

from gpu_fleet_sim.config.chips import ChipType
from gpu_fleet_sim.config.settings import ProfitabilitySettings


HOURS_PER_MONTH = 730


class ConfigurationError(LookupError):
    """A batch references a chip type the settings do not configure."""


@dataclass(frozen=True)
class ChipEconomics:
    """Per-unit constants for one chip type."""

    chip_type: ChipType
    gpu_hour_rate: float
    """$ per unit-hour."""
    power_per_unit_kw: float
    """IT draw per unit (kW, before PUE)."""
    upfront_cost: float
    installation_cost: float
    gpus_per_mw: float

    def monthly_revenue_per_unit(self, utilization_rate_pct: float) -> float:
        return HOURS_PER_MONTH * (utilization_rate_pct / 100) * self.gpu_hour_rate


_MAPS = {
    "gpu_hour_rate": "gpu_hour_rate",
    "power_per_unit_kw": "gpu_power_kw",
    "upfront_cost": "upfront_gpu_cost",
    "installation_cost": "installation_cost",
    "gpus_per_mw": "gpus_per_mw",
}


def resolve(chip_type: ChipType, settings: ProfitabilitySettings) -> ChipEconomics:
    """Resolve every constant for ``chip_type``.

    Raises ``ConfigurationError`` naming the first settings map without an
    entry for the chip; no default is ever substituted.
    """
    values: dict[str, float] = {}
    for attr, map_name in _MAPS.items():
        table: dict[ChipType, float] = getattr(settings, map_name)
        if chip_type not in table:
            raise ConfigurationError(
                f"settings.{map_name} has no entry for chip type {chip_type.value}"
            )
        values[attr] = table[chip_type]
    return ChipEconomics(chip_type=chip_type, **values)
