"""Profitability settings — shared per-calculation assumptions.

Per-unit power draw is stored directly in ``gpu_power_kw``; ``gpus_per_mw``
is packing density only (MW-equivalent and site capacity figures).
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from gpu_fleet_sim.config.chips import ChipType


_DEFAULT_GPUS_PER_MW = {
    ChipType.B200: 532,   # air cooled
    ChipType.B300: 480,
    ChipType.GB300: 432,  # liquid cooled
    ChipType.H100: 700,
    ChipType.H200: 650,
    ChipType.MI350X: 520,
}
_DEFAULT_UPFRONT_COST = {
    ChipType.B200: 46_000.0,
    ChipType.B300: 60_000.0,
    ChipType.GB300: 80_000.0,
    ChipType.H100: 25_000.0,
    ChipType.H200: 32_000.0,
    ChipType.MI350X: 35_000.0,
}
_DEFAULT_POWER_KW = {
    ChipType.B200: 1.7,
    ChipType.B300: 1.9,
    ChipType.GB300: 2.1,
    ChipType.H100: 1.2,
    ChipType.H200: 1.3,
    ChipType.MI350X: 1.6,
}
_DEFAULT_INSTALLATION_COST = {chip: 20.0 for chip in ChipType}
_DEFAULT_HOUR_RATE = {
    ChipType.B200: 3.65,
    ChipType.B300: 4.50,
    ChipType.GB300: 5.50,
    ChipType.H100: 2.10,
    ChipType.H200: 2.60,
    ChipType.MI350X: 2.90,
}


class ProfitabilitySettings(BaseModel):
    """Cost, revenue and power assumptions applied to every batch.

    Read-only for the duration of a calculation.  JSON records may use the
    camelCase names (``gpusPerMW``, ``gpuHourRate``) and lower-case chip keys.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # --- Per-chip maps ---
    gpus_per_mw: dict[ChipType, float] = Field(
        default_factory=lambda: dict(_DEFAULT_GPUS_PER_MW),
        alias="gpusPerMW",
        description="Units of each chip that fit in one MW of capacity.",
    )
    gpu_power_kw: dict[ChipType, float] = Field(
        default_factory=lambda: dict(_DEFAULT_POWER_KW),
        validation_alias=AliasChoices("gpuPowerKw", "gpuPowerConsumption", "gpu_power_kw"),
        description="IT power draw per unit (kW, before PUE).",
    )
    upfront_gpu_cost: dict[ChipType, float] = Field(
        default_factory=lambda: dict(_DEFAULT_UPFRONT_COST),
        description="Purchase price per unit ($).",
    )
    installation_cost: dict[ChipType, float] = Field(
        default_factory=lambda: dict(_DEFAULT_INSTALLATION_COST),
        description="One-time installation cost per unit ($).",
    )
    gpu_hour_rate: dict[ChipType, float] = Field(
        default_factory=lambda: dict(_DEFAULT_HOUR_RATE),
        description="Rental price per unit per hour ($).",
    )

    # --- Chip-independent ---
    electricity_cost: float = Field(default=0.0325, ge=0, description="$/kWh")
    datacenter_overhead: float = Field(
        default=150.0, ge=0, description="Flat $/unit/month, independent of chip type",
    )
    electrical_overhead: float = Field(
        default=1.5, ge=1.0, description="PUE multiplier applied to raw IT draw",
    )
    utilization_rate: float = Field(
        default=90.0, ge=0, le=100,
        description="Percent of the month's 730 hours a live unit runs and earns.",
    )

    @field_validator(
        "gpus_per_mw", "gpu_power_kw", "upfront_gpu_cost",
        "installation_cost", "gpu_hour_rate",
        mode="before",
    )
    @classmethod
    def _normalise_chip_keys(cls, value):
        if isinstance(value, dict):
            return {ChipType.parse(k): v for k, v in value.items()}
        return value

    @field_validator("gpus_per_mw", "gpu_power_kw")
    @classmethod
    def _positive_density(cls, value: dict[ChipType, float]):
        for chip, v in value.items():
            if v <= 0:
                raise ValueError(f"{chip.value}: must be > 0, got {v}")
        return value

    @field_validator("upfront_gpu_cost", "installation_cost", "gpu_hour_rate")
    @classmethod
    def _non_negative(cls, value: dict[ChipType, float]):
        for chip, v in value.items():
            if v < 0:
                raise ValueError(f"{chip.value}: must be >= 0, got {v}")
        return value
