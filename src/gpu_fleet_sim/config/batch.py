"""Batch — one capital deployment event of a single chip type."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from gpu_fleet_sim.config.chips import ChipType
from gpu_fleet_sim.config.timeline import Timeline


FundingType = Literal["Cash", "Lease"]


class Batch(BaseModel):
    """A fixed quantity of one chip type, brought online incrementally.

    ``deployment_schedule`` maps a timeline month index to the *signed* percent
    of the batch newly deployed that month.  Cumulative deployment is the
    clamped running sum and never leaves [0, 100].
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # --- Identity ---
    id: str = Field(description="Stable identifier")
    name: str = Field(default="", description="Human label")
    chip_type: ChipType = Field(default=ChipType.B200)
    quantity: int = Field(default=0, ge=0, description="Total units ever deployed by this batch")
    site_id: str | None = Field(default=None, description="Site the batch is hosted at")

    # --- Timing ---
    installation_year: int = Field(default=2025, ge=1900)
    installation_month: int = Field(
        default=8, ge=0, le=11,
        description="0-based calendar month of the first possible deployment",
    )
    date_announced: date | None = Field(default=None, description="Informational")
    delivery_date: date | None = Field(
        default=None,
        description="First month with cumulative deployment >= 1% (derived)",
    )

    # --- Funding ---
    funding_type: FundingType = Field(
        default="Cash",
        description="'Cash' = upfront cost paid when units go live; "
                    "'Lease' = amortized monthly payments per deployment cohort.",
    )
    lease_type: Literal["FMV"] | None = Field(default=None)
    residual_cap: float | None = Field(default=None, ge=0, le=100, description="Residual cap (%)")
    lease_term: int | None = Field(default=None, ge=1, le=360, description="Lease term (months)")
    apr: float | None = Field(default=None, ge=0, le=100, description="Annual percentage rate (%)")

    deployment_schedule: dict[int, float] = Field(
        default_factory=dict,
        description="Timeline month index -> percent of batch deployed that month (signed delta).",
    )

    @field_validator("chip_type", mode="before")
    @classmethod
    def _parse_chip(cls, value):
        return ChipType.parse(value)

    @field_validator("deployment_schedule")
    @classmethod
    def _check_deltas(cls, value: dict[int, float]):
        for month, delta in value.items():
            if month < 0:
                raise ValueError(f"schedule month index must be >= 0, got {month}")
            if not -100.0 <= delta <= 100.0:
                raise ValueError(f"month {month}: delta {delta} outside [-100, 100]")
        return dict(sorted(value.items()))

    @model_validator(mode="after")
    def _check_funding(self) -> "Batch":
        if self.funding_type == "Lease":
            if self.lease_term is None or self.apr is None:
                raise ValueError("Lease batches require lease_term and apr")
        else:
            self.lease_type = None
            self.residual_cap = None
            self.lease_term = None
            self.apr = None
        return self

    def installation_index(self, timeline: Timeline) -> int:
        """Installation month expressed on the timeline (may be negative)."""
        return timeline.index_of(self.installation_year, self.installation_month)
