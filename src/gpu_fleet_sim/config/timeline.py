"""Shared project timeline — month 0 is the epoch of every deployment schedule."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Timeline(BaseModel):
    """Calendar anchor plus horizon length for all projections."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_month: int = Field(default=8, ge=0, le=11, description="0 = January; default September")
    start_year: int = Field(default=2025, ge=1900, description="Calendar year of month 0")
    total_months: int = Field(default=48, ge=0, le=600, description="Projection horizon (months)")

    def index_of(self, year: int, month: int) -> int:
        """Timeline index of a calendar (year, month); negative if before the epoch."""
        return (year - self.start_year) * 12 + (month - self.start_month)

    def calendar_at(self, index: int) -> tuple[int, int]:
        """(month, year) for a timeline index."""
        absolute = self.start_month + index
        return absolute % 12, self.start_year + absolute // 12
