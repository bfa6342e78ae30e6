"""Hosting sites — MW capacity that batches are allocated against."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Site(BaseModel):
    """One datacenter location."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Stable identifier referenced by Batch.site_id")
    name: str = Field(default="", description="Human label")
    location: str = Field(default="", description="Region / state")
    capacity_mw: float = Field(default=0.0, ge=0, alias="capacityMW", description="Usable capacity (MW)")
    status: Literal["operating", "under-construction", "secured"] = Field(default="operating")
