"""Top-level portfolio — bundles every input for one calculation."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gpu_fleet_sim.config.batch import Batch
from gpu_fleet_sim.config.settings import ProfitabilitySettings
from gpu_fleet_sim.config.site import Site
from gpu_fleet_sim.config.timeline import Timeline


class Portfolio(BaseModel):
    """Complete input bundle: settings, timeline, sites and batches."""

    model_config = ConfigDict(populate_by_name=True)

    settings: ProfitabilitySettings = Field(default_factory=ProfitabilitySettings)
    timeline: Timeline = Field(default_factory=Timeline)
    sites: list[Site] = Field(default_factory=list)
    batches: list[Batch] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_batches(self) -> "Portfolio":
        seen: set[str] = set()
        for batch in self.batches:
            if batch.id in seen:
                raise ValueError(f"duplicate batch id: {batch.id}")
            seen.add(batch.id)

            start = batch.installation_index(self.timeline)
            early = [m for m in batch.deployment_schedule if m < start]
            if early:
                raise ValueError(
                    f"batch {batch.id}: schedule months {early} precede installation index {start}"
                )
        return self
