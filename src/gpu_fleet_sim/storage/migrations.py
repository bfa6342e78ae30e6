"""Record upgrades — bring stored batch dicts to the current schema.

Applied once at load time so the engine never sees legacy shapes:
  v0 → v1: records without ``deploymentSchedule`` get an even 4-month ramp
           starting at their installation index; the obsolete ``phases``
           block (fixed install / burn-in / live durations) is dropped.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from gpu_fleet_sim.config.timeline import Timeline
from gpu_fleet_sim.engine.schedule import even_ramp


logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
LEGACY_RAMP_MONTHS = 4


def _get(record: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in record:
        return record[camel]
    return record.get(snake, default)


def upgrade_batch_record(record: dict[str, Any], timeline: Timeline) -> dict[str, Any]:
    """Return an upgraded copy of one stored batch record."""
    upgraded = deepcopy(record)
    version = upgraded.pop("schemaVersion", upgraded.pop("schema_version", 0))

    if version < 1:
        upgraded.pop("phases", None)
        schedule = _get(upgraded, "deploymentSchedule", "deployment_schedule")
        if not schedule:
            start = timeline.index_of(
                int(_get(upgraded, "installationYear", "installation_year", timeline.start_year)),
                int(_get(upgraded, "installationMonth", "installation_month", timeline.start_month)),
            )
            upgraded.pop("deployment_schedule", None)
            upgraded["deploymentSchedule"] = even_ramp(max(start, 0), LEGACY_RAMP_MONTHS)
            logger.info("Back-filled %d-month ramp for legacy batch %s",
                        LEGACY_RAMP_MONTHS, upgraded.get("id"))
        upgraded.setdefault("fundingType", upgraded.pop("funding_type", "Cash"))

    return upgraded


def upgrade_portfolio_record(record: dict[str, Any]) -> dict[str, Any]:
    """Upgrade every batch of a stored portfolio dict."""
    upgraded = deepcopy(record)
    timeline = Timeline.model_validate(upgraded.get("timeline") or {})
    batches = upgraded.get("batches") or []
    upgraded["batches"] = [upgrade_batch_record(b, timeline) for b in batches]
    return upgraded
