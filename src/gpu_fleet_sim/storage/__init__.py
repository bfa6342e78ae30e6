"""Storage adapter — file persistence, record upgrades and defaults."""

from gpu_fleet_sim.storage.defaults import DEFAULT_SITES, batch_label, default_portfolio
from gpu_fleet_sim.storage.files import (
    load_portfolio,
    portfolio_from_dict,
    portfolio_to_dict,
    save_portfolio,
)
from gpu_fleet_sim.storage.migrations import (
    SCHEMA_VERSION,
    upgrade_batch_record,
    upgrade_portfolio_record,
)

__all__ = [
    "DEFAULT_SITES",
    "batch_label",
    "default_portfolio",
    "load_portfolio",
    "portfolio_from_dict",
    "portfolio_to_dict",
    "save_portfolio",
    "SCHEMA_VERSION",
    "upgrade_batch_record",
    "upgrade_portfolio_record",
]
