"""Portfolio files — YAML / JSON persistence outside the engine.

Loading always runs the record upgrade first, then pydantic validation, so
callers receive a canonical ``Portfolio``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from gpu_fleet_sim.config.portfolio import Portfolio
from gpu_fleet_sim.storage.migrations import SCHEMA_VERSION, upgrade_portfolio_record


logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def portfolio_from_dict(data: dict[str, Any]) -> Portfolio:
    """Upgrade + validate a raw portfolio dict."""
    return Portfolio.model_validate(upgrade_portfolio_record(data))


def portfolio_to_dict(portfolio: Portfolio) -> dict[str, Any]:
    """JSON-compatible dict in the stored (camelCase) shape."""
    data = portfolio.model_dump(mode="json", by_alias=True)
    for batch in data["batches"]:
        batch["schemaVersion"] = SCHEMA_VERSION
    return data


def load_portfolio(path: str | Path) -> Portfolio:
    """Read a portfolio from ``.yaml``/``.yml`` or ``.json``."""
    path = Path(path)
    with open(path) as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    portfolio = portfolio_from_dict(data)
    logger.info("Loaded %d batches and %d sites from %s",
                len(portfolio.batches), len(portfolio.sites), path)
    return portfolio


def save_portfolio(portfolio: Portfolio, path: str | Path) -> Path:
    """Write a portfolio; format chosen by file suffix."""
    path = Path(path)
    data = portfolio_to_dict(portfolio)
    with open(path, "w") as f:
        if path.suffix.lower() in _YAML_SUFFIXES:
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
    logger.info("Saved %d batches to %s", len(portfolio.batches), path)
    return path
