"""GPU fleet profitability simulator — batch cash-flow projection engine."""

__version__ = "1.0.0"
