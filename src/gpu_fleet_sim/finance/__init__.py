"""Finance — loan mathematics used by lease funding."""

from gpu_fleet_sim.finance.amortization import (
    build_amortization_schedule,
    monthly_payment,
    total_interest,
)

__all__ = [
    "build_amortization_schedule",
    "monthly_payment",
    "total_interest",
]
