"""Fixed-payment loan amortization.

Models lease financing of GPU purchases:
  - fixed monthly payment of a fully amortizing loan
  - total interest over the term
  - month-by-month schedule (interest / principal split)

Key formula:
  payment = P × r × (1+r)^n / ((1+r)^n − 1)   where r = APR / 100 / 12
  payment = P / n                              when APR = 0

The calculator has no knowledge of deployment timing: callers multiply the
per-unit payment by the number of units whose financing clock started in a
given month.
"""

from __future__ import annotations

from gpu_fleet_sim.models.results import AmortizationRow, AmortizationSchedule


def monthly_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Fixed monthly payment that repays ``principal`` over ``term_months``.

    Parameters
    ----------
    principal : float
        Amount financed ($).  0 gives a 0 payment.
    annual_rate_percent : float
        APR in percent (e.g. 9 for 9%).
    term_months : int
        Number of payments; must be >= 1.
    """
    if term_months < 1:
        raise ValueError(f"term_months must be >= 1, got {term_months}")
    if principal == 0:
        return 0.0

    r = annual_rate_percent / 100 / 12
    if r == 0:
        return principal / term_months

    factor = (1 + r) ** term_months
    return principal * r * factor / (factor - 1)


def total_interest(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Interest paid over the full term = payment × n − principal."""
    return monthly_payment(principal, annual_rate_percent, term_months) * term_months - principal


def build_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_months: int,
) -> AmortizationSchedule:
    """Generate the month-by-month schedule of one loan."""
    payment = monthly_payment(principal, annual_rate_percent, term_months)
    r = annual_rate_percent / 100 / 12

    rows: list[AmortizationRow] = []
    balance = principal
    interest_sum = 0.0
    principal_sum = 0.0

    for m in range(1, term_months + 1):
        interest = balance * r
        repaid = min(payment - interest, balance)
        closing = balance - repaid

        rows.append(AmortizationRow(
            month=m,
            opening_balance=round(balance, 2),
            interest=round(interest, 2),
            principal=round(repaid, 2),
            payment=round(interest + repaid, 2),
            closing_balance=round(max(closing, 0), 2),
        ))

        interest_sum += interest
        principal_sum += repaid
        balance = max(closing, 0)

    return AmortizationSchedule(
        principal=round(principal, 2),
        annual_rate_percent=annual_rate_percent,
        term_months=term_months,
        monthly_payment=round(payment, 2),
        rows=rows,
        total_interest_paid=round(interest_sum, 2),
        total_principal_paid=round(principal_sum, 2),
    )
