"""
Level-payment mortgage maths shared by every calculator.

All annuity arithmetic goes through `annuity_payment` / `principal_from_payment`
so the zero-rate behaviour is decided in one place, by the caller's policy:

- ZERO_RATE_NONE: a 0% rate has no defined schedule (mortgage calculator,
  affordability check). The caller gets None.
- ZERO_RATE_STRAIGHT_LINE: a 0% rate repays principal in equal instalments
  with no interest (bank comparison).

Values are never rounded here; rounding happens when formatting for display.
"""
import math
from dataclasses import dataclass
from typing import Optional

import pandas as pd

ZERO_RATE_NONE = "none"
ZERO_RATE_STRAIGHT_LINE = "straight_line"


def _discount_gap(monthly_rate: float, months: float) -> float:
    """1 - (1+r)^-n, computed without overflow for long terms or underflow for tiny rates."""
    return -math.expm1(-months * math.log1p(monthly_rate))


def annuity_payment(principal: float, monthly_rate: float, months: float,
                    zero_rate: str = ZERO_RATE_NONE) -> Optional[float]:
    """Monthly payment for loan 'principal' at 'monthly_rate' over 'months'."""
    if months <= 0 or monthly_rate < 0:
        return None
    if monthly_rate == 0:
        return principal / months if zero_rate == ZERO_RATE_STRAIGHT_LINE else None
    # P*r*f/(f-1) rewritten as P*r/(1-1/f); tends to P*r as n grows
    gap = _discount_gap(monthly_rate, months)
    if gap == 0:
        return principal / months
    return principal * monthly_rate / gap


def principal_from_payment(target_monthly: float, monthly_rate: float, months: float,
                           zero_rate: str = ZERO_RATE_NONE) -> Optional[float]:
    """Solve principal P from given monthly payment (inverse of annuity_payment)."""
    if months <= 0 or monthly_rate < 0:
        return None
    if monthly_rate == 0:
        return target_monthly * months if zero_rate == ZERO_RATE_STRAIGHT_LINE else None
    gap = _discount_gap(monthly_rate, months)
    if gap == 0:
        return target_monthly * months
    return target_monthly * gap / monthly_rate


def monthly_rate_of(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


@dataclass(frozen=True)
class AmortizationResult:
    principal: float
    annual_rate_percent: float
    term_years: float
    monthly_payment: float
    total_payment: float
    total_interest: float

    @property
    def months(self) -> float:
        return self.term_years * 12


def compute_amortization(principal: float, annual_rate_percent: float, term_years: float,
                         zero_rate: str = ZERO_RATE_NONE) -> Optional[AmortizationResult]:
    """
    Fixed-rate repayment figures, or None when the inputs don't define a loan
    (non-positive principal or term, negative rate, or 0% under ZERO_RATE_NONE).
    """
    if principal <= 0:
        return None
    months = term_years * 12
    payment = annuity_payment(principal, monthly_rate_of(annual_rate_percent), months, zero_rate)
    if payment is None:
        return None
    total_payment = payment * months
    return AmortizationResult(
        principal=principal,
        annual_rate_percent=annual_rate_percent,
        term_years=term_years,
        monthly_payment=payment,
        total_payment=total_payment,
        total_interest=total_payment - principal,
    )


SCHEDULE_COLUMNS = ["year", "principal_paid", "interest_paid", "balance"]
# terms beyond this are not tabulated month by month
MAX_SCHEDULE_MONTHS = 100 * 12


def amortization_schedule(principal: float, annual_rate_percent: float, term_years: float) -> pd.DataFrame:
    """Yearly roll-up of the repayment schedule; empty frame if no loan is defined."""
    result = compute_amortization(principal, annual_rate_percent, term_years)
    if result is None or not result.months <= MAX_SCHEDULE_MONTHS:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    r = monthly_rate_of(annual_rate_percent)
    balance = principal
    rows = []
    year_principal = year_interest = 0.0
    total_months = math.ceil(result.months)
    for month in range(1, total_months + 1):
        interest = balance * r
        # last instalment of a fractional term only clears what is left
        paid_down = min(result.monthly_payment - interest, balance)
        balance -= paid_down
        year_principal += paid_down
        year_interest += interest
        if month % 12 == 0 or month == total_months:
            rows.append([math.ceil(month / 12), year_principal, year_interest, max(balance, 0.0)])
            year_principal = year_interest = 0.0
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
