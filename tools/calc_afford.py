from dataclasses import dataclass
from typing import Optional

from tools.calc_mortgage import monthly_rate_of, principal_from_payment
from tools.policy import load_policy


@dataclass
class AffordInputs:
    monthly_income: float
    monthly_commitments: float  # car loans, personal loans, credit cards, etc.
    interest_pa: float
    tenure_years: float


@dataclass(frozen=True)
class AffordabilityResult:
    max_loan_amount: float
    max_property_value: float
    serviceable_monthly_payment: float
    debt_service_ratio_percent: float
    within_capacity: bool

    @property
    def required_down_payment(self) -> float:
        return self.max_property_value - self.max_loan_amount


def compute_affordability(monthly_income: float, monthly_commitments: float,
                          annual_rate_percent: float, term_years: float,
                          policy: Optional[dict] = None) -> Optional[AffordabilityResult]:
    """
    Largest loan serviceable under the DSR cap, and the property value it buys
    at the policy financing ratio. Returns None when income, rate or tenure
    is not positive.
    """
    if monthly_income <= 0 or annual_rate_percent <= 0 or term_years <= 0:
        return None
    policy = policy if policy is not None else load_policy()
    dsr_cap = float(policy["dsr_cap"])
    financing_ratio = float(policy["financing_ratio"])

    # DSR headroom: installment <= cap * income - existing commitments
    available = monthly_income * dsr_cap - monthly_commitments
    if available <= 0:
        # already at or over the cap; report where existing debt alone sits
        return AffordabilityResult(
            max_loan_amount=0.0,
            max_property_value=0.0,
            serviceable_monthly_payment=0.0,
            debt_service_ratio_percent=monthly_commitments / monthly_income * 100,
            within_capacity=False,
        )

    max_loan = principal_from_payment(available, monthly_rate_of(annual_rate_percent), term_years * 12)
    return AffordabilityResult(
        max_loan_amount=max_loan,
        max_property_value=max_loan / financing_ratio,
        serviceable_monthly_payment=available,
        # with the full headroom taken this is the cap itself
        debt_service_ratio_percent=(monthly_commitments + available) / monthly_income * 100,
        within_capacity=True,
    )


def calc_afford(inputs: AffordInputs, policy: Optional[dict] = None) -> Optional[AffordabilityResult]:
    return compute_affordability(
        inputs.monthly_income,
        inputs.monthly_commitments,
        inputs.interest_pa,
        inputs.tenure_years,
        policy,
    )


def dsr_status(dsr_percent: float, policy: Optional[dict] = None) -> str:
    """Risk band for a debt service ratio: Excellent / Good / High Risk."""
    policy = policy if policy is not None else load_policy()
    bands = policy["dsr_bands"]
    if dsr_percent <= float(bands["excellent"]):
        return "Excellent"
    if dsr_percent <= float(bands["good"]):
        return "Good"
    return "High Risk"
