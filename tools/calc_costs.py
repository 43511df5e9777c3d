from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from tools.policy import load_policy


def tiered_charge(value: float, tiers: List[Dict[str, Any]]) -> float:
    """Marginal-band charge: each rate applies only to the slice of value in its band."""
    remaining = value
    last_cap = 0.0
    charge = 0.0
    for t in tiers:
        cap = t["up_to"]
        rate = float(t["rate"])
        if cap is None:  # top tier
            charge += remaining * rate
            break
        band = max(0.0, min(value, cap) - last_cap)
        charge += band * rate
        remaining -= band
        last_cap = cap
        if remaining <= 0:
            break
    # values below zero aren't clamped; they fall into the first band
    if value < 0 and tiers:
        charge = value * float(tiers[0]["rate"])
    return charge


def stamp_duty(property_value: float, policy: Optional[dict] = None) -> float:
    """Stamp duty on the transfer (1% / 2% / 3% / 4% marginal bands by default)."""
    policy = policy if policy is not None else load_policy()
    return tiered_charge(property_value, policy["stamp_duty_tiers"])


def legal_fees(property_value: float, policy: Optional[dict] = None) -> float:
    """Lawyer's scale fee: base fee plus marginal bands, never below the floor."""
    policy = policy if policy is not None else load_policy()
    fee = float(policy["legal_fee_base"]) + tiered_charge(property_value, policy["legal_fee_tiers"])
    return max(fee, float(policy["legal_fee_floor"]))


def valuation_fee(property_value: float, policy: Optional[dict] = None) -> float:
    policy = policy if policy is not None else load_policy()
    return min(property_value * float(policy["valuation_fee_rate"]), float(policy["valuation_fee_cap"]))


def mrta_premium(loan_principal: float, policy: Optional[dict] = None) -> float:
    # single-premium MRTA approximated as a flat share of the loan
    policy = policy if policy is not None else load_policy()
    return loan_principal * float(policy["mrta_rate"])


@dataclass(frozen=True)
class CostBreakdown:
    stamp_duty: float
    legal_fees: float
    valuation_fee: float
    mortgage_insurance: float
    total_upfront: float

    def items(self):
        """(label, amount, description) rows for display."""
        return [
            ("Stamp Duty", self.stamp_duty, "Government tax on property transfer (progressive rates)"),
            ("Legal Fees", self.legal_fees, "Lawyer fees for property transfer documentation"),
            ("Valuation Fees", self.valuation_fee, "Bank's property assessment fees"),
            ("MRTA Insurance", self.mortgage_insurance, "Mortgage Reducing Term Assurance (recommended)"),
        ]


def compute_costs(property_value: float, loan_principal: float, policy: Optional[dict] = None) -> CostBreakdown:
    """Upfront Malaysian transaction costs on top of the down payment."""
    policy = policy if policy is not None else load_policy()
    duty = stamp_duty(property_value, policy)
    legal = legal_fees(property_value, policy)
    valuation = valuation_fee(property_value, policy)
    insurance = mrta_premium(loan_principal, policy)
    return CostBreakdown(
        stamp_duty=duty,
        legal_fees=legal,
        valuation_fee=valuation,
        mortgage_insurance=insurance,
        total_upfront=duty + legal + valuation + insurance,
    )
