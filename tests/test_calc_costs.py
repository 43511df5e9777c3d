import pytest

from tools.calc_costs import compute_costs, legal_fees, stamp_duty, valuation_fee
from tools.policy import DEFAULT_POLICY


def test_costs_for_600k_property():
    c = compute_costs(600000, 500000, DEFAULT_POLICY)
    assert c.stamp_duty == pytest.approx(12000)
    assert c.legal_fees == pytest.approx(6100)
    assert c.valuation_fee == pytest.approx(1500)
    assert c.mortgage_insurance == pytest.approx(3000)
    assert c.total_upfront == pytest.approx(12000 + 6100 + 1500 + 3000)


@pytest.mark.parametrize("value,expected", [
    (80000, 800),
    (100000, 1000),
    (300000, 5000),
    (500000, 9000),
    (1000000, 24000),
    (1500000, 44000),
])
def test_stamp_duty_brackets(value, expected):
    assert stamp_duty(value, DEFAULT_POLICY) == pytest.approx(expected)


@pytest.mark.parametrize("boundary", [100000, 500000, 1000000])
def test_stamp_duty_continuous_at_boundaries(boundary):
    below = stamp_duty(boundary, DEFAULT_POLICY)
    above = stamp_duty(boundary + 0.01, DEFAULT_POLICY)
    assert above - below == pytest.approx(0, abs=0.001)


@pytest.mark.parametrize("value,expected", [
    (100000, 2000),
    (150000, 2500),
    (1000000, 9300),
    (2000000, 16300),
])
def test_legal_fee_brackets(value, expected):
    assert legal_fees(value, DEFAULT_POLICY) == pytest.approx(expected)


def test_legal_fee_floor():
    # the scale's base fee keeps non-negative values above the floor
    assert legal_fees(0, DEFAULT_POLICY) == pytest.approx(1000)
    assert legal_fees(-80000, DEFAULT_POLICY) == pytest.approx(500)


def test_valuation_fee_cap():
    assert valuation_fee(400000, DEFAULT_POLICY) == pytest.approx(1000)
    assert valuation_fee(5000000, DEFAULT_POLICY) == pytest.approx(2500)


def test_zero_property_value():
    c = compute_costs(0, 0, DEFAULT_POLICY)
    assert c.stamp_duty == 0
    assert c.valuation_fee == 0
    assert c.mortgage_insurance == 0
    assert c.total_upfront == pytest.approx(c.legal_fees)


def test_total_sums_unrounded_parts():
    c = compute_costs(333333.33, 299999.99, DEFAULT_POLICY)
    assert c.total_upfront == c.stamp_duty + c.legal_fees + c.valuation_fee + c.mortgage_insurance


def test_policy_overrides_rates():
    policy = dict(DEFAULT_POLICY, mrta_rate=0.01, valuation_fee_cap=1000)
    c = compute_costs(600000, 500000, policy)
    assert c.mortgage_insurance == pytest.approx(5000)
    assert c.valuation_fee == pytest.approx(1000)
