import logging
import os

import pandas as pd
import streamlit as st

from tools.bank_compare import (
    ComparisonSelection,
    best_rate_ids,
    compare_products,
    comparison_summary,
    default_selection,
    load_catalog,
)
from tools.calc_afford import AffordInputs, calc_afford, dsr_status
from tools.calc_costs import compute_costs
from tools.calc_mortgage import amortization_schedule, compute_amortization
from tools.formatting import fmt_pct, fmt_rate, fmt_rm
from tools.inputs import parse_number
from tools.policy import load_policy

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="MortgageMY", page_icon="🏠", layout="wide")
st.title("🇲🇾 MortgageMY")
st.caption("Malaysia's Smart Mortgage Planning Platform • v1.0")


@st.cache_resource
def get_policy():
    return load_policy()

@st.cache_resource
def get_catalog():
    return load_catalog()

policy = get_policy()
catalog = get_catalog()

if "compare_ids" not in st.session_state:
    st.session_state["compare_ids"] = list(default_selection(policy).ids)


def mortgage_calculator(key: str, compact: bool = False):
    cols = st.columns(2)
    with cols[0]:
        property_value = st.text_input("Property Value (RM)", "600000", key=f"{key}_property")
        rate = st.text_input("Interest Rate (%)", "4.5", key=f"{key}_rate")
    with cols[1]:
        loan_amount = st.text_input("Loan Amount (RM)", "500000", key=f"{key}_loan")
        tenure = st.text_input("Tenure (years)", "30", key=f"{key}_tenure")

    principal = parse_number(loan_amount)
    rate_pa = parse_number(rate)
    years = parse_number(tenure)
    result = compute_amortization(principal, rate_pa, years)
    if result is None:
        st.info("Enter a loan amount, interest rate and tenure above zero to see your payments.")
        return
    costs = compute_costs(parse_number(property_value), principal, policy)

    if compact:
        st.metric("Monthly Payment", fmt_rm(result.monthly_payment))
        c1, c2 = st.columns(2)
        c1.metric("Total Interest", fmt_rm(result.total_interest))
        c2.metric("Total Payment", fmt_rm(result.total_payment))
        st.caption(f"Upfront: {fmt_rm(costs.total_upfront)}")
        return

    c1, c2, c3 = st.columns(3)
    c1.metric("Monthly Payment", fmt_rm(result.monthly_payment))
    c2.metric("Total Interest", fmt_rm(result.total_interest))
    c3.metric("Total Payment", fmt_rm(result.total_payment))

    with st.container(border=True):
        head, total = st.columns([3, 1])
        head.markdown("**Malaysia-Specific Costs**")
        total.markdown(f"**Total: {fmt_rm(costs.total_upfront)}**")
        for label, amount, description in costs.items():
            left, right = st.columns([3, 1])
            left.write(f"**{label}**")
            left.caption(description)
            right.write(fmt_rm(amount))
        st.divider()
        st.metric("Total Upfront Costs", fmt_rm(costs.total_upfront),
                  help="Amount needed on top of down payment")
        st.caption(
            "Stamp duty uses Malaysia's progressive rates (1%-4%). Legal fees follow the Bar Council scale. "
            "Valuation fees are about 0.25% of property value (capped at RM2,500). "
            "MRTA premium is approximately 0.6% of loan amount."
        )

    with st.expander("Yearly repayment schedule"):
        schedule = amortization_schedule(principal, rate_pa, years)
        if not schedule.empty:
            st.line_chart(schedule.set_index("year")[["principal_paid", "interest_paid"]])
            st.dataframe(schedule.round(0), use_container_width=True, hide_index=True)


def affordability_checker():
    income = st.text_input("Monthly Gross Income (RM)", "8000", key="afford_income")
    commitments = st.text_input("Monthly Commitments (RM)", "2000", key="afford_commitments",
                                help="Include car loans, personal loans, credit cards, etc.")
    c1, c2 = st.columns(2)
    with c1:
        rate = st.text_input("Interest Rate (%)", "4.5", key="afford_rate")
    with c2:
        tenure = st.text_input("Tenure (years)", "30", key="afford_tenure")

    inp = AffordInputs(
        monthly_income=parse_number(income),
        monthly_commitments=parse_number(commitments),
        interest_pa=parse_number(rate),
        tenure_years=parse_number(tenure),
    )
    out = calc_afford(inp, policy)
    if out is None:
        st.info("Enter your income, interest rate and tenure to check affordability.")
        return

    cap_pct = float(policy["dsr_cap"]) * 100
    if not out.within_capacity:
        st.error(
            "**Current commitments too high.** Your existing monthly commitments exceed the recommended DSR. "
            "Consider reducing existing debts before applying for a mortgage.\n\n"
            f"Current DSR: {fmt_pct(out.debt_service_ratio_percent)} (Recommended: ≤{cap_pct:g}%)"
        )
    else:
        c1, c2 = st.columns(2)
        c1.metric("Max Property Value", fmt_rm(out.max_property_value))
        c2.metric("Max Loan Amount", fmt_rm(out.max_loan_amount))
        d1, d2 = st.columns([3, 1])
        d1.metric("Debt Service Ratio (DSR)", fmt_pct(out.debt_service_ratio_percent))
        d2.markdown(f"**{dsr_status(out.debt_service_ratio_percent, policy)}**")
        st.progress(min(out.debt_service_ratio_percent, 50.0) / 50.0)
        st.caption(
            f"Monthly installment: {fmt_rm(out.serviceable_monthly_payment)} • "
            f"Down payment needed: {fmt_rm(out.required_down_payment)}"
        )

    st.caption(
        f"Based on {cap_pct:g}% maximum DSR and {float(policy['financing_ratio']) * 100:g}% LTV. "
        "Actual approval depends on credit score, employment history, and bank policies."
    )


def _toggle_bank(product_id: str):
    selection = ComparisonSelection(tuple(st.session_state["compare_ids"]), int(policy["max_compare"]))
    st.session_state["compare_ids"] = list(selection.toggle(product_id).ids)


def bank_comparison():
    c1, c2 = st.columns(2)
    with c1:
        loan_amount = st.text_input("Loan Amount (RM)", "500000", key="compare_loan")
    with c2:
        tenure = st.text_input("Tenure (years)", "30", key="compare_tenure")

    selection = ComparisonSelection(tuple(st.session_state["compare_ids"]), int(policy["max_compare"]))
    st.session_state["compare_ids"] = list(selection.ids)
    st.write(f"Select Banks to Compare (max {selection.limit})")
    buttons = st.columns(len(catalog))
    for col, product in zip(buttons, catalog.values()):
        col.button(
            product.bank_name,
            key=f"toggle_{product.id}",
            type="primary" if product.id in selection else "secondary",
            disabled=not selection.can_add(product.id),
            on_click=_toggle_bank,
            args=(product.id,),
            use_container_width=True,
        )

    results = compare_products(parse_number(loan_amount), parse_number(tenure), selection, catalog)
    if not results:
        st.info("Enter a loan amount and tenure, then pick at least one bank.")
        return

    best = set(best_rate_ids(selection, catalog))
    cards = st.columns(max(len(results), 1))
    for col, product_id in zip(cards, [i for i in selection if i in results]):
        product, calc = catalog[product_id], results[product_id]
        with col, st.container(border=True):
            if product_id in best:
                st.markdown(":star: **Best Rate**")
            st.markdown(f"<span style='color:{product.color}'>●</span> **{product.bank_name}**",
                        unsafe_allow_html=True)
            st.caption(product.package_name)
            st.metric("Interest Rate", fmt_rate(product.interest_rate))
            st.metric("Monthly Payment", fmt_rm(calc.monthly_payment))
            st.dataframe(
                pd.DataFrame({
                    "": ["Total Interest", "Lock-in Period", "Min Income", "Max LTV"],
                    "Value": [fmt_rm(calc.total_interest), f"{product.lock_in_years} years",
                              fmt_rm(product.min_income), f"{product.max_ltv:g}%"],
                }),
                hide_index=True, use_container_width=True,
            )
            st.caption("Key features: " + " • ".join(product.features))

    summary = comparison_summary(selection, catalog)
    if summary and len(results) > 1:
        st.subheader("Comparison Summary")
        s1, s2, s3 = st.columns(3)
        s1.metric("Lowest Interest", fmt_rate(summary.lowest_rate))
        s2.metric("Rate Range", f"{fmt_rate(summary.lowest_rate)} - {fmt_rate(summary.highest_rate)}")
        s3.metric("Comparing", f"{summary.count} Banks")

    st.caption(
        "Rates are indicative and may vary with your profile. BLR = Base Lending Rate, BRR = Base Rate Reference. "
        "Lock-in period is the minimum duration before early settlement is allowed. "
        "Always check with banks for the latest rates and promotions."
    )


tabs = st.tabs(["For Homebuyers", "For Agents"])

with tabs[0]:
    st.header("Plan Your Home Purchase")
    st.write("Calculate your mortgage, understand Malaysia-specific costs, "
             "and make informed decisions about your home purchase.")
    left, right = st.columns(2)
    with left:
        st.subheader("🧮 Mortgage Calculator")
        st.caption("Calculate your monthly payments and total costs")
        mortgage_calculator("buyer")
    with right:
        st.subheader("📈 Affordability Check")
        st.caption("See how much house you can afford based on your income")
        affordability_checker()

    st.divider()
    st.subheader("Compare Bank Packages")
    st.caption("Compare different banks' mortgage offers side by side")
    bank_comparison()

with tabs[1]:
    st.header("Agent Tools & Reports")
    st.write("Generate professional reports and help your clients make informed decisions.")
    c1, c2, c3 = st.columns(3)
    with c1:
        st.subheader("Quick Calculator")
        st.caption("Fast calculations during viewings")
        mortgage_calculator("agent", compact=True)
    with c2:
        st.subheader("Client Reports")
        st.caption("Generate branded PDF reports")
        st.info("Coming Soon")
    with c3:
        st.subheader("WhatsApp Share")
        st.caption("Share calculations instantly")
        st.info("Coming Soon")

st.divider()
st.caption("Built for Malaysia's property market. All calculations are estimates and should be verified with financial institutions.")
