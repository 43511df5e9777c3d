import streamlit as st

from tools.policy import load_policy

st.set_page_config(page_title="Methodology • MortgageMY", layout="wide")
st.title("🧩 Methodology")
st.caption("How each calculator turns your inputs into figures")

policy = load_policy()
dsr_cap = float(policy["dsr_cap"]) * 100
financing = float(policy["financing_ratio"]) * 100
excellent = float(policy["dsr_bands"]["excellent"])
good = float(policy["dsr_bands"]["good"])

st.markdown("""
## Architecture Overview
Every number on the main page comes from a small set of deterministic calculators:

1. **Amortization** (`tools/calc_mortgage.py`): level monthly payment, total paid, total interest.
2. **Transaction costs** (`tools/calc_costs.py`): stamp duty, legal fees, valuation fee, MRTA premium.
3. **Affordability** (`tools/calc_afford.py`): maximum loan under the DSR cap and the property it buys.
4. **Bank comparison** (`tools/bank_compare.py`): amortization across the reference bank packages.

Inputs are free text. Anything that is empty or not a number counts as **0**, and a calculator
that has nothing meaningful to show stays empty rather than showing a zero.
""")

st.markdown("---")
st.markdown("## Formulas")

st.markdown("### 1) Monthly payment")
st.latex(r"M = P \cdot \frac{r(1+r)^n}{(1+r)^n - 1},\quad r = \frac{\text{rate}}{100 \times 12},\quad n = 12 \times \text{years}")
st.markdown("""
- Total payment = `M × n`; total interest = total payment − `P`.
- The mortgage calculator needs a rate above 0%. The bank comparison treats a 0% package as
  straight-line repayment (`P / n`, no interest).
- Figures are rounded to whole ringgit only when displayed.
""")

st.markdown("### 2) Upfront costs")
st.markdown("""
| Item | Rule |
|---|---|
| Stamp duty | 1% up to RM100k, 2% to RM500k, 3% to RM1m, 4% above (each rate on its own slice) |
| Legal fees | RM1,000 + 1% up to RM150k, 0.8% to RM1m, 0.7% above; minimum RM500 |
| Valuation fee | 0.25% of property value, capped at RM2,500 |
| MRTA | 0.6% of the loan amount |
""")

st.markdown("### 3) Affordability")
st.latex(r"L_{max} = A \cdot \frac{(1+r)^n - 1}{r(1+r)^n},\quad A = \text{income} \times \text{DSR cap} - \text{commitments}")
st.markdown(f"""
- DSR cap: **{dsr_cap:g}%** of gross monthly income. If commitments already use it up, the maximum loan is 0
  and the DSR shown is commitments ÷ income.
- Max property value = `L_max ÷ {financing / 100:g}` ({financing:g}% financing, so a {100 - financing:g}% down payment).
- DSR bands: ≤{excellent:g}% **Excellent**, ≤{good:g}% **Good**, above **High Risk**.
""")

st.markdown("### 4) Bank comparison")
st.markdown(f"""
- Up to **{int(policy['max_compare'])}** packages at a time. Extra picks are ignored until one is removed.
- Every selected package sharing the lowest rate is flagged **Best Rate**.
""")

st.markdown("---")
st.header("Data Flow")
st.graphviz_chart("""
digraph Flow {
  graph [rankdir=LR, fontsize=10];
  node [shape=box, style="rounded,filled", fillcolor="#eef6ff"];

  Input[label="Form text\\n(amounts, rate, tenure)", fillcolor="#e8fff2"];
  Parse[label="parse_number\\n(blank/invalid -> 0)"];
  Policy[label="config/policy.yaml\\nconfig/banks.yaml", fillcolor="#fff7e6"];
  Engines[label="Calculators\\n(amortization, costs,\\naffordability, comparison)"];
  Format[label="fmt_rm / fmt_pct"];
  UI[label="Cards & charts", fillcolor="#e8fff2"];

  Input -> Parse -> Engines -> Format -> UI;
  Policy -> Engines;
}
""")

st.markdown("""
---

## Validation
- Unit tests cover the annuity maths, bracket boundaries, the DSR branches and the selection cap (`pytest`).
- Policy figures live in YAML so they can be updated without touching the calculators.
""")
