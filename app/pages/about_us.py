import streamlit as st

st.set_page_config(page_title="About • MortgageMY", layout="wide")

st.title("📄 About This Project")
st.caption("Version 1.0 — mortgage planning for Malaysian homebuyers and agents")

st.markdown("""
## Project Scope
MortgageMY helps buyers and agents size up a home loan in Malaysia:
- Monthly **repayments**, total interest and a yearly schedule
- The **upfront costs** buyers forget: stamp duty, legal fees, valuation and MRTA
- An **affordability** check against the 35% debt service ratio banks work with
- A side-by-side **comparison** of indicative bank packages

---

## Objectives
1. **Transparency** → every calculator is deterministic and its assumptions live in `config/policy.yaml`.
2. **Speed** → everything recalculates as you type; nothing leaves your browser session.
3. **Privacy** → no inputs are stored.

---

## What This App Is Not
- It’s **not** financial or legal advice.
- Bank rates are **reference figures**, not live quotes.
- Client reports and WhatsApp sharing are **coming soon**.
""")
