import streamlit as st
from pydantic import ValidationError

from downpay.models import PERCENT_FIELDS, StrategyInputs
from ui.components import pretty_label

MONEY_FIELDS = [
    ("house_price", "House Price"),
    ("deposit_cash", "Deposit Cash Available"),
    ("closing_costs", "Estimated Closing Costs"),
    ("monthly_contribution", "Monthly Contribution from Paycheck"),
    ("extra_principal_per_month", "Extra Monthly Principal Payment"),
    ("yearly_property_tax", "Yearly Property Tax"),
    ("yearly_home_insurance", "Yearly Home Insurance"),
    ("forced_down_payment", "Forced Down Payment Amount"),
]

PERCENT_LABELS = {
    "mortgage_rate_from": "Mortgage Rate From %",
    "mortgage_rate_to": "Mortgage Rate To %",
    "investment_return_annual": "Annual Investment Return %",
    "pmi_rate_annual": "Annual PMI Rate %",
}


def render_inputs():
    """Strategy inputs validated through ``StrategyInputs``.

    Percent fields are shown as human percents and divided back to fractions
    before validation.  Returns ``None`` while any value is invalid.
    """
    st.session_state.setdefault("inputs", StrategyInputs().model_dump())
    raw = dict(st.session_state["inputs"])
    with st.expander("Purchase & Cash", expanded=True):
        for field, label in MONEY_FIELDS:
            raw[field] = st.number_input(
                label, value=float(raw[field]), min_value=0.0, step=100.0
            )
    with st.expander("Rates & Term", expanded=True):
        for field in PERCENT_FIELDS:
            # The widget is always a human percent, so 0.5 here means 0.5%.
            raw[field] = st.number_input(
                PERCENT_LABELS[field],
                value=float(raw[field]) * 100,
                min_value=0.0,
                max_value=100.0,
                step=0.125,
                format="%.3f",
                help="Enter 6.5 for 6.5% and 0.5 for 0.5%",
            ) / 100
        raw["loan_term_years"] = st.number_input(
            "Loan Term in Years", value=int(raw["loan_term_years"]), min_value=1, step=1
        )
    try:
        inputs = StrategyInputs(**raw)
    except ValidationError as exc:
        for err in exc.errors():
            field = pretty_label(str(err["loc"][0])) if err["loc"] else "Input"
            st.error(f"{field}: {err['msg']}")
        return None
    st.session_state["inputs"] = inputs.model_dump()
    st.caption(
        f"Deposit Cash Remaining (After Closing Costs): ${inputs.deposit_cash_after_closing:,.2f}"
    )
    return inputs
