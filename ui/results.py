import streamlit as st

from downpay.calculators import amortization_schedule
from downpay.rules import evaluate_rules
from export.report import format_months
from ui.components import money, pretty_label


def render_rules(result, inputs):
    for r in evaluate_rules(result, inputs):
        if r.severity == "critical":
            st.error(f"[{r.code}] {r.message}")
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")


def render_strategy(rate, result, inputs):
    """Render the best strategy found at one mortgage rate."""
    st.subheader(f"Mortgage Rate: {rate * 100:.3f}%")
    if result.viable:
        cols = st.columns(4)
        cols[0].metric("Best Down Payment", f"{result.best_down_payment_percent}%")
        cols[1].metric("Monthly Draw", money(result.monthly_draw))
        cols[2].metric("Total Monthly Cost", money(result.total_monthly_cost))
        cols[3].metric("Months Covered", result.months_covered)
        st.caption(f"Down Payment: {money(result.down_payment_amount)}")
        st.caption(
            f"Initial Loan: {money(result.initial_loan_amount)} • "
            f"Initial Investment: {money(result.initial_investment_amount)}"
        )
        st.caption(f"Monthly Mortgage (P&I): {money(result.monthly_mortgage)}")
        st.caption(f"Investment Covered for: {format_months(result.months_covered)}")
        st.caption(f"Total PMI Paid: {money(result.total_pmi_paid)}")
        st.caption(
            f"Remaining Mortgage Balance: {money(result.remaining_loan_balance)} • "
            f"Remaining Investment Balance: {money(result.remaining_investment_balance)}"
        )
        if result.payoff_month is not None:
            st.caption(f"Mortgage paid off after {format_months(result.payoff_month)}")
        with st.expander("Monthly schedule"):
            scenario = inputs.scenario(rate, result.down_payment_amount)
            st.dataframe(amortization_schedule(scenario), hide_index=True)
    elif result.initial_loan_amount > 0:
        st.caption(
            f"Initial Loan: {money(result.initial_loan_amount)} • "
            f"Initial Investment: {money(result.initial_investment_amount)}"
        )
        st.caption(f"Required Monthly Draw (approx): {money(result.monthly_draw)}")
    render_rules(result, inputs)


def render_sweep_table(df):
    """Compare the best strategy across all swept mortgage rates."""
    st.subheader("Rate Comparison")
    view = df.copy()
    view["mortgage_rate"] = view["mortgage_rate"] * 100
    view["down_payment_amount"] = view["down_payment_amount"].round(2)
    st.dataframe(view.rename(columns=pretty_label), hide_index=True)
