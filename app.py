import streamlit as st

from downpay import __version__
from downpay.calculators import results_frame, sweep_mortgage_rates
from downpay.presets import DISCLAIMER
from export.report import build_strategy_report
from ui.inputs import render_inputs
from ui.results import render_sweep_table, render_strategy


def render_exports(inputs, results):
    st.download_button(
        "Download Report",
        data=build_strategy_report({"inputs": inputs, "results": results}),
        file_name="down_payment_strategy.txt",
        mime="text/plain",
    )


def main():
    st.title("MORTGAGE DOWN PAYMENT STRATEGY CALCULATOR")
    st.caption(f"Month-by-month cash flow • Investment drawdown • PMI removal • v{__version__}")

    inputs = render_inputs()
    if inputs is None:
        st.stop()

    results = sweep_mortgage_rates(inputs)
    for rate, result in results:
        render_strategy(rate, result, inputs)
    if len(results) > 1:
        render_sweep_table(results_frame(results))
    render_exports(inputs, results)
    st.caption(DISCLAIMER)


if __name__ == "__main__":
    main()
