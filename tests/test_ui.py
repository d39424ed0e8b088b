import pytest
from streamlit.testing.v1 import AppTest


def inputs_app():
    from ui.inputs import render_inputs

    render_inputs()


def test_percent_inputs_stored_as_fractions():
    at = AppTest.from_function(inputs_app)
    at.run()
    assert at.session_state["inputs"]["mortgage_rate_from"] == pytest.approx(0.05875)
    caption = next(c.value for c in at.caption if c.value.startswith("Deposit Cash Remaining"))
    assert caption == "Deposit Cash Remaining (After Closing Costs): $198,616.00"

    rate_widget = next(w for w in at.number_input if w.label == "Mortgage Rate From %")
    rate_widget.set_value(6.5)
    at.run()
    assert at.session_state["inputs"]["mortgage_rate_from"] == pytest.approx(0.065)


def test_small_percent_entries_stay_percents():
    at = AppTest.from_function(inputs_app)
    at.run()
    pmi_widget = next(w for w in at.number_input if w.label == "Annual PMI Rate %")
    pmi_widget.set_value(0.5)
    at.run()
    assert at.session_state["inputs"]["pmi_rate_annual"] == pytest.approx(0.005)

    pmi_widget = next(w for w in at.number_input if w.label == "Annual PMI Rate %")
    pmi_widget.set_value(1.0)
    at.run()
    assert at.session_state["inputs"]["pmi_rate_annual"] == pytest.approx(0.01)


def test_app_renders_best_strategy():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    assert not at.exception
    assert at.subheader[0].value == "Mortgage Rate: 5.875%"
    best = next(m for m in at.metric if m.label == "Best Down Payment")
    assert best.value == "20%"
    assert any(c.value == "Down Payment: $68,000.00" for c in at.caption)


def test_app_reports_insufficient_closing_cash():
    at = AppTest.from_file("../app.py", default_timeout=30)
    at.run()
    closing = next(w for w in at.number_input if w.label == "Estimated Closing Costs")
    closing.set_value(250000.0)
    at.run()
    assert not at.exception
    assert any("[INSUFFICIENT_CLOSING_CASH]" in e.value for e in at.error)
    assert not any(m.label == "Best Down Payment" for m in at.metric)
