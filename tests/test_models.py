import pytest
from pydantic import ValidationError

from downpay.models import StrategyInputs, StrategyResult, StrategyStatus


def test_defaults_match_presets():
    inputs = StrategyInputs()
    assert inputs.house_price == 340000
    assert inputs.mortgage_rate_from == pytest.approx(0.05875)
    assert inputs.deposit_cash_after_closing == 200000 - 1384


def test_percent_fields_accept_human_percent():
    inputs = StrategyInputs(
        mortgage_rate_from=6.5,
        mortgage_rate_to=0.07,
        investment_return_annual=8,
        pmi_rate_annual=0.5,
    )
    assert inputs.mortgage_rate_from == pytest.approx(0.065)
    assert inputs.mortgage_rate_to == pytest.approx(0.07)
    assert inputs.investment_return_annual == pytest.approx(0.08)
    # 1.0 or less is already a fraction
    assert inputs.pmi_rate_annual == pytest.approx(0.5)


def test_money_fields_are_not_percent_normalized():
    inputs = StrategyInputs(extra_principal_per_month=0.5, closing_costs=2.5)
    assert inputs.extra_principal_per_month == 0.5
    assert inputs.closing_costs == 2.5


@pytest.mark.parametrize(
    "field,value",
    [
        ("house_price", -1),
        ("deposit_cash", -100),
        ("mortgage_rate_from", -0.01),
        ("loan_term_years", 0),
        ("monthly_contribution", "lots"),
    ],
)
def test_invalid_inputs_rejected(field, value):
    with pytest.raises(ValidationError):
        StrategyInputs(**{field: value})


def test_strategy_kwargs_and_scenario():
    inputs = StrategyInputs(closing_costs=0, deposit_cash=100000)
    kwargs = inputs.strategy_kwargs(0.06)
    assert kwargs["mortgage_rate_annual"] == 0.06
    assert kwargs["deposit_cash_before_closing"] == 100000
    assert kwargs["forced_down_payment_amount"] == 68000
    scenario = inputs.scenario(0.06, 68000)
    assert scenario.loan_amount == 272000
    assert scenario.invested_amount == 32000


def test_default_result_is_zeroed():
    res = StrategyResult()
    assert res.months_covered == 0
    assert res.payoff_month is None
    assert not res.viable
    data = res.as_dict()
    assert data["status"] == StrategyStatus.NO_VIABLE_STRATEGY.value
    assert set(data) >= {"monthly_draw", "initial_loan_amount", "total_pmi_paid"}
