from downpay.models import StrategyInputs, StrategyResult, StrategyStatus
from downpay.rules import evaluate_rules, has_blocking


def _codes(result, inputs=None):
    return {r.code for r in evaluate_rules(result, inputs or StrategyInputs())}


def test_insufficient_closing_cash_is_blocking():
    res = StrategyResult(status=StrategyStatus.INSUFFICIENT_CLOSING_CASH)
    rules = evaluate_rules(res, StrategyInputs(deposit_cash=1000, closing_costs=5000))
    assert [r.code for r in rules] == ["INSUFFICIENT_CLOSING_CASH"]
    assert rules[0].context == {"deposit_cash": 1000, "closing_costs": 5000}
    assert has_blocking(rules)


def test_no_viable_strategy():
    res = StrategyResult(initial_loan_amount=95000, monthly_draw=600)
    assert _codes(res) == {"NO_VIABLE_STRATEGY"}


def test_cash_purchase_is_informational():
    res = StrategyResult(status=StrategyStatus.CASH_PURCHASE, remaining_investment_balance=60000)
    rules = evaluate_rules(res, StrategyInputs())
    assert [r.code for r in rules] == ["CASH_PURCHASE"]
    assert not has_blocking(rules)


def test_fund_exhausted_and_pmi():
    res = StrategyResult(
        status=StrategyStatus.OK,
        months_covered=120,
        remaining_loan_balance=150000,
        total_pmi_paid=900,
    )
    codes = _codes(res)
    assert "FUND_EXHAUSTED_BEFORE_PAYOFF" in codes
    assert "PMI_CHARGED" in codes
    assert "PAID_OFF_EARLY" not in codes


def test_paid_off_early():
    res = StrategyResult(status=StrategyStatus.OK, months_covered=360, payoff_month=200)
    assert _codes(res) == {"PAID_OFF_EARLY"}


def test_full_term_covered_has_no_warnings():
    res = StrategyResult(status=StrategyStatus.OK, months_covered=360)
    assert _codes(res) == set()


def test_payoff_in_uncovered_month_is_not_early():
    res = StrategyResult(status=StrategyStatus.OK, months_covered=199, payoff_month=200)
    assert _codes(res) == {"FUND_EXHAUSTED_BEFORE_PAYOFF"}
