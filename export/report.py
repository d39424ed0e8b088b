"""Plain text strategy report export."""
from __future__ import annotations
from typing import Any, Dict, List

from downpay.models import StrategyInputs, StrategyResult, StrategyStatus
from downpay.presets import DISCLAIMER
from downpay.rules import evaluate_rules


def format_months(months: int) -> str:
    """Render a month count as ``"N years and M months"``."""
    return f"{months // 12} years and {months % 12} months"


def _money(x: float) -> str:
    return f"${x:,.2f}"


def _input_lines(inputs: StrategyInputs) -> List[str]:
    return [
        "Summary of Inputs:",
        f"House Price: {_money(inputs.house_price)}",
        f"Deposit Cash Available (Before Closing Costs): {_money(inputs.deposit_cash)}",
        f"Estimated Closing Costs: {_money(inputs.closing_costs)}",
        f"Deposit Cash Remaining (After Closing Costs): {_money(inputs.deposit_cash_after_closing)}",
        f"Mortgage Rate Range: {inputs.mortgage_rate_from * 100:.3f}% to {inputs.mortgage_rate_to * 100:.3f}%",
        f"Annual Investment Return: {inputs.investment_return_annual * 100:.2f}%",
        f"Monthly Contribution from Paycheck: {_money(inputs.monthly_contribution)}",
        f"Yearly Property Tax: {_money(inputs.yearly_property_tax)}",
        f"Yearly Home Insurance: {_money(inputs.yearly_home_insurance)}",
        f"Extra Monthly Principal Payment: {_money(inputs.extra_principal_per_month)}",
        "Total Paycheck Contribution Per Month: "
        f"{_money(inputs.monthly_contribution + inputs.extra_principal_per_month)}",
        f"Forced Down Payment Amount: {_money(inputs.forced_down_payment)}",
        f"Annual PMI Rate: {inputs.pmi_rate_annual * 100:.2f}%",
        f"Loan Term: {inputs.loan_term_years} years",
    ]


def _strategy_lines(rate: float, result: StrategyResult) -> List[str]:
    lines = [f"Mortgage Rate: {rate * 100:.3f}%"]
    if result.status == StrategyStatus.INSUFFICIENT_CLOSING_CASH:
        return lines
    if result.status == StrategyStatus.CASH_PURCHASE:
        lines.append(f"Initial Investment: {_money(result.initial_investment_amount)}")
        return lines
    if not result.viable:
        lines += [
            f"Initial Loan Amount: {_money(result.initial_loan_amount)}",
            f"Initial Investment: {_money(result.initial_investment_amount)}",
            f"Mortgage Payment (P&I): {_money(result.monthly_mortgage)}",
            f"Required Monthly Draw (approx): {_money(result.monthly_draw)}",
        ]
        return lines
    lines += [
        f"Best Down Payment: {result.best_down_payment_percent}% ({_money(result.down_payment_amount)})",
        f"Initial Loan Amount: {_money(result.initial_loan_amount)}",
        f"Initial Investment Amount: {_money(result.initial_investment_amount)}",
        f"Monthly Mortgage (P&I): {_money(result.monthly_mortgage)}",
        f"Total Housing Cost Per Month: {_money(result.total_monthly_cost)}",
        f"Monthly Draw from Investment: {_money(result.monthly_draw)}",
        f"Investment Covered for: {format_months(result.months_covered)}",
        f"Total PMI Paid: {_money(result.total_pmi_paid)}",
        f"Remaining Mortgage Balance: {_money(result.remaining_loan_balance)}",
        f"Remaining Investment Balance: {_money(result.remaining_investment_balance)}",
    ]
    if result.payoff_month is not None:
        lines.append(f"Mortgage paid off after {format_months(result.payoff_month)}")
        if result.investment_balance_at_payoff is not None:
            lines.append(
                f"Investment Balance at Mortgage Payoff: {_money(result.investment_balance_at_payoff)}"
            )
    else:
        lines.append("Mortgage not paid off within the loan term.")
    return lines


def build_strategy_report(data: Dict[str, Any]) -> bytes:
    """Build a text report of the inputs and the best strategy per rate.

    ``data`` holds ``inputs`` (a :class:`StrategyInputs`) and ``results``, a
    list of ``(mortgage_rate, StrategyResult)`` pairs.  Each strategy is
    followed by its rule messages.
    """

    inputs = data.get("inputs") or StrategyInputs()
    results = data.get("results", [])
    if not results:
        raise ValueError("at least one strategy result is required")

    lines = _input_lines(inputs)
    for rate, result in results:
        lines.append("")
        lines += _strategy_lines(rate, result)
        for r in evaluate_rules(result, inputs):
            lines.append(f"{r.severity}: [{r.code}] {r.message}")

    lines.append("")
    lines.append(f"Disclaimer: {DISCLAIMER}")
    return "\n".join(lines).encode()
