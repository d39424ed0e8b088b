from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from downpay.models import StrategyInputs, StrategyResult, StrategyStatus


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(result: StrategyResult, inputs: StrategyInputs) -> List[RuleResult]:
    res: List[RuleResult] = []

    if result.status == StrategyStatus.INSUFFICIENT_CLOSING_CASH:
        res.append(
            RuleResult(
                code="INSUFFICIENT_CLOSING_CASH",
                severity="critical",
                message="Deposit cash is less than the estimated closing costs.",
                context={
                    "deposit_cash": inputs.deposit_cash,
                    "closing_costs": inputs.closing_costs,
                },
            )
        )
        return res

    if result.status == StrategyStatus.CASH_PURCHASE:
        res.append(
            RuleResult(
                code="CASH_PURCHASE",
                severity="info",
                message="House purchased fully with cash. No mortgage required.",
                context={"remaining_investment": result.remaining_investment_balance},
            )
        )
        return res

    if result.status == StrategyStatus.NO_VIABLE_STRATEGY:
        res.append(
            RuleResult(
                code="NO_VIABLE_STRATEGY",
                severity="critical",
                message="No down payment keeps the investment fund solvent for even one month.",
                context={
                    "initial_loan": result.initial_loan_amount,
                    "initial_investment": result.initial_investment_amount,
                    "required_draw": result.monthly_draw,
                },
            )
        )
        return res

    term_months = inputs.loan_term_years * 12
    paid_off_in_cover = (
        result.payoff_month is not None and result.months_covered >= result.payoff_month
    )
    if not paid_off_in_cover and result.months_covered < term_months:
        res.append(
            RuleResult(
                code="FUND_EXHAUSTED_BEFORE_PAYOFF",
                severity="warn",
                message="Investment fund runs out before the mortgage is paid off.",
                context={
                    "months_covered": result.months_covered,
                    "remaining_loan": result.remaining_loan_balance,
                },
            )
        )

    if result.total_pmi_paid > 0:
        res.append(
            RuleResult(
                code="PMI_CHARGED",
                severity="info",
                message="PMI is charged until the balance reaches 80% of the original loan.",
                context={"total_pmi": result.total_pmi_paid},
            )
        )

    if paid_off_in_cover and result.payoff_month < term_months:
        res.append(
            RuleResult(
                code="PAID_OFF_EARLY",
                severity="info",
                message="Extra principal pays the mortgage off before the full term.",
                context={"payoff_month": result.payoff_month},
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
