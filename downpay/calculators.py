from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Iterator, List, Optional, Tuple

import pandas as pd

from downpay.models import (
    ScenarioInput,
    SimulationState,
    StrategyInputs,
    StrategyResult,
    StrategyStatus,
)
from downpay.presets import (
    DEFAULT_RATE_STEP,
    PMI_DOWN_PAYMENT_THRESHOLD,
    PMI_REMOVAL_LTV,
    SWEEP_END_PERCENT,
    SWEEP_START_PERCENT,
)

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = [
    "Month",
    "Interest",
    "Principal",
    "ExtraPrincipal",
    "PMI",
    "HousingCost",
    "Draw",
    "LoanBalance",
    "InvestmentBalance",
]

# (reported percent, scenario, finished simulation)
Candidate = Tuple[int, ScenarioInput, SimulationState]


def monthly_payment(principal, annual_rate, term_years):
    """Calculate the level monthly payment that fully amortizes a loan.

    ``annual_rate`` is a fraction (``0.065`` for 6.5%).  A zero rate falls
    back to straight-line repayment of ``principal / n``.
    """

    n = int(term_years * 12)
    r = annual_rate / 12
    if r == 0:
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def monthly_investment_return(annual_return):
    """Monthly rate that compounds to ``annual_return`` over twelve months."""

    return (1 + annual_return) ** (1 / 12) - 1


def initial_pmi_monthly(scenario: ScenarioInput) -> float:
    """Monthly PMI charged from the first month, or ``0`` with 20%+ down."""

    if scenario.down_payment_amount / scenario.house_price < PMI_DOWN_PAYMENT_THRESHOLD:
        return scenario.loan_amount * scenario.pmi_rate_annual / 12
    return 0.0


def simulate(scenario: ScenarioInput, trace: bool = False) -> SimulationState:
    """Run the month-by-month cash flow for one down payment scenario.

    Each month the investment fund grows first, then the mortgage is
    amortized (with optional extra principal and PMI removal at 80% of the
    original loan), and finally the gap between housing cost and the
    user's contribution is drawn from the fund.  The run stops on the first
    month the fund cannot cover the draw; that month is not counted.

    The caller guarantees ``scenario.loan_amount > 0`` and a positive term.
    """

    loan_amount = scenario.loan_amount
    monthly_rate = scenario.mortgage_rate_annual / 12
    loan_term_months = scenario.loan_term_years * 12
    growth = 1 + monthly_investment_return(scenario.investment_return_annual)
    monthly_tax = scenario.yearly_property_tax / 12
    monthly_insurance = scenario.yearly_home_insurance / 12
    payment = monthly_payment(loan_amount, scenario.mortgage_rate_annual, scenario.loan_term_years)
    pmi = initial_pmi_monthly(scenario)

    state = SimulationState(
        remaining_loan_balance=loan_amount,
        investment_balance=scenario.invested_amount,
        monthly_mortgage=payment,
        initial_pmi_monthly=pmi,
        current_pmi_monthly=pmi,
        trace=[] if trace else None,
    )

    for month in range(loan_term_months):
        state.investment_balance *= growth

        interest = principal = extra = 0.0
        if not state.mortgage_paid_off:
            interest = state.remaining_loan_balance * monthly_rate
            principal = min(payment - interest, state.remaining_loan_balance)
            state.remaining_loan_balance -= principal
            if state.remaining_loan_balance > 0:
                extra = min(scenario.extra_principal_per_month, state.remaining_loan_balance)
                state.remaining_loan_balance -= extra

            if state.remaining_loan_balance <= 0:
                state.mortgage_paid_off = True
                state.remaining_loan_balance = 0.0
                if state.payoff_month is None:
                    state.payoff_month = month + 1

            # LTV against the original loan amount; appreciation is ignored.
            if (
                state.current_pmi_monthly > 0
                and state.remaining_loan_balance / loan_amount <= PMI_REMOVAL_LTV
            ):
                state.current_pmi_monthly = 0.0
            state.total_pmi_paid += state.current_pmi_monthly

        housing_cost = monthly_tax + monthly_insurance
        if not state.mortgage_paid_off:
            housing_cost += payment + state.current_pmi_monthly

        draw = housing_cost - scenario.user_monthly_contribution
        if draw > state.investment_balance:
            break

        state.investment_balance -= draw
        state.months_covered += 1
        if state.payoff_month == month + 1:
            state.investment_balance_at_payoff = state.investment_balance

        if state.trace is not None:
            state.trace.append(
                {
                    "Month": month + 1,
                    "Interest": interest,
                    "Principal": principal,
                    "ExtraPrincipal": extra,
                    "PMI": 0.0 if state.mortgage_paid_off else state.current_pmi_monthly,
                    "HousingCost": housing_cost,
                    "Draw": draw,
                    "LoanBalance": state.remaining_loan_balance,
                    "InvestmentBalance": state.investment_balance,
                }
            )

    return state


def amortization_schedule(scenario: ScenarioInput) -> pd.DataFrame:
    """Month-by-month trajectory for the months the investment fund covers."""

    state = simulate(scenario, trace=True)
    if not state.trace:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)
    return pd.DataFrame(state.trace, columns=SCHEDULE_COLUMNS)


def _reported_percent(amount, house_price) -> int:
    if house_price <= 0:
        return 0
    return int(round(amount / house_price * 100))


def down_payment_candidates(house_price, forced_down_payment_amount=0.0) -> List[Tuple[int, float]]:
    """Return ``(percent, down payment)`` pairs to evaluate, in order.

    A forced amount collapses the sweep to one candidate; its percent is only
    used for reporting and the amount itself is simulated verbatim.
    """

    if forced_down_payment_amount > 0:
        return [
            (
                _reported_percent(forced_down_payment_amount, house_price),
                forced_down_payment_amount,
            )
        ]
    return [
        (percent, house_price * (percent / 100.0))
        for percent in range(SWEEP_START_PERCENT, SWEEP_END_PERCENT + 1)
    ]


def _keep_better(best: Optional[Candidate], candidate: Candidate) -> Optional[Candidate]:
    best_months = -1 if best is None else best[2].months_covered
    if candidate[2].months_covered > best_months:
        logger.debug(
            "New best down payment %s%% covers %s months",
            candidate[0],
            candidate[2].months_covered,
        )
        return candidate
    return best


def _strategy_result(candidate: Candidate) -> StrategyResult:
    percent, scenario, state = candidate
    # Month-one economics, with PMI as charged before any removal.
    base_cost = (
        state.monthly_mortgage
        + scenario.yearly_property_tax / 12
        + scenario.yearly_home_insurance / 12
        + state.initial_pmi_monthly
    )
    at_payoff = state.investment_balance_at_payoff
    return StrategyResult(
        best_down_payment_percent=percent,
        # Unrounded so the schedule view replays the simulated scenario.
        down_payment_amount=scenario.down_payment_amount,
        monthly_draw=round(base_cost - scenario.user_monthly_contribution, 2),
        months_covered=state.months_covered,
        monthly_mortgage=round(state.monthly_mortgage, 2),
        total_monthly_cost=round(base_cost, 2),
        remaining_loan_balance=round(state.remaining_loan_balance, 2),
        remaining_investment_balance=round(state.investment_balance, 2),
        payoff_month=state.payoff_month,
        investment_balance_at_payoff=None if at_payoff is None else round(at_payoff, 2),
        initial_investment_amount=round(scenario.invested_amount, 2),
        initial_loan_amount=round(scenario.loan_amount, 2),
        total_pmi_paid=round(state.total_pmi_paid, 2),
        status=StrategyStatus.OK if state.months_covered > 0 else StrategyStatus.NO_VIABLE_STRATEGY,
    )


def search_strategies(
    house_price,
    deposit_cash,
    mortgage_rate_annual,
    investment_return_annual,
    user_monthly_contribution,
    yearly_property_tax,
    yearly_home_insurance,
    pmi_rate_annual,
    extra_principal_per_month=0.0,
    forced_down_payment_amount=0.0,
    loan_term_years=30,
) -> StrategyResult:
    """Find the down payment that keeps the investment fund solvent longest.

    ``deposit_cash`` must already be net of closing costs.  Candidates are
    ranked by months covered only; the first candidate wins ties.
    """

    if deposit_cash < 0:
        logger.info("Deposit cash %.2f is negative after closing costs", deposit_cash)
        return StrategyResult(status=StrategyStatus.INSUFFICIENT_CLOSING_CASH)

    candidates = down_payment_candidates(house_price, forced_down_payment_amount)
    logger.debug(
        "Evaluating %s down payment candidates at %.4f%% mortgage rate",
        len(candidates),
        mortgage_rate_annual * 100,
    )

    def simulated() -> Iterator[Candidate]:
        for percent, down_payment in candidates:
            if down_payment > deposit_cash:
                logger.debug("Skipping %s%%: down payment exceeds deposit cash", percent)
                continue
            scenario = ScenarioInput(
                house_price=house_price,
                deposit_cash=deposit_cash,
                mortgage_rate_annual=mortgage_rate_annual,
                investment_return_annual=investment_return_annual,
                user_monthly_contribution=user_monthly_contribution,
                yearly_property_tax=yearly_property_tax,
                yearly_home_insurance=yearly_home_insurance,
                pmi_rate_annual=pmi_rate_annual,
                extra_principal_per_month=extra_principal_per_month,
                loan_term_years=loan_term_years,
                down_payment_amount=down_payment,
            )
            if scenario.loan_amount <= 0:
                logger.debug("Skipping %s%%: no mortgage required", percent)
                continue
            yield percent, scenario, simulate(scenario)

    best = reduce(_keep_better, simulated(), None)
    if best is not None:
        return _strategy_result(best)

    forced = forced_down_payment_amount
    if 0 < forced <= deposit_cash and forced >= house_price:
        logger.info("Forced down payment %.2f buys the house outright", forced)
        leftover = round(deposit_cash - forced, 2)
        return StrategyResult(
            best_down_payment_percent=_reported_percent(forced, house_price),
            down_payment_amount=forced,
            initial_investment_amount=leftover,
            remaining_investment_balance=leftover,
            status=StrategyStatus.CASH_PURCHASE,
        )
    logger.info("No down payment candidate could be simulated")
    return StrategyResult(status=StrategyStatus.NO_VIABLE_STRATEGY)


def evaluate_strategies(
    house_price,
    deposit_cash_before_closing,
    closing_costs,
    mortgage_rate_annual,
    investment_return_annual,
    user_monthly_contribution,
    yearly_property_tax,
    yearly_home_insurance,
    pmi_rate_annual,
    extra_principal_per_month=0.0,
    forced_down_payment_amount=0.0,
    loan_term_years=30,
) -> StrategyResult:
    """Deduct closing costs from available cash, then search strategies.

    All rates are fractions; normalizing human percents is the caller's job.
    """

    deposit_cash = deposit_cash_before_closing - closing_costs
    if deposit_cash < 0:
        logger.info(
            "Closing costs %.2f exceed deposit cash %.2f",
            closing_costs,
            deposit_cash_before_closing,
        )
        return StrategyResult(status=StrategyStatus.INSUFFICIENT_CLOSING_CASH)
    return search_strategies(
        house_price,
        deposit_cash,
        mortgage_rate_annual,
        investment_return_annual,
        user_monthly_contribution,
        yearly_property_tax,
        yearly_home_insurance,
        pmi_rate_annual,
        extra_principal_per_month=extra_principal_per_month,
        forced_down_payment_amount=forced_down_payment_amount,
        loan_term_years=loan_term_years,
    )


def mortgage_rates(rate_from, rate_to, step=DEFAULT_RATE_STEP) -> List[float]:
    """Inclusive list of rates from ``rate_from`` to ``rate_to``.

    Rates are built by index so the end point is not lost to float drift.
    A ``rate_to`` below ``rate_from`` yields just ``rate_from``.
    """

    if step <= 0:
        raise ValueError("step must be positive")
    # Never step past rate_to; the epsilon keeps an on-step end point.
    count = max(0, int(math.floor((rate_to - rate_from) / step + 1e-9)))
    return [round(rate_from + i * step, 10) for i in range(count + 1)]


def sweep_mortgage_rates(
    inputs: StrategyInputs, step=DEFAULT_RATE_STEP
) -> List[Tuple[float, StrategyResult]]:
    """Evaluate the best strategy at every rate in the input's rate range."""

    return [
        (rate, evaluate_strategies(**inputs.strategy_kwargs(rate)))
        for rate in mortgage_rates(inputs.mortgage_rate_from, inputs.mortgage_rate_to, step)
    ]


def results_frame(results: List[Tuple[float, StrategyResult]]) -> pd.DataFrame:
    """Tabulate ``(rate, result)`` pairs, one row per mortgage rate."""

    rows = [{"mortgage_rate": rate, **result.as_dict()} for rate, result in results]
    return pd.DataFrame(rows)
