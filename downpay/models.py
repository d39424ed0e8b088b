from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from downpay.presets import DEFAULT_INPUTS


class StrategyStatus(str, Enum):
    OK = "ok"
    INSUFFICIENT_CLOSING_CASH = "insufficient_closing_cash"
    CASH_PURCHASE = "cash_purchase"
    NO_VIABLE_STRATEGY = "no_viable_strategy"


@dataclass(frozen=True)
class ScenarioInput:
    """One fully specified down payment scenario.

    ``deposit_cash`` is already net of closing costs.  Rates are fractions
    (``0.05875`` for 5.875%).
    """

    house_price: float
    deposit_cash: float
    mortgage_rate_annual: float
    investment_return_annual: float
    user_monthly_contribution: float
    yearly_property_tax: float
    yearly_home_insurance: float
    pmi_rate_annual: float
    extra_principal_per_month: float
    loan_term_years: int
    down_payment_amount: float

    @property
    def loan_amount(self) -> float:
        return self.house_price - self.down_payment_amount

    @property
    def invested_amount(self) -> float:
        return self.deposit_cash - self.down_payment_amount


@dataclass
class SimulationState:
    """Trajectory of a single simulation run, updated once per month."""

    remaining_loan_balance: float
    investment_balance: float
    monthly_mortgage: float
    initial_pmi_monthly: float
    current_pmi_monthly: float
    mortgage_paid_off: bool = False
    payoff_month: Optional[int] = None
    investment_balance_at_payoff: Optional[float] = None
    total_pmi_paid: float = 0.0
    months_covered: int = 0
    trace: Optional[List[Dict[str, Any]]] = None


@dataclass(frozen=True)
class StrategyResult:
    best_down_payment_percent: int = 0
    down_payment_amount: float = 0.0
    monthly_draw: float = 0.0
    months_covered: int = 0
    monthly_mortgage: float = 0.0
    total_monthly_cost: float = 0.0
    remaining_loan_balance: float = 0.0
    remaining_investment_balance: float = 0.0
    payoff_month: Optional[int] = None
    investment_balance_at_payoff: Optional[float] = None
    initial_investment_amount: float = 0.0
    initial_loan_amount: float = 0.0
    total_pmi_paid: float = 0.0
    status: StrategyStatus = StrategyStatus.NO_VIABLE_STRATEGY

    @property
    def viable(self) -> bool:
        return self.status == StrategyStatus.OK

    def as_dict(self) -> Dict[str, Any]:
        return {
            "best_down_payment_percent": self.best_down_payment_percent,
            "down_payment_amount": self.down_payment_amount,
            "monthly_draw": self.monthly_draw,
            "months_covered": self.months_covered,
            "monthly_mortgage": self.monthly_mortgage,
            "total_monthly_cost": self.total_monthly_cost,
            "remaining_loan_balance": self.remaining_loan_balance,
            "remaining_investment_balance": self.remaining_investment_balance,
            "payoff_month": self.payoff_month,
            "investment_balance_at_payoff": self.investment_balance_at_payoff,
            "initial_investment_amount": self.initial_investment_amount,
            "initial_loan_amount": self.initial_loan_amount,
            "total_pmi_paid": self.total_pmi_paid,
            "status": self.status.value,
        }


PERCENT_FIELDS = (
    "mortgage_rate_from",
    "mortgage_rate_to",
    "investment_return_annual",
    "pmi_rate_annual",
)


class StrategyInputs(BaseModel):
    """Raw calculator inputs as entered on the form.

    Percent-style fields accept either a fraction (``0.065``) or a human
    percent (``6.5``); anything above ``1.0`` is treated as a percent.
    """

    house_price: float = Field(DEFAULT_INPUTS["house_price"], ge=0)
    deposit_cash: float = Field(DEFAULT_INPUTS["deposit_cash"], ge=0)
    closing_costs: float = Field(DEFAULT_INPUTS["closing_costs"], ge=0)
    mortgage_rate_from: float = Field(DEFAULT_INPUTS["mortgage_rate_from"], ge=0)
    mortgage_rate_to: float = Field(DEFAULT_INPUTS["mortgage_rate_to"], ge=0)
    investment_return_annual: float = Field(DEFAULT_INPUTS["investment_return_annual"], ge=0)
    monthly_contribution: float = Field(DEFAULT_INPUTS["monthly_contribution"], ge=0)
    extra_principal_per_month: float = Field(DEFAULT_INPUTS["extra_principal_per_month"], ge=0)
    yearly_property_tax: float = Field(DEFAULT_INPUTS["yearly_property_tax"], ge=0)
    yearly_home_insurance: float = Field(DEFAULT_INPUTS["yearly_home_insurance"], ge=0)
    forced_down_payment: float = Field(DEFAULT_INPUTS["forced_down_payment"], ge=0)
    pmi_rate_annual: float = Field(DEFAULT_INPUTS["pmi_rate_annual"], ge=0)
    loan_term_years: int = Field(DEFAULT_INPUTS["loan_term_years"], ge=1)

    @field_validator(*PERCENT_FIELDS)
    @classmethod
    def normalize_percent(cls, v: float) -> float:
        if v > 1.0:
            return v / 100.0
        return v

    @property
    def deposit_cash_after_closing(self) -> float:
        return self.deposit_cash - self.closing_costs

    def scenario(self, mortgage_rate_annual: float, down_payment_amount: float) -> ScenarioInput:
        """Scenario for one rate and down payment, net of closing costs."""
        return ScenarioInput(
            house_price=self.house_price,
            deposit_cash=self.deposit_cash_after_closing,
            mortgage_rate_annual=mortgage_rate_annual,
            investment_return_annual=self.investment_return_annual,
            user_monthly_contribution=self.monthly_contribution,
            yearly_property_tax=self.yearly_property_tax,
            yearly_home_insurance=self.yearly_home_insurance,
            pmi_rate_annual=self.pmi_rate_annual,
            extra_principal_per_month=self.extra_principal_per_month,
            loan_term_years=self.loan_term_years,
            down_payment_amount=down_payment_amount,
        )

    def strategy_kwargs(self, mortgage_rate_annual: float) -> Dict[str, Any]:
        """Keyword arguments for ``evaluate_strategies`` at one mortgage rate."""
        return {
            "house_price": self.house_price,
            "deposit_cash_before_closing": self.deposit_cash,
            "closing_costs": self.closing_costs,
            "mortgage_rate_annual": mortgage_rate_annual,
            "investment_return_annual": self.investment_return_annual,
            "user_monthly_contribution": self.monthly_contribution,
            "yearly_property_tax": self.yearly_property_tax,
            "yearly_home_insurance": self.yearly_home_insurance,
            "pmi_rate_annual": self.pmi_rate_annual,
            "extra_principal_per_month": self.extra_principal_per_month,
            "forced_down_payment_amount": self.forced_down_payment,
            "loan_term_years": self.loan_term_years,
        }
