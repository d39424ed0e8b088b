
DISCLAIMER = (
    "This tool simulates month-by-month housing cash flow using a level-payment mortgage, "
    "a simplified PMI rule (removed once the balance reaches 80% of the original loan) and a "
    "constant investment return. Results are estimates only; they ignore taxes, appreciation, "
    "rate adjustments and market volatility. Verify figures with your lender before committing funds."
)

# Down payment sweep, in whole percentage points of the house price.
SWEEP_START_PERCENT = 5
SWEEP_END_PERCENT = 50

PMI_DOWN_PAYMENT_THRESHOLD = 0.20
PMI_REMOVAL_LTV = 0.80

# 0.1 percentage point between swept mortgage rates
DEFAULT_RATE_STEP = 0.001

DEFAULT_INPUTS = {
    "house_price": 340000.0,
    "deposit_cash": 200000.0,
    "closing_costs": 1384.0,
    "mortgage_rate_from": 0.05875,
    "mortgage_rate_to": 0.05875,
    "investment_return_annual": 0.04,
    "monthly_contribution": 1000.0,
    "extra_principal_per_month": 0.0,
    "yearly_property_tax": 1865.0,
    "yearly_home_insurance": 2160.0,
    "forced_down_payment": 68000.0,
    "pmi_rate_annual": 0.0,
    "loan_term_years": 30,
}
