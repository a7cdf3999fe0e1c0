"""
Weighted average cost of capital.

Pure functions: CAPM cost of equity, after-tax cost of debt and market-value
weights. The tax rate comes from a tax policy chosen by the input snapshot.
"""

from fincalc.domain.types import WACCInputs
from fincalc.domain.types import WACCResult
from fincalc.errors import DomainValidationError
from fincalc.scenarios.registry import create_tax_policy
from fincalc.validation import require_finite


def compute_cost_of_equity(
    risk_free_rate: float,
    beta: float,
    equity_risk_premium: float,
) -> float:
  """CAPM: r_e = r_f + beta x ERP."""
  return risk_free_rate + beta * equity_risk_premium


def compute_capital_weights(equity: float, debt: float) -> tuple[float, float]:
  """
  Market-value weights of equity and debt.

  Returns:
    Tuple of (equity_weight, debt_weight); both 0 if total capital is 0
  """
  total = equity + debt
  if total == 0:
    return 0.0, 0.0
  return equity / total, debt / total


def _check_amounts(inputs: WACCInputs) -> tuple[float, float, float]:
  equity = require_finite(inputs.equity_market_value, 'Equity market value')
  debt = require_finite(inputs.interest_bearing_debt, 'Interest-bearing debt')
  interest = require_finite(inputs.interest_expense, 'Interest expense')

  if equity < 0 or debt < 0 or interest < 0:
    raise DomainValidationError(
        'Equity market value, interest-bearing debt and interest expense '
        'cannot be negative.',
        code='negative_value')
  return equity, debt, interest


def _check_capital_structure(equity: float, debt: float,
                             interest: float) -> None:
  if debt == 0 and interest != 0:
    raise DomainValidationError(
        'Interest expense is reported but interest-bearing debt is 0; '
        'please check the inputs.',
        code='interest_without_debt')
  if equity == 0 and debt == 0:
    raise DomainValidationError(
        'Equity market value and debt cannot both be zero.',
        code='zero_capital')


def compute_wacc(inputs: WACCInputs) -> WACCResult:
  """
  Compute WACC and its components.

  Args:
    inputs: WACC input snapshot (rates as decimals)

  Returns:
    WACCResult with cost of debt, cost of equity, weights and WACC

  Raises:
    DomainValidationError: If any input breaks a model rule
  """
  equity, debt, interest = _check_amounts(inputs)
  tax = create_tax_policy(inputs).compute()
  _check_capital_structure(equity, debt, interest)

  beta = require_finite(inputs.beta, 'Beta')
  risk_free_rate = require_finite(inputs.risk_free_rate, 'Risk-free rate')
  erp = require_finite(inputs.equity_risk_premium, 'Equity risk premium')

  tax_rate = tax.value
  cost_of_debt = 0.0 if debt == 0 else interest / debt
  cost_of_debt_after_tax = cost_of_debt * (1.0 - tax_rate)
  cost_of_equity = compute_cost_of_equity(risk_free_rate, beta, erp)

  equity_weight, debt_weight = compute_capital_weights(equity, debt)
  wacc = equity_weight * cost_of_equity + debt_weight * cost_of_debt_after_tax

  return WACCResult(
      cost_of_debt_pre_tax=cost_of_debt,
      cost_of_debt_after_tax=cost_of_debt_after_tax,
      cost_of_equity=cost_of_equity,
      equity_weight=equity_weight,
      debt_weight=debt_weight,
      wacc=wacc,
      tax_rate=tax_rate,
      diag=dict(tax.diag),
  )
