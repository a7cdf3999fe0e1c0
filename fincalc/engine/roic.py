"""
Return on invested capital.

NOPAT adds interest back to operating profit before applying the effective
tax rate; invested capital is parent equity plus interest-bearing debt.
"""

from typing import Optional

from fincalc.domain.types import ROICComparison
from fincalc.domain.types import ROICInputs
from fincalc.domain.types import ROICResult
from fincalc.domain.types import ValueVerdict
from fincalc.errors import DomainValidationError
from fincalc.validation import require_finite

_EXPLANATIONS = {
    ValueVerdict.CREATE:
        'Creates value: return on investment exceeds the cost of capital',
    ValueVerdict.DESTROY:
        'Destroys value: return on investment is below the cost of capital',
    ValueVerdict.NEUTRAL:
        'Maintains value: return on investment equals the cost of capital',
}

_SIGNS = {
    ValueVerdict.CREATE: '>',
    ValueVerdict.DESTROY: '<',
    ValueVerdict.NEUTRAL: '=',
}


def compute_effective_tax_rate(total_pretax_profit: float,
                               income_tax_expense: float) -> float:
  """Tax expense / pre-tax profit, or 0 when there is no pre-tax profit."""
  if total_pretax_profit > 0:
    return income_tax_expense / total_pretax_profit
  return 0.0


def compare_roic_to_wacc(roic: float, wacc: float) -> ROICComparison:
  """
  Classify ROIC against WACC.

  Args:
    roic: Return on invested capital (decimal)
    wacc: Weighted average cost of capital (decimal)

  Returns:
    ROICComparison with verdict, both percentages and an explanation
  """
  roic_pct = roic * 100
  wacc_pct = wacc * 100

  if roic_pct > wacc_pct:
    verdict = ValueVerdict.CREATE
  elif roic_pct < wacc_pct:
    verdict = ValueVerdict.DESTROY
  else:
    verdict = ValueVerdict.NEUTRAL

  roic_display = f'{roic_pct:.2f}%'
  wacc_display = f'{wacc_pct:.2f}%'
  sign = _SIGNS[verdict]
  return ROICComparison(
      verdict=verdict,
      roic_display=roic_display,
      wacc_display=wacc_display,
      summary=f'ROIC {sign} WACC ({roic_display} {sign} {wacc_display})',
      explanation=_EXPLANATIONS[verdict],
  )


def compute_roic(inputs: ROICInputs,
                 prior_wacc: Optional[float] = None) -> ROICResult:
  """
  Compute ROIC and, when a WACC is known, compare against it.

  Args:
    inputs: ROIC input snapshot
    prior_wacc: WACC from an earlier successful calculation, if any

  Returns:
    ROICResult with NOPAT, invested capital, ROIC and optional comparison

  Raises:
    DomainValidationError: If any input breaks a model rule
  """
  operating_profit = require_finite(inputs.operating_profit,
                                    'Operating profit')
  interest = require_finite(inputs.interest_expense, 'Interest expense')
  total_profit = require_finite(inputs.total_pretax_profit,
                                'Total pre-tax profit')
  tax = require_finite(inputs.income_tax_expense, 'Income tax expense')
  equity = require_finite(inputs.parent_equity, 'Parent equity')
  debt = require_finite(inputs.interest_bearing_debt, 'Interest-bearing debt')

  if operating_profit == 0:
    raise DomainValidationError('Operating profit cannot be 0.',
                                code='zero_operating_profit')
  if equity < 0 or debt < 0:
    raise DomainValidationError(
        'Parent equity and interest-bearing debt cannot be negative.',
        code='negative_value')

  invested_capital = equity + debt
  if invested_capital <= 0:
    raise DomainValidationError(
        'Invested capital (parent equity + interest-bearing debt) must be '
        'greater than 0.',
        code='non_positive_invested_capital')

  tax_rate = compute_effective_tax_rate(total_profit, tax)
  nopat = (operating_profit + interest) * (1.0 - tax_rate)
  roic = nopat / invested_capital

  comparison = None
  if prior_wacc is not None:
    comparison = compare_roic_to_wacc(roic, prior_wacc)

  return ROICResult(
      nopat=nopat,
      invested_capital=invested_capital,
      roic=roic,
      effective_tax_rate=tax_rate,
      comparison=comparison,
      diag={
          'nopat_method': ('(operating profit + interest expense) x '
                           f'(1 - tax rate {tax_rate * 100:.2f}%)'),
          'invested_capital_method':
              'parent equity + interest-bearing debt',
      },
  )
