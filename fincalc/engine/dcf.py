"""
Pure DCF math engine.

This module contains pure functions for DCF calculations. No I/O, no
formatting, just numeric computations. Rates passed to the low-level
functions are decimals; calculate_dcf accepts the percent-based input
snapshot and converts it.

Key functions:
  calculate_dcf: Main entry point, DCFInputs -> DCFResult
  project_cash_flows: Yearly cash flows and present values
  compute_terminal_value: Gordon growth terminal value
  aggregate: Operating value, company value and per-share value
"""

from collections.abc import Sequence
import math
from typing import List, Optional, Tuple

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import DCFResult
from fincalc.domain.types import EnterpriseValue
from fincalc.domain.types import TerminalRecord
from fincalc.domain.types import YearRecord
from fincalc.errors import DomainValidationError
from fincalc.scenarios.registry import create_growth_policy
from fincalc.validation import require_finite
from fincalc.validation import require_positive


def compound_factor(rate: float, periods: int) -> float:
  """
  Return (1 + rate) ** periods, or inf when the power overflows a float.

  Dividing by an infinite factor gives a zero present value, and the
  factor itself renders as a placeholder.
  """
  try:
    return (1.0 + rate)**periods
  except OverflowError:
    return math.inf


def project_cash_flows(
    initial_cash_flow: float,
    growth_path: Sequence[float],
    discount_rate: float,
    stage_labels: Optional[Sequence[Optional[str]]] = None,
) -> Tuple[List[YearRecord], float]:
  """
  Project cash flows over the explicit forecast period.

  Each year grows off the previous year's cash flow at that year's rate, so
  a stage boundary carries the last cash flow into the next stage.

  Args:
    initial_cash_flow: Base-year free cash flow
    growth_path: Sequence of yearly growth rates [g1, g2, ..., gN]
    discount_rate: Required return (r)
    stage_labels: Optional stage name per year

  Returns:
    Tuple of (records, last_cash_flow):
    - records: One YearRecord per forecast year
    - last_cash_flow: Cash flow of the final forecast year
  """
  records: List[YearRecord] = []
  cash_flow = initial_cash_flow
  cumulative_pv = 0.0

  for t, g in enumerate(growth_path, start=1):
    cash_flow *= (1.0 + g)
    discount_factor = compound_factor(discount_rate, t)
    present_value = cash_flow / discount_factor
    cumulative_pv += present_value

    records.append(
        YearRecord(
            year=t,
            cash_flow=cash_flow,
            discount_factor=discount_factor,
            present_value=present_value,
            cumulative_pv=cumulative_pv,
            stage=stage_labels[t - 1] if stage_labels else None,
        ))

  return records, cash_flow


def compute_terminal_value(
    last_cash_flow: float,
    terminal_growth_rate: float,
    discount_rate: float,
    years: int,
) -> Tuple[float, float]:
  """
  Compute terminal value using Gordon Growth Model.

  Args:
    last_cash_flow: Cash flow in the final explicit year
    terminal_growth_rate: Terminal (perpetual) growth rate
    discount_rate: Required return (r)
    years: Number of years to discount back

  Returns:
    Tuple of (terminal_value, terminal_value_pv)

  Raises:
    DomainValidationError: If discount_rate <= terminal_growth_rate
      (model undefined)
  """
  if discount_rate <= terminal_growth_rate:
    raise DomainValidationError(
        'Discount rate must be greater than the terminal growth rate.',
        code='discount_not_above_terminal')

  tv = (last_cash_flow * (1.0 + terminal_growth_rate)) / (
      discount_rate - terminal_growth_rate)
  discounted_tv = tv / compound_factor(discount_rate, years)
  return tv, discounted_tv


def aggregate(
    records: Sequence[YearRecord],
    terminal_value_pv: float,
    share_count: Optional[float] = None,
) -> EnterpriseValue:
  """
  Sum present values into enterprise value.

  Args:
    records: Yearly records of the explicit forecast
    terminal_value_pv: Discounted terminal value
    share_count: Shares outstanding; per-share value only when > 0

  Returns:
    EnterpriseValue with operating value, company value and stock price
  """
  operating_value = sum(r.present_value for r in records)
  company_value = operating_value + terminal_value_pv

  stock_price = None
  if share_count is not None and share_count > 0:
    stock_price = company_value / share_count

  return EnterpriseValue(
      operating_value=operating_value,
      company_value=company_value,
      stock_price=stock_price,
  )


def calculate_dcf(inputs: DCFInputs) -> DCFResult:
  """
  Run the full DCF valuation for one input snapshot.

  Validation happens before any projection: the growth policy checks the
  single-stage horizon or every stage, and the discount rate must exceed
  the terminal growth rate.

  Args:
    inputs: DCF input snapshot (rates in percent)

  Returns:
    DCFResult with yearly records, terminal value and aggregates

  Raises:
    DomainValidationError: If any input breaks a model rule
  """
  initial_cash_flow = require_positive(inputs.initial_cash_flow,
                                       'Initial cash flow')
  discount_rate = require_finite(inputs.discount_rate, 'Discount rate') / 100.0
  g_terminal = require_finite(inputs.terminal_growth_rate,
                              'Terminal growth rate') / 100.0

  if discount_rate <= -1.0:
    raise DomainValidationError('Discount rate must be greater than -100%.',
                                code='discount_rate_out_of_range')
  if discount_rate <= g_terminal:
    raise DomainValidationError(
        'Discount rate must be greater than the terminal growth rate.',
        code='discount_not_above_terminal')

  share_count = None
  if inputs.share_count is not None:
    share_count = require_finite(inputs.share_count, 'Share count')
    if share_count < 0:
      raise DomainValidationError('Share count cannot be negative.',
                                  code='negative_value')

  growth = create_growth_policy(inputs).compute()
  growth_path = growth.value
  n_years = len(growth_path)

  records, last_cash_flow = project_cash_flows(
      initial_cash_flow=initial_cash_flow,
      growth_path=growth_path,
      discount_rate=discount_rate,
      stage_labels=growth.diag.get('stage_labels'),
  )

  tv, tv_pv = compute_terminal_value(
      last_cash_flow=last_cash_flow,
      terminal_growth_rate=g_terminal,
      discount_rate=discount_rate,
      years=n_years,
  )

  value = aggregate(records, tv_pv, share_count)

  diag = {k: v for k, v in growth.diag.items() if k != 'stage_labels'}
  diag.update({
      'discount_rate': discount_rate,
      'terminal_growth_rate': g_terminal,
      'last_cash_flow': last_cash_flow,
  })
  if inputs.growth_mode == 'multi' and inputs.years not in (None, n_years):
    diag['years_overridden_from'] = inputs.years

  return DCFResult(
      records=records,
      terminal=TerminalRecord(terminal_value=tv, present_value=tv_pv),
      operating_value=value.operating_value,
      company_value=value.company_value,
      years=n_years,
      stock_price=value.stock_price,
      diag=diag,
  )
