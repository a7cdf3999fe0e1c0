"""
Tabular views of calculator results.

Each builder returns a pandas DataFrame. Display tables hold formatted
strings; chart_series holds raw floats for plotting.
"""

import logging
from math import isfinite

import pandas as pd

from fincalc.domain.types import DCFResult
from fincalc.domain.types import ROICResult
from fincalc.domain.types import WACCResult
from fincalc.presentation.formatting import format_currency
from fincalc.presentation.formatting import format_factor
from fincalc.presentation.formatting import format_percent
from fincalc.presentation.formatting import PLACEHOLDER

logger = logging.getLogger(__name__)

TERMINAL_LABEL = 'Terminal value'


def dcf_table(result: DCFResult) -> pd.DataFrame:
  """
  Yearly projection table.

  One row per forecast year plus a final terminal-value row that carries the
  nominal terminal value as its cash flow and its discounted value as the
  present value.
  """
  rows = []
  for r in result.records:
    rows.append({
        'period': r.label,
        'cash_flow': format_currency(r.cash_flow),
        'discount_factor': format_factor(r.discount_factor),
        'present_value': format_currency(r.present_value),
        'cumulative_pv': format_currency(r.cumulative_pv),
    })

  rows.append({
      'period': TERMINAL_LABEL,
      'cash_flow': format_currency(result.terminal.terminal_value),
      'discount_factor': PLACEHOLDER,
      'present_value': format_currency(result.terminal.present_value),
      'cumulative_pv': format_currency(result.company_value),
  })
  return pd.DataFrame(rows)


def dcf_summary(result: DCFResult) -> pd.Series:
  """Aggregate DCF scalars, formatted."""
  return pd.Series({
      'Operating value': format_currency(result.operating_value),
      'Terminal value (PV)': format_currency(result.terminal_value_pv),
      'Company value': format_currency(result.company_value),
      'Stock price': format_currency(result.stock_price),
      'Forecast years': str(result.years),
  })


def chart_series(result: DCFResult) -> pd.DataFrame:
  """
  Points for the cash-flow chart: label, cash_flow, present_value.

  The terminal row is excluded. Years with a non-finite cash flow or
  present value are dropped so they never reach the chart.
  """
  points = []
  for r in result.records:
    if not (isfinite(r.cash_flow) and isfinite(r.present_value)):
      logger.warning('Dropping %s from chart: non-finite value', r.label)
      continue
    points.append({
        'label': r.label,
        'cash_flow': r.cash_flow,
        'present_value': r.present_value,
    })
  return pd.DataFrame(points, columns=['label', 'cash_flow', 'present_value'])


def wacc_table(result: WACCResult) -> pd.Series:
  """WACC components and result, formatted as percentages."""
  return pd.Series({
      'Tax rate': format_percent(result.tax_rate),
      'Cost of debt (pre-tax)': format_percent(result.cost_of_debt_pre_tax),
      'Cost of debt (after tax)': format_percent(
          result.cost_of_debt_after_tax),
      'Cost of equity': format_percent(result.cost_of_equity),
      'Equity weight': format_percent(result.equity_weight),
      'Debt weight': format_percent(result.debt_weight),
      'WACC': format_percent(result.wacc),
  })


def roic_table(result: ROICResult) -> pd.Series:
  """ROIC figures, plus the WACC comparison when one was made."""
  values = {
      'Effective tax rate': format_percent(result.effective_tax_rate),
      'NOPAT': format_currency(result.nopat),
      'Invested capital': format_currency(result.invested_capital),
      'ROIC': format_percent(result.roic),
  }
  if result.comparison is not None:
    values['vs WACC'] = result.comparison.summary
    values['Verdict'] = result.comparison.explanation
  return pd.Series(values)
