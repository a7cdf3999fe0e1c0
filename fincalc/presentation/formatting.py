"""
Display formatting for calculator results.

Undefined or non-finite numbers render as PLACEHOLDER instead of 'nan' or
'inf'.
"""

from math import isfinite
from typing import Any, Optional

PLACEHOLDER = '-'


def _as_finite(value: Any) -> Optional[float]:
  if value is None or isinstance(value, bool):
    return None
  try:
    v = float(value)
  except (TypeError, ValueError):
    return None
  return v if isfinite(v) else None


def format_currency(value: Any) -> str:
  """Two fraction digits with thousands separators, e.g. 1,234.50."""
  v = _as_finite(value)
  if v is None:
    return PLACEHOLDER
  return f'{v:,.2f}'


def format_percent(value: Any) -> str:
  """Decimal ratio as a percentage with four fraction digits, e.g. 8.1234%."""
  v = _as_finite(value)
  if v is None:
    return PLACEHOLDER
  return f'{v * 100:.4f}%'


def format_factor(value: Any) -> str:
  """Discount factor with four fraction digits, e.g. 1.1200."""
  v = _as_finite(value)
  if v is None:
    return PLACEHOLDER
  return f'{v:.4f}'
