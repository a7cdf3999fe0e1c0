"""
Input checks shared by the calculation engines.

Each helper raises DomainValidationError with a rule code when its check
fails and returns the value unchanged otherwise.
"""

from math import isfinite
from typing import Optional

from fincalc.errors import DomainValidationError


def require_finite(value: Optional[float], name: str) -> float:
  """Reject missing, NaN and infinite values."""
  if value is None:
    raise DomainValidationError(f'{name} is required.', code='missing_value')
  if isinstance(value, bool) or not isinstance(value, (int, float)):
    raise DomainValidationError(f'{name} must be a number, got: {value!r}',
                                code='not_a_number')
  if not isfinite(value):
    raise DomainValidationError(f'{name} must be finite, got: {value}',
                                code='not_finite')
  return float(value)


def require_non_negative(value: Optional[float], name: str) -> float:
  value = require_finite(value, name)
  if value < 0:
    raise DomainValidationError(f'{name} cannot be negative.',
                                code='negative_value')
  return value


def require_positive(value: Optional[float], name: str) -> float:
  value = require_finite(value, name)
  if value <= 0:
    raise DomainValidationError(f'{name} must be greater than 0.',
                                code='non_positive_value')
  return value


def require_whole_years(value: Optional[float], name: str) -> int:
  """Accept positive whole numbers (3 or 3.0), reject 0, 2.5 and None."""
  value = require_finite(value, name)
  if value < 1 or value != int(value):
    raise DomainValidationError(
        f'{name} must be a whole number of years >= 1, got: {value:g}',
        code='invalid_years')
  return int(value)
