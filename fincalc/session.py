"""
Calculation session.

The session is the boundary between input handling and the pure engines.
Every calculation reads a fresh input snapshot and returns an independent
outcome; DomainValidationError is caught here and turned into a message, so
rejected inputs never reach aggregation or presentation.

The only state carried between calculations is the last successful WACC,
which the ROIC comparison needs.

Usage:
  from fincalc.session import CalculatorSession
  from fincalc.scenarios.config import CalculatorConfig

  config = CalculatorConfig.default()
  session = CalculatorSession()
  session.calculate_wacc(config.wacc)
  outcome = session.calculate_roic(config.roic)
  if outcome.ok:
    print(outcome.result.comparison.summary)
"""

from dataclasses import dataclass
import logging
from typing import Generic, Optional, TypeVar

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import DCFResult
from fincalc.domain.types import ROICInputs
from fincalc.domain.types import ROICResult
from fincalc.domain.types import WACCInputs
from fincalc.domain.types import WACCResult
from fincalc.engine.dcf import calculate_dcf
from fincalc.engine.roic import compute_roic
from fincalc.engine.wacc import compute_wacc
from fincalc.errors import DomainValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class CalculationOutcome(Generic[T]):
  """
  Result of one calculation: either a result or a user-facing error.

  Attributes:
    result: Engine result when inputs were accepted
    error: Message describing the violated rule when they were not
    error_code: Machine-readable rule name
  """
  result: Optional[T] = None
  error: Optional[str] = None
  error_code: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.error is None and self.result is not None


class CalculatorSession:
  """Runs calculations and remembers the last successful WACC."""

  def __init__(self):
    self.last_wacc: Optional[WACCResult] = None

  def calculate_dcf(self, inputs: DCFInputs) -> CalculationOutcome[DCFResult]:
    try:
      result = calculate_dcf(inputs)
    except DomainValidationError as e:
      logger.warning('DCF inputs rejected (%s): %s', e.code, e)
      return CalculationOutcome(error=str(e), error_code=e.code)

    logger.debug('DCF %s-stage over %d years: company value %.2f',
                 result.diag.get('growth_mode'), result.years,
                 result.company_value)
    return CalculationOutcome(result=result)

  def calculate_wacc(self,
                     inputs: WACCInputs) -> CalculationOutcome[WACCResult]:
    """
    Compute WACC.

    A rejected calculation clears the stored WACC, so a later ROIC
    comparison never uses a value the current inputs no longer support.
    """
    self.last_wacc = None
    try:
      result = compute_wacc(inputs)
    except DomainValidationError as e:
      logger.warning('WACC inputs rejected (%s): %s', e.code, e)
      return CalculationOutcome(error=str(e), error_code=e.code)

    self.last_wacc = result
    logger.debug('WACC %.6f (tax method %s)', result.wacc,
                 result.diag.get('tax_method'))
    return CalculationOutcome(result=result)

  def calculate_roic(self,
                     inputs: ROICInputs) -> CalculationOutcome[ROICResult]:
    """Compute ROIC, comparing against the stored WACC when there is one."""
    prior_wacc = self.last_wacc.wacc if self.last_wacc else None
    try:
      result = compute_roic(inputs, prior_wacc=prior_wacc)
    except DomainValidationError as e:
      logger.warning('ROIC inputs rejected (%s): %s', e.code, e)
      return CalculationOutcome(error=str(e), error_code=e.code)

    if result.comparison is None:
      logger.debug('ROIC %.6f computed without a WACC to compare', result.roic)
    return CalculationOutcome(result=result)
