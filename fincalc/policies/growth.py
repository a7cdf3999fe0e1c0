"""
Growth schedule policies.

These policies turn the user's growth inputs into the sequence of yearly
growth rates [g1, g2, ..., gN] driving the cash-flow projection. Single-stage
and multi-stage modes share the rest of the DCF pipeline; only the policy
differs.

Rates are taken in percent (as typed) and returned as decimals.
"""

from abc import ABC, abstractmethod
from math import isfinite
from typing import List, Optional, Sequence

from fincalc.domain.types import GrowthStage, PolicyOutput
from fincalc.errors import DomainValidationError
from fincalc.validation import require_finite, require_whole_years


class GrowthPolicy(ABC):
  """
  Base class for growth schedule policies.

  Subclasses implement compute() to return the full sequence of growth rates
  for the explicit forecast period. The length of the sequence is the
  forecast horizon.
  """

  @abstractmethod
  def compute(self) -> PolicyOutput[List[float]]:
    """
    Compute growth rate sequence for the explicit forecast period.

    Returns:
      PolicyOutput with list of decimal growth rates, one per year, and
      diagnostics. diag['stage_labels'] holds one label (or None) per year.

    Raises:
      DomainValidationError: If the growth inputs are incomplete or invalid
    """


class SingleStageGrowth(GrowthPolicy):
  """
  Constant growth rate for every forecast year.

  Cash flow in year i is initial x (1 + g)^i.
  """

  def __init__(self, growth_rate: Optional[float], years: Optional[int]):
    """
    Initialize single-stage policy.

    Args:
      growth_rate: Annual growth rate in percent
      years: Forecast horizon in whole years
    """
    self.growth_rate = growth_rate
    self.years = years

  def compute(self) -> PolicyOutput[List[float]]:
    """Return [g] * years."""
    rate = require_finite(self.growth_rate, 'Growth rate') / 100.0
    years = require_whole_years(self.years, 'Forecast years')

    return PolicyOutput(value=[rate] * years,
                        diag={
                            'growth_mode': 'single',
                            'growth_rate': rate,
                            'n_years': years,
                            'stage_labels': [None] * years,
                        })


class MultiStageGrowth(GrowthPolicy):
  """
  Piecewise-constant growth across consecutive stages.

  Each stage contributes stage.years years at its own rate. The projection
  recurrence carries over stage boundaries: the first year of a later stage
  grows off the last cash flow of the previous stage. The total horizon is
  the sum of stage durations and replaces any separately entered horizon.
  """

  def __init__(self, stages: Sequence[GrowthStage]):
    """
    Initialize multi-stage policy.

    Args:
      stages: Ordered growth stages
    """
    self.stages = list(stages)

  def compute(self) -> PolicyOutput[List[float]]:
    """Expand stages into a yearly growth path."""
    if not self.stages:
      raise DomainValidationError('At least one growth stage is required.',
                                  code='no_stages')

    # All stages are checked before any rate is expanded.
    for index, stage in enumerate(self.stages, start=1):
      _check_stage(index, stage)

    growth_rates: List[float] = []
    labels: List[Optional[str]] = []
    layout = []
    for index, stage in enumerate(self.stages, start=1):
      years = int(stage.years)
      rate = float(stage.growth_rate) / 100.0
      name = stage.name or f'Stage {index}'
      growth_rates.extend([rate] * years)
      labels.extend([name] * years)
      layout.append({'name': name, 'years': years, 'growth_rate': rate})

    return PolicyOutput(value=growth_rates,
                        diag={
                            'growth_mode': 'multi',
                            'n_stages': len(self.stages),
                            'n_years': len(growth_rates),
                            'stages': layout,
                            'stage_labels': labels,
                        })


def _check_stage(index: int, stage: GrowthStage) -> None:
  name = stage.name or f'Stage {index}'
  years = stage.years
  if (years is None or isinstance(years, bool) or
      not isinstance(years, (int, float)) or not isfinite(years) or
      years <= 0 or years != int(years)):
    raise DomainValidationError(
        f"Stage '{name}' must last a whole number of years greater than 0.",
        code='invalid_stage_years')

  rate = stage.growth_rate
  if (rate is None or isinstance(rate, bool) or
      not isinstance(rate, (int, float)) or not isfinite(rate)):
    raise DomainValidationError(f"Stage '{name}' is missing a growth rate.",
                                code='missing_stage_growth')
