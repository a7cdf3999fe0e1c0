"""
Policy registry for mapping mode names to policy factories.

The input dataclasses name their mode (DCFInputs.growth_mode,
WACCInputs.tax_mode); the registry turns that name into a configured policy.

To add a new policy:
1. Implement the policy class in the appropriate module
   (e.g., policies/growth.py)
2. Add a factory function here that builds it from the input snapshot
3. Register it in the appropriate registry dictionary

Example:
  # In policies/growth.py
  class FadingGrowth(GrowthPolicy):
    def compute(self) -> PolicyOutput[List[float]]:
      ...

  # In scenarios/registry.py
  GROWTH_POLICIES['fading'] = lambda inputs: FadingGrowth(...)
"""

from collections.abc import Callable
from typing import cast

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import WACCInputs
from fincalc.policies.growth import GrowthPolicy
from fincalc.policies.growth import MultiStageGrowth
from fincalc.policies.growth import SingleStageGrowth
from fincalc.policies.tax import DirectTaxRate
from fincalc.policies.tax import IncomeImpliedTax
from fincalc.policies.tax import TaxPolicy

GROWTH_POLICIES: dict[str, Callable[[DCFInputs], GrowthPolicy]] = {
    'single':
        lambda inputs: SingleStageGrowth(growth_rate=inputs.growth_rate,
                                         years=inputs.years),
    'multi':
        lambda inputs: MultiStageGrowth(stages=inputs.stages),
}

TAX_POLICIES: dict[str, Callable[[WACCInputs], TaxPolicy]] = {
    'income':
        lambda inputs: IncomeImpliedTax(
            pretax_income=inputs.pretax_income,
            income_tax_expense=inputs.income_tax_expense),
    'direct':
        lambda inputs: DirectTaxRate(
            tax_rate=inputs.tax_rate,
            pretax_income=inputs.pretax_income,
            income_tax_expense=inputs.income_tax_expense),
}

POLICY_REGISTRY = {
    'growth': GROWTH_POLICIES,
    'tax': TAX_POLICIES,
}


def create_growth_policy(inputs: DCFInputs) -> GrowthPolicy:
  """
  Create the growth policy matching the inputs' growth mode.

  Raises:
    KeyError: If the growth mode is not found in the registry
  """
  try:
    factory = GROWTH_POLICIES[inputs.growth_mode]
  except KeyError as e:
    raise KeyError(f"Unknown growth mode: '{inputs.growth_mode}'. "
                   f'Available: {list(GROWTH_POLICIES.keys())}') from e
  return factory(inputs)


def create_tax_policy(inputs: WACCInputs) -> TaxPolicy:
  """
  Create the tax policy matching the inputs' tax mode.

  Raises:
    KeyError: If the tax mode is not found in the registry
  """
  try:
    factory = TAX_POLICIES[inputs.tax_mode]
  except KeyError as e:
    raise KeyError(f"Unknown tax mode: '{inputs.tax_mode}'. "
                   f'Available: {list(TAX_POLICIES.keys())}') from e
  return factory(inputs)


def list_policies() -> dict[str, list[str]]:
  """
  List all available policies by category.

  Returns:
    Dictionary mapping category names to list of mode names
  """
  result: dict[str, list[str]] = {}
  for category, policies_dict in POLICY_REGISTRY.items():
    policy_dict = cast(dict[str, object], policies_dict)
    result[category] = list(policy_dict.keys())
  return result
