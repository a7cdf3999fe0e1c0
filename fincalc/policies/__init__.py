"""
Policies for turning raw calculator inputs into engine inputs.

Each policy estimates one component of a calculation (growth schedule, tax
rate) and returns both a value and diagnostic information.

To add a new policy:
1. Create a new class inheriting from the appropriate base (e.g., GrowthPolicy)
2. Implement the compute() method returning PolicyOutput
3. Register in scenarios/registry.py

Example:
  class FadingGrowth(GrowthPolicy):
    def compute(self) -> PolicyOutput[List[float]]:
      path = ...  # your schedule
      return PolicyOutput(value=path, diag={'growth_mode': 'fading'})
"""

from fincalc.policies.growth import GrowthPolicy
from fincalc.policies.growth import MultiStageGrowth
from fincalc.policies.growth import SingleStageGrowth
from fincalc.policies.tax import DirectTaxRate
from fincalc.policies.tax import IncomeImpliedTax
from fincalc.policies.tax import TaxPolicy

__all__ = [
  'GrowthPolicy', 'SingleStageGrowth', 'MultiStageGrowth',
  'TaxPolicy', 'IncomeImpliedTax', 'DirectTaxRate',
]
