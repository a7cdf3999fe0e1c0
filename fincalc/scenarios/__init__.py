"""Calculator configuration and policy registry."""

from fincalc.scenarios.config import CalculatorConfig
from fincalc.scenarios.registry import create_growth_policy
from fincalc.scenarios.registry import create_tax_policy
from fincalc.scenarios.registry import list_policies
from fincalc.scenarios.registry import POLICY_REGISTRY

__all__ = [
  'CalculatorConfig',
  'POLICY_REGISTRY',
  'create_growth_policy',
  'create_tax_policy',
  'list_policies',
]
