"""
Calculator configuration.

CalculatorConfig is a serializable (JSON-friendly) bundle of the three input
snapshots. It supplies the defaults shown when the calculators first open and
lets a set of inputs be saved and replayed.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
import json
from pathlib import Path
from typing import Any

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import ROICInputs
from fincalc.domain.types import WACCInputs


def _default_dcf() -> DCFInputs:
  return DCFInputs(
      initial_cash_flow=1000.0,
      growth_rate=10.0,
      discount_rate=12.0,
      years=5,
      terminal_growth_rate=3.0,
  )


def _default_wacc() -> WACCInputs:
  return WACCInputs(
      equity_market_value=500000.0,
      interest_bearing_debt=100000.0,
      interest_expense=4000.0,
      pretax_income=80000.0,
      income_tax_expense=20000.0,
      beta=1.1,
      risk_free_rate=0.026,
      equity_risk_premium=0.06,
  )


def _default_roic() -> ROICInputs:
  return ROICInputs(
      operating_profit=11968858.0,
      interest_expense=1447.0,
      total_pretax_profit=11963857.0,
      income_tax_expense=3030385.0,
      parent_equity=23310598.0,
      interest_bearing_debt=0.0,
  )


@dataclass
class CalculatorConfig:
  """
  Inputs for all three calculators.

  Attributes:
    name: Human-readable name of this input set
    dcf: DCF input snapshot (rates in percent)
    wacc: WACC input snapshot (rates as decimals)
    roic: ROIC input snapshot
  """
  name: str = 'default'
  dcf: DCFInputs = field(default_factory=_default_dcf)
  wacc: WACCInputs = field(default_factory=_default_wacc)
  roic: ROICInputs = field(default_factory=_default_roic)

  @classmethod
  def default(cls) -> 'CalculatorConfig':
    """
    Create default configuration.

    Uses:
      - DCF: 1000 base cash flow, 10% growth, 12% discount, 5 years,
        3% terminal growth
      - WACC: beta 1.1, 2.6% risk-free rate, 6% equity risk premium
      - ROIC: sample annual-report figures
    """
    return cls()

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary."""
    return asdict(self)

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'CalculatorConfig':
    """
    Create from dictionary.

    Sections missing from data keep their defaults.
    """
    config = cls(name=data.get('name', 'default'))
    if 'dcf' in data:
      config.dcf = DCFInputs.from_dict(data['dcf'])
    if 'wacc' in data:
      config.wacc = WACCInputs.from_dict(data['wacc'])
    if 'roic' in data:
      config.roic = ROICInputs.from_dict(data['roic'])
    return config

  @classmethod
  def from_json(cls, json_str: str) -> 'CalculatorConfig':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))

  @classmethod
  def from_file(cls, path: Path) -> 'CalculatorConfig':
    """Load from a JSON file."""
    if not path.exists():
      raise FileNotFoundError(f'Config file not found: {path}')
    with open(path, 'r', encoding='utf-8') as f:
      return cls.from_json(f.read())
