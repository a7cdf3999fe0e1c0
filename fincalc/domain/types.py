"""
Domain types for the valuation calculators.

These dataclasses provide typed interfaces between the input layer, the
calculation engines and the presentation layer. Inputs are plain snapshots
of what the user typed; results are created fresh on every calculation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


@dataclass
class PolicyOutput(Generic[T]):
  """
  Standard output from any policy.

  Every policy returns both a computed value and diagnostic information
  explaining how the value was computed.

  Attributes:
    value: The computed value (type depends on policy)
    diag: Dictionary of diagnostic information
  """
  value: T
  diag: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GrowthStage:
  """
  A contiguous run of forecast years sharing one growth rate.

  Attributes:
    name: Display name of the stage (e.g., 'High growth')
    years: Number of years in the stage (whole number >= 1)
    growth_rate: Annual growth rate in percent; zero and negative allowed,
      None means the user left it blank
  """
  name: str
  years: int
  growth_rate: Optional[float]

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'GrowthStage':
    """Create from dictionary, tolerating a missing growth rate."""
    return cls(
        name=str(data.get('name', '')),
        years=data.get('years', 0),
        growth_rate=data.get('growth_rate'),
    )


@dataclass
class DCFInputs:
  """
  Snapshot of the DCF input fields.

  Rates are in percent, as typed (10 means 10%).

  Attributes:
    initial_cash_flow: Free cash flow of the base year
    discount_rate: Required return in percent
    terminal_growth_rate: Perpetual growth rate after the forecast, percent
    growth_rate: Single-stage growth rate in percent
    years: Single-stage forecast horizon; ignored in multi-stage mode
    stages: Ordered growth stages; non-empty selects multi-stage mode
    share_count: Shares outstanding, only needed for the per-share value
  """
  initial_cash_flow: float
  discount_rate: float
  terminal_growth_rate: float
  growth_rate: Optional[float] = None
  years: Optional[int] = None
  stages: List[GrowthStage] = field(default_factory=list)
  share_count: Optional[float] = None

  @property
  def growth_mode(self) -> str:
    """Either 'multi' (stages given) or 'single'."""
    return 'multi' if self.stages else 'single'

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'DCFInputs':
    """Create from dictionary, converting nested stage dicts."""
    values = dict(data)
    values['stages'] = [
        s if isinstance(s, GrowthStage) else GrowthStage.from_dict(s)
        for s in values.get('stages') or []
    ]
    return cls(**values)


@dataclass
class YearRecord:
  """
  One projected year of the explicit forecast.

  Attributes:
    year: 1-based year index
    cash_flow: Projected free cash flow for the year
    discount_factor: (1 + r)^year
    present_value: cash_flow / discount_factor
    cumulative_pv: Running sum of present values up to this year
    stage: Stage name in multi-stage mode, else None
  """
  year: int
  cash_flow: float
  discount_factor: float
  present_value: float
  cumulative_pv: float
  stage: Optional[str] = None

  @property
  def label(self) -> str:
    if self.stage:
      return f'Year {self.year} ({self.stage})'
    return f'Year {self.year}'


@dataclass
class TerminalRecord:
  """Gordon growth terminal value, nominal and discounted."""
  terminal_value: float
  present_value: float


@dataclass
class EnterpriseValue:
  """Aggregated DCF value."""
  operating_value: float
  company_value: float
  stock_price: Optional[float] = None


@dataclass
class DCFResult:
  """
  Complete DCF result with diagnostics.

  Attributes:
    records: Yearly records of the explicit forecast
    terminal: Terminal value record
    operating_value: Sum of the yearly present values
    company_value: operating_value + discounted terminal value
    years: Forecast horizon actually used (authoritative in multi-stage mode)
    stock_price: company_value / share_count, when a share count was given
    diag: Diagnostics from the growth policy and the engine
  """
  records: List[YearRecord]
  terminal: TerminalRecord
  operating_value: float
  company_value: float
  years: int
  stock_price: Optional[float] = None
  diag: Dict[str, Any] = field(default_factory=dict)

  @property
  def terminal_value_pv(self) -> float:
    return self.terminal.present_value

  def to_dict(self) -> Dict[str, Any]:
    """Convert aggregate scalars to a flat dictionary."""
    result = {
        'operating_value': self.operating_value,
        'terminal_value': self.terminal.terminal_value,
        'terminal_value_pv': self.terminal.present_value,
        'company_value': self.company_value,
        'stock_price': self.stock_price,
        'years': self.years,
    }
    result.update(self.diag)
    return result


@dataclass
class WACCInputs:
  """
  Snapshot of the WACC input fields.

  Amounts share one currency unit; rates are decimals (0.026 means 2.6%).
  Supplying tax_rate selects the direct tax-rate mode, otherwise the tax
  rate is implied from pretax_income and income_tax_expense.
  """
  equity_market_value: float
  interest_bearing_debt: float
  interest_expense: float
  beta: float
  risk_free_rate: float
  equity_risk_premium: float
  pretax_income: Optional[float] = None
  income_tax_expense: Optional[float] = None
  tax_rate: Optional[float] = None

  @property
  def tax_mode(self) -> str:
    """Either 'direct' (tax_rate given) or 'income'."""
    return 'direct' if self.tax_rate is not None else 'income'

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'WACCInputs':
    return cls(**data)


@dataclass
class WACCResult:
  """
  WACC and its components, all as decimals.

  Attributes:
    cost_of_debt_pre_tax: interest / debt (0 when there is no debt)
    cost_of_debt_after_tax: pre-tax cost of debt x (1 - tax rate)
    cost_of_equity: CAPM cost of equity
    equity_weight: E / (E + D)
    debt_weight: D / (E + D)
    wacc: Weighted average cost of capital
    tax_rate: Tax rate used for the debt shield
    diag: Diagnostics from the tax policy
  """
  cost_of_debt_pre_tax: float
  cost_of_debt_after_tax: float
  cost_of_equity: float
  equity_weight: float
  debt_weight: float
  wacc: float
  tax_rate: float
  diag: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ROICInputs:
  """Snapshot of the ROIC input fields (one currency unit)."""
  operating_profit: float
  interest_expense: float
  total_pretax_profit: float
  income_tax_expense: float
  parent_equity: float
  interest_bearing_debt: float

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'ROICInputs':
    return cls(**data)


class ValueVerdict(Enum):
  """How ROIC compares against the cost of capital."""
  CREATE = 'create'
  DESTROY = 'destroy'
  NEUTRAL = 'neutral'


@dataclass
class ROICComparison:
  """
  ROIC versus WACC classification.

  Attributes:
    verdict: Value creation, destruction or neutrality
    roic_display: ROIC as a percentage string
    wacc_display: WACC as a percentage string
    summary: One-line comparison (e.g., 'ROIC > WACC (12.00% > 8.00%)')
    explanation: What the verdict means
  """
  verdict: ValueVerdict
  roic_display: str
  wacc_display: str
  summary: str
  explanation: str


@dataclass
class ROICResult:
  """
  ROIC and its components.

  Attributes:
    nopat: Net operating profit after tax
    invested_capital: Parent equity + interest-bearing debt
    roic: nopat / invested_capital
    effective_tax_rate: Income tax expense / total pre-tax profit
    comparison: ROIC vs WACC, only when a WACC was available
    diag: Calculation method descriptions
  """
  nopat: float
  invested_capital: float
  roic: float
  effective_tax_rate: float
  comparison: Optional[ROICComparison] = None
  diag: Dict[str, Any] = field(default_factory=dict)
