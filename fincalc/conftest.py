import matplotlib
import pytest

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import GrowthStage
from fincalc.domain.types import ROICInputs
from fincalc.domain.types import WACCInputs

matplotlib.use('Agg')


@pytest.fixture
def single_stage_inputs() -> DCFInputs:
  """1000 base cash flow, 10% growth, 12% discount, 5 years, 3% terminal."""
  return DCFInputs(
      initial_cash_flow=1000.0,
      growth_rate=10.0,
      discount_rate=12.0,
      years=5,
      terminal_growth_rate=3.0,
  )


@pytest.fixture
def multi_stage_inputs() -> DCFInputs:
  """Three years at 15% then two years at 8%."""
  return DCFInputs(
      initial_cash_flow=1000.0,
      discount_rate=12.0,
      terminal_growth_rate=3.0,
      years=10,
      stages=[
          GrowthStage(name='High growth', years=3, growth_rate=15.0),
          GrowthStage(name='Stable', years=2, growth_rate=8.0),
      ],
  )


@pytest.fixture
def wacc_inputs() -> WACCInputs:
  """
  Income-implied tax of 25%.

  r_d = 4000 / 100000 = 4%, after tax 3%
  r_e = 0.026 + 1.1 * 0.06 = 9.2%
  weights 5/6 and 1/6, WACC = 8.1667%
  """
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


@pytest.fixture
def roic_inputs() -> ROICInputs:
  """Annual-report sample with no interest-bearing debt."""
  return ROICInputs(
      operating_profit=11968858.0,
      interest_expense=1447.0,
      total_pretax_profit=11963857.0,
      income_tax_expense=3030385.0,
      parent_equity=23310598.0,
      interest_bearing_debt=0.0,
  )
