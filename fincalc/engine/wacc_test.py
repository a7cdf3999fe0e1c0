from dataclasses import replace

import pytest

from fincalc.engine.wacc import compute_capital_weights
from fincalc.engine.wacc import compute_cost_of_equity
from fincalc.engine.wacc import compute_wacc
from fincalc.errors import DomainValidationError


class TestComputeCostOfEquity:
  """Tests for CAPM cost of equity."""

  def test_capm(self):
    """r_e = 0.026 + 1.1 * 0.06 = 0.092."""
    assert compute_cost_of_equity(0.026, 1.1, 0.06) == pytest.approx(0.092)

  def test_zero_beta(self):
    assert compute_cost_of_equity(0.03, 0.0, 0.06) == pytest.approx(0.03)


class TestComputeCapitalWeights:
  """Tests for capital structure weights."""

  @pytest.mark.parametrize('equity,debt', [
      (500000.0, 100000.0),
      (1.0, 0.0),
      (0.0, 7.0),
      (123.456, 789.012),
  ])
  def test_weights_sum_to_one(self, equity, debt):
    equity_weight, debt_weight = compute_capital_weights(equity, debt)

    assert equity_weight + debt_weight == pytest.approx(1.0)

  def test_zero_capital_guard(self):
    assert compute_capital_weights(0.0, 0.0) == (0.0, 0.0)


class TestComputeWACC:
  """Tests for compute_wacc function."""

  def test_income_implied_tax(self, wacc_inputs):
    """Standard WACC with tax implied from income figures.

    Manual calculation:
    t = 20000 / 80000 = 0.25
    r_d = 4000 / 100000 = 0.04, after tax = 0.03
    r_e = 0.026 + 1.1 * 0.06 = 0.092
    w_E = 5/6, w_D = 1/6
    WACC = 5/6 * 0.092 + 1/6 * 0.03 = 0.081667
    """
    result = compute_wacc(wacc_inputs)

    assert result.tax_rate == pytest.approx(0.25)
    assert result.cost_of_debt_pre_tax == pytest.approx(0.04)
    assert result.cost_of_debt_after_tax == pytest.approx(0.03)
    assert result.cost_of_equity == pytest.approx(0.092)
    assert result.equity_weight == pytest.approx(5 / 6)
    assert result.debt_weight == pytest.approx(1 / 6)
    assert result.wacc == pytest.approx(0.081667, abs=1e-6)
    assert result.diag['tax_method'] == 'income_implied'

  def test_direct_tax_rate(self, wacc_inputs):
    """Direct 40% tax rate: after-tax r_d = 0.04 * 0.6 = 0.024."""
    inputs = replace(wacc_inputs,
                     tax_rate=0.40,
                     pretax_income=None,
                     income_tax_expense=None)
    result = compute_wacc(inputs)

    assert result.tax_rate == pytest.approx(0.40)
    assert result.cost_of_debt_after_tax == pytest.approx(0.024)
    assert result.diag['tax_method'] == 'direct'

  def test_weights_sum_to_one(self, wacc_inputs):
    result = compute_wacc(wacc_inputs)

    assert result.equity_weight + result.debt_weight == pytest.approx(1.0)

  def test_all_equity(self, wacc_inputs):
    """No debt and no interest: WACC equals cost of equity."""
    inputs = replace(wacc_inputs, interest_bearing_debt=0.0,
                     interest_expense=0.0)
    result = compute_wacc(inputs)

    assert result.cost_of_debt_pre_tax == 0.0
    assert result.debt_weight == 0.0
    assert result.wacc == pytest.approx(result.cost_of_equity)

  def test_all_debt(self, wacc_inputs):
    inputs = replace(wacc_inputs, equity_market_value=0.0)
    result = compute_wacc(inputs)

    assert result.equity_weight == 0.0
    assert result.wacc == pytest.approx(0.03)

  def test_both_zero_rejected(self, wacc_inputs):
    """E = 0 and D = 0 is rejected."""
    inputs = replace(wacc_inputs,
                     equity_market_value=0.0,
                     interest_bearing_debt=0.0,
                     interest_expense=0.0)

    with pytest.raises(DomainValidationError,
                       match='market value and debt cannot both be zero'):
      compute_wacc(inputs)

  def test_interest_without_debt_rejected(self, wacc_inputs):
    inputs = replace(wacc_inputs, interest_bearing_debt=0.0)

    with pytest.raises(DomainValidationError) as exc_info:
      compute_wacc(inputs)

    assert exc_info.value.code == 'interest_without_debt'

  @pytest.mark.parametrize('field', [
      'equity_market_value',
      'interest_bearing_debt',
      'interest_expense',
  ])
  def test_negative_amounts_rejected(self, wacc_inputs, field):
    inputs = replace(wacc_inputs, **{field: -1.0})

    with pytest.raises(DomainValidationError, match='cannot be negative'):
      compute_wacc(inputs)

  def test_non_positive_pretax_income(self, wacc_inputs):
    with pytest.raises(DomainValidationError, match='Pre-tax income'):
      compute_wacc(replace(wacc_inputs, pretax_income=0.0))

  def test_negative_tax_expense(self, wacc_inputs):
    with pytest.raises(DomainValidationError, match='cannot be negative'):
      compute_wacc(replace(wacc_inputs, income_tax_expense=-1.0))

  def test_tax_not_below_pretax_income(self, wacc_inputs):
    inputs = replace(wacc_inputs, income_tax_expense=80000.0)

    with pytest.raises(DomainValidationError) as exc_info:
      compute_wacc(inputs)

    assert exc_info.value.code == 'tax_not_below_pretax_income'

  @pytest.mark.parametrize('rate', [-0.01, 1.01])
  def test_direct_tax_rate_out_of_range(self, wacc_inputs, rate):
    inputs = replace(wacc_inputs,
                     tax_rate=rate,
                     pretax_income=None,
                     income_tax_expense=None)

    with pytest.raises(DomainValidationError, match='between 0 and 1'):
      compute_wacc(inputs)

  def test_direct_tax_rate_bounds_accepted(self, wacc_inputs):
    for rate in (0.0, 1.0):
      inputs = replace(wacc_inputs,
                       tax_rate=rate,
                       pretax_income=None,
                       income_tax_expense=None)
      result = compute_wacc(inputs)
      assert result.cost_of_debt_after_tax == pytest.approx(0.04 * (1 - rate))

  def test_direct_mode_checks_income_figures(self, wacc_inputs):
    """Income figures supplied with a direct rate must still be consistent."""
    inputs = replace(wacc_inputs, tax_rate=0.25, income_tax_expense=90000.0)

    with pytest.raises(DomainValidationError) as exc_info:
      compute_wacc(inputs)

    assert exc_info.value.code == 'tax_not_below_pretax_income'

  def test_non_finite_beta(self, wacc_inputs):
    with pytest.raises(DomainValidationError, match='Beta'):
      compute_wacc(replace(wacc_inputs, beta=float('nan')))
