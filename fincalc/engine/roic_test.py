from dataclasses import replace

import pytest

from fincalc.domain.types import ValueVerdict
from fincalc.engine.roic import compare_roic_to_wacc
from fincalc.engine.roic import compute_effective_tax_rate
from fincalc.engine.roic import compute_roic
from fincalc.errors import DomainValidationError


class TestComputeEffectiveTaxRate:

  def test_normal_case(self):
    assert compute_effective_tax_rate(100.0, 25.0) == pytest.approx(0.25)

  def test_no_pretax_profit(self):
    """Loss-making year falls back to a zero tax rate."""
    assert compute_effective_tax_rate(-100.0, 25.0) == 0.0
    assert compute_effective_tax_rate(0.0, 25.0) == 0.0


class TestCompareRoicToWacc:
  """Tests for compare_roic_to_wacc function."""

  def test_creates_value(self):
    comparison = compare_roic_to_wacc(0.12, 0.08)

    assert comparison.verdict == ValueVerdict.CREATE
    assert comparison.summary == 'ROIC > WACC (12.00% > 8.00%)'
    assert comparison.roic_display == '12.00%'
    assert comparison.wacc_display == '8.00%'
    assert 'Creates value' in comparison.explanation

  def test_destroys_value(self):
    comparison = compare_roic_to_wacc(0.05, 0.08)

    assert comparison.verdict == ValueVerdict.DESTROY
    assert comparison.summary == 'ROIC < WACC (5.00% < 8.00%)'

  def test_neutral(self):
    comparison = compare_roic_to_wacc(0.08, 0.08)

    assert comparison.verdict == ValueVerdict.NEUTRAL
    assert comparison.summary == 'ROIC = WACC (8.00% = 8.00%)'


class TestComputeROIC:
  """Tests for compute_roic function."""

  def test_sample_company(self, roic_inputs):
    """Annual-report sample.

    Manual calculation:
    t = 3030385 / 11963857 = 0.2533
    NOPAT = (11968858 + 1447) * (1 - 0.2533) = 8,938,288
    IC = 23310598 + 0 = 23310598
    ROIC = 0.3834
    """
    result = compute_roic(roic_inputs)

    expected_rate = 3030385 / 11963857
    expected_nopat = (11968858 + 1447) * (1 - expected_rate)

    assert result.effective_tax_rate == pytest.approx(0.2533, abs=1e-4)
    assert result.nopat == pytest.approx(expected_nopat, rel=1e-12)
    assert result.nopat == pytest.approx(8.938e6, rel=1e-3)
    assert result.invested_capital == 23310598.0
    assert result.roic == pytest.approx(0.3834, abs=1e-4)
    assert result.comparison is None

  def test_roic_is_nopat_over_invested_capital(self, roic_inputs):
    inputs = replace(roic_inputs, interest_bearing_debt=5000000.0)
    result = compute_roic(inputs)

    assert result.roic == result.nopat / result.invested_capital
    assert result.invested_capital == 23310598.0 + 5000000.0

  def test_comparison_with_prior_wacc(self, roic_inputs):
    result = compute_roic(roic_inputs, prior_wacc=0.0817)

    assert result.comparison is not None
    assert result.comparison.verdict == ValueVerdict.CREATE

  def test_comparison_matches_sign(self, roic_inputs):
    result = compute_roic(roic_inputs, prior_wacc=0.50)

    assert result.roic < 0.50
    assert result.comparison.verdict == ValueVerdict.DESTROY

  def test_loss_year_uses_zero_tax(self, roic_inputs):
    inputs = replace(roic_inputs, total_pretax_profit=-10.0)
    result = compute_roic(inputs)

    assert result.effective_tax_rate == 0.0
    assert result.nopat == pytest.approx(11968858 + 1447)

  def test_method_descriptions(self, roic_inputs):
    result = compute_roic(roic_inputs)

    assert '25.33%' in result.diag['nopat_method']
    assert result.diag['invested_capital_method'] == (
        'parent equity + interest-bearing debt')

  def test_zero_operating_profit(self, roic_inputs):
    with pytest.raises(DomainValidationError) as exc_info:
      compute_roic(replace(roic_inputs, operating_profit=0.0))

    assert exc_info.value.code == 'zero_operating_profit'

  def test_negative_operating_profit_allowed(self, roic_inputs):
    """
    An operating loss gives a negative ROIC.

    Manual: tax = 3030385 / 11963857 = 25.33%
            NOPAT = (-1000 + 0) * (1 - 0.2533) = -746.70
            ROIC = -746.70 / 23310598 < 0
    """
    inputs = replace(roic_inputs,
                     operating_profit=-1000.0,
                     interest_expense=0.0)

    result = compute_roic(inputs)

    assert result.nopat == pytest.approx(-1000.0 * (1 - 3030385 / 11963857))
    assert result.nopat == pytest.approx(-746.70, abs=0.01)
    assert result.roic < 0

  @pytest.mark.parametrize('field', ['parent_equity', 'interest_bearing_debt'])
  def test_negative_capital_rejected(self, roic_inputs, field):
    with pytest.raises(DomainValidationError, match='cannot be negative'):
      compute_roic(replace(roic_inputs, **{field: -1.0}))

  def test_zero_invested_capital(self, roic_inputs):
    inputs = replace(roic_inputs, parent_equity=0.0, interest_bearing_debt=0.0)

    with pytest.raises(DomainValidationError) as exc_info:
      compute_roic(inputs)

    assert exc_info.value.code == 'non_positive_invested_capital'
