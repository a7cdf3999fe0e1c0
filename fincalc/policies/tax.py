"""
Tax rate policies.

These policies determine the tax rate applied to the cost of debt in the
WACC calculation: either implied from reported income figures or entered
directly.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fincalc.domain.types import PolicyOutput
from fincalc.errors import DomainValidationError
from fincalc.validation import require_finite, require_non_negative


class TaxPolicy(ABC):
  """
  Base class for tax rate policies.

  Subclasses implement compute() to return a decimal tax rate.
  """

  @abstractmethod
  def compute(self) -> PolicyOutput[float]:
    """
    Compute tax rate.

    Returns:
      PolicyOutput with tax rate and diagnostics

    Raises:
      DomainValidationError: If the tax inputs are inconsistent
    """


class IncomeImpliedTax(TaxPolicy):
  """
  Effective tax rate = income tax expense / pre-tax income.

  The implied rate always lies in [0, 1).
  """

  def __init__(self, pretax_income: Optional[float],
               income_tax_expense: Optional[float]):
    self.pretax_income = pretax_income
    self.income_tax_expense = income_tax_expense

  def compute(self) -> PolicyOutput[float]:
    """Return tax expense / pre-tax income after consistency checks."""
    pretax, tax = check_income_figures(self.pretax_income,
                                       self.income_tax_expense)
    rate = tax / pretax
    return PolicyOutput(value=rate,
                        diag={
                            'tax_method': 'income_implied',
                            'pretax_income': pretax,
                            'income_tax_expense': tax,
                            'tax_rate': rate,
                        })


class DirectTaxRate(TaxPolicy):
  """
  Tax rate entered directly, between 0 and 1 inclusive.

  When income figures are supplied alongside the rate they are held to the
  same consistency rules as in IncomeImpliedTax, so both entry modes reject
  a tax expense that is not below pre-tax income.
  """

  def __init__(
      self,
      tax_rate: Optional[float],
      pretax_income: Optional[float] = None,
      income_tax_expense: Optional[float] = None,
  ):
    self.tax_rate = tax_rate
    self.pretax_income = pretax_income
    self.income_tax_expense = income_tax_expense

  def compute(self) -> PolicyOutput[float]:
    """Return the entered tax rate."""
    rate = require_finite(self.tax_rate, 'Tax rate')
    if not 0.0 <= rate <= 1.0:
      raise DomainValidationError('Tax rate must be between 0 and 1.',
                                  code='tax_rate_out_of_range')

    diag = {'tax_method': 'direct', 'tax_rate': rate}
    if self.pretax_income is not None or self.income_tax_expense is not None:
      pretax, tax = check_income_figures(self.pretax_income,
                                         self.income_tax_expense)
      diag.update({'pretax_income': pretax, 'income_tax_expense': tax})

    return PolicyOutput(value=rate, diag=diag)


def check_income_figures(pretax_income: Optional[float],
                         income_tax_expense: Optional[float]):
  """
  Validate pre-tax income and income tax expense as a pair.

  Returns:
    Tuple of (pretax_income, income_tax_expense) as floats
  """
  pretax = require_finite(pretax_income, 'Pre-tax income')
  if pretax <= 0:
    raise DomainValidationError('Pre-tax income must be greater than 0.',
                                code='non_positive_pretax_income')

  tax = require_non_negative(income_tax_expense, 'Income tax expense')
  if tax >= pretax:
    raise DomainValidationError(
        'Income tax expense must be less than pre-tax income.',
        code='tax_not_below_pretax_income')
  return pretax, tax
