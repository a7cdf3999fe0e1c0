"""
Corporate-finance calculators: DCF enterprise value, WACC and ROIC.

Each calculator is a pure engine fed by an input snapshot. Growth schedules
and tax rates are policies selected through the scenario registry, so the
single-stage and multi-stage DCF share one pipeline.

Usage:
  from fincalc.domain.types import DCFInputs
  from fincalc.session import CalculatorSession

  session = CalculatorSession()
  outcome = session.calculate_dcf(
      DCFInputs(initial_cash_flow=1000, growth_rate=10, years=5,
                discount_rate=12, terminal_growth_rate=3))
  print(f'Company value: {outcome.result.company_value:,.2f}')
"""
