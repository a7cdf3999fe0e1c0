"""
Command-line entrypoint for the calculators.

Builds input snapshots from a config file and command-line overrides, runs
them through a CalculatorSession and prints the result tables. The DCF
subcommand can also save the cash-flow chart.

Usage:
  python -m fincalc.run dcf --initial-cash-flow 1000 --growth-rate 10 \\
      --discount-rate 12 --years 5 --terminal-growth 3

  python -m fincalc.run dcf --stage "High growth:3:15" \\
      --stage "Stable:2:8" --chart output/dcf_chart.png

  python -m fincalc.run wacc --equity 500000 --debt 100000 \\
      --interest 4000 --tax-rate 0.25

  python -m fincalc.run --config inputs.json all
"""

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys
from typing import List, Optional

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import GrowthStage
from fincalc.domain.types import ROICInputs
from fincalc.domain.types import WACCInputs
from fincalc.presentation.chart import CashFlowChart
from fincalc.presentation.tables import chart_series
from fincalc.presentation.tables import dcf_summary
from fincalc.presentation.tables import dcf_table
from fincalc.presentation.tables import roic_table
from fincalc.presentation.tables import wacc_table
from fincalc.scenarios.config import CalculatorConfig
from fincalc.session import CalculatorSession

logger = logging.getLogger(__name__)

SEPARATOR = '=' * 70


def parse_stage(text: str) -> GrowthStage:
  """
  Parse NAME:YEARS:RATE into a GrowthStage.

  An empty RATE is kept as missing so the engine can report it.
  """
  parts = text.rsplit(':', 2)
  if len(parts) != 3:
    raise argparse.ArgumentTypeError(
        f'Stage must look like NAME:YEARS:RATE, got: {text!r}')
  name, years, rate = (p.strip() for p in parts)
  try:
    years_value = float(years)
    rate_value = float(rate) if rate else None
  except ValueError as e:
    raise argparse.ArgumentTypeError(f'Invalid stage {text!r}: {e}') from e
  if years_value.is_integer():
    years_value = int(years_value)
  return GrowthStage(name=name, years=years_value, growth_rate=rate_value)


def _overrides(args: argparse.Namespace, mapping: dict) -> dict:
  return {
      field: getattr(args, arg)
      for arg, field in mapping.items()
      if getattr(args, arg, None) is not None
  }


def dcf_inputs_from_args(args: argparse.Namespace,
                         base: DCFInputs) -> DCFInputs:
  """Apply command-line overrides to the configured DCF inputs."""
  values = _overrides(
      args, {
          'initial_cash_flow': 'initial_cash_flow',
          'growth_rate': 'growth_rate',
          'discount_rate': 'discount_rate',
          'terminal_growth': 'terminal_growth_rate',
          'years': 'years',
          'shares': 'share_count',
      })
  if getattr(args, 'stage', None):
    values['stages'] = list(args.stage)
  return replace(base, **values)


def wacc_inputs_from_args(args: argparse.Namespace,
                          base: WACCInputs) -> WACCInputs:
  """Apply command-line overrides to the configured WACC inputs."""
  values = _overrides(
      args, {
          'equity': 'equity_market_value',
          'debt': 'interest_bearing_debt',
          'interest': 'interest_expense',
          'pretax_income': 'pretax_income',
          'income_tax': 'income_tax_expense',
          'tax_rate': 'tax_rate',
          'beta': 'beta',
          'risk_free': 'risk_free_rate',
          'erp': 'equity_risk_premium',
      })
  return replace(base, **values)


def roic_inputs_from_args(args: argparse.Namespace,
                          base: ROICInputs) -> ROICInputs:
  """Apply command-line overrides to the configured ROIC inputs."""
  values = _overrides(
      args, {
          'operating_profit': 'operating_profit',
          'roic_interest': 'interest_expense',
          'total_profit': 'total_pretax_profit',
          'roic_income_tax': 'income_tax_expense',
          'parent_equity': 'parent_equity',
          'roic_debt': 'interest_bearing_debt',
      })
  return replace(base, **values)


def report_dcf(session: CalculatorSession, inputs: DCFInputs,
               chart_path: Optional[Path]) -> bool:
  outcome = session.calculate_dcf(inputs)
  logger.info('\n%s', SEPARATOR)
  logger.info('DCF Valuation (%s-stage)', inputs.growth_mode)
  logger.info(SEPARATOR)
  if not outcome.ok:
    logger.error('Error: %s', outcome.error)
    return False

  result = outcome.result
  logger.info('\n%s', dcf_table(result).to_string(index=False))
  logger.info('\n%s', dcf_summary(result).to_string())

  if chart_path is not None:
    with CashFlowChart() as chart:
      chart.render(chart_series(result))
      chart.save(chart_path)
  return True


def report_wacc(session: CalculatorSession, inputs: WACCInputs) -> bool:
  outcome = session.calculate_wacc(inputs)
  logger.info('\n%s', SEPARATOR)
  logger.info('WACC (%s tax rate)', inputs.tax_mode)
  logger.info(SEPARATOR)
  if not outcome.ok:
    logger.error('Error: %s', outcome.error)
    return False

  logger.info('\n%s', wacc_table(outcome.result).to_string())
  return True


def report_roic(session: CalculatorSession, inputs: ROICInputs) -> bool:
  outcome = session.calculate_roic(inputs)
  logger.info('\n%s', SEPARATOR)
  logger.info('ROIC')
  logger.info(SEPARATOR)
  if not outcome.ok:
    logger.error('Error: %s', outcome.error)
    return False

  result = outcome.result
  logger.info('\n%s', roic_table(result).to_string())
  logger.info('  NOPAT: %s', result.diag['nopat_method'])
  logger.info('  Invested capital: %s', result.diag['invested_capital_method'])
  if result.comparison is None:
    logger.info('  Compute WACC first to compare ROIC against it.')
  return True


def _add_dcf_arguments(parser: argparse.ArgumentParser) -> None:
  parser.add_argument('--initial-cash-flow', type=float,
                      help='Base-year free cash flow')
  parser.add_argument('--growth-rate', type=float,
                      help='Single-stage growth rate (percent)')
  parser.add_argument('--discount-rate', type=float,
                      help='Discount rate (percent)')
  parser.add_argument('--terminal-growth', type=float,
                      help='Terminal growth rate (percent)')
  parser.add_argument('--years', type=int,
                      help='Single-stage forecast years')
  parser.add_argument('--stage', type=parse_stage, action='append',
                      help='Growth stage NAME:YEARS:RATE (repeatable); '
                      'selects multi-stage mode')
  parser.add_argument('--shares', type=float,
                      help='Shares outstanding for per-share value')
  parser.add_argument('--chart', type=Path,
                      help='Save the cash-flow chart to this PNG path')


def _add_wacc_arguments(parser: argparse.ArgumentParser) -> None:
  parser.add_argument('--equity', type=float,
                      help='Equity market value')
  parser.add_argument('--debt', type=float,
                      help='Interest-bearing debt')
  parser.add_argument('--interest', type=float,
                      help='Interest expense')
  parser.add_argument('--pretax-income', type=float,
                      help='Pre-tax income (implied tax rate)')
  parser.add_argument('--income-tax', type=float,
                      help='Income tax expense (implied tax rate)')
  parser.add_argument('--tax-rate', type=float,
                      help='Direct tax rate (decimal, 0-1)')
  parser.add_argument('--beta', type=float, help='Equity beta')
  parser.add_argument('--risk-free', type=float,
                      help='Risk-free rate (decimal)')
  parser.add_argument('--erp', type=float,
                      help='Equity risk premium (decimal)')


def _add_roic_arguments(parser: argparse.ArgumentParser) -> None:
  parser.add_argument('--operating-profit', type=float,
                      help='Operating profit')
  parser.add_argument('--roic-interest', type=float,
                      help='Interest expense for NOPAT')
  parser.add_argument('--total-profit', type=float,
                      help='Total pre-tax profit')
  parser.add_argument('--roic-income-tax', type=float,
                      help='Income tax expense for the effective rate')
  parser.add_argument('--parent-equity', type=float,
                      help='Equity attributable to parent')
  parser.add_argument('--roic-debt', type=float,
                      help='Interest-bearing debt for invested capital')


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
      description='DCF, WACC and ROIC calculators',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  # Single-stage DCF
  python -m fincalc.run dcf --growth-rate 10 --years 5

  # Multi-stage DCF with chart
  python -m fincalc.run dcf --stage "High:3:15" --stage "Stable:2:8" \\
      --chart output/dcf_chart.png

  # WACC then ROIC with comparison
  python -m fincalc.run --config inputs.json all
      """)
  parser.add_argument('--config', type=Path,
                      help='JSON file with calculator inputs')
  parser.add_argument('--verbose', '-v', action='store_true',
                      help='Verbose output')

  sub = parser.add_subparsers(dest='command', required=True)
  _add_dcf_arguments(sub.add_parser('dcf', help='Discounted cash flow'))
  _add_wacc_arguments(sub.add_parser('wacc', help='Cost of capital'))
  roic = sub.add_parser('roic', help='Return on invested capital')
  _add_roic_arguments(roic)
  roic.add_argument('--with-wacc', action='store_true',
                    help='Compute WACC from the config first and compare')

  everything = sub.add_parser('all', help='DCF, WACC and ROIC in one session')
  _add_dcf_arguments(everything)
  _add_wacc_arguments(everything)
  _add_roic_arguments(everything)
  return parser


def main(argv: Optional[List[str]] = None) -> int:
  """CLI entrypoint. Returns 0 on success, 1 if any inputs were rejected."""
  args = build_parser().parse_args(argv)

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  if args.config:
    try:
      config = CalculatorConfig.from_file(args.config)
    except (FileNotFoundError, ValueError, TypeError) as e:
      logger.error('Error: could not load config %s: %s', args.config, e)
      return 1
    logger.debug('Loaded config %s from %s', config.name, args.config)
  else:
    config = CalculatorConfig.default()

  session = CalculatorSession()
  ok = True

  if args.command in ('dcf', 'all'):
    ok &= report_dcf(session, dcf_inputs_from_args(args, config.dcf),
                     args.chart)
  if args.command in ('wacc', 'all') or getattr(args, 'with_wacc', False):
    ok &= report_wacc(session, wacc_inputs_from_args(args, config.wacc))
  if args.command in ('roic', 'all'):
    ok &= report_roic(session, roic_inputs_from_args(args, config.roic))

  return 0 if ok else 1


if __name__ == '__main__':
  sys.exit(main())
