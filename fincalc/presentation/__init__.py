"""Tables, chart and formatting for calculator results."""

from fincalc.presentation.chart import CashFlowChart
from fincalc.presentation.formatting import format_currency
from fincalc.presentation.formatting import format_percent
from fincalc.presentation.formatting import PLACEHOLDER
from fincalc.presentation.tables import chart_series
from fincalc.presentation.tables import dcf_summary
from fincalc.presentation.tables import dcf_table
from fincalc.presentation.tables import roic_table
from fincalc.presentation.tables import wacc_table

__all__ = [
    'CashFlowChart',
    'PLACEHOLDER',
    'chart_series',
    'dcf_summary',
    'dcf_table',
    'format_currency',
    'format_percent',
    'roic_table',
    'wacc_table',
]
