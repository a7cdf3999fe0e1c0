"""Calculation engines with pure math functions."""

from fincalc.engine.dcf import (
    aggregate,
    calculate_dcf,
    compute_terminal_value,
    project_cash_flows,
)
from fincalc.engine.roic import compare_roic_to_wacc, compute_roic
from fincalc.engine.wacc import compute_wacc

__all__ = [
    'aggregate',
    'calculate_dcf',
    'compare_roic_to_wacc',
    'compute_roic',
    'compute_terminal_value',
    'compute_wacc',
    'project_cash_flows',
]
