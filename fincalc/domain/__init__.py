"""Domain types for the valuation calculators."""

from fincalc.domain.types import DCFInputs
from fincalc.domain.types import DCFResult
from fincalc.domain.types import EnterpriseValue
from fincalc.domain.types import GrowthStage
from fincalc.domain.types import PolicyOutput
from fincalc.domain.types import ROICComparison
from fincalc.domain.types import ROICInputs
from fincalc.domain.types import ROICResult
from fincalc.domain.types import TerminalRecord
from fincalc.domain.types import ValueVerdict
from fincalc.domain.types import WACCInputs
from fincalc.domain.types import WACCResult
from fincalc.domain.types import YearRecord

__all__ = [
    'DCFInputs',
    'DCFResult',
    'EnterpriseValue',
    'GrowthStage',
    'PolicyOutput',
    'ROICComparison',
    'ROICInputs',
    'ROICResult',
    'TerminalRecord',
    'ValueVerdict',
    'WACCInputs',
    'WACCResult',
    'YearRecord',
]
