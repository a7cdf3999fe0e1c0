"""
Cash-flow trend chart.

CashFlowChart owns at most one live matplotlib figure. Rendering a new chart
closes the previous figure first, so repeated calculations never leave
stacked figures behind.

Usage:
  with CashFlowChart() as chart:
    chart.render(chart_series(result))
    chart.save(Path('output/dcf_chart.png'))
"""

import logging
from pathlib import Path
from typing import Optional

from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter
import matplotlib.pyplot as plt
import pandas as pd

logger = logging.getLogger(__name__)

CASH_FLOW_COLOR = '#667eea'
PRESENT_VALUE_COLOR = '#764ba2'


class CashFlowChart:
  """Line chart of projected cash flow and present value per year."""

  def __init__(self, title: str = 'Cash Flow Trend'):
    self.title = title
    self._figure: Optional[Figure] = None

  @property
  def figure(self) -> Optional[Figure]:
    return self._figure

  def render(self, series: pd.DataFrame) -> Figure:
    """
    Draw a new chart, replacing any previous one.

    Args:
      series: DataFrame with label, cash_flow and present_value columns

    Returns:
      The newly created figure
    """
    self.close()

    fig, ax = plt.subplots(figsize=(10, 6))
    x = range(len(series))

    ax.plot(x,
            series['cash_flow'],
            'o-',
            label='Free cash flow',
            color=CASH_FLOW_COLOR,
            linewidth=3)
    ax.fill_between(x, series['cash_flow'], color=CASH_FLOW_COLOR, alpha=0.1)
    ax.plot(x,
            series['present_value'],
            's-',
            label='Present value',
            color=PRESENT_VALUE_COLOR,
            linewidth=3)
    ax.fill_between(x,
                    series['present_value'],
                    color=PRESENT_VALUE_COLOR,
                    alpha=0.1)

    ax.set_xticks(list(x))
    ax.set_xticklabels(series['label'], rotation=30, ha='right')
    ax.set_xlabel('Year', fontsize=12)
    ax.set_ylabel('Amount', fontsize=12)
    ax.set_title(self.title, fontsize=16, fontweight='bold')
    ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _: f'{v:,.0f}'))
    ax.legend(loc='upper left')
    ax.grid(True, alpha=0.3, linestyle='--')
    if len(series) == 0 or min(series['cash_flow'].min(),
                               series['present_value'].min()) >= 0:
      ax.set_ylim(bottom=0)

    fig.tight_layout()
    self._figure = fig
    logger.debug('Rendered chart with %d points', len(series))
    return fig

  def save(self, path: Path, dpi: int = 150) -> Path:
    """Write the current chart to a PNG file."""
    if self._figure is None:
      raise RuntimeError('No chart rendered; call render() first')
    path.parent.mkdir(parents=True, exist_ok=True)
    self._figure.savefig(path, dpi=dpi, bbox_inches='tight')
    logger.info('Saved: %s', path)
    return path

  def close(self) -> None:
    """Release the current figure, if any."""
    if self._figure is not None:
      plt.close(self._figure)
      self._figure = None

  def __enter__(self) -> 'CashFlowChart':
    return self

  def __exit__(self, exc_type, exc, tb) -> None:
    self.close()
