import matplotlib.pyplot as plt
import pandas as pd
import pytest

from fincalc.engine.dcf import calculate_dcf
from fincalc.presentation.chart import CashFlowChart
from fincalc.presentation.tables import chart_series


def _open_figures():
  return [plt.figure(n) for n in plt.get_fignums()]


@pytest.fixture
def series(single_stage_inputs) -> pd.DataFrame:
  return chart_series(calculate_dcf(single_stage_inputs))


class TestCashFlowChart:
  """Tests for CashFlowChart."""

  def test_render(self, series):
    chart = CashFlowChart()
    fig = chart.render(series)

    ax = fig.axes[0]
    assert len(ax.get_lines()) == 2
    assert [t.get_text() for t in ax.get_xticklabels()] == series[
        'label'].tolist()
    chart.close()

  def test_rerender_releases_previous_figure(self, series):
    chart = CashFlowChart()
    first = chart.render(series)
    second = chart.render(series)

    assert first is not second
    assert chart.figure is second
    assert first not in _open_figures()
    assert second in _open_figures()
    chart.close()

  def test_close(self, series):
    chart = CashFlowChart()
    fig = chart.render(series)
    chart.close()

    assert chart.figure is None
    assert fig not in _open_figures()
    chart.close()

  def test_context_manager(self, series):
    with CashFlowChart() as chart:
      fig = chart.render(series)

    assert fig not in _open_figures()

  def test_save(self, series, tmp_path):
    path = tmp_path / 'charts' / 'dcf.png'
    with CashFlowChart() as chart:
      chart.render(series)
      assert chart.save(path) == path

    assert path.exists()
    assert path.stat().st_size > 0

  def test_save_without_render(self, tmp_path):
    with pytest.raises(RuntimeError, match='No chart rendered'):
      CashFlowChart().save(tmp_path / 'dcf.png')
