from __future__ import annotations

from typing import List, Optional

import pytest

from linechart.data_model import ChartSeries, DataPoint, LineStyle, MultiSeriesDataSet


def make_series(values: List[float], title: str = "", labels: Optional[List[Optional[str]]] = None, **kw) -> ChartSeries:
    labels = labels or [None] * len(values)
    return ChartSeries(
        data_points=[DataPoint(v, x_axis_label=lbl) for v, lbl in zip(values, labels)],
        legend_title=title,
        **kw,
    )


@pytest.fixture
def week_pair() -> MultiSeriesDataSet:
    return MultiSeriesDataSet([
        make_series([60, 90, 100, 75, 160, 110, 90], "Test One", style=LineStyle(color=(255, 0, 0))),
        make_series([90, 60, 120, 85, 140, 80, 50], "Test Two", style=LineStyle(color=(0, 0, 255))),
    ])
