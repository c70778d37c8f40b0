from __future__ import annotations

from .chart import ChartDataModel
from .data_model import (
    Baseline,
    BaselineKind,
    ChartMetadata,
    ChartSeries,
    DataPoint,
    InfoBoxPlacement,
    LineChartStyle,
    LineStyle,
    MarkerType,
    MultiSeriesDataSet,
    PointStyle,
)

_DAYS = [
    ("M", "Monday"),
    ("T", "Tuesday"),
    ("W", "Wednesday"),
    ("T", "Thursday"),
    ("F", "Friday"),
    ("S", "Saturday"),
    ("S", "Sunday"),
]


def _week(values, title: str, color) -> ChartSeries:
    return ChartSeries(
        data_points=[DataPoint(v, x_axis_label=short, point_label=day) for v, (short, day) in zip(values, _DAYS)],
        legend_title=title,
        point_style=PointStyle(),
        style=LineStyle(color=color),
    )


def week_of_data() -> ChartDataModel:
    data = MultiSeriesDataSet([
        _week([60, 90, 100, 75, 160, 110, 90], "Test One", (255, 0, 0)),
        _week([90, 60, 120, 85, 140, 80, 50], "Test Two", (0, 0, 255)),
    ])
    return ChartDataModel(
        data,
        metadata=ChartMetadata(title="Some Data", subtitle="A Week"),
        x_axis_labels=["Monday", "Thursday", "Sunday"],
        chart_style=LineChartStyle(
            info_box_placement=InfoBoxPlacement.FIXED,
            marker_type=MarkerType.FULL,
            baseline=Baseline(BaselineKind.MINIMUM_WITH_MAXIMUM, of=40),
        ),
    )
