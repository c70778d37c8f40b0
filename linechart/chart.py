from __future__ import annotations

import logging
import uuid
from threading import RLock
from typing import List, Optional, Tuple

from .data_model import (
    ChartMetadata,
    ChartSeries,
    DataPoint,
    LegendEntry,
    LineChartStyle,
    MultiSeriesDataSet,
    XAxisLabelSource,
)
from .scale import ChartRect, GlobalScale
from . import touch
from .touch import MarkerInstruction, Pixel, TouchInfo, TouchSlot

log = logging.getLogger(__name__)


def build_legends(data_sets: MultiSeriesDataSet) -> List[LegendEntry]:
    return [
        LegendEntry(series_id=s.id, title=s.legend_title, style=s.style, point_style=s.point_style)
        for s in data_sets
    ]


class ChartDataModel:
    """
    Data and styling for a multi line chart.

    Owns the series, metadata and style, derives axis labels and legend
    entries from them, and keeps the last resolved touch for overlay drawing.
    ``scale`` overrides the min/range otherwise computed from the data with
    the style's baseline and topline.
    """

    chart_type = ("line", "multi")

    def __init__(
        self,
        data_sets: MultiSeriesDataSet,
        metadata: Optional[ChartMetadata] = None,
        x_axis_labels: Optional[List[str]] = None,
        chart_style: Optional[LineChartStyle] = None,
        no_data_text: str = "No Data",
        *,
        scale: Optional[GlobalScale] = None,
    ) -> None:
        self.id = uuid.uuid4().hex
        self._lock = RLock()
        self._data_sets = data_sets
        self.metadata = metadata if metadata is not None else ChartMetadata()
        self.x_axis_labels = x_axis_labels
        self.chart_style = chart_style if chart_style is not None else LineChartStyle()
        self.no_data_text = no_data_text
        self.scale = scale
        self._touch = TouchSlot()

    # ---------- data ----------

    @property
    def data_sets(self) -> MultiSeriesDataSet:
        return self._data_sets

    @data_sets.setter
    def data_sets(self, value: MultiSeriesDataSet) -> None:
        with self._lock:
            self._data_sets = value
            self._touch.clear()
        log.info("data set replaced: %d series", len(value))

    def replace_points(self, series_id: str, points: List[DataPoint]) -> None:
        with self._lock:
            s = self._data_sets.get(series_id)
            if s is None:
                raise KeyError(series_id)
            s.replace_points(points)
            self._touch.clear()

    def has_enough_data(self) -> bool:
        return any(len(s) >= 2 for s in self._data_sets)

    # ---------- labels ----------

    def get_axis_labels(self) -> List[str]:
        if self.chart_style.x_axis_labels_from == XAxisLabelSource.CHART_DATA:
            return list(self.x_axis_labels or [])
        # axis follows the first series only
        if not len(self._data_sets):
            return []
        first = self._data_sets.data_sets[0]
        return [p.x_axis_label for p in first.data_points if p.x_axis_label is not None]

    @property
    def legends(self) -> List[LegendEntry]:
        # derived on every read; series can be edited in place
        with self._lock:
            return build_legends(self._data_sets)

    def get_legend_entries(self) -> List[LegendEntry]:
        return self.legends

    # ---------- scale ----------

    def global_scale(self) -> GlobalScale:
        if self.scale is not None:
            return self.scale
        with self._lock:
            return GlobalScale.from_data_sets(self._data_sets, self.chart_style.baseline, self.chart_style.topline)

    def min_value(self) -> float:
        return self.global_scale().min_value

    def range(self) -> float:
        return self.global_scale().range

    # ---------- touch ----------

    @property
    def touch_info(self) -> TouchInfo:
        return self._touch.read()

    def resolve_touch(self, pointer: Pixel, rect: ChartRect) -> TouchInfo:
        with self._lock:
            resolved = touch.resolve_points(self._data_sets, pointer, rect)
            info = TouchInfo(
                resolved=tuple(resolved),
                touch_location=(float(pointer[0]), float(pointer[1])),
                chart_rect=rect,
                is_touch_current=True,
            )
            self._touch.publish(info)
        log.debug("touch at %s resolved %d of %d series", pointer, len(resolved), len(self._data_sets))
        return info

    def end_touch(self) -> None:
        self._touch.publish(TouchInfo(is_touch_current=False))

    def point_location(self, series: ChartSeries, pointer: Pixel, rect: ChartRect) -> Optional[Tuple[float, float]]:
        with self._lock:
            return touch.point_location(series, pointer, rect, self.global_scale())

    def touch_markers(self, pointer: Pixel, rect: ChartRect, *, specifier: str = "%.0f") -> List[MarkerInstruction]:
        with self._lock:
            return touch.touch_markers(
                self._data_sets,
                self.global_scale(),
                pointer,
                rect,
                self.chart_style.marker_type,
                specifier=specifier,
            )

    def point_markers(self, series: ChartSeries, rect: ChartRect) -> List[Pixel]:
        with self._lock:
            return touch.point_markers(series, self.global_scale(), rect)
