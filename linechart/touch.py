from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from threading import RLock
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .data_model import ChartSeries, Color, DataPoint, MarkerType
from .scale import ChartRect, GlobalScale

log = logging.getLogger(__name__)

Pixel = Tuple[float, float]


@dataclass(frozen=True)
class ResolvedPoint:
    series_id: str
    index: int
    point: DataPoint


@dataclass(frozen=True)
class MarkerInstruction:
    series_id: str
    index: int
    x: float
    y: float
    color: Color
    marker_type: MarkerType
    label: str


@dataclass(frozen=True)
class TouchInfo:
    resolved: Tuple[ResolvedPoint, ...] = ()
    touch_location: Optional[Pixel] = None
    chart_rect: Optional[ChartRect] = None
    is_touch_current: bool = False

    @property
    def points(self) -> Tuple[DataPoint, ...]:
        return tuple(r.point for r in self.resolved)


class TouchSlot:
    """
    Holds the last resolved touch. One writer (the resolver), any number of
    readers (overlay drawing). Each publish replaces the whole snapshot.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._info = TouchInfo()

    def publish(self, info: TouchInfo) -> None:
        with self._lock:
            self._info = info

    def read(self) -> TouchInfo:
        with self._lock:
            return self._info

    def clear(self) -> None:
        self.publish(TouchInfo())


# ---------- index arithmetic ----------

def x_step(count: int, width: float) -> Optional[float]:
    # fewer than 2 points has no horizontal spacing
    if count < 2 or width <= 0:
        return None
    return width / (count - 1)


def y_step(height: float, value_range: float) -> Optional[float]:
    if value_range == 0:
        return None
    return height / value_range


def nearest_index(x: float, count: int, width: float) -> Optional[int]:
    """
    Index of the sample nearest to pointer ``x`` (plot-local pixels).

    ``floor((x + step/2) / step)``: rounds to the nearest sample, and a pointer
    exactly halfway between two samples goes to the later one. Pointers outside
    ``[0, width]`` are rejected, never clamped.
    """
    step = x_step(count, width)
    if step is None:
        return None
    # x == width is the last sample, so index -> pixel -> index round-trips
    if x < 0 or (x > width and not math.isclose(x, width)):
        return None
    index = math.floor((x + step / 2) / step)
    if 0 <= index < count:
        return index
    return None


def value_to_pixel(index: int, value: float, count: int, scale: GlobalScale, rect: ChartRect) -> Optional[Pixel]:
    step = x_step(count, rect.width)
    if step is None:
        return None
    ystep = y_step(rect.height, scale.range)
    if ystep is None:
        # flat baseline
        return index * step, rect.height
    return index * step, rect.height - (value - scale.min_value) * ystep


def index_location(series: ChartSeries, index: int, scale: GlobalScale, rect: ChartRect) -> Optional[Pixel]:
    n = len(series)
    if not 0 <= index < n:
        return None
    return value_to_pixel(index, series.data_points[index].value, n, scale, rect)


def point_location(series: ChartSeries, pointer: Pixel, rect: ChartRect, scale: GlobalScale) -> Optional[Pixel]:
    index = nearest_index(pointer[0], len(series), rect.width)
    if index is None:
        return None
    return index_location(series, index, scale, rect)


# ---------- multi-series ----------

def resolve_points(data_sets: Iterable[ChartSeries], pointer: Pixel, rect: ChartRect) -> List[ResolvedPoint]:
    resolved: List[ResolvedPoint] = []
    for s in data_sets:
        n = len(s)
        if n < 2:
            log.debug("series %s skipped: %d point(s)", s.id, n)
            continue
        index = nearest_index(pointer[0], n, rect.width)
        if index is None:
            continue
        resolved.append(ResolvedPoint(series_id=s.id, index=index, point=s.data_points[index]))
    return resolved


def touch_markers(
    data_sets: Iterable[ChartSeries],
    scale: GlobalScale,
    pointer: Pixel,
    rect: ChartRect,
    marker_type: MarkerType = MarkerType.INDICATOR,
    *,
    specifier: str = "%.0f",
) -> List[MarkerInstruction]:
    if marker_type == MarkerType.NONE:
        return []
    out: List[MarkerInstruction] = []
    for s in data_sets:
        index = nearest_index(pointer[0], len(s), rect.width)
        if index is None:
            continue
        loc = index_location(s, index, scale, rect)
        if loc is None:
            continue
        p = s.data_points[index]
        label = p.formatted_value(specifier)
        if s.legend_title:
            label = f"{s.legend_title}: {label}"
        out.append(MarkerInstruction(
            series_id=s.id,
            index=index,
            x=loc[0],
            y=loc[1],
            color=s.style.color,
            marker_type=marker_type,
            label=label,
        ))
    return out


def point_markers(series: ChartSeries, scale: GlobalScale, rect: ChartRect) -> List[Pixel]:
    """Pixel position of every point in ``series`` (empty when it cannot be laid out)."""
    n = len(series)
    step = x_step(n, rect.width)
    if step is None:
        return []
    idx = np.arange(n, dtype=float)
    xs = idx * step
    ystep = y_step(rect.height, scale.range)
    if ystep is None:
        ys = np.full(n, float(rect.height))
    else:
        vals = np.asarray(series.values(), dtype=float)
        ys = rect.height - (vals - scale.min_value) * ystep
    return list(zip(xs.tolist(), ys.tolist()))
