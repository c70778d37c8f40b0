from __future__ import annotations

import math
import numbers
import uuid
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Iterator, List, Optional, Tuple


Color = Tuple[int, int, int]


class LineType(str, Enum):
    LINE = "line"
    CURVED = "curvedLine"


class PointShape(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    ROUND_SQUARE = "roundSquare"


class XAxisLabelSource(str, Enum):
    # labels come from series 0's data points
    DATA_POINT = "dataPoint"
    # labels come from the chart-level list
    CHART_DATA = "chartData"


class InfoBoxPlacement(str, Enum):
    FLOATING = "floating"
    FIXED = "fixed"
    HEADER = "header"


class MarkerType(str, Enum):
    NONE = "none"
    VERTICAL = "vertical"
    FULL = "full"
    INDICATOR = "indicator"


class BaselineKind(str, Enum):
    MINIMUM_VALUE = "minimumValue"
    MINIMUM_WITH_MAXIMUM = "minimumWithMaximum"
    ZERO = "zero"


class ToplineKind(str, Enum):
    MAXIMUM_VALUE = "maximumValue"
    MAXIMUM = "maximum"


@dataclass
class DataPoint:
    value: float
    x_axis_label: Optional[str] = None
    point_label: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise ValueError(f"Data point value must be a number, got {self.value!r}")
        if not math.isfinite(self.value):
            raise ValueError("Data point value must be finite.")
        self.value = float(self.value)

    def formatted_value(self, specifier: str = "%.0f") -> str:
        return specifier % self.value

    def display_label(self) -> str:
        if self.point_label:
            return self.point_label
        return self.x_axis_label or ""


@dataclass(frozen=True)
class LineStyle:
    color: Color = (0, 0, 0)
    line_type: LineType = LineType.CURVED
    stroke_width: float = 2.0


@dataclass(frozen=True)
class PointStyle:
    point_size: float = 9.0
    border_color: Color = (0, 0, 255)
    fill_color: Color = (255, 255, 255)
    line_width: float = 3.0
    point_shape: PointShape = PointShape.CIRCLE


@dataclass(eq=False)
class ChartSeries:
    """
    One line of the chart.

    Points are index-stable: index i is the i-th x position, so the list is
    never sorted or deduplicated. Identity is the ``id`` field, not content,
    so a series stays the same series while its points are edited.
    """
    data_points: List[DataPoint] = field(default_factory=list)
    legend_title: str = ""
    point_style: PointStyle = field(default_factory=PointStyle)
    style: LineStyle = field(default_factory=LineStyle)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChartSeries):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __len__(self) -> int:
        return len(self.data_points)

    def values(self) -> List[float]:
        return [p.value for p in self.data_points]

    def replace_points(self, points: List[DataPoint]) -> None:
        self.data_points = list(points)


@dataclass
class MultiSeriesDataSet:
    # order = draw order = legend order
    data_sets: List[ChartSeries] = field(default_factory=list)

    def __iter__(self) -> Iterator[ChartSeries]:
        return iter(self.data_sets)

    def __len__(self) -> int:
        return len(self.data_sets)

    def get(self, series_id: str) -> Optional[ChartSeries]:
        for s in self.data_sets:
            if s.id == series_id:
                return s
        return None

    def max_count(self) -> int:
        return max((len(s) for s in self.data_sets), default=0)


@dataclass
class ChartMetadata:
    title: str = ""
    subtitle: str = ""
    legend_title: str = ""


@dataclass(frozen=True)
class LegendEntry:
    series_id: str
    title: str
    style: LineStyle
    point_style: PointStyle
    chart_type: str = "line"


@dataclass(frozen=True)
class Baseline:
    kind: BaselineKind = BaselineKind.MINIMUM_VALUE
    # only used by MINIMUM_WITH_MAXIMUM
    of: float = 0.0


@dataclass(frozen=True)
class Topline:
    kind: ToplineKind = ToplineKind.MAXIMUM_VALUE
    # only used by MAXIMUM
    of: float = 0.0


@dataclass
class LineChartStyle:
    x_axis_labels_from: XAxisLabelSource = XAxisLabelSource.DATA_POINT
    x_axis_label_color: Color = (0, 0, 0)
    info_box_placement: InfoBoxPlacement = InfoBoxPlacement.FLOATING
    marker_type: MarkerType = MarkerType.INDICATOR
    baseline: Baseline = field(default_factory=Baseline)
    topline: Topline = field(default_factory=Topline)
    # seconds; passed through untouched for the renderer
    global_animation: float = 0.5

    def to_dict(self) -> dict:
        d = asdict(self)
        d["x_axis_labels_from"] = self.x_axis_labels_from.value
        d["info_box_placement"] = self.info_box_placement.value
        d["marker_type"] = self.marker_type.value
        d["x_axis_label_color"] = list(self.x_axis_label_color)
        d["baseline"] = {"kind": self.baseline.kind.value, "of": self.baseline.of}
        d["topline"] = {"kind": self.topline.kind.value, "of": self.topline.of}
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "LineChartStyle":
        """Build a style from a (possibly partial) dict; missing keys keep their defaults."""
        d = cls()
        base = data.get("baseline") or {}
        top = data.get("topline") or {}
        return cls(
            x_axis_labels_from=XAxisLabelSource(data.get("x_axis_labels_from", d.x_axis_labels_from.value)),
            x_axis_label_color=tuple(data.get("x_axis_label_color", d.x_axis_label_color)),  # type: ignore[arg-type]
            info_box_placement=InfoBoxPlacement(data.get("info_box_placement", d.info_box_placement.value)),
            marker_type=MarkerType(data.get("marker_type", d.marker_type.value)),
            baseline=Baseline(
                kind=BaselineKind(base.get("kind", d.baseline.kind.value)),
                of=float(base.get("of", d.baseline.of)),
            ),
            topline=Topline(
                kind=ToplineKind(top.get("kind", d.topline.kind.value)),
                of=float(top.get("of", d.topline.of)),
            ),
            global_animation=float(data.get("global_animation", d.global_animation)),
        )
