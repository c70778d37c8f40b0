from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .data_model import Baseline, BaselineKind, MultiSeriesDataSet, Topline, ToplineKind

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartRect:
    # origin of the plot area on the enclosing surface
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Chart rect must have non-negative size, got {self.width}x{self.height}")

    def to_local(self, px: float, py: float) -> Tuple[float, float]:
        """Surface coordinates -> coordinates relative to the plot area's top-left."""
        return px - self.x, py - self.y

    def to_surface(self, lx: float, ly: float) -> Tuple[float, float]:
        return lx + self.x, ly + self.y


@dataclass(frozen=True)
class GlobalScale:
    """
    Shared y-scale for every series on the chart.

    ``range`` may be 0 (all values equal); the resolver treats that as no
    vertical scale and puts every point on the baseline.
    """
    min_value: float
    range: float

    @property
    def max_value(self) -> float:
        return self.min_value + self.range

    @classmethod
    def from_data_sets(
        cls,
        data_sets: MultiSeriesDataSet,
        baseline: Baseline = Baseline(),
        topline: Topline = Topline(),
    ) -> "GlobalScale":
        chunks = [np.asarray(s.values(), dtype=float) for s in data_sets if len(s)]
        if not chunks:
            return cls(min_value=0.0, range=0.0)
        values = np.concatenate(chunks)
        lo = float(values.min())
        hi = float(values.max())

        if baseline.kind == BaselineKind.MINIMUM_VALUE:
            min_value = lo
        elif baseline.kind == BaselineKind.MINIMUM_WITH_MAXIMUM:
            min_value = min(lo, float(baseline.of))
        elif baseline.kind == BaselineKind.ZERO:
            min_value = 0.0
        else:
            raise ValueError(f"Unsupported baseline: {baseline.kind}")

        if topline.kind == ToplineKind.MAXIMUM_VALUE:
            max_value = hi
        elif topline.kind == ToplineKind.MAXIMUM:
            max_value = max(hi, float(topline.of))
        else:
            raise ValueError(f"Unsupported topline: {topline.kind}")

        scale = cls(min_value=min_value, range=max_value - min_value)
        log.debug("global scale from %d values: min=%s range=%s", values.size, scale.min_value, scale.range)
        return scale
