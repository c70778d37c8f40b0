from __future__ import annotations

import threading

import pytest

from linechart.chart import ChartDataModel
from linechart.data_model import (
    Baseline,
    BaselineKind,
    ChartMetadata,
    DataPoint,
    LineChartStyle,
    LineStyle,
    MarkerType,
    MultiSeriesDataSet,
    XAxisLabelSource,
)
from linechart.scale import ChartRect, GlobalScale
from linechart.samples import week_of_data

from conftest import make_series


def test_defaults(week_pair):
    model = ChartDataModel(week_pair)
    assert model.metadata == ChartMetadata()
    assert model.x_axis_labels is None
    assert model.chart_style == LineChartStyle()
    assert model.no_data_text == "No Data"
    assert model.chart_type == ("line", "multi")
    assert model.touch_info.is_touch_current is False


def test_legend_built_on_construction(week_pair):
    model = ChartDataModel(week_pair)
    entries = model.get_legend_entries()
    assert [e.title for e in entries] == ["Test One", "Test Two"]
    assert [e.series_id for e in entries] == [s.id for s in week_pair]
    assert entries[0].style is week_pair.data_sets[0].style


def test_legend_follows_data_set_replacement(week_pair):
    model = ChartDataModel(week_pair)
    model.data_sets = MultiSeriesDataSet([make_series([1, 2], t) for t in ("a", "b", "c")])
    assert len(model.get_legend_entries()) == 3
    assert [e.title for e in model.get_legend_entries()] == ["a", "b", "c"]
    model.data_sets = MultiSeriesDataSet([make_series([1, 2], "only")])
    assert [e.title for e in model.get_legend_entries()] == ["only"]


def test_legend_tracks_in_place_edits(week_pair):
    model = ChartDataModel(week_pair)
    model.data_sets.data_sets.append(make_series([1, 2], "third"))
    assert len(model.get_legend_entries()) == len(model.data_sets) == 3

    first = week_pair.data_sets[0]
    first.legend_title = "Renamed"
    first.style = LineStyle(color=(0, 255, 0))
    entry = model.get_legend_entries()[0]
    assert entry.title == "Renamed"
    assert entry.style.color == (0, 255, 0)

    del model.data_sets.data_sets[1:]
    assert [e.title for e in model.legends] == ["Renamed"]


def test_replace_points_keeps_series_identity(week_pair):
    model = ChartDataModel(week_pair)
    s = week_pair.data_sets[1]
    model.replace_points(s.id, [DataPoint(1), DataPoint(2), DataPoint(3)])
    assert model.data_sets.get(s.id) is s
    assert s.values() == [1, 2, 3]
    assert len(model.get_legend_entries()) == 2


def test_replace_points_unknown_series(week_pair):
    model = ChartDataModel(week_pair)
    with pytest.raises(KeyError):
        model.replace_points("nope", [])


def test_axis_labels_from_data_points_skip_missing():
    data = MultiSeriesDataSet([make_series([1, 2, 3], labels=["M", None, "W"])])
    model = ChartDataModel(data)
    assert model.get_axis_labels() == ["M", "W"]


def test_axis_labels_only_read_first_series():
    # Axis labelling is driven by series 0; other series' labels are ignored.
    data = MultiSeriesDataSet([
        make_series([1, 2, 3], labels=["M", None, "W"]),
        make_series([1, 2, 3, 4], labels=["a", "b", "c", "d"]),
    ])
    assert ChartDataModel(data).get_axis_labels() == ["M", "W"]


def test_axis_labels_from_chart_data_verbatim(week_pair):
    style = LineChartStyle(x_axis_labels_from=XAxisLabelSource.CHART_DATA)
    model = ChartDataModel(week_pair, x_axis_labels=["Mon", "Thu", "Sun"], chart_style=style)
    assert model.get_axis_labels() == ["Mon", "Thu", "Sun"]


def test_axis_labels_empty_inputs(week_pair):
    style = LineChartStyle(x_axis_labels_from=XAxisLabelSource.CHART_DATA)
    assert ChartDataModel(week_pair, chart_style=style).get_axis_labels() == []
    assert ChartDataModel(MultiSeriesDataSet()).get_axis_labels() == []
    assert ChartDataModel(week_pair).get_axis_labels() == []


def test_scale_from_style_or_override(week_pair):
    style = LineChartStyle(baseline=Baseline(BaselineKind.MINIMUM_WITH_MAXIMUM, of=40))
    model = ChartDataModel(week_pair, chart_style=style)
    assert model.min_value() == 40
    assert model.range() == 120
    model = ChartDataModel(week_pair, scale=GlobalScale(0, 200))
    assert model.min_value() == 0
    assert model.range() == 200


def test_resolve_touch_writes_slot(week_pair):
    model = ChartDataModel(week_pair)
    rect = ChartRect(0, 0, 600, 300)
    info = model.resolve_touch((351, 10), rect)
    assert model.touch_info is info
    assert info.is_touch_current
    assert info.touch_location == (351, 10)
    assert info.chart_rect == rect
    assert [r.index for r in info.resolved] == [4, 4]
    assert [p.value for p in info.points] == [160, 140]


def test_resolve_touch_overwrites_previous(week_pair):
    model = ChartDataModel(week_pair)
    rect = ChartRect(0, 0, 600, 300)
    model.resolve_touch((0, 0), rect)
    model.resolve_touch((700, 0), rect)
    assert model.touch_info.points == ()
    assert model.touch_info.is_touch_current


def test_resolve_touch_partial_match(week_pair):
    week_pair.data_sets.append(make_series([5], "lonely"))
    model = ChartDataModel(week_pair)
    info = model.resolve_touch((100, 0), ChartRect(0, 0, 600, 300))
    assert len(info.points) == 2
    assert [r.series_id for r in info.resolved] == [s.id for s in week_pair.data_sets[:2]]


def test_end_touch(week_pair):
    model = ChartDataModel(week_pair)
    model.resolve_touch((0, 0), ChartRect(0, 0, 600, 300))
    model.end_touch()
    assert model.touch_info.is_touch_current is False
    assert model.touch_info.points == ()


def test_data_set_replacement_clears_touch(week_pair):
    model = ChartDataModel(week_pair)
    model.resolve_touch((0, 0), ChartRect(0, 0, 600, 300))
    model.data_sets = MultiSeriesDataSet([make_series([1, 2])])
    assert model.touch_info.points == ()


def test_point_location_via_model():
    a = make_series([0, 25, 50, 75, 100])
    model = ChartDataModel(MultiSeriesDataSet([a]), scale=GlobalScale(0, 100))
    assert model.point_location(a, (210, 0), ChartRect(0, 0, 400, 100)) == (200, 50)
    assert model.point_location(a, (-1, 0), ChartRect(0, 0, 400, 100)) is None


def test_touch_markers_use_style_marker_type(week_pair):
    model = ChartDataModel(week_pair, chart_style=LineChartStyle(marker_type=MarkerType.VERTICAL))
    markers = model.touch_markers((100, 0), ChartRect(0, 0, 600, 300))
    assert [m.index for m in markers] == [1, 1]
    assert all(m.marker_type == MarkerType.VERTICAL for m in markers)


def test_has_enough_data():
    assert not ChartDataModel(MultiSeriesDataSet()).has_enough_data()
    assert not ChartDataModel(MultiSeriesDataSet([make_series([1])])).has_enough_data()
    assert ChartDataModel(MultiSeriesDataSet([make_series([1]), make_series([1, 2])])).has_enough_data()


def test_concurrent_readers_never_see_partial_result(week_pair):
    model = ChartDataModel(week_pair)
    rect = ChartRect(0, 0, 600, 300)
    bad = []
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            n = len(model.touch_info.points)
            if n not in (0, 2):
                bad.append(n)

    readers = [threading.Thread(target=reader) for _ in range(3)]
    for t in readers:
        t.start()
    try:
        for i in range(2000):
            model.resolve_touch((i % 600, 0), rect)
    finally:
        stop.set()
        for t in readers:
            t.join()
    assert bad == []


def test_week_of_data_sample():
    model = week_of_data()
    assert model.metadata.title == "Some Data"
    assert model.get_axis_labels() == ["M", "T", "W", "T", "F", "S", "S"]
    assert model.min_value() == 40
    assert model.range() == 120
    markers = model.touch_markers((0, 0), ChartRect(0, 0, 600, 300))
    assert [m.label for m in markers] == ["Test One: 60", "Test Two: 90"]


def test_scale_readers_see_whole_data_set_swaps():
    low = MultiSeriesDataSet([make_series([0, 10]), make_series([5, 5, 5])])
    high = MultiSeriesDataSet([make_series([100, 110]), make_series([105, 105, 105])])
    model = ChartDataModel(low)
    rect = ChartRect(0, 0, 100, 100)
    seen = set()
    bad = []
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            seen.add(model.global_scale())
            for s in model.data_sets:
                if len(model.point_markers(s, rect)) not in (0, 2, 3):
                    bad.append(s.id)

    t = threading.Thread(target=reader)
    t.start()
    try:
        for i in range(500):
            model.data_sets = high if i % 2 else low
    finally:
        stop.set()
        t.join()
    assert bad == []
    assert seen <= {GlobalScale(0, 10), GlobalScale(100, 10)}
