# tests/test_chart_renderer.py
"""
Chart Renderer Tests - Geometry, Decluttering and Placeholder Path

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxtrend.adapters.charting.renderer (render and helpers)
- fxtrend.adapters.charting.primitives (instruction types)
- fxtrend.adapters.charting.png (to_png smoke test)
"""
from datetime import date, timedelta

import pytest

from fxtrend.adapters.charting.primitives import (
    Circle,
    Line,
    Placeholder,
    Polygon,
    Polyline,
    Rect,
    Text,
)
from fxtrend.adapters.charting.renderer import (
    PADDING,
    date_label,
    label_indices,
    render,
    visible_points,
)
from fxtrend.domain.models import ChartPoint, ZoomWindow

W, H = 500, 250


def series(start: date, count: int, step_days: int = 1, base: float = 18.0):
    return [
        ChartPoint((start + timedelta(days=i * step_days)).isoformat(), base + (i % 7) / 10)
        for i in range(count)
    ]


def gridlines(drawing):
    return [i for i in drawing.of_type(Line) if i.width == 0.5]


def value_labels(drawing):
    return [t for t in drawing.of_type(Text) if t.x == 4]


def tick_labels(drawing):
    return [t for t in drawing.of_type(Text) if t.rotation]


def title(drawing):
    return [t for t in drawing.of_type(Text) if t.anchor == "middle"][0]


class TestPlaceholder:
    @pytest.mark.parametrize("count", [0, 1])
    def test_fewer_than_two_points(self, count):
        drawing = render(series(date(2025, 1, 1), count), ZoomWindow.MONTH, W, H)

        assert drawing.is_placeholder
        assert len(drawing.instructions) == 1
        assert isinstance(drawing.instructions[0], Placeholder)

    def test_points_outside_window_count_as_missing(self):
        pts = [ChartPoint("2024-01-01", 1.0), ChartPoint("2025-01-10", 2.0)]
        drawing = render(pts, ZoomWindow.MONTH, W, H)
        assert drawing.is_placeholder


class TestLayout:
    def test_paint_order(self):
        drawing = render(series(date(2025, 1, 1), 10), ZoomWindow.MONTH, W, H)
        kinds = [type(i) for i in drawing.instructions]

        assert kinds[0] is Rect
        assert kinds.index(Polygon) < kinds.index(Polyline) < kinds.index(Circle)
        assert isinstance(drawing.instructions[-1], Text)

    def test_six_gridlines_with_bold_two_decimal_labels(self):
        drawing = render(series(date(2025, 1, 1), 10), ZoomWindow.MONTH, W, H)

        lines = gridlines(drawing)
        labels = value_labels(drawing)
        assert len(lines) == 6
        assert [ln.y1 for ln in lines] == pytest.approx(
            [PADDING.t + k * (H - PADDING.t - PADDING.b) / 5 for k in range(6)]
        )
        assert all(t.bold for t in labels)
        assert all(len(t.text.split(".")[1]) == 2 for t in labels)

    def test_value_range_is_padded_ten_percent(self):
        pts = [ChartPoint("2025-01-01", 10.0), ChartPoint("2025-01-02", 20.0)]
        drawing = render(pts, ZoomWindow.MONTH, W, H)

        values = [float(t.text) for t in value_labels(drawing)]
        assert values[0] == pytest.approx(21.0)
        assert values[-1] == pytest.approx(9.0)

    def test_curve_spans_plot_area(self):
        pts = [ChartPoint("2025-01-01", 10.0), ChartPoint("2025-01-02", 20.0)]
        drawing = render(pts, ZoomWindow.MONTH, W, H)
        curve = drawing.of_type(Polyline)[0]

        (x0, y0), (x1, y1) = curve.points
        assert x0 == PADDING.l
        assert x1 == W - PADDING.r
        ch = H - PADDING.t - PADDING.b
        # max value sits 10% of the span below the top
        assert y1 == pytest.approx(PADDING.t + ch * (1 / 12))
        assert y0 == pytest.approx(PADDING.t + ch * (11 / 12))

    def test_flat_series_does_not_divide_by_zero(self):
        pts = [ChartPoint(f"2025-01-0{d}", 18.0) for d in range(1, 6)]
        drawing = render(pts, ZoomWindow.MONTH, W, H)

        ys = {round(y, 6) for _, y in drawing.of_type(Polyline)[0].points}
        assert len(ys) == 1
        values = [float(t.text) for t in value_labels(drawing)]
        assert values[0] == pytest.approx(18.1)
        assert values[-1] == pytest.approx(17.9)

    def test_area_closes_on_baseline(self):
        drawing = render(series(date(2025, 1, 1), 5), ZoomWindow.MONTH, W, H)
        polygon = drawing.of_type(Polygon)[0]

        assert polygon.points[-2] == (W - PADDING.r, H - PADDING.b)
        assert polygon.points[-1] == (PADDING.l, H - PADDING.b)


class TestMarkersAndTicks:
    def test_markers_for_small_series(self):
        drawing = render(series(date(2025, 1, 1), 30), ZoomWindow.MONTH, W, H)
        assert len(drawing.of_type(Circle)) == 30

    @pytest.mark.parametrize("today", [date(2026, 10, 19), date(2026, 3, 31), date(2024, 3, 1)])
    def test_full_daily_series_keeps_markers_on_month_zoom(self, today):
        pts = series(today - timedelta(days=79), 80)
        drawing = render(pts, ZoomWindow.MONTH, W, H, today=today)

        assert len(drawing.of_type(Circle)) == 30

    def test_no_markers_above_thirty_points(self):
        drawing = render(series(date(2024, 2, 1), 200), ZoomWindow.YEAR, W, H)
        assert drawing.of_type(Circle) == []

    def test_one_tick_per_point(self):
        drawing = render(series(date(2025, 1, 1), 12), ZoomWindow.MONTH, W, H)
        ticks = [ln for ln in drawing.of_type(Line) if ln.y2 - ln.y1 == 4]
        assert len(ticks) == 12

    def test_tick_labels_rotated_thirty_degrees(self):
        drawing = render(series(date(2025, 1, 1), 12), ZoomWindow.MONTH, W, H)
        assert {t.rotation for t in tick_labels(drawing)} == {30.0}


class TestLabelDecluttering:
    def test_budget_from_plot_width(self):
        # 408 px plot width fits 7 labels at 52 px
        shown = label_indices(365, 408)
        assert len(shown) == 7
        assert 0 in shown and 364 in shown

    def test_spread_evenly(self):
        assert label_indices(13, 208) == {0, 4, 8, 12}

    def test_narrow_canvas_still_shows_first_and_last(self):
        assert label_indices(50, 10) == {0, 49}

    def test_fewer_points_than_budget(self):
        assert label_indices(3, 408) == {0, 1, 2}

    def test_rendered_labels_match_budget(self):
        drawing = render(series(date(2024, 6, 1), 200), ZoomWindow.YEAR, W, H)
        assert len(tick_labels(drawing)) == 7


class TestDateLabels:
    def test_day_month(self):
        assert date_label("2025-01-03") == "3 Jan"

    def test_two_digit_year(self):
        assert date_label("2025-01-03", with_year=True) == "3 Jan 25"
        assert date_label("2009-12-31", with_year=True) == "31 Dec 09"

    def test_single_year_title(self):
        drawing = render(series(date(2025, 3, 1), 10), ZoomWindow.MONTH, W, H)
        assert title(drawing).text == "1 Mar – 10 Mar"

    def test_multi_year_title_and_labels(self):
        drawing = render(series(date(2024, 12, 20), 20), ZoomWindow.MONTH, W, H)

        assert title(drawing).text == "20 Dec 24 – 8 Jan 25"
        assert all(t.text.endswith((" 24", " 25")) for t in tick_labels(drawing))

    def test_title_centered(self):
        drawing = render(series(date(2025, 3, 1), 10), ZoomWindow.MONTH, W, H)
        assert title(drawing).x == W / 2


class TestVisiblePoints:
    def test_month_keeps_last_thirty_days(self):
        pts = series(date(2025, 2, 1), 60)  # through 2025-04-01
        visible = visible_points(pts, ZoomWindow.MONTH, today=date(2025, 4, 1))

        assert len(visible) == 30
        assert visible[0].date == "2025-03-03"
        assert visible[-1].date == "2025-04-01"

    def test_year_keeps_last_365_days(self):
        pts = series(date(2023, 1, 1), 530)  # through 2024-06-13
        visible = visible_points(pts, ZoomWindow.YEAR, today=date(2024, 6, 13))

        assert len(visible) == 365
        assert visible[0].date == "2023-06-15"

    def test_max_keeps_everything(self):
        pts = series(date(2024, 3, 2), 50, step_days=7)
        assert visible_points(pts, ZoomWindow.MAX) == pts

    def test_today_defaults_to_newest_point(self):
        pts = series(date(2025, 1, 1), 45)  # through 2025-02-14
        visible = visible_points(pts, ZoomWindow.MONTH)
        assert visible[0].date == "2025-01-16"
        assert len(visible) == 30


class TestPng:
    def test_png_has_requested_size(self):
        pytest.importorskip("matplotlib")
        from fxtrend.adapters.charting.png import to_png

        data = to_png(render(series(date(2025, 1, 1), 10), ZoomWindow.MONTH, W, H))

        assert data[:8] == b"\x89PNG\r\n\x1a\n"
        width = int.from_bytes(data[16:20], "big")
        height = int.from_bytes(data[20:24], "big")
        assert (width, height) == (W, H)

    def test_placeholder_png(self):
        pytest.importorskip("matplotlib")
        from fxtrend.adapters.charting.png import to_png

        data = to_png(render([], ZoomWindow.MONTH, W, H))
        assert data.startswith(b"\x89PNG")
