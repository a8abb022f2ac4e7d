"""Tests for arc gauge geometry."""

import math

import pytest

from fuiframes.errors import ConfigurationError
from fuiframes.gauge import (
    DIAL_TICKS,
    GaugeSpec,
    arc_descriptor,
    arc_path,
    arc_points,
    gauge_geometry,
    large_arc_flag,
    polar_to_cartesian,
    ring_dash,
    tick_marks,
)


class TestPolar:
    """Tests for the 0-degrees-up convention."""

    def test_cardinal_directions(self):
        """0° is up, 90° right, 180° down (y grows downward)."""
        x, y = polar_to_cartesian(100, 100, 10, 0)
        assert (x, y) == (pytest.approx(100), pytest.approx(90))
        x, y = polar_to_cartesian(100, 100, 10, 90)
        assert (x, y) == (pytest.approx(110), pytest.approx(100))
        x, y = polar_to_cartesian(100, 100, 10, 180)
        assert (x, y) == (pytest.approx(100), pytest.approx(110))


class TestArcFlags:
    """Tests for the SVG large-arc flag."""

    def test_threshold(self):
        """Only spans strictly over 180° use the large arc."""
        assert large_arc_flag(180) == 0
        assert large_arc_flag(180.0001) == 1
        assert large_arc_flag(90) == 0

    def test_background_and_progress_evaluated_separately(self):
        """A 270° dial at 50% fill: large background, small progress arc."""
        geo = arc_path(0, 0, 180, -135, 135, 0.5)
        assert geo.large_arc == 1
        assert geo.progress_large_arc == 0
        geo = arc_path(0, 0, 180, -135, 135, 0.9)
        assert geo.progress_large_arc == 1

    def test_descriptor_format(self):
        """Descriptor is 'M x y A r r 0 large 1 x y'."""
        d = arc_descriptor(0, 0, 10, 0, 90, 0)
        assert d == "M 0 -10 A 10 10 0 0 1 10 0"


class TestArcPath:
    """Tests for full gauge geometry."""

    def test_progress_angle(self):
        """Progress end sits at start + span * progress."""
        geo = arc_path(200, 300, 150, -150, 30, 0.5, tick_count=18)
        assert geo.progress_angle == pytest.approx(-60)

    def test_zero_progress_is_a_point(self):
        """At zero progress the progress arc starts and ends at the same spot."""
        geo = arc_path(200, 300, 150, -150, 30, 0.0)
        assert geo.progress_points[0] == pytest.approx(geo.progress_points[-1])

    def test_full_progress_matches_background(self):
        """At full progress both arcs share end points."""
        geo = arc_path(200, 300, 150, -150, 30, 1.0)
        assert geo.progress_points[-1] == pytest.approx(geo.background_points[-1])
        assert geo.progress_path == geo.background_path

    @pytest.mark.parametrize("progress", [-0.01, 1.01, float("nan")])
    def test_progress_out_of_range(self, progress):
        """Progress outside [0, 1] is rejected."""
        with pytest.raises(ConfigurationError):
            arc_path(0, 0, 100, 0, 180, progress)

    def test_points_on_circle(self):
        """Sampled points lie on the radius."""
        for x, y in arc_points(50, 60, 40, -120, 60):
            assert math.hypot(x - 50, y - 60) == pytest.approx(40)

    def test_zero_span(self):
        """A zero-span gauge degenerates to points, not an error."""
        geo = arc_path(0, 0, 100, 45, 45, 0.5, tick_count=4)
        assert geo.large_arc == 0
        assert len(geo.ticks) == 5
        assert all(t.angle == 45 for t in geo.ticks)


class TestTicks:
    """Tests for tick placement and highlight."""

    def test_count_includes_both_ends(self):
        """tick_count + 1 marks, first and last on the dial ends."""
        geo = arc_path(0, 0, 100, -90, 90, 0.5, tick_count=12)
        assert len(geo.ticks) == 13
        assert geo.ticks[0].angle == pytest.approx(-90)
        assert geo.ticks[-1].angle == pytest.approx(90)

    def test_major_every_third(self):
        """Every third tick is major, longer and thicker."""
        ticks = arc_path(0, 0, 100, -90, 90, 0.5, tick_count=12).ticks
        assert [t.major for t in ticks[:4]] == [True, False, False, True]
        major, minor = ticks[0], ticks[1]
        assert major.width == 2 and minor.width == 1
        inner_major = math.hypot(major.x1, major.y1)
        inner_minor = math.hypot(minor.x1, minor.y1)
        assert inner_major == pytest.approx(88)
        assert inner_minor == pytest.approx(94)
        assert math.hypot(major.x2, major.y2) == pytest.approx(102)

    def test_active_ticks_follow_progress(self):
        """Ticks up to the progress fraction are active and pulse."""
        ticks = arc_path(0, 0, 100, 0, 120, 0.5, tick_count=12, pulse_phase=10).ticks
        active = [t.index for t in ticks if t.active]
        assert active == list(range(7))
        t3 = ticks[3]
        assert t3.opacity == pytest.approx(0.8 + 0.2 * math.sin((10 + 3 * 0.5) * 0.1))
        assert ticks[9].opacity == 0.4
        assert ticks[10].opacity == 0.2

    def test_zero_tick_count(self):
        """Zero ticks leaves a single mark at the start angle."""
        ticks = arc_path(0, 0, 100, -30, 30, 0.2, tick_count=0).ticks
        assert len(ticks) == 1
        assert ticks[0].angle == -30

    def test_dial_style_points_outward(self):
        """Dial ticks start on the radius and reach 15 / 8 px outside."""
        spec = GaugeSpec(0, 0, 120, -150, -30, 0.5, tick_count=12)
        ticks = tick_marks(spec, style=DIAL_TICKS)
        assert math.hypot(ticks[0].x1, ticks[0].y1) == pytest.approx(120)
        assert math.hypot(ticks[0].x2, ticks[0].y2) == pytest.approx(135)
        assert math.hypot(ticks[1].x2, ticks[1].y2) == pytest.approx(128)
        assert not any(t.active for t in ticks)
        assert [t.opacity for t in ticks[:2]] == [0.8, 0.4]

    def test_hidden_ticks(self):
        """show_ticks=False leaves the tick tuple empty."""
        spec = GaugeSpec(0, 0, 50, 0, 90, 0.5)
        assert gauge_geometry(spec, show_ticks=False).ticks == ()

    def test_bad_gauge_spec(self):
        """Negative tick count or radius is rejected."""
        with pytest.raises(ConfigurationError):
            GaugeSpec(0, 0, 50, 0, 90, 0.5, tick_count=-1)
        with pytest.raises(ConfigurationError):
            GaugeSpec(0, 0, -1, 0, 90, 0.5)


class TestRingDash:
    """Tests for full-circle progress dashes."""

    def test_fraction_of_circumference(self):
        """Dash covers progress * 2πr, gap is the full circumference."""
        dash, gap = ring_dash(45, 0.5)
        assert gap == pytest.approx(2 * math.pi * 45)
        assert dash == pytest.approx(math.pi * 45)
