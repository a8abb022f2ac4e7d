"""Tests for keyframe interpolation and periodic helpers."""

import math

import pytest

from fuiframes.easing import ease, in_out, quad
from fuiframes.errors import ConfigurationError
from fuiframes.interp import KeyframeTable, blink, interpolate, pulse


class TestInterpolate:
    """Tests for piecewise-linear mapping."""

    def test_endpoints_and_midpoint(self):
        """Keyframes map exactly; the midpoint is the average."""
        assert interpolate(0, [0, 100], [10, 20]) == 10
        assert interpolate(100, [0, 100], [10, 20]) == 20
        assert interpolate(50, [0, 100], [10, 20]) == pytest.approx(15)

    def test_inner_keyframe_exact(self):
        """A value sitting on an inner keyframe returns that keyframe's output."""
        assert interpolate(30, [0, 30, 60], [0.7, 1, 0.7]) == pytest.approx(1.0)
        assert interpolate(15, [0, 30, 60], [0.7, 1, 0.7]) == pytest.approx(0.85)
        assert interpolate(45, [0, 30, 60], [0.7, 1, 0.7]) == pytest.approx(0.85)

    def test_extend_both_sides(self):
        """Default policy continues the nearest segment's slope."""
        assert interpolate(-10, [0, 10], [0, 1]) == pytest.approx(-1.0)
        assert interpolate(20, [0, 10], [0, 1]) == pytest.approx(2.0)

    def test_clamp(self):
        """Clamped sides pin to the boundary outputs."""
        kw = dict(extrapolate_left="clamp", extrapolate_right="clamp")
        assert interpolate(-5, [0, 10], [3, 7], **kw) == 3
        assert interpolate(50, [0, 10], [3, 7], **kw) == 7

    def test_clamp_is_per_side(self):
        """Clamping the right leaves the left extending."""
        assert interpolate(20, [0, 10], [0, 1], extrapolate_right="clamp") == 1
        assert interpolate(-10, [0, 10], [0, 1], extrapolate_right="clamp") == pytest.approx(-1)

    def test_identity(self):
        """Identity returns the input unchanged outside the domain."""
        assert interpolate(42, [0, 10], [0, 1], extrapolate_right="identity") == 42
        assert interpolate(-3, [0, 10], [0, 1], extrapolate_left="identity") == -3

    def test_flat_segment(self):
        """Equal outputs return that output for any input."""
        assert interpolate(1234, [0, 10], [5, 5]) == 5

    def test_monotonic(self):
        """Increasing outputs give a non-decreasing mapping, eased or not."""
        for fn in (None, quad, in_out(ease)):
            prev = -math.inf
            for f in range(0, 301):
                v = interpolate(f, [0, 300], [0, 2080], extrapolate_right="clamp", easing=fn)
                assert v >= prev - 1e-9
                prev = v

    def test_easing_applied_inside_segment(self):
        """Easing remaps the normalized segment position."""
        assert interpolate(5, [0, 10], [0, 100], easing=quad) == pytest.approx(25)

    def test_easing_applies_after_clamp(self):
        """Clamped input reaches the easing as exactly 0 or 1."""
        v = interpolate(400, [0, 300], [0, 2080], extrapolate_right="clamp", easing=in_out(ease))
        assert v == pytest.approx(2080)

    @pytest.mark.parametrize("inp,out", [
        ([0, 10], [0]),
        ([0], [0]),
        ([0, 10, 5], [0, 1, 2]),
        ([0, 0], [0, 1]),
        ([0, float("nan")], [0, 1]),
        ([0, 10], [0, float("inf")]),
    ])
    def test_malformed_ranges(self, inp, out):
        """Mismatched, short, unsorted or non-finite tables are rejected."""
        with pytest.raises(ConfigurationError):
            interpolate(1, inp, out)

    def test_unknown_policy(self):
        """Only extend, clamp and identity are accepted."""
        with pytest.raises(ConfigurationError):
            interpolate(1, [0, 10], [0, 1], extrapolate_left="wrap")

    def test_non_finite_value(self):
        """NaN frames are rejected."""
        with pytest.raises(ConfigurationError):
            interpolate(float("nan"), [0, 10], [0, 1])

    def test_configuration_error_is_value_error(self):
        """Callers may catch plain ValueError."""
        with pytest.raises(ValueError):
            interpolate(1, [0, 10], [0])


class TestKeyframeTable:
    """Tests for the validated, callable keyframe table."""

    def test_callable(self):
        """A table evaluates like interpolate with its stored policy."""
        t = KeyframeTable.clamped([0, 150], [1.0, 1.25])
        assert t(0) == 1.0
        assert t(75) == pytest.approx(1.125)
        assert t(500) == 1.25
        assert t(-5) == 1.0

    def test_validated_on_construction(self):
        """Bad tables fail when built, not when first used."""
        with pytest.raises(ConfigurationError):
            KeyframeTable((0, 10, 5), (0, 1, 2))
        with pytest.raises(ConfigurationError):
            KeyframeTable((0, 10), (0, 1), extrapolate_right="mirror")

    def test_values_stored_as_floats(self):
        """Frames and values are normalized to float tuples."""
        t = KeyframeTable([0, 10], [1, 2])
        assert t.frames == (0.0, 10.0)
        assert t.values == (1.0, 2.0)


class TestPeriodic:
    """Tests for pulse and blink."""

    def test_pulse_range(self):
        """Default pulse stays within 0.8 ± 0.2."""
        for f in range(0, 500):
            assert 0.6 - 1e-12 <= pulse(f) <= 1.0 + 1e-12
        assert pulse(0) == 0.8

    def test_blink_range(self):
        """Blink is 0.3 + 0.5|sin|."""
        assert blink(0) == pytest.approx(0.3)
        for f in range(0, 500):
            assert 0.3 - 1e-12 <= blink(f) <= 0.8 + 1e-12
