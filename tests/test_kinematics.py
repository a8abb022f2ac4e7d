"""Tests for closed-form entity motion."""

import math

import numpy as np
import pytest

from fuiframes.errors import ConfigurationError
from fuiframes.kinematics import entity_position, loop_angle, positions
from fuiframes.seeded import generate_entities, graph_palette

PALETTE = graph_palette("#00BFFF", "#FF6B6B")


@pytest.fixture
def entities():
    return generate_entities(12, 1920, 1080, 8.0, PALETTE)


class TestLoopAngle:
    """Tests for frame -> angular time."""

    def test_start_and_wrap(self):
        """Frame 0 and frame T both map to angle 0."""
        assert loop_angle(0, 150) == 0.0
        assert loop_angle(150, 150) == 0.0

    def test_quarter(self):
        """A quarter of the loop is π/2."""
        assert loop_angle(25, 100) == pytest.approx(math.pi / 2)

    def test_non_positive_total_rejected(self):
        """A loop needs at least one frame."""
        with pytest.raises(ConfigurationError):
            loop_angle(0, 0)


class TestEntityPosition:
    """Tests for per-entity and vectorized evaluation."""

    def test_periodic(self, entities):
        """The last+1 frame equals the first frame exactly."""
        for t in (150, 300, 2100):
            for e in entities:
                assert entity_position(e, 0, t) == entity_position(e, t, t)

    def test_periodic_non_seamless(self):
        """Wrapping keeps the loop closed even with fractional speeds."""
        ents = generate_entities(12, 1920, 1080, 8.0, PALETTE, seamless_loop=False)
        for e in ents:
            assert entity_position(e, 0, 2100) == entity_position(e, 2100, 2100)

    def test_seamless_loop_is_continuous(self):
        """With whole-cycle speeds the step across the wrap is as small as any other."""
        t = 2100
        for e in generate_entities(12, 1920, 1080, 8.0, PALETTE, seamless_loop=True):
            x0, y0 = entity_position(e, t - 1, t)
            x1, y1 = entity_position(e, 0, t)
            assert math.hypot(x1 - x0, y1 - y0) < 10.0

    def test_bounded_by_radii(self, entities):
        """An entity never strays further than both radii from its anchor."""
        for frame in range(0, 2100, 37):
            for e in entities:
                x, y = entity_position(e, frame, 2100)
                reach = e.orbit_radius + e.secondary_radius + 1e-9
                assert abs(x - e.base_x) <= reach
                assert abs(y - e.base_y) <= reach

    def test_vectorized_matches_scalar(self, entities):
        """The numpy path agrees with the per-entity formula."""
        for frame in (0, 1, 77, 1049, 2099):
            pts = positions(entities, frame, 2100)
            expected = np.array([entity_position(e, frame, 2100) for e in entities])
            assert pts.shape == (12, 2)
            assert np.allclose(pts, expected)

    def test_order_independent(self, entities):
        """Evaluating other frames in between changes nothing."""
        first = positions(entities, 500, 2100)
        positions(entities, 3, 2100)
        positions(entities, 1999, 2100)
        assert np.array_equal(first, positions(entities, 500, 2100))

    def test_empty(self):
        """No entities, empty (0, 2) array."""
        assert positions((), 10, 100).shape == (0, 2)

    def test_default_keeps_fixed_wobble_ratio(self, entities):
        """Without seamless looping the y wobble runs at exactly 1.3x the x wobble."""
        for e in entities:
            assert e.secondary_speed_y == pytest.approx(e.secondary_speed * 1.3)
