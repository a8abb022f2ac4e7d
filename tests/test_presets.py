"""Tests for image animation presets."""

import pytest

from fuiframes.errors import ConfigurationError
from fuiframes.presets import PRESET_HELP, PRESETS, get_preset, preset_state


class TestPresetTable:
    """Tests for the preset table."""

    def test_seven_presets(self):
        """Every preset is listed with help text."""
        assert set(PRESETS) == {
            "zoom-in", "zoom-out", "pan-left", "pan-right", "pan-up", "pan-down", "ken-burns",
        }
        assert set(PRESET_HELP) == set(PRESETS)

    def test_unknown_preset(self):
        """Unknown names list the valid ones."""
        with pytest.raises(ConfigurationError) as exc:
            get_preset("spin")
        assert 'Invalid preset "spin"' in str(exc.value)
        assert "ken-burns" in str(exc.value)

    def test_ranges(self):
        """Scales never shrink below the frame and pans stay within ±10%."""
        for p in PRESETS.values():
            assert min(p.start_scale, p.end_scale) >= 1.0
            for v in (p.start_x, p.end_x, p.start_y, p.end_y):
                assert -10 <= v <= 10


class TestPresetState:
    """Tests for per-frame preset evaluation."""

    def test_ken_burns(self):
        """Zoom and pan move linearly from first to last frame."""
        s = preset_state("ken-burns", 0, 150)
        assert (s.scale, s.offset_x_pct, s.offset_y_pct) == (1.0, -5.0, -3.0)
        s = preset_state("ken-burns", 75, 150)
        assert s.scale == pytest.approx(1.125)
        assert s.offset_x_pct == pytest.approx(0.0)
        assert s.offset_y_pct == pytest.approx(0.0)
        s = preset_state("ken-burns", 149, 150)
        assert s.scale == pytest.approx(1 + 0.25 * 149 / 150)

    def test_clamped_past_end(self):
        """Frames beyond the duration hold the final state."""
        s = preset_state("zoom-out", 400, 150)
        assert s.scale == 1.0

    def test_bad_total(self):
        """A preset needs at least one frame."""
        with pytest.raises(ConfigurationError):
            preset_state("zoom-in", 0, 0)
