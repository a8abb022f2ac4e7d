"""Tests for the frame context and parameter records."""

import pytest

from fuiframes.compositions import FuiPanoramaConfig, KnowledgeGraphConfig
from fuiframes.config import FrameContext, camel_to_snake, parse_param_value
from fuiframes.errors import ConfigurationError


class TestFrameContext:
    """Tests for frame context validation."""

    def test_defaults(self):
        """1920x1080 at 30 fps unless told otherwise."""
        ctx = FrameContext(0, 150)
        assert (ctx.width, ctx.height, ctx.fps) == (1920, 1080, 30.0)
        assert ctx.at(45).seconds == pytest.approx(1.5)

    def test_at_keeps_other_fields(self):
        """at() only swaps the frame index."""
        ctx = FrameContext(3, 300, 24.0, 640, 360)
        moved = ctx.at(10)
        assert moved == FrameContext(10, 300, 24.0, 640, 360)
        assert ctx.frame_index == 3

    @pytest.mark.parametrize("args", [
        (-1, 10),
        (0, 0),
        (0, 10, 0.0),
        (0, 10, 30.0, 0, 100),
        (0, 10, 30.0, 100, -5),
    ])
    def test_invalid(self, args):
        """Negative frames, empty loops, zero fps and empty canvases are rejected."""
        with pytest.raises(ConfigurationError):
            FrameContext(*args)


class TestFromParams:
    """Tests for parameter bag decoding."""

    def test_camel_and_snake(self):
        """Both spellings reach the same field."""
        a = KnowledgeGraphConfig.from_params({"nodeCount": 40, "connectionDistance": 120})
        b = KnowledgeGraphConfig.from_params({"node_count": 40, "connection_distance": 120})
        assert a == b
        assert a.node_count == 40
        assert a.connection_distance == 120.0

    def test_defaults(self):
        """An empty bag yields the dataclass defaults."""
        cfg = KnowledgeGraphConfig.from_params({})
        assert cfg.node_count == 12
        assert cfg.connection_distance == 300.0
        assert cfg.seamless_loop is False

    def test_string_coercion(self):
        """CLI strings are coerced to the field type."""
        cfg = KnowledgeGraphConfig.from_params(
            {"nodeCount": "25", "nodeSize": "3.5", "seamlessLoop": "true"}
        )
        assert cfg.node_count == 25
        assert cfg.node_size == 3.5
        assert cfg.seamless_loop is True

    def test_integral_float_accepted_for_int(self):
        """30.0 is a fine node count; 30.5 is not."""
        assert KnowledgeGraphConfig.from_params({"nodeCount": 30.0}).node_count == 30
        with pytest.raises(ConfigurationError):
            KnowledgeGraphConfig.from_params({"nodeCount": 30.5})

    def test_bool_is_not_a_number(self):
        """True is not silently read as 1."""
        with pytest.raises(ConfigurationError):
            KnowledgeGraphConfig.from_params({"nodeCount": True})
        with pytest.raises(ConfigurationError):
            FuiPanoramaConfig.from_params({"panSpeed": True})

    def test_unknown_key(self):
        """Unknown keys name the valid ones."""
        with pytest.raises(ConfigurationError) as exc:
            KnowledgeGraphConfig.from_params({"nodeCuont": 3})
        assert "node_count" in str(exc.value)

    def test_value_validation(self):
        """Out-of-range values fail on construction."""
        with pytest.raises(ConfigurationError):
            KnowledgeGraphConfig.from_params({"nodeCount": -1})
        with pytest.raises(ConfigurationError):
            KnowledgeGraphConfig.from_params({"accentColor": "blue"})


class TestParseParamValue:
    """Tests for CLI value parsing."""

    def test_types(self):
        """bool, int, float, then string."""
        assert parse_param_value("true") is True
        assert parse_param_value("False") is False
        assert parse_param_value("12") == 12
        assert parse_param_value("2.5") == 2.5
        assert parse_param_value("#FF0000") == "#FF0000"

    def test_camel_to_snake(self):
        """camelCase and dashed names map to snake_case."""
        assert camel_to_snake("nodeCount") == "node_count"
        assert camel_to_snake("image-src") == "image_src"
        assert camel_to_snake("pan_speed") == "pan_speed"
