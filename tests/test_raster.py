"""Tests for rasterizing scenes to BGR frames."""

import numpy as np
import pytest

from fuiframes.engine import render_frame
from fuiframes.config import FrameContext
from fuiframes.errors import ConfigurationError
from fuiframes.raster import dash_polyline, hex_to_bgr, rasterize
from fuiframes.scene import ImageLayer, Rect, Scene, group


def canvas(*children, background="#102030", vignette=0.0, width=40, height=30):
    return Scene(width=width, height=height, background=background, root=group(*children),
                 vignette=vignette)


class TestRasterize:
    """Tests for the numpy/OpenCV frame renderer."""

    def test_shape_and_background(self):
        """An empty scene is the background color in BGR order."""
        frame = rasterize(canvas())
        assert frame.shape == (30, 40, 3)
        assert frame.dtype == np.uint8
        assert frame[0, 0].tolist() == [0x30, 0x20, 0x10]
        assert np.all(frame == frame[0, 0])

    def test_rect_fill(self):
        """A filled rect covers its interior and leaves the rest alone."""
        frame = rasterize(canvas(Rect(10, 10, 10, 10, "#FFFFFF"), background="#000000"))
        assert frame[15, 15].min() >= 250
        assert frame[2, 2].tolist() == [0, 0, 0]

    def test_half_opacity(self):
        """Opacity blends toward the fill color."""
        frame = rasterize(canvas(Rect(0, 0, 40, 30, "#FFFFFF", opacity=0.5), background="#000000"))
        assert 120 <= int(frame[15, 20, 0]) <= 130

    def test_vignette_darkens_corners(self):
        """Corners are darker than the centre."""
        frame = rasterize(canvas(background="#808080", vignette=0.5))
        assert int(frame[0, 0, 0]) < int(frame[15, 20, 0])

    def test_deterministic(self):
        """Same scene, same pixels."""
        ctx = FrameContext(0, 2100, 30.0, 160, 90)
        scene = render_frame("KnowledgeGraph", 77, ctx, {"nodeCount": 20, "nodeSize": 4})
        assert np.array_equal(rasterize(scene), rasterize(scene))

    def test_compositions_draw_something(self):
        """Small renders of each FUI composition differ from a blank frame."""
        for cid in ("FuiClock", "FuiPanorama"):
            ctx = FrameContext(0, 150, 30.0, 320, 180)
            frame = rasterize(render_frame(cid, 40, ctx))
            assert frame.shape == (180, 320, 3)
            assert frame.std() > 0


class TestImageLayer:
    """Tests for drawing the animated still."""

    def test_cover_fill(self):
        """A solid bitmap fills the whole frame at scale 1."""
        bitmap = np.zeros((12, 16, 3), dtype=np.uint8)
        bitmap[:, :] = (200, 100, 50)
        frame = rasterize(canvas(ImageLayer("img", 40, 30)), images={"img": bitmap})
        assert np.allclose(frame[15, 20].astype(int), [200, 100, 50], atol=1)

    def test_missing_bitmap(self):
        """Every image layer needs a supplied bitmap."""
        with pytest.raises(ConfigurationError):
            rasterize(canvas(ImageLayer("nope", 40, 30)))


class TestDashes:
    """Tests for dash pattern splitting."""

    def test_even_pattern(self):
        """A 10 px line with 2-on 2-off gives three runs."""
        runs = dash_polyline([(0, 0), (10, 0)], (2, 2))
        assert len(runs) == 3
        assert runs[0][0] == (0, 0)
        assert runs[1][0][0] == pytest.approx(4)
        assert runs[2][-1] == (10, 0)

    def test_no_pattern(self):
        """No dash keeps the polyline whole."""
        pts = [(0, 0), (5, 5), (9, 1)]
        assert dash_polyline(pts, ()) == [pts]


class TestColors:
    """Tests for color conversion."""

    def test_hex_to_bgr(self):
        """#RRGGBB and #RGB both parse, BGR ordered."""
        assert hex_to_bgr("#FF8000").tolist() == [0, 128, 255]
        assert hex_to_bgr("#0F0").tolist() == [0, 255, 0]
