"""
fuiframes: deterministic procedural motion graphics.

Each frame is a pure function of (composition, frame index, parameters):

    from fuiframes import render_frame, default_context, rasterize

    ctx = default_context("FuiPanorama")
    scene = render_frame("FuiPanorama", 90, ctx)
    bgr = rasterize(scene)          # uint8 (1080, 1920, 3)
"""

from .config import FrameContext
from .engine import COMPOSITIONS, Composition, default_context, get_composition, render_frame
from .errors import ConfigurationError, ExternalToolFailure, FuiFramesError
from .presets import PRESETS, get_preset, preset_state
from .raster import rasterize
from .scene import Scene
from .svg import to_svg

__version__ = "0.1.0"

__all__ = [
    "COMPOSITIONS",
    "Composition",
    "ConfigurationError",
    "ExternalToolFailure",
    "FrameContext",
    "FuiFramesError",
    "PRESETS",
    "Scene",
    "default_context",
    "get_composition",
    "get_preset",
    "preset_state",
    "rasterize",
    "render_frame",
    "to_svg",
]
