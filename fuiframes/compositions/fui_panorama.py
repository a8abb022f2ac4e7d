"""
FuiPanorama: a 4000 px wide instrument wall that the camera pans across
with an ease-in-out curve.

Every element is placed in scene coordinates; the root group is shifted left
by the pan offset, so elements outside the viewport simply fall off-canvas.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from ..config import FrameContext, ParamsMixin
from ..easing import ease, in_out
from ..errors import ConfigurationError
from ..gauge import GaugeSpec
from ..interp import blink, interpolate, pulse
from ..readouts import coordinate, rolling_number
from ..scene import DotGrid, Group, Line, Node, Path, Rect, Scene, Text, group, quadratic_points
from ..util import fmt_num
from .widgets import arc_gauge, dot, progress_ring, ring, text_width

SCENE_WIDTH = 4000
SCENE_HEIGHT = 1080
ACCENT = "#E85A3C"
BACKGROUND = "#F5F0E8"
LINE_COLOR = "#2A2A2A"
TEAL = "#4A90A4"

_in_out_ease = in_out(ease)


@dataclass(frozen=True)
class FuiPanoramaConfig(ParamsMixin):
    pan_speed: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.pan_speed):
            raise ConfigurationError(f"pan_speed must be finite, got {self.pan_speed}")


class Gauges(NamedTuple):
    g1: float
    g2: float
    g3: float
    g4: float
    g5: float


def gauge_levels(frame: float, total_frames: int) -> Gauges:
    t = total_frames
    return Gauges(
        g1=interpolate(frame, [0, t * 0.7], [0.2, 0.85], extrapolate_right="clamp"),
        g2=interpolate(frame, [t * 0.1, t * 0.6], [0.1, 0.7],
                       extrapolate_left="clamp", extrapolate_right="clamp"),
        g3=interpolate(frame, [t * 0.2, t * 0.8], [0.3, 0.95],
                       extrapolate_left="clamp", extrapolate_right="clamp"),
        g4=interpolate(frame, [0, t * 0.5], [0.4, 0.65], extrapolate_right="clamp"),
        g5=0.5 + 0.3 * math.sin(frame * 0.05),
    )


def pan_offset(frame: float, total_frames: int, viewport_width: int, pan_speed: float = 1.0) -> float:
    max_pan = SCENE_WIDTH - viewport_width
    return interpolate(
        frame, [0, total_frames], [0, max_pan],
        extrapolate_right="clamp",
        easing=_in_out_ease,
    ) * pan_speed


# ----------------------------
# Panel pieces
# ----------------------------

def panel_gauge(cx: float, cy: float, radius: float, start: float, end: float, progress: float,
                stroke: float, ticks: int, phase: float) -> Group:
    return arc_gauge(
        GaugeSpec(cx, cy, radius, start, end, progress, tick_count=ticks, stroke_width=stroke),
        track_color=LINE_COLOR,
        fill_color=ACCENT,
        track_width=stroke,
        fill_width=stroke,
        track_opacity=0.15,
        fill_opacity=0.9,
        pulse_phase=phase,
        round_cap=True,
    )


def circle_gauge(cx: float, cy: float, radius: float, progress: float, stroke: float = 2.0,
                 color: str = ACCENT, show_inner: bool = True) -> Group:
    return group(
        ring(cx, cy, radius, LINE_COLOR, 1, opacity=0.15),
        progress_ring(cx, cy, radius, progress, color, width=stroke, opacity=0.85),
        ring(cx, cy, radius - 8, LINE_COLOR, 1, opacity=0.1) if show_inner else None,
    )


def link(x1: float, y1: float, x2: float, y2: float, curved: bool = False, dashed: bool = False,
         accent: bool = False) -> Path:
    if curved:
        cx, cy = (x1 + x2) / 2.0, (y1 + y2) / 2.0 - 30
        d = f"M {fmt_num(x1)} {fmt_num(y1)} Q {fmt_num(cx)} {fmt_num(cy)} {fmt_num(x2)} {fmt_num(y2)}"
        pts = quadratic_points((x1, y1), (cx, cy), (x2, y2))
    else:
        d = f"M {fmt_num(x1)} {fmt_num(y1)} L {fmt_num(x2)} {fmt_num(y2)}"
        pts = ((x1, y1), (x2, y2))
    return Path(
        d, pts,
        stroke=ACCENT if accent else LINE_COLOR,
        stroke_width=2 if accent else 1,
        opacity=0.7 if accent else 0.25,
        dash=(8.0, 4.0) if dashed else None,
    )


def label(text: str, x: float, y: float, frame: Optional[float] = None) -> Text:
    """Small caption; passing `frame` makes it blink."""
    opacity = blink(frame) if frame is not None else 0.5
    return Text(x, y, text, LINE_COLOR, size=10, opacity=opacity)


def bar(x: float, y: float, width: float, progress: float, caption: str = "") -> Group:
    return group(
        Rect(x, y, width, 4, LINE_COLOR, opacity=0.1, rx=2),
        Rect(x, y, width * progress, 4, ACCENT, opacity=0.8, rx=2),
        Text(x, y - 8, caption, LINE_COLOR, size=9, opacity=0.5) if caption else None,
    )


def data_block(caption: str, value: int, frame: float, speed: float, x: float, y: float,
               sub_value: Optional[int] = None, accent: bool = False) -> Group:
    top = y + 11
    baseline = top + 4 + 36
    main = rolling_number(value, frame, speed=speed, digits=3)
    nodes: List[Node] = [
        Text(x, top, caption, LINE_COLOR, size=11, opacity=0.5),
        Text(x, baseline, main, ACCENT if accent else LINE_COLOR, size=36),
    ]
    if sub_value is not None:
        sub = "." + rolling_number(sub_value, frame, speed=speed * 1.5, digits=2)
        nodes.append(Text(x + text_width(main, 36) + 6, baseline, sub, LINE_COLOR, size=20, opacity=0.6))
    return group(*nodes)


def coordinates(x: float, y: float, lat: float, lon: float, frame: float) -> Group:
    return group(
        Text(x, y + 14, f"LAT: {coordinate(lat, frame)}", LINE_COLOR, size=14),
        Text(x, y + 14 + 18, f"LON: {coordinate(lon, frame)}", LINE_COLOR, size=14),
        opacity=0.6,
    )


def thin_line(x1: float, y1: float, x2: float, y2: float, opacity: float, dashed: bool = False) -> Line:
    return Line(x1, y1, x2, y2, LINE_COLOR, 1, opacity=opacity, dash=(4.0, 8.0) if dashed else None)


# ----------------------------
# Sections, left to right
# ----------------------------

def _left(f: float, g: Gauges) -> List[Node]:
    return [
        panel_gauge(200, 300, 150, -150, 30, g.g1, stroke=4, ticks=18, phase=f),
        ring(200, 300, 80, LINE_COLOR, 1, opacity=0.1),
        ring(200, 300, 60, ACCENT, 2, opacity=0.3, dash=(4.0, 8.0)),
        label("SECTOR A", 120, 130),
        label("RF-001", 280, 180, f),
        label("32.5 MHz", 100, 420),
        circle_gauge(120, 650, 50, g.g4),
        circle_gauge(120, 650, 35, 1 - g.g4, color=LINE_COLOR),
        link(350, 300, 500, 400, curved=True),
        link(170, 650, 350, 500, curved=True),
        bar(50, 800, 80, g.g1, "SYS-A"),
        bar(50, 850, 80, g.g2, "SYS-B"),
        bar(50, 900, 80, 0.45, "SYS-C"),
    ]


def _left_centre(f: float, g: Gauges, beat: float) -> List[Node]:
    return [
        panel_gauge(700, 200, 120, -180, 0, g.g2, stroke=3, ticks=15, phase=f * 0.8),
        link(500, 400, 850, 400, dashed=True),
        link(850, 400, 1100, 300),
        circle_gauge(900, 550, 70, g.g3, stroke=3),
        circle_gauge(900, 550, 50, g.g5, color=TEAL),
        ring(900, 550, 25, LINE_COLOR, 1, opacity=0.2),
        dot(900, 550, 5, ACCENT, opacity=beat),
        ring(780, 480, 8, ACCENT, 2, opacity=0.6),
        ring(1020, 480, 8, ACCENT, 2, opacity=0.6),
        label("NODE-07", 860, 660),
        label("LINK ACTIVE", 830, 680, f),
        link(970, 550, 1200, 450, accent=True),
    ]


def _hub(f: float, g: Gauges, beat: float) -> List[Node]:
    spokes = []
    for i in range(8):
        a = math.radians(i * 45 - 90)
        outer = 280 + (i % 2) * 30
        even = i % 2 == 0
        spokes.append(Line(
            1400 + math.cos(a) * 220, 540 + math.sin(a) * 220,
            1400 + math.cos(a) * outer, 540 + math.sin(a) * outer,
            ACCENT if even else LINE_COLOR,
            2 if even else 1,
            opacity=0.6 if even else 0.3,
        ))
    hub = group(
        ring(0, 0, 200, LINE_COLOR, 1, opacity=0.1),
        panel_gauge(0, 0, 180, -135, 135, g.g1, stroke=5, ticks=24, phase=f),
        ring(0, 0, 140, LINE_COLOR, 1, opacity=0.15),
        circle_gauge(0, 0, 100, g.g2),
        ring(0, 0, 60, LINE_COLOR, 1, opacity=0.2),
        dot(0, 0, 8, ACCENT, opacity=beat),
        x=1400, y=540,
    )
    return [
        hub,
        *spokes,
        label("CENTRAL HUB", 1340, 280),
        label("STATUS: ONLINE", 1330, 820, f),
    ]


def _right_centre(f: float, g: Gauges) -> List[Node]:
    return [
        panel_gauge(2100, 350, 130, 0, 180, g.g3, stroke=4, ticks=16, phase=f * 1.2),
        link(1600, 450, 1900, 350),
        link(1600, 630, 1950, 700, curved=True),
        circle_gauge(2000, 700, 60, g.g4),
        circle_gauge(2150, 750, 45, g.g5),
        thin_line(2060, 700, 2105, 750, 0.4),
        label("RELAY-04", 2060, 200),
        label("PRO CNT: +100", 1950, 820),
        bar(2200, 500, 120, g.g1, "LOAD A"),
        bar(2200, 540, 120, g.g2, "LOAD B"),
        bar(2200, 580, 120, g.g3, "LOAD C"),
        bar(2200, 620, 120, 0.55, "LOAD D"),
    ]


def _far_right(f: float, g: Gauges, beat: float) -> List[Node]:
    output = group(
        panel_gauge(0, 0, 140, -160, 160, g.g3, stroke=4, ticks=20, phase=f),
        ring(0, 0, 100, LINE_COLOR, 1, opacity=0.1),
        circle_gauge(0, 0, 80, 1 - g.g2, color=TEAL),
        ring(0, 0, 50, LINE_COLOR, 1, opacity=0.2),
        dot(0, 0, 6, ACCENT, opacity=beat),
        x=3400, y=500,
    )
    return [
        panel_gauge(2700, 400, 160, -120, 60, g.g2, stroke=4, ticks=20, phase=f * 0.9),
        ring(2700, 400, 100, LINE_COLOR, 1, opacity=0.15),
        ring(2700, 400, 70, ACCENT, 2, opacity=0.4, dash=(10.0, 5.0)),
        link(2400, 550, 2600, 450, accent=True),
        circle_gauge(2900, 250, 40, g.g4),
        circle_gauge(2950, 600, 55, g.g1),
        output,
        label("OUTPUT NODE", 3340, 320),
        label("EMG", 3700, 600),
        thin_line(3850, 100, 3950, 100, 0.3),
        thin_line(3950, 100, 3950, 200, 0.3),
        thin_line(3850, 980, 3950, 980, 0.3),
        thin_line(3950, 880, 3950, 980, 0.3),
    ]


def _guides() -> List[Node]:
    return [
        thin_line(400, 500, 3600, 500, 0.08),
        thin_line(200, 850, 3800, 850, 0.06),
        thin_line(1000, 150, 1000, 950, 0.05, dashed=True),
        thin_line(2000, 150, 2000, 950, 0.05, dashed=True),
        thin_line(3000, 150, 3000, 950, 0.05, dashed=True),
    ]


def _readouts(f: float) -> List[Node]:
    return [
        data_block("PWR OUTPUT", 127, f, 1.2, 50, 200, sub_value=45, accent=True),
        data_block("FREQ", 432, f, 0.8, 50, 500, sub_value=88),
        data_block("DIAG CNT", 100, f, 0.5, 580, 300),
        data_block("NODE STATUS", 255, f, 1.5, 750, 750, sub_value=12, accent=True),
        data_block("CORE TEMP", 72, f, 0.3, 1320, 150, sub_value=3, accent=True),
        data_block("LOAD", 456, f, 2, 1500, 850),
        data_block("THROUGHPUT", 891, f, 1.8, 1950, 150, sub_value=67),
        data_block("SYNC RATE", 99, f, 0.4, 2350, 750, sub_value=98, accent=True),
        data_block("RF LEVEL", 32, f, 0.6, 2600, 600, sub_value=5),
        data_block("AMPLITUDE", 789, f, 1.1, 2850, 150),
        data_block("SIGNAL", 645, f, 1.4, 3300, 150, sub_value=21, accent=True),
        data_block("EMG CNT", 1001, f, 0.9, 3600, 700),
        coordinates(350, 950, 51.5074, -0.1278, f),
        coordinates(1350, 950, 40.7128, -74.0060, f),
        coordinates(2500, 950, 35.6762, 139.6503, f),
        coordinates(3500, 950, -33.8688, 151.2093, f),
    ]


def _left_corners() -> Group:
    bottom = SCENE_HEIGHT - 40
    return group(
        Line(40, 40, 80, 40, LINE_COLOR), Line(40, 40, 40, 80, LINE_COLOR),
        Line(40, bottom, 80, bottom, LINE_COLOR), Line(40, bottom - 40, 40, bottom, LINE_COLOR),
        opacity=0.3,
    )


def render(ctx: FrameContext, config: FuiPanoramaConfig) -> Scene:
    f = ctx.frame_index
    g = gauge_levels(f, ctx.total_frames)
    beat = pulse(f)
    offset = pan_offset(f, ctx.total_frames, ctx.width, config.pan_speed)

    wall = group(
        DotGrid(SCENE_WIDTH, SCENE_HEIGHT, 50, 1, LINE_COLOR, opacity=0.03),
        *_left(f, g),
        *_left_centre(f, g, beat),
        *_hub(f, g, beat),
        *_right_centre(f, g),
        *_far_right(f, g, beat),
        *_guides(),
        *_readouts(f),
        _left_corners(),
        x=-offset,
    )
    return Scene(width=ctx.width, height=ctx.height, background=BACKGROUND, root=wall)
