"""
FuiClock: a light instrument panel with two outward-ticked dials, rolling
counters, a status strip and drifting coordinates.

Layout follows an 80 px padded frame: dials and readouts hug the corners,
the two readout columns sit centred between the status strip and the bottom
row. Positions are derived from the canvas size, so any resolution works.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..config import FrameContext, ParamsMixin
from ..gauge import DIAL_TICKS, GaugeSpec, ring_dash
from ..interp import interpolate
from ..readouts import animated_number, coordinate, digital_readout
from ..scene import Circle, DotGrid, Group, Line, Node, Scene, Text, group
from .widgets import arc_gauge, corner_brackets, dot, ring, stacked_text, text_width

BACKGROUND = "#E8E4DF"
INK = "#1a1a1a"
PADDING = 80


@dataclass(frozen=True)
class FuiClockConfig(ParamsMixin):
    base_time: int = 1100


def dial(cx: float, cy: float, radius: float, start: float, end: float, progress: float) -> Group:
    return arc_gauge(
        GaugeSpec(cx, cy, radius, start, end, progress, tick_count=12),
        track_color=INK,
        fill_color=INK,
        track_width=2,
        fill_width=3,
        track_opacity=0.2,
        fill_opacity=0.8,
        style=DIAL_TICKS,
    )


def readout_row(x: float, baseline: float, main: float, sub: float, frame: int, speed: float,
                show_decimal: bool = False) -> Tuple[Group, float]:
    r = digital_readout(main, sub, frame, speed)
    nodes: List[Node] = [Text(x, baseline, r.main, INK, size=56)]
    cur = x + text_width(r.main, 56) + 8
    if show_decimal:
        dec = "." + r.decimal
        nodes.append(Text(cur, baseline, dec, INK, size=32, opacity=0.7))
        cur += text_width(dec, 32) + 8
    cur += 12
    nodes.append(Text(cur, baseline, r.sub, INK, size=24, opacity=0.6))
    cur += text_width(r.sub, 24)
    return group(*nodes), cur - x


def readout_width(show_decimal: bool) -> float:
    w = text_width("000", 56) + 8 + 12 + text_width("000", 24)
    if show_decimal:
        w += text_width(".0", 32) + 8
    return w


def status_strip(width: float, top: float) -> Group:
    # (text, opacity) runs; None marks a thin vertical divider
    runs = [
        [("PRS 33w", 0.7), ("PRS 12v", 0.7), ("PRS 12v", 0.7)],
        None,
        [("PRS 55V", 0.7), ("PRS 22w", 0.7), ("PRS 12V", 0.7)],
    ]
    size = 14
    baseline = top + 20 + size

    pieces: List[Tuple[float, object]] = []
    total = 0.0
    for k, run in enumerate(runs):
        if k:
            total += 40
        if run is None:
            pieces.append((total, None))
            total += 1
            continue
        for n, (text, opacity) in enumerate(run):
            if n:
                total += 24
            pieces.append((total, (text, opacity)))
            total += text_width(text, size)
    total += 40 + 40
    pieces.append((total, ("ADR 019", 1.0)))
    total += text_width("ADR 019", size)

    x0 = (width - total) / 2.0
    nodes: List[Node] = [
        Line(PADDING, top, width - PADDING, top, INK, 1, opacity=0.1),
        Line(PADDING, top + 60, width - PADDING, top + 60, INK, 1, opacity=0.1),
    ]
    for off, item in pieces:
        if item is None:
            nodes.append(Line(x0 + off, top + 20, x0 + off, top + 40, INK, 1, opacity=0.2))
        else:
            text, opacity = item
            nodes.append(Text(x0 + off, baseline, text, INK, size=size, opacity=opacity))
    return group(*nodes)


def render(ctx: FrameContext, config: FuiClockConfig) -> Scene:
    f = ctx.frame_index
    w, h = ctx.width, ctx.height
    progress = interpolate(f, [0, ctx.total_frames], [0, 1], extrapolate_right="clamp")
    pulse = interpolate(f % 60, [0, 30, 60], [0.7, 1, 0.7], extrapolate_right="clamp")

    # top left: dial with RF labels
    top_left = group(
        dial(140, 160, 120, -150, -30, 0.3 + progress * 0.4),
        stacked_text(20, 60, [("RF", 12, 0.6), ("32.5", 18, 0.6), ("STL3", 12, 0.6)], INK, gap=6)[0],
        x=PADDING, y=PADDING,
    )

    # top right: ICO rate and ring
    right = w - PADDING
    ico_value = animated_number(100, f, speed=0.1, digits=3) + ".0"
    top_right = group(
        Text(right, PADDING + 14, "ICO", INK, size=14, opacity=0.6, anchor="end"),
        Text(right, PADDING + 70, ico_value, INK, size=48, anchor="end"),
        Text(right, PADDING + 90, "RATE", INK, size=12, opacity=0.5, anchor="end"),
        group(
            ring(right - 60, PADDING + 170, 50, INK, 1, opacity=0.3),
            Circle(right - 60, PADDING + 170, 45, stroke=INK, stroke_width=2, opacity=0.6,
                   dash=ring_dash(45, progress)),
            opacity=pulse,
        ),
    )

    strip_top = PADDING + 200 + 40
    strip = status_strip(w, strip_top)

    # centre: two readout columns around a divider
    bottom_top = h - PADDING - 190
    mid_y = (strip_top + 60 + 40 + bottom_top) / 2.0
    header_l = f"DIAG CNT: +{config.base_time}"
    header_l2 = "PRO CNT: +100"
    left_w = max(text_width(header_l, 12) + 40 + text_width(header_l2, 12), readout_width(False))
    right_w = max(text_width("DIAG CNT: +100", 12), readout_width(True))
    total = left_w + 120 + 1 + 120 + right_w
    lx = (w - total) / 2.0
    rx = lx + left_w + 120 + 1 + 120
    top = mid_y - (12 + 20 + 56 + 30 + 56) / 2.0

    row1 = top + 12 + 20 + 56
    row2 = row1 + 30 + 56
    centre = group(
        Text(lx, top + 12, header_l, INK, size=12, opacity=0.6),
        Text(lx + text_width(header_l, 12) + 40, top + 12, header_l2, INK, size=12, opacity=0.6),
        readout_row(lx, row1, 10, 885, f, 2)[0],
        readout_row(lx, row2, 27, 453, f, 1.5)[0],
        Line(lx + left_w + 120, mid_y - 100, lx + left_w + 120, mid_y + 100, INK, 1, opacity=0.15),
        Text(rx, top + 12, "DIAG CNT: +100", INK, size=12, opacity=0.6),
        readout_row(rx, row1, 329, 31, f, 1.8, show_decimal=True)[0],
        readout_row(rx, row2, 206, 912, f, 2.2)[0],
    )

    # bottom left: EMG dial and counter
    bottom_left = group(
        dial(100, 120, 80, -180, -90, 0.6 + progress * 0.2),
        Text(0, 110 + 48, "EMG", INK, size=48),
        Text(0, 110 + 48 + 8 + 24, animated_number(1, f, speed=0.5, digits=4), INK, size=24, opacity=0.7),
        x=PADDING, y=bottom_top,
    )

    # bottom centre: coordinates
    coords = group(
        Text(w / 2.0, h - PADDING - 26, f"LAT {coordinate(51.5074, f, rate=0.0001)}°N", INK,
             size=14, anchor="middle"),
        Text(w / 2.0, h - PADDING - 4, f"LON {coordinate(-0.1278, f, rate=-0.0001)}°W", INK,
             size=14, anchor="middle"),
        opacity=0.5,
    )

    # bottom right: ring gauge with centre counter
    bx, by = w - PADDING - 75, h - PADDING - 75
    bottom_right = group(
        ring(bx, by, 60, INK, 1, opacity=0.2),
        Circle(bx, by, 55, stroke=INK, stroke_width=2, opacity=0.5,
               dash=ring_dash(55, 0.3 + progress * 0.5), rotation=-90),
        dot(bx, by, 3, INK, opacity=pulse),
        Text(bx, by + 6, animated_number(88, f, speed=0.3, digits=2), INK, size=18, anchor="middle"),
    )

    return Scene(
        width=w,
        height=h,
        background=BACKGROUND,
        root=group(
            DotGrid(w, h, 40, 1, INK, opacity=0.03),
            top_left,
            top_right,
            strip,
            centre,
            bottom_left,
            coords,
            bottom_right,
            corner_brackets(w, h, INK),
        ),
    )
