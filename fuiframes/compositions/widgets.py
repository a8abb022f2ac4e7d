"""
Instrument-panel pieces shared by the FUI compositions: gauges, rings,
corner brackets and text placement helpers. Each returns scene nodes.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..gauge import PANEL_TICKS, GaugeSpec, TickStyle, gauge_geometry, ring_dash
from ..scene import Circle, Group, Line, Path, Text, group

# glyph advance of a monospace face, in em
MONO_ADVANCE = 0.6


def text_width(text: str, size: float) -> float:
    return len(text) * size * MONO_ADVANCE


def arc_gauge(
    spec: GaugeSpec,
    *,
    track_color: str,
    fill_color: str,
    track_width: float,
    fill_width: float,
    track_opacity: float,
    fill_opacity: float,
    pulse_phase: float = 0.0,
    style: TickStyle = PANEL_TICKS,
    show_ticks: bool = True,
    round_cap: bool = False,
) -> Group:
    """Track arc, progress arc and tick lines; active ticks take the fill color."""
    geo = gauge_geometry(spec, pulse_phase=pulse_phase, style=style, show_ticks=show_ticks)
    nodes = [
        Path(geo.background_path, geo.background_points, track_color, track_width, track_opacity),
        Path(geo.progress_path, geo.progress_points, fill_color, fill_width, fill_opacity,
             round_cap=round_cap),
    ]
    for t in geo.ticks:
        nodes.append(Line(
            t.x1, t.y1, t.x2, t.y2,
            stroke=fill_color if t.active else track_color,
            stroke_width=t.width,
            opacity=t.opacity,
        ))
    return group(*nodes)


def ring(cx: float, cy: float, r: float, color: str, width: float = 1.0, opacity: float = 1.0,
         dash: Optional[Tuple[float, ...]] = None) -> Circle:
    return Circle(cx, cy, r, stroke=color, stroke_width=width, opacity=opacity, dash=dash)


def progress_ring(cx: float, cy: float, r: float, progress: float, color: str,
                  width: float = 2.0, opacity: float = 0.85, rotation: float = -90.0) -> Circle:
    return Circle(cx, cy, r, stroke=color, stroke_width=width, opacity=opacity,
                  dash=ring_dash(r, progress), rotation=rotation)


def dot(cx: float, cy: float, r: float, color: str, opacity: float = 1.0) -> Circle:
    return Circle(cx, cy, r, fill=color, opacity=opacity)


def corner_brackets(
    width: float,
    height: float,
    color: str,
    corners: Sequence[str] = ("tl", "tr", "bl", "br"),
    inset: float = 40.0,
    arm: float = 40.0,
    opacity: float = 0.3,
) -> Group:
    """L-shaped marks hugging the frame corners."""
    lines = []
    left, top = inset, inset
    right, bottom = width - inset, height - inset
    for c in corners:
        if c == "tl":
            lines += [Line(left, top, left + arm, top, color), Line(left, top, left, top + arm, color)]
        elif c == "tr":
            lines += [Line(right - arm, top, right, top, color), Line(right, top, right, top + arm, color)]
        elif c == "bl":
            lines += [Line(left, bottom, left + arm, bottom, color),
                      Line(left, bottom - arm, left, bottom, color)]
        elif c == "br":
            lines += [Line(right - arm, bottom, right, bottom, color),
                      Line(right, bottom - arm, right, bottom, color)]
        else:
            raise ValueError(f"unknown corner {c!r}")
    return group(*lines, opacity=opacity)


def stacked_text(x: float, top: float, rows: Sequence[Tuple[str, float, float]], color: str,
                 gap: float = 0.0, anchor: str = "start") -> Tuple[Group, float]:
    """Lay out (text, size, opacity) rows top-down; returns the group and the bottom y."""
    nodes = []
    y = top
    for text, size, opacity in rows:
        y += size
        nodes.append(Text(x, y, text, color, size=size, opacity=opacity, anchor=anchor))
        y += gap
    return group(*nodes), y
