"""
Arc gauge geometry.

Angles are in degrees with 0° pointing up and increasing clockwise on screen
(y grows downward), matching SVG arc drawing with sweep-flag 1.

    geo = arc_path(200, 300, 150, -150, 30, progress=0.6, tick_count=18)
    geo.background_path   # "M ... A 150 150 0 0 1 ..."
    geo.progress_path
    geo.ticks             # 19 Tick records
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import ConfigurationError
from .util import fmt_num

Point = Tuple[float, float]

# sampled polylines use at most this many degrees per segment
ARC_SAMPLE_STEP_DEG = 2.0


def polar_to_cartesian(cx: float, cy: float, radius: float, angle_deg: float) -> Point:
    rad = (angle_deg - 90.0) * math.pi / 180.0
    return cx + radius * math.cos(rad), cy + radius * math.sin(rad)


def large_arc_flag(span_deg: float) -> int:
    return 1 if span_deg > 180.0 else 0


def arc_descriptor(cx: float, cy: float, radius: float, start_angle: float, end_angle: float,
                   large_arc: int) -> str:
    x0, y0 = polar_to_cartesian(cx, cy, radius, start_angle)
    x1, y1 = polar_to_cartesian(cx, cy, radius, end_angle)
    r = fmt_num(radius)
    return (
        f"M {fmt_num(x0)} {fmt_num(y0)} "
        f"A {r} {r} 0 {large_arc} 1 {fmt_num(x1)} {fmt_num(y1)}"
    )


def arc_points(cx: float, cy: float, radius: float, start_angle: float, end_angle: float,
               step_deg: float = ARC_SAMPLE_STEP_DEG) -> List[Point]:
    """Polyline approximation of the arc; a zero span gives two equal points."""
    span = end_angle - start_angle
    steps = max(1, int(math.ceil(abs(span) / max(1e-6, step_deg))))
    return [
        polar_to_cartesian(cx, cy, radius, start_angle + span * (i / steps))
        for i in range(steps + 1)
    ]


def ring_dash(radius: float, progress: float) -> Tuple[float, float]:
    """Dash/gap pair that fills `progress` of a full circle's stroke."""
    circumference = 2.0 * math.pi * radius
    return circumference * progress, circumference


@dataclass(frozen=True)
class TickStyle:
    major_inner: float = 12.0
    minor_inner: float = 6.0
    major_outer: float = 2.0
    minor_outer: float = 2.0
    major_width: float = 2.0
    minor_width: float = 1.0
    inactive_major_opacity: float = 0.4
    inactive_minor_opacity: float = 0.2
    highlight_active: bool = True


# ticks reaching into the dial, lit up to the progress angle
PANEL_TICKS = TickStyle()
# ticks standing outside the dial, no highlight
DIAL_TICKS = TickStyle(
    major_inner=0.0,
    minor_inner=0.0,
    major_outer=15.0,
    minor_outer=8.0,
    inactive_major_opacity=0.8,
    inactive_minor_opacity=0.4,
    highlight_active=False,
)


@dataclass(frozen=True)
class Tick:
    index: int
    angle: float
    x1: float
    y1: float
    x2: float
    y2: float
    major: bool
    active: bool
    opacity: float
    width: float


@dataclass(frozen=True)
class GaugeSpec:
    cx: float
    cy: float
    radius: float
    start_angle: float
    end_angle: float
    progress: float
    tick_count: int = 12
    stroke_width: float = 3.0
    major_every: int = 3

    def __post_init__(self) -> None:
        check_progress(self.progress)
        if self.tick_count < 0:
            raise ConfigurationError(f"tick_count must be >= 0, got {self.tick_count}")
        if self.major_every < 1:
            raise ConfigurationError(f"major_every must be >= 1, got {self.major_every}")
        if self.radius < 0:
            raise ConfigurationError(f"radius must be >= 0, got {self.radius}")

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def progress_angle(self) -> float:
        return self.start_angle + self.span * self.progress


@dataclass(frozen=True)
class ArcGeometry:
    background_path: str
    progress_path: str
    large_arc: int
    progress_large_arc: int
    progress_angle: float
    ticks: Tuple[Tick, ...] = ()
    background_points: Tuple[Point, ...] = field(default=(), repr=False)
    progress_points: Tuple[Point, ...] = field(default=(), repr=False)


def check_progress(progress: float) -> float:
    if not (0.0 <= progress <= 1.0):
        raise ConfigurationError(f"gauge progress must be within [0, 1], got {progress!r}")
    return progress


def tick_marks(
    spec: GaugeSpec,
    pulse_phase: float = 0.0,
    style: TickStyle = PANEL_TICKS,
) -> Tuple[Tick, ...]:
    # tick_count + 1 marks, both ends included; a zero count leaves one mark
    # at the start angle instead of dividing by zero
    count = spec.tick_count
    ticks = []
    for i in range(count + 1):
        frac = (i / count) if count > 0 else 0.0
        angle = spec.start_angle + spec.span * frac
        major = i % spec.major_every == 0
        inner = spec.radius - (style.major_inner if major else style.minor_inner)
        outer = spec.radius + (style.major_outer if major else style.minor_outer)
        x1, y1 = polar_to_cartesian(spec.cx, spec.cy, inner, angle)
        x2, y2 = polar_to_cartesian(spec.cx, spec.cy, outer, angle)

        active = style.highlight_active and frac <= spec.progress
        if active:
            opacity = 0.8 + 0.2 * math.sin((pulse_phase + i * 0.5) * 0.1)
        else:
            opacity = style.inactive_major_opacity if major else style.inactive_minor_opacity

        ticks.append(Tick(
            index=i,
            angle=angle,
            x1=x1, y1=y1, x2=x2, y2=y2,
            major=major,
            active=active,
            opacity=opacity,
            width=style.major_width if major else style.minor_width,
        ))
    return tuple(ticks)


def gauge_geometry(
    spec: GaugeSpec,
    pulse_phase: float = 0.0,
    style: TickStyle = PANEL_TICKS,
    show_ticks: bool = True,
) -> ArcGeometry:
    span = spec.span
    progress_angle = spec.progress_angle

    # evaluated separately: a wide dial can hold a narrow fill and vice versa
    large = large_arc_flag(span)
    progress_large = large_arc_flag(span * spec.progress)

    return ArcGeometry(
        background_path=arc_descriptor(spec.cx, spec.cy, spec.radius, spec.start_angle, spec.end_angle, large),
        progress_path=arc_descriptor(spec.cx, spec.cy, spec.radius, spec.start_angle, progress_angle, progress_large),
        large_arc=large,
        progress_large_arc=progress_large,
        progress_angle=progress_angle,
        ticks=tick_marks(spec, pulse_phase, style) if show_ticks else (),
        background_points=tuple(arc_points(spec.cx, spec.cy, spec.radius, spec.start_angle, spec.end_angle)),
        progress_points=tuple(arc_points(spec.cx, spec.cy, spec.radius, spec.start_angle, progress_angle)),
    )


def arc_path(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    end_angle: float,
    progress: float,
    tick_count: int = 12,
    pulse_phase: float = 0.0,
    style: TickStyle = PANEL_TICKS,
) -> ArcGeometry:
    spec = GaugeSpec(cx, cy, radius, start_angle, end_angle, progress, tick_count=tick_count)
    return gauge_geometry(spec, pulse_phase=pulse_phase, style=style)
