"""
Scene graph: plain immutable value objects describing one frame.

A composition returns a `Scene`; `svg.to_svg` and `raster.rasterize` are the
two consumers. Coordinates are scene pixels with y pointing down. Colors are
'#RRGGBB' strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

Point = Tuple[float, float]
Dash = Optional[Tuple[float, ...]]


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: float = 1.0
    opacity: float = 1.0
    dash: Dash = None
    rotation: float = 0.0  # degrees, where a dashed stroke starts (0 = 3 o'clock)


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float = 1.0
    opacity: float = 1.0
    dash: Dash = None


@dataclass(frozen=True)
class Path:
    d: str
    points: Tuple[Point, ...]
    stroke: str
    stroke_width: float = 1.0
    opacity: float = 1.0
    round_cap: bool = False
    blur: float = 0.0
    dash: Dash = None


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str
    opacity: float = 1.0
    rx: float = 0.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float  # baseline
    text: str
    color: str
    size: float = 14.0
    opacity: float = 1.0
    anchor: str = "start"  # start | middle | end


@dataclass(frozen=True)
class DotGrid:
    width: float
    height: float
    spacing: float
    radius: float
    color: str
    opacity: float = 1.0


@dataclass(frozen=True)
class ImageLayer:
    """Still image covering the frame, then scaled and shifted about its centre.

    `src` is an opaque key; the bitmap itself is supplied to the rasterizer.
    """

    src: str
    width: float
    height: float
    scale: float = 1.0
    translate_x_pct: float = 0.0
    translate_y_pct: float = 0.0


@dataclass(frozen=True)
class Group:
    children: Tuple["Node", ...] = ()
    x: float = 0.0
    y: float = 0.0
    opacity: float = 1.0


Node = Union[Circle, Line, Path, Rect, Text, DotGrid, ImageLayer, Group]


@dataclass(frozen=True)
class Scene:
    width: int
    height: int
    background: str
    root: Group
    vignette: float = 0.0  # darkening at the corners, 0..1


def group(*children: Node, x: float = 0.0, y: float = 0.0, opacity: float = 1.0) -> Group:
    return Group(children=tuple(c for c in children if c is not None), x=x, y=y, opacity=opacity)


def walk(node: Node) -> Iterator[Node]:
    yield node
    if isinstance(node, Group):
        for child in node.children:
            yield from walk(child)


def count_nodes(scene: Scene, kind: type) -> int:
    return sum(1 for n in walk(scene.root) if isinstance(n, kind))


def quadratic_points(p0: Point, c: Point, p1: Point, steps: int = 16) -> Tuple[Point, ...]:
    pts = []
    for i in range(steps + 1):
        t = i / steps
        u = 1.0 - t
        pts.append((
            u * u * p0[0] + 2 * u * t * c[0] + t * t * p1[0],
            u * u * p0[1] + 2 * u * t * c[1] + t * t * p1[1],
        ))
    return tuple(pts)
