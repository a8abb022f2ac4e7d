"""
KnowledgeGraph: seeded nodes orbiting their anchors, linked by curved edges
whenever two of them drift within `connection_distance` of each other.

Every frame is computed from (config, frame_index, total_frames) alone:

    ctx = FrameContext(frame_index=42, total_frames=2100)
    scene = render(ctx, KnowledgeGraphConfig(node_count=250, node_size=2))
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import FrameContext, ParamsMixin
from ..errors import ConfigurationError
from ..interp import pulse
from ..kinematics import positions
from ..proximity import MAX_ENTITIES, build_edges, curve_control_point
from ..scene import Circle, Group, Line, Path, Scene, group, quadratic_points
from ..seeded import generate_entities, graph_palette
from ..util import fmt_num, parse_hex_color

BACKGROUND = "#0a0a12"
GRID_SIZE = 60
VIGNETTE = 0.5

# fill alpha of the two glow halos (hex 15 and 30 on the node color)
OUTER_GLOW_OPACITY = 0x15 / 255
MIDDLE_GLOW_OPACITY = 0x30 / 255


@dataclass(frozen=True)
class KnowledgeGraphConfig(ParamsMixin):
    node_count: int = 12
    connection_distance: float = 300.0
    node_size: float = 8.0
    accent_color: str = "#00BFFF"
    secondary_color: str = "#FF6B6B"
    seamless_loop: bool = False

    def __post_init__(self) -> None:
        if not (0 <= self.node_count <= MAX_ENTITIES):
            raise ConfigurationError(f"node_count must be within [0, {MAX_ENTITIES}], got {self.node_count}")
        if self.connection_distance < 0:
            raise ConfigurationError(f"connection_distance must be >= 0, got {self.connection_distance}")
        if self.node_size <= 0:
            raise ConfigurationError(f"node_size must be > 0, got {self.node_size}")
        for name in ("accent_color", "secondary_color"):
            try:
                parse_hex_color(getattr(self, name))
            except ValueError as e:
                raise ConfigurationError(f"{name}: {e}") from e


def grid_lines(width: int, height: int, color: str, size: int = GRID_SIZE) -> Group:
    lines = [Line(x, 0, x, height, color, 0.5) for x in range(0, width + 1, size)]
    lines += [Line(0, y, width, y, color, 0.5) for y in range(0, height + 1, size)]
    return group(*lines, opacity=0.15)


def edge_node(x1: float, y1: float, x2: float, y2: float, opacity: float, color: str) -> Group:
    cx, cy = curve_control_point(x1, y1, x2, y2)
    d = f"M {fmt_num(x1)} {fmt_num(y1)} Q {fmt_num(cx)} {fmt_num(cy)} {fmt_num(x2)} {fmt_num(y2)}"
    pts = quadratic_points((x1, y1), (cx, cy), (x2, y2))
    return group(
        Path(d, pts, color, stroke_width=4, opacity=0.3, blur=3),
        Path(d, pts, color, stroke_width=1.5),
        opacity=opacity,
    )


def node_glyph(x: float, y: float, size: float, color: str, glow: float) -> Group:
    return group(
        Circle(x, y, size * 2 * glow, fill=color, opacity=OUTER_GLOW_OPACITY),
        Circle(x, y, size * 1.5 * glow, fill=color, opacity=MIDDLE_GLOW_OPACITY),
        Circle(x, y, size, fill=color),
        Circle(x - size * 0.25, y - size * 0.25, size * 0.35, fill="#FFFFFF", opacity=0.6),
    )


def render(ctx: FrameContext, config: KnowledgeGraphConfig) -> Scene:
    entities = generate_entities(
        config.node_count,
        ctx.width,
        ctx.height,
        config.node_size,
        graph_palette(config.accent_color, config.secondary_color),
        config.seamless_loop,
    )
    pts = positions(entities, ctx.frame_index, ctx.total_frames)
    xy = pts.tolist()
    edges = build_edges(pts, config.connection_distance)
    glow = pulse(ctx.frame_index, base=0.95, amplitude=0.05, rate=0.15)

    # edges use the color of their lower-index end
    edge_group = group(*(
        edge_node(*xy[e.i], *xy[e.j], e.opacity, entities[e.i].color)
        for e in edges
        if e.opacity > 0
    ))
    node_group = group(*(
        node_glyph(*xy[k], ent.size, ent.color, glow)
        for k, ent in enumerate(entities)
    ))

    return Scene(
        width=ctx.width,
        height=ctx.height,
        background=BACKGROUND,
        root=group(grid_lines(ctx.width, ctx.height, config.accent_color), edge_group, node_group),
        vignette=VIGNETTE,
    )
