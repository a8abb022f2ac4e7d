"""Scene graph -> SVG document text."""

from __future__ import annotations

import itertools
from typing import Iterator, List
from xml.sax.saxutils import escape, quoteattr

from .scene import Circle, DotGrid, Group, ImageLayer, Line, Node, Path, Rect, Scene, Text
from .util import fmt_num

FONT_FAMILY = "SF Mono, Monaco, Consolas, monospace"


def _dash_attr(dash) -> str:
    if not dash:
        return ""
    return f' stroke-dasharray="{" ".join(fmt_num(v) for v in dash)}"'


def _opacity_attr(opacity: float) -> str:
    return "" if opacity >= 1.0 else f' opacity="{fmt_num(opacity)}"'


def _node(node: Node, ids: Iterator[int], out: List[str], indent: str) -> None:
    if isinstance(node, Group):
        attrs = ""
        if node.x or node.y:
            attrs += f' transform="translate({fmt_num(node.x)} {fmt_num(node.y)})"'
        attrs += _opacity_attr(node.opacity)
        out.append(f"{indent}<g{attrs}>")
        for child in node.children:
            _node(child, ids, out, indent + "  ")
        out.append(f"{indent}</g>")

    elif isinstance(node, Circle):
        fill = node.fill or "none"
        stroke = (
            f' stroke="{node.stroke}" stroke-width="{fmt_num(node.stroke_width)}"'
            if node.stroke else ""
        )
        rot = ""
        if node.rotation:
            rot = f' transform="rotate({fmt_num(node.rotation)} {fmt_num(node.cx)} {fmt_num(node.cy)})"'
        out.append(
            f'{indent}<circle cx="{fmt_num(node.cx)}" cy="{fmt_num(node.cy)}" r="{fmt_num(node.r)}" '
            f'fill="{fill}"{stroke}{_dash_attr(node.dash)}{rot}{_opacity_attr(node.opacity)}/>'
        )

    elif isinstance(node, Line):
        out.append(
            f'{indent}<line x1="{fmt_num(node.x1)}" y1="{fmt_num(node.y1)}" '
            f'x2="{fmt_num(node.x2)}" y2="{fmt_num(node.y2)}" stroke="{node.stroke}" '
            f'stroke-width="{fmt_num(node.stroke_width)}"{_dash_attr(node.dash)}{_opacity_attr(node.opacity)}/>'
        )

    elif isinstance(node, Path):
        cap = ' stroke-linecap="round"' if node.round_cap else ""
        blur = f' style="filter: blur({fmt_num(node.blur)}px)"' if node.blur > 0 else ""
        out.append(
            f'{indent}<path d="{node.d}" fill="none" stroke="{node.stroke}" '
            f'stroke-width="{fmt_num(node.stroke_width)}"{cap}{_dash_attr(node.dash)}'
            f'{_opacity_attr(node.opacity)}{blur}/>'
        )

    elif isinstance(node, Rect):
        rx = f' rx="{fmt_num(node.rx)}"' if node.rx else ""
        out.append(
            f'{indent}<rect x="{fmt_num(node.x)}" y="{fmt_num(node.y)}" width="{fmt_num(node.width)}" '
            f'height="{fmt_num(node.height)}" fill="{node.fill}"{rx}{_opacity_attr(node.opacity)}/>'
        )

    elif isinstance(node, Text):
        anchor = "" if node.anchor == "start" else f' text-anchor="{node.anchor}"'
        out.append(
            f'{indent}<text x="{fmt_num(node.x)}" y="{fmt_num(node.y)}" fill="{node.color}" '
            f'font-family="{FONT_FAMILY}" font-size="{fmt_num(node.size)}"{anchor}'
            f'{_opacity_attr(node.opacity)}>{escape(node.text)}</text>'
        )

    elif isinstance(node, DotGrid):
        pid = f"dots{next(ids)}"
        s = fmt_num(node.spacing)
        half = fmt_num(node.spacing / 2)
        out.append(f"{indent}<defs>")
        out.append(f'{indent}  <pattern id="{pid}" width="{s}" height="{s}" patternUnits="userSpaceOnUse">')
        out.append(f'{indent}    <circle cx="{half}" cy="{half}" r="{fmt_num(node.radius)}" fill="{node.color}"/>')
        out.append(f"{indent}  </pattern>")
        out.append(f"{indent}</defs>")
        out.append(
            f'{indent}<rect width="{fmt_num(node.width)}" height="{fmt_num(node.height)}" '
            f'fill="url(#{pid})"{_opacity_attr(node.opacity)}/>'
        )

    elif isinstance(node, ImageLayer):
        # CSS order: scale about the centre, then translate in element percent
        tx = node.translate_x_pct * node.width / 100.0
        ty = node.translate_y_pct * node.height / 100.0
        cx = node.width / 2.0
        cy = node.height / 2.0
        transform = (
            f"translate({fmt_num(cx)} {fmt_num(cy)}) scale({fmt_num(node.scale)}) "
            f"translate({fmt_num(tx - cx)} {fmt_num(ty - cy)})"
        )
        out.append(
            f'{indent}<image href={quoteattr(node.src)} width="{fmt_num(node.width)}" '
            f'height="{fmt_num(node.height)}" preserveAspectRatio="xMidYMid slice" '
            f'transform="{transform}"/>'
        )

    else:
        raise TypeError(f"unsupported scene node: {type(node).__name__}")


def to_svg(scene: Scene) -> str:
    out = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{scene.width}" height="{scene.height}" '
        f'viewBox="0 0 {scene.width} {scene.height}">',
        f'  <rect width="{scene.width}" height="{scene.height}" fill="{scene.background}"/>',
    ]
    _node(scene.root, itertools.count(), out, "  ")
    if scene.vignette > 0:
        out.append("  <defs>")
        out.append('    <radialGradient id="vignette" cx="50%" cy="50%" r="75%">')
        out.append('      <stop offset="40%" stop-color="#000" stop-opacity="0"/>')
        out.append(f'      <stop offset="100%" stop-color="#000" stop-opacity="{fmt_num(scene.vignette)}"/>')
        out.append("    </radialGradient>")
        out.append("  </defs>")
        out.append(f'  <rect width="{scene.width}" height="{scene.height}" fill="url(#vignette)"/>')
    out.append("</svg>")
    return "\n".join(out) + "\n"
