"""
Scene graph -> BGR uint8 frame (OpenCV + numpy, text through Pillow).

Every primitive is drawn into a small single-channel coverage mask clipped to
its bounding box, then alpha-blended into a float32 canvas. Coordinates are
passed to OpenCV in fixed point (SHIFT fractional bits) so sub-pixel motion
stays smooth between frames.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .errors import ConfigurationError
from .scene import Circle, DotGrid, Group, ImageLayer, Line, Node, Path, Rect, Scene, Text
from .util import parse_hex_color

SHIFT = 4
_ONE = 1 << SHIFT

Point = Tuple[float, float]


@lru_cache(maxsize=64)
def hex_to_bgr(color: str) -> np.ndarray:
    r, g, b = parse_hex_color(color)
    return np.array([b, g, r], dtype=np.float32)


@lru_cache(maxsize=32)
def _font(size: int) -> ImageFont.FreeTypeFont:
    return ImageFont.load_default(size=size)


def _fx(v: float) -> int:
    return int(round(v * _ONE))


# ----------------------------
# Blending
# ----------------------------

def _stamp_mask(canvas: np.ndarray, mask: np.ndarray, x0: int, y0: int,
                color: np.ndarray, alpha: float) -> None:
    """Blend `color` into canvas where mask (uint8 or float 0..255) covers, at (x0, y0)."""
    h, w = canvas.shape[:2]
    mh, mw = mask.shape[:2]
    cx0, cy0 = max(0, x0), max(0, y0)
    cx1, cy1 = min(w, x0 + mw), min(h, y0 + mh)
    if cx0 >= cx1 or cy0 >= cy1 or alpha <= 0:
        return
    m = mask[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0].astype(np.float32)
    a = (m * (min(1.0, alpha) / 255.0))[..., None]
    roi = canvas[cy0:cy1, cx0:cx1]
    canvas[cy0:cy1, cx0:cx1] = roi * (1.0 - a) + color * a


def _stamp(
    canvas: np.ndarray,
    bbox: Tuple[float, float, float, float],
    draw: Callable[[np.ndarray, int, int], None],
    color: np.ndarray,
    alpha: float,
    blur: float = 0.0,
) -> None:
    h, w = canvas.shape[:2]
    pad = int(math.ceil(blur * 3)) + 2
    x0 = max(0, int(math.floor(bbox[0])) - pad)
    y0 = max(0, int(math.floor(bbox[1])) - pad)
    x1 = min(w, int(math.ceil(bbox[2])) + pad)
    y1 = min(h, int(math.ceil(bbox[3])) + pad)
    if x0 >= x1 or y0 >= y1 or alpha <= 0:
        return
    mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
    draw(mask, x0, y0)
    if blur > 0:
        mask = cv2.GaussianBlur(mask, (0, 0), sigmaX=blur, sigmaY=blur)
    _stamp_mask(canvas, mask, x0, y0, color, alpha)


def _stroke(width: float) -> Tuple[int, float]:
    # OpenCV needs whole-pixel thickness; hairlines fade instead of thinning
    if width < 1.0:
        return 1, max(0.0, width)
    return int(round(width)), 1.0


# ----------------------------
# Polylines + dashes
# ----------------------------

def dash_polyline(points: Sequence[Point], pattern: Sequence[float]) -> List[List[Point]]:
    """Split a polyline into the "on" runs of an SVG-style dash pattern."""
    if not pattern or sum(pattern) <= 0:
        return [list(points)]
    if len(pattern) % 2:
        pattern = list(pattern) * 2

    runs: List[List[Point]] = []
    idx = 0
    remaining = pattern[0]
    on = True
    current: List[Point] = [points[0]] if points else []

    for (ax, ay), (bx, by) in zip(points, points[1:]):
        seg = math.hypot(bx - ax, by - ay)
        pos = 0.0
        while seg - pos > remaining:
            pos += remaining
            t = pos / seg
            p = (ax + (bx - ax) * t, ay + (by - ay) * t)
            if on:
                current.append(p)
                runs.append(current)
                current = []
            else:
                current = [p]
            on = not on
            idx = (idx + 1) % len(pattern)
            remaining = pattern[idx]
        remaining -= seg - pos
        if on:
            current.append((bx, by))

    if on and len(current) > 1:
        runs.append(current)
    return [r for r in runs if len(r) > 1]


def _draw_polylines(canvas: np.ndarray, runs: Sequence[Sequence[Point]], ox: float, oy: float,
                    color: str, width: float, alpha: float, blur: float = 0.0) -> None:
    runs = [r for r in runs if len(r) > 1]
    if not runs:
        return
    thickness, fade = _stroke(width)
    xs = [p[0] + ox for r in runs for p in r]
    ys = [p[1] + oy for r in runs for p in r]
    half = thickness / 2.0 + 1
    bbox = (min(xs) - half, min(ys) - half, max(xs) + half, max(ys) + half)

    def draw(mask: np.ndarray, x0: int, y0: int) -> None:
        pts = [
            np.array([[_fx(x + ox - x0), _fx(y + oy - y0)] for x, y in r], dtype=np.int32).reshape(-1, 1, 2)
            for r in runs
        ]
        cv2.polylines(mask, pts, False, 255, thickness, cv2.LINE_AA, SHIFT)

    _stamp(canvas, bbox, draw, hex_to_bgr(color), alpha * fade, blur)


def circle_points(cx: float, cy: float, r: float, start_deg: float = 0.0, steps: int = 0) -> List[Point]:
    if steps <= 0:
        steps = max(24, int(math.ceil(2 * math.pi * r / 4.0)))
    out = []
    for i in range(steps + 1):
        a = math.radians(start_deg + 360.0 * i / steps)
        out.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return out


# ----------------------------
# Node drawing
# ----------------------------

def _draw_circle(canvas: np.ndarray, c: Circle, ox: float, oy: float, alpha: float) -> None:
    cx, cy = c.cx + ox, c.cy + oy
    if c.fill:
        bbox = (cx - c.r - 1, cy - c.r - 1, cx + c.r + 1, cy + c.r + 1)

        def draw(mask: np.ndarray, x0: int, y0: int) -> None:
            cv2.circle(mask, (_fx(cx - x0), _fx(cy - y0)), max(1, _fx(c.r)), 255, -1, cv2.LINE_AA, SHIFT)

        _stamp(canvas, bbox, draw, hex_to_bgr(c.fill), alpha * c.opacity)

    if c.stroke:
        if c.dash:
            pts = circle_points(c.cx, c.cy, c.r, c.rotation)
            runs = dash_polyline(pts, c.dash)
            _draw_polylines(canvas, runs, ox, oy, c.stroke, c.stroke_width, alpha * c.opacity)
            return
        thickness, fade = _stroke(c.stroke_width)
        reach = c.r + thickness
        bbox = (cx - reach, cy - reach, cx + reach, cy + reach)

        def draw_ring(mask: np.ndarray, x0: int, y0: int) -> None:
            cv2.circle(mask, (_fx(cx - x0), _fx(cy - y0)), max(1, _fx(c.r)), 255, thickness, cv2.LINE_AA, SHIFT)

        _stamp(canvas, bbox, draw_ring, hex_to_bgr(c.stroke), alpha * c.opacity * fade)


def _draw_rect(canvas: np.ndarray, r: Rect, ox: float, oy: float, alpha: float) -> None:
    if r.width <= 0 or r.height <= 0:
        return
    x, y = r.x + ox, r.y + oy
    bbox = (x, y, x + r.width, y + r.height)

    def draw(mask: np.ndarray, x0: int, y0: int) -> None:
        p1 = (_fx(x - x0), _fx(y - y0))
        p2 = (_fx(x + r.width - x0), _fx(y + r.height - y0))
        cv2.rectangle(mask, p1, p2, 255, -1, cv2.LINE_AA, SHIFT)

    _stamp(canvas, bbox, draw, hex_to_bgr(r.fill), alpha * r.opacity)


def _draw_text(canvas: np.ndarray, t: Text, ox: float, oy: float, alpha: float) -> None:
    if not t.text:
        return
    font = _font(max(1, int(round(t.size))))
    ascent, descent = font.getmetrics()
    text_w = font.getlength(t.text)
    img = Image.new("L", (int(math.ceil(text_w)) + 4, ascent + descent + 4), 0)
    ImageDraw.Draw(img).text((2, 2 + ascent), t.text, fill=255, font=font, anchor="ls")
    mask = np.asarray(img)

    x = t.x + ox
    if t.anchor == "middle":
        x -= text_w / 2.0
    elif t.anchor == "end":
        x -= text_w
    x0 = int(round(x)) - 2
    y0 = int(round(t.y + oy)) - ascent - 2
    _stamp_mask(canvas, mask, x0, y0, hex_to_bgr(t.color), alpha * t.opacity)


def _draw_dot_grid(canvas: np.ndarray, g: DotGrid, ox: float, oy: float, alpha: float) -> None:
    step = max(1, int(round(g.spacing)))
    tile = np.zeros((step, step), dtype=np.uint8)
    cv2.circle(tile, (_fx(g.spacing / 2.0), _fx(g.spacing / 2.0)), max(1, _fx(g.radius)), 255, -1,
               cv2.LINE_AA, SHIFT)
    reps_y = int(math.ceil(g.height / step))
    reps_x = int(math.ceil(g.width / step))
    mask = np.tile(tile, (reps_y, reps_x))[: int(g.height), : int(g.width)]
    _stamp_mask(canvas, mask, int(round(ox)), int(round(oy)), hex_to_bgr(g.color), alpha * g.opacity)


def _draw_image(canvas: np.ndarray, node: ImageLayer, ox: float, oy: float, alpha: float,
                images: Dict[str, np.ndarray]) -> None:
    bitmap = images.get(node.src)
    if bitmap is None:
        raise ConfigurationError(f"no bitmap supplied for image {node.src!r}")
    ih, iw = bitmap.shape[:2]
    if iw == 0 or ih == 0:
        return

    # object-fit: cover, centred in the layer box
    cover = max(node.width / iw, node.height / ih)
    off_x = (node.width - iw * cover) / 2.0
    off_y = (node.height - ih * cover) / 2.0

    # then scale about the box centre and shift by percent of the box
    s = node.scale
    cx, cy = node.width / 2.0, node.height / 2.0
    tx = node.translate_x_pct * node.width / 100.0
    ty = node.translate_y_pct * node.height / 100.0
    m = np.array(
        [
            [s * cover, 0.0, s * off_x + cx - s * cx + s * tx + ox],
            [0.0, s * cover, s * off_y + cy - s * cy + s * ty + oy],
        ],
        dtype=np.float64,
    )

    h, w = canvas.shape[:2]
    src = bitmap[:, :, :3].astype(np.float32)
    warped = cv2.warpAffine(src, m, (w, h), flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_CONSTANT)
    cover_mask = cv2.warpAffine(
        np.ones((ih, iw), dtype=np.float32), m, (w, h),
        flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_CONSTANT,
    )
    a = (np.clip(cover_mask, 0.0, 1.0) * min(1.0, alpha))[..., None]
    canvas[:, :, :] = canvas * (1.0 - a) + warped * a


def _draw(canvas: np.ndarray, node: Node, ox: float, oy: float, alpha: float,
          images: Dict[str, np.ndarray]) -> None:
    if isinstance(node, Group):
        a = alpha * node.opacity
        if a <= 0:
            return
        for child in node.children:
            _draw(canvas, child, ox + node.x, oy + node.y, a, images)
    elif isinstance(node, Circle):
        _draw_circle(canvas, node, ox, oy, alpha)
    elif isinstance(node, Line):
        runs = dash_polyline([(node.x1, node.y1), (node.x2, node.y2)], node.dash or ())
        _draw_polylines(canvas, runs, ox, oy, node.stroke, node.stroke_width, alpha * node.opacity)
    elif isinstance(node, Path):
        runs = dash_polyline(node.points, node.dash or ()) if node.points else []
        _draw_polylines(canvas, runs, ox, oy, node.stroke, node.stroke_width,
                        alpha * node.opacity, node.blur)
    elif isinstance(node, Rect):
        _draw_rect(canvas, node, ox, oy, alpha)
    elif isinstance(node, Text):
        _draw_text(canvas, node, ox, oy, alpha)
    elif isinstance(node, DotGrid):
        _draw_dot_grid(canvas, node, ox, oy, alpha)
    elif isinstance(node, ImageLayer):
        _draw_image(canvas, node, ox, oy, alpha, images)
    else:
        raise TypeError(f"unsupported scene node: {type(node).__name__}")


def apply_vignette(canvas: np.ndarray, strength: float) -> None:
    h, w = canvas.shape[:2]
    yy, xx = np.ogrid[0:h, 0:w]
    nx = (xx - w / 2.0) / max(1.0, w / 2.0)
    ny = (yy - h / 2.0) / max(1.0, h / 2.0)
    d = np.sqrt(nx * nx + ny * ny) / math.sqrt(2.0)
    a = np.clip((d - 0.4) / 0.6, 0.0, 1.0) * float(strength)
    canvas *= (1.0 - a.astype(np.float32))[..., None]


def rasterize(scene: Scene, images: Optional[Dict[str, np.ndarray]] = None) -> np.ndarray:
    """Render `scene` to an (H, W, 3) uint8 BGR array."""
    canvas = np.empty((scene.height, scene.width, 3), dtype=np.float32)
    canvas[:, :] = hex_to_bgr(scene.background)
    _draw(canvas, scene.root, 0.0, 0.0, 1.0, images or {})
    if scene.vignette > 0:
        apply_vignette(canvas, scene.vignette)
    return np.clip(canvas, 0, 255).astype(np.uint8)
