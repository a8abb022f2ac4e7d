"""
Per-frame proximity graph.

All unordered pairs closer than `threshold` become edges whose opacity falls
off quadratically with distance: 0.8 at distance 0, 0 at the threshold.

This is O(N²) in time and memory on every frame. Entity counts are capped at
MAX_ENTITIES because frames are rendered offline and independently; the cap
is a known scaling limit of the design rather than a tuning knob.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Tuple

import numpy as np

from .errors import ConfigurationError


FALLOFF_EXPONENT = 2.0
MAX_EDGE_OPACITY = 0.8
MAX_ENTITIES = 500


class Edge(NamedTuple):
    i: int
    j: int
    opacity: float


def edge_opacity(distance: float, threshold: float) -> float:
    if threshold <= 0 or distance >= threshold:
        return 0.0
    d = max(0.0, distance) / threshold
    return (1.0 - d) ** FALLOFF_EXPONENT * MAX_EDGE_OPACITY


def build_edges(points, threshold: float) -> List[Edge]:
    """Edges (i < j) between points closer than `threshold`, sorted by (i, j)."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    n = pts.shape[0]
    if n > MAX_ENTITIES:
        raise ConfigurationError(f"proximity graph supports at most {MAX_ENTITIES} points, got {n}")
    if n < 2 or threshold <= 0:
        return []

    diff = pts[:, None, :] - pts[None, :, :]
    dist = np.sqrt(np.sum(diff * diff, axis=-1))

    # upper triangle only: i < j, no self pairs; triu_indices is row-major so
    # the output is already ordered by i then j
    iu, ju = np.triu_indices(n, k=1)
    d = dist[iu, ju]
    keep = d < threshold
    iu, ju, d = iu[keep], ju[keep], d[keep]

    opacity = (1.0 - d / threshold) ** FALLOFF_EXPONENT * MAX_EDGE_OPACITY
    return [Edge(int(i), int(j), float(o)) for i, j, o in zip(iu, ju, opacity)]


def curve_control_point(
    x1: float, y1: float, x2: float, y2: float, bend: float = 0.05
) -> Tuple[float, float]:
    """Quadratic control point offset perpendicular to the segment by `bend` * length."""
    mx = (x1 + x2) / 2
    my = (y1 + y2) / 2
    dx = x2 - x1
    dy = y2 - y1
    length = math.hypot(dx, dy)
    if length == 0.0:
        return mx, my
    off = length * bend
    return mx + (-dy / length) * off, my + (dx / length) * off
