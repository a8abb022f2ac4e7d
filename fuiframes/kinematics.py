"""
Closed-form entity motion.

Position is a pure function of (entity, frame, total_frames): a primary orbit
plus a faster secondary wobble whose y component runs at a different speed
than its x component, so the wobble traces a Lissajous figure rather than a
circle. Nothing is integrated, so frames can be evaluated in any order.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .seeded import Entity


# y speed of the secondary wobble relative to its x speed
WOBBLE_Y_RATIO = 1.3


def loop_angle(frame: float, total_frames: int) -> float:
    """Frame -> angular time in [0, 2π); frame == total_frames wraps to 0."""
    if total_frames <= 0:
        raise ConfigurationError(f"total_frames must be > 0, got {total_frames}")
    return ((frame % total_frames) / total_frames) * math.pi * 2


def entity_position(entity: "Entity", frame: float, total_frames: int) -> Tuple[float, float]:
    t = loop_angle(frame, total_frames)

    a = t * entity.orbit_speed + entity.orbit_phase
    px = math.cos(a) * entity.orbit_radius
    py = math.sin(a) * entity.orbit_radius

    sx = math.cos(t * entity.secondary_speed + entity.secondary_phase) * entity.secondary_radius
    sy = math.sin(t * entity.secondary_speed_y + entity.secondary_phase) * entity.secondary_radius

    return entity.base_x + px + sx, entity.base_y + py + sy


def positions(entities: Sequence["Entity"], frame: float, total_frames: int) -> np.ndarray:
    """(N, 2) float64 array of entity positions at `frame`."""
    t = loop_angle(frame, total_frames)
    if not entities:
        return np.zeros((0, 2), dtype=np.float64)

    fields = np.array(
        [
            (
                e.base_x, e.base_y,
                e.orbit_radius, e.orbit_speed, e.orbit_phase,
                e.secondary_radius, e.secondary_speed, e.secondary_speed_y, e.secondary_phase,
            )
            for e in entities
        ],
        dtype=np.float64,
    )
    bx, by, orad, ospd, ophs, srad, sspd, sspd_y, sphs = fields.T

    a = t * ospd + ophs
    x = bx + np.cos(a) * orad + np.cos(t * sspd + sphs) * srad
    y = by + np.sin(a) * orad + np.sin(t * sspd_y + sphs) * srad
    return np.stack([x, y], axis=1)
