"""
Seeded per-entity attributes.

Every attribute of an entity is drawn from `seeded_random(index * 1000 + k)`
for a fixed offset k, so the same index always yields the same entity and no
random generator state is carried between draws.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, Tuple

from .errors import ConfigurationError
from .kinematics import WOBBLE_Y_RATIO


SEED_STRIDE = 1000
BASE_PADDING = 200.0

DEFAULT_PALETTE_TAIL = ("#0047AB", "#6495ED", "#00308F")


def seeded_random(seed: int) -> float:
    arg = seed * 9999
    # beyond float range sin has no value; such seeds map to 0 like seed 0
    if abs(arg) > sys.float_info.max:
        return 0.0
    x = math.sin(arg) * 10000
    r = x - math.floor(x)
    # x - floor(x) rounds up to 1.0 for tiny negative x
    return r if r < 1.0 else 0.0


@dataclass(frozen=True)
class Entity:
    id: int
    base_x: float
    base_y: float
    orbit_radius: float
    orbit_speed: float
    orbit_phase: float
    secondary_radius: float
    secondary_speed: float
    secondary_speed_y: float
    secondary_phase: float
    size: float
    color: str


def _loop_speed(raw: float) -> float:
    # whole cycles per loop; round half up so 6.5 -> 7 regardless of platform
    return float(max(1, int(math.floor(raw + 0.5))))


def make_entity(
    index: int,
    width: float,
    height: float,
    node_size: float,
    palette: Sequence[str],
    seamless_loop: bool = False,
    wobble_y_ratio: float = WOBBLE_Y_RATIO,
) -> Entity:
    seed = index * SEED_STRIDE

    def r(k: int) -> float:
        return seeded_random(seed + k)

    pad_x = min(BASE_PADDING, width * 0.5)
    pad_y = min(BASE_PADDING, height * 0.5)
    base_x = pad_x + r(1) * (width - pad_x * 2)
    base_y = pad_y + r(2) * (height - pad_y * 2)

    orbit_speed = 0.5 + r(4) * 1.5           # 0.5 .. 2 cycles per loop
    secondary_speed = 2.0 + r(7) * 3.0       # faster wobble
    secondary_speed_y = secondary_speed * wobble_y_ratio
    if seamless_loop:
        orbit_speed = _loop_speed(orbit_speed)
        secondary_speed = _loop_speed(secondary_speed)
        secondary_speed_y = _loop_speed(secondary_speed * wobble_y_ratio)

    color_idx = int(math.floor(r(10) * len(palette)))
    return Entity(
        id=index,
        base_x=base_x,
        base_y=base_y,
        orbit_radius=30.0 + r(3) * 100.0,
        orbit_speed=orbit_speed,
        orbit_phase=r(5) * math.pi * 2,
        secondary_radius=10.0 + r(6) * 30.0,
        secondary_speed=secondary_speed,
        secondary_speed_y=secondary_speed_y,
        secondary_phase=r(8) * math.pi * 2,
        size=node_size * (0.6 + r(9) * 0.8),
        color=palette[min(color_idx, len(palette) - 1)],
    )


@lru_cache(maxsize=32)
def generate_entities(
    count: int,
    width: float,
    height: float,
    node_size: float,
    palette: Tuple[str, ...],
    seamless_loop: bool = False,
    wobble_y_ratio: float = WOBBLE_Y_RATIO,
) -> Tuple[Entity, ...]:
    """Entities 0..count-1 for one composition configuration.

    Cached on the argument values only; the result is an immutable tuple, so
    sharing it between frames cannot leak state from one frame to another.
    """
    if count < 0:
        raise ConfigurationError(f"entity count must be >= 0, got {count}")
    if not palette:
        raise ConfigurationError("palette must contain at least one color")
    return tuple(
        make_entity(i, width, height, node_size, palette, seamless_loop, wobble_y_ratio)
        for i in range(count)
    )


def graph_palette(accent: str, secondary: str) -> Tuple[str, ...]:
    return (accent, secondary) + DEFAULT_PALETTE_TAIL
