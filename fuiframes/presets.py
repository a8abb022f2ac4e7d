"""
Image animation presets: scale and pan (percent of frame size) from first to
last frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple

from .errors import ConfigurationError
from .interp import interpolate


@dataclass(frozen=True)
class AnimationPreset:
    start_scale: float
    end_scale: float
    start_x: float
    end_x: float
    start_y: float
    end_y: float


PRESETS: Dict[str, AnimationPreset] = {
    "zoom-in": AnimationPreset(
        start_scale=1.0, end_scale=1.3,
        start_x=0.0, end_x=0.0,
        start_y=0.0, end_y=0.0,
    ),
    "zoom-out": AnimationPreset(
        start_scale=1.3, end_scale=1.0,
        start_x=0.0, end_x=0.0,
        start_y=0.0, end_y=0.0,
    ),
    "pan-left": AnimationPreset(
        start_scale=1.2, end_scale=1.2,
        start_x=10.0, end_x=-10.0,
        start_y=0.0, end_y=0.0,
    ),
    "pan-right": AnimationPreset(
        start_scale=1.2, end_scale=1.2,
        start_x=-10.0, end_x=10.0,
        start_y=0.0, end_y=0.0,
    ),
    "pan-up": AnimationPreset(
        start_scale=1.2, end_scale=1.2,
        start_x=0.0, end_x=0.0,
        start_y=10.0, end_y=-10.0,
    ),
    "pan-down": AnimationPreset(
        start_scale=1.2, end_scale=1.2,
        start_x=0.0, end_x=0.0,
        start_y=-10.0, end_y=10.0,
    ),
    "ken-burns": AnimationPreset(
        start_scale=1.0, end_scale=1.25,
        start_x=-5.0, end_x=5.0,
        start_y=-3.0, end_y=3.0,
    ),
}

PRESET_HELP = {
    "zoom-in": "Slowly zoom into the image",
    "zoom-out": "Slowly zoom out from the image",
    "pan-left": "Pan from right to left",
    "pan-right": "Pan from left to right",
    "pan-up": "Pan from bottom to top",
    "pan-down": "Pan from top to bottom",
    "ken-burns": "Classic Ken Burns effect (zoom + pan)",
}


def get_preset(name: str) -> AnimationPreset:
    preset = PRESETS.get(name)
    if preset is None:
        raise ConfigurationError(
            f'Invalid preset "{name}". Valid presets: {", ".join(PRESETS)}'
        )
    return preset


class PresetState(NamedTuple):
    scale: float
    offset_x_pct: float
    offset_y_pct: float


def preset_state(name: str, frame: float, total_frames: int) -> PresetState:
    p = get_preset(name)
    if total_frames <= 0:
        raise ConfigurationError(f"total_frames must be > 0, got {total_frames}")
    span = [0, total_frames]
    return PresetState(
        scale=interpolate(frame, span, [p.start_scale, p.end_scale], extrapolate_right="clamp"),
        offset_x_pct=interpolate(frame, span, [p.start_x, p.end_x], extrapolate_right="clamp"),
        offset_y_pct=interpolate(frame, span, [p.start_y, p.end_y], extrapolate_right="clamp"),
    )
