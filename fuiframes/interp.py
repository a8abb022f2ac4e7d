"""
Frame -> value mapping.

Two mechanisms live here and should not be confused:

* `interpolate` / `KeyframeTable`: piecewise-linear keyframes with per-side
  extrapolation and optional easing.
* `pulse` / `blink`: direct periodic functions of the frame, used for
  breathing opacities. They never go through a keyframe table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .easing import EasingFn
from .errors import ConfigurationError

EXTRAPOLATIONS = ("extend", "clamp", "identity")


def _check_ranges(input_range: Sequence[float], output_range: Sequence[float]) -> None:
    if len(input_range) != len(output_range):
        raise ConfigurationError(
            f"input_range ({len(input_range)}) and output_range ({len(output_range)}) "
            "must have the same length"
        )
    if len(input_range) < 2:
        raise ConfigurationError(f"need at least 2 keyframes, got {len(input_range)}")
    for name, rng in (("input_range", input_range), ("output_range", output_range)):
        for v in rng:
            if not math.isfinite(v):
                raise ConfigurationError(f"{name} must contain finite numbers, got {list(rng)}")
    for a, b in zip(input_range, input_range[1:]):
        if not b > a:
            raise ConfigurationError(f"input_range must be strictly increasing, got {list(input_range)}")


def _check_policy(name: str, policy: str) -> None:
    if policy not in EXTRAPOLATIONS:
        raise ConfigurationError(
            f"{name} must be one of {', '.join(EXTRAPOLATIONS)}; got {policy!r}"
        )


def _find_segment(value: float, input_range: Sequence[float]) -> int:
    for i in range(1, len(input_range) - 1):
        if input_range[i] >= value:
            return i - 1
    return len(input_range) - 2


def _interpolate_segment(
    value: float,
    in_lo: float,
    in_hi: float,
    out_lo: float,
    out_hi: float,
    easing: Optional[EasingFn],
    extrapolate_left: str,
    extrapolate_right: str,
) -> float:
    result = value

    if result < in_lo:
        if extrapolate_left == "identity":
            return result
        if extrapolate_left == "clamp":
            result = in_lo
    if result > in_hi:
        if extrapolate_right == "identity":
            return result
        if extrapolate_right == "clamp":
            result = in_hi

    if out_lo == out_hi:
        return out_lo

    result = (result - in_lo) / (in_hi - in_lo)
    if easing is not None:
        result = easing(result)
    return result * (out_hi - out_lo) + out_lo


def interpolate(
    value: float,
    input_range: Sequence[float],
    output_range: Sequence[float],
    extrapolate_left: str = "extend",
    extrapolate_right: str = "extend",
    easing: Optional[EasingFn] = None,
) -> float:
    """Map `value` through the keyframes (input_range[i] -> output_range[i]).

    Outside the input domain each side follows its own policy: "extend"
    continues the nearest segment's slope, "clamp" pins to the boundary
    output, "identity" returns `value` untouched. Easing remaps the
    normalized position inside the bracketing segment.
    """
    if value is None or not math.isfinite(value):
        raise ConfigurationError(f"cannot interpolate non-finite value {value!r}")
    _check_ranges(input_range, output_range)
    _check_policy("extrapolate_left", extrapolate_left)
    _check_policy("extrapolate_right", extrapolate_right)

    i = _find_segment(value, input_range)
    return _interpolate_segment(
        value,
        input_range[i],
        input_range[i + 1],
        output_range[i],
        output_range[i + 1],
        easing,
        extrapolate_left,
        extrapolate_right,
    )


@dataclass(frozen=True)
class KeyframeTable:
    frames: Tuple[float, ...]
    values: Tuple[float, ...]
    extrapolate_left: str = "extend"
    extrapolate_right: str = "extend"
    easing: Optional[EasingFn] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "frames", tuple(float(f) for f in self.frames))
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))
        _check_ranges(self.frames, self.values)
        _check_policy("extrapolate_left", self.extrapolate_left)
        _check_policy("extrapolate_right", self.extrapolate_right)

    @classmethod
    def clamped(cls, frames: Sequence[float], values: Sequence[float],
                easing: Optional[EasingFn] = None) -> "KeyframeTable":
        return cls(tuple(frames), tuple(values), "clamp", "clamp", easing)

    def __call__(self, frame: float) -> float:
        return interpolate(
            frame,
            self.frames,
            self.values,
            extrapolate_left=self.extrapolate_left,
            extrapolate_right=self.extrapolate_right,
            easing=self.easing,
        )


# ----------------------------
# Periodic functions of frame
# ----------------------------

def pulse(frame: float, base: float = 0.8, amplitude: float = 0.2, rate: float = 0.1) -> float:
    return base + amplitude * math.sin(frame * rate)


def blink(frame: float, rate: float = 0.15, floor: float = 0.3, amplitude: float = 0.5) -> float:
    return floor + amplitude * abs(math.sin(frame * rate))
