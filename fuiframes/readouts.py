"""Numeric readouts that tick upward with the frame (instrument-panel text)."""

from __future__ import annotations

import math
from typing import NamedTuple

from .interp import interpolate


def pad_digits(n: int, digits: int) -> str:
    # zero-pad then keep the trailing `digits` characters, so counters roll over
    return str(n).rjust(digits, "0")[-digits:]


def animated_number(value: float, frame: float, speed: float = 1.0, digits: int = 3) -> str:
    return pad_digits(int(math.floor(value + frame * speed * 0.5)), digits)


class Readout(NamedTuple):
    main: str
    decimal: str
    sub: str


def digital_readout(main_value: float, sub_value: float, frame: float, speed: float = 1.0) -> Readout:
    main = int(math.floor(main_value + frame * speed * 0.3))
    sub = int(math.floor(sub_value + frame * speed * 0.7))
    return Readout(
        main=pad_digits(main, 3),
        decimal=str(int(math.fmod(sub, 10))),
        sub=pad_digits(sub, 3),
    )


def rolling_number(
    value: float,
    frame: float,
    speed: float = 1.0,
    digits: int = 3,
    delay: float = 0.0,
) -> str:
    """Counter that jitters for the first 30 frames after `delay`, then settles."""
    f = max(0.0, frame - delay)
    settling = interpolate(f, [0, 30], [10, 0], extrapolate_right="clamp")
    noise = math.sin(f * speed * 2) * settling
    return pad_digits(int(math.floor(value + f * speed * 0.3 + noise)), digits)


def coordinate(value: float, frame: float, rate: float = 0.0002) -> str:
    return f"{value + frame * rate:.4f}"
