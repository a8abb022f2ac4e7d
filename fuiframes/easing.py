"""
Easing curves: functions mapping normalized progress [0, 1] -> [0, 1].

Base curves are "ease-in" shaped; wrap them with `out` or `in_out` to get the
mirrored or symmetric variants, e.g. `in_out(ease)`.
"""

from __future__ import annotations

import math
from typing import Callable

from .errors import ConfigurationError

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def quad(t: float) -> float:
    return t * t


def cubic(t: float) -> float:
    return t * t * t


def poly(n: float) -> EasingFn:
    return lambda t: t ** n


def sin(t: float) -> float:
    return 1.0 - math.cos(t * math.pi / 2)


def circle(t: float) -> float:
    return 1.0 - math.sqrt(max(0.0, 1.0 - t * t))


def exp(t: float) -> float:
    return 2.0 ** (10.0 * (t - 1.0))


def back(s: float = 1.70158) -> EasingFn:
    return lambda t: t * t * ((s + 1.0) * t - s)


def elastic(bounciness: float = 1.0) -> EasingFn:
    p = bounciness * math.pi
    return lambda t: 1.0 - math.cos(t * math.pi / 2) ** 3 * math.cos(t * p)


def bounce(t: float) -> float:
    if t < 1 / 2.75:
        return 7.5625 * t * t
    if t < 2 / 2.75:
        t2 = t - 1.5 / 2.75
        return 7.5625 * t2 * t2 + 0.75
    if t < 2.5 / 2.75:
        t2 = t - 2.25 / 2.75
        return 7.5625 * t2 * t2 + 0.9375
    t2 = t - 2.625 / 2.75
    return 7.5625 * t2 * t2 + 0.984375


def in_(easing: EasingFn) -> EasingFn:
    return easing


def out(easing: EasingFn) -> EasingFn:
    return lambda t: 1.0 - easing(1.0 - t)


def in_out(easing: EasingFn) -> EasingFn:
    def fn(t: float) -> float:
        if t < 0.5:
            return easing(t * 2.0) / 2.0
        return 1.0 - easing((1.0 - t) * 2.0) / 2.0

    return fn


# ----------------------------
# Cubic bezier (CSS timing-function style)
# ----------------------------

_NEWTON_ITERATIONS = 4
_NEWTON_MIN_SLOPE = 0.001
_SUBDIVISION_PRECISION = 1e-7
_SUBDIVISION_MAX_ITERATIONS = 10
_SPLINE_TABLE_SIZE = 11
_SAMPLE_STEP = 1.0 / (_SPLINE_TABLE_SIZE - 1)


def _a(a1: float, a2: float) -> float:
    return 1.0 - 3.0 * a2 + 3.0 * a1


def _b(a1: float, a2: float) -> float:
    return 3.0 * a2 - 6.0 * a1


def _c(a1: float) -> float:
    return 3.0 * a1


def _calc_bezier(t: float, a1: float, a2: float) -> float:
    return ((_a(a1, a2) * t + _b(a1, a2)) * t + _c(a1)) * t


def _slope(t: float, a1: float, a2: float) -> float:
    return 3.0 * _a(a1, a2) * t * t + 2.0 * _b(a1, a2) * t + _c(a1)


def bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFn:
    """Cubic bezier through (0,0), (x1,y1), (x2,y2), (1,1); x1/x2 must lie in [0, 1]."""
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ConfigurationError(f"bezier x values must be in [0, 1], got x1={x1} x2={x2}")

    if x1 == y1 and x2 == y2:
        return linear

    samples = [_calc_bezier(i * _SAMPLE_STEP, x1, x2) for i in range(_SPLINE_TABLE_SIZE)]

    def t_for_x(x: float) -> float:
        start = 0.0
        i = 1
        last = _SPLINE_TABLE_SIZE - 1
        while i != last and samples[i] <= x:
            start += _SAMPLE_STEP
            i += 1
        i -= 1

        dist = (x - samples[i]) / (samples[i + 1] - samples[i])
        guess = start + dist * _SAMPLE_STEP

        slope = _slope(guess, x1, x2)
        if slope >= _NEWTON_MIN_SLOPE:
            for _ in range(_NEWTON_ITERATIONS):
                s = _slope(guess, x1, x2)
                if s == 0.0:
                    break
                guess -= (_calc_bezier(guess, x1, x2) - x) / s
            return guess
        if slope == 0.0:
            return guess

        lo, hi = start, start + _SAMPLE_STEP
        cur = guess
        for _ in range(_SUBDIVISION_MAX_ITERATIONS):
            cur = lo + (hi - lo) / 2.0
            err = _calc_bezier(cur, x1, x2) - x
            if abs(err) <= _SUBDIVISION_PRECISION:
                break
            if err > 0.0:
                hi = cur
            else:
                lo = cur
        return cur

    def fn(t: float) -> float:
        if t == 0.0 or t == 1.0:
            return t
        return _calc_bezier(t_for_x(t), y1, y2)

    return fn


ease = bezier(0.42, 0.0, 1.0, 1.0)


NAMED = {
    "linear": linear,
    "ease": ease,
    "ease-in": ease,
    "ease-out": out(ease),
    "ease-in-out": in_out(ease),
    "quad": quad,
    "cubic": cubic,
    "sin": sin,
    "circle": circle,
    "exp": exp,
    "bounce": bounce,
}


def by_name(name: str) -> EasingFn:
    try:
        return NAMED[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown easing {name!r}; valid: {', '.join(sorted(NAMED))}"
        ) from None
