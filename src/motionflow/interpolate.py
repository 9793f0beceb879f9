"""Interpolation: scalar lerp, perceptual color lerp and easing curves.

Colors are mixed in CIE LCh (D65), not in raw RGB. Linear RGB mixing of
two saturated hues passes through grey; LCh keeps lightness, chroma and
hue moving independently, hue along the shorter arc.

Every easing is a pure [0, 1] → [0, 1] function with f(0) = 0, f(1) = 1.
"""

import math
from typing import Callable

import numpy as np

from .common import Rgba


# ── Scalars ───────────────────────────────────────────────────────


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


# ── Easing ────────────────────────────────────────────────────────


def ease_linear(t: float) -> float:
    return t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out. The default curve for every tween."""
    return 4 * t * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


_BACK_C1 = 1.70158
_BACK_C2 = _BACK_C1 * 1.525
_BACK_C3 = _BACK_C1 + 1


def ease_in_back(t: float) -> float:
    return _BACK_C3 * t ** 3 - _BACK_C1 * t ** 2


def ease_out_back(t: float) -> float:
    return 1 + _BACK_C3 * (t - 1) ** 3 + _BACK_C1 * (t - 1) ** 2


def ease_in_out_back(t: float) -> float:
    if t < 0.5:
        return ((2 * t) ** 2 * ((_BACK_C2 + 1) * 2 * t - _BACK_C2)) / 2
    return ((2 * t - 2) ** 2 * ((_BACK_C2 + 1) * (t * 2 - 2) + _BACK_C2) + 2) / 2


def ease_out_bounce(t: float) -> float:
    """Bounce ease-out."""
    if t < 1 / 2.75:
        return 7.5625 * t * t
    elif t < 2 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    elif t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    else:
        t -= 2.625 / 2.75
        return 7.5625 * t * t + 0.984375


def ease_in_bounce(t: float) -> float:
    return 1 - ease_out_bounce(1 - t)


def ease_in_out_bounce(t: float) -> float:
    if t < 0.5:
        return (1 - ease_out_bounce(1 - 2 * t)) / 2
    return (1 + ease_out_bounce(2 * t - 1)) / 2


_ELASTIC_C4 = (2 * math.pi) / 3
_ELASTIC_C5 = (2 * math.pi) / 4.5


def ease_in_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    return -(2 ** (10 * t - 10)) * math.sin((t * 10 - 10.75) * _ELASTIC_C4)


def ease_out_elastic(t: float) -> float:
    """Elastic ease-out."""
    if t == 0 or t == 1:
        return t
    return 2 ** (-10 * t) * math.sin((t * 10 - 0.75) * _ELASTIC_C4) + 1


def ease_in_out_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    if t < 0.5:
        return -(2 ** (20 * t - 10) * math.sin((20 * t - 11.125) * _ELASTIC_C5)) / 2
    return (2 ** (-20 * t + 10) * math.sin((20 * t - 11.125) * _ELASTIC_C5)) / 2 + 1


EASINGS: dict[str, Callable[[float], float]] = {
    "linear": ease_linear,
    "in-cubic": ease_in_cubic,
    "out-cubic": ease_out_cubic,
    "in-out-cubic": ease_in_out_cubic,
    "in-back": ease_in_back,
    "out-back": ease_out_back,
    "in-out-back": ease_in_out_back,
    "in-bounce": ease_in_bounce,
    "out-bounce": ease_out_bounce,
    "in-out-bounce": ease_in_out_bounce,
    "in-elastic": ease_in_elastic,
    "out-elastic": ease_out_elastic,
    "in-out-elastic": ease_in_out_elastic,
}

DEFAULT_EASING = ease_in_out_cubic


def get_easing(easing=None) -> Callable[[float], float]:
    """Resolve an easing given as None (default), a name, or a callable."""
    if easing is None:
        return DEFAULT_EASING
    if callable(easing):
        return easing
    if easing not in EASINGS:
        raise ValueError(
            f"Unknown easing '{easing}'. Valid: {sorted(EASINGS)}"
        )
    return EASINGS[easing]


# ── Color space conversion ────────────────────────────────────────
# sRGB (0-255) ↔ linear RGB ↔ XYZ (D65) ↔ CIE Lab ↔ LCh.

_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
_XYZ_TO_RGB = np.linalg.inv(_RGB_TO_XYZ)
_WHITE_D65 = np.array([0.95047, 1.0, 1.08883])

_LAB_EPSILON = (6 / 29) ** 3
_LAB_KAPPA = 3 * (6 / 29) ** 2

# Below this chroma the hue is meaningless (greys, black, white).
_ACHROMATIC = 1e-4


def _srgb_to_lch(rgb) -> np.ndarray:
    c = np.asarray(rgb, dtype=float) / 255.0
    linear = np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)
    xyz = _RGB_TO_XYZ @ linear / _WHITE_D65
    f = np.where(xyz > _LAB_EPSILON, np.cbrt(xyz), xyz / _LAB_KAPPA + 4 / 29)
    lightness = 116 * f[1] - 16
    a = 500 * (f[0] - f[1])
    b = 200 * (f[1] - f[2])
    chroma = math.hypot(a, b)
    hue = math.degrees(math.atan2(b, a)) % 360
    return np.array([lightness, chroma, hue])


def _lch_to_srgb(lch) -> np.ndarray:
    lightness, chroma, hue = lch
    h = math.radians(hue)
    a = chroma * math.cos(h)
    b = chroma * math.sin(h)
    fy = (lightness + 16) / 116
    f = np.array([fy + a / 500, fy, fy - b / 200])
    xyz = np.where(f > 6 / 29, f ** 3, _LAB_KAPPA * (f - 4 / 29)) * _WHITE_D65
    linear = _XYZ_TO_RGB @ xyz
    linear = np.clip(linear, 0.0, 1.0)
    c = np.where(
        linear <= 0.0031308,
        linear * 12.92,
        1.055 * np.power(linear, 1 / 2.4) - 0.055,
    )
    return np.clip(c * 255.0, 0.0, 255.0)


def lerp_color(start, end, t: float) -> Rgba:
    """Interpolate two colors in LCh space.

    The endpoints are returned unchanged at t <= 0 and t >= 1. When one side
    is achromatic its hue is borrowed from the other side so a fade from
    white into blue doesn't swing through unrelated hues. Alpha is linear.
    """
    start = Rgba(*start)
    end = Rgba(*end)
    if t <= 0:
        return start
    if t >= 1:
        return end

    l1, c1, h1 = _srgb_to_lch(start[:3])
    l2, c2, h2 = _srgb_to_lch(end[:3])

    if c1 < _ACHROMATIC and c2 >= _ACHROMATIC:
        h1 = h2
    elif c2 < _ACHROMATIC and c1 >= _ACHROMATIC:
        h2 = h1

    dh = h2 - h1
    if dh > 180:
        dh -= 360
    elif dh < -180:
        dh += 360

    mixed = np.array([
        lerp(l1, l2, t),
        lerp(c1, c2, t),
        (h1 + dh * t) % 360,
    ])
    r, g, b = _lch_to_srgb(mixed)
    return Rgba(float(r), float(g), float(b), lerp(start.a, end.a, t))
