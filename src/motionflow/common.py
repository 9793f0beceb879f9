"""motionflow.common — shared utilities.

Contains: the color quantity type, color string parsing, token color
resolution against the named palette, and ${var} path resolution used by
the project manifest.
"""

import logging
import re
from typing import NamedTuple

from PIL import ImageColor

from .palette import KEYWORDS, PALETTE
from .tokens import GRADIENT_STOP_PREFIXES

logger = logging.getLogger(__name__)


# ── Color quantity ─────────────────────────────────────────────────


class Rgba(NamedTuple):
    """A color as 0-255 channels plus alpha in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0


TRANSPARENT = Rgba(0, 0, 0, 0)

COLOR_TOKEN_PREFIXES = ("bg-", "text-", "border-") + GRADIENT_STOP_PREFIXES

_FUNCTIONAL_RGB_RE = re.compile(r"rgba?\(([^)]+)\)")


# ── Color parsing ──────────────────────────────────────────────────


def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple."""
    hex_str = hex_str.lstrip("#")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


def parse_color(value) -> Rgba:
    """Parse any color representation into an Rgba.

    Accepts an Rgba or 3/4-tuple, functional "rgb()"/"rgba()" strings
    (comma or space separated, alpha as fraction or percentage), and
    everything Pillow's ImageColor understands (hex, hsl(), CSS names).
    Empty, "transparent" and unparseable inputs are fully transparent.
    """
    if value is None:
        return TRANSPARENT
    if isinstance(value, (tuple, list)):
        if len(value) == 3:
            return Rgba(*value, 1.0)
        if len(value) == 4:
            return Rgba(*value)
        return TRANSPARENT

    text = str(value).strip()
    if not text or text == "transparent":
        return TRANSPARENT

    functional = _FUNCTIONAL_RGB_RE.search(text)
    if functional:
        parts = [p for p in re.split(r"[\s,/]+", functional.group(1)) if p]
        if len(parts) >= 3:
            try:
                r, g, b = (int(float(p)) for p in parts[:3])
                alpha = _parse_alpha(parts[3]) if len(parts) > 3 else 1.0
                return Rgba(r, g, b, alpha)
            except ValueError:
                logger.debug("Malformed functional color %r", text)
                return TRANSPARENT

    try:
        rgb = ImageColor.getrgb(text)
    except ValueError:
        logger.debug("Unparseable color %r, using transparent", text)
        return TRANSPARENT
    if len(rgb) == 4:
        return Rgba(rgb[0], rgb[1], rgb[2], rgb[3] / 255)
    return Rgba(rgb[0], rgb[1], rgb[2], 1.0)


def _parse_alpha(text: str) -> float:
    if text.endswith("%"):
        return float(text[:-1]) / 100
    return float(text)


def resolve_color(value: str, palette: dict[str, dict[str, str]] = PALETTE) -> Rgba:
    """Resolve a color name: "blue-500", "white" or an arbitrary "[...]".

    An optional "/NN" suffix sets the alpha to NN percent. Raises ValueError
    for names that are neither in the palette nor an arbitrary value.
    """
    alpha = None
    if "/" in value and not value.startswith("["):
        value, _, opacity = value.partition("/")
        alpha = float(opacity) / 100

    if value.startswith("[") and value.endswith("]"):
        color = parse_color(value[1:-1].replace("_", " "))
    elif value == "transparent":
        color = TRANSPARENT
    elif value in KEYWORDS:
        color = Rgba(*parse_hex_color(KEYWORDS[value]), 1.0)
    else:
        family, _, shade = value.rpartition("-")
        if family not in palette or shade not in palette[family]:
            raise ValueError(f"Unknown color: '{value}'. Not in palette.")
        color = Rgba(*parse_hex_color(palette[family][shade]), 1.0)

    if alpha is not None:
        color = color._replace(a=alpha)
    return color


def resolve_token_color(token: str) -> Rgba | None:
    """Resolve the color a token names ("bg-red-500", "from-white", ...).

    Gradient stop tokens resolve exactly like the background token of the
    same color. Returns None for tokens that don't name a known color.
    """
    for prefix in COLOR_TOKEN_PREFIXES:
        if token.startswith(prefix):
            name = token[len(prefix):]
            break
    else:
        return None

    try:
        return resolve_color(name)
    except ValueError:
        logger.debug("Token %r does not name a known color", token)
        return None


def color_to_css(color: Rgba) -> str:
    """Serialize an Rgba to "rgba(r, g, b, a)" with integer channels."""
    r, g, b = (int(round(min(max(c, 0), 255))) for c in color[:3])
    alpha = round(min(max(color.a, 0.0), 1.0), 4)
    return f"rgba({r}, {g}, {b}, {alpha:g})"


# ── Path utilities ─────────────────────────────────────────────────


def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return paths[key]
    return re.sub(r"\$\{(\w+)\}", _replace, text)
