"""Style token parser — turns "name-value" tokens into animatable quantities.

A style token is a compact string such as "w-[50px]", "opacity-100",
"-translate-x-8" or "rotate-[-2]". Each token maps to exactly one
(property, unit) pair, or to nothing at all (an unknown token is a no-op).

Token values live in a 1/4 base scale: "w-4" is 4 units = 16px, and the
arbitrary form "w-[16px]" parses to the same 4. to_unit_value() converts a
token-space number into the unit the property is actually expressed in.

Supported forms:
  - Named constant:    "rounded-lg", "tracking-wide", "text-2xl"
  - Border tokens:     "border-2" is a width, "border-red-500" a color
  - Arbitrary value:   "prefix-[payload]" with an optional "-" inside the
                       payload and a unit suffix (px, rem, %, or opaque)
  - Scaled literal:    "prefix-<integer>", e.g. "mt-8", "-rotate-45"
"""

import re
from typing import NamedTuple


# ── Unit kinds ─────────────────────────────────────────────────────

UNIT_PX = "px"
UNIT_REM = "rem"
UNIT_EM = "em"
UNIT_DEG = "deg"
UNIT_PERCENT = "percent"
UNIT_COLOR = "color"
UNIT_NUMBER = "number"


# ── Property table ─────────────────────────────────────────────────
# Token prefix → (property, unit). Matching is longest-prefix-first.

PROPERTY_MAP = {
    # Sizing
    "w-": ("width", UNIT_PX),
    "h-": ("height", UNIT_PX),
    "min-w-": ("minWidth", UNIT_PX),
    "min-h-": ("minHeight", UNIT_PX),
    "max-w-": ("maxWidth", UNIT_PX),
    "max-h-": ("maxHeight", UNIT_PX),

    # Spacing
    "m-": ("margin", UNIT_PX),
    "mt-": ("marginTop", UNIT_PX),
    "mb-": ("marginBottom", UNIT_PX),
    "ml-": ("marginLeft", UNIT_PX),
    "mr-": ("marginRight", UNIT_PX),
    "p-": ("padding", UNIT_PX),
    "pt-": ("paddingTop", UNIT_PX),
    "pb-": ("paddingBottom", UNIT_PX),
    "pl-": ("paddingLeft", UNIT_PX),
    "pr-": ("paddingRight", UNIT_PX),

    # Typography
    "text-": ("color", UNIT_COLOR),
    "tracking-": ("letterSpacing", UNIT_EM),
    "leading-": ("lineHeight", UNIT_REM),
    "font-": ("fontWeight", UNIT_NUMBER),

    # Borders & radius
    "border-": ("borderWidth", UNIT_PX),
    "rounded-": ("borderRadius", UNIT_PX),

    # Colors & gradients
    "bg-": ("backgroundColor", UNIT_COLOR),
    "from-": ("--tw-gradient-from", UNIT_COLOR),
    "via-": ("--tw-gradient-via", UNIT_COLOR),
    "to-": ("--tw-gradient-to", UNIT_COLOR),

    # Transforms
    "rotate-": ("rotate", UNIT_DEG),
    "scale-": ("scale", UNIT_PERCENT),
    "translate-x-": ("translate", UNIT_PX),
    "translate-y-": ("translate", UNIT_PX),

    # Effects
    "opacity-": ("opacity", UNIT_PERCENT),
    "blur-": ("filter", UNIT_PX),
    "brightness-": ("filter", UNIT_PERCENT),
}

_PREFIXES_LONGEST_FIRST = sorted(PROPERTY_MAP, key=len, reverse=True)

# Bare tokens without a value part.
BARE_TOKENS = {
    "rounded": ("borderRadius", UNIT_PX),
    "blur": ("filter", UNIT_PX),
}

# "text-<size>" is a font size, every other "text-*" is a color.
FONT_SIZE_NAMES = {
    "xs", "sm", "base", "lg", "xl",
    "2xl", "3xl", "4xl", "5xl", "6xl", "7xl", "8xl", "9xl",
}

GRADIENT_STOP_PREFIXES = ("from-", "via-", "to-")

# "border-<n>" and "border-[<number>...]" are widths, every other "border-*"
# (palette names, "border-[#fff]") is a color.
BORDER_WIDTH_RE = re.compile(r"^(\d+|\[-?[\d.].*\])$")


# ── Named values ───────────────────────────────────────────────────
# Exact-match constants in token space (lengths in 1/4 units).

NAMED_VALUES = {
    "rounded-none": 0,
    "rounded-sm": 0.5,
    "rounded": 1,
    "rounded-md": 1.5,
    "rounded-lg": 2,
    "rounded-xl": 3,
    "rounded-2xl": 4,
    "rounded-3xl": 6,
    "rounded-full": 9999 / 4,
    "tracking-tighter": -0.05,
    "tracking-tight": -0.025,
    "tracking-normal": 0,
    "tracking-wide": 0.025,
    "tracking-wider": 0.05,
    "tracking-widest": 0.1,
    "opacity-0": 0,
    "opacity-100": 100,
    "blur-none": 0,
    "blur-sm": 1,
    "blur": 2,
    "blur-md": 3,
    "blur-lg": 4,
    "blur-xl": 6,
    "blur-2xl": 10,
    "blur-3xl": 16,
    "text-xs": 3,
    "text-sm": 3.5,
    "text-base": 4,
    "text-lg": 4.5,
    "text-xl": 5,
    "text-2xl": 6,
    "text-3xl": 7.5,
    "text-4xl": 9,
    "text-5xl": 12,
    "text-6xl": 15,
    "text-7xl": 18,
    "text-8xl": 24,
    "text-9xl": 32,
}


# ── Patterns ───────────────────────────────────────────────────────

ARBITRARY_RE = re.compile(r"^[a-z-]+-\[(.+)\]$")
NUMERIC_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)(.*)$")
SCALED_RE = re.compile(r"-(\d+)$")


class Descriptor(NamedTuple):
    """A parsed style token.

    value is in token space; use to_unit_value() for the unit value.
    Color tokens carry value 0; their color is resolved separately.
    """

    property: str
    unit: str
    value: float
    token: str


# ── Lookup ─────────────────────────────────────────────────────────


def property_for_token(token: str) -> tuple[str, str] | None:
    """Return the (property, unit) pair a token animates, or None."""
    lookup = token[1:] if token.startswith("-") else token

    if lookup in BARE_TOKENS:
        return BARE_TOKENS[lookup]

    for prefix in _PREFIXES_LONGEST_FIRST:
        if lookup.startswith(prefix):
            if prefix == "text-" and lookup[len(prefix):] in FONT_SIZE_NAMES:
                return ("fontSize", UNIT_REM)
            if prefix == "border-" and not BORDER_WIDTH_RE.match(lookup[len(prefix):]):
                return ("borderColor", UNIT_COLOR)
            return PROPERTY_MAP[prefix]
    return None


def parse_token_value(token: str) -> float:
    """Parse the numeric part of a token into token space.

    Unknown or malformed tokens resolve to 0 rather than raising, so one
    bad token never aborts a whole animation.
    """
    if token in NAMED_VALUES:
        return NAMED_VALUES[token]

    is_negative = token.startswith("-")
    clean = token[1:] if is_negative else token

    arbitrary = ARBITRARY_RE.match(clean)
    if arbitrary:
        payload = arbitrary.group(1)
        payload_negative = payload.startswith("-")
        if payload_negative:
            payload = payload[1:]

        numeric = NUMERIC_RE.match(payload)
        if not numeric:
            return 0
        num = float(numeric.group(1))
        unit = numeric.group(2).strip()

        # Negation from the prefix and from the payload cancel each other.
        if is_negative != payload_negative:
            num = -num

        if unit == "px":
            return num / 4
        if unit == "rem":
            return num * 4
        return num

    if property_for_token(token) is None:
        return 0

    scaled = SCALED_RE.search(clean)
    if scaled:
        val = int(scaled.group(1))
        return -val if is_negative else val
    return 0


def parse_token(token: str) -> Descriptor | None:
    """Parse a token into a Descriptor, or None when it animates nothing."""
    prop_def = property_for_token(token)
    if prop_def is None:
        return None
    prop, unit = prop_def
    value = 0.0 if unit == UNIT_COLOR else float(parse_token_value(token))
    return Descriptor(prop, unit, value, token)


def split_tokens(text: str | None) -> list[str]:
    """Split a space-separated token string, dropping empty entries."""
    if not text:
        return []
    return [t for t in text.split() if t.strip()]


def is_gradient_stop(token: str) -> bool:
    return token.startswith(GRADIENT_STOP_PREFIXES)


# ── Unit conversion & serialization ────────────────────────────────


def to_unit_value(value: float, unit: str) -> float:
    """Convert a token-space number into the unit's own scale."""
    if unit == UNIT_PX:
        return value * 4
    if unit == UNIT_REM:
        return value * 0.25
    if unit == UNIT_PERCENT:
        return value / 100
    return value


def value_key(prop: str, token: str) -> str:
    """Key under which a property's current value is tracked per target.

    translate and filter are shared by two independent channels (x/y axis,
    blur/brightness); the originating token decides which one.
    """
    if prop == "translate":
        return "translateY" if "translate-y" in token else "translateX"
    if prop == "filter":
        return "brightness" if "brightness" in token else "blur"
    return prop


def format_number(value: float) -> str:
    """Format a float compactly: 12.0 → "12", 0.12500 → "0.125"."""
    text = f"{round(value, 4):.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def serialize_value(prop: str, unit: str, value: float, token: str = "") -> str:
    """Serialize a unit value for the apply sink.

    translate is serialized per axis by the caller (it needs both axes);
    this handles the single-channel case.
    """
    if prop == "filter":
        if value_key(prop, token) == "brightness":
            return f"brightness({format_number(value * 100)}%)"
        return f"blur({format_number(value)}px)"

    if unit in (UNIT_PX, UNIT_REM, UNIT_EM, UNIT_DEG):
        return f"{format_number(value)}{unit}"
    return format_number(value)
