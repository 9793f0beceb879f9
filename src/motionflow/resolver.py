"""Value resolver — the current value of a property on a target.

Non-color properties, first hit wins:
  1. the value the stage last applied (an interrupted tween resumes here),
  2. the environment's current value (read_current callback),
  3. CSS_DEFAULTS, then 0.

Gradient stop colors (--tw-gradient-from/via/to) aren't reliably readable
from the environment, so they resolve through:
  1. the last applied stop color, if not fully transparent,
  2. the target's class token for that stop ("from-blue-500"),
  3. the background color.

Other colors: last applied, environment, CSS_DEFAULTS, transparent.

Without a host environment the stage falls back to value_from_classes(),
reading the values the target's own class tokens declare.
"""

import re

from .common import TRANSPARENT, Rgba, parse_color, resolve_token_color
from .tokens import UNIT_COLOR, parse_token, to_unit_value, value_key

CSS_DEFAULTS = {
    "opacity": 1,
    "scale": 1,
    "rotate": 0,
    "translateX": 0,
    "translateY": 0,
    "blur": 0,
    "brightness": 1,
    "backgroundColor": TRANSPARENT,
    "color": Rgba(0, 0, 0, 1),
}

GRADIENT_STOP_CLASSES = {
    "--tw-gradient-from": "from-",
    "--tw-gradient-via": "via-",
    "--tw-gradient-to": "to-",
}

_LEADING_FLOAT_RE = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")


def resolve_current(target, prop: str, unit: str, key: str | None = None):
    """Resolve the value a tween should start from.

    Args:
        target: A stage Target (applied values, class tokens, read()).
        prop: Property name, e.g. "opacity" or "--tw-gradient-from".
        unit: Unit kind of the property.
        key: Per-channel key when prop is shared ("translateX", "blur").

    Returns:
        A float, or an Rgba for color units. Never raises.
    """
    key = key or prop
    if unit == UNIT_COLOR:
        if prop in GRADIENT_STOP_CLASSES:
            return _resolve_gradient_stop(target, prop)
        return _resolve_color(target, key)
    return _resolve_number(target, key)


def _resolve_number(target, key: str) -> float:
    if key in target.applied:
        value = _to_number(target.applied[key])
        if value is not None:
            return value

    value = _to_number(target.read(key))
    if value is not None:
        return value

    default = CSS_DEFAULTS.get(key, 0)
    return default if isinstance(default, (int, float)) else 0


def _resolve_color(target, key: str) -> Rgba:
    if key in target.applied:
        return parse_color(target.applied[key])
    current = target.read(key)
    if current is not None:
        return parse_color(current)
    default = CSS_DEFAULTS.get(key, TRANSPARENT)
    return default if isinstance(default, Rgba) else TRANSPARENT


def _resolve_gradient_stop(target, prop: str) -> Rgba:
    inline = target.applied.get(prop)
    if inline is not None:
        color = parse_color(inline)
        if color.a != 0:
            return color

    stop_class = target.find_class(GRADIENT_STOP_CLASSES[prop])
    if stop_class is not None:
        color = resolve_token_color(stop_class)
        if color is not None and color.a != 0:
            return color

    return _resolve_color(target, "backgroundColor")


def _to_number(value) -> float | None:
    """Coerce an environment value to float; "12.5px" → 12.5."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT_RE.match(str(value))
    return float(match.group(1)) if match else None


def value_from_classes(classes: list[str], key: str):
    """The value a list of class tokens gives key, or None if none sets it.

    Stands in for the environment when there is no host to read from (an
    offline bake): a target declared with "opacity-0 translate-y-10"
    reads opacity 0 and translateY 40. Later tokens win.
    """
    for token in reversed(classes):
        descriptor = parse_token(token)
        if descriptor is None:
            continue
        if descriptor.property in GRADIENT_STOP_CLASSES:
            continue
        if value_key(descriptor.property, token) != key:
            continue
        if descriptor.unit == UNIT_COLOR:
            color = resolve_token_color(token)
            if color is not None:
                return color
            continue
        return to_unit_value(descriptor.value, descriptor.unit)
    return None
