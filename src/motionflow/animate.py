"""Per-target animations built from style tokens.

    animate(stage, "title", "opacity-100 translate-y-0", 1.5)
    animate(stage, "card", "opacity-0 scale-50", "opacity-100 scale-100", 1)

Each token in the "to" string becomes one AnimationJob: the property it
animates, a start value and an end value. With an explicit "from" string
the start values come from it, paired by position; otherwise each start
value is whatever the target currently shows (see resolver.py). Jobs are
built when the animation starts, so a chained animation starts from the
state the previous one left behind.
"""

import logging
from dataclasses import dataclass

from .common import TRANSPARENT, color_to_css, resolve_token_color
from .flow import tween, updates_suppressed
from .interpolate import lerp, lerp_color
from .resolver import resolve_current
from .tokens import (
    UNIT_COLOR,
    UNIT_PX,
    format_number,
    is_gradient_stop,
    parse_token,
    parse_token_value,
    serialize_value,
    split_tokens,
    to_unit_value,
    value_key,
)

logger = logging.getLogger(__name__)

GRADIENT_CLASS = "bg-gradient-to-r"


@dataclass
class AnimationJob:
    prop: str
    unit: str
    key: str
    start: object
    end: object
    token: str


def _token_color(token: str):
    color = resolve_token_color(token)
    return TRANSPARENT if color is None else color


def build_jobs(target, to_tokens: list[str], from_tokens: list[str]) -> list[AnimationJob]:
    """Turn token lists into AnimationJobs. Unknown tokens are skipped."""
    jobs = []
    for index, to_token in enumerate(to_tokens):
        descriptor = parse_token(to_token)
        if descriptor is None:
            logger.debug("%s: ignoring unknown token %r", target.id, to_token)
            continue
        prop, unit = descriptor.property, descriptor.unit
        key = value_key(prop, to_token)

        if index < len(from_tokens):
            from_token = from_tokens[index]
            if unit == UNIT_COLOR:
                start = _token_color(from_token)
            else:
                start = to_unit_value(parse_token_value(from_token), unit)
        else:
            start = resolve_current(target, prop, unit, key)

        if unit == UNIT_COLOR:
            end = _token_color(to_token)
        else:
            end = to_unit_value(descriptor.value, unit)

        jobs.append(AnimationJob(prop, unit, key, start, end, to_token))
    return jobs


def _translate_css(target, key: str, value: float) -> str:
    x = value if key == "translateX" else resolve_current(target, "translate", UNIT_PX, "translateX")
    y = value if key == "translateY" else resolve_current(target, "translate", UNIT_PX, "translateY")
    return f"{format_number(x)}px {format_number(y)}px"


def apply_job(stage, target, job: AnimationJob, t: float) -> None:
    """Apply one job at eased progress t."""
    if job.unit == UNIT_COLOR:
        color = lerp_color(job.start, job.end, t)
        stage.apply(target, job.key, color, job.prop, color_to_css(color))
        return

    value = lerp(job.start, job.end, t)
    if job.prop == "translate":
        serialized = _translate_css(target, job.key, value)
    else:
        serialized = serialize_value(job.prop, job.unit, value, job.token)
    stage.apply(target, job.key, value, job.prop, serialized)


def animate(stage, target_id: str, *args, easing=None):
    """Tween a target toward the state described by a token string.

    Accepts (to, duration) or (from, to, duration). A missing target or a
    wrong argument count makes the animation a no-op.
    """
    target = stage.get(target_id)
    if target is None:
        logger.warning("No target '%s' on stage, skipping animation", target_id)
        return

    if len(args) == 3:
        from_text, to_text, duration = args
    elif len(args) == 2:
        from_text = None
        to_text, duration = args
    else:
        logger.error(
            "animate('%s') needs (to, duration) or (from, to, duration), got %d args",
            target_id, len(args),
        )
        return

    to_tokens = split_tokens(to_text)
    from_tokens = split_tokens(from_text)

    # Gradient stops only render on a gradient background.
    needs_gradient = any(is_gradient_stop(t) for t in to_tokens)
    if needs_gradient and not target.has_class_prefix("bg-gradient-"):
        if not updates_suppressed():
            target.add_class(GRADIENT_CLASS)

    jobs = build_jobs(target, to_tokens, from_tokens)
    for job in jobs:
        logger.debug(
            "%s: %s %s → %s over %ss", target_id, job.token, job.start, job.end, duration,
        )

    def update(t):
        for job in jobs:
            apply_job(stage, target, job, t)

    yield from tween(duration, update, easing=easing)


def type_text(stage, target_id: str, content: str, duration: float):
    """Reveal content one character at a time over duration seconds."""
    target = stage.get(target_id)
    if target is None:
        logger.warning("No target '%s' on stage, skipping text", target_id)
        return

    content = str(content)
    shown = -1

    def update(t):
        nonlocal shown
        count = int(len(content) * t)
        if count != shown:
            shown = count
            stage.apply(target, "textContent", content[:count], "textContent", content[:count])

    yield from tween(duration, update, easing="linear")
