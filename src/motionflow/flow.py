"""Coroutine tasks and combinators — the vocabulary flows are written in.

A task is a generator that suspends with a bare ``yield`` and receives the
step size ``dt`` (seconds) back from the driver. Flows compose tasks with
``yield from``:

    def flow(stage):
        yield from fade(0.5)
        yield from stage.title("opacity-100 translate-y-0", 1.5)
        yield from all_of(
            stage.subtitle("opacity-100", 1),
            delay(0.2, stage.line("w-96", 1.2)),
        )
        yield from wait_for(1)

Task wraps a generator in the step contract ``next(dt) -> done``. Children
passed to all_of/chain/delay are owned by that combinator from then on.

The static estimator (estimate.py) mirrors these semantics from source;
a name added here needs a matching rule there.
"""

from contextlib import contextmanager
from typing import Callable

from .interpolate import get_easing

TRANSITION_TYPES = ("fade", "slide", "zoom")

_updates_suppressed = False


@contextmanager
def suppressed_updates():
    """Run tweens without firing their update callbacks.

    Timing is unaffected. Used to drive real coroutines without mutating
    anything observable.
    """
    global _updates_suppressed
    previous = _updates_suppressed
    _updates_suppressed = True
    try:
        yield
    finally:
        _updates_suppressed = previous


def updates_suppressed() -> bool:
    return _updates_suppressed


# ── Task ───────────────────────────────────────────────────────────


class Task:
    """Step-driven wrapper around a task generator.

    The first next(dt) runs the generator to its first suspension point
    and then feeds it dt, so the first step counts toward elapsed time.
    A generator that finishes before suspending (a zero-length tween)
    reports done on that first call.
    """

    def __init__(self, generator):
        self._generator = generator
        self._started = False
        self.done = False

    def start(self) -> bool:
        """Run to the first suspension point if not yet started. Returns done."""
        if not self._started:
            self._started = True
            try:
                next(self._generator)
            except StopIteration:
                self.done = True
        return self.done

    def next(self, dt: float) -> bool:
        if self.done:
            raise RuntimeError("next() called on a finished task")
        if self.start():
            return True
        try:
            self._generator.send(dt)
        except StopIteration:
            self.done = True
        return self.done

    def close(self) -> None:
        """Discard the task; it must not be stepped again."""
        self._generator.close()
        self.done = True


def as_task(task) -> Task:
    return task if isinstance(task, Task) else Task(task)


def _drain(task: Task):
    """Delegate every step to one task until it finishes."""
    if task.start():
        return
    while True:
        dt = yield
        if task.next(dt):
            return


# ── Primitives ────────────────────────────────────────────────────


def wait_for(duration: float):
    elapsed = 0.0
    while elapsed < duration:
        dt = yield
        elapsed += dt or 0


def tween(duration: float, on_update: Callable[[float], None], easing=None):
    """Drive on_update with eased progress over duration seconds.

    on_update receives the eased progress while time remains and exactly
    one final on_update(1) on the step that reaches the duration. A
    duration <= 0 snaps straight to on_update(1).
    """
    ease = get_easing(easing)
    elapsed = 0.0
    while elapsed < duration:
        dt = yield
        elapsed += dt or 0
        if elapsed < duration:
            if not _updates_suppressed:
                on_update(ease(min(elapsed / duration, 1.0)))
    if not _updates_suppressed:
        on_update(1.0)


# ── Combinators ───────────────────────────────────────────────────


def all_of(*tasks):
    """Run tasks in parallel; done when every child is done.

    Every live child gets the same dt each step, in argument order.
    """
    active = [as_task(t) for t in tasks]
    while active:
        dt = yield
        active = [t for t in active if not t.next(dt)]


def chain(*tasks):
    """Run tasks one after another."""
    for task in tasks:
        yield from _drain(as_task(task))


def delay(seconds: float, task):
    yield from wait_for(seconds)
    yield from _drain(as_task(task))


# ── Scene transitions ─────────────────────────────────────────────
# Timing-only: the renderer reads the transition type and progress from
# the scene's duration estimate and draws the effect itself.


def fade(duration: float):
    yield from wait_for(duration)


def slide(duration: float):
    yield from wait_for(duration)


def zoom(duration: float):
    yield from wait_for(duration)
