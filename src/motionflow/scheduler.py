"""Live scheduler — plays one flow against real or simulated time.

State per mount:

    UNINITIALIZED ──mount/seek──▶ SEEKING ──caught up──▶ RUNNING ──▶ DONE
                                     │                      ▲
                                     └── not playing ──▶ PAUSED

Seeking replays a fresh root task from t=0 at a fixed 1/60 s step (the last
step clipped so it lands on the offset exactly). Tasks can't be rewound,
so every seek, forward or backward, starts over from the flow factory.

Once caught up, the host drives the scheduler from its frame clock by
calling frame(now) with a timestamp in seconds. The first frame after
(re)starting only records the timestamp; later frames step the task by
the elapsed wall time, clamped to MAX_FRAME_DT so a stalled host doesn't
make the animation jump.

unmount() detaches immediately. A detached or re-seeked scheduler never
calls the finish callback of the run it abandoned.
"""

import asyncio
import enum
import logging
from typing import Callable

from .flow import Task

logger = logging.getLogger(__name__)

SIMULATION_STEP = 1 / 60
MAX_FRAME_DT = 0.1

# Float slack when comparing accumulated step sums with a seek target.
_SEEK_EPSILON = 1e-9


class SchedulerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    SEEKING = "seeking"
    RUNNING = "running"
    PAUSED = "paused"
    DONE = "done"


class Scheduler:
    def __init__(self, step: float = SIMULATION_STEP, max_dt: float = MAX_FRAME_DT):
        self.step = step
        self.max_dt = max_dt
        self.state = SchedulerState.UNINITIALIZED
        self.time = 0.0
        self._flow: Callable | None = None
        self._on_finished: Callable[[], None] | None = None
        self._task: Task | None = None
        self._last_frame: float | None = None
        self._playing = True

    # ── Control surface ──────────────────────────────────────────

    def mount(
        self,
        flow: Callable,
        on_finished: Callable[[], None] | None = None,
        is_playing: bool = True,
        seek_offset: float = 0.0,
    ) -> None:
        """Start a flow, replacing whatever this scheduler was running.

        Args:
            flow: Zero-argument factory returning a fresh task generator.
            on_finished: Called once when the flow completes.
            is_playing: If False, stop after seeking (PAUSED).
            seek_offset: Seconds into the flow to start at.
        """
        self.unmount()
        self._flow = flow
        self._on_finished = on_finished
        self._playing = is_playing
        self._restart(seek_offset)

    def unmount(self) -> None:
        """Detach from the frame clock without finishing."""
        if self._task is not None and not self._task.done:
            self._task.close()
        self._task = None
        self._flow = None
        self._on_finished = None
        self._last_frame = None
        self.state = SchedulerState.UNINITIALIZED

    def seek(self, offset: float) -> None:
        """Restart the current flow at offset seconds."""
        if self._flow is None:
            raise RuntimeError("seek() before mount()")
        if self._task is not None and not self._task.done:
            self._task.close()
        self._restart(offset)

    def pause(self) -> None:
        self._playing = False
        if self.state == SchedulerState.RUNNING:
            self.state = SchedulerState.PAUSED

    def play(self) -> None:
        self._playing = True
        if self.state == SchedulerState.PAUSED:
            self._last_frame = None
            self.state = SchedulerState.RUNNING

    @property
    def active(self) -> bool:
        return self.state == SchedulerState.RUNNING

    # ── Stepping ─────────────────────────────────────────────────

    def _restart(self, offset: float) -> None:
        self._task = Task(self._flow())
        self._last_frame = None
        self.time = 0.0
        self.state = SchedulerState.SEEKING

        if offset > 0:
            while self.time < offset - _SEEK_EPSILON:
                dt = min(self.step, offset - self.time)
                self.time += dt
                if self._task.next(dt):
                    logger.debug("Flow finished while seeking to %.3fs", offset)
                    self._finish()
                    return

        if self._playing:
            self.state = SchedulerState.RUNNING
        else:
            self.state = SchedulerState.PAUSED

    def frame(self, now: float) -> bool:
        """Advance by the wall time since the previous frame.

        Returns True while the scheduler wants more frames.
        """
        if self.state != SchedulerState.RUNNING:
            return False
        if self._last_frame is None:
            self._last_frame = now
            return True

        dt = min(max(now - self._last_frame, 0.0), self.max_dt)
        self._last_frame = now
        self.time += dt
        if self._task.next(dt):
            self._finish()
            # The finish callback may have mounted the next flow.
            return self.active
        return True

    def _finish(self) -> None:
        self.state = SchedulerState.DONE
        self._task = None
        if self._on_finished is not None:
            self._on_finished()


async def run_realtime(scheduler: Scheduler, fps: float = 60.0) -> None:
    """Drive a scheduler from the event loop clock until it stops running.

    Cancelling the asyncio task running this coroutine detaches it at once.
    """
    loop = asyncio.get_running_loop()
    interval = 1.0 / fps
    while scheduler.frame(loop.time()):
        await asyncio.sleep(interval)
