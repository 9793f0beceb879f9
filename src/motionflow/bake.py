"""Offline bake — play scenes at a fixed frame rate and record every frame.

The live scheduler follows wall time; a bake steps each flow by exactly
1/fps per frame instead, so the output is identical on every run. Each
frame is a snapshot of what a renderer would show at that instant:

    {"time": 0.5, "scene": 1, "values": {"title": {"opacity": "0.42", ...}}}

values holds, per target, the last serialized value applied to each
property, starting from the scene's view classes under "class".
"""

import copy
import logging

from .flow import Task
from .stage import Stage

logger = logging.getLogger(__name__)

# Frames are capped at this much playback per scene.
MAX_BAKE_SECONDS = 600.0


class _Recorder:
    """Apply sink collecting the latest serialized value per property."""

    def __init__(self, view: dict[str, str]):
        self.values = {target_id: {"class": classes or ""} for target_id, classes in view.items()}

    def __call__(self, target_id: str, prop: str, serialized: str) -> None:
        self.values.setdefault(target_id, {})[prop] = serialized

    def snapshot(self) -> dict:
        return copy.deepcopy(self.values)


def bake_scene(scene, fps: float = 60, max_seconds: float = MAX_BAKE_SECONDS) -> list[dict]:
    """Play one scene's flow from the start at 1/fps per frame.

    Returns one snapshot per frame, the first at time 0 and the last on
    the step where the flow finished. Times are relative to the scene.
    """
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps!r}")
    dt = 1.0 / fps
    max_frames = int(max_seconds * fps)

    recorder = _Recorder(scene.view)
    stage = Stage.from_view(scene.view, apply=recorder)
    task = Task(scene.bind(stage)())

    done = task.start()
    frames = [{"time": 0.0, "scene": scene.index, "values": recorder.snapshot()}]
    step = 0
    while not done:
        if step >= max_frames:
            logger.warning(
                "Scene %d-%s still running after %ss, stopping bake",
                scene.index, scene.name, max_seconds,
            )
            task.close()
            break
        step += 1
        done = task.next(dt)
        frames.append({"time": step * dt, "scene": scene.index, "values": recorder.snapshot()})

    logger.debug("Baked scene %d-%s: %d frames", scene.index, scene.name, len(frames))
    return frames


def bake_project(scenes, fps: float = 60, max_seconds: float = MAX_BAKE_SECONDS) -> list[dict]:
    """Bake scenes back to back.

    Frame times run on across scenes: each scene's first frame comes one
    frame after the previous scene's last.
    """
    frames = []
    offset = 0.0
    for scene in scenes:
        scene_frames = bake_scene(scene, fps=fps, max_seconds=max_seconds)
        for frame in scene_frames:
            frame["time"] = offset + frame["time"]
        frames.extend(scene_frames)
        offset = scene_frames[-1]["time"] + 1.0 / fps
    return frames
