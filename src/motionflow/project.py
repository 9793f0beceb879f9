"""Project loader — manifest, scene discovery and scene ordering.

A project is a directory with a motionflow.yaml manifest and a scenes
directory holding one folder per scene:

    my-video/
      motionflow.yaml
      scenes/
        1-intro/scene.py
        2-sorting/scene.py
        3-outro/scene.py

Manifest schema (every field optional):
  video:
    fps: 60
    resolution: [1920, 1080]
  paths:
    assets: "/data/assets"
  scenes_dir: "scenes"
  audio: "${assets}/soundtrack.mp3"
  fallback_duration: 10

Scene folders must be named NUMBER-NAME and are played in ascending number
order. Numbers must run 1, 2, 3, ... with no gap and no duplicate; anything
else is a ValueError naming the folders involved.

A scene module defines ``flow(stage)`` (a generator function) and
optionally ``view``, a dict of target id → initial class tokens.
"""

import importlib.util
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import yaml

from .common import resolve_path_vars
from .estimate import FALLBACK_DURATION, DurationEstimate, estimate
from .stage import check_target_id

logger = logging.getLogger(__name__)

MANIFEST_NAME = "motionflow.yaml"
SCENE_FILE = "scene.py"
SCENE_FOLDER_RE = re.compile(r"^(\d+)-(.*)$")

DEFAULT_FPS = 60
DEFAULT_RESOLUTION = (1920, 1080)
DEFAULT_SCENES_DIR = "scenes"


# ── Manifest ──────────────────────────────────────────────────────


def load_project(project_dir: str | Path) -> dict:
    """Load and normalize a project's motionflow.yaml.

    A missing manifest is allowed: the project then runs on defaults.

    Returns:
        Config dict with "root", "video" (fps, resolution), "paths",
        "scenes_dir" (absolute Path), "audio" (str or None) and
        "fallback_duration".

    Raises:
        FileNotFoundError: project_dir does not exist.
        ValueError: Invalid field values.
    """
    root = Path(project_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Project directory not found: {root}")

    manifest_path = root / MANIFEST_NAME
    raw = {}
    if manifest_path.exists():
        with open(manifest_path) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{MANIFEST_NAME}: top level must be a mapping")

    video = dict(raw.get("video") or {})
    fps = video.get("fps", DEFAULT_FPS)
    if isinstance(fps, bool) or not isinstance(fps, (int, float)) or fps <= 0:
        raise ValueError(f"{MANIFEST_NAME}: video.fps must be > 0, got {fps!r}")
    video["fps"] = fps

    resolution = video.get("resolution", DEFAULT_RESOLUTION)
    if (
        not isinstance(resolution, (list, tuple))
        or len(resolution) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in resolution)
    ):
        raise ValueError(
            f"{MANIFEST_NAME}: video.resolution must be [width, height], got {resolution!r}"
        )
    video["resolution"] = tuple(resolution)

    paths = raw.get("paths") or {}
    if not isinstance(paths, dict):
        raise ValueError(f"{MANIFEST_NAME}: paths must be a mapping")

    scenes_dir = resolve_path_vars(str(raw.get("scenes_dir", DEFAULT_SCENES_DIR)), paths)

    audio = raw.get("audio")
    if audio is not None:
        audio = resolve_path_vars(str(audio), paths)

    fallback = raw.get("fallback_duration", FALLBACK_DURATION)
    if isinstance(fallback, bool) or not isinstance(fallback, (int, float)) or fallback < 0:
        raise ValueError(
            f"{MANIFEST_NAME}: fallback_duration must be >= 0, got {fallback!r}"
        )

    return {
        "root": root,
        "video": video,
        "paths": paths,
        "scenes_dir": root / scenes_dir,
        "audio": audio,
        "fallback_duration": float(fallback),
    }


# ── Scene ordering ────────────────────────────────────────────────


@dataclass
class SceneEntry:
    """A scene folder found on disk, before its module is loaded."""

    index: int
    name: str
    folder: str
    path: Path


def parse_scene_folder(path: str | Path) -> SceneEntry:
    """Parse <dir>/NUMBER-NAME/scene.py into a SceneEntry.

    Raises:
        ValueError: The folder name isn't NUMBER-NAME.
    """
    path = Path(path)
    folder = path.parent.name
    match = SCENE_FOLDER_RE.match(folder)
    if not match:
        raise ValueError(
            f'Invalid scene folder: "{folder}"\n'
            f'  Scene folders must follow the format "NUMBER-NAME" (e.g. "1-intro").\n'
            f"  Found at: {path}"
        )
    return SceneEntry(int(match.group(1)), match.group(2), folder, path)


def order_scenes(entries: list[SceneEntry]) -> list[SceneEntry]:
    """Sort scenes by number and check they run 1, 2, 3, ...

    Raises:
        ValueError: Two folders share a number, or a number is skipped.
    """
    ordered = sorted(entries, key=lambda e: e.index)
    for position, entry in enumerate(ordered):
        expected = position + 1
        if entry.index == expected:
            continue

        duplicate = next(
            (e for e in ordered if e.index == entry.index and e is not entry), None
        )
        if duplicate is not None:
            raise ValueError(
                f'Duplicate scene number: "{entry.index}"\n'
                f"  1. {entry.folder}\n"
                f"  2. {duplicate.folder}\n"
                f"  Please change one of them."
            )
        if expected == 1:
            context = f"  Scene numbers must start at 1, the first is #{entry.index}.\n"
        else:
            context = f"  You have scene #{expected - 1} and then jumped to #{entry.index}.\n"
        raise ValueError(
            f"Missing scene number: {expected}\n"
            + context
            + f'  Please rename "{entry.folder}" to start with "{expected}-".'
        )
    return ordered


def discover_scenes(scenes_dir: str | Path) -> list[SceneEntry]:
    """Find every <scenes_dir>/*/scene.py and return them validated, in order."""
    scenes_dir = Path(scenes_dir)
    if not scenes_dir.is_dir():
        raise FileNotFoundError(f"Scenes directory not found: {scenes_dir}")
    entries = [parse_scene_folder(p) for p in sorted(scenes_dir.glob(f"*/{SCENE_FILE}"))]
    ordered = order_scenes(entries)
    logger.info("Loaded %d scenes in order from %s", len(ordered), scenes_dir)
    return ordered


# ── Scene loading ─────────────────────────────────────────────────


@dataclass
class Scene:
    index: int
    name: str
    path: Path
    flow: Callable | None
    estimate: DurationEstimate
    view: dict[str, str] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        return self.estimate.duration

    def bind(self, stage) -> Callable:
        """Zero-argument flow factory for this scene on the given stage.

        Every call resets the stage first, so a replay after a seek starts
        from the declared view rather than from what the last run applied.
        A scene without a flow plays as an empty one.
        """
        flow = self.flow or _empty_flow

        def factory():
            stage.reset()
            return flow(stage)

        return factory


def _empty_flow(stage):
    return
    yield


def _import_scene_module(entry: SceneEntry):
    safe_name = re.sub(r"\W", "_", entry.name)
    module_name = f"motionflow_scene_{entry.index}_{safe_name}"
    spec = importlib.util.spec_from_file_location(module_name, entry.path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_scene(
    entry: SceneEntry,
    fallback: float = FALLBACK_DURATION,
    import_flow: bool = True,
) -> Scene:
    """Estimate a scene's duration from its source and import its flow.

    The estimate never runs scene code. With import_flow=False the module
    isn't imported at all (flow is None, view is empty), which is enough
    for laying out a timeline.

    Raises:
        ValueError: A view target id clashes with a Stage member.
    """
    source = entry.path.read_text()
    duration = estimate(source, fallback=fallback)
    logger.debug("Scene %d-%s: %.2fs", entry.index, entry.name, duration.duration)

    flow = None
    view = {}
    if import_flow:
        module = _import_scene_module(entry)
        flow = getattr(module, "flow", None)
        if flow is None:
            logger.warning("Scene %s defines no flow(), it will play empty", entry.folder)
        view = dict(getattr(module, "view", None) or {})
        for target_id in view:
            check_target_id(target_id)

    return Scene(entry.index, entry.name, entry.path, flow, duration, view)


def load_scenes(config: dict, import_flows: bool = True) -> list[Scene]:
    """Discover, validate and load every scene of a loaded project."""
    entries = discover_scenes(config["scenes_dir"])
    return [
        load_scene(e, fallback=config["fallback_duration"], import_flow=import_flows)
        for e in entries
    ]
