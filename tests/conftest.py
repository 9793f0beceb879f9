"""Shared test fixtures for motionflow tests."""

import textwrap

import pytest
import yaml


class RecordingSink:
    """Apply sink that keeps every call and the latest value per property."""

    def __init__(self):
        self.calls = []
        self.latest = {}

    def __call__(self, target_id, prop, serialized):
        self.calls.append((target_id, prop, serialized))
        self.latest.setdefault(target_id, {})[prop] = serialized

    def values(self, target_id, prop):
        return [s for t, p, s in self.calls if t == target_id and p == prop]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def make_project(tmp_path):
    """Build a project tree from {folder: scene source} and an optional manifest.

    Returns the project directory.
    """
    def _make(scenes, manifest=None, scenes_dir="scenes"):
        root = tmp_path / "project"
        (root / scenes_dir).mkdir(parents=True, exist_ok=True)
        if manifest is not None:
            with open(root / "motionflow.yaml", "w") as f:
                yaml.dump(manifest, f)
        for folder, source in scenes.items():
            scene_dir = root / scenes_dir / folder
            scene_dir.mkdir(parents=True, exist_ok=True)
            (scene_dir / "scene.py").write_text(textwrap.dedent(source))
        return root

    return _make
