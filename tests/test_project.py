"""Tests for the project manifest loader, scene ordering and scene loading."""

import logging
from pathlib import Path

import pytest

from motionflow.flow import Task
from motionflow.project import (
    SceneEntry,
    discover_scenes,
    load_project,
    load_scene,
    load_scenes,
    order_scenes,
    parse_scene_folder,
)
from motionflow.stage import Stage

SIMPLE_SCENE = """
    from motionflow.flow import fade, wait_for

    view = {"title": "opacity-0"}

    def flow(stage):
        yield from fade(0.5)
        yield from stage.title("opacity-100", 1)
        yield from wait_for(1)
"""


def _entry(folder):
    return parse_scene_folder(Path("/scenes") / folder / "scene.py")


class TestLoadProject:
    def test_defaults_without_manifest(self, make_project):
        root = make_project({})
        config = load_project(root)
        assert config["video"]["fps"] == 60
        assert config["video"]["resolution"] == (1920, 1080)
        assert config["scenes_dir"] == root / "scenes"
        assert config["audio"] is None
        assert config["fallback_duration"] == 10.0

    def test_explicit_values(self, make_project):
        root = make_project({}, manifest={
            "video": {"fps": 30, "resolution": [1280, 720]},
            "paths": {"assets": "/data"},
            "audio": "${assets}/music.mp3",
            "fallback_duration": 4,
        })
        config = load_project(root)
        assert config["video"]["fps"] == 30
        assert config["video"]["resolution"] == (1280, 720)
        assert config["audio"] == "/data/music.mp3"
        assert config["fallback_duration"] == 4.0

    def test_custom_scenes_dir(self, make_project):
        root = make_project({}, manifest={"scenes_dir": "src/scenes"}, scenes_dir="src/scenes")
        assert load_project(root)["scenes_dir"] == root / "src" / "scenes"

    @pytest.mark.parametrize("manifest,field", [
        ({"video": {"fps": 0}}, "video.fps"),
        ({"video": {"fps": "fast"}}, "video.fps"),
        ({"video": {"resolution": [1920]}}, "video.resolution"),
        ({"fallback_duration": -1}, "fallback_duration"),
        ({"paths": ["a"]}, "paths"),
    ])
    def test_invalid_fields(self, make_project, manifest, field):
        root = make_project({}, manifest=manifest)
        with pytest.raises(ValueError, match=field):
            load_project(root)

    def test_unknown_path_variable(self, make_project):
        root = make_project({}, manifest={"audio": "${nope}/a.mp3"})
        with pytest.raises(ValueError, match="Unknown path variable"):
            load_project(root)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_project(tmp_path / "nope")


class TestParseSceneFolder:
    def test_number_and_name(self):
        entry = _entry("12-big-finale")
        assert entry.index == 12
        assert entry.name == "big-finale"
        assert entry.folder == "12-big-finale"

    @pytest.mark.parametrize("folder", ["intro", "intro-1", "-1-intro"])
    def test_invalid(self, folder):
        with pytest.raises(ValueError, match="Invalid scene folder"):
            _entry(folder)


class TestOrderScenes:
    def test_sorts_numerically(self):
        entries = [_entry("10-j"), _entry("2-b")] + [_entry(f"{n}-x") for n in (1, 3, 4, 5, 6, 7, 8, 9)]
        ordered = order_scenes(entries)
        assert [e.index for e in ordered] == list(range(1, 11))

    def test_duplicate_names_both_folders(self):
        with pytest.raises(ValueError, match="Duplicate scene number") as exc_info:
            order_scenes([_entry("1-intro"), _entry("2-a"), _entry("2-b")])
        message = str(exc_info.value)
        assert "2-a" in message and "2-b" in message

    def test_gap_names_missing_number(self):
        with pytest.raises(ValueError, match="Missing scene number: 3") as exc_info:
            order_scenes([_entry("1-intro"), _entry("2-middle"), _entry("4-outro")])
        message = str(exc_info.value)
        assert "jumped to #4" in message
        assert 'rename "4-outro" to start with "3-"' in message

    def test_must_start_at_one(self):
        with pytest.raises(ValueError, match="Missing scene number: 1") as exc_info:
            order_scenes([_entry("2-only")])
        assert "must start at 1, the first is #2" in str(exc_info.value)

    def test_zero_folder(self):
        with pytest.raises(ValueError, match="Missing scene number: 1") as exc_info:
            order_scenes([_entry("0-intro")])
        message = str(exc_info.value)
        assert "must start at 1, the first is #0" in message
        assert "jumped to" not in message
        assert 'rename "0-intro" to start with "1-"' in message

    def test_empty_is_fine(self):
        assert order_scenes([]) == []


class TestDiscoverScenes:
    def test_finds_scene_folders(self, make_project):
        root = make_project({"2-b": SIMPLE_SCENE, "1-a": SIMPLE_SCENE})
        (root / "scenes" / "notes").mkdir()
        entries = discover_scenes(root / "scenes")
        assert [e.folder for e in entries] == ["1-a", "2-b"]

    def test_invalid_folder_with_scene_raises(self, make_project):
        root = make_project({"intro": SIMPLE_SCENE})
        with pytest.raises(ValueError, match="Invalid scene folder"):
            discover_scenes(root / "scenes")

    def test_missing_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            discover_scenes(tmp_path / "scenes")


class TestLoadScene:
    def test_estimate_and_flow(self, make_project, sink):
        root = make_project({"1-intro": SIMPLE_SCENE})
        entry = discover_scenes(root / "scenes")[0]
        scene = load_scene(entry)
        assert scene.duration == pytest.approx(2.5)
        assert scene.estimate.transition.type == "fade"
        assert scene.view == {"title": "opacity-0"}

        stage = Stage.from_view(scene.view, apply=sink)
        task = Task(scene.bind(stage)())
        while not task.next(0.1):
            pass
        assert sink.latest["title"]["opacity"] == "1"

    def test_without_import(self, make_project):
        root = make_project({"1-intro": "raise RuntimeError('never imported')\n"})
        scene = load_scene(discover_scenes(root / "scenes")[0], import_flow=False)
        assert scene.flow is None
        assert scene.duration == 10.0

    def test_missing_flow_plays_empty(self, make_project, caplog):
        root = make_project({"1-empty": "view = {}\n"})
        with caplog.at_level(logging.WARNING, logger="motionflow"):
            scene = load_scene(discover_scenes(root / "scenes")[0], fallback=3.0)
        assert scene.flow is None
        assert scene.duration == 3.0
        assert "defines no flow" in caplog.text
        assert Task(scene.bind(Stage())()).next(0.1)

    def test_view_id_clashing_with_stage_member(self, make_project):
        source = SIMPLE_SCENE.replace('"title"', '"reset"')
        root = make_project({"1-intro": source})
        with pytest.raises(ValueError, match='Target id "reset" clashes'):
            load_scene(discover_scenes(root / "scenes")[0])

    def test_bind_resets_stage_on_every_run(self, make_project, sink):
        root = make_project({"1-intro": SIMPLE_SCENE})
        scene = load_scene(discover_scenes(root / "scenes")[0])
        stage = Stage.from_view(scene.view, apply=sink)
        factory = scene.bind(stage)
        task = Task(factory())
        while not task.next(0.1):
            pass
        factory()
        assert stage.get("title").applied == {}


class TestLoadScenes:
    def test_loads_in_order(self, make_project):
        root = make_project({"1-a": SIMPLE_SCENE, "2-b": SIMPLE_SCENE})
        config = load_project(root)
        scenes = load_scenes(config, import_flows=False)
        assert [(s.index, s.name) for s in scenes] == [(1, "a"), (2, "b")]

    def test_ordering_error_surfaces(self, make_project):
        root = make_project({"1-a": SIMPLE_SCENE, "3-c": SIMPLE_SCENE})
        with pytest.raises(ValueError, match="Missing scene number: 2"):
            load_scenes(load_project(root))

    def test_manifest_fallback_applies(self, make_project):
        root = make_project({"1-broken": "def flow(:\n"}, manifest={"fallback_duration": 7})
        scenes = load_scenes(load_project(root), import_flows=False)
        assert scenes[0].duration == 7.0


def test_scene_entry_is_plain_data():
    entry = SceneEntry(1, "intro", "1-intro", Path("/x/1-intro/scene.py"))
    assert entry.path.name == "scene.py"
