"""Tests for the subcommand dispatcher and the CLI entry points."""

import json

import pytest

INTRO = """
    from motionflow.flow import wait_for

    view = {"title": "opacity-0"}

    def flow(stage):
        yield from stage.title("opacity-100", 0.5)
        yield from wait_for(0.5)
"""

OUTRO = """
    from motionflow.flow import fade

    view = {"title": "opacity-100"}

    def flow(stage):
        yield from fade(0.5)
        yield from stage.title("opacity-0", 0.5)
"""


class TestMainDispatcher:
    def test_no_subcommand_shows_help(self):
        from motionflow.main import main

        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code != 0

    def test_estimate_subcommand_exists(self):
        from motionflow.main import main

        with pytest.raises(SystemExit):
            main(["estimate"])  # missing --project, but subcommand recognized

    def test_bake_subcommand_exists(self):
        from motionflow.main import main

        with pytest.raises(SystemExit):
            main(["bake"])

    def test_invalid_subcommand_errors(self, capsys):
        from motionflow.main import main

        with pytest.raises(SystemExit) as exc_info:
            main(["nonexistent"])
        assert exc_info.value.code == 2
        err = capsys.readouterr().err
        assert "invalid choice" in err
        assert "usage: motionflow" in err


class TestEstimateCli:
    def test_prints_timeline(self, make_project, capsys):
        from motionflow.main import main

        root = make_project({"1-intro": INTRO, "2-outro": OUTRO})
        main(["estimate", "--project", str(root)])
        out = capsys.readouterr().out
        assert "1-intro: 1.00s" in out
        assert "2-outro: 1.00s  start 1.00s  transition fade 0.5s" in out
        assert "Total: 2.00s" in out

    def test_validate(self, make_project, capsys):
        from motionflow.main import main

        root = make_project({"1-intro": INTRO, "2-outro": OUTRO})
        main(["estimate", "--project", str(root), "--validate"])
        assert "Scenes valid: 2 scenes in order" in capsys.readouterr().out

    def test_ordering_error_raises(self, make_project):
        from motionflow.main import main

        root = make_project({"1-intro": INTRO, "3-outro": OUTRO})
        with pytest.raises(ValueError, match="Missing scene number: 2"):
            main(["estimate", "--project", str(root), "--validate"])


class TestBakeCli:
    def test_writes_frames(self, make_project, tmp_path):
        from motionflow.main import main

        root = make_project({"1-intro": INTRO, "2-outro": OUTRO}, manifest={"video": {"fps": 10}})
        output = tmp_path / "out" / "frames.json"
        main(["bake", "--project", str(root), "--output", str(output)])

        document = json.loads(output.read_text())
        assert document["fps"] == 10
        assert document["resolution"] == [1920, 1080]
        assert [s["name"] for s in document["scenes"]] == ["intro", "outro"]
        assert document["scenes"][1]["transition"] == {"type": "fade", "duration": 0.5}
        assert document["scenes"][1]["start"] == 1.0
        assert document["frames"][0]["values"]["title"]["class"] == "opacity-0"
        assert document["frames"][-1]["values"]["title"]["opacity"] == "0"

    def test_single_scene_and_fps_override(self, make_project, tmp_path):
        from motionflow.main import main

        root = make_project({"1-intro": INTRO, "2-outro": OUTRO})
        output = tmp_path / "intro.json"
        main(["bake", "--project", str(root), "--output", str(output), "--scene", "1", "--fps", "4"])

        document = json.loads(output.read_text())
        assert document["fps"] == 4
        assert {f["scene"] for f in document["frames"]} == {1}
        assert len(document["frames"]) == 5

    def test_unknown_scene(self, make_project, tmp_path):
        from motionflow.bake_cli import bake

        root = make_project({"1-intro": INTRO})
        with pytest.raises(ValueError, match="No scene number 5"):
            bake(str(root), str(tmp_path / "x.json"), scene=5)
