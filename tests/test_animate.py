"""Tests for token animations on a stage."""

import logging

import pytest

from motionflow.animate import GRADIENT_CLASS, build_jobs
from motionflow.common import Rgba
from motionflow.flow import Task, all_of, chain, suppressed_updates
from motionflow.stage import Stage


def _run(generator, dt=0.25, limit=1000):
    task = Task(generator)
    for _ in range(limit):
        if task.next(dt):
            return
    raise AssertionError("animation never finished")


class TestAnimate:
    def test_reaches_target_value(self, sink):
        stage = Stage.from_view({"box": "opacity-0"}, apply=sink)
        _run(stage.box("opacity-100", 1, easing="linear"))
        assert sink.values("box", "opacity") == ["0.25", "0.5", "0.75", "1"]

    def test_explicit_from(self, sink):
        stage = Stage.from_view({"box": ""}, apply=sink)
        _run(stage.box("opacity-0", "opacity-50", 1, easing="linear"), dt=0.5)
        assert sink.values("box", "opacity") == ["0.25", "0.5"]

    def test_several_tokens(self, sink):
        stage = Stage.from_view({"title": "opacity-0 translate-y-10"}, apply=sink)
        _run(stage.title("opacity-100 translate-y-0", 1))
        assert sink.latest["title"]["opacity"] == "1"
        assert sink.latest["title"]["translate"] == "0px 0px"

    def test_px_value(self, sink):
        stage = Stage.from_view({"line": "w-0"}, apply=sink)
        _run(stage.line("w-96", 1))
        assert sink.latest["line"]["width"] == "384px"

    def test_unknown_tokens_are_skipped(self, sink):
        stage = Stage.from_view({"box": ""}, apply=sink)
        _run(stage.box("flex opacity-50", 1))
        assert set(sink.latest["box"]) == {"opacity"}

    def test_color(self, sink):
        stage = Stage.from_view({"bar": "bg-blue-500"}, apply=sink)
        _run(stage.bar("bg-red-500", 0.5))
        assert sink.latest["bar"]["backgroundColor"] == "rgba(239, 68, 68, 1)"

    def test_border_color_and_width(self, sink):
        stage = Stage.from_view({"bar": "border-2 border-blue-500"}, apply=sink)
        _run(stage.bar("border-4 border-red-500", 0.5))
        assert sink.latest["bar"]["borderColor"] == "rgba(239, 68, 68, 1)"
        assert sink.latest["bar"]["borderWidth"] == "16px"

    def test_filters(self, sink):
        stage = Stage.from_view({"title": "blur-lg"}, apply=sink)
        _run(stage.title("blur-0 brightness-150", 1))
        assert sink.values("title", "filter")[-2:] == ["blur(0px)", "brightness(150%)"]

    def test_translate_keeps_other_axis(self, sink):
        stage = Stage.from_view({"card": "translate-y-10"}, apply=sink)
        _run(stage.card("translate-x-4", 1))
        assert sink.latest["card"]["translate"] == "16px 40px"

    def test_chained_animation_starts_where_previous_ended(self, sink):
        stage = Stage.from_view({"box": "opacity-0"}, apply=sink)
        _run(chain(
            stage.box("opacity-50", 0.5),
            stage.box("opacity-100", 1, easing="linear"),
        ))
        assert sink.values("box", "opacity")[2:] == ["0.625", "0.75", "0.875", "1"]

    def test_parallel_targets(self, sink):
        stage = Stage.from_view({"a": "opacity-0", "b": "opacity-0"}, apply=sink)
        _run(all_of(stage.a("opacity-100", 1), stage.b("opacity-50", 0.5)))
        assert sink.latest["a"]["opacity"] == "1"
        assert sink.latest["b"]["opacity"] == "0.5"

    def test_suppressed_mode_applies_nothing(self, sink):
        stage = Stage.from_view({"box": "opacity-0"}, apply=sink)
        with suppressed_updates():
            _run(stage.box("opacity-100 from-blue-500", 1))
        assert sink.calls == []


class TestAnimateEdgeCases:
    def test_missing_target_is_noop(self, sink, caplog):
        stage = Stage.from_view({}, apply=sink)
        with caplog.at_level(logging.WARNING, logger="motionflow.animate"):
            _run(stage.ghost("opacity-100", 1))
        assert sink.calls == []
        assert "ghost" in caplog.text

    def test_target_registered_late_is_found(self, sink):
        stage = Stage(apply=sink)
        animation = stage.box("opacity-50", 0.5)
        stage.register("box", "opacity-0")
        _run(animation)
        assert sink.latest["box"]["opacity"] == "0.5"

    @pytest.mark.parametrize("args", [(), ("opacity-100",), ("a", "b", "c", "d")])
    def test_wrong_arity_is_noop(self, sink, caplog, args):
        stage = Stage.from_view({"box": ""}, apply=sink)
        with caplog.at_level(logging.ERROR, logger="motionflow.animate"):
            _run(stage.box(*args))
        assert sink.calls == []
        assert "animate('box')" in caplog.text

    def test_zero_duration_snaps(self, sink):
        stage = Stage.from_view({"box": "opacity-0"}, apply=sink)
        task = Task(stage.box("opacity-100", 0))
        assert task.next(0.016)
        assert sink.values("box", "opacity") == ["1"]


class TestGradient:
    def test_adds_gradient_class(self, sink):
        stage = Stage.from_view({"title": "bg-white"}, apply=sink)
        _run(stage.title("from-blue-500", 0.5))
        assert sink.values("title", "class") == [f"bg-white {GRADIENT_CLASS}"]
        assert sink.latest["title"]["--tw-gradient-from"] == "rgba(59, 130, 246, 1)"

    def test_existing_gradient_class_kept(self, sink):
        stage = Stage.from_view({"title": "bg-gradient-to-br from-white"}, apply=sink)
        _run(stage.title("from-zinc-400", 0.5))
        assert sink.values("title", "class") == []

    def test_stop_starts_from_background(self):
        stage = Stage.from_view({"title": "bg-white"})
        jobs = build_jobs(stage.get("title"), ["via-blue-500"], [])
        assert jobs[0].start == Rgba(255, 255, 255, 1.0)


class TestTypeText:
    def test_reveals_characters(self, sink):
        stage = Stage.from_view({"status": ""}, apply=sink)
        _run(stage.status.text("abcd", 1))
        assert sink.values("status", "textContent") == ["a", "ab", "abc", "abcd"]

    def test_item_access(self, sink):
        stage = Stage.from_view({"status": ""}, apply=sink)
        _run(stage["status"].text("Sorted!", 0.5), dt=0.5)
        assert sink.latest["status"]["textContent"] == "Sorted!"
