"""CLI for duration estimates — lay out a project's timeline without running it.

Reads every scene's source, estimates its duration and leading transition
statically and prints where each scene starts on the master timeline.
With --validate only the scene folders are checked (naming and ordering).

Usage:
    python -m motionflow.estimate_cli --project my-video
"""

import argparse

from .project import discover_scenes, load_project, load_scenes
from .timeline import Timeline


def _format_transition(transition) -> str:
    if transition is None:
        return "-"
    return f"{transition.type} {transition.duration:g}s"


def estimate_project(project_dir: str) -> Timeline:
    """Load a project's scenes (without importing them) and print the timeline."""
    config = load_project(project_dir)
    scenes = load_scenes(config, import_flows=False)
    timeline = Timeline(scenes)

    print(f"Project: {config['root']} ({len(scenes)} scenes, {config['video']['fps']} fps)")
    for i, scene in enumerate(scenes):
        print(
            f"  {scene.index}-{scene.name}: {scene.duration:.2f}s"
            f"  start {timeline.start_of(i):.2f}s"
            f"  transition {_format_transition(scene.estimate.transition)}"
        )
    print(f"Total: {timeline.total_duration:.2f}s")
    return timeline


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Estimate CLI — static scene durations and project timeline.",
    )
    parser.add_argument(
        "--project", required=True,
        help="Project directory (holding motionflow.yaml and the scenes folder)",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Only check scene folder naming and ordering",
    )
    parsed = parser.parse_args(args)

    if parsed.validate:
        config = load_project(parsed.project)
        entries = discover_scenes(config["scenes_dir"])
        print(f"Scenes valid: {len(entries)} scenes in order")
        for entry in entries:
            print(f"  {entry.index}: {entry.folder}")
        return

    estimate_project(parsed.project)


if __name__ == "__main__":
    main()
