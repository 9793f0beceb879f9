"""CLI for baking — play a project's scenes offline and write every frame.

Each scene's flow runs at exactly 1/fps per frame (fps from the manifest
unless overridden), and the applied values of every frame are written to
a JSON file that a renderer can replay without running any scene code.

Usage:
    python -m motionflow.bake_cli --project my-video --output frames.json
    python -m motionflow.bake_cli --project my-video --output intro.json --scene 1
"""

import argparse
import json
from pathlib import Path

from .bake import bake_project
from .project import load_project, load_scenes
from .timeline import Timeline


def bake(project_dir: str, output_path: str, fps: float | None = None, scene: int | None = None) -> dict:
    """Load a project, bake its scenes and write the result as JSON.

    Args:
        project_dir: Project directory.
        output_path: Output .json path.
        fps: Frame rate; defaults to the manifest's video.fps.
        scene: Bake only the scene with this number.

    Returns:
        The document written to output_path.
    """
    config = load_project(project_dir)
    fps = fps or config["video"]["fps"]
    scenes = load_scenes(config)
    timeline = Timeline(scenes)

    if scene is not None:
        selected = [s for s in scenes if s.index == scene]
        if not selected:
            raise ValueError(f"No scene number {scene} (project has {len(scenes)})")
        scenes = selected

    print(f"Baking {len(scenes)} scene(s) at {fps} fps...")
    frames = bake_project(scenes, fps=fps)

    document = {
        "fps": fps,
        "resolution": list(config["video"]["resolution"]),
        "audio": config["audio"],
        "scenes": [
            {
                "index": s.index,
                "name": s.name,
                "estimate": s.duration,
                "start": timeline.start_of(s.index - 1),
                "transition": (
                    {"type": s.estimate.transition.type, "duration": s.estimate.transition.duration}
                    if s.estimate.transition else None
                ),
            }
            for s in scenes
        ],
        "frames": frames,
    }

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(document, f)
    print(f"Wrote {len(frames)} frames to: {output_path}")
    return document


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Bake CLI — play scenes at a fixed frame rate, write frames as JSON.",
    )
    parser.add_argument(
        "--project", required=True,
        help="Project directory (holding motionflow.yaml and the scenes folder)",
    )
    parser.add_argument(
        "--output", required=True,
        help="Output JSON path",
    )
    parser.add_argument(
        "--fps", type=float, default=None,
        help="Frame rate (default: video.fps from the manifest)",
    )
    parser.add_argument(
        "--scene", type=int, default=None,
        help="Bake only this scene number",
    )
    parsed = parser.parse_args(args)

    bake(parsed.project, parsed.output, fps=parsed.fps, scene=parsed.scene)


if __name__ == "__main__":
    main()
