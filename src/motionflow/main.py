"""Subcommand dispatcher for motionflow.

Usage:
    motionflow estimate --project my-video [--validate]
    motionflow bake     --project my-video --output frames.json [--fps 30] [--scene 2]
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="motionflow",
        description="Scene timing and offline playback for coroutine-driven animations.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("estimate", help="Static scene durations and project timeline")
    subparsers.add_parser("bake", help="Play scenes at a fixed frame rate, write frames as JSON")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "estimate":
        from .estimate_cli import main as estimate_main
        estimate_main(remaining)
    elif parsed.command == "bake":
        from .bake_cli import main as bake_main
        bake_main(remaining)


if __name__ == "__main__":
    main()
