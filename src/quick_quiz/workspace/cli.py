"""`quiz init`: create the workspace used for config and logs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from quick_quiz.core import workspace as workspace_mod


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz init",
        description="Create the quick-quiz workspace and its subdirectories.",
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to QUICK_QUIZ_DATA_HOME "
            "or ~/.quick-quiz-data)."
        ),
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    if args.quiet:
        return 0

    def status(key: str) -> str:
        return "created" if layout.created.get(key, False) else "exists"

    lines = [f"Workspace ready at {layout.home} ({status('home')})"]
    width = max(len(name) for name in layout.directories)
    for name, directory in layout.items():
        lines.append(f"  {name.ljust(width)}  {directory} ({status(name)})")
    sys.stdout.write("\n".join(lines) + "\n")
    return 0
