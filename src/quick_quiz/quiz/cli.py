"""CLI entry points for playing, validating and scaffolding quizzes."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.text import Text

from quick_quiz.core import config_templates
from quick_quiz.core import workspace as workspace_mod
from quick_quiz.core.config_templates import ConfigTemplateError
from quick_quiz.core.logging import configure_logger
from quick_quiz.core.notifications import Notification, NotificationCenter
from quick_quiz.core.workspace import WorkspaceError

from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    QuizConfigError,
    load_config,
)
from .controller import SessionController
from .errors import SchemaError
from .models import OrderMode
from .samples import SAMPLE_FILENAME, write_sample
from .session import InputProvider, run_quiz_session
from .validator import load_question_set

ConsoleFactory = Callable[[], Console]


def _build_play_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz play",
        description="Take a multiple-choice quiz from a JSON question set.",
        epilog="Run `quiz sample` to write an example question set.",
    )
    parser.add_argument("path", type=Path, help="Question set JSON file.")
    order = parser.add_mutually_exclusive_group()
    order.add_argument(
        "--shuffle",
        dest="order",
        action="store_const",
        const=OrderMode.SHUFFLED,
        help="Present questions in a new random order each play-through.",
    )
    order.add_argument(
        "--fixed",
        dest="order",
        action="store_const",
        const=OrderMode.FIXED,
        help="Present questions in the authored order.",
    )
    parser.add_argument(
        "--no-explain",
        dest="explain",
        action="store_false",
        default=None,
        help="Hide explanations after answers and in the summary.",
    )
    parser.add_argument("--config", type=Path, help="Path to a quiz.toml file.")
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and logs.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Mirror log records to stderr.",
    )
    return parser


def play_main(
    argv: Sequence[str] | None = None,
    *,
    input_provider: Optional[InputProvider] = None,
    console_factory: ConsoleFactory = Console,
) -> int:
    parser = _build_play_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    overrides = ConfigOverrides(
        order=args.order,
        show_explanations=args.explain,
        log_level=args.log_level,
        verbose=args.verbose,
    )
    try:
        load_result = load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except QuizConfigError as exc:
        parser.error(str(exc))

    config = load_result.config
    logger, log_path = configure_logger(
        "quick_quiz",
        log_dir=load_result.layout.path_for("logs"),
        level=config.log_level,
        verbose=config.verbose,
    )
    logger.debug("quiz play invoked", extra={"path": args.path})

    console = console_factory()
    notifications = NotificationCenter()
    try:
        question_set = load_question_set(args.path)
    except SchemaError as exc:
        logger.warning(
            "question set rejected",
            extra={"path": args.path, "field": exc.field},
        )
        _print_error(console, notifications, str(exc))
        return 1

    result = run_quiz_session(
        SessionController(),
        question_set,
        console,
        input_provider or (lambda: console.input("> ")),
        order_mode=config.order,
        show_explanations=config.show_explanations,
        notifications=notifications,
    )
    if result.exit_action == "restart":
        console.print(
            "Session cleared. Run `quiz play <file>` to load another quiz."
        )
    console.print(f"[dim]Log file: {log_path}[/dim]")
    return 0


def _print_error(
    console: Console, notifications: NotificationCenter, message: str
) -> None:
    def _show(active: tuple[Notification, ...]) -> None:
        for item in active:
            console.print(
                Text.assemble((f"{item.title}: ", "bold red"), item.description)
            )

    unsubscribe = notifications.subscribe(_show)
    try:
        notifications.notify("Invalid question set", message, level="error")
    finally:
        unsubscribe()


def validate_main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quiz validate",
        description="Check question set files against the quiz schema.",
    )
    parser.add_argument("paths", nargs="+", type=Path)
    args = parser.parse_args(list(argv) if argv is not None else None)

    failures = 0
    for path in args.paths:
        try:
            question_set = load_question_set(path)
        except SchemaError as exc:
            failures += 1
            sys.stdout.write(f"FAIL {path}: {exc}\n")
            continue
        sys.stdout.write(
            f"OK   {path}: '{question_set.title}' "
            f"({len(question_set)} questions)\n"
        )
    return 1 if failures else 0


def sample_main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quiz sample",
        description="Write an example question set to use as a template.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path(SAMPLE_FILENAME),
        help="Destination file or directory.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if it already exists.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        written = write_sample(args.path, overwrite=args.force)
    except FileExistsError as exc:
        sys.stderr.write(f"{exc}. Use --force to overwrite.\n")
        return 1
    sys.stdout.write(f"Wrote sample question set to {written}\n")
    return 0


def config_main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quiz config",
        description="Manage the quiz.toml configuration file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    init_parser = subparsers.add_parser(
        "init", help="Write the default quiz.toml template."
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Destination for the config TOML (defaults to the workspace "
            "config directory)."
        ),
    )
    init_parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root override used to resolve the default path.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        target = _resolve_config_target(args)
    except WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    template = config_templates.get_template("quiz")
    try:
        written = template.write(target, overwrite=args.force)
    except ConfigTemplateError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1
    sys.stdout.write(f"Wrote quiz config to {written}\n")
    return 0


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is not None:
        candidate = args.path.expanduser()
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate
    layout = workspace_mod.ensure_workspace(path=args.workspace)
    return layout.path_for("config") / CONFIG_FILENAME
