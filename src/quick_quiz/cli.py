"""Unified `quiz` command line entry point."""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Mapping, Optional, Sequence


CommandHandler = Callable[[Sequence[str]], int]


@dataclass(frozen=True)
class CommandSpec:
    """A `quiz` subcommand and the module function that implements it."""

    name: str
    summary: str
    module: str
    func: str = "main"
    interactive: bool = False

    def run(self, argv: Sequence[str]) -> int:
        target = getattr(import_module(self.module), self.func)
        return _invoke_main(target, f"quiz {self.name}", argv)


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="init",
        summary="Bootstrap the quick-quiz workspace.",
        module="quick_quiz.workspace.cli",
    ),
    CommandSpec(
        name="play",
        summary="Take a quiz from a JSON question set.",
        module="quick_quiz.quiz.cli",
        func="play_main",
        interactive=True,
    ),
    CommandSpec(
        name="validate",
        summary="Check question set files against the schema.",
        module="quick_quiz.quiz.cli",
        func="validate_main",
    ),
    CommandSpec(
        name="sample",
        summary="Write an example question set.",
        module="quick_quiz.quiz.cli",
        func="sample_main",
    ),
    CommandSpec(
        name="config",
        summary="Manage the quiz.toml configuration.",
        module="quick_quiz.quiz.cli",
        func="config_main",
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {
    spec.name: spec for spec in _COMMAND_SPECS
}


def format_command_table() -> str:
    """Return the command listing used by `quiz list` and the usage text."""

    width = max(len(spec.name) for spec in _COMMAND_SPECS)
    lines = ["Available commands:"]
    for spec in _COMMAND_SPECS:
        suffix = " (interactive)" if spec.interactive else ""
        lines.append(f"  {spec.name.ljust(width)}  {spec.summary}{suffix}")
    return "\n".join(lines)


def format_usage() -> str:
    return "\n".join(
        [
            "Usage: quiz <command> [args...]",
            "Run `quiz list` for commands or `quiz help <name>` for details.",
            "",
            format_command_table(),
        ]
    )


def _print(
    text: str, *, stream: Optional[Callable[[str], None]] = None
) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _handle_version() -> int:
    try:
        version = metadata.version("quick-quiz")
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        _print(format_usage())
        return 0
    spec = COMMANDS.get(argv[0])
    if spec is None:
        _unknown_command(argv[0])
        return 2
    _print(f"{spec.name}: {spec.summary}")
    _print(f"Run `quiz {spec.name} --help` for CLI-specific options.")
    return 0


def _unknown_command(name: str) -> None:
    _print(f"Unknown command '{name}'.", stream=sys.stderr.write)
    _print(format_command_table(), stream=sys.stderr.write)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    if not args:
        _print(format_usage())
        return 2

    head, *tail = args
    if head in ("-h", "--help"):
        _print(format_usage())
        return 0
    if head in ("-V", "--version", "version"):
        return _handle_version()
    if head == "list":
        _print(format_command_table())
        return 0
    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is None:
        _unknown_command(head)
        return 2
    return spec.run(tail)


def _invoke_main(
    func: Callable[..., object], prog_name: str, argv: Sequence[str]
) -> int:
    args = list(argv)
    old_argv = sys.argv
    sys.argv = [prog_name, *args]
    try:
        result = func(args) if _accepts_argv(func) else func()
    except SystemExit as exc:
        return _normalize_system_exit(exc)
    finally:
        sys.argv = old_argv
    return result if isinstance(result, int) else 0


def _accepts_argv(func: Callable[..., object]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    return any(
        param.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
        for param in signature.parameters.values()
    )


def _normalize_system_exit(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    _print(str(code), stream=sys.stderr.write)
    return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
