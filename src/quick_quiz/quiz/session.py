"""Rich-powered console front end for the quiz session controller.

The loop renders the controller's view models, reads one command at a time
from an input provider and dispatches it to the controller. Commands are
only dispatched when the controller reports them as available, so this
module never triggers a ``StateError`` during normal play.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from quick_quiz.core.notifications import Notification, NotificationCenter

from .controller import QuestionView, SessionController
from .models import OrderMode, QuestionSet, SessionPhase
from .scoring import QuizReport

InputProvider = Callable[[], str]
ExitAction = Literal["quit", "restart"]
CommandType = Literal["select", "submit", "next", "retake", "new", "quit"]

_BORDER_BY_LEVEL = {
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}

# Commands that map onto a controller operation of a different name.
_OPERATION_FOR = {
    "select": "select_option",
    "submit": "submit_answer",
    "next": "advance",
    "retake": "retake",
    "new": "restart",
}


@dataclass(frozen=True)
class SessionCommand:
    """Normalized user command parsed from console input."""

    type: CommandType
    choice: Optional[int] = None


@dataclass(frozen=True)
class QuizSessionResult:
    """Return value from ``run_quiz_session``."""

    reports: tuple[QuizReport, ...]
    exit_action: ExitAction
    completed: bool = False

    @property
    def last_report(self) -> Optional[QuizReport]:
        return self.reports[-1] if self.reports else None


def parse_session_command(raw: Optional[str]) -> Optional[SessionCommand]:
    """Parse raw console input; returns ``None`` for unrecognized input.

    Options are picked by letter (``a``, ``b`` ...) or 1-based number.
    ``n``, ``q``, ``r`` and ``s`` are reserved for commands.
    """

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    lowered = text.lower()
    if lowered in {"s", "submit", "ok"}:
        return SessionCommand("submit")
    if lowered in {"n", "next"}:
        return SessionCommand("next")
    if lowered in {"r", "retake"}:
        return SessionCommand("retake")
    if lowered in {"new", "restart"}:
        return SessionCommand("new")
    if lowered in {"q", "quit", "exit"}:
        return SessionCommand("quit")
    if text.isdigit():
        number = int(text)
        return SessionCommand("select", number - 1) if number > 0 else None
    if len(text) == 1 and text.isalpha():
        return SessionCommand("select", ord(text.upper()) - ord("A"))
    return None


def option_key(index: int) -> str:
    return chr(ord("A") + index)


def run_quiz_session(
    controller: SessionController,
    question_set: QuestionSet,
    console: Console,
    input_provider: InputProvider,
    *,
    order_mode: OrderMode = OrderMode.FIXED,
    show_explanations: bool = True,
    notifications: Optional[NotificationCenter] = None,
) -> QuizSessionResult:
    """Play ``question_set`` until the user quits or asks for a new quiz."""

    center = notifications or NotificationCenter()
    unsubscribe = center.subscribe(_notification_printer(console))
    reports: list[QuizReport] = []
    try:
        controller.start(question_set, order_mode)
        exit_action = _loop(
            controller,
            console,
            input_provider,
            center,
            reports,
            show_explanations=show_explanations,
        )
    finally:
        unsubscribe()
    return QuizSessionResult(
        reports=tuple(reports),
        exit_action=exit_action,
        completed=bool(reports),
    )


def _loop(
    controller: SessionController,
    console: Console,
    input_provider: InputProvider,
    center: NotificationCenter,
    reports: list[QuizReport],
    *,
    show_explanations: bool,
) -> ExitAction:
    while True:
        if controller.phase is SessionPhase.ACTIVE:
            _render_question(
                console,
                controller.question_view(),
                controller.available_actions(),
                show_explanations=show_explanations,
            )
        else:
            _render_results_prompt(console)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            return "quit"

        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            console.print("\n[bold yellow]Ending session.[/]")
            return "quit"
        if _OPERATION_FOR[command.type] not in controller.available_actions():
            console.print(
                f"[red]'{raw.strip()}' is not available right now.[/red]"
            )
            continue

        report = _apply_command(command, controller, console, center)
        if command.type == "new":
            return "restart"
        if report is not None:
            reports.append(report)
            center.notify(
                "Quiz complete",
                f"{report.correct_count} of {report.total_count} correct.",
                level="success",
            )
            _render_summary(console, report, show_explanations=show_explanations)


def _apply_command(
    command: SessionCommand,
    controller: SessionController,
    console: Console,
    center: NotificationCenter,
) -> Optional[QuizReport]:
    if command.type == "select" and command.choice is not None:
        options = controller.question_view().options
        if not 0 <= command.choice < len(options):
            console.print(
                "[red]'%s' is not a valid choice for this question.[/red]"
                % option_key(command.choice)
            )
            return None
        controller.select_option(command.choice)
        return None
    if command.type == "submit":
        if controller.question_view().revealed:
            return None
        record = controller.submit_answer()
        if record.is_correct:
            center.notify("Correct!", level="success")
        else:
            center.notify("Incorrect.", level="error")
        return None
    if command.type == "next":
        return controller.advance()
    if command.type == "retake":
        controller.retake()
        return None
    if command.type == "new":
        controller.restart()
    return None


def _notification_printer(
    console: Console,
) -> Callable[[tuple[Notification, ...]], None]:
    shown: set[str] = set()

    def _print(active: tuple[Notification, ...]) -> None:
        for item in active:
            if item.id in shown:
                continue
            shown.add(item.id)
            body = Text(item.title, style="bold")
            if item.description:
                body.append("\n" + item.description, style="default")
            console.print(
                Panel(
                    body,
                    border_style=_BORDER_BY_LEVEL.get(item.level, "cyan"),
                    expand=False,
                )
            )

    return _print


def _render_question(
    console: Console,
    view: QuestionView,
    actions: frozenset[str],
    *,
    show_explanations: bool,
) -> None:
    header = Text.assemble(
        (f"Question {view.position}", "bold cyan"),
        (f" / {view.total}", "dim"),
        (f"  {view.progress_percent}%", "magenta"),
    )
    console.print()
    console.rule(header)
    console.print(Text(view.prompt, style="bold"))

    table = Table(show_header=False, box=box.SIMPLE, expand=True)
    table.add_column("Key", justify="center", style="cyan")
    table.add_column("Choice")

    for index, option in enumerate(view.options):
        marker = " "
        text = Text(option)
        if view.revealed and index == view.correct_index:
            marker = "✓"
            text.stylize("bold green")
        elif view.revealed and index == view.selected_index:
            marker = "✗"
            text.stylize("bold red")
        elif index == view.selected_index:
            marker = "•"
            text.stylize("bold green")
        table.add_row(option_key(index), Text(marker + " ") + text)
    console.print(table)

    if view.revealed and show_explanations and view.explanation:
        console.print(
            Panel(
                view.explanation,
                title="Explanation",
                border_style="green" if view.is_correct else "red",
            )
        )

    console.print(Text(_command_hint(view, actions), style="dim"))


def _command_hint(view: QuestionView, actions: frozenset[str]) -> str:
    parts: list[str] = []
    if "select_option" in actions:
        keys = ", ".join(option_key(i) for i in range(len(view.options)))
        parts.append(f"choices [{keys}]")
    if "submit_answer" in actions and not view.revealed:
        parts.append("s (submit)")
    if "advance" in actions:
        parts.append("n (see results)" if view.is_last else "n (next)")
    parts.extend(["new", "quit"])
    return "Commands: " + ", ".join(parts)


def _render_results_prompt(console: Console) -> None:
    console.print(
        Text("Commands: r (retake), new (load another quiz), quit", style="dim")
    )


def _render_summary(
    console: Console,
    report: QuizReport,
    *,
    show_explanations: bool,
) -> None:
    console.print()
    console.rule(Text("Quiz Summary", style="bold magenta"))
    if report.title:
        console.print(Text(report.title, style="bold"), justify="center")

    overview = Table(show_header=False, box=box.MINIMAL_DOUBLE_HEAD)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Score", f"{report.percentage}%")
    overview.add_row("Rating", report.rating)
    overview.add_row(
        "Correct", f"{report.correct_count} of {report.total_count}"
    )
    overview.add_row("Average time", f"{report.average_time_seconds}s")
    console.print(overview)

    responses = Table(title="Responses", box=box.SIMPLE, expand=True)
    responses.add_column("#", justify="right")
    responses.add_column("Question", overflow="fold")
    responses.add_column("Your answer", overflow="fold")
    responses.add_column("Correct answer", overflow="fold")
    responses.add_column("Result", justify="center")
    for detail in report.details:
        responses.add_row(
            str(detail.position),
            detail.prompt,
            detail.selected_text,
            detail.correct_text,
            "✅" if detail.is_correct else "❌",
        )
    console.print(responses)

    if not show_explanations:
        return
    for detail in report.details:
        if not detail.explanation:
            continue
        console.print(
            Panel(
                detail.explanation,
                title=f"Question {detail.position}",
                border_style="green" if detail.is_correct else "red",
            )
        )
