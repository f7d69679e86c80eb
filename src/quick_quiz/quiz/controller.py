"""Session state machine driving a quiz from setup through results.

The controller is the single source of truth for which operations are legal.
Every public operation checks the current phase first and raises
:class:`~quick_quiz.quiz.errors.StateError` otherwise; a UI is expected to
consult :meth:`SessionController.available_actions` instead of guessing.

Phases and the operations they accept::

    SETUP     start
    ACTIVE    select_option, submit_answer   (before the answer is revealed)
              submit_answer (no-op), advance (after it is revealed)
              restart
    COMPLETE  retake, restart

``restart`` never fails: from SETUP there is nothing to discard, so it
returns without changing anything.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from .errors import StateError
from .models import (
    AnswerRecord,
    OrderMode,
    Question,
    QuestionSet,
    SessionPhase,
)
from .recorder import record_answer
from .scoring import QuizReport, aggregate_results, round_half_up
from .sequencer import sequence_questions

Clock = Callable[[], int]

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    """Milliseconds from the monotonic clock; immune to wall-clock changes."""

    return time.monotonic_ns() // 1_000_000


@dataclass(frozen=True)
class QuestionView:
    """What the presentation layer needs to draw the current question."""

    prompt: str
    options: tuple[str, ...]
    position: int
    total: int
    progress_percent: int
    selected_index: Optional[int]
    revealed: bool
    correct_index: Optional[int] = None
    is_correct: Optional[bool] = None
    explanation: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return self.position == self.total


@dataclass
class _ActiveState:
    question_set: QuestionSet
    order_mode: OrderMode
    sequence: tuple[Question, ...]
    question_started_ms: int
    current_index: int = 0
    records: list[AnswerRecord] = field(default_factory=list)
    selected_index: Optional[int] = None
    revealed: bool = False

    @property
    def current(self) -> Question:
        return self.sequence[self.current_index]

    @property
    def is_last(self) -> bool:
        return self.current_index == len(self.sequence) - 1


@dataclass(frozen=True)
class _CompleteState:
    question_set: QuestionSet
    order_mode: OrderMode
    sequence: tuple[Question, ...]
    records: tuple[AnswerRecord, ...]
    report: QuizReport


class SessionController:
    """Owns one quiz session and enforces its legal transitions."""

    def __init__(
        self,
        *,
        clock: Clock = monotonic_ms,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._clock = clock
        self._rng = rng
        self._active: Optional[_ActiveState] = None
        self._complete: Optional[_CompleteState] = None

    # -- introspection -------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        if self._active is not None:
            return SessionPhase.ACTIVE
        if self._complete is not None:
            return SessionPhase.COMPLETE
        return SessionPhase.SETUP

    @property
    def question_set(self) -> Optional[QuestionSet]:
        if self._active is not None:
            return self._active.question_set
        if self._complete is not None:
            return self._complete.question_set
        return None

    @property
    def order_mode(self) -> Optional[OrderMode]:
        if self._active is not None:
            return self._active.order_mode
        if self._complete is not None:
            return self._complete.order_mode
        return None

    @property
    def sequence(self) -> tuple[Question, ...]:
        if self._active is not None:
            return self._active.sequence
        if self._complete is not None:
            return self._complete.sequence
        return ()

    @property
    def records(self) -> tuple[AnswerRecord, ...]:
        if self._active is not None:
            return tuple(self._active.records)
        if self._complete is not None:
            return self._complete.records
        return ()

    @property
    def report(self) -> QuizReport:
        if self._complete is None:
            raise StateError("read the report", self.phase.value)
        return self._complete.report

    def available_actions(self) -> frozenset[str]:
        """Names of the operations that are legal right now."""

        active = self._active
        if active is not None:
            if active.revealed:
                return frozenset({"submit_answer", "advance", "restart"})
            actions = {"select_option", "restart"}
            if active.selected_index is not None:
                actions.add("submit_answer")
            return frozenset(actions)
        if self._complete is not None:
            return frozenset({"retake", "restart"})
        return frozenset({"start"})

    def question_view(self) -> QuestionView:
        active = self._require_active("view the current question")
        question = active.current
        position = active.current_index + 1
        total = len(active.sequence)
        view = QuestionView(
            prompt=question.prompt,
            options=question.options,
            position=position,
            total=total,
            progress_percent=round_half_up(100 * position, total),
            selected_index=active.selected_index,
            revealed=active.revealed,
        )
        if not active.revealed:
            return view
        return replace(
            view,
            correct_index=question.correct_index,
            is_correct=active.records[-1].is_correct,
            explanation=question.explanation,
        )

    # -- transitions ---------------------------------------------------

    def start(
        self,
        question_set: QuestionSet,
        order_mode: OrderMode | str = OrderMode.FIXED,
    ) -> QuestionView:
        if self.phase is not SessionPhase.SETUP:
            raise StateError("start a quiz", self.phase.value)
        self._begin(question_set, OrderMode.from_value(order_mode))
        return self.question_view()

    def select_option(self, index: int) -> None:
        active = self._require_active("select an option")
        if active.revealed:
            raise StateError(
                "select an option",
                self.phase.value,
                "the answer has already been revealed",
            )
        active.current.option_text(index)
        active.selected_index = index

    def submit_answer(self) -> AnswerRecord:
        """Commit the provisional choice; repeated calls return that record."""

        active = self._require_active("submit an answer")
        if active.revealed:
            return active.records[-1]
        if active.selected_index is None:
            raise StateError(
                "submit an answer", self.phase.value, "no option is selected"
            )
        record = record_answer(
            active.current,
            active.selected_index,
            started_at_ms=active.question_started_ms,
            now_ms=self._clock(),
        )
        active.records.append(record)
        active.revealed = True
        logger.debug(
            "answer submitted",
            extra={
                "question_id": record.question_id,
                "is_correct": record.is_correct,
                "elapsed_ms": record.elapsed_ms,
            },
        )
        return record

    def advance(self) -> Optional[QuizReport]:
        """Move to the next question, or finish and return the report."""

        active = self._require_active("advance")
        if not active.revealed:
            raise StateError(
                "advance", self.phase.value, "the current answer is not submitted"
            )
        if not active.is_last:
            active.current_index += 1
            active.selected_index = None
            active.revealed = False
            active.question_started_ms = self._clock()
            return None

        report = aggregate_results(
            active.records,
            active.question_set.questions,
            title=active.question_set.title,
        )
        self._complete = _CompleteState(
            question_set=active.question_set,
            order_mode=active.order_mode,
            sequence=active.sequence,
            records=tuple(active.records),
            report=report,
        )
        self._active = None
        logger.info(
            "quiz completed",
            extra={
                "title": report.title,
                "correct": report.correct_count,
                "total": report.total_count,
                "percentage": report.percentage,
            },
        )
        return report

    def retake(self) -> QuestionView:
        if self._complete is None:
            raise StateError("retake the quiz", self.phase.value)
        previous = self._complete
        self._complete = None
        self._begin(previous.question_set, previous.order_mode)
        return self.question_view()

    def restart(self) -> None:
        """Discard the current set and records; a no-op while in setup."""

        if self.phase is SessionPhase.SETUP:
            return
        self._active = None
        self._complete = None
        logger.info("session reset to setup")

    # -- helpers -------------------------------------------------------

    def _begin(self, question_set: QuestionSet, order_mode: OrderMode) -> None:
        sequence = sequence_questions(question_set, order_mode, rng=self._rng)
        self._active = _ActiveState(
            question_set=question_set,
            order_mode=order_mode,
            sequence=sequence,
            question_started_ms=self._clock(),
        )
        logger.info(
            "quiz started",
            extra={
                "title": question_set.title,
                "questions": len(sequence),
                "order": order_mode.value,
            },
        )

    def _require_active(self, operation: str) -> _ActiveState:
        if self._active is None:
            raise StateError(operation, self.phase.value)
        return self._active
