"""Summary statistics for a finished play-through."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .models import AnswerRecord, Question

logger = logging.getLogger(__name__)

# (minimum percentage, label), checked top-down.
_RATINGS: tuple[tuple[int, str], ...] = (
    (90, "Outstanding"),
    (70, "Great work"),
    (50, "Keep practicing"),
    (0, "Needs review"),
)


@dataclass(frozen=True)
class ResultDetail:
    """One row of the per-question breakdown."""

    position: int
    question_id: str
    prompt: str
    selected_text: str
    correct_text: str
    is_correct: bool
    explanation: str | None = None


@dataclass(frozen=True)
class QuizReport:
    """Scored summary handed to the results screen."""

    title: str
    correct_count: int
    total_count: int
    percentage: int
    total_time_ms: int
    average_time_seconds: int
    details: tuple[ResultDetail, ...] = field(default_factory=tuple)

    @property
    def incorrect_count(self) -> int:
        return self.total_count - self.correct_count

    @property
    def rating(self) -> str:
        return rating_for(self.percentage)


def aggregate_results(
    records: Sequence[AnswerRecord],
    questions: Iterable[Question],
    *,
    title: str = "",
) -> QuizReport:
    """Reduce ``records`` to a :class:`QuizReport`.

    Counts and timings come from the records alone. ``questions`` is only
    used to look up texts for the detail rows; a record whose question
    cannot be found is left out of the details but still counted.
    """

    total = len(records)
    correct = sum(1 for record in records if record.is_correct)
    total_ms = sum(record.elapsed_ms for record in records)

    by_id = {question.id: question for question in questions}
    details: list[ResultDetail] = []
    for position, record in enumerate(records, start=1):
        question = by_id.get(record.question_id)
        if question is None:
            logger.warning(
                "answer record without matching question",
                extra={"question_id": record.question_id},
            )
            continue
        details.append(
            ResultDetail(
                position=position,
                question_id=question.id,
                prompt=question.prompt,
                selected_text=question.option_text(record.selected_index),
                correct_text=question.correct_text,
                is_correct=record.is_correct,
                explanation=question.explanation,
            )
        )

    return QuizReport(
        title=title,
        correct_count=correct,
        total_count=total,
        percentage=round_half_up(100 * correct, total),
        total_time_ms=total_ms,
        average_time_seconds=round_half_up(total_ms, total * 1000),
        details=tuple(details),
    )


def round_half_up(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` to the nearest int, ties upward.

    Works on integers only so ``x.5`` boundaries are exact. A zero
    denominator yields 0.
    """

    if denominator <= 0:
        return 0
    return (2 * numerator + denominator) // (2 * denominator)


def rating_for(percentage: int) -> str:
    for threshold, label in _RATINGS:
        if percentage >= threshold:
            return label
    return _RATINGS[-1][1]
