"""Capture of a single submitted answer."""

from __future__ import annotations

from .models import AnswerRecord, Question


def record_answer(
    question: Question,
    selected_index: int,
    *,
    started_at_ms: int,
    now_ms: int,
) -> AnswerRecord:
    """Build the :class:`AnswerRecord` for ``question``.

    Raises ``InvalidSelectionError`` when ``selected_index`` does not point
    at one of the question's options. Elapsed time never goes negative.
    """

    question.option_text(selected_index)
    return AnswerRecord(
        question_id=question.id,
        selected_index=selected_index,
        is_correct=selected_index == question.correct_index,
        elapsed_ms=max(0, int(now_ms) - int(started_at_ms)),
    )
