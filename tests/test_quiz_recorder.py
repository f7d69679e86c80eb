from __future__ import annotations

import pytest

from quick_quiz.quiz.errors import InvalidSelectionError, QuizError
from quick_quiz.quiz.models import AnswerRecord, Question
from quick_quiz.quiz.recorder import record_answer

QUESTION = Question(
    id="cap",
    prompt="Capital of France?",
    options=("Berlin", "Paris", "Rome"),
    correct_index=1,
)


def test_correct_answer_is_marked():
    record = record_answer(QUESTION, 1, started_at_ms=1_000, now_ms=3_500)

    assert record == AnswerRecord(
        question_id="cap", selected_index=1, is_correct=True, elapsed_ms=2_500
    )


def test_incorrect_answer_is_marked():
    record = record_answer(QUESTION, 2, started_at_ms=0, now_ms=10)

    assert record.is_correct is False
    assert record.selected_index == 2


def test_elapsed_time_never_negative():
    record = record_answer(QUESTION, 0, started_at_ms=5_000, now_ms=4_000)

    assert record.elapsed_ms == 0


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_out_of_range_selection_raises(index):
    with pytest.raises(InvalidSelectionError) as excinfo:
        record_answer(QUESTION, index, started_at_ms=0, now_ms=0)

    assert isinstance(excinfo.value, QuizError)
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("index", [True, False, 1.0])
def test_non_integer_selection_raises(index):
    with pytest.raises(InvalidSelectionError):
        record_answer(QUESTION, index, started_at_ms=0, now_ms=0)
