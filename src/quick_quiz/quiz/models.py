"""Immutable data structures shared by the quiz engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidSelectionError


class OrderMode(Enum):
    """How questions are ordered for a play-through."""

    FIXED = "fixed"
    SHUFFLED = "shuffled"

    @classmethod
    def from_value(cls, value: "str | OrderMode") -> "OrderMode":
        if isinstance(value, OrderMode):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise ValueError(
            f"Unknown order mode '{value}'. Expected one of: {expected}."
        )


class SessionPhase(Enum):
    SETUP = "setup"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Question:
    """A validated multiple-choice question."""

    id: str
    prompt: str
    options: tuple[str, ...]
    correct_index: int
    explanation: str | None = None

    def option_text(self, index: int) -> str:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidSelectionError(
                f"Option index must be an integer, found "
                f"{type(index).__name__}."
            )
        if not 0 <= index < len(self.options):
            raise InvalidSelectionError(
                f"Option {index} is out of range for question '{self.id}' "
                f"({len(self.options)} options)."
            )
        return self.options[index]

    @property
    def correct_text(self) -> str:
        return self.options[self.correct_index]


@dataclass(frozen=True)
class QuestionSet:
    """A validated quiz: a title plus at least one question."""

    title: str
    questions: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)

    def question_for(self, question_id: str) -> Question | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def to_dict(self) -> dict[str, object]:
        """Serialize back into the JSON input schema."""

        questions: list[dict[str, object]] = []
        for question in self.questions:
            item: dict[str, object] = {
                "id": question.id,
                "question": question.prompt,
                "options": list(question.options),
                "correctAnswer": question.correct_index,
            }
            if question.explanation is not None:
                item["explanation"] = question.explanation
            questions.append(item)
        return {"title": self.title, "questions": questions}


@dataclass(frozen=True)
class AnswerRecord:
    """The committed answer to one question of a play-through."""

    question_id: str
    selected_index: int
    is_correct: bool
    elapsed_ms: int
