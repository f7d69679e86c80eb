"""Validation boundary between untyped question-set files and the engine.

Everything downstream of :func:`validate_question_set` works with the frozen
structures from :mod:`quick_quiz.quiz.models` and never re-checks shape.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from .errors import SchemaError
from .models import Question, QuestionSet

__all__ = ["load_question_set", "validate_question_set"]


def validate_question_set(raw: object) -> QuestionSet:
    """Turn parsed JSON into a :class:`QuestionSet` or raise ``SchemaError``.

    Rules are checked in a fixed order and the first violation wins:

    - the document is an object with a non-empty ``title`` string
    - ``questions`` is a non-empty list
    - each question, in order, has a non-empty ``id`` not used by an
      earlier question, a non-empty ``question`` text, at least two string
      ``options``, an integer ``correctAnswer`` indexing into ``options``,
      and an optional string ``explanation``

    Values are never coerced: ``"1"`` is not accepted as ``correctAnswer``.
    """

    if not isinstance(raw, Mapping):
        raise SchemaError("Question set must be a JSON object.")

    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise SchemaError(
            "Question set must have a non-empty 'title' string.",
            field="title",
        )

    entries = raw.get("questions")
    if not isinstance(entries, list):
        raise SchemaError(
            "Question set must have a 'questions' list.", field="questions"
        )
    if not entries:
        raise SchemaError(
            "Question set must contain at least one question.",
            field="questions",
        )

    seen: set[str] = set()
    questions: list[Question] = []
    for position, entry in enumerate(entries):
        questions.append(
            _validate_question(entry, f"questions[{position}]", seen)
        )

    return QuestionSet(title=title.strip(), questions=tuple(questions))


def load_question_set(path: Path) -> QuestionSet:
    """Read, parse and validate the question-set file at ``path``."""

    path = Path(path)
    if path.suffix.lower() != ".json":
        raise SchemaError(f"Please select a JSON (.json) file: {path.name}")
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SchemaError(f"Question set file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SchemaError(f"Could not read {path}: {exc}") from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(
            f"Could not parse {path.name} as JSON: {exc.msg} "
            f"(line {exc.lineno}, column {exc.colno})."
        ) from exc
    return validate_question_set(raw)


def _validate_question(entry: object, where: str, seen: set[str]) -> Question:
    if not isinstance(entry, Mapping):
        raise SchemaError(f"{where} must be an object.", field=where)

    qid = entry.get("id")
    if not isinstance(qid, str) or not qid.strip():
        raise SchemaError(
            f"{where} must have a non-empty 'id' string.", field=f"{where}.id"
        )
    # Ids are compared and kept exactly as written.
    if qid in seen:
        raise SchemaError(
            f"Duplicate question id '{qid}'.", field=f"{where}.id"
        )

    prompt = entry.get("question")
    if not isinstance(prompt, str) or not prompt.strip():
        raise SchemaError(
            f"{where} must have non-empty 'question' text.",
            field=f"{where}.question",
        )

    options = entry.get("options")
    if not isinstance(options, list):
        raise SchemaError(
            f"{where} must have an 'options' list.", field=f"{where}.options"
        )
    if len(options) < 2:
        raise SchemaError(
            f"{where} must offer at least 2 options, found {len(options)}.",
            field=f"{where}.options",
        )
    for index, option in enumerate(options):
        if not isinstance(option, str):
            raise SchemaError(
                f"{where} option {index} must be a string.",
                field=f"{where}.options[{index}]",
            )

    if "correctAnswer" not in entry:
        raise SchemaError(
            f"{where} is missing 'correctAnswer'.",
            field=f"{where}.correctAnswer",
        )
    answer = entry["correctAnswer"]
    # bool is an int subclass; JSON true/false must not pass as 1/0.
    if isinstance(answer, bool) or not isinstance(answer, int):
        raise SchemaError(
            f"{where} 'correctAnswer' must be an integer index, found "
            f"{type(answer).__name__}.",
            field=f"{where}.correctAnswer",
        )
    if not 0 <= answer < len(options):
        raise SchemaError(
            f"{where} 'correctAnswer' {answer} is out of range for "
            f"{len(options)} options.",
            field=f"{where}.correctAnswer",
        )

    explanation = entry.get("explanation")
    if explanation is not None and not isinstance(explanation, str):
        raise SchemaError(
            f"{where} 'explanation' must be a string when present.",
            field=f"{where}.explanation",
        )

    seen.add(qid)
    return Question(
        id=qid,
        prompt=prompt.strip(),
        options=tuple(options),
        correct_index=answer,
        explanation=(explanation or "").strip() or None,
    )
