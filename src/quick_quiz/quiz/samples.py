"""Bundled example question set, useful as a template for new quizzes."""

from __future__ import annotations

import copy
import json
from pathlib import Path

from .models import QuestionSet
from .validator import validate_question_set

SAMPLE_FILENAME = "quiz-sample.json"

_SAMPLE: dict[str, object] = {
    "title": "General Knowledge",
    "questions": [
        {
            "id": "1",
            "question": "What is the capital of France?",
            "options": ["London", "Paris", "Madrid", "Rome"],
            "correctAnswer": 1,
            "explanation": "Paris is the capital and most populous city of France.",
        },
        {
            "id": "2",
            "question": "In which year did humans first land on the Moon?",
            "options": ["1967", "1968", "1969", "1970"],
            "correctAnswer": 2,
            "explanation": (
                "Neil Armstrong and Buzz Aldrin landed on the Moon on "
                "20 July 1969."
            ),
        },
        {
            "id": "3",
            "question": "What is the largest planet in the solar system?",
            "options": ["Saturn", "Jupiter", "Neptune", "Uranus"],
            "correctAnswer": 1,
            "explanation": "Jupiter is the largest planet in the solar system.",
        },
        {
            "id": "4",
            "question": "Who wrote 'Don Quixote'?",
            "options": [
                "Lope de Vega",
                "Miguel de Cervantes",
                "Federico García Lorca",
                "Pedro Calderón de la Barca",
            ],
            "correctAnswer": 1,
            "explanation": "Miguel de Cervantes Saavedra wrote the novel.",
        },
        {
            "id": "5",
            "question": "What is the largest ocean on Earth?",
            "options": ["Atlantic", "Indian", "Arctic", "Pacific"],
            "correctAnswer": 3,
            "explanation": "The Pacific is the largest and deepest ocean.",
        },
    ],
}


def sample_document() -> dict[str, object]:
    """Return a fresh copy of the raw sample document."""

    return copy.deepcopy(_SAMPLE)


def sample_question_set() -> QuestionSet:
    return validate_question_set(sample_document())


def write_sample(path: Path, *, overwrite: bool = False) -> Path:
    """Write the sample question set as pretty-printed JSON.

    A directory target receives ``quiz-sample.json``. Existing files are
    left alone unless ``overwrite`` is set.
    """

    target = Path(path).expanduser()
    if target.is_dir():
        target = target / SAMPLE_FILENAME
    if target.exists() and not overwrite:
        raise FileExistsError(f"File already exists: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(sample_document(), indent=2, ensure_ascii=False)
    target.write_text(payload + "\n", encoding="utf-8")
    return target
