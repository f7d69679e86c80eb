"""Question-set builders and fakes for quiz engine tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence


def make_question(
    qid: str,
    *,
    options: Sequence[str] = ("Alpha", "Beta", "Gamma"),
    correct: int = 0,
    explanation: str | None = None,
) -> dict[str, object]:
    item: dict[str, object] = {
        "id": qid,
        "question": f"Question {qid}?",
        "options": list(options),
        "correctAnswer": correct,
    }
    if explanation is not None:
        item["explanation"] = explanation
    return item


def make_document(count: int, *, title: str = "Sample") -> dict[str, object]:
    """Build a valid raw document with ``count`` questions q1..qN.

    Question ``qN`` has its correct answer at index ``(N - 1) % 3`` and an
    explanation on every odd-numbered question.
    """

    return {
        "title": title,
        "questions": [
            make_question(
                f"q{n}",
                correct=(n - 1) % 3,
                explanation=f"Because of {n}." if n % 2 else None,
            )
            for n in range(1, count + 1)
        ],
    }


@dataclass
class FakeClock:
    """Deterministic millisecond clock for the session controller."""

    now: int = 10_000

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def scripted_input(commands: Iterable[str]) -> Callable[[], str]:
    """Input provider that replays ``commands`` then raises StopIteration."""

    iterator = iter(commands)

    def _provider() -> str:
        return next(iterator)

    return _provider
