"""Presentation order for a play-through."""

from __future__ import annotations

import random
from typing import Optional

from .models import OrderMode, Question, QuestionSet


def sequence_questions(
    question_set: QuestionSet,
    mode: OrderMode,
    *,
    rng: Optional[random.Random] = None,
) -> tuple[Question, ...]:
    """Return the questions of ``question_set`` in presentation order.

    ``FIXED`` keeps the authored order. ``SHUFFLED`` returns a uniformly
    random permutation; ``random.Random.shuffle`` is a Fisher-Yates shuffle,
    so every ordering is equally likely. The set itself is left untouched.
    """

    ordered = list(question_set.questions)
    if OrderMode.from_value(mode) is OrderMode.SHUFFLED:
        (rng or random.Random()).shuffle(ordered)
    return tuple(ordered)
