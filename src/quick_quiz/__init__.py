"""Quick Quiz: take multiple-choice quizzes from JSON question sets."""
