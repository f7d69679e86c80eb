from .errors import InvalidSelectionError, QuizError, SchemaError, StateError
from .models import (
    AnswerRecord,
    OrderMode,
    Question,
    QuestionSet,
    SessionPhase,
)
from .validator import load_question_set, validate_question_set
from .sequencer import sequence_questions
from .recorder import record_answer
from .scoring import QuizReport, ResultDetail, aggregate_results
from .controller import QuestionView, SessionController
from .session import QuizSessionResult, parse_session_command, run_quiz_session
from .samples import sample_question_set, write_sample

__all__ = [
    "InvalidSelectionError",
    "QuizError",
    "SchemaError",
    "StateError",
    "AnswerRecord",
    "OrderMode",
    "Question",
    "QuestionSet",
    "SessionPhase",
    "load_question_set",
    "validate_question_set",
    "sequence_questions",
    "record_answer",
    "QuizReport",
    "ResultDetail",
    "aggregate_results",
    "QuestionView",
    "SessionController",
    "QuizSessionResult",
    "parse_session_command",
    "run_quiz_session",
    "sample_question_set",
    "write_sample",
]
