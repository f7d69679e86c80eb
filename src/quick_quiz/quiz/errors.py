"""Exception types raised by the quiz engine."""

from __future__ import annotations


class QuizError(RuntimeError):
    """Base class for quiz engine errors."""


class SchemaError(QuizError):
    """Raised when an incoming question set violates the input schema.

    ``field`` names the offending location using a dotted/indexed path such
    as ``questions[2].options``; it is ``None`` for document-level problems
    like unreadable files.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class StateError(QuizError):
    """Raised when a controller operation is called in the wrong phase."""

    def __init__(self, operation: str, phase: str, detail: str = "") -> None:
        message = f"Cannot {operation} while the session is {phase}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message + ".")
        self.operation = operation
        self.phase = phase


class InvalidSelectionError(QuizError, ValueError):
    """Raised when an option index falls outside the question's options."""
