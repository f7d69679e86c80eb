"""Shared testing fixtures for the quick_quiz test suite."""

from .quiz import FakeClock, make_document, make_question, scripted_input  # noqa: F401
from .workspace import WorkspaceBuilder  # noqa: F401

__all__ = [
    "FakeClock",
    "WorkspaceBuilder",
    "make_document",
    "make_question",
    "scripted_input",
]
