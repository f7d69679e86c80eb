from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

ROOT = TESTS_DIR.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fixtures import FakeClock, WorkspaceBuilder, make_document  # noqa: E402


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def document() -> dict:
    """A valid three-question raw document."""

    return make_document(3)


@pytest.fixture(autouse=True)
def _isolate_workspace(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    monkeypatch.setenv("QUICK_QUIZ_DATA_HOME", str(tmp_path / "data-home"))
    for key in ("QUICK_QUIZ_CONFIG", "QUICK_QUIZ_ORDER", "QUICK_QUIZ_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    yield
    logger = logging.getLogger("quick_quiz")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
