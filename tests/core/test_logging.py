from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from quick_quiz.core import logging as core_logging


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_configure_logger_writes_json(tmp_path):
    log_dir = tmp_path / "logs"
    logger, log_path = core_logging.configure_logger(
        "quick_quiz.test",
        log_dir=log_dir,
        level="INFO",
        filename="test.log",
    )

    logger.info("quiz started", extra={"question_count": 3, "order": "fixed"})
    logger.debug("filtered out")

    class _Helper:
        def __repr__(self):  # noqa: D401
            return "helper"

    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception(
            "with error",
            extra={
                "value": {"items": [Path(log_dir), 1], "mapping": {"k": "v"}},
                "obj": _Helper(),
            },
        )
    for handler in logger.handlers:
        handler.flush()

    assert log_path == log_dir / "test.log"
    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2

    first = json.loads(lines[0])
    assert first["message"] == "quiz started"
    assert first["level"] == "INFO"
    assert first["logger"] == "quick_quiz.test"
    assert first["extra"] == {"question_count": 3, "order": "fixed"}

    last = json.loads(lines[-1])
    assert "ValueError: boom" in last["exception"]
    assert last["extra"]["obj"] == "helper"
    assert last["extra"]["value"]["items"] == [str(log_dir), 1]

    _close(logger)


def test_default_filename_uses_last_name_segment(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "quick_quiz.session", log_dir=tmp_path
    )

    assert log_path.name == "session.log"
    _close(logger)


def test_verbose_lowers_file_level_and_adds_console(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "quick_quiz.test_verbose",
        log_dir=tmp_path / "logs",
        level="WARNING",
        verbose=True,
        filename="verbose.log",
    )
    logger.debug("detail")
    for handler in logger.handlers:
        handler.flush()

    console_handlers = [
        handler
        for handler in logger.handlers
        if getattr(handler, "_quick_quiz_console", False)
    ]
    assert len(console_handlers) == 1
    assert "detail" in log_path.read_text(encoding="utf-8")

    _close(logger)


def test_console_handler_toggle_and_file_reuse(tmp_path):
    log_dir = tmp_path / "logs"
    name = "quick_quiz.test_toggle"

    logger, _ = core_logging.configure_logger(
        name, log_dir=log_dir, verbose=True, filename="toggle.log"
    )
    core_logging.configure_logger(
        name, log_dir=log_dir, verbose=True, filename="toggle.log"
    )
    consoles = [
        h for h in logger.handlers if getattr(h, "_quick_quiz_console", False)
    ]
    files = [h for h in logger.handlers if getattr(h, "_quick_quiz_file", False)]
    assert len(consoles) == 1
    assert len(files) == 1

    core_logging.configure_logger(
        name, log_dir=log_dir, verbose=False, filename="toggle.log"
    )
    assert not any(
        getattr(h, "_quick_quiz_console", False) for h in logger.handlers
    )

    _close(logger)


def test_switching_log_file_replaces_handler(tmp_path):
    name = "quick_quiz.test_switch"
    logger, first = core_logging.configure_logger(
        name, log_dir=tmp_path / "a", filename="one.log"
    )
    _, second = core_logging.configure_logger(
        name, log_dir=tmp_path / "b", filename="one.log"
    )

    files = [h for h in logger.handlers if getattr(h, "_quick_quiz_file", False)]
    assert first != second
    assert len(files) == 1
    assert Path(files[0].baseFilename) == second

    _close(logger)


def test_configure_logger_fallback_directory(tmp_path, monkeypatch):
    target = tmp_path / "blocked"
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path / "tmp"))

    original_mkdir = Path.mkdir

    def fake_mkdir(self, *args, **kwargs):  # noqa: ANN001
        if self == target:
            raise PermissionError("denied")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", fake_mkdir)

    logger, log_path = core_logging.configure_logger(
        "quick_quiz.test_blocked",
        log_dir=target,
        filename="blocked.log",
    )

    assert log_path.parent == tmp_path / "tmp" / "quick-quiz-logs"
    assert log_path.exists()

    _close(logger)


def test_rotating_handler_permission_error_uses_fallback(tmp_path, monkeypatch):
    calls = {"count": 0}
    original_handler = core_logging.RotatingFileHandler
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path / "tmp"))

    def fake_handler(path, *args, **kwargs):  # noqa: ANN001
        calls["count"] += 1
        if calls["count"] == 1:
            raise PermissionError("denied")
        return original_handler(path, *args, **kwargs)

    monkeypatch.setattr(core_logging, "RotatingFileHandler", fake_handler)

    logger, log_path = core_logging.configure_logger(
        "quick_quiz.test_rotating_fallback",
        log_dir=tmp_path / "primary",
        filename="rotate.log",
    )

    assert log_path.parent == tmp_path / "tmp" / "quick-quiz-logs"
    assert calls["count"] == 2

    _close(logger)
