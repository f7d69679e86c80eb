from __future__ import annotations

import pytest

from quick_quiz.quiz import config as quiz_config
from quick_quiz.quiz.config import ConfigOverrides, QuizConfigError
from quick_quiz.quiz.models import OrderMode


def _env(tmp_path, **values):
    env = {"QUICK_QUIZ_DATA_HOME": str(tmp_path / "ws")}
    env.update(values)
    return env


def test_defaults_without_config_file(tmp_path):
    result = quiz_config.load_config(env=_env(tmp_path))

    assert result.config.order is OrderMode.FIXED
    assert result.config.show_explanations is True
    assert result.config.log_level == "INFO"
    assert result.config.verbose is False
    assert result.config_path is None
    assert result.layout.home == tmp_path / "ws"
    assert result.layout.path_for("config").is_dir()


def test_workspace_config_file_is_read(tmp_path, workspace):
    workspace.write(
        "ws/config/quiz.toml",
        '[session]\norder = "shuffled"\nshow_explanations = false\n'
        '[logging]\nlevel = "debug"\n',
    )

    result = quiz_config.load_config(env=_env(tmp_path))

    assert result.config.order is OrderMode.SHUFFLED
    assert result.config.show_explanations is False
    assert result.config.log_level == "DEBUG"
    assert result.config_path == tmp_path / "ws" / "config" / "quiz.toml"


def test_environment_beats_file(tmp_path, workspace):
    workspace.write(
        "ws/config/quiz.toml", '[session]\norder = "fixed"\n'
    )

    result = quiz_config.load_config(
        env=_env(
            tmp_path,
            QUICK_QUIZ_ORDER="Shuffled",
            QUICK_QUIZ_LOG_LEVEL="warning",
        )
    )

    assert result.config.order is OrderMode.SHUFFLED
    assert result.config.log_level == "WARNING"


def test_overrides_beat_environment(tmp_path):
    result = quiz_config.load_config(
        env=_env(tmp_path, QUICK_QUIZ_ORDER="shuffled"),
        overrides=ConfigOverrides(
            order=OrderMode.FIXED,
            show_explanations=False,
            log_level="error",
            verbose=True,
        ),
    )

    assert result.config.order is OrderMode.FIXED
    assert result.config.show_explanations is False
    assert result.config.log_level == "ERROR"
    assert result.config.verbose is True


def test_explicit_config_path(tmp_path, workspace):
    path = workspace.write("elsewhere.toml", "[logging]\nverbose = true\n")

    result = quiz_config.load_config(config_path=path, env=_env(tmp_path))

    assert result.config.verbose is True
    assert result.config_path == path


def test_config_path_from_environment(tmp_path, workspace):
    path = workspace.write("env.toml", '[session]\norder = "shuffled"\n')

    result = quiz_config.load_config(
        env=_env(tmp_path, QUICK_QUIZ_CONFIG=str(path))
    )

    assert result.config.order is OrderMode.SHUFFLED
    assert result.config_path == path


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(QuizConfigError, match="Config file not found"):
        quiz_config.load_config(
            config_path=tmp_path / "missing.toml", env=_env(tmp_path)
        )


def test_workspace_path_argument_beats_env(tmp_path):
    result = quiz_config.load_config(
        env=_env(tmp_path), workspace_path=tmp_path / "override"
    )

    assert result.layout.home == tmp_path / "override"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('[session]\norder = "sideways"\n', "Unknown order mode"),
        ("[session]\norder = 3\n", "session.order must be a string"),
        ('[session]\nshow_explanations = "yes"\n', "must be a boolean"),
        ('[logging]\nlevel = "LOUD"\n', "logging.level must be one of"),
        ("[logging]\nverbose = 1\n", "must be a boolean"),
        ("[session]\nspeed = 2\n", "Unknown configuration key"),
        ("[session\n", "parse"),
    ],
)
def test_invalid_config_values(tmp_path, workspace, content, message):
    workspace.write("ws/config/quiz.toml", content)

    with pytest.raises(QuizConfigError, match=message):
        quiz_config.load_config(env=_env(tmp_path))


def test_invalid_env_order_raises(tmp_path):
    with pytest.raises(QuizConfigError, match="Unknown order mode"):
        quiz_config.load_config(env=_env(tmp_path, QUICK_QUIZ_ORDER="random"))


def test_workspace_file_conflict_raises(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")

    with pytest.raises(QuizConfigError):
        quiz_config.load_config(env=_env(tmp_path), workspace_path=blocker)
