"""Configuration loader for `quiz play`."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from quick_quiz.core import config as core_config
from quick_quiz.core import workspace as workspace_mod

from .models import OrderMode

CONFIG_FILENAME = "quiz.toml"
CONFIG_ENV = "QUICK_QUIZ_CONFIG"
ENV_PREFIX = "QUICK_QUIZ_"

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class QuizConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class QuizConfig:
    """Fully resolved settings for a play session."""

    order: OrderMode
    show_explanations: bool
    log_level: str
    verbose: bool


@dataclass(frozen=True)
class ConfigOverrides:
    """Values from the command line; ``None`` means "not given"."""

    order: Optional[OrderMode] = None
    show_explanations: Optional[bool] = None
    log_level: Optional[str] = None
    verbose: Optional[bool] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Resolve settings with precedence CLI > environment > TOML > defaults.

    A missing default ``quiz.toml`` is fine; a file named explicitly through
    ``config_path`` or ``$QUICK_QUIZ_CONFIG`` must exist.
    """

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    except workspace_mod.WorkspaceError as exc:
        raise QuizConfigError(str(exc)) from exc

    explicit = config_path is not None or bool(
        (env_map.get(CONFIG_ENV) or "").strip()
    )
    requested = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        try:
            core_config.merge_defaults(table, core_config.load_toml(requested))
        except core_config.TomlConfigError as exc:
            raise QuizConfigError(str(exc)) from exc
        loaded_path = requested
    elif explicit:
        raise QuizConfigError(f"Config file not found: {requested}")

    session = table["session"]
    logging_table = table["logging"]

    order = _resolve_order(
        _pick_first(overrides.order, _env_string(env_map, "ORDER")),
        session["order"],
    )
    show_explanations = _require_bool(
        _pick_first(overrides.show_explanations, session["show_explanations"]),
        field="session.show_explanations",
    )
    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            logging_table["level"],
        )
    )
    verbose = _require_bool(
        _pick_first(overrides.verbose, logging_table["verbose"]),
        field="logging.verbose",
    )

    return LoadResult(
        config=QuizConfig(
            order=order,
            show_explanations=show_explanations,
            log_level=log_level,
            verbose=verbose,
        ),
        layout=layout,
        config_path=loaded_path,
    )


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    return {
        "session": {"order": OrderMode.FIXED.value, "show_explanations": True},
        "logging": {"level": "INFO", "verbose": False},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = (env_map.get(CONFIG_ENV) or "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_order(override: object, file_value: object) -> OrderMode:
    candidate = _pick_first(override, file_value)
    if isinstance(candidate, OrderMode):
        return candidate
    if not isinstance(candidate, str):
        raise QuizConfigError("session.order must be a string.")
    try:
        return OrderMode.from_value(candidate)
    except ValueError as exc:
        raise QuizConfigError(str(exc)) from exc


def _resolve_log_level(candidate: object) -> str:
    if not isinstance(candidate, str) or not candidate.strip():
        raise QuizConfigError("logging.level must be a non-empty string.")
    level = candidate.strip().upper()
    if level not in _LOG_LEVELS:
        raise QuizConfigError(
            "logging.level must be one of "
            "DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )
    return level


def _require_bool(value: object, *, field: str) -> bool:
    if not isinstance(value, bool):
        raise QuizConfigError(f"'{field}' must be a boolean.")
    return value


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    return raw.strip() or None


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
