from __future__ import annotations

from pathlib import Path

import pytest

from quick_quiz.core import config_templates
from quick_quiz.core.config_templates import (
    ConfigTemplate,
    ConfigTemplateError,
)


def test_get_template_returns_quiz_template(tmp_path: Path) -> None:
    template = config_templates.get_template("quiz")
    assert isinstance(template, ConfigTemplate)

    contents = template.read_text()
    assert "[session]" in contents
    assert "[logging]" in contents

    target = tmp_path / "quiz.toml"
    written = template.write(target)
    assert written == target
    assert target.read_text(encoding="utf-8") == contents

    with pytest.raises(ConfigTemplateError):
        template.write(target)

    assert template.write(target, overwrite=True) == target


def test_iter_templates_returns_registered_templates() -> None:
    names = {template.name for template in config_templates.iter_templates()}
    assert names == {"quiz"}


@pytest.mark.parametrize("unknown", ["missing", "", "rag"])
def test_get_template_unknown_raises(unknown: str) -> None:
    with pytest.raises(ConfigTemplateError):
        config_templates.get_template(unknown)
