from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from formstate.exceptions import SettingsError
from formstate.form import Form
from formstate.settings import Settings, get_settings
from formstate.typing.enums import FormMode

if TYPE_CHECKING:
    from pathlib import Path


def test_settings_load_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "LOG_LEVEL=DEBUG\nLOG_JSON=false\nFORMSTATE_MODE=onBlur\nFORMSTATE_ISOLATED=true\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    assert settings.form_mode is FormMode.ON_BLUR
    assert settings.form_isolated is True


def test_form_defaults_from_settings() -> None:
    defaults = Settings(FORMSTATE_MODE="onChange", FORMSTATE_BLUR=True).form_defaults()
    assert defaults.mode is FormMode.ON_CHANGE
    assert defaults.blur is True
    assert defaults.native is False


def test_get_settings_uses_environment(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("FORMSTATE_MODE", "onChange")

    form = Form()
    assert form.props.mode is FormMode.ON_CHANGE

    get_settings.cache_clear()


def test_get_settings_wraps_invalid_values(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("FORMSTATE_MODE", "onHover")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        get_settings()

    get_settings.cache_clear()


def test_settings_only_expose_logging_and_form_knobs() -> None:
    assert set(Settings.model_fields) == {
        "log_level",
        "log_json",
        "log_file",
        "form_mode",
        "form_isolated",
        "form_native",
        "form_blur",
        "form_focus",
    }
