"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from formstate.exceptions import SettingsError
from formstate.typing.enums import FormMode
from formstate.typing.models import FormDefaults


class Settings(BaseSettings):
    """Package settings.

    The ``form_*`` entries are the provider-level defaults every `Form`
    falls back to when its own props leave a knob unset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    form_mode: FormMode = Field(
        default=FormMode.ON_SUBMIT,
        validation_alias="FORMSTATE_MODE",
        description="Event that triggers whole-form validation: onChange, onBlur, onFocus or onSubmit.",
    )
    form_isolated: bool = Field(
        default=False,
        validation_alias="FORMSTATE_ISOLATED",
        description="Scope per-field validation and repaint to the field itself.",
    )
    form_native: bool = Field(
        default=False,
        validation_alias="FORMSTATE_NATIVE",
        description="Leave submit wiring to the binding layer.",
    )
    form_blur: bool = Field(
        default=False,
        validation_alias="FORMSTATE_BLUR",
        description="Expose blur handlers on every field binding.",
    )
    form_focus: bool = Field(
        default=False,
        validation_alias="FORMSTATE_FOCUS",
        description="Expose focus handlers on every field binding.",
    )

    def form_defaults(self) -> FormDefaults:
        """Build provider-level form defaults from the settings.

        Returns:
            FormDefaults: Defaults applied to forms created without explicit ones.
        """
        return FormDefaults(
            mode=self.form_mode,
            isolated=self.form_isolated,
            native=self.form_native,
            blur=self.form_blur,
            focus=self.form_focus,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        raise SettingsError(exc=exc) from exc
