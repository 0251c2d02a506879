"""Formstate package."""

from formstate.arrays import ArrayEdit, ArrayMethods
from formstate.container import FieldContainer, render_field_in
from formstate.exceptions import FormUsageError, PackageError, SettingsError
from formstate.field import Field
from formstate.form import Form
from formstate.logging import configure_logging, get_logger
from formstate.settings import Settings, get_settings
from formstate.store import KEY_SEPARATOR, ValueStore, key_from_path, normalize_path
from formstate.validation import TokenCounter, ValidationOrchestrator

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("formstate")

__all__ = [
    "KEY_SEPARATOR",
    "ArrayEdit",
    "ArrayMethods",
    "Field",
    "FieldContainer",
    "Form",
    "FormUsageError",
    "PackageError",
    "Settings",
    "SettingsError",
    "TokenCounter",
    "ValidationOrchestrator",
    "ValueStore",
    "__version__",
    "configure_logging",
    "get_logger",
    "key_from_path",
    "logger",
    "normalize_path",
    "render_field_in",
]
