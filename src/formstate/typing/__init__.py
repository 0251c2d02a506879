"""Typing-centric domain modules."""

from formstate.typing.enums import FieldEvent, FieldStatus, FormMode, ValidationKind
from formstate.typing.models import (
    ChangeEvent,
    FieldBinding,
    FieldName,
    FieldProps,
    FormBinding,
    FormDefaults,
    FormProps,
    ValidationContext,
    ValidationError,
)
from formstate.typing.protocol import FieldRenderer, FormRenderer, Notifier, Validator, ValueStoreLike

__all__ = [
    "ChangeEvent",
    "FieldBinding",
    "FieldEvent",
    "FieldName",
    "FieldProps",
    "FieldRenderer",
    "FieldStatus",
    "FormBinding",
    "FormDefaults",
    "FormMode",
    "FormProps",
    "FormRenderer",
    "Notifier",
    "ValidationContext",
    "ValidationError",
    "ValidationKind",
    "Validator",
    "ValueStoreLike",
]
