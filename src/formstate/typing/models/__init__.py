"""Core domain model exports."""

from formstate.typing.models.binding import ChangeEvent, FieldBinding, FormBinding
from formstate.typing.models.props import FieldName, FieldProps, FormDefaults, FormProps
from formstate.typing.models.validation import ValidationContext, ValidationError

__all__ = [
    "ChangeEvent",
    "FieldBinding",
    "FieldName",
    "FieldProps",
    "FormBinding",
    "FormDefaults",
    "FormProps",
    "ValidationContext",
    "ValidationError",
]
