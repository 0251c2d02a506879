"""Form engine enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FieldEvent(_EnumMixin):
    """User events a field dispatches to its form."""

    ON_CHANGE = "onChange"
    ON_BLUR = "onBlur"
    ON_FOCUS = "onFocus"
    ON_SUBMIT = "onSubmit"


# The validation mode names the event class that triggers whole-form validation.
FormMode = FieldEvent


class FieldStatus(_EnumMixin):
    """Validation state of a field."""

    UNKNOWN = "unknown"
    BUSY = "busy"
    VALID = "valid"
    INVALID = "invalid"


class ValidationKind(_EnumMixin):
    """Subject of a validator call."""

    FIELD = "field"
    FORM = "form"
