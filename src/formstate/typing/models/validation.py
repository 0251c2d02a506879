"""Validator call context and collected failures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from formstate.typing.enums import ValidationKind


class ValidationContext(BaseModel):
    """Argument handed to the configured validator."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    kind: ValidationKind
    form: Any
    value: Any = None
    rules: Any = None
    field: Any = None
    text: str | None = None
    data: Any = None
    transform: Callable[[Any], None]


class ValidationError(BaseModel):
    """One entry of a form's error map.

    ``field`` is None for failures raised by form-level validators.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    form: Any
    field: Any = None
    error: Any
