"""Declarations a binding layer passes in for fields and forms."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from formstate.typing.enums import FormMode

FieldName = str | int | list[str | int] | tuple[str | int, ...]


class FieldProps(BaseModel):
    """Configuration of one field for the current configuration pass.

    ``value`` only overrides the store when it was passed explicitly,
    which is read from ``model_fields_set``.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    name: FieldName
    label: Any = None
    text: str | None = None
    value: Any = None
    rules: Any = None
    data: Any = None
    index: int | None = None
    blur: bool | str | None = None
    focus: bool | str | None = None
    change: str | None = None
    group: bool = False
    item: bool | Callable[[Any, int], Any] = False
    actions: bool = False
    props: Mapping[str, Any] | Callable[[Any], Mapping[str, Any]] | None = None
    on_validate: Callable[[Any], Any] | None = None
    on_change: Callable[[Any], Any] | None = None
    on_focus: Callable[[Any], Any] | None = None
    on_blur: Callable[[Any], Any] | None = None

    @property
    def has_static_value(self) -> bool:
        """Return whether the declaration pins the field value."""
        return "value" in self.model_fields_set


class FormProps(BaseModel):
    """Per-form configuration, merged over `FormDefaults` on each pass."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    mode: FormMode | None = None
    isolated: bool | None = None
    native: bool | None = None
    value: Any = None
    rules: Any = None
    validator: Callable[[Any], Any] | None = None
    attributes: dict[str, Any] | None = None
    on_validate: Callable[[Any], Any] | None = None
    on_change: Callable[[Any], Any] | None = None
    on_submit: Callable[[Any], Any] | None = None
    on_success: Callable[[Any], Any] | None = None
    on_error: Callable[[list[Any], Any], Any] | None = None


class FormDefaults(BaseModel):
    """Provider-level defaults shared by every form of a binding layer."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, frozen=True)

    mode: FormMode = FormMode.ON_SUBMIT
    isolated: bool = False
    native: bool = False
    blur: bool | str = False
    focus: bool | str = False
    validator: Callable[[Any], Any] | None = None
    render_field: Callable[[Any, Any], Any] | None = None
    render_form: Callable[[Any, Any], Any] | None = None
