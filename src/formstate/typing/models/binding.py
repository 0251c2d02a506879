"""What the engine hands back to, and accepts from, a binding layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_TOGGLE_TARGETS = frozenset({"checkbox", "radio"})


class ChangeEvent(BaseModel):
    """Plain-data form of a widget change event.

    The binding layer converts its native event into this model; checkbox
    and radio targets report ``checked``, every other target reports ``value``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_type: str = "text"
    value: Any = None
    checked: bool = False

    def resolve(self) -> Any:  # noqa: ANN401
        """Return the value the event carries for its target type."""
        if self.target_type in _TOGGLE_TARGETS:
            return self.checked
        return self.value


class FieldBinding(BaseModel):
    """Props to bind on a leaf widget for one field."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    field: Any
    props: dict[str, Any] = Field(default_factory=dict)
    key: Any = None


class FormBinding(BaseModel):
    """Default form wrapper description.

    ``props`` is empty in native mode, when the binding layer wires submission itself.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    form: Any
    native: bool = False
    props: dict[str, Any] = Field(default_factory=dict)
    content: Any = None
