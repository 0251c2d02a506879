"""Callback interfaces consumed from the binding layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from formstate.typing.models import FieldName, ValidationContext


class Notifier(Protocol):
    """Repaint request with no payload; coalescing is up to the caller."""

    def __call__(self) -> None:
        """Request a repaint."""


class Validator(Protocol):
    """Pluggable validation function."""

    def __call__(self, context: ValidationContext) -> Any:  # noqa: ANN401
        """Validate the context value against its rules.

        Args:
            context: Subject, value and rules to check.

        Returns:
            Any: None or any plain value on success, an awaitable for deferred
            validation. Failures are raised (or raised by the awaitable).
        """


class FieldRenderer(Protocol):
    """Hook wrapping or replacing the default output of a field."""

    def __call__(self, field: Any, content: Any) -> Any:  # noqa: ANN401
        """Return the rendered field."""


class FormRenderer(Protocol):
    """Hook wrapping or replacing the default output of a form."""

    def __call__(self, form: Any, content: Any) -> Any:  # noqa: ANN401
        """Return the rendered form."""


@runtime_checkable
class ValueStoreLike(Protocol):
    """Path-based read/write access shared by stores and containers."""

    def get_value(self, name: FieldName) -> Any:  # noqa: ANN401
        """Read the value at ``name``.

        Args:
            name: Key or path into the value tree.

        Returns:
            Any: The value, or None when any segment is missing.
        """

    def set_value(
        self,
        name: FieldName,
        value: Any,  # noqa: ANN401
        on_changed: Callable[[], None] | None = None,
        *,
        force_update: bool = False,
    ) -> None:
        """Write ``value`` at ``name`` through a structurally shared copy.

        Args:
            name: Key or path into the value tree.
            value: New leaf value.
            on_changed: Called only when the tree actually changed.
            force_update: Write without notifying the form's change callback.
        """
