"""Field handles: one value location plus its interaction and validation state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formstate.arrays import ArrayMethods
from formstate.typing.enums import FieldEvent, FieldStatus
from formstate.typing.models import ChangeEvent, FieldProps

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable

    from formstate.container import FieldContainer
    from formstate.form import Form
    from formstate.store import FieldPath


class Field(ArrayMethods):
    """Bound handle over one location of the form value.

    A field is created on first registration of its key and reused on every
    later configuration pass that registers the same key, so its dirty,
    touched and validation state survive a rebuild.
    """

    def __init__(self, owner: FieldContainer, field_id: str, key: str, path: FieldPath) -> None:
        """Create a field owned by the root container ``owner``."""
        self.id = field_id
        self.key = key
        self.path = path
        self.props = FieldProps(name=list(path))
        self.text = ""
        self.label: Any = None
        self.index: int | None = None
        self.status = FieldStatus.UNKNOWN
        self.dirty = False
        self.touched = False
        self.focused = False
        self.error: Any = None
        self.pending: asyncio.Task[None] | None = None
        self.validation_token = 0
        self.container: FieldContainer | None = None
        self._owner = owner
        self._override: Any = None
        self._repaint: Callable[[], None] | None = None

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Field(key={self.key!r}, status={self.status.value!r}, dirty={self.dirty})"

    @property
    def form(self) -> Form:
        """Form this field belongs to."""
        return self._owner.form

    @property
    def value(self) -> Any:  # noqa: ANN401
        """Local override when dirty, else the declared value, else the stored one."""
        if self.dirty:
            return self._override
        if self.props.has_static_value:
            return self.props.value
        return self._owner.get_value(self.path)

    def configure(self, props: FieldProps) -> None:
        """Apply the declaration of the current configuration pass."""
        self.index = props.index
        self.props = props
        self.label = props.label(self) if callable(props.label) else props.label
        if props.text:
            self.text = props.text
        elif isinstance(self.label, str):
            self.text = self.label
        else:
            self.text = str(self.path[-1])

    def bind_repaint(self, callback: Callable[[], None] | None) -> None:
        """Install the repaint hook used when the form runs isolated."""
        self._repaint = callback

    def repaint(self) -> None:
        """Request a repaint of this field only."""
        if self._repaint is not None:
            self._repaint()

    def invalidate_validation(self) -> int:
        """Make any in-flight validation of this field stale.

        Returns:
            int: The new validation token.
        """
        self.validation_token += 1
        self.pending = None
        return self.validation_token

    def invalidate(self) -> None:
        """Re-pull the stored value into the local override of a dirty field."""
        if not self.dirty:
            return
        self._override = self._owner.get_value(self.path)

    def reset(self) -> None:
        """Return the field to its initial interaction and validation state."""
        self.status = FieldStatus.UNKNOWN
        self.touched = False
        self.focused = False
        self.dirty = False
        self.error = None
        self._override = None
        self.invalidate_validation()

    def update(self, value: Any) -> None:  # noqa: ANN401
        """Write ``value`` at this field's path and dispatch ``onChange`` if it changed."""

        def _on_changed() -> None:
            self._override = value
            self.touched = True
            self.status = FieldStatus.UNKNOWN
            self.dirty = True
            self.invalidate_validation()
            if self.props.on_change is not None:
                self.props.on_change(self)
            self._owner.dispatch(FieldEvent.ON_CHANGE, self)

        self._owner.set_value(self.path, value, _on_changed)

    def on_change(self, value: Any) -> None:  # noqa: ANN401
        """Change handler bound on widgets; accepts a value or a `ChangeEvent`."""
        if isinstance(value, ChangeEvent):
            value = value.resolve()
        self.update(value)

    def on_blur(self) -> None:
        """Blur handler bound on widgets."""
        self.focused = False
        if self.props.on_blur is not None:
            self.props.on_blur(self)
        self._owner.dispatch(FieldEvent.ON_BLUR, self)

    def on_focus(self) -> None:
        """Focus handler bound on widgets."""
        self.touched = True
        self.focused = True
        if self.props.on_focus is not None:
            self.props.on_focus(self)
        self._owner.dispatch(FieldEvent.ON_FOCUS, self)
