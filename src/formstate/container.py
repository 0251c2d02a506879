"""Field containers: registration scope, value access and binding for a set of fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from formstate.exceptions import FormUsageError
from formstate.store import ValueStore, normalize_path
from formstate.typing.models import FieldBinding, FieldProps

if TYPE_CHECKING:
    from collections.abc import Callable

    from formstate.field import Field
    from formstate.form import Form
    from formstate.store import FieldPath
    from formstate.typing.enums import FieldEvent
    from formstate.typing.models import FieldName

_DEFAULT_CHANGE_PROP = "onChange"
_DEFAULT_BLUR_PROP = "onBlur"
_DEFAULT_FOCUS_PROP = "onFocus"


class FieldContainer:
    """Registry scope and value store for fields.

    The form is the root container. A group field owns a nested container
    whose store is rooted at the group path; names registered through it are
    prefixed with that path.
    """

    def __init__(self, form: Form | None, store: ValueStore, prefix: FieldPath = ()) -> None:
        """Create a container.

        Args:
            form: Owning form, None when the container is the form itself.
            store: Store whose root is this container's path.
            prefix: Path of this container inside the form value.
        """
        self._form = form
        self._store = store
        self.prefix = prefix

    @property
    def form(self) -> Form:
        """Root form of this container."""
        if self._form is None:
            msg = "Container is not attached to a form"
            raise FormUsageError(msg)
        return self._form

    def get_value(self, name: FieldName) -> Any:  # noqa: ANN401
        """Read a value relative to this container."""
        return self._store.get_value(name)

    def set_value(
        self,
        name: FieldName,
        value: Any,  # noqa: ANN401
        on_changed: Callable[[], None] | None = None,
        *,
        force_update: bool = False,
    ) -> bool:
        """Write a value relative to this container."""
        return self._store.set_value(name, value, on_changed, force_update=force_update)

    def dispatch(self, event: FieldEvent, field: Field) -> None:
        """Forward a field event to the form policy."""
        self.form.dispatch(event, field)

    def register(self, name: FieldName, props: FieldProps | None = None) -> Field:
        """Register a field under this container for the current pass.

        Args:
            name: Name or path relative to this container.
            props: Field declaration; defaults to a bare declaration of ``name``.

        Returns:
            Field: The field registered at the full path.
        """
        path = self.prefix + normalize_path(name)
        if props is None:
            props = FieldProps(name=list(path))
        return self.form.register_path(path, props)

    def group(self, field: Field) -> FieldContainer:
        """Return the nested container of a group field, creating it once."""
        if field.container is None:
            form = self.form
            path = field.path
            store = ValueStore(
                lambda: form.get_value(path),
                lambda value, force_update: form.set_value(path, value, force_update=force_update),
            )
            field.container = FieldContainer(form, store, prefix=path)
        return field.container

    def render(
        self,
        props: FieldProps,
        children: Any = None,  # noqa: ANN401
        *,
        repaint: Callable[[], None] | None = None,
    ) -> Any:  # noqa: ANN401
        """Register a field and describe what the consumer should bind.

        Args:
            props: Field declaration.
            children: Content, or a callable receiving the field (the nested
                container for groups).
            repaint: Per-field repaint hook used in isolated mode.

        Returns:
            Any: ``children`` output for actions and groups, a list of item
            bindings for array items, else a `FieldBinding` passed through the
            form's ``render_field`` hook when one is configured.
        """
        defaults = self.form.defaults
        inherited = {
            name: getattr(defaults, name)
            for name in ("blur", "focus")
            if getattr(props, name) is None and getattr(defaults, name)
        }
        if inherited:
            props = props.model_copy(update=inherited)

        field = self.register(props.name, props)

        if props.actions:
            return children(field) if callable(children) else children

        if props.group:
            container = self.group(field)
            if callable(children):
                return children(container)
            return container if children is None else children

        field.bind_repaint(repaint)
        if callable(children):
            return children(field)

        content: Any = self._render_items(field, props, children) if props.item else self._bind_leaf(field)
        hook = self.form.render_field
        return hook(field, content) if hook is not None else content

    def _bind_leaf(self, field: Field) -> FieldBinding:
        props = field.props
        mapped: dict[str, Any] = {
            "value": field.value,
            props.change or _DEFAULT_CHANGE_PROP: field.on_change,
        }
        if props.blur:
            mapped[props.blur if isinstance(props.blur, str) else _DEFAULT_BLUR_PROP] = field.on_blur
        if props.focus:
            mapped[props.focus if isinstance(props.focus, str) else _DEFAULT_FOCUS_PROP] = field.on_focus

        extra = props.props(field) if callable(props.props) else props.props
        if extra:
            mapped.update(extra)
        return FieldBinding(field=field, props=mapped)

    def _render_items(self, field: Field, props: FieldProps, children: Any) -> list[Any]:  # noqa: ANN401
        # Item fields are keyed by index; see DESIGN.md for the identity rule.
        items = field.value or []
        rendered: list[Any] = []
        for index, item in enumerate(items):
            item_props = props.model_copy(update={"name": [*field.path, index], "index": index, "item": False})
            key = props.item(item, index) if callable(props.item) else index
            child = self.form.render(item_props, children)
            if isinstance(child, FieldBinding):
                child.key = key
            rendered.append(child)
        return rendered


def render_field_in(
    container: FieldContainer | None,
    props: FieldProps,
    children: Any = None,  # noqa: ANN401
    *,
    repaint: Callable[[], None] | None = None,
) -> Any:  # noqa: ANN401
    """Render a field through an explicitly passed container.

    Raises:
        FormUsageError: If no container is given.

    Returns:
        Any: See `FieldContainer.render`.
    """
    if container is None:
        msg = "No form container given for field registration"
        raise FormUsageError(msg)
    return container.render(props, children, repaint=repaint)
