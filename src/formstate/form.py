"""Root form container: value ownership, registry generations and lifecycle."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from formstate.container import FieldContainer
from formstate.field import Field
from formstate.logging import get_logger
from formstate.settings import get_settings
from formstate.store import ValueStore, key_from_path, normalize_path
from formstate.typing.enums import FieldEvent
from formstate.typing.models import FormBinding, FormDefaults, FormProps
from formstate.validation import ValidationOrchestrator

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Callable, Generator

    from formstate.store import FieldPath
    from formstate.typing.models import FieldName, FieldProps, ValidationError
    from formstate.typing.protocol import FieldRenderer, FormRenderer, Notifier


class Form(FieldContainer):
    """Root container of a form.

    The registry keeps two generations: fields registered during the current
    configuration pass and the fields of the previous pass. A field that is
    registered again is carried over with its state; `collect` drops the
    rest once the pass is over.
    """

    def __init__(
        self,
        notify: Notifier | None = None,
        *,
        defaults: FormDefaults | None = None,
        render_field: FieldRenderer | None = None,
        render_form: FormRenderer | None = None,
    ) -> None:
        """Create an empty form.

        Args:
            notify: Repaint request callback.
            defaults: Provider-level defaults; read from settings when omitted.
            render_field: Hook wrapping field output; overrides the defaults' hook.
            render_form: Hook wrapping form output; overrides the defaults' hook.
        """
        self.id = uuid4().hex
        self.defaults = defaults or get_settings().form_defaults()
        self.render_field = render_field or self.defaults.render_field
        self.render_form = render_form or self.defaults.render_form
        self.props = self._resolve(FormProps())
        self.change_token = 0
        self._notify = notify
        self._fields: dict[str, Field] = {}
        self._previous: dict[str, Field] = {}
        self._form_value: Any = None
        self._empty: dict[str, Any] = {}
        self._dirty = False
        super().__init__(None, ValueStore(lambda: self.value, self._write_root))
        self._validation = ValidationOrchestrator(self)
        self._logger = get_logger(__name__, form_id=self.id)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Form(id={self.id!r}, fields={len(self._fields)}, dirty={self._dirty})"

    @property
    def form(self) -> Form:
        """The form is its own root container."""
        return self

    @property
    def value(self) -> Any:  # noqa: ANN401
        """Edited value, else the declared value, else an empty mapping."""
        if self._form_value is not None:
            return self._form_value
        if self.props.value is not None:
            return self.props.value
        return self._empty

    @property
    def dirty(self) -> bool:
        """Whether any field changed since creation or the last reset."""
        return self._dirty

    @property
    def valid(self) -> bool:
        """Whether the error map is empty."""
        return self._validation.valid

    @property
    def busy(self) -> bool:
        """Whether a field or form validation is outstanding."""
        return self._validation.busy

    @property
    def errors(self) -> list[ValidationError]:
        """Current validation failures."""
        return self._validation.errors

    @property
    def fields(self) -> list[Field]:
        """Fields registered during the current pass."""
        return list(self._fields.values())

    def _resolve(self, props: FormProps) -> FormProps:
        defaults = self.defaults
        return props.model_copy(
            update={
                "mode": props.mode or defaults.mode,
                "isolated": defaults.isolated if props.isolated is None else props.isolated,
                "native": defaults.native if props.native is None else props.native,
                "validator": props.validator or defaults.validator,
            },
        )

    def _write_root(self, value: Any, force_update: bool) -> None:  # noqa: ANN401, FBT001
        self._form_value = value
        if force_update:
            return
        if self.props.on_change is not None:
            self.props.on_change(value)

    def notify(self) -> None:
        """Request a repaint of the whole form."""
        if self._notify is not None:
            self._notify()

    def update(self, props: FormProps | None = None) -> None:
        """Start a configuration pass with ``props``.

        The current registry becomes the previous generation; fields must be
        registered again to stay alive once `collect` runs.
        """
        self.props = self._resolve(props or FormProps())
        self._previous = self._fields
        self._fields = {}

    def collect(self) -> list[str]:
        """End the configuration pass, dropping fields that were not registered again.

        Returns:
            list[str]: Keys of the dropped fields.
        """
        dropped = [key for key in self._previous if key not in self._fields]
        for key in dropped:
            field = self._previous[key]
            field.invalidate_validation()
            self._validation.discard(field)
        if dropped:
            self._logger.debug("Collected fields", keys=dropped)
        self._previous = {}
        return dropped

    @contextmanager
    def configure(self, props: FormProps | None = None) -> Generator[Form, None, None]:
        """Run one configuration pass around the caller's registrations."""
        self.update(props)
        try:
            yield self
        finally:
            self.collect()

    def register_path(self, path: FieldPath, props: FieldProps) -> Field:
        """Return the field at ``path`` for the current pass.

        The field is looked up in the current generation, then carried over
        from the previous one, and only created when both miss.
        """
        key = key_from_path(path)
        field = self._fields.get(key)
        if field is None:
            field = self._previous.get(key)
            if field is None:
                field = Field(self, f"{self.id}__{key}", key, path)
                self._logger.debug("Created field", key=key, path=path)
            else:
                self._logger.debug("Carried field over", key=key)
        if not props.actions:
            field.configure(props)
        self._fields[key] = field
        return field

    def get_field(self, name: FieldName) -> Field | None:
        """Look a field up by name or path in the current, then previous, generation."""
        key = key_from_path(normalize_path(name))
        return self._fields.get(key) or self._previous.get(key)

    def unregister(self, field: Field) -> None:
        """Remove ``field`` from both registry generations."""
        self._fields.pop(field.key, None)
        self._previous.pop(field.key, None)
        field.invalidate_validation()
        self._validation.discard(field)
        self._logger.debug("Unregistered field", key=field.key)

    def invalidate(self, prefix: str) -> None:
        """Re-sync dirty fields whose key starts with ``prefix`` from the stored value."""
        for key, field in {**self._previous, **self._fields}.items():
            if key.startswith(prefix):
                field.invalidate()

    def dispatch(self, event: FieldEvent, field: Field) -> None:
        """Decide whether a field event validates or only repaints."""
        props = self.props
        if event == FieldEvent.ON_CHANGE:
            self._dirty = True
            self._validation.invalidate_pipeline()
            self.change_token += 1

        should_validate = event == props.mode and event != FieldEvent.ON_SUBMIT
        if should_validate:
            if props.isolated:
                self._validation.validate_field(field, notify=True)
            else:
                self._validation.validate_form()
            return

        if props.isolated:
            field.repaint()
        else:
            self.notify()

    def validate_field(self, field: Field) -> asyncio.Task[Any] | None:
        """Validate a single field and repaint when it settles."""
        return self._validation.validate_field(field, notify=True)

    def validate_form(
        self,
        on_success: Callable[[Any], Any] | None = None,
        on_error: Callable[[list[ValidationError], Any], Any] | None = None,
    ) -> asyncio.Task[Any] | None:
        """Validate the whole form; see `ValidationOrchestrator.validate_form`."""
        return self._validation.validate_form(on_success, on_error)

    def submit(self) -> asyncio.Task[Any] | None:
        """Hand the current value to ``on_submit``, then validate the form."""
        value = self.value
        self._logger.debug("Submitting form")
        if self.props.on_submit is not None:
            self.props.on_submit(value)
        return self._validation.validate_form(self.props.on_success, self.props.on_error)

    def reset(self) -> None:
        """Drop edits, failures and field state, then repaint."""
        self._dirty = False
        self._form_value = None
        self._validation.reset()
        for field in self._fields.values():
            field.reset()
        self._logger.debug("Reset form")
        self.notify()

    async def settle(self) -> None:
        """Wait for every outstanding validation task to finish."""
        await self._validation.settle()

    def render_wrapper(self, content: Any = None) -> Any:  # noqa: ANN401
        """Describe the form wrapper around ``content``.

        ``content`` may be a callable receiving the form. A ``render_form``
        hook replaces the default description.
        """
        if callable(content):
            content = content(self)
        if self.render_form is not None:
            return self.render_form(self, content)
        if self.props.native:
            return FormBinding(form=self, native=True, content=content)
        attributes = dict(self.props.attributes or {})
        attributes["onSubmit"] = self.submit
        return FormBinding(form=self, props=attributes, content=content)
