"""Validation orchestration for fields and forms.

Validators may answer synchronously or with an awaitable. Deferred results
are wrapped in asyncio tasks on the running loop. Every validation subject
(each field, the form-level pipeline, each `validate_form` run) carries a
monotonically increasing token; a completion only commits while its token
is still the current one, so superseded results are dropped without being
reported.
"""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from typing import TYPE_CHECKING, Any

from formstate.exceptions import FormUsageError
from formstate.logging import get_logger
from formstate.store import same_value
from formstate.typing.enums import FieldStatus, ValidationKind
from formstate.typing.models import ValidationContext, ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine

    from formstate.field import Field
    from formstate.form import Form


class TokenCounter:
    """Generation counter standing in for task cancellation."""

    def __init__(self) -> None:
        """Start at generation zero."""
        self.current = 0

    def issue(self) -> int:
        """Supersede every earlier token and return the new one."""
        self.current += 1
        return self.current

    def is_current(self, token: int) -> bool:
        """Return whether ``token`` is the latest issued one."""
        return token == self.current


def _noop(_value: Any) -> None:  # noqa: ANN401
    return None


def _declares_rules(rules: Any) -> bool:  # noqa: ANN401
    return rules is not None and rules is not False


# Returned by a settling task that ended on a superseded token.
_STALE = object()


class ValidationOrchestrator:
    """Runs field and form validators for one form and aggregates their failures."""

    def __init__(self, form: Form) -> None:
        """Attach the orchestrator to ``form``."""
        self._form = form
        self._errors: dict[object, Any] = {}
        self._pending: list[asyncio.Future[Any]] = []
        self._tasks: set[asyncio.Task[Any]] = set()
        self._run_tokens = TokenCounter()
        self._pipeline_tokens = TokenCounter()
        self._logger = get_logger(__name__, form_id=form.id)

    @property
    def errors(self) -> list[ValidationError]:
        """Current failures in the order they were recorded."""
        return [
            ValidationError(form=self._form, field=None if source is self._form else source, error=error)
            for source, error in self._errors.items()
        ]

    @property
    def valid(self) -> bool:
        """Whether the error map is empty."""
        return not self._errors

    @property
    def busy(self) -> bool:
        """Whether any field or form validation is outstanding."""
        if self._pending:
            return True
        return any(field.status is FieldStatus.BUSY for field in self._form.fields)

    def invalidate_pipeline(self) -> None:
        """Make an in-flight form-level validation stale."""
        self._pipeline_tokens.issue()

    def reset(self) -> None:
        """Drop every failure and supersede all in-flight validation."""
        self._errors.clear()
        self._pending.clear()
        self._run_tokens.issue()
        self._pipeline_tokens.issue()

    def discard(self, field: Field) -> None:
        """Forget the failure recorded for ``field``."""
        self._errors.pop(field, None)

    async def settle(self) -> None:
        """Wait until no validation task is left running."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _schedule(self, coro: Coroutine[Any, Any, Any], awaited: Awaitable[Any] | None = None) -> asyncio.Task[Any]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            coro.close()
            if inspect.iscoroutine(awaited):
                awaited.close()
            msg = "Deferred validation requires a running event loop"
            raise FormUsageError(msg) from exc
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _fail_field(self, field: Field, error: Any) -> None:  # noqa: ANN401
        field.status = FieldStatus.INVALID
        field.error = error
        self._errors[field] = error

    def validate_field(self, field: Field, *, notify: bool) -> asyncio.Task[Any] | None:
        """Validate one field.

        Args:
            field: Field to validate.
            notify: Request a repaint when validation finishes synchronously.

        Raises:
            FormUsageError: If a validator defers with no running event loop.

        Returns:
            asyncio.Task | None: The settling task when validation was deferred.
        """
        form = self._form
        validator = form.props.validator
        if not _declares_rules(field.props.rules) or validator is None:
            return None

        if field.status is FieldStatus.BUSY and field.pending is not None:
            self._pending.append(field.pending)
            return None
        if field.status is FieldStatus.INVALID and field.error is not None:
            self._errors[field] = field.error
            return None
        if field.status is FieldStatus.VALID:
            return None

        value = field.value
        rules = field.props.rules(form.value) if callable(field.props.rules) else field.props.rules
        previous_status = field.status
        field.status = FieldStatus.BUSY
        field.error = None
        token = field.invalidate_validation()

        def _transform(normalized: Any) -> None:  # noqa: ANN401
            if same_value(normalized, value):
                return
            form.set_value(field.path, normalized, force_update=True)
            field.invalidate()

        self._logger.debug("Validating field", key=field.key, token=token)
        try:
            result = validator(
                ValidationContext(
                    kind=ValidationKind.FIELD,
                    form=form,
                    field=field,
                    text=field.text,
                    value=value,
                    rules=rules,
                    data=field.props.data,
                    transform=_transform,
                ),
            )
            on_validate = field.props.on_validate
            if not inspect.isawaitable(result):
                if on_validate is None:
                    field.status = FieldStatus.VALID
                else:
                    result = on_validate(field)
                    on_validate = None
                    if not inspect.isawaitable(result):
                        field.status = FieldStatus.VALID

            if inspect.isawaitable(result):
                field.pending = self._schedule(self._settle_field(field, token, result, on_validate), result)
                return field.pending
        except FormUsageError:
            field.status = previous_status
            field.invalidate_validation()
            raise
        except Exception as exc:
            self._fail_field(field, exc)

        if notify:
            form.notify()
        return None

    async def _settle_field(
        self,
        field: Field,
        token: int,
        result: Awaitable[Any],
        on_validate: Callable[[Field], Any] | None,
    ) -> object:
        try:
            await result
            if field.validation_token == token and on_validate is not None:
                follow_up = on_validate(field)
                if inspect.isawaitable(follow_up):
                    await follow_up
            if field.validation_token != token:
                self._logger.debug("Discarding stale field validation", key=field.key, token=token)
                return _STALE
            field.status = FieldStatus.VALID
            self._logger.debug("Committed field validation", key=field.key, token=token)
        except Exception as exc:
            if field.validation_token != token:
                self._logger.debug("Discarding stale field failure", key=field.key, token=token)
                return _STALE
            self._fail_field(field, exc)

        field.pending = None
        self._form.notify()
        return None

    def _form_steps(self, value: Any) -> deque[Callable[[], Any]]:  # noqa: ANN401
        form = self._form
        props = form.props
        steps: deque[Callable[[], Any]] = deque()
        validator = props.validator

        if _declares_rules(props.rules) and validator is not None:

            def _rules_step() -> Any:  # noqa: ANN401
                rules = props.rules(form) if callable(props.rules) else props.rules
                return validator(
                    ValidationContext(
                        kind=ValidationKind.FORM,
                        form=form,
                        value=value,
                        rules=rules,
                        transform=_noop,
                    ),
                )

            steps.append(_rules_step)

        on_validate = props.on_validate
        if on_validate is not None:
            steps.append(lambda: on_validate(form))
        return steps

    def _run_form_pipeline(self, value: Any) -> asyncio.Task[Any] | None:  # noqa: ANN401
        steps = self._form_steps(value)
        token = self._pipeline_tokens.issue()
        while steps:
            step = steps.popleft()
            try:
                result = step()
            except Exception as exc:
                self._errors[self._form] = exc
                return None
            if inspect.isawaitable(result):
                return self._schedule(self._continue_pipeline(result, steps, token), result)
        return None

    async def _continue_pipeline(
        self,
        pending: Awaitable[Any],
        steps: deque[Callable[[], Any]],
        token: int,
    ) -> object:
        try:
            await pending
            while steps and self._pipeline_tokens.is_current(token):
                result = steps.popleft()()
                if inspect.isawaitable(result):
                    await result
        except Exception as exc:
            if not self._pipeline_tokens.is_current(token):
                self._logger.debug("Discarding stale form failure", token=token)
                return _STALE
            self._errors[self._form] = exc
            return None
        if not self._pipeline_tokens.is_current(token):
            self._logger.debug("Form pipeline cut off by an edit", token=token)
            return _STALE
        return None

    def validate_form(
        self,
        on_success: Callable[[Any], Any] | None = None,
        on_error: Callable[[list[ValidationError], Any], Any] | None = None,
    ) -> asyncio.Task[Any] | None:
        """Validate every registered field and run the form-level pipeline.

        Args:
            on_success: Called with the validated value when no failure was recorded.
            on_error: Called with the failures and the validated value otherwise.

        Returns:
            asyncio.Task | None: The task waiting for deferred validation, if any.
        """
        form = self._form
        self._pending.clear()
        self._errors.clear()
        value = form.value
        token = self._run_tokens.issue()

        for field in list(form.fields):
            settling = self.validate_field(field, notify=False)
            if settling is not None:
                self._pending.append(settling)

        pipeline = self._run_form_pipeline(value)
        if pipeline is not None:
            self._pending.append(pipeline)

        if self._pending:
            self._logger.debug("Waiting for deferred validation", outstanding=len(self._pending), token=token)
            waiter = self._schedule(
                self._await_outstanding(token, list(self._pending), value, on_success, on_error),
            )
            form.notify()
            return waiter

        self._report(value, on_success, on_error)
        form.notify()
        return None

    async def _await_outstanding(
        self,
        token: int,
        pending: list[asyncio.Future[Any]],
        value: Any,  # noqa: ANN401
        on_success: Callable[[Any], Any] | None,
        on_error: Callable[[list[ValidationError], Any], Any] | None,
    ) -> None:
        outcomes = await asyncio.gather(*pending, return_exceptions=True)
        if not self._run_tokens.is_current(token):
            self._logger.debug("Discarding superseded form validation", token=token)
            return
        self._pending.clear()
        if any(outcome is _STALE for outcome in outcomes):
            # An edit cut part of the run short; the snapshot is not approved.
            self._logger.debug("Form validation cut off by an edit", token=token)
            on_success = None
        self._report(value, on_success, on_error)
        self._form.notify()

    def _report(
        self,
        value: Any,  # noqa: ANN401
        on_success: Callable[[Any], Any] | None,
        on_error: Callable[[list[ValidationError], Any], Any] | None,
    ) -> None:
        if self._errors:
            self._logger.debug("Form validation failed", errors=len(self._errors))
            if on_error is not None:
                on_error(self.errors, value)
        elif on_success is not None:
            on_success(value)
