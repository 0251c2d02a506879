from __future__ import annotations

from typing import Any

from formstate.form import Form
from formstate.typing.enums import FieldStatus, FormMode
from formstate.typing.models import FieldProps, FormBinding, FormDefaults, FormProps


def _form(**props: Any) -> tuple[Form, list[str]]:
    repaints: list[str] = []
    form = Form(notify=lambda: repaints.append("repaint"), defaults=FormDefaults())
    form.update(FormProps(**props))
    return form, repaints


def test_value_falls_back_to_declared_then_empty() -> None:
    empty, _ = _form()
    assert empty.value == {}

    declared, _ = _form(value={"a": 1})
    assert declared.value == {"a": 1}


def test_defaults_fill_unset_props() -> None:
    form = Form(defaults=FormDefaults(mode=FormMode.ON_BLUR, isolated=True))
    form.update(FormProps(isolated=False))
    assert form.props.mode is FormMode.ON_BLUR
    assert form.props.isolated is False
    assert form.props.native is False


def test_registration_carries_state_across_passes() -> None:
    form, _ = _form(value={"a": 1, "b": 2})
    with form.configure(FormProps(value={"a": 1, "b": 2})):
        a = form.register("a")
        b = form.register("b")
    a.update(5)
    a.error = "boom"

    with form.configure(FormProps(value={"a": 1, "b": 2})):
        again = form.register("a")

    assert again is a
    assert again.dirty is True
    assert again.touched is True
    assert again.error == "boom"
    assert form.get_field("b") is None
    assert b not in form.fields


def test_register_is_idempotent_within_a_pass() -> None:
    form, _ = _form(value={})
    assert form.register(["x", 1]) is form.register(("x", 1))
    assert len(form.fields) == 1


def test_previous_generation_is_visible_until_collect() -> None:
    form, _ = _form(value={})
    field = form.register("a")
    form.update(FormProps())
    assert form.get_field("a") is field
    assert form.fields == []
    assert form.collect() == ["a"]
    assert form.get_field("a") is None


def test_unregister_purges_both_generations() -> None:
    form, _ = _form(value={})
    field = form.register("a")
    form.update(FormProps())
    form.unregister(field)
    assert form.get_field("a") is None
    assert form.collect() == []


def test_change_marks_form_dirty_and_repaints() -> None:
    form, repaints = _form(value={"a": 1})
    field = form.register("a")
    token = form.change_token

    field.update(2)

    assert form.dirty is True
    assert form.change_token == token + 1
    assert repaints == ["repaint"]


def test_reset_restores_declared_value_and_field_state() -> None:
    form, repaints = _form(value={"a": 1})
    field = form.register("a")
    field.update(2)

    form.reset()

    assert form.dirty is False
    assert form.value == {"a": 1}
    assert field.dirty is False
    assert field.value == 1
    assert repaints[-1] == "repaint"


def test_invalidate_matches_key_prefix() -> None:
    form, _ = _form(value={"user": {"name": "a", "mail": "b"}, "other": "c"})
    name = form.register(["user", "name"])
    other = form.register("other")
    name.update("x")
    other.update("y")
    form.set_value(["user", "name"], "external", force_update=True)
    form.set_value("other", "external", force_update=True)

    form.invalidate("user")

    assert name.value == "external"
    assert other.value == "y"


def test_submit_calls_on_submit_before_validation() -> None:
    calls: list[str] = []

    def _validator(context: Any) -> None:
        calls.append("validate")
        raise ValueError("required")

    form, _ = _form(
        value={"a": ""},
        validator=_validator,
        on_submit=lambda value: calls.append("submit"),
        on_success=lambda value: calls.append("success"),
        on_error=lambda errors, value: calls.append(f"error:{len(errors)}"),
    )
    form.register("a", FieldProps(name="a", rules={"required": True}))

    form.submit()

    assert calls == ["submit", "validate", "error:1"]
    assert form.valid is False
    assert form.errors[0].field is form.get_field("a")


def test_forced_updates_skip_on_change() -> None:
    changes: list[Any] = []
    form, _ = _form(value={"a": " x "}, on_change=changes.append)
    form.set_value("a", "x", force_update=True)
    assert changes == []
    assert form.value == {"a": "x"}


def test_render_wrapper_binds_submit_unless_native() -> None:
    submitted: list[Any] = []
    form, _ = _form(value={"a": 1}, on_submit=submitted.append, attributes={"id": "signup"})

    binding = form.render_wrapper(lambda f: f.id)
    assert isinstance(binding, FormBinding)
    assert binding.content == form.id
    assert binding.props["id"] == "signup"
    binding.props["onSubmit"]()
    assert submitted == [{"a": 1}]

    form.update(FormProps(native=True))
    native = form.render_wrapper("content")
    assert native.native is True
    assert native.props == {}


def test_render_form_hook_replaces_wrapper() -> None:
    form = Form(defaults=FormDefaults(render_form=lambda form, content: ["custom", content]))
    assert form.render_wrapper("body") == ["custom", "body"]


def test_reset_clears_errors() -> None:
    def _validator(context: Any) -> None:
        raise ValueError("bad")

    form, _ = _form(value={"a": 1}, validator=_validator)
    field = form.register("a", FieldProps(name="a", rules=True))
    form.validate_form()
    assert field.status is FieldStatus.INVALID

    form.reset()
    assert form.valid is True
    assert field.status is FieldStatus.UNKNOWN
