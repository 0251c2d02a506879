from __future__ import annotations

from typing import Any

from formstate.form import Form
from formstate.typing.models import ChangeEvent, FieldProps, FormDefaults, FormProps, ValidationContext


def test_counter_form_edit_and_submit_flow() -> None:
    calls: dict[str, list[Any]] = {"change": [], "validate": [], "submit": [], "success": [], "error": []}

    def _validator(context: ValidationContext) -> None:
        calls["validate"].append(context.value)

    form = Form(defaults=FormDefaults())
    with form.configure(
        FormProps(
            value={"count": 1},
            validator=_validator,
            on_change=calls["change"].append,
            on_submit=calls["submit"].append,
            on_success=calls["success"].append,
            on_error=lambda errors, value: calls["error"].append(errors),
        ),
    ):
        binding = form.render(FieldProps(name=["count"], rules={"required": True}))

    field = binding.field
    on_change = binding.props["onChange"]

    on_change(ChangeEvent(value="2"))
    assert field.value == "2"
    assert len(calls["change"]) == 1

    on_change(ChangeEvent(value="2"))
    assert len(calls["change"]) == 1

    on_change("3")
    assert len(calls["change"]) == 2

    form.submit()

    assert calls["validate"] == ["3"]
    assert calls["submit"] == [{"count": "3"}]
    assert calls["success"] == [{"count": "3"}]
    assert calls["error"] == []
    assert form.dirty is True
    assert form.valid is True


def test_array_field_flow() -> None:
    form = Form(defaults=FormDefaults())
    with form.configure(FormProps(value={"array": [1, 2, 3]})):
        field = form.register("array")

    field.push(4)
    assert form.value == {"array": [1, 2, 3, 4]}

    field.pop()
    assert form.value == {"array": [1, 2, 3]}

    field.swap(2, 0)
    assert form.value == {"array": [3, 2, 1]}


def test_rebuild_keeps_edited_fields_and_drops_hidden_ones() -> None:
    form = Form(defaults=FormDefaults())
    props = FormProps(value={"name": "", "nickname": ""})

    with form.configure(props):
        name = form.render(FieldProps(name="name")).field
        form.render(FieldProps(name="nickname"))

    name.on_focus()
    name.on_change("Ada")

    with form.configure(props):
        rebuilt = form.render(FieldProps(name="name"))

    assert rebuilt.field is name
    assert rebuilt.props["value"] == "Ada"
    assert name.touched is True
    assert form.get_field("nickname") is None
    assert form.value == {"name": "Ada", "nickname": ""}
