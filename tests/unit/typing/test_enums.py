from __future__ import annotations

import pytest

from formstate.typing.enums import ValidationKind


def test_validation_kind_from_str() -> None:
    assert ValidationKind.from_str("form") == ValidationKind.FORM


def test_validation_kind_from_str_raises_on_invalid_value() -> None:
    with pytest.raises(ValueError, match="Unsupported ValidationKind value"):
        ValidationKind.from_str("page")
