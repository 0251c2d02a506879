"""Structural edits over array-valued fields.

Every operation reads the current array once, clones it only when it is
about to change, and writes the clone back through the field. Operations
that turn out to be no-ops never reach the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from formstate.exceptions import FormUsageError

if TYPE_CHECKING:
    from collections.abc import Callable

_EMPTY: tuple[Any, ...] = ()


@dataclass
class ArrayEdit:
    """Original snapshot plus a lazily materialized working copy."""

    getter: Callable[[], Any]
    original: list[Any] | tuple[Any, ...] | None = None
    modified: list[Any] | None = None

    def read_original(self) -> list[Any] | tuple[Any, ...]:
        """Return the array as it was when the edit started (read once)."""
        if self.original is None:
            current = self.getter()
            if current is None:
                current = _EMPTY
            elif not isinstance(current, (list, tuple)):
                msg = f"Array operation on a non-sequence value of type {type(current).__name__}"
                raise FormUsageError(msg)
            self.original = current
        return self.original

    def working_copy(self, new_array: list[Any] | None = None) -> list[Any]:
        """Return the working copy, cloning the original on first use.

        Args:
            new_array: Replace the working copy wholesale.

        Returns:
            list[Any]: The mutable working copy.
        """
        if new_array is not None:
            self.modified = new_array
        elif self.modified is None:
            self.modified = list(self.read_original())
        return self.modified

    def commit(self, setter: Callable[[list[Any]], Any]) -> None:
        """Write the working copy back if one was produced."""
        if self.modified is not None:
            setter(self.modified)


def _clamp(index: int, upper: int) -> int:
    return max(0, min(index, upper))


class ArrayMethods:
    """Array toolkit mixed into `Field`.

    Subclasses provide ``value`` and ``update(value)``.
    """

    value: Any
    update: Callable[[Any], None]

    def _edit(self) -> ArrayEdit:
        return ArrayEdit(getter=lambda: self.value)

    def push(self, *values: Any) -> None:  # noqa: ANN401
        """Append ``values``."""
        if not values:
            return
        edit = self._edit()
        edit.working_copy().extend(values)
        edit.commit(self.update)

    def unshift(self, *values: Any) -> None:  # noqa: ANN401
        """Prepend ``values`` keeping their order."""
        if not values:
            return
        edit = self._edit()
        edit.working_copy()[:0] = values
        edit.commit(self.update)

    def pop(self) -> Any:  # noqa: ANN401
        """Remove and return the last element, or None when empty."""
        edit = self._edit()
        if not edit.read_original():
            return None
        removed = edit.working_copy().pop()
        edit.commit(self.update)
        return removed

    def shift(self) -> Any:  # noqa: ANN401
        """Remove and return the first element, or None when empty."""
        edit = self._edit()
        if not edit.read_original():
            return None
        removed = edit.working_copy().pop(0)
        edit.commit(self.update)
        return removed

    def clear(self) -> None:
        """Replace the array with an empty one."""
        edit = self._edit()
        if not edit.read_original():
            return
        edit.working_copy([])
        edit.commit(self.update)

    def remove(self, *indexes: int) -> None:
        """Delete at each of ``indexes`` in ascending order.

        Out-of-range and duplicate indexes are ignored. Every deletion shifts
        the elements after it, so later indexes address the shortened array;
        an index past its end deletes nothing.
        """
        edit = self._edit()
        original = edit.read_original()
        valid = sorted({index for index in indexes if 0 <= index < len(original)})
        if not valid:
            return
        working = edit.working_copy()
        for index in valid:
            if index < len(working):
                del working[index]
        edit.commit(self.update)

    def swap(self, from_index: int, to_index: int) -> None:
        """Swap two elements; indexes are clamped into the array bounds."""
        edit = self._edit()
        original = edit.read_original()
        if not original:
            return
        last = len(original) - 1
        from_index = _clamp(from_index, last)
        to_index = _clamp(to_index, last)
        if from_index == to_index:
            return
        working = edit.working_copy()
        working[from_index], working[to_index] = working[to_index], working[from_index]
        edit.commit(self.update)

    def insert(self, index: int, *values: Any) -> None:  # noqa: ANN401
        """Insert ``values`` before ``index``, clamped to ``[0, len]``."""
        if not values:
            return
        edit = self._edit()
        index = _clamp(index, len(edit.read_original()))
        edit.working_copy()[index:index] = values
        edit.commit(self.update)

    def splice(self, index: int, count: int | None = None, *values: Any) -> list[Any]:  # noqa: ANN401
        """Remove ``count`` elements at ``index`` and insert ``values`` there.

        Args:
            index: Start position.
            count: Number of elements to remove; None removes nothing.
            *values: Elements inserted at ``index``.

        Returns:
            list[Any]: The removed elements.
        """
        edit = self._edit()
        original = edit.read_original()
        count = count or 0
        if not original:
            if values:
                edit.working_copy()[index:index] = values
                edit.commit(self.update)
            return []
        if not values and (index > len(original) - 1 or not count):
            return []

        working = edit.working_copy()
        start = index if index >= 0 else max(len(working) + index, 0)
        removed = working[start : start + count]
        working[start : start + count] = values
        edit.commit(self.update)
        return removed

    def replace(self, with_value: Any, *match_values: Any) -> None:  # noqa: ANN401
        """Overwrite every element equal to one of ``match_values``."""
        edit = self._edit()
        original = edit.read_original()
        if not original or not match_values:
            return
        if len(match_values) == 1:
            target = match_values[0]
            indexes = [i for i, item in enumerate(original) if item == target]
        else:
            indexes = [i for i, item in enumerate(original) if item in match_values]
        if not indexes:
            return
        working = edit.working_copy()
        for index in indexes:
            working[index] = with_value
        edit.commit(self.update)

    def fill(self, value: Any) -> None:  # noqa: ANN401
        """Set every element to ``value``."""
        edit = self._edit()
        original = edit.read_original()
        if not original:
            return
        edit.working_copy([value] * len(original))
        edit.commit(self.update)

    def filter(self, predicate: Callable[[Any, int], bool]) -> None:
        """Keep the elements for which ``predicate(value, index)`` holds."""
        edit = self._edit()
        original = edit.read_original()
        if not original:
            return
        edit.working_copy([item for index, item in enumerate(original) if predicate(item, index)])
        edit.commit(self.update)
