"""Copy-on-write access to a nested form value."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from formstate.exceptions import FormUsageError

if TYPE_CHECKING:
    from collections.abc import Callable

    from formstate.typing.models import FieldName

FieldPath = tuple[str | int, ...]
KEY_SEPARATOR = "$"


def normalize_path(name: FieldName) -> FieldPath:
    """Turn a field name into a path.

    Args:
        name: A single key/index or a sequence of segments.

    Returns:
        FieldPath: The segments as a tuple.
    """
    if isinstance(name, (list, tuple)):
        return tuple(name)
    return (name,)


def key_from_path(path: FieldName) -> str:
    """Serialize a path into its registry key.

    Args:
        path: Field name or path.

    Returns:
        str: Segments joined with `KEY_SEPARATOR`.
    """
    return KEY_SEPARATOR.join(str(segment) for segment in normalize_path(path))


def same_value(left: Any, right: Any) -> bool:  # noqa: ANN401
    """Return whether writing ``right`` over ``left`` changes nothing."""
    if left is right:
        return True
    return type(left) is type(right) and left == right


def read_path(root: Any, path: FieldPath) -> Any:  # noqa: ANN401
    """Walk ``path`` from ``root``, returning None on a missing segment.

    Negative indexes address nothing.
    """
    current = root
    for segment in path:
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, (list, tuple)) and isinstance(segment, int):
            current = current[segment] if 0 <= segment < len(current) else None
        else:
            return None
    return current


def _assign(parent: Any, segment: str | int, child: Any) -> Any:  # noqa: ANN401
    """Return a shallow copy of ``parent`` with ``segment`` set to ``child``."""
    if parent is None:
        parent = [] if isinstance(segment, int) else {}

    if isinstance(parent, (list, tuple)) and isinstance(segment, int):
        if segment < 0:
            msg = f"Negative index {segment} is not a writable array position"
            raise FormUsageError(msg)
        items = list(parent)
        if segment >= len(items):
            items.extend([None] * (segment - len(items) + 1))
        items[segment] = child
        return tuple(items) if isinstance(parent, tuple) else items

    if isinstance(parent, Mapping):
        return {**parent, segment: child}

    # Scalars on the way are replaced by a fresh container.
    return _assign(None, segment, child)


def write_path(root: Any, path: FieldPath, value: Any) -> Any:  # noqa: ANN401
    """Return a new root with ``value`` at ``path``.

    Only the ancestors along ``path`` are copied; every other subtree is
    reused by reference. When the leaf already holds ``value`` the original
    root is returned unchanged.

    Args:
        root: Current root value.
        path: Location of the leaf.
        value: New leaf value.

    Returns:
        Any: The new root, or ``root`` itself when nothing changed.
    """
    if not path:
        return value
    head, *rest = path
    previous = read_path(root, (head,))
    child = write_path(previous, tuple(rest), value) if rest else value
    if child is previous or (not rest and same_value(previous, child)):
        return root
    return _assign(root, head, child)


class ValueStore:
    """Path-based get/set over the value exposed by ``getter``.

    ``setter`` receives the new root and the ``force_update`` flag; it is only
    called when a write produced a new root.
    """

    def __init__(
        self,
        getter: Callable[[], Any],
        setter: Callable[[Any, bool], None],
    ) -> None:
        """Bind the store to its root accessors."""
        self._getter = getter
        self._setter = setter

    def get_value(self, name: FieldName) -> Any:  # noqa: ANN401
        """Return the value at ``name`` or None."""
        return read_path(self._getter(), normalize_path(name))

    def set_value(
        self,
        name: FieldName,
        value: Any,  # noqa: ANN401
        on_changed: Callable[[], None] | None = None,
        *,
        force_update: bool = False,
    ) -> bool:
        """Write ``value`` at ``name``.

        Args:
            name: Key or path of the leaf.
            value: New leaf value.
            on_changed: Called after the setter when the root changed.
            force_update: Forwarded to the setter; suppresses the form's change callback.

        Returns:
            bool: Whether a new root was written.
        """
        previous = self._getter()
        updated = write_path(previous, normalize_path(name), value)
        if updated is previous:
            return False

        self._setter(updated, force_update)
        if on_changed is not None:
            on_changed()
        return True
