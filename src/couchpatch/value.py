"""JSON value model.

Documents are plain decoded JSON: ``dict`` for objects, ``list`` for arrays
and ``str``, ``int``, ``float``, ``bool`` or ``None`` for scalars. Any
:class:`~collections.abc.Mapping` is accepted as an object and any non-string
:class:`~collections.abc.Sequence` as an array.

Values are never mutated once built. Edits produce new containers along the
edited path and share every other subtree with the input.
"""

from collections.abc import Mapping, Sequence
from typing import Any, TypeGuard


def is_object(value: Any) -> TypeGuard[Mapping[str, Any]]:
    """Whether ``value`` is a JSON object."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> TypeGuard[Sequence[Any]]:
    """Whether ``value`` is a JSON array."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def json_equal(left: Any, right: Any) -> bool:
    """Compare two JSON values structurally.

    Numbers compare numerically, so ``1`` equals ``1.0``, but booleans never
    equal numbers even though Python treats ``True == 1``. Object key order
    is irrelevant.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if is_object(left):
        return (
            is_object(right)
            and len(left) == len(right)
            and all(
                key in right and json_equal(value, right[key])
                for key, value in left.items()
            )
        )
    if is_array(left):
        return (
            is_array(right)
            and len(left) == len(right)
            and all(map(json_equal, left, right))
        )
    if is_object(right) or is_array(right):
        return False
    return left == right


__all__ = ("is_array", "is_object", "json_equal")
