"""JSON Pointer resolution.

Pointers are split on ``/`` and nothing else: ``~0`` and ``~1`` are kept
verbatim in the tokens, so a key containing ``/`` can only be addressed with
:meth:`JsonPointer.from_tokens`.
"""

import re
from collections.abc import Callable, Iterable, Sequence
from functools import reduce
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .errors import InvalidPointer
from .value import is_array, is_object

APPEND_TOKEN = "-"
"""Addresses the position past the last element of an array."""

_INDEX_TOKEN = re.compile(r"[0-9]+")

Step = Callable[[Any, tuple[str, ...]], Any]


class JsonPointer(str):
    """A JSON Pointer that can reference parts of a JSON document."""

    __slots__ = ("reference_tokens",)
    reference_tokens: tuple[str, ...]

    def __new__(cls, pointer: str):
        """Split ``pointer`` into reference tokens."""
        if pointer and not pointer.startswith("/"):
            raise InvalidPointer(f"JSON Pointer must start with a slash: {pointer!r}")
        self = super().__new__(cls, pointer)
        self.reference_tokens = tuple(pointer.split("/")[1:])
        return self

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "JsonPointer":
        """Build a pointer from tokens that were split elsewhere."""
        reference_tokens = tuple(tokens)
        if not all(isinstance(token, str) for token in reference_tokens):
            raise InvalidPointer("JSON Pointer tokens must be strings")
        self = super().__new__(cls, "".join(f"/{token}" for token in reference_tokens))
        self.reference_tokens = reference_tokens
        return self

    def __eq__(self, other: Any):
        if isinstance(other, JsonPointer):
            return self.reference_tokens == other.reference_tokens
        if isinstance(other, str):
            return str(self) == other
        return False

    def __ne__(self, other: Any):
        return not self == other

    def __hash__(self):
        return hash(self.reference_tokens)

    def __repr__(self):
        return f'{self.__class__.__name__}("{self}")'

    @classmethod
    def _validate(cls, value: Any) -> "JsonPointer":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, (list, tuple)):
            return cls.from_tokens(value)
        raise ValueError(
            f"Expected a JSON Pointer string or token list, got {type(value).__name__}"
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Accept a pointer string or a list of already split tokens."""
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_after_validator_function(
                cls._validate,
                core_schema.union_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.list_schema(core_schema.str_schema()),
                    ]
                ),
            ),
            python_schema=core_schema.no_info_plain_validator_function(cls._validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )


def to_tokens(path: JsonPointer | str | Sequence[str]) -> tuple[str, ...]:
    """Normalize a pointer, pointer string or token sequence to tokens."""
    if isinstance(path, JsonPointer):
        return path.reference_tokens
    if isinstance(path, str):
        return JsonPointer(path).reference_tokens
    return tuple(path)


def is_index_token(token: str) -> bool:
    """Whether ``token`` may address an array element."""
    return _INDEX_TOKEN.fullmatch(token) is not None


def sequence_index(token: str, length: int) -> int:
    """Convert token to an index of an existing element."""
    if not is_index_token(token):
        raise InvalidPointer(f"Invalid sequence index '{token}'")
    try:
        index = int(token)
    except ValueError as e:
        raise InvalidPointer(f"Invalid sequence index '{token[:20]}...'") from e
    if index >= length:
        raise InvalidPointer(
            f"Index {index} out of range for sequence of length {length}"
        )
    return index


def _child_key(node: Any, token: str) -> str | int:
    """Return the key or index ``token`` addresses in ``node``."""
    if is_object(node):
        if token not in node:
            raise InvalidPointer(f"Key '{token}' not found in object")
        return token
    if is_array(node):
        return sequence_index(token, len(node))
    raise InvalidPointer(
        f"Cannot resolve '{token}' against a {type(node).__name__} value"
    )


def getitem(node: Any, token: str) -> Any:
    """Resolve a single token against ``node``."""
    return node[_child_key(node, token)]


def get(document: Any, path: JsonPointer | str | Sequence[str]) -> Any:
    """Return the value ``path`` points to; the root pointer yields ``document``."""
    return reduce(getitem, to_tokens(path), document)


def traverse(node: Any, path: JsonPointer | str | Sequence[str], step: Step) -> Any:
    """Rebuild ``node`` with the child named by the head of ``path`` replaced.

    The child is replaced by ``step(child, remaining_tokens)``; ``step``
    decides what happens further down. Siblings are shared with ``node``, and
    ``node`` itself is left untouched. An empty path returns ``node``.

    Raises:
        InvalidPointer: If the head token names no existing key or element.

    """
    tokens = to_tokens(path)
    if not tokens:
        return node
    key, rest = _child_key(node, tokens[0]), tokens[1:]
    child = step(node[key], rest)
    if is_object(node):
        return {**node, key: child}
    return [*node[:key], child, *node[key + 1 :]]


def is_prefix(
    prefix: JsonPointer | str | Sequence[str], path: JsonPointer | str | Sequence[str]
) -> bool:
    """Whether ``path`` lies strictly inside the subtree ``prefix`` points to."""
    prefix_tokens, tokens = to_tokens(prefix), to_tokens(path)
    return (
        len(prefix_tokens) < len(tokens)
        and tokens[: len(prefix_tokens)] == prefix_tokens
    )


__all__ = (
    "APPEND_TOKEN",
    "JsonPointer",
    "get",
    "getitem",
    "is_index_token",
    "is_prefix",
    "sequence_index",
    "to_tokens",
    "traverse",
)
