"""RFC 6902 JSON Patch implementation.

This module applies patches to decoded JSON documents without mutating them.
Each operation returns a new document that shares every untouched subtree
with its input.
"""

import logging
from collections.abc import Sequence
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .errors import InvalidPatch, InvalidPointer, JsonPatchError, PatchNotApplicable
from .jsonpointer import (
    APPEND_TOKEN,
    JsonPointer,
    get,
    is_prefix,
    sequence_index,
    to_tokens,
    traverse,
)
from .value import is_array, is_object, json_equal

logger = logging.getLogger(__name__)

PointerLike = JsonPointer | str | Sequence[str]


def add(document: Any, path: PointerLike, value: Any, replace: bool = False) -> Any:
    """Add ``value`` at ``path``.

    Args:
        document: The document to patch.
        path: Location of the new value.
        value: The value to add.
        replace: Refuse to create object keys that do not exist yet.

    Returns:
        The patched document.

    Raises:
        InvalidPointer: If ``path`` does not resolve, an array index is out of
            range, or ``replace`` targets a missing key.

    """
    tokens = to_tokens(path)
    if not tokens:
        return value
    if len(tokens) == 1:
        token = tokens[0]
        if is_object(document):
            if replace and token not in document:
                raise InvalidPointer(f"Key '{token}' not found in object")
            return {**document, token: value}
        if is_array(document):
            if token == APPEND_TOKEN and not replace:
                return [*document, value]
            # Array targets are always inserted, even when replacing.
            index = sequence_index(token, len(document))
            return [*document[:index], value, *document[index:]]
    return traverse(
        document, tokens, lambda node, rest: add(node, rest, value, replace)
    )


def replace(document: Any, path: PointerLike, value: Any) -> Any:
    """Replace the value at ``path``."""
    return add(document, path, value, replace=True)


def remove(document: Any, path: PointerLike) -> Any:
    """Remove the value at ``path``.

    Removing a key that is absent from its object is accepted and returns an
    equal document. Every other unresolvable location is an error.

    Raises:
        InvalidPointer: If ``path`` is the root or does not resolve.

    """
    tokens = to_tokens(path)
    if not tokens:
        raise InvalidPointer("Cannot remove root document")
    if len(tokens) == 1:
        token = tokens[0]
        if is_object(document):
            return {key: value for key, value in document.items() if key != token}
        if is_array(document):
            index = sequence_index(token, len(document))
            return [*document[:index], *document[index + 1 :]]
    return traverse(document, tokens, remove)


def move_or_copy(
    document: Any, from_: PointerLike, path: PointerLike, remove_source: bool
) -> Any:
    """Relocate the value at ``from_`` to ``path``.

    The value is read from ``document`` before anything is removed.

    Raises:
        InvalidPointer: If ``path`` lies inside ``from_`` or either location
            does not resolve.

    """
    if is_prefix(from_, path):
        raise InvalidPointer("'from' location cannot be a prefix of 'path'")
    value = get(document, from_)
    source = remove(document, from_) if remove_source else document
    return add(source, path, value)


def move(document: Any, from_: PointerLike, path: PointerLike) -> Any:
    """Move the value at ``from_`` to ``path``."""
    return move_or_copy(document, from_, path, remove_source=True)


def copy(document: Any, from_: PointerLike, path: PointerLike) -> Any:
    """Copy the value at ``from_`` to ``path``."""
    return move_or_copy(document, from_, path, remove_source=False)


def test(document: Any, path: PointerLike, expected: Any) -> Any:
    """Return ``document`` if the value at ``path`` equals ``expected``.

    Raises:
        PatchNotApplicable: If the value differs or ``path`` does not resolve.

    """
    try:
        actual = get(document, path)
    except InvalidPointer as e:
        raise PatchNotApplicable(f"Test failed: {e}") from e
    if not json_equal(actual, expected):
        raise PatchNotApplicable(
            f"Test failed: expected {expected!r}, got {actual!r}"
        )
    return document


test.__test__ = False  # type: ignore[attr-defined]


class AddOperation(BaseModel, frozen=True):
    """Add operation - adds a value to an object or inserts into an array."""

    op: Literal["add"] = "add"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply add operation."""
        return add(obj, self.path, self.value)


class RemoveOperation(BaseModel, frozen=True):
    """Remove operation - removes a value from an object or array."""

    op: Literal["remove"] = "remove"
    path: JsonPointer

    def apply(self, obj: Any) -> Any:
        """Apply remove operation."""
        return remove(obj, self.path)


class ReplaceOperation(BaseModel, frozen=True):
    """Replace operation - replaces a value."""

    op: Literal["replace"] = "replace"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply replace operation."""
        return replace(obj, self.path, self.value)


class MoveOperation(
    BaseModel, frozen=True, validate_by_alias=True, serialize_by_alias=True
):
    """Move operation - removes value at 'from' location and adds it to 'path'."""

    op: Literal["move"] = "move"
    path: JsonPointer
    from_: JsonPointer = Field(alias="from")

    def apply(self, obj: Any) -> Any:
        """Apply move operation."""
        return move(obj, self.from_, self.path)


class CopyOperation(
    BaseModel, frozen=True, validate_by_alias=True, serialize_by_alias=True
):
    """Copy operation - copies value at 'from' location to 'path'."""

    op: Literal["copy"] = "copy"
    path: JsonPointer
    from_: JsonPointer = Field(alias="from")

    def apply(self, obj: Any) -> Any:
        """Apply copy operation."""
        return copy(obj, self.from_, self.path)


class TestOperation(BaseModel, frozen=True):
    """Test operation - checks that the value at the location equals ``value``."""

    __test__ = False
    op: Literal["test"] = "test"
    path: JsonPointer
    value: Any

    def apply(self, obj: Any) -> Any:
        """Apply test operation."""
        return test(obj, self.path, self.value)


# Union type for all operations
PatchOperation = Annotated[
    AddOperation
    | RemoveOperation
    | ReplaceOperation
    | MoveOperation
    | CopyOperation
    | TestOperation,
    Field(discriminator="op"),
]

_operations_adapter: TypeAdapter[list[PatchOperation]] = TypeAdapter(
    list[PatchOperation]
)


def compile_patch(descriptors: Any) -> list[PatchOperation]:
    """Turn a decoded JSON Patch array into operations.

    Raises:
        InvalidPatch: If ``descriptors`` is not an array or any of its
            members is not a well-formed operation. Nothing is returned
            in that case.

    """
    if not is_array(descriptors):
        raise InvalidPatch("JSON Patch must be an array of operations")
    try:
        operations = _operations_adapter.validate_python(list(descriptors))
    except ValidationError as e:
        raise InvalidPatch(f"Invalid JSON Patch: {e}") from e
    logger.debug("Compiled %d patch operations", len(operations))
    return operations


def apply_patch(document: Any, operations: Sequence[PatchOperation]) -> Any:
    """Apply ``operations`` in order, stopping at the first failure.

    Raises:
        JsonPatchError: The error of the first failing operation. Its
            ``pointer`` is filled with the operation's path when unset.

    """
    for index, operation in enumerate(operations):
        try:
            document = operation.apply(document)
        except JsonPatchError as e:
            if e.pointer is None:
                e.pointer = operation.path.reference_tokens
            logger.info(
                "Patch operation %d (%s %s) failed: %s",
                index,
                operation.op,
                operation.path,
                e.kind,
            )
            raise
        logger.debug(
            "Applied patch operation %d (%s %s)", index, operation.op, operation.path
        )
    return document


def patch(document: Any, descriptors: Any) -> Any:
    """Compile ``descriptors`` and apply them to ``document``."""
    return apply_patch(document, compile_patch(descriptors))


class JsonPatch(BaseModel):
    """A JSON Patch document - a sequence of operations to apply to a JSON document.

    Build it with :meth:`from_json_array`, which reports malformed input as
    :class:`~couchpatch.errors.InvalidPatch`. Validating the model directly
    (``JsonPatch(patch=...)``, ``model_validate``) raises pydantic's
    ``ValidationError`` instead.
    """

    patch: list[PatchOperation] = Field(default_factory=list)

    @classmethod
    def from_json_array(cls, descriptors: Any) -> "JsonPatch":
        """Compile a decoded JSON Patch array.

        Raises:
            InvalidPatch: If ``descriptors`` is not a well-formed patch.

        """
        return cls(patch=compile_patch(descriptors))

    def apply(self, obj: Any) -> Any:
        """Apply all patch operations in sequence.

        Args:
            obj: The document to patch.

        Returns:
            The patched document.

        Raises:
            InvalidPointer: If a location does not resolve.
            PatchNotApplicable: If a test operation fails.

        """
        return apply_patch(obj, self.patch)


__all__ = (
    "AddOperation",
    "CopyOperation",
    "JsonPatch",
    "MoveOperation",
    "PatchOperation",
    "RemoveOperation",
    "ReplaceOperation",
    "TestOperation",
    "add",
    "apply_patch",
    "compile_patch",
    "copy",
    "move",
    "move_or_copy",
    "patch",
    "remove",
    "replace",
    "test",
)
