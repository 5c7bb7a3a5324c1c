"""Errors raised while resolving pointers and applying patches."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure kinds a front-end can branch on."""

    INVALID_POINTER = "invalid_pointer"
    INVALID_PATCH = "invalid_patch"
    PATCH_NOT_APPLICABLE = "patch_not_applicable"


class JsonPatchError(Exception):
    """Base class of every couchpatch error."""

    kind: ErrorKind

    def __init__(  # noqa: D107
        self, message: str, pointer: tuple[str, ...] | None = None
    ):
        super().__init__(message)
        self.pointer = pointer


class InvalidPointer(JsonPatchError, ValueError):
    """The pointer does not resolve against the document."""

    kind = ErrorKind.INVALID_POINTER


class InvalidPatch(JsonPatchError, ValueError):
    """The patch is not an array of well-formed operations."""

    kind = ErrorKind.INVALID_PATCH


class PatchNotApplicable(JsonPatchError):
    """A ``test`` operation did not match the document."""

    kind = ErrorKind.PATCH_NOT_APPLICABLE


__all__ = (
    "ErrorKind",
    "InvalidPatch",
    "InvalidPointer",
    "JsonPatchError",
    "PatchNotApplicable",
)
