"""CouchPatch: pure RFC 6902 JSON Patch application over decoded JSON."""

from ._settings import settings
from .errors import (
    ErrorKind,
    InvalidPatch,
    InvalidPointer,
    JsonPatchError,
    PatchNotApplicable,
)
from .jsonpatch import (
    JsonPatch,
    add,
    apply_patch,
    compile_patch,
    copy,
    move,
    patch,
    remove,
    replace,
    test,
)
from .jsonpointer import JsonPointer, get, traverse
from .value import json_equal
from .version import __version__

__all__ = (
    "__version__",
    "ErrorKind",
    "InvalidPatch",
    "InvalidPointer",
    "JsonPatch",
    "JsonPatchError",
    "JsonPointer",
    "PatchNotApplicable",
    "add",
    "apply_patch",
    "compile_patch",
    "copy",
    "get",
    "json_equal",
    "move",
    "patch",
    "remove",
    "replace",
    "settings",
    "test",
    "traverse",
)
