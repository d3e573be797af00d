"""JSON Schema for the output of ``pipenv graph --json-tree``.

The report is an array of package objects, each of which may nest further
package objects under ``dependencies``. Each package object is validated on
its own with jsonschema Draft 7 while the tree is walked with an explicit
stack, so deeply nested reports do not recurse through the validator.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from jsonschema import Draft7Validator, ValidationError

REPORT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {"type": "object"},
}

PACKAGE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["package_name", "installed_version"],
    "properties": {
        "package_name": {"type": "string"},
        "installed_version": {"type": "string"},
        "required_version": {"type": ["string", "null"]},
        "dependencies": {
            "type": ["array", "null"],
            "items": {"type": "object"},
        },
    },
}

_REPORT_VALIDATOR = Draft7Validator(REPORT_SCHEMA)
_PACKAGE_VALIDATOR = Draft7Validator(PACKAGE_SCHEMA)

Path = Tuple[Union[int, str], ...]


def _first(validator: Draft7Validator, data: Any) -> Optional[ValidationError]:
    errs = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    return errs[0] if errs else None


def _describe(prefix: Sequence[Union[int, str]], err: ValidationError) -> str:
    path = "/".join([str(p) for p in list(prefix) + list(err.path)])
    return f"Invalid report at '{path}': {err.message}"


def first_error(data: Any) -> Optional[Tuple[str, ValidationError]]:
    """Return the first schema violation in ``data`` in report order.

    Returns:
        ``(message, error)`` where ``message`` names the document path, or
        None when the report is valid.
    """
    err = _first(_REPORT_VALIDATOR, data)
    if err is not None:
        return _describe((), err), err

    stack: List[Tuple[Path, Dict[str, Any]]] = [
        ((i,), entry) for i, entry in reversed(list(enumerate(data)))
    ]
    while stack:
        path, entry = stack.pop()
        err = _first(_PACKAGE_VALIDATOR, entry)
        if err is not None:
            return _describe(path, err), err
        children = entry.get("dependencies") or []
        stack.extend(
            (path + ("dependencies", i), child) for i, child in reversed(list(enumerate(children)))
        )
    return None
