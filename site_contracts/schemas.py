"""Default layout schema and component-schema normalization.

Component schemas arrive from several places (package built-ins, root-level
``*.schema.json`` files, ``contracts/components``) keyed by component type.
:func:`normalize_component_schemas` turns such a mapping into the canonical
registry used by both the validator and the page-schema builder: every entry
is a mapping that carries a non-empty ``$id``.
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

from ._constants import LAYOUT_SCHEMA_ID
from .errors import SiteValidationError, ValidationErrorKind

DEFAULT_LAYOUT_SCHEMA: dict[str, typ.Any] = {
    "$id": LAYOUT_SCHEMA_ID,
    "type": "object",
    "required": ["regions"],
    "properties": {
        "regions": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["slots"],
                "properties": {
                    "slots": {"type": "array", "items": {"type": "string"}},
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}


def default_layout_schema() -> dict[str, typ.Any]:
    """Return a deep copy of the built-in layout schema."""
    return copy.deepcopy(DEFAULT_LAYOUT_SCHEMA)


def resolve_schema_id(key: str, schema: cabc.Mapping[str, typ.Any]) -> str:
    """Return ``schema["$id"]`` when present, otherwise the registry ``key``.

    Raises
    ------
    SiteValidationError
        With kind ``INVALID_SCHEMA_ID`` when the resolved identifier is not a
        non-empty string.
    """
    schema_id = schema.get("$id") or key
    if not isinstance(schema_id, str) or not schema_id:
        msg = f"Invalid schema id for component '{key}'"
        raise SiteValidationError(
            ValidationErrorKind.INVALID_SCHEMA_ID,
            msg,
            details={"key": key, "schema_id": schema_id},
        )
    return schema_id


def with_schema_id(
    schema: cabc.Mapping[str, typ.Any], schema_id: str
) -> dict[str, typ.Any]:
    """Return ``schema`` as a dict carrying ``schema_id`` without mutating it."""
    if schema.get("$id") == schema_id and isinstance(schema, dict):
        return schema
    return {**schema, "$id": schema_id}


def normalize_component_schemas(
    component_schemas: cabc.Mapping[str, typ.Any] | None = None,
) -> dict[str, dict[str, typ.Any]]:
    """Build the canonical component-type -> schema registry.

    Parameters
    ----------
    component_schemas : Mapping[str, Any], optional
        Component schemas keyed by component type. Values that are not
        mappings are skipped.

    Returns
    -------
    dict[str, dict[str, Any]]
        Registry whose schemas all carry ``$id``. Schemas that lacked one are
        shallow copies; the caller's objects are left untouched.

    Raises
    ------
    SiteValidationError
        With kind ``INVALID_SCHEMA_ID`` if a schema resolves to an empty or
        non-string identifier.

    Examples
    --------
    >>> original = {"type": "object"}
    >>> registry = normalize_component_schemas({"Text@v1": original})
    >>> registry["Text@v1"]["$id"]
    'Text@v1'
    >>> "$id" in original
    False
    """
    registry: dict[str, dict[str, typ.Any]] = {}
    for key, value in (component_schemas or {}).items():
        if not isinstance(value, cabc.Mapping):
            continue
        schema_id = resolve_schema_id(key, value)
        registry[key] = with_schema_id(value, schema_id)
    return registry


__all__ = [
    "DEFAULT_LAYOUT_SCHEMA",
    "default_layout_schema",
    "normalize_component_schemas",
    "resolve_schema_id",
    "with_schema_id",
]
