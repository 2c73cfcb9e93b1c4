"""Composite ``SitePage@v1`` schema for editor-time diagnostics.

:func:`build_page_schema` derives one self-contained JSON Schema describing
valid page documents for a specific layout and component set. Every component
schema is embedded under ``$defs`` and selected with ``if``/``then`` clauses
keyed on the instance ``type``, so the result can be handed to any
independent Draft 2020-12 evaluator without sharing registration state.

Regions and slots are closed (``additionalProperties: false``); this is
stricter than :class:`~site_contracts.validator.SiteValidator`, which accepts
regions that hold no component instances.

Examples
--------
>>> from site_contracts.page_schema import build_page_schema
>>> schema = build_page_schema(
...     layout={"regions": {"main": {"slots": ["hero"]}}},
...     component_schemas={"Text@v1": {"type": "object"}},
... )
>>> schema["$id"], sorted(schema["$defs"])
('SitePage@v1', ['Text_v1'])
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import re
import typing as typ

from ._constants import (
    INSTANCE_WRAP_KEY,
    JSON_SCHEMA_DIALECT,
    PAGE_SCHEMA_ID,
    REGION_META_KEY,
)
from .schemas import normalize_component_schemas

if typ.TYPE_CHECKING:
    from .providers import ComponentSchemaProvider

_DEF_NAME_PATTERN = re.compile(r"[^A-Za-z0-9_$]")


def sanitize_definition_name(schema_id: str) -> str:
    """Return ``schema_id`` with non-identifier characters replaced by ``_``.

    >>> sanitize_definition_name("Text@v1")
    'Text_v1'
    """
    return _DEF_NAME_PATTERN.sub("_", schema_id)


def _unique_definition_name(schema_id: str, owners: cabc.Mapping[str, str]) -> str:
    """Return the ``$defs`` name for ``schema_id``, suffixing on collisions.

    ``owners`` maps names already taken to the identifier that holds them; an
    identifier seen before gets its earlier name back.

    >>> _unique_definition_name("Text.v1", {"Text_v1": "Text@v1"})
    'Text_v1_2'
    """
    base = sanitize_definition_name(schema_id)
    name = base
    counter = 2
    while name in owners and owners[name] != schema_id:
        name = f"{base}_{counter}"
        counter += 1
    return name


def _component_instance_schema(
    registry: cabc.Mapping[str, cabc.Mapping[str, typ.Any]],
    definitions: cabc.Mapping[str, str],
) -> dict[str, typ.Any]:
    component_types = sorted(registry)
    branches = [
        {
            "if": {
                "type": "object",
                "properties": {"type": {"const": component_type}},
                "required": ["type"],
            },
            "then": {
                "properties": {
                    "props": {"$ref": f"#/$defs/{definitions[component_type]}"}
                },
            },
        }
        for component_type in registry
    ]
    instance: dict[str, typ.Any] = {
        "type": "object",
        "required": ["type", "props"],
        "properties": {
            "type": (
                {"enum": component_types} if component_types else {"type": "string"}
            ),
            "props": {"type": "object"},
            INSTANCE_WRAP_KEY: {"type": "string"},
        },
        "additionalProperties": True,
    }
    if branches:
        instance["allOf"] = branches
    return instance


def _region_schemas(
    layout: cabc.Mapping[str, typ.Any] | None, slot_schema: dict[str, typ.Any]
) -> dict[str, typ.Any]:
    regions = layout.get("regions") if isinstance(layout, cabc.Mapping) else None
    if not isinstance(regions, cabc.Mapping):
        return {}
    region_schemas: dict[str, typ.Any] = {}
    for region_name, region in regions.items():
        slots = region.get("slots") if isinstance(region, cabc.Mapping) else None
        properties: dict[str, typ.Any] = {REGION_META_KEY: {"type": "string"}}
        for slot_name in slots or []:
            properties[slot_name] = slot_schema
        region_schemas[region_name] = {
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
        }
    return region_schemas


def build_page_schema(
    *,
    layout: cabc.Mapping[str, typ.Any] | None,
    component_schemas: ComponentSchemaProvider | None = None,
) -> dict[str, typ.Any]:
    """Build the composite page schema for ``layout`` and ``component_schemas``.

    Parameters
    ----------
    layout : Mapping[str, Any] or None
        Layout document; each declared region becomes a closed object whose
        properties are its slots plus ``_tw``.
    component_schemas : Mapping[str, Mapping[str, Any]], optional
        Component ``props`` schemas keyed by component type.

    Returns
    -------
    dict[str, Any]
        JSON-serializable schema with ``$id`` ``SitePage@v1``.

    Raises
    ------
    SiteValidationError
        ``INVALID_SCHEMA_ID`` when a component schema has an unusable ``$id``.
    """
    registry = normalize_component_schemas(component_schemas)
    definitions: dict[str, str] = {}
    defs: dict[str, typ.Any] = {}
    owners: dict[str, str] = {}
    for component_type, schema in registry.items():
        schema_id = schema["$id"]
        def_name = _unique_definition_name(schema_id, owners)
        definitions[component_type] = def_name
        if def_name not in defs:
            owners[def_name] = schema_id
            defs[def_name] = copy.deepcopy(schema)

    instance = _component_instance_schema(registry, definitions)
    slot_schema = {"anyOf": [instance, {"type": "array", "items": instance}]}

    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "$id": PAGE_SCHEMA_ID,
        "type": "object",
        "required": ["regions"],
        "properties": {
            "title": {"type": "string"},
            "regions": {
                "type": "object",
                "properties": _region_schemas(layout, slot_schema),
                "additionalProperties": False,
            },
        },
        "additionalProperties": True,
        "$defs": defs,
    }


__all__ = ["build_page_schema", "sanitize_definition_name"]
