"""Unit tests for component-schema normalization.

These tests cover :func:`normalize_component_schemas`, which turns the
component-schema mapping into the canonical registry shared by the site
validator and the page-schema builder.
"""

from __future__ import annotations

import typing as typ

import pytest

from site_contracts.errors import SiteValidationError, ValidationErrorKind
from site_contracts.schemas import (
    DEFAULT_LAYOUT_SCHEMA,
    default_layout_schema,
    normalize_component_schemas,
)


def test_missing_id_is_derived_from_key_without_mutation() -> None:
    """Schemas lacking ``$id`` get the registry key on a copy."""
    original: dict[str, typ.Any] = {"type": "object"}
    registry = normalize_component_schemas({"Card@v2": original})
    assert registry["Card@v2"]["$id"] == "Card@v2", "expected key to become $id"
    assert "$id" not in original, "caller's schema must not be mutated"
    assert registry["Card@v2"] is not original, "expected a new schema object"


def test_declared_id_takes_precedence_over_key() -> None:
    """A self-declared ``$id`` wins over the registry key."""
    schema = {"$id": "Banner@v3", "type": "object"}
    registry = normalize_component_schemas({"banner": schema})
    assert registry["banner"]["$id"] == "Banner@v3"


def test_non_mapping_entries_are_skipped() -> None:
    """Decorative or malformed entries do not fail the batch."""
    registry = normalize_component_schemas(
        {"Text@v1": {"type": "object"}, "README": "not a schema", "count": 3}
    )
    assert list(registry) == ["Text@v1"], (
        f"expected only the mapping entry to survive, got {list(registry)!r}"
    )


@pytest.mark.parametrize("bad_id", [123, ["Text"]])
def test_non_string_identifier_is_rejected(bad_id: object) -> None:
    """A resolved identifier that is not a non-empty string is an error."""
    with pytest.raises(SiteValidationError) as excinfo:
        normalize_component_schemas({"Text@v1": {"$id": bad_id}})
    assert excinfo.value.kind is ValidationErrorKind.INVALID_SCHEMA_ID


def test_empty_key_without_id_is_rejected() -> None:
    """An empty key cannot stand in for a missing ``$id``."""
    with pytest.raises(SiteValidationError) as excinfo:
        normalize_component_schemas({"": {"type": "object"}})
    assert excinfo.value.kind is ValidationErrorKind.INVALID_SCHEMA_ID
    assert "Invalid schema id" in str(excinfo.value)


def test_none_normalizes_to_empty_registry() -> None:
    """Omitting component schemas yields an empty registry."""
    assert normalize_component_schemas(None) == {}


def test_default_layout_schema_copy_is_independent() -> None:
    """Mutating the returned default must not affect the module constant."""
    copy = default_layout_schema()
    copy["required"].append("title")
    assert DEFAULT_LAYOUT_SCHEMA["required"] == ["regions"]
