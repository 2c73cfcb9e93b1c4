"""Tests for reading layout and component contracts from a project tree."""

from __future__ import annotations

import json
import typing as typ

import pytest

from site_contracts.contracts import (
    ContractLoadError,
    SiteContracts,
    load_component_schemas,
    load_document,
    load_layout_schema,
    read_component_schema_files,
)
from site_contracts.errors import SiteValidationError, ValidationErrorKind
from site_contracts.schemas import DEFAULT_LAYOUT_SCHEMA

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_layout_schema_prefers_contracts_directory(tmp_path: Path) -> None:
    _write_json(tmp_path / "layout.schema.json", {"$id": "Layout@root"})
    _write_json(
        tmp_path / "contracts" / "layout.schema.json", {"$id": "Layout@contracts"}
    )
    assert load_layout_schema(tmp_path)["$id"] == "Layout@contracts"


def test_layout_schema_falls_back_to_default(tmp_path: Path) -> None:
    schema = load_layout_schema(tmp_path)
    assert schema == DEFAULT_LAYOUT_SCHEMA
    assert schema is not DEFAULT_LAYOUT_SCHEMA


def test_component_precedence(tmp_path: Path) -> None:
    """``contracts/components`` shadows the root, which shadows built-ins."""
    _write_json(tmp_path / "Card@v1.schema.json", {"title": "root card"})
    _write_json(tmp_path / "Text@v1.schema.json", {"title": "root text"})
    _write_json(
        tmp_path / "contracts" / "components" / "Text@v1.schema.json",
        {"title": "component text"},
    )
    schemas = load_component_schemas(tmp_path)
    assert schemas["Card@v1"]["title"] == "root card"
    assert schemas["Text@v1"]["title"] == "component text"
    assert "Heading@v1" in schemas, "built-in schemas should be included"


def test_builtin_schemas_can_be_excluded(tmp_path: Path) -> None:
    _write_json(tmp_path / "Card@v1.schema.json", {"type": "object"})
    assert list(load_component_schemas(tmp_path, include_builtin=False)) == [
        "Card@v1"
    ]


def test_declared_id_is_the_key_and_first_file_wins(tmp_path: Path) -> None:
    _write_json(tmp_path / "a.schema.json", {"$id": "Shared@v1", "title": "a"})
    _write_json(tmp_path / "b.schema.json", {"$id": "Shared@v1", "title": "b"})
    _write_json(tmp_path / "layout.schema.json", {"$id": "Layout@v1"})
    (tmp_path / "notes.json").write_text("{}", encoding="utf-8")
    schemas = read_component_schema_files(tmp_path)
    assert list(schemas) == ["Shared@v1"]
    assert schemas["Shared@v1"]["title"] == "a"


def test_missing_directory_reads_nothing(tmp_path: Path) -> None:
    assert read_component_schema_files(tmp_path / "absent") == {}


def test_unparseable_schema_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "Bad@v1.schema.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ContractLoadError, match="Unable to read document"):
        read_component_schema_files(tmp_path)


def test_non_object_schema_raises_load_error(tmp_path: Path) -> None:
    _write_json(tmp_path / "List@v1.schema.json", [1, 2])
    with pytest.raises(ContractLoadError, match="must be a mapping"):
        read_component_schema_files(tmp_path)


def test_yaml_and_json_documents_load_alike(tmp_path: Path) -> None:
    yaml_path = tmp_path / "layout.yaml"
    yaml_path.write_text(
        "regions:\n  main:\n    slots: [hero, body]\n", encoding="utf-8"
    )
    json_path = _write_json(
        tmp_path / "layout.json", {"regions": {"main": {"slots": ["hero", "body"]}}}
    )
    assert load_document(yaml_path) == load_document(json_path)


def test_yaml_uses_1_2_booleans(tmp_path: Path) -> None:
    path = tmp_path / "page.yml"
    path.write_text("flag: yes\n", encoding="utf-8")
    assert load_document(path) == {"flag": "yes"}


def test_empty_document_is_an_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_document(path) == {}


def test_missing_document_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "missing.json")


def test_site_contracts_validates_fixture_site(site_root: Path) -> None:
    """The fixture page satisfies the fixture contracts with smoke rendering."""
    contracts = SiteContracts(site_root)
    page = load_document(site_root / "site" / "page.json")
    layout = load_document(site_root / "site" / "layout.json")
    assert contracts.validate_site(page=page, layout=layout, render_smoke=True)
    assert contracts.validator is contracts.validator, "validator should be cached"


def test_project_schema_shadows_builtin_at_validation(site_root: Path) -> None:
    """The project's ``Text@v1`` caps text at 200 characters."""
    contracts = SiteContracts(site_root)
    layout = load_document(site_root / "site" / "layout.json")
    page = {
        "regions": {
            "footer": {"note": {"type": "Text@v1", "props": {"text": "x" * 201}}}
        }
    }
    with pytest.raises(SiteValidationError) as excinfo:
        contracts.validate_site(page=page, layout=layout)
    assert excinfo.value.kind is ValidationErrorKind.SCHEMA_VIOLATION
    assert excinfo.value.errors[0].keyword == "maxLength"


def test_explicit_renderers_override_defaults(site_root: Path) -> None:
    contracts = SiteContracts(site_root, renderers={})
    layout = load_document(site_root / "site" / "layout.json")
    page = load_document(site_root / "site" / "page.json")
    with pytest.raises(SiteValidationError) as excinfo:
        contracts.validate_site(page=page, layout=layout)
    assert excinfo.value.kind is ValidationErrorKind.NO_RENDERER


def test_page_schema_embeds_project_components(site_root: Path) -> None:
    contracts = SiteContracts(site_root)
    layout = load_document(site_root / "site" / "layout.json")
    schema = contracts.page_schema(layout)
    assert schema["$defs"]["Text_v1"]["properties"]["text"]["maxLength"] == 200
    assert set(schema["properties"]["regions"]["properties"]) == {
        "header",
        "main",
        "footer",
    }
