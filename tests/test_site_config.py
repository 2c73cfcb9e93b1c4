"""Tests for the site configuration loader."""

from __future__ import annotations

import typing as typ

import pytest

from site_contracts.config import SiteConfigError, load_site_config

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(body, encoding="utf-8")
    return path


def test_fixture_config_resolves_relative_paths(site_root: Path) -> None:
    config = load_site_config(site_root / "site.yaml")
    home = config.get_page("home")
    assert home.source == site_root / "site" / "page.json"
    assert home.layout == site_root / "site" / "layout.json"
    assert home.contracts_root == site_root / "."
    assert home.output_dir == site_root / "public" / "home"
    assert home.stylesheets == [
        site_root / "site" / "tokens.css",
        site_root / "site" / "theme.css",
    ]
    assert home.title == "Fixture Home"
    assert home.render_smoke is True
    assert config.get_page("broken").render_smoke is False
    assert config.schema_output == site_root / "public" / "page.schema.json"


def test_default_page_selection(site_root: Path) -> None:
    config = load_site_config(site_root / "site.yaml")
    assert config.get_page(None).key == "home"


def test_unknown_page_lists_known_pages(site_root: Path) -> None:
    config = load_site_config(site_root / "site.yaml")
    with pytest.raises(SiteConfigError, match="Known pages: broken, home"):
        config.get_page("about")


def test_page_overrides_defaults(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
defaults:
  layout: shared/layout.json
  theme: ""
pages:
  docs:
    source: docs/page.yaml
    layout: docs/layout.yaml
    output_dir: dist/docs
    tokens: docs/tokens.css
""",
    )
    page = load_site_config(path).get_page("docs")
    assert page.layout == tmp_path / "docs" / "layout.yaml"
    assert page.output_dir == tmp_path / "dist" / "docs"
    assert page.stylesheets == [tmp_path / "docs" / "tokens.css"]


def test_missing_source_is_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "pages:\n  home:\n    title: Home\n")
    with pytest.raises(SiteConfigError, match="missing 'source'"):
        load_site_config(path)


def test_config_without_pages_is_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "defaults: {}\n")
    with pytest.raises(SiteConfigError, match="No pages defined"):
        load_site_config(path)


@pytest.mark.parametrize("value", ["maybe", "2", "[true]"])
def test_ambiguous_booleans_are_rejected(tmp_path: Path, value: str) -> None:
    path = _write_config(
        tmp_path, f"pages:\n  home:\n    source: p.json\n    render_smoke: {value}\n"
    )
    with pytest.raises(SiteConfigError, match="pages.home.render_smoke"):
        load_site_config(path)


def test_non_mapping_top_level_is_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "- just\n- a list\n")
    with pytest.raises(TypeError):
        load_site_config(path)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "pages",
    ["\n  home: site/page.json\n  about: 3\n", "\n  - source: p.json\n"],
)
def test_config_without_page_mappings_is_rejected(
    tmp_path: Path, pages: str
) -> None:
    """Scalar or list page entries leave nothing to validate."""
    path = _write_config(tmp_path, f"pages:{pages}")
    with pytest.raises(SiteConfigError):
        load_site_config(path)


def test_non_mapping_page_entries_are_skipped(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path, "pages:\n  notes: just text\n  home:\n    source: p.json\n"
    )
    assert list(load_site_config(path).pages) == ["home"]
