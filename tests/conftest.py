"""Shared fixtures for the site_contracts test suite."""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path

import pytest

FIXTURE_SITE = Path(__file__).resolve().parent / "fixtures" / "site"


@pytest.fixture
def text_schema() -> dict[str, typ.Any]:
    """Return a ``Text@v1`` props schema requiring a string ``text``."""
    return {
        "$id": "Text@v1",
        "type": "object",
        "required": ["text"],
        "properties": {"text": {"type": "string"}},
    }


@pytest.fixture
def hero_layout() -> dict[str, typ.Any]:
    """Return a layout with a single ``main`` region accepting ``hero``."""
    return {"regions": {"main": {"slots": ["hero"]}}}


@pytest.fixture
def text_renderers() -> dict[str, typ.Any]:
    """Return a renderer registry that only knows ``Text@v1``."""

    def _render_text(instance: typ.Mapping[str, typ.Any], context: object) -> str:
        return f"<p>{instance['props']['text']}</p>"

    return {"Text@v1": _render_text}


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Copy the fixture site into a temporary directory and return its root."""
    root = tmp_path / "site-root"
    shutil.copytree(FIXTURE_SITE, root)
    return root
