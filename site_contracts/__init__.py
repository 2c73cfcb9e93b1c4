"""Compose and enforce the structural contract of declarative site pages.

A page document places component instances into the regions and slots of a
layout. This package checks such documents against a schema composed at
runtime from the layout and a registry of per-component ``props`` schemas,
and derives a standalone ``SitePage@v1`` schema for editor diagnostics.

Exports
-------
- ``create_site_validator``: build a reusable :class:`SiteValidator`.
- ``build_page_schema``: derive the composite page schema.
- ``normalize_component_schemas``: canonical component-schema registry.
- ``describe_validation_error``: one-line summary of a failure.
- ``app`` / ``main``: Cyclopts CLI behind the ``site-contracts`` script.

Examples
--------
>>> from site_contracts import build_page_schema, create_site_validator
>>> layout = {"regions": {"main": {"slots": ["hero"]}}}
>>> validate = create_site_validator()
>>> validate(page={"regions": {}}, layout=layout)
True
>>> build_page_schema(layout=layout)["$id"]
'SitePage@v1'
"""

from __future__ import annotations

from .cli import app, main
from .errors import (
    SchemaIssue,
    SiteValidationError,
    ValidationErrorKind,
    describe_validation_error,
)
from .page_schema import build_page_schema
from .providers import ComponentRenderer, RenderContext
from .schemas import DEFAULT_LAYOUT_SCHEMA, normalize_component_schemas
from .traversal import ComponentPlacement, PageComponents
from .validator import SiteValidator, create_site_validator

__all__ = [
    "DEFAULT_LAYOUT_SCHEMA",
    "ComponentPlacement",
    "ComponentRenderer",
    "PageComponents",
    "RenderContext",
    "SchemaIssue",
    "SiteValidationError",
    "SiteValidator",
    "ValidationErrorKind",
    "app",
    "build_page_schema",
    "create_site_validator",
    "describe_validation_error",
    "main",
    "normalize_component_schemas",
]
