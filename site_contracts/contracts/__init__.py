"""Load contract documents (layouts, component schemas, pages) from disk.

This subpackage resolves the project's ``contracts/`` tree, merges component
schemas with a defined override precedence, and exposes
:class:`SiteContracts`, which caches one site validator per project root.

Examples
--------
>>> from pathlib import Path
>>> from site_contracts.contracts import SiteContracts, load_document
>>> contracts = SiteContracts(Path("."))  # doctest: +SKIP
>>> layout = load_document(Path("site/layout.json"))  # doctest: +SKIP
>>> contracts.page_schema(layout)["$id"]  # doctest: +SKIP
'SitePage@v1'
"""

from .documents import load_document, read_document
from .loader import (
    SiteContracts,
    load_component_schemas,
    load_layout_schema,
    read_component_schema_files,
)
from .models import BUILTIN_COMPONENTS_DIR, ContractLoadError, ContractPaths

__all__ = [
    "BUILTIN_COMPONENTS_DIR",
    "ContractLoadError",
    "ContractPaths",
    "SiteContracts",
    "load_component_schemas",
    "load_document",
    "load_layout_schema",
    "read_component_schema_files",
    "read_document",
]
