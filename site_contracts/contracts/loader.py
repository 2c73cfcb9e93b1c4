"""Load layout and component schemas from a project tree.

Component schemas are gathered from three places, later sources shadowing
earlier ones when they share a key: the schemas bundled with
``site_contracts``, ``*.schema.json`` files at the project root, and files in
``contracts/components``. :class:`SiteContracts` wraps the loaded schemas and
keeps one :class:`~site_contracts.validator.SiteValidator` for reuse.

Examples
--------
>>> from pathlib import Path
>>> from site_contracts.contracts import SiteContracts
>>> contracts = SiteContracts(Path("."))  # doctest: +SKIP
>>> contracts.validate_site(page=page, layout=layout)  # doctest: +SKIP
True
"""

from __future__ import annotations

import functools
import typing as typ

from site_contracts._constants import LAYOUT_SCHEMA_FILENAME, SCHEMA_FILE_SUFFIX
from site_contracts.page_schema import build_page_schema
from site_contracts.rendering.components import default_renderers
from site_contracts.schemas import default_layout_schema
from site_contracts.validator import SiteValidator, create_site_validator

from .documents import load_document
from .models import BUILTIN_COMPONENTS_DIR, ContractLoadError, ContractPaths

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from site_contracts.providers import ComponentRendererProvider


def load_layout_schema(root: Path) -> dict[str, typ.Any]:
    """Return the project's layout schema or a copy of the built-in default.

    ``contracts/layout.schema.json`` is preferred over a root-level
    ``layout.schema.json``.
    """
    for candidate in ContractPaths(root).layout_schema_candidates:
        if candidate.is_file():
            return load_document(candidate)
    return default_layout_schema()


def _schema_key(path: Path, schema: cabc.Mapping[str, typ.Any]) -> str:
    schema_id = schema.get("$id")
    if isinstance(schema_id, str) and schema_id:
        return schema_id
    return path.name[: -len(SCHEMA_FILE_SUFFIX)]


def read_component_schema_files(directory: Path) -> dict[str, dict[str, typ.Any]]:
    """Read every ``*.schema.json`` file in ``directory`` keyed by identifier.

    Files are visited in name order and the first file claiming a key wins.
    ``layout.schema.json`` and anything that is not a regular file are
    ignored; a missing directory yields an empty mapping.

    Raises
    ------
    ContractLoadError
        If a schema file cannot be parsed or does not hold a JSON object.
    """
    results: dict[str, dict[str, typ.Any]] = {}
    if not directory.is_dir():
        return results
    for path in sorted(directory.iterdir()):
        if not path.name.endswith(SCHEMA_FILE_SUFFIX):
            continue
        if path.name == LAYOUT_SCHEMA_FILENAME or not path.is_file():
            continue
        try:
            schema = load_document(path)
        except TypeError as exc:
            msg = f"Unable to read schema at {path}: {exc}"
            raise ContractLoadError(msg) from exc
        results.setdefault(_schema_key(path, schema), schema)
    return results


def load_component_schemas(
    root: Path, *, include_builtin: bool = True
) -> dict[str, dict[str, typ.Any]]:
    """Merge component schemas for the project rooted at ``root``.

    Parameters
    ----------
    root : Path
        Project directory.
    include_builtin : bool, optional
        Start from the schemas bundled for the built-in renderers.

    Returns
    -------
    dict[str, dict[str, Any]]
        Component schemas keyed by identifier; ``contracts/components`` files
        shadow root-level files, which shadow bundled schemas.
    """
    paths = ContractPaths(root)
    merged: dict[str, dict[str, typ.Any]] = {}
    if include_builtin:
        merged.update(read_component_schema_files(BUILTIN_COMPONENTS_DIR))
    merged.update(read_component_schema_files(paths.root))
    merged.update(read_component_schema_files(paths.components_dir))
    return merged


class SiteContracts:
    """Schemas for one project plus a lazily built, cached site validator."""

    def __init__(
        self,
        root: Path,
        *,
        include_builtin: bool = True,
        renderers: ComponentRendererProvider | None = None,
    ) -> None:
        """Bind the contracts to a project directory.

        Parameters
        ----------
        root : Path
            Project directory searched for schema files.
        include_builtin : bool, optional
            Include the schemas of the bundled component renderers.
        renderers : Mapping[str, ComponentRenderer], optional
            Default renderer registry for :meth:`validate_site`; the bundled
            renderers are used when omitted.
        """
        self.root = root
        self.include_builtin = include_builtin
        self.renderers = renderers if renderers is not None else default_renderers()

    @functools.cached_property
    def layout_schema(self) -> dict[str, typ.Any]:
        """Return the layout schema for this project."""
        return load_layout_schema(self.root)

    @functools.cached_property
    def component_schemas(self) -> dict[str, dict[str, typ.Any]]:
        """Return the merged component schemas for this project."""
        return load_component_schemas(self.root, include_builtin=self.include_builtin)

    @functools.cached_property
    def validator(self) -> SiteValidator:
        """Return the site validator, constructing it on first use."""
        return create_site_validator(
            layout_schema=self.layout_schema,
            component_schemas=self.component_schemas,
        )

    def validate_site(
        self,
        *,
        page: cabc.Mapping[str, typ.Any] | None,
        layout: cabc.Mapping[str, typ.Any] | None,
        renderers: ComponentRendererProvider | None = None,
        render_smoke: bool = False,
    ) -> bool:
        """Validate ``page`` with the cached validator and default renderers."""
        return self.validator(
            page=page,
            layout=layout,
            renderers=self.renderers if renderers is None else renderers,
            render_smoke=render_smoke,
        )

    def page_schema(
        self, layout: cabc.Mapping[str, typ.Any] | None
    ) -> dict[str, typ.Any]:
        """Return the composite ``SitePage@v1`` schema for ``layout``."""
        return build_page_schema(
            layout=layout, component_schemas=self.component_schemas
        )


__all__ = [
    "SiteContracts",
    "load_component_schemas",
    "load_layout_schema",
    "read_component_schema_files",
]
