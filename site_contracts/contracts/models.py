"""Errors and path conventions for on-disk contract documents."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from site_contracts._constants import (
    COMPONENT_CONTRACTS_DIRNAME,
    CONTRACTS_DIRNAME,
    LAYOUT_SCHEMA_FILENAME,
)


class ContractLoadError(RuntimeError):
    """Raised when a schema, layout, or page document cannot be read."""


@dc.dataclass(frozen=True, slots=True)
class ContractPaths:
    """Resolve the contract locations beneath a project root.

    Attributes
    ----------
    root : Path
        Project directory holding ``contracts/`` and root-level schema files.
    """

    root: Path

    @property
    def contracts_dir(self) -> Path:
        """Return ``<root>/contracts``."""
        return self.root / CONTRACTS_DIRNAME

    @property
    def components_dir(self) -> Path:
        """Return ``<root>/contracts/components``."""
        return self.contracts_dir / COMPONENT_CONTRACTS_DIRNAME

    @property
    def layout_schema_candidates(self) -> tuple[Path, ...]:
        """Return layout schema paths in lookup order."""
        return (
            self.contracts_dir / LAYOUT_SCHEMA_FILENAME,
            self.root / LAYOUT_SCHEMA_FILENAME,
        )


BUILTIN_COMPONENTS_DIR = Path(__file__).resolve().parents[1] / "component_schemas"


__all__ = ["BUILTIN_COMPONENTS_DIR", "ContractLoadError", "ContractPaths"]
