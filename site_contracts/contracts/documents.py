"""Read JSON and YAML documents into plain mappings."""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import ContractLoadError

if typ.TYPE_CHECKING:
    from pathlib import Path

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _read_yaml(path: Path) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        return loader.load(handle)


def read_document(path: Path) -> object:
    """Parse ``path`` as YAML (``.yaml``/``.yml``) or JSON and return the value.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ContractLoadError
        If the file cannot be read or parsed.
    """
    if not path.exists():
        msg = f"Document '{path}' not found."
        raise FileNotFoundError(msg)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return _read_yaml(path)
        return msgspec.json.decode(path.read_bytes())
    except (OSError, msgspec.DecodeError, YAMLError) as exc:
        msg = f"Unable to read document at {path}: {exc}"
        raise ContractLoadError(msg) from exc


def load_document(path: Path) -> dict[str, typ.Any]:
    """Load a mapping document (layout, page, or schema) from ``path``.

    Parameters
    ----------
    path : Path
        JSON or YAML file.

    Returns
    -------
    dict[str, Any]
        Parsed top-level mapping.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ContractLoadError
        If the file cannot be parsed.
    TypeError
        If the top-level value is not a mapping.
    """
    loaded = read_document(path)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"Top-level structure of '{path}' must be a mapping."
        raise TypeError(msg)
    return dict(loaded)


__all__ = ["YAML_SUFFIXES", "load_document", "read_document"]
