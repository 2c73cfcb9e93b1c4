"""Load site build configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    DEFAULT_LAYOUT_PATH,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SCHEMA_OUTPUT,
    DEFAULT_THEME_PATH,
    DEFAULT_TOKENS_PATH,
    _as_bool,
    _optional_str,
    _resolve_path,
    _stylesheet_paths,
)
from .models import PageConfig, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the pages to validate and build.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). Relative paths inside the file resolve against
        the file's parent directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with one :class:`PageConfig` per page entry.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If no usable page entries are defined or a page is missing its
        ``source``.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from site_contracts.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.get_page("home").source  # doctest: +SKIP
    PosixPath('config/site/page.json')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    base_dir = path.parent

    page_defaults = _PageDefaults(
        base_dir=base_dir,
        contracts_root=_resolve_path(base_dir, defaults.get("contracts_root", ".")),
        layout=_resolve_path(base_dir, defaults.get("layout", DEFAULT_LAYOUT_PATH)),
        output_dir=_resolve_path(
            base_dir, defaults.get("output_dir", DEFAULT_OUTPUT_DIR)
        ),
        tokens=defaults.get("tokens", DEFAULT_TOKENS_PATH),
        theme=defaults.get("theme", DEFAULT_THEME_PATH),
        render_smoke=_as_bool(
            defaults.get("render_smoke", False), field="defaults.render_smoke"
        ),
    )

    pages_raw = raw.get("pages") or {}
    if not pages_raw:
        msg = "No pages defined in site configuration."
        raise SiteConfigError(msg)
    if not isinstance(pages_raw, dict):
        msg = "'pages' must be a mapping of page keys to page entries."
        raise SiteConfigError(msg)

    pages: dict[str, PageConfig] = {}
    for key, payload in pages_raw.items():
        match payload:
            case dict():
                pages[str(key)] = _build_page_config(
                    key=str(key), payload=payload, defaults=page_defaults
                )
            case _:
                continue
    if not pages:
        msg = "No page entries in site configuration are mappings."
        raise SiteConfigError(msg)

    return SiteConfig(
        pages=pages,
        default_page=_optional_str(defaults.get("default_page")),
        contracts_root=page_defaults.contracts_root,
        layout=page_defaults.layout,
        schema_output=_resolve_path(
            base_dir, defaults.get("schema_output", DEFAULT_SCHEMA_OUTPUT)
        ),
    )


@dc.dataclass(slots=True)
class _PageDefaults:
    """Internal container for page default configuration values."""

    base_dir: Path
    contracts_root: Path
    layout: Path
    output_dir: Path
    tokens: object
    theme: object
    render_smoke: bool


def _build_page_config(
    *,
    key: str,
    payload: typ.Mapping[str, typ.Any],
    defaults: _PageDefaults,
) -> PageConfig:
    """Build a PageConfig for a single page entry using defaults and overrides."""
    source = _optional_str(payload.get("source"))
    if not source:
        msg = f"Page '{key}' is missing 'source'."
        raise SiteConfigError(msg)

    base_dir = defaults.base_dir

    def _path_or_default(name: str, default: Path) -> Path:
        value = payload.get(name)
        return _resolve_path(base_dir, value) if value else default

    return PageConfig(
        key=key,
        source=_resolve_path(base_dir, source),
        layout=_path_or_default("layout", defaults.layout),
        contracts_root=_path_or_default("contracts_root", defaults.contracts_root),
        output_dir=_path_or_default("output_dir", defaults.output_dir / key),
        stylesheets=_stylesheet_paths(
            base_dir,
            payload.get("tokens", defaults.tokens),
            payload.get("theme", defaults.theme),
        ),
        title=_optional_str(payload.get("title")),
        render_smoke=_as_bool(
            payload.get("render_smoke", defaults.render_smoke),
            field=f"pages.{key}.render_smoke",
        ),
    )


__all__ = ["load_site_config"]
