"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

from pathlib import Path

from .models import SiteConfigError

DEFAULT_LAYOUT_PATH = "site/layout.json"
DEFAULT_OUTPUT_DIR = "public"
DEFAULT_SCHEMA_OUTPUT = "public/page.schema.json"
DEFAULT_TOKENS_PATH = "site/tokens.css"
DEFAULT_THEME_PATH = "site/theme.css"


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_path(base_dir: Path, value: object) -> Path:
    """Resolve ``value`` against ``base_dir`` unless it is already absolute."""
    path = Path(str(value)).expanduser()
    if path.is_absolute():
        return path
    return base_dir / path


def _as_bool(value: object, *, field: str) -> bool:
    """Interpret a YAML scalar as a boolean, rejecting anything ambiguous."""
    match value:
        case bool():
            return value
        case str() as text if text.strip().lower() in {"true", "yes", "on", "1"}:
            return True
        case str() as text if text.strip().lower() in {"false", "no", "off", "0"}:
            return False
        case None:
            return False
        case _:
            msg = f"'{field}' must be a boolean, got {value!r}"
            raise SiteConfigError(msg)


def _stylesheet_paths(base_dir: Path, *entries: object) -> list[Path]:
    """Resolve the non-empty stylesheet entries (tokens, theme) in order."""
    return [
        _resolve_path(base_dir, entry) for entry in entries if _optional_str(entry)
    ]


__all__ = [
    "DEFAULT_LAYOUT_PATH",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_SCHEMA_OUTPUT",
    "DEFAULT_THEME_PATH",
    "DEFAULT_TOKENS_PATH",
    "_as_bool",
    "_optional_str",
    "_resolve_path",
    "_stylesheet_paths",
]
