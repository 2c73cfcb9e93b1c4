"""Typed dataclasses describing site build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PageConfig:
    """A fully resolved page definition sourced from YAML config.

    Attributes
    ----------
    key : str
        Page identifier used on the command line.
    source : Path
        Page document (JSON or YAML).
    layout : Path
        Layout document the page is validated and rendered against.
    contracts_root : Path
        Directory searched for ``contracts/`` and root-level schema files.
    output_dir : Path
        Destination of ``index.html`` and ``styles.css``.
    stylesheets : list[Path]
        CSS sources (tokens, theme) concatenated into ``styles.css``.
    title : str or None
        Title override; the page document's ``title`` is used otherwise.
    render_smoke : bool
        Invoke renderers during validation.
    """

    key: str
    source: Path
    layout: Path
    contracts_root: Path
    output_dir: Path
    stylesheets: list[Path] = dc.field(default_factory=list)
    title: str | None = None
    render_smoke: bool = False


@dc.dataclass(slots=True)
class SiteConfig:
    """Collection of page configs alongside shared defaults."""

    pages: dict[str, PageConfig]
    default_page: str | None = None
    contracts_root: Path = Path()
    layout: Path = Path("site/layout.json")
    schema_output: Path = Path("public/page.schema.json")

    def get_page(self, page_id: str | None) -> PageConfig:
        """Return the requested page or fall back to the configured default."""
        if page_id is None:
            return self._get_default_page()
        try:
            return self.pages[page_id]
        except KeyError as exc:
            available = ", ".join(sorted(self.pages))
            msg = f"Unknown page '{page_id}'. Known pages: {available}"
            raise SiteConfigError(msg) from exc

    def _get_default_page(self) -> PageConfig:
        """Return the configured default page or the first defined page."""
        if self.default_page and self.default_page in self.pages:
            return self.pages[self.default_page]
        if not self.pages:  # pragma: no cover - loader rejects empty configs
            msg = "No pages configured in site configuration."
            raise SiteConfigError(msg)
        first_key = next(iter(self.pages))
        return self.pages[first_key]


__all__ = ["PageConfig", "SiteConfig", "SiteConfigError"]
