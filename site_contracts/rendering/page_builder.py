"""Render a validated page document into a static HTML bundle.

:class:`SitePageBuilder` walks the layout's regions and declared slots in
order, renders every component instance with the supplied renderer registry,
and writes ``index.html`` plus ``styles.css`` (design tokens, theme, and the
code-highlighting stylesheet) into the output directory.

Typical usage pairs the builder with the contract loader:

>>> from pathlib import Path
>>> from site_contracts.contracts import load_document
>>> from site_contracts.rendering import SitePageBuilder
>>> builder = SitePageBuilder(
...     load_document(Path("site/page.json")),
...     load_document(Path("site/layout.json")),
...     output_dir=Path("public"),
... )  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('public/index.html'), PosixPath('public/styles.css')]

Templates are read from ``site_contracts/templates`` unless another
directory is provided. Jinja2 autoescaping is enabled; component HTML is
inserted as trusted markup because renderers escape their own props.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from site_contracts._constants import INSTANCE_WRAP_KEY, REGION_META_KEY
from site_contracts.providers import RenderContext

from .components import default_renderers
from .content import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from site_contracts.providers import ComponentRendererProvider

LANDMARK_REGIONS = frozenset({"header", "main", "footer"})
STYLESHEET_NAME = "styles.css"
INDEX_NAME = "index.html"
DEFAULT_TITLE = "Site"
_CSS_UNSAFE = re.compile(r"[^a-zA-Z0-9_-]")


def css_safe(value: str) -> str:
    """Return ``value`` with characters unsafe in a CSS class replaced by ``_``.

    >>> css_safe("Text@v1")
    'Text_v1'
    """
    return _CSS_UNSAFE.sub("_", str(value))


@dc.dataclass(slots=True)
class RenderedComponent:
    """One rendered component ready for the page template."""

    slot: str
    component_type: str
    classes: str = ""
    html: Markup = dc.field(default_factory=Markup)
    missing: bool = False


@dc.dataclass(slots=True)
class RenderedRegion:
    """A layout region and the components rendered into it."""

    name: str
    tag: str
    classes: str
    components: list[RenderedComponent]


class SitePageBuilder:
    """Render a page document against its layout using component renderers."""

    def __init__(
        self,
        page: cabc.Mapping[str, typ.Any],
        layout: cabc.Mapping[str, typ.Any],
        *,
        renderers: ComponentRendererProvider | None = None,
        output_dir: Path = Path("public"),
        stylesheets: cabc.Sequence[Path] = (),
        title: str | None = None,
        resolve_asset: cabc.Callable[[str], str] | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        page : Mapping[str, Any]
            Page document, normally already accepted by the site validator.
        layout : Mapping[str, Any]
            Layout document declaring region and slot order.
        renderers : Mapping[str, ComponentRenderer], optional
            Renderer registry; defaults to the bundled renderers.
        output_dir : Path, optional
            Directory receiving ``index.html`` and ``styles.css``.
        stylesheets : Sequence[Path], optional
            CSS files (tokens, theme) concatenated into ``styles.css``;
            missing files are skipped.
        title : str, optional
            Document title; falls back to the page ``title`` then ``"Site"``.
        resolve_asset : Callable[[str], str], optional
            Asset URL resolver passed to renderers through the context.
        templates_dir : Path, optional
            Directory containing ``site_page.jinja``.
        """
        self.page = page
        self.layout = layout
        self.renderers = renderers if renderers is not None else default_renderers()
        self.output_dir = output_dir
        self.stylesheets = list(stylesheets)
        self.title = title or page.get("title") or DEFAULT_TITLE
        self.resolve_asset = resolve_asset
        self.templates_dir = (
            templates_dir or Path(__file__).resolve().parents[1] / "templates"
        )
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("site_page.jinja")

    def render(self) -> str:
        """Return the full HTML document for the page."""
        context = (
            RenderContext(resolve_asset=self.resolve_asset)
            if self.resolve_asset
            else RenderContext()
        )
        html = self.template.render(
            lang=self.page.get("lang", "en"),
            title=self.title,
            stylesheet=STYLESHEET_NAME,
            regions=self._render_regions(context),
        )
        if not html.endswith("\n"):
            html += "\n"
        return html

    def stylesheet(self) -> str:
        """Return the concatenated CSS written to ``styles.css``."""
        parts = [
            path.read_text(encoding="utf-8")
            for path in self.stylesheets
            if path.is_file()
        ]
        parts.append(HtmlContentRenderer().stylesheet)
        return "\n".join(parts) + "\n"

    def run(self) -> list[Path]:
        """Write ``index.html`` and ``styles.css`` and return their paths.

        Parent directories are created as needed; filesystem errors propagate.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        index_path = self.output_dir / INDEX_NAME
        styles_path = self.output_dir / STYLESHEET_NAME
        index_path.write_text(self.render(), encoding="utf-8")
        styles_path.write_text(self.stylesheet(), encoding="utf-8")
        return [index_path, styles_path]

    def _render_regions(self, context: RenderContext) -> list[RenderedRegion]:
        layout_regions = self.layout.get("regions") or {}
        page_regions = self.page.get("regions") or {}
        rendered: list[RenderedRegion] = []
        for name, region in layout_regions.items():
            slots = (
                region.get("slots") or [] if isinstance(region, cabc.Mapping) else []
            )
            defs = page_regions.get(name)
            if not isinstance(defs, cabc.Mapping):
                defs = {}
            components: list[RenderedComponent] = []
            for slot in slots:
                components.extend(self._render_slot(slot, defs.get(slot), context))
            rendered.append(
                RenderedRegion(
                    name=name,
                    tag=name if name in LANDMARK_REGIONS else "section",
                    classes=str(defs.get(REGION_META_KEY) or ""),
                    components=components,
                )
            )
        return rendered

    def _render_slot(
        self, slot: str, value: typ.Any, context: RenderContext
    ) -> list[RenderedComponent]:
        if value is None:
            return []
        instances = value if isinstance(value, list) else [value]
        return [self._render_component(slot, item, context) for item in instances]

    def _render_component(
        self, slot: str, instance: typ.Any, context: RenderContext
    ) -> RenderedComponent:
        if not isinstance(instance, cabc.Mapping):
            instance = {}
        component_type = str(instance.get("type") or "")
        render = self.renderers.get(component_type)
        if render is None:
            return RenderedComponent(slot, component_type, missing=True)
        props = instance.get("props") or {}
        html = render({"type": component_type, "props": props}, context)
        classes = ["component", css_safe(component_type)]
        wrap = instance.get(INSTANCE_WRAP_KEY)
        if wrap:
            classes.append(str(wrap))
        return RenderedComponent(
            slot=slot,
            component_type=component_type,
            classes=" ".join(classes),
            html=Markup(html),  # noqa: S704 - renderers escape their own props
        )


__all__ = [
    "RenderedComponent",
    "RenderedRegion",
    "SitePageBuilder",
    "css_safe",
]
