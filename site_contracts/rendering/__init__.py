"""Component renderers and the static page builder."""

from .components import BuiltinComponents, default_renderers
from .content import HtmlContentRenderer
from .page_builder import RenderedComponent, RenderedRegion, SitePageBuilder, css_safe

__all__ = [
    "BuiltinComponents",
    "HtmlContentRenderer",
    "RenderedComponent",
    "RenderedRegion",
    "SitePageBuilder",
    "css_safe",
    "default_renderers",
]
