"""Renderers for the component types bundled with site_contracts.

Each renderer takes a component instance (``{"type", "props"}``) and a
:class:`~site_contracts.providers.RenderContext` and returns an HTML
fragment. The matching ``props`` schemas live in
``site_contracts/component_schemas``.

Examples
--------
>>> from site_contracts.providers import RenderContext
>>> from site_contracts.rendering.components import default_renderers
>>> render = default_renderers()["Text@v1"]
>>> render({"type": "Text@v1", "props": {"text": "a < b"}}, RenderContext())
'<p>a &lt; b</p>'
"""

from __future__ import annotations

import typing as typ
from html import escape

from .content import HtmlContentRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from site_contracts.providers import ComponentRenderer, RenderContext

Instance = typ.Mapping[str, typ.Any]


def _attr(value: object) -> str:
    return escape(str(value), quote=True)


class BuiltinComponents:
    """Bundled renderers sharing one :class:`HtmlContentRenderer`."""

    def __init__(self, content: HtmlContentRenderer | None = None) -> None:
        self.content = content or HtmlContentRenderer()

    def text(self, instance: Instance, context: RenderContext) -> str:
        """Render ``Text@v1`` as a paragraph."""
        return f"<p>{escape(instance['props']['text'])}</p>"

    def heading(self, instance: Instance, context: RenderContext) -> str:
        """Render ``Heading@v1`` as ``<h1>``..``<h6>`` (level 2 by default)."""
        props = instance["props"]
        level = int(props.get("level", 2))
        if not 1 <= level <= 6:  # noqa: PLR2004
            msg = f"Heading level must be between 1 and 6, got {level}"
            raise ValueError(msg)
        anchor = props.get("anchor")
        id_attr = f' id="{_attr(anchor)}"' if anchor else ""
        return f"<h{level}{id_attr}>{escape(props['text'])}</h{level}>"

    def rich_text(self, instance: Instance, context: RenderContext) -> str:
        """Render ``RichText@v1`` markdown."""
        return self.content.markdown(instance["props"]["markdown"])

    def code_block(self, instance: Instance, context: RenderContext) -> str:
        """Render ``CodeBlock@v1`` with syntax highlighting."""
        props = instance["props"]
        return self.content.code_block(props["code"], props.get("language"))

    def image(self, instance: Instance, context: RenderContext) -> str:
        """Render ``Image@v1``; ``src`` goes through ``context.resolve_asset``."""
        props = instance["props"]
        attrs = [
            f'src="{_attr(context.resolve_asset(props["src"]))}"',
            f'alt="{_attr(props.get("alt", ""))}"',
        ]
        attrs.extend(
            f'{name}="{_attr(props[name])}"'
            for name in ("width", "height")
            if name in props
        )
        attrs.append('loading="lazy"')
        return f"<img {' '.join(attrs)}>"

    def registry(self) -> dict[str, ComponentRenderer]:
        """Return the renderers keyed by component type."""
        return {
            "Text@v1": self.text,
            "Heading@v1": self.heading,
            "RichText@v1": self.rich_text,
            "CodeBlock@v1": self.code_block,
            "Image@v1": self.image,
        }


def default_renderers(
    overrides: cabc.Mapping[str, ComponentRenderer] | None = None,
) -> dict[str, ComponentRenderer]:
    """Return the bundled renderers, optionally extended by ``overrides``."""
    renderers = BuiltinComponents().registry()
    if overrides:
        renderers.update(overrides)
    return renderers


__all__ = ["BuiltinComponents", "default_renderers"]
