"""Capability interfaces injected into the validator and the page builder.

A *component schema provider* maps a component type name to the JSON Schema
of its ``props``; a *component renderer provider* maps the same names to
callables producing markup. Both are plain mappings so callers can pass a
``dict`` or any read-only mapping view.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ


def _identity(path: str) -> str:
    return path


@dc.dataclass(slots=True)
class RenderContext:
    """Per-call context handed to component renderers.

    Attributes
    ----------
    resolve_asset : Callable[[str], str]
        Maps an asset reference from ``props`` to a URL; identity by default.
    scope : dict[str, Any]
        Mutable scratch space renderers may use to share state within one
        page render. Starts empty.
    """

    resolve_asset: cabc.Callable[[str], str] = _identity
    scope: dict[str, typ.Any] = dc.field(default_factory=dict)


class ComponentRenderer(typ.Protocol):
    """Callable turning one component instance into markup."""

    def __call__(
        self, instance: cabc.Mapping[str, typ.Any], context: RenderContext, /
    ) -> str:
        """Render ``instance`` (``{"type", "props"}``) using ``context``."""
        ...


ComponentSchemaProvider: typ.TypeAlias = cabc.Mapping[str, cabc.Mapping[str, typ.Any]]
ComponentRendererProvider: typ.TypeAlias = cabc.Mapping[str, ComponentRenderer]


__all__ = [
    "ComponentRenderer",
    "ComponentRendererProvider",
    "ComponentSchemaProvider",
    "RenderContext",
]
