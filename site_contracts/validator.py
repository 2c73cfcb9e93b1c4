"""Site validator factory: layout, region/slot, and component checks.

:func:`create_site_validator` registers a layout schema and every component
schema with a private :class:`~site_contracts.evaluator.SchemaEvaluator` and
returns a :class:`SiteValidator`. Calling the validator checks a page
end-to-end and raises :class:`~site_contracts.errors.SiteValidationError` at
the first placement (in traversal order) that breaks the contract.

Examples
--------
>>> from site_contracts.validator import create_site_validator
>>> validate = create_site_validator(
...     component_schemas={
...         "Text@v1": {
...             "type": "object",
...             "required": ["text"],
...             "properties": {"text": {"type": "string"}},
...         }
...     }
... )
>>> validate(
...     page={"regions": {"main": {"hero": {"type": "Text@v1", "props": {"text": "hi"}}}}},
...     layout={"regions": {"main": {"slots": ["hero"]}}},
...     renderers={"Text@v1": lambda instance, context: instance["props"]["text"]},
... )
True
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ._constants import LAYOUT_SCHEMA_ID
from .errors import SiteValidationError, ValidationErrorKind
from .evaluator import SchemaEvaluator
from .providers import RenderContext
from .schemas import DEFAULT_LAYOUT_SCHEMA, normalize_component_schemas, with_schema_id
from .traversal import ComponentPlacement, PageComponents

if typ.TYPE_CHECKING:
    from .providers import ComponentRendererProvider, ComponentSchemaProvider


class SiteValidator:
    """Reusable page validator bound to one layout schema and component set.

    The registered schemas are fixed after construction and each instance
    owns its evaluator, so a single validator can be shared across calls. The
    evaluator compiles one ``jsonschema`` validator per schema id on first use
    and caches it; that cache is the only state a call may change.
    """

    def __init__(
        self,
        *,
        layout_schema: cabc.Mapping[str, typ.Any] | None = None,
        component_schemas: ComponentSchemaProvider | None = None,
    ) -> None:
        """Register the layout and component schemas.

        Parameters
        ----------
        layout_schema : Mapping[str, Any], optional
            JSON Schema for layout documents. Defaults to
            :data:`~site_contracts.schemas.DEFAULT_LAYOUT_SCHEMA`; a schema
            without ``$id`` is registered as ``Layout@v1``.
        component_schemas : Mapping[str, Mapping[str, Any]], optional
            Component ``props`` schemas keyed by component type.

        Raises
        ------
        SiteValidationError
            ``INVALID_SCHEMA_ID`` or ``INVALID_SCHEMA`` when a schema cannot
            be registered.
        """
        self._evaluator = SchemaEvaluator()

        effective_layout = (
            layout_schema
            if isinstance(layout_schema, cabc.Mapping)
            else DEFAULT_LAYOUT_SCHEMA
        )
        self.layout_schema_id: str = effective_layout.get("$id") or LAYOUT_SCHEMA_ID
        self._evaluator.add_schema(
            with_schema_id(effective_layout, self.layout_schema_id)
        )

        self._components: dict[str, dict[str, typ.Any]] = {}
        for component_type, schema in normalize_component_schemas(
            component_schemas
        ).items():
            self._evaluator.add_schema(schema)
            self._components[component_type] = schema

    @property
    def component_types(self) -> tuple[str, ...]:
        """Return the registered component type names."""
        return tuple(self._components)

    def schema_for(self, component_type: str) -> cabc.Mapping[str, typ.Any] | None:
        """Return the normalized schema registered for ``component_type``."""
        return self._components.get(component_type)

    def __call__(
        self,
        *,
        page: cabc.Mapping[str, typ.Any] | None,
        layout: cabc.Mapping[str, typ.Any] | None,
        renderers: ComponentRendererProvider | None = None,
        render_smoke: bool = False,
    ) -> bool:
        """Validate ``page`` against ``layout``; see :meth:`validate`."""
        return self.validate(
            page=page, layout=layout, renderers=renderers, render_smoke=render_smoke
        )

    def validate(
        self,
        *,
        page: cabc.Mapping[str, typ.Any] | None,
        layout: cabc.Mapping[str, typ.Any] | None,
        renderers: ComponentRendererProvider | None = None,
        render_smoke: bool = False,
    ) -> bool:
        """Check a page document end-to-end.

        Parameters
        ----------
        page : Mapping[str, Any] or None
            Page document with a ``regions`` mapping.
        layout : Mapping[str, Any] or None
            Layout document declaring regions and their slots.
        renderers : Mapping[str, ComponentRenderer], optional
            Renderer registry; every component type used by the page must be
            present.
        render_smoke : bool, optional
            When ``True`` each renderer is invoked once per instance.

        Returns
        -------
        bool
            ``True`` when the page satisfies every check.

        Raises
        ------
        SiteValidationError
            At the first violation in traversal order.
        """
        self._evaluator.validate(self.layout_schema_id, layout, where="layout")
        renderer_map: cabc.Mapping[str, typ.Any] = renderers or {}
        for placement in PageComponents(page):
            self._check_placement(placement, layout or {}, renderer_map, render_smoke)
        return True

    def _check_placement(
        self,
        placement: ComponentPlacement,
        layout: cabc.Mapping[str, typ.Any],
        renderers: cabc.Mapping[str, typ.Any],
        render_smoke: bool,  # noqa: FBT001
    ) -> None:
        at = placement.location
        self._check_declared(placement, layout)

        instance = placement.instance
        if not isinstance(instance, cabc.Mapping):
            msg = f"Component at {at} is not an object"
            raise SiteValidationError(
                ValidationErrorKind.MALFORMED_INSTANCE, msg, where=at
            )
        component_type = instance.get("type")
        props = instance.get("props")
        if not isinstance(component_type, str) or not component_type:
            msg = f"Missing 'type' at {at}"
            raise SiteValidationError(ValidationErrorKind.MISSING_TYPE, msg, where=at)
        if not isinstance(props, cabc.Mapping):
            msg = f"Missing 'props' for {component_type} at {at}"
            raise SiteValidationError(
                ValidationErrorKind.MISSING_PROPS,
                msg,
                where=at,
                details={"type": component_type},
            )

        if component_type not in renderers:
            msg = f"No renderer for component type '{component_type}'"
            raise SiteValidationError(
                ValidationErrorKind.NO_RENDERER,
                msg,
                where=at,
                details={"type": component_type},
            )

        schema = self._components.get(component_type)
        if schema is None:
            msg = f"Schema file not found for '{component_type}'"
            raise SiteValidationError(
                ValidationErrorKind.UNKNOWN_COMPONENT_TYPE,
                msg,
                where=at,
                details={"type": component_type},
            )
        self._evaluator.validate(schema["$id"], props, where=f"{at}.props")

        if render_smoke:
            self._smoke_render(renderers[component_type], component_type, props, at)

    @staticmethod
    def _check_declared(
        placement: ComponentPlacement, layout: cabc.Mapping[str, typ.Any]
    ) -> None:
        regions = layout.get("regions")
        region = (
            regions.get(placement.region)
            if isinstance(regions, cabc.Mapping)
            else None
        )
        if not isinstance(region, cabc.Mapping):
            msg = f"Region '{placement.region}' is not declared in layout"
            raise SiteValidationError(
                ValidationErrorKind.UNDECLARED_REGION,
                msg,
                where=placement.location,
                details={"region": placement.region},
            )
        slots = list(region.get("slots") or [])
        if placement.slot not in slots:
            declared = ", ".join(slots) or "none"
            msg = (
                f"Slot '{placement.region}.{placement.slot}' is not declared in "
                f"layout (declared slots: {declared})"
            )
            raise SiteValidationError(
                ValidationErrorKind.UNDECLARED_SLOT,
                msg,
                where=placement.location,
                details={
                    "region": placement.region,
                    "slot": placement.slot,
                    "declared_slots": slots,
                },
            )

    @staticmethod
    def _smoke_render(
        render: cabc.Callable[..., typ.Any],
        component_type: str,
        props: cabc.Mapping[str, typ.Any],
        at: str,
    ) -> None:
        try:
            render({"type": component_type, "props": props}, RenderContext())
        except Exception as exc:
            msg = f"Renderer threw for {component_type} at {at}: {exc}"
            raise SiteValidationError(
                ValidationErrorKind.RENDERER_FAILURE,
                msg,
                where=at,
                details={"type": component_type},
            ) from exc


def create_site_validator(
    *,
    layout_schema: cabc.Mapping[str, typ.Any] | None = None,
    component_schemas: ComponentSchemaProvider | None = None,
) -> SiteValidator:
    """Build a :class:`SiteValidator` for the given schemas.

    Parameters
    ----------
    layout_schema : Mapping[str, Any], optional
        Layout JSON Schema; the built-in default is used when omitted.
    component_schemas : Mapping[str, Mapping[str, Any]], optional
        Component ``props`` schemas keyed by component type.

    Returns
    -------
    SiteValidator
        Callable validator; reuse it across calls to amortize registration.
    """
    return SiteValidator(
        layout_schema=layout_schema, component_schemas=component_schemas
    )


__all__ = ["SiteValidator", "create_site_validator"]
