"""Error model shared by the site validator and the page-schema builder.

Every contract violation raised by the core is a :class:`SiteValidationError`
tagged with a :class:`ValidationErrorKind`, so callers can branch on
``error.kind`` instead of matching message text. Structural violations
reported by the JSON Schema evaluator are attached as :class:`SchemaIssue`
entries, and renderer failures keep the original exception as ``__cause__``.

Examples
--------
>>> from site_contracts.errors import (
...     SchemaIssue,
...     SiteValidationError,
...     ValidationErrorKind,
...     describe_validation_error,
... )
>>> err = SiteValidationError(
...     ValidationErrorKind.SCHEMA_VIOLATION,
...     "Schema validation failed",
...     errors=[SchemaIssue("/text", "123 is not of type 'string'")],
... )
>>> describe_validation_error(err)
"/text 123 is not of type 'string'"
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from types import MappingProxyType

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_FAILURE_MESSAGE = "Validation failed"


class ValidationErrorKind(enum.Enum):
    """Tag identifying which check rejected a document."""

    INVALID_SCHEMA_ID = "InvalidSchemaId"
    INVALID_SCHEMA = "InvalidSchema"
    UNKNOWN_SCHEMA = "UnknownSchema"
    SCHEMA_VIOLATION = "SchemaViolation"
    UNDECLARED_REGION = "UndeclaredRegion"
    UNDECLARED_SLOT = "UndeclaredSlot"
    MALFORMED_INSTANCE = "MalformedInstance"
    MISSING_TYPE = "MissingType"
    MISSING_PROPS = "MissingProps"
    NO_RENDERER = "NoRenderer"
    UNKNOWN_COMPONENT_TYPE = "UnknownComponentType"
    RENDERER_FAILURE = "RendererFailure"


@dc.dataclass(frozen=True, slots=True)
class SchemaIssue:
    """A single structural violation reported by the schema evaluator.

    Attributes
    ----------
    path : str
        JSON Pointer to the offending value (``""`` for the document root).
    message : str
        Evaluator message describing the violation.
    keyword : str or None
        Schema keyword that failed (``"type"``, ``"required"``...), if known.
    """

    path: str
    message: str
    keyword: str | None = None

    def __str__(self) -> str:
        """Return ``"<path> <message>"`` with ``/`` standing in for the root."""
        return f"{self.path or '/'} {self.message}"


class SiteValidationError(ValueError):
    """Raised when a page, layout, or component schema breaks its contract."""

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        *,
        where: str | None = None,
        details: cabc.Mapping[str, typ.Any] | None = None,
        errors: cabc.Iterable[SchemaIssue] = (),
    ) -> None:
        """Store the error kind, location tag, and structural sub-errors.

        Parameters
        ----------
        kind : ValidationErrorKind
            Which check failed.
        message : str
            Human-readable summary.
        where : str, optional
            Logical location of the failure, e.g. ``"main.hero[0].props"``.
        details : Mapping[str, Any], optional
            Extra diagnostic context (declared slots, component type...).
        errors : Iterable[SchemaIssue], optional
            Structural violations collected by the schema evaluator.
        """
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.where = where
        self.details: cabc.Mapping[str, typ.Any] = MappingProxyType(
            dict(details or {})
        )
        self.errors: tuple[SchemaIssue, ...] = tuple(errors)

    @property
    def cause(self) -> BaseException | None:
        """Return the wrapped exception for renderer failures, if any."""
        return self.__cause__

    def __repr__(self) -> str:
        """Return a debug representation including the error kind."""
        return f"SiteValidationError({self.kind.value}, {self.message!r})"


def describe_validation_error(error: BaseException | None) -> str:
    """Summarize ``error`` as a single human-readable line.

    The first structural issue wins; otherwise the ``where`` tag is prefixed
    to the message; otherwise the bare message is returned. This helper never
    raises, so it is safe to call from top-level reporting paths.

    Parameters
    ----------
    error : BaseException or None
        The failure to describe. Any exception type is accepted.

    Returns
    -------
    str
        One-line description, ``"Validation failed"`` when nothing better is
        available.
    """
    if error is None:
        return DEFAULT_FAILURE_MESSAGE
    try:
        issues = getattr(error, "errors", None)
        if isinstance(issues, tuple | list) and issues:
            first = issues[0]
            if isinstance(first, SchemaIssue):
                return str(first)
            path = getattr(first, "path", "") or "/"
            return f"{path} {getattr(first, 'message', first)}"
        message = getattr(error, "message", None) or str(error)
        where = getattr(error, "where", None)
        if where and message:
            return f"{where}: {message}"
        return message or DEFAULT_FAILURE_MESSAGE
    except Exception:  # noqa: BLE001 - reporting helper must not raise
        return DEFAULT_FAILURE_MESSAGE


__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "SchemaIssue",
    "SiteValidationError",
    "ValidationErrorKind",
    "describe_validation_error",
]
