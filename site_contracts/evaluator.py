"""Identifier-keyed JSON Schema evaluator used by the site validator.

:class:`SchemaEvaluator` wraps ``jsonschema`` and a ``referencing`` registry so
schemas can be registered once by ``$id`` and later checked by identifier,
with cross-schema ``$ref`` resolution between registered schemas. Schemas are
validated against their metaschema on registration (strict mode) and every
violation of a check is reported, not just the first.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from .errors import SchemaIssue, SiteValidationError, ValidationErrorKind

if typ.TYPE_CHECKING:
    from jsonschema.exceptions import ValidationError
    from jsonschema.protocols import Validator


def _json_pointer(error: ValidationError) -> str:
    """Return the JSON Pointer of the instance location that failed."""
    parts = [
        str(part).replace("~", "~0").replace("/", "~1")
        for part in error.absolute_path
    ]
    return "".join(f"/{part}" for part in parts)


def issues_from_errors(errors: cabc.Iterable[ValidationError]) -> list[SchemaIssue]:
    """Convert ``jsonschema`` errors into :class:`SchemaIssue` records."""
    return [
        SchemaIssue(
            path=_json_pointer(error),
            message=error.message,
            keyword=str(error.validator) if error.validator else None,
        )
        for error in errors
    ]


class SchemaEvaluator:
    """Registry of JSON Schemas addressable by their ``$id``."""

    def __init__(
        self, *, default_validator: type[Validator] = Draft202012Validator
    ) -> None:
        """Create an empty evaluator.

        Parameters
        ----------
        default_validator : type[Validator], optional
            Validator class used for schemas without a ``$schema`` keyword.
        """
        self._default_validator = default_validator
        self._registry: Registry = Registry()
        self._schemas: dict[str, cabc.Mapping[str, typ.Any]] = {}
        self._validators: dict[str, Validator] = {}

    def __contains__(self, schema_id: object) -> bool:
        """Return ``True`` when ``schema_id`` has been registered."""
        return schema_id in self._schemas

    def get_schema(self, schema_id: str) -> cabc.Mapping[str, typ.Any] | None:
        """Return the registered schema for ``schema_id``, if any."""
        return self._schemas.get(schema_id)

    def add_schema(self, schema: cabc.Mapping[str, typ.Any]) -> bool:
        """Register ``schema`` under its ``$id``.

        Returns
        -------
        bool
            ``True`` when the schema was added, ``False`` if its identifier
            was already known (registration is idempotent).

        Raises
        ------
        SiteValidationError
            ``INVALID_SCHEMA_ID`` when ``$id`` is missing, ``INVALID_SCHEMA``
            when the schema does not satisfy its metaschema.
        """
        schema_id = schema.get("$id")
        if not isinstance(schema_id, str) or not schema_id:
            msg = "Cannot register a schema without a string '$id'"
            raise SiteValidationError(ValidationErrorKind.INVALID_SCHEMA_ID, msg)
        if schema_id in self._schemas:
            return False
        validator_class = self._validator_class(schema)
        try:
            validator_class.check_schema(schema)
        except SchemaError as exc:
            msg = f"Schema '{schema_id}' is not a valid JSON Schema: {exc.message}"
            raise SiteValidationError(
                ValidationErrorKind.INVALID_SCHEMA,
                msg,
                where=schema_id,
                errors=issues_from_errors([exc]),
            ) from exc
        resource = Resource.from_contents(schema, default_specification=DRAFT202012)
        self._registry = self._registry.with_resource(schema_id, resource)
        self._schemas[schema_id] = schema
        self._validators.clear()
        return True

    def iter_issues(self, schema_id: str, instance: typ.Any) -> list[SchemaIssue]:
        """Return every violation of ``instance`` against ``schema_id``."""
        self._require(schema_id, where=schema_id)
        validator = self._validator_for(schema_id)
        return issues_from_errors(validator.iter_errors(instance))

    def validate(self, schema_id: str, instance: typ.Any, *, where: str) -> None:
        """Check ``instance`` against the schema registered as ``schema_id``.

        Raises
        ------
        SiteValidationError
            ``UNKNOWN_SCHEMA`` if ``schema_id`` was never registered,
            ``SCHEMA_VIOLATION`` with every issue attached otherwise.
        """
        self._require(schema_id, where=where)
        issues = self.iter_issues(schema_id, instance)
        if not issues:
            return
        summary = "; ".join(str(issue) for issue in issues)
        msg = f"Schema validation failed for {schema_id} at {where}: {summary}"
        raise SiteValidationError(
            ValidationErrorKind.SCHEMA_VIOLATION,
            msg,
            where=where,
            details={"schema_id": schema_id},
            errors=issues,
        )

    def _require(self, schema_id: str, *, where: str) -> None:
        if schema_id not in self._schemas:
            msg = f"Unknown JSON schema '{schema_id}'"
            raise SiteValidationError(
                ValidationErrorKind.UNKNOWN_SCHEMA, msg, where=where
            )

    def _validator_class(
        self, schema: cabc.Mapping[str, typ.Any]
    ) -> type[Validator]:
        return validator_for(schema, default=self._default_validator)

    def _validator_for(self, schema_id: str) -> Validator:
        validator = self._validators.get(schema_id)
        if validator is None:
            schema = self._schemas[schema_id]
            validator_class = self._validator_class(schema)
            validator = validator_class(
                schema,
                registry=self._registry,
                format_checker=validator_class.FORMAT_CHECKER,
            )
            self._validators[schema_id] = validator
        return validator


__all__ = ["SchemaEvaluator", "issues_from_errors"]
