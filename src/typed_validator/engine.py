"""Validation of mapping objects against a compiled schema.

These functions are pure with respect to the schema and the object; they
return ``FieldError`` values and leave recording them to the caller. The one
exception is ``clean_object``, which removes undeclared keys in place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from .exceptions import UsageError
from .result import FieldError
from .scalars import (
    CIRCULAR_MESSAGE,
    INVALID_OBJECT_MESSAGE,
    OBJECT_TYPE_MESSAGE,
    REQUIRED_MESSAGE,
)
from .schema import ObjectType, ResolvedField, Schema

logger = logging.getLogger(__name__)

MISSING = object()


def _message(
    messages: Mapping[str, str], path: str, template: str, **values: Any
) -> str:
    custom = messages.get(path)
    if custom is not None:
        return custom
    return template.format(name=path, **values)


def check_value(
    schema: Schema,
    field: ResolvedField,
    value: Any,
    path: str,
    messages: Mapping[str, str],
    active: set[int] | None = None,
) -> FieldError | None:
    """Check one value against its field definition.

    Args:
        schema: Schema the field belongs to
        field: Resolved field definition
        value: Value found on the object, or ``MISSING``
        path: Dotted field path used in error names and message lookup
        messages: Custom message overrides keyed by path
        active: Ids of mappings on the current path, for cycle detection

    Returns:
        FieldError if the value is invalid, None otherwise
    """
    if value is MISSING or value is None:
        return FieldError(
            path, _message(messages, path, REQUIRED_MESSAGE), field.type_ref
        )

    if field.scalar is not None:
        if field.scalar.test(value):
            return None
        custom = messages.get(path)
        return FieldError(
            path,
            custom if custom is not None else field.scalar.default_message(path),
            field.type_ref,
        )

    nested = schema.get_type(field.type_ref)
    if not isinstance(value, Mapping):
        return FieldError(
            path,
            _message(messages, path, OBJECT_TYPE_MESSAGE, type=nested.name),
            field.type_ref,
        )

    if active is None:
        active = set()
    if id(value) in active:
        return FieldError(
            path, _message(messages, path, CIRCULAR_MESSAGE), field.type_ref
        )

    active.add(id(value))
    try:
        details = validate_fields(schema, nested, value, messages, prefix=path, active=active)
    finally:
        active.discard(id(value))

    if details:
        return FieldError(
            path,
            _message(messages, path, INVALID_OBJECT_MESSAGE, type=nested.name),
            field.type_ref,
            tuple(details),
        )
    return None


def validate_fields(
    schema: Schema,
    object_type: ObjectType,
    obj: Mapping[str, Any],
    messages: Mapping[str, str],
    prefix: str | None = None,
    active: set[int] | None = None,
) -> list[FieldError]:
    """Check every declared field of ``object_type`` on ``obj``.

    Returns:
        Errors in field declaration order
    """
    errors = []
    for field in object_type.fields:
        path = f"{prefix}.{field.name}" if prefix else field.name
        error = check_value(
            schema, field, obj.get(field.name, MISSING), path, messages, active
        )
        if error is not None:
            errors.append(error)
    return errors


def validate_field(
    schema: Schema,
    root: ObjectType,
    obj: Mapping[str, Any],
    key: str,
    messages: Mapping[str, str],
) -> FieldError | None:
    """Check a single declared field of the root type.

    Raises:
        UsageError: If ``key`` is not declared on the root type
    """
    field = root.get_field(key)
    if field is None:
        raise UsageError(
            f"Field '{key}' is not declared on '{root.name}'",
            context={"field_name": key, "type_name": root.name, "fields": list(root.field_names)},
        )

    error = check_value(schema, field, obj.get(key, MISSING), key, messages, {id(obj)})
    if error is not None:
        logger.debug(f"Field '{key}' of '{root.name}' failed: {error.message}")
    return error


def clean_object(obj: MutableMapping[str, Any], object_type: ObjectType) -> MutableMapping[str, Any]:
    """Remove every key of ``obj`` that ``object_type`` does not declare.

    The object is modified in place and returned. Declared fields are kept
    whether or not their values are valid; declared fields that are absent
    stay absent.

    Raises:
        UsageError: If ``obj`` is not a mutable mapping
    """
    if not isinstance(obj, MutableMapping):
        raise UsageError(
            f"clean() requires a mutable mapping, got {type(obj).__name__}",
            context={"object_type": type(obj).__name__},
        )

    extra = [key for key in obj if not object_type.has_field(key)]
    for key in extra:
        del obj[key]
    if extra:
        logger.debug(f"Removed undeclared keys {extra} for '{object_type.name}'")
    return obj
