"""Validation contexts: independent validation sessions over one schema.

A ``TypedValidator`` compiles its schema once and acts as the default
context. ``new_context()`` hands out further contexts that share the compiled
schema but keep their own errors and custom messages.

Example:
    ```python
    from typed_validator import TypedValidator

    validator = TypedValidator(
        '''
        type User { id: String, name: String }
        input CreatePost { title: String, author: User }
        ''',
        custom_messages={"title": "You must enter a title"},
    )

    validator.validate({"title": 1, "author": {"id": "u1"}})
    # False
    [(e.name, e.message) for e in validator.invalid_keys()]
    # [('title', 'You must enter a title'), ('author', 'author is not a valid User')]

    post = {"title": "Hello", "draft": True}
    validator.clean(post)
    # {'title': 'Hello'}
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableMapping
from types import MappingProxyType
from typing import Any

from .config import ValidatorConfig
from .engine import clean_object, validate_field
from .exceptions import SchemaResolutionError, UsageError
from .result import FieldError, ValidationState
from .schema import ObjectType, Schema, compile_schema

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def _require_object(obj: Any, operation: str) -> Mapping[str, Any]:
    if obj is _UNSET or obj is None:
        raise UsageError(
            f"{operation}() requires the object to validate",
            context={"operation": operation},
        )
    if not isinstance(obj, Mapping):
        raise UsageError(
            f"{operation}() requires a mapping, got {type(obj).__name__}",
            context={"operation": operation, "object_type": type(obj).__name__},
        )
    return obj


class ValidationContext:
    """A validation session bound to one root type of a compiled schema.

    Each context owns its error state and custom messages; contexts created
    from the same schema never observe each other's state. A context is not
    synchronized; callers sharing one across threads must serialize access.

    Args:
        schema: Compiled schema, shared by reference
        root_type: Name of the declared type objects are validated against
        custom_messages: Message overrides keyed by field name
    """

    def __init__(
        self,
        schema: Schema,
        root_type: str,
        custom_messages: Mapping[str, str] | None = None,
    ):
        self._schema = schema
        self._root: ObjectType = schema.get_type(root_type)
        self._custom_messages: Mapping[str, str] = MappingProxyType(
            dict(custom_messages or {})
        )
        self._state = ValidationState()

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def root_type(self) -> ObjectType:
        return self._root

    @property
    def custom_messages(self) -> Mapping[str, str]:
        return self._custom_messages

    def validate_one(self, obj: Mapping[str, Any] = _UNSET, key: str = _UNSET) -> bool:
        """Validate a single root field of ``obj``.

        A prior error for the field is replaced by the new outcome; other
        fields' errors are left untouched.

        Args:
            obj: Object to validate
            key: Field declared on the root type

        Returns:
            True if the field is valid

        Raises:
            UsageError: If ``obj`` is not passed or is not a mapping, or
                ``key`` is not passed or not declared on the root type
        """
        obj = _require_object(obj, "validate_one")
        if key is _UNSET:
            raise UsageError(
                "validate_one() requires the key to validate",
                context={"type_name": self._root.name},
            )

        error = validate_field(self._schema, self._root, obj, key, self._custom_messages)
        self._state.record(key, error)
        return error is None

    def validate(self, obj: Mapping[str, Any] = _UNSET) -> bool:
        """Validate every root field of ``obj`` in declaration order.

        Previously recorded errors are discarded first, so the result reflects
        only this object.

        Returns:
            True if no field failed

        Raises:
            UsageError: If ``obj`` is not passed or is not a mapping
        """
        obj = _require_object(obj, "validate")
        self._state.reset()
        for key in self._root.field_names:
            error = validate_field(self._schema, self._root, obj, key, self._custom_messages)
            self._state.record(key, error)

        if not self._state.valid:
            logger.debug(
                f"Object failed '{self._root.name}' validation on "
                f"{[e.name for e in self.invalid_keys()]}"
            )
        return self._state.valid

    def invalid_keys(self) -> list[FieldError]:
        """Failed fields from the latest validation, in declaration order."""
        return self._state.ordered(self._root.field_names)

    def key_error_message(self, key: str) -> str | None:
        """Message recorded for ``key``, or None if it has no error."""
        error = self._state.get(key)
        return error.message if error is not None else None

    def key_is_invalid(self, key: str) -> bool:
        return self._state.has_error(key)

    def is_valid(self) -> bool:
        """Whether the current state holds no errors."""
        return self._state.valid

    def reset_validation(self) -> None:
        """Discard all recorded errors."""
        self._state.reset()

    def add_invalid_keys(self, errors: Iterable[FieldError | Mapping[str, str]]) -> None:
        """Record errors produced outside the schema, e.g. by a server check.

        Each entry is a FieldError or a mapping with ``name`` and ``message``
        keys; an entry replaces any error already recorded for that field.

        Raises:
            UsageError: If an entry is malformed or names an undeclared field
        """
        for entry in errors:
            if isinstance(entry, FieldError):
                error = entry
            elif isinstance(entry, Mapping) and "name" in entry and "message" in entry:
                field = self._root.get_field(entry["name"])
                error = FieldError(
                    entry["name"],
                    entry["message"],
                    field.type_ref if field is not None else None,
                )
            else:
                raise UsageError(
                    f"Invalid error entry: {entry!r}",
                    context={"expected": "FieldError or mapping with name and message"},
                )

            if not self._root.has_field(error.name):
                raise UsageError(
                    f"Field '{error.name}' is not declared on '{self._root.name}'",
                    context={"field_name": error.name, "type_name": self._root.name},
                )
            self._state.record(error.name, error)

    def clean(self, obj: MutableMapping[str, Any] = _UNSET) -> MutableMapping[str, Any]:
        """Remove keys the root type does not declare, in place.

        Validity of the remaining fields is not considered.

        Returns:
            The same object, for chaining

        Raises:
            UsageError: If ``obj`` is not passed or is not a mutable mapping
        """
        if obj is _UNSET or obj is None:
            raise UsageError("clean() requires the object to clean", context={"operation": "clean"})
        return clean_object(obj, self._root)

    def new_context(self, custom_messages: Mapping[str, str] | None = None) -> ValidationContext:
        """Create an independent context over the same schema and root type.

        The new context starts with no errors and only the custom messages
        passed here.
        """
        return ValidationContext(self._schema, self._root.name, custom_messages)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(root_type={self._root.name!r}, "
            f"invalid_keys={[e.name for e in self.invalid_keys()]})"
        )


class TypedValidator(ValidationContext):
    """Compile schema source and act as its default validation context.

    Args:
        schema_source: Schema text declaring ``type`` and ``input`` blocks
        options: ValidatorConfig, mapping of options, or None
        custom_messages: Message overrides merged over ``options``

    Raises:
        SchemaSyntaxError: If the schema text is malformed
        SchemaResolutionError: If a type reference is unknown, or there is
            no root type to validate against
        ConfigurationError: If options are invalid
    """

    def __init__(
        self,
        schema_source: str,
        options: ValidatorConfig | Mapping[str, Any] | None = None,
        *,
        custom_messages: Mapping[str, str] | None = None,
    ):
        config = ValidatorConfig.coerce(options).with_messages(custom_messages)
        schema = compile_schema(schema_source)

        root_type = config.root_type or schema.primary_input
        if root_type is None:
            raise SchemaResolutionError(
                "Schema declares no input type and no root_type was configured"
            )

        super().__init__(schema, root_type, config.custom_messages)
        self._config = config
        logger.debug(f"TypedValidator ready with root type '{root_type}'")

    @property
    def config(self) -> ValidatorConfig:
        return self._config
