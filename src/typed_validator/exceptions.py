"""Exception hierarchy for typed_validator.

Schema construction and API misuse raise immediately. Field-level validation
failures are never raised; they are recorded on the validation context and
read back through ``invalid_keys()`` / ``key_error_message()``.

Example:
    ```python
    from typed_validator import TypedValidator, SchemaError

    try:
        validator = TypedValidator("input T { title: Strng }")
    except SchemaError as e:
        logger.error(f"Bad schema: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class TypedValidatorError(Exception):
    """Base exception for all typed_validator errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (type names, fields, etc.)
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class SchemaError(TypedValidatorError):
    """Raised when schema source cannot be compiled."""

    pass


class SchemaSyntaxError(SchemaError):
    """Raised for malformed schema text.

    Covers malformed block headers, unterminated blocks, bad field lines,
    duplicate field names within a block and duplicate type names.

    Example:
        ```python
        raise SchemaSyntaxError(
            "Duplicate field 'title' in type 'Post'",
            line=3,
            column=5,
        )
        ```
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        context: Dict[str, Any] | None = None,
    ):
        self.line = line
        self.column = column
        ctx = dict(context or {})
        if line is not None:
            ctx.setdefault("line", line)
        if column is not None:
            ctx.setdefault("column", column)
        super().__init__(message, context=ctx)


class SchemaResolutionError(SchemaError):
    """Raised when a type reference cannot be resolved.

    Example:
        ```python
        raise SchemaResolutionError(
            "Unknown type 'Strng' for field 'title' in 'Post'",
            type_ref="Strng",
            field_name="title",
            type_name="Post",
        )
        ```
    """

    def __init__(
        self,
        message: str,
        type_ref: str | None = None,
        field_name: str | None = None,
        type_name: str | None = None,
    ):
        self.type_ref = type_ref
        self.field_name = field_name
        self.type_name = type_name
        context = {
            key: value
            for key, value in (
                ("type_ref", type_ref),
                ("field_name", field_name),
                ("type_name", type_name),
            )
            if value is not None
        }
        super().__init__(message, context=context)


class UsageError(TypedValidatorError):
    """Raised when the validation API is called incorrectly.

    For example when ``validate_one`` is called without the object to
    validate, or with a key the root type does not declare.
    """

    pass


class ConfigurationError(TypedValidatorError):
    """Raised when validator options are invalid or cannot be loaded."""

    pass


class NotFoundError(TypedValidatorError):
    """Raised when a registry lookup fails."""

    pass


class OperationError(TypedValidatorError):
    """Raised when a registry operation is not allowed."""

    pass


__all__ = [
    "TypedValidatorError",
    "SchemaError",
    "SchemaSyntaxError",
    "SchemaResolutionError",
    "UsageError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
