"""Schema-driven structural validation of mapping objects.

Declare shapes in a compact GraphQL-like schema, then validate objects
against them, inspect per-field errors, and strip undeclared keys:

- **Schema**: ``type`` and ``input`` blocks of ``field: Type`` lines
- **Scalars**: String, Int, Boolean, EmailType, DateType, PhoneType
- **Contexts**: independent validation sessions over one compiled schema

Example:
    ```python
    from typed_validator import TypedValidator

    validator = TypedValidator('''
        input Signup {
          email: EmailType
          phone: PhoneType
          subscribed: Boolean
        }
    ''')

    validator.validate({"email": "not-an-email", "subscribed": True})
    # False
    validator.key_error_message("email")
    # 'email must be a valid email address'
    validator.key_error_message("phone")
    # 'phone is required'
    ```
"""

from typed_validator.config import ValidatorConfig
from typed_validator.context import TypedValidator, ValidationContext
from typed_validator.declarations import DeclKind, FieldSpec, TypeDecl
from typed_validator.exceptions import (
    ConfigurationError,
    NotFoundError,
    OperationError,
    SchemaError,
    SchemaResolutionError,
    SchemaSyntaxError,
    TypedValidatorError,
    UsageError,
)
from typed_validator.parser import parse_schema
from typed_validator.result import FieldError, ValidationState
from typed_validator.scalars import SCALAR_TYPES, ScalarKind, ScalarType, get_scalar
from typed_validator.schema import (
    ObjectType,
    ResolvedField,
    Schema,
    compile_schema,
    resolve_schema,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Entry points
    "TypedValidator",
    "ValidationContext",
    "ValidatorConfig",
    # Schema compilation
    "parse_schema",
    "resolve_schema",
    "compile_schema",
    "Schema",
    "ObjectType",
    "ResolvedField",
    "DeclKind",
    "FieldSpec",
    "TypeDecl",
    # Scalars
    "SCALAR_TYPES",
    "ScalarKind",
    "ScalarType",
    "get_scalar",
    # Results
    "FieldError",
    "ValidationState",
    # Exceptions
    "TypedValidatorError",
    "SchemaError",
    "SchemaSyntaxError",
    "SchemaResolutionError",
    "UsageError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
