"""Built-in scalar types backing schema field types.

Each scalar pairs a ``ScalarKind`` tag with a pure predicate and a default
error-message template. Predicates are total: they return False for any value
they do not recognize, including ``None``.

Example:
    ```python
    from typed_validator.scalars import get_scalar

    email = get_scalar("EmailType")
    email.test("someone@example.com")
    # True
    email.default_message("email")
    # 'email must be a valid email address'
    ```
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from numbers import Integral
from typing import Any

from .registry import Registry

REQUIRED_MESSAGE = "{name} is required"
OBJECT_TYPE_MESSAGE = "{name} must be an object of type {type}"
INVALID_OBJECT_MESSAGE = "{name} is not a valid {type}"
CIRCULAR_MESSAGE = "{name} contains a circular reference"

EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+"
)

# (909) 456-4319, 909.456.4319, +1 909 456 4319, 9094564319 x12
PHONE_PATTERN = re.compile(
    r"(?:\+?\d{1,3}[\s.-]?)?"
    r"(?:\(\d{3}\)|\d{3})[\s.-]?"
    r"\d{3}[\s.-]?\d{4}"
    r"(?:\s*(?:x|ext\.?)\s*\d{1,5})?",
    re.IGNORECASE,
)

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%d/%m/%Y",
    "%d/%m/%Y %H:%M:%S",
)


class ScalarKind(Enum):
    """Tags for the built-in scalar types, valued by their schema name."""

    STRING = "String"
    INT = "Int"
    BOOLEAN = "Boolean"
    EMAIL = "EmailType"
    DATE = "DateType"
    PHONE = "PhoneType"


@dataclass(frozen=True)
class ScalarType:
    """A built-in field type.

    Attributes:
        kind: Tag identifying the scalar
        test: Predicate returning True when a value is of this type
        message_template: Default mismatch message, formatted with ``name``
    """

    kind: ScalarKind
    test: Callable[[Any], bool]
    message_template: str

    @property
    def name(self) -> str:
        return self.kind.value

    def default_message(self, field_name: str) -> str:
        return self.message_template.format(name=field_name)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    return False


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def parse_datetime(value: str) -> datetime | None:
    """Parse a date string, returning None when no known format matches."""
    value = value.strip()
    if not value:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def is_date(value: Any) -> bool:
    # datetime is a subclass of date
    if isinstance(value, date):
        return True
    if isinstance(value, str):
        return parse_datetime(value) is not None
    return False


def is_phone(value: Any) -> bool:
    return isinstance(value, str) and PHONE_PATTERN.fullmatch(value.strip()) is not None


_BUILTINS = (
    ScalarType(ScalarKind.STRING, is_string, "{name} must be a string"),
    ScalarType(ScalarKind.INT, is_int, "{name} must be an integer"),
    ScalarType(ScalarKind.BOOLEAN, is_boolean, "{name} must be a boolean"),
    ScalarType(ScalarKind.EMAIL, is_email, "{name} must be a valid email address"),
    ScalarType(ScalarKind.DATE, is_date, "{name} must be a valid date"),
    ScalarType(ScalarKind.PHONE, is_phone, "{name} must be a valid phone number"),
)


def _build_library() -> Registry[ScalarType]:
    registry: Registry[ScalarType] = Registry("scalars")
    for scalar in _BUILTINS:
        registry.register(scalar.name, scalar)
    registry.freeze()
    return registry


SCALAR_TYPES: Registry[ScalarType] = _build_library()


def get_scalar(name: str) -> ScalarType | None:
    """Look up a built-in scalar by its schema name."""
    return SCALAR_TYPES.get_optional(name)


def scalar_names() -> list[str]:
    """Names of all built-in scalars in definition order."""
    return SCALAR_TYPES.list_keys()
