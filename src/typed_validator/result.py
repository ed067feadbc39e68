"""Field-level validation results and per-context validation state.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """A failed field.

    Attributes:
        name: Field name; nested fields use dotted paths (``author.id``)
        message: Human-readable message (default or custom override)
        type_name: Declared type of the field
        details: Nested failures for object-typed fields
    """

    name: str
    message: str
    type_name: str | None = None
    details: tuple[FieldError, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary."""
        data: dict[str, Any] = {
            "name": self.name,
            "message": self.message,
            "type": self.type_name,
        }
        if self.details:
            data["details"] = [detail.to_dict() for detail in self.details]
        return data


class ValidationState:
    """Errors recorded by one validation context.

    Entries are keyed by field name, so recording an error for a field that
    already has one replaces it.
    """

    def __init__(self) -> None:
        self._errors: dict[str, FieldError] = {}
        self._validated = False

    @property
    def validated(self) -> bool:
        """Whether any validation has been recorded since the last reset."""
        return self._validated

    def reset(self) -> None:
        """Discard all errors and return to the unvalidated state."""
        self._errors = {}
        self._validated = False

    def record(self, name: str, error: FieldError | None) -> None:
        """Record the outcome for a field; None clears any prior error."""
        self._validated = True
        if error is None:
            self._errors.pop(name, None)
        else:
            self._errors[name] = error

    def get(self, name: str) -> FieldError | None:
        return self._errors.get(name)

    def has_error(self, name: str) -> bool:
        return name in self._errors

    @property
    def valid(self) -> bool:
        return not self._errors

    def ordered(self, field_order: Iterable[str]) -> list[FieldError]:
        """Errors sorted into the given field order."""
        return [self._errors[name] for name in field_order if name in self._errors]

    def __len__(self) -> int:
        return len(self._errors)
