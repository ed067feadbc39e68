"""Unresolved declarations produced by the schema parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeclKind(Enum):
    """Kind of a declared block.

    ``TYPE`` blocks are reusable shapes referenced by other fields; ``INPUT``
    blocks are meant to be the root of validation. Both resolve identically.
    """

    TYPE = "type"
    INPUT = "input"


@dataclass(frozen=True)
class FieldSpec:
    """A ``name: TypeRef`` line inside a block.

    Attributes:
        name: Field name
        type_ref: Raw name of the referenced scalar or declared type
        line: 1-based source line, when known
        column: 1-based source column, when known
    """

    name: str
    type_ref: str
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class TypeDecl:
    """A ``type`` or ``input`` block with its fields in declaration order."""

    kind: DeclKind
    name: str
    fields: tuple[FieldSpec, ...] = ()
    line: int | None = None
    column: int | None = None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)
