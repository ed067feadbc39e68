"""Compiled schema: declarations resolved into an immutable type graph.

Every field type reference is looked up first among the built-in scalars and
then among the declared type names, so a type may be used before the block
that declares it. Self-referencing types are allowed; validation recursion is
bounded by the nesting of the data being validated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .declarations import DeclKind, TypeDecl
from .exceptions import SchemaResolutionError
from .parser import parse_schema
from .registry import Registry
from .scalars import SCALAR_TYPES, ScalarType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedField:
    """A field whose type reference has been resolved.

    ``scalar`` is set for built-in scalar fields and None for fields typed by
    a declared object type, which is named by ``type_ref``.
    """

    name: str
    type_ref: str
    scalar: ScalarType | None = None

    @property
    def is_scalar(self) -> bool:
        return self.scalar is not None


@dataclass(frozen=True)
class ObjectType:
    """A declared ``type`` or ``input`` with resolved fields."""

    name: str
    kind: DeclKind
    fields: tuple[ResolvedField, ...]
    _by_name: Mapping[str, ResolvedField] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_name", MappingProxyType({f.name: f for f in self.fields})
        )

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> ResolvedField | None:
        return self._by_name.get(name)

    def has_field(self, name: str) -> bool:
        return name in self._by_name


class Schema:
    """Immutable mapping of type names to resolved object types.

    A Schema is safe to share between any number of validation contexts.
    """

    def __init__(self, types: Sequence[ObjectType]):
        self._types = MappingProxyType({t.name: t for t in types})
        self._input_types = tuple(t.name for t in types if t.kind is DeclKind.INPUT)
        self._recursive_types = _find_recursive_types(self._types)

    @property
    def types(self) -> Mapping[str, ObjectType]:
        return self._types

    @property
    def type_names(self) -> tuple[str, ...]:
        return tuple(self._types)

    @property
    def input_types(self) -> tuple[str, ...]:
        return self._input_types

    @property
    def primary_input(self) -> str | None:
        """Name of the first declared ``input`` type, if any."""
        return self._input_types[0] if self._input_types else None

    @property
    def recursive_types(self) -> frozenset[str]:
        """Types that can reach themselves through their fields."""
        return self._recursive_types

    def get_type(self, name: str) -> ObjectType:
        """Get a declared type by name.

        Raises:
            SchemaResolutionError: If no such type is declared
        """
        try:
            return self._types[name]
        except KeyError:
            raise SchemaResolutionError(
                f"Type '{name}' is not declared in this schema",
                type_ref=name,
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"Schema(types={list(self._types)})"

    def to_dict(self) -> dict[str, Any]:
        """Plain description of the schema, in declaration order."""
        return {
            name: {
                "kind": obj.kind.value,
                "fields": {f.name: f.type_ref for f in obj.fields},
            }
            for name, obj in self._types.items()
        }


def _find_recursive_types(types: Mapping[str, ObjectType]) -> frozenset[str]:
    edges = {
        name: {f.type_ref for f in obj.fields if not f.is_scalar}
        for name, obj in types.items()
    }
    recursive = set()
    for start in edges:
        stack = list(edges[start])
        visited: set[str] = set()
        while stack:
            current = stack.pop()
            if current == start:
                recursive.add(start)
                break
            if current in visited:
                continue
            visited.add(current)
            stack.extend(edges.get(current, ()))
    return frozenset(recursive)


def resolve_schema(
    decls: Sequence[TypeDecl],
    scalars: Registry[ScalarType] = SCALAR_TYPES,
) -> Schema:
    """Resolve parsed declarations into a Schema.

    Args:
        decls: Declarations from ``parse_schema``
        scalars: Scalar library to resolve built-in names against

    Returns:
        Immutable Schema

    Raises:
        SchemaResolutionError: If a declared type shadows a scalar name or a
            field references a name that is neither a scalar nor declared
    """
    declared = {decl.name for decl in decls}

    for decl in decls:
        if decl.name in scalars:
            raise SchemaResolutionError(
                f"Type '{decl.name}' shadows the built-in scalar of the same name",
                type_ref=decl.name,
                type_name=decl.name,
            )

    types = []
    for decl in decls:
        fields = []
        for spec in decl.fields:
            scalar = scalars.get_optional(spec.type_ref)
            if scalar is None and spec.type_ref not in declared:
                raise SchemaResolutionError(
                    f"Unknown type '{spec.type_ref}' for field '{spec.name}' "
                    f"in {decl.kind.value} '{decl.name}'",
                    type_ref=spec.type_ref,
                    field_name=spec.name,
                    type_name=decl.name,
                )
            fields.append(ResolvedField(spec.name, spec.type_ref, scalar))
        types.append(ObjectType(decl.name, decl.kind, tuple(fields)))

    schema = Schema(types)
    if schema.recursive_types:
        logger.debug(f"Recursive types in schema: {sorted(schema.recursive_types)}")
    return schema


def compile_schema(source: str) -> Schema:
    """Parse and resolve schema source in one step."""
    schema = resolve_schema(parse_schema(source))
    logger.debug(f"Compiled schema with types {list(schema.type_names)}")
    return schema
