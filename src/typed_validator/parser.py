"""Schema source parser.

Turns GraphQL-like schema text into an ordered list of ``TypeDecl`` values
whose field type references are still raw names::

    # a reusable shape
    type User {
      id: String
      name: String
    }

    input CreatePost { title: String, author: User }

Whitespace and line breaks are insignificant, fields may be separated by
commas, and ``#`` starts a comment that runs to the end of the line.
"""

from __future__ import annotations

import logging

from pyparsing import (
    Group,
    Keyword,
    Opt,
    ParseBaseException,
    ParserElement,
    ParseResults,
    Suppress,
    Word,
    ZeroOrMore,
    alphanums,
    alphas,
    col,
    lineno,
    python_style_comment,
)

from .declarations import DeclKind, FieldSpec, TypeDecl
from .exceptions import SchemaSyntaxError, UsageError

logger = logging.getLogger(__name__)


def _make_field(source: str, loc: int, tokens: ParseResults) -> FieldSpec:
    return FieldSpec(
        name=tokens[0],
        type_ref=tokens[1],
        line=lineno(loc, source),
        column=col(loc, source),
    )


def _make_decl(source: str, loc: int, tokens: ParseResults) -> TypeDecl:
    kind, name, fields = tokens[0], tokens[1], tokens[2]
    return TypeDecl(
        kind=DeclKind(kind),
        name=name,
        fields=tuple(fields),
        line=lineno(loc, source),
        column=col(loc, source),
    )


def _build_grammar() -> ParserElement:
    identifier = Word(alphas + "_", alphanums + "_").set_name("identifier")
    lbrace, rbrace = Suppress("{"), Suppress("}")
    colon, comma = Suppress(":"), Suppress(",")

    field = (identifier + (colon - identifier) + Opt(comma)).set_name("field")
    field.set_parse_action(_make_field)

    kind = (Keyword("type") | Keyword("input")).set_name("'type' or 'input'")
    block = kind - identifier - lbrace - Group(ZeroOrMore(field)) - rbrace
    block.set_name("block")
    block.set_parse_action(_make_decl)

    grammar = ZeroOrMore(block)
    grammar.ignore(python_style_comment)
    return grammar


_GRAMMAR = _build_grammar()


def _check_duplicates(decls: list[TypeDecl]) -> None:
    seen_types: dict[str, TypeDecl] = {}
    for decl in decls:
        if decl.name in seen_types:
            first = seen_types[decl.name]
            raise SchemaSyntaxError(
                f"Duplicate type name '{decl.name}' (first declared on line {first.line})",
                line=decl.line,
                column=decl.column,
                context={"type_name": decl.name},
            )
        seen_types[decl.name] = decl

        seen_fields: set[str] = set()
        for field in decl.fields:
            if field.name in seen_fields:
                raise SchemaSyntaxError(
                    f"Duplicate field '{field.name}' in {decl.kind.value} '{decl.name}'",
                    line=field.line,
                    column=field.column,
                    context={"type_name": decl.name, "field_name": field.name},
                )
            seen_fields.add(field.name)


def parse_schema(source: str) -> list[TypeDecl]:
    """Parse schema source into declarations in source order.

    Args:
        source: Schema text

    Returns:
        List of TypeDecl with unresolved type references

    Raises:
        UsageError: If source is not a string
        SchemaSyntaxError: If the text is malformed, declares nothing, or
            repeats a type name or a field name within one block
    """
    if not isinstance(source, str):
        raise UsageError(
            f"Schema source must be a string, got {type(source).__name__}",
            context={"source_type": type(source).__name__},
        )

    try:
        results = _GRAMMAR.parse_string(source, parse_all=True)
    except ParseBaseException as e:
        raise SchemaSyntaxError(
            f"Invalid schema syntax at line {e.lineno}, column {e.col}: {e.msg}",
            line=e.lineno,
            column=e.col,
            context={"source_line": e.line},
        ) from e

    decls = list(results)
    if not decls:
        raise SchemaSyntaxError("Schema source declares no types")

    _check_duplicates(decls)
    logger.debug(f"Parsed {len(decls)} declarations: {[d.name for d in decls]}")
    return decls
