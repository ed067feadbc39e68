"""Tests for the schema parser."""

import pytest

from typed_validator.declarations import DeclKind, FieldSpec
from typed_validator.exceptions import SchemaSyntaxError, UsageError
from typed_validator.parser import parse_schema


class TestParseSchema:
    """Test well-formed schema sources."""

    def test_single_input_block(self):
        """Test parsing one input block."""
        decls = parse_schema("""
          input ValidateOneType {
            title: String
          }
        """)

        assert len(decls) == 1
        decl = decls[0]
        assert decl.kind is DeclKind.INPUT
        assert decl.name == "ValidateOneType"
        assert decl.field_names == ("title",)
        assert decl.fields[0].type_ref == "String"

    def test_blocks_and_fields_keep_source_order(self, nested_schema):
        """Test declarations and fields come back in source order."""
        decls = parse_schema(nested_schema)

        assert [(d.kind, d.name) for d in decls] == [
            (DeclKind.TYPE, "User"),
            (DeclKind.INPUT, "ValidateOneType"),
        ]
        assert decls[0].field_names == ("id", "name")
        assert [f.type_ref for f in decls[0].fields] == ["String", "Int"]

    def test_comma_separated_fields(self):
        """Test fields separated by commas on one line."""
        decls = parse_schema("input T { title: String, age: Int }")
        assert decls[0].field_names == ("title", "age")

    def test_whitespace_is_insignificant(self):
        """Test compact and spread-out layouts parse the same."""
        compact = parse_schema("input T{title:String age:Int}")
        spread = parse_schema("input\n  T\n{\n title :\n  String\n\n age: Int\n}\n")
        assert [d.field_names for d in compact] == [d.field_names for d in spread]

    def test_comments_are_ignored(self):
        """Test # comments."""
        decls = parse_schema("""
          # users
          type User {
            id: String  # primary key
          }
        """)
        assert decls[0].field_names == ("id",)

    def test_unresolved_references_are_kept(self):
        """Test the parser does not resolve type names."""
        decls = parse_schema("input T { author: NotDeclaredYet }")
        assert decls[0].fields[0].type_ref == "NotDeclaredYet"

    def test_field_locations(self):
        """Test fields record their line and column."""
        decls = parse_schema("input T {\n  title: String\n}")
        assert decls[0].fields[0] == FieldSpec("title", "String", line=2, column=3)
        assert decls[0].line == 1

    def test_empty_block(self):
        """Test a block without fields."""
        decls = parse_schema("input Empty {}")
        assert decls[0].fields == ()


class TestParseErrors:
    """Test malformed schema sources."""

    def test_unterminated_block(self):
        """Test a block missing its closing brace."""
        with pytest.raises(SchemaSyntaxError) as exc_info:
            parse_schema("input T {\n  title: String\n")
        assert exc_info.value.line is not None

    def test_missing_type_name(self):
        """Test a block header without a name."""
        with pytest.raises(SchemaSyntaxError):
            parse_schema("input { title: String }")

    def test_missing_brace(self):
        """Test a block header without an opening brace."""
        with pytest.raises(SchemaSyntaxError):
            parse_schema("input T title: String }")

    def test_bad_field_line(self):
        """Test a field line without a colon."""
        with pytest.raises(SchemaSyntaxError) as exc_info:
            parse_schema("input T {\n  title String\n}")
        assert exc_info.value.line == 2

    def test_field_missing_type(self):
        """Test a field line without a type."""
        with pytest.raises(SchemaSyntaxError):
            parse_schema("input T { title: }")

    def test_unknown_block_kind(self):
        """Test an unknown block keyword."""
        with pytest.raises(SchemaSyntaxError):
            parse_schema("enum Color { red: String }")

    def test_duplicate_field(self):
        """Test duplicate field names within a block."""
        with pytest.raises(SchemaSyntaxError) as exc_info:
            parse_schema("input T {\n  title: String\n  title: Int\n}")
        assert "Duplicate field 'title'" in str(exc_info.value)
        assert exc_info.value.line == 3

    def test_same_field_in_different_blocks_is_allowed(self):
        """Test field names only need to be unique per block."""
        decls = parse_schema("type A { id: String } type B { id: String }")
        assert len(decls) == 2

    def test_duplicate_type(self):
        """Test duplicate type names across blocks and kinds."""
        with pytest.raises(SchemaSyntaxError) as exc_info:
            parse_schema("type User { id: String }\ninput User { id: String }")
        assert "Duplicate type name 'User'" in str(exc_info.value)
        assert exc_info.value.context["type_name"] == "User"

    def test_empty_source(self):
        """Test a source with no declarations."""
        with pytest.raises(SchemaSyntaxError):
            parse_schema("   # nothing here\n")

    def test_non_string_source(self):
        """Test a non-string source."""
        with pytest.raises(UsageError):
            parse_schema(None)
