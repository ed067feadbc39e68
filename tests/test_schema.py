"""Tests for schema resolution."""

import pytest

from typed_validator.declarations import DeclKind
from typed_validator.exceptions import SchemaResolutionError, SchemaSyntaxError
from typed_validator.parser import parse_schema
from typed_validator.scalars import get_scalar
from typed_validator.schema import Schema, compile_schema, resolve_schema


class TestResolveSchema:
    """Test resolving declarations into a Schema."""

    def test_scalar_fields_resolve_to_library(self):
        """Test scalar references resolve to the built-in scalars."""
        schema = compile_schema("input T { title: String, age: Int }")
        root = schema.get_type("T")

        title = root.get_field("title")
        assert title.is_scalar
        assert title.scalar is get_scalar("String")
        assert root.get_field("age").scalar is get_scalar("Int")

    def test_object_fields_resolve_to_declared_types(self, nested_schema):
        """Test references to declared types."""
        schema = compile_schema(nested_schema)
        field = schema.get_type("ValidateOneType").get_field("title")

        assert not field.is_scalar
        assert field.type_ref == "User"
        assert schema.get_type("User").field_names == ("id", "name")

    def test_forward_reference(self):
        """Test a type used before its declaration."""
        schema = compile_schema("""
          input CreatePost { author: User }
          type User { id: String }
        """)
        assert schema.get_type("CreatePost").get_field("author").type_ref == "User"

    def test_unknown_type_reference(self):
        """Test a reference that is neither scalar nor declared."""
        with pytest.raises(SchemaResolutionError) as exc_info:
            compile_schema("input Post { title: Strng }")

        error = exc_info.value
        assert error.type_ref == "Strng"
        assert error.field_name == "title"
        assert error.type_name == "Post"
        assert "Strng" in str(error)

    def test_shadowing_a_scalar_is_rejected(self):
        """Test declaring a type named like a built-in scalar."""
        with pytest.raises(SchemaResolutionError):
            compile_schema("type String { value: Int } input T { s: String }")

    def test_self_reference_is_allowed(self):
        """Test recursive types compile and are reported."""
        schema = compile_schema("""
          type Node { value: Int, next: Node }
          type Leaf { value: Int }
          input Tree { root: Node, leaf: Leaf }
        """)
        assert schema.recursive_types == frozenset({"Node"})

    def test_indirect_recursion(self):
        """Test mutually recursive types."""
        schema = compile_schema("""
          type A { b: B }
          type B { a: A }
          input T { a: A }
        """)
        assert schema.recursive_types == frozenset({"A", "B"})

    def test_resolve_parsed_declarations(self):
        """Test resolve_schema on parser output."""
        schema = resolve_schema(parse_schema("input T { ok: Boolean }"))
        assert isinstance(schema, Schema)
        assert "T" in schema
        assert len(schema) == 1

    def test_syntax_errors_propagate(self):
        """Test compile_schema surfaces parser failures."""
        with pytest.raises(SchemaSyntaxError):
            compile_schema("input T { title: String")


class TestSchemaIntrospection:
    """Test read-only Schema accessors."""

    @pytest.fixture
    def schema(self):
        return compile_schema("""
          type User { id: String }
          input First { user: User }
          input Second { name: String }
        """)

    def test_input_types(self, schema):
        assert schema.input_types == ("First", "Second")
        assert schema.primary_input == "First"
        assert schema.type_names == ("User", "First", "Second")

    def test_kinds(self, schema):
        assert schema.get_type("User").kind is DeclKind.TYPE
        assert schema.get_type("First").kind is DeclKind.INPUT

    def test_no_input(self):
        schema = compile_schema("type User { id: String }")
        assert schema.primary_input is None

    def test_get_unknown_type(self, schema):
        with pytest.raises(SchemaResolutionError):
            schema.get_type("Missing")

    def test_types_mapping_is_read_only(self, schema):
        with pytest.raises(TypeError):
            schema.types["Other"] = schema.get_type("User")

    def test_object_type_is_frozen(self, schema):
        with pytest.raises(AttributeError):
            schema.get_type("User").name = "Renamed"

    def test_to_dict(self, schema):
        assert schema.to_dict() == {
            "User": {"kind": "type", "fields": {"id": "String"}},
            "First": {"kind": "input", "fields": {"user": "User"}},
            "Second": {"kind": "input", "fields": {"name": "String"}},
        }
