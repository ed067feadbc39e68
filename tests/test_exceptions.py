"""Tests for the exception hierarchy."""

import pytest

from typed_validator.exceptions import (
    ConfigurationError,
    SchemaError,
    SchemaResolutionError,
    SchemaSyntaxError,
    TypedValidatorError,
    UsageError,
)


class TestTypedValidatorError:
    """Test the base exception class."""

    def test_basic_exception(self):
        """Test basic exception without context."""
        error = TypedValidatorError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}
        assert error.details == {}

    def test_exception_with_context(self):
        """Test exception with context dictionary."""
        error = TypedValidatorError("Failed", context={"field": "title"})
        assert error.context == {"field": "title"}
        assert error.details is error.context

    def test_details_takes_precedence(self):
        """Test that details parameter takes precedence over context."""
        error = TypedValidatorError("Failed", context={"a": 1}, details={"b": 2})
        assert error.context == {"b": 2}


class TestSchemaErrors:
    """Test schema construction errors."""

    def test_syntax_error_location(self):
        """Test that line and column are exposed and added to context."""
        error = SchemaSyntaxError("Bad block", line=3, column=7)
        assert error.line == 3
        assert error.column == 7
        assert error.context == {"line": 3, "column": 7}
        assert isinstance(error, SchemaError)

    def test_syntax_error_without_location(self):
        """Test syntax error with no location."""
        error = SchemaSyntaxError("Empty schema")
        assert error.line is None
        assert error.context == {}

    def test_resolution_error_attributes(self):
        """Test resolution error carries the offending reference."""
        error = SchemaResolutionError(
            "Unknown type", type_ref="Strng", field_name="title", type_name="Post"
        )
        assert error.type_ref == "Strng"
        assert error.field_name == "title"
        assert error.type_name == "Post"
        assert error.context == {
            "type_ref": "Strng",
            "field_name": "title",
            "type_name": "Post",
        }

    @pytest.mark.parametrize(
        "error_class",
        [SchemaSyntaxError, SchemaResolutionError, UsageError, ConfigurationError],
    )
    def test_catch_all_as_base(self, error_class):
        """Test every error can be caught as TypedValidatorError."""
        with pytest.raises(TypedValidatorError):
            raise error_class("boom")
