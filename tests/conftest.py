"""Pytest configuration for typed_validator tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def nested_schema():
    """Schema with a reusable type referenced from the input."""
    return """
      type User {
        id: String
        name: Int
      }

      input ValidateOneType {
        title: User
      }
    """


@pytest.fixture
def builtin_schema():
    """Schema using every built-in scalar."""
    return """
      input ValidatingTypes {
        title: String
        num: Int
        email: EmailType
        subscribed: Boolean
        createdAt: DateType
        phone: PhoneType
      }
    """
