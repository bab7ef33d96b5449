"""Tests for name validation."""

import pytest

from agentgraph.core.validation import MAX_NAME_LENGTH, is_valid_name, validate_name


class TestValidateName:
    """Tests for validate_name function."""

    def test_valid_simple_name(self):
        """Simple lowercase name should be valid."""
        validate_name("writer", "node")  # Should not raise

    def test_valid_name_with_spaces_and_case(self):
        """Names are quoted in DOT output, so spaces and capitals are fine."""
        validate_name("Review Loop", "graph")
        validate_name("step_1-A", "node")

    def test_valid_max_length(self):
        """A name of exactly the maximum length should be valid."""
        validate_name("a" * MAX_NAME_LENGTH, "node")

    def test_invalid_empty(self):
        """Empty string should be rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_name("", "node")

    def test_invalid_whitespace_only(self):
        """Whitespace-only names should be rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_name("   ", "node")

    def test_invalid_too_long(self):
        """Names over the maximum length should be rejected."""
        with pytest.raises(ValueError, match="64 characters or less"):
            validate_name("a" * (MAX_NAME_LENGTH + 1), "node")

    def test_invalid_control_characters(self):
        """Newlines and tabs should be rejected."""
        with pytest.raises(ValueError, match="control characters"):
            validate_name("two\nlines", "node")
        with pytest.raises(ValueError, match="control characters"):
            validate_name("tab\there", "node")

    def test_invalid_type(self):
        """Non-string names should be rejected."""
        with pytest.raises(ValueError, match="must be a string"):
            validate_name(42, "node")  # type: ignore[arg-type]

    def test_entity_in_message(self):
        """Error message should name the entity."""
        with pytest.raises(ValueError, match="Graph name"):
            validate_name("", "graph")


class TestIsValidName:
    """Tests for is_valid_name function."""

    def test_valid(self):
        """Valid names return True."""
        assert is_valid_name("reviewer") is True

    def test_invalid(self):
        """Invalid names return False instead of raising."""
        assert is_valid_name("") is False
        assert is_valid_name("x" * 100) is False
