"""Tests for nullable, optional and required."""

from dataknobs_validation import (
    ExpectationCodes,
    all_of,
    builder,
    is_int,
    is_present,
    is_str,
    nullable,
    optional,
    required,
    schema,
    string_not_empty,
)


class TestNullable:
    """Test acceptance of None."""

    def test_accepts_none(self):
        """Test that None passes without running the validator."""
        assert nullable(is_str()).validate(None).is_valid

    def test_still_validates_values(self):
        """Test that non-None values are checked as usual."""
        assert not nullable(is_str()).validate(1).is_valid

    def test_does_not_accept_absence(self):
        """Test that nullable is not optional."""
        assert not nullable(is_str()).validate(None, exists=False).is_valid

    def test_idempotent(self):
        """Test that wrapping twice is the same as wrapping once."""
        once = nullable(is_str())
        assert nullable(once) is once
        assert once.nullable() is once

    def test_original_is_unchanged(self):
        """Test that the flag is set on a copy."""
        base = is_str()
        base.nullable()
        assert not base.is_nullable

    def test_builder_is_snapshotted(self):
        """Test that the function forms leave a builder argument untouched."""
        b = builder().string()
        assert nullable(b).validate(None).is_valid
        assert optional(b).validate(None, exists=False).is_valid
        assert not b.is_nullable
        assert not b.is_optional


class TestOptional:
    """Test acceptance of absent values."""

    def test_accepts_absence(self):
        """Test that an absent value passes."""
        assert optional(is_str()).validate(None, exists=False).is_valid

    def test_explicit_none_is_checked(self):
        """Test that optional is not nullable."""
        assert not optional(is_str()).validate(None).is_valid

    def test_both_flags(self):
        """Test combining both flags in either order."""
        a = is_str().optional().nullable()
        b = is_str().nullable().optional()
        for v in (a, b):
            assert v.validate(None).is_valid
            assert v.validate(None, exists=False).is_valid
            assert v.is_nullable and v.is_optional

    def test_flags_on_combinators(self):
        """Test that combinators carry presence flags like any validator."""
        v = all_of([is_str(), string_not_empty()]).optional()
        assert v.validate(None, exists=False).is_valid
        assert not v.validate("").is_valid


class TestRequired:
    """Test rejection of None and absent values."""

    def test_rejects_none(self):
        """Test the required_missing code."""
        result = required(is_str()).validate(None)
        assert result.first_expectation.message == "is required"
        assert result.first_expectation.code == ExpectationCodes.REQUIRED_MISSING

    def test_overrides_presence_flags(self):
        """Test that required wins over flags on the wrapped validator."""
        v = required(is_str().nullable().optional())
        assert not v.validate(None).is_valid
        assert not v.validate(None, exists=False).is_valid
        assert v.validate("a").is_valid

    def test_is_present(self):
        """Test the bare presence check."""
        assert is_present().validate(0).is_valid
        assert not is_present().validate(None).is_valid


class TestPresenceInSchema:
    """Test presence rules applied to map fields."""

    def test_missing_optional_field_is_skipped(self):
        """Test that a missing optional key is not reported or added."""
        result = schema({"a": is_int().optional()}).validate({})
        assert result.is_valid
        assert result.value == {}

    def test_null_nullable_field_is_skipped(self):
        """Test that an explicit None passes a nullable field."""
        result = schema({"a": is_int().nullable()}).validate({"a": None})
        assert result.is_valid
        assert result.value == {"a": None}

    def test_missing_required_field(self):
        """Test that a missing key is reported at its path."""
        result = schema({"a": required(is_int())}).validate({})
        e = result.first_expectation
        assert e.path == "a"
        assert e.code == ExpectationCodes.REQUIRED_MISSING

    def test_missing_plain_field_fails_its_validator(self):
        """Test that a missing key runs the field validator on None."""
        result = schema({"a": is_int()}).validate({})
        e = result.first_expectation
        assert e.path == "a"
        assert e.code == ExpectationCodes.TYPE_MISMATCH

    def test_optional_field_rejects_null(self):
        """Test that optional alone does not accept an explicit None."""
        result = schema({"a": is_int().optional()}).validate({"a": None})
        assert not result.is_valid
