"""Tests for coercions and normalizers."""

import json
from datetime import datetime

import pytest

from dataknobs_validation import (
    ExpectationCodes,
    collapse_whitespace,
    default_to,
    flatten_keys,
    is_gte,
    is_str,
    list_each,
    pick_keys,
    pluck_key,
    split,
    string_not_empty,
    to_bool,
    to_bool_lenient,
    to_bool_strict,
    to_datetime,
    to_float,
    to_int,
    to_int_safe,
    to_int_strict,
    to_json_decoded,
    to_lower,
    to_number,
    to_str,
    to_upper,
    transform,
    trim,
)
from dataknobs_validation.transformers import MAX_SAFE_INT


class TestNumericCoercions:
    """Test conversions to numbers."""

    @pytest.mark.parametrize("value,expected", [("42", 42), (" 7 ", 7), (3.9, 3), (5, 5)])
    def test_to_int(self, value, expected):
        """Test accepted int inputs."""
        result = to_int().validate(value)
        assert result.value == expected
        assert result.original_value == value

    @pytest.mark.parametrize("value", ["4.2", "abc", True, None, [1]])
    def test_to_int_rejects(self, value):
        """Test rejected int inputs."""
        e = to_int().validate(value).first_expectation
        assert e.code == ExpectationCodes.VALUE_COERCION_FAILED
        assert e.data["target"] == "int"

    def test_to_int_strict(self):
        """Test that floats are not truncated in strict mode."""
        assert to_int_strict().validate("3").value == 3
        assert not to_int_strict().validate(3.9).is_valid

    def test_to_int_safe(self):
        """Test the 53-bit range limit."""
        assert to_int_safe().validate(str(MAX_SAFE_INT)).is_valid
        assert not to_int_safe().validate(MAX_SAFE_INT + 1).is_valid

    def test_to_float(self):
        """Test float conversion."""
        assert to_float().validate("1.5").value == 1.5
        assert to_float().validate(2).value == 2.0
        assert not to_float().validate(False).is_valid

    def test_to_number(self):
        """Test that ints stay ints and other numeric strings become floats."""
        assert to_number().validate("3").value == 3
        assert isinstance(to_number().validate("3").value, int)
        assert to_number().validate("3.5").value == 3.5
        assert to_number().validate(2.5).value == 2.5
        assert not to_number().validate("x").is_valid

    def test_child_receives_coerced_value(self):
        """Test the child validator form."""
        v = to_int(is_gte(18))
        assert v.validate("21").value == 21
        e = v.validate("12").first_expectation
        assert e.code == ExpectationCodes.VALUE_RANGE_OUT_OF_BOUNDS

    def test_message(self):
        """Test a replacement message on failure."""
        e = to_int(message="age must be a number").validate("x").first_expectation
        assert e.message == "age must be a number"
        assert e.code == ExpectationCodes.VALUE_COERCION_FAILED


class TestBoolCoercions:
    """Test conversions to bool."""

    def test_to_bool(self):
        """Test the default conversion."""
        assert to_bool().validate("TRUE").value is True
        assert to_bool().validate(0).value is False
        assert not to_bool().validate("yes").is_valid
        assert not to_bool().validate(2).is_valid

    def test_to_bool_strict(self):
        """Test that integers are rejected in strict mode."""
        assert to_bool_strict().validate("false").value is False
        assert not to_bool_strict().validate(1).is_valid

    def test_to_bool_lenient(self):
        """Test word forms."""
        assert to_bool_lenient().validate("Yes").value is True
        assert to_bool_lenient().validate("off").value is False
        assert to_bool_lenient().validate(1).value is True
        assert not to_bool_lenient().validate("maybe").is_valid


class TestOtherCoercions:
    """Test string, datetime and JSON conversions."""

    def test_to_str(self):
        """Test string conversion."""
        assert to_str().validate(12).value == "12"
        assert not to_str().validate(None).is_valid

    def test_to_datetime(self):
        """Test ISO 8601 parsing."""
        assert to_datetime().validate("2024-05-17T10:30:00").value == datetime(2024, 5, 17, 10, 30)
        now = datetime.now()
        assert to_datetime().validate(now).value is now
        assert not to_datetime().validate("yesterday").is_valid

    def test_to_json_decoded(self):
        """Test decoding JSON containers."""
        assert to_json_decoded().validate(json.dumps({"a": [1]})).value == {"a": [1]}
        assert to_json_decoded().validate([1]).value == [1]
        assert not to_json_decoded().validate("42").is_valid
        assert not to_json_decoded().validate("{bad").is_valid


class TestNormalizers:
    """Test string normalizers."""

    def test_trim(self):
        """Test trimming before a child check."""
        v = trim(string_not_empty())
        assert v.validate(" a ").value == "a"
        assert not v.validate("   ").is_valid

    def test_collapse_whitespace(self):
        """Test collapsing whitespace runs."""
        assert collapse_whitespace().validate("  a \t b\n").value == "a b"

    def test_case(self):
        """Test case normalizers."""
        assert to_lower().validate("AbC").value == "abc"
        assert to_upper().validate("AbC").value == "ABC"
        assert not to_upper().validate(1).is_valid

    def test_split(self):
        """Test splitting into a list checked by a child."""
        v = split(",", list_each(trim(string_not_empty())))
        assert v.validate("a, b").value == ["a", "b"]
        assert v.validate("a,,b").first_expectation.path == "[1]"


class TestMapTransformers:
    """Test transformers on mappings."""

    def test_pick_keys(self):
        """Test keeping a subset of keys."""
        assert pick_keys(["a", "c"]).validate({"a": 1, "b": 2}).value == {"a": 1}

    def test_pluck_key(self):
        """Test replacing a mapping with one of its values."""
        assert pluck_key("a", is_str()).validate({"a": "x"}).value == "x"
        assert not pluck_key("a").validate({"b": 1}).is_valid

    def test_pluck_key_none_value(self):
        """Test that a present None value can be plucked."""
        assert pluck_key("a").validate({"a": None}).is_valid

    def test_flatten_keys(self):
        """Test flattening nested mappings."""
        value = {"a": {"b": 1, "c": {"d": 2}}, "e": 3}
        assert flatten_keys().validate(value).value == {"a.b": 1, "a.c.d": 2, "e": 3}
        assert flatten_keys("/").validate({"a": {"b": 1}}).value == {"a/b": 1}


class TestCustomTransformers:
    """Test default_to and transform."""

    def test_default_to(self):
        """Test replacing None."""
        assert default_to(5).validate(None).value == 5
        assert default_to(5).validate(1).value == 1

    def test_transform(self):
        """Test an arbitrary conversion."""
        assert transform(lambda v: v * 2).validate(4).value == 8

    def test_transform_error_becomes_failure(self):
        """Test that errors raised by the conversion are reported."""
        result = transform(int).validate("x")
        assert result.first_expectation.code == ExpectationCodes.VALUE_COERCION_FAILED

    def test_transform_does_not_hide_other_errors(self):
        """Test that unexpected exceptions propagate."""

        def boom(value):
            raise KeyError(value)

        with pytest.raises(KeyError):
            transform(boom).validate(1)
