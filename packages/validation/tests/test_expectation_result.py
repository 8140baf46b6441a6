"""Tests for Expectation and Result."""

import pytest

from dataknobs_validation import (
    Expectation,
    ExpectationCodes,
    Result,
    ValidatorFailedError,
)


class TestExpectation:
    """Test Expectation paths and serialization."""

    def test_description_without_path(self):
        """Test that a root expectation describes itself by its message."""
        e = Expectation(message="String expected", value=3)
        assert e.description == "String expected"
        assert str(e) == "String expected"

    def test_description_with_path(self):
        """Test that the path prefixes the message."""
        e = Expectation(message="String expected", value=3, path="user.name")
        assert e.description == "user.name: String expected"

    def test_add_to_path_with_keys(self):
        """Test that map keys are joined with dots, outermost first."""
        e = Expectation(message="m").add_to_path("street").add_to_path("address")
        assert e.path == "address.street"

    def test_add_to_path_with_index(self):
        """Test that list indexes render in brackets without a dot."""
        e = Expectation(message="m").add_to_path("name").add_to_path(1).add_to_path("items")
        assert e.path == "items[1].name"

    def test_add_to_path_index_at_root(self):
        """Test an index segment on an empty path."""
        assert Expectation(message="m").add_to_path(0).path == "[0]"

    def test_add_to_path_does_not_mutate(self):
        """Test that expectations are immutable."""
        e = Expectation(message="m")
        e.add_to_path("a")
        assert e.path is None

    def test_bool_key_is_not_an_index(self):
        """Test that bool keys are rendered as keys, not list indexes."""
        assert Expectation(message="m").add_to_path(True).path == "True"

    def test_to_dict_omits_unset_fields(self):
        """Test serialization of optional fields."""
        e = Expectation(message="m", value=1)
        assert e.to_dict() == {"message": "m", "value": 1}

        e = Expectation(
            message="m", value=1, path="a", code=ExpectationCodes.TYPE_MISMATCH,
            data={"expected": "str"},
        )
        assert e.to_dict() == {
            "message": "m",
            "value": 1,
            "path": "a",
            "code": "type.mismatch",
            "data": {"expected": "str"},
        }

    def test_to_invalid_result(self):
        """Test wrapping an expectation in a failed result."""
        e = Expectation(message="m", value=5)
        result = e.to_invalid_result()
        assert result.is_valid is False
        assert result.value == 5
        assert result.expectations == (e,)


class TestResult:
    """Test Result construction and helpers."""

    def test_valid_result(self):
        """Test creating a successful result."""
        result = Result.valid(42)
        assert result.is_valid is True
        assert result.value == 42
        assert result.original_value == 42
        assert result.expectations == ()
        assert bool(result) is True
        assert result.description == "Valid"

    def test_valid_result_keeps_original_value(self):
        """Test that coercions can record the pre-coercion value."""
        result = Result.valid(42, original_value="42")
        assert result.value == 42
        assert result.original_value == "42"

    def test_invalid_result(self):
        """Test creating a failed result from one expectation."""
        result = Result.invalid("x", Expectation(message="number", value="x"))
        assert result.is_valid is False
        assert result.is_not_valid is True
        assert bool(result) is False
        assert result.expectation_count == 1
        assert result.first_expectation.message == "number"

    def test_valid_with_expectations_is_rejected(self):
        """Test the validity invariant for valid results."""
        with pytest.raises(ValueError):
            Result(True, 1, (Expectation(message="m"),))

    def test_invalid_without_expectations_is_rejected(self):
        """Test the validity invariant for invalid results."""
        with pytest.raises(ValueError):
            Result.invalid(1, [])

    def test_check(self):
        """Test building a result from a boolean."""
        e = Expectation(message="positive")
        assert Result.check(True, 1, e).is_valid
        failed = Result.check(False, -1, e)
        assert failed.expectations == (e,)

    def test_descriptions(self):
        """Test one-line summaries of several failures."""
        result = Result.invalid({}, [
            Expectation(message="is required", path="name"),
            Expectation(message="int", path="age"),
            Expectation(message="str", path="city"),
        ])
        assert result.description == "name: is required, age: int, city: str"
        assert result.short_description == "name: is required (+2 more)"

    def test_value_or(self):
        """Test falling back to a default on failure."""
        assert Result.valid(3).value_or(0) == 3
        assert Result.invalid(3, Expectation(message="m")).value_or(0) == 0

    def test_raise_if_invalid(self):
        """Test raising the carried failure."""
        assert Result.valid(3).raise_if_invalid() == 3
        failed = Result.invalid(3, Expectation(message="m"))
        with pytest.raises(ValidatorFailedError) as exc_info:
            failed.raise_if_invalid()
        assert exc_info.value.result is failed

    def test_with_value(self):
        """Test replacing the value while keeping the original."""
        result = Result.valid(" a ").with_value("a")
        assert result.value == "a"
        assert result.original_value == " a "

    def test_to_dict(self):
        """Test serializing a failed result."""
        result = Result.invalid(1, Expectation(message="str", value=1, code="type.mismatch"))
        assert result.to_dict() == {
            "is_valid": False,
            "value": 1,
            "original_value": 1,
            "expectations": [{"message": "str", "value": 1, "code": "type.mismatch"}],
        }

    def test_results_are_immutable(self):
        """Test that results cannot be modified."""
        result = Result.valid(1)
        with pytest.raises(AttributeError):
            result.value = 2


class TestExpectationCodes:
    """Test the code namespace."""

    def test_codes_are_namespaced(self):
        """Test that every namespaced code belongs to a known category."""
        codes = ExpectationCodes.all_codes() - {ExpectationCodes.REQUIRED_MISSING}
        for code in codes:
            assert ExpectationCodes.category(code) in {"type", "value", "structure", "logic"}

    def test_category(self):
        """Test extracting the category of a code."""
        assert ExpectationCodes.category("value.format_invalid") == "value"
        assert ExpectationCodes.category(ExpectationCodes.LOGIC_CONTEXTUAL_MISUSE) == "logic"
        assert ExpectationCodes.category(ExpectationCodes.REQUIRED_MISSING) is None
        assert ExpectationCodes.category(None) is None
