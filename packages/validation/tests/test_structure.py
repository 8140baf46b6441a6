"""Tests for map and list structure validators."""

from dataknobs_validation import (
    ExpectationCodes,
    get_field,
    is_gte,
    is_int,
    is_int_string,
    is_str,
    lazy,
    list_each,
    list_schema,
    schema,
    strict_schema,
    to_int,
    trim,
)


class TestSchema:
    """Test field-by-field map validation."""

    def test_valid_mapping(self):
        """Test a mapping that satisfies every field."""
        v = schema({"name": is_str(), "age": is_int()})
        assert v.validate({"name": "Ann", "age": 41}).is_valid

    def test_not_a_mapping(self):
        """Test that a non-mapping fails with a type mismatch."""
        result = schema({"a": is_int()}).validate([1])
        e = result.first_expectation
        assert e.code == ExpectationCodes.TYPE_MISMATCH
        assert e.data == {"expected": "dict", "found": "list"}

    def test_reports_every_field(self):
        """Test that all failing fields are reported, in field order."""
        v = schema({"name": is_str(), "age": is_int(), "city": is_str()})
        result = v.validate({"name": 1, "age": "x", "city": "Oslo"})
        assert [e.path for e in result.expectations] == ["name", "age"]

    def test_nested_paths(self):
        """Test that nested failures carry dotted paths."""
        address = schema({"street": is_str(), "zip": is_int_string()})
        user = schema({"name": is_str(), "address": address})
        result = user.validate({"name": "Ann", "address": {"street": 1, "zip": "x"}})
        assert [e.path for e in result.expectations] == ["address.street", "address.zip"]
        assert result.description.startswith("address.street: ")

    def test_list_paths(self):
        """Test that list items inside maps carry bracketed paths."""
        v = schema({"items": list_each(schema({"name": is_str()}))})
        result = v.validate({"items": [{"name": "a"}, {"name": 2}]})
        assert result.first_expectation.path == "items[1].name"

    def test_coerced_output(self):
        """Test that the result holds coerced field values and the original is untouched."""
        v = schema({"age": to_int(is_gte(0)), "name": trim()})
        value = {"age": "41", "name": " Ann ", "extra": True}
        result = v.validate(value)
        assert result.value == {"age": 41, "name": "Ann", "extra": True}
        assert result.original_value is value
        assert value["age"] == "41"

    def test_message_override(self):
        """Test replacing every field message while keeping paths."""
        v = schema({"a": is_int(), "b": is_int()}, message="bad field")
        result = v.validate({"a": "x", "b": "y"})
        assert [e.description for e in result.expectations] == ["a: bad field", "b: bad field"]

    def test_non_string_keys(self):
        """Test integer keys in paths."""
        result = schema({1: is_str()}).validate({1: 2})
        assert result.first_expectation.path == "[1]"


class TestStrictSchema:
    """Test rejection of unknown keys."""

    def test_unknown_keys(self):
        """Test that keys without a validator are reported."""
        result = strict_schema({"a": is_int()}).validate({"a": 1, "b": 2, "c": 3})
        e = result.first_expectation
        assert e.code == ExpectationCodes.STRUCTURE_UNKNOWN_KEY
        assert e.data == {"keys": ["b", "c"]}

    def test_known_keys_only(self):
        """Test that a mapping with only known keys passes."""
        assert strict_schema({"a": is_int()}).validate({"a": 1}).is_valid


class TestLists:
    """Test list validators."""

    def test_list_each(self):
        """Test validating every item."""
        result = list_each(is_int()).validate([1, "a", 3, "b"])
        assert [e.path for e in result.expectations] == ["[1]", "[3]"]

    def test_list_each_coerces(self):
        """Test that coerced items are returned in a new list."""
        value = ["1", "2"]
        result = list_each(to_int()).validate(value)
        assert result.value == [1, 2]
        assert value == ["1", "2"]

    def test_list_each_nullable_items(self):
        """Test that None items pass a nullable item validator."""
        assert list_each(is_int().nullable()).validate([1, None]).is_valid
        assert not list_each(is_int()).validate([1, None]).is_valid

    def test_list_each_rejects_strings(self):
        """Test that strings are not treated as lists."""
        result = list_each(is_str()).validate("abc")
        assert result.first_expectation.code == ExpectationCodes.TYPE_MISMATCH

    def test_list_schema(self):
        """Test position-by-position validation."""
        v = list_schema([is_str(), is_int()])
        assert v.validate(["a", 1]).is_valid
        result = v.validate([1, "a"])
        assert [e.path for e in result.expectations] == ["[0]", "[1]"]

    def test_list_schema_length(self):
        """Test that the list length must match."""
        result = list_schema([is_str(), is_int()]).validate(["a"])
        e = result.first_expectation
        assert e.code == ExpectationCodes.VALUE_LENGTH_OUT_OF_RANGE
        assert e.data == {"length": 1, "expected": 2}


class TestGetField:
    """Test validating a single field."""

    def test_passes_mapping_through(self):
        """Test that the mapping itself is the result value."""
        value = {"a": "1"}
        result = get_field("a", to_int()).validate(value)
        assert result.value is value

    def test_failure_path(self):
        """Test that failures carry the key."""
        result = get_field("a", is_int()).validate({"a": "x"})
        assert result.first_expectation.path == "a"

    def test_missing_key_is_absent(self):
        """Test that a missing key counts as absent."""
        assert get_field("a", is_int().optional()).validate({}).is_valid
        assert not get_field("a", is_int()).validate({}).is_valid


class TestRecursion:
    """Test recursive schemas via lazy."""

    def test_tree(self):
        """Test a self-referencing node schema."""
        node = schema({
            "name": is_str(),
            "children": list_each(lazy(lambda: node)).optional(),
        })
        tree = {"name": "root", "children": [{"name": "a"}, {"name": "b", "children": [{"name": 3}]}]}
        result = node.validate(tree)
        assert result.first_expectation.path == "children[1].children[0].name"
        assert node.validate({"name": "leaf"}).is_valid

    def test_lazy_holds_no_state(self):
        """Test that each evaluation resolves the reference again."""
        current = [is_int()]
        ref = lazy(lambda: current[0])
        assert ref.validate(1).is_valid
        current[0] = is_str()
        assert ref.validate("a").is_valid
        assert not ref.validate(1).is_valid
