"""Stable, machine-readable expectation codes.

Codes are dot-namespaced by category (``type``, ``value``, ``structure``,
``logic``) so clients can branch on a failure without parsing messages. New
codes may be added; existing codes are never renamed or removed.
"""

from __future__ import annotations


class ExpectationCodes:
    """Namespace of the built-in expectation codes."""

    # Type
    TYPE_MISMATCH = "type.mismatch"

    # Value
    VALUE_LENGTH_OUT_OF_RANGE = "value.length_out_of_range"
    VALUE_CONTAINS_MISSING = "value.contains_missing"
    VALUE_PATTERN_MISMATCH = "value.pattern_mismatch"
    VALUE_CASE_MISMATCH = "value.case_mismatch"
    VALUE_EQUAL_MISMATCH = "value.equal_mismatch"
    VALUE_DEEP_EQUAL_MISMATCH = "value.deep_equal_mismatch"
    VALUE_MEMBERSHIP_MISMATCH = "value.membership_mismatch"
    VALUE_RANGE_OUT_OF_BOUNDS = "value.range_out_of_bounds"
    VALUE_DATE_OUT_OF_RANGE = "value.date_out_of_range"
    VALUE_DATE_MISMATCH = "value.date_mismatch"
    VALUE_DATE_NOT_PAST = "value.date_not_past"
    VALUE_DATE_NOT_FUTURE = "value.date_not_future"
    VALUE_FORMAT_INVALID = "value.format_invalid"
    VALUE_TYPE_MISMATCH = "value.type_mismatch"
    VALUE_COERCION_FAILED = "value.coercion_failed"

    # Structure
    STRUCTURE_MAP_FIELD_FAILED = "structure.map_field_failed"
    STRUCTURE_UNKNOWN_KEY = "structure.unknown_key"
    STRUCTURE_LIST_ITEM_FAILED = "structure.list_item_failed"

    # Logic
    LOGIC_NOT_EXPECTED = "logic.not_expected"
    LOGIC_PREDICATE_FAILED = "logic.predicate_failed"
    LOGIC_CONTEXTUAL_MISUSE = "logic.contextual_misuse"

    # Legacy, kept for callers that already branch on it
    REQUIRED_MISSING = "required_missing"

    @classmethod
    def all_codes(cls) -> frozenset[str]:
        """Return every built-in code."""
        return frozenset(
            value for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        )

    @staticmethod
    def category(code: str | None) -> str | None:
        """Return the namespace of a code (``"value"`` for ``"value.pattern_mismatch"``).

        Non-namespaced codes have no category.
        """
        if not code or "." not in code:
            return None
        return code.split(".", 1)[0]
