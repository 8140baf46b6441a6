"""Leaf validators: type, comparison, number, string, date, JSON and collection checks.
"""

from . import cached
from .cached import *  # noqa: F403
from .collection import (
    contains_key,
    contains_keys,
    contains_values,
    list_contains,
    list_empty,
    list_is_of_length,
    list_length,
    list_not_empty,
)
from .comparison import Length, contains, is_deep_eq, is_eq, is_one_of, length
from .date import (
    is_date_after,
    is_date_before,
    is_date_between,
    is_date_in_future,
    is_date_in_past,
    is_date_same_day,
)
from .json import (
    JsonArrayEvery,
    is_json_array,
    is_json_container,
    is_json_object,
    json_array_every,
    json_array_length,
    json_has_keys,
)
from .number import is_gt, is_gte, is_in_range, is_lt, is_lte
from .string import (
    is_date_string,
    is_email,
    is_float_string,
    is_int_string,
    is_lower_case,
    is_number_string,
    is_strict_url,
    is_upper_case,
    is_url,
    is_uuid_v4,
    string_contains,
    string_empty,
    string_is_of_length,
    string_length,
    string_matches_pattern,
    string_not_empty,
)
from .types import (
    is_bool,
    is_callable,
    is_datetime,
    is_dict,
    is_float,
    is_int,
    is_iterable,
    is_list,
    is_none,
    is_number,
    is_str,
    is_type,
    type_expectation,
    type_name,
)

__all__ = [
    # Types
    "is_type",
    "is_none",
    "is_str",
    "is_int",
    "is_float",
    "is_number",
    "is_bool",
    "is_list",
    "is_dict",
    "is_datetime",
    "is_callable",
    "is_iterable",
    "type_expectation",
    "type_name",
    # Comparison
    "is_eq",
    "is_deep_eq",
    "is_one_of",
    "length",
    "Length",
    "contains",
    # Numbers
    "is_lt",
    "is_lte",
    "is_gt",
    "is_gte",
    "is_in_range",
    # Strings
    "string_length",
    "string_is_of_length",
    "string_contains",
    "string_empty",
    "string_not_empty",
    "string_matches_pattern",
    "is_lower_case",
    "is_upper_case",
    "is_email",
    "is_url",
    "is_strict_url",
    "is_uuid_v4",
    "is_int_string",
    "is_float_string",
    "is_number_string",
    "is_date_string",
    # Dates
    "is_date_before",
    "is_date_after",
    "is_date_between",
    "is_date_same_day",
    "is_date_in_past",
    "is_date_in_future",
    # JSON
    "is_json_container",
    "is_json_object",
    "is_json_array",
    "json_has_keys",
    "json_array_length",
    "json_array_every",
    "JsonArrayEvery",
    # Collections
    "contains_key",
    "contains_keys",
    "contains_values",
    "list_length",
    "list_is_of_length",
    "list_contains",
    "list_empty",
    "list_not_empty",
    # Shared instances
    "cached",
    *cached.__all__,
]
