"""Shared instances of the zero-argument validators.

Validators hold no per-call state, so one instance can back every schema that
needs it. ``IS_STR`` reads the same as ``is_str()`` without building a new
validator at each use.
"""

from __future__ import annotations

from .collection import list_empty, list_not_empty
from .json import is_json_array, is_json_container, is_json_object
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
    string_empty,
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
)

# Types
IS_NONE = is_none()
IS_STR = is_str()
IS_INT = is_int()
IS_FLOAT = is_float()
IS_NUMBER = is_number()
IS_BOOL = is_bool()
IS_LIST = is_list()
IS_DICT = is_dict()
IS_DATETIME = is_datetime()
IS_CALLABLE = is_callable()
IS_ITERABLE = is_iterable()

# Strings
STRING_EMPTY = string_empty()
STRING_NOT_EMPTY = string_not_empty()
IS_LOWER_CASE = is_lower_case()
IS_UPPER_CASE = is_upper_case()
IS_EMAIL = is_email()
IS_URL = is_url()
IS_STRICT_URL = is_strict_url()
IS_UUID_V4 = is_uuid_v4()
IS_INT_STRING = is_int_string()
IS_FLOAT_STRING = is_float_string()
IS_NUMBER_STRING = is_number_string()
IS_DATE_STRING = is_date_string()

# Collections and JSON
LIST_EMPTY = list_empty()
LIST_NOT_EMPTY = list_not_empty()
IS_JSON_CONTAINER = is_json_container()
IS_JSON_OBJECT = is_json_object()
IS_JSON_ARRAY = is_json_array()

__all__ = [
    "IS_NONE",
    "IS_STR",
    "IS_INT",
    "IS_FLOAT",
    "IS_NUMBER",
    "IS_BOOL",
    "IS_LIST",
    "IS_DICT",
    "IS_DATETIME",
    "IS_CALLABLE",
    "IS_ITERABLE",
    "STRING_EMPTY",
    "STRING_NOT_EMPTY",
    "IS_LOWER_CASE",
    "IS_UPPER_CASE",
    "IS_EMAIL",
    "IS_URL",
    "IS_STRICT_URL",
    "IS_UUID_V4",
    "IS_INT_STRING",
    "IS_FLOAT_STRING",
    "IS_NUMBER_STRING",
    "IS_DATE_STRING",
    "LIST_EMPTY",
    "LIST_NOT_EMPTY",
    "IS_JSON_CONTAINER",
    "IS_JSON_OBJECT",
    "IS_JSON_ARRAY",
]
