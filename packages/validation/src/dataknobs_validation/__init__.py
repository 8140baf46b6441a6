"""DataKnobs Validation Package - Composable runtime validation of data shapes.

The `dataknobs-validation` package checks untrusted values (parsed JSON, form
input, configuration) against composable validators and reports every failure
as a structured, machine-readable expectation.

Modules:
    expectation: Expectation, one diagnostic with message, path, code and data
    result: Result, the outcome of a validation
    validator: Validator base class, predicates and lazy validators
    combinators: all / any / none / not composition and message overrides
    presence: nullable, optional and required presence rules
    contextual: when, resolve and switch_by validators that see the parent map
    structure: schema, list and field validators with error paths
    transformers: coercions and normalizers that change the validated value
    builder: fluent chains of coercions and constraints
    validators: leaf validators for types, numbers, strings, dates and JSON,
        with shared zero-argument instances in validators.cached
    settings: report settings, loadable from YAML
    formatting: human-readable failure reports
    exceptions: Custom exceptions for error handling

Quick Examples:

    Validate a record:

    ```python
    from dataknobs_validation import schema, is_str, to_int, is_gte, list_each

    user = schema({
        "name": is_str(),
        "age": to_int(is_gte(0)),
        "tags": list_each(is_str()).optional(),
    })

    result = user.validate({"name": "Ann", "age": "41"})
    result.value  # {"name": "Ann", "age": 41}
    ```

    Build a chain:

    ```python
    from dataknobs_validation import builder

    port = builder().string().trim().to_int().between(1, 65535).build()
    port.validate_or_raise(" 8080 ")  # 8080
    ```

    Validate asynchronously:

    ```python
    from dataknobs_validation import builder

    async def is_free(name):
        return name not in await load_taken_names()

    username = builder().string().length_min(3).async_check(is_free, "name is taken")
    result = await username.validate_async("alice")
    ```
"""

from . import validators
from .builder import (
    BaseBuilder,
    BoolBuilder,
    Chain,
    DateTimeBuilder,
    DictBuilder,
    FloatBuilder,
    GenericBuilder,
    IntBuilder,
    JsonBuilder,
    ListBuilder,
    NumberBuilder,
    PresenceFlags,
    RootBuilder,
    StringBuilder,
    builder,
)
from .codes import ExpectationCodes
from .combinators import (
    All,
    AnyOf,
    CombinatorPolicy,
    MultiValidator,
    NoneOf,
    Not,
    RaiseInstead,
    WithExpectation,
    all_of,
    any_of,
    negate,
    none_of,
    not_,
    raise_instead,
    with_expectation,
)
from .contextual import (
    ContextualValidator,
    Resolve,
    SwitchBy,
    When,
    required_when,
    resolve,
    switch_by,
    when,
)
from .exceptions import (
    AsyncValidatorError,
    DataknobsValidationError,
    ValidationSettingsError,
    ValidatorFailedError,
)
from .expectation import Expectation
from .formatting import build_validation_failure_message, build_validation_message
from .presence import is_present, nullable, optional, required
from .result import Result
from .settings import DEFAULT_REPORT_SETTINGS, ReportSettings, load_report_settings
from .structure import (
    GetField,
    ListEach,
    ListSchema,
    Schema,
    get_field,
    list_each,
    list_schema,
    schema,
    strict_schema,
)
from .transformers import (
    Coercion,
    CoercionKind,
    collapse_whitespace,
    default_to,
    flatten_keys,
    pick_keys,
    pluck_key,
    split,
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
from .validator import (
    FunctionValidator,
    Lazy,
    Predicate,
    Validator,
    always_valid,
    lazy,
    predicate,
    validator,
)
from .validators import *  # noqa: F403

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Expectation",
    "ExpectationCodes",
    "Result",
    "Validator",
    "FunctionValidator",
    "Predicate",
    "Lazy",
    "validator",
    "predicate",
    "lazy",
    "always_valid",
    # Combinators
    "CombinatorPolicy",
    "MultiValidator",
    "All",
    "AnyOf",
    "NoneOf",
    "Not",
    "WithExpectation",
    "RaiseInstead",
    "all_of",
    "any_of",
    "none_of",
    "not_",
    "negate",
    "with_expectation",
    "raise_instead",
    # Presence
    "nullable",
    "optional",
    "required",
    "is_present",
    # Contextual
    "ContextualValidator",
    "When",
    "Resolve",
    "SwitchBy",
    "when",
    "required_when",
    "resolve",
    "switch_by",
    # Structure
    "Schema",
    "ListEach",
    "ListSchema",
    "GetField",
    "schema",
    "strict_schema",
    "list_each",
    "list_schema",
    "get_field",
    # Transformers
    "Coercion",
    "CoercionKind",
    "to_int",
    "to_int_strict",
    "to_int_safe",
    "to_float",
    "to_number",
    "to_bool",
    "to_bool_strict",
    "to_bool_lenient",
    "to_str",
    "to_datetime",
    "to_json_decoded",
    "trim",
    "collapse_whitespace",
    "to_lower",
    "to_upper",
    "split",
    "pick_keys",
    "pluck_key",
    "flatten_keys",
    "default_to",
    "transform",
    # Builder
    "builder",
    "RootBuilder",
    "BaseBuilder",
    "Chain",
    "PresenceFlags",
    "StringBuilder",
    "NumberBuilder",
    "IntBuilder",
    "FloatBuilder",
    "BoolBuilder",
    "DateTimeBuilder",
    "ListBuilder",
    "DictBuilder",
    "JsonBuilder",
    "GenericBuilder",
    # Reporting
    "ReportSettings",
    "DEFAULT_REPORT_SETTINGS",
    "load_report_settings",
    "build_validation_failure_message",
    "build_validation_message",
    # Exceptions
    "DataknobsValidationError",
    "AsyncValidatorError",
    "ValidatorFailedError",
    "ValidationSettingsError",
    # Leaf validators
    "validators",
    *validators.__all__,
]
