"""Criteria on lists of strings (types, colors, token names, ...)."""

from typing import Any, Literal, TypedDict

from kindred_paths.criteria.number_criteria import check_number_criteria

StringArrayCriteriaKey = Literal[
    "string-array/allow",
    "string-array/deny",
    "string-array/includes-one-of",
    "string-array/includes-all-of",
    "string-array/length",
]
STRING_ARRAY_CRITERIA_KEYS: tuple[StringArrayCriteriaKey, ...] = (
    "string-array/allow",
    "string-array/deny",
    "string-array/includes-one-of",
    "string-array/includes-all-of",
    "string-array/length",
)


class StringArrayCriteria(TypedDict):
    key: StringArrayCriteriaKey
    # list[str], or NumberCriteria for length
    value: Any


def is_string_array(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def check_string_array_criteria(criteria: StringArrayCriteria, value: Any) -> bool:
    """
    Check a list of strings.

    allow: every item must be in the criteria list (empty list passes).
    deny: no item may be in the criteria list.
    """
    if not is_string_array(value):
        return False
    key = criteria["key"]
    expected = criteria["value"]
    if key == "string-array/includes-one-of":
        return any(item in value for item in expected)
    if key == "string-array/includes-all-of":
        return all(item in value for item in expected)
    if key == "string-array/allow":
        return all(item in expected for item in value)
    if key == "string-array/deny":
        return not any(item in expected for item in value)
    if key == "string-array/length":
        return check_number_criteria(expected, len(value))
    raise ValueError(f"Unknown string-array criteria: {key}")
