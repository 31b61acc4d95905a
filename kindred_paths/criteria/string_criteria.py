"""Criteria on strings. Matching is case-sensitive substring matching."""

from typing import Any, Literal, TypedDict

from kindred_paths.criteria.number_criteria import check_number_criteria

StringCriteriaKey = Literal[
    "string/equal",
    "string/contain-one-of",
    "string/contain-all-of",
    "string/length",
]
STRING_CRITERIA_KEYS: tuple[StringCriteriaKey, ...] = (
    "string/equal",
    "string/contain-one-of",
    "string/contain-all-of",
    "string/length",
)


class StringCriteria(TypedDict):
    key: StringCriteriaKey
    # str for equal, list[str] for contain-*, NumberCriteria for length
    value: Any


def check_string_criteria(criteria: StringCriteria, value: Any) -> bool:
    if not isinstance(value, str):
        return False
    key = criteria["key"]
    expected = criteria["value"]
    if key == "string/equal":
        return value == expected
    if key == "string/contain-one-of":
        return any(part in value for part in expected)
    if key == "string/contain-all-of":
        return all(part in value for part in expected)
    if key == "string/length":
        return check_number_criteria(expected, len(value))
    raise ValueError(f"Unknown string criteria: {key}")
