"""Criteria on numbers. Booleans are not numbers here."""

from typing import Any, Literal, TypedDict

NumberCriteriaKey = Literal["number/one-of", "number/at-least", "number/at-most", "number/between"]
NUMBER_CRITERIA_KEYS: tuple[NumberCriteriaKey, ...] = (
    "number/one-of",
    "number/at-least",
    "number/at-most",
    "number/between",
)


class NumberCriteria(TypedDict):
    key: NumberCriteriaKey
    # list for one-of, [low, high] for between, a number otherwise
    value: Any


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_number_criteria(criteria: NumberCriteria, value: Any) -> bool:
    if not is_number(value):
        return False
    key = criteria["key"]
    expected = criteria["value"]
    if key == "number/one-of":
        return value in expected
    if key == "number/at-least":
        return value >= expected
    if key == "number/at-most":
        return value <= expected
    if key == "number/between":
        low, high = expected
        return low <= value <= high
    raise ValueError(f"Unknown number criteria: {key}")
