"""Criteria on boolean values."""

from typing import Any, Literal, NotRequired, TypedDict

BooleanCriteriaKey = Literal["boolean/true", "boolean/false"]
BOOLEAN_CRITERIA_KEYS: tuple[BooleanCriteriaKey, ...] = ("boolean/true", "boolean/false")


class BooleanCriteria(TypedDict):
    key: BooleanCriteriaKey
    value: NotRequired[None]


def check_boolean_criteria(criteria: BooleanCriteria, value: Any) -> bool:
    if not isinstance(value, bool):
        return False
    key = criteria["key"]
    if key == "boolean/true":
        return value
    if key == "boolean/false":
        return not value
    raise ValueError(f"Unknown boolean criteria: {key}")
