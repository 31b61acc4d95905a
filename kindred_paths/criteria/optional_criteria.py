"""Criteria on whether a value is set at all. None counts as absent."""

from typing import Any, Literal, NotRequired, TypedDict

OptionalCriteriaKey = Literal["optional/present", "optional/absent"]
OPTIONAL_CRITERIA_KEYS: tuple[OptionalCriteriaKey, ...] = ("optional/present", "optional/absent")


class OptionalCriteria(TypedDict):
    key: OptionalCriteriaKey
    value: NotRequired[None]


def check_optional_criteria(criteria: OptionalCriteria, value: Any) -> bool:
    key = criteria["key"]
    if key == "optional/present":
        return value is not None
    if key == "optional/absent":
        return value is None
    raise ValueError(f"Unknown optional criteria: {key}")
