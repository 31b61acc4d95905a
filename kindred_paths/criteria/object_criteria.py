"""Criteria on string-keyed maps such as card tags. One level deep."""

from collections.abc import Mapping
from typing import Any, Literal, TypedDict

from kindred_paths.criteria.boolean_criteria import check_boolean_criteria
from kindred_paths.criteria.number_criteria import check_number_criteria
from kindred_paths.criteria.string_criteria import check_string_criteria

ObjectCriteriaKey = Literal[
    "object/field-present",
    "object/field-absent",
    "object/number-field",
    "object/string-field",
    "object/boolean-field",
]
OBJECT_CRITERIA_KEYS: tuple[ObjectCriteriaKey, ...] = (
    "object/field-present",
    "object/field-absent",
    "object/number-field",
    "object/string-field",
    "object/boolean-field",
)


class ObjectCriteria(TypedDict):
    key: ObjectCriteriaKey
    # field name for present/absent, [field name, nested criteria] otherwise
    value: Any


def check_object_criteria(criteria: ObjectCriteria, value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    key = criteria["key"]
    expected = criteria["value"]
    if key == "object/field-present":
        return expected in value
    if key == "object/field-absent":
        return expected not in value
    if key == "object/number-field":
        field, nested = expected
        return check_number_criteria(nested, value.get(field))
    if key == "object/string-field":
        field, nested = expected
        return check_string_criteria(nested, value.get(field))
    if key == "object/boolean-field":
        field, nested = expected
        return check_boolean_criteria(nested, value.get(field))
    raise ValueError(f"Unknown object criteria: {key}")
