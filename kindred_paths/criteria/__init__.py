"""Typed predicates that constrain one card property each."""

from kindred_paths.criteria.any_criteria import (
    ALL_CRITERIA_KEYS,
    AnyCriteria,
    check_criteria,
    criteria_family,
    default_criteria_for,
)
from kindred_paths.criteria.boolean_criteria import BooleanCriteria, check_boolean_criteria
from kindred_paths.criteria.number_criteria import NumberCriteria, check_number_criteria
from kindred_paths.criteria.object_criteria import ObjectCriteria, check_object_criteria
from kindred_paths.criteria.optional_criteria import OptionalCriteria, check_optional_criteria
from kindred_paths.criteria.string_array_criteria import (
    StringArrayCriteria,
    check_string_array_criteria,
)
from kindred_paths.criteria.string_criteria import StringCriteria, check_string_criteria

__all__ = [
    "ALL_CRITERIA_KEYS",
    "AnyCriteria",
    "BooleanCriteria",
    "NumberCriteria",
    "ObjectCriteria",
    "OptionalCriteria",
    "StringArrayCriteria",
    "StringCriteria",
    "check_boolean_criteria",
    "check_criteria",
    "check_number_criteria",
    "check_object_criteria",
    "check_optional_criteria",
    "check_string_array_criteria",
    "check_string_criteria",
    "criteria_family",
    "default_criteria_for",
]
