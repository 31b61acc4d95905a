"""
Criteria Engine — dispatch over the six criteria families.

A criterion is a plain {"key": ..., "value": ...} dict. The part of the key
before the slash names its family, the family decides which runtime type
the checked value must have:

    boolean/*       bool
    optional/*      anything, None means absent
    number/*        int or float (not bool)
    string/*        str
    string-array/*  list of str
    object/*        mapping

INVARIANTS:
1. A value of the wrong type fails the criterion, it never raises
2. An unknown key raises ValueError (malformed criteria, not a failed check)
3. Checks are pure; the same criteria and value always give the same answer
"""

from typing import Any, Literal

from kindred_paths.criteria.boolean_criteria import (
    BOOLEAN_CRITERIA_KEYS,
    BooleanCriteria,
    check_boolean_criteria,
)
from kindred_paths.criteria.number_criteria import (
    NUMBER_CRITERIA_KEYS,
    NumberCriteria,
    check_number_criteria,
)
from kindred_paths.criteria.object_criteria import (
    OBJECT_CRITERIA_KEYS,
    ObjectCriteria,
    check_object_criteria,
)
from kindred_paths.criteria.optional_criteria import (
    OPTIONAL_CRITERIA_KEYS,
    OptionalCriteria,
    check_optional_criteria,
)
from kindred_paths.criteria.string_array_criteria import (
    STRING_ARRAY_CRITERIA_KEYS,
    StringArrayCriteria,
    check_string_array_criteria,
)
from kindred_paths.criteria.string_criteria import (
    STRING_CRITERIA_KEYS,
    StringCriteria,
    check_string_criteria,
)

AnyCriteria = (
    BooleanCriteria
    | NumberCriteria
    | ObjectCriteria
    | OptionalCriteria
    | StringArrayCriteria
    | StringCriteria
)

CriteriaFamily = Literal["string", "boolean", "optional", "string-array", "number", "object"]

ALL_CRITERIA_KEYS: tuple[str, ...] = (
    *STRING_CRITERIA_KEYS,
    *BOOLEAN_CRITERIA_KEYS,
    *OPTIONAL_CRITERIA_KEYS,
    *STRING_ARRAY_CRITERIA_KEYS,
    *NUMBER_CRITERIA_KEYS,
    *OBJECT_CRITERIA_KEYS,
)

_CHECKS = {
    "string": check_string_criteria,
    "boolean": check_boolean_criteria,
    "optional": check_optional_criteria,
    "string-array": check_string_array_criteria,
    "number": check_number_criteria,
    "object": check_object_criteria,
}


def criteria_family(key: str) -> CriteriaFamily:
    """Family of a criteria key ("number/between" -> "number")."""
    if key not in ALL_CRITERIA_KEYS:
        raise ValueError(f"Unknown criteria key: {key}")
    family: CriteriaFamily = key.split("/", 1)[0]  # type: ignore[assignment]
    return family


def check_criteria(criteria: AnyCriteria, value: Any) -> bool:
    """Check a criterion of any family against a value."""
    return _CHECKS[criteria_family(criteria["key"])](criteria, value)  # type: ignore[operator]


def default_criteria_for(key: str, default_string_value: str = "abc") -> dict[str, Any]:
    """
    A ready-to-edit criterion for a key, as offered by blueprint editors.

    Raises:
        ValueError: If the key is unknown
    """
    if key in ("boolean/true", "boolean/false", "optional/present", "optional/absent"):
        return {"key": key}
    if key == "number/one-of":
        return {"key": key, "value": [0]}
    if key == "number/at-least":
        return {"key": key, "value": 0}
    if key == "number/at-most":
        return {"key": key, "value": 5}
    if key == "number/between":
        return {"key": key, "value": [0, 5]}
    if key in ("object/field-present", "object/field-absent", "string/equal"):
        return {"key": key, "value": default_string_value}
    if key == "object/number-field":
        return {"key": key, "value": [default_string_value, {"key": "number/one-of", "value": [0]}]}
    if key == "object/string-field":
        return {
            "key": key,
            "value": [default_string_value, {"key": "string/equal", "value": default_string_value}],
        }
    if key == "object/boolean-field":
        return {"key": key, "value": [default_string_value, {"key": "boolean/true"}]}
    if key in (
        "string-array/includes-one-of",
        "string-array/includes-all-of",
        "string-array/allow",
        "string-array/deny",
        "string/contain-one-of",
        "string/contain-all-of",
    ):
        return {"key": key, "value": [default_string_value]}
    if key in ("string-array/length", "string/length"):
        return {"key": key, "value": {"key": "number/at-least", "value": 1}}
    raise ValueError(f"Unknown criteria key: {key}")
