"""
Tests for the Criteria Engine.

These tests verify:
- Every key of every family
- Values of the wrong type fail instead of raising
- Unknown keys raise ValueError
- Default criteria exist for every key
"""

from typing import Any

import pytest

from kindred_paths.criteria import (
    ALL_CRITERIA_KEYS,
    check_boolean_criteria,
    check_criteria,
    check_number_criteria,
    check_object_criteria,
    check_optional_criteria,
    check_string_array_criteria,
    check_string_criteria,
    criteria_family,
    default_criteria_for,
)


class TestBooleanCriteria:
    def test_true_and_false(self) -> None:
        assert check_boolean_criteria({"key": "boolean/true"}, True)
        assert not check_boolean_criteria({"key": "boolean/true"}, False)
        assert check_boolean_criteria({"key": "boolean/false"}, False)

    @pytest.mark.parametrize("value", [1, 0, "true", None])
    def test_non_boolean_fails(self, value: Any) -> None:
        assert not check_boolean_criteria({"key": "boolean/true"}, value)
        assert not check_boolean_criteria({"key": "boolean/false"}, value)


class TestOptionalCriteria:
    def test_present_and_absent(self) -> None:
        assert check_optional_criteria({"key": "optional/present"}, "legendary")
        assert check_optional_criteria({"key": "optional/present"}, 0)
        assert not check_optional_criteria({"key": "optional/present"}, None)
        assert check_optional_criteria({"key": "optional/absent"}, None)


class TestNumberCriteria:
    def test_one_of(self) -> None:
        criteria = {"key": "number/one-of", "value": [1, 3]}

        assert check_number_criteria(criteria, 3)
        assert not check_number_criteria(criteria, 2)

    def test_at_least_and_at_most(self) -> None:
        assert check_number_criteria({"key": "number/at-least", "value": 2}, 2)
        assert not check_number_criteria({"key": "number/at-least", "value": 2}, 1)
        assert check_number_criteria({"key": "number/at-most", "value": 2}, 2)
        assert not check_number_criteria({"key": "number/at-most", "value": 2}, 3)

    @pytest.mark.parametrize(("value", "expected"), [(1, False), (2, True), (5, True), (6, False)])
    def test_between_is_inclusive(self, value: int, expected: bool) -> None:
        assert check_number_criteria({"key": "number/between", "value": [2, 5]}, value) is expected

    @pytest.mark.parametrize("value", [True, "3", None, [3]])
    def test_non_number_fails(self, value: Any) -> None:
        assert not check_number_criteria({"key": "number/one-of", "value": [1, 3]}, value)


class TestStringCriteria:
    def test_equal_is_case_sensitive(self) -> None:
        assert check_string_criteria({"key": "string/equal", "value": "rare"}, "rare")
        assert not check_string_criteria({"key": "string/equal", "value": "rare"}, "Rare")

    def test_contain(self) -> None:
        text = "when ~ enters, draw a card"

        assert check_string_criteria({"key": "string/contain-one-of", "value": ["dies", "enters"]}, text)
        assert not check_string_criteria(
            {"key": "string/contain-all-of", "value": ["dies", "enters"]}, text
        )
        assert check_string_criteria({"key": "string/contain-all-of", "value": ["draw", "enters"]}, text)

    def test_length_uses_number_criteria(self) -> None:
        criteria = {"key": "string/length", "value": {"key": "number/at-most", "value": 5}}

        assert check_string_criteria(criteria, "Sam")
        assert not check_string_criteria(criteria, "Samwise")

    def test_non_string_fails(self) -> None:
        assert not check_string_criteria({"key": "string/equal", "value": "1"}, 1)


class TestStringArrayCriteria:
    def test_includes(self) -> None:
        types = ["artifact", "creature"]

        assert check_string_array_criteria(
            {"key": "string-array/includes-one-of", "value": ["creature", "land"]}, types
        )
        assert not check_string_array_criteria(
            {"key": "string-array/includes-all-of", "value": ["creature", "land"]}, types
        )

    def test_allow_only_listed(self) -> None:
        criteria = {"key": "string-array/allow", "value": ["white", "blue"]}

        assert check_string_array_criteria(criteria, ["white"])
        assert check_string_array_criteria(criteria, [])
        assert not check_string_array_criteria(criteria, ["white", "red"])

    def test_deny(self) -> None:
        criteria = {"key": "string-array/deny", "value": ["red"]}

        assert check_string_array_criteria(criteria, ["white"])
        assert not check_string_array_criteria(criteria, ["white", "red"])

    def test_length(self) -> None:
        criteria = {"key": "string-array/length", "value": {"key": "number/one-of", "value": [2]}}

        assert check_string_array_criteria(criteria, ["a", "b"])
        assert not check_string_array_criteria(criteria, ["a"])

    @pytest.mark.parametrize("value", [None, "white", ["white", 1]])
    def test_non_string_array_fails(self, value: Any) -> None:
        assert not check_string_array_criteria({"key": "string-array/deny", "value": []}, value)


class TestObjectCriteria:
    @pytest.fixture
    def tags(self) -> dict[str, Any]:
        return {"set": "KPA", "deck/main": 2, "reprint": False}

    def test_field_presence(self, tags: dict[str, Any]) -> None:
        assert check_object_criteria({"key": "object/field-present", "value": "set"}, tags)
        assert check_object_criteria({"key": "object/field-absent", "value": "artist"}, tags)
        assert not check_object_criteria({"key": "object/field-absent", "value": "set"}, tags)

    def test_nested_fields(self, tags: dict[str, Any]) -> None:
        assert check_object_criteria(
            {"key": "object/number-field", "value": ["deck/main", {"key": "number/at-least", "value": 1}]},
            tags,
        )
        assert check_object_criteria(
            {"key": "object/string-field", "value": ["set", {"key": "string/equal", "value": "KPA"}]},
            tags,
        )
        assert check_object_criteria(
            {"key": "object/boolean-field", "value": ["reprint", {"key": "boolean/false"}]}, tags
        )

    def test_missing_nested_field_fails(self, tags: dict[str, Any]) -> None:
        assert not check_object_criteria(
            {"key": "object/boolean-field", "value": ["promo", {"key": "boolean/false"}]}, tags
        )

    def test_non_mapping_fails(self) -> None:
        assert not check_object_criteria({"key": "object/field-present", "value": "set"}, ["set"])


class TestDispatch:
    @pytest.mark.parametrize(
        ("key", "family"),
        [
            ("number/between", "number"),
            ("string-array/allow", "string-array"),
            ("object/number-field", "object"),
            ("optional/absent", "optional"),
        ],
    )
    def test_family(self, key: str, family: str) -> None:
        assert criteria_family(key) == family

    def test_check_dispatches_by_key(self) -> None:
        assert check_criteria({"key": "number/at-least", "value": 3}, 4)
        assert not check_criteria({"key": "string/equal", "value": "x"}, 4)

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown criteria key"):
            check_criteria({"key": "number/exactly", "value": 3}, 3)  # type: ignore[typeddict-item]

    @pytest.mark.parametrize("key", ALL_CRITERIA_KEYS)
    def test_default_criteria_is_checkable(self, key: str) -> None:
        criteria = default_criteria_for(key)

        assert criteria["key"] == key
        # Any value of any type is answered without raising
        for value in (None, 0, "abc", ["abc"], {"abc": 0}, True):
            assert isinstance(check_criteria(criteria, value), bool)  # type: ignore[arg-type]

    def test_default_for_unknown_key(self) -> None:
        with pytest.raises(ValueError):
            default_criteria_for("string/regex")
