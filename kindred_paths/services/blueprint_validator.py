"""
Blueprint Validator.

Checks a card against the blueprints that apply to it and reports every
criterion it does not meet.

Blueprint criteria may reference archetype metadata with a placeholder
value of the exact form "$[key]" (as a string value or a list element).
Placeholders are resolved before checking; a key the archetype has no value
for resolves to "".

Multi-face cards are checked through their front face.

INVARIANTS:
1. Every criterion of every blueprint is evaluated, nothing short-circuits
2. Failing a blueprint is a result, never an exception
3. Validation is deterministic for unchanged input
"""

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from kindred_paths.criteria import (
    check_boolean_criteria,
    check_number_criteria,
    check_object_criteria,
    check_optional_criteria,
    check_string_array_criteria,
    check_string_criteria,
)
from kindred_paths.models.blueprint import Blueprint, BlueprintWithSource
from kindred_paths.models.card import Card
from kindred_paths.models.failure import BlueprintValidationResult, CriteriaFailureReason
from kindred_paths.models.rules import RuleVariant

logger = logging.getLogger(__name__)

METADATA_PLACEHOLDER_PATTERN = re.compile(r"^\$\[(.+?)]$")

Metadata = Mapping[str, str | None]


# =============================================================================
# METADATA PLACEHOLDERS
# =============================================================================


def _resolve_value(value: Any, metadata: Metadata) -> Any:
    if not isinstance(value, str):
        return value
    match = METADATA_PLACEHOLDER_PATTERN.match(value)
    if match is None:
        return value
    return metadata.get(match.group(1)) or ""


def resolve_metadata_placeholders(criteria: dict[str, Any], metadata: Metadata) -> dict[str, Any]:
    """
    Copy of the criterion with "$[key]" values replaced by metadata values.

    Only the criterion's own value is resolved: a string value, or the
    string elements of a list value.
    """
    value = criteria.get("value")
    if isinstance(value, str):
        return {**criteria, "value": _resolve_value(value, metadata)}
    if isinstance(value, list):
        return {**criteria, "value": [_resolve_value(item, metadata) for item in value]}
    return criteria


def resolve_blueprint(blueprint: Blueprint, metadata: Metadata) -> Blueprint:
    resolved: dict[str, Any] = {
        field: [resolve_metadata_placeholders(c, metadata) for c in criteria]
        for field, criteria in blueprint.items()
    }
    return resolved  # type: ignore[return-value]


# =============================================================================
# CARD FIELDS
# =============================================================================


def _rules_text(card: Card) -> str:
    return "\n".join(
        rule.content
        for rule in card.front.rules
        if rule.variant in (RuleVariant.KEYWORD, RuleVariant.ABILITY)
    ).lower()


def _pt(card: Card) -> dict[str, Any] | None:
    pt = card.front.pt
    return pt.to_json() if pt is not None else None  # type: ignore[return-value]


def _power(card: Card) -> int | str | None:
    pt = card.front.pt
    return pt.power if pt is not None else None


def _toughness(card: Card) -> int | str | None:
    pt = card.front.pt
    return pt.toughness if pt is not None else None


def _power_toughness_diff(card: Card) -> int | None:
    """Power minus toughness, missing stats count as 0, "*" has no difference."""
    power = _power(card)
    toughness = _toughness(card)
    power = 0 if power is None else power
    toughness = 0 if toughness is None else toughness
    if isinstance(power, str) or isinstance(toughness, str):
        return None
    return power - toughness


def _check_supertype(criteria: dict[str, Any], supertype: str | None) -> bool:
    # Presence checks see None, value checks see "" for a missing supertype
    if criteria["key"].startswith("optional/"):
        return check_optional_criteria(criteria, supertype)  # type: ignore[arg-type]
    return check_string_criteria(criteria, supertype or "")  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class _FieldCheck:
    location: str
    extract: Callable[[Card], Any]
    check: Callable[[Any, Any], bool]


# Blueprint field -> (reported location, card value, criteria family check)
_FIELD_CHECKS: dict[str, _FieldCheck] = {
    "name": _FieldCheck("name", lambda card: card.front.name, check_string_criteria),
    "rarity": _FieldCheck("rarity", lambda card: card.rarity, check_string_criteria),
    "isToken": _FieldCheck("isToken", lambda card: card.is_token, check_boolean_criteria),
    "supertype": _FieldCheck("supertype", lambda card: card.front.supertype, _check_supertype),
    "tokenColors": _FieldCheck(
        "tokenColors", lambda card: card.front.given_colors, check_string_array_criteria
    ),
    "types": _FieldCheck("types", lambda card: card.front.types, check_string_array_criteria),
    "subtypes": _FieldCheck(
        "subtypes", lambda card: card.front.subtypes, check_string_array_criteria
    ),
    "manaValue": _FieldCheck(
        "manaValue", lambda card: card.front.mana_value(), check_number_criteria
    ),
    "color": _FieldCheck("color", lambda card: card.front.color(), check_string_array_criteria),
    "colorIdentity": _FieldCheck(
        "colorIdentity", lambda card: card.front.color_identity(), check_string_array_criteria
    ),
    "rules": _FieldCheck("rules", _rules_text, check_string_criteria),
    "pt": _FieldCheck("pt", _pt, check_optional_criteria),
    "power": _FieldCheck("pt.power", _power, check_number_criteria),
    "toughness": _FieldCheck("pt.toughness", _toughness, check_number_criteria),
    "powerToughnessDiff": _FieldCheck(
        "pt.power - pt.toughness", _power_toughness_diff, check_number_criteria
    ),
    "loyalty": _FieldCheck("loyalty", lambda card: card.front.loyalty, check_number_criteria),
    "tags": _FieldCheck("tags", lambda card: card.tags, check_object_criteria),
    "creatableTokens": _FieldCheck(
        "creatableTokens",
        lambda card: card.front.creatable_token_names(),
        check_string_array_criteria,
    ),
}


# =============================================================================
# VALIDATION
# =============================================================================


def validate_blueprint(source: str, blueprint: Blueprint, card: Card) -> list[CriteriaFailureReason]:
    """
    Check one (already resolved) blueprint against a card.

    Returns:
        One reason per unmet criterion, in blueprint field order
    """
    reasons: list[CriteriaFailureReason] = []
    for field, criteria_list in blueprint.items():
        field_check = _FIELD_CHECKS.get(field)
        if field_check is None:
            logger.warning(
                "blueprint_field_unknown",
                extra={"source": source, "field": field, "card_id": card.id},
            )
            continue
        if not criteria_list:
            continue
        value = field_check.extract(card)
        for criteria in criteria_list:
            if not field_check.check(criteria, value):
                reasons.append(
                    CriteriaFailureReason(
                        source=source,
                        location=field_check.location,
                        criteria=criteria,
                        value=value,
                    )
                )
    return reasons


class BlueprintValidator:
    """Validates cards against stacked blueprints with archetype metadata."""

    def validate(
        self,
        metadata: Metadata,
        blueprints: Sequence[BlueprintWithSource],
        card: Card,
    ) -> BlueprintValidationResult:
        """
        Check a card against every blueprint.

        Args:
            metadata: Values for "$[key]" placeholders
            blueprints: Blueprints with their scope label, all of them apply
            card: The card to check

        Returns:
            Success, or every unmet criterion across all blueprints
        """
        reasons: list[CriteriaFailureReason] = []
        for entry in blueprints:
            resolved = resolve_blueprint(entry.blueprint, metadata)
            reasons.extend(validate_blueprint(entry.source, resolved, card))

        logger.debug(
            "blueprint_validated",
            extra={
                "card_id": card.id,
                "blueprints": len(blueprints),
                "failures": len(reasons),
            },
        )
        return BlueprintValidationResult.from_reasons(reasons)
