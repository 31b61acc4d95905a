from kindred_paths.models.blueprint import BLUEPRINT_FIELDS, Blueprint, BlueprintWithSource
from kindred_paths.models.card import Card
from kindred_paths.models.card_face import (
    CARD_RARITIES,
    CARD_TYPES,
    PREDEFINED_TOKEN_NAMES,
    TOKEN_CARD_TYPES,
    CardFace,
    color_of,
)
from kindred_paths.models.colors import (
    CARD_COLORS,
    WUBRG,
    color_to_long,
    color_to_short,
    to_ordered_colors,
)
from kindred_paths.models.failure import (
    BlueprintValidationResult,
    CardValidationError,
    CriteriaFailureReason,
    SlotStatus,
    SlotStatusResult,
)
from kindred_paths.models.layout import Layout
from kindred_paths.models.rules import (
    LoyaltyAbility,
    Pt,
    Rule,
    RuleVariant,
    loyalty_cost_as_string,
    parse_loyalty_ability,
)
from kindred_paths.models.serialized import SerializedCard, SerializedCardFace
from kindred_paths.models.set_document import SKIP, Archetype, Cycle, Slot
from kindred_paths.models.typography import capitalize, enumerate_values

__all__ = [
    "BLUEPRINT_FIELDS",
    "CARD_COLORS",
    "CARD_RARITIES",
    "CARD_TYPES",
    "PREDEFINED_TOKEN_NAMES",
    "SKIP",
    "TOKEN_CARD_TYPES",
    "WUBRG",
    "Archetype",
    "Blueprint",
    "BlueprintValidationResult",
    "BlueprintWithSource",
    "Card",
    "CardFace",
    "CardValidationError",
    "CriteriaFailureReason",
    "Cycle",
    "Layout",
    "LoyaltyAbility",
    "Pt",
    "Rule",
    "RuleVariant",
    "SerializedCard",
    "SerializedCardFace",
    "Slot",
    "SlotStatus",
    "SlotStatusResult",
    "capitalize",
    "color_of",
    "color_to_long",
    "color_to_short",
    "enumerate_values",
    "loyalty_cost_as_string",
    "parse_loyalty_ability",
    "to_ordered_colors",
]
