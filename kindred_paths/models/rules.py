"""
Rule fragments and planeswalker loyalty abilities.

A card's printed text is stored as an ordered list of typed fragments. The
fragment variant decides how it is rendered (see CardFace.render_rules).
"""

import re
from dataclasses import dataclass
from enum import Enum

from kindred_paths.models.serialized import SerializedPt, SerializedRule

# "+2: ", "-3: ", "0: " or "-X: " at the start of an ability
LOYALTY_ABILITY_PATTERN = re.compile(r"^([+-][1-9]\d*?|0|-X)(: )")

# Sort value of an "-X" cost when checking loyalty ability order
VARIABLE_LOYALTY_SORT_VALUE = -9999


class RuleVariant(str, Enum):
    """Kind of rules text fragment."""

    CARD_TYPE_REMINDER = "card-type-reminder"
    KEYWORD = "keyword"
    ABILITY = "ability"
    INLINE_REMINDER = "inline-reminder"
    FLAVOR = "flavor"


@dataclass(frozen=True, slots=True)
class Rule:
    """
    One fragment of printed card text.

    Attributes:
        variant: How the fragment is rendered
        content: Raw text, "~" stands for the card's own name
    """

    variant: RuleVariant
    content: str

    @classmethod
    def from_json(cls, data: SerializedRule) -> "Rule":
        return cls(variant=RuleVariant(data["variant"]), content=data["content"])

    def to_json(self) -> SerializedRule:
        return {"variant": self.variant.value, "content": self.content}


@dataclass(frozen=True, slots=True)
class Pt:
    """Power and toughness. Either may be "*" (defined by rules text)."""

    power: int | str
    toughness: int | str

    @classmethod
    def from_json(cls, data: SerializedPt) -> "Pt":
        return cls(power=data["power"], toughness=data["toughness"])

    def to_json(self) -> SerializedPt:
        return {"power": self.power, "toughness": self.toughness}

    def __str__(self) -> str:
        return f"{self.power}/{self.toughness}"


LoyaltyCost = int | str


@dataclass(frozen=True, slots=True)
class LoyaltyAbility:
    """A planeswalker ability with its loyalty cost split off."""

    cost: LoyaltyCost
    content: str


def loyalty_cost_as_string(cost: LoyaltyCost) -> str:
    """Render a loyalty cost the way it is printed: "+2", "0", "-3", "-X"."""
    if isinstance(cost, str):
        return cost
    if cost > 0:
        return f"+{cost}"
    return str(cost)


def parse_loyalty_ability(rule: Rule) -> LoyaltyAbility | None:
    """
    Split an ability rule into loyalty cost and effect.

    Returns None for anything that is not an ability starting with a cost.
    """
    if rule.variant != RuleVariant.ABILITY:
        return None
    match = LOYALTY_ABILITY_PATTERN.match(rule.content)
    if match is None:
        return None
    cost_text = match.group(1)
    content = rule.content[match.end() :]
    if cost_text == "-X":
        return LoyaltyAbility(cost="-X", content=content)
    return LoyaltyAbility(cost=int(cost_text), content=content)
