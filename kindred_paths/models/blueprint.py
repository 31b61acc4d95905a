"""
Blueprints — named bundles of criteria across card fields.

A blueprint maps a card field to the criteria that field must meet. Field
names are the wire names used by the set documents.
"""

from dataclasses import dataclass
from typing import Any, TypedDict


class Blueprint(TypedDict, total=False):
    name: list[dict[str, Any]]
    rarity: list[dict[str, Any]]
    isToken: list[dict[str, Any]]
    supertype: list[dict[str, Any]]
    tokenColors: list[dict[str, Any]]
    types: list[dict[str, Any]]
    subtypes: list[dict[str, Any]]
    manaValue: list[dict[str, Any]]
    color: list[dict[str, Any]]
    colorIdentity: list[dict[str, Any]]
    rules: list[dict[str, Any]]
    pt: list[dict[str, Any]]
    power: list[dict[str, Any]]
    toughness: list[dict[str, Any]]
    powerToughnessDiff: list[dict[str, Any]]
    loyalty: list[dict[str, Any]]
    tags: list[dict[str, Any]]
    creatableTokens: list[dict[str, Any]]


BLUEPRINT_FIELDS: tuple[str, ...] = tuple(Blueprint.__annotations__)


@dataclass(frozen=True, slots=True)
class BlueprintWithSource:
    """
    A blueprint and the scope it was defined at.

    Attributes:
        source: Scope label ("set", "archetype", "cycle", "slot")
        blueprint: The criteria per field
    """

    source: str
    blueprint: Blueprint
