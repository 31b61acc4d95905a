"""
Wire shapes of card documents.

These mirror the JSON exchanged with the storage/HTTP layer, so keys keep
their camelCase spelling. Schema validation happens before data reaches
this package; the shapes here only document what is expected.
"""

from typing import NotRequired, TypedDict


class SerializedRule(TypedDict):
    variant: str
    content: str


class SerializedPt(TypedDict):
    power: int | str
    toughness: int | str


class SerializedCardFace(TypedDict):
    name: str
    types: list[str]
    givenColors: NotRequired[list[str]]
    manaCost: NotRequired[dict[str, int]]
    subtypes: NotRequired[list[str]]
    supertype: NotRequired[str]
    rules: NotRequired[list[SerializedRule]]
    pt: NotRequired[SerializedPt]
    loyalty: NotRequired[int]
    art: NotRequired[str]


class SerializedCard(TypedDict):
    id: str
    rarity: str
    collectorNumber: int
    faces: list[SerializedCardFace]
    layout: NotRequired[str]
    isToken: NotRequired[bool]
    tags: NotRequired[dict[str, str | int | float | bool]]
