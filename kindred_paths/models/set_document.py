"""
Set documents — the Archetype x Cycle planning grid.

A Matrix has cycles (columns, identified by a unique key) and archetypes
(rows). Each archetype maps cycle keys to a Slot, the literal "skip", or
nothing at all. Metadata values are set per archetype for every metadata
key of the matrix and feed "$[key]" placeholders in blueprints.

Wire shapes keep the camelCase keys of the stored JSON.
"""

from dataclasses import dataclass, field
from typing import Literal, NotRequired, TypedDict

from kindred_paths.models.blueprint import Blueprint

SKIP: Literal["skip"] = "skip"


class SerializedCardReference(TypedDict):
    cardId: str


class SerializedSlot(TypedDict, total=False):
    blueprint: Blueprint
    cardRef: SerializedCardReference


class SerializedCycle(TypedDict):
    key: str
    blueprint: NotRequired[Blueprint]


class SerializedArchetype(TypedDict):
    name: str
    metadata: dict[str, str]
    cycles: dict[str, SerializedSlot | Literal["skip"]]
    blueprint: NotRequired[Blueprint]


class SerializedMatrix(TypedDict):
    metadataKeys: list[str]
    cycles: list[SerializedCycle]
    archetypes: list[SerializedArchetype]
    blueprint: NotRequired[Blueprint]


class SerializedSet(TypedDict):
    id: str
    name: str
    matrices: list[SerializedMatrix]


@dataclass
class Slot:
    """
    One cell of the grid.

    Attributes:
        blueprint: Criteria only this cell applies
        card_id: Id of the card designed for this cell
    """

    blueprint: Blueprint | None = None
    card_id: str | None = None

    def is_empty(self) -> bool:
        return self.blueprint is None and self.card_id is None

    @classmethod
    def from_json(cls, data: SerializedSlot) -> "Slot":
        card_ref = data.get("cardRef")
        return cls(
            blueprint=data.get("blueprint"),
            card_id=card_ref["cardId"] if card_ref else None,
        )

    def to_json(self) -> SerializedSlot:
        data: SerializedSlot = {}
        if self.blueprint is not None:
            data["blueprint"] = self.blueprint
        if self.card_id is not None:
            data["cardRef"] = {"cardId": self.card_id}
        return data


SlotEntry = Slot | Literal["skip"]


@dataclass
class Cycle:
    """A column of the grid."""

    key: str
    blueprint: Blueprint | None = None

    @classmethod
    def from_json(cls, data: SerializedCycle) -> "Cycle":
        return cls(key=data["key"], blueprint=data.get("blueprint"))

    def to_json(self) -> SerializedCycle:
        data: SerializedCycle = {"key": self.key}
        if self.blueprint is not None:
            data["blueprint"] = self.blueprint
        return data


@dataclass
class Archetype:
    """
    A row of the grid.

    Attributes:
        name: Display name
        blueprint: Criteria every card of this archetype must meet
        metadata: Metadata value per metadata key
        cycles: Slot or "skip" per cycle key; absent keys are empty cells
    """

    name: str
    blueprint: Blueprint | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    cycles: dict[str, SlotEntry] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: SerializedArchetype) -> "Archetype":
        cycles: dict[str, SlotEntry] = {}
        for cycle_key, entry in data.get("cycles", {}).items():
            if entry == SKIP:
                cycles[cycle_key] = SKIP
            elif entry is not None:
                cycles[cycle_key] = Slot.from_json(entry)
        return cls(
            name=data["name"],
            blueprint=data.get("blueprint"),
            metadata={k: v for k, v in data.get("metadata", {}).items() if v is not None},
            cycles=cycles,
        )

    def to_json(self) -> SerializedArchetype:
        data: SerializedArchetype = {
            "name": self.name,
            "metadata": dict(self.metadata),
            "cycles": {
                key: entry.to_json() if isinstance(entry, Slot) else SKIP
                for key, entry in self.cycles.items()
            },
        }
        if self.blueprint is not None:
            data["blueprint"] = self.blueprint
        return data
