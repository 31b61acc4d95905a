"""
Matrix — the Archetype x Cycle planning grid of a card set.

The matrix is a long-lived document edited in place, one operation at a
time. Cells ("slots") move through a small state machine:

    missing  -> skip                (marked as intentionally empty)
    missing  -> invalid | valid     (a card is linked and checked)

A slot with no data, or with a blueprint but no linked card, is missing.
Once a card is linked, every blueprint in scope applies together (matrix,
archetype, cycle and slot; none overrides another) and the Blueprint
Validator decides between invalid and valid.

INVARIANTS:
1. Metadata keys and cycle keys are unique within a matrix
2. Renaming or deleting a metadata key or cycle key cascades to every archetype
3. Removing the last datum (blueprint or card link) of a slot deletes the slot
4. Slot status is a pure function of the matrix and the cards
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from kindred_paths.config import MAX_KEY_SUFFIX
from kindred_paths.models.blueprint import Blueprint, BlueprintWithSource
from kindred_paths.models.card import Card
from kindred_paths.models.failure import SlotStatus, SlotStatusResult
from kindred_paths.models.set_document import (
    SKIP,
    Archetype,
    Cycle,
    SerializedMatrix,
    Slot,
)
from kindred_paths.models.typography import capitalize
from kindred_paths.services.blueprint_validator import BlueprintValidator

logger = logging.getLogger(__name__)


# =============================================================================
# LOCATIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class MatrixScope:
    """The matrix as a whole."""


@dataclass(frozen=True, slots=True)
class ArchetypeScope:
    index: int


@dataclass(frozen=True, slots=True)
class CycleScope:
    index: int


@dataclass(frozen=True, slots=True)
class SlotScope:
    archetype_index: int
    cycle_key: str


MatrixLocation = MatrixScope | ArchetypeScope | CycleScope | SlotScope


def find_available_key(key: str, is_taken: Callable[[str], bool]) -> str | None:
    """
    The key itself, or the first free "key_1", "key_2", ... variant.

    Returns None when every suffix up to MAX_KEY_SUFFIX is taken.
    """
    candidate = key
    suffix = 1
    while is_taken(candidate):
        if suffix > MAX_KEY_SUFFIX:
            return None
        candidate = f"{key}_{suffix}"
        suffix += 1
    return candidate


def _move(items: list, from_index: int, to_index: int) -> None:
    item = items.pop(from_index)
    items.insert(to_index, item)


class Matrix:
    """
    An editable Archetype x Cycle grid.

    Attributes:
        blueprint: Criteria every card of the matrix must meet
        metadata_keys: Ordered, unique names of per-archetype metadata
        cycles: Ordered columns, unique by key
        archetypes: Ordered rows
    """

    _validator = BlueprintValidator()

    def __init__(
        self,
        blueprint: Blueprint | None = None,
        metadata_keys: list[str] | None = None,
        cycles: list[Cycle] | None = None,
        archetypes: list[Archetype] | None = None,
    ) -> None:
        self.blueprint = blueprint
        self.metadata_keys: list[str] = metadata_keys if metadata_keys is not None else []
        self.cycles: list[Cycle] = cycles if cycles is not None else []
        self.archetypes: list[Archetype] = archetypes if archetypes is not None else []

    @classmethod
    def from_json(cls, data: SerializedMatrix) -> "Matrix":
        return cls(
            blueprint=data.get("blueprint"),
            metadata_keys=list(data.get("metadataKeys", [])),
            cycles=[Cycle.from_json(cycle) for cycle in data.get("cycles", [])],
            archetypes=[Archetype.from_json(archetype) for archetype in data.get("archetypes", [])],
        )

    def to_json(self) -> SerializedMatrix:
        data: SerializedMatrix = {
            "metadataKeys": list(self.metadata_keys),
            "cycles": [cycle.to_json() for cycle in self.cycles],
            "archetypes": [archetype.to_json() for archetype in self.archetypes],
        }
        if self.blueprint is not None:
            data["blueprint"] = self.blueprint
        return data

    # =========================================================================
    # MATRIX BLUEPRINT
    # =========================================================================

    def get_matrix_blueprint(self) -> Blueprint | None:
        return self.blueprint

    def update_matrix_blueprint(self, blueprint: Blueprint) -> None:
        self.blueprint = blueprint

    def remove_matrix_blueprint(self) -> None:
        self.blueprint = None

    # =========================================================================
    # ARCHETYPES
    # =========================================================================

    def get_archetype(self, archetype_index: int) -> Archetype:
        return self.archetypes[archetype_index]

    def archetype_count(self) -> int:
        return len(self.archetypes)

    def add_archetype(self, name: str) -> None:
        self.archetypes.append(Archetype(name=name))

    def update_archetype_name(self, archetype_index: int, name: str) -> None:
        self.archetypes[archetype_index].name = name

    def reorder_archetypes(self, from_index: int, to_index: int) -> None:
        _move(self.archetypes, from_index, to_index)

    def delete_archetype(self, archetype_index: int) -> None:
        removed = self.archetypes.pop(archetype_index)
        logger.info("archetype_deleted", extra={"archetype": removed.name})

    def set_archetype_blueprint(self, archetype_index: int, blueprint: Blueprint) -> None:
        self.archetypes[archetype_index].blueprint = blueprint

    def remove_archetype_blueprint(self, archetype_index: int) -> None:
        self.archetypes[archetype_index].blueprint = None

    # =========================================================================
    # METADATA
    # =========================================================================

    def get_metadata_key(self, metadata_index: int) -> str:
        return self.metadata_keys[metadata_index]

    def metadata_key_count(self) -> int:
        return len(self.metadata_keys)

    def has_metadata_key(self, key: str) -> bool:
        return key in self.metadata_keys

    def reorder_metadata_keys(self, from_index: int, to_index: int) -> None:
        _move(self.metadata_keys, from_index, to_index)

    def add_metadata_key(self, at_index: int, key: str) -> str | None:
        """Insert a metadata key, suffixed if taken. Returns the key used."""
        new_key = find_available_key(key, self.has_metadata_key)
        if new_key is None:
            logger.warning("metadata_key_unavailable", extra={"key": key})
            return None
        self.metadata_keys.insert(at_index, new_key)
        return new_key

    def update_metadata_key(self, metadata_index: int, key: str) -> str | None:
        """
        Rename a metadata key and every archetype's value for it.

        Returns the key now in use, None if no free key was found.
        """
        old_key = self.metadata_keys[metadata_index]
        if key == old_key:
            return old_key
        new_key = find_available_key(key, self.has_metadata_key)
        if new_key is None:
            logger.warning("metadata_key_unavailable", extra={"key": key})
            return None

        self.metadata_keys[metadata_index] = new_key
        for archetype in self.archetypes:
            if old_key in archetype.metadata:
                archetype.metadata[new_key] = archetype.metadata.pop(old_key)
        logger.info("metadata_key_renamed", extra={"old_key": old_key, "new_key": new_key})
        return new_key

    def delete_metadata_key(self, metadata_index: int) -> None:
        key = self.metadata_keys.pop(metadata_index)
        for archetype in self.archetypes:
            archetype.metadata.pop(key, None)
        logger.info("metadata_key_deleted", extra={"key": key})

    def update_metadata_value(self, archetype_index: int, key: str, value: str) -> None:
        """Set an archetype's metadata value; a blank value removes it."""
        if key not in self.metadata_keys:
            raise KeyError(key)
        metadata = self.archetypes[archetype_index].metadata
        if value.strip() == "":
            metadata.pop(key, None)
        else:
            metadata[key] = value

    # =========================================================================
    # CYCLES
    # =========================================================================

    def has_cycle_key(self, key: str) -> bool:
        return any(cycle.key == key for cycle in self.cycles)

    def get_cycle_key(self, cycle_index: int) -> str:
        return self.cycles[cycle_index].key

    def cycle_count(self) -> int:
        return len(self.cycles)

    def reorder_cycles(self, from_index: int, to_index: int) -> None:
        _move(self.cycles, from_index, to_index)

    def add_cycle(self, at_index: int, key: str) -> str | None:
        """Insert a cycle, suffixing its key if taken. Returns the key used."""
        new_key = find_available_key(key, self.has_cycle_key)
        if new_key is None:
            logger.warning("cycle_key_unavailable", extra={"key": key})
            return None
        self.cycles.insert(at_index, Cycle(key=new_key))
        return new_key

    def update_cycle_key(self, cycle_index: int, key: str) -> str | None:
        """
        Rename a cycle and move every archetype's slot for it.

        Returns the key now in use, None if no free key was found.
        """
        cycle = self.cycles[cycle_index]
        old_key = cycle.key
        if key == old_key:
            return old_key
        new_key = find_available_key(key, self.has_cycle_key)
        if new_key is None:
            logger.warning("cycle_key_unavailable", extra={"key": key})
            return None

        cycle.key = new_key
        for archetype in self.archetypes:
            if old_key in archetype.cycles:
                archetype.cycles[new_key] = archetype.cycles.pop(old_key)
        logger.info("cycle_key_renamed", extra={"old_key": old_key, "new_key": new_key})
        return new_key

    def delete_cycle(self, cycle_index: int) -> None:
        cycle = self.cycles.pop(cycle_index)
        for archetype in self.archetypes:
            archetype.cycles.pop(cycle.key, None)
        logger.info("cycle_deleted", extra={"key": cycle.key})

    def set_cycle_blueprint(self, cycle_index: int, blueprint: Blueprint) -> None:
        self.cycles[cycle_index].blueprint = blueprint

    def remove_cycle_blueprint(self, cycle_index: int) -> None:
        self.cycles[cycle_index].blueprint = None

    # =========================================================================
    # SLOTS
    # =========================================================================

    def get_slot(self, archetype_index: int, cycle_key: str) -> Slot | None:
        """The slot of a cell, None for empty and skipped cells."""
        entry = self.archetypes[archetype_index].cycles.get(cycle_key)
        return entry if isinstance(entry, Slot) else None

    def clear_slot(self, archetype_index: int, cycle_key: str) -> None:
        self.archetypes[archetype_index].cycles.pop(cycle_key, None)

    def _require_cycle(self, cycle_key: str) -> None:
        if not self.has_cycle_key(cycle_key):
            raise KeyError(cycle_key)

    def mark_slot_as_skip(self, archetype_index: int, cycle_key: str) -> None:
        self._require_cycle(cycle_key)
        self.archetypes[archetype_index].cycles[cycle_key] = SKIP

    def set_slot_blueprint(self, archetype_index: int, cycle_key: str, blueprint: Blueprint) -> None:
        self._require_cycle(cycle_key)
        slot = self.get_slot(archetype_index, cycle_key)
        if slot is None:
            self.archetypes[archetype_index].cycles[cycle_key] = Slot(blueprint=blueprint)
        else:
            slot.blueprint = blueprint

    def remove_slot_blueprint(self, archetype_index: int, cycle_key: str) -> None:
        slot = self.get_slot(archetype_index, cycle_key)
        if slot is None:
            return
        slot.blueprint = None
        if slot.is_empty():
            self.clear_slot(archetype_index, cycle_key)

    def link_card_to_slot(self, archetype_index: int, cycle_key: str, card_id: str) -> None:
        self._require_cycle(cycle_key)
        slot = self.get_slot(archetype_index, cycle_key)
        if slot is None:
            self.archetypes[archetype_index].cycles[cycle_key] = Slot(card_id=card_id)
        else:
            slot.card_id = card_id

    def unlink_card_from_slot(self, archetype_index: int, cycle_key: str) -> None:
        slot = self.get_slot(archetype_index, cycle_key)
        if slot is None:
            return
        slot.card_id = None
        if slot.is_empty():
            self.clear_slot(archetype_index, cycle_key)

    def get_blueprints_for_slot(
        self, archetype_index: int, cycle_key: str
    ) -> list[BlueprintWithSource]:
        """Every blueprint in scope for a cell, outermost first."""
        archetype = self.archetypes[archetype_index]
        cycle = next((c for c in self.cycles if c.key == cycle_key), None)
        slot = self.get_slot(archetype_index, cycle_key)
        scoped = [
            ("set", self.blueprint),
            ("archetype", archetype.blueprint),
            ("cycle", cycle.blueprint if cycle is not None else None),
            ("slot", slot.blueprint if slot is not None else None),
        ]
        return [
            BlueprintWithSource(source=source, blueprint=blueprint)
            for source, blueprint in scoped
            if blueprint is not None
        ]

    def get_slot_status(
        self, cards: Sequence[Card], archetype_index: int, cycle_key: str
    ) -> SlotStatusResult:
        archetype = self.archetypes[archetype_index]
        entry = archetype.cycles.get(cycle_key)
        if entry is None:
            return SlotStatusResult(status=SlotStatus.MISSING)
        if entry == SKIP:
            return SlotStatusResult(status=SlotStatus.SKIP)
        slot = entry
        if not isinstance(slot, Slot) or slot.card_id is None:
            return SlotStatusResult(status=SlotStatus.MISSING)
        card = next((c for c in cards if c.id == slot.card_id), None)
        if card is None:
            return SlotStatusResult(status=SlotStatus.MISSING)

        result = self._validator.validate(
            metadata=archetype.metadata,
            blueprints=self.get_blueprints_for_slot(archetype_index, cycle_key),
            card=card,
        )
        if result.success:
            return SlotStatusResult(status=SlotStatus.VALID)
        return SlotStatusResult(status=SlotStatus.INVALID, reasons=result.reasons)

    def get_slot_stats(self, cards: Sequence[Card]) -> dict[SlotStatus, int]:
        """Number of cells per status."""
        stats = {status: 0 for status in SlotStatus}
        for cycle in self.cycles:
            for archetype_index in range(len(self.archetypes)):
                status = self.get_slot_status(cards, archetype_index, cycle.key).status
                stats[status] += 1
        return stats

    def linked_card_ids(self) -> list[str]:
        """Card ids linked from any slot, one entry per linking slot."""
        return [
            entry.card_id
            for archetype in self.archetypes
            for entry in archetype.cycles.values()
            if isinstance(entry, Slot) and entry.card_id is not None
        ]

    def linked_card_count(self) -> int:
        return len(self.linked_card_ids())

    def valid_card_count(self, cards: Sequence[Card]) -> int:
        return self.get_slot_stats(cards)[SlotStatus.VALID]

    def non_skipped_slot_count(self) -> int:
        skipped = sum(
            1
            for archetype in self.archetypes
            for entry in archetype.cycles.values()
            if entry == SKIP
        )
        return len(self.cycles) * len(self.archetypes) - skipped

    # =========================================================================
    # BLUEPRINT LOCATIONS
    # =========================================================================

    def get_blueprint_at(self, location: MatrixLocation) -> Blueprint | None:
        if isinstance(location, MatrixScope):
            return self.blueprint
        if isinstance(location, ArchetypeScope):
            return self.archetypes[location.index].blueprint
        if isinstance(location, CycleScope):
            return self.cycles[location.index].blueprint
        slot = self.get_slot(location.archetype_index, location.cycle_key)
        return slot.blueprint if slot is not None else None

    def set_blueprint_at(self, location: MatrixLocation, blueprint: Blueprint) -> None:
        if isinstance(location, MatrixScope):
            self.update_matrix_blueprint(blueprint)
        elif isinstance(location, ArchetypeScope):
            self.set_archetype_blueprint(location.index, blueprint)
        elif isinstance(location, CycleScope):
            self.set_cycle_blueprint(location.index, blueprint)
        else:
            self.set_slot_blueprint(location.archetype_index, location.cycle_key, blueprint)

    def remove_blueprint_at(self, location: MatrixLocation) -> None:
        if isinstance(location, MatrixScope):
            self.remove_matrix_blueprint()
        elif isinstance(location, ArchetypeScope):
            self.remove_archetype_blueprint(location.index)
        elif isinstance(location, CycleScope):
            self.remove_cycle_blueprint(location.index)
        else:
            self.remove_slot_blueprint(location.archetype_index, location.cycle_key)

    def get_location_name(self, location: MatrixLocation) -> str:
        """Human-readable label, e.g. '"Elves"."Common" Slot Blueprint'."""
        if isinstance(location, MatrixScope):
            return "Matrix Blueprint"
        if isinstance(location, ArchetypeScope):
            name = capitalize(self.archetypes[location.index].name)
            return f"{name} Archetype Blueprint"
        if isinstance(location, CycleScope):
            return f"{capitalize(self.cycles[location.index].key)} Cycle Blueprint"
        archetype = self.archetypes[location.archetype_index]
        return f'"{capitalize(archetype.name)}"."{capitalize(location.cycle_key)}" Slot Blueprint'

    # =========================================================================
    # REPAIR
    # =========================================================================

    def prune(self, existing_card_ids: set[str]) -> list[str]:
        """
        Drop dead references from the grid.

        Removes archetype entries for unknown cycle or metadata keys,
        unlinks cards that no longer exist and deletes slots left with
        neither blueprint nor card.

        Returns:
            One message per change
        """
        messages: list[str] = []
        cycle_keys = {cycle.key for cycle in self.cycles}
        for archetype in self.archetypes:
            for key in [k for k in archetype.metadata if k not in self.metadata_keys]:
                del archetype.metadata[key]
                messages.append(
                    f'Removed metadata value "{key}" of archetype "{archetype.name}": '
                    "the metadata key no longer exists"
                )
            for cycle_key in list(archetype.cycles):
                entry = archetype.cycles[cycle_key]
                where = f'"{archetype.name}"."{cycle_key}"'
                if cycle_key not in cycle_keys:
                    del archetype.cycles[cycle_key]
                    messages.append(f"Removed slot {where}: the cycle no longer exists")
                    continue
                if not isinstance(entry, Slot):
                    continue
                if entry.card_id is not None and entry.card_id not in existing_card_ids:
                    messages.append(
                        f'Unlinked card "{entry.card_id}" from slot {where}: '
                        "the card no longer exists"
                    )
                    entry.card_id = None
                if entry.is_empty():
                    del archetype.cycles[cycle_key]
                    messages.append(f"Removed slot {where}: it had neither a blueprint nor a card")
        if messages:
            logger.info("matrix_pruned", extra={"changes": len(messages)})
        return messages
