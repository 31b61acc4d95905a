"""
Tests for the Matrix planning grid.

These tests verify:
- The slot state machine (missing, skip, invalid, valid)
- Blueprints of all four scopes apply together
- Renames and deletions of metadata keys and cycles cascade to archetypes
- Slots left without data are deleted
- Key allocation, locations and serialization
"""

from typing import Any

import pytest

from kindred_paths.models import SKIP, Card, Slot, SlotStatus
from kindred_paths.services import (
    ArchetypeScope,
    CycleScope,
    Matrix,
    MatrixScope,
    SlotScope,
    find_available_key,
)


@pytest.fixture
def matrix() -> Matrix:
    """Two archetypes (Rabbits, Mice) by two cycles (common, rare)."""
    m = Matrix()
    m.add_metadata_key(0, "mainCharacter")
    m.add_cycle(0, "common")
    m.add_cycle(1, "rare")
    m.add_archetype("rabbits")
    m.add_archetype("mice")
    return m


@pytest.fixture
def cards(creature: Card, token: Card) -> list[Card]:
    return [creature, token]


class TestSlotStatus:
    def test_empty_cell_is_missing(self, matrix: Matrix, cards: list[Card]) -> None:
        assert matrix.get_slot_status(cards, 0, "common").status == SlotStatus.MISSING

    def test_skip(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.mark_slot_as_skip(0, "common")

        assert matrix.get_slot_status(cards, 0, "common").status == SlotStatus.SKIP
        assert matrix.get_slot(0, "common") is None

    def test_blueprint_only_is_missing(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.set_slot_blueprint(0, "common", {"rarity": [{"key": "string/equal", "value": "uncommon"}]})

        assert matrix.get_slot_status(cards, 0, "common").status == SlotStatus.MISSING

    def test_linking_satisfying_card_is_valid(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.set_slot_blueprint(0, "common", {"rarity": [{"key": "string/equal", "value": "uncommon"}]})
        matrix.link_card_to_slot(0, "common", "sam")

        result = matrix.get_slot_status(cards, 0, "common")

        assert result.status == SlotStatus.VALID
        assert result.reasons == []

    def test_violating_one_criterion_is_invalid(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.set_slot_blueprint(0, "common", {"rarity": [{"key": "string/equal", "value": "common"}]})
        matrix.link_card_to_slot(0, "common", "sam")

        result = matrix.get_slot_status(cards, 0, "common")

        assert result.status == SlotStatus.INVALID
        assert [(r.source, r.location) for r in result.reasons] == [("slot", "rarity")]

    def test_link_to_unknown_card_is_missing(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.link_card_to_slot(0, "common", "deleted")

        assert matrix.get_slot_status(cards, 0, "common").status == SlotStatus.MISSING

    def test_all_scopes_apply(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.update_matrix_blueprint({"isToken": [{"key": "boolean/false"}]})
        matrix.set_archetype_blueprint(0, {"name": [{"key": "string/equal", "value": "$[mainCharacter]"}]})
        matrix.set_cycle_blueprint(0, {"rarity": [{"key": "string/equal", "value": "common"}]})
        matrix.set_slot_blueprint(0, "common", {"power": [{"key": "number/at-least", "value": 3}]})
        matrix.update_metadata_value(0, "mainCharacter", "Sam, Loyal Attendant")
        matrix.link_card_to_slot(0, "common", "sam")

        result = matrix.get_slot_status(cards, 0, "common")

        assert result.status == SlotStatus.INVALID
        assert [r.source for r in result.reasons] == ["cycle", "slot"]

    def test_metadata_is_per_archetype(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.set_cycle_blueprint(0, {"name": [{"key": "string/equal", "value": "$[mainCharacter]"}]})
        matrix.update_metadata_value(0, "mainCharacter", "Sam, Loyal Attendant")
        matrix.update_metadata_value(1, "mainCharacter", "Mouse")
        matrix.link_card_to_slot(0, "common", "sam")
        matrix.link_card_to_slot(1, "common", "mouse")

        assert matrix.get_slot_status(cards, 0, "common").status == SlotStatus.VALID
        assert matrix.get_slot_status(cards, 1, "common").status == SlotStatus.VALID

    def test_slot_stats(self, matrix: Matrix, cards: list[Card]) -> None:
        matrix.mark_slot_as_skip(1, "rare")
        matrix.link_card_to_slot(0, "common", "sam")

        assert matrix.get_slot_stats(cards) == {
            SlotStatus.MISSING: 2,
            SlotStatus.SKIP: 1,
            SlotStatus.INVALID: 0,
            SlotStatus.VALID: 1,
        }
        assert matrix.non_skipped_slot_count() == 3
        assert matrix.linked_card_count() == 1
        assert matrix.valid_card_count(cards) == 1


class TestSlotEditing:
    def test_unlinking_last_datum_deletes_slot(self, matrix: Matrix) -> None:
        matrix.link_card_to_slot(0, "common", "sam")
        matrix.unlink_card_from_slot(0, "common")

        assert "common" not in matrix.get_archetype(0).cycles

    def test_unlinking_keeps_slot_with_blueprint(self, matrix: Matrix) -> None:
        blueprint = {"rarity": [{"key": "string/equal", "value": "rare"}]}
        matrix.set_slot_blueprint(0, "common", blueprint)
        matrix.link_card_to_slot(0, "common", "sam")
        matrix.unlink_card_from_slot(0, "common")

        assert matrix.get_slot(0, "common") == Slot(blueprint=blueprint)

    def test_removing_last_blueprint_deletes_slot(self, matrix: Matrix) -> None:
        matrix.set_slot_blueprint(0, "common", {"rarity": []})
        matrix.remove_slot_blueprint(0, "common")

        assert "common" not in matrix.get_archetype(0).cycles

    def test_linking_replaces_skip(self, matrix: Matrix) -> None:
        matrix.mark_slot_as_skip(0, "common")
        matrix.link_card_to_slot(0, "common", "sam")

        assert matrix.get_slot(0, "common") == Slot(card_id="sam")

    def test_unknown_cycle_key_rejected(self, matrix: Matrix) -> None:
        with pytest.raises(KeyError):
            matrix.link_card_to_slot(0, "mythic", "sam")
        with pytest.raises(KeyError):
            matrix.mark_slot_as_skip(0, "mythic")

    def test_unknown_metadata_key_rejected(self, matrix: Matrix) -> None:
        with pytest.raises(KeyError):
            matrix.update_metadata_value(0, "villain", "Farock")

    def test_clear_slot(self, matrix: Matrix) -> None:
        matrix.mark_slot_as_skip(0, "common")
        matrix.clear_slot(0, "common")

        assert matrix.get_archetype(0).cycles == {}


class TestCascades:
    def test_rename_metadata_key(self, matrix: Matrix) -> None:
        matrix.update_metadata_value(0, "mainCharacter", "Sam")
        matrix.update_metadata_value(1, "mainCharacter", "Pip")

        assert matrix.update_metadata_key(0, "hero") == "hero"

        assert matrix.metadata_keys == ["hero"]
        assert matrix.get_archetype(0).metadata == {"hero": "Sam"}
        assert matrix.get_archetype(1).metadata == {"hero": "Pip"}

    def test_rename_metadata_key_to_itself(self, matrix: Matrix) -> None:
        matrix.update_metadata_value(0, "mainCharacter", "Sam")

        assert matrix.update_metadata_key(0, "mainCharacter") == "mainCharacter"
        assert matrix.get_archetype(0).metadata == {"mainCharacter": "Sam"}

    def test_delete_metadata_key(self, matrix: Matrix) -> None:
        matrix.update_metadata_value(0, "mainCharacter", "Sam")
        matrix.delete_metadata_key(0)

        assert matrix.metadata_key_count() == 0
        assert matrix.get_archetype(0).metadata == {}

    def test_blank_metadata_value_removed(self, matrix: Matrix) -> None:
        matrix.update_metadata_value(0, "mainCharacter", "Sam")
        matrix.update_metadata_value(0, "mainCharacter", "  ")

        assert matrix.get_archetype(0).metadata == {}

    def test_rename_cycle(self, matrix: Matrix) -> None:
        matrix.link_card_to_slot(0, "common", "sam")
        matrix.mark_slot_as_skip(1, "common")

        assert matrix.update_cycle_key(0, "uncommon") == "uncommon"

        assert matrix.get_cycle_key(0) == "uncommon"
        assert matrix.get_archetype(0).cycles == {"uncommon": Slot(card_id="sam")}
        assert matrix.get_archetype(1).cycles == {"uncommon": SKIP}

    def test_rename_cycle_to_taken_key(self, matrix: Matrix) -> None:
        assert matrix.update_cycle_key(0, "rare") == "rare_1"
        assert [matrix.get_cycle_key(i) for i in range(matrix.cycle_count())] == ["rare_1", "rare"]

    def test_delete_cycle(self, matrix: Matrix) -> None:
        matrix.link_card_to_slot(0, "common", "sam")
        matrix.link_card_to_slot(0, "rare", "mouse")
        matrix.delete_cycle(0)

        assert not matrix.has_cycle_key("common")
        assert matrix.get_archetype(0).cycles == {"rare": Slot(card_id="mouse")}

    def test_reorder_and_delete_archetypes(self, matrix: Matrix) -> None:
        matrix.add_archetype("birds")
        matrix.reorder_archetypes(2, 0)
        matrix.update_archetype_name(1, "hares")

        assert [a.name for a in matrix.archetypes] == ["birds", "hares", "mice"]

        matrix.delete_archetype(0)

        assert matrix.archetype_count() == 2


class TestKeyAllocation:
    def test_free_key_kept(self) -> None:
        assert find_available_key("common", lambda key: False) == "common"

    def test_suffix_added(self) -> None:
        taken = {"common", "common_1"}

        assert find_available_key("common", taken.__contains__) == "common_2"

    def test_exhausted(self) -> None:
        assert find_available_key("common", lambda key: True) is None

    def test_duplicate_metadata_key_suffixed(self, matrix: Matrix) -> None:
        assert matrix.add_metadata_key(1, "mainCharacter") == "mainCharacter_1"
        assert matrix.metadata_keys == ["mainCharacter", "mainCharacter_1"]


class TestLocations:
    @pytest.mark.parametrize(
        ("location", "name"),
        [
            (MatrixScope(), "Matrix Blueprint"),
            (ArchetypeScope(index=1), "Mice Archetype Blueprint"),
            (CycleScope(index=0), "Common Cycle Blueprint"),
            (SlotScope(archetype_index=0, cycle_key="rare"), '"Rabbits"."Rare" Slot Blueprint'),
        ],
    )
    def test_location_name(self, matrix: Matrix, location: Any, name: str) -> None:
        assert matrix.get_location_name(location) == name

    @pytest.mark.parametrize(
        "location",
        [MatrixScope(), ArchetypeScope(index=1), CycleScope(index=0), SlotScope(0, "rare")],
    )
    def test_set_get_remove(self, matrix: Matrix, location: Any) -> None:
        blueprint = {"rarity": [{"key": "string/equal", "value": "rare"}]}

        matrix.set_blueprint_at(location, blueprint)
        assert matrix.get_blueprint_at(location) == blueprint

        matrix.remove_blueprint_at(location)
        assert matrix.get_blueprint_at(location) is None

    def test_blueprints_for_slot_outermost_first(self, matrix: Matrix) -> None:
        matrix.set_blueprint_at(SlotScope(0, "rare"), {"rarity": []})
        matrix.set_blueprint_at(MatrixScope(), {"types": []})

        sources = [entry.source for entry in matrix.get_blueprints_for_slot(0, "rare")]

        assert sources == ["set", "slot"]


class TestSerialization:
    def test_round_trip_document(self, matrix: Matrix) -> None:
        matrix.update_metadata_value(0, "mainCharacter", "Sam")
        matrix.link_card_to_slot(0, "common", "sam")
        matrix.mark_slot_as_skip(1, "rare")
        matrix.set_cycle_blueprint(1, {"rarity": [{"key": "string/equal", "value": "rare"}]})

        data = matrix.to_json()

        assert data["metadataKeys"] == ["mainCharacter"]
        assert data["cycles"][1] == {
            "key": "rare",
            "blueprint": {"rarity": [{"key": "string/equal", "value": "rare"}]},
        }
        assert data["archetypes"][0]["cycles"] == {"common": {"cardRef": {"cardId": "sam"}}}
        assert data["archetypes"][1]["cycles"] == {"rare": "skip"}
        assert Matrix.from_json(data).to_json() == data
