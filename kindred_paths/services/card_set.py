"""
Card Set — a named collection of planning matrices.

Besides simple editing, the set offers a repair pass, validate_and_correct,
that keeps large documents editable when cards are deleted or renamed
outside the set editor. It never raises: provably dead references are
removed, problems that need a designer's decision are only reported.
"""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from kindred_paths.config import settings
from kindred_paths.models.card import Card
from kindred_paths.models.failure import SlotStatus
from kindred_paths.models.set_document import SerializedSet
from kindred_paths.services.matrix import Matrix

logger = logging.getLogger(__name__)


@dataclass
class CardSet:
    """
    A card set under design.

    Attributes:
        id: Stable identifier
        name: Set name, cards carry it in their set tag
        matrices: Planning grids of the set
    """

    id: str
    name: str
    matrices: list[Matrix] = field(default_factory=list)

    @classmethod
    def empty(cls, set_id: str, name: str) -> "CardSet":
        return cls(id=set_id, name=name, matrices=[Matrix()])

    @classmethod
    def from_json(cls, data: SerializedSet) -> "CardSet":
        return cls(
            id=data["id"],
            name=data["name"],
            matrices=[Matrix.from_json(matrix) for matrix in data.get("matrices", [])],
        )

    def to_json(self) -> SerializedSet:
        return {
            "id": self.id,
            "name": self.name,
            "matrices": [matrix.to_json() for matrix in self.matrices],
        }

    def update_name(self, name: str) -> None:
        self.name = name

    def add_matrix(self) -> Matrix:
        matrix = Matrix()
        self.matrices.append(matrix)
        return matrix

    def get_matrix(self, matrix_index: int) -> Matrix:
        return self.matrices[matrix_index]

    def delete_matrix(self, matrix_index: int) -> None:
        self.matrices.pop(matrix_index)

    def get_slot_stats(self, cards: Sequence[Card]) -> dict[SlotStatus, int]:
        """Number of cells per status across all matrices."""
        stats = {status: 0 for status in SlotStatus}
        for matrix in self.matrices:
            for status, count in matrix.get_slot_stats(cards).items():
                stats[status] += count
        return stats

    def is_designed_for_set(self, card: Card) -> bool:
        tag = card.get_tag_as_string(settings.set_tag_key)
        return tag is not None and tag.strip().lower() == self.name.strip().lower()

    def validate_and_correct(self, cards: Sequence[Card]) -> list[str]:
        """
        Repair dead references and report inconsistencies.

        Fixes:
        - slots with neither blueprint nor card are deleted
        - links to cards that no longer exist are removed
        - entries for deleted cycles and metadata keys are removed

        Reports only:
        - cards linked from more than one slot
        - cards tagged with this set's name that no slot links

        Returns:
            Human-readable messages, empty when the set was consistent
        """
        existing_ids = {card.id for card in cards}
        messages: list[str] = []

        for index, matrix in enumerate(self.matrices):
            prefix = f"Matrix {index + 1}: " if len(self.matrices) > 1 else ""
            messages.extend(prefix + message for message in matrix.prune(existing_ids))

        link_counts = Counter(
            card_id for matrix in self.matrices for card_id in matrix.linked_card_ids()
        )
        names = {card.id: card.name for card in cards}
        for card_id, count in link_counts.items():
            if count > 1:
                messages.append(
                    f'Card "{names.get(card_id, card_id)}" ({card_id}) is linked from {count} slots'
                )

        for card in cards:
            if self.is_designed_for_set(card) and card.id not in link_counts:
                messages.append(
                    f'Card "{card.name}" ({card.id}) is tagged with set "{self.name}" '
                    "but not linked from any slot"
                )

        for message in messages:
            logger.warning("set_inconsistency", extra={"set_id": self.id, "detail": message})
        logger.info(
            "set_validated",
            extra={"set_id": self.id, "cards": len(cards), "messages": len(messages)},
        )
        return messages
