"""
Failure Classification — invariant violations vs. unmet design constraints.

Two kinds of "no" exist in this package and they are kept apart:

- CardValidationError: the card data itself breaks a rule of the game model
  (a creature without power/toughness, a token with a mana cost, ...).
  Construction aborts, there is no partially valid card.

- BlueprintValidationResult / SlotStatusResult: the card is fine, it just
  does not satisfy a design blueprint. That is an expected outcome and is
  returned as data, listing every unmet criterion.

The result envelopes are pydantic models so callers can serialize them
with model_dump() without knowing the internal types.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class CardValidationError(Exception):
    """
    Raised when card data violates a card invariant.

    Only the first violation is reported. The card is not constructed.
    """

    def __init__(self, card_id: str, face_name: str | None, reason: str) -> None:
        self.card_id = card_id
        self.face_name = face_name
        self.reason = reason
        where = f"'{card_id}'" if face_name is None else f"'{card_id}' ({face_name})"
        super().__init__(f"Card {where} is invalid: {reason}")


class CriteriaFailureReason(BaseModel):
    """One unmet criterion of a blueprint."""

    source: str = Field(..., description="Scope the blueprint came from (set, archetype, ...)")
    location: str = Field(..., description="Card property the criterion was checked against")
    criteria: dict[str, Any] = Field(
        ..., description="The criterion after metadata placeholders were resolved"
    )
    value: Any = Field(None, description="The card's value for that property")


class BlueprintValidationResult(BaseModel):
    """Outcome of checking a card against one or more blueprints."""

    success: bool
    reasons: list[CriteriaFailureReason] = Field(default_factory=list)

    @classmethod
    def from_reasons(cls, reasons: list[CriteriaFailureReason]) -> "BlueprintValidationResult":
        return cls(success=not reasons, reasons=reasons)


class SlotStatus(str, Enum):
    """State of one cell of a matrix."""

    MISSING = "missing"
    SKIP = "skip"
    INVALID = "invalid"
    VALID = "valid"


class SlotStatusResult(BaseModel):
    """Slot status plus the unmet criteria when the linked card is invalid."""

    status: SlotStatus
    reasons: list[CriteriaFailureReason] = Field(default_factory=list)
