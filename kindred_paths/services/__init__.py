from kindred_paths.services.blueprint_validator import (
    BlueprintValidator,
    resolve_metadata_placeholders,
)
from kindred_paths.services.card_set import CardSet
from kindred_paths.services.matrix import (
    ArchetypeScope,
    CycleScope,
    Matrix,
    MatrixLocation,
    MatrixScope,
    SlotScope,
    find_available_key,
)

__all__ = [
    "ArchetypeScope",
    "BlueprintValidator",
    "CardSet",
    "CycleScope",
    "Matrix",
    "MatrixLocation",
    "MatrixScope",
    "SlotScope",
    "find_available_key",
    "resolve_metadata_placeholders",
]
