"""
Card — a validated, playable unit with one or two faces.

A Card is built from an already schema-checked SerializedCard document and
validates itself in the constructor. Either every invariant holds or
CardValidationError is raised; there is no partially valid Card.
"""

from kindred_paths.models.card_face import CARD_RARITIES, CardFace
from kindred_paths.models.failure import CardValidationError
from kindred_paths.models.layout import Layout
from kindred_paths.models.serialized import SerializedCard

TagValue = str | int | float | bool


class Card:
    """
    A card and its faces.

    Attributes:
        id: Stable identifier
        rarity: common, uncommon, rare or mythic
        collector_number: Position in the printed set
        is_token: Tokens are created by other cards, never cast
        tags: Free-form annotations (set name, deck counts, ...)
        layout: Physical layout, decides the number of faces
        faces: Front face first
    """

    __slots__ = ("id", "rarity", "collector_number", "is_token", "tags", "layout", "faces")

    def __init__(self, data: SerializedCard) -> None:
        self.id: str = data["id"]
        self.rarity: str = data["rarity"]
        self.collector_number: int = data["collectorNumber"]
        self.is_token: bool = bool(data.get("isToken", False))
        self.tags: dict[str, TagValue] = dict(data.get("tags") or {})
        self.layout = Layout(data.get("layout", Layout.NORMAL.value))
        self.faces: tuple[CardFace, ...] = tuple(
            CardFace(face, self, index) for index, face in enumerate(data["faces"])
        )
        self._validate()

    def __repr__(self) -> str:
        return f"Card(id={self.id!r}, name={self.name!r})"

    @property
    def name(self) -> str:
        return self.faces[0].name

    @property
    def front(self) -> CardFace:
        return self.faces[0]

    def _validate(self) -> None:
        if self.rarity not in CARD_RARITIES:
            raise CardValidationError(self.id, None, f"unknown rarity {self.rarity}")
        if not self.faces:
            raise CardValidationError(self.id, None, "card must have at least one face")
        if len(self.faces) != self.layout.default_faces:
            raise CardValidationError(
                self.id,
                None,
                f"{self.layout.value} layout cards must have exactly "
                f"{self.layout.default_faces} face(s), got {len(self.faces)}",
            )
        for face in self.faces:
            face.validate()

    def to_json(self) -> SerializedCard:
        data: SerializedCard = {
            "id": self.id,
            "rarity": self.rarity,
            "collectorNumber": self.collector_number,
            "layout": self.layout.value,
            "faces": [face.to_json() for face in self.faces],
        }
        if self.is_token:
            data["isToken"] = True
        if self.tags:
            data["tags"] = dict(self.tags)
        return data

    def get_tag_as_string(self, key: str, stringify: bool = False) -> str | None:
        """
        Tag value as text.

        Non-string values are only returned when stringify is set, booleans
        then render lowercase ("true") like they do in the stored documents.
        """
        value = self.tags.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if not stringify:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_tag_as_number(self, key: str, parse_from_boolean: bool = False) -> int | float | None:
        """Tag value as a number, booleans count as 1/0 when parse_from_boolean is set."""
        value = self.tags.get(key)
        if isinstance(value, bool):
            if parse_from_boolean:
                return 1 if value else 0
            return None
        if isinstance(value, (int, float)):
            return value
        return None
