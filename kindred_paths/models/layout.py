"""Physical card layouts and how many faces each one carries."""

from enum import Enum


class Layout(str, Enum):
    """Card layout."""

    NORMAL = "normal"
    MODAL = "modal"
    ADVENTURE = "adventure"
    TRANSFORM = "transform"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def default_faces(self) -> int:
        return 2 if self.is_dual_face else 1

    @property
    def is_dual_face(self) -> bool:
        """Card has two faces."""
        return self in (Layout.MODAL, Layout.ADVENTURE, Layout.TRANSFORM)

    @property
    def is_dual_render(self) -> bool:
        """Both faces are printed as separate card images."""
        return self in (Layout.MODAL, Layout.TRANSFORM)


_DESCRIPTIONS: dict[Layout, str] = {
    Layout.NORMAL: "A single-faced card",
    Layout.MODAL: "A double-faced card where either face can be cast",
    Layout.ADVENTURE: "A card with an adventure spell printed inside the main face",
    Layout.TRANSFORM: "A double-faced card that transforms from its front face to its back face",
}
