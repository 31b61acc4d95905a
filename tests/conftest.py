from collections.abc import Callable
from typing import Any

import pytest

from kindred_paths.models import Card


@pytest.fixture
def creature_data() -> dict[str, Any]:
    """A legendary white creature that creates Food."""
    return {
        "id": "sam",
        "rarity": "uncommon",
        "collectorNumber": 1,
        "tags": {"set": "KPA", "deck/main": 2},
        "faces": [
            {
                "name": "Sam, Loyal Attendant",
                "manaCost": {"generic": 1, "white": 1},
                "types": ["creature"],
                "subtypes": ["human", "peasant"],
                "supertype": "legendary",
                "rules": [
                    {"variant": "keyword", "content": "vigilance"},
                    {
                        "variant": "ability",
                        "content": "At the beginning of your end step, create a Food token.",
                    },
                ],
                "pt": {"power": 2, "toughness": 2},
            }
        ],
    }


@pytest.fixture
def token_data() -> dict[str, Any]:
    """A white Mouse creature token with lifelink."""
    return {
        "id": "mouse",
        "rarity": "common",
        "collectorNumber": 2,
        "isToken": True,
        "faces": [
            {
                "name": "Mouse",
                "givenColors": ["white"],
                "types": ["creature"],
                "subtypes": ["mouse"],
                "rules": [{"variant": "keyword", "content": "lifelink"}],
                "pt": {"power": 1, "toughness": 1},
            }
        ],
    }


@pytest.fixture
def planeswalker_data() -> dict[str, Any]:
    """A black planeswalker with three loyalty abilities."""
    return {
        "id": "farock",
        "rarity": "mythic",
        "collectorNumber": 3,
        "tags": {"set": "KPA"},
        "faces": [
            {
                "name": "Farock, The Damned Doctor",
                "manaCost": {"generic": 1, "black": 2},
                "types": ["planeswalker"],
                "supertype": "legendary",
                "loyalty": 4,
                "rules": [
                    {"variant": "ability", "content": "Creatures you control get +1/+0."},
                    {"variant": "ability", "content": "+1: Each opponent loses 1 life."},
                    {
                        "variant": "ability",
                        "content": "-2: Return target creature card from your graveyard to your hand.",
                    },
                    {"variant": "ability", "content": "-X: Destroy target creature with mana value X."},
                ],
            }
        ],
    }


@pytest.fixture
def land_data() -> dict[str, Any]:
    """A nonbasic Forest that taps for green or white."""
    return {
        "id": "grove",
        "rarity": "rare",
        "collectorNumber": 4,
        "faces": [
            {
                "name": "Sunlit Grove",
                "types": ["land"],
                "subtypes": ["forest"],
                "rules": [{"variant": "ability", "content": "{t}: Add {g} or {w}."}],
            }
        ],
    }


@pytest.fixture
def creature(creature_data: dict[str, Any]) -> Card:
    return Card(creature_data)


@pytest.fixture
def token(token_data: dict[str, Any]) -> Card:
    return Card(token_data)


@pytest.fixture
def planeswalker(planeswalker_data: dict[str, Any]) -> Card:
    return Card(planeswalker_data)


@pytest.fixture
def land(land_data: dict[str, Any]) -> Card:
    return Card(land_data)


@pytest.fixture
def make_creature() -> Callable[..., Card]:
    """Build a simple vanilla creature, overriding card or face fields."""

    def _make(
        card_id: str = "creature",
        name: str = "Grizzled Bear",
        rarity: str = "common",
        tags: dict[str, Any] | None = None,
        **face: Any,
    ) -> Card:
        face_data: dict[str, Any] = {
            "name": name,
            "manaCost": {"generic": 1, "green": 1},
            "types": ["creature"],
            "subtypes": ["bear"],
            "pt": {"power": 2, "toughness": 2},
        }
        face_data.update(face)
        data: dict[str, Any] = {
            "id": card_id,
            "rarity": rarity,
            "collectorNumber": 10,
            "faces": [face_data],
        }
        if tags is not None:
            data["tags"] = tags
        return Card(data)  # type: ignore[arg-type]

    return _make
