"""
Card colors and their canonical print order.

Colors are named in full ("white") everywhere in the model; the single-letter
form ("w") only appears inside mana symbols such as "{w}" or "{w/b}".

INVARIANTS:
1. to_ordered_colors is order-independent on its input
2. to_ordered_colors never adds or drops a color
3. Duplicates and unknown colors are rejected, never silently merged
"""

from typing import Literal

CardColor = Literal["white", "blue", "black", "red", "green"]
CardColorCharacter = Literal["w", "u", "b", "r", "g"]

# Position on the color wheel. Neighbors are allies, distance 2 are enemies.
CARD_COLORS: tuple[CardColor, ...] = ("white", "blue", "black", "red", "green")
WUBRG: tuple[CardColorCharacter, ...] = ("w", "u", "b", "r", "g")


def color_to_short(color: str) -> str:
    """Convert "white" to "w" and so on."""
    if color not in CARD_COLORS:
        raise ValueError(f"Invalid color: {color}")
    return WUBRG[CARD_COLORS.index(color)]


def color_to_long(character: str) -> str:
    """Convert "w" to "white" and so on."""
    if character not in WUBRG:
        raise ValueError(f"Invalid color character: {character}")
    return CARD_COLORS[WUBRG.index(character)]


def to_ordered_colors(colors: list[str]) -> list[str]:
    """
    Order colors the way they are printed on a card.

    Pairs that sit next to each other on the wheel keep WUBRG order, except
    white/green which wraps around and prints green first. Enemy pairs print
    the color that "skips over" first (white/black, blue/red, black/green keep
    order; white/red and blue/green are reversed).

    Three colors either form a run on the wheel (printed along the wheel) or
    a wedge, which is printed with its center color (both neighbors absent)
    in the middle.

    Four colors start right after the missing one. Five are WUBRG.

    Raises:
        ValueError: If a color is unknown or listed twice.
    """
    if len(colors) <= 1:
        return list(colors)

    if len(set(colors)) != len(colors):
        raise ValueError("Duplicate colors are not allowed")
    unknown = [c for c in colors if c not in CARD_COLORS]
    if unknown:
        raise ValueError(f"Invalid colors: {', '.join(unknown)}")

    indexes = sorted(CARD_COLORS.index(c) for c in colors)

    if len(indexes) == 2:
        first, second = indexes
        distance = second - first
        if distance == 1:
            return [CARD_COLORS[first], CARD_COLORS[second]]
        if distance == 4:
            return [CARD_COLORS[second], CARD_COLORS[first]]
        if distance == 2:
            return [CARD_COLORS[first], CARD_COLORS[second]]
        return [CARD_COLORS[second], CARD_COLORS[first]]

    if len(indexes) == 3:
        first, second, third = indexes
        if second == first + 1 and third == second + 1:
            return [CARD_COLORS[i] for i in indexes]
        # Runs that wrap past green back to white
        if indexes == [0, 1, 4]:
            return ["green", "white", "blue"]
        if indexes == [0, 3, 4]:
            return ["red", "green", "white"]

        missing_a, missing_b = [i for i in range(5) if i not in indexes]
        if missing_b - missing_a == 2:
            center = missing_a + 1
        else:
            center = (missing_b + 1) % 5
        return [
            CARD_COLORS[(center + 3) % 5],
            CARD_COLORS[center],
            CARD_COLORS[(center + 2) % 5],
        ]

    if len(indexes) == 4:
        missing = next(i for i in range(5) if i not in indexes)
        start = missing + 1
        return list(CARD_COLORS[start : start + 4]) + list(CARD_COLORS[0 : max(0, start - 1)])

    return list(CARD_COLORS)
