"""
Card search.

Filters cards with a compact query language, one term per word:

- "t:creature c:green mv:3-"  -> green creatures with mana value 3 or less
- "r:m pt:n+/n"               -> mythics with more power than toughness
- "tag:set=KPA d!:aggro"      -> tagged for set KPA, not in the aggro deck
- "dragon"                    -> name contains "dragon"

Terms are "key:needle" or "key=needle", negated with "key!:needle". All
terms must hold for the same face; a card matches when any face does.
Matching is case-insensitive.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from kindred_paths.config import settings
from kindred_paths.models.card import Card
from kindred_paths.models.card_face import CardFace
from kindred_paths.models.colors import WUBRG, color_to_long
from kindred_paths.models.rules import RuleVariant

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_DECIMAL_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?", re.ASCII | re.IGNORECASE
)


def _parse_number(text: str) -> float | None:
    # Blank counts as 0, so "+" alone means "at least 0"
    text = text.strip()
    if not text:
        return 0.0
    if _DECIMAL_PATTERN.fullmatch(text) is None:
        return None
    return float(text)


def validate_number_requirement(requirement: str, actual: int | float) -> bool:
    """
    Check a number against "3" (exactly), "3+" (at least) or "3-" (at most).

    Only plain decimals parse; anything else ("abc", "inf", "1_0") never matches.
    """
    comparison: Callable[[float, float], bool] = lambda a, b: a == b
    text = requirement
    if requirement.endswith("+"):
        comparison, text = (lambda a, b: a >= b), requirement[:-1]
    elif requirement.endswith("-"):
        comparison, text = (lambda a, b: a <= b), requirement[:-1]
    expected = _parse_number(text)
    if expected is None:
        return False
    return comparison(actual, expected)


# =============================================================================
# FILTER PREDICATES
# =============================================================================


def _color_matches(colors: list[str], needle: str, none_words: tuple[str, ...]) -> bool:
    if needle in none_words:
        return not colors
    if needle in ("multicolor", "multi", "m"):
        return len(colors) > 1
    color = color_to_long(needle) if needle in WUBRG else needle
    return color in colors


def _matches_layout(face: CardFace, needle: str) -> bool:
    return face.card.layout.value.startswith(needle)


def _matches_type(face: CardFace, needle: str) -> bool:
    words = [*face.types, *face.subtypes]
    if face.card.is_token:
        words.append("token")
    if face.supertype:
        words.append(face.supertype)
    return any(word.startswith(needle) for word in words)


def _matches_rarity(face: CardFace, needle: str) -> bool:
    if len(needle) == 1:
        return face.card.rarity[0] == needle
    return face.card.rarity == needle


def _matches_color(face: CardFace, needle: str) -> bool:
    return _color_matches(face.color(), needle, ("colorless", "c"))


def _matches_color_identity(face: CardFace, needle: str) -> bool:
    return _color_matches(face.color_identity(), needle, ("colorless", "c"))


def _matches_producible_color(face: CardFace, needle: str) -> bool:
    return _color_matches(face.producible_colors(), needle, ("none", "n"))


def _matches_mana_value(face: CardFace, needle: str) -> bool:
    return validate_number_requirement(needle, face.mana_value())


def _matches_relative_pt(power: int, toughness: int, needle: str) -> bool:
    """Forms comparing power with toughness: n/n, n+/n, n/n-2, n+3/n, ..."""
    relative = {
        "n/n": power == toughness,
        "n/n+": toughness > power,
        "n+/n": power > toughness,
        "n/n-": toughness < power,
        "n-/n": power < toughness,
    }
    if needle in relative:
        return relative[needle]

    def difference(text: str) -> int | None:
        return int(text) if text.isascii() and text.isdigit() else None

    if needle.startswith("n/n+"):
        diff = difference(needle[4:])
        return diff is not None and toughness - power == diff
    if needle.startswith("n+") and needle.endswith("/n"):
        diff = difference(needle[2:-2])
        return diff is not None and power - toughness == diff
    if needle.startswith("n/n-"):
        diff = difference(needle[4:])
        return diff is not None and power - toughness == diff
    if needle.startswith("n-") and needle.endswith("/n"):
        diff = difference(needle[2:-2])
        return diff is not None and toughness - power == diff
    return False


def _matches_pt(face: CardFace, needle: str) -> bool:
    if needle in ("yes", "no"):
        return (face.pt is not None) == (needle == "yes")
    if face.pt is None or needle.count("/") != 1:
        return False
    # "*" counts as 0
    power = face.pt.power if isinstance(face.pt.power, int) else 0
    toughness = face.pt.toughness if isinstance(face.pt.toughness, int) else 0

    if "n" in needle:
        return _matches_relative_pt(power, toughness, needle)

    power_requirement, toughness_requirement = needle.split("/")
    return validate_number_requirement(
        toughness_requirement or "0+", toughness
    ) and validate_number_requirement(power_requirement or "0+", power)


def _rules_contain(face: CardFace, needle: str, variants: tuple[RuleVariant, ...]) -> bool:
    return any(rule.variant in variants and needle in rule.content.lower() for rule in face.rules)


def _matches_rules(face: CardFace, needle: str) -> bool:
    return _rules_contain(face, needle, (RuleVariant.KEYWORD, RuleVariant.ABILITY))


def _matches_reminder(face: CardFace, needle: str) -> bool:
    return _rules_contain(
        face, needle, (RuleVariant.CARD_TYPE_REMINDER, RuleVariant.INLINE_REMINDER)
    )


def _matches_flavor(face: CardFace, needle: str) -> bool:
    return _rules_contain(face, needle, (RuleVariant.FLAVOR,))


def _matches_deck(face: CardFace, needle: str) -> bool:
    count = face.card.get_tag_as_number(f"deck/{needle}")
    return count is not None and count >= 0


def _matches_set(face: CardFace, needle: str) -> bool:
    set_name = face.card.get_tag_as_string(settings.set_tag_key)
    return set_name is not None and set_name.lower().startswith(needle)


def _matches_tag(face: CardFace, needle: str) -> bool:
    key, _, value = (part.strip() for part in needle.partition("="))
    tags = face.card.tags
    if value:
        return any(
            tag_key.lower() == key and tag_value is not None and value in _tag_text(tag_value)
            for tag_key, tag_value in tags.items()
        )
    return any(tag_key.lower() == key for tag_key in tags)


def _tag_text(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).lower()


@dataclass(frozen=True)
class SearchFilter:
    """
    One search key and what it checks.

    Attributes:
        keys: Primary key first, then aliases
        description: Help text
        predicate: Check of a face against a lowercase needle
        examples: Sample terms
    """

    keys: tuple[str, ...]
    description: str
    predicate: Callable[[CardFace, str], bool]
    examples: tuple[str, ...] = ()


SEARCH_FILTERS: tuple[SearchFilter, ...] = (
    SearchFilter(
        ("layout", "l"), "card layout must match", _matches_layout, ("l:adventure",)
    ),
    SearchFilter(
        ("type", "t"),
        "a type, subtype, supertype or 'token' must start with the needle",
        _matches_type,
        ("t:creature", "t:legendary"),
    ),
    SearchFilter(("rarity", "r"), "card rarity must match", _matches_rarity, ("r:m",)),
    SearchFilter(
        ("color", "c"),
        "card has the color, or is colorless / multicolor",
        _matches_color,
        ("c:red", "c:m"),
    ),
    SearchFilter(
        ("color-identity", "ci"),
        "color identity has the color, or is colorless / multicolor",
        _matches_color_identity,
        ("ci:w", "ci:colorless"),
    ),
    SearchFilter(
        ("producible-color", "pc"),
        "card can add mana of the color, or none / multiple colors",
        _matches_producible_color,
        ("pc:g", "pc:none"),
    ),
    SearchFilter(
        ("manavalue", "mv"),
        "mana value meets the requirement (3, 2+, 5-)",
        _matches_mana_value,
        ("mv:2+",),
    ),
    SearchFilter(
        ("pt",),
        "power/toughness meets the requirement (yes, no, 1/1, 3+/, /2-, n/n, n+1/n)",
        _matches_pt,
        ("pt:yes", "pt:n/n"),
    ),
    SearchFilter(("rules",), "keyword or ability text contains", _matches_rules, ("rules:draw",)),
    SearchFilter(("reminder",), "reminder text contains", _matches_reminder, ("reminder:add",)),
    SearchFilter(("flavor",), "flavor text contains", _matches_flavor, ("flavor:ancient",)),
    SearchFilter(("deck", "d"), "card is in the named deck", _matches_deck, ("d:aggro",)),
    SearchFilter(("set", "s"), "set tag starts with", _matches_set, ("s:kpa",)),
    SearchFilter(
        ("tag",),
        "card has the tag, or the tag's value contains the text",
        _matches_tag,
        ("tag:set", "tag:deck/main=2"),
    ),
)


def _parse_term(term: str, key: str) -> tuple[str, bool] | None:
    """Needle and negation of a term for a key, None if the term is not for that key."""
    for separator, negate in (("!:", True), ("!=", True), (":", False), ("=", False)):
        prefix = key + separator
        if term.startswith(prefix):
            return term[len(prefix) :], negate
    return None


def _face_matches_term(face: CardFace, term: str) -> bool:
    for search_filter in SEARCH_FILTERS:
        for key in search_filter.keys:
            parsed = _parse_term(term, key)
            if parsed is None:
                continue
            needle, negate = parsed
            if not needle:
                break
            return search_filter.predicate(face, needle) != negate
    # An unfinished "key:" term matches nothing
    if term.endswith(":"):
        return False
    return term in face.name.lower()


def filter_cards(cards: Sequence[Card], query: str) -> list[Card]:
    """
    Cards matching every term of the query on at least one face.

    An empty query returns all cards.
    """
    query = query.strip()
    if not query:
        return list(cards)
    terms = _WHITESPACE.split(query.lower())
    result = [
        card
        for card in cards
        if any(all(_face_matches_term(face, term) for term in terms) for face in card.faces)
    ]
    logger.debug(
        "cards_filtered", extra={"query": query, "cards": len(cards), "matches": len(result)}
    )
    return result
