"""
Card Face — one printable side of a card.

A face holds the printed data (name, types, mana cost, rules fragments,
power/toughness, loyalty) and derives everything else from it: the mana
value, the rendered mana cost, type line and rules text, colors, color
identity, producible mana and the tokens its abilities create.

Faces are only built by Card, which validates every face right after
construction. A face that violates a card invariant raises
CardValidationError and the whole card is rejected.

INVARIANTS:
1. Validation reports the FIRST violated rule and nothing else
2. Derived values are pure functions of the face and its card
3. A face never has both a mana cost and given colors
"""

import re
from typing import TYPE_CHECKING

from kindred_paths.models.colors import CARD_COLORS, WUBRG, to_ordered_colors
from kindred_paths.models.failure import CardValidationError
from kindred_paths.models.layout import Layout
from kindred_paths.models.rules import (
    VARIABLE_LOYALTY_SORT_VALUE,
    LoyaltyAbility,
    Pt,
    Rule,
    RuleVariant,
    parse_loyalty_ability,
)
from kindred_paths.models.serialized import SerializedCardFace
from kindred_paths.models.typography import capitalize, enumerate_values
from kindred_paths.parsers.token_extractor import extract_tokens_from_ability

if TYPE_CHECKING:
    from kindred_paths.models.card import Card

# =============================================================================
# CARD VOCABULARY
# =============================================================================

CARD_RARITIES = ("common", "uncommon", "rare", "mythic")
CARD_SUPERTYPES = ("basic", "legendary")
CARD_TYPES = ("enchantment", "artifact", "creature", "land", "instant", "sorcery", "planeswalker")
PERMANENT_TYPES = ("enchantment", "artifact", "creature", "land", "planeswalker")
TOKEN_CARD_TYPES = ("enchantment", "artifact", "creature", "land")

# Tokens with rules defined by the game itself; referenced by name only
PREDEFINED_TOKEN_NAMES = (
    "Blood",
    "Clue",
    "Food",
    "Fuel",
    "Gold",
    "Incubator",
    "Junk",
    "Map",
    "Powerstone",
    "Treasure",
    "Asteroid",
)

LAND_SUBTYPE_COLORS: dict[str, str] = {
    "plains": "white",
    "island": "blue",
    "swamp": "black",
    "mountain": "red",
    "forest": "green",
}

# Mana cost keys that are not colors, in print order
NON_COLOR_MANA = ("x", "generic", "colorless")

_MANA_SYMBOL_PATTERN = re.compile(r"{([\w/]+)}")
_ADD_MANA_PATTERN = re.compile(r"[Aa]dd ((?:{[wubrgc]+})+)( or ((?:{[wubrgc]+})+))?")
_CURLY_QUOTES_PATTERN = re.compile("[“”‘’]")
_BULLET_PATTERN = re.compile("[·•]")
_REPEATED_SPACES = re.compile(r" +")

LINE_NO_SPACE = "{lns}"


def color_of(text: str) -> list[str]:
    """Colors of every mana symbol in the text, hybrids count for both halves."""
    found: list[str] = []
    for match in _MANA_SYMBOL_PATTERN.finditer(text):
        inner = match.group(1)
        for character, color in zip(WUBRG, CARD_COLORS):
            if character in inner and color not in found:
                found.append(color)
    return to_ordered_colors(found)


class CardFace:
    """
    One side of a card.

    Attributes:
        card: The card this face belongs to
        face_index: 0 for the front face, 1 for the back/adventure face
        name: Printed name
        types: Card types in print order (never empty)
        subtypes: Lowercase subtypes in print order
        supertype: "basic", "legendary" or None
        mana_cost: Pips per mana key (colors, "generic", "colorless", "x")
        given_colors: Colors of faces without a mana cost (tokens, back faces)
        rules: Ordered rules fragments
        pt: Power and toughness, if any
        loyalty: Starting loyalty (planeswalkers only)
        art: Art file reference
    """

    __slots__ = (
        "card",
        "face_index",
        "name",
        "types",
        "subtypes",
        "supertype",
        "mana_cost",
        "given_colors",
        "rules",
        "pt",
        "loyalty",
        "art",
    )

    def __init__(self, data: SerializedCardFace, card: "Card", face_index: int) -> None:
        self.card = card
        self.face_index = face_index

        self.name: str = data["name"]
        self.types: list[str] = list(data["types"])
        self.subtypes: list[str] = list(data.get("subtypes") or [])
        self.supertype: str | None = data.get("supertype")
        mana_cost = data.get("manaCost")
        self.mana_cost: dict[str, int] | None = dict(mana_cost) if mana_cost is not None else None
        given_colors = data.get("givenColors")
        self.given_colors: list[str] | None = list(given_colors) if given_colors is not None else None
        self.rules: list[Rule] = [Rule.from_json(rule) for rule in data.get("rules") or []]
        pt = data.get("pt")
        self.pt: Pt | None = Pt.from_json(pt) if pt is not None else None
        self.loyalty: int | None = data.get("loyalty")
        self.art: str | None = data.get("art")

    def __repr__(self) -> str:
        return f"CardFace(name={self.name!r}, face_index={self.face_index})"

    def to_json(self) -> SerializedCardFace:
        data: SerializedCardFace = {"name": self.name, "types": list(self.types)}
        if self.given_colors is not None:
            data["givenColors"] = list(self.given_colors)
        if self.mana_cost is not None:
            data["manaCost"] = dict(self.mana_cost)
        if self.subtypes:
            data["subtypes"] = list(self.subtypes)
        if self.supertype is not None:
            data["supertype"] = self.supertype
        if self.rules:
            data["rules"] = [rule.to_json() for rule in self.rules]
        if self.pt is not None:
            data["pt"] = self.pt.to_json()
        if self.loyalty is not None:
            data["loyalty"] = self.loyalty
        if self.art is not None:
            data["art"] = self.art
        return data

    @property
    def is_planeswalker(self) -> bool:
        return "planeswalker" in self.types

    @property
    def short_name(self) -> str:
        """Name before the first comma ("Farock" for "Farock, The Damned Doctor")."""
        return self.name.split(",")[0].strip()

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _fail(self, reason: str) -> CardValidationError:
        return CardValidationError(card_id=self.card.id, face_name=self.name, reason=reason)

    def validate(self) -> None:
        """
        Check every face invariant.

        Raises:
            CardValidationError: On the first violated invariant
        """
        self._validate_supertype()
        self._validate_token()
        self._validate_types()
        self._validate_rules()
        self._validate_pt()
        if "land" in self.types and self.mana_cost is not None:
            raise self._fail("land cards cannot have a mana cost")
        self._validate_loyalty()
        self._validate_mana()

    def _validate_supertype(self) -> None:
        if self.supertype != "basic":
            return
        if "land" not in self.types:
            raise self._fail("super type basic must be associated with lands")
        if self.card.rarity != "common":
            raise self._fail("super type basic must have common rarity")
        if self.card.is_token:
            raise self._fail("super type basic cannot be a token")
        if len(self.card.faces) != 1:
            raise self._fail("basic land cards can only have one face")

    def _validate_token(self) -> None:
        if not self.card.is_token:
            return
        if self.card.rarity != "common":
            raise self._fail("token cards must have common rarity")
        if len(self.card.faces) != 1:
            raise self._fail("token cards can only have one face")
        if not any(t in self.types for t in TOKEN_CARD_TYPES):
            raise self._fail(
                f"token cards must have a tokenable type ({', '.join(TOKEN_CARD_TYPES)})"
            )
        if self.mana_cost is not None:
            raise self._fail("token cards cannot have a mana cost")
        if any("~" in rule.content for rule in self.rules):
            raise self._fail(
                "a token cannot reference itself, use this creature/this artifact/etc. "
                "instead of ~ in the rules"
            )

    def _validate_types(self) -> None:
        types = self.types
        if not types:
            raise self._fail("card must have at least one type")
        if len(types) > 1:
            if any(t in types for t in ("instant", "sorcery", "planeswalker")):
                raise self._fail(
                    "instants, sorceries, and planeswalkers cannot be combined with other types"
                )
            if "land" in types and types[-1] != "land":
                raise self._fail("if there are multiple types, land must always come last")
            if "creature" in types and types[-1] != "creature":
                if types[-1] != "land" or types[-2] != "creature":
                    raise self._fail(
                        "if there is a creature type, it must be last, "
                        "unless land is last, then it must be second to last"
                    )

        if ("instant" in types or "sorcery" in types) and self.subtypes:
            is_adventure_face = (
                self.face_index == 1
                and self.card.layout == Layout.ADVENTURE
                and len(types) == 1
                and self.subtypes[0] == "adventure"
            )
            if not is_adventure_face:
                raise self._fail("instants and sorceries cannot have subtypes")

    def _validate_rules(self) -> None:
        rules = self.rules
        if any(_CURLY_QUOTES_PATTERN.search(rule.content) for rule in rules):
            raise self._fail("only straight single (') and double (\") quotes are allowed in rules")
        if any(
            index != 0 and rule.variant == RuleVariant.CARD_TYPE_REMINDER
            for index, rule in enumerate(rules)
        ):
            raise self._fail("card-type-reminder text must always be first in the rules")
        if any(
            rule.variant == RuleVariant.INLINE_REMINDER
            and (
                index == 0
                or rules[index - 1].variant not in (RuleVariant.ABILITY, RuleVariant.KEYWORD)
            )
            for index, rule in enumerate(rules)
        ):
            raise self._fail("inline-reminder text must always follow an ability or keyword")
        if any(
            rule.variant in (RuleVariant.CARD_TYPE_REMINDER, RuleVariant.INLINE_REMINDER)
            and (rule.content.startswith("(") or rule.content.endswith(")"))
            for rule in rules
        ):
            raise self._fail("reminder text should not start with ( or end with )")
        if any(
            rule.variant == RuleVariant.FLAVOR and index != len(rules) - 1
            for index, rule in enumerate(rules)
        ):
            raise self._fail("flavor text must always be at the end of the rules")
        if any(self.name.lower() in rule.content.lower() for rule in rules):
            raise self._fail(
                "the card name should not be in the rules (use ~ as a placeholder for the card name)"
            )
        if any("—" in rule.content for rule in rules):
            raise self._fail("the rules should not use the em dash (—), use {-} instead")
        if any(_BULLET_PATTERN.search(rule.content) for rule in rules):
            raise self._fail("the rules should not use bullets (· or •), use {bullet} instead")
        if any(
            rule.variant == RuleVariant.KEYWORD and rule.content != rule.content.lower()
            for rule in rules
        ):
            raise self._fail("all keywords must be lowercase")
        if any(rule.variant == RuleVariant.ABILITY and "\n" in rule.content for rule in rules):
            raise self._fail("abilities must not contain newlines")

    def _validate_pt(self) -> None:
        if self.pt is None:
            if "creature" in self.types:
                raise self._fail("creature cards must have power and toughness")
            if "artifact" in self.types and "vehicle" in self.subtypes:
                raise self._fail("vehicle artifacts must have power and toughness")
            return

        power, toughness = self.pt.power, self.pt.toughness
        for value in (power, toughness):
            if value != "*" and (isinstance(value, bool) or not isinstance(value, int)):
                raise self._fail("power and toughness must be integers")
        if (isinstance(power, int) and power < 0) or (isinstance(toughness, int) and toughness < 0):
            raise self._fail("power and toughness must be non-negative")
        if power == "*" and not any("power" in rule.content.lower() for rule in self.rules):
            raise self._fail("cards with * power must have rules that reference power")
        if toughness == "*" and not any("toughness" in rule.content.lower() for rule in self.rules):
            raise self._fail("cards with * toughness must have rules that reference toughness")

    def _validate_loyalty(self) -> None:
        if not self.is_planeswalker:
            if self.loyalty:
                raise self._fail("only planeswalker cards can have loyalty")
            return

        if self.supertype != "legendary":
            raise self._fail("planeswalker cards must be legendary")
        if self.pt is not None:
            raise self._fail("planeswalker cards cannot have power and toughness")
        if not self.loyalty:
            raise self._fail("planeswalker cards must have loyalty")
        if isinstance(self.loyalty, bool) or not isinstance(self.loyalty, int):
            raise self._fail("planeswalker loyalty must be an integer")
        if self.loyalty < 1:
            raise self._fail("planeswalker loyalty must be at least 1")
        if self.subtypes:
            raise self._fail(
                "planeswalker cards cannot have subtypes, "
                "the name subtype is added automatically"
            )
        if "," not in self.name:
            raise self._fail(
                "planeswalker cards must have a comma in their name "
                "to separate the name from the title"
            )

        costs: list[int] = []
        for rule in self.rules:
            if rule.variant not in (
                RuleVariant.KEYWORD,
                RuleVariant.ABILITY,
                RuleVariant.INLINE_REMINDER,
            ):
                raise self._fail("planeswalker rules must only contain keywords and abilities")
            ability = parse_loyalty_ability(rule)
            if ability is not None:
                costs.append(
                    VARIABLE_LOYALTY_SORT_VALUE if ability.cost == "-X" else int(ability.cost)
                )
            elif rule.variant != RuleVariant.INLINE_REMINDER and costs:
                raise self._fail("planeswalker loyalty abilities should all be together at the end")
        if not costs:
            raise self._fail("planeswalker cards must have at least one loyalty ability")
        if len(costs) > 3:
            raise self._fail("planeswalker cards cannot have more than three loyalty abilities")
        if any(later > earlier for earlier, later in zip(costs, costs[1:])):
            raise self._fail("planeswalker loyalty abilities must be in descending order")

    def _validate_mana(self) -> None:
        allow_no_mana_cost = (
            "land" in self.types
            or self.card.is_token
            or (self.card.layout == Layout.TRANSFORM and self.face_index == 1)
        )
        if self.mana_cost is None and not allow_no_mana_cost:
            raise self._fail(
                "only land cards, token cards, and back faces of transform cards "
                "can have no mana cost"
            )
        if self.mana_cost is None and self.given_colors is None and "land" not in self.types:
            raise self._fail("given colors must be provided if there is no mana cost")
        if self.mana_cost is not None and self.given_colors is not None:
            raise self._fail("given colors cannot be provided if there is a mana cost")

    # =========================================================================
    # MANA
    # =========================================================================

    def mana_value(self) -> int:
        """Total pips, variable X excluded."""
        if not self.mana_cost:
            return 0
        return sum(amount for key, amount in self.mana_cost.items() if key != "x")

    def render_mana_cost(self) -> str:
        """Mana symbols in print order, e.g. "{x}{2}{w}{u}"."""
        if self.mana_cost is None:
            return ""
        if self.mana_value() == 0:
            return "{0}"

        cost = self.mana_cost
        result = ""
        if cost.get("x", 0) > 0:
            result += "{x}" * cost["x"]
        if cost.get("generic", 0) > 0:
            result += "{" + str(cost["generic"]) + "}"
        if cost.get("colorless", 0) > 0:
            result += "{c}" * cost["colorless"]
        colors = to_ordered_colors([key for key in cost if key not in NON_COLOR_MANA])
        for color in colors:
            amount = cost.get(color, 0)
            if amount > 0:
                result += ("{" + WUBRG[CARD_COLORS.index(color)] + "}") * amount
        return result

    def color(self) -> list[str]:
        if self.mana_cost is None:
            return to_ordered_colors(self.given_colors or [])
        return color_of(self.render_mana_cost())

    def color_identity(self) -> list[str]:
        """Colors of the mana cost plus every mana symbol in keywords and abilities."""
        if self.mana_cost is None:
            return to_ordered_colors(self.given_colors or [])
        text = " ".join(
            rule.content
            for rule in self.rules
            if rule.variant in (RuleVariant.KEYWORD, RuleVariant.ABILITY)
        )
        return color_of(f"{self.render_mana_cost()} {text}")

    def producible_colors(self) -> list[str]:
        """
        Mana this face can add, as colors plus "colorless".

        Reads "add {g}" / "add {w}{u} or {c}" phrasing and "add one mana of
        any color" from the rules, and basic land subtypes.
        """
        text = " ".join(
            rule.content
            for rule in self.rules
            if rule.variant
            in (RuleVariant.KEYWORD, RuleVariant.ABILITY, RuleVariant.CARD_TYPE_REMINDER)
        )
        if "add one mana of any color" in text.lower():
            return list(CARD_COLORS)

        produced: list[str] = []

        def add(value: str) -> None:
            if value not in produced:
                produced.append(value)

        for match in _ADD_MANA_PATTERN.finditer(text):
            for symbols in (match.group(1), match.group(3)):
                if not symbols:
                    continue
                if "{c}" in symbols:
                    add("colorless")
                for color in color_of(symbols):
                    add(color)

        if "land" in self.types:
            for subtype, color in LAND_SUBTYPE_COLORS.items():
                if subtype in self.subtypes:
                    add(color)
        return produced

    # =========================================================================
    # TEXT
    # =========================================================================

    def render_type_line(self) -> str:
        type_line = ""
        if self.card.is_token:
            type_line += "Token "
        if self.supertype:
            type_line += capitalize(self.supertype) + " "
        type_line += " ".join(capitalize(t) for t in self.types)
        if self.subtypes:
            type_line += " — " + " ".join(capitalize(st) for st in self.subtypes)
        if self.is_planeswalker:
            type_line += f" — {self.short_name}"
        return type_line

    def render_rules(self) -> str:
        """
        Compose the printed rules text.

        Successive keywords share one line ("Flying, vigilance") unless an
        inline reminder follows the next keyword, in which case that keyword
        starts its own line so the reminder stays attached to it. Reminders
        are italic and parenthesized. Planeswalker loyalty abilities are left
        out, see loyalty_abilities().
        """
        rules = self.rules
        text = ""

        def peek(index: int) -> Rule | None:
            return rules[index] if index < len(rules) else None

        def line_ending(index: int) -> str:
            following = peek(index + 1)
            if following is None or following.variant == RuleVariant.FLAVOR:
                return ""
            if following.variant == RuleVariant.INLINE_REMINDER:
                return " "
            return "\n"

        index = 0
        while index < len(rules):
            rule = rules[index]
            if self.is_planeswalker and parse_loyalty_ability(rule) is not None:
                break

            if rule.variant in (RuleVariant.CARD_TYPE_REMINDER, RuleVariant.INLINE_REMINDER):
                if rule.content.endswith(LINE_NO_SPACE):
                    content = rule.content[: -len(LINE_NO_SPACE)]
                    text += f"{{i}}({content}){LINE_NO_SPACE}{{/i}}\n\n"
                else:
                    text += f"{{i}}({rule.content}){{/i}}"
                text += line_ending(index)
            elif rule.variant == RuleVariant.KEYWORD:
                text += capitalize(rule.content)
                following, after = peek(index + 1), peek(index + 2)
                while (
                    following is not None
                    and following.variant == RuleVariant.KEYWORD
                    and (after is None or after.variant != RuleVariant.INLINE_REMINDER)
                ):
                    text += f", {following.content}"
                    index += 1
                    following, after = peek(index + 1), peek(index + 2)
                text += line_ending(index)
            elif rule.variant == RuleVariant.ABILITY:
                text += rule.content + line_ending(index)
            elif rule.variant == RuleVariant.FLAVOR:
                text += f"{{flavor}}{rule.content}"
            index += 1
        return self._sanitize(text)

    def loyalty_abilities(self) -> list[LoyaltyAbility]:
        """Loyalty abilities of a planeswalker, with any inline reminder appended."""
        if not self.is_planeswalker:
            return []
        abilities: list[LoyaltyAbility] = []
        for index, rule in enumerate(self.rules):
            ability = parse_loyalty_ability(rule)
            if ability is None:
                continue
            content = ability.content
            following = self.rules[index + 1] if index + 1 < len(self.rules) else None
            if following is not None and following.variant == RuleVariant.INLINE_REMINDER:
                content += f" {{i}}({following.content}){{/i}}"
            abilities.append(LoyaltyAbility(cost=ability.cost, content=self._sanitize(content)))
        return abilities

    def _sanitize(self, text: str) -> str:
        return _REPEATED_SPACES.sub(" ", text.replace("~", self.short_name)).strip()

    def reference_name(self) -> str:
        """Descriptive noun phrase, e.g. "legendary 2/2 white Human Warrior creature"."""
        reference = ""
        if self.supertype:
            reference += f"{self.supertype} "
        if self.pt is not None:
            reference += f"{self.pt} "
        color = self.color()
        if color:
            reference += f"{enumerate_values(color)} "
        elif "artifact" not in self.types:
            reference += "colorless "
        if self.subtypes:
            reference += " ".join(capitalize(st) for st in self.subtypes) + " "
        reference += " ".join(self.types)
        if self.card.is_token:
            reference += " token"
        return reference

    def token_reference_name(self) -> str:
        """
        How other cards refer to this token when creating it.

        Raises:
            ValueError: If the card is not a token
        """
        if not self.card.is_token:
            raise ValueError("can only get token reference name for token cards")
        if self.name in PREDEFINED_TOKEN_NAMES:
            return f"{self.name} token"

        reference = ""
        if self.name.lower() != " ".join(self.subtypes):
            reference += f"{self.name}, "
        reference += self.reference_name()

        granted = [
            f'"{rule.content}"' if rule.variant == RuleVariant.ABILITY else rule.content
            for rule in self.rules
            if rule.variant in (RuleVariant.KEYWORD, RuleVariant.ABILITY)
        ]
        if granted:
            reference += " with " + " and ".join(granted)
        return reference

    def explain(self, without_name: bool = False) -> str:
        """
        One sentence describing the face, used as prompt input.

        Keywords following keywords are joined with a comma, every other
        item with "and", mirroring how render_rules groups keywords.
        """
        layout = self.card.layout
        if layout.is_dual_render:
            face_information = "/front" if self.face_index == 0 else "/back"
        elif self.face_index == 1 and layout != Layout.NORMAL:
            face_information = f"/{layout.value}"
        else:
            face_information = ""

        readable = ""
        if not without_name:
            readable += f'"{self.name}" (#{self.card.collector_number}{face_information}) is '
        readable += f"a {self.card.rarity} {self.reference_name()}"
        if self.mana_value() > 0:
            readable += f" for {self.render_mana_cost()} mana"
        if self.loyalty is not None:
            readable += f" with {self.loyalty} starting loyalty"

        items = [
            rule
            for rule in self.rules
            if rule.variant in (RuleVariant.ABILITY, RuleVariant.KEYWORD)
        ]
        if items:
            parts = [f'"{items[0].content}"']
            for previous, rule in zip(items, items[1:]):
                both_keywords = (
                    rule.variant == RuleVariant.KEYWORD and previous.variant == RuleVariant.KEYWORD
                )
                parts.append(f'{", " if both_keywords else " and "}"{rule.content}"')
            readable += ", with: " + "".join(parts)
        return readable + "."

    def creatable_token_names(self) -> list[str]:
        """Distinct descriptions of the tokens this face's abilities create."""
        tokens: dict[str, None] = {}
        for rule in self.rules:
            if rule.variant == RuleVariant.ABILITY and "create" in rule.content.lower():
                for token in extract_tokens_from_ability(rule.content):
                    tokens.setdefault(token, None)
        return list(tokens)
