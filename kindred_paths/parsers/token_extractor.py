"""
Token Extractor.

Finds the tokens an ability creates, as printed descriptions:

    "When ~ enters, create a 1/1 white Rabbit creature token and a Treasure token."
    -> ["1/1 white Rabbit creature token", "Treasure token"]

This is a pattern heuristic over English rules text, not a parser. It
recognizes:
- "create"/"creates" followed by a count (a, a number of, that many, X,
  one..thirteen), or a follow-up "and a ..." right after a token phrase
- an optional proper name before a comma ("create Boo, a legendary ...")
- "tapped" / "tapped and attacking"
- an optional descriptor ending in "token" / "tokens"
- a "with <keyword or "quoted ability"> (and ...)" clause
- "token that's a copy", reported as "Copy token"

A token can itself carry an ability that creates tokens, so every result is
searched again, up to TOKEN_EXTRACTION_MAX_DEPTH levels.
"""

import re

from kindred_paths.config import TOKEN_EXTRACTION_MAX_DEPTH

COPY_TOKEN = "Copy token"

_NUMBER_WORDS = (
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
    "thirteen",
)

_KEYWORD_OR_ABILITY = r'(?:(?:\w+(?: strike)?)|(?:".+?"))'

TOKEN_CREATION_PATTERN = re.compile(
    "".join(
        [
            r"(?:[cC]reates?|(?<=token) and|(?<=tokens) and)",
            r"( [A-Z]\w*,)?",
            r" (?:a(?: number of)?|that many|X|" + "|".join(_NUMBER_WORDS) + ")",
            r"(?: tapped and attacking)?",
            r"(?: tapped)?",
            # Shortest descriptor, so "... token and a Treasure token" splits in two
            r"((?: [a-zA-Z0-9/ ]+?)? token)",
            r"(?:s)?",
            r"( with " + _KEYWORD_OR_ABILITY + r"?(?: and " + _KEYWORD_OR_ABILITY + r"?)*)?",
            r"( that['’]s a copy)?",
        ]
    ),
    re.ASCII,
)


def _describe(match: re.Match[str]) -> str:
    description = "".join(group for group in match.groups() if group).strip()
    if description in ("token that's a copy", "token that’s a copy"):
        return COPY_TOKEN
    return description


def extract_tokens_from_ability(ability: str, depth: int = 0) -> list[str]:
    """
    Extract token descriptions from one ability's text.

    Args:
        ability: Rules text of a single ability
        depth: Current recursion depth (callers leave this at 0)

    Returns:
        Descriptions in order of appearance, each followed by the tokens
        found inside it. May contain duplicates; callers dedupe.
    """
    results: list[str] = []
    for match in TOKEN_CREATION_PATTERN.finditer(ability):
        description = _describe(match)
        results.append(description)
        if depth < TOKEN_EXTRACTION_MAX_DEPTH:
            results.extend(extract_tokens_from_ability(description, depth + 1))
    return results
