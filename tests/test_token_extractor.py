"""
Tests for the Token Extractor.

These tests verify:
- Single and chained token phrases
- Counts, tapped tokens and "with" clauses
- Copy tokens
- Tokens created by the abilities of other tokens, down to a fixed depth
"""

import pytest

from kindred_paths.config import TOKEN_EXTRACTION_MAX_DEPTH
from kindred_paths.parsers import COPY_TOKEN, extract_tokens_from_ability


class TestTokenPhrases:
    def test_chained_tokens_split(self) -> None:
        ability = "When ~ enters, create a 1/1 white Rabbit creature token and a Treasure token."

        assert extract_tokens_from_ability(ability) == [
            "1/1 white Rabbit creature token",
            "Treasure token",
        ]

    def test_predefined_token(self) -> None:
        assert extract_tokens_from_ability("Sacrifice a creature: Create a Food token.") == [
            "Food token"
        ]

    @pytest.mark.parametrize("count", ["two", "three", "X", "that many", "thirteen"])
    def test_counts(self, count: str) -> None:
        ability = f"Create {count} 1/1 black Rat creature tokens."

        assert extract_tokens_from_ability(ability) == ["1/1 black Rat creature token"]

    def test_tapped_with_keyword(self) -> None:
        ability = "Whenever ~ attacks, it creates two tapped 2/2 black Zombie creature tokens with menace."

        assert extract_tokens_from_ability(ability) == [
            "2/2 black Zombie creature token with menace"
        ]

    def test_with_two_keywords(self) -> None:
        ability = "Create a 4/4 red Dragon creature token with flying and first strike."

        assert extract_tokens_from_ability(ability) == [
            "4/4 red Dragon creature token with flying and first strike"
        ]

    def test_named_token(self) -> None:
        ability = "Create Boo, a legendary 1/1 red Hamster creature token."

        assert extract_tokens_from_ability(ability) == ["Boo, legendary 1/1 red Hamster creature token"]

    def test_copy_token(self) -> None:
        ability = "Create a token that's a copy of target creature you control."

        assert extract_tokens_from_ability(ability) == [COPY_TOKEN]

    def test_no_tokens(self) -> None:
        assert extract_tokens_from_ability("Draw a card.") == []


class TestNestedTokens:
    def test_token_ability_creating_token(self) -> None:
        ability = (
            'Create a 1/1 colorless Servo artifact creature token with '
            '"When this creature dies, create a Treasure token."'
        )

        assert extract_tokens_from_ability(ability) == [
            '1/1 colorless Servo artifact creature token with '
            '"When this creature dies, create a Treasure token."',
            "Treasure token",
        ]

    def test_nesting_stops_below_max_depth(self) -> None:
        ability = "Create a create a create a create a Bird token."

        tokens = extract_tokens_from_ability(ability)

        assert tokens == [
            "create a create a create a Bird token",
            "create a create a Bird token",
            "create a Bird token",
        ]
        assert len(tokens) == TOKEN_EXTRACTION_MAX_DEPTH + 1
        assert "Bird token" not in tokens
