from kindred_paths.filtering.card_search import (
    SEARCH_FILTERS,
    SearchFilter,
    filter_cards,
    validate_number_requirement,
)
from kindred_paths.filtering.group import (
    Group,
    Match,
    MatchAmbiguous,
    MatchFailed,
    MatchSucceeded,
    Requirement,
)

__all__ = [
    "SEARCH_FILTERS",
    "Group",
    "Match",
    "MatchAmbiguous",
    "MatchFailed",
    "MatchSucceeded",
    "Requirement",
    "SearchFilter",
    "filter_cards",
    "validate_number_requirement",
]
