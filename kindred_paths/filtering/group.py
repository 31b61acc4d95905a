"""
Group Matching — assign candidate cards to named design requirements.

A group is an ordered list of requirements ("a rare", "a legendary
creature", ...), each a predicate over candidates. Matching is greedy:

    Each round, compute the matching candidates of every open requirement.
    The requirement with the fewest matches goes first (ties go to the
    one declared first). It consumes its LAST matching candidate, or
    fails when it has none.

Candidates that matched some requirement but were never consumed are
reported as ambiguous: they could stand in for the requirements they
match.

This is a deterministic approximation, not a maximum bipartite matching.
A pool that could satisfy every requirement may still produce failures.

INVARIANTS:
1. Every requirement yields exactly one succeeded or failed record
2. A candidate is consumed at most once
3. The caller's pool is never mutated
4. Same requirements + same pool (same order) -> same matches
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Literal, Protocol, TypeVar

logger = logging.getLogger(__name__)


class HasId(Protocol):
    @property
    def id(self) -> str: ...


T = TypeVar("T", bound=HasId)


@dataclass(frozen=True)
class Requirement(Generic[T]):
    """A named predicate a group member must satisfy."""

    name: str
    predicate: Callable[[T], bool]


@dataclass(frozen=True, slots=True)
class MatchSucceeded:
    """A requirement consumed a candidate."""

    requirement: str
    id: str
    status: Literal["succeeded"] = "succeeded"

    def to_dict(self) -> dict[str, Any]:
        return {"requirement": self.requirement, "status": self.status, "id": self.id}


@dataclass(frozen=True, slots=True)
class MatchFailed:
    """A requirement had no candidate left."""

    requirement: str
    status: Literal["failed"] = "failed"

    def to_dict(self) -> dict[str, Any]:
        return {"requirement": self.requirement, "status": self.status}


@dataclass(frozen=True, slots=True)
class MatchAmbiguous:
    """A matching candidate that was not chosen for any requirement."""

    id: str
    requirements: tuple[str, ...]
    status: Literal["ambiguous"] = "ambiguous"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "status": self.status, "requirements": list(self.requirements)}


Match = MatchSucceeded | MatchFailed | MatchAmbiguous


class Group(Generic[T]):
    """
    A named set of requirements matched together.

    Raises:
        ValueError: If two requirements share a name
    """

    def __init__(self, name: str, requirements: Sequence[Requirement[T]]) -> None:
        seen: set[str] = set()
        for requirement in requirements:
            if requirement.name in seen:
                raise ValueError(f"group {name} has a duplicate requirement {requirement.name}")
            seen.add(requirement.name)
        self.name = name
        self.requirements: tuple[Requirement[T], ...] = tuple(requirements)

    def match_to(self, pool: Sequence[T]) -> list[Match]:
        """
        Match the pool against the requirements.

        Args:
            pool: Candidates with stable, unique ids

        Returns:
            succeeded/failed records in consumption order, then ambiguous
            records in the order candidates were first seen
        """
        remaining: list[T] = list(pool)
        # Ordered set of ids that matched some requirement and are still unconsumed
        candidates: dict[str, None] = {}
        open_requirements = list(self.requirements)
        matches: list[Match] = []

        while open_requirements:
            matching: dict[str, list[T]] = {}
            for requirement in open_requirements:
                hits = [item for item in remaining if requirement.predicate(item)]
                for item in hits:
                    candidates.setdefault(item.id, None)
                matching[requirement.name] = hits

            # min keeps the first of equally small entries
            chosen = min(matching, key=lambda name: len(matching[name]))

            open_requirements = [r for r in open_requirements if r.name != chosen]

            hits = matching[chosen]
            if not hits:
                matches.append(MatchFailed(requirement=chosen))
                continue

            item = hits.pop()
            del remaining[next(i for i, other in enumerate(remaining) if other is item)]
            candidates.pop(item.id, None)
            matches.append(MatchSucceeded(requirement=chosen, id=item.id))

        for candidate_id in candidates:
            matched = tuple(
                requirement.name
                for requirement in self.requirements
                if any(
                    item.id == candidate_id and requirement.predicate(item) for item in remaining
                )
            )
            matches.append(MatchAmbiguous(id=candidate_id, requirements=matched))

        logger.info(
            "group_matched",
            extra={
                "group": self.name,
                "pool_size": len(pool),
                "succeeded": sum(isinstance(m, MatchSucceeded) for m in matches),
                "failed": sum(isinstance(m, MatchFailed) for m in matches),
                "ambiguous": sum(isinstance(m, MatchAmbiguous) for m in matches),
            },
        )
        return matches
