"""
Candidate collection, commune deduplication and final ordering.

Every function here is pure: inputs are never mutated and nothing is kept
between calls.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Optional

from app.locations.models import (
    City,
    Place,
    PlaceKind,
    ResultKind,
    ScoredCandidate,
    SearchResult,
)
from app.locations.normalizer import collation_key, normalize
from app.locations.scoring import base_score, score


class TypePriority(str, Enum):
    """Tie-break order between result kinds of equal score."""
    GENERAL = "general"  # city, commune, neighborhood
    COMMUNE_FIRST = "commune_first"  # commune, neighborhood, city


PRIORITY_ORDERS: Dict[TypePriority, Dict[ResultKind, int]] = {
    TypePriority.GENERAL: {
        ResultKind.CITY: 0,
        ResultKind.COMMUNE: 1,
        ResultKind.NEIGHBORHOOD: 2,
    },
    TypePriority.COMMUNE_FIRST: {
        ResultKind.COMMUNE: 0,
        ResultKind.NEIGHBORHOOD: 1,
        ResultKind.CITY: 2,
    },
}


def _commune_candidate(place: Place, query: str) -> Optional[ScoredCandidate]:
    """Score the commune a place belongs to (or is) against the query."""
    commune = place.commune_name or (place.name if place.kind == PlaceKind.COMMUNE else "")
    if not commune:
        return None
    value = score(query, commune, "", is_city=False)
    if value <= 0:
        return None

    # A neighborhood's coordinates are not its commune's
    own = place.kind == PlaceKind.COMMUNE
    result = SearchResult(
        id=place.id,
        name=commune,
        kind=ResultKind.COMMUNE,
        commune_name=commune,
        parent_city_id=place.parent_city_id,
        latitude=place.latitude if own else None,
        longitude=place.longitude if own else None,
    )
    return ScoredCandidate(result=result, score=value)


def collect(query: str, cities: Iterable[City], places: Iterable[Place]) -> List[ScoredCandidate]:
    """
    Score every city and place against the query, keeping positive matches.

    Each place is evaluated twice: on its own name (with its commune as
    secondary field), and as the commune it names, so a commune surfaces
    even when none of its neighborhoods match directly. Cities are kept
    only when their base match is positive; the city bonus alone does not
    make a match.
    """
    candidates: List[ScoredCandidate] = []

    for city in cities:
        if base_score(query, city.name, city.region) <= 0:
            continue
        candidates.append(ScoredCandidate(
            result=SearchResult.from_city(city),
            score=score(query, city.name, city.region, is_city=True),
        ))

    for place in places:
        value = score(query, place.name, place.commune_name, is_city=False)
        if value > 0:
            candidates.append(ScoredCandidate(result=SearchResult.from_place(place), score=value))

        commune = _commune_candidate(place, query)
        if commune is not None:
            candidates.append(commune)

    return candidates


def dedupe_communes(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """
    Keep one commune candidate per normalized commune name.

    The highest score wins; on a tie the first one seen is kept. Cities and
    neighborhoods pass through untouched, in their original order.
    """
    best: Dict[str, ScoredCandidate] = {}
    others: List[ScoredCandidate] = []

    for candidate in candidates:
        if candidate.result.kind != ResultKind.COMMUNE:
            others.append(candidate)
            continue
        key = normalize(candidate.result.commune_name or candidate.result.name)
        current = best.get(key)
        if current is None or candidate.score > current.score:
            best[key] = candidate

    return list(best.values()) + others


def rank(
    candidates: Iterable[ScoredCandidate],
    limit: Optional[int] = None,
    priority: TypePriority = TypePriority.GENERAL,
) -> List[SearchResult]:
    """
    Order candidates by score (desc), kind priority, then name.

    The sort is stable, so full ties keep their input order. Scores are
    dropped from the returned results.
    """
    order = PRIORITY_ORDERS[TypePriority(priority)]
    ordered = sorted(
        candidates,
        key=lambda c: (-c.score, order[c.result.kind], collation_key(c.result.name)),
    )
    if limit is not None:
        ordered = ordered[:max(limit, 0)]
    return [c.result for c in ordered]
