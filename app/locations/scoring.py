"""
Relevance scoring for location candidates.

Tiers are exclusive; the first that applies wins:

    exact name            100
    name prefix            80
    name substring         60
    secondary substring    40   (region for a city, commune for a place)
    positional overlap    0-20

Cities then get a flat +10, even on a zero base score.
"""

from app.locations.normalizer import normalize

EXACT_SCORE = 100
PREFIX_SCORE = 80
CONTAINS_SCORE = 60
SECONDARY_SCORE = 40
OVERLAP_MAX_SCORE = 20
CITY_BONUS = 10


def positional_overlap(name: str, query: str) -> float:
    """
    Share of indices holding the same character, scaled to OVERLAP_MAX_SCORE.

    Both arguments must already be normalized.
    """
    longest = max(len(name), len(query))
    if not longest:
        return 0.0
    matches = sum(1 for a, b in zip(name, query) if a == b)
    return matches / longest * OVERLAP_MAX_SCORE


def base_score(query: str, name: str, secondary: str = "") -> float:
    """Match quality of a candidate before the city bonus."""
    q = normalize(query)
    n = normalize(name)

    if n == q:
        return float(EXACT_SCORE)
    if n.startswith(q):
        return float(PREFIX_SCORE)
    if q in n:
        return float(CONTAINS_SCORE)
    if secondary and q in normalize(secondary):
        return float(SECONDARY_SCORE)
    return positional_overlap(n, q)


def score(query: str, name: str, secondary: str = "", is_city: bool = False) -> float:
    """Relevance of a candidate, city bonus included."""
    value = base_score(query, name, secondary)
    if is_city:
        value += CITY_BONUS
    return value
