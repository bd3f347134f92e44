"""
Deal recommendation scoring.

A deal's score is a weighted sum of five sub-scores, each in [0, 1]:

* **distance** to the user (closer is better, 0 when position is unknown)
* **price** of the happy-hour offer (cheaper is better)
* **active** status right now
* **popularity**, a fixed placeholder until a real signal exists
* **preference** match against the user's stored preferences

so the final score also lands in [0, 1].
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from ..deals.categories import classify_category
from ..deals.models import Deal, Establishment, UserPosition
from .preferences import UserPreferences, price_range_for

DEFAULT_WEIGHTS: dict[str, float] = {
    "distance": 0.35,
    "price": 0.20,
    "active": 0.25,
    "popularity": 0.10,
    "preference": 0.10,
}

# No popularity signal is computed anywhere yet; every deal gets this value.
POPULARITY_PLACEHOLDER = 0.5

# (upper bound in km, score), first bound the distance is below wins
_DISTANCE_BUCKETS = [(1, 1.0), (3, 0.8), (5, 0.6), (10, 0.3)]
_FAR_SCORE = 0.1

_PRICE_BUCKETS = [(8, 1.0), (12, 0.9), (15, 0.7), (20, 0.5), (30, 0.3)]
_EXPENSIVE_SCORE = 0.1

_ACTIVE_SCORE = 1.0
_INACTIVE_SCORE = 0.3


def distance_score(distance_km: float | None) -> float:
    if distance_km is None:
        return 0.0
    for bound, score in _DISTANCE_BUCKETS:
        if distance_km < bound:
            return score
    return _FAR_SCORE


def price_score(price: float) -> float:
    for bound, score in _PRICE_BUCKETS:
        if price < bound:
            return score
    return _EXPENSIVE_SCORE


def preference_score(deal: Deal, prefs: UserPreferences) -> float:
    known = classify_category(deal.alcohol_category)
    category = prefs.category_score(known.value if known else deal.alcohol_category)
    price = prefs.price_score(price_range_for(deal.happy_hour_price))
    views = min(prefs.views_of(deal.id), 5) / 5
    visits = min(prefs.visits_to(deal.establishment_id), 10) / 10
    return 0.4 * (category / 10) + 0.4 * (price / 10) + 0.1 * views + 0.1 * visits


def calculate_deal_score(
    deal: Deal,
    establishment: Establishment,
    user_position: UserPosition | None,
    is_active: bool,
    distance_km: float | None,
    preferences: UserPreferences | None = None,
    weights: Mapping[str, float] | None = None,
) -> float:
    """Weighted recommendation score for one deal; higher is better."""
    w = {**DEFAULT_WEIGHTS, **weights} if weights else DEFAULT_WEIGHTS
    prefs = preferences or UserPreferences()

    return (
        w["distance"] * distance_score(distance_km)
        + w["price"] * price_score(deal.happy_hour_price)
        + w["active"] * (_ACTIVE_SCORE if is_active else _INACTIVE_SCORE)
        + w["popularity"] * POPULARITY_PLACEHOLDER
        + w["preference"] * preference_score(deal, prefs)
    )


@dataclass
class ScoredDeal:
    deal: Deal
    score: float
    is_active: bool = False
    distance_km: float | None = None


def score_deals(
    deals: Iterable[Deal],
    establishments: Mapping[int, Establishment],
    user_position: UserPosition | None,
    is_active_fn: Callable[[Deal], bool],
    distance_fn: Callable[[Establishment], float | None],
    preferences: UserPreferences | None = None,
    weights: Mapping[str, float] | None = None,
) -> list[ScoredDeal]:
    """Score every deal and return them best first (ties keep input order)."""
    scored: list[ScoredDeal] = []
    for deal in deals:
        establishment = establishments.get(deal.establishment_id)
        if establishment is None:
            scored.append(ScoredDeal(deal=deal, score=0.0))
            continue

        is_active = is_active_fn(deal)
        distance = distance_fn(establishment)
        score = calculate_deal_score(
            deal, establishment, user_position, is_active, distance, preferences, weights,
        )
        scored.append(ScoredDeal(deal=deal, score=score, is_active=is_active, distance_km=distance))

    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def get_recommended_deals(
    deals: Iterable[Deal],
    establishments: Mapping[int, Establishment],
    user_position: UserPosition | None,
    is_active_fn: Callable[[Deal], bool],
    distance_fn: Callable[[Establishment], float | None],
    preferences: UserPreferences | None = None,
    limit: int = 20,
) -> list[Deal]:
    scored = score_deals(deals, establishments, user_position, is_active_fn, distance_fn, preferences)
    return [s.deal for s in scored[:max(limit, 0)]]
