from __future__ import annotations

import time
from datetime import datetime
from functools import partial

from ..analytics.store import record_event
from ..deals.categories import AlcoholCategory, category_color, classify_category, drink_image_key
from ..deals.data_store import get_deals, get_establishments
from ..deals.geo import distance_fn, format_distance, walking_minutes
from ..deals.happy_hour import (
    days_display,
    ends_at,
    format_time,
    happy_hour_status,
    is_within_happy_hour,
    local_now,
    next_start,
    time_range_display,
)
from ..deals.models import Deal, Establishment, UserPosition
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import (
    DealOut,
    HappyHourStatusOut,
    RecommendationItem,
    RecommendationRequest,
    RecommendationResponse,
)
from .preferences import UserPreferences
from .scoring import score_deals


def _position(lat: float | None, lng: float | None) -> UserPosition | None:
    if lat is None or lng is None:
        return None
    return UserPosition(lat=lat, lng=lng)


def _in_category(deal: Deal, category: AlcoholCategory | None) -> bool:
    return category is None or classify_category(deal.alcohol_category) == category


def to_deal_out(
    deal: Deal,
    establishment: Establishment | None,
    is_active: bool,
    distance_km: float | None,
) -> DealOut:
    image_key = drink_image_key(deal.drink_name, deal.alcohol_category)
    return DealOut(
        id=deal.id,
        establishment_id=deal.establishment_id,
        establishment_name=establishment.name if establishment else None,
        drink_name=deal.drink_name,
        alcohol_category=deal.alcohol_category,
        standard_price=deal.standard_price,
        happy_hour_price=deal.happy_hour_price,
        savings_percentage=deal.savings_percentage,
        valid_days=deal.valid_days,
        days_display=days_display(deal.valid_days),
        time_range=time_range_display(deal.hh_start_time, deal.hh_end_time),
        is_active=is_active,
        distance_km=distance_km,
        distance_display=format_distance(distance_km) if distance_km is not None else None,
        walking_minutes=walking_minutes(distance_km) if distance_km is not None else None,
        image_key=image_key,
        color=category_color(image_key),
    )


def list_deals(
    lat: float | None = None,
    lng: float | None = None,
    category: AlcoholCategory | None = None,
    active_only: bool = False,
    now: datetime | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[DealOut]:
    """All deals tagged with activity and distance; active first, then nearest."""
    now = now or local_now(config.deals.timezone)
    establishments = get_establishments(config.deals)
    measure = distance_fn(_position(lat, lng))

    rows: list[DealOut] = []
    for deal in get_deals(config.deals):
        if not _in_category(deal, category):
            continue
        active = is_within_happy_hour(deal, now)
        if active_only and not active:
            continue
        establishment = establishments.get(deal.establishment_id)
        distance = measure(establishment) if establishment else None
        rows.append(to_deal_out(deal, establishment, active, distance))

    rows.sort(key=lambda d: (not d.is_active, d.distance_km if d.distance_km is not None else float("inf")))
    return rows


def get_recommendations(
    request: RecommendationRequest,
    preferences: UserPreferences | None = None,
    now: datetime | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RecommendationResponse:
    start_time = time.time()
    now = now or local_now(config.deals.timezone)

    establishments = get_establishments(config.deals)
    candidates = [d for d in get_deals(config.deals) if _in_category(d, request.category)]
    position = _position(request.lat, request.lng)

    scored = score_deals(
        candidates,
        establishments,
        position,
        partial(is_within_happy_hour, now=now),
        distance_fn(position),
        preferences,
    )
    top = scored[: request.limit]

    items = [
        RecommendationItem(
            deal=to_deal_out(
                s.deal, establishments.get(s.deal.establishment_id), s.is_active, s.distance_km,
            ),
            score=round(s.score, 4),
        )
        for s in top
    ]

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("recommendations", {
        "has_position": position is not None,
        "category": request.category.value if request.category else None,
        "total_candidates": len(candidates),
        "results_returned": len(items),
        "active_returned": sum(1 for s in top if s.is_active),
        "response_time_ms": elapsed_ms,
    })

    return RecommendationResponse(
        recommendations=items,
        total_candidates=len(candidates),
        active_count=sum(1 for s in scored if s.is_active),
    )


def establishment_status(
    establishment_id: int,
    now: datetime | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> HappyHourStatusOut | None:
    """Venue-level happy hour summary, or ``None`` for an unknown venue."""
    if establishment_id not in get_establishments(config.deals):
        return None

    now = now or local_now(config.deals.timezone)
    deals = [d for d in get_deals(config.deals) if d.establishment_id == establishment_id]
    status = happy_hour_status(deals, now)
    closing = [t for t in (ends_at(d, now) for d in deals) if t is not None]
    upcoming = [t for t in (next_start(d, now) for d in deals) if t is not None]

    if status.is_active:
        display = f"Active until {format_time(status.end_time)}"
    elif status.has_happy_hour_today:
        display = f"Starts at {format_time(status.start_time)}"
    else:
        display = "No happy hour today"

    return HappyHourStatusOut(
        establishment_id=establishment_id,
        status=status.status,
        is_active=status.is_active,
        has_happy_hour_today=status.has_happy_hour_today,
        start_time=status.start_time,
        end_time=status.end_time,
        ends_at=max(closing) if closing else None,
        next_start=min(upcoming) if upcoming else None,
        display=display,
    )
