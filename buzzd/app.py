from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .deals.categories import AlcoholCategory
from .deals.data_store import get_deals, get_establishments
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG
from .recommendations.models import (
    CategoryPreferenceRequest,
    DealOut,
    DealViewRequest,
    HappyHourStatusOut,
    PricePreferenceRequest,
    RecommendationRequest,
    RecommendationResponse,
    VisitRequest,
)
from .recommendations.preferences import (
    MappingBackend,
    PreferenceStore,
    PriceRange,
    UserPreferences,
)
from .recommendations.retrieval import establishment_status, get_recommendations, list_deals

_CONFIG = DEFAULT_RECOMMENDATION_CONFIG

app = FastAPI(title="Buzzd Happy Hour API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=_CONFIG.session_secret)


def get_preference_store(request: Request) -> PreferenceStore:
    """Preferences live in the signed session cookie, one blob per client."""
    return PreferenceStore(MappingBackend(request.session), key=_CONFIG.preferences_key)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "categories": [c.value for c in AlcoholCategory],
        "price_ranges": [p.value for p in PriceRange],
        "establishments": len(get_establishments(_CONFIG.deals)),
        "deals": len(get_deals(_CONFIG.deals)),
    }


# ── Deals ────────────────────────────────────────────────────────────────


@app.get("/deals", response_model=list[DealOut])
def deals(
    lat: float | None = Query(default=None, ge=-90.0, le=90.0),
    lng: float | None = Query(default=None, ge=-180.0, le=180.0),
    category: AlcoholCategory | None = None,
    active_only: bool = False,
) -> list[DealOut]:
    return list_deals(lat=lat, lng=lng, category=category, active_only=active_only, config=_CONFIG)


@app.post("/deals/recommended", response_model=RecommendationResponse)
def recommended_deals(
    body: RecommendationRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> RecommendationResponse:
    return get_recommendations(body, preferences=store.load(), config=_CONFIG)


@app.get("/establishments/{establishment_id}/happy-hour", response_model=HappyHourStatusOut)
def happy_hour(establishment_id: int) -> HappyHourStatusOut:
    status = establishment_status(establishment_id, config=_CONFIG)
    if status is None:
        raise HTTPException(status_code=404, detail="Establishment not found")
    return status


# ── Preferences ──────────────────────────────────────────────────────────


@app.get("/preferences", response_model=UserPreferences)
def preferences(store: PreferenceStore = Depends(get_preference_store)) -> UserPreferences:
    return store.load()


@app.delete("/preferences", response_model=UserPreferences)
def reset_preferences(store: PreferenceStore = Depends(get_preference_store)) -> UserPreferences:
    return store.reset()


@app.post("/preferences/deal-views", response_model=UserPreferences)
def deal_view(
    body: DealViewRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> UserPreferences:
    if all(d.id != body.deal_id for d in get_deals(_CONFIG.deals)):
        raise HTTPException(status_code=404, detail="Deal not found")
    record_event("deal_view", {"deal_id": body.deal_id})
    return store.record_deal_view(body.deal_id)


@app.post("/preferences/visits", response_model=UserPreferences)
def location_visit(
    body: VisitRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> UserPreferences:
    if body.establishment_id not in get_establishments(_CONFIG.deals):
        raise HTTPException(status_code=404, detail="Establishment not found")
    record_event("location_visit", {"establishment_id": body.establishment_id})
    return store.record_location_visit(body.establishment_id)


@app.post("/preferences/category", response_model=UserPreferences)
def category_preference(
    body: CategoryPreferenceRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> UserPreferences:
    return store.update_category_preference(body.category, body.increment)


@app.post("/preferences/price", response_model=UserPreferences)
def price_preference(
    body: PricePreferenceRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> UserPreferences:
    return store.update_price_preference(body.price_range, body.increment)


# ── Analytics ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/analytics/events")
def analytics_events(event_type: str | None = None) -> list[dict]:
    return get_events(event_type)
