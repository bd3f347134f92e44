from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..deals.categories import AlcoholCategory
from ..deals.models import DealStatus
from .preferences import PriceRange


class RecommendationRequest(BaseModel):
    lat: float | None = Field(default=None, ge=-90.0, le=90.0)
    lng: float | None = Field(default=None, ge=-180.0, le=180.0)
    category: AlcoholCategory | None = None
    limit: int = Field(default=20, ge=1, le=50)


class DealOut(BaseModel):
    id: int
    establishment_id: int
    establishment_name: str | None
    drink_name: str | None
    alcohol_category: str
    standard_price: float
    happy_hour_price: float
    savings_percentage: float
    valid_days: str
    days_display: str
    time_range: str
    is_active: bool
    distance_km: float | None = None
    distance_display: str | None = None
    walking_minutes: int | None = None
    image_key: str
    color: str


class RecommendationItem(BaseModel):
    deal: DealOut
    score: float


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    total_candidates: int
    active_count: int


class HappyHourStatusOut(BaseModel):
    establishment_id: int
    status: DealStatus
    is_active: bool
    has_happy_hour_today: bool
    start_time: str | None = None
    end_time: str | None = None
    ends_at: datetime | None = None
    next_start: datetime | None = None
    display: str


class DealViewRequest(BaseModel):
    deal_id: int = Field(..., ge=1)


class VisitRequest(BaseModel):
    establishment_id: int = Field(..., ge=1)


class CategoryPreferenceRequest(BaseModel):
    category: AlcoholCategory
    increment: bool


class PricePreferenceRequest(BaseModel):
    price_range: PriceRange
    increment: bool
