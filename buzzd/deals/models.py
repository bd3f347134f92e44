from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Deal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    establishment_id: int = Field(..., alias="establishmentId")
    drink_name: str | None = None
    alcohol_category: str = ""
    standard_price: float = Field(default=0.0, ge=0.0)
    happy_hour_price: float = Field(..., ge=0.0)
    valid_days: str = "Daily"
    hh_start_time: str
    hh_end_time: str

    @property
    def savings(self) -> float:
        return max(0.0, self.standard_price - self.happy_hour_price)

    @property
    def savings_percentage(self) -> float:
        if self.standard_price <= 0:
            return 0.0
        return round(self.savings / self.standard_price * 100, 1)


class Establishment(BaseModel):
    id: int
    name: str = ""
    address: str = ""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    rating: float | None = None
    type: str | None = None


class UserPosition(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class DealStatus(str, Enum):
    active = "active"
    upcoming = "upcoming"
    inactive = "inactive"


class HappyHourStatus(BaseModel):
    is_active: bool = False
    start_time: str | None = None
    end_time: str | None = None
    has_happy_hour_today: bool = False

    @property
    def status(self) -> DealStatus:
        if self.is_active:
            return DealStatus.active
        if self.has_happy_hour_today:
            return DealStatus.upcoming
        return DealStatus.inactive
