"""
Per-user preference store.

Preferences are a small JSON blob (favourite categories, price buckets, deal
views, venue visits) that lives wherever the caller's backend puts it: a
dict in tests, the signed session cookie in the API, or files on disk.
Every mutation is load, modify, save. Storage failures never reach the
caller: reads fall back to defaults, failed writes are dropped.
"""
from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from ..deals.categories import AlcoholCategory

logger = logging.getLogger(__name__)

PREFERENCE_MIN = 1
PREFERENCE_MAX = 10
NEUTRAL_PREFERENCE = 5
# Most recently touched entries kept per history map; the blob rides in a
# session cookie, which browsers cap at about 4 KB
HISTORY_LIMIT = 50


class PriceRange(str, Enum):
    under_10 = "under_10"
    from_10_to_15 = "10_to_15"
    from_15_to_20 = "15_to_20"
    above_20 = "above_20"


def price_range_for(price: float) -> PriceRange:
    if price < 10:
        return PriceRange.under_10
    if price < 15:
        return PriceRange.from_10_to_15
    if price < 20:
        return PriceRange.from_15_to_20
    return PriceRange.above_20


def _default_categories() -> dict[str, int]:
    return {c.value: NEUTRAL_PREFERENCE for c in AlcoholCategory}


def _default_prices() -> dict[str, int]:
    return {
        PriceRange.under_10.value: 7,
        PriceRange.from_10_to_15.value: 6,
        PriceRange.from_15_to_20.value: 5,
        PriceRange.above_20.value: 3,
    }


class UserPreferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    favorite_categories: dict[str, int] = Field(default_factory=_default_categories, alias="favoriteCategories")
    price_preferences: dict[str, int] = Field(default_factory=_default_prices, alias="pricePreferences")
    view_history: dict[str, int] = Field(default_factory=dict, alias="viewHistory")
    location_history: dict[str, int] = Field(default_factory=dict, alias="locationHistory")

    def category_score(self, category: str) -> int:
        return self.favorite_categories.get(category) or NEUTRAL_PREFERENCE

    def price_score(self, price_range: PriceRange) -> int:
        return self.price_preferences.get(price_range.value) or NEUTRAL_PREFERENCE

    def views_of(self, deal_id: int) -> int:
        return self.view_history.get(str(deal_id), 0)

    def visits_to(self, establishment_id: int) -> int:
        return self.location_history.get(str(establishment_id), 0)


class PreferenceBackend(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MappingBackend:
    """Stores the serialized blob in any mutable mapping (dict, session)."""

    def __init__(self, mapping: MutableMapping[str, str] | None = None) -> None:
        self._mapping = mapping if mapping is not None else {}

    def get_item(self, key: str) -> str | None:
        return self._mapping.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._mapping[key] = value


class JsonFileBackend:
    """One ``<key>.json`` file per key under *directory*."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


def _clamp(value: int) -> int:
    return max(PREFERENCE_MIN, min(PREFERENCE_MAX, value))


def _bump(history: dict[str, int], key: str) -> None:
    """Increment *key* and move it to the newest end, evicting the oldest."""
    count = history.pop(key, 0) + 1
    history[key] = count
    while len(history) > HISTORY_LIMIT:
        del history[next(iter(history))]


class PreferenceStore:
    def __init__(self, backend: PreferenceBackend, key: str = "userPreferences") -> None:
        self.backend = backend
        self.key = key

    def load(self) -> UserPreferences:
        try:
            raw = self.backend.get_item(self.key)
            if raw:
                return UserPreferences.model_validate(json.loads(raw))
        except Exception:
            logger.warning("Could not load user preferences, using defaults", exc_info=True)
        return UserPreferences()

    def save(self, prefs: UserPreferences) -> None:
        try:
            self.backend.set_item(self.key, prefs.model_dump_json(by_alias=True))
        except Exception:
            logger.warning("Could not save user preferences, change dropped", exc_info=True)

    def reset(self) -> UserPreferences:
        prefs = UserPreferences()
        self.save(prefs)
        return prefs

    def record_deal_view(self, deal_id: int) -> UserPreferences:
        prefs = self.load()
        _bump(prefs.view_history, str(deal_id))
        self.save(prefs)
        return prefs

    def record_location_visit(self, establishment_id: int) -> UserPreferences:
        prefs = self.load()
        _bump(prefs.location_history, str(establishment_id))
        self.save(prefs)
        return prefs

    def update_category_preference(self, category: AlcoholCategory, increment: bool) -> UserPreferences:
        prefs = self.load()
        current = prefs.category_score(category.value)
        prefs.favorite_categories[category.value] = _clamp(current + 1 if increment else current - 1)
        self.save(prefs)
        return prefs

    def update_price_preference(self, price_range: PriceRange, increment: bool) -> UserPreferences:
        prefs = self.load()
        current = prefs.price_score(price_range)
        prefs.price_preferences[price_range.value] = _clamp(current + 1 if increment else current - 1)
        self.save(prefs)
        return prefs
