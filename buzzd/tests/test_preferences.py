from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from buzzd.deals.categories import AlcoholCategory
from buzzd.recommendations.preferences import (
    HISTORY_LIMIT,
    JsonFileBackend,
    MappingBackend,
    PreferenceStore,
    PriceRange,
    UserPreferences,
    price_range_for,
)


def _store(storage: dict | None = None) -> PreferenceStore:
    return PreferenceStore(MappingBackend(storage if storage is not None else {}))


@pytest.mark.parametrize("price,expected", [
    (0, PriceRange.under_10),
    (9.99, PriceRange.under_10),
    (10, PriceRange.from_10_to_15),
    (14.5, PriceRange.from_10_to_15),
    (15, PriceRange.from_15_to_20),
    (20, PriceRange.above_20),
])
def test_price_range_for(price, expected):
    assert price_range_for(price) is expected


def test_defaults_on_first_use():
    prefs = _store().load()
    assert prefs.favorite_categories == {"Beer": 5, "Wine / Spirits": 5, "Cocktail": 5, "Food": 5}
    assert prefs.price_preferences == {"under_10": 7, "10_to_15": 6, "15_to_20": 5, "above_20": 3}
    assert prefs.view_history == {}
    assert prefs.location_history == {}


def test_record_deal_view_increments():
    store = _store()
    store.record_deal_view(7)
    prefs = store.record_deal_view(7)
    assert prefs.view_history == {"7": 2}
    assert store.load().views_of(7) == 2


def test_record_location_visit_increments():
    store = _store()
    store.record_location_visit(3)
    assert store.load().visits_to(3) == 1
    assert store.load().visits_to(4) == 0


def test_category_preference_moves_by_one():
    store = _store()
    assert store.update_category_preference(AlcoholCategory.beer, True).favorite_categories["Beer"] == 6
    assert store.update_category_preference(AlcoholCategory.beer, False).favorite_categories["Beer"] == 5


def test_category_preference_clamps_at_ten():
    store = _store()
    for _ in range(12):
        prefs = store.update_category_preference(AlcoholCategory.cocktail, True)
    assert prefs.favorite_categories["Cocktail"] == 10
    prefs = store.update_category_preference(AlcoholCategory.cocktail, True)
    assert prefs.favorite_categories["Cocktail"] == 10


def test_price_preference_clamps_at_one():
    store = _store()
    for _ in range(10):
        prefs = store.update_price_preference(PriceRange.above_20, False)
    assert prefs.price_preferences["above_20"] == 1
    prefs = store.update_price_preference(PriceRange.above_20, False)
    assert prefs.price_preferences["above_20"] == 1


def test_stored_blob_uses_camel_case_keys():
    storage: dict = {}
    _store(storage).record_deal_view(1)
    blob = json.loads(storage["userPreferences"])
    assert set(blob) == {"favoriteCategories", "pricePreferences", "viewHistory", "locationHistory"}
    assert blob["viewHistory"] == {"1": 1}


def test_custom_key():
    storage: dict = {}
    PreferenceStore(MappingBackend(storage), key="prefs-v2").record_location_visit(2)
    assert "prefs-v2" in storage


def test_corrupt_blob_falls_back_to_defaults(caplog):
    store = _store({"userPreferences": "{not json"})
    with caplog.at_level(logging.WARNING, logger="buzzd.recommendations.preferences"):
        prefs = store.load()
    assert prefs == UserPreferences()
    assert "Could not load" in caplog.text


def test_read_failure_falls_back_to_defaults():
    backend = MagicMock()
    backend.get_item.side_effect = OSError("storage unavailable")
    assert PreferenceStore(backend).load() == UserPreferences()


def test_write_failure_is_dropped(caplog):
    backend = MagicMock()
    backend.get_item.return_value = None
    backend.set_item.side_effect = OSError("quota exceeded")
    store = PreferenceStore(backend)
    with caplog.at_level(logging.WARNING, logger="buzzd.recommendations.preferences"):
        prefs = store.record_deal_view(5)
    assert prefs.views_of(5) == 1
    assert "Could not save" in caplog.text


def test_reset_restores_defaults():
    store = _store()
    store.record_deal_view(1)
    store.update_price_preference(PriceRange.under_10, True)
    assert store.reset() == UserPreferences()
    assert store.load() == UserPreferences()


def test_json_file_backend_persists_between_stores(tmp_path: Path):
    PreferenceStore(JsonFileBackend(tmp_path / "prefs")).record_location_visit(9)
    prefs = PreferenceStore(JsonFileBackend(tmp_path / "prefs")).load()
    assert prefs.visits_to(9) == 1
    assert (tmp_path / "prefs" / "userPreferences.json").is_file()


def test_json_file_backend_missing_file(tmp_path: Path):
    assert JsonFileBackend(tmp_path).get_item("nothing") is None


def test_history_keeps_most_recent_entries(monkeypatch):
    monkeypatch.setattr("buzzd.recommendations.preferences.HISTORY_LIMIT", 3)
    store = _store()
    for deal_id in (1, 2, 3):
        store.record_deal_view(deal_id)
    store.record_deal_view(1)
    prefs = store.record_deal_view(4)
    assert prefs.view_history == {"3": 1, "1": 2, "4": 1}
    assert list(prefs.view_history) == ["3", "1", "4"]


def test_history_cap_bounds_stored_blob():
    storage: dict = {}
    store = _store(storage)
    for establishment_id in range(1, 501):
        store.record_location_visit(establishment_id)
    prefs = store.load()
    assert len(prefs.location_history) == HISTORY_LIMIT
    assert prefs.visits_to(500) == 1
    assert prefs.visits_to(1) == 0
    assert len(storage["userPreferences"]) < 4096
