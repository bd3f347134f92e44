"""
Alcohol categories and display rules.

Deal rows carry free-text ``alcohol_category`` and ``drink_name`` values.
This module turns them into a closed ``AlcoholCategory`` and into the image
keys / colours the front end uses, through ordered rule tables: the first
matching rule wins.
"""
from __future__ import annotations

from enum import Enum


class AlcoholCategory(str, Enum):
    beer = "Beer"
    wine_spirits = "Wine / Spirits"
    cocktail = "Cocktail"
    food = "Food"


# (keywords, category); any keyword contained in the text matches
_CATEGORY_RULES: list[tuple[tuple[str, ...], AlcoholCategory]] = [
    (("beer", "lager", "ale", "stout", "pint", "draught"), AlcoholCategory.beer),
    (("cocktail", "margarita", "martini", "sling", "highball", "mojito"), AlcoholCategory.cocktail),
    (
        ("wine", "spirit", "prosecco", "champagne", "bubbly", "sake", "soju",
         "whisky", "whiskey", "vodka", "rum", "gin", "tequila"),
        AlcoholCategory.wine_spirits,
    ),
    (("food", "snack", "bites", "wings", "fries"), AlcoholCategory.food),
]


def classify_category(text: str | None) -> AlcoholCategory | None:
    """Map a free-text category to ``AlcoholCategory``; ``None`` if unknown."""
    if not text:
        return None
    lowered = text.strip().lower()
    for category in AlcoholCategory:
        if lowered == category.value.lower():
            return category
    for keywords, category in _CATEGORY_RULES:
        if any(k in lowered for k in keywords):
            return category
    return None


# Drink image keys, matched against the lowercased drink name.
_VESSEL_KEYS: list[tuple[tuple[str, ...], str]] = [
    (("bucket",), "beer_bucket"),
    (("tower",), "beer_tower"),
    (("pitcher",), "beer_pitcher"),
]

_COCKTAIL_KEYS: list[tuple[tuple[str, ...], str]] = [
    (("margarita",), "margarita"),
    (("espresso martini",), "espresso_martini"),
    (("martini",), "martini"),
    (("singapore sling",), "singapore_sling"),
    (("cosmopolitan",), "cosmopolitan"),
    (("highball",), "highball"),
    (("gin tonic", "gin & tonic"), "gin_tonic"),
]

_GLASS_KEYS: list[tuple[tuple[str, ...], str]] = [
    (("whisky", "whiskey"), "whisky_glass"),
    (("vodka",), "vodka_glass"),
    (("rum",), "rum_glass"),
]

_BOTTLE_KEYS: list[tuple[tuple[str, ...], str]] = [
    (("whisky", "whiskey"), "whisky_bottle"),
    (("vodka",), "vodka_bottle"),
    (("rum",), "rum_bottle"),
    (("tequila", "tequilla"), "tequila_bottle"),
    (("gin",), "gin_bottle"),
]

_WINE_KEYS: list[tuple[tuple[str, ...], str]] = [
    (("bubbly", "champagne"), "bubbly_glass"),
    (("prosecco",), "prosecco_glass"),
    (("sake",), "sake_glass"),
    (("soju",), "soju_glass"),
]

# 1-for-1 / free-flow wine styles, suffixed to the promo prefix
_WINE_STYLES: list[tuple[tuple[str, ...], str]] = [
    (("red",), "red_wine"),
    (("white",), "white_wine"),
    (("bubbly", "champagne"), "bubbly"),
    (("prosecco",), "prosecco"),
]

# Fallbacks on the category text once the drink name says nothing useful
_CATEGORY_DEFAULTS: list[tuple[tuple[str, ...], str]] = [
    (("beer",), "beer_pint"),
    (("wine",), "red_wine_glass"),
    (("cocktail",), "cocktail"),
    (("spirit", "whisky", "whiskey", "vodka", "rum", "gin"), "whisky_glass"),
]

DEFAULT_IMAGE_KEY = "beer_pint"


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(k in text for k in keywords)


def _first_match(text: str, table: list[tuple[tuple[str, ...], str]]) -> str | None:
    for keywords, key in table:
        if _contains_any(text, keywords):
            return key
    return None


def _promo_key(prefix: str, name: str, category: str) -> str | None:
    if "beer" in category:
        return f"{prefix}_beer"
    if "wine" in category:
        return f"{prefix}_{_first_match(name, _WINE_STYLES) or 'red_wine'}"
    return None


def drink_image_key(drink_name: str | None, alcohol_category: str | None) -> str:
    """Pick the artwork key for a deal from its drink name and category."""
    name = (drink_name or "").lower()
    category = (alcohol_category or "").lower()
    if not name and not category:
        return DEFAULT_IMAGE_KEY

    key = _first_match(name, _VESSEL_KEYS)
    if key:
        return key

    if _contains_any(name, ("1-for-1", "one for one", "one-for-one")):
        key = _promo_key("1-for-1", name, category)
    elif _contains_any(name, ("free flow", "freeflow")):
        key = _promo_key("freeflow", name, category)
    if key:
        return key

    key = _first_match(name, _COCKTAIL_KEYS)
    if key:
        return key

    if "bottle" in name:
        key = _first_match(name, _BOTTLE_KEYS)
    else:
        key = _first_match(name, _GLASS_KEYS)
    if key:
        return key

    if "wine" in name and "red" in name:
        return "red_wine_glass"
    if "wine" in name and "white" in name:
        return "white_wine_glass"
    key = _first_match(name, _WINE_KEYS) or _first_match(category, _CATEGORY_DEFAULTS)
    return key or DEFAULT_IMAGE_KEY


# Checked in order against the image key
_COLOR_RULES: list[tuple[tuple[str, ...], str]] = [
    (("beer", "pint"), "#D4A017"),
    (("red_wine",), "#800000"),
    (("white_wine",), "#F5F5DC"),
    (("bubbly", "champagne", "prosecco"), "#F7E7CE"),
    (("cocktail",), "#4863A0"),
    (("margarita",), "#ADFF2F"),
    (("martini",), "#C0C0C0"),
    (("cosmopolitan",), "#FF1493"),
    (("whisky", "whiskey"), "#C35817"),
    (("vodka", "gin"), "#C0C0C0"),
    (("rum",), "#C68E17"),
]

DEFAULT_COLOR = "#3090C7"


def category_color(image_key: str) -> str:
    lowered = image_key.lower()
    for keywords, color in _COLOR_RULES:
        if _contains_any(lowered, keywords):
            return color
    return DEFAULT_COLOR
