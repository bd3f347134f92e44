import pytest

from buzzd.deals.categories import (
    DEFAULT_COLOR,
    AlcoholCategory,
    category_color,
    classify_category,
    drink_image_key,
)


class TestClassifyCategory:
    @pytest.mark.parametrize("text,expected", [
        ("Beer", AlcoholCategory.beer),
        ("beer", AlcoholCategory.beer),
        ("Wine / Spirits", AlcoholCategory.wine_spirits),
        ("Craft Lager", AlcoholCategory.beer),
        ("Red Wine", AlcoholCategory.wine_spirits),
        ("Whisky", AlcoholCategory.wine_spirits),
        ("Signature Cocktails", AlcoholCategory.cocktail),
        ("Bar Snacks", AlcoholCategory.food),
    ])
    def test_known_text(self, text, expected):
        assert classify_category(text) is expected

    @pytest.mark.parametrize("text", [None, "", "Mystery"])
    def test_unknown_text(self, text):
        assert classify_category(text) is None


class TestDrinkImageKey:
    @pytest.mark.parametrize("name,category,expected", [
        ("Beer Bucket", "Beer", "beer_bucket"),
        ("Heineken Tower", "Beer", "beer_tower"),
        ("1-for-1 Beer", "Beer", "1-for-1_beer"),
        ("1-for-1 House White", "Wine / Spirits", "1-for-1_white_wine"),
        ("One for one house pour", "Wine", "1-for-1_red_wine"),
        ("Free Flow Prosecco", "Wine / Spirits", "freeflow_prosecco"),
        ("Espresso Martini", "Cocktail", "espresso_martini"),
        ("Dry Martini", "Cocktail", "martini"),
        ("Gin & Tonic", "Cocktail", "gin_tonic"),
        ("Whisky Highball", "Cocktail", "highball"),
        ("Jameson Whiskey", "Wine / Spirits", "whisky_glass"),
        ("Vodka Bottle", "Wine / Spirits", "vodka_bottle"),
        ("Tequila Bottle", "Wine / Spirits", "tequila_bottle"),
        ("House Red Wine", "Wine / Spirits", "red_wine_glass"),
        ("Prosecco Glass", "Wine / Spirits", "prosecco_glass"),
        ("Hot Sake", "Wine / Spirits", "sake_glass"),
        ("Tiger Pint", "Beer", "beer_pint"),
        ("House Pour", "Wine / Spirits", "red_wine_glass"),
        ("Chef's Special", "Cocktail", "cocktail"),
    ])
    def test_mapping(self, name, category, expected):
        assert drink_image_key(name, category) == expected

    def test_nothing_known_falls_back_to_pint(self):
        assert drink_image_key(None, None) == "beer_pint"
        assert drink_image_key("Loaded Fries", "Food") == "beer_pint"


class TestCategoryColor:
    def test_known_colors(self):
        assert category_color("beer_pint") == "#D4A017"
        assert category_color("red_wine_glass") == "#800000"
        assert category_color("bubbly_glass") == "#F7E7CE"
        assert category_color("whisky_bottle") == "#C35817"

    def test_default_color(self):
        assert category_color("soju_glass") == DEFAULT_COLOR
