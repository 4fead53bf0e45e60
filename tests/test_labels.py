import pytest

from quid_label.domain.allergens import allergen_group, emphasize_allergens
from quid_label.domain.ingredients import Ingredient, IngredientResult
from quid_label.services.labels import (
    allergen_sources,
    build_label_text,
    format_german_number,
    ingredient_label_text,
    processing_aid_sources,
    split_processing_aids,
)
from tests.conftest import make_dry, make_water


@pytest.mark.parametrize(
    ("value", "digits", "expected"),
    [
        (12.5, 1, "12,5"),
        (1234.56, 1, "1.234,6"),
        (0.0, 1, "0,0"),
        (2.346, 2, "2,35"),
        (91.304, 1, "91,3"),
    ],
)
def test_format_german_number(value: float, digits: int, expected: str) -> None:
    assert format_german_number(value, digits) == expected


def test_emphasize_allergens_uppercases_keywords() -> None:
    text = emphasize_allergens("Salz, Senfsaat, Pfeffer", ["mustard"])

    assert text == "Salz, SENFSAAT, Pfeffer"


def test_emphasize_allergens_is_idempotent() -> None:
    once = emphasize_allergens("Weizenmehl, Milchpulver", ["gluten", "milk"])

    assert emphasize_allergens(once, ["gluten", "milk"]) == once
    assert once == "WEIZENmehl, MILCHpulver"


def test_emphasize_allergens_matches_the_tag_itself() -> None:
    assert emphasize_allergens("Senf", ["Senf"]) == "SENF"


def test_allergen_group_accepts_ids_and_german_names() -> None:
    assert allergen_group("mustard") == "mustard"
    assert allergen_group("Senf") == "mustard"
    assert allergen_group(" Milch ") == "milk"
    assert allergen_group("Zimt") is None


def test_quid_fragment_with_sub_ingredients() -> None:
    ingredient = make_dry(
        "Gewürzmischung",
        1.0,
        quid_required=True,
        sub_ingredients="Salz, Senfsaat",
        allergens=("mustard",),
    )

    assert (
        ingredient_label_text(ingredient, 2.5)
        == "Gewürzmischung (Salz, SENFSAAT) (2,5%)"
    )


def test_plain_fragment_uses_label_name() -> None:
    ingredient = make_dry("NPS 0,5", 2.0, label_name="Nitritpökelsalz")

    assert ingredient_label_text(ingredient, 2.0) == "Nitritpökelsalz"


def test_concentrated_ingredient_prints_raw_grams() -> None:
    ingredient = make_dry("Schinken", 1.3, quid_required=True, sub_ingredients="mager")

    assert ingredient_label_text(ingredient, 130.0) == (
        "hergestellt aus 1.300,0 g Schinken je 100 g des Enderzeugnisses (mager)"
    )


def test_label_text_skips_water_at_or_below_threshold() -> None:
    water = make_water(1.0)
    salt = make_dry("Salz", 1.0)
    results = [
        IngredientResult(salt, 10.0, "Salz"),
        IngredientResult(water, 5.0, "Trinkwasser (5,0%)"),
    ]

    assert build_label_text(results) == "Salz"
    assert build_label_text(results, water_threshold_percent=4.9) == (
        "Salz, Trinkwasser (5,0%)"
    )


def test_non_water_lines_below_threshold_are_declared() -> None:
    results = [IngredientResult(make_dry("Pfeffer", 0.1), 0.2, "Pfeffer")]

    assert build_label_text(results) == "Pfeffer"


def test_split_processing_aids() -> None:
    assert split_processing_aids("Trennmittel; Rauch , Stärke,,") == [
        "Trennmittel",
        "Rauch",
        "Stärke",
    ]
    assert split_processing_aids(None) == []
    assert split_processing_aids("") == []


def test_sources_keep_first_seen_order_without_duplicates() -> None:
    ingredients = [
        Ingredient(name="Senf", allergens=("mustard",), processing_aids="Essig"),
        Ingredient(
            name="Brötchen",
            allergens=("gluten", "mustard"),
            processing_aids="Trennmittel, Essig",
        ),
        Ingredient(name="Senf", allergens=("mustard",)),
    ]

    allergens = allergen_sources(ingredients)
    aids = processing_aid_sources(ingredients)

    assert [(item.name, item.sources) for item in allergens] == [
        ("mustard", ("Senf", "Brötchen")),
        ("gluten", ("Brötchen",)),
    ]
    assert [(item.name, item.sources) for item in aids] == [
        ("Essig", ("Senf", "Brötchen")),
        ("Trennmittel", ("Brötchen",)),
    ]
