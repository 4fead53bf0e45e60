"""Tests for specification sheet data."""

from datetime import date

from quid_label.domain.ingredients import Ingredient, LossType, NutritionInput
from quid_label.services.quid import calculate_quid
from quid_label.services.specification import build_specification
from tests.conftest import make_dry


def test_overflowing_processing_aids_merge_into_last_slot() -> None:
    result = calculate_quid(
        [
            make_dry("Gewürz", 1.0, processing_aids="Trennmittel, Rauch, Stärke"),
            make_dry("Darm", 0.5, processing_aids="Essig; Talkum"),
        ],
        0.0,
        loss_type=LossType.NONE,
    )

    spec = build_specification("Bratwurst", result, valid_from=date(2026, 1, 1))

    assert [(slot.name, slot.sources) for slot in spec.processing_aids] == [
        ("Trennmittel", "Gewürz"),
        ("Rauch", "Gewürz"),
        ("Stärke", "Gewürz"),
        ("Essig, Talkum", "Darm; Darm"),
    ]


def test_missing_processing_aids_show_placeholder() -> None:
    result = calculate_quid([make_dry("Salz", 1.0)], 0.0, loss_type=LossType.NONE)

    spec = build_specification("Salz", result)

    assert [(slot.name, slot.sources) for slot in spec.processing_aids] == [
        ("Keine", "-"),
        ("", ""),
        ("", ""),
        ("", ""),
    ]
    assert spec.valid_from == date.today()


def test_nutrition_rows_are_formatted() -> None:
    result = calculate_quid(
        [
            Ingredient(
                name="Brät",
                raw_weight=1.0,
                is_water=False,
                nutrition=NutritionInput(
                    fat=20.0, saturated_fat=8.0, protein=15.0, salt=2.5, water=60.0
                ),
            )
        ],
        0.0,
        loss_type=LossType.NONE,
    )

    spec = build_specification("Brät", result, article_number="4711")
    rows = {row.label: row.value for row in spec.nutrition}

    assert spec.article_number == "4711"
    assert rows == {
        "Energie (kJ)": "995",
        "Energie (kcal)": "240",
        "Fett": "20,0",
        "davon gesättigte Fettsäuren": "8,0",
        "Kohlenhydrate": "0,0",
        "davon Zucker": "0,0",
        "Eiweiß": "15,0",
        "Salz": "2,50",
    }


def test_allergen_matrix_covers_all_groups() -> None:
    result = calculate_quid(
        [
            make_dry("Senfkörner", 0.2, allergens=("Senf",)),
            make_dry("Brötchen", 1.0, allergens=("gluten", "Zimt")),
            make_dry("Dijon", 0.1, allergens=("mustard",)),
        ],
        0.0,
        loss_type=LossType.NONE,
    )

    spec = build_specification("Frikadelle", result)
    rows = {row.group: row for row in spec.allergens}

    assert len(spec.allergens) == 14
    assert rows["mustard"].present
    assert rows["mustard"].label == "Senf"
    assert rows["mustard"].sources == "Senfkörner, Dijon"
    assert rows["gluten"].sources == "Brötchen"
    assert not rows["milk"].present
    assert rows["milk"].sources == ""
    assert spec.ingredients_text == result.label_text
