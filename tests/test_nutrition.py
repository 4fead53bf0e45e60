import pytest

from quid_label.domain.ingredients import Ingredient, LossType, NutritionInput
from quid_label.services.nutrition import (
    NutrientTotals,
    apply_process_loss,
    compute_nutrition,
    per_100g,
    sum_nutrients,
)


def _batch() -> list[Ingredient]:
    return [
        Ingredient(
            name="Brät",
            raw_weight=100.0,
            nutrition=NutritionInput(
                fat=20.0, saturated_fat=8.0, protein=18.0, salt=2.0, water=60.0
            ),
        )
    ]


def test_sum_nutrients_in_grams() -> None:
    totals = sum_nutrients(_batch())

    assert totals.fat == pytest.approx(20_000)
    assert totals.protein == pytest.approx(18_000)
    assert totals.water == pytest.approx(60_000)


def test_drying_loss_removes_only_water() -> None:
    balance = compute_nutrition(_batch(), 100.0, 70.0, 30.0, 0.0, LossType.DRYING)
    values = balance.per_100g

    assert balance.non_fat_loss_grams == pytest.approx(30_000)
    assert values.fat == pytest.approx(28.5714, abs=1e-4)
    assert values.protein == pytest.approx(25.7143, abs=1e-4)
    assert values.salt == pytest.approx(2.8571, abs=1e-4)
    assert values.water == pytest.approx(42.8571, abs=1e-4)
    assert values.energy_kcal == pytest.approx(360.0)
    assert values.energy_kj == pytest.approx(1494.2857, abs=1e-4)


def test_cooking_loss_takes_juice_and_fat() -> None:
    balance = compute_nutrition(_batch(), 100.0, 70.0, 30.0, 5.0, LossType.COOKING)
    values = balance.per_100g

    assert balance.fat_lost_grams == pytest.approx(5_000)
    assert balance.non_fat_loss_grams == pytest.approx(25_000)
    assert values.fat == pytest.approx(21.4286, abs=1e-4)
    assert values.saturated_fat == pytest.approx(8.5714, abs=1e-4)
    assert values.protein == pytest.approx(23.9286, abs=1e-4)
    assert values.salt == pytest.approx(2.5)
    assert values.water == pytest.approx(52.5)


def test_losses_never_drive_nutrients_negative() -> None:
    raw = NutrientTotals(fat=100.0, protein=10.0, water=50.0)

    final, fat_lost, _ = apply_process_loss(raw, 1.0, 90.0, 50.0, LossType.COOKING)

    assert fat_lost == pytest.approx(500.0)
    assert final.fat == 0.0
    assert final.saturated_fat == 0.0
    assert final.water == 0.0
    assert final.protein == 0.0


def test_energy_is_recomputed_from_macros() -> None:
    final = NutrientTotals(
        energy_kcal=999.0, fat=10.0, protein=20.0, carbohydrates=5.0
    )

    values = per_100g(final, 0.1)

    assert values.energy_kcal == pytest.approx(10 * 9 + 20 * 4 + 5 * 4)
    assert values.energy_kj == pytest.approx(10 * 37 + 20 * 17 + 5 * 17)


def test_zero_end_weight_gives_zero_values() -> None:
    values = per_100g(NutrientTotals(fat=10.0, water=5.0), 0.0)

    assert values.fat == 0.0
    assert values.water == 0.0
    assert values.energy_kcal == 0.0
