"""Nutrient totals and the attribution of process loss to nutrients."""

from dataclasses import dataclass

from quid_label.domain.ingredients import Ingredient, LossType, NutritionValues
from quid_label.services.resolution import resolve_nutrition

# Composition of juice expelled while cooking, by mass of the non-fat loss.
JUICE_WATER_FACTOR = 0.93
JUICE_PROTEIN_FACTOR = 0.05
JUICE_SALT_FACTOR = 0.01
JUICE_SUGAR_FACTOR = 0.01

KJ_PER_G_FAT = 37
KJ_PER_G_PROTEIN = 17
KJ_PER_G_CARBOHYDRATE = 17
KCAL_PER_G_FAT = 9
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBOHYDRATE = 4


@dataclass(frozen=True)
class NutrientTotals:
    """Absolute nutrient masses of a batch in grams."""

    energy_kcal: float = 0.0
    energy_kj: float = 0.0
    fat: float = 0.0
    saturated_fat: float = 0.0
    carbohydrates: float = 0.0
    sugar: float = 0.0
    protein: float = 0.0
    salt: float = 0.0
    water: float = 0.0
    ash: float = 0.0


@dataclass(frozen=True)
class NutrientBalance:
    """Raw totals, final totals after loss and the per-100 g declaration."""

    raw: NutrientTotals
    final: NutrientTotals
    fat_lost_grams: float
    non_fat_loss_grams: float
    per_100g: NutritionValues


def sum_nutrients(ingredients: list[Ingredient]) -> NutrientTotals:
    """Sum each ingredient's nutrient contribution in grams."""
    totals = NutrientTotals()
    for ingredient in ingredients:
        grams = max(0.0, ingredient.raw_weight) * 1000
        factor = grams / 100
        values = resolve_nutrition(ingredient)
        totals = NutrientTotals(
            energy_kcal=totals.energy_kcal + factor * values.energy_kcal,
            energy_kj=totals.energy_kj + factor * values.energy_kj,
            fat=totals.fat + factor * values.fat,
            saturated_fat=totals.saturated_fat + factor * values.saturated_fat,
            carbohydrates=totals.carbohydrates + factor * values.carbohydrates,
            sugar=totals.sugar + factor * values.sugar,
            protein=totals.protein + factor * values.protein,
            salt=totals.salt + factor * values.salt,
            water=totals.water + factor * values.water,
            ash=totals.ash + factor * values.ash,
        )
    return totals


def apply_process_loss(
    raw: NutrientTotals,
    total_raw_mass_kg: float,
    process_loss_percent: float,
    fat_loss_percent: float,
    loss_type: LossType,
) -> tuple[NutrientTotals, float, float]:
    """Subtract fat loss and the non-fat loss according to the loss type.

    Returns the final totals, the fat lost and the non-fat loss in grams.
    """
    total_raw_grams = total_raw_mass_kg * 1000
    fat_lost = total_raw_grams * fat_loss_percent / 100
    final_fat = max(0.0, raw.fat - fat_lost)

    weight_lost = total_raw_grams * process_loss_percent / 100
    non_fat_loss = max(0.0, weight_lost - fat_lost)

    protein_lost = 0.0
    salt_lost = 0.0
    sugar_lost = 0.0
    water_lost = non_fat_loss
    if loss_type is LossType.COOKING:
        protein_lost = non_fat_loss * JUICE_PROTEIN_FACTOR
        salt_lost = non_fat_loss * JUICE_SALT_FACTOR
        sugar_lost = non_fat_loss * JUICE_SUGAR_FACTOR
        water_lost = non_fat_loss * JUICE_WATER_FACTOR

    saturated_fat = raw.saturated_fat * final_fat / raw.fat if raw.fat > 0 else 0.0
    final = NutrientTotals(
        energy_kcal=raw.energy_kcal,
        energy_kj=raw.energy_kj,
        fat=final_fat,
        saturated_fat=max(0.0, saturated_fat),
        carbohydrates=max(0.0, raw.carbohydrates - sugar_lost),
        sugar=max(0.0, raw.sugar - sugar_lost),
        protein=max(0.0, raw.protein - protein_lost),
        salt=max(0.0, raw.salt - salt_lost),
        water=max(0.0, raw.water - water_lost),
        ash=raw.ash,
    )
    return final, fat_lost, non_fat_loss


def per_100g(final: NutrientTotals, end_weight_kg: float) -> NutritionValues:
    """Scale final grams to 100 g of end product and recompute energy."""
    end_grams = end_weight_kg * 1000

    def scale(grams: float) -> float:
        return grams / end_grams * 100 if end_grams > 0 else 0.0

    fat = scale(final.fat)
    protein = scale(final.protein)
    carbohydrates = scale(final.carbohydrates)
    return NutritionValues(
        energy_kcal=(
            fat * KCAL_PER_G_FAT
            + protein * KCAL_PER_G_PROTEIN
            + carbohydrates * KCAL_PER_G_CARBOHYDRATE
        ),
        energy_kj=(
            fat * KJ_PER_G_FAT
            + protein * KJ_PER_G_PROTEIN
            + carbohydrates * KJ_PER_G_CARBOHYDRATE
        ),
        fat=fat,
        saturated_fat=scale(final.saturated_fat),
        carbohydrates=carbohydrates,
        sugar=scale(final.sugar),
        protein=protein,
        salt=scale(final.salt),
        water=scale(final.water),
        ash=scale(final.ash),
    )


def compute_nutrition(  # noqa: PLR0913
    ingredients: list[Ingredient],
    total_raw_mass_kg: float,
    total_end_weight_kg: float,
    process_loss_percent: float,
    fat_loss_percent: float,
    loss_type: LossType,
) -> NutrientBalance:
    """Compute the final nutrition declaration of a batch."""
    raw = sum_nutrients(ingredients)
    final, fat_lost, non_fat_loss = apply_process_loss(
        raw, total_raw_mass_kg, process_loss_percent, fat_loss_percent, loss_type
    )
    return NutrientBalance(
        raw=raw,
        final=final,
        fat_lost_grams=fat_lost,
        non_fat_loss_grams=non_fat_loss,
        per_100g=per_100g(final, total_end_weight_kg),
    )
