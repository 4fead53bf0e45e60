"""Per-ingredient classification and nutrition resolution."""

import re

from quid_label.domain.ingredients import Ingredient, NutritionInput, ResolvedNutrition

MEAT_WATER_PERCENT = 75.0
DRY_WATER_PERCENT = 10.0

_WATER_KEYWORDS = ("wasser", "trinkwasser", "schüttung", "water", "ice", "brühe")
_NOT_WATER_KEYWORDS = ("fleisch", "eiweiß")
# "eis" only as a whole word, so "Reis" or "Eisbein" do not count.
_ICE_PATTERN = re.compile(r"(^|[^a-zäöüß])eis($|[^a-zäöüß])")


def is_water_ingredient(ingredient: Ingredient) -> bool:
    """Whether the ingredient is added water, by flag or by name."""
    if ingredient.is_water:
        return True
    lowered = ingredient.name.lower()
    if any(keyword in lowered for keyword in _NOT_WATER_KEYWORDS):
        return False
    if _ICE_PATTERN.search(lowered):
        return True
    return any(keyword in lowered for keyword in _WATER_KEYWORDS)


def resolve_nutrition(ingredient: Ingredient) -> ResolvedNutrition:
    """Fill in missing nutrition values, estimating water where absent.

    Water falls back to ``100 - solids`` when any solids are known, to
    100 % for added water, and otherwise to a flat 75 % for meat and 10 %
    for everything else.
    """
    data = ingredient.nutrition or NutritionInput()
    fat = data.fat or 0.0
    carbohydrates = data.carbohydrates or 0.0
    protein = data.protein or 0.0
    salt = data.salt or 0.0
    ash = data.ash or 0.0

    water = data.water
    estimated = water is None
    if water is None:
        solids = fat + protein + carbohydrates + salt + ash
        if solids > 0:
            water = max(0.0, 100 - solids)
        elif is_water_ingredient(ingredient):
            water = 100.0
        elif ingredient.is_meat:
            water = MEAT_WATER_PERCENT
        else:
            water = DRY_WATER_PERCENT

    return ResolvedNutrition(
        energy_kcal=data.energy_kcal or 0.0,
        energy_kj=data.energy_kj or 0.0,
        fat=fat,
        saturated_fat=data.saturated_fat or 0.0,
        carbohydrates=carbohydrates,
        sugar=data.sugar or 0.0,
        protein=protein,
        salt=salt,
        water=water,
        ash=ash,
        water_estimated=estimated,
    )
