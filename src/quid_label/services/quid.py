"""QUID calculation engine."""

import logging
from dataclasses import dataclass

from quid_label.domain.ingredients import (
    Ingredient,
    IngredientResult,
    LossType,
    NutritionInput,
    NutritionValues,
    QuidResult,
    SavedRecipe,
)
from quid_label.services.flattening import DEFAULT_MAX_DEPTH, flatten_ingredients
from quid_label.services.labels import (
    DEFAULT_WATER_THRESHOLD_PERCENT,
    allergen_sources,
    build_label_text,
    ingredient_label_text,
    processing_aid_sources,
)
from quid_label.services.mass_balance import compute_mass_balance
from quid_label.services.nutrition import compute_nutrition
from quid_label.services.resolution import is_water_ingredient
from quid_label.services.species import aggregate_species
from quid_label.services.specification import (
    ProductSpecification,
    build_specification,
)
from quid_label.services.water import compute_water_balance

_logger = logging.getLogger(__name__)


def parse_loss_type(raw: LossType | str | None) -> LossType:
    """Convert a loss type value, falling back to drying."""
    if isinstance(raw, LossType):
        return raw
    if not raw:
        return LossType.DRYING
    try:
        return LossType(raw.strip().lower())
    except ValueError:
        return LossType.DRYING


def calculate_quid(  # noqa: PLR0913
    ingredients: list[Ingredient] | tuple[Ingredient, ...],
    process_loss_percent: float,
    fat_loss_percent: float = 0.0,
    loss_type: LossType | str = LossType.DRYING,
    *,
    water_declaration_threshold: float = DEFAULT_WATER_THRESHOLD_PERCENT,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> QuidResult:
    """Compute the legal declaration and nutrition of a recipe.

    Compound ingredients are flattened, meat is aggregated per species and
    checked against its fat and connective tissue limits, the process loss
    is applied to added water first and the nutrition is recomputed per
    100 g of end product. Never raises for odd numeric input; regulatory
    findings are returned as warnings.
    """
    resolved_loss_type = parse_loss_type(loss_type)
    if resolved_loss_type is LossType.NONE:
        process_loss_percent = 0.0
        fat_loss_percent = 0.0

    top_level = list(ingredients)
    flattened = flatten_ingredients(top_level, max_depth=max_depth)
    aggregation = aggregate_species(flattened.ingredients)
    lines = aggregation.lines
    declared = [line.ingredient for line in lines]

    mass = compute_mass_balance(declared, top_level, process_loss_percent)
    water = compute_water_balance(
        declared, mass.total_raw_mass, mass.total_end_weight
    )
    nutrition = compute_nutrition(
        top_level,
        mass.total_raw_mass,
        mass.total_end_weight,
        process_loss_percent,
        fat_loss_percent,
        resolved_loss_type,
    )

    results: list[IngredientResult] = []
    for line in lines:
        ingredient = line.ingredient
        weight = max(0.0, ingredient.raw_weight)
        if is_water_ingredient(ingredient):
            weight *= water.retention_factor
        quid_value = _percent_of(weight, mass.total_end_weight)
        results.append(
            IngredientResult(
                ingredient=ingredient,
                quid_raw_value=quid_value,
                label_text=ingredient_label_text(ingredient, quid_value),
                is_split=line.is_split,
                split_from=line.split_from,
            )
        )
    results.sort(key=lambda result: result.quid_raw_value, reverse=True)

    meat_mass = sum(
        max(0.0, ingredient.raw_weight) for ingredient in declared if ingredient.is_meat
    )
    allergen_details = allergen_sources(top_level)
    aid_details = processing_aid_sources(top_level)

    return QuidResult(
        total_raw_mass=mass.total_raw_mass,
        total_end_weight=mass.total_end_weight,
        ingredients=results,
        label_text=build_label_text(results, water_declaration_threshold),
        warnings=[*flattened.warnings, *aggregation.warnings],
        nutrition_per_100g=nutrition.per_100g,
        all_allergens=sorted(detail.name for detail in allergen_details),
        all_processing_aids=[detail.name for detail in aid_details],
        allergen_details=allergen_details,
        processing_aid_details=aid_details,
        meat_percentage=_percent_of(meat_mass, mass.total_end_weight),
    )


def _percent_of(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


@dataclass
class QuidService:
    """Service running QUID calculations with configured thresholds."""

    water_declaration_threshold: float = DEFAULT_WATER_THRESHOLD_PERCENT
    max_depth: int = DEFAULT_MAX_DEPTH
    debug: bool = False

    def calculate(
        self,
        ingredients: list[Ingredient],
        process_loss_percent: float,
        fat_loss_percent: float = 0.0,
        loss_type: LossType | str = LossType.DRYING,
    ) -> QuidResult:
        """Run the engine over a recipe."""
        result = calculate_quid(
            ingredients,
            process_loss_percent,
            fat_loss_percent,
            loss_type,
            water_declaration_threshold=self.water_declaration_threshold,
            max_depth=self.max_depth,
        )
        if self.debug:
            _logger.info(
                "QUID calculated: ingredients=%s raw_kg=%.3f end_kg=%.3f warnings=%s",
                len(ingredients),
                result.total_raw_mass,
                result.total_end_weight,
                len(result.warnings),
            )
        return result

    def calculate_recipe(self, recipe: SavedRecipe) -> QuidResult:
        """Run the engine with the recipe's own loss parameters."""
        return self.calculate(
            list(recipe.ingredients),
            recipe.cooking_loss,
            recipe.fat_loss,
            recipe.loss_type,
        )

    def specification(
        self, recipe: SavedRecipe, product_name: str | None = None
    ) -> tuple[QuidResult, ProductSpecification]:
        """Calculate a recipe and collect its specification sheet data."""
        result = self.calculate_recipe(recipe)
        spec = build_specification(
            product_name or recipe.name, result, article_number=recipe.article_number
        )
        return result, spec

    def compound_from_recipe(
        self, recipe: SavedRecipe, raw_weight: float = 0.0
    ) -> Ingredient:
        """Build a compound ingredient that inserts a recipe into another one."""
        result = self.calculate_recipe(recipe)
        nutrition = result.nutrition_per_100g
        if self.debug:
            _logger.info(
                "Compound ingredient built: recipe=%s end_kg=%.3f",
                recipe.name,
                result.total_end_weight,
            )
        return Ingredient(
            id=recipe.id,
            name=recipe.name,
            label_name=recipe.name,
            raw_weight=raw_weight,
            quid_required=True,
            is_meat=False,
            nutrition=_as_input(nutrition),
            sub_ingredients=result.label_text,
            processing_aids=", ".join(result.all_processing_aids),
            allergens=tuple(result.all_allergens),
            is_recipe=True,
            original_sub_ingredients=tuple(recipe.ingredients),
            original_end_weight=result.total_end_weight,
            process_loss=(
                0.0 if recipe.loss_type is LossType.NONE else recipe.cooking_loss
            ),
        )


def _as_input(values: NutritionValues) -> NutritionInput:
    return NutritionInput(
        energy_kcal=values.energy_kcal,
        energy_kj=values.energy_kj,
        fat=values.fat,
        saturated_fat=values.saturated_fat,
        carbohydrates=values.carbohydrates,
        sugar=values.sugar,
        protein=values.protein,
        salt=values.salt,
        water=values.water,
        ash=values.ash,
    )
