"""Ingredient declaration text and allergen / processing aid attribution."""

import re

from quid_label.domain.allergens import emphasize_allergens
from quid_label.domain.ingredients import (
    Ingredient,
    IngredientResult,
    SourceAttribution,
)
from quid_label.services.resolution import is_water_ingredient

DEFAULT_WATER_THRESHOLD_PERCENT = 5.0

_AID_SEPARATORS = re.compile(r"[,;]")


def format_german_number(value: float, digits: int = 1) -> str:
    """Format a number the de-DE way, e.g. ``1.234,5``."""
    formatted = f"{value:,.{digits}f}"
    return formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def ingredient_label_text(ingredient: Ingredient, quid_value: float) -> str:
    """Declaration fragment for one ingredient."""
    name = emphasize_allergens(ingredient.display_name, ingredient.allergens)
    sub_ingredients = None
    if ingredient.sub_ingredients:
        sub_ingredients = emphasize_allergens(
            ingredient.sub_ingredients, ingredient.allergens
        )
    base = f"{name} ({sub_ingredients})" if sub_ingredients else name

    if not ingredient.quid_required:
        return base
    if quid_value <= 100:
        return f"{base} ({format_german_number(quid_value)}%)"
    # Concentrated ingredients: the raw weight used, in grams.
    raw_grams = max(0.0, ingredient.raw_weight) * 1000
    text = (
        f"hergestellt aus {format_german_number(raw_grams)} g {name} "
        "je 100 g des Enderzeugnisses"
    )
    if sub_ingredients:
        text += f" ({sub_ingredients})"
    return text


def is_declared(
    result: IngredientResult,
    water_threshold_percent: float = DEFAULT_WATER_THRESHOLD_PERCENT,
) -> bool:
    """Added water at or below the threshold is left off the label."""
    if is_water_ingredient(result.ingredient):
        return result.quid_raw_value > water_threshold_percent
    return True


def build_label_text(
    results: list[IngredientResult],
    water_threshold_percent: float = DEFAULT_WATER_THRESHOLD_PERCENT,
) -> str:
    """Join the declared fragments into the ingredient list."""
    return ", ".join(
        result.label_text
        for result in results
        if is_declared(result, water_threshold_percent)
    )


def split_processing_aids(raw: str | None) -> list[str]:
    """Split a comma or semicolon separated list of processing aids."""
    if not raw:
        return []
    return [part.strip() for part in _AID_SEPARATORS.split(raw) if part.strip()]


def _attribute(pairs: list[tuple[str, str]]) -> list[SourceAttribution]:
    sources: dict[str, list[str]] = {}
    for name, source in pairs:
        names = sources.setdefault(name, [])
        if source not in names:
            names.append(source)
    return [
        SourceAttribution(name=name, sources=tuple(names))
        for name, names in sources.items()
    ]


def allergen_sources(ingredients: list[Ingredient]) -> list[SourceAttribution]:
    """Map each allergen tag to the ingredients that carry it."""
    return _attribute(
        [
            (allergen, ingredient.display_name)
            for ingredient in ingredients
            for allergen in ingredient.allergens
        ]
    )


def processing_aid_sources(ingredients: list[Ingredient]) -> list[SourceAttribution]:
    """Map each processing aid to the ingredients that bring it in."""
    return _attribute(
        [
            (aid, ingredient.display_name)
            for ingredient in ingredients
            for aid in split_processing_aids(ingredient.processing_aids)
        ]
    )
