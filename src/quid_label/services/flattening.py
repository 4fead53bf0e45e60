"""Recursive expansion of sub-recipe ingredients."""

import logging
from dataclasses import dataclass, field, replace

from quid_label.domain.ingredients import Ingredient

DEFAULT_MAX_DEPTH = 16

_logger = logging.getLogger(__name__)


@dataclass
class FlattenResult:
    """Flat ingredient list plus any advisory warnings."""

    ingredients: list[Ingredient] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def scale_factor(ingredient: Ingredient) -> float:
    """Ratio of used raw weight to the sub-recipe's defined end weight."""
    end_weight = ingredient.original_end_weight or sum(
        sub.raw_weight for sub in ingredient.original_sub_ingredients
    )
    if end_weight <= 0:
        return 1.0
    return ingredient.raw_weight / end_weight


def flatten_ingredients(
    ingredients: list[Ingredient] | tuple[Ingredient, ...],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> FlattenResult:
    """Expand compound ingredients into their scaled raw ingredients."""
    result = FlattenResult()
    _flatten_into(result, ingredients, depth=0, max_depth=max_depth)
    return result


def _flatten_into(
    result: FlattenResult,
    ingredients: list[Ingredient] | tuple[Ingredient, ...],
    depth: int,
    max_depth: int,
) -> None:
    for ingredient in ingredients:
        if not ingredient.is_compound:
            result.ingredients.append(ingredient)
            continue
        if depth >= max_depth:
            _logger.debug(
                "Nesting limit reached: ingredient=%s depth=%s", ingredient.name, depth
            )
            result.warnings.append(
                f'Hinweis: Die Unterrezeptur "{ingredient.display_name}" ist tiefer '
                f"als {max_depth} Ebenen verschachtelt und wurde nicht aufgelöst."
            )
            result.ingredients.append(ingredient)
            continue
        factor = scale_factor(ingredient)
        scaled = [
            replace(sub, raw_weight=sub.raw_weight * factor)
            for sub in ingredient.original_sub_ingredients
        ]
        _flatten_into(result, scaled, depth + 1, max_depth)
