"""Redistribution of process loss onto added water."""

from dataclasses import dataclass

from quid_label.domain.ingredients import Ingredient
from quid_label.services.resolution import is_water_ingredient, resolve_nutrition


@dataclass(frozen=True)
class WaterBalance:
    """Added and natural water of a batch and how much added water remains."""

    total_raw_water: float
    total_natural_water: float
    remaining_added_water: float
    retention_factor: float

    @property
    def total_system_water(self) -> float:
        """Added plus natural water in kilograms."""
        return self.total_raw_water + self.total_natural_water


def compute_water_balance(
    ingredients: list[Ingredient], total_raw_mass: float, total_end_weight: float
) -> WaterBalance:
    """Apply the batch weight loss to added water first."""
    total_raw_water = 0.0
    total_natural_water = 0.0
    for ingredient in ingredients:
        if is_water_ingredient(ingredient):
            total_raw_water += max(0.0, ingredient.raw_weight)
        else:
            water_percent = resolve_nutrition(ingredient).water
            total_natural_water += max(0.0, ingredient.raw_weight) * water_percent / 100

    weight_loss = total_raw_mass - total_end_weight
    remaining = 0.0
    retention = 0.0
    if total_raw_water > 0:
        # Undeclared connective tissue can make the loss negative.
        remaining = min(total_raw_water, max(0.0, total_raw_water - weight_loss))
        retention = remaining / total_raw_water

    return WaterBalance(
        total_raw_water=total_raw_water,
        total_natural_water=total_natural_water,
        remaining_added_water=remaining,
        retention_factor=retention,
    )
