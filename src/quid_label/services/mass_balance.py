"""Raw mass, effective input mass and end weight of a batch."""

from dataclasses import dataclass

from quid_label.domain.ingredients import Ingredient


@dataclass(frozen=True)
class MassBalance:
    """Batch masses in kilograms."""

    total_raw_mass: float
    effective_input_mass: float
    total_end_weight: float

    @property
    def weight_loss(self) -> float:
        """Mass lost between the declared raw mass and the end product."""
        return self.total_raw_mass - self.total_end_weight


def effective_input_mass(ingredients: list[Ingredient]) -> float:
    """Mass entering the main process after each ingredient's own pre-loss."""
    return sum(
        max(0.0, ingredient.raw_weight)
        * (1 - (ingredient.process_loss or 0.0) / 100)
        for ingredient in ingredients
    )


def compute_mass_balance(
    declared: list[Ingredient],
    top_level: list[Ingredient],
    process_loss_percent: float,
) -> MassBalance:
    """Compute masses from the declared lines and the top-level recipe."""
    total_raw_mass = sum(max(0.0, ingredient.raw_weight) for ingredient in declared)
    effective = effective_input_mass(top_level)
    end_weight = max(0.0, effective * (1 - process_loss_percent / 100))
    return MassBalance(
        total_raw_mass=total_raw_mass,
        effective_input_mass=effective,
        total_end_weight=end_weight,
    )
