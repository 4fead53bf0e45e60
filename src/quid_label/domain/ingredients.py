"""Domain models for ingredients and QUID results."""

from dataclasses import dataclass
from enum import Enum


class LossType(Enum):
    """Physical process category that determines how lost mass is attributed."""

    DRYING = "drying"
    COOKING = "cooking"
    NONE = "none"


@dataclass(frozen=True)
class NutritionInput:
    """Nutrition values per 100 g as provided, possibly sparse."""

    energy_kcal: float | None = None
    energy_kj: float | None = None
    fat: float | None = None
    saturated_fat: float | None = None
    carbohydrates: float | None = None
    sugar: float | None = None
    protein: float | None = None
    salt: float | None = None
    water: float | None = None
    ash: float | None = None


@dataclass(frozen=True)
class ResolvedNutrition:
    """Nutrition values per 100 g with every field populated."""

    energy_kcal: float
    energy_kj: float
    fat: float
    saturated_fat: float
    carbohydrates: float
    sugar: float
    protein: float
    salt: float
    water: float
    ash: float
    water_estimated: bool = False


@dataclass(frozen=True)
class NutritionValues:
    """Final nutrition declaration per 100 g of end product."""

    energy_kcal: float
    energy_kj: float
    fat: float
    saturated_fat: float
    carbohydrates: float
    sugar: float
    protein: float
    salt: float
    water: float
    ash: float


@dataclass(frozen=True)
class Ingredient:
    """A recipe line; compound when it embeds its own sub-recipe ingredients.

    ``raw_weight`` and ``original_end_weight`` are in kilograms.
    ``process_loss`` is the percentage lost before the ingredient entered
    the current recipe (e.g. the sub-recipe's own cooking loss).
    ``is_water`` marks added water; unflagged lines are classified by name.
    """

    name: str
    raw_weight: float = 0.0
    id: str = ""
    label_name: str | None = None
    quid_required: bool = False
    is_meat: bool = False
    meat_species: str | None = None
    is_water: bool = False
    connective_tissue_percent: float = 0.0
    meat_protein_limit: float | None = None
    nutrition: NutritionInput | None = None
    sub_ingredients: str | None = None
    processing_aids: str | None = None
    allergens: tuple[str, ...] = ()
    is_recipe: bool = False
    original_sub_ingredients: tuple["Ingredient", ...] = ()
    original_end_weight: float | None = None
    process_loss: float = 0.0

    @property
    def display_name(self) -> str:
        """Name used on the label."""
        return self.label_name or self.name

    @property
    def is_compound(self) -> bool:
        """Whether this ingredient expands into sub-recipe ingredients."""
        return self.is_recipe and len(self.original_sub_ingredients) > 0


@dataclass(frozen=True)
class IngredientResult:
    """An ingredient line of the final declaration."""

    ingredient: Ingredient
    quid_raw_value: float
    label_text: str
    is_split: bool = False
    split_from: str | None = None

    @property
    def name(self) -> str:
        """Name of the underlying ingredient."""
        return self.ingredient.name

    @property
    def raw_weight(self) -> float:
        """Raw weight of the underlying ingredient in kilograms."""
        return self.ingredient.raw_weight


@dataclass(frozen=True)
class SourceAttribution:
    """An allergen or processing aid with the ingredients contributing it."""

    name: str
    sources: tuple[str, ...]


@dataclass(frozen=True)
class QuidResult:
    """Complete outcome of a QUID calculation."""

    total_raw_mass: float
    total_end_weight: float
    ingredients: list[IngredientResult]
    label_text: str
    warnings: list[str]
    nutrition_per_100g: NutritionValues
    all_allergens: list[str]
    all_processing_aids: list[str]
    allergen_details: list[SourceAttribution]
    processing_aid_details: list[SourceAttribution]
    meat_percentage: float


@dataclass(frozen=True)
class SavedRecipe:
    """A stored recipe that can be inserted into another recipe."""

    name: str
    ingredients: tuple[Ingredient, ...]
    cooking_loss: float = 0.0
    fat_loss: float = 0.0
    loss_type: LossType = LossType.DRYING
    article_number: str | None = None
    id: str = ""
    description: str | None = None
