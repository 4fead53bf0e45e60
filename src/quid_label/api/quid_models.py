"""Pydantic models for QUID API payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quid_label.domain.ingredients import (
    Ingredient,
    IngredientResult,
    LossType,
    NutritionInput,
    NutritionValues,
    QuidResult,
    SavedRecipe,
)
from quid_label.services.specification import ProductSpecification


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NutritionPayload(CamelModel):
    """Nutrition values per 100 g, every field optional."""

    energy_kcal: float | None = None
    energy_kj: float | None = None
    fat: float | None = Field(default=None, ge=0)
    saturated_fat: float | None = Field(default=None, ge=0)
    carbohydrates: float | None = Field(default=None, ge=0)
    sugar: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    salt: float | None = Field(default=None, ge=0)
    water: float | None = Field(default=None, ge=0)
    ash: float | None = Field(default=None, ge=0)

    def to_domain(self) -> NutritionInput:
        """Convert to the domain input model."""
        return NutritionInput(**self.model_dump())

    @classmethod
    def from_domain(cls, nutrition: NutritionInput) -> "NutritionPayload":
        """Build from the domain input model."""
        return cls(
            energy_kcal=nutrition.energy_kcal,
            energy_kj=nutrition.energy_kj,
            fat=nutrition.fat,
            saturated_fat=nutrition.saturated_fat,
            carbohydrates=nutrition.carbohydrates,
            sugar=nutrition.sugar,
            protein=nutrition.protein,
            salt=nutrition.salt,
            water=nutrition.water,
            ash=nutrition.ash,
        )


class IngredientPayload(CamelModel):
    """A recipe line; raw weight in kilograms."""

    id: str = ""
    name: str = Field(min_length=1)
    label_name: str | None = None
    raw_weight: float = Field(default=0.0, ge=0)
    quid_required: bool = False
    is_meat: bool = False
    meat_species: str | None = None
    is_water: bool = False
    connective_tissue_percent: float | None = Field(default=None, ge=0, le=100)
    meat_protein_limit: float | None = None
    nutrition: NutritionPayload | None = None
    sub_ingredients: str | None = None
    processing_aids: str | None = None
    allergens: list[str] = Field(default_factory=list)
    is_recipe: bool = False
    original_sub_ingredients: list["IngredientPayload"] = Field(default_factory=list)
    original_end_weight: float | None = Field(default=None, ge=0)
    process_loss: float | None = Field(default=None, ge=0, le=100)

    def to_domain(self) -> Ingredient:
        """Convert to the domain ingredient, recursing into sub-recipes."""
        return Ingredient(
            id=self.id,
            name=self.name,
            label_name=self.label_name,
            raw_weight=self.raw_weight,
            quid_required=self.quid_required,
            is_meat=self.is_meat,
            meat_species=self.meat_species,
            is_water=self.is_water,
            connective_tissue_percent=self.connective_tissue_percent or 0.0,
            meat_protein_limit=self.meat_protein_limit,
            nutrition=self.nutrition.to_domain() if self.nutrition else None,
            sub_ingredients=self.sub_ingredients,
            processing_aids=self.processing_aids,
            allergens=tuple(self.allergens),
            is_recipe=self.is_recipe,
            original_sub_ingredients=tuple(
                sub.to_domain() for sub in self.original_sub_ingredients
            ),
            original_end_weight=self.original_end_weight,
            process_loss=self.process_loss or 0.0,
        )

    @classmethod
    def from_domain(cls, ingredient: Ingredient) -> "IngredientPayload":
        """Build from a domain ingredient."""
        return cls(
            id=ingredient.id,
            name=ingredient.name,
            label_name=ingredient.label_name,
            raw_weight=max(0.0, ingredient.raw_weight),
            quid_required=ingredient.quid_required,
            is_meat=ingredient.is_meat,
            meat_species=ingredient.meat_species,
            is_water=ingredient.is_water,
            connective_tissue_percent=ingredient.connective_tissue_percent,
            meat_protein_limit=ingredient.meat_protein_limit,
            nutrition=(
                NutritionPayload.from_domain(ingredient.nutrition)
                if ingredient.nutrition
                else None
            ),
            sub_ingredients=ingredient.sub_ingredients,
            processing_aids=ingredient.processing_aids,
            allergens=list(ingredient.allergens),
            is_recipe=ingredient.is_recipe,
            original_sub_ingredients=[
                cls.from_domain(sub) for sub in ingredient.original_sub_ingredients
            ],
            original_end_weight=ingredient.original_end_weight,
            process_loss=ingredient.process_loss,
        )


class RecipePayload(CamelModel):
    """A saved recipe with its own process parameters."""

    id: str = ""
    name: str = Field(min_length=1)
    article_number: str | None = None
    description: str | None = None
    cooking_loss: float = Field(default=0.0, ge=0, le=100)
    fat_loss: float = Field(default=0.0, ge=0, le=100)
    loss_type: LossType = LossType.DRYING
    ingredients: list[IngredientPayload] = Field(min_length=1)

    def to_domain(self) -> SavedRecipe:
        """Convert to the domain recipe."""
        return SavedRecipe(
            id=self.id,
            name=self.name,
            article_number=self.article_number,
            description=self.description,
            cooking_loss=self.cooking_loss,
            fat_loss=self.fat_loss,
            loss_type=self.loss_type,
            ingredients=tuple(item.to_domain() for item in self.ingredients),
        )


class CalculateRequest(CamelModel):
    """Ingredients plus process parameters for a calculation."""

    ingredients: list[IngredientPayload] = Field(min_length=1)
    process_loss: float = Field(default=0.0, ge=0, le=100)
    fat_loss: float = Field(default=0.0, ge=0, le=100)
    loss_type: LossType | None = None


class SpecificationRequest(CamelModel):
    """Recipe to build a specification sheet for."""

    recipe: RecipePayload
    product_name: str | None = None


class CompoundRequest(CamelModel):
    """Recipe to insert into another recipe at the given raw weight."""

    recipe: RecipePayload
    raw_weight: float = Field(default=0.0, ge=0)


class NutritionValuesModel(CamelModel):
    """Nutrition declaration per 100 g."""

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

    @classmethod
    def from_domain(cls, values: NutritionValues) -> "NutritionValuesModel":
        """Build from the domain values."""
        return cls(
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


class IngredientResultModel(CamelModel):
    """A declared ingredient line."""

    id: str
    name: str
    label_name: str | None
    raw_weight: float
    quid_required: bool
    is_meat: bool
    meat_species: str | None
    quid_raw_value: float
    label_text: str
    is_split: bool
    split_from: str | None

    @classmethod
    def from_domain(cls, result: IngredientResult) -> "IngredientResultModel":
        """Build from a domain result line."""
        ingredient = result.ingredient
        return cls(
            id=ingredient.id,
            name=ingredient.name,
            label_name=ingredient.label_name,
            raw_weight=ingredient.raw_weight,
            quid_required=ingredient.quid_required,
            is_meat=ingredient.is_meat,
            meat_species=ingredient.meat_species,
            quid_raw_value=result.quid_raw_value,
            label_text=result.label_text,
            is_split=result.is_split,
            split_from=result.split_from,
        )


class AllergenDetailModel(CamelModel):
    """Allergen with the ingredients contributing it."""

    id: str
    sources: list[str]


class ProcessingAidDetailModel(CamelModel):
    """Processing aid with the ingredients contributing it."""

    name: str
    sources: list[str]


class QuidResultModel(CamelModel):
    """Serialized QUID result."""

    total_raw_mass: float
    total_end_weight: float
    ingredients: list[IngredientResultModel]
    label_text: str
    warnings: list[str]
    nutrition_per_100g: NutritionValuesModel
    all_allergens: list[str]
    all_processing_aids: list[str]
    allergen_details: list[AllergenDetailModel]
    processing_aid_details: list[ProcessingAidDetailModel]
    meat_percentage: float

    @classmethod
    def from_domain(cls, result: QuidResult) -> "QuidResultModel":
        """Build from the domain result."""
        return cls(
            total_raw_mass=result.total_raw_mass,
            total_end_weight=result.total_end_weight,
            ingredients=[
                IngredientResultModel.from_domain(item) for item in result.ingredients
            ],
            label_text=result.label_text,
            warnings=list(result.warnings),
            nutrition_per_100g=NutritionValuesModel.from_domain(
                result.nutrition_per_100g
            ),
            all_allergens=list(result.all_allergens),
            all_processing_aids=list(result.all_processing_aids),
            allergen_details=[
                AllergenDetailModel(id=detail.name, sources=list(detail.sources))
                for detail in result.allergen_details
            ],
            processing_aid_details=[
                ProcessingAidDetailModel(name=detail.name, sources=list(detail.sources))
                for detail in result.processing_aid_details
            ],
            meat_percentage=result.meat_percentage,
        )


class ProcessingAidSlotModel(CamelModel):
    """Processing aid row of a specification sheet."""

    name: str
    sources: str


class NutritionRowModel(CamelModel):
    """Nutrition row of a specification sheet."""

    label: str
    value: str


class AllergenRowModel(CamelModel):
    """Allergen row of a specification sheet."""

    group: str
    label: str
    present: bool
    sources: str


class SpecificationModel(CamelModel):
    """Serialized specification sheet data."""

    product_name: str
    article_number: str | None
    valid_from: date
    ingredients_text: str
    processing_aids: list[ProcessingAidSlotModel]
    nutrition: list[NutritionRowModel]
    allergens: list[AllergenRowModel]
    warnings: list[str]

    @classmethod
    def from_domain(cls, spec: ProductSpecification) -> "SpecificationModel":
        """Build from the domain specification."""
        return cls(
            product_name=spec.product_name,
            article_number=spec.article_number,
            valid_from=spec.valid_from,
            ingredients_text=spec.ingredients_text,
            processing_aids=[
                ProcessingAidSlotModel(name=slot.name, sources=slot.sources)
                for slot in spec.processing_aids
            ],
            nutrition=[
                NutritionRowModel(label=row.label, value=row.value)
                for row in spec.nutrition
            ],
            allergens=[
                AllergenRowModel(
                    group=row.group,
                    label=row.label,
                    present=row.present,
                    sources=row.sources,
                )
                for row in spec.allergens
            ],
            warnings=list(spec.warnings),
        )


class SpecificationResponse(CamelModel):
    """Specification sheet data together with the underlying result."""

    specification: SpecificationModel
    result: QuidResultModel
