"""Shared test fixtures."""

import pytest

from quid_label.config import Settings
from quid_label.containers import AppContainer
from quid_label.domain.ingredients import Ingredient, LossType, NutritionInput
from quid_label.services.quid import QuidService


def make_meat(  # noqa: PLR0913
    name: str,
    raw_weight: float,
    fat: float,
    species: str | None = None,
    connective_tissue: float = 0.0,
    protein: float | None = None,
) -> Ingredient:
    """Build a meat ingredient with the given fat share."""
    return Ingredient(
        name=name,
        raw_weight=raw_weight,
        is_meat=True,
        meat_species=species,
        connective_tissue_percent=connective_tissue,
        nutrition=NutritionInput(fat=fat, protein=protein),
    )


def make_water(
    raw_weight: float, name: str = "Trinkwasser", quid_required: bool = True
) -> Ingredient:
    """Build an added water ingredient."""
    return Ingredient(
        name=name,
        raw_weight=raw_weight,
        is_water=True,
        quid_required=quid_required,
    )


def make_dry(name: str, raw_weight: float, **kwargs: object) -> Ingredient:
    """Build a plain non-meat, non-water ingredient."""
    return Ingredient(name=name, raw_weight=raw_weight, **kwargs)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        water_declaration_threshold_percent=5.0,
        max_recipe_depth=16,
        default_loss_type=LossType.DRYING.value,
        debug=False,
    )


@pytest.fixture
def quid_service(settings: Settings) -> QuidService:
    return QuidService(
        water_declaration_threshold=settings.water_declaration_threshold_percent,
        max_depth=settings.max_recipe_depth,
    )


@pytest.fixture
def container(settings: Settings, quid_service: QuidService) -> AppContainer:
    return AppContainer(
        settings=settings,
        quid_service=quid_service,
        default_loss_type=LossType.DRYING,
    )
