"""Species aggregation and enforcement of legal meat-content limits."""

import logging
from dataclasses import dataclass, field

from quid_label.domain.ingredients import Ingredient
from quid_label.domain.species import (
    SPECIES_LIMITS,
    MeatSpecies,
    fat_name,
    meat_name,
    resolve_species,
    species_name,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclarationLine:
    """An ingredient line after species aggregation."""

    ingredient: Ingredient
    is_split: bool = False
    split_from: str | None = None


@dataclass
class SpeciesGroup:
    """Accumulated masses of all meat of one species (kg)."""

    raw_weight: float = 0.0
    fat_mass: float = 0.0
    connective_tissue_mass: float = 0.0
    ingredients: list[Ingredient] = field(default_factory=list)

    def add(self, ingredient: Ingredient) -> None:
        """Add an ingredient's raw, fat and connective tissue masses."""
        fat_percent = 0.0
        if ingredient.nutrition is not None and ingredient.nutrition.fat is not None:
            fat_percent = ingredient.nutrition.fat
        self.raw_weight += ingredient.raw_weight
        self.fat_mass += ingredient.raw_weight * fat_percent / 100
        self.connective_tissue_mass += (
            ingredient.raw_weight * (ingredient.connective_tissue_percent or 0.0) / 100
        )
        self.ingredients.append(ingredient)


@dataclass
class AggregationResult:
    """Meat lines per species, pass-through lines and limit warnings."""

    meat_lines: list[DeclarationLine] = field(default_factory=list)
    other_lines: list[DeclarationLine] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def lines(self) -> list[DeclarationLine]:
        """Meat lines followed by pass-through lines."""
        return [*self.meat_lines, *self.other_lines]


def excess_weight(group_mass: float, actual_percent: float, limit_percent: float) -> float:
    """Mass to remove from a group so the remainder sits exactly at the limit."""
    if actual_percent <= limit_percent or limit_percent >= 100:
        return 0.0
    excess = group_mass * (actual_percent - limit_percent) / (100 - limit_percent)
    return min(max(0.0, excess), group_mass)


def aggregate_species(ingredients: list[Ingredient]) -> AggregationResult:
    """Group meat by species and split or reduce groups above their limits."""
    groups: dict[MeatSpecies, SpeciesGroup] = {
        species: SpeciesGroup() for species in MeatSpecies
    }
    result = AggregationResult()

    for ingredient in ingredients:
        if ingredient.is_meat:
            species = resolve_species(ingredient.meat_species, ingredient.name)
            if species is not None:
                groups[species].add(ingredient)
                continue
            _logger.debug("Unresolved meat species: ingredient=%s", ingredient.name)
        result.other_lines.append(DeclarationLine(ingredient))

    for species, group in groups.items():
        if group.raw_weight <= 0:
            continue
        _apply_limits(species, group, result)
    return result


def _apply_limits(
    species: MeatSpecies, group: SpeciesGroup, result: AggregationResult
) -> None:
    limits = SPECIES_LIMITS[species]
    label = species_name(species)
    avg_fat_percent = group.fat_mass / group.raw_weight * 100
    avg_ct_percent = group.connective_tissue_mass / group.raw_weight * 100

    if avg_fat_percent > limits.max_fat_percent:
        excess = excess_weight(group.raw_weight, avg_fat_percent, limits.max_fat_percent)
        result.meat_lines.append(
            DeclarationLine(_meat_line(species, group.raw_weight - excess))
        )
        result.meat_lines.append(
            DeclarationLine(
                Ingredient(
                    id=f"agg-{species.value}-fat",
                    name=fat_name(species),
                    raw_weight=excess,
                    quid_required=True,
                ),
                is_split=True,
                split_from=f"{meat_name(species)} (Gesamt)",
            )
        )
        _logger.debug(
            "Fat limit exceeded: species=%s avg=%.2f excess_kg=%.4f",
            species.value,
            avg_fat_percent,
            excess,
        )
        result.warnings.append(
            f"Hinweis: Der Gesamtfettgehalt für {label} ({avg_fat_percent:.1f}%) "
            f"überschreitet den Grenzwert ({limits.max_fat_percent:g}%). "
            f"Es wurden {round(excess * 1000)}g als "
            f'"{fat_name(species)}" separiert.'
        )
    elif avg_ct_percent > limits.max_connective_tissue_percent:
        # Excess connective tissue lowers the meat share but is not declared.
        excess = excess_weight(
            group.raw_weight, avg_ct_percent, limits.max_connective_tissue_percent
        )
        result.meat_lines.append(
            DeclarationLine(_meat_line(species, group.raw_weight - excess))
        )
        _logger.debug(
            "Connective tissue limit exceeded: species=%s avg=%.2f excess_kg=%.4f",
            species.value,
            avg_ct_percent,
            excess,
        )
        result.warnings.append(
            f"Hinweis: Der Bindegewebsanteil für {label} ({avg_ct_percent:.1f}%) "
            f"überschreitet den Grenzwert ({limits.max_connective_tissue_percent:g}%). "
            f"Der Fleischanteil wurde um {round(excess * 1000)}g reduziert."
        )
    else:
        result.meat_lines.append(DeclarationLine(_meat_line(species, group.raw_weight)))


def _meat_line(species: MeatSpecies, raw_weight: float) -> Ingredient:
    return Ingredient(
        id=f"agg-{species.value}-meat",
        name=meat_name(species),
        raw_weight=max(0.0, raw_weight),
        quid_required=True,
        is_meat=True,
        meat_species=species.value,
    )
