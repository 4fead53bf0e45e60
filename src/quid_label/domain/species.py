"""Meat species and their legal fat / connective tissue limits."""

from dataclasses import dataclass
from enum import Enum


class MeatSpecies(Enum):
    """Species groups with their own meat-content limits."""

    PORK = "pork"
    BEEF = "beef"
    LAMB = "lamb"
    VEAL = "veal"
    MAMMAL = "mammal"
    CHICKEN = "chicken"
    TURKEY = "turkey"
    DUCK = "duck"
    RABBIT = "rabbit"
    POULTRY = "poultry"


@dataclass(frozen=True)
class SpeciesLimit:
    """Maximum fat and connective tissue share for declared meat."""

    max_fat_percent: float
    max_connective_tissue_percent: float


# Mammals 25/25 except pork (30/25); birds and rabbit 15/10.
SPECIES_LIMITS: dict[MeatSpecies, SpeciesLimit] = {
    MeatSpecies.PORK: SpeciesLimit(30, 25),
    MeatSpecies.BEEF: SpeciesLimit(25, 25),
    MeatSpecies.LAMB: SpeciesLimit(25, 25),
    MeatSpecies.VEAL: SpeciesLimit(25, 25),
    MeatSpecies.MAMMAL: SpeciesLimit(25, 25),
    MeatSpecies.CHICKEN: SpeciesLimit(15, 10),
    MeatSpecies.TURKEY: SpeciesLimit(15, 10),
    MeatSpecies.DUCK: SpeciesLimit(15, 10),
    MeatSpecies.RABBIT: SpeciesLimit(15, 10),
    MeatSpecies.POULTRY: SpeciesLimit(15, 10),
}

_SPECIES_NAMES: dict[MeatSpecies, str] = {
    MeatSpecies.PORK: "Schwein",
    MeatSpecies.BEEF: "Rind",
    MeatSpecies.LAMB: "Lamm",
    MeatSpecies.VEAL: "Kalb",
    MeatSpecies.MAMMAL: "Säugetier",
    MeatSpecies.CHICKEN: "Hühner",
    MeatSpecies.TURKEY: "Puten",
    MeatSpecies.DUCK: "Enten",
    MeatSpecies.RABBIT: "Kaninchen",
    MeatSpecies.POULTRY: "Geflügel",
}

_FAT_NAMES: dict[MeatSpecies, str] = {
    MeatSpecies.PORK: "Schweinespeck",
    MeatSpecies.BEEF: "Rinderfett",
    MeatSpecies.LAMB: "Lammfett",
    MeatSpecies.VEAL: "Kalbsfett",
    MeatSpecies.MAMMAL: "Tierisches Fett",
    MeatSpecies.CHICKEN: "Hühnerfett",
    MeatSpecies.TURKEY: "Putenfett",
    MeatSpecies.DUCK: "Entenfett",
    MeatSpecies.RABBIT: "Kaninchenfett",
    MeatSpecies.POULTRY: "Geflügelfett",
}

# Checked in order; "schwein" must win over the shorter keywords below.
_GERMAN_KEYWORDS: list[tuple[tuple[str, ...], MeatSpecies]] = [
    (("schwein",), MeatSpecies.PORK),
    (("rind",), MeatSpecies.BEEF),
    (("lamm",), MeatSpecies.LAMB),
    (("kalb",), MeatSpecies.VEAL),
    (("huhn", "hähnchen"), MeatSpecies.CHICKEN),
    (("pute", "truthahn"), MeatSpecies.TURKEY),
    (("ente",), MeatSpecies.DUCK),
    (("kaninchen", "hase"), MeatSpecies.RABBIT),
    (("geflügel",), MeatSpecies.POULTRY),
]


def species_name(species: MeatSpecies) -> str:
    """German species prefix, e.g. ``Schwein`` for ``Schweinefleisch``."""
    return _SPECIES_NAMES[species]


def meat_name(species: MeatSpecies) -> str:
    """Declaration name of the aggregated meat line."""
    return f"{species_name(species)}fleisch"


def fat_name(species: MeatSpecies) -> str:
    """Declaration name of fat separated from the meat line."""
    return _FAT_NAMES.get(species, "Tierisches Fett")


def normalize_species(raw: str | None) -> MeatSpecies | None:
    """Map an enum value or a German keyword to a species."""
    if not raw:
        return None
    lowered = raw.strip().lower()
    for species in MeatSpecies:
        if lowered == species.value:
            return species
    for keywords, species in _GERMAN_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return species
    return None


def resolve_species(meat_species: str | None, name: str) -> MeatSpecies | None:
    """Resolve the species of a meat ingredient from its species field or name.

    ``None`` means the ingredient cannot be aggregated.
    """
    # normalize_species already covers exact enum values.
    return normalize_species(meat_species) or normalize_species(name)
