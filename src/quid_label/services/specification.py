"""Product specification sheet data derived from a QUID result."""

from dataclasses import dataclass
from datetime import date

from quid_label.domain.allergens import EU_ALLERGEN_GROUPS, allergen_group
from quid_label.domain.ingredients import QuidResult
from quid_label.services.labels import format_german_number

PROCESSING_AID_SLOTS = 4
NO_PROCESSING_AIDS = ("Keine", "-")


@dataclass(frozen=True)
class ProcessingAidSlot:
    """One processing aid row of the sheet."""

    name: str
    sources: str


@dataclass(frozen=True)
class NutritionRow:
    """One row of the nutrition table, formatted for German sheets."""

    label: str
    value: str


@dataclass(frozen=True)
class AllergenRow:
    """Presence of one EU allergen group and where it comes from."""

    group: str
    label: str
    present: bool
    sources: str


@dataclass(frozen=True)
class ProductSpecification:
    """Everything a specification sheet shows about a product."""

    product_name: str
    article_number: str | None
    valid_from: date
    ingredients_text: str
    processing_aids: list[ProcessingAidSlot]
    nutrition: list[NutritionRow]
    allergens: list[AllergenRow]
    warnings: list[str]


def build_specification(
    product_name: str,
    result: QuidResult,
    article_number: str | None = None,
    valid_from: date | None = None,
) -> ProductSpecification:
    """Collect the specification sheet data for a calculated product."""
    return ProductSpecification(
        product_name=product_name,
        article_number=article_number,
        valid_from=valid_from or date.today(),
        ingredients_text=result.label_text,
        processing_aids=processing_aid_slots(result),
        nutrition=nutrition_rows(result),
        allergens=allergen_rows(result),
        warnings=list(result.warnings),
    )


def processing_aid_slots(result: QuidResult) -> list[ProcessingAidSlot]:
    """Fill the fixed processing aid rows, merging overflow into the last."""
    names = [""] * PROCESSING_AID_SLOTS
    sources = [""] * PROCESSING_AID_SLOTS
    names[0], sources[0] = NO_PROCESSING_AIDS

    last = PROCESSING_AID_SLOTS - 1
    for index, detail in enumerate(result.processing_aid_details):
        joined = ", ".join(detail.sources)
        if index < PROCESSING_AID_SLOTS:
            names[index] = detail.name
            sources[index] = joined
        else:
            names[last] = f"{names[last]}, {detail.name}"
            sources[last] = f"{sources[last]}; {joined}"

    return [
        ProcessingAidSlot(name=name, sources=source)
        for name, source in zip(names, sources, strict=True)
    ]


def nutrition_rows(result: QuidResult) -> list[NutritionRow]:
    """Nutrition table rows per 100 g."""
    values = result.nutrition_per_100g
    return [
        NutritionRow("Energie (kJ)", str(round(values.energy_kj))),
        NutritionRow("Energie (kcal)", str(round(values.energy_kcal))),
        NutritionRow("Fett", format_german_number(values.fat)),
        NutritionRow(
            "davon gesättigte Fettsäuren", format_german_number(values.saturated_fat)
        ),
        NutritionRow("Kohlenhydrate", format_german_number(values.carbohydrates)),
        NutritionRow("davon Zucker", format_german_number(values.sugar)),
        NutritionRow("Eiweiß", format_german_number(values.protein)),
        NutritionRow("Salz", format_german_number(values.salt, digits=2)),
    ]


def allergen_rows(result: QuidResult) -> list[AllergenRow]:
    """Presence matrix of the EU allergen groups."""
    sources: dict[str, list[str]] = {}
    for detail in result.allergen_details:
        group = allergen_group(detail.name)
        if group is None:
            continue
        names = sources.setdefault(group, [])
        names.extend(source for source in detail.sources if source not in names)

    return [
        AllergenRow(
            group=group,
            label=label,
            present=group in sources,
            sources=", ".join(sources.get(group, [])),
        )
        for group, label in EU_ALLERGEN_GROUPS
    ]
