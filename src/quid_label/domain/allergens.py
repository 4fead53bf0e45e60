"""Allergen groups and the German keywords used to emphasize them."""

import re

ALLERGEN_KEYWORDS: dict[str, tuple[str, ...]] = {
    "gluten": ("gluten", "weizen", "roggen", "gerste", "hafer", "dinkel", "kamut"),
    "crustaceans": ("krebstier", "krebs", "garnele", "hummer", "scampi"),
    "eggs": ("ei", "eier", "hühnerei"),
    "fish": ("fisch", "lachs", "thunfisch", "kabeljau"),
    "peanuts": ("erdnuss", "erdnüsse"),
    "soy": ("soja", "sojabohne", "edamame"),
    "milk": (
        "milch",
        "laktose",
        "sahne",
        "rahm",
        "käse",
        "quark",
        "joghurt",
        "molke",
    ),
    "nuts": (
        "schalenfrucht",
        "nuss",
        "nüsse",
        "mandel",
        "haselnuss",
        "walnuss",
        "cashew",
        "pecan",
        "paranuss",
        "pistazie",
        "macadamia",
    ),
    "celery": ("sellerie", "knollensellerie", "staudensellerie"),
    "mustard": ("senf", "senfsaat", "senfkorn"),
    "sesame": ("sesam", "sesamsamen"),
    "sulphites": (
        "sulfit",
        "schwefeldioxid",
        "so2",
        "e220",
        "e221",
        "e222",
        "e223",
        "e224",
        "e225",
        "e226",
        "e227",
        "e228",
    ),
    "lupin": ("lupine",),
    "molluscs": ("weichtier", "muschel", "schnecke", "tintenfisch", "calamari"),
}

# Annex II order with the German group names used on specification sheets.
EU_ALLERGEN_GROUPS: list[tuple[str, str]] = [
    ("gluten", "Glutenhaltiges Getreide"),
    ("crustaceans", "Krebstiere"),
    ("eggs", "Eier"),
    ("fish", "Fisch"),
    ("peanuts", "Erdnüsse"),
    ("soy", "Soja"),
    ("milk", "Milch"),
    ("nuts", "Schalenfrüchte"),
    ("celery", "Sellerie"),
    ("mustard", "Senf"),
    ("sesame", "Sesam"),
    ("sulphites", "Schwefeldioxid und Sulfite"),
    ("lupin", "Lupinen"),
    ("molluscs", "Weichtiere"),
]

_GROUP_ALIASES: dict[str, str] = {
    "glutenhaltiges getreide": "gluten",
    "ei": "eggs",
    "eier": "eggs",
    "egg": "eggs",
    "krebstiere": "crustaceans",
    "fisch": "fish",
    "erdnüsse": "peanuts",
    "erdnuesse": "peanuts",
    "peanut": "peanuts",
    "soja": "soy",
    "sojabohnen": "soy",
    "soya": "soy",
    "milch": "milk",
    "laktose": "milk",
    "schalenfrüchte": "nuts",
    "nüsse": "nuts",
    "pistazien": "nuts",
    "mandeln": "nuts",
    "haselnüsse": "nuts",
    "walnüsse": "nuts",
    "cashewnüsse": "nuts",
    "pecannüsse": "nuts",
    "paranüsse": "nuts",
    "macadamianüsse": "nuts",
    "sellerie": "celery",
    "senf": "mustard",
    "sesam": "sesame",
    "sesamsamen": "sesame",
    "sulfit": "sulphites",
    "sulfite": "sulphites",
    "sulfites": "sulphites",
    "so2": "sulphites",
    "schwefel": "sulphites",
    "schwefeldioxid": "sulphites",
    "lupine": "lupin",
    "lupinen": "lupin",
    "weichtiere": "molluscs",
}


def allergen_keywords(allergen_id: str) -> tuple[str, ...]:
    """Return the tag itself plus its German keywords."""
    return (allergen_id, *ALLERGEN_KEYWORDS.get(allergen_id.lower(), ()))


def allergen_group(tag: str) -> str | None:
    """Map an allergen tag (English id or German name) to its EU group id."""
    lowered = tag.strip().lower()
    if lowered in ALLERGEN_KEYWORDS:
        return lowered
    return _GROUP_ALIASES.get(lowered)


def emphasize_allergens(text: str, allergens: tuple[str, ...] | list[str]) -> str:
    """Uppercase every case-insensitive keyword match of the given allergens."""
    for allergen in allergens:
        for keyword in allergen_keywords(allergen):
            if not keyword:
                continue
            pattern = re.compile(re.escape(keyword), re.IGNORECASE)
            text = pattern.sub(lambda match: match.group(0).upper(), text)
    return text
