"""Static lookup tables for ingredient matching.

Both tables are read-only at runtime.
"""

from types import MappingProxyType

# Alternate label spellings that should also trigger a flag, keyed by the
# lowercase flag value.
INGREDIENT_SYNONYMS = MappingProxyType({
    "parabens": ("methylparaben", "propylparaben", "butylparaben", "ethylparaben", "isobutylparaben"),
    "sulfates": ("sodium lauryl sulfate", "sls", "sodium laureth sulfate", "sles", "ammonium lauryl sulfate"),
    "phthalates": ("diethyl phthalate", "dep", "dibutyl phthalate", "dbp"),
    "formaldehyde": ("formalin", "formol", "dmdm hydantoin", "imidazolidinyl urea", "diazolidinyl urea", "quaternium-15"),
    "gluten": ("wheat", "barley", "rye", "oat", "triticum", "hordeum", "secale"),
    "dairy": ("milk", "lactose", "casein", "whey", "cream", "butter", "cheese", "yogurt", "lactalbumin"),
    "nuts": ("almond", "walnut", "pecan", "cashew", "pistachio", "macadamia", "hazelnut", "brazil nut", "chestnut"),
    "peanuts": ("peanut", "arachis hypogaea", "groundnut"),
    "soy": ("soya", "soybean", "soja", "glycine soja", "glycine max"),
    "eggs": ("egg", "albumin", "globulin", "lysozyme", "mayonnaise", "meringue", "ovalbumin", "ovomucin"),
    "shellfish": ("shrimp", "crab", "lobster", "crayfish", "prawn", "crawfish", "scampi"),
    "fish": ("cod", "salmon", "tuna", "anchovy", "sardine", "tilapia", "fish oil", "fish sauce"),
    "sesame": ("sesame", "sesamum indicum", "tahini", "halvah"),
    "palm_oil": ("palm", "palmitate", "palmate", "palmitic", "elaeis guineensis", "palmolein"),
    "artificial_colors": (
        "fd&c", "red 40", "yellow 5", "yellow 6", "blue 1", "red 3", "tartrazine",
        "e102", "e110", "e124", "e129", "e133",
    ),
    "artificial_sweeteners": (
        "aspartame", "sucralose", "saccharin", "acesulfame", "neotame", "advantame",
        "e951", "e954", "e955",
    ),
    "msg": ("monosodium glutamate", "glutamic acid", "glutamate", "e621"),
    "nitrates": ("sodium nitrate", "sodium nitrite", "potassium nitrate", "e250", "e251", "e252"),
    "bha_bht": ("butylated hydroxyanisole", "butylated hydroxytoluene", "e320", "e321"),
    "carrageenan": ("carrageenan", "e407", "irish moss"),
    "triclosan": ("triclosan", "irgasan", "5-chloro-2"),
    "microplastics": ("polyethylene", "polypropylene", "nylon", "pmma", "polyethylene terephthalate"),
})


def synonyms_for(flag_value: str) -> tuple[str, ...]:
    return INGREDIENT_SYNONYMS.get(flag_value.lower(), ())


# Catalog offered to users when they build a profile.
PREDEFINED_FLAGS = MappingProxyType({
    "allergen": (
        {"value": "gluten", "display": "Gluten"},
        {"value": "dairy", "display": "Dairy"},
        {"value": "nuts", "display": "Tree Nuts"},
        {"value": "peanuts", "display": "Peanuts"},
        {"value": "soy", "display": "Soy"},
        {"value": "eggs", "display": "Eggs"},
        {"value": "shellfish", "display": "Shellfish"},
        {"value": "fish", "display": "Fish"},
        {"value": "sesame", "display": "Sesame"},
    ),
    "additive": (
        {"value": "parabens", "display": "Parabens"},
        {"value": "sulfates", "display": "Sulfates (SLS/SLES)"},
        {"value": "phthalates", "display": "Phthalates"},
        {"value": "formaldehyde", "display": "Formaldehyde"},
        {"value": "artificial_colors", "display": "Artificial Colors"},
        {"value": "artificial_sweeteners", "display": "Artificial Sweeteners"},
        {"value": "msg", "display": "MSG"},
        {"value": "nitrates", "display": "Nitrates/Nitrites"},
        {"value": "bha_bht", "display": "BHA/BHT"},
        {"value": "carrageenan", "display": "Carrageenan"},
    ),
    "dietary": (
        {"value": "vegan", "display": "Not Vegan"},
        {"value": "vegetarian", "display": "Not Vegetarian"},
        {"value": "halal", "display": "Not Halal"},
        {"value": "kosher", "display": "Not Kosher"},
    ),
    "environmental": (
        {"value": "palm_oil", "display": "Palm Oil"},
        {"value": "microplastics", "display": "Microplastics"},
        {"value": "triclosan", "display": "Triclosan"},
    ),
})


def catalog_as_dict() -> dict[str, list[dict[str, str]]]:
    """Plain, JSON-serialisable copy of PREDEFINED_FLAGS."""
    return {flag_type: [dict(entry) for entry in entries] for flag_type, entries in PREDEFINED_FLAGS.items()}
