"""Fixed vocabularies used by the suggestion generator."""

# Known-good spellings offered as typo corrections
COMMON_TERMS = (
    "engel garcia gomez",
    "g-maxing",
    "gmax",
    "transformation",
    "coaching",
    "nutrition",
    "entraînement",
    "musculation",
    "force",
    "hypertrophie",
    "perte de gras",
    "fat loss",
    "strength",
    "muscle",
    "diet",
    "workout",
)

# Known-good phrases offered as completions of a typed prefix
COMPLETION_PHRASES = (
    "engel garcia gomez coach",
    "engel garcia gomez méthode",
    "engel garcia gomez g-maxing",
    "g-maxing entraînement",
    "g-maxing nutrition",
    "g-maxing transformation",
    "coaching personnel",
    "programme musculation",
    "perte de poids",
    "prise de muscle",
    "transformation physique",
)

# Offered when a query finds nothing
POPULAR_QUERIES = (
    "engel garcia gomez",
    "g-maxing méthode",
    "transformation physique",
    "coaching personnel",
    "programme musculation",
    "nutrition g-maxing",
)
