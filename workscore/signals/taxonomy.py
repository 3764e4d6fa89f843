"""Fixed lookup tables for community tags and venue categories.

Tags and place types arrive as free-form strings. They are mapped onto a
small fixed vocabulary here so the scorers only ever see known keys.
"""

import re

# Free-form tag spellings mapped to canonical tags
TAG_ALIASES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^(wi[\s_-]?fi|internet|wireless|fast[\s_-]?wifi)$"), "wifi"),
    (re.compile(r"^(no[\s_-]?wi[\s_-]?fi|bad[\s_-]?wifi|slow[\s_-]?wifi)$"), "no-wifi"),
    (re.compile(r"^(outlets?|power|plugs?|charg(er|ing))$"), "outlets"),
    (re.compile(r"^(seating|seats|tables|spacious)$"), "seating"),
    (re.compile(r"^(quiet|calm|peaceful|silent)$"), "quiet"),
    (re.compile(r"^(loud|noisy)$"), "loud"),
    (re.compile(r"^(crowded|packed|busy)$"), "crowded"),
    (re.compile(r"^(cozy|comfy|comfortable)$"), "cozy"),
    (re.compile(r"^(natural[\s_-]?light|sunny|bright)$"), "natural-light"),
    (re.compile(r"^(coffee|good[\s_-]?coffee)$"), "coffee"),
]

# Work-friendliness of each canonical tag (0-100)
TAG_SCORES = {
    "wifi": 90.0,
    "outlets": 90.0,
    "seating": 75.0,
    "quiet": 90.0,
    "cozy": 65.0,
    "natural-light": 70.0,
    "coffee": 60.0,
    "loud": 15.0,
    "crowded": 20.0,
    "no-wifi": 5.0,
}

# How much a single mention of the tag counts
TAG_IMPORTANCE = {
    "wifi": 1.4,
    "outlets": 1.2,
    "quiet": 1.1,
    "seating": 1.0,
    "no-wifi": 1.4,
    "loud": 1.1,
    "crowded": 1.0,
}
DEFAULT_TAG_IMPORTANCE = 0.8

# Venue categories and their laptop-friendliness prior (0-100)
VENUE_PRIORS = {
    "coworking": 95.0,
    "library": 90.0,
    "university": 85.0,
    "bookstore": 70.0,
    "cafe": 65.0,
    "restaurant": 35.0,
    "bar": 15.0,
    "other": 50.0,
}

# Checked in order; first match wins
VENUE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"cowork|workspace|shared[\s_-]?office"), "coworking"),
    (re.compile(r"library"), "library"),
    (re.compile(r"university|college|campus|study"), "university"),
    (re.compile(r"book"), "bookstore"),
    (re.compile(r"cafe|café|coffee|tea[\s_-]?house|bakery"), "cafe"),
    (re.compile(r"(^|[\s_-])(bar|pub)($|[\s_-])|night[\s_-]?club|casino|brewery"), "bar"),
    (re.compile(r"restaurant|food|diner|bistro"), "restaurant"),
]


def normalize_tag(tag: str) -> str | None:
    """Map a free-form tag to its canonical form, or None if unknown."""
    cleaned = tag.strip().lower()
    if not cleaned:
        return None
    if cleaned in TAG_SCORES:
        return cleaned
    for pattern, canonical in TAG_ALIASES:
        if pattern.match(cleaned):
            return canonical
    return None


def tag_importance(tag: str) -> float:
    """Weight of one mention of a canonical tag."""
    return TAG_IMPORTANCE.get(tag, DEFAULT_TAG_IMPORTANCE)


def classify_venue(place_type: str) -> str | None:
    """Map a provider category or place type to a venue category.

    Returns None for empty input; unrecognized types map to "other".
    """
    cleaned = place_type.strip().lower()
    if not cleaned:
        return None
    for pattern, venue in VENUE_PATTERNS:
        if pattern.search(cleaned):
            return venue
    return "other"


def venue_prior(venue: str) -> float:
    """Laptop-friendliness prior for a venue category."""
    return VENUE_PRIORS.get(venue, VENUE_PRIORS["other"])
