"""News categories and locations offered to the browser client."""

CATEGORIES = [
    "general",
    "technology",
    "sports",
    "business",
    "entertainment",
    "health",
    "science",
]

# Location code -> place name used in search queries and the SerpAPI
# ``location`` parameter. None means "do not restrict".
LOCATIONS = {
    "GLOBAL": None,
    "IN": "India",
    "US": "United States",
    "GB": "United Kingdom",
    "EU": "Europe",
    "AUTO": None,
}


def location_name(code: str | None) -> str | None:
    """Resolve a location code (case-insensitive) to a place name."""
    if not code:
        return None
    return LOCATIONS.get(code.upper())


def build_category_query(category: str | None, location: str | None) -> str:
    """Build a search query for a category page, e.g. "top health news India"."""
    place = location_name(location)
    if not category or category.lower() == "general":
        query = "top news"
    else:
        query = f"top {category.lower()} news"
    return f"{query} {place}" if place else query
