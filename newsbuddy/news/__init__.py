"""News models and catalogue."""

from .catalog import CATEGORIES, LOCATIONS, build_category_query, location_name
from .models import Headline

__all__ = [
    "CATEGORIES",
    "LOCATIONS",
    "Headline",
    "build_category_query",
    "location_name",
]
