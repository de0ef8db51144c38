"""
app/services/search_service.py

Purpose: Demo product search

There is no real catalogue yet: results come from the static
DEMO_RESULTS list, filtered by case-insensitive substring on the title.
The ZIP code is accepted and validated but does not affect results.
"""

from typing import List, Optional

from app.schemas.search import SearchResult
from utils.constants import DEMO_RESULTS, MAX_SEARCH_RESULTS


def search_demo_products(query: str, zip_code: Optional[str] = None) -> List[SearchResult]:
    """
    Filters the demo catalogue.

    Args:
        query: Non-empty, already trimmed search text
        zip_code: Ignored in demo mode

    Returns:
        Up to MAX_SEARCH_RESULTS matching items
    """
    needle = query.lower()
    matches = [item for item in DEMO_RESULTS if needle in item["title"].lower()]
    return [SearchResult(**item) for item in matches[:MAX_SEARCH_RESULTS]]
