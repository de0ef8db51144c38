"""
app/api/search.py

Purpose: Demo search endpoint

- Validates q / zip
- Returns the filtered demo catalogue with mode="demo"
"""

from fastapi import APIRouter, Query
from pydantic import ValidationError as PydanticValidationError
from typing import Optional

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.schemas.search import SearchQuery, SearchResponse
from app.services.search_service import search_demo_products
from utils.constants import INVALID_SEARCH

logger = get_logger(__name__)
router = APIRouter()


@router.get("/search", response_model=SearchResponse)
async def search(
    q: Optional[str] = Query(None, description="Search text"),
    zip: Optional[str] = Query(None, description="5-character ZIP code"),
):
    """
    Searches the demo catalogue.

    Returns 400 with the validation details when q is blank or zip
    is not exactly 5 characters.
    """
    try:
        params = SearchQuery(q=q or "", zip=zip)
    except PydanticValidationError as e:
        raise ValidationError(
            INVALID_SEARCH,
            details=e.errors(include_url=False, include_context=False),
        )

    results = search_demo_products(params.q, params.zip)
    logger.debug(f"Demo search '{params.q}' -> {len(results)} result(s)")
    return SearchResponse(results=results)
