"""
app/schemas/search.py

Purpose: Demo search request/response schemas

- Validates the q / zip query parameters
- Shapes demo result records for the frontend (camelCase keys)
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional


class SearchQuery(BaseModel):
    """
    Search parameters. Both values are trimmed before the length checks.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    q: str = Field(..., min_length=1, description="Product search text")
    zip: Optional[str] = Field(
        default=None,
        min_length=5,
        max_length=5,
        description="Optional 5-character ZIP code"
    )


class SearchResult(BaseModel):
    id: int
    title: str
    retailer: str
    price: float
    imageUrl: str = ""
    productUrl: str = "#"


class SearchResponse(BaseModel):
    results: List[SearchResult]
    mode: Literal["demo"] = "demo"

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [
                    {
                        "id": 2,
                        "title": "Large Eggs, 12 ct",
                        "retailer": "BudgetFoods",
                        "price": 2.39,
                        "imageUrl": "",
                        "productUrl": "#"
                    }
                ],
                "mode": "demo"
            }
        }
    )
