"""Schemas for the city list endpoint."""

from pydantic import BaseModel, Field


class CitiesResponse(BaseModel):
    """Distinct cities that have at least one HOA profile."""

    success: bool = True
    cities: list[str] = Field(..., description="Sorted, deduplicated city names")
    count: int = Field(..., description="Number of cities")
    cached: bool = Field(..., description="Whether the list came from the cache")
