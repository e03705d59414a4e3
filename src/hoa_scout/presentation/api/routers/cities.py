"""Cities router: distinct city names for the browse form."""

import logging

from fastapi import APIRouter

from hoa_scout.application.queries import ListCitiesQuery
from hoa_scout.presentation.api.dependencies import CitiesCacheDep, RepoFactory
from hoa_scout.presentation.api.schemas import CitiesResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/cities",
    summary="List cities",
    responses={
        200: {"description": "Sorted distinct city names"},
    },
)
async def list_cities(
    factory: RepoFactory,
    cache: CitiesCacheDep,
) -> CitiesResponse:
    """
    List every city that has at least one HOA profile.

    The list is computed once and served from a process-wide cache for one
    hour; `cached` tells whether this response came from the cache.
    """
    result = await ListCitiesQuery.from_factory(factory, cache).execute()
    return CitiesResponse(
        cities=list(result.cities),
        count=result.count,
        cached=result.cached,
    )
