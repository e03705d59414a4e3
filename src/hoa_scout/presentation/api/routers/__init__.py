from hoa_scout.presentation.api.routers.cities import router as cities_router
from hoa_scout.presentation.api.routers.hoa import router as hoa_router
from hoa_scout.presentation.api.routers.reports import router as reports_router

__all__ = [
    "cities_router",
    "hoa_router",
    "reports_router",
]
