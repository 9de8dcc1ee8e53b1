from fastapi import APIRouter

from railops.api.endpoints.control import router as control_router
from railops.api.endpoints.emergency import router as emergency_router
from railops.api.endpoints.health import router as health_router
from railops.api.endpoints.insights import router as insights_router
from railops.api.endpoints.trains import router as trains_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["meta"])
api_router.include_router(trains_router, tags=["trains"])
api_router.include_router(control_router, prefix="/trains", tags=["control"])
api_router.include_router(insights_router, tags=["insights"])
api_router.include_router(emergency_router, prefix="/emergency", tags=["emergency"])
