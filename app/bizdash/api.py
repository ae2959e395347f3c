from fastapi import APIRouter

from app.bizdash.routers.dashboard import router as dashboard_router
from app.bizdash.routers.health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(dashboard_router, tags=["dashboard"])
