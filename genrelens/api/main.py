from fastapi import APIRouter

from .endpoints.genres import router as genres_router
from .endpoints.health import router as health_router

api_router = APIRouter()

api_router.include_router(genres_router)
api_router.include_router(health_router)
