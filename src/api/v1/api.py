from fastapi import APIRouter

from .health import router as health_router
from .templates import router as templates_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(templates_router)
