"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from zenstudent.api.v1.endpoints.chat import router as chat_router
from zenstudent.api.v1.endpoints.crisis import router as crisis_router
from zenstudent.api.v1.endpoints.exercises import router as exercises_router
from zenstudent.api.v1.endpoints.health import router as health_router
from zenstudent.api.v1.endpoints.mood import router as mood_router
from zenstudent.api.v1.endpoints.profile import router as profile_router
from zenstudent.infrastructure.metrics import metrics_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(chat_router, prefix="/chat", tags=["Chat"])
api_router.include_router(mood_router, prefix="/mood", tags=["Mood"])
api_router.include_router(exercises_router, prefix="/exercises", tags=["Exercises"])
api_router.include_router(crisis_router, prefix="/crisis", tags=["Crisis"])
api_router.include_router(profile_router, prefix="/profile", tags=["Profile"])
api_router.include_router(metrics_router)
