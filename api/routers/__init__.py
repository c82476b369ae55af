"""
Router package for the workout tracker API.

This package contains all API routers organized by domain:
- health: Liveness and readiness checks
- users: Accounts, profiles and availability checks
- exercises: Shared exercise library
- workouts: Workout sessions and their exercises
- sets: Strength, cardio and flexibility sets
"""

from api.routers.health import router as health_router
from api.routers.users import router as users_router
from api.routers.exercises import router as exercises_router
from api.routers.workouts import router as workouts_router
from api.routers.sets import router as sets_router

__all__ = [
    "health_router",
    "users_router",
    "exercises_router",
    "workouts_router",
    "sets_router",
]
