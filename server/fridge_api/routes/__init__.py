"""API route modules."""
from .state import router as state_router
from .recipes import router as recipes_router
from .favorites import router as favorites_router
from .workouts import router as workouts_router
from .profile import router as profile_router

__all__ = [
    "state_router",
    "recipes_router",
    "favorites_router",
    "workouts_router",
    "profile_router",
]
