"""Pydantic models for fridge API requests and responses."""
from .recipes import (
    AnalysisResponse,
    SustainableModeRequest,
    SustainableModeResponse,
    CookingTipsResponse,
    FavoriteToggleResponse,
)
from .workouts import WeeklyProgress, WorkoutStatsResponse
from .profile import ProfileResponse

__all__ = [
    "AnalysisResponse",
    "SustainableModeRequest",
    "SustainableModeResponse",
    "CookingTipsResponse",
    "FavoriteToggleResponse",
    "WeeklyProgress",
    "WorkoutStatsResponse",
    "ProfileResponse",
]
