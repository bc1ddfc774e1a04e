"""Workout view models."""
from datetime import date

from pydantic import BaseModel, Field, ConfigDict


class WeeklyProgress(BaseModel):
    """Workout completion for each day of the current week."""

    model_config = ConfigDict(populate_by_name=True)

    week_start: date = Field(serialization_alias="weekStart")
    days: list[bool]


class WorkoutStatsResponse(BaseModel):
    """Totals over all saved workouts."""

    model_config = ConfigDict(populate_by_name=True)

    total_calories: int = Field(serialization_alias="totalCalories")
    total_minutes: int = Field(serialization_alias="totalMinutes")
    total_time: str = Field(serialization_alias="totalTime")
    total_distance: float = Field(serialization_alias="totalDistance")
    distance_unit: str = Field(serialization_alias="distanceUnit")
