"""Derived workout views: weekly completion and aggregate totals."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List

from .models import WorkoutOption, WorkoutType

DISTANCE_UNIT = "mi"

# Average speeds in miles per hour, matching the workout prompt's examples
WORKOUT_SPEEDS_MPH = {
    WorkoutType.WALKING: 4,
    WorkoutType.RUNNING: 6,
    WorkoutType.CYCLING: 14,
}


@dataclass
class WorkoutStats:
    """Totals over saved workouts."""

    total_calories: int
    total_minutes: int
    total_distance: float
    distance_unit: str = DISTANCE_UNIT

    @property
    def total_time(self) -> str:
        return format_duration(self.total_minutes)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "total_calories": self.total_calories,
            "total_minutes": self.total_minutes,
            "total_time": self.total_time,
            "total_distance": self.total_distance,
            "distance_unit": self.distance_unit,
        }


def format_duration(minutes: int) -> str:
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h {remainder}m"


def _local_day(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone().date()


def week_start(today: date, first_weekday: int = calendar.SUNDAY) -> date:
    """First day of the calendar week containing ``today``."""
    return today - timedelta(days=(today.weekday() - first_weekday) % 7)


def weekly_completion(
    workouts: Iterable[WorkoutOption],
    today: date,
    first_weekday: int = calendar.SUNDAY,
) -> List[bool]:
    """
    One flag per day of the current week: did any workout complete that day?

    ``first_weekday`` uses the calendar module's numbering (MONDAY=0 ...
    SUNDAY=6).
    """
    start = week_start(today, first_weekday)
    completed_days = {
        _local_day(workout.completed_date)
        for workout in workouts
        if workout.completed_date is not None
    }
    return [start + timedelta(days=offset) in completed_days for offset in range(7)]


def workout_distance(workout: WorkoutOption) -> float:
    return WORKOUT_SPEEDS_MPH[workout.type] * workout.duration / 60


def workout_stats(workouts: Iterable[WorkoutOption]) -> WorkoutStats:
    workouts = list(workouts)
    return WorkoutStats(
        total_calories=sum(workout.calories_burned for workout in workouts),
        total_minutes=sum(workout.duration for workout in workouts),
        total_distance=round(sum(workout_distance(workout) for workout in workouts), 2),
    )
