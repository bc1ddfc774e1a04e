"""Workout recommendation and history API routes."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fridge_ai import FridgeSession, WorkoutOption, WorkoutRecommendation, WorkoutType
from fridge_ai.stats import week_start

from ..models.workouts import WeeklyProgress, WorkoutStatsResponse
from ..services.session import get_session

router = APIRouter(prefix="/api/fridge", tags=["Workouts"])


@router.post("/recipes/{recipe_id}/workouts", response_model=WorkoutRecommendation)
async def recommend_workouts(recipe_id: str, session: FridgeSession = Depends(get_session)):
    """Generate walking, running and cycling options to burn off a recipe."""
    try:
        return await session.generate_workout(recipe_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")


@router.post("/workouts/{option_id}/accept", response_model=WorkoutOption, status_code=201)
async def accept_workout(option_id: str, session: FridgeSession = Depends(get_session)):
    """Save one option of the current recommendation as a completed workout."""
    try:
        return session.accept_workout(option_id)
    except KeyError:
        raise HTTPException(
            status_code=404,
            detail=f"Workout option '{option_id}' is not part of the current recommendation",
        )


@router.get("/workouts", response_model=list[WorkoutOption])
async def get_workouts(
    workout_type: Optional[WorkoutType] = Query(default=None, alias="type"),
    session: FridgeSession = Depends(get_session),
):
    """Get saved workouts, optionally only one type."""
    return session.list_workouts(workout_type)


@router.get("/workouts/weekly-progress", response_model=WeeklyProgress)
async def get_weekly_progress(
    today: Optional[date] = Query(default=None, description="Reference day (default: today)"),
    session: FridgeSession = Depends(get_session),
):
    """Which days of the current week have a completed workout."""
    today = today or date.today()
    return WeeklyProgress(
        week_start=week_start(today, session.first_weekday),
        days=session.weekly_progress(today),
    )


@router.get("/workouts/stats", response_model=WorkoutStatsResponse)
async def get_workout_stats(session: FridgeSession = Depends(get_session)):
    """Total calories, time and distance over saved workouts."""
    return WorkoutStatsResponse(**session.workout_stats().to_dict())


@router.delete("/workouts/{workout_id}", status_code=204)
async def delete_workout(workout_id: str, session: FridgeSession = Depends(get_session)):
    """Delete a saved workout."""
    try:
        session.delete_workout(workout_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Workout '{workout_id}' not found")
    return Response(status_code=204)
