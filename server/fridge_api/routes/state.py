"""Session state API route."""
from fastapi import APIRouter, Depends

from fridge_ai import FridgeSession, SessionSnapshot

from ..services.session import get_session

router = APIRouter(prefix="/api/fridge", tags=["State"])


@router.get("/state", response_model=SessionSnapshot)
async def get_state(session: FridgeSession = Depends(get_session)):
    """
    Get a consistent snapshot of everything the app shows.

    Includes current ingredients and recipes, favorites, saved workouts,
    the live workout recommendation and the last error message.
    """
    return session.snapshot()
