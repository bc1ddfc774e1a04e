"""Health profile API routes."""
from fastapi import APIRouter, Depends

from fridge_ai import FridgeSession, UserHealthProfile

from ..models.profile import ProfileResponse
from ..services.session import get_session

router = APIRouter(prefix="/api/fridge", tags=["Profile"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(session: FridgeSession = Depends(get_session)):
    """Get the health profile (defaults until the user saves one) with BMI."""
    snapshot = session.snapshot()
    return ProfileResponse.from_profile(snapshot.profile, snapshot.has_profile)


@router.put("/profile", response_model=ProfileResponse)
async def save_profile(profile: UserHealthProfile, session: FridgeSession = Depends(get_session)):
    """Replace the saved health profile."""
    saved = session.save_profile(profile)
    return ProfileResponse.from_profile(saved, True)
