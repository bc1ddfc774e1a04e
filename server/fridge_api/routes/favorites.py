"""Favorite recipe API routes."""
from fastapi import APIRouter, Depends, HTTPException

from fridge_ai import FridgeSession, Recipe

from ..models.recipes import FavoriteToggleResponse
from ..services.session import get_session

router = APIRouter(prefix="/api/fridge", tags=["Favorites"])


@router.get("/favorites", response_model=list[Recipe])
async def get_favorites(session: FridgeSession = Depends(get_session)):
    """Get all favorited recipes."""
    return session.favorites


@router.post("/favorites/{recipe_id}/toggle", response_model=FavoriteToggleResponse)
async def toggle_favorite(recipe_id: str, session: FridgeSession = Depends(get_session)):
    """Favorite a current recipe, or un-favorite a saved one."""
    try:
        is_favorite = session.toggle_favorite(recipe_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")
    return FavoriteToggleResponse(recipe_id=recipe_id, is_favorite=is_favorite)
