"""Fridge analysis and recipe API routes."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from fridge_ai import FridgeSession, Recipe

from ..models.recipes import (
    AnalysisResponse,
    CookingTipsResponse,
    SustainableModeRequest,
    SustainableModeResponse,
)
from ..services.session import get_session

router = APIRouter(prefix="/api/fridge", tags=["Recipes"])


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_fridge_image(
    image: UploadFile = File(..., description="Photo of the fridge contents"),
    session: FridgeSession = Depends(get_session),
):
    """
    Detect ingredients in a fridge photo and generate recipes for them.

    A failed stage returns the error status of its cause, but the body still
    carries whatever was computed before the failure (usually ingredients).
    Submitting a new photo cancels an analysis still in flight (409 for it).
    """
    data = await image.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded image is empty")

    result = await session.analyze_image(data, image.content_type or "image/jpeg")
    response = AnalysisResponse(
        ingredients=result.ingredients,
        recipes=result.recipes,
        error=result.error_message,
        failed_stage=result.failed_stage,
    )

    if result.error is not None:
        return JSONResponse(
            status_code=result.error.http_status,
            content=response.model_dump(mode="json", by_alias=True),
        )
    return response


@router.get("/recipes", response_model=list[Recipe])
async def get_recipes(session: FridgeSession = Depends(get_session)):
    """Get the current recipes, in sustainable order when that mode is on."""
    return session.recipes


@router.put("/sustainable-mode", response_model=SustainableModeResponse)
async def set_sustainable_mode(
    request: SustainableModeRequest,
    session: FridgeSession = Depends(get_session),
):
    """Turn sustainability-aware ranking on or off."""
    session.set_sustainable_mode(request.enabled)
    return SustainableModeResponse(enabled=request.enabled, recipes=session.recipes)


@router.get("/recipes/{recipe_id}/tips", response_model=CookingTipsResponse)
async def get_cooking_tips(recipe_id: str, session: FridgeSession = Depends(get_session)):
    """Ask the model for cooking tips for a current or favorite recipe."""
    try:
        tips = await session.recipe_tips(recipe_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")
    return CookingTipsResponse(recipe_id=recipe_id, tips=tips)
