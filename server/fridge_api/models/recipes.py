"""Recipe analysis request/response models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from fridge_ai.models import Recipe


class AnalysisResponse(BaseModel):
    """Result of analyzing one fridge photo."""

    model_config = ConfigDict(populate_by_name=True)

    ingredients: list[str]
    recipes: list[Recipe]
    error: Optional[str] = None
    failed_stage: Optional[str] = Field(default=None, serialization_alias="failedStage")


class SustainableModeRequest(BaseModel):
    """Toggle for sustainability-aware ranking."""

    enabled: bool


class SustainableModeResponse(BaseModel):
    """Sustainable mode state and the recipes in their new order."""

    enabled: bool
    recipes: list[Recipe]


class CookingTipsResponse(BaseModel):
    """Free-text cooking advice for one recipe."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_id: str = Field(serialization_alias="recipeId")
    tips: str


class FavoriteToggleResponse(BaseModel):
    """Favorite state of a recipe after toggling."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_id: str = Field(serialization_alias="recipeId")
    is_favorite: bool = Field(serialization_alias="isFavorite")
