"""
Fridge photo to ranked recipes.

The pipeline is orchestration only: it calls the gateway stage by stage and
returns a result object. It holds no app state; FridgeSession owns that.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import cmp_to_key
from typing import List, Optional

from .errors import FridgeAIError
from .gateway import GeminiGateway
from .models import Recipe, UserHealthProfile, WorkoutOption, WorkoutRecommendation

logger = logging.getLogger(__name__)

EXPIRING_SOON_DAYS = 3


def compare_sustainability(a: Recipe, b: Recipe) -> int:
    """
    Two-tier ordering for sustainable mode.

    Recipes whose ingredients expire within EXPIRING_SOON_DAYS come first no
    matter their footprint; within a tier, lower carbon footprint comes first.
    """
    a_soon = a.days_until_expiration <= EXPIRING_SOON_DAYS
    b_soon = b.days_until_expiration <= EXPIRING_SOON_DAYS
    if a_soon and not b_soon:
        return -1
    if b_soon and not a_soon:
        return 1
    if a.carbon_footprint < b.carbon_footprint:
        return -1
    if a.carbon_footprint > b.carbon_footprint:
        return 1
    return 0


def sort_sustainably(recipes: List[Recipe]) -> List[Recipe]:
    """Return a new list in sustainable order. Ties keep their original order."""
    return sorted(recipes, key=cmp_to_key(compare_sustainability))


@dataclass
class PipelineResult:
    """Outcome of one analysis. Partial results survive a failed stage."""

    ingredients: List[str] = field(default_factory=list)
    recipes: List[Recipe] = field(default_factory=list)
    error: Optional[FridgeAIError] = None
    failed_stage: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None


class RecommendationPipeline:
    """Runs image -> ingredients -> recipes -> (optional) sustainable ranking."""

    STAGE_INGREDIENTS = "ingredients"
    STAGE_RECIPES = "recipes"

    def __init__(self, gateway: GeminiGateway):
        self.gateway = gateway

    async def run(
        self,
        image: bytes,
        mime_type: str = "image/jpeg",
        profile: Optional[UserHealthProfile] = None,
        sustainable: bool = False,
    ) -> PipelineResult:
        """
        Analyze a fridge photo and generate recipes for what is in it.

        Profile preferences go into the prompt as hints only; recipes are not
        filtered against them afterwards.

        Args:
            image: Encoded photo bytes
            mime_type: MIME type of the photo
            profile: Optional health profile to bias recipe generation
            sustainable: Rank expiring-soon and low-footprint recipes first

        Returns:
            PipelineResult; on failure ``error`` and ``failed_stage`` are set
            and everything computed before the failure is kept.
        """
        result = PipelineResult()

        try:
            result.ingredients = await self.gateway.detect_ingredients(image, mime_type)
        except FridgeAIError as e:
            return self._fail(result, self.STAGE_INGREDIENTS, e)
        logger.info(f"[PIPELINE] Detected {len(result.ingredients)} ingredients")

        try:
            recipes = await self.gateway.generate_recipes(
                result.ingredients, profile=profile, sustainable=sustainable
            )
        except FridgeAIError as e:
            return self._fail(result, self.STAGE_RECIPES, e)

        result.recipes = sort_sustainably(recipes) if sustainable else recipes
        logger.info(
            f"[PIPELINE] Generated {len(result.recipes)} recipes (sustainable={sustainable})"
        )
        return result

    def _fail(
        self, result: PipelineResult, stage: str, error: FridgeAIError
    ) -> PipelineResult:
        logger.error(f"[PIPELINE] Stage '{stage}' failed: {error.user_message}")
        result.error = error
        result.failed_stage = stage
        return result

    async def recommend_workout(self, recipe: Recipe) -> WorkoutRecommendation:
        return await self.gateway.recommend_workouts(recipe)

    async def recipe_tips(self, recipe: Recipe) -> str:
        return await self.gateway.recipe_tips(recipe)

    @staticmethod
    def accept_workout(
        recommendation: WorkoutRecommendation,
        option_id: str,
        now: Optional[datetime] = None,
    ) -> WorkoutOption:
        """Pick one option of a recommendation as a completed workout."""
        return recommendation.get_option(option_id).mark_completed(now)
