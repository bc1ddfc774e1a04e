"""
Application state for one user of the fridge app.

FridgeSession is the only component that mutates state: the current
analysis, the live workout recommendation, and the persisted favorites,
workouts and health profile. Readers get immutable snapshots.
"""

import asyncio
import calendar
import logging
import threading
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import AnalysisSuperseded, FridgeAIError
from .models import Recipe, UserHealthProfile, WorkoutOption, WorkoutRecommendation, WorkoutType
from .pipeline import PipelineResult, RecommendationPipeline, sort_sustainably
from .stats import WorkoutStats, weekly_completion, workout_stats
from .stores import FavoritesStore, KeyValueStore, ProfileStore, WorkoutStore

logger = logging.getLogger(__name__)


class SessionSnapshot(BaseModel):
    """Point-in-time copy of the session state."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ingredients: List[str]
    recipes: List[Recipe]
    favorites: List[Recipe]
    saved_workouts: List[WorkoutOption] = Field(serialization_alias="savedWorkouts")
    profile: UserHealthProfile
    has_profile: bool = Field(serialization_alias="hasProfile")
    sustainable_mode: bool = Field(serialization_alias="sustainableMode")
    workout_recommendation: Optional[WorkoutRecommendation] = Field(
        default=None, serialization_alias="workoutRecommendation"
    )
    last_error: Optional[str] = Field(default=None, serialization_alias="lastError")
    is_analyzing: bool = Field(default=False, serialization_alias="isAnalyzing")
    is_generating_workout: bool = Field(
        default=False, serialization_alias="isGeneratingWorkout"
    )


class FridgeSession:
    """
    Owns the state the app shows and persists.

    Only the newest photo analysis counts: starting a new one cancels any
    analysis still in flight, and the superseded caller gets
    AnalysisSuperseded instead of a result.
    """

    def __init__(
        self,
        pipeline: RecommendationPipeline,
        backend: KeyValueStore,
        first_weekday: int = calendar.SUNDAY,
    ):
        self.pipeline = pipeline
        self.first_weekday = first_weekday
        self.favorites_store = FavoritesStore(backend)
        self.workout_store = WorkoutStore(backend)
        self.profile_store = ProfileStore(backend)

        self._lock = threading.Lock()
        self._ingredients: List[str] = []
        self._generated: List[Recipe] = []
        self._sustainable = False
        self._recommendation: Optional[WorkoutRecommendation] = None
        self._last_error: Optional[str] = None
        self._analysis_task: Optional[asyncio.Task] = None
        self._workout_requests = 0

        # Persisted collections are read eagerly
        self._favorites: List[Recipe] = self.favorites_store.load() or []
        self._workouts: List[WorkoutOption] = self.workout_store.load() or []
        self._profile: Optional[UserHealthProfile] = self.profile_store.load()

        logger.info(
            f"[SESSION] Loaded {len(self._favorites)} favorites, "
            f"{len(self._workouts)} workouts, profile={self._profile is not None}"
        )

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def ingredients(self) -> List[str]:
        with self._lock:
            return list(self._ingredients)

    @property
    def recipes(self) -> List[Recipe]:
        """Generated recipes, in sustainable order while that mode is on."""
        with self._lock:
            return self._ranked_recipes()

    def _ranked_recipes(self) -> List[Recipe]:
        if self._sustainable:
            return sort_sustainably(self._generated)
        return list(self._generated)

    @property
    def favorites(self) -> List[Recipe]:
        with self._lock:
            return list(self._favorites)

    @property
    def profile(self) -> UserHealthProfile:
        """The saved profile, or a default one before the user saves any."""
        with self._lock:
            return self._profile or UserHealthProfile()

    @property
    def sustainable_mode(self) -> bool:
        return self._sustainable

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def workout_recommendation(self) -> Optional[WorkoutRecommendation]:
        return self._recommendation

    @property
    def is_analyzing(self) -> bool:
        return self._analysis_task is not None and not self._analysis_task.done()

    def get_recipe(self, recipe_id: str) -> Recipe:
        with self._lock:
            for recipe in self._generated + self._favorites:
                if recipe.id == recipe_id:
                    return recipe
        raise KeyError(recipe_id)

    def is_favorite(self, recipe_id: str) -> bool:
        with self._lock:
            return any(recipe.id == recipe_id for recipe in self._favorites)

    def list_workouts(self, workout_type: Optional[WorkoutType] = None) -> List[WorkoutOption]:
        with self._lock:
            if workout_type is None:
                return list(self._workouts)
            return [w for w in self._workouts if w.type == workout_type]

    def weekly_progress(self, today: Optional[date] = None) -> List[bool]:
        return weekly_completion(
            self.list_workouts(), today or date.today(), self.first_weekday
        )

    def workout_stats(self) -> WorkoutStats:
        return workout_stats(self.list_workouts())

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(
                ingredients=list(self._ingredients),
                recipes=self._ranked_recipes(),
                favorites=list(self._favorites),
                saved_workouts=list(self._workouts),
                profile=self._profile or UserHealthProfile(),
                has_profile=self._profile is not None,
                sustainable_mode=self._sustainable,
                workout_recommendation=self._recommendation,
                last_error=self._last_error,
                is_analyzing=self.is_analyzing,
                is_generating_workout=self._workout_requests > 0,
            )

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze_image(self, image: bytes, mime_type: str = "image/jpeg") -> PipelineResult:
        """
        Run the pipeline on a new photo and make its result current.

        Raises:
            AnalysisSuperseded: A newer photo was submitted before this one finished
        """
        previous = self._analysis_task
        if previous is not None and not previous.done():
            logger.info("[SESSION] New photo received, cancelling in-flight analysis")
            previous.cancel()

        with self._lock:
            self._last_error = None

        task = asyncio.ensure_future(
            self.pipeline.run(
                image,
                mime_type=mime_type,
                profile=self._profile,
                sustainable=self._sustainable,
            )
        )
        self._analysis_task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if self._analysis_task is not task:
                raise AnalysisSuperseded()
            raise
        finally:
            if self._analysis_task is task:
                self._analysis_task = None

        with self._lock:
            self._ingredients = result.ingredients
            self._generated = result.recipes
            if result.error is not None:
                self._last_error = f"Error analyzing image: {result.error_message}"
        return result

    def set_sustainable_mode(self, enabled: bool) -> None:
        with self._lock:
            self._sustainable = enabled
        logger.info(f"[SESSION] Sustainable mode {'on' if enabled else 'off'}")

    async def recipe_tips(self, recipe_id: str) -> str:
        recipe = self.get_recipe(recipe_id)
        self._clear_error()
        try:
            return await self.pipeline.recipe_tips(recipe)
        except FridgeAIError as e:
            self._record_error("Error getting cooking tips", e)
            raise

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def toggle_favorite(self, recipe_id: str) -> bool:
        """Favorite or un-favorite a recipe. Returns True when it is now a favorite."""
        with self._lock:
            for index, recipe in enumerate(self._favorites):
                if recipe.id == recipe_id:
                    del self._favorites[index]
                    is_favorite = False
                    break
            else:
                recipe = next((r for r in self._generated if r.id == recipe_id), None)
                if recipe is None:
                    raise KeyError(recipe_id)
                self._favorites.append(recipe)
                is_favorite = True
            self.favorites_store.save(list(self._favorites))
        return is_favorite

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    async def generate_workout(self, recipe_id: str) -> WorkoutRecommendation:
        recipe = self.get_recipe(recipe_id)
        self._clear_error()
        with self._lock:
            self._workout_requests += 1
        try:
            recommendation = await self.pipeline.recommend_workout(recipe)
        except FridgeAIError as e:
            self._record_error("Error generating workout recommendation", e)
            raise
        finally:
            with self._lock:
                self._workout_requests -= 1

        with self._lock:
            self._recommendation = recommendation
        return recommendation

    def accept_workout(self, option_id: str) -> WorkoutOption:
        """Save one option of the live recommendation as completed now."""
        with self._lock:
            if self._recommendation is None:
                raise KeyError(option_id)
            workout = self.pipeline.accept_workout(self._recommendation, option_id)
            self._workouts.append(workout)
            self._recommendation = None
            self.workout_store.save(list(self._workouts))
        logger.info(f"[SESSION] Saved {workout.type.value} workout ({workout.duration} min)")
        return workout

    def delete_workout(self, workout_id: str) -> None:
        with self._lock:
            remaining = [w for w in self._workouts if w.id != workout_id]
            if len(remaining) == len(self._workouts):
                raise KeyError(workout_id)
            self._workouts = remaining
            self.workout_store.save(list(self._workouts))

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def save_profile(self, profile: UserHealthProfile) -> UserHealthProfile:
        with self._lock:
            self._profile = profile
            self.profile_store.save(profile)
        return profile

    def _clear_error(self) -> None:
        with self._lock:
            self._last_error = None

    def _record_error(self, prefix: str, error: FridgeAIError) -> None:
        with self._lock:
            self._last_error = f"{prefix}: {error.user_message}"
        logger.error(f"[SESSION] {self._last_error}")
