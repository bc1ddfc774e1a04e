"""
Recipe, workout and health profile records.

Python attributes are snake_case; the JSON the model emits and the JSON we
persist use camelCase, mapped through field aliases.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

CM_PER_INCH = 2.54
POUNDS_PER_KG = 2.20462

GENDER_OPTIONS = ["male", "female", "other", "prefer not to say"]

COMMON_ALLERGIES = [
    "Milk", "Eggs", "Fish", "Shellfish", "Tree Nuts",
    "Peanuts", "Wheat", "Soy", "Sesame",
]


def new_id() -> str:
    return str(uuid.uuid4())


class NutritionalInfo(BaseModel):
    """Macronutrients per serving, in grams."""

    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(ge=0)


class ExpirationInfo(BaseModel):
    """Model-estimated freshness of the ingredients a recipe uses."""

    model_config = ConfigDict(populate_by_name=True)

    days_until_expiration: int = Field(ge=0, alias="daysUntilExpiration")
    freshness_score: float = Field(ge=0.0, le=1.0, alias="freshnessScore")
    priority_ingredients: List[str] = Field(
        default_factory=list, alias="priorityIngredients"
    )


class RecipeDraft(BaseModel):
    """A recipe exactly as the model emits it. Carries no identity."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    ingredients: List[str]
    instructions: List[str]
    calories: int
    carbon_footprint: float = Field(alias="carbonFootprint")
    nutritional_info: NutritionalInfo = Field(alias="nutritionalInfo")
    expiration_info: ExpirationInfo = Field(alias="expirationInfo")


class Recipe(RecipeDraft):
    """A recipe held by the app, identified by a locally generated id."""

    id: str = Field(default_factory=new_id)

    @classmethod
    def from_draft(cls, draft: RecipeDraft) -> "Recipe":
        """Build a recipe with a fresh id from a decoded draft."""
        return cls(**draft.model_dump())

    @property
    def days_until_expiration(self) -> int:
        return self.expiration_info.days_until_expiration

    def unlisted_priority_ingredients(self) -> List[str]:
        """
        Priority ingredients that do not appear in this recipe's ingredients.

        Ingredient lines carry quantities ("2 eggs"), so a priority ingredient
        counts as listed when it occurs case-insensitively inside any line.
        """
        lines = [line.lower() for line in self.ingredients]
        return [
            item
            for item in self.expiration_info.priority_ingredients
            if not any(item.lower() in line for line in lines)
        ]


class WorkoutType(str, Enum):
    """The three workouts the app recommends."""

    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"


class WorkoutOptionDraft(BaseModel):
    """A workout option as the model emits it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: WorkoutType
    duration: int = Field(gt=0, description="Minutes")
    calories_burned: int = Field(ge=0, alias="caloriesBurned")
    description: str = ""


class WorkoutOption(WorkoutOptionDraft):
    """A recommended workout, or a completed one once the user accepts it."""

    id: str = Field(default_factory=new_id)
    is_completed: bool = Field(default=False, alias="isCompleted")
    completed_date: Optional[datetime] = Field(default=None, alias="completedDate")

    @classmethod
    def from_draft(cls, draft: WorkoutOptionDraft) -> "WorkoutOption":
        return cls(**draft.model_dump())

    def mark_completed(self, now: Optional[datetime] = None) -> "WorkoutOption":
        """Return a completed copy stamped with ``now`` (UTC by default)."""
        return self.model_copy(
            update={
                "is_completed": True,
                "completed_date": now or datetime.now(timezone.utc),
            }
        )


class WorkoutRecommendation(BaseModel):
    """Three ways to burn off one recipe. Transient, never persisted."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_name: str = Field(alias="recipeName")
    calories_to_burn: int = Field(ge=0, alias="caloriesToBurn")
    workouts: List[WorkoutOption]

    @model_validator(mode="after")
    def _one_of_each_type(self) -> "WorkoutRecommendation":
        types = [workout.type for workout in self.workouts]
        if len(types) != len(WorkoutType) or set(types) != set(WorkoutType):
            raise ValueError(
                "workouts must contain exactly one walking, one running "
                f"and one cycling option, got {[t.value for t in types]}"
            )
        return self

    def get_option(self, option_id: str) -> WorkoutOption:
        for workout in self.workouts:
            if workout.id == option_id:
                return workout
        raise KeyError(option_id)


class UserHealthProfile(BaseModel):
    """User health data folded into recipe prompts. Metric units."""

    model_config = ConfigDict(populate_by_name=True)

    height: float = Field(default=170.0, gt=0, description="Centimeters")
    weight: float = Field(default=70.0, gt=0, description="Kilograms")
    gender: str = "prefer not to say"
    age: int = Field(default=25, ge=0)
    dietary_preferences: List[str] = Field(
        default_factory=list, alias="dietaryPreferences"
    )
    allergies: List[str] = Field(default_factory=list)
    fitness_goal: str = Field(default="maintenance", alias="fitnessGoal")
    activity_level: str = Field(default="moderate", alias="activityLevel")

    @classmethod
    def from_imperial(
        cls, height_inches: float, weight_pounds: float, **fields
    ) -> "UserHealthProfile":
        """Build a profile from inches and pounds, as the profile form collects them."""
        return cls(
            height=height_inches * CM_PER_INCH,
            weight=weight_pounds / POUNDS_PER_KG,
            **fields,
        )

    @property
    def height_inches(self) -> float:
        return self.height / CM_PER_INCH

    @property
    def weight_pounds(self) -> float:
        return self.weight * POUNDS_PER_KG

    @property
    def bmi(self) -> float:
        height_m = self.height / 100
        return self.weight / (height_m * height_m)

    @property
    def bmi_category(self) -> str:
        bmi = self.bmi
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal weight"
        if bmi < 30:
            return "Overweight"
        return "Obese"
