"""
Unit tests for recipe, workout and health profile records.

Usage:
    pytest tests/test_models.py -v
"""
import pytest
from pydantic import ValidationError

from fridge_ai.models import (
    UserHealthProfile,
    WorkoutOption,
    WorkoutRecommendation,
    WorkoutType,
)

from conftest import make_recipe, make_recommendation


class TestUserHealthProfile:
    """Test profile defaults, unit conversion and BMI."""

    def test_defaults(self):
        profile = UserHealthProfile()

        assert profile.height == 170
        assert profile.weight == 70
        assert profile.gender == "prefer not to say"
        assert profile.age == 25
        assert profile.fitness_goal == "maintenance"
        assert profile.activity_level == "moderate"
        assert profile.allergies == []

    def test_bmi(self):
        """175 cm / 74.2 kg is a normal weight."""
        profile = UserHealthProfile(height=175, weight=74.2)

        assert profile.bmi == pytest.approx(24.23, abs=0.01)
        assert profile.bmi_category == "Normal weight"

    @pytest.mark.parametrize(
        "weight,category",
        [
            (50.0, "Underweight"),
            (53.5, "Normal weight"),
            (72.5, "Overweight"),
            (87.0, "Obese"),
        ],
    )
    def test_bmi_categories(self, weight, category):
        """Just above the 18.5, 25 and 30 cut-offs at 170 cm."""
        assert UserHealthProfile(height=170, weight=weight).bmi_category == category

    def test_from_imperial(self):
        profile = UserHealthProfile.from_imperial(70, 154, age=40)

        assert profile.height == pytest.approx(177.8)
        assert profile.weight == pytest.approx(69.85, abs=0.01)
        assert profile.height_inches == pytest.approx(70)
        assert profile.weight_pounds == pytest.approx(154)
        assert profile.age == 40

    def test_camel_case_payload(self):
        profile = UserHealthProfile.model_validate(
            {"dietaryPreferences": ["Keto"], "fitnessGoal": "muscle gain", "activityLevel": "high"}
        )

        assert profile.dietary_preferences == ["Keto"]
        assert profile.fitness_goal == "muscle gain"
        assert profile.model_dump(by_alias=True)["activityLevel"] == "high"

    def test_rejects_non_positive_height(self):
        with pytest.raises(ValidationError):
            UserHealthProfile(height=0)


class TestRecipe:
    """Test recipe identity and helpers."""

    def test_ids_are_unique(self):
        assert make_recipe().id != make_recipe().id

    def test_unlisted_priority_ingredients(self):
        """Listed means a case-insensitive substring of some ingredient line."""
        recipe = make_recipe(
            ingredients=["2 Eggs", "100 g spinach leaves"],
            priority=["eggs", "Spinach", "yogurt"],
        )

        assert recipe.unlisted_priority_ingredients() == ["yogurt"]

    def test_camel_case_serialization(self):
        dumped = make_recipe(days=4).model_dump(by_alias=True)

        assert dumped["expirationInfo"]["daysUntilExpiration"] == 4
        assert "carbonFootprint" in dumped
        assert "nutritionalInfo" in dumped


class TestWorkoutRecommendation:
    """Test the one-of-each-type invariant."""

    def test_get_option(self):
        recommendation = make_recommendation()
        option = recommendation.workouts[2]

        assert recommendation.get_option(option.id) is option
        with pytest.raises(KeyError):
            recommendation.get_option("missing")

    def test_requires_all_three_types(self):
        with pytest.raises(ValidationError):
            WorkoutRecommendation(
                recipe_name="Soup",
                calories_to_burn=300,
                workouts=[
                    WorkoutOption(type=WorkoutType.WALKING, duration=60, calories_burned=300),
                    WorkoutOption(type=WorkoutType.WALKING, duration=60, calories_burned=300),
                    WorkoutOption(type=WorkoutType.CYCLING, duration=30, calories_burned=300),
                ],
            )

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            WorkoutOption(type=WorkoutType.RUNNING, duration=0, calories_burned=100)
