"""
Pytest fixtures for FridgeAI tests.
"""
import json
import sys
from pathlib import Path
from typing import Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv

# Ensure the repo root and src/ are on sys.path so tests can import
# fridge_ai and server.fridge_api without an install.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from fridge_ai.gateway import GeminiGateway  # noqa: E402
from fridge_ai.models import (  # noqa: E402
    ExpirationInfo,
    NutritionalInfo,
    Recipe,
    WorkoutOption,
    WorkoutRecommendation,
    WorkoutType,
)
from fridge_ai.pipeline import RecommendationPipeline  # noqa: E402
from fridge_ai.session import FridgeSession  # noqa: E402
from fridge_ai.stores import StoreUnavailable  # noqa: E402


# ============================================================================
# Storage
# ============================================================================


class MemoryKeyValueStore:
    """Dict-backed stand-in for the SQLite key-value store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1


class BrokenKeyValueStore:
    """Backend whose storage is gone: every read and write fails."""

    def get(self, key: str) -> Optional[str]:
        raise StoreUnavailable("database disk image is malformed")

    def set(self, key: str, value: str) -> None:
        raise StoreUnavailable("attempt to write a readonly database")


@pytest.fixture
def backend():
    return MemoryKeyValueStore()


# ============================================================================
# Domain records
# ============================================================================


def make_recipe(
    name: str = "Veggie Omelette",
    days: int = 2,
    carbon: float = 1.5,
    calories: int = 450,
    ingredients=None,
    priority=None,
) -> Recipe:
    """Build a recipe with just the fields a test cares about."""
    return Recipe(
        name=name,
        ingredients=ingredients or ["3 eggs", "1 bell pepper", "50 g spinach"],
        instructions=["Whisk the eggs", "Cook the vegetables", "Fold and serve"],
        calories=calories,
        carbon_footprint=carbon,
        nutritional_info=NutritionalInfo(protein=25, carbs=10, fat=20, fiber=3),
        expiration_info=ExpirationInfo(
            days_until_expiration=days,
            freshness_score=0.7,
            priority_ingredients=priority if priority is not None else ["spinach"],
        ),
    )


def recipe_payload(name: str = "Veggie Omelette", days: int = 2, carbon: float = 1.5) -> dict:
    """A single recipe exactly as the model writes it (camelCase, no id)."""
    return {
        "name": name,
        "ingredients": ["3 eggs", "1 bell pepper", "50 g spinach"],
        "instructions": ["Whisk the eggs", "Cook the vegetables", "Fold and serve"],
        "calories": 450,
        "carbonFootprint": carbon,
        "nutritionalInfo": {"protein": 25, "carbs": 10, "fat": 20, "fiber": 3},
        "expirationInfo": {
            "daysUntilExpiration": days,
            "freshnessScore": 0.7,
            "priorityIngredients": ["spinach"],
        },
    }


def workout_payload(recipe_name: str = "Veggie Omelette", calories: int = 450) -> dict:
    return {
        "recipeName": recipe_name,
        "caloriesToBurn": calories,
        "workouts": [
            {"type": "walking", "duration": 90, "caloriesBurned": 450, "description": "Brisk walk"},
            {"type": "running", "duration": 40, "caloriesBurned": 450, "description": "Easy jog"},
            {"type": "cycling", "duration": 45, "caloriesBurned": 450, "description": "Steady ride"},
        ],
    }


def make_recommendation(recipe_name: str = "Veggie Omelette", calories: int = 450) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        recipe_name=recipe_name,
        calories_to_burn=calories,
        workouts=[
            WorkoutOption(type=WorkoutType.WALKING, duration=90, calories_burned=450),
            WorkoutOption(type=WorkoutType.RUNNING, duration=40, calories_burned=450),
            WorkoutOption(type=WorkoutType.CYCLING, duration=45, calories_burned=450),
        ],
    )


def gemini_reply(text: str) -> dict:
    """A generateContent response body carrying ``text`` as the first candidate."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


def recipes_reply(*payloads: dict) -> str:
    """Recipe reply text the way the model tends to send it: fenced JSON."""
    return "```json\n" + json.dumps({"recipes": list(payloads)}, indent=2) + "\n```"


# ============================================================================
# Pipeline and session
# ============================================================================


@pytest.fixture
def mock_gateway():
    """Gateway whose domain calls are AsyncMocks with happy-path defaults."""
    gateway = MagicMock(spec=GeminiGateway)
    gateway.detect_ingredients = AsyncMock(return_value=["eggs", "bell pepper", "spinach"])
    gateway.generate_recipes = AsyncMock(
        return_value=[
            make_recipe("Veggie Omelette", days=5, carbon=1.5),
            make_recipe("Spinach Frittata", days=2, carbon=2.0),
            make_recipe("Pepper Stir Fry", days=4, carbon=0.8),
        ]
    )
    gateway.recipe_tips = AsyncMock(return_value="Keep the heat medium-low.")
    gateway.recommend_workouts = AsyncMock(side_effect=lambda recipe: make_recommendation(recipe.name, recipe.calories))
    return gateway


@pytest.fixture
def pipeline(mock_gateway):
    return RecommendationPipeline(mock_gateway)


@pytest.fixture
def session(pipeline, backend):
    return FridgeSession(pipeline, backend)
