"""
Prompt construction for the generative model.

Pure string building. The structured prompts carry a worked JSON example so
the model sees the exact shape the response parser expects.
"""

import json
from typing import List, Optional

from .models import Recipe, UserHealthProfile

RECIPE_COUNT = 3

INGREDIENT_EXTRACTION_PROMPT = (
    "Analyze this image of a fridge and list all visible food items and "
    "ingredients. Return only a list of ingredients, separated by commas."
)

RECIPE_JSON_EXAMPLE = """{
  "recipes": [
    {
      "name": "Recipe Name",
      "ingredients": ["ingredient 1", "ingredient 2"],
      "instructions": ["step 1", "step 2"],
      "calories": 500,
      "carbonFootprint": 2.5,
      "nutritionalInfo": {
        "protein": 20,
        "carbs": 30,
        "fat": 15,
        "fiber": 5
      },
      "expirationInfo": {
        "daysUntilExpiration": 3,
        "freshnessScore": 0.8,
        "priorityIngredients": ["ingredient 1"]
      }
    }
  ]
}"""

RECIPE_PROMPT_TEMPLATE = """Generate {count} recipes using some or all of these ingredients: {ingredients}.
{constraints}For each recipe, provide:
1. Name
2. List of ingredients (including quantities)
3. Step by step instructions
4. Estimated calories
5. Carbon footprint (in kg CO2)
6. Nutritional info (protein, carbs, fat, fiber in grams)
7. Expiration info:
   - daysUntilExpiration: Number of days until the most perishable ingredient expires
   - freshnessScore: A score from 0.0 to 1.0 indicating overall freshness (1.0 being freshest)
   - priorityIngredients: List of ingredients from the recipe that are close to expiring

Format as JSON with this structure:
{example}

Return only the JSON object."""

SUSTAINABILITY_CLAUSE = (
    "Focus on sustainability: prefer recipes with a low carbon footprint and "
    "use up the ingredients that will expire soonest."
)

COOKING_TIPS_TEMPLATE = """Provide cooking tips and advice for making {name}.
Consider:
1. Ingredient preparation
2. Cooking techniques
3. Common mistakes to avoid
4. Timing and temperature
5. Plating and presentation
Keep the response concise and practical."""

WORKOUT_PROMPT_TEMPLATE = """Generate workout recommendations to burn off the calories from this recipe: {name} ({calories} calories).

Provide three different workout options (walking, running, and cycling) with appropriate durations to burn these calories.
For each workout, include:
1. Type of workout (must be one of: walking, running, cycling)
2. Duration in minutes
3. Estimated calories burned
4. A brief description of the workout

Format as JSON with this structure:
{{
  "recipeName": {name_json},
  "caloriesToBurn": {calories},
  "workouts": [
    {{
      "type": "walking",
      "duration": 60,
      "caloriesBurned": 250,
      "description": "Brisk walk at 4 mph"
    }},
    {{
      "type": "running",
      "duration": 30,
      "caloriesBurned": 400,
      "description": "Jog at 6 mph"
    }},
    {{
      "type": "cycling",
      "duration": 45,
      "caloriesBurned": 500,
      "description": "Moderate cycling at 14 mph"
    }}
  ]
}}

Make sure to:
1. Use the exact recipe name provided
2. Use the exact calories provided
3. Include all three workout types, exactly one of each
4. Ensure the total calories burned matches the recipe calories
5. Use valid workout types (walking, running, cycling)"""


def ingredient_extraction_prompt() -> str:
    return INGREDIENT_EXTRACTION_PROMPT


def _profile_constraints(profile: UserHealthProfile) -> List[str]:
    lines = []
    if profile.dietary_preferences:
        lines.append(
            f"Respect these dietary preferences: {', '.join(profile.dietary_preferences)}."
        )
    if profile.allergies:
        lines.append(
            f"Do not use any ingredient containing these allergens: {', '.join(profile.allergies)}."
        )
    if profile.fitness_goal:
        lines.append(f"Suit the recipes to a fitness goal of {profile.fitness_goal}.")
    if profile.activity_level:
        lines.append(f"The user's activity level is {profile.activity_level}.")
    return lines


def recipe_generation_prompt(
    ingredients: List[str],
    profile: Optional[UserHealthProfile] = None,
    sustainable: bool = False,
    count: int = RECIPE_COUNT,
) -> str:
    """
    Build the recipe generation prompt.

    Profile fields become natural-language constraints. The model is not
    guaranteed to honor them and nothing downstream filters on them.
    """
    constraints = _profile_constraints(profile) if profile else []
    if sustainable:
        constraints.append(SUSTAINABILITY_CLAUSE)

    return RECIPE_PROMPT_TEMPLATE.format(
        count=count,
        ingredients=", ".join(ingredients),
        constraints="".join(line + "\n" for line in constraints),
        example=RECIPE_JSON_EXAMPLE,
    )


def cooking_tips_prompt(recipe: Recipe) -> str:
    return COOKING_TIPS_TEMPLATE.format(name=recipe.name)


def workout_prompt(recipe: Recipe) -> str:
    """Build the workout prompt; it echoes the recipe's exact name and calories."""
    return WORKOUT_PROMPT_TEMPLATE.format(
        name=recipe.name,
        # quoted so a name containing quotes keeps the example valid JSON
        name_json=json.dumps(recipe.name),
        calories=recipe.calories,
    )
