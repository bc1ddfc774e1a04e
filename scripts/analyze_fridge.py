#!/usr/bin/env python3
"""
Fridge Photo Analyzer for FridgeAI.

Runs the recommendation pipeline once against an image file and prints the
detected ingredients and generated recipes. Reads the API key from
FRIDGE_GEMINI_API_KEY (a .env file in the working directory is honored).

Usage:
    python scripts/analyze_fridge.py fridge.jpg
    python scripts/analyze_fridge.py fridge.jpg --sustainable
    python scripts/analyze_fridge.py fridge.png --mime-type image/png --workout --tips
"""

import os
import sys
import asyncio
import logging
import argparse
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from fridge_ai import FridgeAIError, GeminiGateway, RecommendationPipeline, Recipe
from fridge_ai.gateway import DEFAULT_MODEL

# Load environment variables
load_dotenv()


def print_recipe(index: int, recipe: Recipe) -> None:
    """Print one recipe in a readable block."""
    expiration = recipe.expiration_info
    print(f"\n{index}. {recipe.name}")
    print(
        f"   {recipe.calories} kcal | {recipe.carbon_footprint:.1f} kg CO2 | "
        f"expires in {expiration.days_until_expiration}d | "
        f"freshness {expiration.freshness_score:.1f}"
    )
    if expiration.priority_ingredients:
        print(f"   Use soon: {', '.join(expiration.priority_ingredients)}")
    print("   Ingredients:")
    for line in recipe.ingredients:
        print(f"     - {line}")
    print("   Instructions:")
    for step, line in enumerate(recipe.instructions, start=1):
        print(f"     {step}. {line}")


async def run(args: argparse.Namespace) -> int:
    gateway = GeminiGateway(
        api_key=os.getenv("FRIDGE_GEMINI_API_KEY", ""),
        model=os.getenv("FRIDGE_GEMINI_MODEL", DEFAULT_MODEL),
        timeout=args.timeout,
    )
    pipeline = RecommendationPipeline(gateway)

    image = Path(args.image).read_bytes()
    result = await pipeline.run(image, mime_type=args.mime_type, sustainable=args.sustainable)

    print(f"[INFO] Ingredients: {', '.join(result.ingredients) or '(none)'}")
    for index, recipe in enumerate(result.recipes, start=1):
        print_recipe(index, recipe)

    if not result.ok:
        print(f"\n[ERROR] {result.failed_stage} stage failed: {result.error_message}")
        return 1

    if not result.recipes:
        return 0

    top = result.recipes[0]
    try:
        if args.tips:
            print(f"\n[TIPS] {top.name}")
            print(await pipeline.recipe_tips(top))
        if args.workout:
            recommendation = await pipeline.recommend_workout(top)
            print(f"\n[WORKOUT] Burn {recommendation.calories_to_burn} kcal from {recommendation.recipe_name}:")
            for workout in recommendation.workouts:
                print(
                    f"   {workout.type.value:<8} {workout.duration:>3} min  "
                    f"{workout.calories_burned:>4} kcal  {workout.description}"
                )
    except FridgeAIError as e:
        print(f"\n[ERROR] {e.user_message}")
        return 1

    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Analyze a fridge photo and suggest recipes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Recipes for a fridge photo
  python scripts/analyze_fridge.py fridge.jpg

  # Rank expiring-soon, low-footprint recipes first
  python scripts/analyze_fridge.py fridge.jpg --sustainable

  # Also print cooking tips and workouts for the top recipe
  python scripts/analyze_fridge.py fridge.jpg --tips --workout
        """,
    )

    parser.add_argument("image", help="Path to the fridge photo")
    parser.add_argument(
        "--mime-type",
        default="image/jpeg",
        help="MIME type of the photo (default: image/jpeg)",
    )
    parser.add_argument(
        "--sustainable",
        action="store_true",
        help="Rank recipes by expiration tier, then carbon footprint",
    )
    parser.add_argument(
        "--tips",
        action="store_true",
        help="Print cooking tips for the top recipe",
    )
    parser.add_argument(
        "--workout",
        action="store_true",
        help="Print workout options to burn off the top recipe",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=8.0,
        help="Per-request timeout in seconds (default: 8)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging verbosity (default: warning)",
    )

    args = parser.parse_args()

    if not Path(args.image).is_file():
        parser.error(f"image not found: {args.image}")

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")


if __name__ == "__main__":
    main()
