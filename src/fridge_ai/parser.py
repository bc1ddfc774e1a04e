"""
Response parsing for generative model replies.

The model wraps its JSON in prose and code fences and sometimes pretty-prints
it with literal newlines inside strings. Structured replies are cleaned, cut
down to the span between the first ``{`` and the last ``}``, and validated
against pydantic schemas. Anything that does not validate is a FormatError;
there is no partial recovery.
"""

import logging
import re
from typing import List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import FormatError
from .models import (
    Recipe,
    RecipeDraft,
    WorkoutOption,
    WorkoutOptionDraft,
    WorkoutRecommendation,
)

logger = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```[\w+-]*")
_TRAILING_FENCE = re.compile(r"```$")
_WHITESPACE_RUN = re.compile(r"[\r\n\t ]+")

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


class RecipeEnvelope(BaseModel):
    """Top-level shape of a recipe generation reply."""

    recipes: List[RecipeDraft]


class WorkoutEnvelope(BaseModel):
    """Top-level shape of a workout recommendation reply."""

    model_config = ConfigDict(populate_by_name=True)

    recipe_name: str = Field(alias="recipeName")
    calories_to_burn: int = Field(alias="caloriesToBurn")
    workouts: List[WorkoutOptionDraft]


def split_ingredients(text: str) -> List[str]:
    """
    Split a comma-separated ingredient reply into trimmed names.

    Empty tokens (from ",," or a trailing comma) are dropped instead of being
    kept as blank ingredients; the recipe prompt lists every name it gets.
    """
    tokens = (token.strip() for token in text.split(","))
    return [token for token in tokens if token]


def clean_response_text(text: str) -> str:
    """Strip surrounding code fences and collapse whitespace runs to single spaces."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned.rstrip(), count=1)
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned)
    return cleaned.strip()


def extract_json_span(text: str) -> str:
    """Return the substring from the first ``{`` through the last ``}``."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise FormatError("The AI response did not contain a JSON object.")
    return text[start : end + 1]


def _decode(text: str, schema: Type[EnvelopeT]) -> EnvelopeT:
    span = extract_json_span(clean_response_text(text))
    try:
        return schema.model_validate_json(span)
    except ValidationError as e:
        logger.warning(
            f"[PARSER] {schema.__name__} failed validation with {e.error_count()} error(s)"
        )
        raise FormatError() from e


def parse_recipes(text: str) -> List[Recipe]:
    """Decode a recipe reply. Every recipe gets a freshly generated id."""
    envelope = _decode(text, RecipeEnvelope)
    return [Recipe.from_draft(draft) for draft in envelope.recipes]


def parse_workout_recommendation(text: str) -> WorkoutRecommendation:
    """
    Decode a workout reply into exactly three options.

    Options always start uncompleted with fresh ids, whatever the payload says.
    """
    envelope = _decode(text, WorkoutEnvelope)
    try:
        return WorkoutRecommendation(
            recipe_name=envelope.recipe_name,
            calories_to_burn=envelope.calories_to_burn,
            workouts=[WorkoutOption.from_draft(draft) for draft in envelope.workouts],
        )
    except ValidationError as e:
        logger.warning(f"[PARSER] Workout recommendation rejected: {e.error_count()} error(s)")
        raise FormatError() from e


def parse_advice(text: str) -> str:
    return text
