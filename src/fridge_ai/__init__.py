"""
FridgeAI recommendation core.

Turns a fridge photo into ingredient-aware recipe recommendations and
workout suggestions using a hosted generative model.
"""

from .errors import (
    AnalysisSuperseded,
    ConnectivityError,
    CredentialError,
    FormatError,
    FridgeAIError,
    TransportError,
    UpstreamError,
)
from .gateway import GeminiGateway
from .models import Recipe, UserHealthProfile, WorkoutOption, WorkoutRecommendation, WorkoutType
from .pipeline import PipelineResult, RecommendationPipeline, sort_sustainably
from .session import FridgeSession, SessionSnapshot

__all__ = [
    "AnalysisSuperseded",
    "ConnectivityError",
    "CredentialError",
    "FormatError",
    "FridgeAIError",
    "TransportError",
    "UpstreamError",
    "GeminiGateway",
    "Recipe",
    "UserHealthProfile",
    "WorkoutOption",
    "WorkoutRecommendation",
    "WorkoutType",
    "PipelineResult",
    "RecommendationPipeline",
    "sort_sustainably",
    "FridgeSession",
    "SessionSnapshot",
]
