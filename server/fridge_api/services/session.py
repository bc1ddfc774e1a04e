"""Process-wide FridgeSession built from settings.

The mobile client talks to one session per running API; routes receive it
through the ``get_session`` dependency so tests can override it.
"""
import logging
from functools import lru_cache

from fridge_ai import FridgeSession, GeminiGateway, RecommendationPipeline

from ..config import get_settings
from ..database import SQLiteKeyValueStore

log = logging.getLogger(__name__)


def build_session(settings=None) -> FridgeSession:
    """Wire gateway, pipeline and store into a session."""
    settings = settings or get_settings()

    if not settings.gemini_api_key:
        log.warning("[SESSION] FRIDGE_GEMINI_API_KEY is not set; AI calls will fail")

    gateway = GeminiGateway(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.request_timeout,
        probe_timeout=settings.probe_timeout,
    )
    return FridgeSession(
        RecommendationPipeline(gateway),
        SQLiteKeyValueStore(settings.store_db_path),
        first_weekday=settings.first_weekday,
    )


@lru_cache
def get_session() -> FridgeSession:
    return build_session()
