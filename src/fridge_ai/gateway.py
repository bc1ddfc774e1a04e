"""
Gateway to the Gemini generateContent endpoint.

One POST per call, no automatic retries. Every failure is mapped onto the
pipeline error taxonomy so callers can tell a bad key from a dead network
from an upstream rejection from a reply we cannot read.
"""

import base64
import logging
import re
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import parser, prompts
from .errors import (
    ConnectivityError,
    CredentialError,
    FormatError,
    FridgeAIError,
    TransportError,
    UpstreamError,
)
from .models import Recipe, UserHealthProfile, WorkoutRecommendation

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_TIMEOUT = 8.0
DEFAULT_PROBE_TIMEOUT = 3.0

# Generation parameters are fixed, not user-configurable
IMAGE_TEMPERATURE = 0.4
TEXT_TEMPERATURE = 0.7
TOP_K = 32
TOP_P = 1

SAFETY_SETTINGS = [
    {"category": category, "threshold": "BLOCK_NONE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


class _Part(BaseModel):
    text: Optional[str] = None


class _Content(BaseModel):
    parts: List[_Part] = Field(default_factory=list)


class _Candidate(BaseModel):
    content: Optional[_Content] = None


class _PromptFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_reason: Optional[str] = Field(default=None, alias="blockReason")


class GenerateContentResponse(BaseModel):
    """The parts of a generateContent reply we read."""

    model_config = ConfigDict(populate_by_name=True)

    candidates: List[_Candidate] = Field(default_factory=list)
    prompt_feedback: Optional[_PromptFeedback] = Field(
        default=None, alias="promptFeedback"
    )

    def first_text(self) -> Optional[str]:
        """Text of the first part of the first candidate, if present."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


class _ErrorDetail(BaseModel):
    code: int = 0
    message: str = ""
    status: str = ""
    details: List[Dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: _ErrorDetail


def mask_key(api_key: str) -> str:
    """Show only the last four characters of a credential."""
    if len(api_key) <= 4:
        return "****"
    return f"****{api_key[-4:]}"


_KEY_PARAM = re.compile(r"(?<=[?&]key=)[^&\s\"']+")


class KeyRedactingFilter(logging.Filter):
    """
    Mask the ``key`` query parameter in log records.

    The key travels in the request URL, and httpx logs every request URL at
    INFO level.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _KEY_PARAM.sub(lambda match: mask_key(match.group(0)), message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


_httpx_logger = logging.getLogger("httpx")
if not any(isinstance(f, KeyRedactingFilter) for f in _httpx_logger.filters):
    _httpx_logger.addFilter(KeyRedactingFilter())


class GeminiGateway:
    """
    Sends prompts (optionally with an inline image) to the generative model.

    Connectivity is tracked as advisory state: after a connect failure the
    next call first runs one live probe, and only a failed probe
    short-circuits the call with ConnectivityError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway.

        Args:
            api_key: Credential sent as the ``key`` query parameter
            model: Model name appended to the base URL
            base_url: Models collection URL of the API
            timeout: Per-request timeout in seconds
            probe_timeout: Timeout for the connectivity probe
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self._transport = transport
        self._reachable: Optional[bool] = None

        logger.info(
            f"[GATEWAY] Initialized model={model}, key={mask_key(api_key)}, "
            f"timeout={timeout}s"
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    @property
    def reachable(self) -> Optional[bool]:
        """Last observed reachability; None until the first call."""
        return self._reachable

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(timeout), transport=self._transport
        )

    def _scrub(self, text: str) -> str:
        if self.api_key:
            return text.replace(self.api_key, mask_key(self.api_key))
        return text

    def build_request_body(
        self,
        prompt: str,
        image: Optional[bytes] = None,
        mime_type: str = "image/jpeg",
        temperature: float = TEXT_TEMPERATURE,
    ) -> Dict[str, Any]:
        """Build the generateContent request body."""
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        if image is not None:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": mime_type,
                        "data": base64.b64encode(image).decode("ascii"),
                    }
                }
            )

        return {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "temperature": temperature,
                "topK": TOP_K,
                "topP": TOP_P,
            },
            "safetySettings": SAFETY_SETTINGS,
        }

    async def check_connectivity(self) -> bool:
        """Probe the API host. Any HTTP answer at all counts as reachable."""
        probe_url = httpx.URL(self.base_url).copy_with(path="/")
        try:
            async with self._client(self.probe_timeout) as client:
                await client.head(probe_url)
            self._reachable = True
        except httpx.TransportError as e:
            logger.warning(f"[GATEWAY] Connectivity probe failed: {type(e).__name__}")
            self._reachable = False
        return self._reachable

    async def generate(
        self,
        prompt: str,
        image: Optional[bytes] = None,
        mime_type: str = "image/jpeg",
        temperature: float = TEXT_TEMPERATURE,
    ) -> str:
        """
        Send one prompt and return the first candidate's text.

        Raises:
            CredentialError: No key configured, or the key was rejected
            ConnectivityError: Connect failure, timeout, or failed probe
            UpstreamError: Any other non-2xx answer
            FormatError: 2xx answer without candidate text
            TransportError: Any other httpx failure
        """
        if not self.api_key:
            raise CredentialError("No API key is configured for the AI service.")

        if self._reachable is False and not await self.check_connectivity():
            raise ConnectivityError()

        body = self.build_request_body(prompt, image, mime_type, temperature)
        logger.debug(
            f"[GATEWAY] POST {self.endpoint} (image={image is not None}, "
            f"prompt_chars={len(prompt)})"
        )

        try:
            async with self._client(self.timeout) as client:
                response = await client.post(
                    self.endpoint, params={"key": self.api_key}, json=body
                )
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            self._reachable = False
            logger.error(f"[GATEWAY] Cannot connect to AI service: {type(e).__name__}")
            raise ConnectivityError() from e
        except httpx.TimeoutException as e:
            logger.error(f"[GATEWAY] AI service timed out after {self.timeout}s")
            raise ConnectivityError(
                f"The AI service did not respond within {self.timeout:g} seconds."
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(e, f"Network error: {self._scrub(str(e))}") from e

        self._reachable = True
        return self._read_candidate_text(response)

    def _status_error(self, response: httpx.Response) -> FridgeAIError:
        message = response.text[:200]
        reasons: List[str] = []
        try:
            detail = ErrorResponse.model_validate_json(response.content).error
            message = detail.message or message
            reasons = [str(item.get("reason", "")) for item in detail.details]
        except ValidationError:
            pass

        logger.error(f"[GATEWAY] AI service returned {response.status_code}: {message}")

        key_rejected = "API_KEY_INVALID" in reasons or (
            response.status_code == 400 and "api key" in message.lower()
        )
        if response.status_code in (401, 403) or key_rejected:
            return CredentialError()
        return UpstreamError(response.status_code, message)

    def _read_candidate_text(self, response: httpx.Response) -> str:
        if not response.is_success:
            raise self._status_error(response)

        try:
            payload = GenerateContentResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error("[GATEWAY] Undecodable response body from AI service")
            raise FormatError() from e

        text = payload.first_text()
        if text is None:
            block_reason = (
                payload.prompt_feedback.block_reason if payload.prompt_feedback else None
            )
            if block_reason:
                raise FormatError(f"The AI service blocked the request ({block_reason}).")
            raise FormatError()
        return text

    async def detect_ingredients(
        self, image: bytes, mime_type: str = "image/jpeg"
    ) -> List[str]:
        """Ask the model which food items are visible in a fridge photo."""
        text = await self.generate(
            prompts.ingredient_extraction_prompt(),
            image=image,
            mime_type=mime_type,
            temperature=IMAGE_TEMPERATURE,
        )
        return parser.split_ingredients(text)

    async def generate_recipes(
        self,
        ingredients: List[str],
        profile: Optional[UserHealthProfile] = None,
        sustainable: bool = False,
    ) -> List[Recipe]:
        text = await self.generate(
            prompts.recipe_generation_prompt(ingredients, profile, sustainable)
        )
        return parser.parse_recipes(text)

    async def recipe_tips(self, recipe: Recipe) -> str:
        text = await self.generate(prompts.cooking_tips_prompt(recipe))
        return parser.parse_advice(text)

    async def recommend_workouts(self, recipe: Recipe) -> WorkoutRecommendation:
        """Three workout options for a recipe, stamped with its name and calories."""
        text = await self.generate(prompts.workout_prompt(recipe))
        recommendation = parser.parse_workout_recommendation(text)
        return recommendation.model_copy(
            update={"recipe_name": recipe.name, "calories_to_burn": recipe.calories}
        )
