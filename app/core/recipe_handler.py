"""Request handling for recipe generation.

The handler is independent of the hosting platform: it takes the HTTP method
and the raw body and returns a status, headers and body. Every failure is
turned into a JSON error response here, so nothing escapes ``handle``.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from config.settings import CORS_HEADERS, PROMPT_TEMPLATES, Settings
from app.core.errors import (
    ConfigurationError,
    InvalidBodyError,
    MethodNotAllowedError,
    ProcessingError,
    RecipeServiceError,
)
from app.core.gemini_client import GeminiClient
from app.models.schemas import RecipeRequest

logger = logging.getLogger(__name__)

FENCE_PREFIXES = ("```json", "```")
FENCE_SUFFIX = "```"


def build_prompt(ingredients: str, lang: str) -> str:
    """Build the instruction sent to the generation API."""
    return PROMPT_TEMPLATES["recipe_generation"].format(
        ingredients=ingredients,
        lang=lang
    )


def clean_model_output(text: str) -> str:
    """Strip a surrounding markdown code fence and whitespace.

    Only a leading ```json or ``` and a trailing ``` are removed. Anything else
    is left for the JSON parser to reject.
    """
    cleaned = text.strip()
    for prefix in FENCE_PREFIXES:
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix):]
            break
    if cleaned.endswith(FENCE_SUFFIX):
        cleaned = cleaned[:-len(FENCE_SUFFIX)]
    return cleaned.strip()


def parse_recipes(text: str) -> Any:
    """Check that the cleaned model output is JSON."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Model output is not valid JSON: {e.msg} at position {e.pos}")
        raise ProcessingError(
            "Internal Server Error during AI processing.",
            details=f"Model output is not valid JSON: {e.msg}"
        ) from e
    except RecursionError as e:
        logger.error("Model output is nested too deeply to decode")
        raise ProcessingError(
            "Internal Server Error during AI processing.",
            details="Model output is nested too deeply"
        ) from e


@dataclass(frozen=True)
class HandlerResponse:
    """Status, headers and body produced for one request."""
    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=lambda: dict(CORS_HEADERS))

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


def error_response(error: RecipeServiceError) -> HandlerResponse:
    body = json.dumps(error.to_dict(), ensure_ascii=False).encode("utf-8")
    return HandlerResponse(status_code=error.status_code, body=body)


class RecipeHandler:
    """Validates a request, asks the generation API for recipes and relays them."""

    def __init__(self, settings: Settings, client: Optional[GeminiClient] = None):
        self.settings = settings
        self.client = client
        if self.client is None and settings.gemini_api_key:
            self.client = GeminiClient(
                api_key=settings.gemini_api_key,
                model_name=settings.model_name,
                base_url=settings.api_base_url,
                timeout=settings.request_timeout
            )

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.gemini_api_key) and self.client is not None

    async def handle(self, method: str, body: bytes) -> HandlerResponse:
        """Run one request through the pipeline."""
        method = method.upper()
        if method == "OPTIONS":
            return HandlerResponse(status_code=200)

        try:
            text = await self._generate(method, body)
        except RecipeServiceError as e:
            if e.status_code < 500:
                logger.warning(f"{e.category}: {e.message}")
            return error_response(e)

        return HandlerResponse(status_code=200, body=text.encode("utf-8"))

    async def _generate(self, method: str, body: bytes) -> str:
        if not self.is_configured:
            logger.error("GEMINI_API_KEY is not set")
            raise ConfigurationError("GEMINI_API_KEY is not set on the server.")

        if method != "POST":
            raise MethodNotAllowedError(f"Method {method} is not supported; use POST.")

        request = self._parse_request(body)
        prompt = build_prompt(request.ingredients, request.lang)
        logger.info(f"Generating recipes (lang={request.lang})")

        generated = await self.client.generate(prompt)
        cleaned = clean_model_output(generated)
        parse_recipes(cleaned)
        return cleaned

    def _parse_request(self, body: bytes) -> RecipeRequest:
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidBodyError("Request body must be valid JSON.", details=str(e)) from e
        except RecursionError as e:
            raise InvalidBodyError("Request body must be valid JSON.", details="JSON nested too deeply") from e

        return RecipeRequest.from_body(data, default_lang=self.settings.default_lang)
