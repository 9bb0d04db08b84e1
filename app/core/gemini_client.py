"""Client for the Gemini generateContent API."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.core.errors import ProcessingError, UpstreamError
from app.models.schemas import (
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of decoding a generateContent reply: either text or a failure reason."""
    text: Optional[str] = None
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.text is not None


def decode_generation(payload: Any) -> GenerationResult:
    """Extract ``candidates[0].content.parts[0].text`` from a decoded reply."""
    try:
        response = GenerateContentResponse.model_validate(payload)
    except ValidationError as e:
        return GenerationResult(failure=f"Unexpected response shape: {e.error_count()} validation error(s)")

    if not response.candidates:
        return GenerationResult(failure="No candidates in response")
    content = response.candidates[0].content
    if content is None or not content.parts:
        return GenerationResult(failure="No content parts in first candidate")
    text = content.parts[0].text
    if text is None:
        return GenerationResult(failure="No text in first content part")
    return GenerationResult(text=text)


class GeminiClient:
    """Calls the generation API once per prompt."""

    def __init__(
        self,
        api_key: str,
        model_name: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._api_key = api_key
        self._model_name = model_name
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def model_name(self) -> str:
        return self._model_name

    def build_url(self) -> str:
        return (
            f"{self._base_url}/v1beta/models/{self._model_name}:generateContent"
            f"?key={self._api_key}"
        )

    @staticmethod
    def build_payload(prompt: str) -> dict:
        request = GenerateContentRequest(contents=[Content(parts=[Part(text=prompt)])])
        return request.model_dump(by_alias=True)

    async def generate(self, prompt: str) -> str:
        """Send the prompt and return the generated text.

        Raises UpstreamError when the API reports a failure and ProcessingError
        when the reply carries no usable text.
        """
        endpoint = f"{self._base_url}/v1beta/models/{self._model_name}:generateContent"
        logger.info(f"Calling generation API: {endpoint}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.build_url(), json=self.build_payload(prompt))
        except httpx.HTTPError as e:
            logger.error(f"Generation API request failed: {type(e).__name__}")
            raise UpstreamError(
                "Gemini API failed to process request.",
                details=str(e) or type(e).__name__,
                status_code=502
            ) from e

        try:
            data = response.json()
        except (ValueError, RecursionError):
            data = None

        upstream_error = data.get("error") if isinstance(data, dict) else None
        if response.is_error or upstream_error:
            message = None
            if isinstance(upstream_error, dict):
                message = upstream_error.get("message")
            logger.error(f"Gemini API error (status {response.status_code}): {message}")
            raise UpstreamError(
                "Gemini API failed to process request.",
                details=message or "Unknown error",
                status_code=response.status_code
            )

        if data is None:
            raise ProcessingError(
                "Internal Server Error during AI processing.",
                details="Generation API returned a non-JSON body"
            )

        result = decode_generation(data)
        if not result.ok:
            logger.error(f"No content generated: {result.failure}")
            raise ProcessingError("No content generated", details=result.failure)
        return result.text
