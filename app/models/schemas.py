"""Pydantic models for API request/response schemas."""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import MissingFieldError


class RecipeRequest(BaseModel):
    """Request body for the /api/generate endpoint."""
    model_config = ConfigDict(frozen=True)

    ingredients: str = Field(min_length=1, description="Available ingredients as free text")
    lang: str = Field(default="ar", description="Language code for the generated recipes")

    @classmethod
    def from_body(cls, body: Any, default_lang: str = "ar") -> "RecipeRequest":
        """Build a request from a decoded JSON body.

        A list of ingredient strings is joined with commas. A missing or empty
        ``lang`` falls back to ``default_lang``.
        """
        if not isinstance(body, dict):
            raise MissingFieldError("Missing required field: ingredients")

        ingredients = body.get("ingredients")
        if isinstance(ingredients, list) and all(isinstance(i, str) for i in ingredients):
            ingredients = ", ".join(i.strip() for i in ingredients if i.strip())
        if not isinstance(ingredients, str) or not ingredients.strip():
            raise MissingFieldError("Missing required field: ingredients")

        lang = body.get("lang")
        if not isinstance(lang, str) or not lang.strip():
            lang = default_lang

        return cls(ingredients=ingredients.strip(), lang=lang.strip())


class Recipe(BaseModel):
    """A single generated recipe."""
    title: str = Field(description="Recipe name")
    desc: str = Field(default="", description="Short description")
    time: str = Field(default="", description="Preparation time, e.g. '30 min'")
    ingredients: List[str] = Field(default_factory=list, description="Ingredient lines")
    steps: List[str] = Field(default_factory=list, description="Cooking steps")


class Part(BaseModel):
    text: Optional[str] = None


class Content(BaseModel):
    parts: List[Part] = Field(default_factory=list)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response_mime_type: str = Field(default="application/json", alias="responseMimeType")


class GenerateContentRequest(BaseModel):
    """Request body for the Gemini generateContent call."""
    model_config = ConfigDict(populate_by_name=True)

    contents: List[Content]
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig,
        alias="generationConfig"
    )


class Candidate(BaseModel):
    content: Optional[Content] = None


class ApiError(BaseModel):
    message: Optional[str] = None


class GenerateContentResponse(BaseModel):
    """The parts of a Gemini generateContent reply this service reads."""
    candidates: List[Candidate] = Field(default_factory=list)
    error: Optional[ApiError] = None


class ErrorResponse(BaseModel):
    """Error body returned by every failing path."""
    error: str = Field(description="Error category")
    message: str = Field(description="Human-readable message")
    details: Optional[str] = Field(default=None, description="Upstream or parser details")


class HealthResponse(BaseModel):
    """Response body for the /health endpoint."""
    model_config = ConfigDict(protected_namespaces=())

    status: str = Field(description="Service status")
    model_name: str = Field(description="Generation model in use")
    api_key_configured: bool = Field(description="Whether the Gemini API key is set")
    version: str = Field(description="API version")
