"""API models for the Recipe Generator API."""

from .schemas import (
    RecipeRequest,
    Recipe,
    GenerateContentRequest,
    GenerateContentResponse,
    ErrorResponse,
    HealthResponse
)

__all__ = [
    "RecipeRequest",
    "Recipe",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "ErrorResponse",
    "HealthResponse"
]
