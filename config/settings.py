"""
Configuration settings for the Recipe Generator API.
The Gemini API key is read once at startup and never refreshed per request.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RECIPE_",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )

    # Application settings
    app_name: str = "Recipe Generator API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 5000

    # Generation API settings
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "RECIPE_GEMINI_API_KEY"),
    )
    model_name: str = "gemini-2.5-flash-preview-09-2025"
    api_base_url: str = "https://generativelanguage.googleapis.com"
    request_timeout: float = 60.0

    # Language used when the client does not send one
    default_lang: str = "ar"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Headers attached to every response of the generate endpoint
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Content-Type": "application/json",
}

# Prompt templates for recipe generation
PROMPT_TEMPLATES = {
    "recipe_generation": """
Role: Expert Chef.
Task: Create exactly 2 creative recipes using these ingredients: "{ingredients}".
Language: Response MUST be in the language code provided: {lang}.
Constraint: Return ONLY a valid JSON array. No markdown, no code fences, no introduction, no explanation.
JSON Structure: [{{"title": "Name", "desc": "Short description", "time": "30 min", "ingredients": ["Item 1", "Item 2"], "steps": ["Step 1", "Step 2"]}}]
""",
}
