"""Error types raised by the recipe generation pipeline."""

from typing import Optional


class RecipeServiceError(Exception):
    """Base error carrying the HTTP status and the JSON error body."""

    status_code: int = 500
    category: str = "Internal Server Error"

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        """Convert to the error response body."""
        body = {"error": self.category, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(RecipeServiceError):
    status_code = 500
    category = "Configuration Error"


class MethodNotAllowedError(RecipeServiceError):
    status_code = 405
    category = "Method Not Allowed"


class InvalidBodyError(RecipeServiceError):
    status_code = 400
    category = "Invalid JSON body"


class MissingFieldError(RecipeServiceError):
    status_code = 400
    category = "Missing required field"


class UpstreamError(RecipeServiceError):
    """The generation API answered with an error status or an error payload."""

    category = "Gemini API failed"


class ProcessingError(RecipeServiceError):
    """The generation API call worked but its output broke the JSON contract."""

    status_code = 500
    category = "Processing Error"
