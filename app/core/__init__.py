"""Core application modules."""

from .errors import (
    RecipeServiceError,
    ConfigurationError,
    MethodNotAllowedError,
    InvalidBodyError,
    MissingFieldError,
    UpstreamError,
    ProcessingError
)

__all__ = [
    "RecipeServiceError",
    "ConfigurationError",
    "MethodNotAllowedError",
    "InvalidBodyError",
    "MissingFieldError",
    "UpstreamError",
    "ProcessingError"
]
