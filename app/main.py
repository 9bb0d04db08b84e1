"""FastAPI application for the Recipe Generator API."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response

from config.settings import get_settings
from app.models.schemas import HealthResponse
from app.core.recipe_handler import RecipeHandler

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

recipe_handler: RecipeHandler = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    global recipe_handler

    settings = get_settings()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}...")

    recipe_handler = RecipeHandler(settings)
    if recipe_handler.is_configured:
        logger.info(f"Generation model: {settings.model_name}")
    else:
        logger.warning("GEMINI_API_KEY is not set; /api/generate will return configuration errors")

    yield

    logger.info("Shutting down Recipe Generator API...")


app = FastAPI(
    title="Recipe Generator API",
    description="Generates recipes from a list of ingredients using the Gemini API",
    version="1.0.0",
    lifespan=lifespan
)


def get_recipe_handler() -> RecipeHandler:
    """Return the handler built at startup."""
    global recipe_handler
    if recipe_handler is None:
        recipe_handler = RecipeHandler(get_settings())
    return recipe_handler


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(handler: RecipeHandler = Depends(get_recipe_handler)):
    """Check service health and configuration."""
    return HealthResponse(
        status="healthy",
        model_name=handler.settings.model_name,
        api_key_configured=handler.is_configured,
        version=handler.settings.app_version
    )


@app.api_route(
    "/api/generate",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"],
    tags=["Generation"]
)
async def generate_recipes(request: Request, handler: RecipeHandler = Depends(get_recipe_handler)):
    """
    Generate two recipes from the given ingredients.

    - **ingredients**: Available ingredients (required)
    - **lang**: Language code for the response (default: ar)
    """
    body = await request.body()
    result = await handler.handle(request.method, body)
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers
    )


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
