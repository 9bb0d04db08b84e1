"""Shared fixtures: a recipe handler wired to a mocked generation API."""

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from app.core.gemini_client import GeminiClient
from app.core.recipe_handler import RecipeHandler

TEST_API_KEY = "test-key"
TEST_MODEL = "gemini-test-model"

SAMPLE_RECIPES = [
    {
        "title": "Tomato Omelette",
        "desc": "Fluffy eggs with tomato",
        "time": "15 min",
        "ingredients": ["2 eggs", "1 tomato"],
        "steps": ["Beat the eggs.", "Cook with tomato."]
    },
    {
        "title": "Shakshuka",
        "desc": "Eggs poached in tomato sauce",
        "time": "25 min",
        "ingredients": ["3 eggs", "4 tomatoes"],
        "steps": ["Simmer tomatoes.", "Add eggs and cover."]
    }
]


def gemini_reply(text: str) -> dict:
    """Build a generateContent success payload carrying ``text``."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class MockGemini:
    """Records outbound calls and answers with a fixed status and body."""

    def __init__(self, status_code: int = 200, payload=None, content: bytes = None):
        self.status_code = status_code
        self.payload = payload if payload is not None else gemini_reply(json.dumps(SAMPLE_RECIPES))
        self.content = content
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_prompt(self) -> str:
        body = json.loads(self.requests[-1].content)
        return body["contents"][0]["parts"][0]["text"]


def build_handler(mock: MockGemini, api_key=TEST_API_KEY) -> RecipeHandler:
    settings = Settings(gemini_api_key=api_key, model_name=TEST_MODEL, _env_file=None)
    client = GeminiClient(
        api_key=api_key or "",
        model_name=TEST_MODEL,
        transport=httpx.MockTransport(mock)
    )
    return RecipeHandler(settings, client=client)


@pytest.fixture
def mock_gemini():
    """Mocked generation API returning two sample recipes."""
    return MockGemini()
