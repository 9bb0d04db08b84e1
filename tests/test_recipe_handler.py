"""Unit tests for prompt construction, output cleaning and the handler pipeline."""

import asyncio
import json

import pytest

from conftest import MockGemini, SAMPLE_RECIPES, build_handler, gemini_reply
from app.core.errors import MissingFieldError, ProcessingError
from app.core.recipe_handler import build_prompt, clean_model_output, parse_recipes
from app.models.schemas import RecipeRequest


class TestBuildPrompt:
    """Tests for build_prompt."""

    def test_contains_persona_task_and_schema(self):
        """Test the prompt carries persona, task, language and schema."""
        prompt = build_prompt("eggs, tomato", "en")

        assert "Expert Chef" in prompt
        assert "exactly 2" in prompt
        assert '"eggs, tomato"' in prompt
        assert "language code provided: en." in prompt
        assert "ONLY a valid JSON array" in prompt
        for key in ("title", "desc", "time", "ingredients", "steps"):
            assert f'"{key}"' in prompt

    def test_braces_in_ingredients_are_literal(self):
        """Test that braces in ingredients are not treated as placeholders."""
        prompt = build_prompt("{salt}", "ar")

        assert '"{salt}"' in prompt


class TestCleanModelOutput:
    """Tests for clean_model_output."""

    def test_json_fence(self):
        """Test stripping a json-tagged fence."""
        assert clean_model_output('```json\n[1, 2]\n```') == "[1, 2]"

    def test_bare_fence(self):
        """Test stripping a bare fence."""
        assert clean_model_output("```\n[]\n```") == "[]"

    def test_surrounding_whitespace(self):
        """Test trimming surrounding whitespace."""
        assert clean_model_output('  \n[{"a": 1}]\n\n') == '[{"a": 1}]'

    def test_unfenced_text_untouched(self):
        """Test that unfenced output is unchanged."""
        assert clean_model_output('[{"title": "X"}]') == '[{"title": "X"}]'

    def test_other_fence_variant_fails_to_parse(self):
        """Test that an unknown fence variant is left to fail parsing."""
        cleaned = clean_model_output("```JSON\n[]\n```")

        with pytest.raises(ProcessingError):
            parse_recipes(cleaned)


class TestParseRecipes:
    """Tests for parse_recipes."""

    def test_valid_array(self):
        """Test parsing a valid recipe array."""
        assert parse_recipes(json.dumps(SAMPLE_RECIPES)) == SAMPLE_RECIPES

    def test_invalid_json(self):
        """Test that invalid JSON raises ProcessingError."""
        with pytest.raises(ProcessingError) as exc_info:
            parse_recipes("not json")

        assert exc_info.value.status_code == 500
        assert exc_info.value.category == "Processing Error"

    def test_nesting_too_deep(self):
        """Test that output nested past the decoder limit raises ProcessingError."""
        with pytest.raises(ProcessingError):
            parse_recipes("[" * 200000 + "]" * 200000)


class TestRecipeRequest:
    """Tests for RecipeRequest.from_body."""

    def test_defaults_lang(self):
        """Test lang defaults to Arabic."""
        request = RecipeRequest.from_body({"ingredients": "eggs"})

        assert request.ingredients == "eggs"
        assert request.lang == "ar"

    def test_empty_lang_uses_default(self):
        """Test that an empty lang uses the configured default."""
        request = RecipeRequest.from_body({"ingredients": "eggs", "lang": ""}, default_lang="en")

        assert request.lang == "en"

    @pytest.mark.parametrize("body", [None, "eggs", {}, {"ingredients": 3}, {"ingredients": " "}])
    def test_rejects_missing_ingredients(self, body):
        """Test that bodies without usable ingredients are rejected."""
        with pytest.raises(MissingFieldError):
            RecipeRequest.from_body(body)


class TestRecipeHandler:
    """Tests for RecipeHandler.handle."""

    def test_success_body_is_cleaned_text(self):
        """Test the success body is the cleaned model text."""
        text = "```json\n" + json.dumps(SAMPLE_RECIPES) + "\n```"
        handler = build_handler(MockGemini(payload=gemini_reply(text)))

        result = asyncio.run(handler.handle("POST", b'{"ingredients": "eggs"}'))

        assert result.status_code == 200
        assert result.body == json.dumps(SAMPLE_RECIPES).encode("utf-8")
        assert result.headers["Access-Control-Allow-Origin"] == "*"

    def test_lowercase_method(self):
        """Test that method names are case-insensitive."""
        handler = build_handler(MockGemini())

        result = asyncio.run(handler.handle("options", b""))

        assert result.status_code == 200
        assert result.body == b""

    def test_errors_never_escape(self):
        """Test that pipeline errors become error responses."""
        handler = build_handler(MockGemini(payload={"unexpected": True}))

        result = asyncio.run(handler.handle("POST", b'{"ingredients": "eggs"}'))

        assert result.status_code == 500
        assert result.json()["error"] == "Processing Error"

    def test_non_utf8_body_is_invalid_json(self):
        """Test that a non-UTF-8 body is invalid JSON."""
        handler = build_handler(MockGemini())

        result = asyncio.run(handler.handle("POST", b"\xff\xfe\xfa"))

        assert result.status_code == 400
        assert result.json()["error"] == "Invalid JSON body"

    def test_deeply_nested_body_is_invalid_json(self):
        """Test that a request body nested past the decoder limit stays inside the handler."""
        handler = build_handler(MockGemini())

        result = asyncio.run(handler.handle("POST", b"[" * 200000 + b"]" * 200000))

        assert result.status_code == 400
        assert result.json()["error"] == "Invalid JSON body"
        assert result.headers["Access-Control-Allow-Origin"] == "*"

    def test_deeply_nested_output_is_processing_error(self):
        """Test that model output nested past the decoder limit becomes a Processing Error."""
        handler = build_handler(MockGemini(payload=gemini_reply("[" * 200000 + "]" * 200000)))

        result = asyncio.run(handler.handle("POST", b'{"ingredients": "eggs"}'))

        assert result.status_code == 500
        assert result.json()["error"] == "Processing Error"
