"""
MemoPad Backend — Gemini Service Unit Tests (Mocked)
======================================================

What:  Tests for GeminiService with the Google Generative AI SDK patched out.
How:   The `mock_genai` fixture replaces the genai module; each test shapes
       the fake model's response or failure.

What we test:
    ✅ Successful summary is returned trimmed
    ✅ Empty content and missing key fail before any API call
    ✅ Responses without text become LLMServiceError
    ✅ SDK exceptions become LLMServiceError without leaking details
    ✅ Prompt wording and generation parameters
    ❌ Real API calls
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.config import PLACEHOLDER_API_KEY, Settings, api_key_is_set
from app.exceptions import ConfigurationError, LLMServiceError, ValidationError
from app.services.gemini_service import (
    EMPTY_SUMMARY_MESSAGE,
    MISSING_CONTENT_MESSAGE,
    MISSING_KEY_MESSAGE,
    SUMMARY_FAILED_MESSAGE,
    GeminiService,
    build_summary_prompt,
    first_candidate_text,
)


def _response(text):
    part = SimpleNamespace(text=text)
    return SimpleNamespace(
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))]
    )


def _model(mock_genai):
    return mock_genai.GenerativeModel.return_value


class TestPrompt:

    def test_prompt_embeds_content(self):
        prompt = build_summary_prompt("Buy milk and eggs")

        assert "Buy milk and eggs" in prompt
        assert "3-5 sentences" in prompt
        assert prompt.rstrip().endswith("Summary:")

    def test_first_candidate_text(self):
        assert first_candidate_text(_response("hello")) == "hello"

    def test_first_candidate_text_handles_missing_parts(self):
        assert first_candidate_text(SimpleNamespace(candidates=[])) is None
        blocked = SimpleNamespace(
            candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))]
        )
        assert first_candidate_text(blocked) is None
        assert first_candidate_text(_response("")) is None


class TestSummarize:

    @pytest.mark.asyncio
    async def test_successful_summary_is_trimmed(self, mock_genai):
        _model(mock_genai).generate_content_async = AsyncMock(
            return_value=_response("\n  Milk and eggs are needed.  \n")
        )
        service = GeminiService(api_key="test-key", model_name="gemini-test")

        summary = await service.summarize("- milk\n- eggs")

        assert summary == "Milk and eggs are needed."
        mock_genai.configure.assert_called_once_with(api_key="test-key")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-test")

    @pytest.mark.asyncio
    async def test_single_call_with_generation_config(self, mock_genai):
        service = GeminiService(api_key="test-key")

        await service.summarize("Some memo")

        call = _model(mock_genai).generate_content_async.await_args
        assert _model(mock_genai).generate_content_async.await_count == 1
        assert call.args[0] == build_summary_prompt("Some memo")
        assert call.kwargs["generation_config"] is service.generation_config

        config_kwargs = mock_genai.GenerationConfig.call_args.kwargs
        assert config_kwargs == {
            "max_output_tokens": 200,
            "temperature": 0.3,
            "top_k": 40,
            "top_p": 0.95,
        }

    @pytest.mark.asyncio
    async def test_empty_content_is_rejected_without_call(self, mock_genai):
        service = GeminiService(api_key="test-key")

        with pytest.raises(ValidationError) as exc_info:
            await service.summarize("")

        assert exc_info.value.message == MISSING_CONTENT_MESSAGE
        assert exc_info.value.field == "content"
        _model(mock_genai).generate_content_async.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_key_is_rejected_without_call(self, mock_genai):
        service = GeminiService(api_key="")

        with pytest.raises(ConfigurationError) as exc_info:
            await service.summarize("Some memo")

        assert exc_info.value.message == MISSING_KEY_MESSAGE
        mock_genai.configure.assert_not_called()
        _model(mock_genai).generate_content_async.assert_not_called()

    @pytest.mark.asyncio
    async def test_placeholder_key_counts_as_missing(self, mock_genai):
        service = GeminiService(api_key="your_gemini_api_key_here")

        assert service.is_configured is False
        with pytest.raises(ConfigurationError):
            await service.summarize("Some memo")

    @pytest.mark.asyncio
    async def test_empty_candidate_raises(self, mock_genai):
        _model(mock_genai).generate_content_async = AsyncMock(
            return_value=SimpleNamespace(candidates=[])
        )
        service = GeminiService(api_key="test-key")

        with pytest.raises(LLMServiceError) as exc_info:
            await service.summarize("Some memo")

        assert exc_info.value.message == EMPTY_SUMMARY_MESSAGE

    @pytest.mark.asyncio
    async def test_whitespace_only_summary_raises(self, mock_genai):
        _model(mock_genai).generate_content_async = AsyncMock(
            return_value=_response("   \n")
        )
        service = GeminiService(api_key="test-key")

        with pytest.raises(LLMServiceError) as exc_info:
            await service.summarize("Some memo")

        assert exc_info.value.message == EMPTY_SUMMARY_MESSAGE

    @pytest.mark.asyncio
    async def test_sdk_exception_is_wrapped(self, mock_genai):
        _model(mock_genai).generate_content_async = AsyncMock(
            side_effect=RuntimeError("quota exceeded for key AIza-secret")
        )
        service = GeminiService(api_key="test-key")

        with pytest.raises(LLMServiceError) as exc_info:
            await service.summarize("Some memo")

        assert exc_info.value.message == SUMMARY_FAILED_MESSAGE
        assert "AIza-secret" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "RuntimeError"
        assert _model(mock_genai).generate_content_async.await_count == 1

    @pytest.mark.asyncio
    async def test_model_is_created_once(self, mock_genai):
        service = GeminiService(api_key="test-key")

        await service.summarize("first")
        await service.summarize("second")

        assert mock_genai.GenerativeModel.call_count == 1
        assert _model(mock_genai).generate_content_async.await_count == 2


class TestHealthCheck:

    @pytest.mark.asyncio
    async def test_unconfigured_is_unhealthy(self, mock_genai):
        assert await GeminiService(api_key="").health_check() is False
        mock_genai.list_models.assert_not_called()

    @pytest.mark.asyncio
    async def test_reachable_api_is_healthy(self, mock_genai):
        mock_genai.list_models.return_value = [
            SimpleNamespace(name="models/gemini-test")
        ]
        service = GeminiService(api_key="test-key", model_name="gemini-test")

        assert await service.health_check() is True

    @pytest.mark.asyncio
    async def test_unreachable_api_is_unhealthy(self, mock_genai):
        mock_genai.list_models.side_effect = ConnectionError("offline")

        assert await GeminiService(api_key="test-key").health_check() is False


class TestApiKeyCheck:
    """Settings and the service share one notion of a usable key."""

    @pytest.mark.parametrize(
        "api_key, expected",
        [("", False), (None, False), (PLACEHOLDER_API_KEY, False), ("AIza-real", True)],
    )
    def test_api_key_is_set(self, api_key, expected):
        assert api_key_is_set(api_key) is expected

    @pytest.mark.parametrize("api_key", ["", PLACEHOLDER_API_KEY, "AIza-real"])
    def test_settings_and_service_agree(self, mock_genai, api_key):
        settings = Settings(gemini_api_key=api_key)
        service = GeminiService(api_key=api_key)

        assert settings.gemini_configured is service.is_configured
