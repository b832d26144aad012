"""
MemoPad Backend — Google Gemini Summary Service
=================================================

What:  Summary provider backed by the Google Gemini text generation API.
How:   Embeds the memo in a fixed prompt, sends a single generate call with
       bounded sampling parameters, and returns the first candidate's text.
Who:   Module-level `gemini_service` is served to POST /api/summarize through
       the `get_summarizer` dependency.

Call Policy:
    One request per summary. No retry, no timeout override beyond the SDK
    default, no streaming, no caching of earlier summaries.

Failure Mapping:
    empty content          → ValidationError     (400, no API call)
    missing GEMINI_API_KEY → ConfigurationError  (500, no API call)
    no text in response    → LLMServiceError     (500)
    anything else raised   → LLMServiceError     (500, logged with traceback)
"""

import logging
import time
import uuid
from typing import Any, Optional

import google.generativeai as genai

from app.config import api_key_is_set, settings
from app.exceptions import ConfigurationError, LLMServiceError, ValidationError
from app.services.llm_base import SummaryProvider

logger = logging.getLogger(__name__)

MISSING_CONTENT_MESSAGE = "Memo content is required."
MISSING_KEY_MESSAGE = "The Gemini API key is not configured."
EMPTY_SUMMARY_MESSAGE = "Could not generate a summary."
SUMMARY_FAILED_MESSAGE = "An error occurred while generating the summary."


def build_summary_prompt(content: str) -> str:
    """Wrap memo text in the fixed summarization instructions."""
    return (
        "Summarize the following memo concisely and clearly. "
        "Cover the main content and the important points in 3-5 sentences.\n\n"
        "Memo:\n"
        f"{content}\n\n"
        "Summary:"
    )


def first_candidate_text(response: Any) -> Optional[str]:
    """
    Text of the first part of the first candidate, or None.

    The SDK's `response.text` raises when a candidate has no parts
    (e.g. blocked by safety filters), so the structure is walked directly.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None)
    if not parts:
        return None
    text = getattr(parts[0], "text", None)
    return text or None


class GeminiService(SummaryProvider):
    """
    Gemini implementation of SummaryProvider.

    The API key and model name default to the application settings and can
    be passed explicitly. The SDK model object is created on first use, so
    an instance can exist without a key; the key check happens per call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
    ):
        self.api_key = settings.gemini_api_key if api_key is None else api_key
        self.model_name = model_name or settings.gemini_model
        self.generation_config = genai.GenerationConfig(
            max_output_tokens=settings.summary_max_output_tokens,
            temperature=settings.summary_temperature,
            top_k=settings.summary_top_k,
            top_p=settings.summary_top_p,
        )
        self._model = None

        logger.info(
            "GeminiService initialized with model=%s (key %s)",
            self.model_name,
            "configured" if self.is_configured else "missing",
        )

    @property
    def is_configured(self) -> bool:
        return api_key_is_set(self.api_key)

    def _get_model(self):
        if self._model is None:
            # The SDK keeps the credential in module-level state
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def summarize(self, content: str) -> str:
        """
        Summarize memo text with Gemini.

        Flow:
            1. Reject empty content (no API call)
            2. Reject missing credential (no API call)
            3. Single generate_content_async call
            4. Return the trimmed text of the first candidate
        """
        if not content:
            raise ValidationError(message=MISSING_CONTENT_MESSAGE, field="content")

        if not self.is_configured:
            logger.error("Summary requested but GEMINI_API_KEY is not set")
            raise ConfigurationError(message=MISSING_KEY_MESSAGE)

        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        logger.info(
            "[%s] Requesting summary from %s for %d chars",
            request_id,
            self.model_name,
            len(content),
        )

        try:
            response = await self._get_model().generate_content_async(
                build_summary_prompt(content),
                generation_config=self.generation_config,
            )
            summary = first_candidate_text(response)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "[%s] Gemini summary failed after %.0fms: %s",
                request_id,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise LLMServiceError(
                message=SUMMARY_FAILED_MESSAGE,
                context={"request_id": request_id, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.time() - start_time) * 1000
        if not summary or not summary.strip():
            logger.warning(
                "[%s] Gemini returned no summary text after %.0fms",
                request_id,
                duration_ms,
            )
            raise LLMServiceError(
                message=EMPTY_SUMMARY_MESSAGE,
                context={"request_id": request_id},
            )

        summary = summary.strip()
        logger.info(
            "[%s] Gemini summary completed in %.0fms, %d chars",
            request_id,
            duration_ms,
            len(summary),
        )
        return summary

    async def health_check(self) -> bool:
        """
        Check if the Gemini API is reachable.

        Lists available models, which costs no tokens. Returns False when
        no key is configured.
        """
        if not self.is_configured:
            return False
        try:
            genai.configure(api_key=self.api_key)
            model_names = [m.name for m in genai.list_models()]
            target = f"models/{self.model_name}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True  # API is reachable even if model name is different
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


# ── Module Instance ───────────────────────────────────────────────────────
gemini_service = GeminiService()


def get_summarizer() -> SummaryProvider:
    """FastAPI dependency returning the active summary provider."""
    return gemini_service
