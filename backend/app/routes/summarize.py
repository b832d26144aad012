"""
MemoPad Backend — Summarize Route Handler
===========================================

What:  POST /api/summarize, a proxy from memo text to the AI summary provider.
How:   Validates nothing itself; the provider raises ValidationError,
       ConfigurationError or LLMServiceError and the global handlers in
       main.py turn them into `{"error": ...}` responses.
Who:   Called by the frontend's "Summarize" button on a memo.

Responses:
    200 {"summary": str, "success": true}
    400 {"error": str}   content missing or empty
    429 {"error": str}   per-IP rate limit (middleware)
    500 {"error": str}   key missing, empty generation, or any failure
"""

from fastapi import APIRouter, Depends

from app.schemas.memo import ErrorResponse, SummarizeRequest, SummarizeResponse
from app.services.gemini_service import get_summarizer
from app.services.llm_base import SummaryProvider

router = APIRouter(prefix="/api", tags=["Summarize"])


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={
        200: {"description": "Summary generated", "model": SummarizeResponse},
        400: {"description": "Memo content missing", "model": ErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
        500: {"description": "Summary could not be generated", "model": ErrorResponse},
    },
    summary="Summarize memo text",
    description=(
        "Sends memo text to Google Gemini and returns a 3-5 sentence summary "
        "covering the key points."
    ),
)
async def summarize_memo(
    payload: SummarizeRequest,
    summarizer: SummaryProvider = Depends(get_summarizer),
) -> SummarizeResponse:
    summary = await summarizer.summarize(payload.content or "")
    return SummarizeResponse(summary=summary, success=True)
