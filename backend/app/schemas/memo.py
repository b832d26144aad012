"""
MemoPad Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate the OpenAPI documentation.

Naming:
    Python attributes are snake_case. The wire format uses camelCase for the
    two timestamp fields (`createdAt`, `updatedAt`) through serialization
    aliases; FastAPI serializes response models by alias.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Entity
# ══════════════════════════════════════════════════════════════════════════


class Memo(BaseModel):
    """
    A titled, categorized, tagged note.

    Built from a `MemoRow` by `app.services.memo_repository.to_memo`.
    """
    id: str = Field(description="Opaque memo identifier")
    title: str = Field(description="Short memo title")
    content: str = Field(description="Free-form memo text (may contain Markdown)")
    category: str = Field(description="Free-text category label")
    tags: List[str] = Field(description="Ordered tag list")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(alias="updatedAt", description="Last update time (UTC ISO 8601)")

    model_config = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class MemoForm(BaseModel):
    """
    Payload for creating a memo or fully overwriting an existing one.

    Only field types are checked. Presence of text and length limits are
    left to the database.
    """
    title: str = Field(description="Short memo title")
    content: str = Field(description="Memo body text")
    category: str = Field(description="Free-text category label")
    tags: List[str] = Field(default_factory=list, description="Ordered tag list")


class SummarizeRequest(BaseModel):
    """
    Body of POST /api/summarize.

    `content` is optional at the schema level so a missing value reaches
    the summarizer and is reported as a 400, not FastAPI's 422.
    """
    content: Optional[str] = Field(default=None, description="Memo text to summarize")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SummarizeResponse(BaseModel):
    summary: str = Field(description="Generated 3-5 sentence summary")
    success: bool = Field(default=True)


class MemoCountResponse(BaseModel):
    count: int = Field(description="Number of stored memos (0 if the count failed)")


class SeedResponse(BaseModel):
    seeded: bool = Field(description="True when sample memos were inserted")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "Memo content is required.",
            "code": "validation_error",
            "request_id": "550e8400"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: Optional[str] = Field(default=None, description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    gemini: str = Field(description="Gemini API status: available, unavailable, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
