"""Usage logging data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class RewriteLog(BaseModel):
    """Single usage log entry for one rewrite or batch call."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: str = "anonymous"
    timestamp: datetime = Field(default_factory=datetime.now)
    mode: str = "rewrite"  # "rewrite" | "batch"
    tone_id: str | None = None
    purpose_id: str | None = None
    audience_id: str | None = None
    relationship_id: str | None = None
    plan_tier: str = "free"
    variant_count: int = 0
    blocked: bool = False
    input_chars: int = 0
    elapsed_seconds: float = 0.0
    language: str = "ko"
    success: bool = True
    error_message: str | None = None
