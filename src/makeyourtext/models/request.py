"""Pydantic models for rewrite requests."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class LengthClass(str, Enum):
    SHORT = "short"
    STANDARD = "standard"
    LONG = "long"


LENGTH_ORDER: tuple[LengthClass, ...] = (
    LengthClass.SHORT,
    LengthClass.STANDARD,
    LengthClass.LONG,
)


class FormatOption(str, Enum):
    MESSAGE = "message"  # 문자/카톡
    EMAIL = "email"      # 이메일/공문


class BilingualMode(str, Enum):
    OFF = "OFF"
    PAREN = "PAREN"          # 한국어 (English)
    TWOLINES = "TWOLINES"    # 한국어\nEnglish


class PlanTier(str, Enum):
    FREE = "free"
    PRO = "pro"
    BUSINESS = "business"


class ResultFormat(str, Enum):
    BULLET = "bullet"
    PARAGRAPH = "paragraph"


class ResultOptions(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    format: ResultFormat = ResultFormat.PARAGRAPH
    ambiguity_warning: bool = False
    auto_include_details: bool = False


class RewriteRequest(BaseModel):
    """A single rewrite call as received from the caller."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    text: str
    tone_id: str
    purpose_id: str
    audience_id: str
    relationship_id: str | None = None
    strength: int | None = Field(default=None, ge=0, le=100)  # None -> tone default
    length: LengthClass = LengthClass.STANDARD
    format: FormatOption = FormatOption.MESSAGE
    language: str = "ko"
    bilingual_mode: BilingualMode = BilingualMode.OFF
    result_options: ResultOptions = Field(default_factory=ResultOptions)
    plan_tier: PlanTier = PlanTier.FREE

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("text is required")
        return value

    @field_validator("relationship_id")
    @classmethod
    def _blank_relationship_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value
