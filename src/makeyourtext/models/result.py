"""Pydantic models for rewrite output."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from makeyourtext.models.request import LengthClass

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class RewriteVariant(BaseModel):
    model_config = {**_CAMEL, "frozen": True}

    length_class: LengthClass
    text: str


class SafetyCheck(BaseModel):
    model_config = _CAMEL

    blocked: bool = False
    reason: str | None = None
    suggested_alternative: str | None = None


class RewriteResult(BaseModel):
    model_config = _CAMEL

    variants: list[RewriteVariant] = Field(default_factory=list)
    safety: SafetyCheck = Field(default_factory=SafetyCheck)
    warnings: list[str] = Field(default_factory=list)  # ambiguity warnings

    @model_validator(mode="after")
    def _blocked_has_no_variants(self) -> "RewriteResult":
        if self.safety.blocked and self.variants:
            raise ValueError("a blocked result cannot carry variants")
        return self

    def variant(self, length_class: LengthClass | str) -> RewriteVariant | None:
        for v in self.variants:
            if v.length_class == length_class:
                return v
        return None


class BatchItemResult(BaseModel):
    """Outcome of one template in batch mode; exactly one of result/error is set."""

    model_config = _CAMEL

    template_id: str
    result: RewriteResult | None = None
    error: str | None = None
