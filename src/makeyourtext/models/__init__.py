"""Data models for the rewrite pipeline."""

from makeyourtext.models.presets import (
    AudienceLevel,
    PurposeType,
    Register,
    Relationship,
    Template,
    ToneCategory,
    TonePreset,
    VoicePreset,
)
from makeyourtext.models.request import (
    LENGTH_ORDER,
    BilingualMode,
    FormatOption,
    LengthClass,
    PlanTier,
    ResultFormat,
    ResultOptions,
    RewriteRequest,
)
from makeyourtext.models.result import (
    BatchItemResult,
    RewriteResult,
    RewriteVariant,
    SafetyCheck,
)

__all__ = [
    "LENGTH_ORDER",
    "AudienceLevel",
    "BatchItemResult",
    "BilingualMode",
    "FormatOption",
    "LengthClass",
    "PlanTier",
    "PurposeType",
    "Register",
    "Relationship",
    "ResultFormat",
    "ResultOptions",
    "RewriteRequest",
    "RewriteResult",
    "RewriteVariant",
    "SafetyCheck",
    "Template",
    "ToneCategory",
    "TonePreset",
    "VoicePreset",
]
