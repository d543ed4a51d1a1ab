"""Pydantic models for the static preset catalog."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ToneCategory(str, Enum):
    BASE = "base"
    STRONG = "strong"
    APOLOGY = "apology"


class Register(str, Enum):
    FORMAL = "formal"   # 합쇼체, locked for formal tones
    POLITE = "polite"   # 해요체


class _Preset(BaseModel):
    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    id: str
    label: str


class TonePreset(_Preset):
    category: ToneCategory
    default_strength: int = 50  # soft(0) <-> firm(100)
    formality: Register = Register.FORMAL

    @property
    def formal_locked(self) -> bool:
        return self.formality == Register.FORMAL


class AudienceLevel(_Preset):
    group: str = "성인"


class PurposeType(_Preset):
    pass


class Relationship(_Preset):
    address: str | None = None  # honorific used inline, e.g. "선생님"


class VoicePreset(_Preset):
    gender: str
    age: str
    style: str


class Template(BaseModel):
    """A saved combination of presets used by batch mode."""

    model_config = _Preset.model_config

    id: str
    name: str
    purpose_id: str
    audience_id: str
    format: str
    tone_id: str
    relationship_id: str | None = None
    tags: list[str] = []
    group: str = ""
