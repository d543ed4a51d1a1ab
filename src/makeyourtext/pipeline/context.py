"""Per-run context shared by every stage and repair pass."""

from __future__ import annotations

from dataclasses import dataclass

from makeyourtext.models.presets import (
    AudienceLevel,
    PurposeType,
    Register,
    Relationship,
    TonePreset,
)
from makeyourtext.models.request import (
    BilingualMode,
    FormatOption,
    LengthClass,
    ResultOptions,
    RewriteRequest,
)
from makeyourtext.pipeline.bilingual import convert_foreign
from makeyourtext.pipeline.cues import has_consequence_cue, has_temporal_cue


@dataclass(frozen=True)
class RewriteContext:
    """Everything a stage may read; derived once per length class."""

    original: str
    tone: TonePreset
    purpose: PurposeType
    audience: AudienceLevel
    relationship: Relationship | None
    strength: int
    length: LengthClass
    format: FormatOption
    language: str
    bilingual_mode: BilingualMode
    options: ResultOptions
    short_budget: int = 50

    @classmethod
    def build(
        cls,
        request: RewriteRequest,
        tone: TonePreset,
        purpose: PurposeType,
        audience: AudienceLevel,
        relationship: Relationship | None,
        length: LengthClass,
        short_budget: int = 50,
    ) -> "RewriteContext":
        strength = request.strength if request.strength is not None else tone.default_strength
        return cls(
            original=request.text.strip(),
            tone=tone,
            purpose=purpose,
            audience=audience,
            relationship=relationship,
            strength=strength,
            length=length,
            format=request.format,
            language=request.language,
            bilingual_mode=request.bilingual_mode,
            options=request.result_options,
            short_budget=short_budget,
        )

    @property
    def register(self) -> Register:
        return self.tone.formality

    @property
    def formal_locked(self) -> bool:
        return self.tone.formal_locked

    @property
    def bilingual_active(self) -> bool:
        return self.language == "ko"

    @property
    def cue_sources(self) -> tuple[str, ...]:
        """The input as typed and with its foreign spans rendered in Korean.

        The bilingual normalizer runs first, so a cue the user wrote in
        English ("3pm", "next week") reaches later stages in Korean.
        """
        converted = convert_foreign(self.original)
        if converted == self.original:
            return (self.original,)
        return (self.original, converted)

    @property
    def original_has_temporal(self) -> bool:
        return any(has_temporal_cue(source) for source in self.cue_sources)

    @property
    def original_has_consequence(self) -> bool:
        return any(has_consequence_cue(source) for source in self.cue_sources)
