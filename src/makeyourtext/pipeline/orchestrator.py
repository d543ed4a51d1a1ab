"""Variant assembler - safety gate, preset resolution, stages and repairs."""

from __future__ import annotations

import logging
import re
from typing import Callable, NamedTuple

from makeyourtext.config import PipelineConfig
from makeyourtext.models.presets import (
    AudienceLevel,
    PurposeType,
    Relationship,
    TonePreset,
)
from makeyourtext.models.request import LengthClass, RewriteRequest
from makeyourtext.models.result import RewriteResult, RewriteVariant
from makeyourtext.pipeline.ambiguity import ambiguity_warnings
from makeyourtext.pipeline.bilingual import detach_gloss
from makeyourtext.pipeline.context import RewriteContext
from makeyourtext.pipeline.length_policy import apply_length_policy
from makeyourtext.pipeline.repairs import (
    enforce_context_integrity,
    enforce_formality,
    repair_particle_fragments,
    unify_style,
    validate_bilingual_mode,
)
from makeyourtext.pipeline.stages import (
    apply_audience,
    apply_format,
    apply_purpose_template,
    apply_relationship,
    apply_tone,
    enforce_language_policy,
    normalize_bilingual,
    normalize_input,
    soften_requests,
)
from makeyourtext.plans import select_length_classes
from makeyourtext.presets.catalog import PresetCatalog, load_catalog
from makeyourtext.safety.gate import SafetyGate
from makeyourtext.utils.sentences import truncate_words

logger = logging.getLogger(__name__)

Stage = Callable[[str, RewriteContext], str]

TRANSFORM_STAGES: tuple[Stage, ...] = (
    normalize_bilingual,
    normalize_input,
    apply_purpose_template,
    apply_tone,
    apply_format,
    apply_relationship,
    apply_audience,
    soften_requests,
    apply_length_policy,
    enforce_language_policy,
)

REPAIR_PASSES: tuple[Stage, ...] = (
    unify_style,
    enforce_context_integrity,
    enforce_formality,
    repair_particle_fragments,
    validate_bilingual_mode,
)

_FOREIGN_PAREN_RE = re.compile(r"\s*\([^()]*[A-Za-z][^()]*\)")


class ResolvedPresets(NamedTuple):
    tone: TonePreset
    purpose: PurposeType
    audience: AudienceLevel
    relationship: Relationship | None


def run_stages(text: str, ctx: RewriteContext) -> str:
    for stage in TRANSFORM_STAGES:
        text = stage(text, ctx)
    return text


def run_repairs(text: str, ctx: RewriteContext) -> str:
    for repair in REPAIR_PASSES:
        repaired = repair(text, ctx)
        if repaired != text:
            logger.debug(
                "%s changed %s variant: %r -> %r",
                repair.__name__, ctx.length.value, text, repaired,
            )
        text = repaired
    return text


def guard_short_budget(text: str, budget: int) -> str:
    """Bring a repaired short variant back under ``budget`` characters.

    Foreign glosses go first; if the text is still too long it is cut on a
    word boundary.
    """
    if len(text) <= budget:
        return text
    body, _ = detach_gloss(text)
    body = _FOREIGN_PAREN_RE.sub("", body).strip()
    if len(body) <= budget:
        return body
    return truncate_words(" ".join(body.split()), budget)


class RewriteOrchestrator:
    """Runs the safety gate, preset resolution and one pipeline per length."""

    def __init__(
        self,
        catalog: PresetCatalog | None = None,
        *,
        config: PipelineConfig | None = None,
        safety_gate: SafetyGate | None = None,
    ):
        self.catalog = catalog or load_catalog()
        self.config = config or PipelineConfig()
        self.safety_gate = safety_gate or SafetyGate(self.catalog.strong_tone_ids)

    def resolve(self, request: RewriteRequest) -> ResolvedPresets | None:
        """Look up the request's preset ids; None when a required id is unknown."""
        tone = self.catalog.tone(request.tone_id)
        purpose = self.catalog.purpose(request.purpose_id)
        audience = self.catalog.audience(request.audience_id)
        if tone is None or purpose is None or audience is None:
            logger.info(
                "Unresolved preset (tone=%s, purpose=%s, audience=%s); returning no variants",
                request.tone_id if tone is None else "ok",
                request.purpose_id if purpose is None else "ok",
                request.audience_id if audience is None else "ok",
            )
            return None
        relationship = self.catalog.relationship(request.relationship_id)
        if request.relationship_id and relationship is None:
            logger.info("Unknown relationship %r ignored", request.relationship_id)
        return ResolvedPresets(tone, purpose, audience, relationship)

    def context_for(
        self,
        request: RewriteRequest,
        presets: ResolvedPresets,
        length: LengthClass,
    ) -> RewriteContext:
        return RewriteContext.build(
            request,
            tone=presets.tone,
            purpose=presets.purpose,
            audience=presets.audience,
            relationship=presets.relationship,
            length=length,
            short_budget=self.config.short_char_budget,
        )

    def generate(
        self,
        request: RewriteRequest,
        presets: ResolvedPresets,
        length: LengthClass,
    ) -> str:
        """Produce one variant from the original text."""
        ctx = self.context_for(request, presets, length)
        text = run_repairs(run_stages(ctx.original, ctx), ctx)
        if length == LengthClass.SHORT:
            text = guard_short_budget(text, ctx.short_budget)
        return text

    def rewrite(self, request: RewriteRequest) -> RewriteResult:
        safety = self.safety_gate.check(request.text, request.tone_id)
        if safety.blocked:
            return RewriteResult(safety=safety)

        presets = self.resolve(request)
        if presets is None:
            return RewriteResult()

        lengths = select_length_classes(
            request.length,
            request.plan_tier,
            bypass=self.config.limits_bypassed,
        )
        variants = [
            RewriteVariant(length_class=length, text=self.generate(request, presets, length))
            for length in lengths
        ]
        warnings = (
            ambiguity_warnings(request.text)
            if request.result_options.ambiguity_warning
            else []
        )
        return RewriteResult(variants=variants, warnings=warnings)
