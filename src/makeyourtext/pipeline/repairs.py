"""Repair passes run after the transform stages.

Each pass re-scans the candidate for one defect class and rewrites it in
place. Passes never add factual content; the context-integrity pass is the
single place where deadline and consequence sentences are removed.
"""

from __future__ import annotations

import logging
import re

from makeyourtext.models.presets import Register
from makeyourtext.models.request import BilingualMode, LengthClass
from makeyourtext.pipeline.bilingual import (
    body_only,
    enforce_bilingual,
    missing_glosses,
)
from makeyourtext.pipeline.context import RewriteContext
from makeyourtext.pipeline.cues import CONSEQUENCE_CUE_RE, TEMPORAL_CUE_RE
from makeyourtext.pipeline.registers import convert_text, is_mixed
from makeyourtext.utils.sentences import (
    collapse_spaces,
    map_sentences,
    strip_bullet,
    truncate_words,
)

logger = logging.getLogger(__name__)


# --- 1. style consistency ---------------------------------------------------


@body_only
def unify_style(text: str, ctx: RewriteContext) -> str:
    if not is_mixed(text):
        return text
    return convert_text(text, ctx.register)


# --- 2. context integrity ---------------------------------------------------


def _asserts_new_cue(pattern: re.Pattern, sentence: str, sources: tuple[str, ...]) -> bool:
    """True when ``sentence`` carries a cue that none of ``sources`` contains."""
    lowered = [source.lower() for source in sources]
    return any(
        not any(m.group(0).lower() in source for source in lowered)
        for m in pattern.finditer(sentence)
    )


@body_only
def enforce_context_integrity(text: str, ctx: RewriteContext) -> str:
    drop_temporal = not ctx.original_has_temporal
    drop_consequence = not ctx.original_has_consequence
    if not (drop_temporal or drop_consequence):
        return text
    sources = ctx.cue_sources

    def keep(sentence: str) -> str:
        if drop_temporal and _asserts_new_cue(TEMPORAL_CUE_RE, sentence, sources):
            return ""
        if drop_consequence and _asserts_new_cue(CONSEQUENCE_CUE_RE, sentence, sources):
            return ""
        return sentence

    return map_sentences(text, keep)


# --- 3. formality consistency -----------------------------------------------


@body_only
def enforce_formality(text: str, ctx: RewriteContext) -> str:
    if not ctx.formal_locked:
        return text
    return convert_text(text, Register.FORMAL)


# --- 4. particle fragments --------------------------------------------------

_PARTICLES = r"(?:을|를|은|는|이|가|에|의|도|와|과|로|으로|에게|에서|께서|한테|까지|부터|만)"
_PARTICLE_ONLY_RE = re.compile(rf"^[\s.,!?~…•]*(?:{_PARTICLES}(?=[\s.,!?~…]|$)[\s.,!?~…]*)*$")
# Standalone particle token at the start of a sentence. 이/가 are left out
# because they double as the determiner "이" and the verb "가".
_LEADING_PARTICLE_RE = re.compile(
    r"^(?:[,.]\s*)*(?:을|를|은|는|에게|에서|께서|으로|와|과)\s+"
)
_SEED_CHARS = 20

FALLBACK_TEMPLATE = "'{seed}' 관련하여 아래 내용을 확인 부탁드립니다."


def fallback_text(original: str, register: Register) -> str:
    first_line = next((line for line in original.split("\n") if line.strip()), "")
    seed = truncate_words(collapse_spaces(first_line), _SEED_CHARS)
    text = FALLBACK_TEMPLATE.format(seed=seed)
    if register == Register.POLITE:
        text = convert_text(text, Register.POLITE)
    return text


def _is_fragment(text: str) -> bool:
    stripped = "\n".join(strip_bullet(line) for line in text.split("\n"))
    return bool(_PARTICLE_ONLY_RE.match(stripped))


def _trim_leading_particle(sentence: str) -> str:
    return _LEADING_PARTICLE_RE.sub("", sentence)


@body_only
def repair_particle_fragments(text: str, ctx: RewriteContext) -> str:
    if _is_fragment(text):
        if ctx.original.strip():
            logger.debug("Candidate degenerated to %r; using fallback framing", text)
            return fallback_text(ctx.original, ctx.register)
        return ""
    return map_sentences(text, _trim_leading_particle)


# --- 5. bilingual mode ------------------------------------------------------


def validate_bilingual_mode(text: str, ctx: RewriteContext) -> str:
    if not ctx.bilingual_active:
        return text
    text = enforce_bilingual(text, ctx)
    if ctx.bilingual_mode == BilingualMode.OFF and ctx.length != LengthClass.SHORT:
        missing = missing_glosses(text, ctx.original)
        if missing:
            text = f"{text.rstrip()} ({', '.join(missing)})"
    return text
