"""Length-class policy: short truncation, standard and long clause additions.

Every clause added here is its own sentence so that the context-integrity
pass can remove it whole when the original input lacked the matching cue.
"""

from __future__ import annotations

import re

from makeyourtext.models.request import LengthClass, ResultFormat
from makeyourtext.pipeline.bilingual import body_only, convert_foreign
from makeyourtext.pipeline.context import RewriteContext
from makeyourtext.pipeline.cues import extract_temporal_expression
from makeyourtext.pipeline.stages import append_sentence, prefix_text
from makeyourtext.utils.sentences import (
    BULLET,
    iter_sentences,
    truncate_words,
)

# Decorative words and framings that carry no content in a short variant.
_DECORATION_RE = re.compile(
    r"\[[^\]]+\]\s*|(?:정중히|진심으로|단호히|명확히|가볍게)\s+"
    r"|(?:감사|사과)드리며,\s*"
)
_FRAMING_SENTENCE_RE = re.compile(
    r"^(?:경고드립니다|항의드립니다|안내드립니다|죄송합니다|잘 부탁드립니다"
    r"|늘 감사해요|늘 감사합니다|후기를 남깁니다)[.!]?$"
)

CONTACT_CLAUSE = "추가 문의사항이 있으시면 연락 주시기 바랍니다."
NEXT_STEPS_CLAUSE = "이행되지 않을 경우 후속 조치를 진행하겠습니다."

BACKGROUND_FRAMES: dict[str, str] = {
    "request": "다음과 같이 요청드립니다.",
    "notice": "다음과 같이 안내드립니다.",
    "apology": "이번 일과 관련하여 말씀드립니다.",
    "review": "이용 경험을 공유드립니다.",
    "complaint": "다음 사항에 대해 말씀드립니다.",
}

_REPLY_RE = re.compile(r"회신")
_CONTACT_RE = re.compile(r"문의|연락")


def deadline_clause(expression: str) -> str:
    expression = convert_foreign(expression)
    if expression.endswith("까지"):
        return f"{expression} 회신 부탁드립니다."
    return f"기한({expression}) 내 회신 부탁드립니다."


def _shorten(text: str, budget: int) -> str:
    sentences = [
        s for s in (_DECORATION_RE.sub("", s).strip() for s in iter_sentences(text)) if s
    ]
    if not sentences:
        return ""
    content = [s for s in sentences if not _FRAMING_SENTENCE_RE.match(s)]
    first = (content or sentences)[0]
    return truncate_words(first, budget)


def _with_deadline(text: str, ctx: RewriteContext) -> str:
    if not (ctx.options.auto_include_details and ctx.original_has_temporal):
        return text
    if _REPLY_RE.search(text):
        return text
    expression = extract_temporal_expression(ctx.original)
    if expression:
        text = append_sentence(text, deadline_clause(expression))
    return text


def _long(text: str, ctx: RewriteContext) -> str:
    if ctx.options.auto_include_details:
        frame = BACKGROUND_FRAMES.get(ctx.purpose.id)
        if frame and frame not in text:
            text = prefix_text(text, frame + " ")
    text = _with_deadline(text, ctx)
    if ctx.original_has_consequence and NEXT_STEPS_CLAUSE not in text:
        text = append_sentence(text, NEXT_STEPS_CLAUSE)
    if not _CONTACT_RE.search(text):
        text = append_sentence(text, CONTACT_CLAUSE)
    return text


def to_bullets(text: str) -> str:
    return "\n".join(BULLET + s for s in iter_sentences(text))


@body_only
def apply_length_policy(text: str, ctx: RewriteContext) -> str:
    if ctx.length == LengthClass.SHORT:
        return _shorten(text, ctx.short_budget)
    if ctx.length == LengthClass.LONG:
        text = _long(text, ctx)
    else:
        text = _with_deadline(text, ctx)
    if ctx.options.format == ResultFormat.BULLET:
        text = to_bullets(text)
    return text
