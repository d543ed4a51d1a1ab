"""Transform stages of the rewrite pipeline.

Every stage is a pure ``(text, ctx) -> str`` function. The orchestrator runs
them in a fixed order; later stages rely on the canonical phrasing left by
earlier ones (for instance the tone rules only look for ``부탁드립니다`` because
the input normalizer already turned casual request forms into it).
"""

from __future__ import annotations

import re

from makeyourtext.models.presets import Register, ToneCategory
from makeyourtext.models.request import FormatOption, LengthClass
from makeyourtext.pipeline.bilingual import body_only, enforce_bilingual
from makeyourtext.pipeline.context import RewriteContext
from makeyourtext.pipeline.registers import connective, convert_text, sentence_register
from makeyourtext.pipeline.rules import Rule, absent, apply_rules, rule
from makeyourtext.utils.hangul import has_batchim, is_syllable
from makeyourtext.utils.sentences import (
    collapse_spaces,
    ensure_terminal,
    is_truncated,
    iter_sentences,
    map_sentences,
    split_sentences,
    split_tail,
)

_LABEL_RE = re.compile(r"^(\[[^\]]+\]\s*)")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,!?])")


def prefix_text(text: str, prefix: str) -> str:
    """Prepend ``prefix``, keeping a leading ``[label]`` first."""
    m = _LABEL_RE.match(text)
    if m:
        return m.group(1) + prefix + text[m.end():]
    return prefix + text


def append_sentence(text: str, sentence: str) -> str:
    text = ensure_terminal(text)
    return f"{text} {sentence}" if text else sentence


def ends_with_sentence(text: str) -> bool:
    """True when the last sentence closes with a recognised verb ending."""
    sentences = iter_sentences(text)
    return bool(sentences) and sentence_register(sentences[-1]) is not None


# --- 1. bilingual normalizer -------------------------------------------------


def normalize_bilingual(text: str, ctx: RewriteContext) -> str:
    return enforce_bilingual(text, ctx, detach=False)


# --- 2. input normalizer -----------------------------------------------------

_FILLER_RE = re.compile(r"(?<![가-힣])(?:그냥|걍|대충|아무튼|암튼|알아서|좀)(?![가-힣])\s*")
_LAUGH_RE = re.compile(r"[ㅋㅎㅠㅜ]{2,}")
_CASUAL_REQUEST_RE = re.compile(
    r"(?<=[가-힣])\s*(?:줘|주라|줄래|줄\s*수\s*있어|줄\s*수\s*있니)(?![가-힣])(\?)?"
)


@body_only
def normalize_input(text: str, ctx: RewriteContext) -> str:
    text = _LAUGH_RE.sub("", text)
    text = _FILLER_RE.sub("", text)
    request = " 주시기 바랍니다" if ctx.formal_locked else " 주세요"

    def canonical(m: re.Match) -> str:
        return request + ("." if m.group(1) else "")

    text = _CASUAL_REQUEST_RE.sub(canonical, text)
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    return collapse_spaces(text)


# --- 3. purpose template -----------------------------------------------------

PURPOSE_MARKERS: dict[str, re.Pattern[str]] = {
    "request": re.compile(r"부탁|요청|주세요|주시기\s*바랍니다|주시겠|주실\s*수"),
    "notice": re.compile(r"\[공지\]|공지|안내"),
    "apology": re.compile(r"죄송|사과|송구|미안"),
    "review": re.compile(r"후기|리뷰|감사|고맙|고마워"),
    "complaint": re.compile(r"항의|불만|시정|경고|이의\s*제기"),
}

# A purpose framing is skipped when a conflicting purpose's marker is present.
PURPOSE_CONFLICTS: dict[str, tuple[str, ...]] = {
    "request": (),
    "notice": ("complaint",),
    "apology": ("complaint",),
    "review": ("complaint",),
    "complaint": ("notice",),
}


def _frame_request(text: str) -> str:
    if ends_with_sentence(text):
        return append_sentence(text, "잘 부탁드립니다.")
    return f"{text.rstrip(' .')} 부탁드립니다."


def _frame_review(text: str) -> str:
    if ends_with_sentence(text):
        return append_sentence(text, "후기를 남깁니다.")
    return f"{text.rstrip(' .')}에 대한 후기입니다."


def _frame_complaint(text: str) -> str:
    if ends_with_sentence(text):
        return append_sentence(text, "이에 대해 항의드립니다.")
    return f"{text.rstrip(' .')}에 대해 항의드립니다."


_PURPOSE_FRAMES = {
    "request": _frame_request,
    "notice": lambda t: f"[공지] {t}",
    "apology": lambda t: f"죄송합니다. {t}",
    "review": _frame_review,
    "complaint": _frame_complaint,
}


def has_purpose_marker(text: str, purpose_id: str) -> bool:
    marker = PURPOSE_MARKERS.get(purpose_id)
    return bool(marker and marker.search(text))


@body_only
def apply_purpose_template(text: str, ctx: RewriteContext) -> str:
    purpose_id = ctx.purpose.id
    frame = _PURPOSE_FRAMES.get(purpose_id)
    if frame is None or not text.strip():
        return text
    if has_purpose_marker(text, purpose_id):
        return text
    if any(has_purpose_marker(text, other) for other in PURPOSE_CONFLICTS[purpose_id]):
        return text
    return frame(text.strip())


# --- 4. tone transform -------------------------------------------------------

_END = r"(?![가-힣])"

TONE_RULES: dict[str, tuple[Rule, ...]] = {
    "cultured": (
        rule(r"고마워요|고맙습니다|고마워" + _END, "감사합니다"),
        rule(r"미안해요|미안합니다|미안해" + _END, "죄송합니다"),
        rule(r"(?<![가-힣])(?<!잘 )부탁드립니다", "정중히 부탁드립니다", absent("정중히"), count=1),
    ),
    "friendly": (
        rule(r"부탁드립니다", "부탁해요"),
        rule(r"요청드립니다", "요청해요"),
        rule(r"하시기\s*바랍니다", "해 주세요"),
        rule(r"주시기\s*바랍니다", "주세요"),
        rule(r"감사합니다", "고마워요"),
        rule(r"죄송합니다", "미안해요"),
    ),
    "firm": (
        rule(r"가능하시면\s*", ""),
        rule(r"(?<!잘 )부탁드립니다", "요청드립니다"),
        rule(r"주시기\s*바랍니다", "주셔야 합니다"),
    ),
    "warm": (
        rule(r"부탁드립니다|요청드립니다", "부탁드려요"),
    ),
    "apology": (
        rule(r"(?<!양해 )(?<!잘 )부탁드립니다", "양해 부탁드립니다", absent("양해")),
    ),
    "humorous": (
        rule(r"부탁드립니다", "부탁드려요~"),
    ),
    "notice-formal": (),
    "warning": (),
    "protest": (),
}

_THANKS_RE = re.compile(r"감사|고맙|고마워")
_APOLOGY_RE = re.compile(r"죄송|사과|미안")

WARNING_DEADLINE_CLAUSE = "정해진 기한 내 시정해 주시기 바랍니다."
WARNING_CONSEQUENCE_CLAUSE = "시정이 이루어지지 않을 경우 다음 조치를 취하겠습니다."

_PROTEST_DEMAND_RULES = (
    rule(r"(?<!잘 )(?:부탁드립니다|요청드립니다)", "요구합니다"),
    rule(r"(?<!잘 )(?:요청|부탁)", "요구"),
)

ESCALATION_RE = re.compile(r"경고|항의|통보|요구")

# Strong tones under a request purpose fall back to a plain request.
_DOWNGRADE_RULES = (
    rule(r"(?:경고|항의|통보)(?:를\s*)?드립니다[.!]?\s*", ""),
    rule(r"요구합니다|요구드립니다", "요청드립니다"),
    rule(r"요구", "요청"),
    rule(r"경고", "주의"),
    rule(r"항의", "의견"),
    rule(r"통보", "안내"),
)

_FIRM_STRENGTH_RULES = (
    rule(r"가능하시면\s*", ""),
    rule(r"(?<!잘 )부탁드립니다", "요청드립니다"),
    rule(r"(?<!잘 )부탁드려요", "요청드려요"),
)

_SOFT_STRENGTH_RULES = (
    rule(r"요구합니다|요구드립니다", "요청드립니다"),
    rule(r"요구", "요청"),
)


def _escalate(text: str, ctx: RewriteContext) -> str:
    tone_id = ctx.tone.id
    if tone_id == "warning":
        if "경고" not in text:
            text = prefix_text(text, "경고드립니다. ")
        if ctx.strength > 60:
            text = append_sentence(text, WARNING_DEADLINE_CLAUSE)
        if ctx.strength > 75:
            text = append_sentence(text, WARNING_CONSEQUENCE_CLAUSE)
    elif tone_id == "protest":
        if "항의" not in text:
            text = prefix_text(text, "단호히 항의드립니다. ")
        if ctx.strength > 85:
            text = apply_rules(text, _PROTEST_DEMAND_RULES)
    return text


def _downgrade(text: str) -> str:
    text = collapse_spaces(apply_rules(text, _DOWNGRADE_RULES))
    if not text:
        return text
    if not has_purpose_marker(text, "request"):
        text = _frame_request(text)
    return text


@body_only
def apply_tone(text: str, ctx: RewriteContext) -> str:
    if not text.strip():
        return text
    tone = ctx.tone
    text = apply_rules(text, TONE_RULES.get(tone.id, ()))

    if tone.id == "warm" and not _THANKS_RE.search(text):
        text = append_sentence(text, "늘 감사해요.")
    elif tone.id == "apology" and not _APOLOGY_RE.search(text):
        text = prefix_text(text, "진심으로 사과드리며, ")
    elif tone.id == "notice-formal" and not has_purpose_marker(text, "notice"):
        text = prefix_text(text, "안내드립니다. ")

    if tone.category == ToneCategory.STRONG:
        if ctx.purpose.id == "request":
            text = _downgrade(text)
        else:
            text = _escalate(text, ctx)

    if ctx.strength > 70:
        text = apply_rules(text, _FIRM_STRENGTH_RULES)
    elif ctx.strength < 30:
        text = apply_rules(text, _SOFT_STRENGTH_RULES)
        if tone.category == ToneCategory.BASE and not _THANKS_RE.search(text):
            text = prefix_text(text, "감사드리며, ")
    return collapse_spaces(text)


# --- 5. format transform -----------------------------------------------------

_MESSAGE_CONTRACTIONS = (
    rule(r"하였습니다", "했습니다"),
    rule(r"되었습니다", "됐습니다"),
    rule(r"하였", "했"),
    rule(r"(?<=[가-힣])하여(?=\s)", "해"),
)


@body_only
def apply_format(text: str, ctx: RewriteContext) -> str:
    if ctx.format == FormatOption.EMAIL:
        return convert_text(text, Register.FORMAL)
    text = apply_rules(text, _MESSAGE_CONTRACTIONS)
    if not ctx.formal_locked:
        text = convert_text(text, Register.POLITE)
    return text


# --- 6. relationship transform ----------------------------------------------

ADDRESS_ALIASES: dict[str, re.Pattern[str]] = {
    "선생님": re.compile(r"선생님|쌤|교사"),
    "학부모님": re.compile(r"학부모|어머님|아버님|부모님"),
    "팀장님": re.compile(r"팀장|부장|과장|실장|상사"),
    "고객님": re.compile(r"고객"),
    "담당자님": re.compile(r"담당자|귀사"),
}

_REQUEST_VERB_RE = re.compile(r"(?<![가-힣])((?:(?:정중히|양해)\s+)?(?:부탁|요청))")


def _address_present(text: str, address: str) -> bool:
    if address in text:
        return True
    aliases = ADDRESS_ALIASES.get(address)
    return bool(aliases and aliases.search(text))


@body_only
def apply_relationship(text: str, ctx: RewriteContext) -> str:
    relationship = ctx.relationship
    if relationship is None or not relationship.address or not text.strip():
        return text
    address = relationship.address
    if _address_present(text, address):
        return text
    if _REQUEST_VERB_RE.search(text):
        return _REQUEST_VERB_RE.sub(rf"{address}께 \1", text, count=1)
    return prefix_text(text, f"{address}, ")


# --- 7. audience-level transform --------------------------------------------

_CHILD_VOCABULARY = (
    rule(r"협조", "도움"),
    rule(r"회신", "답장"),
    rule(r"문의", "질문"),
    rule(r"검토", "확인"),
    rule(r"참석", "참여"),
    rule(r"지참", "준비"),
    rule(r"양해", "이해"),
    rule(r"제출해", "내"),
    rule(r"제출하", "내"),
    rule(r"숙지해", "기억해"),
    rule(r"숙지하", "기억하"),
    rule(r"시정을\s*요구", "고쳐 달라고 요청"),
    rule(r"시정해", "고쳐"),
)

_SENIOR_RULES = (
    rule(r"[ㅋㅎㅠㅜ]{2,}|ㅇㅇ|ㅇㅋ|ㄱㄱ|ㄴㄴ", ""),
    rule(r"~+(?=\s|$)", "."),
    rule(r"~+", ""),
    rule(r"!{2,}", "!"),
    rule(r"(?<!\.)\.\.(?!\.)", "."),
)

_CHILD_AUDIENCES = frozenset({"elementary1", "elementary"})
_YOUNG_CHILD_MAX_SENTENCES = 3


def _cap_sentences(text: str, limit: int) -> str:
    lines = []
    for line in text.split("\n"):
        sentences = split_sentences(line)
        if sentences:
            lines.append(" ".join(sentences[:limit]))
    return "\n".join(lines)


@body_only
def apply_audience(text: str, ctx: RewriteContext) -> str:
    audience_id = ctx.audience.id
    if audience_id in _CHILD_AUDIENCES:
        text = apply_rules(text, _CHILD_VOCABULARY)
        if audience_id == "elementary1":
            text = _cap_sentences(text, _YOUNG_CHILD_MAX_SENTENCES)
    elif audience_id == "senior":
        text = apply_rules(text, _SENIOR_RULES)
    return collapse_spaces(text)


# --- 8. soft-request transform ----------------------------------------------

# Imperative endings and the softened request ending that replaces them.
# 세요/십시오/시오 also appear after an epenthetic 으 (읽으세요).
_IMPERATIVE_ENDINGS: tuple[tuple[str, str], ...] = (
    ("십시오", "주시겠습니까"),
    ("세요", "주시겠어요"),
    ("시오", "주시겠습니까"),
    ("아라", "줄래"),
    ("어라", "줄래"),
)
# Short variants also soften plain requests; ordered longest-first.
_SHORT_REQUEST_ENDINGS: tuple[tuple[str, str], ...] = (
    ("주시기 바랍니다", "주시겠습니까"),
    ("주세요", "주시겠어요"),
)
# Stems whose 세요 form is a greeting, a prohibition or a description.
# Stems ending in 주 (보내 주세요) are already requests.
_NON_DIRECTIVE_STEMS = frozenset({
    "마", "계", "드", "안녕하", "수고하", "어떠", "괜찮", "좋", "바쁘",
})
_TERMINAL_RE = re.compile(r"[.!~]+$")


def _imperative_stem(body: str, ending: str) -> str | None:
    stem = body[: -len(ending)]
    if ending in ("아라", "어라"):
        return stem or None
    if stem.endswith("으") and len(stem) > 1 and has_batchim(stem[-2]):
        stem = stem[:-1]
    return stem or None


def _soften_body(body: str, short: bool) -> str | None:
    if short:
        for ending, softened in _SHORT_REQUEST_ENDINGS:
            if body.endswith(ending):
                return body[: -len(ending)] + softened
    if body.endswith("해라"):
        return body[:-1] + " 줄래"
    for ending, softened in _IMPERATIVE_ENDINGS:
        if not body.endswith(ending):
            continue
        stem = _imperative_stem(body, ending)
        if not stem or not is_syllable(stem[-1]):
            return None
        word = stem.split()[-1]
        if word in _NON_DIRECTIVE_STEMS or word.endswith("주"):
            return None
        return f"{connective(stem)} {softened}"
    return None


def _soften_sentence(sentence: str, short: bool) -> str:
    body, tail = split_tail(sentence)
    if is_truncated(tail) or tail.rstrip().endswith("?"):
        return sentence
    softened = _soften_body(body, short)
    if softened is None:
        return sentence
    return softened + _TERMINAL_RE.sub("", tail.rstrip()) + "?"


@body_only
def soften_requests(text: str, ctx: RewriteContext) -> str:
    short = ctx.length == LengthClass.SHORT
    return map_sentences(text, lambda s: _soften_sentence(s, short))


# --- 10. language policy -----------------------------------------------------


def enforce_language_policy(text: str, ctx: RewriteContext) -> str:
    return enforce_bilingual(text, ctx)
