"""Sentence-final register detection and conversion.

Korean requests close with one of three ending families:

* formal (합쇼체): ``-습니다``, ``-ㅂ니다``, ``-습니까``, ``-십시오``
* polite (해요체): ``-해요``, ``-주세요``, ``-드려요`` ...
* plain (반말): ``-해줘``, ``-할게``, ``-고마워`` ...

Polite and plain endings are both treated as *informal*. Detection only
recognises endings the converters below can rewrite, so every classified
sentence can be moved to the other register.
"""

from __future__ import annotations

import re

from makeyourtext.models.presets import Register
from makeyourtext.utils import hangul
from makeyourtext.utils.sentences import (
    is_truncated,
    iter_sentences,
    map_sentences,
    split_tail,
)

FORMAL = "formal"
POLITE = "polite"
PLAIN = "plain"

_FORMAL_END_RE = re.compile(r"(니다|니까|십시오)$")
# batchim stem + 아요/어요/네요 -> stem + 습니다 (좋아요, 있어요, 같네요)
_BATCHIM_POLITE_RE = re.compile(r"([가-힣])(?:아요|어요|네요)$")

# Ordered longest-first; the first suffix that matches wins.
POLITE_TO_FORMAL: tuple[tuple[str, str], ...] = (
    ("주실 수 있을까요", "주실 수 있겠습니까"),
    ("실 수 있을까요", "실 수 있겠습니까"),
    ("있을까요", "있겠습니까"),
    ("실까요", "시겠습니까"),
    ("될까요", "되겠습니까"),
    ("할까요", "하겠습니까"),
    ("시겠어요", "시겠습니까"),
    ("드릴게요", "드리겠습니다"),
    ("할게요", "하겠습니다"),
    ("겠어요", "겠습니다"),
    ("주세요", "주시기 바랍니다"),
    ("드려요", "드립니다"),
    ("바라요", "바랍니다"),
    ("한가요", "합니까"),
    ("하나요", "합니까"),
    ("되나요", "됩니까"),
    ("있나요", "있습니까"),
    ("없나요", "없습니까"),
    ("인가요", "입니까"),
    ("하네요", "합니다"),
    ("해요", "합니다"),
    ("돼요", "됩니다"),
    ("세요", "십시오"),
    ("이에요", "입니다"),
    ("예요", "입니다"),
)

PLAIN_TO_FORMAL: tuple[tuple[str, str], ...] = (
    ("해 줄래", "해 주시겠습니까"),
    ("해줄래", "해 주시겠습니까"),
    ("줄래", "주시겠습니까"),
    ("해 줘", "해 주시기 바랍니다"),
    ("해줘", "해 주시기 바랍니다"),
    ("줘", "주시기 바랍니다"),
    ("알려줄게", "알려 드리겠습니다"),
    ("줄게", "드리겠습니다"),
    ("할게", "하겠습니다"),
    ("부탁해", "부탁드립니다"),
    ("미안해", "죄송합니다"),
    ("고마워", "감사합니다"),
    ("거야", "것입니다"),
    ("이야", "입니다"),
    ("있어", "있습니다"),
    ("없어", "없습니다"),
    ("돼", "됩니다"),
    ("해", "합니다"),
)

FORMAL_TO_POLITE: tuple[tuple[str, str], ...] = (
    ("주시기 바랍니다", "주세요"),
    ("하시기 바랍니다", "하세요"),
    ("바랍니다", "바라요"),
    ("시겠습니까", "시겠어요"),
    ("드리겠습니다", "드릴게요"),
    ("하겠습니다", "할게요"),
    ("겠습니다", "겠어요"),
    ("아닙니다", "아니에요"),
    ("십니다", "세요"),
    ("십시오", "세요"),
    ("합니다", "해요"),
    ("합니까", "하나요"),
    ("입니까", "인가요"),
)

# Vowel contraction used when dropping the ㅂ of -ㅂ니다 (드립 -> 드려요).
_CONTRACT = {
    hangul.JUNG_O: hangul.JUNG_WA,
    hangul.JUNG_U: hangul.JUNG_WO,
    hangul.JUNG_EU: hangul.JUNG_EO,
    hangul.JUNG_I: hangul.JUNG_YEO,
    hangul.JUNG_OE: hangul.JUNG_WAE,
}


# 르 stems that only drop ㅡ (따르다 -> 따라), unlike 모르다 -> 몰라.
_EU_DROP_REU = frozenset({"따", "치"})


def _bright(jung: int) -> bool:
    return jung in (hangul.JUNG_A, hangul.JUNG_O)


def connective(stem: str) -> str:
    """Verb stem plus -아/어, the form that takes 주다 (보내 -> 보내, 읽 -> 읽어).

    Covers 하다, vowel contraction and the 르 irregular. Other irregular
    stems are conjugated as if regular.
    """
    last = stem[-1]
    if last == "하":
        return stem[:-1] + "해"
    cho, jung, jong = hangul.decompose(last)
    if jong != hangul.JONG_NONE:
        return stem + ("아" if _bright(jung) else "어")
    prev = stem[-2] if len(stem) > 1 and hangul.is_syllable(stem[-2]) else ""
    if jung == hangul.JUNG_EU and prev:
        pcho, pjung, pjong = hangul.decompose(prev)
        if last == "르" and pjong == hangul.JONG_NONE and prev not in _EU_DROP_REU:
            ending = "라" if _bright(pjung) else "러"
            return stem[:-2] + hangul.compose(pcho, pjung, hangul.JONG_L) + ending
        jung = hangul.JUNG_A if _bright(pjung) else hangul.JUNG_EO
        return stem[:-1] + hangul.compose(cho, jung)
    if jung in _CONTRACT:
        return stem[:-1] + hangul.compose(cho, _CONTRACT[jung])
    return stem


def classify(body: str) -> str | None:
    """Return FORMAL, POLITE, PLAIN or None for a sentence body."""
    body = body.rstrip()
    if not body:
        return None
    if _FORMAL_END_RE.search(body):
        return FORMAL
    if any(body.endswith(k) for k, _ in POLITE_TO_FORMAL):
        return POLITE
    m = _BATCHIM_POLITE_RE.search(body)
    if m and hangul.has_batchim(m.group(1)):
        return POLITE
    if any(body.endswith(k) for k, _ in PLAIN_TO_FORMAL):
        return PLAIN
    return None


def sentence_register(sentence: str) -> str | None:
    body, tail = split_tail(sentence)
    if is_truncated(tail):
        return None
    return classify(body)


def _replace_suffix(body: str, table: tuple[tuple[str, str], ...]) -> str | None:
    for suffix, replacement in table:
        if body.endswith(suffix):
            return body[: -len(suffix)] + replacement
    return None


def to_formal_body(body: str) -> str:
    converted = _replace_suffix(body, POLITE_TO_FORMAL)
    if converted is not None:
        return converted
    m = _BATCHIM_POLITE_RE.search(body)
    if m and hangul.has_batchim(m.group(1)):
        return body[: m.end(1)] + "습니다"
    converted = _replace_suffix(body, PLAIN_TO_FORMAL)
    return converted if converted is not None else body


def to_polite_body(body: str) -> str:
    if body.endswith("입니다"):
        stem = body[: -len("입니다")]
        return stem + hangul.polite_copula(stem)
    converted = _replace_suffix(body, FORMAL_TO_POLITE)
    if converted is not None:
        return converted
    for ending, polite in (("습니다", None), ("습니까", "나요")):
        if body.endswith(ending) and len(body) > len(ending):
            stem = body[: -len(ending)]
            if not hangul.is_syllable(stem[-1]):
                return body
            if polite is None:
                _, jung, jong = hangul.decompose(stem[-1])
                bright = jung in (hangul.JUNG_A, hangul.JUNG_O) and jong != hangul.JONG_SS
                polite = "아요" if bright else "어요"
            return stem + polite
    for ending, polite in (("니다", "요"), ("니까", "나요")):
        if body.endswith(ending) and len(body) > len(ending):
            stem = body[: -len(ending)]
            last = stem[-1]
            if not hangul.is_syllable(last):
                break
            cho, jung, jong = hangul.decompose(last)
            if jong != hangul.JONG_B:
                break
            if polite == "요":
                jung = _CONTRACT.get(jung, jung)
            return stem[:-1] + hangul.compose(cho, jung) + polite
    return body


def convert_sentence(sentence: str, target: Register | str) -> str:
    """Rewrite one sentence's ending into ``target`` (formal or polite)."""
    body, tail = split_tail(sentence)
    if is_truncated(tail):
        return sentence
    current = classify(body)
    if current is None:
        return sentence
    if target == Register.FORMAL and current in (POLITE, PLAIN):
        return to_formal_body(body) + tail
    if target == Register.POLITE and current == FORMAL:
        return to_polite_body(body) + tail
    return sentence


def convert_text(text: str, target: Register | str) -> str:
    return map_sentences(text, lambda s: convert_sentence(s, target))


def registers_in(text: str) -> set[str]:
    """Set of {"formal", "informal"} markers present in ``text``."""
    found: set[str] = set()
    for sentence in iter_sentences(text):
        reg = sentence_register(sentence)
        if reg == FORMAL:
            found.add("formal")
        elif reg in (POLITE, PLAIN):
            found.add("informal")
    return found


def is_mixed(text: str) -> bool:
    return registers_in(text) == {"formal", "informal"}
