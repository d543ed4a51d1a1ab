"""Hangul syllable helpers used by the register and bilingual rules."""

from __future__ import annotations

import re

_BASE = 0xAC00
_LAST = 0xD7A3

# Medial vowel indices (jungseong)
JUNG_A = 0      # ㅏ
JUNG_AE = 1     # ㅐ
JUNG_EO = 4     # ㅓ
JUNG_YEO = 6    # ㅕ
JUNG_O = 8      # ㅗ
JUNG_WA = 9     # ㅘ
JUNG_WAE = 10   # ㅙ
JUNG_OE = 11    # ㅚ
JUNG_U = 13     # ㅜ
JUNG_WO = 14    # ㅝ
JUNG_EU = 18    # ㅡ
JUNG_I = 20     # ㅣ

# Final consonant indices (jongseong)
JONG_NONE = 0
JONG_L = 8      # ㄹ
JONG_B = 17     # ㅂ
JONG_SS = 20    # ㅆ

HANGUL_RE = re.compile(r"[가-힣]")
LATIN_RE = re.compile(r"[A-Za-z]")


def is_syllable(ch: str) -> bool:
    return len(ch) == 1 and _BASE <= ord(ch) <= _LAST


def decompose(ch: str) -> tuple[int, int, int]:
    """Split a syllable into (initial, medial, final) indices."""
    if not is_syllable(ch):
        raise ValueError(f"Not a Hangul syllable: {ch!r}")
    code = ord(ch) - _BASE
    return code // 588, (code % 588) // 28, code % 28


def compose(cho: int, jung: int, jong: int = JONG_NONE) -> str:
    return chr(_BASE + cho * 588 + jung * 28 + jong)


def has_batchim(ch: str) -> bool:
    """True when the syllable ends in a final consonant."""
    return is_syllable(ch) and decompose(ch)[2] != JONG_NONE


def polite_copula(preceding: str) -> str:
    """Return 이에요/예요 depending on the preceding syllable."""
    if preceding and has_batchim(preceding[-1]):
        return "이에요"
    return "예요"


def has_hangul(text: str) -> bool:
    return bool(HANGUL_RE.search(text))


def has_latin(text: str) -> bool:
    return bool(LATIN_RE.search(text))
