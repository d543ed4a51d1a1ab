"""Text clean-up before handing a variant to a speech synthesizer."""

from __future__ import annotations

import re

from makeyourtext.models.request import BilingualMode

_URL_RE = re.compile(r"https?://[^\s]+", re.IGNORECASE)
_DOMAIN_RE = re.compile(r"https?://([^/\s]+)", re.IGNORECASE)
_PORT_RE = re.compile(r"(?<!\d)(404|500|3000|3333|5000|8000|8080)(?!\d)")
_LONG_NUMBER_RE = re.compile(r"(?<!\d)\d{3,}(?!\d)")
_BRACKETS_RE = re.compile(r"[()\[\]{}]")
_SYMBOLS_RE = re.compile(r"[<>@#$%^&*+=|\\`~•]")
_LATIN_RE = re.compile(r"[A-Za-z]+")
_SENTENCE_END_RE = re.compile(r"([.!?。！？])\s*")
_WS_RE = re.compile(r"[ \t]+")

PORT_READINGS = {
    "404": "사백 공사",
    "500": "오백",
    "3000": "삼천",
    "3333": "삼천 삼백 삼십 삼",
    "5000": "오천",
    "8000": "팔천",
    "8080": "팔천 팔십",
}

ABBREVIATIONS = {
    "HTTPS": "에이치티티피에스",
    "HTTP": "에이치티티피",
    "API": "에이피아이",
    "URL": "유알엘",
    "TTS": "티티에스",
    "SSML": "에스에스엠엘",
    "JSON": "제이슨",
    "XML": "엑스엠엘",
    "HTML": "에이치티엠엘",
    "CSS": "씨에스에스",
    "UI": "유아이",
    "UX": "유엑스",
    "ID": "아이디",
    "PW": "비밀번호",
    "DB": "디비",
    "SQL": "에스큐엘",
}
_ABBREV_RE = re.compile(
    r"(?<![A-Za-z])(" + "|".join(ABBREVIATIONS) + r")(?![A-Za-z])", re.IGNORECASE
)

KOREAN_DIGITS = "영일이삼사오육칠팔구"
BREATH_CHARS = 35
_SPLIT_MIN_WORDS = 8


def _read_url(m: re.Match) -> str:
    url = m.group(0)
    if "localhost" in url:
        return "로컬 서버"
    domain = _DOMAIN_RE.match(url)
    if domain:
        return domain.group(1).replace(".", " 점 ")
    return "웹 주소"


def _read_digits(m: re.Match) -> str:
    return " ".join(KOREAN_DIGITS[int(d)] for d in m.group(0))


def _breathing_lines(text: str) -> list[str]:
    text = _SENTENCE_END_RE.sub(r"\1\n", text)
    lines: list[str] = []
    for line in (part.strip() for part in text.split("\n")):
        if not line:
            continue
        if len(line) <= BREATH_CHARS:
            lines.append(line)
            continue
        parts = [p.strip() for p in line.split(",") if p.strip()]
        if len(parts) > 1:
            lines.extend(parts)
            continue
        words = line.split()
        if len(words) > _SPLIT_MIN_WORDS:
            mid = len(words) // 2
            lines.extend([" ".join(words[:mid]), " ".join(words[mid:])])
        else:
            lines.append(line)
    return lines


def normalize_for_tts(text: str, bilingual_mode: BilingualMode | str = BilingualMode.OFF) -> str:
    """Rewrite ``text`` so a Korean voice reads it naturally.

    URLs, port numbers, abbreviations and long digit runs become Korean
    readings, symbols are dropped and long sentences are split into
    breathing-sized lines. In OFF mode remaining Latin letters are removed.
    """
    if not text or not text.strip():
        return ""
    result = text.strip()
    result = _URL_RE.sub(_read_url, result)
    result = _PORT_RE.sub(lambda m: PORT_READINGS[m.group(1)], result)
    result = _ABBREV_RE.sub(lambda m: ABBREVIATIONS[m.group(1).upper()], result)
    result = _LONG_NUMBER_RE.sub(_read_digits, result)
    if BilingualMode(bilingual_mode) == BilingualMode.OFF:
        result = _LATIN_RE.sub(" ", result)
    result = _BRACKETS_RE.sub(" ", result)
    result = _SYMBOLS_RE.sub(" ", result)
    result = _WS_RE.sub(" ", result.replace("\n", " ")).strip()
    return "\n".join(_WS_RE.sub(" ", line) for line in _breathing_lines(result))
