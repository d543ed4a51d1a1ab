"""Temporal and consequence cue detection.

The same expressions decide whether the original input carried a cue and
which sentences of a candidate assert one, so clauses added by the length
policy are removable by the context-integrity pass whenever their cue is
missing from the input.
"""

from __future__ import annotations

import re

TEMPORAL_CUE_RE = re.compile(
    r"오늘|내일|모레|글피|이번\s*주|다음\s*주|다음\s*달|이번\s*달|주말"
    r"|[월화수목금토일]요일"
    r"|\d+\s*(?:월|일|시|분|주|개월)"
    r"|까지|기한|마감|데드라인|오전|오후|당일|익일|조속히|즉시"
    r"|\d{1,2}/\d{1,2}"
    r"|(?<![A-Za-z])(?:today|tomorrow|tonight|deadline|asap|due|by\s+(?:monday|tuesday|wednesday|thursday|friday|eod))(?![A-Za-z])"
    r"|(?<![\d:])\d{1,2}(?::\d{2})?\s*[ap]\.?m\.?(?![A-Za-z])"
    r"|(?<![A-Za-z])(?:(?:next|this|last)\s+(?:week|month)|end\s+of\s+(?:the\s+)?(?:day|week|month)"
    r"|(?<!good )(?:morning|afternoon|evening)|noon|midnight|weekend)(?![A-Za-z])"
    r"|(?<![A-Za-z])(?:january|february|april|june|july|august|september|october|november|december"
    r"|(?:march|may)(?=\s+\d))(?![A-Za-z])"
    r"|(?<![A-Za-z])(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday)(?![A-Za-z])",
    re.IGNORECASE,
)

CONSEQUENCE_CUE_RE = re.compile(
    r"법적|소송|고소|고발|신고|조치|불이익|제재|책임을\s*묻|위약금|패널티|페널티|벌금"
    r"|손해\s*배상|계약\s*해지|징계|절차를\s*진행"
    r"|(?<![A-Za-z])(?:penalty|penalties|legal|lawsuit|sue)(?![A-Za-z])",
    re.IGNORECASE,
)

_UNTIL_RE = re.compile(r"\S+까지")


def has_temporal_cue(text: str) -> bool:
    return bool(TEMPORAL_CUE_RE.search(text))


def has_consequence_cue(text: str) -> bool:
    return bool(CONSEQUENCE_CUE_RE.search(text))


def extract_temporal_expression(text: str) -> str | None:
    """Best-effort deadline phrase from ``text`` ("내일까지", "금요일" ...)."""
    m = _UNTIL_RE.search(text)
    if m:
        return m.group(0)
    m = TEMPORAL_CUE_RE.search(text)
    return m.group(0) if m else None
