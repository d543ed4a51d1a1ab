"""Disallowed-content pattern tables for the safety gate."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class BlockPattern:
    category: str
    pattern: re.Pattern[str]


def _p(category: str, expr: str) -> BlockPattern:
    return BlockPattern(category, re.compile(expr, re.IGNORECASE))


BLOCK_PATTERNS: tuple[BlockPattern, ...] = (
    # violence
    _p("violence", r"죽여\s*버리|죽이겠|죽일\s*거|죽여\s*줄|때려\s*죽|패\s*버리|칼로\s*찌르|찔러\s*버리|폭행하겠|살해|불\s*질러|폭탄"),
    # illegal-act solicitation
    _p("illegal", r"불법\s*절차|위조|해킹|마약|대포\s*통장|대포\s*폰|돈\s*세탁|자금\s*세탁|탈세\s*방법"),
    # targeted harassment
    _p("harassment", r"신상\s*(?:을\s*)?털|스토킹|따라다니겠|협박|집\s*앞에서\s*기다리|온라인에\s*퍼뜨리|사진\s*(?:을\s*)?유포|저주"),
    # personal-data harvesting
    _p("personal_data", r"주민\s*(?:등록)?\s*번호|계좌\s*비밀번호|카드\s*번호.{0,6}(?:보내|알려)|비밀번호.{0,6}(?:보내|알려)|보안\s*카드|OTP\s*번호"),
)

CATEGORY_REASONS: dict[str, str] = {
    "violence": "폭력적이거나 위협적인 표현이 포함되어 있어 처리할 수 없습니다.",
    "illegal": "불법 행위와 관련된 요청은 처리할 수 없습니다.",
    "harassment": "특정인을 괴롭히거나 위협하는 표현이 포함되어 있어 처리할 수 없습니다.",
    "personal_data": "개인정보를 요구하거나 수집하는 내용은 처리할 수 없습니다.",
}

CATEGORY_ALTERNATIVES: dict[str, str] = {
    "illegal": "합법적인 범위에서 가능한 요청으로 내용을 바꿔 주시면 도와드리겠습니다.",
    "personal_data": "개인정보 대신 공식 창구를 통한 확인을 요청하는 문장으로 바꿔 보세요.",
}

# Strong tones: escalation words that must appear only inside a
# legally framed phrase from STRONG_ALLOW_PATTERNS.
STRONG_STRICT_RE = re.compile(
    r"고소|소송|법적|신고|고발|책임을\s*묻|가만\s*두지|각오|후회하게|보복|망신"
)

STRONG_ALLOW_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(expr)
    for expr in (
        r"법적\s*(?:절차|조치)(?:를|에\s*대해)?\s*검토",
        r"기한\s*내\s*시정(?:을)?\s*요청",
        r"정정(?:을)?\s*요청",
        r"내용\s*증명",
        r"공식\s*(?:이의|민원)\s*(?:를|을)?\s*제기",
        r"소비자\s*(?:보호)?원",
        r"관계\s*기관(?:에)?\s*(?:신고|문의)",
    )
)

STRONG_REASON = "강한 톤에서는 합법적인 절차 안내 표현만 사용할 수 있습니다."
STRONG_ALTERNATIVE = "기한 내 시정을 요청드리며, 이행되지 않을 경우 법적 절차를 검토하겠습니다."
