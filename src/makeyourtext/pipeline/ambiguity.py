"""Ambiguity warnings for expressions a reader may misread."""

from __future__ import annotations

import re

AMBIGUITY_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"나중에|조만간|언젠가|시간\s*(?:될|날)\s*때|편할\s*때"),
        "시점이 모호한 표현이 있습니다. 구체적인 날짜나 시간을 적어 주세요.",
    ),
    (
        re.compile(r"적당히|적절히|알맞게"),
        "기준이 모호한 표현이 있습니다. 기대하는 수준을 구체적으로 적어 주세요.",
    ),
    (
        re.compile(r"대충|대강"),
        "'대충'은 요청의 범위를 흐리게 만듭니다. 필요한 범위를 밝혀 주세요.",
    ),
    (
        re.compile(r"알아서"),
        "'알아서'는 기대하는 행동이 불분명합니다. 원하는 결과를 직접 적어 주세요.",
    ),
    (
        re.compile(
            r"(?:지\s*않|지\s*못|안\s*\S+)\S*\s*(?:건|것은|게|것도)\s*아니"
            r"|없지\s*않|않을\s*수\s*없|아니지\s*않"
        ),
        "이중 부정 표현은 뜻이 반대로 읽힐 수 있습니다. 긍정문으로 바꿔 보세요.",
    ),
)


def ambiguity_warnings(text: str) -> list[str]:
    """Warnings for vague or double-negative phrasing in ``text``."""
    return [message for pattern, message in AMBIGUITY_RULES if pattern.search(text)]
