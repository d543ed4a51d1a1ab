"""Safety gate run before any text transformation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from makeyourtext.models.result import SafetyCheck
from makeyourtext.safety.patterns import (
    BLOCK_PATTERNS,
    CATEGORY_ALTERNATIVES,
    CATEGORY_REASONS,
    STRONG_ALLOW_PATTERNS,
    STRONG_ALTERNATIVE,
    STRONG_REASON,
    STRONG_STRICT_RE,
)

logger = logging.getLogger(__name__)


def _allowed_spans(text: str) -> list[tuple[int, int]]:
    return [m.span() for p in STRONG_ALLOW_PATTERNS for m in p.finditer(text)]


class SafetyGate:
    """Pure predicate over input text and tone.

    Args:
        strong_tone_ids: Tones that get the stricter escalation check.
    """

    def __init__(self, strong_tone_ids: Iterable[str] = ("warning", "protest")):
        self.strong_tone_ids = frozenset(strong_tone_ids)

    def check(self, text: str, tone_id: str) -> SafetyCheck:
        for block in BLOCK_PATTERNS:
            if block.pattern.search(text):
                logger.info("Safety gate blocked input (category=%s)", block.category)
                return SafetyCheck(
                    blocked=True,
                    reason=CATEGORY_REASONS[block.category],
                    suggested_alternative=CATEGORY_ALTERNATIVES.get(block.category),
                )

        if tone_id in self.strong_tone_ids:
            offending = self._strong_violation(text)
            if offending is not None:
                logger.info(
                    "Safety gate blocked strong-tone input (tone=%s, match=%r)",
                    tone_id, offending,
                )
                return SafetyCheck(
                    blocked=True,
                    reason=STRONG_REASON,
                    suggested_alternative=STRONG_ALTERNATIVE,
                )

        return SafetyCheck()

    @staticmethod
    def _strong_violation(text: str) -> str | None:
        """First escalation word not covered by an allow-listed phrase."""
        spans = _allowed_spans(text)
        for m in STRONG_STRICT_RE.finditer(text):
            start, end = m.span()
            if not any(a <= start and end <= b for a, b in spans):
                return m.group(0)
        return None
