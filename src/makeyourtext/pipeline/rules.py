"""Declarative substitution rules owned by the pipeline stages."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

Guard = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    """One regex substitution, applied only when ``guard`` accepts the text."""

    pattern: re.Pattern[str]
    replacement: str
    guard: Guard | None = None
    count: int = 0  # 0 replaces every match

    def apply(self, text: str) -> str:
        if self.guard is not None and not self.guard(text):
            return text
        return self.pattern.sub(self.replacement, text, count=self.count)


def rule(
    pattern: str, replacement: str, guard: Guard | None = None, count: int = 0
) -> Rule:
    return Rule(re.compile(pattern), replacement, guard, count)


def apply_rules(text: str, rules: tuple[Rule, ...]) -> str:
    for r in rules:
        text = r.apply(text)
    return text


def absent(pattern: str) -> Guard:
    """Guard accepting text that does not match ``pattern``."""
    compiled = re.compile(pattern)
    return lambda text: not compiled.search(text)
