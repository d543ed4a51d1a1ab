"""Sentence and line helpers shared by transform stages and repair passes."""

from __future__ import annotations

import re
from typing import Callable

BULLET = "• "
ELLIPSIS = "…"

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?~…])\s+")
_TAIL_PART_RE = re.compile(r"(?:\s*\([^()]*\)|[.!?~…]+|\s+)$")
_TERMINAL_RE = re.compile(r"[.!?~…]$")
_WS_RE = re.compile(r"[ \t]+")


def split_sentences(line: str) -> list[str]:
    """Split one line into sentences, keeping terminal punctuation attached."""
    line = line.strip()
    if not line:
        return []
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(line) if s.strip()]


def iter_sentences(text: str) -> list[str]:
    """All sentences of a multi-line text, bullets removed."""
    result: list[str] = []
    for line in text.split("\n"):
        result.extend(split_sentences(strip_bullet(line)))
    return result


def strip_bullet(line: str) -> str:
    stripped = line.lstrip()
    if stripped.startswith(BULLET.strip()):
        return stripped[len(BULLET.strip()):].lstrip()
    return line


def map_sentences(text: str, fn: Callable[[str], str]) -> str:
    """Apply ``fn`` to every sentence, preserving line breaks and bullets.

    Sentences for which ``fn`` returns an empty string are dropped, as are
    lines left without any sentence.
    """
    out_lines: list[str] = []
    for line in text.split("\n"):
        bulleted = line.lstrip().startswith(BULLET.strip())
        sentences = [fn(s) for s in split_sentences(strip_bullet(line))]
        kept = " ".join(s for s in sentences if s and s.strip())
        if not kept:
            continue
        out_lines.append(BULLET + kept if bulleted else kept)
    return "\n".join(out_lines)


def split_tail(sentence: str) -> tuple[str, str]:
    """Split a sentence into its body and trailing punctuation/parentheticals."""
    body = sentence
    tail = ""
    while body:
        m = _TAIL_PART_RE.search(body)
        if not m or m.start() == len(body):
            break
        tail = m.group(0) + tail
        body = body[: m.start()]
    return body, tail


def is_truncated(tail: str) -> bool:
    return ELLIPSIS in tail or "..." in tail


def ensure_terminal(text: str) -> str:
    text = text.rstrip()
    if not text or _TERMINAL_RE.search(text):
        return text
    return text + "."


def collapse_spaces(text: str) -> str:
    lines = [_WS_RE.sub(" ", line).strip() for line in text.split("\n")]
    return "\n".join(line for line in lines if line)


def truncate_words(text: str, budget: int) -> str:
    """Cut ``text`` to at most ``budget`` characters on a word boundary.

    An ellipsis is appended when anything was cut. A single token longer than
    the whole budget is hard-cut, since no boundary exists to break on.
    """
    text = text.strip()
    if len(text) <= budget:
        return text
    room = budget - len(ELLIPSIS)
    words = text.split()
    kept: list[str] = []
    for word in words:
        candidate = " ".join(kept + [word])
        if len(candidate) > room:
            break
        kept.append(word)
    if not kept:
        return text[:room] + ELLIPSIS
    return " ".join(kept).rstrip(",.;:!?~") + ELLIPSIS
