"""Bilingual-mode handling for Korean output.

OFF converts every Latin-script span to Korean. PAREN keeps each foreign span
once, in parentheses after its Korean gloss. TWOLINES keeps a Korean body and
moves the original foreign wording onto trailing gloss lines, one per
original line.
"""

from __future__ import annotations

import re
from functools import wraps
from typing import TYPE_CHECKING, Callable

from makeyourtext.models.request import BilingualMode, LengthClass
from makeyourtext.pipeline.glossary import LETTERS, PHRASES, STOPWORDS, WORDS
from makeyourtext.utils.hangul import has_hangul, has_latin
from makeyourtext.utils.sentences import ELLIPSIS, collapse_spaces

if TYPE_CHECKING:
    from makeyourtext.pipeline.context import RewriteContext

_CLOCK = r"\d{1,2}(?::\d{2})?[ \t]?[AaPp][Mm](?![A-Za-z0-9])"
_WORD = r"[A-Za-z][A-Za-z0-9'’&-]*"
# A clock time such as "3pm" belongs to the span so its digits stay with it.
LATIN_SPAN_RE = re.compile(
    rf"(?:(?<![\d:]){_CLOCK}|{_WORD})(?:[ \t]+(?:{_CLOCK}|{_WORD}))*"
)
_CLOCK_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s?([ap])m(?![a-z0-9])")
_HANGUL_RUN_RE = re.compile(r"[가-힣]+")
_GLOSS_EDGE_CHARS = " \t.,!?~…()"
_PAREN_RE = re.compile(r"\s*\(([^()]*)\)")
_PAREN_SPLIT_RE = re.compile(r"(\([^()]*\))")
_UNCLOSED_RE = re.compile(r"\s*\([^()]*$")
_MAX_PHRASE_WORDS = 4


def _spell(word: str) -> str:
    return "".join(
        LETTERS.get(ch, ch) for ch in word.lower() if ch.isalnum()
    )


def _clock_to_korean(m: re.Match) -> str:
    reading = f"{'오전' if m.group(3) == 'a' else '오후'} {int(m.group(1))}시"
    if m.group(2) and int(m.group(2)):
        reading += f" {int(m.group(2))}분"
    return reading


def _word_to_korean(word: str) -> str | None:
    w = word.strip("'’&-")
    if not has_latin(w):
        return w or None
    if w in WORDS:
        return WORDS[w]
    if w.endswith("s") and w[:-1] in WORDS:
        return WORDS[w[:-1]]
    if w in STOPWORDS:
        return None
    return _spell(w)


def to_korean(span: str) -> str:
    """Korean rendering of one Latin span; never empty for a non-empty span."""
    words = _CLOCK_RE.sub(_clock_to_korean, span.lower()).split()
    if not words:
        return ""
    out: list[str] = []
    i = 0
    while i < len(words):
        for n in range(min(_MAX_PHRASE_WORDS, len(words) - i), 1, -1):
            phrase = " ".join(words[i:i + n])
            if phrase in PHRASES:
                out.append(PHRASES[phrase])
                i += n
                break
        else:
            korean = _word_to_korean(words[i])
            if korean:
                out.append(korean)
            i += 1
    if not out:
        out = [_spell(w) for w in words]
    return " ".join(s for s in out if s)


def foreign_spans(text: str) -> list[str]:
    return [m.group(0) for m in LATIN_SPAN_RE.finditer(text)]


def convert_foreign(text: str) -> str:
    """Replace every Latin span with its Korean rendering."""
    if not has_latin(text):
        return text
    return collapse_spaces(LATIN_SPAN_RE.sub(lambda m: to_korean(m.group(0)), text))


def _is_gloss_line(line: str) -> bool:
    return has_latin(line) and not has_hangul(line)


def detach_gloss(text: str) -> tuple[str, list[str]]:
    """Split trailing pure-Latin gloss lines off a TWOLINES candidate."""
    lines = text.split("\n")
    cut = len(lines)
    while cut > 1 and _is_gloss_line(lines[cut - 1]):
        cut -= 1
    return "\n".join(lines[:cut]), [line.strip() for line in lines[cut:]]


def gloss_lines(original: str) -> list[str]:
    """One gloss line per original line carrying foreign text, deduplicated.

    A foreign-only line is kept as written. A mixed line loses its Korean
    words, so digits written alongside the foreign text survive.
    """
    seen: set[str] = set()
    glosses: list[str] = []
    for line in original.split("\n"):
        if not foreign_spans(line):
            continue
        if has_hangul(line):
            gloss = collapse_spaces(_HANGUL_RUN_RE.sub(" ", line)).strip(_GLOSS_EDGE_CHARS)
        else:
            gloss = collapse_spaces(line)
        if not gloss:
            continue
        key = gloss.lower()
        if key in seen:
            continue
        seen.add(key)
        glosses.append(gloss)
    return glosses


def drop_unclosed_parens(text: str) -> str:
    """Remove "(" fragments left without a closing parenthesis."""
    lines = []
    for line in text.split("\n"):
        m = _UNCLOSED_RE.search(line)
        if m:
            fragment = m.group(0)
            line = line[: m.start()].rstrip()
            if ELLIPSIS in fragment or "..." in fragment:
                line += ELLIPSIS
        lines.append(line)
    return "\n".join(line for line in lines if line.strip())


def _enforce_paren(text: str) -> str:
    seen: set[str] = set()

    def keep_first(m: re.Match) -> str:
        inner = m.group(1).strip()
        if not has_latin(inner) or has_hangul(inner):
            return m.group(0)
        key = inner.lower()
        if key in seen:
            return ""
        seen.add(key)
        return m.group(0)

    text = _PAREN_RE.sub(keep_first, text)

    def gloss(m: re.Match) -> str:
        span = m.group(0)
        key = span.lower()
        if key in seen:
            return to_korean(span)
        seen.add(key)
        return f"{to_korean(span)} ({span})"

    parts = _PAREN_SPLIT_RE.split(text)
    for i in range(0, len(parts), 2):
        parts[i] = LATIN_SPAN_RE.sub(gloss, parts[i])
    return collapse_spaces("".join(parts))


def _enforce_twolines(text: str, ctx: "RewriteContext", detach: bool) -> str:
    body = detach_gloss(text)[0] if detach else text
    body = convert_foreign(body)
    glosses = gloss_lines(ctx.original)
    if not glosses:
        return body
    joined = "\n".join([body, *glosses])
    if ctx.length == LengthClass.SHORT and len(joined) > ctx.short_budget:
        return body
    return joined


def enforce_bilingual(text: str, ctx: "RewriteContext", *, detach: bool = True) -> str:
    """Bring ``text`` in line with the requested bilingual mode.

    With ``detach=False`` (the raw input) foreign-only lines are treated as
    content and converted, not as existing gloss lines.
    """
    if not ctx.bilingual_active:
        return text
    text = drop_unclosed_parens(text)
    if ctx.bilingual_mode == BilingualMode.PAREN:
        return _enforce_paren(text)
    if ctx.bilingual_mode == BilingualMode.TWOLINES:
        return _enforce_twolines(text, ctx, detach)
    return convert_foreign(text)


def missing_glosses(text: str, original: str) -> list[str]:
    """Korean renderings of original foreign spans absent from ``text``."""
    missing: list[str] = []
    for span in foreign_spans(original):
        korean = to_korean(span)
        if korean and korean not in text and korean not in missing:
            missing.append(korean)
    return missing


def body_only(stage: Callable[[str, "RewriteContext"], str]):
    """Run ``stage`` on the Korean body only, keeping TWOLINES gloss lines."""

    @wraps(stage)
    def wrapper(text: str, ctx: "RewriteContext") -> str:
        if not (ctx.bilingual_active and ctx.bilingual_mode == BilingualMode.TWOLINES):
            return stage(text, ctx)
        body, glosses = detach_gloss(text)
        out = stage(body, ctx)
        return "\n".join([out, *glosses]) if glosses else out

    return wrapper
