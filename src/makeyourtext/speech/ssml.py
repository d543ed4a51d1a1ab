"""SSML rendering for the speech synthesizer."""

from __future__ import annotations

import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from makeyourtext.speech.voice_profile import DEFAULT_PROFILE, VoiceProfile

SSML_TEMPLATES_DIR = Path(__file__).parent / "templates"

SENTENCE_BREAK_MS = 450
COMMA_BREAK_MS = 200
CONJUNCTION_BREAK_MS = 250
MID_BREAK_MS = 180
_MID_BREAK_MIN_CHARS = 30

CONJUNCTIONS = ("그리고", "하지만", "그런데", "그러나", "또한", "그래서", "그러므로", "따라서")
_CONJUNCTION_RE = re.compile(r"\s+(" + "|".join(CONJUNCTIONS) + r")")
_SENTENCE_END_RE = re.compile(r"[.!?。！？]$")


def escape_xml(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _brk(ms: int) -> str:
    return f'<break time="{ms}ms"/>'


def _natural_breaks(line: str) -> str:
    line = line.replace(",", "," + _brk(COMMA_BREAK_MS))
    line = _CONJUNCTION_RE.sub(_brk(CONJUNCTION_BREAK_MS) + r"\1", line)
    if len(line) > _MID_BREAK_MIN_CHARS and "<break" not in line:
        space = line.rfind(" ", 0, len(line) // 2)
        if 10 < space < len(line) - 10:
            line = line[:space] + _brk(MID_BREAK_MS) + line[space + 1:]
    return line


def ssml_lines(text: str, break_ms: int) -> list[str]:
    lines = [line.strip() for line in escape_xml(text).split("\n") if line.strip()]
    out = []
    for i, line in enumerate(lines):
        processed = _natural_breaks(line)
        if _SENTENCE_END_RE.search(line):
            processed += _brk(SENTENCE_BREAK_MS)
        elif i < len(lines) - 1:
            processed += _brk(break_ms)
        out.append(processed)
    return out


def to_ssml(text: str, profile: VoiceProfile = DEFAULT_PROFILE) -> str:
    """Render ``text`` as an SSML document using the prosody in ``profile``."""
    env = Environment(
        loader=FileSystemLoader(str(SSML_TEMPLATES_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("speak.xml.j2")
    rate = max(0.75, min(1.1, profile.rate))
    pitch = max(-5, min(3, profile.pitch))
    volume = max(0.85, min(1.0, profile.volume))
    return template.render(
        lines=ssml_lines(text, profile.break_ms),
        rate=f"{rate:.2f}",
        pitch=f"{pitch:+d}st" if pitch else None,
        volume=f"{volume:.2f}",
    ).strip()
