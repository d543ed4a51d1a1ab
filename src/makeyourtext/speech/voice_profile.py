"""Prosody settings per audience and relationship."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VoiceProfile:
    rate: float      # 0.75 - 1.05
    pitch: int       # semitones, -5 - +3
    volume: float    # 0.85 - 1.0
    break_ms: int    # 250 - 450


DEFAULT_PROFILE = VoiceProfile(rate=0.85, pitch=-2, volume=0.90, break_ms=360)

AUDIENCE_PROFILES: dict[str, VoiceProfile] = {
    "elementary1": VoiceProfile(0.95, 2, 0.95, 280),
    "elementary": VoiceProfile(0.92, 1, 0.95, 300),
    "middle": VoiceProfile(0.89, 0, 0.93, 320),
    "high": VoiceProfile(0.87, -1, 0.92, 340),
    "adult": DEFAULT_PROFILE,
    "senior": VoiceProfile(0.80, -4, 0.88, 420),
}

# (rate, pitch, volume, break_ms) deltas on top of the audience profile
RELATIONSHIP_ADJUSTMENTS: dict[str, tuple[float, int, float, int]] = {
    "friend": (0.02, 1, 0.02, 0),
    "teacher": (-0.03, -1, 0.0, 30),
    "parent": (-0.02, -1, -0.01, 20),
    "boss": (-0.01, -2, 0.0, 10),
    "customer": (-0.02, -1, -0.01, 25),
    "client": (-0.01, -1, 0.0, 15),
}


def _clamp(value, low, high):
    return max(low, min(high, value))


def voice_profile(
    audience_id: str | None = None,
    relationship_id: str | None = None,
) -> VoiceProfile:
    """Final prosody for an audience, adjusted for the relationship."""
    base = AUDIENCE_PROFILES.get(audience_id or "", DEFAULT_PROFILE)
    d_rate, d_pitch, d_volume, d_break = RELATIONSHIP_ADJUSTMENTS.get(
        relationship_id or "", (0.0, 0, 0.0, 0)
    )
    return VoiceProfile(
        rate=round(_clamp(base.rate + d_rate, 0.75, 1.05), 2),
        pitch=_clamp(base.pitch + d_pitch, -5, 3),
        volume=round(_clamp(base.volume + d_volume, 0.85, 1.0), 2),
        break_ms=_clamp(base.break_ms + d_break, 250, 450),
    )
