"""Plan tiers: usage limits and which length classes a request may produce."""

from __future__ import annotations

from dataclasses import dataclass

from makeyourtext.models.request import LENGTH_ORDER, LengthClass, PlanTier


@dataclass(frozen=True)
class PlanLimits:
    daily_rewrites: int
    weekly_rewrites: int
    max_variants: int
    max_voices: int
    voice_play_limit: int
    history_limit: int


PLAN_LIMITS: dict[PlanTier, PlanLimits] = {
    PlanTier.FREE: PlanLimits(10, 50, 2, 2, 20, 10),
    PlanTier.PRO: PlanLimits(100, 500, 3, 10, 1000, 1000),
    PlanTier.BUSINESS: PlanLimits(1000, 5000, 3, 20, 10000, 10000),
}

# Fill order after the requested length.
_FILL_ORDER = (LengthClass.STANDARD, LengthClass.SHORT, LengthClass.LONG)


def get_plan_limits(tier: PlanTier | str) -> PlanLimits:
    """Limits for ``tier``; unknown tiers get the free limits."""
    try:
        return PLAN_LIMITS[PlanTier(tier)]
    except ValueError:
        return PLAN_LIMITS[PlanTier.FREE]


def select_length_classes(
    requested: LengthClass,
    tier: PlanTier | str,
    bypass: bool = False,
) -> list[LengthClass]:
    """Length classes to generate, in short/standard/long order.

    The requested length is always kept; remaining slots are filled with
    standard, short, long until the plan's variant limit is reached.
    """
    if bypass:
        return list(LENGTH_ORDER)
    limit = get_plan_limits(tier).max_variants
    chosen: list[LengthClass] = [requested]
    for length in _FILL_ORDER:
        if len(chosen) >= limit:
            break
        if length not in chosen:
            chosen.append(length)
    return [length for length in LENGTH_ORDER if length in chosen]
