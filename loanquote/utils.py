"""Assorted utility helpers."""

from .presets import CREDIT_TIERS


def credit_tier_for_score(score):
    """Map a numeric credit score to the MI pricing tier at or below it.

    Scores under the lowest tier, and values that are not numbers, price at the
    lowest tier.
    """
    try:
        s = float(score)
    except (TypeError, ValueError):
        return CREDIT_TIERS[-1]
    for tier in CREDIT_TIERS:
        if s >= tier:
            return tier
    return CREDIT_TIERS[-1]
