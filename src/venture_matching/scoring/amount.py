"""Factor 1: Amount Compatibility (25% weight).

How well an idea's funding goal sits inside an offer's amount range.
Goals just under the minimum are rewarded for being close; goals over the
maximum decay in coarse steps.
"""

from __future__ import annotations

import logging

from src.venture_matching.models import AmountRange

logger = logging.getLogger(__name__)

UNDERSHOOT_FLEX = 1.2

# (max ratio of goal to range max, score); anything beyond scores OVERSHOOT_FLOOR.
OVERSHOOT_STEPS: tuple[tuple[float, float], ...] = ((1.5, 0.8), (2.0, 0.5))
OVERSHOOT_FLOOR = 0.1


def score(funding_goal: float, amount_range: AmountRange) -> float:
    """Compute amount compatibility.  [0.0, 1.0].

    Callers guarantee ``funding_goal >= 0``.
    """
    low, high = amount_range.min, amount_range.max
    if low <= funding_goal <= high:
        return 1.0

    if funding_goal < low:
        return min(1.0, funding_goal / low * UNDERSHOOT_FLEX)

    if high == 0:
        return OVERSHOOT_FLOOR
    ratio = funding_goal / high
    for limit, step_score in OVERSHOOT_STEPS:
        if ratio <= limit:
            return step_score
    logger.debug("Funding goal %.0f is %.1fx the offer maximum", funding_goal, ratio)
    return OVERSHOOT_FLOOR
