"""Bonus factors: only added to the overall score above their thresholds.

Each returns the neutral 0.5 when its inputs are missing.
"""

from __future__ import annotations

from src.venture_matching.domain_model import experience_distance, infer_region
from src.venture_matching.models import ExperienceLevel

NEUTRAL_SCORE = 0.5

EXPERIENCE_STEP_PENALTY = 0.2
EXPERIENCE_FLOOR = 0.3

PREFERENCE_HIT = 1.0
PREFERENCE_MISS = 0.3
SAME_LOCATION = 1.0
SAME_REGION = 0.9
DIFFERENT_REGION = 0.6


def experience_score(
    creator_experience: str | None, investor_experience: str | None,
) -> float:
    """Closer experience levels work better together."""
    creator = ExperienceLevel.parse(creator_experience)
    investor = ExperienceLevel.parse(investor_experience)
    if creator is None or investor is None:
        return NEUTRAL_SCORE
    gap = experience_distance(creator, investor)
    return max(EXPERIENCE_FLOOR, 1.0 - gap * EXPERIENCE_STEP_PENALTY)


def location_score(
    creator_location: str | None,
    investor_location: str | None,
    geographic_preference: str | None = None,
) -> float:
    if not creator_location or not investor_location:
        return NEUTRAL_SCORE

    if geographic_preference:
        loc = creator_location.lower()
        pref = geographic_preference.lower()
        if pref in loc or loc in pref:
            return PREFERENCE_HIT
        return PREFERENCE_MISS

    if creator_location == investor_location:
        return SAME_LOCATION
    if infer_region(creator_location) == infer_region(investor_location):
        return SAME_REGION
    return DIFFERENT_REGION


def network_score() -> float:
    # TODO: derive from shared connections once collaborators supply a graph.
    return NEUTRAL_SCORE
