"""Factor 4: Risk Alignment (25% weight).

Earlier-stage ideas suit investors with a high risk tolerance, later-stage
ideas suit cautious ones. Seasoned creators de-risk concept and MVP ideas.
"""

from __future__ import annotations

from src.venture_matching.domain_model import (
    EARLY_STAGES,
    SEASONED_CREATORS,
    risk_compatibility,
)
from src.venture_matching.models import ExperienceLevel, RiskTolerance, Stage

NEUTRAL_SCORE = 0.5
SEASONED_CREATOR_BONUS = 0.2


def score(
    idea_stage: str | None,
    risk_tolerance: str | None,
    experience: str | None = None,
) -> float:
    """Compute risk alignment.  [0.0, 1.0]."""
    stage = Stage.parse(idea_stage)
    tolerance = RiskTolerance.parse(risk_tolerance)
    if stage is None or tolerance is None:
        return NEUTRAL_SCORE

    base = risk_compatibility(stage, tolerance)
    if stage in EARLY_STAGES and ExperienceLevel.parse(experience) in SEASONED_CREATORS:
        return min(1.0, base + SEASONED_CREATOR_BONUS)
    return base
