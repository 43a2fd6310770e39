"""Factor 3: Stage Preference (15% weight).

Exact membership in the offer's preferred stages scores 1.0. Otherwise the
stage adjacency table decides; with the ``first`` strategy only the first
preferred stage is consulted, with ``best`` every preferred stage is.

A missing or unrecognized idea stage scores the neutral 0.5. Table cells
of 0.0 (concept against growth, either way round) are returned as 0.0;
older engines coerced those cells to 0.5, so concept/growth pairs rank
lower here than they did there.
"""

from __future__ import annotations

import logging
from typing import Literal

from src.venture_matching.domain_model import stage_compatibility
from src.venture_matching.models import Stage

logger = logging.getLogger(__name__)

NO_PREFERENCE_SCORE = 0.8
NEUTRAL_SCORE = 0.5


def score(
    idea_stage: str | None,
    preferred_stages: list[str],
    strategy: Literal["first", "best"] = "first",
) -> float:
    """Compute stage preference.  [0.0, 1.0]."""
    if not preferred_stages:
        return NO_PREFERENCE_SCORE

    stage = Stage.parse(idea_stage)
    preferred = [Stage.parse(s) for s in preferred_stages]
    if stage is not None and stage in preferred:
        return 1.0
    if stage is None:
        return NEUTRAL_SCORE

    candidates = preferred[:1] if strategy == "first" else preferred
    known = [p for p in candidates if p is not None]
    if not known:
        return NEUTRAL_SCORE
    result = max(stage_compatibility(stage, p) for p in known)
    logger.debug(
        "Stage %s vs %s (%s) -> %.2f",
        stage.value, ",".join(preferred_stages), strategy, result,
    )
    return result
