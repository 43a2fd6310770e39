"""Factor 2: Industry Alignment (35% weight).

Best evidence across the investor's preferred industries of:
  - direct category match (case-insensitive substring, either direction)  1.0
  - curated compatibility table lookup                                     table
  - creator skill naming the industry                                      0.9
"""

from __future__ import annotations

import logging

from src.venture_matching.domain_model import industry_compatibility

logger = logging.getLogger(__name__)

NO_PREFERENCE_SCORE = 0.8
DIRECT_MATCH_SCORE = 1.0
SKILL_MATCH_SCORE = 0.9


def _overlaps(a: str, b: str) -> bool:
    a, b = a.lower(), b.lower()
    if not a or not b:
        return False
    return a in b or b in a


def score(
    category: str,
    preferred_industries: list[str],
    skills: list[str] | None = None,
    table: dict[str, dict[str, float]] | None = None,
) -> float:
    """Compute industry alignment for an idea category.  [0.0, 1.0]."""
    if not preferred_industries:
        return NO_PREFERENCE_SCORE

    best = 0.0
    for industry in preferred_industries:
        if _overlaps(category, industry):
            best = max(best, DIRECT_MATCH_SCORE)
        best = max(best, industry_compatibility(industry, category, table))
        if skills and any(_overlaps(skill, industry) for skill in skills):
            best = max(best, SKILL_MATCH_SCORE)

    logger.debug(
        "Industry %r vs %s -> %.2f", category, ",".join(preferred_industries), best,
    )
    return best
