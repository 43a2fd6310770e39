"""Aggregate quality metrics and improvement suggestions over a match list."""

from __future__ import annotations

import numpy as np

from src.venture_matching.models import (
    CORE_FACTORS,
    FactorAverage,
    MatchResult,
    MatchStatistics,
)

LOW_AVERAGE_THRESHOLD = 0.6
WEAK_MATCH_SCORE = 0.5
WEAK_MATCH_SHARE = 0.3

SUGGEST_BROADEN_INDUSTRIES = (
    "Consider expanding your industry preferences to find more opportunities"
)
SUGGEST_REVIEW_FUNDING = (
    "Review your funding goals to align better with typical investment ranges"
)
SUGGEST_ENRICH_PROFILE = (
    "Your profile may need more detailed information to improve matching accuracy"
)


def top_factors(matches: list[MatchResult]) -> list[FactorAverage]:
    """Mean of each core factor across ``matches``, best first."""
    if not matches:
        return []
    grid = np.array(
        [[getattr(m.factors, name) for name in CORE_FACTORS] for m in matches],
    )
    means = grid.mean(axis=0)
    averages = [
        FactorAverage(factor=name, average=float(mean))
        for name, mean in zip(CORE_FACTORS, means)
    ]
    averages.sort(key=lambda fa: fa.average, reverse=True)
    return averages


def improvement_suggestions(matches: list[MatchResult]) -> list[str]:
    if not matches:
        return []
    scores = np.array([m.match_score for m in matches])
    suggestions: list[str] = []
    if scores.mean() < LOW_AVERAGE_THRESHOLD:
        suggestions.append(SUGGEST_BROADEN_INDUSTRIES)
        suggestions.append(SUGGEST_REVIEW_FUNDING)
    weak = int((scores < WEAK_MATCH_SCORE).sum())
    if weak > len(matches) * WEAK_MATCH_SHARE:
        suggestions.append(SUGGEST_ENRICH_PROFILE)
    return suggestions


def match_statistics(matches: list[MatchResult]) -> MatchStatistics:
    """Summarize a match list.  An empty list yields zeroed statistics."""
    if not matches:
        return MatchStatistics()

    tiers = [m.confidence for m in matches]
    return MatchStatistics(
        total_matches=len(matches),
        high_confidence_matches=tiers.count("high"),
        medium_confidence_matches=tiers.count("medium"),
        low_confidence_matches=tiers.count("low"),
        average_score=float(np.mean([m.match_score for m in matches])),
        top_factors=top_factors(matches),
        improvement_suggestions=improvement_suggestions(matches),
    )
