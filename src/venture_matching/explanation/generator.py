"""Explanation generator: factor scores to human-readable reasoning.

One fixed sentence per factor that clears its quality threshold, in factor
declaration order. Factors below threshold say nothing.
"""

from __future__ import annotations

from src.venture_matching.config import Settings, settings as default_settings
from src.venture_matching.models import BusinessIdea, InvestmentOffer, MatchFactors


def reasoning_for(
    factors: MatchFactors,
    idea: BusinessIdea,
    offer: InvestmentOffer,
    config: Settings | None = None,
) -> list[str]:
    t = (config or default_settings).reasoning_thresholds
    reasoning: list[str] = []

    if factors.amount_compatibility > t.amount_compatibility:
        reasoning.append(
            f"Funding goal of ${idea.funding_goal:,.0f} fits well within the "
            f"investment range"
        )
    if factors.industry_alignment > t.industry_alignment:
        reasoning.append(f"Strong alignment in {idea.category} industry")
    if factors.stage_preference > t.stage_preference:
        reasoning.append(f"{idea.stage} stage matches preferred investment stages")
    if factors.risk_alignment > t.risk_alignment:
        reasoning.append("Risk profile is well-aligned for this investment")
    if (
        factors.experience_match is not None
        and factors.experience_match > t.experience_match
    ):
        reasoning.append("Experience levels are compatible")
    if (
        factors.location_proximity is not None
        and factors.location_proximity > t.location_proximity
    ):
        reasoning.append("Geographic preferences are well-matched")

    return reasoning
