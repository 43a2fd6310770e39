"""Composite ranker: factor assembly, weighted sum with bonuses, confidence."""

from __future__ import annotations

import logging

from src.venture_matching.config import Settings, settings as default_settings
from src.venture_matching.models import (
    BusinessIdea,
    Confidence,
    InvestmentOffer,
    MatchFactors,
    UserProfile,
)
from src.venture_matching.scoring import amount, bonus, industry, risk, stage

logger = logging.getLogger(__name__)


def compute_factors(
    idea: BusinessIdea,
    offer: InvestmentOffer,
    creator: UserProfile,
    investor: UserProfile,
    config: Settings | None = None,
) -> MatchFactors:
    cfg = config or default_settings
    factors = MatchFactors(
        amount_compatibility=amount.score(idea.funding_goal, offer.amount_range),
        industry_alignment=industry.score(
            idea.category,
            offer.preferred_industries,
            creator.skills,
            table=cfg.industry_compatibility,
        ),
        stage_preference=stage.score(
            idea.stage, offer.preferred_stages, strategy=cfg.stage_match_strategy,
        ),
        risk_alignment=risk.score(
            idea.stage,
            investor.risk_tolerance or cfg.default_risk_tolerance,
            creator.experience,
        ),
        experience_match=bonus.experience_score(
            creator.experience,
            investor.experience or cfg.assumed_investor_experience,
        ),
        location_proximity=bonus.location_score(
            creator.location, investor.location, offer.geographic_preference,
        ),
        network_effect=bonus.network_score(),
    )
    logger.debug(
        "Factors %s x %s: amount=%.2f industry=%.2f stage=%.2f risk=%.2f "
        "experience=%.2f location=%.2f",
        idea.id, offer.id,
        factors.amount_compatibility, factors.industry_alignment,
        factors.stage_preference, factors.risk_alignment,
        factors.experience_match, factors.location_proximity,
    )
    return factors


def overall_score(factors: MatchFactors, config: Settings | None = None) -> float:
    cfg = config or default_settings
    w = cfg.scoring_weights
    total = (
        w.amount_compatibility * factors.amount_compatibility
        + w.industry_alignment * factors.industry_alignment
        + w.stage_preference * factors.stage_preference
        + w.risk_alignment * factors.risk_alignment
    )

    rules = cfg.bonus_rules
    for value, rule in (
        (factors.experience_match, rules.experience_match),
        (factors.location_proximity, rules.location_proximity),
        (factors.network_effect, rules.network_effect),
    ):
        if value is not None and value > rule.threshold:
            total += rule.weight * value

    return min(max(total, 0.0), 1.0)


def confidence_level(score: float, config: Settings | None = None) -> Confidence:
    cfg = config or default_settings
    if score >= cfg.high_confidence_threshold:
        return "high"
    if score >= cfg.medium_confidence_threshold:
        return "medium"
    return "low"
