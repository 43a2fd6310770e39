"""Configuration: weights, thresholds, cache timing."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

UnitScore = Annotated[float, Field(ge=0.0, le=1.0)]


class ScoringWeights(BaseModel):
    amount_compatibility: float = Field(default=0.25, ge=0.0, le=1.0)
    industry_alignment: float = Field(default=0.35, ge=0.0, le=1.0)
    stage_preference: float = Field(default=0.15, ge=0.0, le=1.0)
    risk_alignment: float = Field(default=0.25, ge=0.0, le=1.0)


class BonusRule(BaseModel):
    """A bonus factor only counts once it clears ``threshold``."""

    threshold: float = Field(ge=0.0, le=1.0)
    weight: float = Field(ge=0.0, le=1.0)


class BonusRules(BaseModel):
    experience_match: BonusRule = BonusRule(threshold=0.7, weight=0.10)
    location_proximity: BonusRule = BonusRule(threshold=0.8, weight=0.05)
    network_effect: BonusRule = BonusRule(threshold=0.6, weight=0.05)


class ReasoningThresholds(BaseModel):
    amount_compatibility: float = 0.8
    industry_alignment: float = 0.8
    stage_preference: float = 0.8
    risk_alignment: float = 0.7
    experience_match: float = 0.7
    location_proximity: float = 0.8


class Settings(BaseSettings):
    scoring_weights: ScoringWeights = ScoringWeights()
    bonus_rules: BonusRules = BonusRules()
    reasoning_thresholds: ReasoningThresholds = ReasoningThresholds()

    high_confidence_threshold: float = 0.8
    medium_confidence_threshold: float = 0.6

    min_match_score: float = 0.4
    default_limit: int = 50
    statistics_limit: int = 100

    cache_ttl_seconds: float = 30 * 60
    cache_sweep_interval_seconds: float = 30 * 60

    # "first" only consults preferred_stages[0] when there is no exact hit.
    stage_match_strategy: Literal["first", "best"] = "first"
    assumed_investor_experience: str = "experienced"
    default_risk_tolerance: str = "medium"

    # None means the built-in table from domain_model.
    industry_compatibility: dict[str, dict[str, UnitScore]] | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
