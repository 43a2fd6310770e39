"""Pydantic v2 data models: the records flowing in and out of the engine."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator


# ---------------------------------------------------------------------------
# Type aliases and enums
# ---------------------------------------------------------------------------

Role = Literal["creator", "investor"]

IdeaStatus = Literal["draft", "published", "funded", "cancelled"]

InvestmentType = Literal["equity", "debt", "convertible"]

Confidence = Literal["high", "medium", "low"]


class _Vocabulary(str, Enum):
    @classmethod
    def parse(cls, value: str | None):
        """Return the member for ``value`` or None when it is not recognized."""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Stage(_Vocabulary):
    CONCEPT = "concept"
    MVP = "mvp"
    EARLY = "early"
    GROWTH = "growth"


class RiskTolerance(_Vocabulary):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExperienceLevel(_Vocabulary):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERIENCED = "experienced"
    SERIAL = "serial"


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

class AmountRange(BaseModel):
    min: float = Field(ge=0.0)
    max: float = Field(ge=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> AmountRange:
        if self.min > self.max:
            raise ValueError(f"range min {self.min} exceeds max {self.max}")
        return self


class UserProfile(BaseModel):
    id: str
    user_type: Role = Field(frozen=True)
    name: str = ""
    email: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None

    # Creator
    company_name: str | None = None
    industry: str | None = None
    experience: str | None = None

    # Investor
    investment_range: AmountRange | None = None
    preferred_industries: list[str] = Field(default_factory=list)
    risk_tolerance: str | None = None

    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)


class BusinessIdea(BaseModel):
    id: str
    creator_id: str
    title: str = ""
    description: str = ""
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    funding_goal: float = Field(gt=0.0)
    current_funding: float = Field(default=0.0, ge=0.0)
    equity_offered: float = Field(default=0.0, ge=0.0, le=100.0)
    valuation: float | None = None
    stage: str | None = None
    timeline: str = ""
    team_size: int | None = None
    status: IdeaStatus = "draft"


class InvestmentOffer(BaseModel):
    id: str
    investor_id: str
    title: str = ""
    description: str = ""
    amount_range: AmountRange
    preferred_equity: AmountRange = Field(
        default_factory=lambda: AmountRange(min=0.0, max=100.0),
    )
    preferred_stages: list[str] = Field(default_factory=list)
    preferred_industries: list[str] = Field(default_factory=list)
    geographic_preference: str | None = None
    investment_type: InvestmentType = "equity"
    timeline: str | None = None
    is_active: bool


# ---------------------------------------------------------------------------
# Scoring / output types
# ---------------------------------------------------------------------------

class MatchFactors(BaseModel):
    amount_compatibility: float = Field(ge=0.0, le=1.0)
    industry_alignment: float = Field(ge=0.0, le=1.0)
    stage_preference: float = Field(ge=0.0, le=1.0)
    risk_alignment: float = Field(ge=0.0, le=1.0)
    experience_match: float | None = Field(default=None, ge=0.0, le=1.0)
    location_proximity: float | None = Field(default=None, ge=0.0, le=1.0)
    network_effect: float | None = Field(default=None, ge=0.0, le=1.0)


CORE_FACTORS: tuple[str, ...] = (
    "amount_compatibility",
    "industry_alignment",
    "stage_preference",
    "risk_alignment",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MatchResult(BaseModel):
    idea_id: str
    investor_id: str
    creator_id: str
    offer_id: str
    match_score: float = Field(ge=0.0, le=1.0)
    factors: MatchFactors
    confidence: Confidence
    reasoning: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)


class FactorAverage(BaseModel):
    factor: str
    average: float


class MatchStatistics(BaseModel):
    total_matches: int = 0
    high_confidence_matches: int = 0
    medium_confidence_matches: int = 0
    low_confidence_matches: int = 0
    average_score: float = 0.0
    top_factors: list[FactorAverage] = Field(default_factory=list)
    improvement_suggestions: list[str] = Field(default_factory=list)
