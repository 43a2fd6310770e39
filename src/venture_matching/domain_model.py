"""Deterministic domain model: the compatibility tables behind every factor.

Static lookup data only. No I/O, fully unit-testable. The industry table is
an open vocabulary and can be swapped per engine through
``Settings.industry_compatibility``; stages, risk tolerances and experience
levels are closed sets keyed by their enums.
"""

from __future__ import annotations

from src.venture_matching.models import ExperienceLevel, RiskTolerance, Stage

# ---------------------------------------------------------------------------
# Layer 1: Industry compatibility (preferred industry -> idea category)
# ---------------------------------------------------------------------------

INDUSTRY_COMPATIBILITY: dict[str, dict[str, float]] = {
    "Technology": {
        "Technology": 1.0,
        "Software": 0.9,
        "SaaS": 0.9,
        "AI/ML": 0.8,
        "Fintech": 0.7,
        "Healthcare": 0.6,
        "E-commerce": 0.7,
        "Education": 0.6,
    },
    "Healthcare": {
        "Healthcare": 1.0,
        "Biotech": 0.9,
        "Medical Devices": 0.9,
        "Pharmaceuticals": 0.8,
        "Technology": 0.6,
        "AI/ML": 0.7,
    },
    "Finance": {
        "Finance": 1.0,
        "Fintech": 0.9,
        "Technology": 0.7,
        "E-commerce": 0.6,
    },
}


def industry_compatibility(
    preferred: str,
    category: str,
    table: dict[str, dict[str, float]] | None = None,
) -> float:
    """Table score for an investor preferring ``preferred`` seeing ``category``.

    Unlisted pairs score 0.0; the substring rules in the industry factor
    cover exact and near-exact names.
    """
    lookup = INDUSTRY_COMPATIBILITY if table is None else table
    return lookup.get(preferred, {}).get(category, 0.0)


# ---------------------------------------------------------------------------
# Layer 2: Stage adjacency (idea stage -> preferred stage)
# ---------------------------------------------------------------------------

STAGE_COMPATIBILITY: dict[Stage, dict[Stage, float]] = {
    Stage.CONCEPT: {
        Stage.CONCEPT: 1.0, Stage.MVP: 0.6, Stage.EARLY: 0.2, Stage.GROWTH: 0.0,
    },
    Stage.MVP: {
        Stage.CONCEPT: 0.8, Stage.MVP: 1.0, Stage.EARLY: 0.7, Stage.GROWTH: 0.3,
    },
    Stage.EARLY: {
        Stage.CONCEPT: 0.3, Stage.MVP: 0.8, Stage.EARLY: 1.0, Stage.GROWTH: 0.6,
    },
    Stage.GROWTH: {
        Stage.CONCEPT: 0.0, Stage.MVP: 0.4, Stage.EARLY: 0.8, Stage.GROWTH: 1.0,
    },
}


def stage_compatibility(idea_stage: Stage, preferred: Stage) -> float:
    return STAGE_COMPATIBILITY[idea_stage][preferred]


# ---------------------------------------------------------------------------
# Layer 3: Risk tolerance by stage
# ---------------------------------------------------------------------------

RISK_TOLERANCE_BY_STAGE: dict[Stage, dict[RiskTolerance, float]] = {
    Stage.CONCEPT: {
        RiskTolerance.HIGH: 1.0, RiskTolerance.MEDIUM: 0.7, RiskTolerance.LOW: 0.3,
    },
    Stage.MVP: {
        RiskTolerance.HIGH: 0.8, RiskTolerance.MEDIUM: 1.0, RiskTolerance.LOW: 0.5,
    },
    Stage.EARLY: {
        RiskTolerance.HIGH: 0.5, RiskTolerance.MEDIUM: 0.8, RiskTolerance.LOW: 1.0,
    },
    Stage.GROWTH: {
        RiskTolerance.HIGH: 0.3, RiskTolerance.MEDIUM: 0.6, RiskTolerance.LOW: 1.0,
    },
}

EARLY_STAGES: frozenset[Stage] = frozenset({Stage.CONCEPT, Stage.MVP})

SEASONED_CREATORS: frozenset[ExperienceLevel] = frozenset(
    {ExperienceLevel.EXPERIENCED, ExperienceLevel.SERIAL},
)


def risk_compatibility(stage: Stage, tolerance: RiskTolerance) -> float:
    return RISK_TOLERANCE_BY_STAGE[stage][tolerance]


# ---------------------------------------------------------------------------
# Layer 4: Experience ladder
# ---------------------------------------------------------------------------

EXPERIENCE_LADDER: tuple[ExperienceLevel, ...] = (
    ExperienceLevel.BEGINNER,
    ExperienceLevel.INTERMEDIATE,
    ExperienceLevel.EXPERIENCED,
    ExperienceLevel.SERIAL,
)


def experience_distance(a: ExperienceLevel, b: ExperienceLevel) -> int:
    return abs(EXPERIENCE_LADDER.index(a) - EXPERIENCE_LADDER.index(b))


# ---------------------------------------------------------------------------
# Layer 5: Geography
# ---------------------------------------------------------------------------

REGIONS: tuple[str, ...] = (
    "North America", "Europe", "Asia", "South America", "Africa", "Australia",
)

COUNTRIES: tuple[str, ...] = (
    "USA", "Canada", "UK", "Germany", "France", "India", "China", "Japan",
)


def infer_region(location: str) -> str:
    """Resolve a free-form location to the first region, then country, it names.

    Falls back to the location string itself when nothing is recognized.
    """
    loc = location.lower()
    for region in REGIONS:
        if region.lower() in loc:
            return region
    for country in COUNTRIES:
        if country.lower() in loc:
            return country
    return location
