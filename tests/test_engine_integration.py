"""Integration-level tests: loading, searching, caching and statistics."""

from __future__ import annotations

import pytest

from src.venture_matching.config import Settings
from src.venture_matching.engine import DATA_DIR, MatchingEngine, load_sample_catalog
from src.venture_matching.models import (
    AmountRange,
    BusinessIdea,
    InvestmentOffer,
    UserProfile,
)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _tech_engine(clock: FakeClock | None = None) -> MatchingEngine:
    engine = MatchingEngine(clock=clock)
    engine.load_user_profiles([
        UserProfile(
            id="user1", user_type="creator", name="John Doe",
            industry="Technology", skills=["React", "Node.js"],
        ),
        UserProfile(id="user2", user_type="investor", name="Jane Roe"),
    ])
    engine.load_business_ideas([
        BusinessIdea(
            id="idea1", creator_id="user1",
            title="AI-Powered Analytics Platform",
            category="Technology", tags=["AI", "Analytics", "SaaS"],
            funding_goal=500_000, equity_offered=15, stage="mvp",
            timeline="12 months", status="published",
        ),
    ])
    engine.load_investment_offers([
        InvestmentOffer(
            id="offer1", investor_id="user2", title="Tech Growth Fund",
            amount_range=AmountRange(min=250_000, max=1_000_000),
            preferred_equity=AmountRange(min=10, max=25),
            preferred_stages=["mvp", "early"],
            preferred_industries=["Technology", "SaaS"],
            is_active=True,
        ),
    ])
    return engine


@pytest.fixture
def catalog_engine():
    engine = MatchingEngine()
    engine.load_catalog(*load_sample_catalog())
    return engine


class TestFindMatches:
    def test_single_pair_example(self):
        matches = _tech_engine().find_matches("user1", "creator", 10)

        assert len(matches) == 1
        m = matches[0]
        f = m.factors
        assert (m.idea_id, m.offer_id, m.creator_id, m.investor_id) == (
            "idea1", "offer1", "user1", "user2",
        )
        assert f.amount_compatibility == 1.0
        assert f.industry_alignment >= 0.8
        assert f.stage_preference == 1.0
        core = (
            f.amount_compatibility * 0.25
            + f.industry_alignment * 0.35
            + f.stage_preference * 0.15
            + f.risk_alignment * 0.25
        )
        assert m.match_score == pytest.approx(min(core, 1.0), abs=0.05)
        assert m.confidence == "high"

    def test_investor_side_sees_same_pair(self):
        matches = _tech_engine().find_matches("user2", "investor", 10)
        assert [(m.idea_id, m.offer_id) for m in matches] == [("idea1", "offer1")]

    def test_unknown_user(self):
        assert _tech_engine().find_matches("nonexistent", "creator", 10) == []

    def test_unresolvable_counterpart_is_skipped(self):
        engine = MatchingEngine()
        engine.load_user_profiles([UserProfile(id="c", user_type="creator")])
        engine.load_business_ideas([BusinessIdea(
            id="i", creator_id="c", category="Technology",
            funding_goal=100, stage="mvp", status="published",
        )])
        engine.load_investment_offers([InvestmentOffer(
            id="o", investor_id="ghost", amount_range=AmountRange(min=0, max=1000),
            is_active=True,
        )])
        assert engine.find_matches("c", "creator") == []

    def test_unresolvable_creator_is_skipped(self):
        engine = MatchingEngine()
        engine.load_user_profiles([UserProfile(id="v", user_type="investor")])
        engine.load_business_ideas([BusinessIdea(
            id="i", creator_id="ghost", category="Technology",
            funding_goal=100, stage="mvp", status="published",
        )])
        engine.load_investment_offers([InvestmentOffer(
            id="o", investor_id="v", amount_range=AmountRange(min=0, max=1000),
            preferred_stages=["mvp"], preferred_industries=["Technology"],
            is_active=True,
        )])
        assert engine.find_matches("v", "investor") == []

    def test_idea_without_stage_scores_neutral(self):
        engine = MatchingEngine()
        engine.load_user_profiles([
            {"id": "c", "user_type": "creator", "experience": "serial"},
            {"id": "v", "user_type": "investor", "risk_tolerance": "low"},
        ])
        engine.load_business_ideas([{
            "id": "i", "creator_id": "c", "category": "Technology",
            "funding_goal": 500, "status": "published",
        }])
        engine.load_investment_offers([{
            "id": "o", "investor_id": "v", "amount_range": {"min": 0, "max": 1000},
            "preferred_stages": ["growth"], "preferred_industries": ["Technology"],
            "is_active": True,
        }])
        matches = engine.find_matches("c", "creator")
        assert len(matches) == 1
        assert matches[0].factors.stage_preference == 0.5
        assert matches[0].factors.risk_alignment == 0.5

    def test_non_positive_limit(self):
        assert _tech_engine().find_matches("user1", "creator", 0) == []


class TestSampleCatalog:
    def test_catalog_file_present(self):
        assert (DATA_DIR / "sample_catalog.json").exists()

    def test_draft_and_inactive_records_are_dropped(self, catalog_engine):
        counts = catalog_engine.repository.counts()
        assert counts == {"profiles": 6, "ideas": 3, "offers": 2}

    def test_creator_ranking(self, catalog_engine):
        matches = catalog_engine.find_matches("creator-karthik", "creator")
        assert [m.offer_id for m in matches] == [
            "offer-chennai-growth", "offer-kerala-health",
        ]
        assert matches[0].match_score == 1.0
        assert matches[1].match_score == pytest.approx(0.87)

    def test_investor_ranking(self, catalog_engine):
        matches = catalog_engine.find_matches("investor-arjun", "investor")
        assert [m.idea_id for m in matches] == ["idea-analytics", "idea-telehealth"]
        assert matches[1].match_score == pytest.approx(0.905)

    def test_weak_pairs_are_filtered(self, catalog_engine):
        for actor, role in [
            ("creator-karthik", "creator"),
            ("creator-priya", "creator"),
            ("investor-arjun", "investor"),
            ("investor-lakshmi", "investor"),
        ]:
            for m in catalog_engine.find_matches(actor, role):
                assert m.match_score >= 0.4
        assert catalog_engine.find_matches("creator-deepa", "creator") == []

    def test_limit_truncates(self, catalog_engine):
        matches = catalog_engine.find_matches("investor-lakshmi", "investor", 1)
        assert [m.idea_id for m in matches] == ["idea-telehealth"]

    def test_results_sorted(self, catalog_engine):
        scores = [m.match_score for m in catalog_engine.find_matches(
            "investor-lakshmi", "investor",
        )]
        assert scores == sorted(scores, reverse=True)


class TestCaching:
    def test_repeat_calls_are_identical(self):
        engine = _tech_engine()
        first = engine.find_matches("user1", "creator", 10)
        second = engine.find_matches("user1", "creator", 10)
        assert second == first
        assert second[0] is first[0]

    def test_reload_is_not_seen_until_expiry(self):
        clock = FakeClock()
        engine = _tech_engine(clock)
        assert len(engine.find_matches("user1", "creator", 10)) == 1

        engine.load_investment_offers([InvestmentOffer(
            id="offer2", investor_id="user2",
            amount_range=AmountRange(min=250_000, max=1_000_000),
            preferred_stages=["mvp"], preferred_industries=["Technology"],
            is_active=True,
        )])
        clock.now += 29 * 60
        assert len(engine.find_matches("user1", "creator", 10)) == 1

        clock.now += 60
        assert len(engine.find_matches("user1", "creator", 10)) == 2

    def test_clear_cache_forces_recompute(self):
        engine = _tech_engine(FakeClock())
        engine.find_matches("user1", "creator", 10)
        engine.load_investment_offers([InvestmentOffer(
            id="offer2", investor_id="user2",
            amount_range=AmountRange(min=250_000, max=1_000_000),
            is_active=True,
        )])
        engine.clear_cache()
        assert len(engine.find_matches("user1", "creator", 10)) == 2

    def test_unknown_user_is_not_cached(self):
        engine = _tech_engine()
        assert engine.find_matches("late", "creator", 10) == []
        engine.load_user_profiles([UserProfile(id="late", user_type="creator")])
        engine.load_business_ideas([BusinessIdea(
            id="late-idea", creator_id="late", category="SaaS",
            funding_goal=400_000, stage="early", status="published",
        )])
        assert len(engine.find_matches("late", "creator", 10)) == 1

    def test_context_manager_runs_sweeper(self):
        with MatchingEngine() as engine:
            assert engine.cache.running
        assert not engine.cache.running


class TestStatistics:
    def test_statistics_for_user_with_matches(self, catalog_engine):
        stats = catalog_engine.get_match_statistics("investor-arjun", "investor")
        assert stats.total_matches == 2
        assert stats.high_confidence_matches == 2
        assert stats.average_score == pytest.approx(0.9525)
        assert stats.top_factors[0].factor == "stage_preference"
        assert stats.improvement_suggestions == []

    def test_statistics_without_matches(self, catalog_engine):
        stats = catalog_engine.get_match_statistics("creator-deepa", "creator")
        assert stats.total_matches == 0
        assert stats.average_score == 0.0

    def test_statistics_use_configured_limit(self):
        engine = MatchingEngine(Settings(statistics_limit=1))
        engine.load_catalog(*load_sample_catalog())
        stats = engine.get_match_statistics("investor-lakshmi", "investor")
        assert stats.total_matches == 1

