"""Top-level orchestrator: ties repository, scoring, cache and analytics together.

Search pipeline for one actor:
  1. Resolve the actor's profile                 (unknown actor -> no matches)
  2. Pair the actor's own ideas/offers with every counterpart record
  3. Score each pair across four factors + bonuses  (deterministic)
  4. Drop pairs under the minimum match score
  5. Rank, truncate, attach reasoning, cache for the TTL
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

from src.venture_matching.analytics import match_statistics
from src.venture_matching.cache import CacheKey, MatchCache
from src.venture_matching.config import Settings, settings as default_settings
from src.venture_matching.explanation.generator import reasoning_for
from src.venture_matching.models import (
    BusinessIdea,
    InvestmentOffer,
    MatchResult,
    MatchStatistics,
    Role,
    UserProfile,
)
from src.venture_matching.repository import Repository
from src.venture_matching.scoring.composite import (
    compute_factors,
    confidence_level,
    overall_score,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"

Candidate = tuple[BusinessIdea, InvestmentOffer, UserProfile, UserProfile]


def load_sample_catalog(
    path: Path | None = None,
) -> tuple[list[dict], list[dict], list[dict]]:
    """Read the bundled demo catalog.  Returns (profiles, ideas, offers)."""
    path = path or DATA_DIR / "sample_catalog.json"
    with open(path) as f:
        raw = json.load(f)
    return raw.get("profiles", []), raw.get("ideas", []), raw.get("offers", [])


class MatchingEngine:
    """Process-wide matcher owned by the host application.

    Call ``start()`` to begin the periodic cache sweep and ``close()`` to
    stop it, or use the engine as a context manager.
    """

    def __init__(
        self,
        config: Settings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.config = config or default_settings
        self.repository = Repository()
        cache_kwargs: dict[str, Any] = {
            "ttl_seconds": self.config.cache_ttl_seconds,
            "sweep_interval_seconds": self.config.cache_sweep_interval_seconds,
        }
        if clock is not None:
            cache_kwargs["clock"] = clock
        self.cache = MatchCache(**cache_kwargs)
        self._lock = threading.RLock()

    # -- lifecycle ------------------------------------------------------------

    def start(self) -> MatchingEngine:
        self.cache.start()
        return self

    def close(self) -> None:
        self.cache.stop()

    def __enter__(self) -> MatchingEngine:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- loading --------------------------------------------------------------

    def load_user_profiles(
        self, profiles: Iterable[UserProfile | dict[str, Any]],
    ) -> int:
        with self._lock:
            return self.repository.load_profiles(profiles)

    def load_business_ideas(
        self, ideas: Iterable[BusinessIdea | dict[str, Any]],
    ) -> int:
        with self._lock:
            return self.repository.load_ideas(ideas)

    def load_investment_offers(
        self, offers: Iterable[InvestmentOffer | dict[str, Any]],
    ) -> int:
        with self._lock:
            return self.repository.load_offers(offers)

    def load_catalog(
        self,
        profiles: Iterable[UserProfile | dict[str, Any]],
        ideas: Iterable[BusinessIdea | dict[str, Any]],
        offers: Iterable[InvestmentOffer | dict[str, Any]],
    ) -> None:
        with self._lock:
            self.load_user_profiles(profiles)
            self.load_business_ideas(ideas)
            self.load_investment_offers(offers)

    def clear_cache(self) -> None:
        self.cache.clear()

    # -- search ---------------------------------------------------------------

    def _candidates(self, actor: UserProfile, role: Role) -> Iterator[Candidate]:
        repo = self.repository
        if role == "creator":
            for idea in repo.ideas_by_creator(actor.id):
                for offer in repo.offers():
                    investor = repo.profile(offer.investor_id)
                    if investor is None:
                        continue
                    yield idea, offer, actor, investor
        else:
            for offer in repo.offers_by_investor(actor.id):
                for idea in repo.ideas():
                    creator = repo.profile(idea.creator_id)
                    if creator is None:
                        continue
                    yield idea, offer, creator, actor

    def _search(
        self, actor_id: str, role: Role, limit: int,
    ) -> list[MatchResult] | None:
        actor = self.repository.profile(actor_id)
        if actor is None:
            logger.info("No profile for %s %s; returning no matches", role, actor_id)
            return None

        matches: list[MatchResult] = []
        scored = 0
        for idea, offer, creator, investor in self._candidates(actor, role):
            factors = compute_factors(idea, offer, creator, investor, self.config)
            score = overall_score(factors, self.config)
            scored += 1
            if score < self.config.min_match_score:
                continue
            matches.append(MatchResult(
                idea_id=idea.id,
                investor_id=investor.id,
                creator_id=creator.id,
                offer_id=offer.id,
                match_score=score,
                factors=factors,
                confidence=confidence_level(score, self.config),
                reasoning=reasoning_for(factors, idea, offer, self.config),
            ))

        matches.sort(key=lambda m: m.match_score, reverse=True)
        top = matches[:limit]
        logger.info(
            "Search for %s %s: %d pairs scored, %d above %.2f, %d returned",
            role, actor_id, scored, len(matches),
            self.config.min_match_score, len(top),
        )
        return top

    def find_matches(
        self, user_id: str, role: Role, limit: int | None = None,
    ) -> list[MatchResult]:
        """Ranked matches for ``user_id`` acting as ``role``, served from cache
        while fresh."""
        limit = self.config.default_limit if limit is None else limit
        if limit <= 0:
            return []

        key = CacheKey(user_id, role, limit)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Match cache hit for %s", key)
            return list(cached)

        with self._lock:
            results = self._search(user_id, role, limit)
        # Unknown actors are not cached so a later profile load is seen at once.
        if results is None:
            return []
        self.cache.put(key, results)
        return list(results)

    def get_match_statistics(self, user_id: str, role: Role) -> MatchStatistics:
        matches = self.find_matches(user_id, role, self.config.statistics_limit)
        return match_statistics(matches)
