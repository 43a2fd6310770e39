"""In-memory repository of profiles, ideas and offers.

Populated by idempotent bulk loads keyed on id (last write wins). Ideas that
are not published and offers that are not active are never stored, so a later
status flip only takes effect on the next reload.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError

from src.venture_matching.models import BusinessIdea, InvestmentOffer, UserProfile

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def _coerce(model: type[_M], record: _M | dict[str, Any]) -> _M | None:
    if isinstance(record, model):
        return record
    try:
        return model.model_validate(record)
    except ValidationError as exc:
        logger.warning(
            "Skipping malformed %s record %r: %d validation error(s)",
            model.__name__,
            record.get("id") if isinstance(record, dict) else record,
            exc.error_count(),
        )
        return None


class Repository:
    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}
        self._ideas: dict[str, BusinessIdea] = {}
        self._offers: dict[str, InvestmentOffer] = {}

    # -- loading ------------------------------------------------------------

    def load_profiles(
        self, records: Iterable[UserProfile | dict[str, Any]],
    ) -> int:
        stored = 0
        for record in records:
            profile = _coerce(UserProfile, record)
            if profile is None:
                continue
            self._profiles[profile.id] = profile
            stored += 1
        logger.info("Loaded %d profiles (%d total)", stored, len(self._profiles))
        return stored

    def load_ideas(
        self, records: Iterable[BusinessIdea | dict[str, Any]],
    ) -> int:
        stored = 0
        for record in records:
            idea = _coerce(BusinessIdea, record)
            if idea is None or idea.status != "published":
                continue
            self._ideas[idea.id] = idea
            stored += 1
        logger.info("Loaded %d published ideas (%d total)", stored, len(self._ideas))
        return stored

    def load_offers(
        self, records: Iterable[InvestmentOffer | dict[str, Any]],
    ) -> int:
        stored = 0
        for record in records:
            offer = _coerce(InvestmentOffer, record)
            if offer is None or not offer.is_active:
                continue
            self._offers[offer.id] = offer
            stored += 1
        logger.info("Loaded %d active offers (%d total)", stored, len(self._offers))
        return stored

    # -- lookups ------------------------------------------------------------

    def profile(self, profile_id: str) -> UserProfile | None:
        return self._profiles.get(profile_id)

    def ideas(self) -> list[BusinessIdea]:
        return list(self._ideas.values())

    def offers(self) -> list[InvestmentOffer]:
        return list(self._offers.values())

    def ideas_by_creator(self, creator_id: str) -> list[BusinessIdea]:
        return [i for i in self._ideas.values() if i.creator_id == creator_id]

    def offers_by_investor(self, investor_id: str) -> list[InvestmentOffer]:
        return [o for o in self._offers.values() if o.investor_id == investor_id]

    def counts(self) -> dict[str, int]:
        return {
            "profiles": len(self._profiles),
            "ideas": len(self._ideas),
            "offers": len(self._offers),
        }
