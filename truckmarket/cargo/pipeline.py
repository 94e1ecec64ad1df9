from __future__ import annotations

import logging

from ..listings.store import ListingStore
from ..llm.groq_client import TextGenerator
from .composer import compose_recommendation
from .extractor import extract_filters
from .filters import filter_listings
from .models import CargoFilters, RecommendationResult

logger = logging.getLogger(__name__)


def recommend_cargo(
    query: str,
    store: ListingStore,
    generator: TextGenerator,
    filters: CargoFilters | None = None,
) -> RecommendationResult:
    # 1. Interpret the free-text request
    extracted = extract_filters(query)

    # 2. Narrow the listing set; explicit filters only ever narrow further
    candidates = filter_listings(store.list_all(), extracted)
    if filters is not None:
        candidates = filter_listings(candidates, filters)

    logger.info(
        "Cargo query matched %d listings (extracted=%s, explicit=%s)",
        len(candidates),
        extracted.model_dump(exclude_none=True),
        filters.model_dump(exclude_none=True) if filters else {},
    )

    # 3. Recommendation text (LLM or deterministic fallback)
    return compose_recommendation(query, candidates, generator)
