from __future__ import annotations

import logging
import time

from ..analytics.store import record_event
from ..catalog.schemas import recipe_out
from ..catalog.store import catalog_revision, list_approved_recipes
from ..exceptions import InvalidArgumentError
from ..inventory.store import is_favorite, snapshot
from .cache import cache_get, cache_set, make_key
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import RecommendationItem, RecommendationResponse
from .ranking import RankedRecipe, rank_recipes, validate_limit

logger = logging.getLogger(__name__)


def get_recommendations(
    user_id: str,
    limit: int | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> RecommendationResponse:
    start_time = time.time()

    if limit is None:
        limit = config.default_limit
    validate_limit(limit)
    if limit > config.max_limit:
        raise InvalidArgumentError(f"limit must not exceed {config.max_limit}, got {limit}")

    context = snapshot(user_id)

    # --- Catalog snapshot (load failures propagate to the caller) ---
    revision = catalog_revision()
    recipes = list_approved_recipes()

    # --- Cache check ---
    key = make_key(context, limit, revision, config)
    ranked: list[RankedRecipe] | None = cache_get(key)
    cache_hit = ranked is not None
    if ranked is None:
        ranked = rank_recipes(recipes, context, limit, config=config)
        cache_set(key, ranked, ttl=config.cache_ttl_seconds)

    # --- Assemble response ---
    items = [
        RecommendationItem(
            recipe=recipe_out(r.recipe),
            match_percentage=r.score.match_percentage,
            missing_ingredients=list(r.score.missing_ingredients),
            is_favorite=is_favorite(user_id, r.recipe.id),
            score=r.score.ranking_score,
        )
        for r in ranked
    ]

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Recommendations for user %s: %d of %d recipes (cache_hit=%s, %.1f ms)",
        user_id, len(items), len(recipes), cache_hit, elapsed_ms,
    )
    record_event("search", {
        "user_id": user_id,
        "owned_count": len(context.owned_product_ids),
        "excluded_count": len(context.excluded_product_ids),
        "limit": limit,
        "total_candidates": len(recipes),
        "results_returned": len(items),
        "missing_ingredients": [name for item in items for name in item.missing_ingredients],
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })

    return RecommendationResponse(recommendations=items, total_candidates=len(recipes))
