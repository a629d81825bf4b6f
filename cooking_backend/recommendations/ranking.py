from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..analytics.store import record_event
from ..catalog.models import Recipe
from ..exceptions import InvalidArgumentError
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .scoring import RecipeScore, UserContext, score_recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedRecipe:
    recipe: Recipe
    score: RecipeScore
    catalog_index: int


def ranking_key(item: RankedRecipe) -> tuple[float, int]:
    """Highest score first; equal scores keep catalog order."""
    return (-item.score.ranking_score, item.catalog_index)


def validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError(f"limit must be an integer, got {limit!r}")
    if limit <= 0:
        raise InvalidArgumentError(f"limit must be positive, got {limit}")
    return limit


def _score_all(
    recipes: Sequence[Recipe],
    context: UserContext,
    config: RankingConfig,
) -> list[RankedRecipe]:
    scored: list[RankedRecipe] = []
    for index, recipe in enumerate(recipes):
        try:
            if not recipe.approved:
                continue
            score = score_recipe(recipe, context, config)
        except Exception:
            recipe_id = getattr(recipe, "id", None)
            logger.exception("Skipping recipe %s: scoring failed", recipe_id)
            record_event("recipe_skipped", {"recipe_id": recipe_id})
            continue
        scored.append(RankedRecipe(recipe=recipe, score=score, catalog_index=index))
    return scored


def rank_recipes(
    recipes: Sequence[Recipe],
    context: UserContext,
    limit: int = DEFAULT_RANKING_CONFIG.default_limit,
    *,
    drop_zero_scores: bool = True,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedRecipe]:
    """
    Score every approved recipe and return the best ``limit`` of them.

    A recipe that fails to score is logged and skipped; the rest of the
    catalog is still ranked.  Raises ``InvalidArgumentError`` only for a
    non-positive ``limit``.
    """
    validate_limit(limit)
    if not recipes:
        return []

    scored = _score_all(recipes, context, config)
    if drop_zero_scores:
        scored = [r for r in scored if r.score.ranking_score > 0]

    scored.sort(key=ranking_key)
    return scored[:limit]
