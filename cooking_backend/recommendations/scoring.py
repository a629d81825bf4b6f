"""
Per-recipe scoring.

A recipe is scored against a snapshot of the user's pantry:

* every ingredient lands in exactly one bucket, checked in this order:
  **excluded** (the user flagged the product), **available** (the user owns
  it), **missing** (neither);
* ``match_percentage`` is the available share of all ingredients, halved
  once if any ingredient is excluded, rounded half-up to one decimal;
* ``ranking_score`` starts from the match percentage and adds a
  completeness bonus (nothing missing, nothing excluded) and a bonus for
  easy recipes.  It is only used for ordering and never shown to users.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..catalog.models import Recipe
from .config import DEFAULT_RANKING_CONFIG, RankingConfig


@dataclass(frozen=True)
class UserContext:
    owned_product_ids: frozenset[int] = frozenset()
    excluded_product_ids: frozenset[int] = frozenset()

    @classmethod
    def from_ids(
        cls,
        owned: Iterable[int] | None = None,
        excluded: Iterable[int] | None = None,
    ) -> UserContext:
        return cls(
            owned_product_ids=frozenset(owned or ()),
            excluded_product_ids=frozenset(excluded or ()),
        )


@dataclass(frozen=True)
class RecipeScore:
    ranking_score: float
    match_percentage: float
    missing_ingredients: tuple[str, ...] = ()
    available_count: int = 0
    excluded_count: int = 0
    total_count: int = 0


def round_half_up(value: float, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def is_easy(difficulty: str | None, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> bool:
    if not difficulty:
        return False
    label = difficulty.casefold()
    return any(label == easy.casefold() for easy in config.easy_labels)


def score_recipe(
    recipe: Recipe,
    context: UserContext,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> RecipeScore:
    """Score one recipe against the user's owned and excluded products."""
    total = len(recipe.ingredients)
    if total == 0:
        return RecipeScore(ranking_score=0.0, match_percentage=0.0)

    available = 0
    excluded = 0
    missing: list[str] = []
    for ingredient in recipe.ingredients:
        if ingredient.product_id in context.excluded_product_ids:
            excluded += 1
        elif ingredient.product_id in context.owned_product_ids:
            available += 1
        else:
            missing.append(ingredient.product_name)

    raw = available / total * 100
    if excluded:
        raw *= config.exclusion_factor
    match_percentage = min(100.0, max(0.0, round_half_up(raw)))

    ranking_score = match_percentage
    if not missing and not excluded:
        ranking_score += config.completeness_bonus
    if is_easy(recipe.difficulty, config):
        ranking_score += config.easy_bonus

    return RecipeScore(
        ranking_score=ranking_score,
        match_percentage=match_percentage,
        missing_ingredients=tuple(missing),
        available_count=available,
        excluded_count=excluded,
        total_count=total,
    )
