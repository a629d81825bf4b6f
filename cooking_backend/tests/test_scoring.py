from __future__ import annotations

from cooking_backend.catalog.models import Recipe, RecipeIngredient
from cooking_backend.recommendations.scoring import (
    UserContext,
    is_easy,
    round_half_up,
    score_recipe,
)


def _recipe(product_ids, difficulty="medium", recipe_id=1):
    return Recipe(
        id=recipe_id,
        title=f"Recipe {recipe_id}",
        cooking_steps="Cook.",
        difficulty=difficulty,
        ingredients=tuple(
            RecipeIngredient(product_id=pid, product_name=f"P{pid}", quantity=1.0, unit="pcs")
            for pid in product_ids
        ),
    )


def test_no_ingredients_scores_zero():
    score = score_recipe(_recipe([], difficulty="easy"), UserContext.from_ids({1}, {2}))
    assert score.match_percentage == 0.0
    assert score.missing_ingredients == ()
    assert score.ranking_score == 0.0


def test_fully_owned_recipe_gets_completeness_bonus():
    score = score_recipe(_recipe([1, 2, 3]), UserContext.from_ids({1, 2, 3, 4}))
    assert score.match_percentage == 100.0
    assert score.missing_ingredients == ()
    assert score.ranking_score == 130.0


def test_easy_recipe_gets_difficulty_bonus_on_top():
    score = score_recipe(_recipe([1, 2], difficulty="Easy"), UserContext.from_ids({1, 2}))
    assert score.ranking_score == 135.0


def test_half_owned_recipe_lists_missing_names():
    score = score_recipe(_recipe([1, 2]), UserContext.from_ids({1}))
    assert score.match_percentage == 50.0
    assert score.missing_ingredients == ("P2",)
    assert score.ranking_score == 50.0


def test_excluded_ingredient_halves_match():
    score = score_recipe(_recipe([1, 2]), UserContext.from_ids(owned={2}, excluded={1}))
    assert score.available_count == 1
    assert score.excluded_count == 1
    assert score.total_count == 2
    assert score.match_percentage == 25.0
    assert score.missing_ingredients == ()
    assert score.ranking_score == 25.0


def test_exclusion_penalty_is_flat_not_per_ingredient():
    one_excluded = score_recipe(
        _recipe([1, 2, 3, 4]), UserContext.from_ids(owned={1, 2}, excluded={3}),
    )
    two_excluded = score_recipe(
        _recipe([1, 2, 3, 4]), UserContext.from_ids(owned={1, 2}, excluded={3, 4}),
    )
    assert one_excluded.match_percentage == two_excluded.match_percentage == 25.0


def test_exclusion_wins_over_ownership():
    score = score_recipe(_recipe([1, 2]), UserContext.from_ids(owned={1, 2}, excluded={1}))
    assert score.available_count == 1
    assert score.excluded_count == 1
    assert score.match_percentage == 25.0
    # no completeness bonus while something is excluded
    assert score.ranking_score == 25.0


def test_missing_never_contains_excluded_products():
    score = score_recipe(_recipe([1, 2, 3]), UserContext.from_ids(excluded={2}))
    assert score.missing_ingredients == ("P1", "P3")


def test_missing_keeps_ingredient_order():
    score = score_recipe(_recipe([5, 3, 9, 1]), UserContext.from_ids({3}))
    assert score.missing_ingredients == ("P5", "P9", "P1")


def test_match_rounds_half_up_to_one_decimal():
    thirds = score_recipe(_recipe([1, 2, 3]), UserContext.from_ids({1, 2}))
    assert thirds.match_percentage == 66.7

    # 1 of 8 owned = 12.5, halved = 6.25 -> 6.3
    eighths = score_recipe(
        _recipe([1, 2, 3, 4, 5, 6, 7, 8]), UserContext.from_ids(owned={1}, excluded={8}),
    )
    assert eighths.match_percentage == 6.3


def test_round_half_up():
    assert round_half_up(0.25) == 0.3
    assert round_half_up(33.333333) == 33.3
    assert round_half_up(99.95) == 100.0


def test_easy_labels_are_case_insensitive():
    assert is_easy("easy")
    assert is_easy("EASY")
    assert not is_easy(" easy ")
    assert is_easy("Легко")
    assert not is_easy("medium")
    assert not is_easy(None)


def test_null_sets_are_treated_as_empty():
    context = UserContext.from_ids(None, None)
    score = score_recipe(_recipe([1, 2]), context)
    assert score.match_percentage == 0.0
    assert score.missing_ingredients == ("P1", "P2")
    assert score.ranking_score == 0.0
