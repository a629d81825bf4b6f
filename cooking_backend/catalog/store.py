from __future__ import annotations

import logging
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from ..config import DEFAULT_APP_CONFIG
from ..exceptions import (
    DataLoadError,
    DuplicateResourceError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from .models import Product, Recipe, RecipeIngredient

logger = logging.getLogger(__name__)

PRODUCTS_FILE = "products.csv"
RECIPES_FILE = "recipes.csv"
INGREDIENTS_FILE = "recipe_ingredients.csv"

# Fields an admin may change through update_recipe (ingredients handled apart).
RECIPE_FIELDS = frozenset({
    "title",
    "description",
    "cooking_steps",
    "cooking_time_minutes",
    "difficulty",
    "servings",
    "category",
    "image_url",
    "approved",
})

IngredientSpec = tuple[int, float, str]

_lock = threading.RLock()
_products: dict[int, Product] | None = None
_recipes: dict[int, Recipe] = {}
_data_dir: Path = DEFAULT_APP_CONFIG.data_dir
_revision: int = 0


def _read_csv(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(path)
    except FileNotFoundError as e:
        logger.error("Catalog file not found: %s", path)
        raise DataLoadError(f"File not found: {path}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error("Invalid CSV in %s", path)
        raise DataLoadError(f"Invalid CSV in {path}") from e


def _optional(value: Any) -> Any:
    return None if pd.isna(value) else value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return bool(value) if not pd.isna(value) else False


def _load(data_dir: Path) -> tuple[dict[int, Product], dict[int, Recipe]]:
    products_df = _read_csv(data_dir / PRODUCTS_FILE)
    recipes_df = _read_csv(data_dir / RECIPES_FILE)
    ingredients_df = _read_csv(data_dir / INGREDIENTS_FILE)

    try:
        if ingredients_df.duplicated(["recipe_id", "product_id"]).any():
            raise DataLoadError("Duplicate (recipe_id, product_id) pair in ingredients")

        products = {
            int(row.id): Product(
                id=int(row.id),
                name=str(row.name),
                category=str(row.category),
                is_common=_as_bool(row.is_common),
            )
            for row in products_df.itertuples(index=False)
        }

        by_recipe: dict[int, list[RecipeIngredient]] = {}
        for row in ingredients_df.itertuples(index=False):
            product = products.get(int(row.product_id))
            if product is None:
                logger.warning(
                    "Dropping ingredient of recipe %s: unknown product %s",
                    row.recipe_id, row.product_id,
                )
                continue
            by_recipe.setdefault(int(row.recipe_id), []).append(RecipeIngredient(
                product_id=product.id,
                product_name=product.name,
                quantity=float(row.quantity),
                unit=str(row.unit),
            ))

        recipes: dict[int, Recipe] = {}
        for row in recipes_df.itertuples(index=False):
            recipe_id = int(row.id)
            minutes = _optional(row.cooking_time_minutes)
            recipes[recipe_id] = Recipe(
                id=recipe_id,
                title=str(row.title),
                description=_optional(row.description),
                cooking_steps=str(row.cooking_steps),
                cooking_time_minutes=int(minutes) if minutes is not None else None,
                difficulty=str(_optional(row.difficulty) or "medium"),
                servings=int(_optional(row.servings) or 2),
                category=_optional(row.category),
                image_url=_optional(row.image_url),
                approved=_as_bool(row.is_approved),
                ingredients=tuple(by_recipe.get(recipe_id, ())),
            )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DataLoadError(f"Malformed catalog data in {data_dir}: {e}") from e

    logger.info(
        "Loaded %d products and %d recipes from %s",
        len(products), len(recipes), data_dir,
    )
    return products, recipes


def _catalog() -> dict[int, Product]:
    """Return the product map, loading the seed catalog on first call."""
    global _products, _recipes
    with _lock:
        if _products is None:
            _products, _recipes = _load(_data_dir)
        return _products


def _bump() -> None:
    global _revision
    _revision += 1


def reset_catalog(data_dir: Path | None = None) -> None:
    """Drop all in-memory changes; the seed files are re-read on next access.

    ``data_dir`` points the next load at another directory (tests use this);
    omitting it goes back to the configured seed directory.
    """
    global _products, _recipes, _data_dir
    with _lock:
        _products = None
        _recipes = {}
        _data_dir = data_dir or DEFAULT_APP_CONFIG.data_dir
        _bump()


def catalog_revision() -> int:
    return _revision


# ── Products ────────────────────────────────────────────────────────────


def list_products(category: str | None = None, search: str | None = None) -> list[Product]:
    products = sorted(_catalog().values(), key=lambda p: p.id)
    if category:
        needle = category.strip().lower()
        return [p for p in products if needle in p.category.lower()]
    if search:
        needle = search.strip().lower()
        return [p for p in products if needle in p.name.lower()]
    return products


def get_product(product_id: int) -> Product:
    product = _catalog().get(product_id)
    if product is None:
        raise ResourceNotFoundError(f"Product not found with id: {product_id}")
    return product


def _check_unique_name(name: str, ignore_id: int | None = None) -> None:
    lowered = name.lower()
    for p in _catalog().values():
        if p.id != ignore_id and p.name.lower() == lowered:
            raise DuplicateResourceError(f"Product with name {name!r} already exists")


def create_product(name: str, category: str, is_common: bool = True) -> Product:
    with _lock:
        products = _catalog()
        name = name.strip()
        _check_unique_name(name)
        product = Product(
            id=max(products, default=0) + 1,
            name=name,
            category=category.strip(),
            is_common=is_common,
        )
        products[product.id] = product
        _bump()
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


def update_product(
    product_id: int,
    name: str | None = None,
    category: str | None = None,
    is_common: bool | None = None,
) -> Product:
    with _lock:
        current = get_product(product_id)
        changes: dict[str, Any] = {}
        if name is not None:
            name = name.strip()
            _check_unique_name(name, ignore_id=product_id)
            changes["name"] = name
        if category is not None:
            changes["category"] = category.strip()
        if is_common is not None:
            changes["is_common"] = is_common
        updated = replace(current, **changes)
        _catalog()[product_id] = updated

        if updated.name != current.name:
            for recipe_id, recipe in list(_recipes.items()):
                if any(i.product_id == product_id for i in recipe.ingredients):
                    _recipes[recipe_id] = replace(recipe, ingredients=tuple(
                        replace(i, product_name=updated.name) if i.product_id == product_id else i
                        for i in recipe.ingredients
                    ))
        _bump()
    return updated


def delete_product(product_id: int) -> None:
    """Remove a product and every recipe ingredient that references it."""
    with _lock:
        get_product(product_id)
        del _catalog()[product_id]
        for recipe_id, recipe in list(_recipes.items()):
            kept = tuple(i for i in recipe.ingredients if i.product_id != product_id)
            if len(kept) != len(recipe.ingredients):
                _recipes[recipe_id] = replace(recipe, ingredients=kept)
        _bump()
    logger.info("Deleted product %s", product_id)


# ── Recipes ─────────────────────────────────────────────────────────────


def _resolve_ingredients(specs: Iterable[IngredientSpec]) -> tuple[RecipeIngredient, ...]:
    seen: set[int] = set()
    resolved: list[RecipeIngredient] = []
    for product_id, quantity, unit in specs:
        product = get_product(product_id)
        if product_id in seen:
            raise InvalidArgumentError(f"Product {product_id} listed twice in one recipe")
        if quantity <= 0:
            raise InvalidArgumentError(f"Quantity for product {product_id} must be positive")
        seen.add(product_id)
        resolved.append(RecipeIngredient(
            product_id=product.id,
            product_name=product.name,
            quantity=float(quantity),
            unit=unit,
        ))
    return tuple(resolved)


def get_recipe(recipe_id: int) -> Recipe:
    _catalog()
    recipe = _recipes.get(recipe_id)
    if recipe is None:
        raise ResourceNotFoundError(f"Recipe not found with id: {recipe_id}")
    return recipe


def list_recipes() -> list[Recipe]:
    _catalog()
    return [_recipes[k] for k in sorted(_recipes)]


def list_approved_recipes() -> list[Recipe]:
    """Approved recipes in catalog order, as consumed by the ranker."""
    return [r for r in list_recipes() if r.approved]


def create_recipe(
    *,
    title: str,
    cooking_steps: str,
    ingredients: Iterable[IngredientSpec] = (),
    description: str | None = None,
    cooking_time_minutes: int | None = None,
    difficulty: str = "medium",
    servings: int = 2,
    category: str | None = None,
    image_url: str | None = None,
    approved: bool = True,
) -> Recipe:
    with _lock:
        _catalog()
        recipe = Recipe(
            id=max(_recipes, default=0) + 1,
            title=title,
            description=description,
            cooking_steps=cooking_steps,
            cooking_time_minutes=cooking_time_minutes,
            difficulty=difficulty,
            servings=servings,
            category=category,
            image_url=image_url,
            approved=approved,
            ingredients=_resolve_ingredients(ingredients),
        )
        _recipes[recipe.id] = recipe
        _bump()
    logger.info("Created recipe %s (%s) with %d ingredients",
                recipe.id, recipe.title, len(recipe.ingredients))
    return recipe


def update_recipe(
    recipe_id: int,
    ingredients: Iterable[IngredientSpec] | None = None,
    **changes: Any,
) -> Recipe:
    unknown = set(changes) - RECIPE_FIELDS
    if unknown:
        raise InvalidArgumentError(f"Unknown recipe fields: {', '.join(sorted(unknown))}")
    with _lock:
        recipe = get_recipe(recipe_id)
        if ingredients is not None:
            changes["ingredients"] = _resolve_ingredients(ingredients)
        updated = replace(recipe, **changes)
        _recipes[recipe_id] = updated
        _bump()
    return updated


def delete_recipe(recipe_id: int) -> None:
    with _lock:
        get_recipe(recipe_id)
        del _recipes[recipe_id]
        _bump()
    logger.info("Deleted recipe %s", recipe_id)
