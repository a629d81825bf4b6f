from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str
    is_common: bool = True


@dataclass(frozen=True)
class RecipeIngredient:
    product_id: int
    product_name: str
    quantity: float
    unit: str


@dataclass(frozen=True)
class Recipe:
    """Read-only snapshot of a recipe and its resolved ingredient list."""

    id: int
    title: str
    cooking_steps: str
    description: str | None = None
    cooking_time_minutes: int | None = None
    difficulty: str = "medium"
    servings: int = 2
    category: str | None = None
    image_url: str | None = None
    approved: bool = True
    ingredients: tuple[RecipeIngredient, ...] = field(default_factory=tuple)
