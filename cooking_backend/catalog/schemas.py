from __future__ import annotations

from pydantic import BaseModel, Field

from .models import Product, Recipe


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=50)
    is_common: bool = True


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    is_common: bool | None = None


class ProductOut(BaseModel):
    id: int
    name: str
    category: str
    is_common: bool


class IngredientIn(BaseModel):
    product_id: int
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=20)


class IngredientOut(BaseModel):
    product_id: int
    product_name: str
    quantity: float
    unit: str


class RecipeIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    cooking_steps: str = Field(..., min_length=1)
    cooking_time_minutes: int | None = Field(default=None, ge=0)
    difficulty: str = "medium"
    servings: int = Field(default=2, ge=1)
    category: str | None = None
    image_url: str | None = Field(default=None, max_length=500)
    approved: bool = True
    ingredients: list[IngredientIn] = Field(default_factory=list)


class RecipeUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    cooking_steps: str | None = Field(default=None, min_length=1)
    cooking_time_minutes: int | None = Field(default=None, ge=0)
    difficulty: str | None = None
    servings: int | None = Field(default=None, ge=1)
    category: str | None = None
    image_url: str | None = Field(default=None, max_length=500)
    approved: bool | None = None
    ingredients: list[IngredientIn] | None = None


class RecipeOut(BaseModel):
    id: int
    title: str
    description: str | None
    cooking_steps: str
    cooking_time_minutes: int | None
    difficulty: str
    servings: int
    category: str | None
    image_url: str | None
    approved: bool
    ingredients: list[IngredientOut]


def product_out(product: Product) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        category=product.category,
        is_common=product.is_common,
    )


def recipe_out(recipe: Recipe) -> RecipeOut:
    return RecipeOut(
        id=recipe.id,
        title=recipe.title,
        description=recipe.description,
        cooking_steps=recipe.cooking_steps,
        cooking_time_minutes=recipe.cooking_time_minutes,
        difficulty=recipe.difficulty,
        servings=recipe.servings,
        category=recipe.category,
        image_url=recipe.image_url,
        approved=recipe.approved,
        ingredients=[
            IngredientOut(
                product_id=i.product_id,
                product_name=i.product_name,
                quantity=i.quantity,
                unit=i.unit,
            )
            for i in recipe.ingredients
        ],
    )


def ingredient_specs(items: list[IngredientIn]) -> list[tuple[int, float, str]]:
    return [(i.product_id, i.quantity, i.unit) for i in items]
