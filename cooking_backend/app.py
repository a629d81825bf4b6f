from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .catalog import store as catalog
from .catalog.schemas import (
    ProductIn,
    ProductOut,
    ProductUpdate,
    RecipeIn,
    RecipeOut,
    RecipeUpdate,
    ingredient_specs,
    product_out,
    recipe_out,
)
from .config import configure_logging
from .exceptions import (
    DataLoadError,
    DuplicateResourceError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from .inventory import store as inventory
from .inventory.schemas import (
    ExclusionIn,
    ExclusionOut,
    MutationResult,
    PantryItemIn,
    PantryItemOut,
)
from .recommendations.cache import get_cache_stats
from .recommendations.models import RecommendationResponse
from .recommendations.retrieval import get_recommendations

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Pantry Recipe Recommendation API", version="1.0.0")


# ── Error mapping ────────────────────────────────────────────────────────


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(ResourceNotFoundError)
async def _not_found(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    return _error(404, exc)


@app.exception_handler(DuplicateResourceError)
async def _duplicate(request: Request, exc: DuplicateResourceError) -> JSONResponse:
    return _error(409, exc)


@app.exception_handler(InvalidArgumentError)
async def _invalid(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    return _error(422, exc)


@app.exception_handler(DataLoadError)
async def _unavailable(request: Request, exc: DataLoadError) -> JSONResponse:
    logger.error("Catalog unavailable: %s", exc)
    return _error(503, exc)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Pantry Recipe Recommendation API is running"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/health")
def api_health() -> dict[str, str]:
    return health()


@app.get("/products/catalog", response_model=list[ProductOut])
def product_catalog(category: str | None = None, search: str | None = None) -> list[ProductOut]:
    return [product_out(p) for p in catalog.list_products(category, search)]


@app.get("/recipes/{recipe_id}", response_model=RecipeOut)
def recipe_detail(recipe_id: int) -> RecipeOut:
    return recipe_out(catalog.get_recipe(recipe_id))


# ── Pantry ───────────────────────────────────────────────────────────────


@app.get("/users/{user_id}/products", response_model=list[PantryItemOut])
def pantry(user_id: str) -> list[PantryItemOut]:
    return [
        PantryItemOut(
            id=p.id,
            name=p.name,
            category=p.category,
            is_common=p.is_common,
            added_at=datetime.fromtimestamp(added_at),
        )
        for p, added_at in inventory.get_owned_products(user_id)
    ]


@app.post("/users/{user_id}/products", response_model=MutationResult)
def add_to_pantry(user_id: str, body: PantryItemIn) -> MutationResult:
    changed = inventory.add_owned_product(user_id, body.product_id)
    return MutationResult(status="added" if changed else "unchanged", changed=changed)


@app.delete("/users/{user_id}/products/{product_id}", response_model=MutationResult)
def remove_from_pantry(user_id: str, product_id: int) -> MutationResult:
    changed = inventory.remove_owned_product(user_id, product_id)
    return MutationResult(status="removed" if changed else "unchanged", changed=changed)


@app.get("/users/{user_id}/exclusions", response_model=list[ExclusionOut])
def exclusions(user_id: str) -> list[ExclusionOut]:
    return [
        ExclusionOut(
            id=p.id,
            name=p.name,
            category=p.category,
            reason=reason,
            excluded_at=datetime.fromtimestamp(excluded_at),
        )
        for p, reason, excluded_at in inventory.get_exclusions(user_id)
    ]


@app.post("/users/{user_id}/exclusions", response_model=MutationResult)
def add_exclusion(user_id: str, body: ExclusionIn) -> MutationResult:
    changed = inventory.add_exclusion(user_id, body.product_id, body.reason)
    return MutationResult(status="excluded" if changed else "unchanged", changed=changed)


@app.delete("/users/{user_id}/exclusions/{product_id}", response_model=MutationResult)
def remove_exclusion(user_id: str, product_id: int) -> MutationResult:
    changed = inventory.remove_exclusion(user_id, product_id)
    return MutationResult(status="removed" if changed else "unchanged", changed=changed)


# ── Recommendations and favorites ────────────────────────────────────────


@app.get("/users/{user_id}/recommendations", response_model=RecommendationResponse)
def recommendations(user_id: str, limit: int | None = None) -> RecommendationResponse:
    return get_recommendations(user_id, limit)


@app.get("/users/{user_id}/favorites", response_model=list[RecipeOut])
def favorites(user_id: str) -> list[RecipeOut]:
    return [recipe_out(r) for r in inventory.get_favorites(user_id)]


@app.post("/users/{user_id}/favorites/{recipe_id}", response_model=MutationResult)
def add_favorite(user_id: str, recipe_id: int) -> MutationResult:
    changed = inventory.add_favorite(user_id, recipe_id)
    return MutationResult(status="added" if changed else "unchanged", changed=changed)


@app.delete("/users/{user_id}/favorites/{recipe_id}", response_model=MutationResult)
def remove_favorite(user_id: str, recipe_id: int) -> MutationResult:
    changed = inventory.remove_favorite(user_id, recipe_id)
    return MutationResult(status="removed" if changed else "unchanged", changed=changed)


# ── Admin catalog ────────────────────────────────────────────────────────


@app.get("/admin/products", response_model=list[ProductOut])
def admin_products() -> list[ProductOut]:
    return [product_out(p) for p in catalog.list_products()]


@app.post("/admin/products", response_model=ProductOut, status_code=201)
def create_product(body: ProductIn) -> ProductOut:
    return product_out(catalog.create_product(body.name, body.category, body.is_common))


@app.put("/admin/products/{product_id}", response_model=ProductOut)
def update_product(product_id: int, body: ProductUpdate) -> ProductOut:
    return product_out(catalog.update_product(product_id, **body.model_dump(exclude_none=True)))


@app.delete("/admin/products/{product_id}", status_code=204)
def delete_product(product_id: int) -> None:
    catalog.delete_product(product_id)
    inventory.purge_product(product_id)


@app.get("/admin/recipes", response_model=list[RecipeOut])
def admin_recipes() -> list[RecipeOut]:
    return [recipe_out(r) for r in catalog.list_recipes()]


@app.post("/admin/recipes", response_model=RecipeOut, status_code=201)
def create_recipe(body: RecipeIn) -> RecipeOut:
    fields = body.model_dump(exclude={"ingredients"})
    recipe = catalog.create_recipe(ingredients=ingredient_specs(body.ingredients), **fields)
    return recipe_out(recipe)


@app.put("/admin/recipes/{recipe_id}", response_model=RecipeOut)
def update_recipe(recipe_id: int, body: RecipeUpdate) -> RecipeOut:
    changes = body.model_dump(exclude={"ingredients"}, exclude_none=True)
    ingredients = ingredient_specs(body.ingredients) if body.ingredients is not None else None
    return recipe_out(catalog.update_recipe(recipe_id, ingredients=ingredients, **changes))


@app.delete("/admin/recipes/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: int) -> None:
    catalog.delete_recipe(recipe_id)
    inventory.purge_recipe(recipe_id)


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
