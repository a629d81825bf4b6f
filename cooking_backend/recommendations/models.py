from __future__ import annotations

from pydantic import BaseModel, Field

from ..catalog.schemas import RecipeOut


class RecommendationItem(BaseModel):
    recipe: RecipeOut
    match_percentage: float = Field(..., ge=0.0, le=100.0)
    missing_ingredients: list[str]
    is_favorite: bool = False
    score: float


class RecommendationResponse(BaseModel):
    recommendations: list[RecommendationItem]
    total_candidates: int
