from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PantryItemIn(BaseModel):
    product_id: int


class PantryItemOut(BaseModel):
    id: int
    name: str
    category: str
    is_common: bool
    added_at: datetime


class ExclusionIn(BaseModel):
    product_id: int
    reason: str | None = Field(default=None, max_length=200)


class ExclusionOut(BaseModel):
    id: int
    name: str
    category: str
    reason: str | None
    excluded_at: datetime


class MutationResult(BaseModel):
    status: str
    changed: bool
