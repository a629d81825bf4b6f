from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any

from ..catalog.models import Product, Recipe
from ..catalog.store import get_product, get_recipe
from ..recommendations.scoring import UserContext

logger = logging.getLogger(__name__)


@dataclass
class _UserInventory:
    # product_id -> added_at
    owned: dict[int, float] = field(default_factory=dict)
    # product_id -> {"reason": ..., "excluded_at": ...}
    excluded: dict[int, dict[str, Any]] = field(default_factory=dict)
    favorites: dict[int, float] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)


_registry_lock = threading.Lock()
_users: dict[str, _UserInventory] = {}


def _inventory(user_id: str) -> _UserInventory:
    """Return the user's inventory, creating it. Only the add_* calls use this."""
    with _registry_lock:
        inv = _users.get(user_id)
        if inv is None:
            inv = _users[user_id] = _UserInventory()
        return inv


def _existing(user_id: str) -> _UserInventory | None:
    with _registry_lock:
        return _users.get(user_id)


def clear_inventory() -> None:
    with _registry_lock:
        _users.clear()


# ── Owned products ──────────────────────────────────────────────────────


def get_owned_products(user_id: str) -> list[tuple[Product, float]]:
    """Return ``(product, added_at)`` pairs in the order they were added."""
    inv = _existing(user_id)
    if inv is None:
        return []
    with inv.lock:
        entries = list(inv.owned.items())
    return [(get_product(pid), added_at) for pid, added_at in entries]


def add_owned_product(user_id: str, product_id: int) -> bool:
    """Add a product to the pantry. Returns ``False`` if it was already there."""
    get_product(product_id)
    inv = _inventory(user_id)
    with inv.lock:
        if product_id in inv.owned:
            logger.warning("User %s already owns product %s", user_id, product_id)
            return False
        inv.owned[product_id] = time.time()
    logger.info("User %s added product %s", user_id, product_id)
    return True


def remove_owned_product(user_id: str, product_id: int) -> bool:
    """Returns ``False`` if the product was not in the pantry."""
    inv = _existing(user_id)
    if inv is None:
        return False
    with inv.lock:
        removed = inv.owned.pop(product_id, None) is not None
    if removed:
        logger.info("User %s removed product %s", user_id, product_id)
    return removed


# ── Exclusions ──────────────────────────────────────────────────────────


def get_exclusions(user_id: str) -> list[tuple[Product, str | None, float]]:
    """Return ``(product, reason, excluded_at)`` triples."""
    inv = _existing(user_id)
    if inv is None:
        return []
    with inv.lock:
        entries = list(inv.excluded.items())
    return [
        (get_product(pid), entry["reason"], entry["excluded_at"])
        for pid, entry in entries
    ]


def add_exclusion(user_id: str, product_id: int, reason: str | None = None) -> bool:
    get_product(product_id)
    inv = _inventory(user_id)
    with inv.lock:
        if product_id in inv.excluded:
            logger.warning("User %s already excludes product %s", user_id, product_id)
            return False
        inv.excluded[product_id] = {"reason": reason, "excluded_at": time.time()}
    logger.info("User %s excluded product %s", user_id, product_id)
    return True


def remove_exclusion(user_id: str, product_id: int) -> bool:
    inv = _existing(user_id)
    if inv is None:
        return False
    with inv.lock:
        return inv.excluded.pop(product_id, None) is not None


# ── Favorites ───────────────────────────────────────────────────────────


def get_favorites(user_id: str) -> list[Recipe]:
    inv = _existing(user_id)
    if inv is None:
        return []
    with inv.lock:
        recipe_ids = list(inv.favorites)
    return [get_recipe(rid) for rid in recipe_ids]


def add_favorite(user_id: str, recipe_id: int) -> bool:
    get_recipe(recipe_id)
    inv = _inventory(user_id)
    with inv.lock:
        if recipe_id in inv.favorites:
            return False
        inv.favorites[recipe_id] = time.time()
    return True


def remove_favorite(user_id: str, recipe_id: int) -> bool:
    inv = _existing(user_id)
    if inv is None:
        return False
    with inv.lock:
        return inv.favorites.pop(recipe_id, None) is not None


def is_favorite(user_id: str, recipe_id: int) -> bool:
    inv = _existing(user_id)
    if inv is None:
        return False
    with inv.lock:
        return recipe_id in inv.favorites


# ── Snapshots and catalog cleanup ───────────────────────────────────────


def snapshot(user_id: str) -> UserContext:
    """Freeze the user's owned and excluded product ids for one ranking pass."""
    inv = _existing(user_id)
    if inv is None:
        return UserContext()
    with inv.lock:
        return UserContext.from_ids(inv.owned, inv.excluded)


def purge_product(product_id: int) -> None:
    with _registry_lock:
        inventories = list(_users.values())
    for inv in inventories:
        with inv.lock:
            inv.owned.pop(product_id, None)
            inv.excluded.pop(product_id, None)


def purge_recipe(recipe_id: int) -> None:
    with _registry_lock:
        inventories = list(_users.values())
    for inv in inventories:
        with inv.lock:
            inv.favorites.pop(recipe_id, None)
