from __future__ import annotations

import pytest

from cooking_backend.analytics.store import clear_events
from cooking_backend.catalog.store import reset_catalog
from cooking_backend.inventory.store import clear_inventory
from cooking_backend.recommendations.cache import clear_cache


@pytest.fixture(autouse=True)
def _fresh_state():
    """Every test starts from the seed catalog with empty pantries."""
    reset_catalog()
    clear_inventory()
    clear_cache()
    clear_events()
    yield
