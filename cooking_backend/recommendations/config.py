from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RankingConfig:
    default_limit: int = 10
    max_limit: int = 50
    completeness_bonus: float = 30.0
    easy_bonus: float = 5.0
    exclusion_factor: float = 0.5
    easy_labels: tuple[str, ...] = ("easy", "легко")
    cache_ttl_seconds: int = int(os.getenv("COOKING_CACHE_TTL", "300"))


DEFAULT_RANKING_CONFIG = RankingConfig()
