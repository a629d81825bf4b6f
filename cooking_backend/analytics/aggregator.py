from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    skipped = [e for e in events if e["type"] == "recipe_skipped"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Result sizes
    returned = [s.get("results_returned", 0) for s in searches]
    avg_results = round(sum(returned) / total, 1) if total else 0.0
    zero_result = sum(1 for n in returned if n == 0)

    # Ingredients users most often lack
    missing_counter: Counter[str] = Counter()
    for s in searches:
        for name in s.get("missing_ingredients", []) or []:
            missing_counter[name] += 1
    top_missing = [{"name": n, "count": c} for n, c in missing_counter.most_common(10)]

    # Recipes that failed to score
    skipped_ids = Counter(e.get("recipe_id") for e in skipped)

    # Cache stats
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))
    cache_misses = total - cache_hits

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "avg_results_per_search": avg_results,
        "zero_result_searches": zero_result,
        "top_missing_ingredients": top_missing,
        "skipped_recipes": {
            "total": len(skipped),
            "by_recipe": [{"recipe_id": rid, "count": c} for rid, c in skipped_ids.most_common()],
        },
        "cache_stats": {
            "hits": cache_hits,
            "misses": cache_misses,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
    }
