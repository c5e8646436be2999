from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    browses = [e for e in events if e["type"] == "category_browse"]
    errors = [e for e in events if e["type"] == "hierarchy_error"]
    total = len(browses)

    # Average response time
    times = [b["response_time_ms"] for b in browses if "response_time_ms" in b]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top categories
    category_counter: Counter[int] = Counter()
    for b in browses:
        category_counter[b.get("category_id")] += 1
    top_categories = [
        {"category_id": cid, "count": c} for cid, c in category_counter.most_common(10)
    ]

    # Hierarchy integrity faults, per error type
    error_counter: Counter[str] = Counter(e.get("error_type", "unknown") for e in errors)

    empty = sum(1 for b in browses if b.get("results_returned", 0) == 0)

    return {
        "total_browses": total,
        "avg_response_time_ms": avg_time,
        "top_categories": top_categories,
        "hierarchy_errors": {
            "total": len(errors),
            "by_type": dict(error_counter),
        },
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
    }
