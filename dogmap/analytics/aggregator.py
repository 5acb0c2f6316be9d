from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    type_counter: Counter[str] = Counter(e["type"] for e in events)

    # Filter usage
    filter_updates = [e for e in events if e["type"] == "filter_update"]
    category_counter: Counter[str] = Counter()
    amenity_counter: Counter[str] = Counter()
    for f in filter_updates:
        category = f.get("category")
        if category and category != "all":
            category_counter[category] += 1
        for a in f.get("amenities", []) or []:
            amenity_counter[a] += 1
    top_categories = [{"name": n, "count": c} for n, c in category_counter.most_common(10)]
    top_amenities = [{"name": n, "count": c} for n, c in amenity_counter.most_common(10)]

    # Assistant
    queries = [e for e in events if e["type"] == "assistant_query"]
    times = [q["response_time_ms"] for q in queries if "response_time_ms" in q]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0
    fallbacks = sum(1 for q in queries if q.get("fallback"))
    total_sources = sum(q.get("sources_count", 0) for q in queries)

    # Notifications
    notifications = [e for e in events if e["type"] == "notification"]
    delivered = sum(1 for n in notifications if n.get("success"))

    return {
        "total_area_refreshes": type_counter.get("area_refresh", 0),
        "total_filter_updates": len(filter_updates),
        "top_categories": top_categories,
        "top_amenities": top_amenities,
        "assistant": {
            "total_queries": len(queries),
            "avg_response_time_ms": avg_time,
            "fallbacks": fallbacks,
            "fallback_rate": _rate(fallbacks, len(queries)),
            "total_sources": total_sources,
        },
        "notifications": {
            "total": len(notifications),
            "delivered": delivered,
            "failed": len(notifications) - delivered,
            "success_rate": _rate(delivered, len(notifications)),
        },
    }
