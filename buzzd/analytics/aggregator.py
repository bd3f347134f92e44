from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(part: int, total: int) -> float:
    return round(part / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "recommendations"]
    views = [e for e in events if e["type"] == "deal_view"]
    visits = [e for e in events if e["type"] == "location_visit"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Category filter usage
    category_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("category"):
            category_counter[s["category"]] += 1
    top_categories = [{"name": n, "count": c} for n, c in category_counter.most_common(10)]

    # Most viewed deals / most visited venues
    view_counter: Counter[int] = Counter(v["deal_id"] for v in views)
    top_deals = [{"deal_id": d, "views": c} for d, c in view_counter.most_common(10)]
    visit_counter: Counter[int] = Counter(v["establishment_id"] for v in visits)
    top_venues = [{"establishment_id": e, "visits": c} for e, c in visit_counter.most_common(10)]

    with_position = sum(1 for s in searches if s.get("has_position"))
    returned = sum(s.get("results_returned", 0) for s in searches)
    active_returned = sum(s.get("active_returned", 0) for s in searches)

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "location_share": _rate(with_position, total),
        "active_share": _rate(active_returned, returned),
        "top_categories": top_categories,
        "total_deal_views": len(views),
        "top_deals": top_deals,
        "total_visits": len(visits),
        "top_venues": top_venues,
    }
