from typing import Dict, Iterable, List

from models.records import TrendingClaim, TrendingRow


def aggregate_trending(
    rows: Iterable[TrendingRow],
    limit: int = 5,
    min_count: int = 2
) -> List[TrendingClaim]:
    """
    Most repeated claims, computed from (claim, verdict, score) rows in scan order.

    Groups by exact claim text and keeps the first row's verdict and score as
    the representative. Groups seen fewer than min_count times are dropped.
    Equal counts keep the order in which each claim first appeared in the scan.
    """
    groups: Dict[str, dict] = {}
    for claim, verdict, score in rows:
        group = groups.get(claim)
        if group is None:
            groups[claim] = {"_id": claim, "count": 1, "verdict": verdict, "score": score}
        else:
            group["count"] += 1

    recurring = [g for g in groups.values() if g["count"] >= min_count]
    # sorted() is stable and dicts keep insertion order, so ties stay in first-seen order.
    ranked = sorted(recurring, key=lambda g: g["count"], reverse=True)
    return [TrendingClaim(**g) for g in ranked[:limit]]
