from __future__ import annotations

from typing import Any, Dict, List, Optional


def _percentile(sorted_vals: List[float], p: float) -> Optional[float]:
    if not sorted_vals:
        return None
    if p <= 0:
        return sorted_vals[0]
    if p >= 100:
        return sorted_vals[-1]
    k = (len(sorted_vals) - 1) * (p / 100.0)
    f = int(k)
    c = min(f + 1, len(sorted_vals) - 1)
    if f == c:
        return sorted_vals[f]
    return sorted_vals[f] * (c - k) + sorted_vals[c] * (k - f)


def compute_http_report(latencies_ms: List[float], oks: List[bool], duration_sec: float) -> Dict[str, Any]:
    count = len(oks)
    ok_count = sum(1 for x in oks if x)
    error_count = count - ok_count

    lat_sorted = sorted(latencies_ms)

    return {
        "count": count,
        "ok_count": ok_count,
        "error_count": error_count,
        "error_rate": (error_count / count) if count else 0.0,
        "p50_latency_ms": _percentile(lat_sorted, 50),
        "p95_latency_ms": _percentile(lat_sorted, 95),
        "p99_latency_ms": _percentile(lat_sorted, 99),
        "achieved_rps": (count / duration_sec) if duration_sec > 0 else None,
    }


def diff_snapshots(before: Dict[str, Any], after: Dict[str, Any], created_ids: List[int]) -> Dict[str, Any]:
    """Compare two item snapshots taken around a load run."""
    total_before = int(before.get("total") or 0)
    total_after = int(after.get("total") or 0)

    out: Dict[str, Any] = {
        "total_before": total_before,
        "total_after": total_after,
        "delta_total": total_after - total_before,
        "completed_before": before.get("completed"),
        "completed_after": after.get("completed"),
        "max_id_before": before.get("max_id"),
        "max_id_after": after.get("max_id"),
        "created_count": len(created_ids),
    }

    # every id handed out during the run must be above the pre-run maximum
    floor = before.get("max_id") or 0
    out["ids_monotonic"] = all(i > floor for i in created_ids) and len(set(created_ids)) == len(created_ids)
    return out
