"""
Dashboard and chart aggregations.

Every function here is pure: it takes already-fetched, serialised records
(the dicts the list endpoints return) and reduces them. Nothing touches the
database, and empty input gives zero/empty output rather than an error.
"""

from datetime import date, datetime
from typing import Iterable, Mapping, Sequence

CHART_COLORS = ["#3B82F6", "#EF4444", "#10B981", "#F59E0B", "#8B5CF6", "#EC4899", "#14B8A6"]

RESOLVED = "Resolved"
REPAIR_STATUSES = {"In Repair", "Under Repair"}

Record = Mapping[str, object]


def _count(records: Iterable[Record], predicate) -> int:
    return sum(1 for r in records if predicate(r))


def _percent(part: int, total: int) -> float:
    return part / total * 100 if total else 0.0


def _timestamp_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


# ─── Dashboard ────────────────────────────────────────────────────────────────
def compute_dashboard_stats(
    assets: Sequence[Record],
    complaints: Sequence[Record],
    call_logs: Sequence[Record],
    pm_reports: Sequence[Record],
) -> dict:
    resolved = _count(complaints, lambda c: c.get("comp_status") == RESOLVED)
    return {
        "total_assets":               len(assets),
        "assets_under_repair":        _count(assets, lambda a: a.get("status") in REPAIR_STATUSES),
        "active_assets":              _count(assets, lambda a: a.get("status") == "Active"),
        "active_complaints":          _count(complaints, lambda c: c.get("comp_status") != RESOLVED),
        "call_logs":                  len(call_logs),
        "pm_reports":                 len(pm_reports),
        "critical_complaints":        _count(complaints, lambda c: c.get("priority") == "Critical"),
        "high_priority_complaints":   _count(complaints, lambda c: c.get("priority") == "High"),
        "medium_priority_complaints": _count(complaints, lambda c: c.get("priority") == "Medium"),
        # halves round up (50.5 -> 51), unlike round()
        "resolution_rate":            int(_percent(resolved, len(complaints)) + 0.5) if complaints else 0,
    }


def recent(records: Sequence[Record], limit: int = 5, newest_by: str | None = None) -> list:
    """First `limit` records; ordered by `newest_by` descending when given."""
    if newest_by:
        records = sorted(records, key=lambda r: r.get(newest_by) or 0, reverse=True)
    return list(records[:limit])


# ─── Engineers ────────────────────────────────────────────────────────────────
def compute_engineer_performance(engineers: Sequence[Record], complaints: Sequence[Record]) -> list[dict]:
    """
    Resolved vs pending counts per engineer, by `eng_assigned`.
    Engineers without any assigned complaint are left out.
    """
    result = []
    for eng in engineers:
        assigned = [c for c in complaints if c.get("eng_assigned") == eng.get("user_id")]
        if not assigned:
            continue
        resolved = _count(assigned, lambda c: c.get("comp_status") == RESOLVED)
        total = len(assigned)
        result.append({
            "user_id":         eng.get("user_id"),
            "name":            eng.get("username"),
            "resolved":        resolved,
            "pending":         total - resolved,
            "total":           total,
            "resolution_rate": f"{_percent(resolved, total):.1f}",
        })
    return result


# ─── Trends ───────────────────────────────────────────────────────────────────
def trailing_months(month_count: int, today: date | None = None) -> list[date]:
    """First day of each of the last `month_count` months, oldest first, ending this month."""
    today = today or date.today()
    months = []
    for back in range(month_count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - back
        months.append(date(index // 12, index % 12 + 1, 1))
    return months


def compute_monthly_trends(
    complaints: Sequence[Record],
    call_logs: Sequence[Record],
    month_count: int = 7,
    today: date | None = None,
) -> list[dict]:
    trends = []
    for month in trailing_months(month_count, today):
        period = f"{month.year}-{month.month:02d}"
        in_month = [c for c in complaints if _timestamp_text(c.get("creation_time")).startswith(period)]
        trends.append({
            "month":      month.strftime("%b"),
            "period":     period,
            "complaints": len(in_month),
            "resolved":   _count(in_month, lambda c: c.get("comp_status") == RESOLVED),
            "calls":      _count(call_logs, lambda c: _timestamp_text(c.get("created_at")).startswith(period)),
        })
    return trends


# ─── Assets ───────────────────────────────────────────────────────────────────
def _group_count(values: Iterable[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for v in values:
        counts[v] = counts.get(v, 0) + 1
    return counts


def compute_category_distribution(assets: Sequence[Record]) -> list[dict]:
    counts = _group_count(a.get("category") or "Other" for a in assets)
    return [
        {"name": name, "value": count, "color": CHART_COLORS[i % len(CHART_COLORS)]}
        for i, (name, count) in enumerate(counts.items())
    ]


def compute_status_breakdown(assets: Sequence[Record], category: str) -> list[dict]:
    counts = _group_count(a.get("status") or "Unknown" for a in assets if a.get("category") == category)
    return [{"status": status, "count": count} for status, count in counts.items()]
