import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from relief.api import ApiError, error_message, is_ok

logger = logging.getLogger(__name__)

STATS_FAILED = "Failed to load stats."
ROWS_FAILED = "Failed to load today's entries."
UNREACHABLE = "Failed to load dashboard. Check backend/API base URL."

# (card key, label)
STAT_CARDS = [
    ("total_households", "Total households"),
    ("structural_damage", "Structural damage"),
    ("temporary_shelter", "Temporary shelter"),
    ("not_enough_food", "Not enough food"),
    ("no_support_yet", "No support yet"),
    ("elderly_present", "Elderly present"),
    ("children_under_5", "Children <5"),
    ("pregnant_lactating", "Pregnant/Lactating"),
    ("water_needed", "Water needed"),
    ("sanitation_needed", "Sanitation needed"),
    ("medicine_needed", "Medicine needed"),
    ("unable_to_work", "Unable to work"),
]

# (counter key, label, colour tag)
NEEDS = [
    ("repairs", "Repairs", "emerald"),
    ("bedding", "Bedding", "sky"),
    ("cooking", "Cooking items", "violet"),
    ("water", "Water", "teal"),
    ("sanitation", "Sanitation", "amber"),
]

SEARCH_FIELDS = ("name", "contact_number", "priority_1", "priority_2", "priority_3", "token_number")
TOP_PRIORITIES_LIMIT = 5


@dataclass
class DashboardData:
    stats: Optional[Dict[str, Any]] = None
    rows: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def _count(value) -> int:
    try:
        n = float(value or 0)
    except (TypeError, ValueError):
        return 0
    return max(0, int(n)) if math.isfinite(n) else 0


def stat_cards(stats: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    cards = (stats or {}).get("cards") or {}
    out = []
    for key, label in STAT_CARDS:
        value = cards.get(key)
        out.append({"key": key, "label": label, "value": value if value is not None else 0})
    return out


def needs_breakdown(stats: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    charts = (stats or {}).get("charts") or {}
    counts = charts.get("needs_breakdown") or {}
    return [
        {"key": key, "label": label, "value": _count(counts.get(key)), "tone": tone}
        for key, label, tone in NEEDS
    ]


def max_need(needs: List[Dict[str, Any]]) -> int:
    return max([n["value"] for n in needs] + [0])


def bar_percent(value, max_value) -> int:
    """Bar width in percent (0..100), rounded half up; 0 when there is nothing to scale against."""
    if not max_value or max_value <= 0:
        return 0
    pct = int(math.floor(value / max_value * 100 + 0.5))
    return min(100, max(0, pct))


def top_priorities(stats: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    charts = (stats or {}).get("charts") or {}
    items = charts.get("top_priorities") or []
    return [{"priority": p.get("priority"), "count": _count(p.get("count"))}
            for p in items[:TOP_PRIORITIES_LIMIT]]


def filter_rows(rows: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    q = (query or "").strip().lower()
    if not q:
        return list(rows)

    def matches(row):
        return any(q in str(row.get(f) or "").lower() for f in SEARCH_FIELDS)

    return [r for r in rows if matches(r)]


def _settle(future, failed_message: str):
    """Return (body, error) for one fetch; never raises."""
    try:
        body = future.result()
    except ApiError:
        logger.exception("Dashboard request failed")
        return None, UNREACHABLE
    if is_ok(body):
        return body, None
    return None, error_message(body, failed_message)


def fetch_dashboard(client, previous: Optional[DashboardData] = None) -> DashboardData:
    """
    Fetch stats and today's rows together. Each slice settles on its own:
    a failed slice keeps whatever was loaded before and adds an error.
    """
    previous = previous or DashboardData()
    with ThreadPoolExecutor(max_workers=2) as pool:
        stats_future = pool.submit(client.get_today_assessment_stats)
        rows_future = pool.submit(client.get_today_assessments)
        stats_body, stats_err = _settle(stats_future, STATS_FAILED)
        rows_body, rows_err = _settle(rows_future, ROWS_FAILED)

    data = DashboardData(stats=previous.stats, rows=list(previous.rows))
    if stats_err:
        data.errors.append(stats_err)
    else:
        data.stats = stats_body
    if rows_err:
        data.errors.append(rows_err)
    else:
        data.rows = list(rows_body.get("data") or [])
    logger.debug("Dashboard loaded: %d rows, %d errors", len(data.rows), len(data.errors))
    return data
