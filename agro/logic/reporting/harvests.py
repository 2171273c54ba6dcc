"""Harvest totals per month for one unit of measure."""
from datetime import date
from typing import List, Optional

from agro.domain.HarvestLog import Harvest
from agro.logic.reporting.periods import month_buckets, month_key
from agro.utilities.constants import TREND_CHART_MONTHS

__all__ = ["monthly_harvest_chart"]


def monthly_harvest_chart(harvests: List[Harvest], unit: str = "kg", today: Optional[date] = None) -> dict:
    """Last 12 months of harvested quantity in ``unit``.

    Harvests recorded in another unit are left out, never converted.
    Returns {'unit', 'months': [{key, label, total, height}], 'max_total', 'has_data'}.
    """
    buckets = month_buckets(TREND_CHART_MONTHS, today)
    index = {}
    for b in buckets:
        b["total"] = 0.0
        index[b["key"]] = b
    for h in harvests:
        if h.unit != unit:
            continue
        bucket = index.get(month_key(h.date))
        if bucket is not None:
            bucket["total"] += h.quantity
    max_total = max(b["total"] for b in buckets)
    has_data = max_total > 0
    max_total = max_total if has_data else 1
    for b in buckets:
        b["height"] = b["total"] / max_total
    return {"unit": unit, "months": buckets, "max_total": max_total, "has_data": has_data}
