"""Calendar-month buckets for the charts."""
from datetime import date
from typing import List, Optional

from agro.utilities.constants import IT_MONTHS_SHORT

__all__ = ["month_buckets", "month_key"]


def month_key(iso_date: str) -> str:
    """'2024-07-15' -> '2024-07'."""
    return (iso_date or "")[:7]


def month_buckets(count: int, today: Optional[date] = None, with_year: bool = False) -> List[dict]:
    """The ``count`` calendar months ending with the current one, oldest first.

    Each bucket: {'key': 'YYYY-MM', 'year': int, 'month': int, 'label': 'lug' | 'lug 24'}.
    """
    today = today or date.today()
    buckets = []
    for back in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - back
        year, month = divmod(index, 12)
        label = IT_MONTHS_SHORT[month]
        if with_year:
            label = f"{label} {year % 100:02d}"
        buckets.append({
            "key": f"{year:04d}-{month + 1:02d}",
            "year": year,
            "month": month + 1,
            "label": label,
        })
    return buckets
