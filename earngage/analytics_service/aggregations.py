"""
Analytics aggregations

Pure functions over fetched rows: grouping by UTC day, distinct counts,
percentages and averages. No I/O.
"""

from collections import Counter
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from core.rows_helpers import parse_iso


def _value(item: Any, attr: str) -> Any:
    if isinstance(item, dict):
        return item.get(attr)
    return getattr(item, attr, None)


def to_day(value: Union[datetime, date, str, None]) -> Optional[str]:
    """UTC calendar day (``YYYY-MM-DD``) of a timestamp, or None"""
    if value is None:
        return None
    if isinstance(value, str):
        parsed = parse_iso(value)
        if parsed is None:
            return value[:10] if len(value) >= 10 else None
        value = parsed
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    return value.isoformat()


def group_by_date(items: Iterable[Any], attr: str, count_key: str = "count") -> List[Dict[str, Any]]:
    """
    Count items per UTC day of ``attr``.

    Returns ``[{"date": "YYYY-MM-DD", count_key: n}, ...]`` ascending by
    date. Items without a usable timestamp are skipped.
    """
    counts = Counter(day for day in (to_day(_value(i, attr)) for i in items) if day)
    return [{"date": day, count_key: counts[day]} for day in sorted(counts)]


def cumulative(series: List[Dict[str, Any]], source_key: str, total_key: str) -> List[Dict[str, Any]]:
    """Running total over a per-day series"""
    running = 0
    result = []
    for point in series:
        running += point[source_key]
        result.append({"date": point["date"], total_key: running})
    return result


def count_unique(items: Iterable[Any], attr: str) -> int:
    """Distinct non-empty values of ``attr``"""
    return len({v for v in (_value(i, attr) for i in items) if v})


def count_by(items: Iterable[Any], attr: str, keys: Optional[Iterable[str]] = None) -> Dict[str, int]:
    """
    Count items by ``attr``; when ``keys`` is given every key is present,
    zero-filled, and other values are ignored.
    """
    counts = Counter(_enum_value(_value(i, attr)) for i in items)
    if keys is None:
        return {k: v for k, v in counts.items() if k is not None}
    return {key: counts.get(key, 0) for key in keys}


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def percentage(part: Union[int, float], whole: Union[int, float]) -> float:
    """``part / whole * 100``, and 0 when ``whole`` is 0"""
    if not whole:
        return 0.0
    return part / whole * 100


def average(values: Iterable[Optional[Union[int, float]]]) -> float:
    """Mean of the non-null values, and 0 when there are none"""
    present = [float(v) for v in values if v is not None]
    if not present:
        return 0.0
    return sum(present) / len(present)


__all__ = [
    "to_day",
    "group_by_date",
    "cumulative",
    "count_unique",
    "count_by",
    "percentage",
    "average",
]
