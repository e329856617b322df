"""
Recurring schedule expansion.

A repeating event ({name, locationId, weekday, time, enabled, excludedDates})
is materialized into concrete `times.json` entries for the coming four weeks.
Weekdays follow the JavaScript convention used by the data files: 0 = Sunday.

Entries that are not JSON objects are left alone: they expand to nothing and
pass through de-duplication untouched.
"""

from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional, Set

SCHEDULE_WINDOW_DAYS = 28


def schedule_key(event: Dict[str, Any]) -> str:
    """Identity of a repeating event for add/remove detection."""
    return f"{event.get('locationId')}|{event.get('weekday')}|{event.get('time')}"


def time_key(entry: Dict[str, Any]) -> str:
    return f"{entry.get('locationId')}|{entry.get('datetime')}"


def _excluded_dates(event: Dict[str, Any]) -> Set[str]:
    raw = event.get("excludedDates")
    if not isinstance(raw, list):
        return set()
    return {day for day in raw if isinstance(day, str)}


def expand_schedule(event: Any, today: Optional[date] = None) -> List[Dict[str, str]]:
    """Concrete time entries for `event` between today and today + 28 days.

    Disabled events and dates listed in `excludedDates` produce nothing.
    """
    if not isinstance(event, dict) or not event.get("enabled"):
        return []

    today = today or date.today()
    excluded = _excluded_dates(event)
    instances = []

    for offset in range(SCHEDULE_WINDOW_DAYS + 1):
        day = today + timedelta(days=offset)
        if (day.weekday() + 1) % 7 != event.get("weekday"):
            continue
        day_str = day.isoformat()
        if day_str in excluded:
            continue
        instances.append({"locationId": event.get("locationId"), "datetime": f"{day_str}T{event.get('time')}"})

    return instances


def unique_times(times: Iterable[Any]) -> List[Any]:
    """Drop repeated `locationId|datetime` entries, keeping the first."""
    seen = set()
    out = []
    for entry in times:
        if isinstance(entry, dict):
            key = time_key(entry)
            if key in seen:
                continue
            seen.add(key)
        out.append(entry)
    return out
