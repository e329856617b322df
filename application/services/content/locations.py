"""
Location ids.

A location's id is derived from its place and venue names, e.g. "Hull" and
"Royal Hotel" give `hull-royal-hotel`. Ids already in use get a numeric
suffix starting at 2.
"""

import re
from typing import Iterable, Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: Optional[str]) -> str:
    """Lowercase ASCII letters and digits joined by single dashes."""
    return _NON_ALNUM.sub("-", (text or "").strip().lower()).strip("-")


def location_id(location: Optional[str], venue: Optional[str], existing: Iterable[Optional[str]] = ()) -> str:
    """Unique id for a location/venue pair.

    Args:
        location: Town or area name
        venue: Venue name
        existing: Ids already taken (exclude the entry being renamed)

    Returns:
        The slug, or the slug with -2, -3, ... appended if it is taken.
        Empty string if both names are blank.
    """
    base = "-".join(part for part in (slugify(location), slugify(venue)) if part)
    if not base:
        return ""

    taken = set(existing)
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate
