"""
Change report generation for commit messages.

Summarizes, per file, how the new content differs from what is currently in
the repository. The report is an audit trail only; it never blocks a commit.
"""

import json
from typing import Any, List

from application.services.content.registry import ShapeKind, file_name, is_registered, shape_for


def generate_report(old_content: Any, new_content: Any, path: str) -> List[str]:
    """Describe the change from `old_content` to `new_content`.

    Lists are compared by length, then index by index when lengths match.
    Documents are compared by title, section count and per-section content.
    Anything else yields a generic "Updated" line. Never raises.

    Example:
        >>> generate_report([], [{"id": "a"}], "data/locations.json")
        ['  - locations.json: 0 → 1 entries', '    • Added 1 new entry']
    """
    name = file_name(path)

    if isinstance(old_content, list) and isinstance(new_content, list):
        return _list_report(name, old_content, new_content)

    if _is_document(old_content, path) and _is_document(new_content, path):
        return _document_report(name, old_content, new_content)

    return [f"  - {name}: Updated"]


def _list_report(name: str, old: list, new: list) -> List[str]:
    old_count, new_count = len(old), len(new)

    if old_count != new_count:
        lines = [f"  - {name}: {old_count} → {new_count} entries"]
        delta = abs(new_count - old_count)
        if new_count > old_count:
            lines.append(f"    • Added {delta} new {_plural(delta, 'entry', 'entries')}")
        else:
            lines.append(f"    • Removed {delta} {_plural(delta, 'entry', 'entries')}")
        return lines

    modified = sum(1 for before, after in zip(old, new) if not _structurally_equal(before, after))
    if modified:
        return [f"  - {name}: Modified {modified} {_plural(modified, 'entry', 'entries')}"]
    return [f"  - {name}: No changes detected"]


def _document_report(name: str, old: dict, new: dict) -> List[str]:
    old_sections = old.get("sections") or []
    new_sections = new.get("sections") or []

    changes = []
    if (old.get("title") or "") != (new.get("title") or ""):
        changes.append("title")

    if len(old_sections) != len(new_sections):
        changes.append(f"{len(old_sections)} → {len(new_sections)} sections")
    else:
        modified = sum(
            1 for before, after in zip(old_sections, new_sections)
            if not _structurally_equal(before, after)
        )
        if modified:
            changes.append(f"{modified} modified {_plural(modified, 'section', 'sections')}")

    if changes:
        return [f"  - {name}: {', '.join(changes)}"]
    return [f"  - {name}: No changes detected"]


def _is_document(value: Any, path: str) -> bool:
    if not isinstance(value, dict):
        return False
    # Registered document files tolerate a missing title or sections key
    if is_registered(path) and shape_for(path) == ShapeKind.DOCUMENT:
        return isinstance(value.get("title", ""), str) and isinstance(value.get("sections", []), list)
    return isinstance(value.get("title"), str) and isinstance(value.get("sections"), list)


def _structurally_equal(a: Any, b: Any) -> bool:
    # Canonical text keeps `1` and `true` distinct and ignores key order
    try:
        return _canonical(a) == _canonical(b)
    except (TypeError, ValueError):
        return a == b


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, ensure_ascii=False, default=str)


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural
