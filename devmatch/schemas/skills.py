from __future__ import annotations

from typing import Any


def normalize_skill_list(value: Any) -> list[str]:
    """Trim labels, drop blanks and repeated labels. Case is preserved."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    result: list[str] = []
    seen: set[str] = set()
    for item in value:
        if item is None:
            continue
        label = str(item).strip()
        if not label or label in seen:
            continue
        seen.add(label)
        result.append(label)
    return result
