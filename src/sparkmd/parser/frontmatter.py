"""YAML frontmatter extraction and change tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml

FRONTMATTER_DELIM = "---"


@dataclass(frozen=True)
class FrontmatterChange:
    field: str
    old_value: Any
    new_value: Any


def _split(text: str) -> tuple[str | None, str]:
    text = text.lstrip("\ufeff")
    lines = text.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIM:
        return None, text
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIM:
            return "\n".join(lines[1:idx]), "\n".join(lines[idx + 1 :])
    return None, text


def extract_frontmatter(text: str) -> dict[str, Any]:
    """Parse the leading ``---`` block; empty when absent or malformed."""

    payload, _ = _split(text)
    if payload is None:
        return {}
    try:
        parsed = yaml.safe_load(payload)
    except yaml.YAMLError:
        return {}
    if isinstance(parsed, dict):
        return {str(key): value for key, value in parsed.items() if key is not None}
    return {}


def strip_frontmatter(text: str) -> str:
    _, body = _split(text)
    return body


class FrontmatterTracker:
    """Remembers the last frontmatter seen per path and reports field changes."""

    def __init__(self) -> None:
        self._snapshots: dict[str, dict[str, Any]] = {}

    def detect_changes(self, path: str, text: str) -> list[FrontmatterChange]:
        current = extract_frontmatter(text)
        previous = self._snapshots.get(path, {})
        changes = [
            FrontmatterChange(field=key, old_value=previous.get(key), new_value=value)
            for key, value in current.items()
            if key not in previous or previous[key] != value
        ]
        changes.extend(
            FrontmatterChange(field=key, old_value=value, new_value=None)
            for key, value in previous.items()
            if key not in current
        )
        self._snapshots[path] = current
        return changes

    def clear(self, path: str | None = None) -> None:
        if path is None:
            self._snapshots.clear()
        else:
            self._snapshots.pop(path, None)
