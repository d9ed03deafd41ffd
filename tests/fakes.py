"""Test doubles for the MongoDB layer."""

import re
from typing import Any

from sessionvault.core.modules.session.models import SessionRecord


class FakeCursor:
    """Stand-in for pymongo's AsyncCursor that records chained calls."""

    def __init__(self, docs: list[dict[str, Any]] | None = None) -> None:
        self.docs = docs or []
        self.calls: list[tuple[str, Any]] = []

    def sort(self, key_or_list: Any, direction: int | None = None) -> "FakeCursor":
        self.calls.append(("sort", key_or_list if direction is None else (key_or_list, direction)))
        return self

    def skip(self, count: int) -> "FakeCursor":
        self.calls.append(("skip", count))
        return self

    def limit(self, count: int) -> "FakeCursor":
        self.calls.append(("limit", count))
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self.docs:
            yield doc


def make_record_doc(**overrides: Any) -> dict[str, Any]:
    """Build a stored session record document (snake_case keys, ``_id``)."""
    fields: dict[str, Any] = {"name": "github", "value": "ghp_token", "url": None, "description": None}
    fields.update(overrides)
    return SessionRecord(**fields).to_mongo()


def matches_query(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    """Evaluate the subset of MongoDB filter syntax the services build.

    Supports equality, ``$or`` and ``$regex`` with ``$options``.
    """
    for key, condition in query.items():
        if key == "$or":
            if not any(matches_query(doc, clause) for clause in condition):
                return False
        elif isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            value = doc.get(key)
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif doc.get(key) != condition:
            return False
    return True
