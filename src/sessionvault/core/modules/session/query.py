"""Pure builders for session record queries."""

import re
from typing import Any

SEARCH_FIELDS = ("name", "value", "description")

# Newest first; _id keeps the order stable between records with equal timestamps
LIST_SORT: list[tuple[str, int]] = [("created_at", -1), ("_id", -1)]


def active_records_filter() -> dict[str, Any]:
    """Filter matching every record that has not been soft-deleted."""
    return {"is_deleted": False}


def build_search_condition(search_value: str) -> dict[str, Any]:
    """Case-insensitive substring match on name, value or description.

    The search text is matched literally; regex metacharacters are escaped.
    """
    pattern = re.escape(search_value)
    return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]}


def build_list_filter(search_value: str | None = None) -> dict[str, Any]:
    """Build the MongoDB filter used by list operations."""
    query = active_records_filter()
    if search_value:
        query.update(build_search_condition(search_value))
    return query
