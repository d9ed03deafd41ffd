from typing import TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 25


class PageResult[T](BaseModel):
    """One page of rows plus the total number of matching rows."""

    rows: list[T] = Field(..., description="Items in the requested page")
    count: int = Field(..., description="Total number of matching items across all pages", ge=0)


def parse_page_number(value: object, default: int) -> int:
    """Leniently parse a page or page-size parameter.

    Accepts ints and numeric strings (surrounding whitespace allowed). Anything
    else, including values below 1, yields ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
    else:
        return default
    return number if number >= 1 else default


def page_offset(page: int, per_page: int) -> int:
    """Number of items to skip to reach the start of ``page`` (1-based)."""
    return (page - 1) * per_page
