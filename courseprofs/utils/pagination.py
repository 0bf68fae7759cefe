# courseprofs/utils/pagination.py
"""
Pagination helpers shared by every list endpoint.

The page count is ``total // items_per_page + 1``, which reports one extra
(empty) page when the total is an exact multiple of ``items_per_page``.
Clients already depend on that count, so it is kept as is.
"""

from typing import Any, List, NamedTuple, Tuple

from sqlalchemy.orm import Query

from courseprofs.errors import InvalidPage, ValidationError


class PageWindow(NamedTuple):
    skip: int
    take: int
    total_pages: int


def paginate(total_count: int, page: int, items_per_page: int) -> PageWindow:
    """
    Compute slice bounds and page metadata.

    Args:
        total_count: Number of items in the full result set
        page: 1-based page number
        items_per_page: Page size

    Returns:
        PageWindow(skip, take, total_pages)

    Raises:
        ValidationError: If any argument is out of its domain
        InvalidPage: If page is beyond the last page
    """
    errors = []
    if total_count < 0:
        errors.append({"field": "totalCount", "message": "must be non-negative"})
    if page < 1:
        errors.append({"field": "page", "message": "must be a positive integer"})
    if items_per_page < 1:
        errors.append({"field": "itemsPerPage", "message": "must be a positive integer"})
    if errors:
        raise ValidationError(errors)

    total_pages = total_count // items_per_page + 1
    if page > total_pages:
        raise InvalidPage(page, total_pages)

    return PageWindow(
        skip=items_per_page * (page - 1),
        take=items_per_page,
        total_pages=total_pages,
    )


def paged_query(query: Query, page: int, items_per_page: int) -> Tuple[List[Any], PageWindow, int]:
    """Count an ordered query, validate the page and fetch that slice."""
    total_count = query.order_by(None).count()
    window = paginate(total_count, page, items_per_page)
    items = query.offset(window.skip).limit(window.take).all()
    return items, window, total_count
