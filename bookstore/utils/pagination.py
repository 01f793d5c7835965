"""Reusable async pagination utility for MongoDB collections."""

import math
from typing import Any

from pydantic import BaseModel
from pymongo.asynchronous.collection import AsyncCollection

from bookstore.schemas.common import PaginatedResponse, Pagination
from bookstore.utils.documents import to_str_id

_MAX_PER_PAGE = 100


async def paginate[T: BaseModel](
    collection: AsyncCollection,
    query: dict[str, Any],
    page: int,
    per_page: int,
    schema: type[T],
    sort: list[tuple[str, int]] | None = None,
) -> PaginatedResponse[T]:
    """Run *query* against *collection* with pagination and return a :class:`PaginatedResponse`.

    Args:
        collection: Collection to read from.
        query: A MongoDB filter document.
        page: 1-based page number.  Values < 1 are clamped to 1.
        per_page: Number of items per page.  Clamped to [1, 100].
        schema: Pydantic model class used to validate each document.
        sort: Optional ``[(field, direction), ...]`` ordering.

    Returns:
        A :class:`PaginatedResponse` containing the page's items and pagination metadata.
    """
    page = max(page, 1)
    per_page = max(1, min(per_page, _MAX_PER_PAGE))

    total: int = await collection.count_documents(query)

    cursor = collection.find(query)
    if sort:
        cursor = cursor.sort(sort)
    offset = (page - 1) * per_page
    docs = await cursor.skip(offset).limit(per_page).to_list(length=per_page)

    total_pages = math.ceil(total / per_page) if total > 0 else 1

    return PaginatedResponse(
        data=[schema.model_validate(to_str_id(doc)) for doc in docs],
        pagination=Pagination(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=total_pages,
        ),
    )
