"""Book review endpoints."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import PRODUCTS, REVIEWS
from bookstore.dependencies import get_current_user, get_db
from bookstore.schemas.common import PaginatedResponse
from bookstore.schemas.review import ReviewCreate, ReviewResponse
from bookstore.utils.documents import to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.get("", response_model=PaginatedResponse[ReviewResponse])
async def list_reviews(
    book_id: int | None = Query(None, description="ISBN of the reviewed book"),  # noqa: B008
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
) -> PaginatedResponse[ReviewResponse]:
    """Return reviews, newest first, optionally for one book."""
    query: dict[str, Any] = {} if book_id is None else {"book_id": book_id}
    return await paginate(
        db[REVIEWS], query, page, per_page, ReviewResponse, sort=[("created_at", -1)]
    )


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    body: ReviewCreate,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> ReviewResponse:
    """Review a book by ISBN.  Requires authentication.  Returns 404 for an unknown ISBN."""
    if await db[PRODUCTS].find_one({"isbn": body.book_id}) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    doc = {
        **body.model_dump(),
        "user_id": current_user["_id"],
        "created_at": datetime.now(UTC),
    }
    await db[REVIEWS].insert_one(doc)
    return ReviewResponse.model_validate(to_str_id(doc))
