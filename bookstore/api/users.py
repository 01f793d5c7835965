"""User administration endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo.asynchronous.database import AsyncDatabase

from bookstore.database import USERS
from bookstore.dependencies import get_current_user, get_db, require_admin
from bookstore.schemas.auth import UserResponse
from bookstore.schemas.common import PaginatedResponse
from bookstore.utils.documents import oid, to_str_id
from bookstore.utils.pagination import paginate

router = APIRouter(prefix="/users", tags=["Users"])

_NOT_FOUND = HTTPException(
    status_code=status.HTTP_404_NOT_FOUND,
    detail="User not found",
)


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    page: int = Query(1, ge=1),  # noqa: B008
    per_page: int = Query(20, ge=1, le=100),  # noqa: B008
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> PaginatedResponse[UserResponse]:
    """Return all users ordered by email.  Admin only."""
    return await paginate(db[USERS], {}, page, per_page, UserResponse, sort=[("email", 1)])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(get_current_user),  # noqa: B008
) -> UserResponse:
    """Return one user.  Users may only read themselves; admins may read anyone."""
    target = oid(user_id)
    if target is None:
        raise _NOT_FOUND
    if current_user.get("role") != "admin" and current_user["_id"] != target:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to view this user",
        )
    user = await db[USERS].find_one({"_id": target})
    if user is None:
        raise _NOT_FOUND
    return UserResponse.model_validate(to_str_id(user))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    db: AsyncDatabase = Depends(get_db),  # noqa: B008
    current_user: dict[str, Any] = Depends(require_admin),  # noqa: B008
) -> None:
    """Delete a user.  Admin only.  Admins cannot delete their own account."""
    target = oid(user_id)
    if target is None:
        raise _NOT_FOUND
    if target == current_user["_id"]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )
    result = await db[USERS].delete_one({"_id": target})
    if result.deleted_count == 0:
        raise _NOT_FOUND
